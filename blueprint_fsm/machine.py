"""
Machine: a lightweight instance tracking one current state against a shared blueprint.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Optional

from .core import Blueprint, Guard
from .exceptions import GuardRejectedError, NoMatchingTransitionError
from .metrics import UNKNOWN_TRANSITION, record_transition
from .states import state_label

logger = logging.getLogger(__name__)


class TransitionOutcome(Enum):
    """How a transition attempt ended"""
    SUCCESS = "success"
    NO_MATCHING_TRANSITION = "no_matching_transition"
    GUARD_REJECTED = "guard_rejected"


@dataclass(frozen=True)
class TransitionResult:
    """Result of Machine.transition(); truthy only on success"""
    outcome: TransitionOutcome
    transition: str
    from_state: Hashable
    to_state: Optional[Hashable] = None  # destination of the matched rule
    guard: Optional[Guard] = None  # the guard that vetoed

    @property
    def ok(self) -> bool:
        return self.outcome is TransitionOutcome.SUCCESS

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_failure(self) -> "TransitionResult":
        """Raise the matching TransitionError on failure, else return self"""
        if self.outcome is TransitionOutcome.NO_MATCHING_TRANSITION:
            raise NoMatchingTransitionError(
                f"No transition '{self.transition}' from {state_label(self.from_state)}",
                result=self
            )
        if self.outcome is TransitionOutcome.GUARD_REJECTED:
            guard_name = getattr(self.guard, '__name__', repr(self.guard))
            raise GuardRejectedError(
                f"Guard {guard_name} rejected '{self.transition}' "
                f"from {state_label(self.from_state)} to {state_label(self.to_state)}",
                result=self
            )
        return self


class Machine:
    """
    A state machine instance.

    Holds a reference to a shared Blueprint, a caller-owned context passed
    untouched to every guard, and its own current state. Not thread-safe:
    serialize calls to transition() on a single instance.
    """

    def __init__(self, blueprint: Blueprint, context: Any, initial: Hashable):
        """
        Initialize machine.

        Args:
            blueprint: Shared blueprint, stored by reference
            context: Opaque value handed to guards
            initial: Initial state, must be declared by the blueprint

        Raises:
            UnknownStateError: initial is not a declared state
        """
        blueprint.states.require(initial, "initial")
        self._blueprint = blueprint
        self._context = context
        self._current = initial

    @property
    def blueprint(self) -> Blueprint:
        return self._blueprint

    @property
    def context(self) -> Any:
        return self._context

    @property
    def current(self) -> Hashable:
        """Current state"""
        return self._current

    def get_state(self) -> Hashable:
        """Get current state"""
        return self._current

    def transition(self, name: str) -> TransitionResult:
        """
        Attempt transition `name` from the current state.

        Guards for `name` run in registration order with
        (from_state, to_state, context); the first falsy result stops the
        run and leaves the state unchanged. Side effects of guards that
        already ran are kept. Exceptions raised by a guard propagate, also
        with the state unchanged.

        Returns:
            TransitionResult describing the outcome.
        """
        transition_start = time.perf_counter()
        from_state = self._current
        blueprint_name = self._blueprint.name

        rule = self._blueprint.lookup(name, from_state)
        if rule is None:
            logger.debug(f"No transition '{name}' from state {state_label(from_state)}")
            label = name if self._blueprint.has_transition(name) else UNKNOWN_TRANSITION
            record_transition(blueprint_name, label, TransitionOutcome.NO_MATCHING_TRANSITION.value)
            return TransitionResult(
                outcome=TransitionOutcome.NO_MATCHING_TRANSITION,
                transition=name,
                from_state=from_state
            )

        for guard in self._blueprint.guards_for(name):
            if not guard(from_state, rule.to_state, self._context):
                logger.debug(
                    f"Guard {getattr(guard, '__name__', repr(guard))} rejected {name}: "
                    f"{state_label(from_state)} -> {state_label(rule.to_state)}"
                )
                record_transition(
                    blueprint_name,
                    name,
                    TransitionOutcome.GUARD_REJECTED.value,
                    time.perf_counter() - transition_start
                )
                return TransitionResult(
                    outcome=TransitionOutcome.GUARD_REJECTED,
                    transition=name,
                    from_state=from_state,
                    to_state=rule.to_state,
                    guard=guard
                )

        self._current = rule.to_state

        record_transition(
            blueprint_name,
            name,
            TransitionOutcome.SUCCESS.value,
            time.perf_counter() - transition_start
        )
        logger.info(
            f"Transitioned: {state_label(from_state)} -> {state_label(rule.to_state)} via {name}"
        )
        return TransitionResult(
            outcome=TransitionOutcome.SUCCESS,
            transition=name,
            from_state=from_state,
            to_state=rule.to_state
        )

    def __repr__(self) -> str:
        return f"Machine(blueprint={self._blueprint.name!r}, current={state_label(self._current)})"
