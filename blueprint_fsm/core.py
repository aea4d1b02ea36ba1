"""
Blueprint: the shared, append-only definition of states, rules and guards.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple

from typing_extensions import Protocol

from .exceptions import BlueprintFrozenError, ConfigurationError, ConflictingRuleError
from .states import StateSet, StateSource, state_label

if TYPE_CHECKING:
    from .machine import Machine

logger = logging.getLogger(__name__)


class Guard(Protocol):
    """Callable checked before a named transition; a falsy result vetoes it"""

    def __call__(self, from_state: Any, to_state: Any, context: Any) -> bool:
        ...


@dataclass(frozen=True)
class TransitionRule:
    """A named move from one declared state to another"""
    name: str
    from_state: Hashable
    to_state: Hashable


class Blueprint:
    """
    Shared definition of a state machine.

    A blueprint is configured once with add_transition() and add_guard(),
    then handed by reference to any number of Machine instances. It holds no
    per-instance state; lookup() and guards_for() never mutate it.

    Rules are keyed by transition name and source state: the same name may
    leave several states, but a (name, from_state) pair has one destination.
    Guards are keyed by transition name only and run for every rule sharing
    that name.
    """

    def __init__(self, states: StateSource, name: str = "blueprint"):
        """
        Initialize blueprint.

        Args:
            states: Enum class or non-empty iterable of hashable states
            name: Label used in log lines and metrics
        """
        self.name = name
        self._states = StateSet(states)
        self._rules: Dict[str, Dict[Hashable, TransitionRule]] = {}
        self._guards: Dict[str, List[Guard]] = {}
        self._frozen = False

        logger.debug(f"Created blueprint {name} with {len(self._states)} states")

    @property
    def states(self) -> StateSet:
        return self._states

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Blueprint":
        """End the configuration phase; later add_* calls raise"""
        self._frozen = True
        logger.debug(f"Froze blueprint {self.name}")
        return self

    def _check_configurable(self, name: Any):
        if self._frozen:
            raise BlueprintFrozenError(self.name)
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Transition name must be a non-empty string, got {name!r}")

    def add_transition(self, name: str, from_state: Hashable, to_state: Hashable) -> TransitionRule:
        """
        Add a rule moving from_state to to_state on transition `name`.

        Re-adding an identical rule is a no-op that returns the existing rule.

        Raises:
            UnknownStateError: either state was not declared
            ConflictingRuleError: (name, from_state) already has another destination
        """
        self._check_configurable(name)
        self._states.require(from_state, "from")
        self._states.require(to_state, "to")

        by_source = self._rules.setdefault(name, {})
        existing = by_source.get(from_state)
        if existing is not None:
            if existing.to_state != to_state:
                raise ConflictingRuleError(name, from_state, existing.to_state, to_state)
            return existing

        rule = TransitionRule(name=name, from_state=from_state, to_state=to_state)
        by_source[from_state] = rule

        logger.debug(
            f"Added transition: {state_label(from_state)} -> {state_label(to_state)} on {name}"
        )
        return rule

    def add_guard(self, name: str, guard: Guard):
        """Append a guard for transition `name`; rules may be added before or after"""
        self._check_configurable(name)
        if not callable(guard):
            raise ConfigurationError(f"Guard for '{name}' is not callable: {guard!r}")

        self._guards.setdefault(name, []).append(guard)
        logger.debug(f"Added guard {getattr(guard, '__name__', repr(guard))} on {name}")

    def lookup(self, name: str, from_state: Hashable) -> Optional[TransitionRule]:
        """Rule for `name` leaving from_state, or None"""
        by_source = self._rules.get(name)
        if by_source is None:
            return None
        try:
            return by_source.get(from_state)
        except TypeError:
            return None

    def guards_for(self, name: str) -> Tuple[Guard, ...]:
        """Guards for `name` in registration order"""
        return tuple(self._guards.get(name, ()))

    def rules_for(self, name: str) -> Tuple[TransitionRule, ...]:
        """All rules sharing transition `name`, in insertion order"""
        return tuple(self._rules.get(name, {}).values())

    def has_transition(self, name: str) -> bool:
        """Whether any rule was added under transition `name`"""
        try:
            return name in self._rules
        except TypeError:
            return False

    def create_machine(self, initial: Hashable, context: Any = None) -> "Machine":
        """Create a Machine bound to this blueprint"""
        from .machine import Machine
        return Machine(self, context, initial)

    def __repr__(self) -> str:
        rule_count = sum(len(rules) for rules in self._rules.values())
        return f"Blueprint(name={self.name!r}, states={len(self._states)}, rules={rule_count})"
