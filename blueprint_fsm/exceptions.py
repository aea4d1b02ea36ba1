"""
Error taxonomy for blueprint configuration and transition failures.
"""

from typing import Any, Optional


class StateMachineError(Exception):
    """Base class for all engine errors"""
    pass


class ConfigurationError(StateMachineError):
    """Raised while building a blueprint or creating a machine"""
    pass


class UnknownStateError(ConfigurationError):
    """A state that was not declared in the blueprint's state set"""

    def __init__(self, state: Any, role: str = "state"):
        self.state = state
        self.role = role
        super().__init__(f"Unknown {role} state: {state!r}")


class ConflictingRuleError(ConfigurationError):
    """A second rule for the same (name, from) pair with another destination"""

    def __init__(self, name: str, from_state: Any, existing_to: Any, new_to: Any):
        self.name = name
        self.from_state = from_state
        self.existing_to = existing_to
        self.new_to = new_to
        super().__init__(
            f"Transition '{name}' from {from_state!r} already leads to "
            f"{existing_to!r}, cannot also lead to {new_to!r}"
        )


class BlueprintFrozenError(ConfigurationError):
    """Configuration attempted after the blueprint was frozen"""

    def __init__(self, blueprint_name: str):
        self.blueprint_name = blueprint_name
        super().__init__(f"Blueprint '{blueprint_name}' is frozen")


class TransitionError(StateMachineError):
    """
    A failed transition, raised only on request.

    Machine.transition() reports failures as results; these exceptions exist
    for callers that prefer to call TransitionResult.raise_for_failure().
    """

    def __init__(self, message: str, result: Optional[Any] = None):
        self.result = result
        super().__init__(message)


class NoMatchingTransitionError(TransitionError):
    """No rule for the transition name from the current state"""
    pass


class GuardRejectedError(TransitionError):
    """A guard vetoed the transition"""
    pass
