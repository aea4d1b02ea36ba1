"""
Blueprint FSM

A synchronous finite-state-machine engine: one shared Blueprint of states,
named transition rules and guards, driving many lightweight Machines.
"""

__version__ = "0.1.0"

from .core import (
    Blueprint,
    Guard,
    TransitionRule,
)

from .machine import Machine, TransitionOutcome, TransitionResult
from .parser import BlueprintParser, load_blueprint
from .states import StateSet
from .exceptions import (
    StateMachineError,
    ConfigurationError,
    UnknownStateError,
    ConflictingRuleError,
    BlueprintFrozenError,
    TransitionError,
    NoMatchingTransitionError,
    GuardRejectedError,
)

__all__ = [
    "Blueprint",
    "Guard",
    "TransitionRule",
    "Machine",
    "TransitionOutcome",
    "TransitionResult",
    "BlueprintParser",
    "load_blueprint",
    "StateSet",
    "StateMachineError",
    "ConfigurationError",
    "UnknownStateError",
    "ConflictingRuleError",
    "BlueprintFrozenError",
    "TransitionError",
    "NoMatchingTransitionError",
    "GuardRejectedError",
]
