"""
Declared state sets and state-identifier validation.
"""

import enum
from typing import Any, Hashable, Iterable, Iterator, Tuple, Type, Union

from .exceptions import ConfigurationError, UnknownStateError


StateSource = Union[Iterable[Hashable], Type[enum.Enum]]


class StateSet:
    """
    The fixed, finite set of states a blueprint declares.

    Accepts an Enum class (every member becomes a state) or any iterable of
    hashable values. Iteration follows declaration order.
    """

    def __init__(self, states: StateSource):
        try:
            members = list(states)
        except TypeError:
            raise ConfigurationError(f"States must be iterable, got {states!r}")

        ordered = []
        seen = set()
        for state in members:
            try:
                if state in seen:
                    continue
            except TypeError:
                raise ConfigurationError(f"State {state!r} is not hashable")
            seen.add(state)
            ordered.append(state)

        if not ordered:
            raise ConfigurationError("A blueprint needs at least one state")

        self._members: frozenset = frozenset(seen)
        self._ordered: Tuple[Hashable, ...] = tuple(ordered)

    def __contains__(self, state: Any) -> bool:
        try:
            return state in self._members
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"StateSet({list(self._ordered)!r})"

    def require(self, state: Any, role: str = "state") -> None:
        """Raise UnknownStateError unless state was declared"""
        if state not in self:
            raise UnknownStateError(state, role)


def state_label(state: Any) -> str:
    """Human readable state name for logs and metric labels"""
    if isinstance(state, enum.Enum):
        return state.name
    return str(state)
