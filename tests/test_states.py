"""Tests for declared state sets."""

from enum import Enum

import pytest

from blueprint_fsm import ConfigurationError, StateSet, UnknownStateError
from blueprint_fsm.states import state_label


class Sparse(Enum):
    LOW = 1
    HIGH = 40
    MAX = 255


def test_enum_class_declares_all_members():
    states = StateSet(Sparse)
    assert list(states) == [Sparse.LOW, Sparse.HIGH, Sparse.MAX]
    assert Sparse.HIGH in states
    assert len(states) == 3


def test_iterable_of_plain_values():
    states = StateSet([0, 2, 7, 2])
    assert list(states) == [0, 2, 7]
    assert 2 in states
    assert 3 not in states


def test_empty_state_set_rejected():
    with pytest.raises(ConfigurationError):
        StateSet([])


def test_unhashable_state_rejected():
    with pytest.raises(ConfigurationError):
        StateSet([["not", "hashable"]])


def test_non_iterable_rejected():
    with pytest.raises(ConfigurationError):
        StateSet(42)


def test_unhashable_probe_is_not_a_member():
    assert {"a": 1} not in StateSet(["a"])


def test_require_names_the_role():
    states = StateSet(["a", "b"])
    states.require("a", "from")
    with pytest.raises(UnknownStateError) as excinfo:
        states.require("z", "to")
    assert excinfo.value.state == "z"
    assert excinfo.value.role == "to"
    assert "to" in str(excinfo.value)


def test_state_label():
    assert state_label(Sparse.HIGH) == "HIGH"
    assert state_label(7) == "7"
