"""Shared fixtures: the cat blueprint used across the test suite."""

from enum import Enum, auto
from typing import List

import pytest

from blueprint_fsm import Blueprint


class Cat(Enum):
    SLEEPING = auto()
    AWAKE = auto()
    EATING = auto()


class SleepLog:
    """Context recording what the sleep guard saw"""

    def __init__(self):
        self.calls: List[tuple] = []
        self.fell_asleep_eating = False


def record_sleep(from_state, to_state, context):
    context.calls.append((from_state, to_state))
    context.fell_asleep_eating = from_state == Cat.EATING
    return True


@pytest.fixture
def cat_blueprint():
    blueprint = Blueprint(Cat, name="cat")
    blueprint.add_transition("wake_up", Cat.SLEEPING, Cat.AWAKE)
    blueprint.add_transition("eat", Cat.AWAKE, Cat.EATING)
    blueprint.add_transition("sleep", Cat.AWAKE, Cat.SLEEPING)
    blueprint.add_transition("sleep", Cat.EATING, Cat.SLEEPING)
    blueprint.add_guard("sleep", record_sleep)
    return blueprint


@pytest.fixture
def sleep_log():
    return SleepLog()
