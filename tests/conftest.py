"""Shared fixtures for the gesture rehab test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_rehab.core.events import EventBus
from gesture_rehab.core.types import DiscreteOrientation
from gesture_rehab.utils.config import Config


@pytest.fixture(autouse=True)
def clean_singletons():
    """Each test starts with an empty event bus and no loaded config."""
    EventBus().reset()
    Config.reset()
    yield
    EventBus().reset()
    Config.reset()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def steps():
    """Three template steps far enough apart not to match each other."""
    return [
        DiscreteOrientation(9, 9, 9),
        DiscreteOrientation(9, 13, 9),
        DiscreteOrientation(9, 17, 9),
    ]
