"""Shared domain types, errors and events."""
from .types import DiscreteOrientation, Pose, DeviceState, MatchOutcome, MatchResult
from .errors import GestureError, SourceUnavailable, SourceLost, GestureNotFound, EmptyTemplate
from .events import EventBus, Events

__all__ = [
    "DiscreteOrientation",
    "Pose",
    "DeviceState",
    "MatchOutcome",
    "MatchResult",
    "GestureError",
    "SourceUnavailable",
    "SourceLost",
    "GestureNotFound",
    "EmptyTemplate",
    "EventBus",
    "Events",
]
