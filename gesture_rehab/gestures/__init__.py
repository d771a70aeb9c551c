"""Gesture templates, the in-memory store, recorder and matcher."""
from .template import GestureTemplate
from .store import GestureStore
from .recorder import GestureRecorder
from .matcher import GestureMatcher

__all__ = ["GestureTemplate", "GestureStore", "GestureRecorder", "GestureMatcher"]
