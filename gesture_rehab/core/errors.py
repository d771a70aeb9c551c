"""
Error types raised by the gesture rehab core.

All errors derive from GestureError so the console application can catch
them in one place.
"""


class GestureError(Exception):
    """Base class for gesture rehab errors."""


class SourceUnavailable(GestureError):
    """The orientation/pose source could not be acquired."""


class SourceLost(GestureError):
    """The source disconnected while a recording or matching run was active.

    ``partial`` holds whatever the run had produced so far: the template
    recorded up to that point, or the MatchResult of an interrupted match.
    """

    def __init__(self, message, partial=None):
        super().__init__(message)
        self.partial = partial


class GestureNotFound(GestureError, KeyError):
    """No gesture stored under the requested name."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Gesture not found: {self.name!r}"


class EmptyTemplate(GestureError, ValueError):
    """A template with zero steps was submitted for matching."""
