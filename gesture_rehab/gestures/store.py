"""
In-memory registry of named gesture templates.

Entries live for the process lifetime. Saving under an existing name
replaces the entry; there is no delete.
"""

import logging
import threading
from typing import List

from ..core.errors import GestureNotFound
from .template import GestureTemplate

logger = logging.getLogger(__name__)


class GestureStore:
    """Name -> GestureTemplate mapping guarded by a lock."""

    def __init__(self):
        self._gestures = {}
        self._lock = threading.Lock()

    def save(self, name: str, template: GestureTemplate):
        """Store ``template`` under ``name``, replacing any previous entry."""
        with self._lock:
            replaced = name in self._gestures
            self._gestures[name] = template
        logger.info("Gesture '%s' saved (%d steps%s)", name, len(template),
                    ", replaced previous" if replaced else "")

    def get(self, name: str) -> GestureTemplate:
        """Return the template stored under ``name``.

        Raises:
            GestureNotFound: if there is no such gesture
        """
        with self._lock:
            try:
                return self._gestures[name]
            except KeyError:
                raise GestureNotFound(name) from None

    def names(self) -> List[str]:
        """Stored names in sorted order, stable between listing and selection."""
        with self._lock:
            return sorted(self._gestures)

    def name_at(self, index: int) -> str:
        """Name at a 0-based position of names().

        Raises:
            IndexError: if ``index`` is out of range
        """
        names = self.names()
        if not 0 <= index < len(names):
            raise IndexError(f"No gesture at position {index + 1}")
        return names[index]

    def __len__(self):
        with self._lock:
            return len(self._gestures)

    def __contains__(self, name):
        with self._lock:
            return name in self._gestures
