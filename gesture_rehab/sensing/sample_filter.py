"""
Jitter suppression for the quantized sample stream.

A sample is accepted only when it differs from the previously accepted
one on at least one axis, so recorded and matched sequences advance on
posture changes rather than on repeated readings of the same posture.
"""

import logging
from typing import Optional

from ..core.types import DiscreteOrientation

logger = logging.getLogger(__name__)


class SampleFilter:
    """Equality-rejection filter against the last accepted sample."""

    def __init__(self):
        self._previous: Optional[DiscreteOrientation] = None
        self._accepted = 0
        self._rejected = 0

    def accept(self, sample: DiscreteOrientation) -> bool:
        """Return True and remember ``sample`` if it is a new posture."""
        if sample == self._previous:
            self._rejected += 1
            return False
        self._previous = sample
        self._accepted += 1
        return True

    def reset(self):
        """Forget the previous sample; the next one is always accepted."""
        if self._accepted or self._rejected:
            logger.debug("Filter reset after %d accepted / %d rejected",
                         self._accepted, self._rejected)
        self._previous = None
        self._accepted = 0
        self._rejected = 0

    @property
    def previous(self) -> Optional[DiscreteOrientation]:
        return self._previous

    @property
    def accepted_count(self) -> int:
        return self._accepted

    @property
    def rejected_count(self) -> int:
        return self._rejected
