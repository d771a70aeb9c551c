"""
Poll -> quantize -> filter cycle shared by the recorder and the matcher.

Each ``cycle()`` makes exactly one blocking poll of the source (at
``1000 / frequency_hz`` ms) and then does pure computation on the state
the poll left behind. Samples are handled strictly in arrival order.
"""

import logging
from typing import Optional

from ..core.types import DiscreteOrientation, Pose
from .quantizer import OrientationQuantizer
from .sample_filter import SampleFilter
from .source import OrientationSource

logger = logging.getLogger(__name__)

DEFAULT_FREQUENCY_HZ = 10


class CycleResult:
    """What one poll cycle produced."""

    __slots__ = ("connected", "control_pose", "sample")

    def __init__(self, connected: bool, control_pose: Pose = Pose.NONE,
                 sample: Optional[DiscreteOrientation] = None):
        self.connected = connected
        self.control_pose = control_pose
        self.sample = sample


class SamplingPipeline:
    """Quantizer and SampleFilter driven by one OrientationSource."""

    def __init__(self, source: OrientationSource, config: dict = None,
                 quantizer: OrientationQuantizer = None):
        config = config or {}
        self._source = source
        frequency = config.get("frequency_hz", DEFAULT_FREQUENCY_HZ)
        if not frequency or frequency <= 0:
            raise ValueError(f"frequency_hz must be positive, got {frequency!r}")
        self._poll_ms = max(int(1000 / frequency), 1)
        self._quantizer = quantizer or OrientationQuantizer()
        self._filter = SampleFilter()
        self._pose_mark = source.state.pose_serial

    @property
    def poll_ms(self) -> int:
        return self._poll_ms

    @property
    def source(self) -> OrientationSource:
        return self._source

    @property
    def sample_filter(self) -> SampleFilter:
        return self._filter

    def begin(self):
        """Start a new run: clear the filter and ignore earlier pose events."""
        self._filter.reset()
        self._pose_mark = self._source.state.pose_serial

    def cycle(self) -> CycleResult:
        """Poll once and return the control pose and accepted sample, if any."""
        self._source.poll(self._poll_ms)
        state = self._source.state

        if not state.connected:
            return CycleResult(connected=False)

        control = Pose.NONE
        if state.pose_serial != self._pose_mark and state.pose.is_control:
            control = state.pose

        sample = None
        if state.orientation is not None:
            candidate = self._quantizer.quantize(state.orientation)
            if self._filter.accept(candidate):
                sample = candidate

        return CycleResult(connected=True, control_pose=control, sample=sample)
