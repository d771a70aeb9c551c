"""
Gesture recording.

Polls the source, keeps every sample the filter accepts and stops when the
performer makes the confirm pose. There is no duration or step limit; a
sensor that stops sending events without disconnecting keeps ``record()``
waiting.
"""

import logging

from ..core.errors import SourceLost
from ..core.events import EventBus, Events
from ..core.types import Pose
from ..sensing.pipeline import SamplingPipeline
from ..sensing.quantizer import OrientationQuantizer
from ..sensing.source import OrientationSource
from .template import GestureTemplate

logger = logging.getLogger(__name__)


class GestureRecorder:
    """Builds a GestureTemplate from the live sample stream."""

    def __init__(self, source: OrientationSource, config: dict = None,
                 quantizer: OrientationQuantizer = None, event_bus: EventBus = None):
        """
        Args:
            source: connected orientation/pose source
            config: ``sampling`` section from config.yaml
            quantizer: shared quantizer (default scale when omitted)
            event_bus: bus for progress events
        """
        self._pipeline = SamplingPipeline(source, config, quantizer)
        self._bus = event_bus or EventBus()
        self._gesture = GestureTemplate()

    def reset(self):
        """Discard the in-progress template and start an empty one."""
        self._gesture = GestureTemplate()

    def record(self) -> GestureTemplate:
        """Record until the confirm pose.

        Returns:
            the recorded template (also available from get_gesture())

        Raises:
            SourceLost: the source disconnected; ``partial`` is the template
                recorded so far
        """
        self.reset()
        self._pipeline.begin()
        self._bus.emit(Events.RECORDING_STARTED)
        logger.info("Recording started (poll every %d ms)", self._pipeline.poll_ms)

        while True:
            cycle = self._pipeline.cycle()

            if not cycle.connected:
                logger.error("Source lost during recording (%d steps kept)", len(self._gesture))
                self._bus.emit(Events.SOURCE_LOST, partial=self._gesture)
                raise SourceLost("Source lost during recording", partial=self._gesture)

            if cycle.control_pose is Pose.CONFIRM:
                break

            if cycle.sample is None:
                continue

            self._gesture.append(cycle.sample)
            logger.info("%s", cycle.sample)
            self._bus.emit(Events.SAMPLE_ACCEPTED, sample=cycle.sample,
                           step=len(self._gesture))

        logger.info("Recording finished: %d steps", len(self._gesture))
        self._bus.emit(Events.RECORDING_FINISHED, template=self._gesture)
        return self._gesture

    def get_gesture(self) -> GestureTemplate:
        return self._gesture
