"""
Gesture matching.

Step-advance automaton over a stored template:

    accepted sample ~ template[expected_index]   -> expected_index += 1
    mismatch, strike_count <  max_strikes        -> strike_count += 1
    mismatch, strike_count >= max_strikes        -> expected_index = 0, strike_count = 0

Strikes accumulate over the attempt; a matching step does not clear them.
The sample that triggers a reset is dropped, not compared against the
first step. The run ends when every step has been matched (COMPLETED) or
when the performer makes the cancel pose (ABORTED).
"""

import logging

from ..core.errors import EmptyTemplate, SourceLost
from ..core.events import EventBus, Events
from ..core.types import DEFAULT_TOLERANCE, MatchOutcome, MatchResult, Pose
from ..sensing.pipeline import SamplingPipeline
from ..sensing.quantizer import OrientationQuantizer
from ..sensing.source import OrientationSource
from .template import GestureTemplate

logger = logging.getLogger(__name__)

DEFAULT_MAX_STRIKES = 2


class GestureMatcher:
    """Checks the live sample stream against one GestureTemplate."""

    def __init__(self, source: OrientationSource, config: dict = None,
                 sampling: dict = None, quantizer: OrientationQuantizer = None,
                 event_bus: EventBus = None):
        """
        Args:
            source: connected orientation/pose source
            config: ``matching`` section (tolerance, max_strikes)
            sampling: ``sampling`` section (frequency_hz)
            quantizer: shared quantizer
            event_bus: bus for progress events
        """
        config = config or {}
        self._tolerance = config.get("tolerance", DEFAULT_TOLERANCE)
        self._max_strikes = config.get("max_strikes", DEFAULT_MAX_STRIKES)
        self._pipeline = SamplingPipeline(source, sampling, quantizer)
        self._bus = event_bus or EventBus()

    @property
    def tolerance(self) -> int:
        return self._tolerance

    @property
    def max_strikes(self) -> int:
        return self._max_strikes

    def is_gesture(self, template: GestureTemplate) -> MatchResult:
        """Run one matching attempt against ``template``.

        Returns:
            MatchResult with outcome COMPLETED or ABORTED

        Raises:
            EmptyTemplate: ``template`` has no steps
            SourceLost: the source disconnected; ``partial`` is the
                MatchResult so far
        """
        num_steps = len(template)
        if num_steps == 0:
            raise EmptyTemplate("Cannot match a gesture with no steps")

        session = MatchResult(outcome=MatchOutcome.ABORTED, num_steps=num_steps)
        self._pipeline.begin()
        self._bus.emit(Events.MATCH_STARTED, num_steps=num_steps)

        while session.expected_index < num_steps:
            cycle = self._pipeline.cycle()

            if not cycle.connected:
                logger.error("Source lost during matching at step %d/%d",
                             session.expected_index, num_steps)
                self._bus.emit(Events.SOURCE_LOST, partial=session)
                raise SourceLost("Source lost during matching", partial=session)

            if cycle.control_pose is Pose.CANCEL:
                logger.info("Matching cancelled at step %d/%d",
                            session.expected_index, num_steps)
                self._bus.emit(Events.MATCH_ABORTED, result=session)
                return session

            if cycle.sample is None:
                continue

            session.accepted += 1
            self._advance(session, template, cycle.sample)

        session.outcome = MatchOutcome.COMPLETED
        logger.info("Gesture completed (%d strikes, %d resets)",
                    session.strike_count, session.resets)
        self._bus.emit(Events.MATCH_COMPLETED, result=session)
        return session

    def _advance(self, session: MatchResult, template: GestureTemplate, sample):
        """Apply one accepted sample to the automaton."""
        logger.debug("%s vs step %d %s", sample, session.expected_index,
                     template[session.expected_index])

        if template.step_matches(sample, session.expected_index, self._tolerance):
            session.expected_index += 1
            self._bus.emit(Events.STEP_MATCHED, step=session.expected_index,
                           num_steps=session.num_steps)
        elif session.strike_count >= self._max_strikes:
            session.expected_index = 0
            session.strike_count = 0
            session.resets += 1
            logger.info("Too many strikes, restart from the first step")
            self._bus.emit(Events.MATCH_RESET, resets=session.resets)
        else:
            session.strike_count += 1
            logger.info("Strike %d/%d at step %d", session.strike_count,
                        self._max_strikes, session.expected_index)
            self._bus.emit(Events.STRIKE, step=session.expected_index,
                           strikes=session.strike_count)
