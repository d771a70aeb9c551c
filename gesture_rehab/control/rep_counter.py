"""
Exercise sets: repeat a stored gesture a target number of times.

Each rep is one matching run. A completed run counts; a cancel pose ends
the whole set, leaving the reps completed so far on the report.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import List

from ..core.events import EventBus, Events
from ..core.types import MatchResult
from ..gestures.matcher import GestureMatcher
from ..gestures.template import GestureTemplate

logger = logging.getLogger(__name__)


@dataclass
class SetReport:
    """Outcome of one exercise set."""
    gesture_name: str
    target_reps: int
    completed_reps: int = 0
    aborted: bool = False
    results: List[MatchResult] = field(default_factory=list)
    duration_s: float = 0.0

    @property
    def finished(self) -> bool:
        return self.completed_reps >= self.target_reps

    @property
    def total_strikes(self) -> int:
        return sum(r.strike_count for r in self.results)

    @property
    def total_resets(self) -> int:
        return sum(r.resets for r in self.results)


class RepCounter:
    """Runs the matcher once per rep and tallies the results."""

    def __init__(self, matcher: GestureMatcher, event_bus: EventBus = None):
        self._matcher = matcher
        self._bus = event_bus or EventBus()

    def perform(self, name: str, template: GestureTemplate, target_reps: int) -> SetReport:
        """Perform ``target_reps`` reps of ``template``.

        Raises:
            ValueError: ``target_reps`` is not positive
            EmptyTemplate, SourceLost: propagated from the matcher
        """
        if target_reps < 1:
            raise ValueError(f"target_reps must be positive, got {target_reps}")

        report = SetReport(gesture_name=name, target_reps=target_reps)
        start = time.time()
        logger.info("Set started: %s x%d", name, target_reps)

        while report.completed_reps < target_reps:
            logger.info("Reps: %d / %d", report.completed_reps, target_reps)
            rep_start = time.time()
            result = self._matcher.is_gesture(template)
            report.results.append(result)

            if not result.completed:
                report.aborted = True
                break

            report.completed_reps += 1
            self._bus.emit(
                Events.REP_COMPLETED,
                gesture=name,
                rep=report.completed_reps,
                target=target_reps,
                result=result,
                duration_s=time.time() - rep_start,
            )

        report.duration_s = time.time() - start
        logger.info("Set %s: %d / %d reps (%.1fs)%s", name, report.completed_reps,
                    target_reps, report.duration_s, " - aborted" if report.aborted else "")
        return report
