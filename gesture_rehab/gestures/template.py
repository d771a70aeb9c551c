"""
Gesture template: the ordered sequence of discrete samples of one motion.
"""

import json
import logging
from typing import Iterable, Iterator, List

from ..core.types import DEFAULT_TOLERANCE, DiscreteOrientation
from ..sensing.quantizer import OrientationQuantizer

logger = logging.getLogger(__name__)


class GestureTemplate:
    """Ordered, append-only list of DiscreteOrientation steps."""

    def __init__(self, steps: Iterable[DiscreteOrientation] = ()):
        self._steps: List[DiscreteOrientation] = list(steps)

    def append(self, sample: DiscreteOrientation):
        self._steps.append(sample)

    @property
    def num_steps(self) -> int:
        return len(self._steps)

    @property
    def steps(self) -> List[DiscreteOrientation]:
        return list(self._steps)

    def step_matches(self, sample: DiscreteOrientation, index: int,
                     tolerance: int = DEFAULT_TOLERANCE) -> bool:
        """Tolerance-compare ``sample`` with step ``index``."""
        return self._steps[index].approx_equals(sample, tolerance)

    def __len__(self):
        return len(self._steps)

    def __getitem__(self, index) -> DiscreteOrientation:
        return self._steps[index]

    def __iter__(self) -> Iterator[DiscreteOrientation]:
        return iter(self._steps)

    def __eq__(self, other):
        if not isinstance(other, GestureTemplate):
            return NotImplemented
        return self._steps == other._steps

    def __repr__(self):
        return f"GestureTemplate({len(self._steps)} steps)"

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {"gesture": [step.to_dict() for step in self._steps]}

    def to_json(self, indent: int = None) -> str:
        """Render as {"gesture": [{"roll": .., "pitch": .., "yaw": ..}, ...]}."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> "GestureTemplate":
        return cls(DiscreteOrientation.from_dict(step) for step in data.get("gesture", []))

    @classmethod
    def from_json(cls, text: str) -> "GestureTemplate":
        return cls.from_dict(json.loads(text))

    @classmethod
    def from_quaternions(cls, quaternions, quantizer: OrientationQuantizer = None,
                         deduplicate: bool = True) -> "GestureTemplate":
        """Build a template from an (N, 4) array of (w, x, y, z) rows.

        With ``deduplicate`` consecutive identical levels collapse into one
        step, which is what recording the same motion live would produce.
        """
        quantizer = quantizer or OrientationQuantizer()
        levels = quantizer.quantize_batch(quaternions)
        template = cls()
        previous = None
        for roll, pitch, yaw in levels.tolist():
            sample = DiscreteOrientation(roll, pitch, yaw)
            if deduplicate and sample == previous:
                continue
            template.append(sample)
            previous = sample
        return template

    def describe(self) -> str:
        """One line per step, as shown to the operator."""
        return "\n".join(f"R: {s.roll} P: {s.pitch} Y: {s.yaw}" for s in self._steps)
