"""
Scripted orientation source.

Replays a fixed list of frames, one frame per poll, through the same
StateCollector a hardware adapter would use. It drives the test suite and
the ``--source demo`` mode of the console application without a sensor.

When the script runs out the source reports an unpair, so recording and
matching loops end with SourceLost instead of waiting forever.

Feed file format (YAML):

    frames:
      - sample: [9, 9, 9]          # discrete levels, replayed as a bucket-centre quaternion
        repeat: 3                  # deliver the same frame on 3 consecutive polls
      - quaternion: [1, 0, 0, 0]   # (w, x, y, z)
      - pose: confirm              # none / confirm / cancel / other
"""

import time
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import yaml

from ..core.errors import SourceUnavailable
from ..core.types import DiscreteOrientation, Pose
from .quantizer import OrientationQuantizer
from .source import OrientationSource

logger = logging.getLogger(__name__)


@dataclass
class FeedFrame:
    """One poll's worth of device events."""
    quaternion: Optional[Tuple[float, float, float, float]] = None
    pose: Optional[Pose] = None
    repeat: int = 1

    @classmethod
    def from_dict(cls, data: dict, quantizer: OrientationQuantizer) -> "FeedFrame":
        """Create a frame from a parsed feed entry.

        Raises:
            TypeError, ValueError: the entry is not a valid frame
        """
        if not isinstance(data, dict):
            raise TypeError(f"frame must be a mapping, got {data!r}")
        quaternion = None
        if "quaternion" in data:
            quaternion = tuple(float(v) for v in data["quaternion"])
            if len(quaternion) != 4:
                raise ValueError(f"quaternion needs 4 components, got {data['quaternion']!r}")
        elif "sample" in data:
            if len(data["sample"]) != 3:
                raise ValueError(f"sample needs 3 levels, got {data['sample']!r}")
            roll, pitch, yaw = (int(v) for v in data["sample"])
            quaternion = quantizer.center_quaternion(DiscreteOrientation(roll, pitch, yaw))

        pose = Pose.from_string(data["pose"]) if "pose" in data else None
        return cls(quaternion=quaternion, pose=pose, repeat=int(data.get("repeat", 1)))


class ScriptedSource(OrientationSource):
    """Replays FeedFrames, one per poll."""

    def __init__(self, frames: Sequence[FeedFrame] = (), realtime: bool = False,
                 disconnect_when_exhausted: bool = True):
        super().__init__()
        self._frames: List[FeedFrame] = []
        for frame in frames:
            self._frames.extend([frame] * max(frame.repeat, 1))
        self._position = 0
        self._realtime = realtime
        self._disconnect_when_exhausted = disconnect_when_exhausted
        self.poll_count = 0

    @classmethod
    def from_samples(cls, samples: Sequence[DiscreteOrientation],
                     end_pose: Optional[Pose] = None,
                     quantizer: OrientationQuantizer = None, **kwargs) -> "ScriptedSource":
        """Feed that presents each sample on one poll, then optionally a pose."""
        quantizer = quantizer or OrientationQuantizer()
        frames = [FeedFrame(quaternion=quantizer.center_quaternion(s)) for s in samples]
        if end_pose is not None:
            frames.append(FeedFrame(pose=end_pose))
        return cls(frames, **kwargs)

    @classmethod
    def from_file(cls, path: str, quantizer: OrientationQuantizer = None,
                  **kwargs) -> "ScriptedSource":
        """Load a YAML feed file."""
        quantizer = quantizer or OrientationQuantizer()
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise SourceUnavailable(f"Cannot read feed {path}: {e}") from e

        try:
            if not isinstance(data, dict) or not isinstance(data.get("frames", []), list):
                raise TypeError("expected a mapping with a 'frames' list")
            frames = [FeedFrame.from_dict(entry, quantizer) for entry in data.get("frames", [])]
        except (ValueError, TypeError, KeyError) as e:
            raise SourceUnavailable(f"Bad feed {path}: {e}") from e
        logger.info("Loaded feed %s (%d frames)", path, len(frames))
        return cls(frames, **kwargs)

    def connect(self, timeout_ms: int = 10000) -> None:
        self._collector.on_connect()
        self._collector.on_arm_sync("right")
        self._collector.on_unlock()

    def poll(self, timeout_ms: int) -> None:
        self.poll_count += 1
        if self._realtime:
            time.sleep(timeout_ms / 1000.0)

        if self._position >= len(self._frames):
            if self._disconnect_when_exhausted and self._state.connected:
                logger.info("Feed exhausted after %d frames", len(self._frames))
                self._collector.on_unpair()
            return

        frame = self._frames[self._position]
        self._position += 1
        if frame.quaternion is not None:
            self._collector.on_orientation(frame.quaternion)
        if frame.pose is not None:
            self._collector.on_pose(frame.pose)

    def extend(self, frames: Sequence[FeedFrame]) -> None:
        """Append more frames to the end of the script."""
        for frame in frames:
            self._frames.extend([frame] * max(frame.repeat, 1))

    @property
    def remaining(self) -> int:
        return len(self._frames) - self._position
