"""
Shared domain types for the gesture rehab system.

Centralizes enums, data classes, and type definitions used across modules
to eliminate circular imports and ensure type consistency.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# Matching tolerance in quantization levels per axis
DEFAULT_TOLERANCE = 2


# =============================================================================
# Orientation Samples
# =============================================================================

@dataclass(frozen=True)
class DiscreteOrientation:
    """Quantized (roll, pitch, yaw) triple on the 0..18 level band."""

    roll: int
    pitch: int
    yaw: int

    def approx_equals(self, other: "DiscreteOrientation",
                      tolerance: int = DEFAULT_TOLERANCE) -> bool:
        """True when every axis differs by at most ``tolerance`` levels.

        Reflexive and symmetric, but not transitive: a slow drift can keep
        each neighbouring pair within tolerance while the ends of the chain
        are further apart.
        """
        return (abs(self.roll - other.roll) <= tolerance
                and abs(self.pitch - other.pitch) <= tolerance
                and abs(self.yaw - other.yaw) <= tolerance)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.roll, self.pitch, self.yaw)

    def to_dict(self) -> dict:
        return {"roll": self.roll, "pitch": self.pitch, "yaw": self.yaw}

    @classmethod
    def from_dict(cls, data: dict) -> "DiscreteOrientation":
        return cls(int(data["roll"]), int(data["pitch"]), int(data["yaw"]))

    def __str__(self):
        return f"[R: {self.roll}][P: {self.pitch}][Y: {self.yaw}]"


# =============================================================================
# Poses
# =============================================================================

class Pose(Enum):
    """Discrete pose classification as seen by the recorder and matcher."""
    NONE = "none"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    OTHER = "other"

    @classmethod
    def from_string(cls, name: str) -> "Pose":
        """Convert a string pose name to Pose enum, safely."""
        try:
            return cls(name.lower())
        except (ValueError, AttributeError):
            return cls.OTHER

    @property
    def is_control(self) -> bool:
        return self in (Pose.CONFIRM, Pose.CANCEL)


class DeviceState:
    """Mutable sensor state written by the observer and read by the poll loops.

    ``pose_serial`` increases on every pose event so a loop can tell a pose
    delivered during its own run from one left over from an earlier run.
    """

    __slots__ = (
        "orientation", "pose", "pose_serial", "arm_recognized", "arm",
        "unlocked", "connected", "timestamp",
    )

    def __init__(self):
        self.orientation: Optional[Tuple[float, float, float, float]] = None  # (w, x, y, z)
        self.pose: Pose = Pose.NONE
        self.pose_serial: int = 0
        self.arm_recognized: bool = False
        self.arm: Optional[str] = None            # "left" / "right"
        self.unlocked: bool = False
        self.connected: bool = False
        self.timestamp: float = 0.0

    def to_status_dict(self) -> dict:
        """Status summary for display."""
        return {
            "connected": self.connected,
            "arm": self.arm if self.arm_recognized else "?",
            "unlocked": self.unlocked,
            "pose": self.pose.value,
        }


# =============================================================================
# Match Results
# =============================================================================

class MatchOutcome(Enum):
    """How a matching run ended."""
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class MatchResult:
    """Report of one matching run."""
    outcome: MatchOutcome
    num_steps: int
    expected_index: int = 0
    strike_count: int = 0
    resets: int = 0
    accepted: int = 0

    @property
    def completed(self) -> bool:
        return self.outcome is MatchOutcome.COMPLETED

    def __repr__(self):
        return (f"MatchResult({self.outcome.value}, step={self.expected_index}/{self.num_steps}, "
                f"strikes={self.strike_count}, resets={self.resets})")
