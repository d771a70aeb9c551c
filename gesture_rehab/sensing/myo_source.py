"""
Myo armband adapter over the myo-python SDK binding.

Install with the ``hardware`` extra. The Myo Connect runtime and SDK must
be present; pass ``device.sdk_path`` when the SDK is not on the library
search path.

Pose mapping (configurable through the ``controls`` config section):
    double_tap      -> Pose.CONFIRM  (ends a recording)
    wave_out        -> Pose.CANCEL   (aborts a matching run)
    rest / unknown  -> Pose.NONE
    anything else   -> Pose.OTHER
"""

import time
import logging

from ..core.errors import SourceUnavailable
from ..core.types import Pose
from .source import OrientationSource

logger = logging.getLogger(__name__)

_IDLE_POSES = {"rest", "unknown"}


class MyoSource(OrientationSource):
    """Drives a myo.Hub and feeds its events into the StateCollector."""

    def __init__(self, config: dict = None, controls: dict = None):
        super().__init__()
        config = config or {}
        controls = controls or {}
        self._app_id = config.get("application_id", "com.example.gesture-rehab")
        self._sdk_path = config.get("sdk_path")
        self._connect_timeout_ms = config.get("connect_timeout_ms", 10000)
        self._confirm_pose = controls.get("confirm_pose", "double_tap")
        self._cancel_pose = controls.get("cancel_pose", "wave_out")
        self._myo = None
        self._hub = None

    def connect(self, timeout_ms: int = None) -> None:
        """Initialise the SDK and wait for an armband to connect.

        Raises:
            SourceUnavailable: SDK missing or no armband within the timeout
        """
        timeout_ms = timeout_ms or self._connect_timeout_ms
        try:
            import myo
        except ImportError as e:
            raise SourceUnavailable(
                "myo-python is not installed (pip install 'gesture-rehab[hardware]')") from e

        try:
            if self._sdk_path:
                myo.init(sdk_path=self._sdk_path)
            else:
                myo.init()
            self._hub = myo.Hub(self._app_id)
        except Exception as e:
            raise SourceUnavailable(f"Unable to initialise the Myo SDK: {e}") from e
        self._myo = myo

        logger.info("Attempting to find a Myo (timeout %d ms)...", timeout_ms)
        deadline = time.time() + timeout_ms / 1000.0
        while not self._state.connected and time.time() < deadline:
            self._hub.run(self._on_event, 100)

        if not self._state.connected:
            raise SourceUnavailable("Unable to find a Myo!")
        logger.info("Connected to a Myo armband")

    def poll(self, timeout_ms: int) -> None:
        if self._hub is None:
            raise SourceUnavailable("poll() called before connect()")
        self._hub.run(self._on_event, timeout_ms)

    def close(self) -> None:
        if self._hub is not None:
            self._hub.stop()
            self._hub = None

    def map_pose(self, pose_name: str) -> Pose:
        """Translate a myo.Pose member name into a Pose."""
        if pose_name == self._confirm_pose:
            return Pose.CONFIRM
        if pose_name == self._cancel_pose:
            return Pose.CANCEL
        if pose_name in _IDLE_POSES:
            return Pose.NONE
        return Pose.OTHER

    def _on_event(self, event):
        """Hub callback; returns True to keep the hub running."""
        kind = event.type.name
        collector = self._collector

        if kind == "connected":
            collector.on_connect()
        elif kind in ("unpaired", "disconnected"):
            collector.on_unpair()
        elif kind == "orientation":
            q = event.orientation
            collector.on_orientation((q.w, q.x, q.y, q.z))
        elif kind == "pose":
            pose = self.map_pose(event.pose.name)
            collector.on_pose(pose)
            if pose is not Pose.NONE:
                # Haptic acknowledgement of a recognised pose
                event.device.vibrate(self._myo.VibrationType.short)
        elif kind == "arm_synced":
            collector.on_arm_sync(event.arm.name)
        elif kind == "arm_unsynced":
            collector.on_arm_unsync()
        elif kind == "unlocked":
            collector.on_unlock()
        elif kind == "locked":
            collector.on_lock()
        return True
