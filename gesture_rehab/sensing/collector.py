"""
Sensor observer that writes device events into a DeviceState record.

Adapters translate their SDK callbacks into calls on StateCollector; the
recorder and matcher only ever read the DeviceState.
"""

import time
import logging
from typing import Sequence

from ..core.types import DeviceState, Pose

logger = logging.getLogger(__name__)


class StateCollector:
    """Observer with the capability set the poll loops rely on.

    on_orientation, on_pose, on_arm_sync, on_arm_unsync, on_lock,
    on_unlock, on_connect, on_unpair
    """

    def __init__(self, state: DeviceState):
        self._state = state

    @property
    def state(self) -> DeviceState:
        return self._state

    def on_connect(self):
        self._state.connected = True
        logger.info("Sensor connected")

    def on_unpair(self):
        """Device lost: clear everything the device had reported."""
        self._state.orientation = None
        self._state.arm_recognized = False
        self._state.arm = None
        self._state.unlocked = False
        self._state.connected = False
        logger.warning("Sensor unpaired")

    def on_orientation(self, quaternion: Sequence[float]):
        """Store the latest unit quaternion as (w, x, y, z)."""
        w, x, y, z = quaternion
        self._state.orientation = (float(w), float(x), float(y), float(z))
        self._state.timestamp = time.time()

    def on_pose(self, pose: Pose):
        self._state.pose = pose
        self._state.pose_serial += 1
        logger.debug("Pose: %s (#%d)", pose.value, self._state.pose_serial)

    def on_arm_sync(self, arm: str):
        self._state.arm_recognized = True
        self._state.arm = arm
        logger.info("Arm synced: %s", arm)

    def on_arm_unsync(self):
        self._state.arm_recognized = False
        logger.info("Arm unsynced")

    def on_unlock(self):
        self._state.unlocked = True

    def on_lock(self):
        self._state.unlocked = False
