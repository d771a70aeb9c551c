"""
Abstract base class for orientation/pose sources.

A source owns a DeviceState and a StateCollector. ``poll(timeout_ms)`` is
the only blocking call in the system: it waits up to ``timeout_ms`` and
dispatches any buffered device events to the collector before returning.

There is no timer-driven way out of the recording and matching loops. If
the sensor goes silent without disconnecting, ``poll`` keeps returning
and the loop keeps waiting for a confirm or cancel pose that never
arrives. Only a disconnect (``state.connected`` turning False) ends a
loop without a pose.
"""

from abc import ABC, abstractmethod

from ..core.types import DeviceState
from .collector import StateCollector


class OrientationSource(ABC):
    """Interface shared by the scripted feed and the hardware adapter."""

    def __init__(self):
        self._state = DeviceState()
        self._collector = StateCollector(self._state)

    @property
    def state(self) -> DeviceState:
        return self._state

    @property
    def collector(self) -> StateCollector:
        return self._collector

    @abstractmethod
    def connect(self, timeout_ms: int = 10000) -> None:
        """Acquire the device.

        Raises:
            SourceUnavailable: if no device could be acquired
        """

    @abstractmethod
    def poll(self, timeout_ms: int) -> None:
        """Block up to ``timeout_ms`` while dispatching pending events."""

    def close(self) -> None:
        """Release the device. Override when there is something to release."""

    def get_source_info(self) -> dict:
        """Metadata about this source, for status display."""
        info = {"source_type": self.__class__.__name__}
        info.update(self._state.to_status_dict())
        return info

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
