"""Turn velocity commands and text commands into CAN frames for the drive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .frames import CanFrame, pack_float, unpack_float

STATUS_ID = 0x000
LINEAR_ID = 0x001
ANGULAR_ID = 0x002
HEARTBEAT_ID = 0x001
HEARTBEAT_PERIOD = 0.3


def _float32(value: float) -> float:
    return unpack_float(pack_float(value))


@dataclass
class StatusFlags:
    """The one-byte status field: emergency stop, reset request and reserved bits."""

    emg: bool = False
    reset: bool = False
    reserved: int = 0

    def to_byte(self) -> int:
        """Pack the flags: emg in bit 0, reset in bit 1, reserved in bits 2-7."""
        return int(self.emg) | (int(self.reset) << 1) | ((self.reserved & 0x3F) << 2)


class TwistToCan:
    """Keeps the drive state and publishes it as CAN frames through ``publish``."""

    def __init__(self, publish: Callable[[CanFrame], None]) -> None:
        self._publish = publish
        self.status = StatusFlags()
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0

    def _status_frame(self, can_id: int) -> CanFrame:
        return CanFrame(can_id, 1, bytes([self.status.to_byte()]))

    def handle_command(self, text: str) -> None:
        """Apply a text command: "continue", "pause" or "reset"; others are ignored."""
        if text == "continue":
            self.status.emg = False
        elif text == "pause":
            self.status.emg = True
        elif text == "reset":
            self.status.reset = True

    def handle_twist(self, linear_x: float, linear_y: float, angular_z: float) -> list[CanFrame]:
        """Publish the status, linear and angular frames for a velocity command."""
        self.x = _float32(linear_x)
        self.y = _float32(linear_y)
        self.z = _float32(angular_z)
        self.status.reserved = 0

        status = self._status_frame(STATUS_ID)
        self._publish(status)
        self.status.reset = False

        linear = CanFrame(LINEAR_ID, 8, pack_float(self.x) + pack_float(self.y))
        self._publish(linear)

        # The data field is shared between frames, so the y bytes stay behind z.
        angular = CanFrame(ANGULAR_ID, 4, pack_float(self.z) + linear.data[4:])
        self._publish(angular)

        return [status, linear, angular]

    def heartbeat(self) -> CanFrame:
        """Publish the periodic status frame and return it."""
        frame = self._status_frame(HEARTBEAT_ID)
        self._publish(frame)
        return frame