"""CAN frames and the float encoding used in their payloads."""

from __future__ import annotations

import struct
from dataclasses import dataclass

MAX_DATA_LENGTH = 8

_FLOAT = struct.Struct("<f")


def pack_float(value: float) -> bytes:
    """Encode a value as a little-endian IEEE-754 single-precision float."""
    return _FLOAT.pack(value)


def unpack_float(data: bytes, offset: int = 0) -> float:
    """Decode the single-precision float stored at ``offset`` in ``data``."""
    if offset < 0 or offset + _FLOAT.size > len(data):
        raise ValueError(f"no 4-byte float at offset {offset} in {len(data)} bytes")
    return _FLOAT.unpack_from(data, offset)[0]


@dataclass(frozen=True)
class CanFrame:
    """A classic CAN frame: identifier, data length code and an 8-byte data field.

    Bytes past ``dlc`` are kept as they are; shorter data is padded with zeros.
    """

    can_id: int
    dlc: int
    data: bytes = b""

    def __post_init__(self) -> None:
        if not 0 <= self.dlc <= MAX_DATA_LENGTH:
            raise ValueError(f"dlc must be between 0 and {MAX_DATA_LENGTH}, got {self.dlc}")
        data = bytes(self.data)
        if len(data) > MAX_DATA_LENGTH:
            raise ValueError(f"data holds {len(data)} bytes, at most {MAX_DATA_LENGTH} allowed")
        object.__setattr__(self, "data", data.ljust(MAX_DATA_LENGTH, b"\x00"))

    def payload(self) -> bytes:
        """The bytes the frame actually carries, as given by ``dlc``."""
        return self.data[: self.dlc]