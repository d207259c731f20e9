"""Show reported wheel states as markers and estimate the body velocity from them."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from .frames import CanFrame, unpack_float

WHEEL_RADIUS = 0.03
WHEEL_POSITION = 0.2
WHEEL_POSITIONS: tuple[tuple[float, float], ...] = (
    (+WHEEL_POSITION, +WHEEL_POSITION),
    (-WHEEL_POSITION, +WHEEL_POSITION),
    (-WHEEL_POSITION, -WHEEL_POSITION),
    (+WHEEL_POSITION, -WHEEL_POSITION),
)
FIRST_WHEEL_ID = 0x101
FRAME_ID = "base_link"

_GREEN = (0.0, 1.0, 0.0, 1.0)
_RED = (1.0, 0.0, 0.0, 1.0)
_WHITE = (1.0, 1.0, 1.0, 1.0)


class MarkerType(Enum):
    ARROW = 0
    TEXT_VIEW_FACING = 9


@dataclass
class Marker:
    """A display marker placed in the robot frame."""

    ns: str
    id: int
    type: MarkerType
    stamp: float
    position: tuple[float, float, float]
    orientation: tuple[float, float, float, float]
    scale: tuple[float, float, float]
    color: tuple[float, float, float, float]
    text: str = ""
    frame_id: str = FRAME_ID


@dataclass
class TwistEstimate:
    """Body velocity estimated from the wheel states."""

    linear_x: float
    linear_y: float
    angular_z: float
    stamp: float
    frame_id: str = FRAME_ID


def format_angle(angle: float) -> str:
    """Render an angle in radians as a multiple of pi, e.g. "0.500000pi"."""
    return f"{angle / math.pi:f}pi"


def solve_3x3(matrix: Sequence[Sequence[float]], rhs: Sequence[float]) -> list[float]:
    """Solve a 3x3 linear system by Gauss-Jordan elimination without pivoting."""
    rows = [[*map(float, row), float(b)] for row, b in zip(matrix, rhs)]
    if len(rows) != 3 or any(len(row) != 4 for row in rows):
        raise ValueError("expected a 3x3 matrix and a right-hand side of length 3")
    for i, pivot_row in enumerate(rows):
        pivot = pivot_row[i]
        if pivot == 0.0:
            raise ValueError("matrix is singular")
        pivot_row[i:] = [value / pivot for value in pivot_row[i:]]
        for k, row in enumerate(rows):
            if k == i:
                continue
            factor = row[i]
            row[i:] = [value - factor * p for value, p in zip(row[i:], pivot_row[i:])]
    return [row[3] for row in rows]


def estimate_twist(
    angles: Sequence[float],
    speeds: Sequence[float],
    wheel_positions: Sequence[Sequence[float]] = WHEEL_POSITIONS,
    wheel_radius: float = WHEEL_RADIUS,
) -> tuple[float, float, float]:
    """Least-squares (vx, vy, omega) from wheel angles (rad) and speeds (rpm)."""
    ata = [[0.0] * 3 for _ in range(3)]
    atb = [0.0] * 3
    for theta, rpm, (rx, ry) in zip(angles, speeds, wheel_positions):
        v = rpm / 60.0 * 2.0 * math.pi * wheel_radius
        ax = (1.0, 0.0, -ry)
        ay = (0.0, 1.0, rx)
        bx = v * math.cos(theta)
        by = v * math.sin(theta)
        for r in range(3):
            for c in range(3):
                ata[r][c] += ax[r] * ax[c] + ay[r] * ay[c]
            atb[r] += ax[r] * bx + ay[r] * by
    vx, vy, omega = solve_3x3(ata, atb)
    return vx, vy, omega


class SwerveVisualizer:
    """Tracks the four wheel modules reported on CAN ids 0x101-0x104."""

    def __init__(
        self,
        publish_markers: Callable[[list[Marker]], None],
        publish_twist: Callable[[TwistEstimate], None],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._publish_markers = publish_markers
        self._publish_twist = publish_twist
        self._clock = clock
        self.angles = [0.0] * len(WHEEL_POSITIONS)
        self.last_angles = [0.0] * len(WHEEL_POSITIONS)
        self.speeds = [0.0] * len(WHEEL_POSITIONS)

    def handle_frame(self, frame: CanFrame) -> TwistEstimate | None:
        """Take one wheel report; publish markers and a twist estimate.

        Frames with other ids are ignored and give None.
        """
        index = frame.can_id - FIRST_WHEEL_ID
        if not 0 <= index < len(WHEEL_POSITIONS):
            return None
        self.angles[index] = unpack_float(frame.data, 0)
        self.speeds[index] = unpack_float(frame.data, 4)

        self._publish_markers(self.build_markers(self._clock()))

        vx, vy, omega = estimate_twist(self.angles, self.speeds)
        twist = TwistEstimate(vx, vy, omega, self._clock())
        self._publish_twist(twist)
        return twist

    def build_markers(self, stamp: float) -> list[Marker]:
        """An arrow and a label for each wheel; records the angles as last seen."""
        markers: list[Marker] = []
        for i, (px, py) in enumerate(WHEEL_POSITIONS):
            angle = self.angles[i]
            markers.append(
                Marker(
                    ns="swerve_angle",
                    id=i,
                    type=MarkerType.ARROW,
                    stamp=stamp,
                    position=(px, py, 0.0),
                    orientation=(0.0, 0.0, math.sin(angle / 2.0), math.cos(angle / 2.0)),
                    scale=(
                        WHEEL_RADIUS + self.speeds[i] / 1000.0,
                        WHEEL_RADIUS,
                        WHEEL_RADIUS,
                    ),
                    color=_GREEN,
                )
            )
            jumped = abs(angle - self.last_angles[i]) > math.pi
            markers.append(
                Marker(
                    ns="swerve_angle_text",
                    id=i,
                    type=MarkerType.TEXT_VIEW_FACING,
                    stamp=stamp,
                    position=(px, py, 0.3),
                    orientation=(0.0, 0.0, 0.0, 1.0),
                    scale=(0.0, 0.0, 0.05),
                    color=_RED if jumped else _WHITE,
                    text=format_angle(angle),
                )
            )
            self.last_angles[i] = angle
        return markers