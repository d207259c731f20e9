# swervecan

`swervecan` translates between high-level drive commands and the CAN frames of a
four-wheel swerve drive, and reconstructs the robot's motion from the wheels' own
reports.

It has three modules:

- **`swervecan.frames`**: the `CanFrame` type and the float encoding used in payloads.
- **`swervecan.controller`**: turns velocity commands and text commands into CAN frames.
- **`swervecan.visualization`**: reads wheel feedback frames and builds display markers
  and a least-squares estimate of the body twist.

The package depends on nothing outside the standard library. Frames and results
are handed to callables that you supply.

## Installation

```
pip install swervecan
```

## Frames

`CanFrame(can_id, dlc, data)` holds a CAN identifier, a data length code (0 to 8)
and up to eight data bytes; shorter data is padded with zeros to eight bytes, and
a `dlc` or data length out of range raises `ValueError`. `CanFrame.payload()`
returns the first `dlc` bytes.

`pack_float(value)` encodes a value as a 4-byte little-endian IEEE-754 single;
`unpack_float(data, offset=0)` decodes one, raising `ValueError` if there are not
four bytes at `offset`.

## Sending commands

```python
from swervecan.controller import TwistToCan

sent = []
bridge = TwistToCan(sent.append)

bridge.handle_command("pause")        # set the emergency-stop flag
frames = bridge.handle_twist(0.5, 0.0, 0.2)   # linear x, linear y, angular z
bridge.heartbeat()
```

`handle_twist` publishes three frames, in this order, and returns them as a list:

| id    | dlc | payload                                    |
|-------|-----|--------------------------------------------|
| 0x000 | 1   | status byte                                |
| 0x001 | 8   | linear x, linear y as float32              |
| 0x002 | 4   | angular z as float32                       |

The velocities are kept on the bridge as `x`, `y` and `z`, rounded to float32.

`heartbeat()` publishes the status byte alone on id `0x001` with `dlc` 1 and
returns that frame. `HEARTBEAT_PERIOD` (0.3 seconds) is the interval it is meant
to be called at.

The text commands are `"continue"` (clear the emergency flag), `"pause"` (set it)
and `"reset"` (request a reset). The reset flag goes out with the next twist and
is then cleared. Any other text is ignored.

The status is a `StatusFlags` (`emg`, `reset`, `reserved`); `to_byte()` packs it
with `emg` in bit 0, `reset` in bit 1 and `reserved` in bits 2–7.

## Reading wheel feedback

Each wheel module reports on ids `0x101` to `0x104`. Bytes 0–3 carry the steering
angle in radians and bytes 4–7 the wheel speed in rpm, both as float32.

```python
from swervecan.frames import CanFrame, pack_float
from swervecan.visualization import SwerveVisualizer

visualizer = SwerveVisualizer(
    publish_markers=print,
    publish_twist=print,
    clock=lambda: 0.0,
)
frame = CanFrame(0x101, 8, pack_float(0.5) + pack_float(120.0))
twist = visualizer.handle_frame(frame)
```

For an accepted frame, `handle_frame` publishes a list of eight `Marker` objects
(an arrow and a text label per wheel, in the `base_link` frame), then publishes
and returns a `TwistEstimate` (`linear_x`, `linear_y`, `angular_z`, `stamp`).
Frames with other ids are ignored and give `None`. The `clock` defaults to
`time.time`.

`build_markers(stamp)` builds the markers from the current state. The arrow's
length grows with the wheel speed; the label shows the angle as a multiple of pi
(see `format_angle`, e.g. `"0.500000pi"`) and turns red when the angle has
changed by more than pi since the previous report.

The twist comes from `estimate_twist(angles, speeds, wheel_positions, wheel_radius)`,
a least-squares fit of the body velocity to the wheel velocity vectors, solved
with `solve_3x3(matrix, rhs)` (Gauss-Jordan elimination without pivoting; a zero
pivot raises `ValueError`). The defaults are the wheel layout `WHEEL_POSITIONS`
(±0.2 m) and `WHEEL_RADIUS` (0.03 m).

## What it does not do

`swervecan` does not talk to a CAN bus, run a timer for the heartbeat, or draw
anything. It builds frames, markers and estimates and passes them to the
callables you give it; sending, scheduling and display are up to you.

## Running the tests

```
pip install "swervecan[test]"
pytest
```