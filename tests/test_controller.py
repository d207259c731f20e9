import pytest

from swervecan.controller import StatusFlags, TwistToCan
from swervecan.frames import pack_float, unpack_float


@pytest.fixture
def sent():
    return []


@pytest.fixture
def node(sent):
    return TwistToCan(sent.append)


def test_status_flags_bit_layout():
    assert StatusFlags().to_byte() == 0
    assert StatusFlags(emg=True).to_byte() == 0b01
    assert StatusFlags(reset=True).to_byte() == 0b10
    assert StatusFlags(emg=True, reset=True).to_byte() == 0b11


def test_initial_heartbeat(node, sent):
    frame = node.heartbeat()
    assert sent == [frame]
    assert frame.can_id == 0x001
    assert frame.dlc == 1
    assert frame.payload() == b"\x00"


def test_pause_and_continue(node):
    node.handle_command("pause")
    assert node.heartbeat().payload() == b"\x01"
    node.handle_command("continue")
    assert node.heartbeat().payload() == b"\x00"


def test_unknown_command_is_ignored(node):
    node.handle_command("pause")
    node.handle_command("jump")
    assert node.status == StatusFlags(emg=True)


def test_reset_stays_until_twist(node):
    node.handle_command("reset")
    assert node.heartbeat().payload() == b"\x02"
    assert node.heartbeat().payload() == b"\x02"
    frames = node.handle_twist(0.0, 0.0, 0.0)
    assert frames[0].payload() == b"\x02"
    assert node.heartbeat().payload() == b"\x00"


def test_twist_frames_layout(node, sent):
    frames = node.handle_twist(0.5, -0.25, 1.5)
    assert sent == frames
    assert [f.can_id for f in frames] == [0x000, 0x001, 0x002]
    assert [f.dlc for f in frames] == [1, 8, 4]
    assert frames[0].payload() == b"\x00"
    assert frames[1].payload() == pack_float(0.5) + pack_float(-0.25)
    assert frames[2].payload() == pack_float(1.5)


def test_angular_frame_keeps_y_bytes(node):
    frames = node.handle_twist(0.5, -0.25, 1.5)
    assert frames[2].data[4:] == pack_float(-0.25)


def test_twist_values_round_trip_in_single_precision(node):
    frames = node.handle_twist(0.1, 0.2, 0.3)
    assert unpack_float(frames[1].data, 0) == pytest.approx(0.1, rel=1e-6)
    assert unpack_float(frames[1].data, 4) == pytest.approx(0.2, rel=1e-6)
    assert unpack_float(frames[2].data, 0) == pytest.approx(0.3, rel=1e-6)
    assert node.x == unpack_float(frames[1].data, 0)


def test_emergency_flag_in_twist_status(node):
    node.handle_command("pause")
    frames = node.handle_twist(1.0, 0.0, 0.0)
    assert frames[0].payload() == b"\x01"