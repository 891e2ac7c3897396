import pytest

from vgmck.commands import Opcode, VgmCommand, command_size, parse_command
from vgmck.errors import VgmParseError


def decode(data):
    result = parse_command(bytes(data), 0)
    assert result is not None
    return result


@pytest.mark.parametrize(
    "opcode, size",
    [(0x62, 0), (0x63, 0), (0x66, 0), (0x50, 1), (0x52, 2), (0x61, 2),
     (0xC0, 3), (0xE0, 4), (0x68, 11), (0x92, 5), (0x93, 10), (0x94, 1), (0x95, 4)],
)
def test_command_size_matches_format(opcode, size):
    assert command_size(opcode) == size


def test_opcode_values_decode():
    cmd, _ = decode([Opcode.END])
    assert cmd.cmd == "end"
    cmd, pos = decode([Opcode.WAIT_NNNN, 0x10, 0x00])
    assert cmd.wait_samples() == 16
    assert pos == 3
    cmd, pos = decode([Opcode.SEEK_PCM, 0x01, 0x00, 0x00, 0x00])
    assert cmd.cmd == "seek_pcm"
    assert cmd["offset"] == 1
    assert pos == 1 + command_size(Opcode.SEEK_PCM)


def test_wait_60th_and_50th():
    cmd, pos = decode([Opcode.WAIT_60TH])
    assert cmd.is_wait() and cmd.wait_samples() == 735 and pos == 1
    cmd, _ = decode([Opcode.WAIT_50TH])
    assert cmd.wait_samples() == 882


def test_wait_nnnn_reads_little_endian():
    cmd, pos = decode([0x61, 0xE8, 0x03])
    assert cmd.wait_samples() == 1000
    assert pos == 3


def test_short_waits_cover_one_to_sixteen():
    samples = {decode([op])[0].wait_samples() for op in range(0x70, 0x80)}
    assert samples == set(range(1, 17))


def test_end_is_not_wait():
    cmd, _ = decode([0x66])
    assert cmd.cmd == "end"
    assert not cmd.is_wait()
    assert cmd.wait_samples() is None


def test_ported_write_keeps_port_reg_and_data():
    cmd, pos = decode([0x53, 0x28, 0xF1])
    assert cmd.cmd == "ym2612_write"
    assert cmd.params == {"port": 1, "reg": 0x28, "data": 0xF1}
    assert pos == 3


def test_sn76489_to_dict_tag():
    cmd, _ = decode([0x50, 0x9F])
    assert cmd.to_dict() == {"cmd": "sn76489_write", "data": 0x9F}


def test_ym2612_dac_uses_fixed_data():
    cmd, pos = decode([0x85])
    assert cmd["data"] == 0x2A
    assert cmd["wait"] == 5
    assert pos == 1


def test_data_block_skips_payload():
    payload = b"\x01\x02\x03\x04\x05"
    data = bytes([0x67, 0x66, 0x00]) + len(payload).to_bytes(4, "little") + payload + b"\x66"
    cmd, pos = decode(data)
    assert cmd.cmd == "data_block"
    assert cmd["size"] == len(payload)
    assert pos == 7 + len(payload)
    follow, _ = parse_command(data, pos)
    assert follow.cmd == "end"


def test_data_block_oversized_payload_is_not_skipped():
    data = bytes([0x67, 0x66, 0x00]) + (1000).to_bytes(4, "little")
    cmd, pos = decode(data)
    assert cmd["size"] == 1000
    assert pos == 7


def test_data_block_to_dict_drops_missing_size():
    cmd = VgmCommand("data_block", {"block_type": 0, "size": None})
    assert "size" not in cmd.to_dict()


def test_pwm_splits_register_byte():
    cmd, _ = decode([0xB2, 0x35, 0x12])
    assert cmd["reg"] == 0x05
    assert cmd["data"] == 0x312


def test_reg16_write_round_trip():
    cmd, pos = decode([0xD4, 0x34, 0x12, 0x56])
    assert cmd.cmd == "c140_write"
    assert cmd["reg"] == 0x1234
    assert cmd["data"] == 0x56
    assert pos == 4


def test_dac_stream_start_fields():
    data = [0x93, 0x02] + list((70000).to_bytes(4, "little")) + [0x01] + list((500).to_bytes(4, "little"))
    cmd, pos = decode(data)
    assert cmd.params == {"stream_id": 2, "data_start": 70000, "length_mode": 1, "data_length": 500}
    assert pos == 1 + command_size(0x93)


def test_unknown_opcode_without_operands():
    cmd, pos = decode([0x30])
    assert cmd.to_dict() == {"cmd": "unknown", "opcode": 0x30, "bytes": []}
    assert pos == 1


def test_sega_pcm_write_is_unknown_with_bytes():
    cmd, _ = decode([0xC0, 0x01, 0x02, 0x03])
    assert cmd["bytes"] == [1, 2, 3]


def test_position_offset_respected():
    data = bytes([0x66, 0x62])
    cmd, pos = parse_command(data, 1)
    assert cmd.wait_samples() == 735
    assert pos == 2


def test_end_of_data_returns_none():
    assert parse_command(b"\x66", 1) is None
    assert parse_command(b"", 0) is None


@pytest.mark.parametrize("data", [[0x50], [0x52, 0x01], [0x61, 0x00], [0xE0, 1, 2]])
def test_truncated_command_raises(data):
    with pytest.raises(VgmParseError):
        parse_command(bytes(data), 0)