import pytest

from vgmck.delay import generate_delay
from vgmck.errors import VgmParseError
from vgmck.gd3 import Gd3Metadata, generate_gd3
from vgmck.header import VGM_HEADER_SIZE, VGM_VERSION, HeaderOffset
from vgmck.header import VgmHeader as RawHeader
from vgmck.reader import ChipInfo, Gd3Info, VgmReader
from vgmck.writer import VgmWriter


def _image(body=b"\x66", version=VGM_VERSION, fields=None):
    raw = RawHeader()
    raw.write_u32(HeaderOffset.VERSION, version)
    for offset, value in (fields or {}).items():
        raw.write_u32(offset, value)
    return raw.to_bytes() + body


@pytest.fixture
def written(tmp_path):
    meta = Gd3Metadata(title_en="Song", composer_en="Someone", notes="line1\nline2")
    path = tmp_path / "song.vgm"
    with VgmWriter(path) as writer:
        writer.set_chip_clock(HeaderOffset.SN76489_CLOCK, 3579545)
        writer.write_header()
        writer.write_delay(735)
        writer.mark_loop_start()
        writer.write_data(bytes([0x50, 0x9F]))
        writer.write_delay(882)
        writer.set_total_samples(1617)
        writer.set_loop_samples(882)
        writer.set_rate(60)
        writer.set_volume_modifier(-5)
        writer.set_loop_base(-2)
        writer.set_loop_modifier(16)
        writer.finalize(meta)
    return path.read_bytes()


def test_header_round_trip(written):
    header = VgmReader(written).parse_header()
    assert header.version == VGM_VERSION
    assert header.total_samples == 1617
    assert header.loop_samples == 882
    assert header.rate == 60
    assert header.volume_modifier == -5
    assert header.loop_base == -2
    assert header.loop_modifier == 16
    assert header.data_offset == VGM_HEADER_SIZE - HeaderOffset.DATA_OFFSET
    assert header.eof_offset == len(written) - HeaderOffset.EOF_OFFSET


def test_loop_and_gd3_offsets(written):
    header = VgmReader(written).parse_header()
    loop_pos = VGM_HEADER_SIZE + len(generate_delay(735))
    assert header.loop_offset + HeaderOffset.LOOP_OFFSET == loop_pos
    gd3_pos = header.gd3_offset + HeaderOffset.GD3_OFFSET
    assert written[gd3_pos:gd3_pos + 4] == b"Gd3 "


def test_chip_clock_and_sn76489_extra(written):
    header = VgmReader(written).parse_header()
    assert header.chips == {
        "sn76489": ChipInfo(3579545, False, {"feedback": 0, "shift_width": 0, "flags": 0})
    }


def test_gd3_round_trip(written):
    reader = VgmReader(written)
    header = reader.parse_header()
    assert reader.parse_gd3(header) == Gd3Info(
        title="Song", composer="Someone", notes="line1\nline2"
    )


def test_commands_round_trip(written):
    reader = VgmReader(written)
    header = reader.parse_header()
    assert [c.to_dict() for c in reader.parse_commands(header)] == [
        {"cmd": "wait", "samples": 735},
        {"cmd": "sn76489_write", "data": 0x9F},
        {"cmd": "wait", "samples": 882},
        {"cmd": "end"},
    ]


def test_commands_stop_at_end_marker():
    data = _image(body=bytes([0x62, 0x66, 0x62, 0x62]))
    reader = VgmReader(data)
    commands = reader.parse_commands(reader.parse_header())
    assert [c.cmd for c in commands] == ["wait", "end"]


def test_truncated_command_raises():
    data = _image(body=bytes([0x61, 0x01]))
    reader = VgmReader(data)
    header = reader.parse_header()
    with pytest.raises(VgmParseError):
        reader.parse_commands(header)


def test_too_small_raises():
    with pytest.raises(VgmParseError, match="too small"):
        VgmReader(b"Vgm " + bytes(10)).parse_header()


def test_bad_magic_raises():
    data = b"XXXX" + _image()[4:]
    with pytest.raises(VgmParseError, match="magic"):
        VgmReader(data).parse_header()


def test_short_header_without_modifiers_raises():
    with pytest.raises(VgmParseError, match="Offset out of bounds"):
        VgmReader(b"Vgm " + bytes(96)).parse_header()


def test_dual_chip_bit():
    data = _image(fields={HeaderOffset.YM2151_CLOCK: 3579545 | 0x4000_0000})
    chips = VgmReader(data).parse_header().chips
    assert chips["ym2151"] == ChipInfo(3579545, True, {})


def test_extended_chips_need_version_151():
    fields = {HeaderOffset.YM2203_CLOCK: 3000000, HeaderOffset.NES_APU_CLOCK: 1789772}
    old = VgmReader(_image(version=0x150, fields=fields)).parse_header()
    assert "ym2203" not in old.chips
    mid = VgmReader(_image(version=0x151, fields=fields)).parse_header()
    assert mid.chips["ym2203"].clock == 3000000
    assert "nes_apu" not in mid.chips
    new = VgmReader(_image(version=0x161, fields=fields)).parse_header()
    assert new.chips["nes_apu"].clock == 1789772


def test_old_version_uses_default_data_offset():
    header = VgmReader(_image(version=0x110)).parse_header()
    assert header.data_offset == 0x0C


def test_zero_data_offset_uses_default():
    data = _image(fields={HeaderOffset.DATA_OFFSET: 0})
    assert VgmReader(data).parse_header().data_offset == 0x0C


def test_gd3_absent_or_invalid():
    reader = VgmReader(_image())
    header = reader.parse_header()
    assert reader.parse_gd3(header) is None
    header.gd3_offset = 10_000
    assert reader.parse_gd3(header) is None
    header.gd3_offset = VGM_HEADER_SIZE - HeaderOffset.GD3_OFFSET
    padded = VgmReader(_image(body=bytes(16)))
    assert padded.parse_gd3(header) is None


def test_gd3_surrogate_pair():
    body = b"\x66"
    gd3_pos = VGM_HEADER_SIZE + len(body)
    tag = generate_gd3(Gd3Metadata(title_en="\U0001F3B5 tune", game_en="あ"))
    data = _image(body=body + tag, fields={HeaderOffset.GD3_OFFSET: gd3_pos - 0x14})
    reader = VgmReader(data)
    gd3 = reader.parse_gd3(reader.parse_header())
    assert gd3.title == "\U0001F3B5 tune"
    assert gd3.game == "あ"
    assert gd3.notes == ""


def test_primitive_reads_are_little_endian():
    reader = VgmReader(bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08, 0x09, 0x0A]))
    assert reader.read_u8() == 0x01
    assert reader.read_u16_le() == 0x0302
    assert reader.read_u24_le() == 0x060504
    assert reader.read_u32_le() == 0x0A090807
    assert reader.is_eof()
    with pytest.raises(VgmParseError):
        reader.read_u8()


def test_read_bytes_and_seek():
    reader = VgmReader(b"abcdef")
    reader.seek(2)
    assert reader.read_bytes(3) == b"cde"
    assert reader.position == 5
    with pytest.raises(VgmParseError):
        reader.read_bytes(2)