"""VGM command opcodes and decoding of single commands from a byte stream."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union

from .errors import VgmParseError

ParamValue = Union[int, list]


class Opcode(IntEnum):
    """Named VGM command opcodes."""

    GG_STEREO = 0x4F
    SN76489 = 0x50
    YM2413 = 0x51
    YM2612_PORT0 = 0x52
    YM2612_PORT1 = 0x53
    YM2151 = 0x54
    YM2203 = 0x55
    YM2608_PORT0 = 0x56
    YM2608_PORT1 = 0x57
    YM2610_PORT0 = 0x58
    YM2610_PORT1 = 0x59
    YM3812 = 0x5A
    YM3526 = 0x5B
    Y8950 = 0x5C
    YMZ280B = 0x5D
    YMF262_PORT0 = 0x5E
    YMF262_PORT1 = 0x5F
    WAIT_NNNN = 0x61
    WAIT_60TH = 0x62
    WAIT_50TH = 0x63
    END = 0x66
    DATA_BLOCK = 0x67
    PCM_RAM_WRITE = 0x68
    AY8910 = 0xA0
    DAC_STREAM_SETUP = 0x90
    DAC_STREAM_DATA = 0x91
    DAC_STREAM_FREQ = 0x92
    DAC_STREAM_START = 0x93
    DAC_STREAM_STOP = 0x94
    DAC_STREAM_FAST = 0x95
    SEEK_PCM = 0xE0


@dataclass
class VgmCommand:
    """A decoded command: its tag name and its named parameters."""

    cmd: str
    params: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.params[key]

    def is_wait(self) -> bool:
        return self.cmd == "wait"

    def wait_samples(self) -> int | None:
        """Number of samples waited, or None for a non-wait command."""
        return self.params["samples"] if self.is_wait() else None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping tagged with ``cmd``; absent optional values are left out."""
        out: dict[str, Any] = {"cmd": self.cmd}
        for key, value in self.params.items():
            if value is None:
                continue
            out[key] = list(value) if isinstance(value, (bytes, bytearray, list)) else value
        return out


def command_size(opcode: int) -> int:
    """Number of bytes that follow ``opcode`` in the stream (0 when unknown or variable)."""
    if opcode in (0x62, 0x63, 0x66):
        return 0
    if opcode in (0x4F, 0x50):
        return 1
    if 0x51 <= opcode <= 0x5F or opcode in (0x61, 0xA0) or 0xB0 <= opcode <= 0xBF:
        return 2
    if 0xC0 <= opcode <= 0xC8:
        return 3
    if 0xD0 <= opcode <= 0xD6 or opcode in (0xE0, 0xE1):
        return 4
    return {
        0x68: 11,
        0x90: 4,
        0x91: 4,
        0x92: 5,
        0x93: 10,
        0x94: 1,
        0x95: 4,
    }.get(opcode, 0)


class _Cursor:
    def __init__(self, data: bytes, pos: int) -> None:
        self.data = data
        self.pos = pos

    def u8(self) -> int:
        if self.pos >= len(self.data):
            raise VgmParseError("Unexpected end of data")
        value = self.data[self.pos]
        self.pos += 1
        return value

    def u16(self) -> int:
        return self.u8() | (self.u8() << 8)

    def u24(self) -> int:
        return self.u8() | (self.u8() << 8) | (self.u8() << 16)

    def u32(self) -> int:
        return self.u16() | (self.u16() << 16)

    def take(self, length: int) -> bytes:
        if self.pos + length > len(self.data):
            raise VgmParseError("Unexpected end of data")
        chunk = bytes(self.data[self.pos:self.pos + length])
        self.pos += length
        return chunk


_REG_DATA = {
    0x51: "ym2413_write",
    0x54: "ym2151_write",
    0x55: "ym2203_write",
    0x5A: "ym3812_write",
    0x5B: "ym3526_write",
    0x5C: "y8950_write",
    0x5D: "ymz280b_write",
    0xA0: "ay8910_write",
    0xB0: "rf5c68_write",
    0xB1: "rf5c164_write",
    0xB3: "gb_dmg_write",
    0xB4: "nes_apu_write",
    0xB5: "multi_pcm_write",
    0xB6: "upd7759_write",
    0xB7: "okim6258_write",
    0xB8: "okim6295_write",
    0xB9: "huc6280_write",
    0xBA: "k053260_write",
    0xBB: "pokey_write",
    0xBC: "wonder_swan_write",
    0xBD: "saa1099_write",
    0xBE: "es5503_write",
    0xBF: "ga20_write",
}

_PORTED = {
    0x52: ("ym2612_write", 0),
    0x53: ("ym2612_write", 1),
    0x56: ("ym2608_write", 0),
    0x57: ("ym2608_write", 1),
    0x58: ("ym2610_write", 0),
    0x59: ("ym2610_write", 1),
    0x5E: ("ymf262_write", 0),
    0x5F: ("ymf262_write", 1),
}

# Three operand bytes of which the first two are register and data.
_LO_HI_IGNORED = {
    0xC1: "rf5c68_write",
    0xC2: "rf5c164_write",
    0xC3: "multi_pcm_write",
    0xC6: "wonder_swan_write",
    0xC7: "vsu_write",
}

# 16-bit little-endian register followed by an 8-bit value.
_REG16_DATA = {
    0xC5: "scsp_write",
    0xC8: "x1010_write",
    0xD3: "k054539_write",
    0xD4: "c140_write",
}


def _data_block(op: int, cur: _Cursor) -> VgmCommand:
    cur.u8()  # compatibility byte
    block_type = cur.u8()
    size = cur.u32()
    actual = size & 0x7FFF_FFFF
    if cur.pos + actual <= len(cur.data):
        cur.pos += actual
    return VgmCommand("data_block", {"block_type": block_type, "size": size})


def _pcm_ram_write(op: int, cur: _Cursor) -> VgmCommand:
    cur.u8()  # compatibility byte
    return VgmCommand(
        "pcm_ram_write",
        {
            "chip_type": cur.u8(),
            "read_offset": cur.u24(),
            "write_offset": cur.u24(),
            "size": cur.u24(),
        },
    )


def _pwm(op: int, cur: _Cursor) -> VgmCommand:
    reg = cur.u8()
    data = cur.u8()
    return VgmCommand("pwm_write", {"reg": reg & 0x0F, "data": ((reg & 0xF0) << 4) | data})


def _c0(op: int, cur: _Cursor) -> VgmCommand:
    return VgmCommand("unknown", {"opcode": op, "bytes": list(cur.take(3))})


def _qsound(op: int, cur: _Cursor) -> VgmCommand:
    reg = cur.u8()
    hi = cur.u8()
    lo = cur.u8()
    return VgmCommand("qsound_write", {"reg": reg, "data": (hi << 8) | lo})


def _k051649(op: int, cur: _Cursor) -> VgmCommand:
    reg = cur.u8()
    data = cur.u8()
    cur.u8()
    return VgmCommand("k051649_write", {"reg": reg, "data": data})


def _es5506_d5(op: int, cur: _Cursor) -> VgmCommand:
    reg = cur.u8()
    return VgmCommand("es5506_write", {"reg": reg, "data": cur.u16()})


def _es5506_d6(op: int, cur: _Cursor) -> VgmCommand:
    reg = cur.u8()
    hi = cur.u8()
    lo = cur.u8()
    return VgmCommand("es5506_write", {"reg": reg, "data": (hi << 8) | lo})


def _c352(op: int, cur: _Cursor) -> VgmCommand:
    reg = cur.u16()
    return VgmCommand("c352_write", {"reg": reg, "data": cur.u16()})


_Parser = Callable[[int, _Cursor], VgmCommand]

_SPECIAL: dict[int, _Parser] = {
    Opcode.GG_STEREO: lambda op, cur: VgmCommand("gg_stereo", {"data": cur.u8()}),
    Opcode.SN76489: lambda op, cur: VgmCommand("sn76489_write", {"data": cur.u8()}),
    Opcode.WAIT_NNNN: lambda op, cur: VgmCommand("wait", {"samples": cur.u16()}),
    Opcode.WAIT_60TH: lambda op, cur: VgmCommand("wait", {"samples": 735}),
    Opcode.WAIT_50TH: lambda op, cur: VgmCommand("wait", {"samples": 882}),
    Opcode.END: lambda op, cur: VgmCommand("end"),
    Opcode.DATA_BLOCK: _data_block,
    Opcode.PCM_RAM_WRITE: _pcm_ram_write,
    Opcode.DAC_STREAM_SETUP: lambda op, cur: VgmCommand(
        "dac_stream_setup",
        {"stream_id": cur.u8(), "chip_type": cur.u8(), "port": cur.u8(), "reg": cur.u8()},
    ),
    Opcode.DAC_STREAM_DATA: lambda op, cur: VgmCommand(
        "dac_stream_data",
        {"stream_id": cur.u8(), "bank_id": cur.u8(), "step_base": cur.u8(), "step_size": cur.u8()},
    ),
    Opcode.DAC_STREAM_FREQ: lambda op, cur: VgmCommand(
        "dac_stream_freq", {"stream_id": cur.u8(), "frequency": cur.u32()}
    ),
    Opcode.DAC_STREAM_START: lambda op, cur: VgmCommand(
        "dac_stream_start",
        {
            "stream_id": cur.u8(),
            "data_start": cur.u32(),
            "length_mode": cur.u8(),
            "data_length": cur.u32(),
        },
    ),
    Opcode.DAC_STREAM_STOP: lambda op, cur: VgmCommand("dac_stream_stop", {"stream_id": cur.u8()}),
    Opcode.DAC_STREAM_FAST: lambda op, cur: VgmCommand(
        "dac_stream_fast", {"stream_id": cur.u8(), "block_id": cur.u16(), "flags": cur.u8()}
    ),
    0xB2: _pwm,
    0xC0: _c0,
    0xC4: _qsound,
    0xD0: lambda op, cur: VgmCommand(
        "ymf278_write", {"port": cur.u8(), "reg": cur.u8(), "data": cur.u8()}
    ),
    0xD1: lambda op, cur: VgmCommand(
        "ymf271_write", {"port": cur.u8(), "reg": cur.u8(), "data": cur.u8()}
    ),
    0xD2: _k051649,
    0xD5: _es5506_d5,
    0xD6: _es5506_d6,
    Opcode.SEEK_PCM: lambda op, cur: VgmCommand("seek_pcm", {"offset": cur.u32()}),
    0xE1: _c352,
}


def _decode(op: int, cur: _Cursor) -> VgmCommand:
    if op in _SPECIAL:
        return _SPECIAL[op](op, cur)
    if op in _REG_DATA:
        return VgmCommand(_REG_DATA[op], {"reg": cur.u8(), "data": cur.u8()})
    if op in _PORTED:
        name, port = _PORTED[op]
        return VgmCommand(name, {"port": port, "reg": cur.u8(), "data": cur.u8()})
    if op in _LO_HI_IGNORED:
        reg = cur.u8()
        data = cur.u8()
        cur.u8()
        return VgmCommand(_LO_HI_IGNORED[op], {"reg": reg, "data": data})
    if op in _REG16_DATA:
        reg = cur.u16()
        return VgmCommand(_REG16_DATA[op], {"reg": reg, "data": cur.u8()})
    if 0x70 <= op <= 0x7F:
        return VgmCommand("wait", {"samples": op - 0x70 + 1})
    if 0x80 <= op <= 0x8F:
        return VgmCommand("ym2612_dac", {"data": 0x2A, "wait": op - 0x80})
    size = command_size(op)
    return VgmCommand("unknown", {"opcode": op, "bytes": list(cur.take(size)) if size else []})


def parse_command(data: bytes, pos: int) -> tuple[VgmCommand, int] | None:
    """Decode the command at ``pos``; return it with the position after it.

    Returns None when ``pos`` is at or past the end of ``data``; raises
    VgmParseError when the command is truncated.
    """
    if pos >= len(data):
        return None
    cur = _Cursor(data, pos)
    op = cur.u8()
    command = _decode(op, cur)
    return command, cur.pos