"""The fixed-size VGM file header."""

from __future__ import annotations

from enum import IntEnum

VGM_VERSION = 0x161
VGM_MAX_HEADER = 48
VGM_HEADER_SIZE = VGM_MAX_HEADER * 4
VGM_MAGIC = b"Vgm "


class HeaderOffset(IntEnum):
    """Byte offsets of fields in the VGM header."""

    IDENT = 0x00
    EOF_OFFSET = 0x04
    VERSION = 0x08
    SN76489_CLOCK = 0x0C
    YM2413_CLOCK = 0x10
    GD3_OFFSET = 0x14
    TOTAL_SAMPLES = 0x18
    LOOP_OFFSET = 0x1C
    LOOP_SAMPLES = 0x20
    RATE = 0x24
    SN76489_FEEDBACK = 0x28
    SN76489_SHIFT_WIDTH = 0x2A
    SN76489_FLAGS = 0x2B
    YM2612_CLOCK = 0x2C
    YM2151_CLOCK = 0x30
    DATA_OFFSET = 0x34
    SEGA_PCM_CLOCK = 0x38
    SEGA_PCM_INTERFACE = 0x3C
    YM2203_CLOCK = 0x44
    YM2608_CLOCK = 0x48
    YM2610_CLOCK = 0x4C
    YM3812_CLOCK = 0x50
    YM3526_CLOCK = 0x54
    Y8950_CLOCK = 0x58
    YMF262_CLOCK = 0x5C
    YMF278B_CLOCK = 0x60
    YMF271_CLOCK = 0x64
    YMZ280B_CLOCK = 0x68
    RF5C164_CLOCK = 0x6C
    PWM_CLOCK = 0x70
    AY8910_CLOCK = 0x74
    AY8910_TYPE = 0x78
    AY8910_FLAGS = 0x79
    YM2203_FLAGS = 0x7A
    YM2608_FLAGS = 0x7B
    VOLUME_MODIFIER = 0x7C
    LOOP_BASE = 0x7E
    LOOP_MODIFIER = 0x7F
    GB_DMG_CLOCK = 0x80
    NES_APU_CLOCK = 0x84
    MULTI_PCM_CLOCK = 0x88
    UPD7759_CLOCK = 0x8C
    OKIM6258_CLOCK = 0x90
    OKIM6258_FLAGS = 0x94
    K051649_CLOCK = 0x98
    K054539_CLOCK = 0x9C
    HUC6280_CLOCK = 0xA0
    C140_CLOCK = 0xA4
    K053260_CLOCK = 0xA8
    POKEY_CLOCK = 0xAC
    QSOUND_CLOCK = 0xB0


class VgmHeader:
    """Header bytes; writes that would not fit are ignored."""

    def __init__(self) -> None:
        self._data = bytearray(VGM_HEADER_SIZE)
        self._data[0:4] = VGM_MAGIC
        self.write_u32(HeaderOffset.VERSION, VGM_VERSION)
        self.write_u32(HeaderOffset.DATA_OFFSET, VGM_HEADER_SIZE - HeaderOffset.DATA_OFFSET)

    def _write(self, offset: int, value: int, width: int) -> None:
        if 0 <= offset and offset + width <= VGM_HEADER_SIZE:
            mask = (1 << (8 * width)) - 1
            self._data[offset:offset + width] = (value & mask).to_bytes(width, "little")

    def write_u8(self, offset: int, value: int) -> None:
        self._write(offset, value, 1)

    def write_u16(self, offset: int, value: int) -> None:
        self._write(offset, value, 2)

    def write_u32(self, offset: int, value: int) -> None:
        self._write(offset, value, 4)

    def write_i8(self, offset: int, value: int) -> None:
        self._write(offset, value, 1)

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)