"""Reading VGM files: header fields, chip clocks, GD3 tags and commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from .commands import VgmCommand, parse_command
from .errors import VgmParseError
from .header import HeaderOffset

VGM_MAGIC = b"Vgm "
GD3_MAGIC = b"Gd3 "
MIN_HEADER_SIZE = 64
DEFAULT_DATA_OFFSET = 0x0C
DUAL_CHIP_BIT = 0x4000_0000
CLOCK_MASK = 0x3FFF_FFFF

_BASE_CHIPS = (
    ("sn76489", HeaderOffset.SN76489_CLOCK),
    ("ym2413", HeaderOffset.YM2413_CLOCK),
    ("ym2612", HeaderOffset.YM2612_CLOCK),
    ("ym2151", HeaderOffset.YM2151_CLOCK),
)

_V151_CHIPS = (
    ("sega_pcm", HeaderOffset.SEGA_PCM_CLOCK),
    ("ym2203", HeaderOffset.YM2203_CLOCK),
    ("ym2608", HeaderOffset.YM2608_CLOCK),
    ("ym2610", HeaderOffset.YM2610_CLOCK),
    ("ym3812", HeaderOffset.YM3812_CLOCK),
    ("ym3526", HeaderOffset.YM3526_CLOCK),
    ("y8950", HeaderOffset.Y8950_CLOCK),
    ("ymf262", HeaderOffset.YMF262_CLOCK),
    ("ymf278b", HeaderOffset.YMF278B_CLOCK),
    ("ymf271", HeaderOffset.YMF271_CLOCK),
    ("ymz280b", HeaderOffset.YMZ280B_CLOCK),
    ("rf5c164", HeaderOffset.RF5C164_CLOCK),
    ("pwm", HeaderOffset.PWM_CLOCK),
    ("ay8910", HeaderOffset.AY8910_CLOCK),
)

_V161_CHIPS = (
    ("gb_dmg", HeaderOffset.GB_DMG_CLOCK),
    ("nes_apu", HeaderOffset.NES_APU_CLOCK),
    ("multi_pcm", HeaderOffset.MULTI_PCM_CLOCK),
    ("upd7759", HeaderOffset.UPD7759_CLOCK),
    ("okim6258", HeaderOffset.OKIM6258_CLOCK),
    ("k051649", HeaderOffset.K051649_CLOCK),
    ("k054539", HeaderOffset.K054539_CLOCK),
    ("huc6280", HeaderOffset.HUC6280_CLOCK),
    ("c140", HeaderOffset.C140_CLOCK),
    ("k053260", HeaderOffset.K053260_CLOCK),
    ("pokey", HeaderOffset.POKEY_CLOCK),
    ("qsound", HeaderOffset.QSOUND_CLOCK),
)


def _to_i8(value: int) -> int:
    return value - 0x100 if value & 0x80 else value


@dataclass
class ChipInfo:
    """Clock and options of one chip named in the header."""

    clock: int
    dual: bool = False
    extra: dict[str, int] = field(default_factory=dict)


@dataclass
class Gd3Info:
    """The eleven text fields of a GD3 tag."""

    title: str = ""
    title_jp: str = ""
    game: str = ""
    game_jp: str = ""
    system: str = ""
    system_jp: str = ""
    composer: str = ""
    composer_jp: str = ""
    date: str = ""
    converter: str = ""
    notes: str = ""


@dataclass
class VgmHeader:
    """Fields decoded from a VGM file header; offsets are stored as in the file."""

    version: int = 0
    eof_offset: int = 0
    total_samples: int = 0
    loop_offset: int = 0
    loop_samples: int = 0
    rate: int = 0
    data_offset: int = 0
    gd3_offset: int = 0
    volume_modifier: int = 0
    loop_base: int = 0
    loop_modifier: int = 0
    chips: dict[str, ChipInfo] = field(default_factory=dict)


class VgmReader:
    """Cursor over the bytes of a VGM file."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.pos = 0

    @property
    def position(self) -> int:
        return self.pos

    def is_eof(self) -> bool:
        return self.pos >= len(self.data)

    def seek(self, pos: int) -> None:
        self.pos = pos

    def read_u8(self) -> int:
        if self.pos >= len(self.data):
            raise VgmParseError("Unexpected end of data")
        value = self.data[self.pos]
        self.pos += 1
        return value

    def read_u16_le(self) -> int:
        return self.read_u8() | (self.read_u8() << 8)

    def read_u24_le(self) -> int:
        return self.read_u8() | (self.read_u8() << 8) | (self.read_u8() << 16)

    def read_u32_le(self) -> int:
        return self.read_u16_le() | (self.read_u16_le() << 16)

    def read_bytes(self, length: int) -> bytes:
        if self.pos + length > len(self.data):
            raise VgmParseError("Unexpected end of data")
        chunk = self.data[self.pos:self.pos + length]
        self.pos += length
        return chunk

    def _peek(self, offset: int, width: int) -> int:
        if offset + width > len(self.data):
            raise VgmParseError("Offset out of bounds")
        return int.from_bytes(self.data[offset:offset + width], "little")

    def _chip_clocks(self, table: tuple[tuple[str, int], ...], chips: dict[str, ChipInfo]) -> None:
        for name, offset in table:
            if offset + 4 > len(self.data):
                continue
            clock = self._peek(offset, 4)
            if clock:
                chips[name] = ChipInfo(clock & CLOCK_MASK, bool(clock & DUAL_CHIP_BIT))

    def parse_header(self) -> VgmHeader:
        """Validate the magic and decode the header fields and chip clocks."""
        if len(self.data) < MIN_HEADER_SIZE:
            raise VgmParseError("File too small for VGM header")
        if self.data[0:4] != VGM_MAGIC:
            raise VgmParseError("Invalid VGM magic")

        version = self._peek(HeaderOffset.VERSION, 4)
        eof_offset = self._peek(HeaderOffset.EOF_OFFSET, 4)
        total_samples = self._peek(HeaderOffset.TOTAL_SAMPLES, 4)
        loop_offset = self._peek(HeaderOffset.LOOP_OFFSET, 4)
        loop_samples = self._peek(HeaderOffset.LOOP_SAMPLES, 4)
        rate = self._peek(HeaderOffset.RATE, 4)
        gd3_offset = self._peek(HeaderOffset.GD3_OFFSET, 4)

        data_offset = DEFAULT_DATA_OFFSET
        if version >= 0x150:
            data_offset = self._peek(HeaderOffset.DATA_OFFSET, 4) or DEFAULT_DATA_OFFSET

        chips: dict[str, ChipInfo] = {}
        self._chip_clocks(_BASE_CHIPS, chips)
        if version >= 0x151:
            self._chip_clocks(_V151_CHIPS, chips)
        if version >= 0x161:
            self._chip_clocks(_V161_CHIPS, chips)

        if "sn76489" in chips:
            chips["sn76489"].extra.update(
                feedback=self._peek(HeaderOffset.SN76489_FEEDBACK, 2),
                shift_width=self._peek(HeaderOffset.SN76489_SHIFT_WIDTH, 1),
                flags=self._peek(HeaderOffset.SN76489_FLAGS, 1),
            )

        volume_modifier = _to_i8(self._peek(HeaderOffset.VOLUME_MODIFIER, 1))
        loop_base = _to_i8(self._peek(HeaderOffset.LOOP_BASE, 1))
        loop_modifier = self._peek(HeaderOffset.LOOP_MODIFIER, 1)

        return VgmHeader(
            version=version,
            eof_offset=eof_offset,
            total_samples=total_samples,
            loop_offset=loop_offset,
            loop_samples=loop_samples,
            rate=rate,
            data_offset=data_offset,
            gd3_offset=gd3_offset,
            volume_modifier=volume_modifier,
            loop_base=loop_base,
            loop_modifier=loop_modifier,
            chips=chips,
        )

    def parse_gd3(self, header: VgmHeader) -> Gd3Info | None:
        """Decode the GD3 tag, or return None when there is none or it is unreadable."""
        if header.gd3_offset == 0:
            return None
        gd3_pos = header.gd3_offset + HeaderOffset.GD3_OFFSET
        if gd3_pos + 12 > len(self.data):
            return None
        self.seek(gd3_pos)
        if self.read_bytes(4) != GD3_MAGIC:
            return None
        self.read_u32_le()  # version
        self.read_u32_le()  # size
        return Gd3Info(*(self._read_utf16_string() for _ in range(11)))

    def _read_utf16_string(self) -> str:
        chars: list[str] = []
        while self.pos + 2 <= len(self.data):
            code = self.read_u16_le()
            if code == 0:
                break
            if 0xD800 <= code <= 0xDBFF:
                if self.pos + 2 > len(self.data):
                    break
                low = self.read_u16_le()
                if 0xDC00 <= low <= 0xDFFF:
                    chars.append(chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)))
            elif not 0xDC00 <= code <= 0xDFFF:
                chars.append(chr(code))
        return "".join(chars)

    def parse_commands(self, header: VgmHeader) -> list[VgmCommand]:
        """Decode commands from the data section up to and including the end marker."""
        self.seek(header.data_offset + HeaderOffset.DATA_OFFSET)
        commands: list[VgmCommand] = []
        while not self.is_eof():
            result = parse_command(self.data, self.pos)
            if result is None:
                break
            command, self.pos = result
            commands.append(command)
            if command.cmd == "end":
                break
        return commands