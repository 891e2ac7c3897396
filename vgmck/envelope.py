"""Macro envelopes and the macro command types they drive."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

MAX_ENVELOPE_DATA = 2048
MAX_MACRO_TYPES = 13
ENVELOPES_PER_TYPE = 256


def _to_i16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


class MacroType(IntEnum):
    """Kinds of macro command; the value indexes envelope storage."""

    VOLUME = 0
    PANNING = 1
    TONE = 2
    OPTION = 3
    ARPEGGIO = 4
    GLOBAL = 5
    MULTIPLY = 6
    WAVEFORM = 7
    MOD_WAVEFORM = 8
    VOLUME_ENV = 9
    SAMPLE = 10
    SAMPLE_LIST = 11
    MIDI = 12

    def stat_name(self) -> str:
        """Name of the static channel command, or an empty string."""
        return _STAT_NAMES[self]

    def dyn_name(self) -> str:
        """Name of the envelope definition command, or an empty string."""
        return _DYN_NAMES[self]

    def dyn_rel_name(self) -> str:
        """Name of the relative envelope command, or an empty string."""
        return _DYN_REL_NAMES.get(self, "")

    @classmethod
    def from_dyn_name(cls, name: str) -> MacroType | None:
        return _BY_DYN_NAME.get(name)

    @classmethod
    def from_stat_name(cls, name: str) -> MacroType | None:
        return _BY_STAT_NAME.get(name)


_STAT_NAMES = {
    MacroType.VOLUME: "v",
    MacroType.PANNING: "P",
    MacroType.TONE: "@",
    MacroType.OPTION: "",
    MacroType.ARPEGGIO: "",
    MacroType.GLOBAL: "@G",
    MacroType.MULTIPLY: "M",
    MacroType.WAVEFORM: "@W",
    MacroType.MOD_WAVEFORM: "@WM",
    MacroType.VOLUME_ENV: "ve",
    MacroType.SAMPLE: "@S",
    MacroType.SAMPLE_LIST: "@SL",
    MacroType.MIDI: "",
}

_DYN_NAMES = {
    MacroType.VOLUME: "@v",
    MacroType.PANNING: "@P",
    MacroType.TONE: "@@",
    MacroType.OPTION: "@x",
    MacroType.ARPEGGIO: "@EN",
    MacroType.GLOBAL: "",
    MacroType.MULTIPLY: "@M",
    MacroType.WAVEFORM: "@W",
    MacroType.MOD_WAVEFORM: "",
    MacroType.VOLUME_ENV: "",
    MacroType.SAMPLE: "@S",
    MacroType.SAMPLE_LIST: "@SL",
    MacroType.MIDI: "@MIDI",
}

_DYN_REL_NAMES = {
    MacroType.VOLUME: "@vr",
    MacroType.OPTION: "@xr",
}

_BY_DYN_NAME = {name: mt for mt, name in _DYN_NAMES.items() if name}
_BY_STAT_NAME = {name: mt for mt, name in _STAT_NAMES.items() if name}


@dataclass
class MacroEnvelope:
    """A sequence of 16-bit macro values with an optional loop point."""

    loop_start: int = -1
    loop_end: int = 0
    data: list[int] = field(default_factory=list)
    text: str = ""

    def reset(self) -> None:
        self.loop_start = -1
        self.loop_end = 0
        self.data.clear()
        self.text = ""

    def __len__(self) -> int:
        return self.loop_end

    def is_empty(self) -> bool:
        return self.loop_end == 0

    def push(self, value: int) -> None:
        """Append a value; values past the capacity are dropped."""
        if self.loop_end >= MAX_ENVELOPE_DATA:
            return
        value = _to_i16(value)
        if len(self.data) <= self.loop_end:
            self.data.append(value)
        else:
            self.data[self.loop_end] = value
        self.loop_end += 1

    def set_loop_point(self) -> None:
        self.loop_start = self.loop_end

    def get(self, index: int) -> int | None:
        if 0 <= index < len(self.data):
            return self.data[index]
        return None

    def last(self) -> int | None:
        if self.loop_end > 0 and self.loop_end - 1 < len(self.data):
            return self.data[self.loop_end - 1]
        return None


def create_macro_env_storage() -> list[list[MacroEnvelope]]:
    """Storage indexed as ``storage[macro_type][envelope_id]``."""
    return [
        [MacroEnvelope() for _ in range(ENVELOPES_PER_TYPE)]
        for _ in range(MAX_MACRO_TYPES)
    ]