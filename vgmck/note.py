"""Conversion of scale frequencies to chip note values."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

NOTE_COUNT = 32
_U64 = (1 << 64) - 1


def _float_to_u64(value: float) -> int:
    if value != value or value <= 0:
        return 0
    return min(int(value), _U64)


@dataclass
class NoteTable:
    """Per-note frequency or period values for one chip."""

    values: list[int] = field(default_factory=lambda: [0] * NOTE_COUNT)

    @classmethod
    def calculate(
        cls,
        clock_div: int,
        note_bits: int,
        note_freq: Sequence[float],
        base_freq: float,
    ) -> NoteTable:
        """Build the table.

        A negative ``clock_div`` gives periods, a positive one frequencies;
        values are scaled down until they fit in ``abs(note_bits)`` bits.
        """
        if clock_div == 0:
            return cls()
        if len(note_freq) != NOTE_COUNT:
            raise ValueError(f"expected {NOTE_COUNT} note frequencies, got {len(note_freq)}")

        bits = abs(note_bits)
        q = abs(clock_div)
        mask = (_U64 << bits) & _U64

        raw: list[int] = []
        for ratio in note_freq:
            freq = _float_to_u64(ratio * base_freq + 0.000001)
            if clock_div < 0:
                if freq == 0:
                    raise ValueError("note frequency rounds to zero")
                raw.append(((q << 24) & _U64) // freq)
            else:
                raw.append((freq * ((q << 22) & _U64)) & _U64)

        combined = 0
        for v in raw:
            combined |= v
        shift = 0
        while (combined >> shift) & mask:
            shift += 1
        return cls([v >> shift for v in raw])

    def get(self, note: int, octave: int, basic_octave: int, clock_div: int, note_bits: int) -> int:
        """Value for ``note`` shifted to ``octave``; 0 for notes out of range."""
        if not 0 <= note < NOTE_COUNT:
            return 0
        value = self.values[note]
        if note_bits < 0:
            return value
        if clock_div < 0:
            return value >> (octave - basic_octave)
        return value >> (basic_octave - octave)