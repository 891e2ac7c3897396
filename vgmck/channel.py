"""Channel definitions and per-channel compilation state."""

from __future__ import annotations

from dataclasses import dataclass, field

SAMPLES_PER_WHOLE_NOTE_AT_1_BPM = 44100 * 60 * 4


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def calc_note_length(tempo: int, length: int, dots: int) -> int:
    """Length in samples of a note of value ``length`` with ``dots`` dots at ``tempo`` BPM."""
    if length == 0:
        return 0
    k = _tdiv(SAMPLES_PER_WHOLE_NOTE_AT_1_BPM, length)
    j = k
    for _ in range(dots):
        j = _tdiv(j, 2)
        k += j
    return _tdiv(k, tempo)


@dataclass
class Channel:
    """A channel assigned to a chip, with its accumulated MML text."""

    chip_name: str
    chip_sub: int
    chan_sub: int
    text: str = ""
    loop_point: int = -1
    duration: int = 0

    def append_text(self, text: str) -> None:
        self.text += text


@dataclass
class ChannelState:
    """Mutable state of a channel while its MML is being compiled."""

    octave: int = 4
    tempo: int = 120
    default_length: int = 0
    time: int = 0
    transpose: int = 0
    detune: int = 0
    quantize: int = 0
    current_note: int = -1
    current_length: int = 0
    active_macros: list[int] = field(default_factory=lambda: [-1] * 13)
    note_off_event: int = 0
    sample_list: int = -1
    phase: int = 0
    phase_count: int = 1

    @classmethod
    def for_tempo(cls, tempo: int) -> ChannelState:
        """Fresh state at ``tempo`` with a quarter note as the default length."""
        return cls(tempo=tempo, default_length=calc_note_length(tempo, 4, 0))