"""Encoding of sample delays as VGM wait commands."""

from __future__ import annotations

WAIT_NNNN = 0x61
WAIT_60TH = 0x62
WAIT_50TH = 0x63
END = 0x66
WAIT_N_BASE = 0x70

SAMPLES_60TH = 735
SAMPLES_50TH = 882
MAX_WAIT_NNNN = 65535


def _use_60th(duration: int) -> bool:
    return (
        735 <= duration <= 751
        or duration in (1470, 1617)
        or 65536 <= duration <= 67152
    )


def _use_50th(duration: int) -> bool:
    return 882 <= duration <= 898 or duration == 1764 or 67153 <= duration <= 67299


def generate_delay(duration: int) -> bytes:
    """Return the shortest run of wait commands covering ``duration`` samples."""
    out = bytearray()
    while duration > 0:
        if _use_60th(duration):
            out.append(WAIT_60TH)
            duration -= SAMPLES_60TH
        elif _use_50th(duration):
            out.append(WAIT_50TH)
            duration -= SAMPLES_50TH
        elif duration <= 16:
            out.append(WAIT_N_BASE + duration - 1)
            break
        elif duration <= 32:
            out.append(WAIT_N_BASE + 15)
            duration -= 16
        elif duration <= MAX_WAIT_NNNN:
            out += bytes((WAIT_NNNN,)) + duration.to_bytes(2, "little")
            break
        else:
            out += bytes((WAIT_NNNN, 0xFF, 0xFF))
            duration -= MAX_WAIT_NNNN
    return bytes(out)