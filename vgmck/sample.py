"""Loading raw PCM sample data and generating sine samples."""

from __future__ import annotations

import math
import os
from collections.abc import Iterable
from typing import BinaryIO

from .errors import SampleError

_I16_MIN = -0x8000
_I16_MAX = 0x7FFF


def _saturate_i16(value: float) -> int:
    if value != value:
        return 0
    return max(_I16_MIN, min(_I16_MAX, int(value)))


def _to_i16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


class SampleLoader:
    """Source of PCM samples, backed by a raw file or by bytes in memory.

    ``bit_file`` is 8 or 16 bits per sample, negative for signed data.
    """

    def __init__(
        self,
        *,
        bits: int,
        clock: int = 0,
        file: BinaryIO | None = None,
        data: bytes | None = None,
    ) -> None:
        self.id = 0
        self.bit_file = bits
        self.bit_conv = bits
        self.big_endian = False
        self.count = 0
        self.loop_mode = 0
        self.loop_start = 0
        self.loop_end = 0
        self.clock = clock
        self.header_size = 0
        self._file = file
        self._data = data
        self._data_start = 0

    @property
    def sample_size(self) -> int:
        return 2 if abs(self.bit_file) == 16 else 1

    @classmethod
    def open(cls, path: str | os.PathLike[str], clock: int, bits: int) -> SampleLoader:
        """Open a raw sample file; the whole file is sample data."""
        handle = open(path, "rb")
        loader = cls(bits=bits, clock=clock, file=handle)
        size = handle.seek(0, os.SEEK_END)
        handle.seek(0)
        loader.count = size // loader.sample_size
        return loader

    @classmethod
    def from_data(cls, data: bytes, bits: int) -> SampleLoader:
        loader = cls(bits=bits, data=bytes(data))
        loader.count = len(loader._data) // loader.sample_size
        return loader

    def read(self, start: int, count: int) -> bytes:
        """Return the raw bytes of ``count`` samples beginning at sample ``start``."""
        size = self.sample_size
        offset = self._data_start + start * size
        length = count * size
        if start < 0 or count < 0:
            raise SampleError("negative sample range")
        if self._file is not None:
            self._file.seek(offset)
            chunk = self._file.read(length)
            if len(chunk) != length:
                raise SampleError("unexpected end of sample file")
            return chunk
        if self._data is not None:
            if offset + length > len(self._data):
                raise SampleError("sample range out of bounds")
            return self._data[offset:offset + length]
        raise SampleError("No file handle")

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> SampleLoader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def generate_sine(length: int, amplitudes: Iterable[tuple[float, float]], signed: bool) -> list[int]:
    """Sum of sines given as ``(amplitude, period)`` pairs, as 16-bit samples.

    Sums saturate at the 16-bit range; unsigned output flips the sign bit.
    """
    out = [0] * length
    for amplitude, period in amplitudes:
        step = math.tau / period
        out = [
            max(_I16_MIN, min(_I16_MAX, sample + _saturate_i16(math.sin(step * i) * amplitude)))
            for i, sample in enumerate(out)
        ]
    if not signed:
        out = [_to_i16(sample ^ 0x8000) for sample in out]
    return out