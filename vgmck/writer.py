"""Writing VGM files: header, command stream and GD3 tag."""

from __future__ import annotations

import os
from typing import BinaryIO

from . import delay
from .gd3 import Gd3Metadata, generate_gd3
from .header import VGM_HEADER_SIZE, HeaderOffset, VgmHeader


class VgmWriter:
    """Writes a VGM file; the header is rewritten by ``finalize``."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file: BinaryIO = open(path, "wb")
        self.header = VgmHeader()
        self.position = VGM_HEADER_SIZE
        self.loop_offset: int | None = None

    def __enter__(self) -> VgmWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def write_header(self) -> None:
        self._file.seek(0)
        self._file.write(self.header.to_bytes())

    def set_chip_clock(self, offset: int, clock: int) -> None:
        self.header.write_u32(offset, clock)

    def set_total_samples(self, samples: int) -> None:
        self.header.write_u32(HeaderOffset.TOTAL_SAMPLES, samples)

    def set_loop_samples(self, samples: int) -> None:
        self.header.write_u32(HeaderOffset.LOOP_SAMPLES, samples)

    def set_rate(self, rate: int) -> None:
        self.header.write_u32(HeaderOffset.RATE, rate)

    def set_volume_modifier(self, vol: int) -> None:
        self.header.write_i8(HeaderOffset.VOLUME_MODIFIER, vol)

    def set_loop_base(self, base: int) -> None:
        self.header.write_i8(HeaderOffset.LOOP_BASE, base)

    def set_loop_modifier(self, modifier: int) -> None:
        self.header.write_u8(HeaderOffset.LOOP_MODIFIER, modifier)

    def mark_loop_start(self) -> None:
        self.loop_offset = self.position

    def write_data(self, data: bytes) -> None:
        self._file.seek(self.position)
        self._file.write(data)
        self.position += len(data)

    def write_byte(self, byte: int) -> None:
        self.write_data(bytes((byte & 0xFF,)))

    def write_delay(self, samples: int) -> None:
        self.write_data(delay.generate_delay(samples))

    def write_end(self) -> None:
        self.write_byte(delay.END)

    def finalize(self, metadata: Gd3Metadata) -> None:
        """Write the end marker and GD3 tag, fill in offsets and rewrite the header."""
        self.write_end()
        gd3_offset = self.position
        gd3_data = generate_gd3(metadata)
        if gd3_data:
            self.write_data(gd3_data)
            self.header.write_u32(HeaderOffset.GD3_OFFSET, gd3_offset - HeaderOffset.GD3_OFFSET)
        self.header.write_u32(HeaderOffset.EOF_OFFSET, self.position - HeaderOffset.EOF_OFFSET)
        if self.loop_offset is not None:
            self.header.write_u32(
                HeaderOffset.LOOP_OFFSET, self.loop_offset - HeaderOffset.LOOP_OFFSET
            )
        self.write_header()
        self._file.flush()