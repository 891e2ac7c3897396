# vgmck

Building blocks for turning MML (Music Macro Language) into VGM files,
the register-log format used to record sound-chip music, and a reader that
turns VGM files back into plain Python data.

The package has no dependencies outside the standard library.

## What is in it

Compiling side:

- `vgmck.channel`: the `Channel` and `ChannelState` dataclasses and
  `calc_note_length(tempo, length, dots)`, which turns a note value into a
  length in samples at 44100 Hz.
- `vgmck.envelope`: `MacroType` (volume, panning, tone, option, arpeggio
  and the other macro kinds, with their command names) and
  `MacroEnvelope`, a list of 16-bit values with a loop point, capped at
  2048 entries. `create_macro_env_storage()` gives 256 envelopes for each
  macro type.
- `vgmck.event`: `Event`, `ChipEvent` and `EventQueue`, which iterates its
  events in time order and, at equal times, in insertion order.
- `vgmck.note`: `NoteTable.calculate(...)`, which computes frequency or
  period values for a chip from 32 scale ratios and a base frequency, and
  `NoteTable.get(...)`, which shifts a value to an octave.
- `vgmck.sample`: `SampleLoader` for raw 8- or 16-bit PCM data from a file
  or from bytes (usable as a context manager), and `generate_sine`.

Writing side:

- `vgmck.delay`: `generate_delay(duration)` returns the bytes of the
  shortest sequence of VGM wait commands covering that many samples.
- `vgmck.gd3`: `Gd3Metadata`, `encode_utf16` and `generate_gd3`, which
  builds a GD3 tag of eleven UTF-16LE strings.
- `vgmck.header`: `VgmHeader`, the 192-byte version 1.61 header, and
  `HeaderOffset`, the positions of its fields.
- `vgmck.writer`: `VgmWriter`, which writes the header, command data, a
  loop point, the end marker and the GD3 tag to a file.

Reading side:

- `vgmck.commands`: `Opcode`, `VgmCommand`, `command_size` and
  `parse_command(data, pos)`.
- `vgmck.reader`: `VgmReader`, which parses the header (chip clocks and
  dual-chip flags included), the GD3 tag and the command stream.
- `vgmck.vgmjson`: `VgmJson`, a JSON view of a parsed file, with the helpers
  `format_version`, `header_to_dict`, `chip_to_dict` and `gd3_to_dict`.

The package's own errors are subclasses of `vgmck.errors.VgmckError`; a
malformed or truncated VGM file raises `VgmParseError`, and a bad sample
range raises `SampleError`.

## Examples

Wait commands and note lengths:

```python
from vgmck.channel import calc_note_length
from vgmck.delay import generate_delay

generate_delay(735)           # b"\x62", one 1/60 s wait
generate_delay(1000)          # b"\x61\xe8\x03", a 16-bit wait
calc_note_length(120, 4, 0)   # a quarter note at 120 BPM: 22050 samples
```

Writing a small VGM file:

```python
from vgmck.gd3 import Gd3Metadata
from vgmck.header import HeaderOffset
from vgmck.writer import VgmWriter

with VgmWriter("out.vgm") as writer:
    writer.set_chip_clock(HeaderOffset.SN76489_CLOCK, 3579545)
    writer.write_header()
    writer.write_data(bytes((0x50, 0x9F)))
    writer.write_delay(735)
    writer.set_total_samples(735)
    writer.finalize(Gd3Metadata(title_en="Test"))
```

Dumping a VGM file as JSON:

```python
from pathlib import Path

from vgmck.reader import VgmReader
from vgmck.vgmjson import VgmJson

reader = VgmReader(Path("song.vgm").read_bytes())
header = reader.parse_header()
gd3 = reader.parse_gd3(header)
commands = reader.parse_commands(header)

print(VgmJson.from_parsed(header, gd3, commands).to_json(indent=2))
```

The JSON holds the version as a string such as `"1.61"`, the header fields
that are not zero, the chips with their clocks, the GD3 strings that are
not empty, and one object per command, tagged by its `cmd` name.

## What it does not do

There is no MML parser and no sound-chip drivers here, so the package does
not compile an MML text into a VGM file by itself: the pieces above
(lengths, envelopes, events, note tables, wait encoding and the file
writer) have to be driven by your own code. There is also no command-line
tool.

## Tests

The tests use pytest, which is installed with the `test` extra.