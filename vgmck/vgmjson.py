"""JSON representation of a parsed VGM file."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from .commands import VgmCommand
from .reader import ChipInfo, Gd3Info, VgmHeader

_OPTIONAL_HEADER_FIELDS = (
    "loop_offset",
    "loop_samples",
    "rate",
    "volume_modifier",
    "loop_base",
    "loop_modifier",
)


def format_version(version: int) -> str:
    """Format a BCD version number such as 0x161 as "1.61"."""
    major = (version >> 8) & 0xFF
    minor = version & 0xFF
    return f"{major}.{minor:02x}"


def chip_to_dict(info: ChipInfo) -> dict[str, Any]:
    """Clock, ``dual`` only when set, and any extra parameters inline."""
    out: dict[str, Any] = {"clock": info.clock}
    if info.dual:
        out["dual"] = True
    out.update(info.extra)
    return out


def header_to_dict(header: VgmHeader) -> dict[str, Any]:
    """Header fields; optional fields that are zero are left out."""
    out: dict[str, Any] = {"total_samples": header.total_samples}
    for name in _OPTIONAL_HEADER_FIELDS:
        value = getattr(header, name)
        if value != 0:
            out[name] = value
    out["chips"] = {name: chip_to_dict(info) for name, info in header.chips.items()}
    return out


def gd3_to_dict(gd3: Gd3Info) -> dict[str, str]:
    """GD3 fields that are not empty."""
    return {key: value for key, value in asdict(gd3).items() if value}


@dataclass
class VgmJson:
    """Version, header, optional GD3 tag and commands of a VGM file."""

    version: str
    header: dict[str, Any]
    gd3: dict[str, str] | None = None
    commands: list[VgmCommand] = field(default_factory=list)

    @classmethod
    def from_parsed(
        cls, header: VgmHeader, gd3: Gd3Info | None, commands: list[VgmCommand]
    ) -> VgmJson:
        return cls(
            version=format_version(header.version),
            header=header_to_dict(header),
            gd3=gd3_to_dict(gd3) if gd3 is not None else None,
            commands=list(commands),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"version": self.version, "header": self.header}
        if self.gd3 is not None:
            out["gd3"] = self.gd3
        out["commands"] = [command.to_dict() for command in self.commands]
        return out

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)