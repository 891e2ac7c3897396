"""GD3 metadata tags."""

from __future__ import annotations

from dataclasses import astuple, dataclass

GD3_MAGIC = b"Gd3 "
GD3_VERSION = 0x00000100


@dataclass
class Gd3Metadata:
    """The eleven GD3 text fields, in tag order."""

    title_en: str = ""
    title_jp: str = ""
    game_en: str = ""
    game_jp: str = ""
    system_en: str = ""
    system_jp: str = ""
    composer_en: str = ""
    composer_jp: str = ""
    date: str = ""
    converter: str = ""
    notes: str = ""

    def strings(self) -> tuple[str, ...]:
        return astuple(self)


def encode_utf16(text: str) -> bytes:
    """Encode ``text`` as null-terminated UTF-16LE."""
    return text.encode("utf-16-le", errors="surrogatepass") + b"\x00\x00"


def generate_gd3(metadata: Gd3Metadata) -> bytes:
    """Build a complete GD3 tag: magic, version, size and the strings."""
    body = b"".join(encode_utf16(s) for s in metadata.strings())
    return (
        GD3_MAGIC
        + GD3_VERSION.to_bytes(4, "little")
        + len(body).to_bytes(4, "little")
        + body
    )