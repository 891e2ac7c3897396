from vgmck.gd3 import Gd3Metadata, encode_utf16, generate_gd3


def test_utf16_ascii():
    assert encode_utf16("ABC") == bytes([0x41, 0x00, 0x42, 0x00, 0x43, 0x00, 0x00, 0x00])


def test_utf16_japanese():
    assert encode_utf16("あ") == bytes([0x42, 0x30, 0x00, 0x00])


def test_utf16_outside_bmp_uses_surrogates():
    encoded = encode_utf16("\U0001F600")
    assert encoded[:-2].decode("utf-16-le") == "\U0001F600"
    assert len(encoded) == 6


def test_gd3_header_fields():
    data = generate_gd3(Gd3Metadata(title_en="Song"))
    assert data[:4] == b"Gd3 "
    assert data[4:8] == bytes([0x00, 0x01, 0x00, 0x00])
    assert int.from_bytes(data[8:12], "little") == len(data) - 12


def test_gd3_strings_round_trip():
    meta = Gd3Metadata(
        title_en="Title",
        title_jp="タイトル",
        game_en="Game",
        composer_en="Someone",
        date="2020",
        notes="line1\nline2",
    )
    body = generate_gd3(meta)[12:]
    parts = body.decode("utf-16-le").split("\x00")
    assert parts[-1] == ""
    assert tuple(parts[:-1]) == meta.strings()
    assert len(parts[:-1]) == 11