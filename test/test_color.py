import pytest

import mdtty.color


@pytest.mark.parametrize(
    ("color", "expect"),
    [
        (mdtty.color.Color.NONE | mdtty.color.Color.NONE, mdtty.color.Color.NONE),
        (
            mdtty.color.Color.NONE | mdtty.color.Color.FORE_RED,
            mdtty.color.Color.FORE_RED,
        ),
        (
            mdtty.color.Color.FORE_BLUE | mdtty.color.Color.FORE_RED,
            mdtty.color.Color.FORE_RED,
        ),
        (
            mdtty.color.Color.FORE_RED | mdtty.color.Color.STYLE_BOLD,
            mdtty.color.Color(fore=mdtty.color.ColorValue(1), bold=True),
        ),
        (
            mdtty.color.Color.STYLE_BOLD | mdtty.color.Color.FORE_RED,
            mdtty.color.Color(fore=mdtty.color.ColorValue(1), bold=True),
        ),
        (
            mdtty.color.Color.STYLE_ITALIC | mdtty.color.Color(italic=False),
            mdtty.color.Color(italic=False),
        ),
        (
            mdtty.color.Color(italic=False) | mdtty.color.Color.NONE,
            mdtty.color.Color(italic=False),
        ),
        (
            mdtty.color.Color.FORE_GREEN
            | mdtty.color.Color.STYLE_ITALIC
            | mdtty.color.Color.STYLE_STRIKETHROUGH
            | mdtty.color.Color.STYLE_UNDERLINE,
            mdtty.color.Color(
                fore=mdtty.color.ColorValue(2),
                italic=True,
                underline=True,
                strikethrough=True,
            ),
        ),
    ],
)
def test_combine(color, expect):
    assert color == expect


def test_ior():
    color = mdtty.color.Color.FORE_RED
    color |= mdtty.color.Color.STYLE_BOLD
    assert color == mdtty.color.Color(fore=mdtty.color.ColorValue(1), bold=True)


@pytest.mark.parametrize(
    ("h", "rgb"),
    [
        ("#000000", (0, 0, 0)),
        ("#FFFFFF", (255, 255, 255)),
        ("#859900", (0x85, 0x99, 0x00)),
        ("#cb4b16", (0xCB, 0x4B, 0x16)),
    ],
)
def test_from_hex(h, rgb):
    value = mdtty.color.ColorValue.from_hex(h)
    assert value.to_rgb() == rgb
    assert value.to_hex() == h.upper()
    assert mdtty.color.Color.fore_from_hex(h) == mdtty.color.Color.fore_from_rgb(*rgb)


@pytest.mark.parametrize("h", ["", "859900", "#85990", "#8599000", "#GGGGGG"])
def test_from_hex_invalid(h):
    with pytest.raises(ValueError, match="invalid hex string"):
        mdtty.color.ColorValue.from_hex(h)


def test_eight_bit_value():
    value = mdtty.color.ColorValue(4)
    assert value.to_rgb() is None
    assert value.to_hex() is None
    assert repr(value) == "<ColorValue 4>"
