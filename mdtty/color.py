# Yuio project, MIT license.
#
# https://github.com/taminomara/yuio/
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Text foreground color and text style are defined by the :class:`Color` class.
It stores RGB components or ANSI color indices, and flags for every text
attribute the renderer knows about.

This module only describes styles; converting them to escape sequences
is done by :func:`mdtty.term.color_to_code`.

.. autoclass:: mdtty.color.Color
   :members:

.. autoclass:: mdtty.color.ColorValue
   :members:

"""

from __future__ import annotations

import re
import typing
from dataclasses import dataclass

__all__ = [
    "Color",
    "ColorValue",
]


@dataclass(frozen=True, slots=True)
class ColorValue:
    """
    Data about a single color.

    """

    data: int | tuple[int, int, int]
    """
    Color data.

    Can be one of two things:

    -   an int value represents an 8-bit color code (a value between ``0`` and ``7``).

        The actual color value for 8-bit color codes is controlled by the terminal's
        user. It results in a ``3x`` SGR parameter.

    -   an RGB-tuple represents a true color. It results in a ``38;2;r;g;b``
        SGR parameter sequence.

    """

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int, /) -> ColorValue:
        """
        Create a color value from rgb components.

        Each component should be between 0 and 255.

        :example:
            ::

                >>> ColorValue.from_rgb(0xA0, 0x1E, 0x9C)
                <ColorValue #A01E9C>

        """

        return cls((r, g, b))

    @classmethod
    def from_hex(cls, h: str, /) -> ColorValue:
        """
        Create a color value from a hex string.

        :raises:
            :class:`ValueError` if the string is not a valid ``#RRGGBB`` code.
        :example:
            ::

                >>> ColorValue.from_hex('#268BD2')
                <ColorValue #268BD2>

        """

        return cls(_parse_hex(h))

    def to_hex(self) -> str | None:
        """
        Return color in hex format with leading ``#``, or :data:`None`
        for 8-bit color codes.

        """

        rgb = self.to_rgb()
        if rgb is not None:
            return f"#{rgb[0]:02X}{rgb[1]:02X}{rgb[2]:02X}"
        else:
            return None

    def to_rgb(self) -> tuple[int, int, int] | None:
        """
        Return RGB components of the color.

        """

        if isinstance(self.data, tuple):
            return self.data
        else:
            return None

    def __repr__(self) -> str:
        if isinstance(self.data, tuple):
            return f"<ColorValue {self.to_hex()}>"
        else:
            return f"<ColorValue {self.data}>"


@dataclass(frozen=True)
class Color:
    """
    Data about terminal output style. Contains foreground color
    and text attributes.

    Every field can be :data:`None`, meaning that the field is not set.
    Colors can be combined; fields of the right-hand side color override
    fields of the left-hand side color::

        >>> Color.STYLE_BOLD | Color.FORE_BLUE  # Bold blue
        Color(fore=<ColorValue 4>, bold=True, italic=None, underline=None, strikethrough=None)

    There is no background color: the renderer never paints it.

    """

    fore: ColorValue | None = None
    """
    Foreground color.

    """

    bold: bool | None = None
    """
    If true, render text as bold.

    """

    italic: bool | None = None
    """
    If true, render text in italic font.

    """

    underline: bool | None = None
    """
    If true, render text as underline.

    """

    strikethrough: bool | None = None
    """
    If true, render text crossed out.

    """

    def __or__(self, other: Color, /):
        return Color(
            other.fore if other.fore is not None else self.fore,
            other.bold if other.bold is not None else self.bold,
            other.italic if other.italic is not None else self.italic,
            other.underline if other.underline is not None else self.underline,
            (
                other.strikethrough
                if other.strikethrough is not None
                else self.strikethrough
            ),
        )

    def __ior__(self, other: Color, /):
        return self | other

    @classmethod
    def fore_from_rgb(cls, r: int, g: int, b: int) -> Color:
        """
        Create a foreground color value from rgb components.

        Each component should be between 0 and 255.

        """

        return cls(fore=ColorValue.from_rgb(r, g, b))

    @classmethod
    def fore_from_hex(cls, h: str) -> Color:
        """
        Create a foreground color value from a hex string.

        :example:
            ::

                >>> Color.fore_from_hex('#859900')
                Color(fore=<ColorValue #859900>, bold=None, italic=None, underline=None, strikethrough=None)

        """

        return cls(fore=ColorValue.from_hex(h))

    NONE: typing.ClassVar[Color] = dict()  # type: ignore
    """
    No color.

    """

    STYLE_BOLD: typing.ClassVar[Color] = dict(bold=True)  # type: ignore
    """
    Bold font style.

    """

    STYLE_ITALIC: typing.ClassVar[Color] = dict(italic=True)  # type: ignore
    """
    Italic font style.

    """

    STYLE_UNDERLINE: typing.ClassVar[Color] = dict(underline=True)  # type: ignore
    """
    Underline font style.

    """

    STYLE_STRIKETHROUGH: typing.ClassVar[Color] = dict(strikethrough=True)  # type: ignore
    """
    Crossed out font style.

    """

    FORE_BLACK: typing.ClassVar[Color] = dict(fore=ColorValue(0))  # type: ignore
    """
    Black foreground color.

    """

    FORE_RED: typing.ClassVar[Color] = dict(fore=ColorValue(1))  # type: ignore
    """
    Red foreground color.

    """

    FORE_GREEN: typing.ClassVar[Color] = dict(fore=ColorValue(2))  # type: ignore
    """
    Green foreground color.

    """

    FORE_YELLOW: typing.ClassVar[Color] = dict(fore=ColorValue(3))  # type: ignore
    """
    Yellow foreground color.

    """

    FORE_BLUE: typing.ClassVar[Color] = dict(fore=ColorValue(4))  # type: ignore
    """
    Blue foreground color.

    """

    FORE_MAGENTA: typing.ClassVar[Color] = dict(fore=ColorValue(5))  # type: ignore
    """
    Magenta foreground color.

    """

    FORE_CYAN: typing.ClassVar[Color] = dict(fore=ColorValue(6))  # type: ignore
    """
    Cyan foreground color.

    """

    FORE_WHITE: typing.ClassVar[Color] = dict(fore=ColorValue(7))  # type: ignore
    """
    White foreground color.

    """


for _n, _v in vars(Color).copy().items():
    if _n == _n.upper():
        setattr(Color, _n, Color(**_v))
del _n, _v  # type: ignore


def _parse_hex(h: str) -> tuple[int, int, int]:
    if not re.match(r"^#[0-9a-fA-F]{6}$", h):
        raise ValueError(f"invalid hex string {h!r}")
    return tuple(int(h[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore
