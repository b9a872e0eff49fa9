# Yuio project, MIT license.
#
# https://github.com/taminomara/yuio/
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Querying terminal info and writing ANSI escape sequences.

This is a low-level module upon which :mod:`mdtty.render` builds.


Terminal capabilities
---------------------

What the output sink supports is described by a :class:`TerminalCapabilities`
object. Each capability is independently present or absent:

.. autoclass:: StyleCapability
   :members:

.. autoclass:: LinkCapability
   :members:

.. autoclass:: MarkCapability
   :members:

.. autoclass:: TerminalCapabilities
   :members:

.. autoclass:: TerminalSize
   :members:

.. autofunction:: detect_capabilities


Writing escape sequences
------------------------

Every styled write goes through :func:`write_styled`:

.. autofunction:: write_styled

.. autofunction:: color_to_code

.. autofunction:: paint

.. autofunction:: set_link_url

.. autofunction:: clear_link

.. autofunction:: set_mark

"""

from __future__ import annotations

import enum
import os
import shutil
from dataclasses import dataclass

import mdtty
import mdtty.color
from mdtty import _typing as _t

__all__ = [
    "LinkCapability",
    "MarkCapability",
    "StyleCapability",
    "TerminalCapabilities",
    "TerminalSize",
    "clear_link",
    "color_to_code",
    "detect_capabilities",
    "paint",
    "set_link_url",
    "set_mark",
    "write_styled",
]


class StyleCapability(enum.Enum):
    """
    Terminal's capability for styling text.

    """

    NONE = enum.auto()
    """
    Plain text only, styles are not rendered.

    """

    ANSI = enum.auto()
    """
    Styles are rendered with ANSI SGR escape sequences.

    """


class LinkCapability(enum.Enum):
    """
    Terminal's capability for clickable hyperlinks.

    """

    NONE = enum.auto()
    """
    Links are rendered as references at the end of a section.

    """

    OSC8 = enum.auto()
    """
    Links are rendered in place with OSC 8 escape sequences.

    """


class MarkCapability(enum.Enum):
    """
    Terminal's capability for setting marks, i.e. jump targets in the scrollback.

    """

    NONE = enum.auto()
    """
    Marks are not supported.

    """

    ITERM2 = enum.auto()
    """
    Marks are set with iTerm2's proprietary escape sequence.

    """


@dataclass(frozen=True, slots=True)
class TerminalCapabilities:
    """
    Everything the output sink supports.

    Capabilities are fixed for the lifetime of one render.

    """

    style: StyleCapability = StyleCapability.NONE
    """
    Whether the terminal supports ANSI styling.

    """

    links: LinkCapability = LinkCapability.NONE
    """
    Whether the terminal supports clickable hyperlinks.

    """

    marks: MarkCapability = MarkCapability.NONE
    """
    Whether the terminal supports marks.

    """

    @classmethod
    def none(cls) -> TerminalCapabilities:
        """
        A terminal that supports nothing but plain text.

        """

        return cls()

    @classmethod
    def ansi(cls) -> TerminalCapabilities:
        """
        A terminal that only supports ANSI styling.

        """

        return cls(style=StyleCapability.ANSI)

    @classmethod
    def iterm2(cls) -> TerminalCapabilities:
        """
        Capabilities of iTerm2: styling, hyperlinks, and marks.

        """

        return cls(
            style=StyleCapability.ANSI,
            links=LinkCapability.OSC8,
            marks=MarkCapability.ITERM2,
        )


@dataclass(frozen=True, slots=True)
class TerminalSize:
    """
    Size of the terminal, in columns and rows.

    """

    width: int = 80
    """
    Number of columns.

    """

    height: int = 24
    """
    Number of rows.

    """

    @classmethod
    def detect(cls) -> TerminalSize:
        """
        Query size of the terminal via :func:`shutil.get_terminal_size`,
        falling back to 80x24.

        """

        size = shutil.get_terminal_size((80, 24))
        return cls(width=max(size.columns, 0), height=max(size.lines, 0))


def detect_capabilities(
    stream: _t.TextIO | None = None,
    /,
    *,
    env: _t.Mapping[str, str] | None = None,
) -> TerminalCapabilities:
    """
    Guess capabilities of a terminal attached to the given stream.

    Streams that are not attached to a TTY, and dumb terminals,
    get no capabilities at all. ``FORCE_COLOR`` forces styling on,
    ``NO_COLOR`` and ``FORCE_NO_COLOR`` force it off.

    :param stream:
        output stream. If not given, the stream is assumed to be a TTY.
    :param env:
        environment variables, defaults to :data:`os.environ`.

    """

    if env is None:
        env = os.environ

    explicit_color_settings = _detect_explicit_color_settings(env)
    if explicit_color_settings is False:
        mdtty._logger.debug("styling disabled by environment")
        return TerminalCapabilities.none()

    term = env.get("TERM", "").lower()
    if (stream is not None and not _output_is_tty(stream)) or term == "dumb":
        if explicit_color_settings:
            return TerminalCapabilities.ansi()
        return TerminalCapabilities.none()

    if env.get("TERM_PROGRAM", "") == "iTerm.app":
        capabilities = TerminalCapabilities.iterm2()
    elif term == "xterm-kitty" or _vte_version(env) >= 5000:
        capabilities = TerminalCapabilities(
            style=StyleCapability.ANSI, links=LinkCapability.OSC8
        )
    else:
        capabilities = TerminalCapabilities.ansi()

    mdtty._logger.debug("detected terminal capabilities: %r", capabilities)
    return capabilities


def _detect_explicit_color_settings(env: _t.Mapping[str, str]) -> bool | None:
    color_support = None

    if "FORCE_COLOR" in env:
        color_support = True

    if "NO_COLOR" in env or "FORCE_NO_COLOR" in env:
        color_support = False

    return color_support


def _vte_version(env: _t.Mapping[str, str]) -> int:
    try:
        return int(env.get("VTE_VERSION", ""))
    except ValueError:
        return 0


def _output_is_tty(stream: _t.TextIO | None) -> bool:
    try:
        return stream is not None and stream.isatty() and stream.writable()
    except Exception:  # pragma: no cover
        return False


_CSI = "\x1b["
_OSC = "\x1b]"
_ST = "\x1b\\"
_BEL = "\x07"
_RESET = _CSI + "0m"


def color_to_code(color: mdtty.color.Color, /) -> str:
    """
    Convert a color to an SGR escape sequence.

    Returns an empty string if the color sets nothing.

    :example:
        ::

            >>> color_to_code(mdtty.color.Color.FORE_BLUE | mdtty.color.Color.STYLE_BOLD)
            '\\x1b[1;34m'
            >>> color_to_code(mdtty.color.Color.fore_from_hex('#859900'))
            '\\x1b[38;2;133;153;0m'
            >>> color_to_code(mdtty.color.Color.NONE)
            ''

    """

    codes = []
    if color.bold:
        codes.append("1")
    if color.italic:
        codes.append("3")
    if color.underline:
        codes.append("4")
    if color.strikethrough:
        codes.append("9")
    if color.fore is not None:
        if isinstance(color.fore.data, tuple):
            r, g, b = color.fore.data
            codes.append(f"38;2;{r};{g};{b}")
        else:
            codes.append(f"3{color.fore.data}")
    if not codes:
        return ""
    return _CSI + ";".join(codes) + "m"


def paint(color: mdtty.color.Color, text: str, /) -> str:
    """
    Wrap text into escape sequences that apply the given color,
    and reset all attributes afterwards.

    """

    if code := color_to_code(color):
        return code + text + _RESET
    else:
        return text


def write_styled(
    stream: _t.TextIO,
    capabilities: TerminalCapabilities,
    color: mdtty.color.Color,
    text: str,
    /,
):
    """
    Write text to the stream, styling it if the terminal supports styles.

    """

    if capabilities.style is StyleCapability.ANSI:
        stream.write(paint(color, text))
    else:
        stream.write(text)


def set_link_url(stream: _t.TextIO, url: str, /):
    """
    Open a clickable hyperlink; text written after this call
    points to the given URL until :func:`clear_link` is called.

    """

    stream.write(f"{_OSC}8;;{url}{_ST}")


def clear_link(stream: _t.TextIO, /):
    """
    Close a hyperlink opened by :func:`set_link_url`.

    """

    stream.write(f"{_OSC}8;;{_ST}")


def set_mark(stream: _t.TextIO, capabilities: TerminalCapabilities, /):
    """
    Set a mark at the current position, if the terminal supports marks.

    """

    if capabilities.marks is MarkCapability.ITERM2:
        stream.write(f"{_OSC}1337;SetMark{_BEL}")
