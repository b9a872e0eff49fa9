import io

import pytest

import mdtty.color
import mdtty.term
from mdtty.term import LinkCapability, MarkCapability, StyleCapability

NONE = mdtty.term.TerminalCapabilities.none()
ANSI = mdtty.term.TerminalCapabilities.ansi()
ITERM2 = mdtty.term.TerminalCapabilities.iterm2()
OSC8 = mdtty.term.TerminalCapabilities(
    style=StyleCapability.ANSI, links=LinkCapability.OSC8
)


class MockOStream(io.StringIO):
    def __init__(self, tty: bool):
        super().__init__()
        self.__tty = tty

    def isatty(self) -> bool:
        return self.__tty


class TestDetectCapabilities:
    @pytest.mark.parametrize(
        ("tty", "env", "expected"),
        [
            (True, {"TERM": "xterm-256color"}, ANSI),
            (True, {}, ANSI),
            (False, {"TERM": "xterm-256color"}, NONE),
            (True, {"TERM": "dumb"}, NONE),
            (False, {"TERM": "xterm", "FORCE_COLOR": "1"}, ANSI),
            (True, {"TERM": "dumb", "FORCE_COLOR": "1"}, ANSI),
            (True, {"TERM": "xterm", "NO_COLOR": "1"}, NONE),
            (True, {"TERM": "xterm", "FORCE_NO_COLOR": "1"}, NONE),
            (True, {"FORCE_COLOR": "1", "NO_COLOR": "1"}, NONE),
            (True, {"TERM": "xterm", "TERM_PROGRAM": "iTerm.app"}, ITERM2),
            (False, {"TERM": "xterm", "TERM_PROGRAM": "iTerm.app"}, NONE),
            (True, {"TERM": "xterm-kitty"}, OSC8),
            (True, {"TERM": "xterm", "VTE_VERSION": "6003"}, OSC8),
            (True, {"TERM": "xterm", "VTE_VERSION": "4601"}, ANSI),
            (True, {"TERM": "xterm", "VTE_VERSION": "garbage"}, ANSI),
        ],
    )
    def test_detect(self, tty, env, expected):
        capabilities = mdtty.term.detect_capabilities(MockOStream(tty), env=env)
        assert capabilities == expected

    def test_no_stream(self):
        capabilities = mdtty.term.detect_capabilities(env={"TERM": "xterm"})
        assert capabilities == ANSI


class TestEscapes:
    @pytest.mark.parametrize(
        ("color", "expected"),
        [
            (mdtty.color.Color.NONE, ""),
            (mdtty.color.Color.FORE_RED, "\x1b[31m"),
            (mdtty.color.Color.STYLE_BOLD, "\x1b[1m"),
            (mdtty.color.Color(bold=False, italic=False), ""),
            (
                mdtty.color.Color.STYLE_STRIKETHROUGH
                | mdtty.color.Color.STYLE_UNDERLINE
                | mdtty.color.Color.STYLE_ITALIC
                | mdtty.color.Color.STYLE_BOLD
                | mdtty.color.Color.FORE_WHITE,
                "\x1b[1;3;4;9;37m",
            ),
            (
                mdtty.color.Color.fore_from_rgb(1, 2, 3) | mdtty.color.Color.STYLE_ITALIC,
                "\x1b[3;38;2;1;2;3m",
            ),
        ],
    )
    def test_color_to_code(self, color, expected):
        assert mdtty.term.color_to_code(color) == expected

    def test_paint(self):
        assert (
            mdtty.term.paint(mdtty.color.Color.FORE_GREEN, "x") == "\x1b[32mx\x1b[0m"
        )
        assert mdtty.term.paint(mdtty.color.Color.NONE, "x") == "x"

    @pytest.mark.parametrize(
        ("capabilities", "expected"),
        [
            (NONE, "x"),
            (ANSI, "\x1b[34mx\x1b[0m"),
        ],
    )
    def test_write_styled(self, ostream, capabilities, expected):
        mdtty.term.write_styled(
            ostream, capabilities, mdtty.color.Color.FORE_BLUE, "x"
        )
        assert ostream.getvalue() == expected

    def test_links(self, ostream):
        mdtty.term.set_link_url(ostream, "http://example.com")
        ostream.write("x")
        mdtty.term.clear_link(ostream)
        assert ostream.getvalue() == "\x1b]8;;http://example.com\x1b\\x\x1b]8;;\x1b\\"

    @pytest.mark.parametrize(
        ("capabilities", "expected"),
        [
            (NONE, ""),
            (ANSI, ""),
            (
                mdtty.term.TerminalCapabilities(marks=MarkCapability.ITERM2),
                "\x1b]1337;SetMark\x07",
            ),
        ],
    )
    def test_set_mark(self, ostream, capabilities, expected):
        mdtty.term.set_mark(ostream, capabilities)
        assert ostream.getvalue() == expected


def test_terminal_size_default():
    size = mdtty.term.TerminalSize()
    assert (size.width, size.height) == (80, 24)


def test_terminal_size_detect(monkeypatch):
    monkeypatch.setenv("COLUMNS", "123")
    monkeypatch.setenv("LINES", "45")
    assert mdtty.term.TerminalSize.detect() == mdtty.term.TerminalSize(123, 45)
