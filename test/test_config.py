import io

import mdtty.config
import mdtty.hl
import mdtty.term


def test_defaults():
    settings = mdtty.config.Settings()
    assert settings.terminal_capabilities == mdtty.term.TerminalCapabilities.none()
    assert settings.terminal_size == mdtty.term.TerminalSize(80, 24)
    assert isinstance(settings.highlight_theme, mdtty.hl.HighlightTheme)


def test_detect_not_a_tty(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_NO_COLOR", raising=False)
    settings = mdtty.config.Settings.detect(io.StringIO())
    assert settings.terminal_capabilities == mdtty.term.TerminalCapabilities.none()


def test_detect_forced_color(monkeypatch):
    monkeypatch.setenv("FORCE_COLOR", "1")
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_NO_COLOR", raising=False)
    monkeypatch.setenv("COLUMNS", "100")
    theme = mdtty.hl.HighlightTheme({"kwd": "#FF0000"})
    settings = mdtty.config.Settings.detect(io.StringIO(), highlight_theme=theme)
    assert settings.terminal_capabilities == mdtty.term.TerminalCapabilities.ansi()
    assert settings.terminal_size.width == 100
    assert settings.highlight_theme is theme
