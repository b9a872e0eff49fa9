import io

import pytest

import mdtty.config
import mdtty.render
import mdtty.term
from mdtty import _typing as _t
from mdtty.events import Event

_WIDTH = 80


@pytest.fixture
def ostream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def capabilities() -> mdtty.term.TerminalCapabilities:
    return mdtty.term.TerminalCapabilities.none()


@pytest.fixture
def width() -> int:
    return _WIDTH


@pytest.fixture
def settings(
    capabilities: mdtty.term.TerminalCapabilities, width: int
) -> mdtty.config.Settings:
    return mdtty.config.Settings(
        terminal_capabilities=capabilities,
        terminal_size=mdtty.term.TerminalSize(width=width),
    )


@pytest.fixture
def render(
    settings: mdtty.config.Settings,
) -> _t.Callable[..., str]:
    def render(events: _t.Iterable[Event], base_dir: str = "/tmp/docs") -> str:
        return mdtty.render.render_to_string(events, settings, base_dir=base_dir)

    return render
