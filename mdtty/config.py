# mdtty project, MIT license.

"""
Settings for a single render.

Settings are passed to :func:`mdtty.render.render` explicitly. The default
settings describe a plain 80 columns wide terminal without any capabilities,
which makes output predictable. Use :meth:`Settings.detect` to guess settings
for an actual terminal::

    settings = mdtty.config.Settings.detect(sys.stdout)
    mdtty.render.render(events, sys.stdout, settings)

.. autoclass:: Settings
   :members:

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

import mdtty.hl
import mdtty.term
from mdtty import _typing as _t

__all__ = [
    "Settings",
]


@dataclass(frozen=True, kw_only=True)
class Settings:
    """
    Settings for markdown rendering.

    """

    terminal_capabilities: mdtty.term.TerminalCapabilities = dataclasses.field(
        default_factory=mdtty.term.TerminalCapabilities.none
    )
    """
    Capabilities of the terminal we're writing to.

    """

    terminal_size: mdtty.term.TerminalSize = dataclasses.field(
        default_factory=mdtty.term.TerminalSize
    )
    """
    Size of the terminal we're writing to. Rules span the whole width.

    """

    highlight_theme: mdtty.hl.HighlightTheme = dataclasses.field(
        default_factory=mdtty.hl.HighlightTheme
    )
    """
    Colors for highlighting code blocks.

    """

    @classmethod
    def detect(
        cls,
        stream: _t.TextIO | None = None,
        /,
        *,
        highlight_theme: mdtty.hl.HighlightTheme | None = None,
    ) -> Settings:
        """
        Guess settings for a terminal attached to the given stream.

        See :func:`mdtty.term.detect_capabilities` for details.

        """

        return cls(
            terminal_capabilities=mdtty.term.detect_capabilities(stream),
            terminal_size=mdtty.term.TerminalSize.detect(),
            highlight_theme=highlight_theme or mdtty.hl.HighlightTheme(),
        )
