# Yuio project, MIT license.
#
# https://github.com/taminomara/yuio/
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Mdtty renders a stream of markdown events to a terminal.

It consumes structural events (see :mod:`mdtty.events`) produced by an external
markdown parser, and writes styled text to an output stream, using whatever
the terminal supports: ANSI colors, OSC 8 hyperlinks, and iTerm2 marks.

.. autofunction:: mdtty.render.render

.. autoclass:: mdtty.config.Settings
   :members:


Debugging
---------

Set ``MDTTY_DEBUG`` or ``MDTTY_DEBUG_FILE`` environment variables to log every
state transition of the renderer.

.. autofunction:: enable_internal_logging

"""

from __future__ import annotations

import logging as _logging
import os as _os
import sys as _sys
import warnings

__all__ = [
    "MdttyWarning",
    "enable_internal_logging",
]

__version__ = "0.1.0"


class MdttyWarning(RuntimeWarning):
    """
    Base class for all runtime warnings.

    """


_logger = _logging.getLogger("mdtty.internal")
_logger.propagate = False

__stderr_handler = _logging.StreamHandler(_sys.__stderr__)
__stderr_handler.setLevel("CRITICAL")
_logger.addHandler(__stderr_handler)


def enable_internal_logging(
    path: str | None = None, level: str | int | None = None, propagate=None
):  # pragma: no cover
    """
    Enable Mdtty's internal logging.

    This function enables :func:`logging.captureWarnings`, and enables printing
    of :class:`MdttyWarning` messages, and sets up logging channels ``mdtty.internal``
    and ``py.warning``.

    :param path:
        if given, adds handlers that output internal log messages to the given file.
    :param level:
        configures logging level for file handler. Default is ``DEBUG``.
    :param propagate:
        if given, enables or disables log message propagation from ``mdtty.internal``
        and ``py.warning`` to the root logger.

    """

    if path:
        if level is None:
            level = _os.environ.get("MDTTY_DEBUG", "").strip().upper() or "DEBUG"
        if level in ["1", "Y", "YES", "TRUE"]:
            level = "DEBUG"
        file_handler = _logging.FileHandler(path, delay=True)
        file_handler.setFormatter(
            _logging.Formatter("%(filename)s:%(lineno)d: %(levelname)s: %(message)s")
        )
        file_handler.setLevel(level)
        _logger.setLevel(level)
        _logger.addHandler(file_handler)
        _logging.getLogger("py.warnings").addHandler(file_handler)

    _logging.captureWarnings(True)
    warnings.simplefilter("default", category=MdttyWarning)

    if propagate is not None:
        _logging.getLogger("py.warnings").propagate = propagate
        _logger.propagate = propagate


_debug = "MDTTY_DEBUG" in _os.environ or "MDTTY_DEBUG_FILE" in _os.environ
if _debug:  # pragma: no cover
    enable_internal_logging(
        path=_os.environ.get("MDTTY_DEBUG_FILE") or "mdtty.log", propagate=False
    )
