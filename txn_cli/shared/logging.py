"""Rich-based logging helpers shared across CLI tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False)

_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "debug": "dim",
    }
)

# stdout carries CSV/JSON payloads; everything chatty goes to stderr.
# Highlighting stays off so amounts like "$1,234.56" are never split by ANSI codes.
_stdout_console = Console(theme=_THEME, highlight=False)
_stderr_console = Console(stderr=True, theme=_THEME, highlight=False)
_verbose_console = Console(stderr=True, theme=_THEME, highlight=False)

_LIBRARY_LOGGER = "txn_cli"


@dataclass(slots=True)
class Logger:
    """Lightweight logger facade backed by Rich consoles."""

    verbose: bool = False

    @property
    def console(self) -> Console:
        return _stdout_console

    def info(self, message: str) -> None:
        _stderr_console.print(message, style="info", markup=False)

    def success(self, message: str) -> None:
        _stderr_console.print(message, style="success", markup=False)

    def warning(self, message: str) -> None:
        _stderr_console.print(message, style="warning", markup=False)

    def error(self, message: str) -> None:
        _stderr_console.print(message, style="error", markup=False)

    def debug(self, message: str) -> None:
        if self.verbose:
            _verbose_console.print(message, style="debug", markup=False)


def configure_library_logging(verbose: bool = False) -> logging.Logger:
    """Route ``txn_cli.*`` stdlib loggers to stderr through Rich.

    Library modules log structural skips (rejected rows, non-ledger tables) at
    DEBUG; those only surface when ``--verbose`` is given.
    """

    library_logger = logging.getLogger(_LIBRARY_LOGGER)
    library_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in library_logger.handlers):
        handler = RichHandler(
            console=_verbose_console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        library_logger.addHandler(handler)
    return library_logger


def get_logger(verbose: bool = False) -> Logger:
    """Return a configured Logger instance."""
    configure_library_logging(verbose)
    return Logger(verbose=verbose)
