"""Contains utilities to conveniently log different information."""
from __future__ import annotations

import sys
from collections.abc import Callable
from typing import IO

from rich.console import Console


def make_logger(enabled: bool = True, *, file: IO[str] | None = None) -> Callable[..., None]:
    """Creates a new logging utility.

    The generated function can be used like a regular `print`, but writes through a rich `Console` so that
    markup and emoji render consistently.

    If `enabled` is `False`, calling the logging function does nothing. This allows components to keep their
    logging calls in place without re-checking whether logging is switched on.

    By default, all logging output is written to stderr.
    """
    if not enabled:
        return _dummy_log

    console = Console(file=file or sys.stderr, highlight=False)

    def _log(*args, **kwargs) -> None:
        console.print(*args, **kwargs)

    return _log


def _dummy_log(*args, **kwargs) -> None:
    pass
