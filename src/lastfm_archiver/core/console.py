"""Rich consoles for user-facing output.

Progress and summaries go to stdout; errors go to stderr. Log records are
handled separately by loguru (see output.py).
"""

from rich.console import Console

_consoles: dict[bool, Console] = {}


def get_console(stderr: bool = False) -> Console:
    """Return the shared console for stdout, or for stderr when asked."""
    if stderr not in _consoles:
        _consoles[stderr] = Console(stderr=stderr)
    return _consoles[stderr]


def safe_print(message: str, style: str | None = None) -> None:
    """Print a progress or summary line, optionally styled (e.g. "green")."""
    get_console().print(message, style=style)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    # markup off: error text may contain [brackets] from server responses
    get_console(stderr=True).print(
        message, style="red", markup=False, highlight=False
    )
