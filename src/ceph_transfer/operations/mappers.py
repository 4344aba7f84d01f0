"""
Error mapping and CLI utilities.

Provides centralized result-to-exit-code mapping and a CLI command wrapper
so Typer commands stay free of individual error handling.
"""
from __future__ import annotations

import typer
from typing import Callable, Any, TypeVar

from ..errors import ErrorKind
from ..result import Err

T = TypeVar('T')

EXIT_CODES = {
    ErrorKind.NOT_FOUND: 1,
    ErrorKind.CONNECTION: 3,
    ErrorKind.LISTING: 3,
    ErrorKind.TRANSFER: 4,
    ErrorKind.INTEGRITY: 5,
}

# Settings validation failures (ValueError)
CONFIG_EXIT_CODE = 2
FALLBACK_EXIT_CODE = 3


def exit_code_for(failure: Any) -> int:
    """
    Map an Err result or exception to a standardized exit code.

    - 0: Success
    - 1: Bucket or object not found
    - 2: Invalid configuration (ValueError)
    - 3: Connection or listing failure, or unknown error
    - 4: Upload/download failure
    - 5: Integrity failure (length mismatch)

    Args:
        failure: Err result, CephError or any other exception

    Returns:
        Exit code, 3 for anything unrecognised
    """
    kind = getattr(failure, "kind", None)
    if isinstance(kind, ErrorKind):
        return EXIT_CODES.get(kind, FALLBACK_EXIT_CODE)
    if isinstance(failure, ValueError):
        return CONFIG_EXIT_CODE
    return FALLBACK_EXIT_CODE


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes ``func`` and turns an ``Err`` result or a raised exception into
    ``typer.Exit`` with the mapped exit code.

    Raises:
        typer.Exit: With the mapped exit code on failure
    """
    try:
        result = func()
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=exit_code_for(e)) from e
    if isinstance(result, Err):
        typer.echo(f"Error ({result.kind.value}): {result.message}", err=True)
        raise typer.Exit(code=exit_code_for(result))
    return result
