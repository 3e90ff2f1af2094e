"""Rendering of errors raised by CLI commands."""

from typing import Any, NoReturn

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from careerecon.domain.exceptions import (
    ProviderApiError,
    ProviderHttpError,
    TransientFailure,
)

logger = structlog.get_logger(__name__)
console = Console(stderr=True)


def _hint_for(error: Exception) -> str | None:
    if isinstance(error, TransientFailure):
        return "The BLS API did not respond or is throttling requests. Try again later."
    if isinstance(error, ProviderHttpError):
        return f"The BLS API returned HTTP {error.status_code}."
    if isinstance(error, ProviderApiError):
        return "Check the series ids and year range; unregistered keys allow 10 years per query."
    if isinstance(error, ValidationError):
        return "Check the BLS_* environment variables."
    return None


def handle_cli_error(error: Exception, context: dict[str, Any] | None = None) -> NoReturn:
    """Print ``error`` as a panel and exit with status 1."""
    logger.debug(
        "CLI command failed",
        error=str(error),
        error_type=type(error).__name__,
        **(context or {}),
    )

    body = f"[bold]{type(error).__name__}[/bold]: {error}"
    hint = _hint_for(error)
    if hint:
        body += f"\n\n[dim]{hint}[/dim]"
    console.print(Panel(body, title="Error", border_style="red"))
    raise typer.Exit(code=1)
