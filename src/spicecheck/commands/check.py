"""Command: spicecheck check - Ask SpiceDB whether a subject holds a permission."""

import asyncio
from typing import Annotated

import typer
from pydantic import SecretStr
from rich.console import Console
from rich.markup import escape

from spicecheck.constants import (
    EXIT_DENIED,
    EXIT_FAILED,
    EXIT_GRANTED,
    EXIT_INDETERMINATE,
    EXIT_UNRECOGNIZED,
    EXIT_USAGE,
)
from spicecheck.outcomes import CheckOutcome, OutcomeKind


console = Console()
err_console = Console(stderr=True)

EXIT_CODES = {
    OutcomeKind.GRANTED: EXIT_GRANTED,
    OutcomeKind.DENIED: EXIT_DENIED,
    OutcomeKind.INDETERMINATE: EXIT_INDETERMINATE,
    OutcomeKind.UNRECOGNIZED: EXIT_UNRECOGNIZED,
    OutcomeKind.FAILED: EXIT_FAILED,
}

STYLES = {
    OutcomeKind.GRANTED: "green",
    OutcomeKind.DENIED: "red",
    OutcomeKind.INDETERMINATE: "yellow",
    OutcomeKind.UNRECOGNIZED: "magenta",
    OutcomeKind.FAILED: "bold red",
}


def check(
    resource: str = typer.Argument(..., help="Resource as type:id (e.g., task:task-001)"),
    permission: str = typer.Argument(..., help="Permission to check (e.g., view)"),
    subject: str = typer.Argument(..., help="Subject as type:id (e.g., user:user-001)"),
    endpoint: Annotated[
        str | None,
        typer.Option("--endpoint", "-e", help="SpiceDB gRPC endpoint (host:port)"),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option("--token", "-t", help="SpiceDB preshared key"),
    ] = None,
    insecure: bool = typer.Option(False, "--insecure", help="Use a plaintext channel"),
    secure: bool = typer.Option(False, "--secure", help="Use a TLS channel"),
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Seconds to wait for a reply (0 waits forever)"),
    ] = None,
) -> None:
    """Check whether SUBJECT has PERMISSION on RESOURCE.

    The exit status tells the outcome apart: 0 granted, 1 denied,
    2 indeterminate, 3 unrecognized answer, 4 check failed.
    """
    from spicecheck.checker import Checker
    from spicecheck.config import Settings
    from spicecheck.errors import InvalidReferenceError, SpiceCheckError
    from spicecheck.logging import configure_logging
    from spicecheck.schemas import ObjectReference

    try:
        resource_ref = ObjectReference.parse(resource)
        subject_ref = ObjectReference.parse(subject)
    except InvalidReferenceError as e:
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(EXIT_USAGE) from None

    if not permission:
        err_console.print("[red]Error:[/red] Permission must not be empty")
        raise typer.Exit(EXIT_USAGE)

    overrides: dict[str, object] = {}
    if endpoint is not None:
        overrides["endpoint"] = endpoint
    if token is not None:
        overrides["token"] = SecretStr(token)
    if insecure and secure:
        err_console.print("[red]Error:[/red] --insecure and --secure are mutually exclusive")
        raise typer.Exit(EXIT_USAGE)
    if insecure or secure:
        overrides["insecure"] = insecure
    if timeout is not None:
        overrides["timeout"] = timeout

    try:
        settings = Settings(**overrides)
        configure_logging(settings)
    except (SpiceCheckError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from None

    async def run() -> CheckOutcome:
        async with Checker.from_settings(settings) as checker:
            return await checker.check(resource_ref, permission, subject_ref)

    outcome = asyncio.run(run())

    style = STYLES[outcome.kind]
    console.print(f"[{style}]{outcome.kind}[/{style}] {escape(outcome.message)}")
    raise typer.Exit(EXIT_CODES[outcome.kind])
