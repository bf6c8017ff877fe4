"""
Command-line interface for decrypt-pdf.
"""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from typing import Sequence

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pdf_decrypt import __version__
from pdf_decrypt.backends import registry
from pdf_decrypt.config import (
    BACKENDS_ENV,
    DEFAULT_BACKEND_ORDER,
    DEFAULT_TIMEOUT,
    PASSWORD_ENV,
    TIMEOUT_ENV,
    parse_backend_order,
    parse_timeout,
)
from pdf_decrypt.exceptions import ArgumentError, DecryptionCancelledError, PDFDecryptError
from pdf_decrypt.orchestrator import DecryptionOrchestrator
from pdf_decrypt.types import DecryptionOutcome, DecryptionRequest, FailureKind
from pdf_decrypt.utils import configure_logging, default_output_path

console = Console(highlight=False)

EXIT_OK = 0
EXIT_GENERIC = 1
EXIT_WRONG_PASSWORD = 2
EXIT_UNSUPPORTED = 3
EXIT_NO_BACKEND = 4
EXIT_CANCELLED = 130

FAILURE_EXIT_CODES = {
    FailureKind.WRONG_PASSWORD: EXIT_WRONG_PASSWORD,
    FailureKind.UNSUPPORTED_ENCRYPTION: EXIT_UNSUPPORTED,
    FailureKind.NO_BACKEND: EXIT_NO_BACKEND,
    FailureKind.TOOL_ERROR: EXIT_GENERIC,
}

OUTCOME_STYLES = {
    "success": "green",
    "wrong_password": "red",
    "unsupported_encryption": "yellow",
    "tool_missing": "dim",
    "tool_error": "red",
}


def _parse_backends(ctx: click.Context, param: click.Parameter, value: str | None) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_BACKEND_ORDER
    try:
        return parse_backend_order(value, registry.names())
    except ArgumentError as exc:
        raise click.BadParameter(exc.message, ctx=ctx, param=param) from exc


def _parse_timeout(ctx: click.Context, param: click.Parameter, value: str | None) -> float:
    if value is None:
        return DEFAULT_TIMEOUT
    try:
        return parse_timeout(value)
    except ArgumentError as exc:
        raise click.BadParameter(exc.message, ctx=ctx, param=param) from exc


def _error(message: str) -> None:
    console.print(f"[bold red]✗ Error:[/bold red] {escape(message)}", soft_wrap=True)


def _failure_headline(kind: FailureKind | None, request: DecryptionRequest) -> str:
    if kind is FailureKind.WRONG_PASSWORD:
        if request.has_password:
            return "The supplied password was rejected."
        return "This PDF requires a password. Supply one with --password."
    if kind is FailureKind.UNSUPPORTED_ENCRYPTION:
        return "The PDF uses an encryption scheme none of the backends support."
    if kind is FailureKind.NO_BACKEND:
        return "No decryption backend is available. Install qpdf, mupdf-tools or ghostscript."
    return "All decryption backends failed."


def _report_success(outcome: DecryptionOutcome) -> None:
    output = escape(str(outcome.output_path))
    if outcome.passthrough:
        console.print("[bold green]✓ PDF is not encrypted; no decryption needed[/bold green]")
        console.print(f"[dim]Output:[/dim] {output}", soft_wrap=True)
        return
    console.print(f"[bold green]✓ Decrypted with[/bold green] {outcome.backend}")
    console.print(f"[dim]Output:[/dim] {output}", soft_wrap=True)


def _report_failure(outcome: DecryptionOutcome, request: DecryptionRequest) -> None:
    _error(_failure_headline(outcome.failure_kind, request))

    table = Table(title="Attempted backends")
    table.add_column("Backend", style="cyan", no_wrap=True)
    table.add_column("Outcome", no_wrap=True)
    table.add_column("Time", justify="right", no_wrap=True)
    table.add_column("Details", overflow="fold")

    for result in outcome.results:
        style = OUTCOME_STYLES.get(result.outcome.value, "white")
        table.add_row(
            result.backend,
            f"[{style}]{result.outcome.value}[/{style}]",
            f"{result.elapsed:.2f}s",
            escape(result.message or ""),
        )

    console.print()
    console.print(table)
    console.print()


def _print_backend_table() -> None:
    table = Table(title="Decryption backends")
    table.add_column("Order", justify="right")
    table.add_column("Backend", style="cyan", no_wrap=True)
    table.add_column("Executable", overflow="fold")
    table.add_column("Status", no_wrap=True)

    names = list(DEFAULT_BACKEND_ORDER) + [name for name in registry.names() if name not in DEFAULT_BACKEND_ORDER]
    for index, name in enumerate(names, 1):
        backend = registry.get(name)
        resolver = getattr(backend, "resolve_executable", None)
        executable = resolver() if resolver is not None else None
        status = "[green]available[/green]" if executable else "[dim]missing[/dim]"
        table.add_row(str(index), name, escape(executable or "-"), status)

    console.print(table)


@click.command(name="decrypt-pdf", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_pdf", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination PDF (default: INPUT-decrypted.pdf beside the input)",
)
@click.option(
    "--password", "-p",
    envvar=PASSWORD_ENV,
    help="Owner or user password for the PDF",
)
@click.option(
    "--ask-password",
    is_flag=True,
    help="Prompt for the password without echoing it",
)
@click.option(
    "--backends", "-b",
    envvar=BACKENDS_ENV,
    callback=_parse_backends,
    metavar="ORDER",
    help=f"Comma separated backend order (default: {','.join(DEFAULT_BACKEND_ORDER)})",
)
@click.option(
    "--timeout", "-t",
    envvar=TIMEOUT_ENV,
    callback=_parse_timeout,
    metavar="SECONDS",
    help=f"Per-backend timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
)
@click.option(
    "--list-backends",
    is_flag=True,
    help="Show which backends are installed and exit",
)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-vv for debug)")
@click.option("--quiet", "-q", is_flag=True, help="Hide non-error output")
@click.version_option(version=__version__, prog_name="decrypt-pdf", message="%(prog)s %(version)s")
def cli(input_pdf, output, password, ask_password, backends, timeout, list_backends, verbose, quiet):
    """
    Decrypt password-protected PDFs using a cascading strategy.

    Backends are tried in order (qpdf, mutool, ghostscript by default) until
    one succeeds. Unencrypted files are copied unchanged.

    Exit codes: 0 success, 1 error, 2 wrong password, 3 unsupported
    encryption, 4 no backend available.

    Examples:

        decrypt-pdf --password abc secret.pdf

        decrypt-pdf -p abc -o plain.pdf --backends mutool,qpdf secret.pdf
    """
    configure_logging(verbose)

    if list_backends:
        _print_backend_table()
        sys.exit(EXIT_OK)

    if input_pdf is None:
        raise click.UsageError("Missing argument 'INPUT_PDF'.")

    if ask_password and password is None:
        password = click.prompt("Password", hide_input=True)

    try:
        request = DecryptionRequest(
            input_path=input_pdf,
            output_path=output if output is not None else default_output_path(input_pdf),
            password=password,
            backends=backends,
            timeout=timeout,
        )
        outcome = DecryptionOrchestrator().decrypt(request)
    except DecryptionCancelledError as exc:
        _error(exc.message)
        sys.exit(EXIT_CANCELLED)
    except PDFDecryptError as exc:
        _error(exc.message)
        sys.exit(EXIT_GENERIC)
    except OSError as exc:
        _error(f"I/O failure: {exc}")
        sys.exit(EXIT_GENERIC)

    if outcome.success:
        if not quiet:
            _report_success(outcome)
        sys.exit(EXIT_OK)

    _report_failure(outcome, request)
    sys.exit(FAILURE_EXIT_CODES.get(outcome.failure_kind, EXIT_GENERIC))


def _raise_cancelled(signum, frame) -> None:
    raise DecryptionCancelledError(f"Terminated by signal {signum}")


def main(argv: Sequence[str] | None = None) -> None:
    """Console script entry point.

    Runs the click command outside standalone mode so usage errors map onto
    the generic exit code instead of click's default of 2, which is reserved
    for a wrong password.
    """
    previous = None
    try:
        previous = signal.signal(signal.SIGTERM, _raise_cancelled)
    except ValueError:  # pragma: no cover - not in the main thread
        previous = None

    try:
        exit_code = cli.main(args=argv, prog_name="decrypt-pdf", standalone_mode=False)
    except (click.exceptions.Abort, DecryptionCancelledError):
        _error("Aborted.")
        exit_code = EXIT_CANCELLED
    except click.ClickException as exc:
        exc.show()
        exit_code = EXIT_GENERIC
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)

    sys.exit(exit_code or EXIT_OK)


if __name__ == "__main__":  # pragma: no cover
    main()
