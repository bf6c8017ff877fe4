"""Ghostscript backend: re-renders the document through ``pdfwrite``.

This is the most permissive and slowest engine, so it runs last by default.
The output is a regenerated PDF rather than a structural copy.
"""

from __future__ import annotations

from pathlib import Path

from .base import CommandBackend
from .registry import register_backend


def build_ghostscript_command(
    executable: str,
    source: Path,
    output: Path,
    password: str | None,
) -> list[str]:
    """Construct the Ghostscript ``pdfwrite`` command."""

    command = [
        executable,
        "-q",
        "-dNOPAUSE",
        "-dBATCH",
        "-dSAFER",
        "-sDEVICE=pdfwrite",
    ]
    if password is not None:
        command.append(f"-sPDFPassword={password}")
    command.extend([f"-sOutputFile={output}", str(source)])
    return command


GHOSTSCRIPT_BACKEND = register_backend(
    CommandBackend(
        name="ghostscript",
        executables=("gs", "gswin64c", "gswin32c"),
        build_command=build_ghostscript_command,
        password_signatures=(
            "password did not work",
            "requires a password",
            "invalid password",
        ),
        unsupported_signatures=(
            "unsupported encryption",
            "unrecognized encryption",
            "unknown security handler",
        ),
    )
)
