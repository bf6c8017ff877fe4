"""qpdf backend: lossless structural decryption."""

from __future__ import annotations

from pathlib import Path

from .base import CommandBackend
from .registry import register_backend


def build_qpdf_command(executable: str, source: Path, output: Path, password: str | None) -> list[str]:
    """Construct the qpdf decryption command."""

    command = [executable, "--decrypt"]
    if password is not None:
        command.append(f"--password={password}")
    command.extend([str(source), str(output)])
    return command


# Exit status 3 means qpdf wrote the file but reported warnings.
QPDF_BACKEND = register_backend(
    CommandBackend(
        name="qpdf",
        executables=("qpdf",),
        build_command=build_qpdf_command,
        accepted_exit_codes=frozenset({0, 3}),
        password_signatures=("invalid password",),
        unsupported_signatures=(
            "unsupported encryption",
            "unknown security handler",
            "not supported",
        ),
    )
)
