"""mutool backend (mupdf-tools): rewrites the file with ``mutool clean -D``."""

from __future__ import annotations

from pathlib import Path

from .base import CommandBackend, password_flag
from .registry import register_backend


def build_mutool_command(executable: str, source: Path, output: Path, password: str | None) -> list[str]:
    """Construct the ``mutool clean`` command that drops encryption."""

    return [
        executable,
        "clean",
        "-D",
        *password_flag("-p", password),
        str(source),
        str(output),
    ]


MUTOOL_BACKEND = register_backend(
    CommandBackend(
        name="mutool",
        executables=("mutool",),
        build_command=build_mutool_command,
        password_signatures=(
            "cannot authenticate password",
            "invalid password",
            "needs a password",
        ),
        unsupported_signatures=(
            "unknown crypt",
            "unknown encryption",
            "unsupported",
        ),
    )
)
