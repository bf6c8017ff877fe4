"""Utility helpers for :mod:`pdf_decrypt`."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

_LOGGER = logging.getLogger("pdf_decrypt")

PathLike = str | os.PathLike[str]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbosity: int = 0) -> None:
    """Configure package-wide logging on stderr.

    ``0`` logs warnings only, ``1`` adds informational messages and ``2`` or
    more enables debug output.
    """

    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("pdf_decrypt")
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def resolve_path(path: PathLike) -> Path:
    """Resolve *path* into an absolute :class:`~pathlib.Path`."""

    resolved = Path(path).expanduser().resolve()
    _LOGGER.debug("Resolved path '%s' to '%s'", path, resolved)
    return resolved


def default_output_path(input_path: PathLike, suffix: str = "-decrypted") -> Path:
    """Return the output path used when none is given.

    ``secret.pdf`` becomes ``secret-decrypted.pdf`` in the same directory.
    """

    source = Path(input_path)
    extension = source.suffix or ".pdf"
    return source.with_name(f"{source.stem}{suffix}{extension}")


def which(executables: Sequence[str]) -> str | None:
    """Return the first executable from *executables* found on ``PATH``."""

    for candidate in executables:
        found = shutil.which(candidate)
        if found:
            _LOGGER.debug("Detected external tool: %s -> %s", candidate, found)
            return found
    return None


def is_executable(path: PathLike) -> bool:
    candidate = Path(path)
    return candidate.is_file() and os.access(candidate, os.X_OK)


def run_subprocess(
    command: Sequence[str],
    *,
    timeout: float,
    secret: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run *command* capturing output, killing it after *timeout* seconds.

    Parameters
    ----------
    command:
        Command and arguments to execute.
    timeout:
        Seconds to wait before the child is killed and
        :class:`subprocess.TimeoutExpired` is raised.
    secret:
        Value masked wherever the command or its output is logged.
    """

    _LOGGER.debug("Executing command: %s", " ".join(mask_secret(command, secret)))
    completed = subprocess.run(
        list(command),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        timeout=timeout,
        check=False,
        text=True,
        errors="replace",
    )
    _LOGGER.debug(
        "Command finished with exit code %s\nstdout: %s\nstderr: %s",
        completed.returncode,
        mask_text(completed.stdout, secret),
        mask_text(completed.stderr, secret),
    )
    return completed


@contextmanager
def scratch_directory(near: Path, prefix: str = ".decrypt-pdf-") -> Iterator[Path]:
    """Yield a private temporary directory beside *near*, removed on exit.

    Keeping scratch files on the destination's filesystem lets results be
    moved into place with an atomic rename.
    """

    directory = Path(tempfile.mkdtemp(prefix=prefix, dir=near.parent))
    try:
        yield directory
    finally:
        shutil.rmtree(directory, ignore_errors=True)


def place_file(source: Path, destination: Path) -> Path:
    """Atomically move *source* onto *destination*."""

    os.replace(source, destination)
    return destination


def copy_file(source: Path, destination: Path) -> Path:
    """Copy *source* to *destination* without exposing a partial file."""

    if source.resolve() == destination.resolve():
        _LOGGER.debug("Source and destination are the same file: %s", source)
        return destination
    with scratch_directory(destination) as scratch:
        staged = scratch / destination.name
        shutil.copy2(source, staged)
        return place_file(staged, destination)


def mask_secret(command: Sequence[str], secret: str | None, mask: str = "***") -> list[str]:
    """Return *command* with every occurrence of *secret* replaced."""

    return [mask_text(part, secret, mask) for part in command]


def mask_text(text: str, secret: str | None, mask: str = "***") -> str:
    if not secret:
        return text
    return text.replace(secret, mask)


def truncate(text: str, limit: int = 400) -> str:
    """Trim *text* and shorten it to at most *limit* characters."""

    cleaned = " ".join(text.split())
    if len(cleaned) <= limit:
        return cleaned
    return cleaned[: limit - 3] + "..."
