"""Backend protocol and the subprocess-driven backend implementation."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Protocol, Sequence

from ..config import executable_env_var
from ..exceptions import PDFInspectionError
from ..security import verify_decrypted
from ..types import BackendOutcome, BackendResult, DecryptionRequest
from ..utils import is_executable, mask_text, place_file, run_subprocess, scratch_directory, truncate, which

_LOGGER = logging.getLogger("pdf_decrypt.backends")

STAGED_NAME = "decrypted.pdf"

CommandBuilder = Callable[[str, Path, Path, str | None], list[str]]


class DecryptBackend(Protocol):
    """Protocol implemented by every decryption backend."""

    name: str

    def attempt(self, request: DecryptionRequest) -> BackendResult:
        """Try to decrypt ``request.input_path`` into ``request.output_path``."""


@dataclass(frozen=True)
class CommandBackend:
    """A backend that shells out to an external PDF engine.

    Backends differ only by data: the executables to look for, how the
    command line is built, which exit codes mean success and which messages
    identify a wrong password or an unsupported encryption scheme.
    """

    name: str
    executables: tuple[str, ...]
    build_command: CommandBuilder
    accepted_exit_codes: frozenset[int] = frozenset({0})
    password_signatures: tuple[str, ...] = ()
    unsupported_signatures: tuple[str, ...] = ()

    @property
    def env_var(self) -> str:
        return executable_env_var(self.name)

    def resolve_executable(self, environ: Mapping[str, str] | None = None) -> str | None:
        """Return the executable to run, or ``None`` when it is unavailable.

        An override in the environment takes precedence and is never
        substituted with a ``PATH`` lookup.
        """

        env = os.environ if environ is None else environ
        override = env.get(self.env_var)
        if override:
            if is_executable(override):
                return override
            _LOGGER.debug("%s=%s is not an executable file", self.env_var, override)
            return None
        return which(self.executables)

    def describe_missing(self, environ: Mapping[str, str] | None = None) -> str:
        env = os.environ if environ is None else environ
        override = env.get(self.env_var)
        if override:
            return f"{self.env_var} is not an executable file: {override}"
        return f"none of {', '.join(self.executables)} found on PATH"

    def classify_failure(self, output: str) -> BackendOutcome:
        """Map tool output from a failed run onto a :class:`BackendOutcome`."""

        lowered = output.lower()
        if any(signature in lowered for signature in self.password_signatures):
            return BackendOutcome.WRONG_PASSWORD
        if any(signature in lowered for signature in self.unsupported_signatures):
            return BackendOutcome.UNSUPPORTED_ENCRYPTION
        return BackendOutcome.TOOL_ERROR

    def attempt(self, request: DecryptionRequest) -> BackendResult:
        started = time.monotonic()

        def finish(outcome: BackendOutcome, message: str | None = None) -> BackendResult:
            if message:
                message = mask_text(message, request.password)
            return BackendResult(
                backend=self.name,
                outcome=outcome,
                message=message,
                elapsed=time.monotonic() - started,
            )

        executable = self.resolve_executable()
        if executable is None:
            return finish(BackendOutcome.TOOL_MISSING, self.describe_missing())

        with scratch_directory(request.output_path) as scratch:
            # Fixed name: gs expands % sequences in -sOutputFile.
            staged = scratch / STAGED_NAME
            command = self.build_command(executable, request.input_path, staged, request.password)
            _LOGGER.info("Trying %s on %s", self.name, request.input_path.name)
            try:
                completed = run_subprocess(
                    command,
                    timeout=request.timeout,
                    secret=request.password,
                )
            except subprocess.TimeoutExpired:
                return finish(BackendOutcome.TOOL_ERROR, f"timed out after {request.timeout:g}s")
            except (FileNotFoundError, PermissionError) as exc:
                return finish(BackendOutcome.TOOL_MISSING, f"unable to execute {executable}: {exc}")
            except OSError as exc:
                return finish(BackendOutcome.TOOL_ERROR, f"failed to start {executable}: {exc}")

            if completed.returncode in self.accepted_exit_codes:
                try:
                    verify_decrypted(staged)
                except PDFInspectionError as exc:
                    return finish(BackendOutcome.TOOL_ERROR, exc.message)
                place_file(staged, request.output_path)
                return finish(BackendOutcome.SUCCESS)

            output = f"{completed.stderr}\n{completed.stdout}"
            outcome = self.classify_failure(output)
            detail = truncate(completed.stderr) or truncate(completed.stdout)
            message = detail or f"exited with status {completed.returncode}"
            return finish(outcome, message)


def password_flag(flag: str, password: str | None) -> Sequence[str]:
    """Return ``[flag, password]`` or nothing when no password is set."""

    if password is None:
        return []
    return [flag, password]
