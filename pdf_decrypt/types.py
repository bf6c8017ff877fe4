"""
Type definitions and dataclasses for decrypt-pdf.

This module defines the request, per-backend result and cascade outcome
structures passed between the CLI, the orchestrator and the backends.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import DEFAULT_BACKEND_ORDER, DEFAULT_TIMEOUT, parse_timeout
from .exceptions import ArgumentError


class BackendOutcome(str, Enum):
    """Normalised result of a single backend attempt."""

    SUCCESS = "success"
    WRONG_PASSWORD = "wrong_password"
    UNSUPPORTED_ENCRYPTION = "unsupported_encryption"
    TOOL_MISSING = "tool_missing"
    TOOL_ERROR = "tool_error"


class FailureKind(str, Enum):
    """Classification of an exhaustive cascade failure."""

    WRONG_PASSWORD = "wrong_password"
    UNSUPPORTED_ENCRYPTION = "unsupported_encryption"
    NO_BACKEND = "no_backend"
    TOOL_ERROR = "tool_error"


@dataclass(frozen=True)
class DecryptionRequest:
    """
    A single decryption job.

    Attributes:
        input_path: Encrypted (or possibly plain) source PDF
        output_path: Destination of the decrypted PDF
        password: Owner or user password, ``None`` for permissions-only files
        backends: Backend identifiers in the order they should be tried
        timeout: Per-backend subprocess timeout in seconds
    """
    input_path: Path
    output_path: Path
    password: str | None = None
    backends: tuple[str, ...] = DEFAULT_BACKEND_ORDER
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        input_path = Path(self.input_path).expanduser().resolve()
        output_path = Path(self.output_path).expanduser().resolve()
        object.__setattr__(self, "input_path", input_path)
        object.__setattr__(self, "output_path", output_path)
        object.__setattr__(self, "backends", tuple(self.backends))

        if not input_path.exists():
            raise ArgumentError(f"File not found: {input_path}")
        if not input_path.is_file():
            raise ArgumentError(f"Path is not a file: {input_path}")
        if not os.access(input_path, os.R_OK):
            raise ArgumentError(f"Cannot read file (permission denied): {input_path}")

        if output_path.is_dir():
            raise ArgumentError(f"Output path is a directory: {output_path}")
        parent = output_path.parent
        if not parent.is_dir():
            raise ArgumentError(f"Output directory does not exist: {parent}")
        if not os.access(parent, os.W_OK):
            raise ArgumentError(f"Cannot write to output directory (permission denied): {parent}")

        if not self.backends:
            raise ArgumentError("At least one backend must be selected")
        if len(set(self.backends)) != len(self.backends):
            raise ArgumentError(f"Duplicate backends in order: {', '.join(self.backends)}")
        object.__setattr__(self, "timeout", parse_timeout(self.timeout))

    @property
    def has_password(self) -> bool:
        return self.password is not None


@dataclass(frozen=True)
class BackendResult:
    """
    Result of one backend attempt.

    Attributes:
        backend: Identifier of the backend that produced the result
        outcome: Normalised outcome
        message: Diagnostic text, usually the tool's trimmed stderr
        elapsed: Wall time spent in the attempt, in seconds
    """
    backend: str
    outcome: BackendOutcome
    message: str | None = None
    elapsed: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.outcome is BackendOutcome.SUCCESS

    def __str__(self) -> str:
        if self.message:
            return f"{self.backend}: {self.outcome.value} ({self.message})"
        return f"{self.backend}: {self.outcome.value}"


@dataclass(frozen=True)
class DecryptionOutcome:
    """
    Final result of a full cascade.

    Attributes:
        success: Whether a decrypted document was produced
        results: Every backend result, in attempt order
        backend: Identifier of the winning backend
        output_path: Location of the decrypted document on success
        passthrough: The input was not encrypted and was copied unchanged
    """
    success: bool
    results: tuple[BackendResult, ...] = ()
    backend: str | None = None
    output_path: Path | None = None
    passthrough: bool = False

    @classmethod
    def succeeded(
        cls,
        backend: str,
        output_path: Path,
        results: tuple[BackendResult, ...] = (),
    ) -> "DecryptionOutcome":
        return cls(success=True, results=results, backend=backend, output_path=output_path)

    @classmethod
    def passed_through(cls, output_path: Path) -> "DecryptionOutcome":
        return cls(success=True, output_path=output_path, passthrough=True)

    @classmethod
    def exhausted(cls, results: tuple[BackendResult, ...]) -> "DecryptionOutcome":
        return cls(success=False, results=tuple(results))

    @property
    def failure_kind(self) -> FailureKind | None:
        """Classify an exhaustive failure; ``None`` for successful outcomes."""
        if self.success:
            return None
        outcomes = [result.outcome for result in self.results]
        if BackendOutcome.WRONG_PASSWORD in outcomes:
            return FailureKind.WRONG_PASSWORD
        available = [outcome for outcome in outcomes if outcome is not BackendOutcome.TOOL_MISSING]
        if not available:
            return FailureKind.NO_BACKEND
        if all(outcome is BackendOutcome.UNSUPPORTED_ENCRYPTION for outcome in available):
            return FailureKind.UNSUPPORTED_ENCRYPTION
        return FailureKind.TOOL_ERROR

    def __str__(self) -> str:
        if self.passthrough:
            return f"DecryptionOutcome(passthrough=True, output='{self.output_path}')"
        if self.success:
            return f"DecryptionOutcome(success=True, backend='{self.backend}')"
        kind = self.failure_kind
        return f"DecryptionOutcome(success=False, failure='{kind.value if kind else ''}')"
