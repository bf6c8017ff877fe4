"""
Custom exceptions for decrypt-pdf.

Per-backend failures (missing tool, wrong password, unsupported encryption,
tool errors) are reported as :class:`~pdf_decrypt.types.BackendResult`
values. Only terminal conditions are raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .types import DecryptionOutcome


class PDFDecryptError(Exception):
    """Base exception for all decrypt-pdf errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown decrypt-pdf error occurred."


class ArgumentError(PDFDecryptError):
    """Raised when a request is invalid before any backend runs."""

    @property
    def default_message(self) -> str:
        return "Invalid arguments."


class PDFInspectionError(PDFDecryptError):
    """Raised when a document cannot be read by pypdf."""

    @property
    def default_message(self) -> str:
        return "Unable to read PDF document."


class ExhaustedBackendsError(PDFDecryptError):
    """Raised when every backend failed or none was available."""

    def __init__(self, outcome: "DecryptionOutcome", message: str = "") -> None:
        super().__init__(message)
        self.outcome = outcome

    @property
    def default_message(self) -> str:
        return "All decryption backends failed."


class DecryptionCancelledError(PDFDecryptError):
    """Raised when decryption is interrupted or the process is terminated."""

    @property
    def default_message(self) -> str:
        return "Decryption was cancelled."
