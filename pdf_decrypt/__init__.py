"""
decrypt-pdf - Remove password protection from PDF files.

The package tries external engines (qpdf, mutool, ghostscript) in priority
order and keeps the first successful result. Files that are not encrypted are
copied unchanged.

Quick Start:
    >>> from pdf_decrypt import decrypt_pdf
    >>> outcome = decrypt_pdf('secret.pdf', password='abc')
    >>> outcome.backend
    'qpdf'

Main API:
    - DecryptionOrchestrator: Runs the backend cascade for a request
    - decrypt: Run the cascade with the built-in backends
    - decrypt_pdf: Convenience wrapper raising on failure

Data Classes:
    - DecryptionRequest: Input, output, password, backend order and timeout
    - BackendResult: Outcome of a single backend attempt
    - DecryptionOutcome: Final result of the cascade

Exceptions:
    - PDFDecryptError: Base exception
    - ArgumentError: Invalid request
    - ExhaustedBackendsError: Every backend failed
    - DecryptionCancelledError: Interrupted run

For CLI usage, use the 'decrypt-pdf' command after installation.
"""

__version__ = "1.0.0"
__author__ = "decrypt-pdf Contributors"
__license__ = "MIT"

# Data types
from pdf_decrypt.types import (
    BackendOutcome,
    BackendResult,
    DecryptionOutcome,
    DecryptionRequest,
    FailureKind,
)

# Exceptions
from pdf_decrypt.exceptions import (
    PDFDecryptError,
    ArgumentError,
    PDFInspectionError,
    ExhaustedBackendsError,
    DecryptionCancelledError,
)

# Core API
from pdf_decrypt.orchestrator import DecryptionOrchestrator, decrypt, decrypt_pdf
from pdf_decrypt.security import is_pdf_encrypted

__all__ = [
    # Main API
    "DecryptionOrchestrator",
    "decrypt",
    "decrypt_pdf",
    "is_pdf_encrypted",
    # Data types
    "BackendOutcome",
    "BackendResult",
    "DecryptionOutcome",
    "DecryptionRequest",
    "FailureKind",
    # Exceptions
    "PDFDecryptError",
    "ArgumentError",
    "PDFInspectionError",
    "ExhaustedBackendsError",
    "DecryptionCancelledError",
    # Version info
    "__version__",
]
