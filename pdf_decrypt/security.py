"""Local PDF inspection helpers backed by :mod:`pypdf`."""

from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .exceptions import PDFInspectionError
from .utils import PathLike, resolve_path

LOGGER = logging.getLogger("pdf_decrypt.security")


def _open_reader(path: Path) -> PdfReader:
    try:
        return PdfReader(str(path))
    except FileNotFoundError as exc:
        raise PDFInspectionError(f"PDF not found: {path}") from exc
    except PdfReadError as exc:
        raise PDFInspectionError(f"Corrupted or invalid PDF: {path}. Error: {exc}") from exc
    except Exception as exc:  # pragma: no cover - pypdf exceptions vary
        raise PDFInspectionError(f"Unable to read PDF: {path}. Error: {exc}") from exc


def is_pdf_encrypted(path: PathLike) -> bool:
    """Return ``True`` when ``path`` points to an encrypted PDF document."""

    reader = _open_reader(resolve_path(path))
    return bool(reader.is_encrypted)


def detect_encryption(path: PathLike) -> bool | None:
    """Cheap encryption check.

    Returns ``True`` or ``False`` when pypdf can read the trailer, and ``None``
    when the document cannot be parsed locally.
    """

    try:
        return is_pdf_encrypted(path)
    except PDFInspectionError as exc:
        LOGGER.debug("Encryption check inconclusive for %s: %s", path, exc)
        return None


def verify_decrypted(path: PathLike) -> Path:
    """Ensure ``path`` is a non-empty, readable and unencrypted PDF."""

    pdf_path = resolve_path(path)
    if not pdf_path.is_file():
        raise PDFInspectionError(f"No output file was produced: {pdf_path.name}")
    if pdf_path.stat().st_size == 0:
        raise PDFInspectionError(f"Output file is empty: {pdf_path.name}")

    reader = _open_reader(pdf_path)
    if reader.is_encrypted:
        raise PDFInspectionError("Output is still encrypted")
    try:
        page_count = len(reader.pages)
    except Exception as exc:  # pragma: no cover - pypdf exceptions vary
        raise PDFInspectionError(f"Output has an unreadable page tree: {exc}") from exc
    LOGGER.debug("Verified %s (%d pages)", pdf_path, page_count)
    return pdf_path


__all__ = [
    "detect_encryption",
    "is_pdf_encrypted",
    "verify_decrypted",
]
