from __future__ import annotations

from pathlib import Path

import pytest

from pdf_decrypt.exceptions import PDFInspectionError
from pdf_decrypt.security import detect_encryption, is_pdf_encrypted, verify_decrypted


def test_is_pdf_encrypted(plain_pdf: Path, encrypted_pdf: Path) -> None:
    assert is_pdf_encrypted(plain_pdf) is False
    assert is_pdf_encrypted(encrypted_pdf) is True


def test_is_pdf_encrypted_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PDFInspectionError):
        is_pdf_encrypted(tmp_path / "absent.pdf")


def test_detect_encryption_is_inconclusive_for_garbage(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.pdf"
    bogus.write_text("definitely not a pdf")
    assert detect_encryption(bogus) is None


def test_detect_encryption(plain_pdf: Path, encrypted_pdf: Path) -> None:
    assert detect_encryption(plain_pdf) is False
    assert detect_encryption(encrypted_pdf) is True


def test_verify_decrypted_accepts_plain_pdf(plain_pdf: Path) -> None:
    assert verify_decrypted(plain_pdf) == plain_pdf.resolve()


def test_verify_decrypted_rejects_missing_output(tmp_path: Path) -> None:
    with pytest.raises(PDFInspectionError, match="No output file"):
        verify_decrypted(tmp_path / "absent.pdf")


def test_verify_decrypted_rejects_empty_output(tmp_path: Path) -> None:
    empty = tmp_path / "empty.pdf"
    empty.write_bytes(b"")
    with pytest.raises(PDFInspectionError, match="empty"):
        verify_decrypted(empty)


def test_verify_decrypted_rejects_encrypted_output(encrypted_pdf: Path) -> None:
    with pytest.raises(PDFInspectionError, match="still encrypted"):
        verify_decrypted(encrypted_pdf)


def test_verify_decrypted_rejects_garbage(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.pdf"
    bogus.write_text("definitely not a pdf")
    with pytest.raises(PDFInspectionError):
        verify_decrypted(bogus)
