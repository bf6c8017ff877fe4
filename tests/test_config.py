from __future__ import annotations

import pytest

from pdf_decrypt.config import (
    DEFAULT_BACKEND_ORDER,
    DEFAULT_TIMEOUT,
    MAX_TIMEOUT,
    DecryptSettings,
    executable_env_var,
    parse_backend_order,
    parse_timeout,
)
from pdf_decrypt.exceptions import ArgumentError

KNOWN = ("qpdf", "mutool", "ghostscript")


def test_parse_backend_order_normalises_names() -> None:
    assert parse_backend_order(" Mutool , qpdf ", KNOWN) == ("mutool", "qpdf")
    assert parse_backend_order(["ghostscript"], KNOWN) == ("ghostscript",)
    assert parse_backend_order("qpdf,,mutool,", KNOWN) == ("qpdf", "mutool")


@pytest.mark.parametrize(
    "value, message",
    [
        ("", "at least one backend"),
        (" , ", "at least one backend"),
        ("qpdf,QPDF", "more than once"),
        ("qpdf,pdftk", "Unknown backend"),
    ],
)
def test_parse_backend_order_rejects_bad_values(value: str, message: str) -> None:
    with pytest.raises(ArgumentError, match=message):
        parse_backend_order(value, KNOWN)


def test_parse_backend_order_without_known_list_accepts_anything() -> None:
    assert parse_backend_order("custom") == ("custom",)


@pytest.mark.parametrize("value, expected", [("5", 5.0), (2.5, 2.5), (10, 10.0)])
def test_parse_timeout(value, expected: float) -> None:
    assert parse_timeout(value) == expected


@pytest.mark.parametrize("value", ["0", "-1", "-inf", "soon", "nan", None])
def test_parse_timeout_rejects_invalid(value) -> None:
    with pytest.raises(ArgumentError):
        parse_timeout(value)


@pytest.mark.parametrize("value", ["inf", "1e309", "1e300", float("inf"), MAX_TIMEOUT + 1])
def test_parse_timeout_rejects_unbounded_values(value) -> None:
    with pytest.raises(ArgumentError, match="at most"):
        parse_timeout(value)


def test_parse_timeout_accepts_the_maximum() -> None:
    assert parse_timeout(MAX_TIMEOUT) == MAX_TIMEOUT


def test_executable_env_var() -> None:
    assert executable_env_var("qpdf") == "DECRYPT_PDF_QPDF_PATH"
    assert executable_env_var("ghostscript") == "DECRYPT_PDF_GHOSTSCRIPT_PATH"


def test_settings_defaults_with_empty_environment() -> None:
    settings = DecryptSettings.from_env({})
    assert settings.backends == DEFAULT_BACKEND_ORDER
    assert settings.timeout == DEFAULT_TIMEOUT


def test_settings_read_environment() -> None:
    settings = DecryptSettings.from_env(
        {"DECRYPT_PDF_BACKENDS": "ghostscript,qpdf", "DECRYPT_PDF_TIMEOUT": "12"}
    )
    assert settings.backends == ("ghostscript", "qpdf")
    assert settings.timeout == 12.0


def test_settings_reject_invalid_environment() -> None:
    with pytest.raises(ArgumentError):
        DecryptSettings.from_env({"DECRYPT_PDF_BACKENDS": "acrobat"})
