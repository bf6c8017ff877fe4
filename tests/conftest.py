from __future__ import annotations

import json
import logging
import os
import stat
import sys
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_decrypt.config import DEFAULT_BACKEND_ORDER, executable_env_var  # noqa: E402

PASSWORD = "abc"

# Stand-in for qpdf/mutool/gs. Behaviour is baked in when the script is
# written; every invocation is appended to a JSON-lines call log.
_FAKE_TOOL = """\
import json
import os
import shutil
import sys
import time

NAME = {name!r}
MODE = {mode!r}
PLAIN = {plain!r}
STDERR = {stderr!r}
EXIT_CODE = {exit_code!r}
LOG = {log!r}

args = sys.argv[1:]
with open(LOG, "a", encoding="utf-8") as handle:
    handle.write(json.dumps({{"tool": NAME, "args": args, "pid": os.getpid()}}) + "\\n")

output = args[-1]
source = args[-2]
for arg in args:
    if arg.startswith("-sOutputFile="):
        output = arg.split("=", 1)[1]
        source = args[-1]

if MODE == "success":
    shutil.copyfile(PLAIN, output)
elif MODE == "encrypted":
    shutil.copyfile(source, output)
elif MODE == "partial":
    with open(output, "wb") as handle:
        handle.write(b"%PDF-1.7 truncated")
elif MODE == "hang":
    time.sleep(60)
elif MODE == "empty":
    pass

if STDERR:
    sys.stderr.write(STDERR + "\\n")
sys.exit(EXIT_CODE)
"""

_DEFAULT_EXIT_CODES = {
    "success": 0,
    "encrypted": 0,
    "empty": 0,
    "hang": 0,
    "partial": 2,
    "fail": 2,
}


def _write_pdf(path: Path, *, password: str | None = None, pages: int = 2) -> Path:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "decrypt-pdf-tests", "/Title": "Sample"})
    if password is not None:
        writer.encrypt(user_password=password, owner_password=password)
    with path.open("wb") as stream:
        writer.write(stream)
    return path


@pytest.fixture(autouse=True)
def isolated_backends(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point every backend at a missing executable so host tools never run."""

    for name in DEFAULT_BACKEND_ORDER:
        monkeypatch.setenv(executable_env_var(name), str(tmp_path / "missing-tools" / name))
    for variable in ("DECRYPT_PDF_BACKENDS", "DECRYPT_PDF_TIMEOUT", "DECRYPT_PDF_PASSWORD"):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture()
def plain_pdf(tmp_path: Path) -> Path:
    return _write_pdf(tmp_path / "plain.pdf")


@pytest.fixture()
def encrypted_pdf(tmp_path: Path) -> Path:
    return _write_pdf(tmp_path / "secret.pdf", password=PASSWORD)


@pytest.fixture()
def reference_pdf(tmp_path: Path) -> Path:
    """Unencrypted document the fake tools hand back as their "decrypted" output."""

    fixtures = tmp_path / "fixtures"
    fixtures.mkdir(exist_ok=True)
    return _write_pdf(fixtures / "decrypted.pdf", pages=3)


@pytest.fixture()
def call_log(tmp_path: Path) -> Callable[[], list[dict]]:
    log = tmp_path / "calls.jsonl"

    def _read() -> list[dict]:
        if not log.exists():
            return []
        return [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines() if line]

    _read.path = log  # type: ignore[attr-defined]
    return _read


@pytest.fixture()
def fake_tool(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    reference_pdf: Path,
    call_log: Callable[[], list[dict]],
) -> Callable[..., Path]:
    if os.name == "nt":
        pytest.skip("fake executables rely on POSIX shebang scripts")

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _install(
        name: str,
        mode: str = "success",
        *,
        stderr: str = "",
        exit_code: int | None = None,
    ) -> Path:
        script = bin_dir / f"{name}_impl.py"
        script.write_text(
            _FAKE_TOOL.format(
                name=name,
                mode=mode,
                plain=str(reference_pdf),
                stderr=stderr,
                exit_code=_DEFAULT_EXIT_CODES.get(mode, 1) if exit_code is None else exit_code,
                log=str(call_log.path),  # type: ignore[attr-defined]
            ),
            encoding="utf-8",
        )
        wrapper = bin_dir / name
        wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n', encoding="utf-8")
        wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        monkeypatch.setenv(executable_env_var(name), str(wrapper))
        return wrapper

    return _install


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to streams captured by an earlier CLI invocation."""

    yield
    logger = logging.getLogger("pdf_decrypt")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
