"""Configuration defaults and environment overrides for decrypt-pdf."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Iterable, Mapping

from .exceptions import ArgumentError

DEFAULT_BACKEND_ORDER: tuple[str, ...] = ("qpdf", "mutool", "ghostscript")
DEFAULT_TIMEOUT = 30.0
# Huge waits overflow the selector timeout inside subprocess.run.
MAX_TIMEOUT = 24 * 60 * 60.0

ENV_PREFIX = "DECRYPT_PDF_"
BACKENDS_ENV = ENV_PREFIX + "BACKENDS"
TIMEOUT_ENV = ENV_PREFIX + "TIMEOUT"
PASSWORD_ENV = ENV_PREFIX + "PASSWORD"


def executable_env_var(backend: str) -> str:
    """Name of the variable overriding the executable for *backend*."""

    return f"{ENV_PREFIX}{backend.upper()}_PATH"


def parse_backend_order(text: str | Iterable[str], known: Iterable[str] | None = None) -> tuple[str, ...]:
    """Parse a comma separated backend order such as ``"mutool,qpdf"``."""

    if isinstance(text, str):
        items = text.split(",")
    else:
        items = list(text)
    names = tuple(item.strip().lower() for item in items if item and item.strip())
    if not names:
        raise ArgumentError("Backend order must name at least one backend")

    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ArgumentError(f"Backend listed more than once: {name}")
        seen.add(name)

    if known is not None:
        known_names = set(known)
        unknown = [name for name in names if name not in known_names]
        if unknown:
            raise ArgumentError(
                f"Unknown backend(s): {', '.join(unknown)}. "
                f"Choose from: {', '.join(sorted(known_names))}"
            )
    return names


def parse_timeout(value: str | float | int) -> float:
    """Return *value* as a positive number of seconds."""

    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"Timeout must be a number of seconds, got {value!r}") from exc
    if seconds != seconds or seconds <= 0:
        raise ArgumentError(f"Timeout must be positive, got {value!r}")
    if not math.isfinite(seconds) or seconds > MAX_TIMEOUT:
        raise ArgumentError(f"Timeout must be at most {MAX_TIMEOUT:g} seconds, got {value!r}")
    return seconds


@dataclass(frozen=True)
class DecryptSettings:
    """Defaults resolved from the environment."""

    backends: tuple[str, ...] = DEFAULT_BACKEND_ORDER
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        known: Iterable[str] = DEFAULT_BACKEND_ORDER,
    ) -> "DecryptSettings":
        env = os.environ if environ is None else environ
        known_names = tuple(known)

        backends = DEFAULT_BACKEND_ORDER
        raw_order = env.get(BACKENDS_ENV)
        if raw_order:
            backends = parse_backend_order(raw_order, known_names)

        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get(TIMEOUT_ENV)
        if raw_timeout:
            timeout = parse_timeout(raw_timeout)

        return cls(backends=backends, timeout=timeout)


__all__ = [
    "DEFAULT_BACKEND_ORDER",
    "DEFAULT_TIMEOUT",
    "MAX_TIMEOUT",
    "BACKENDS_ENV",
    "TIMEOUT_ENV",
    "PASSWORD_ENV",
    "DecryptSettings",
    "executable_env_var",
    "parse_backend_order",
    "parse_timeout",
]
