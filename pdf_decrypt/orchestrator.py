"""Cascading decryption across the registered backends."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .backends import registry as default_registry
from .backends.registry import BackendRegistry
from .config import DecryptSettings, parse_backend_order, parse_timeout
from .exceptions import DecryptionCancelledError, ExhaustedBackendsError
from .security import detect_encryption
from .types import BackendOutcome, BackendResult, DecryptionOutcome, DecryptionRequest
from .utils import PathLike, copy_file, default_output_path

LOGGER = logging.getLogger("pdf_decrypt.orchestrator")


class DecryptionOrchestrator:
    """Try backends in order until one of them decrypts the document."""

    def __init__(self, backends: BackendRegistry | None = None) -> None:
        self.backends = backends if backends is not None else default_registry

    def decrypt(self, request: DecryptionRequest) -> DecryptionOutcome:
        """Run the cascade for *request*.

        Unencrypted input is copied to the output without running any
        backend. Otherwise backends run one at a time: the first success wins,
        a wrong supplied password stops the cascade, and every other failure
        moves on to the next backend.
        """

        selected = self.backends.resolve(request.backends)

        if detect_encryption(request.input_path) is False:
            LOGGER.info("%s is not encrypted; copying unchanged", request.input_path.name)
            copy_file(request.input_path, request.output_path)
            return DecryptionOutcome.passed_through(request.output_path)

        results: list[BackendResult] = []
        for backend in selected:
            try:
                result = backend.attempt(request)
            except KeyboardInterrupt as exc:
                raise DecryptionCancelledError(f"Interrupted while running {backend.name}") from exc
            results.append(result)
            LOGGER.info("%s finished in %.2fs: %s", result.backend, result.elapsed, result.outcome.value)

            if result.outcome is BackendOutcome.SUCCESS:
                return DecryptionOutcome.succeeded(result.backend, request.output_path, tuple(results))
            if result.outcome is BackendOutcome.WRONG_PASSWORD and request.has_password:
                LOGGER.info("%s rejected the supplied password; stopping", result.backend)
                break
            if result.outcome is BackendOutcome.TOOL_ERROR:
                LOGGER.warning("%s failed: %s", result.backend, result.message)

        return DecryptionOutcome.exhausted(tuple(results))


def decrypt(request: DecryptionRequest) -> DecryptionOutcome:
    """Decrypt *request* using the built-in backends."""

    return DecryptionOrchestrator().decrypt(request)


def decrypt_pdf(
    input: PathLike,
    output: PathLike | None = None,
    *,
    password: str | None = None,
    backends: str | Iterable[str] | None = None,
    timeout: float | None = None,
) -> DecryptionOutcome:
    """Convenience wrapper that raises :class:`ExhaustedBackendsError` on failure."""

    settings = DecryptSettings.from_env(known=default_registry.names())
    order = settings.backends
    if backends is not None:
        order = parse_backend_order(backends, default_registry.names())
    request = DecryptionRequest(
        input_path=Path(input),
        output_path=Path(output) if output is not None else default_output_path(input),
        password=password,
        backends=order,
        timeout=parse_timeout(timeout) if timeout is not None else settings.timeout,
    )
    outcome = decrypt(request)
    if not outcome.success:
        kind = outcome.failure_kind
        summary = "; ".join(str(result) for result in outcome.results)
        raise ExhaustedBackendsError(
            outcome,
            f"Decryption failed ({kind.value if kind else 'unknown'}): {summary}",
        )
    return outcome


__all__ = ["DecryptionOrchestrator", "decrypt", "decrypt_pdf"]
