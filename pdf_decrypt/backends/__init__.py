"""Backend abstractions for decrypt-pdf."""

from .base import CommandBackend, DecryptBackend
from .registry import BackendRegistry, register_backend, registry
from .qpdf_backend import QPDF_BACKEND, build_qpdf_command
from .mutool_backend import MUTOOL_BACKEND, build_mutool_command
from .ghostscript_backend import GHOSTSCRIPT_BACKEND, build_ghostscript_command

__all__ = [
    "BackendRegistry",
    "CommandBackend",
    "DecryptBackend",
    "GHOSTSCRIPT_BACKEND",
    "MUTOOL_BACKEND",
    "QPDF_BACKEND",
    "build_ghostscript_command",
    "build_mutool_command",
    "build_qpdf_command",
    "register_backend",
    "registry",
]
