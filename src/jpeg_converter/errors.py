"""Exception taxonomy for batch JPEG conversion."""

from __future__ import annotations


class JpegConverterError(Exception):
    """Base error; ``exit_code`` is used by the CLI."""

    exit_code: int = 1


class PreconditionError(JpegConverterError):
    """Converter backend is missing; raised before any file is processed."""


class ConfigurationError(JpegConverterError):
    """Batch parameters failed validation."""


class ConversionError(JpegConverterError):
    """A single file could not be converted or failed verification."""
