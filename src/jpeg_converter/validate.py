"""Output verification helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from jpeg_converter.errors import ConversionError

logger = logging.getLogger(__name__)


def verify_output(output_path: Path) -> int:
    """Check that a conversion left a non-empty file behind.

    Parameters
    ----------
    output_path : Path
        Path the converter was asked to write.

    Returns
    -------
    int
        Size of the output in bytes.

    Raises
    ------
    ConversionError
        If the output is missing, not a regular file, or empty.
    """
    if not output_path.is_file():
        raise ConversionError("Output file is empty or missing")
    size = output_path.stat().st_size
    if size <= 0:
        raise ConversionError("Output file is empty or missing")
    return size


def remove_partial_output(output_path: Path) -> None:
    """Delete a just-written output so the next run retries the file."""
    if output_path.is_file():
        logger.debug("removing partial output %s", output_path)
        output_path.unlink(missing_ok=True)
