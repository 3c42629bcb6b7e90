"""Shared type aliases for the batch converter modules."""

from __future__ import annotations

from typing import Literal

OutcomeStatus = Literal["converted", "skipped", "failed"]

SOURCE_EXTENSIONS: tuple[str, ...] = (".tif", ".tiff")
OUTPUT_SUFFIX = ".jpg"
