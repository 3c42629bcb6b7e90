"""Public directory-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jpeg_converter.adapters.converters import create_converter
from jpeg_converter.application.options import (
    DEFAULT_SOURCE_DIR,
    preview_batch,
    shopify_batch,
)
from jpeg_converter.application.ports import ProgressReporter
from jpeg_converter.application.results import RunSummary
from jpeg_converter.application.use_cases import build_batch_options, run_batch


def create_previews(
    source_dir: Path = DEFAULT_SOURCE_DIR,
    backend: str = "magick",
    reporter: Optional[ProgressReporter] = None,
) -> RunSummary:
    """Write quality-85, max-1200px preview JPEGs next to the source TIFFs."""
    return run_batch(
        preview_batch(source_dir),
        converter=create_converter(backend),
        reporter=reporter,
    )


def create_shopify_images(
    source_dir: Path = DEFAULT_SOURCE_DIR,
    output_dir: Optional[Path] = None,
    backend: str = "magick",
    reporter: Optional[ProgressReporter] = None,
) -> RunSummary:
    """Write full-resolution quality-98 sRGB JPEGs into ``<source>/shopify``."""
    return run_batch(
        shopify_batch(source_dir, output_dir),
        converter=create_converter(backend),
        reporter=reporter,
    )


def convert_directory(
    source_dir: Path,
    output_dir: Optional[Path] = None,
    quality: int = 85,
    max_width: Optional[int] = None,
    normalize_colorspace: bool = False,
    backend: str = "magick",
    reporter: Optional[ProgressReporter] = None,
) -> RunSummary:
    """Convert every TIFF in ``source_dir`` with ad-hoc parameters."""
    batch = build_batch_options(
        source_dir=source_dir,
        output_dir=output_dir,
        quality=quality,
        max_width=max_width,
        normalize_colorspace=normalize_colorspace,
    )
    return run_batch(batch, converter=create_converter(backend), reporter=reporter)
