"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from jpeg_converter.application.options import (
    PREVIEW_PRESET,
    SHOPIFY_PRESET,
    BatchOptions,
    ConversionOptions,
    preview_batch,
    shopify_batch,
)
from jpeg_converter.application.ports import ImageConverter, ProgressReporter
from jpeg_converter.application.results import FileOutcome, OutputMeta, RunSummary
from jpeg_converter.types import SOURCE_EXTENSIONS


def build_batch_options(
    *,
    source_dir: Path,
    output_dir: Path | None = None,
    quality: int = 85,
    max_width: int | None = None,
    normalize_colorspace: bool = False,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    label: str = "batch",
) -> BatchOptions:
    """Build typed batch options via lazy use-case import."""
    from jpeg_converter.application.use_cases import build_batch_options as _impl

    return _impl(
        source_dir=source_dir,
        output_dir=output_dir,
        quality=quality,
        max_width=max_width,
        normalize_colorspace=normalize_colorspace,
        extensions=extensions,
        label=label,
    )


def run_batch(
    batch: BatchOptions,
    *,
    converter: ImageConverter | None = None,
    reporter: ProgressReporter | None = None,
    sources: Sequence[Path] | None = None,
) -> RunSummary:
    """Run a batch conversion via lazy use-case import."""
    from jpeg_converter.application.use_cases import run_batch as _impl

    return _impl(batch, converter=converter, reporter=reporter, sources=sources)


__all__ = [
    "BatchOptions",
    "ConversionOptions",
    "PREVIEW_PRESET",
    "SHOPIFY_PRESET",
    "preview_batch",
    "shopify_batch",
    "FileOutcome",
    "OutputMeta",
    "RunSummary",
    "ImageConverter",
    "ProgressReporter",
    "build_batch_options",
    "run_batch",
]
