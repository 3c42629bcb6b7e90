"""Application use-cases orchestrating the batch conversion workflow."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from pathlib import Path

from pydantic import ValidationError

from jpeg_converter.adapters.converters import create_converter
from jpeg_converter.application.options import BatchOptions, ConversionOptions
from jpeg_converter.application.ports import ImageConverter, ProgressReporter
from jpeg_converter.application.results import FileOutcome, RunSummary
from jpeg_converter.errors import ConfigurationError, ConversionError
from jpeg_converter.schemas import BatchConversionConfig
from jpeg_converter.types import OUTPUT_SUFFIX, SOURCE_EXTENSIONS
from jpeg_converter.validate import remove_partial_output, verify_output

logger = logging.getLogger(__name__)


def discover_sources(
    source_dir: Path,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
) -> list[Path]:
    """List matching files directly inside ``source_dir``, sorted by name.

    Matching is case-insensitive on the suffix. Subdirectories are not
    descended into, and a missing directory yields an empty list.
    """
    wanted = {ext.lower() for ext in extensions}
    if not source_dir.is_dir():
        logger.debug("source directory %s does not exist", source_dir)
        return []
    matches = [
        path
        for path in source_dir.iterdir()
        if path.suffix.lower() in wanted and path.is_file()
    ]
    return sorted(matches, key=lambda path: path.name)


def output_path_for(source_path: Path, output_dir: Path) -> Path:
    """Map a source image to its JPEG path inside ``output_dir``."""
    return output_dir / f"{source_path.stem}{OUTPUT_SUFFIX}"


def process_file(
    source_path: Path,
    output_path: Path,
    converter: ImageConverter,
    options: ConversionOptions,
) -> FileOutcome:
    """Use-case: convert one file unless its output already exists.

    Failures never propagate; they come back as a ``"failed"`` outcome and
    any output written by the failed attempt is removed.
    """
    try:
        source_size = source_path.stat().st_size
    except OSError as exc:
        logger.warning("cannot read %s: %s", source_path.name, exc)
        return FileOutcome(
            source_path=source_path,
            output_path=output_path,
            status="failed",
            error=exc.strerror or str(exc),
        )
    if output_path.exists():
        logger.debug("skipping %s: %s exists", source_path.name, output_path)
        return FileOutcome(
            source_path=source_path,
            output_path=output_path,
            status="skipped",
            source_size_bytes=source_size,
        )

    try:
        meta = converter.convert(source_path, output_path, options)
        size = verify_output(output_path)
    except ConversionError as exc:
        error = str(exc)
    except Exception as exc:
        logger.exception("unexpected error converting %s", source_path)
        error = str(exc) or type(exc).__name__
    else:
        return FileOutcome(
            source_path=source_path,
            output_path=output_path,
            status="converted",
            source_size_bytes=source_size,
            meta=replace(meta, output_path=output_path, size_bytes=size),
        )

    logger.warning("conversion failed for %s: %s", source_path.name, error)
    remove_partial_output(output_path)
    return FileOutcome(
        source_path=source_path,
        output_path=output_path,
        status="failed",
        source_size_bytes=source_size,
        error=error,
    )


def validate_batch(batch: BatchOptions) -> BatchConversionConfig:
    """Validate batch parameters, wrapping pydantic errors."""
    try:
        return BatchConversionConfig(
            source_dir=batch.source_dir,
            output_dir=batch.output_dir,
            quality=batch.conversion.quality,
            max_width=batch.conversion.max_width,
            normalize_colorspace=batch.conversion.normalize_colorspace,
            extensions=tuple(batch.extensions),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid batch parameters: {exc}") from exc


def run_batch(
    batch: BatchOptions,
    *,
    converter: ImageConverter | None = None,
    reporter: ProgressReporter | None = None,
    sources: Sequence[Path] | None = None,
) -> RunSummary:
    """Use-case: convert every matching file in the source directory.

    ``sources`` lets a caller that already listed the directory pass that
    listing in, so the totals it showed match the ones reported here.

    Raises
    ------
    ConfigurationError
        If the batch parameters are invalid.
    PreconditionError
        If the converter backend is unavailable. Raised before any file
        is touched.
    """
    config = validate_batch(batch)
    converter = converter or create_converter("magick")
    converter.check_available()

    summary = RunSummary()
    if sources is None:
        sources = discover_sources(config.source_dir, config.extensions)
    if not sources:
        logger.info("no source images found in %s", config.source_dir)
        if reporter is not None:
            reporter.batch_finished(summary)
        return summary

    config.output_dir.mkdir(parents=True, exist_ok=True)
    options = ConversionOptions(
        quality=config.quality,
        max_width=config.max_width,
        normalize_colorspace=config.normalize_colorspace,
    )
    total = len(sources)
    logger.info(
        "%s: %d file(s) from %s with %s",
        batch.label,
        total,
        config.source_dir,
        converter.name,
    )
    for index, source_path in enumerate(sources, start=1):
        output_path = output_path_for(source_path, config.output_dir)
        if reporter is not None and not output_path.exists():
            reporter.file_started(index, total, source_path)
        outcome = process_file(source_path, output_path, converter, options)
        summary.record(outcome)
        if reporter is not None:
            reporter.file_finished(index, total, outcome)

    if reporter is not None:
        reporter.batch_finished(summary)
    return summary


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
    """Build typed batch options from command/API params."""
    return BatchOptions(
        source_dir=source_dir,
        output_dir=output_dir or source_dir,
        conversion=ConversionOptions(
            quality=quality,
            max_width=max_width,
            normalize_colorspace=normalize_colorspace,
        ),
        extensions=tuple(extensions),
        label=label,
    )
