"""Unit tests for presets, result objects and schema validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jpeg_converter.application.options import (
    PREVIEW_PRESET,
    SHOPIFY_PRESET,
    preview_batch,
    shopify_batch,
)
from jpeg_converter.application.results import FileOutcome, OutputMeta, RunSummary
from jpeg_converter.schemas import BatchConversionConfig


def test_presets_match_original_parameters() -> None:
    """Preview and Shopify presets keep their fixed parameters."""
    assert PREVIEW_PRESET.quality == 85
    assert PREVIEW_PRESET.max_width == 1200
    assert PREVIEW_PRESET.normalize_colorspace is False
    assert SHOPIFY_PRESET.quality == 98
    assert SHOPIFY_PRESET.max_width is None
    assert SHOPIFY_PRESET.normalize_colorspace is True


def test_preset_output_locations(tmp_path: Path) -> None:
    """Previews land beside the source; Shopify images in a subdirectory."""
    assert preview_batch(tmp_path).output_dir == tmp_path
    assert shopify_batch(tmp_path).output_dir == tmp_path / "shopify"
    assert shopify_batch(tmp_path, tmp_path / "out").output_dir == tmp_path / "out"


def _outcome(source_size: int, output_size: int | None) -> FileOutcome:
    meta = (
        None
        if output_size is None
        else OutputMeta(output_path=Path("a.jpg"), size_bytes=output_size)
    )
    return FileOutcome(
        source_path=Path("a.tif"),
        output_path=Path("a.jpg"),
        status="converted" if meta else "failed",
        source_size_bytes=source_size,
        meta=meta,
    )


def test_reduction_percent() -> None:
    """Reduction is 100 - new*100/orig rounded to one decimal."""
    assert _outcome(1000, 250).reduction_percent == 75.0
    assert _outcome(3000, 1000).reduction_percent == 66.7
    assert _outcome(0, 10).reduction_percent is None
    assert _outcome(1000, None).reduction_percent is None


def test_output_size_mb() -> None:
    """Output size is reported in MB with one decimal."""
    assert _outcome(1, 3 * 1024 * 1024 // 2).output_size_mb == 1.5
    assert _outcome(1, None).output_size_mb is None


def test_dimensions_unknown_without_probe() -> None:
    """Missing width/height renders as 'unknown'."""
    assert OutputMeta(Path("a.jpg"), 1).dimensions == "unknown"
    assert OutputMeta(Path("a.jpg"), 1, 1200, 800).dimensions == "1200x800"


def test_run_summary_record() -> None:
    """Each outcome increments exactly one counter."""
    summary = RunSummary()
    for status in ("converted", "skipped", "failed", "converted"):
        summary.record(
            FileOutcome(Path("a.tif"), Path("a.jpg"), status)  # type: ignore[arg-type]
        )
    assert (summary.converted, summary.skipped, summary.failed) == (2, 1, 1)
    assert summary.total == 4
    assert len(summary.outcomes) == 4


def test_run_summary_rejects_unknown_status() -> None:
    """Unknown status values are programming errors."""
    with pytest.raises(ValueError, match="unknown outcome status"):
        RunSummary().record(
            FileOutcome(Path("a.tif"), Path("a.jpg"), "pending")  # type: ignore[arg-type]
        )


def test_schema_normalizes_extensions(tmp_path: Path) -> None:
    """Extensions are lower-cased and dotted."""
    config = BatchConversionConfig(
        source_dir=tmp_path,
        output_dir=tmp_path,
        quality=85,
        extensions=("TIF", ".TIFF"),
    )
    assert config.extensions == (".tif", ".tiff")


@pytest.mark.parametrize(
    "overrides",
    [
        {"quality": 0},
        {"quality": 101},
        {"max_width": 0},
        {"extensions": ()},
        {"extensions": (" ",)},
        {"unexpected": True},
    ],
)
def test_schema_rejects_invalid_values(tmp_path: Path, overrides: dict[str, object]) -> None:
    """Out-of-range values and unknown fields fail validation."""
    payload: dict[str, object] = {
        "source_dir": tmp_path,
        "output_dir": tmp_path,
        "quality": 85,
    }
    payload.update(overrides)
    with pytest.raises(ValidationError):
        BatchConversionConfig(**payload)
