"""Integration tests for the ImageMagick backend (skipped without ``magick``)."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from jpeg_converter.adapters.converters import MagickImageConverter
from jpeg_converter.application.options import preview_batch, shopify_batch
from jpeg_converter.application.use_cases import run_batch

pytestmark = pytest.mark.skipif(
    shutil.which("magick") is None, reason="ImageMagick 7 'magick' not on PATH"
)


def test_magick_preview_batch(tmp_path: Path, write_tiff) -> None:
    """Previews are resized to 1200px wide and probed by identify."""
    write_tiff(tmp_path / "wide.tif", (1800, 900))

    summary = run_batch(preview_batch(tmp_path), converter=MagickImageConverter())

    assert summary.converted == 1
    outcome = summary.outcomes[0]
    assert outcome.meta is not None
    assert outcome.meta.dimensions == "1200x600"
    assert (tmp_path / "wide.jpg").stat().st_size > 0


def test_magick_shopify_batch_rerun_skips(tmp_path: Path, write_tiff) -> None:
    """Full-size sRGB conversion, then an idempotent rerun."""
    write_tiff(tmp_path / "print.tif", (400, 300), mode="CMYK")
    converter = MagickImageConverter()

    first = run_batch(shopify_batch(tmp_path), converter=converter)
    second = run_batch(shopify_batch(tmp_path), converter=converter)

    assert first.converted == 1
    assert first.outcomes[0].meta is not None
    assert first.outcomes[0].meta.dimensions == "400x300"
    assert second.skipped == 1
