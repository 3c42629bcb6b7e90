"""Typed option objects and the two named batch presets."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jpeg_converter.types import SOURCE_EXTENSIONS

DEFAULT_SOURCE_DIR = Path("./Beauveste")
SHOPIFY_SUBDIR = "shopify"


@dataclass(frozen=True)
class ConversionOptions:
    """Per-file encoding parameters handed to an image converter."""

    quality: int = 85
    max_width: int | None = None
    normalize_colorspace: bool = False


@dataclass(frozen=True)
class BatchOptions:
    """Everything one batch run needs besides the converter itself."""

    source_dir: Path
    output_dir: Path
    conversion: ConversionOptions = ConversionOptions()
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS
    label: str = "batch"


PREVIEW_PRESET = ConversionOptions(quality=85, max_width=1200)
SHOPIFY_PRESET = ConversionOptions(quality=98, normalize_colorspace=True)


def preview_batch(source_dir: Path = DEFAULT_SOURCE_DIR) -> BatchOptions:
    """Web previews written next to the source TIFFs."""
    return BatchOptions(
        source_dir=source_dir,
        output_dir=source_dir,
        conversion=PREVIEW_PRESET,
        label="previews",
    )


def shopify_batch(
    source_dir: Path = DEFAULT_SOURCE_DIR,
    output_dir: Path | None = None,
) -> BatchOptions:
    """Full-resolution sRGB JPEGs written to ``<source>/shopify``."""
    return BatchOptions(
        source_dir=source_dir,
        output_dir=output_dir or source_dir / SHOPIFY_SUBDIR,
        conversion=SHOPIFY_PRESET,
        label="shopify",
    )
