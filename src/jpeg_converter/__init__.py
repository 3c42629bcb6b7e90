"""Top-level API for batch TIFF-to-JPEG conversion."""

from __future__ import annotations

from pathlib import Path

from jpeg_converter.application.results import RunSummary

__version__ = "0.1.0"


def create_previews(source_dir: Path, backend: str = "magick") -> RunSummary:
    """Create web preview JPEGs alongside the source TIFFs.

    Parameters
    ----------
    source_dir : Path
        Directory holding the ``.tif``/``.tiff`` originals.
    backend : str, default="magick"
        Converter backend name (``"magick"`` or ``"pillow"``).

    Returns
    -------
    RunSummary
        Converted/skipped/failed counts for the run.
    """
    from .api import create_previews as _impl

    return _impl(source_dir=source_dir, backend=backend)


def create_shopify_images(
    source_dir: Path,
    output_dir: Path | None = None,
    backend: str = "magick",
) -> RunSummary:
    """Create full-resolution Shopify JPEGs.

    Parameters
    ----------
    source_dir : Path
        Directory holding the ``.tif``/``.tiff`` originals.
    output_dir : Path | None, default=None
        Destination directory. When omitted, defaults to
        ``source_dir / "shopify"``.
    backend : str, default="magick"
        Converter backend name.

    Returns
    -------
    RunSummary
        Converted/skipped/failed counts for the run.
    """
    from .api import create_shopify_images as _impl

    return _impl(source_dir=source_dir, output_dir=output_dir, backend=backend)


def convert_directory(
    source_dir: Path,
    output_dir: Path | None = None,
    *,
    quality: int = 85,
    max_width: int | None = None,
    normalize_colorspace: bool = False,
    backend: str = "magick",
) -> RunSummary:
    """Convert every TIFF in a directory with explicit parameters.

    Parameters
    ----------
    source_dir : Path
        Directory holding the ``.tif``/``.tiff`` originals.
    output_dir : Path | None, default=None
        Destination directory; defaults to ``source_dir``.
    quality : int, default=85
        JPEG quality, 1-100.
    max_width : int | None, default=None
        Shrink wider images to this width, keeping the aspect ratio.
    normalize_colorspace : bool, default=False
        Convert to sRGB (CMYK sources become RGB).
    backend : str, default="magick"
        Converter backend name.
    """
    from .api import convert_directory as _impl

    return _impl(
        source_dir=source_dir,
        output_dir=output_dir,
        quality=quality,
        max_width=max_width,
        normalize_colorspace=normalize_colorspace,
        backend=backend,
    )


__all__ = [
    "RunSummary",
    "create_previews",
    "create_shopify_images",
    "convert_directory",
]
