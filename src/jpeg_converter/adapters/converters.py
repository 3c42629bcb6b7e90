"""Image converters implementing the application ``ImageConverter`` port."""

from __future__ import annotations

import importlib.util
import logging
import shutil
import subprocess
from pathlib import Path

from jpeg_converter.application.options import ConversionOptions
from jpeg_converter.application.results import OutputMeta
from jpeg_converter.errors import ConversionError, PreconditionError

logger = logging.getLogger(__name__)

MAGICK_INSTALL_HINT = "Please install it with: brew install imagemagick"
PILLOW_INSTALL_HINT = 'Please install it with: pip install "jpeg-batch-converter[pillow]"'


def build_magick_command(
    executable: str,
    source_path: Path,
    output_path: Path,
    options: ConversionOptions,
) -> list[str]:
    """Build the ``magick`` argument list for one conversion.

    Parameters
    ----------
    executable : str
        Path or name of the ``magick`` binary.
    source_path : Path
        Source image; only its first frame/layer is read.
    output_path : Path
        JPEG destination.
    options : ConversionOptions
        Quality, optional max width and colourspace normalization.

    Returns
    -------
    list[str]
        Argument vector suitable for ``subprocess.run``.
    """
    command = [executable, f"{source_path}[0]"]
    if options.max_width is not None:
        # Trailing ">" only ever shrinks; height follows the aspect ratio.
        command += ["-resize", f"{options.max_width}x>"]
    if options.normalize_colorspace:
        command += ["-colorspace", "sRGB"]
    command += ["-quality", str(options.quality), "-strip", "-auto-orient"]
    command.append(str(output_path))
    return command


class MagickImageConverter:
    """Convert images by shelling out to ImageMagick 7."""

    name = "magick"

    def __init__(self, executable: str = "magick") -> None:
        self.executable = executable

    def check_available(self) -> None:
        """Raise ``PreconditionError`` if ``magick`` is not on PATH."""
        if shutil.which(self.executable) is None:
            raise PreconditionError(
                f"ImageMagick is not installed ('{self.executable}' not found).\n"
                f"{MAGICK_INSTALL_HINT}"
            )

    def convert(
        self,
        source_path: Path,
        output_path: Path,
        options: ConversionOptions,
    ) -> OutputMeta:
        """Convert ``source_path`` to JPEG and probe the result.

        Raises
        ------
        ConversionError
            If ``magick`` cannot be started or exits non-zero.
        """
        command = build_magick_command(self.executable, source_path, output_path, options)
        logger.debug("running %s", " ".join(command))
        try:
            proc = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ConversionError(f"Conversion error: {exc}") from exc
        if proc.returncode != 0:
            logger.debug("magick stderr for %s: %s", source_path.name, proc.stderr.strip())
            raise ConversionError("Conversion error")

        size = output_path.stat().st_size if output_path.is_file() else 0
        width, height = self.probe_dimensions(output_path)
        return OutputMeta(output_path=output_path, size_bytes=size, width=width, height=height)

    def probe_dimensions(self, path: Path) -> tuple[int | None, int | None]:
        """Read pixel dimensions with ``magick identify``; ``None`` if unknown."""
        command = [self.executable, "identify", "-format", "%wx%h", str(path)]
        try:
            proc = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            logger.debug("identify failed for %s: %s", path, exc)
            return None, None
        if proc.returncode != 0:
            logger.debug("identify stderr for %s: %s", path, proc.stderr.strip())
            return None, None
        return parse_dimensions(proc.stdout)


def parse_dimensions(raw: str) -> tuple[int | None, int | None]:
    """Parse ``identify`` output such as ``1200x800``."""
    first = raw.strip().splitlines()[0] if raw.strip() else ""
    width, sep, height = first.partition("x")
    if not sep:
        return None, None
    try:
        return int(width), int(height)
    except ValueError:
        return None, None


class PillowImageConverter:
    """Convert images in-process with Pillow."""

    name = "pillow"

    def check_available(self) -> None:
        """Raise ``PreconditionError`` if Pillow cannot be imported."""
        if importlib.util.find_spec("PIL") is None:
            raise PreconditionError(f"Pillow is not installed.\n{PILLOW_INSTALL_HINT}")

    def convert(
        self,
        source_path: Path,
        output_path: Path,
        options: ConversionOptions,
    ) -> OutputMeta:
        """Convert the first frame of ``source_path`` to JPEG.

        The frame is auto-oriented from its EXIF tag and saved without EXIF
        or ICC metadata.

        Raises
        ------
        ConversionError
            If Pillow cannot decode or encode the image.
        """
        from PIL import Image, ImageOps, UnidentifiedImageError

        try:
            with Image.open(source_path) as raw:
                raw.seek(0)
                image = ImageOps.exif_transpose(raw)
                if options.normalize_colorspace or image.mode not in ("RGB", "L", "CMYK"):
                    image = image.convert("RGB")
                if options.max_width is not None and image.width > options.max_width:
                    height = max(1, round(image.height * options.max_width / image.width))
                    image = image.resize(
                        (options.max_width, height), Image.Resampling.LANCZOS
                    )
                image.save(output_path, format="JPEG", quality=options.quality)
                width, height = image.size
        except (OSError, UnidentifiedImageError, ValueError) as exc:
            raise ConversionError(f"Conversion error: {exc}") from exc

        size = output_path.stat().st_size if output_path.is_file() else 0
        return OutputMeta(output_path=output_path, size_bytes=size, width=width, height=height)


_BACKENDS: dict[str, type[MagickImageConverter] | type[PillowImageConverter]] = {
    MagickImageConverter.name: MagickImageConverter,
    PillowImageConverter.name: PillowImageConverter,
}


def available_backends() -> list[str]:
    """Return registered backend names."""
    return sorted(_BACKENDS)


def create_converter(name: str) -> MagickImageConverter | PillowImageConverter:
    """Instantiate the converter registered under ``name``.

    Raises
    ------
    PreconditionError
        If no backend with that name exists.
    """
    try:
        factory = _BACKENDS[name.strip().lower()]
    except KeyError as exc:
        raise PreconditionError(
            f"Unknown converter backend '{name}'. "
            f"Available backends: {', '.join(available_backends())}"
        ) from exc
    return factory()
