#!/usr/bin/env python3
"""
jpeg_converter.cli.cli

Typer-based CLI for turning TIFF product photography into JPEG derivatives.

Two presets reproduce the original workflow:

    convert-to-jpeg previews     # quality 85, max 1200px wide, next to the TIFFs
    convert-to-jpeg shopify      # quality 98, full size, sRGB, into ./shopify

Ad-hoc parameters go through the same batch routine:

    convert-to-jpeg batch ./photos --quality 90 --max-width 2048

Already converted files are skipped, so every command is safe to rerun.
"""

from __future__ import annotations

import logging
import shutil
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path

import typer

from jpeg_converter.adapters.converters import available_backends, create_converter
from jpeg_converter.application.options import (
    DEFAULT_SOURCE_DIR,
    BatchOptions,
    preview_batch,
    shopify_batch,
)
from jpeg_converter.application.ports import ImageConverter
from jpeg_converter.application.results import FileOutcome, RunSummary
from jpeg_converter.application.use_cases import (
    build_batch_options,
    discover_sources,
    run_batch,
    validate_batch,
)
from jpeg_converter.errors import JpegConverterError

app = typer.Typer(
    name="convert-to-jpeg",
    help="Batch-convert TIFF product photos to JPEG previews and Shopify images.",
    no_args_is_help=True,
)

RULE = "=" * 40
SOURCE_DIR_HELP = "Directory holding the .tif/.tiff originals."
BACKEND_HELP = f"Converter backend ({', '.join(available_backends())})."
CONFIRM_HELP = (
    "Ask before converting (--confirm) or skip the prompt (--yes). "
    "Defaults to asking only when stdin is a terminal."
)
SOURCE_DIR_ENV = "JPEG_CONVERTER_SOURCE_DIR"
BACKEND_ENV = "JPEG_CONVERTER_BACKEND"


# -----------------------------
# Presentation
# -----------------------------
@dataclass(frozen=True)
class CommandText:
    """User-facing wording for one command."""

    title: str
    action: str
    skip_note: str
    prompt: str
    cancelled: str
    complete: str
    detailed_size: bool = False
    quality_note: str = ""
    warnings: tuple[str, ...] = ()
    closing: tuple[str, ...] = ()


PREVIEW_TEXT = CommandText(
    title="Creating JPG Preview Images",
    action="Creating preview",
    skip_note="preview exists",
    prompt="Proceed with preview creation?",
    cancelled="Preview creation cancelled",
    complete="Preview Creation Complete",
    closing=("Note: Original TIF files are unchanged and ready for Shopify upload",),
)

SHOPIFY_TEXT = CommandText(
    title="Creating Shopify-Ready JPG Images",
    action="Converting",
    skip_note="already exists",
    prompt="Proceed with conversion?",
    cancelled="Conversion cancelled",
    complete="Conversion Complete",
    detailed_size=True,
    quality_note="% (very high)",
    warnings=(
        "Note: CMYK->RGB conversion will cause some",
        "color shift. This is normal for web display.",
    ),
    closing=(
        "Shopify-ready images are in: {output_dir}",
        "Upload these JPG files to Shopify.",
    ),
)

BATCH_TEXT = CommandText(
    title="Converting TIF Images to JPG",
    action="Converting",
    skip_note="already exists",
    prompt="Proceed with conversion?",
    cancelled="Conversion cancelled",
    complete="Conversion Complete",
    detailed_size=True,
    closing=("Converted images are in: {output_dir}",),
)


def _counter(index: int, total: int) -> str:
    return typer.style(f"[{index}/{total}]", fg=typer.colors.YELLOW)


def _format_reduction(outcome: FileOutcome) -> str:
    reduction = outcome.reduction_percent
    return "N/A" if reduction is None else f"{reduction}"


class EchoReporter:
    """Progress reporter writing per-file lines and the final summary."""

    def __init__(self, text: CommandText, output_dir: Path) -> None:
        self.text = text
        self.output_dir = output_dir

    def file_started(self, index: int, total: int, source_path: Path) -> None:
        typer.echo(f"{_counter(index, total)} {self.text.action}: {source_path.name}")

    def file_finished(self, index: int, total: int, outcome: FileOutcome) -> None:
        if outcome.status == "skipped":
            typer.echo(
                f"{_counter(index, total)} Skipping: {outcome.source_path.name} "
                f"({self.text.skip_note})"
            )
            return
        if outcome.status == "converted" and outcome.meta is not None:
            if self.text.detailed_size:
                detail = (
                    f"{outcome.meta.dimensions}, {outcome.output_size_mb}MB "
                    f"({_format_reduction(outcome)}% reduction)"
                )
            else:
                detail = (
                    f"{outcome.meta.dimensions}, "
                    f"Size reduction: {_format_reduction(outcome)}%"
                )
            typer.echo(f"{typer.style('✓ Success', fg=typer.colors.GREEN)} - {detail}")
        else:
            typer.echo(f"{typer.style('✗ Failed', fg=typer.colors.RED)} - {outcome.error}")
        typer.echo("")

    def batch_finished(self, summary: RunSummary) -> None:
        typer.echo(RULE)
        typer.echo(self.text.complete)
        typer.echo(RULE)
        typer.echo(
            "Successfully created: "
            + typer.style(str(summary.converted), fg=typer.colors.GREEN)
        )
        typer.echo(
            "Skipped (already exist): "
            + typer.style(str(summary.skipped), fg=typer.colors.YELLOW)
        )
        typer.echo("Failed: " + typer.style(str(summary.failed), fg=typer.colors.RED))
        typer.echo(RULE)
        typer.echo("")
        for line in self.text.closing:
            typer.echo(line.format(output_dir=self.output_dir))


def _print_header(batch: BatchOptions, text: CommandText, total: int) -> None:
    """Describe the pending batch before asking for confirmation."""
    conversion = batch.conversion
    typer.echo(RULE)
    typer.echo(text.title)
    typer.echo(RULE)
    typer.echo(f"Source directory: {batch.source_dir}")
    if batch.output_dir != batch.source_dir:
        typer.echo(f"Output directory: {batch.output_dir}")
    typer.echo(f"Total files: {total}")
    typer.echo(f"Quality: {conversion.quality}{text.quality_note}")
    if conversion.max_width is not None:
        typer.echo(f"Max width: {conversion.max_width}px")
    else:
        typer.echo("Resolution: Full (no resizing)")
    typer.echo(RULE)
    typer.echo("")
    if text.warnings:
        for line in text.warnings:
            typer.echo(line)
        typer.echo("")


def _should_confirm(confirm: bool | None) -> bool:
    """Prompt only in interactive sessions unless told otherwise."""
    if confirm is None:
        return sys.stdin.isatty()
    return confirm


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised before or during the batch.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", err=True, fg=typer.colors.RED)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _run_command(
    ctx: typer.Context,
    batch: BatchOptions,
    backend: str,
    confirm: bool | None,
    text: CommandText,
) -> None:
    """Shared flow: precondition, discovery, confirmation, batch, summary."""
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        validate_batch(batch)
        converter: ImageConverter = create_converter(backend)
        converter.check_available()
    except JpegConverterError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    sources = discover_sources(batch.source_dir, batch.extensions)
    if not sources:
        typer.secho(f"No TIF files found in {batch.source_dir}", fg=typer.colors.YELLOW)
        return

    _print_header(batch, text, len(sources))
    if _should_confirm(confirm) and not typer.confirm(text.prompt, default=False):
        typer.echo(text.cancelled)
        return

    try:
        run_batch(
            batch,
            converter=converter,
            reporter=EchoReporter(text, batch.output_dir),
            sources=sources,
        )
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Initialize shared CLI state and logging.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("previews")
def previews_cmd(
    ctx: typer.Context,
    source_dir: Path = typer.Option(
        DEFAULT_SOURCE_DIR,
        "--source-dir",
        envvar=SOURCE_DIR_ENV,
        file_okay=False,
        help=SOURCE_DIR_HELP,
    ),
    backend: str = typer.Option("magick", "--backend", envvar=BACKEND_ENV, help=BACKEND_HELP),
    confirm: bool | None = typer.Option(None, "--confirm/--yes", help=CONFIRM_HELP),
) -> None:
    """Create small web preview JPEGs alongside the TIFFs.

    Notes
    -----
    - Quality 85, width capped at 1200px (never enlarged).
    - Output ``<name>.jpg`` lands next to ``<name>.tif``.
    """
    _run_command(ctx, preview_batch(source_dir), backend, confirm, PREVIEW_TEXT)


@app.command("shopify")
def shopify_cmd(
    ctx: typer.Context,
    source_dir: Path = typer.Option(
        DEFAULT_SOURCE_DIR,
        "--source-dir",
        envvar=SOURCE_DIR_ENV,
        file_okay=False,
        help=SOURCE_DIR_HELP,
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        file_okay=False,
        help="Destination directory. Defaults to <source-dir>/shopify.",
    ),
    backend: str = typer.Option("magick", "--backend", envvar=BACKEND_ENV, help=BACKEND_HELP),
    confirm: bool | None = typer.Option(None, "--confirm/--yes", help=CONFIRM_HELP),
) -> None:
    """Create full-resolution, high-quality JPEGs for Shopify upload.

    Notes
    -----
    - Quality 98, no resizing.
    - Colourspace forced to sRGB so CMYK originals display correctly on the web.
    """
    _run_command(ctx, shopify_batch(source_dir, output_dir), backend, confirm, SHOPIFY_TEXT)


@app.command("batch")
def batch_cmd(
    ctx: typer.Context,
    source_dir: Path = typer.Argument(..., file_okay=False, help=SOURCE_DIR_HELP),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        file_okay=False,
        help="Destination directory. Defaults to the source directory.",
    ),
    quality: int = typer.Option(85, "--quality", min=1, max=100, help="JPEG quality (1-100)."),
    max_width: int | None = typer.Option(
        None, "--max-width", min=1, help="Shrink wider images to this width."
    ),
    normalize_colorspace: bool = typer.Option(
        False, "--normalize-colorspace", help="Convert to sRGB (CMYK -> RGB)."
    ),
    backend: str = typer.Option("magick", "--backend", envvar=BACKEND_ENV, help=BACKEND_HELP),
    confirm: bool | None = typer.Option(None, "--confirm/--yes", help=CONFIRM_HELP),
) -> None:
    """Convert TIFFs with explicit quality/resize/colourspace parameters."""
    batch = build_batch_options(
        source_dir=source_dir,
        output_dir=output_dir,
        quality=quality,
        max_width=max_width,
        normalize_colorspace=normalize_colorspace,
    )
    _run_command(ctx, batch, backend, confirm, BATCH_TEXT)


@app.command("doctor")
def doctor_cmd() -> None:
    """Print the Python version and the converter toolchain found."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for tool in ("magick", "identify"):
        location = shutil.which(tool)
        typer.echo(f"{tool}: {location or '<not found>'}")
    try:
        typer.echo(f"pillow: {metadata.version('pillow')}")
    except metadata.PackageNotFoundError:
        typer.echo("pillow: <not installed>")
    typer.echo(f"backends: {', '.join(available_backends())}")


if __name__ == "__main__":
    app()
