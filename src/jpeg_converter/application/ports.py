"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from jpeg_converter.application.options import ConversionOptions
from jpeg_converter.application.results import FileOutcome, OutputMeta, RunSummary


class ImageConverter(Protocol):
    """Turn one source image into a JPEG on disk."""

    name: str

    def check_available(self) -> None:
        """Raise ``PreconditionError`` when the backend cannot run."""

    def convert(
        self,
        source_path: Path,
        output_path: Path,
        options: ConversionOptions,
    ) -> OutputMeta:
        """Write ``output_path`` or raise ``ConversionError``."""


class ProgressReporter(Protocol):
    """Receive batch progress events."""

    def file_started(self, index: int, total: int, source_path: Path) -> None:
        """Called before a source file is converted."""

    def file_finished(self, index: int, total: int, outcome: FileOutcome) -> None:
        """Called with the classification of each source file."""

    def batch_finished(self, summary: RunSummary) -> None:
        """Called once with final counts."""
