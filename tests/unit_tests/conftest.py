"""Shared fakes for unit tests (no ImageMagick or Pillow required)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from jpeg_converter.application.options import ConversionOptions
from jpeg_converter.application.results import OutputMeta
from jpeg_converter.errors import ConversionError, PreconditionError


class RecordingConverter:
    """Fake ``ImageConverter`` that records calls.

    ``mode`` selects the behaviour for files listed in ``fail_names`` (or for
    every file when ``fail_names`` is empty):

    - ``"ok"``: write ``payload`` and report success
    - ``"raise"``: write a partial file, then raise ``ConversionError``
    - ``"empty"``: write a zero-byte file and report success
    - ``"crash"``: raise an unexpected ``RuntimeError``
    """

    name = "fake"

    def __init__(
        self,
        mode: str = "ok",
        *,
        fail_names: set[str] | None = None,
        available: bool = True,
        payload: bytes = b"\xff\xd8jpeg-bytes\xff\xd9",
    ) -> None:
        self.mode = mode
        self.fail_names = fail_names or set()
        self.available = available
        self.payload = payload
        self.calls: list[tuple[Path, Path, ConversionOptions]] = []
        self.checks = 0

    def check_available(self) -> None:
        self.checks += 1
        if not self.available:
            raise PreconditionError("fake backend is not installed")

    def _mode_for(self, source_path: Path) -> str:
        if self.fail_names and source_path.name not in self.fail_names:
            return "ok"
        return self.mode

    def convert(
        self,
        source_path: Path,
        output_path: Path,
        options: ConversionOptions,
    ) -> OutputMeta:
        self.calls.append((source_path, output_path, options))
        mode = self._mode_for(source_path)
        if mode == "raise":
            output_path.write_bytes(b"partial")
            raise ConversionError("Conversion error")
        if mode == "crash":
            raise RuntimeError("decoder exploded")
        data = b"" if mode == "empty" else self.payload
        output_path.write_bytes(data)
        return OutputMeta(output_path=output_path, size_bytes=len(data), width=64, height=32)


class RecordingReporter:
    """Fake ``ProgressReporter`` collecting events."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def file_started(self, index: int, total: int, source_path: Path) -> None:
        self.events.append(("started", (index, total, source_path.name)))

    def file_finished(self, index: int, total: int, outcome: object) -> None:
        self.events.append(("finished", (index, total, outcome)))

    def batch_finished(self, summary: object) -> None:
        self.events.append(("done", summary))


@pytest.fixture
def make_sources(tmp_path: Path) -> Callable[..., Path]:
    """Create a source directory containing the named dummy files."""

    def _make(*names: str, directory: str = "photos", size: int = 1000) -> Path:
        source_dir = tmp_path / directory
        source_dir.mkdir(parents=True, exist_ok=True)
        for name in names:
            (source_dir / name).write_bytes(b"I" * size)
        return source_dir

    return _make


@pytest.fixture
def converter() -> RecordingConverter:
    return RecordingConverter()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def make_converter() -> type[RecordingConverter]:
    """Return the fake converter class for tests needing custom behaviour."""
    return RecordingConverter
