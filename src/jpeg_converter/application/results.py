"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jpeg_converter.types import OutcomeStatus


@dataclass(frozen=True)
class OutputMeta:
    """Facts about a freshly written output image."""

    output_path: Path
    size_bytes: int
    width: int | None = None
    height: int | None = None

    @property
    def dimensions(self) -> str:
        """Return ``WxH`` or ``"unknown"`` when the probe failed."""
        if self.width is None or self.height is None:
            return "unknown"
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class FileOutcome:
    """Classification of one source file within a batch."""

    source_path: Path
    output_path: Path
    status: OutcomeStatus
    source_size_bytes: int = 0
    meta: OutputMeta | None = None
    error: str | None = None

    @property
    def reduction_percent(self) -> float | None:
        """Size reduction of output versus source, one decimal place."""
        if self.meta is None or self.source_size_bytes <= 0:
            return None
        ratio = self.meta.size_bytes * 100 / self.source_size_bytes
        return round(100 - ratio, 1)

    @property
    def output_size_mb(self) -> float | None:
        """Output size in MiB, one decimal place."""
        if self.meta is None:
            return None
        return round(self.meta.size_bytes / 1024 / 1024, 1)


@dataclass
class RunSummary:
    """Mutable tally of one batch invocation."""

    converted: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.converted + self.skipped + self.failed

    def record(self, outcome: FileOutcome) -> None:
        """Count ``outcome`` under exactly one status."""
        if outcome.status == "converted":
            self.converted += 1
        elif outcome.status == "skipped":
            self.skipped += 1
        elif outcome.status == "failed":
            self.failed += 1
        else:
            raise ValueError(f"unknown outcome status: {outcome.status}")
        self.outcomes.append(outcome)
