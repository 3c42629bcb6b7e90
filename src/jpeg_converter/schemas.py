"""Pydantic schemas for runtime validation of batch inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jpeg_converter.types import SOURCE_EXTENSIONS


class BatchConversionConfig(BaseModel):
    """Validated input for a directory batch conversion."""

    model_config = ConfigDict(extra="forbid")

    source_dir: Path
    output_dir: Path
    quality: int = Field(ge=1, le=100)
    max_width: int | None = Field(default=None, gt=0)
    normalize_colorspace: bool = False
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("extensions must contain at least one suffix.")
        normalized: list[str] = []
        for item in value:
            suffix = item.strip().lower()
            if not suffix or suffix == ".":
                raise ValueError("extensions cannot contain empty entries.")
            if not suffix.startswith("."):
                suffix = f".{suffix}"
            normalized.append(suffix)
        return tuple(normalized)
