"""Shared pytest configuration, marker assignment and TIFF fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def write_tiff() -> Callable[..., Path]:
    """Write a solid-colour TIFF with Pillow (skips when Pillow is absent)."""
    image_module = pytest.importorskip("PIL.Image")

    def _write(path: Path, size: tuple[int, int], mode: str = "RGB") -> Path:
        color = (0, 128, 255, 0) if mode == "CMYK" else (200, 40, 40)
        image_module.new(mode, size, color).save(path, format="TIFF")
        return path

    return _write
