"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from tests.helpers import build_elf


@pytest.fixture
def write_elf(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing :func:`build_elf` output under ``tmp_path``."""
    counter = {"n": 0}

    def _write(*args, **kwargs) -> Path:
        counter["n"] += 1
        path = tmp_path / f"image{counter['n']}.elf"
        path.write_bytes(build_elf(*args, **kwargs))
        return path

    return _write
