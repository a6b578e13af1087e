"""Shared fixtures: synthetic images written to ``tmp_path``."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import structlog
from PIL import Image

DATA_DIR = Path(__file__).parent / "data"


def smooth_image(size: int, seed: int = 7) -> Image.Image:
    """Sum of low-frequency cosines; the same picture at any resolution."""
    rng = np.random.default_rng(seed)
    amps = rng.uniform(-1.0, 1.0, size=(8, 8))
    t = (np.arange(size) + 0.5) / size
    basis = np.cos(np.pi * np.outer(np.arange(8), t))
    field = basis.T @ amps @ basis
    field = (field - field.min()) / (field.max() - field.min())
    return Image.fromarray((30 + field * 190).round().astype(np.uint8))


def noise_image(size: int = 64, seed: int = 1) -> Image.Image:
    rng = np.random.default_rng(seed)
    return Image.fromarray(rng.integers(0, 256, size=(size, size), dtype=np.uint8))


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def smooth() -> Image.Image:
    return smooth_image(256)


@pytest.fixture
def noise() -> Image.Image:
    return noise_image()


@pytest.fixture
def smooth_path(tmp_path: Path, smooth: Image.Image) -> Path:
    path = tmp_path / "smooth.png"
    smooth.save(path)
    return path


@pytest.fixture
def noise_path(tmp_path: Path, noise: Image.Image) -> Path:
    path = tmp_path / "noise.png"
    noise.save(path)
    return path


@pytest.fixture
def rgb_path(tmp_path: Path) -> Path:
    arr = np.zeros((48, 80, 3), dtype=np.uint8)
    arr[:, :40, 0] = 200
    arr[:24, :, 1] = 150
    arr[:, 60:, 2] = 255
    path = tmp_path / "blocks.jpg"
    Image.fromarray(arr).save(path, quality=90)
    return path


@pytest.fixture
def reference_image_path() -> Path:
    path = DATA_DIR / "test.png"
    if not path.exists():
        pytest.skip("reference image tests/data/test.png not available")
    return path
