"""Fixtures for testing."""

from pathlib import Path

import numpy as np
import numpy.typing as npt
import pytest
from skimage import draw

from smartimage.config import load_default_config
from smartimage.plane import ImageU8
from smartimage.utils import convert_path

# pylint: disable=redefined-outer-name

BASE_DIR = Path.cwd()
RNG = np.random.default_rng(seed=1000)


@pytest.fixture()
def default_config() -> dict:
    """Default configuration with paths converted."""
    config = load_default_config()
    config["base_dir"] = convert_path(config["base_dir"])
    config["output_dir"] = convert_path(config["output_dir"])
    return config


@pytest.fixture()
def square_block() -> ImageU8:
    """A 5x5 plane holding a solid 3x3 foreground block."""
    array = np.zeros((5, 5), dtype=np.uint8)
    array[1:4, 1:4] = 255
    return ImageU8.from_array(array)


@pytest.fixture()
def horizontal_line() -> ImageU8:
    """A single pixel wide horizontal line."""
    array = np.zeros((5, 7), dtype=np.uint8)
    array[2, 1:6] = 255
    return ImageU8.from_array(array)


@pytest.fixture()
def thick_bar() -> ImageU8:
    """A bar three pixels thick and eight long."""
    array = np.zeros((5, 10), dtype=np.uint8)
    array[1:4, 1:9] = 255
    return ImageU8.from_array(array)


@pytest.fixture()
def disk() -> ImageU8:
    """A filled disk of radius eight."""
    array = np.zeros((31, 31), dtype=np.uint8)
    rows, cols = draw.disk((15, 15), 8, shape=array.shape)
    array[rows, cols] = 255
    return ImageU8.from_array(array)


@pytest.fixture()
def ring() -> ImageU8:
    """A thick ring."""
    array = np.zeros((31, 31), dtype=np.uint8)
    rows, cols = draw.disk((15, 15), 11, shape=array.shape)
    array[rows, cols] = 255
    rows, cols = draw.disk((15, 15), 6, shape=array.shape)
    array[rows, cols] = 0
    return ImageU8.from_array(array)


@pytest.fixture()
def random_plane() -> ImageU8:
    """A random plane of foreground and background pixels."""
    return ImageU8.from_array(RNG.choice([0, 255], size=(20, 24), p=[0.4, 0.6]).astype(np.uint8))


@pytest.fixture()
def grayscale_array() -> npt.NDArray:
    """A grayscale array with a bright bar on a dark background."""
    array = np.full((12, 16), 30, dtype=np.uint8)
    array[4:8, 2:14] = 220
    return array


@pytest.fixture()
def npy_dir(tmp_path: Path, grayscale_array: npt.NDArray) -> Path:
    """Directory holding two planes saved as Numpy arrays, one in a sub-directory."""
    base_dir = tmp_path / "planes"
    (base_dir / "nested").mkdir(parents=True)
    np.save(base_dir / "bar.npy", grayscale_array)
    np.save(base_dir / "nested" / "bar_copy.npy", grayscale_array)
    return base_dir
