"""Utilities."""

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from scipy.ndimage import convolve
from skimage.measure import label

from smartimage.logs.logs import LOGGER_NAME

LOGGER = logging.getLogger(LOGGER_NAME)


def convert_path(path: str | Path) -> Path:
    """
    Ensure path is Path object.

    Parameters
    ----------
    path : str | Path
        Path to be converted.

    Returns
    -------
    Path
        Pathlib object of path.
    """
    return Path().cwd() if path == "./" else Path(path).expanduser()


def convolve_skeleton(skeleton: npt.NDArray) -> npt.NDArray:
    """
    Convolve skeleton with a 3x3 kernel.

    This produces an array where the branches of the skeleton are denoted with '1', endpoints are denoted as '2', and
    pixels at nodes as '3'. Isolated pixels are also denoted '1'.

    Parameters
    ----------
    skeleton : npt.NDArray
        Single pixel thick binary trace(s) within an array.

    Returns
    -------
    npt.NDArray
        The skeleton (=1) with endpoints (=2), and crossings (=3) highlighted.
    """
    skeleton = np.asarray(skeleton).astype(bool)
    conv = convolve(skeleton.astype(np.int32), np.ones((3, 3), dtype=np.int32), mode="constant", cval=0)
    conv[~skeleton] = 0  # remove non-skeleton points
    conv[conv == 3] = 1  # skelly = 1
    conv[conv > 3] = 3  # nodes = 3
    return conv


def skeleton_statistics(image: npt.NDArray, foreground: int = 255) -> dict[str, int]:
    """
    Summarise a skeletonised plane.

    Parameters
    ----------
    image : npt.NDArray
        Two dimensional array of pixel values.
    foreground : int
        Value of foreground pixels.

    Returns
    -------
    dict[str, int]
        Number of foreground pixels, end points, junction pixels and 8-connected components.
    """
    skeleton = np.asarray(image) == foreground
    conv = convolve_skeleton(skeleton)
    return {
        "foreground_pixels": int(skeleton.sum()),
        "endpoints": int((conv == 2).sum()),
        "junctions": int((conv == 3).sum()),
        "components": int(label(skeleton, connectivity=2).max()),
    }
