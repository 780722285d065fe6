"""Convolution, blurring, edge detection and thresholding of image planes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from scipy.ndimage import convolve
from skimage.feature import canny

from smartimage.logs.logs import LOGGER_NAME

if TYPE_CHECKING:
    from smartimage.plane import ImageU8

LOGGER = logging.getLogger(LOGGER_NAME)


def gaussian_kernel(sigma: float = 1.4, size: int = 5) -> npt.NDArray:
    """
    Build a normalised, square, Gaussian convolution kernel.

    Parameters
    ----------
    sigma : float
        Standard deviation of the Gaussian in pixels.
    size : int
        Width and height of the kernel in pixels.

    Returns
    -------
    npt.NDArray
        ``(size, size)`` kernel summing to one.
    """
    if sigma <= 0:
        raise ValueError(f"Gaussian sigma must be positive, got {sigma}.")
    if size < 1:
        raise ValueError(f"Kernel size must be at least 1, got {size}.")
    axis = np.arange(size, dtype=np.float64) - (size - 1) / 2
    profile = np.exp(-(axis**2) / (2 * sigma**2))
    kernel = np.outer(profile, profile)
    return kernel / kernel.sum()


def apply_convolution(plane: ImageU8, kernel: npt.NDArray) -> None:
    """
    Convolve a plane with a kernel in place.

    Edges are handled by replicating the outermost pixels, results are rounded and clipped to 0-255.

    Parameters
    ----------
    plane : ImageU8
        Plane to convolve, modified in place.
    kernel : npt.NDArray
        Two dimensional convolution kernel.
    """
    kernel = np.asarray(kernel, dtype=np.float64)
    if kernel.ndim != 2:
        raise ValueError(f"Convolution kernel must be two dimensional, got shape {kernel.shape}.")
    LOGGER.debug(f"Convolving {plane!r} with a {kernel.shape[0]} x {kernel.shape[1]} kernel.")
    convolved = convolve(plane.image.astype(np.float64), kernel, mode="nearest")
    plane.image[...] = np.clip(np.rint(convolved), 0, 255).astype(np.uint8)


def apply_canny_edge_detector(
    plane: ImageU8, low_threshold: int = 20, high_threshold: int = 100, sigma: float = 1.0
) -> None:
    """
    Replace a plane with its Canny edge map.

    This is a thin wrapper around `skimage.feature.canny
    <https://scikit-image.org/docs/stable/api/skimage.feature.html#skimage.feature.canny>`_. Thresholds are given in
    pixel (byte) units.

    Parameters
    ----------
    plane : ImageU8
        Plane to process, modified in place.
    low_threshold : int
        Lower bound for hysteresis thresholding.
    high_threshold : int
        Upper bound for hysteresis thresholding.
    sigma : float
        Standard deviation of the Gaussian applied before detecting edges.
    """
    edges = canny(plane.image, sigma=sigma, low_threshold=low_threshold, high_threshold=high_threshold)
    LOGGER.debug(f"Canny edge detection found {int(edges.sum())} edge pixels.")
    plane.image[...] = np.where(edges, 255, 0).astype(np.uint8)


def binarise(plane: ImageU8, threshold: int = 128, foreground: int = 255) -> None:
    """
    Threshold a grayscale plane to foreground and background in place.

    Pixels greater than or equal to ``threshold`` become ``foreground``, all others become ``255 - foreground``.

    Parameters
    ----------
    plane : ImageU8
        Plane to threshold, modified in place.
    threshold : int
        Lowest value treated as foreground.
    foreground : int
        Value written to foreground pixels.
    """
    background = 255 - foreground
    plane.image[...] = np.where(plane.image >= threshold, foreground, background).astype(np.uint8)
