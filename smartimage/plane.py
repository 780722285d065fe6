"""Single channel 8-bit image planes."""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from smartimage.filters import apply_canny_edge_detector, apply_convolution, gaussian_kernel
from smartimage.logs.logs import LOGGER_NAME
from smartimage.morphology.skeletonize import skeletonize_by_midpoint, thinning
from smartimage.morphology.uniform import remove_uniform_blocks

LOGGER = logging.getLogger(LOGGER_NAME)

# ITU-R BT.601 luma weights
LUMINANCE_WEIGHTS = (0.299, 0.587, 0.114)


class ImageU8:
    """
    A two dimensional, single channel plane of bytes.

    Pixels are held in a C-contiguous ``uint8`` array so that the plane can be addressed either by ``(row, col)`` or by
    a linear, row-major, offset (``index = row * width + col``). All access through the plane is bounds checked.

    Parameters
    ----------
    width : int
        Number of columns, must be at least 1.
    height : int
        Number of rows, must be at least 1.
    """

    def __init__(self, width: int, height: int):
        """
        Initialise a zero filled plane.

        Parameters
        ----------
        width : int
            Number of columns, must be at least 1.
        height : int
            Number of rows, must be at least 1.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Plane dimensions must be at least 1 x 1, got width={width} height={height}.")
        self._pixels = np.zeros((height, width), dtype=np.uint8)

    @classmethod
    def from_array(cls, array: npt.NDArray) -> ImageU8:
        """
        Create a plane from a two dimensional array.

        Boolean arrays are mapped to 255 (``True``) and 0 (``False``), all other arrays must hold values in the range
        0 to 255. The data is copied, the plane never shares memory with ``array``.

        Parameters
        ----------
        array : npt.NDArray
            Two dimensional array of pixel values.

        Returns
        -------
        ImageU8
            Plane holding a copy of the array.
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a two dimensional array, got shape {array.shape}.")
        if array.dtype == bool:
            array = np.where(array, 255, 0)
        elif array.size and (array.min() < 0 or array.max() > 255):
            raise ValueError(f"Pixel values must be in the range 0-255, got {array.min()} to {array.max()}.")
        plane = cls(width=array.shape[1], height=array.shape[0])
        plane._pixels[...] = array.astype(np.uint8)
        return plane

    @classmethod
    def from_rgb(cls, array: npt.NDArray) -> ImageU8:
        """
        Convert an RGB or RGBA array to a grayscale plane.

        Each pixel becomes ``0.299 * R + 0.587 * G + 0.114 * B`` truncated to a byte, any alpha channel is ignored.

        Parameters
        ----------
        array : npt.NDArray
            Array of shape ``(height, width, 3)`` or ``(height, width, 4)``.

        Returns
        -------
        ImageU8
            Grayscale plane.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected an RGB or RGBA array of shape (height, width, 3|4), got {array.shape}.")
        red, green, blue = (array[..., channel].astype(np.float64) for channel in range(3))
        luminance = red * LUMINANCE_WEIGHTS[0] + green * LUMINANCE_WEIGHTS[1] + blue * LUMINANCE_WEIGHTS[2]
        return cls.from_array(np.clip(luminance, 0, 255).astype(np.uint8))

    @property
    def width(self) -> int:
        """
        Number of columns.

        Returns
        -------
        int
            Width of the plane.
        """
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        """
        Number of rows.

        Returns
        -------
        int
            Height of the plane.
        """
        return self._pixels.shape[0]

    @property
    def length(self) -> int:
        """
        Number of pixels.

        Returns
        -------
        int
            ``width * height``.
        """
        return self._pixels.size

    @property
    def image(self) -> npt.NDArray:
        """
        Two dimensional view of the pixels, changes to the view change the plane.

        Returns
        -------
        npt.NDArray
            Array of shape ``(height, width)``.
        """
        return self._pixels

    @property
    def data(self) -> npt.NDArray:
        """
        Linear, row-major, view of the pixels, changes to the view change the plane.

        Returns
        -------
        npt.NDArray
            Array of shape ``(length,)``.
        """
        return self._pixels.reshape(-1)

    def _linear_index(self, key: int | tuple[int, int]) -> int:
        """
        Convert an index or ``(row, col)`` pair to a validated linear index.

        Parameters
        ----------
        key : int | tuple[int, int]
            Linear index or ``(row, col)`` pair.

        Returns
        -------
        int
            Linear index into the plane.
        """
        if isinstance(key, tuple):
            row, col = key
            if not (0 <= row < self.height and 0 <= col < self.width):
                raise IndexError(f"({row}, {col}) is outside a plane of {self.height} rows x {self.width} columns.")
            return int(row) * self.width + int(col)
        if not 0 <= key < self.length:
            raise IndexError(f"{key} is outside a plane of {self.length} pixels.")
        return int(key)

    @staticmethod
    def _check_value(value: int) -> int:
        if not 0 <= value <= 255:
            raise ValueError(f"Pixel values must be in the range 0-255, got {value}.")
        return int(value)

    def __getitem__(self, key: int | tuple[int, int]) -> int:
        """
        Get a pixel by linear index or ``(row, col)``.

        Parameters
        ----------
        key : int | tuple[int, int]
            Linear index or ``(row, col)`` pair.

        Returns
        -------
        int
            Pixel value.
        """
        return int(self.data[self._linear_index(key)])

    def __setitem__(self, key: int | tuple[int, int], value: int) -> None:
        """
        Set a pixel by linear index or ``(row, col)``.

        Parameters
        ----------
        key : int | tuple[int, int]
            Linear index or ``(row, col)`` pair.
        value : int
            New pixel value (0-255).
        """
        self.data[self._linear_index(key)] = self._check_value(value)

    def __eq__(self, other: object) -> bool:
        """
        Check if two planes are equal.

        Parameters
        ----------
        other : object
            Object to compare to.

        Returns
        -------
        bool
            True if both are planes of the same size holding the same pixels.
        """
        if not isinstance(other, ImageU8):
            return False
        return self._pixels.shape == other._pixels.shape and np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"ImageU8(width={self.width}, height={self.height})"

    def fill(self, value: int) -> None:
        """
        Set every pixel to ``value``.

        Parameters
        ----------
        value : int
            Pixel value (0-255).
        """
        self._pixels.fill(self._check_value(value))

    def clone(self) -> ImageU8:
        """
        Copy the plane.

        Returns
        -------
        ImageU8
            Plane of the same size and content with its own storage.
        """
        return ImageU8.from_array(self._pixels)

    def invert(self) -> None:
        """Replace every pixel ``p`` with ``255 - p``."""
        np.subtract(255, self._pixels, out=self._pixels)

    def to_int32(self) -> npt.NDArray:
        """
        Widen the plane to 32-bit integers.

        Returns
        -------
        npt.NDArray
            ``int32`` copy of the pixels with shape ``(height, width)``.
        """
        return self._pixels.astype(np.int32)

    def to_argb(self) -> npt.NDArray:
        """
        Expand the plane to four channels.

        Returns
        -------
        npt.NDArray
            ``uint8`` array of shape ``(height, width, 4)``, the gray value repeated in the red, green and blue channels
            with a fully opaque alpha channel.
        """
        argb = np.empty((*self._pixels.shape, 4), dtype=np.uint8)
        argb[..., :3] = self._pixels[..., np.newaxis]
        argb[..., 3] = 255
        return argb

    def thinning(self, foreground: int = 255) -> None:
        """
        Thin foreground regions to a single pixel wide skeleton in place.

        Parameters
        ----------
        foreground : int
            Value of foreground pixels.
        """
        thinning(self, foreground=foreground)

    def skeletonize_by_midpoint(self, foreground: int = 255) -> None:
        """
        Approximate the skeleton by the midpoints of row and column runs in place.

        Parameters
        ----------
        foreground : int
            Value of foreground pixels.
        """
        skeletonize_by_midpoint(self, foreground=foreground)

    def remove_uniform_blocks(self, front_pixel: int, replaced_pixel: int) -> None:
        """
        Rewrite the centre of every uniform 3x3 block of ``front_pixel`` to ``replaced_pixel``.

        Parameters
        ----------
        front_pixel : int
            Value a block must consist of.
        replaced_pixel : int
            Value written to the centre of such blocks.
        """
        remove_uniform_blocks(self, front_pixel=front_pixel, replaced_pixel=replaced_pixel)

    def apply_convolution(self, kernel: npt.NDArray) -> None:
        """
        Convolve the plane with ``kernel`` in place.

        Parameters
        ----------
        kernel : npt.NDArray
            Two dimensional convolution kernel.
        """
        apply_convolution(self, kernel)

    def apply_gaussian_blur(self, sigma: float = 1.4, size: int = 5) -> None:
        """
        Blur the plane with a square Gaussian kernel in place.

        Parameters
        ----------
        sigma : float
            Standard deviation of the Gaussian.
        size : int
            Width of the (square) kernel in pixels, should be odd.
        """
        apply_convolution(self, gaussian_kernel(sigma=sigma, size=size))

    def apply_canny_edge_detector(self, low_threshold: int = 20, high_threshold: int = 100) -> None:
        """
        Replace the plane with its Canny edges (255) on a background of 0.

        Parameters
        ----------
        low_threshold : int
            Lower bound for hysteresis thresholding.
        high_threshold : int
            Upper bound for hysteresis thresholding.
        """
        apply_canny_edge_detector(self, low_threshold=low_threshold, high_threshold=high_threshold)
