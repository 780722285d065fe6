"""Skeletonise image planes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from skimage.morphology import medial_axis, skeletonize, thin

from smartimage.logs.logs import LOGGER_NAME
from smartimage.morphology.neighbourhood import detect_connectivity, fill_neighbours

if TYPE_CHECKING:
    from smartimage.plane import ImageU8

LOGGER = logging.getLogger(LOGGER_NAME)

SKELETONIZE_METHODS = ("hilditch", "midpoint", "zhang", "lee", "medial_axis", "thin")


def thinning(plane: ImageU8, foreground: int = 255) -> None:
    """
    Thin the foreground of a plane to a single pixel wide skeleton using Hilditch's algorithm.

    Each pass scans the interior of the plane in raster order and marks a foreground pixel P for deletion when

    (1) P is not surrounded by foreground on all four sides (east, north, west and south).
    (2) At least two of its eight neighbours are foreground, protecting end points.
    (3) Its connectivity number is 1.
    (4) If the pixel above has already been marked in this pass, the connectivity number stays 1 when it is treated
        as background.
    (5) Likewise for the pixel to the left. The neighbour is not reset afterwards.

    Marked pixels are set to background (``255 - foreground``) at the end of the pass and passes are repeated until one
    marks nothing. The outermost rows and columns are never changed.

    Parameters
    ----------
    plane : ImageU8
        Bilevel plane to thin, modified in place.
    foreground : int
        Value of foreground pixels.
    """
    width = plane.width
    height = plane.height
    background = 255 - foreground
    pixels = plane.data
    mask = bytearray(plane.length)
    iteration = 0
    changed = True
    while changed:
        changed = False
        iteration += 1
        mask[:] = bytes(len(mask))
        # Deletions are only applied after the pass, the plane is unchanged while scanning
        snapshot = pixels.tolist()
        for row in range(1, height - 1):
            for col in range(1, width - 1):
                index = row * width + col
                if snapshot[index] != foreground:
                    continue
                neighbours = fill_neighbours(snapshot, index, width, foreground)
                # Interior of a region
                if neighbours[0] == 0 and neighbours[2] == 0 and neighbours[4] == 0 and neighbours[6] == 0:
                    continue
                if sum(neighbours) > 6:
                    continue
                if detect_connectivity(neighbours) != 1:
                    continue
                if mask[index - width] == 1:
                    neighbours[2] = 1
                    if detect_connectivity(neighbours) != 1:
                        continue
                    neighbours[2] = 0
                if mask[index - 1] == 1:
                    neighbours[4] = 1
                    if detect_connectivity(neighbours) != 1:
                        continue
                mask[index] = 1
                changed = True
        marked = np.frombuffer(mask, dtype=np.uint8) == 1
        pixels[marked] = background
        LOGGER.debug(f"Thinning pass {iteration} : {int(marked.sum())} pixels deleted.")
    LOGGER.debug(f"Thinning converged after {iteration} passes.")


def _run_midpoints(line: Sequence[int], foreground: int) -> list[int]:
    """
    Find the midpoint of every run of foreground pixels along a line.

    A run ends at the first pixel that is not foreground or at the end of the line. Midpoints are rounded towards the
    start of the run.

    Parameters
    ----------
    line : Sequence[int]
        Pixel values along a row or column.
    foreground : int
        Value of foreground pixels.

    Returns
    -------
    list[int]
        Positions of the midpoints.
    """
    midpoints = []
    start = None
    for position, value in enumerate(line):
        if value == foreground:
            if start is None:
                start = position
        elif start is not None:
            midpoints.append((start + position - 1) // 2)
            start = None
    if start is not None:
        midpoints.append((start + len(line) - 1) // 2)
    return midpoints


def skeletonize_by_midpoint(plane: ImageU8, foreground: int = 255) -> None:
    """
    Approximate the skeleton of a plane by the midpoints of its foreground runs.

    Every row is scanned left to right and every column top to bottom, the midpoint of each run of foreground pixels is
    kept. Interior pixels are then rewritten to foreground where a midpoint was found and to background everywhere else.
    This is much cheaper than ``thinning()`` but does not preserve connectivity. The outermost rows and columns are
    never changed.

    Parameters
    ----------
    plane : ImageU8
        Bilevel plane to skeletonise, modified in place.
    foreground : int
        Value of foreground pixels.
    """
    image = plane.image
    background = 255 - foreground
    mask = np.zeros(image.shape, dtype=bool)
    for row in range(plane.height):
        mask[row, _run_midpoints(image[row, :].tolist(), foreground)] = True
    for col in range(plane.width):
        mask[_run_midpoints(image[:, col].tolist(), foreground), col] = True
    LOGGER.debug(f"Midpoint skeleton has {int(mask.sum())} pixels.")
    image[1:-1, 1:-1] = np.where(mask[1:-1, 1:-1], foreground, background).astype(np.uint8)


class getSkeleton:  # pylint: disable=too-few-public-methods,invalid-name
    """
    Class skeletonising image planes.

    Parameters
    ----------
    plane : ImageU8
        Bilevel plane to skeletonise.
    method : str
        Method for skeletonizing. Options 'hilditch' (default), 'midpoint', 'zhang', 'lee', 'medial_axis' and 'thin'.
    foreground : int
        Value of foreground pixels, all other values are treated as background.
    """

    def __init__(self, plane: ImageU8, method: str = "hilditch", foreground: int = 255):
        """
        Initialise the class.

        The 'hilditch' and 'midpoint' methods are implemented here, the remainder are thin wrappers to the methods
        provided by the `skimage.morphology
        <https://scikit-image.org/docs/stable/api/skimage.morphology.html?highlight=skeletonize>`_ module.

        Parameters
        ----------
        plane : ImageU8
            Bilevel plane to skeletonise.
        method : str
            Method for skeletonizing. Options 'hilditch' (default), 'midpoint', 'zhang', 'lee', 'medial_axis' and
            'thin'.
        foreground : int
            Value of foreground pixels, all other values are treated as background.
        """
        self.plane = plane
        self.method = method
        self.foreground = foreground

    def get_skeleton(self) -> npt.NDArray:
        """
        Skeletonise the plane in place.

        Returns
        -------
        npt.NDArray
            Two dimensional view of the skeletonised plane.
        """
        self._get_skeletonize()(self.plane, self.foreground)
        return self.plane.image

    def _get_skeletonize(self) -> Callable:
        """
        Determine which skeletonise method to use.

        Returns
        -------
        Callable
            Returns the function appropriate for the required skeletonizing method.
        """
        if self.method == "hilditch":
            return thinning
        if self.method == "midpoint":
            return skeletonize_by_midpoint
        if self.method == "zhang":
            return self._skeletonize_zhang
        if self.method == "lee":
            return self._skeletonize_lee
        if self.method == "medial_axis":
            return self._skeletonize_medial_axis
        if self.method == "thin":
            return self._skeletonize_thin
        raise ValueError(self.method)

    @staticmethod
    def _apply_binary(plane: ImageU8, foreground: int, function: Callable[[npt.NDArray], npt.NDArray]) -> None:
        """
        Run a function of a boolean mask over the foreground of a plane and write the result back.

        Parameters
        ----------
        plane : ImageU8
            Plane to skeletonise, modified in place.
        foreground : int
            Value of foreground pixels.
        function : Callable[[npt.NDArray], npt.NDArray]
            Function taking and returning a boolean mask.
        """
        skeleton = function(plane.image == foreground)
        plane.image[...] = np.where(skeleton, foreground, 255 - foreground).astype(np.uint8)

    @staticmethod
    def _skeletonize_zhang(plane: ImageU8, foreground: int) -> None:
        """
        Use scikit-image implementation of the Zhang skeletonisation method.

        Parameters
        ----------
        plane : ImageU8
            Plane to skeletonise, modified in place.
        foreground : int
            Value of foreground pixels.
        """
        getSkeleton._apply_binary(plane, foreground, lambda mask: skeletonize(mask, method="zhang"))

    @staticmethod
    def _skeletonize_lee(plane: ImageU8, foreground: int) -> None:
        """
        Use scikit-image implementation of the Lee skeletonisation method.

        Parameters
        ----------
        plane : ImageU8
            Plane to skeletonise, modified in place.
        foreground : int
            Value of foreground pixels.
        """
        getSkeleton._apply_binary(plane, foreground, lambda mask: skeletonize(mask, method="lee"))

    @staticmethod
    def _skeletonize_medial_axis(plane: ImageU8, foreground: int) -> None:
        """
        Use scikit-image implementation of the Medial axis skeletonisation method.

        Parameters
        ----------
        plane : ImageU8
            Plane to skeletonise, modified in place.
        foreground : int
            Value of foreground pixels.
        """
        getSkeleton._apply_binary(plane, foreground, lambda mask: medial_axis(mask, return_distance=False))

    @staticmethod
    def _skeletonize_thin(plane: ImageU8, foreground: int) -> None:
        """
        Use scikit-image implementation of the thinning skeletonisation method.

        Parameters
        ----------
        plane : ImageU8
            Plane to skeletonise, modified in place.
        foreground : int
            Value of foreground pixels.
        """
        getSkeleton._apply_binary(plane, foreground, thin)
