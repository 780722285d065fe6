"""Suppress uniform 3x3 blocks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from smartimage.logs.logs import LOGGER_NAME

if TYPE_CHECKING:
    from smartimage.plane import ImageU8

LOGGER = logging.getLogger(LOGGER_NAME)


def remove_uniform_blocks(plane: ImageU8, front_pixel: int, replaced_pixel: int) -> None:
    """
    Rewrite the centre of every 3x3 block consisting entirely of ``front_pixel``.

    All blocks are classified against the original plane before any centre is rewritten, so the result does not depend
    on the order blocks are visited. Only interior pixels can be the centre of a block, the outermost rows and columns
    are never changed.

    Parameters
    ----------
    plane : ImageU8
        Plane to process, modified in place.
    front_pixel : int
        Value every pixel of a block must have.
    replaced_pixel : int
        Value written to the centre of uniform blocks.
    """
    if plane.height < 3 or plane.width < 3:
        return
    matches = plane.image == front_pixel
    uniform = np.ones((plane.height - 2, plane.width - 2), dtype=bool)
    for row_shift in range(3):
        for col_shift in range(3):
            uniform &= matches[row_shift : row_shift + plane.height - 2, col_shift : col_shift + plane.width - 2]
    LOGGER.debug(f"Found {int(uniform.sum())} uniform blocks of {front_pixel}.")
    plane.image[1:-1, 1:-1][uniform] = replaced_pixel
