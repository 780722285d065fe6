"""Local 8-neighbourhood of a pixel and its connectivity number."""

from collections.abc import Sequence


def neighbour_offsets(width: int) -> tuple[int, ...]:
    """
    Linear offsets of the eight neighbours of a pixel in a row-major plane.

    The neighbours are ordered east, north-east, north, north-west, west, south-west, south and south-east, the layout
    and indices being

        [[p3, p2, p1],
         [p4, P,  p0],
         [p5, p6, p7]]

    Parameters
    ----------
    width : int
        Number of columns in the plane.

    Returns
    -------
    tuple[int, ...]
        Offsets for p0 (east) to p7 (south-east).
    """
    return (1, 1 - width, -width, -1 - width, -1, -1 + width, width, 1 + width)


def fill_neighbours(pixels: Sequence[int], index: int, width: int, foreground: int = 255) -> list[int]:
    """
    Encode the eight neighbours of a pixel relative to the foreground.

    The encoding is the complement of the binary image, foreground neighbours are ``0`` and all others ``1``, which
    makes the connectivity number in ``detect_connectivity()`` a simple sum of products.

    No bounds checking is done, the pixel at ``index`` must not lie on the edge of the plane.

    Parameters
    ----------
    pixels : Sequence[int]
        Row-major, linear, pixel values of the plane.
    index : int
        Linear index of the (interior) pixel.
    width : int
        Number of columns in the plane.
    foreground : int
        Value of foreground pixels.

    Returns
    -------
    list[int]
        Eight ``0``/``1`` values for p0 (east) to p7 (south-east).
    """
    return [0 if pixels[index + offset] == foreground else 1 for offset in neighbour_offsets(width)]


def detect_connectivity(neighbours: Sequence[int]) -> int:
    """
    Calculate the 8-connectivity number of a pixel.

    (p6 - p6 * p7 * p0) + sum(pk - pk * p(k+1) * p(k+2)) for k in {0, 2, 4}, with ``neighbours`` in the complement
    encoding returned by ``fill_neighbours()``. A pixel whose connectivity number is 1 can be removed without splitting
    or merging the foreground around it.

    Parameters
    ----------
    neighbours : Sequence[int]
        Complement encoded neighbours p0 to p7.

    Returns
    -------
    int
        The connectivity number.
    """
    p0, p1, p2, p3, p4, p5, p6, p7 = neighbours
    return (p6 - p6 * p7 * p0) + (p0 - p0 * p1 * p2) + (p2 - p2 * p3 * p4) + (p4 - p4 * p5 * p6)
