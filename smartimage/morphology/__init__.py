"""Skeletonisation and morphological clean-up of image planes."""

from smartimage.morphology.neighbourhood import detect_connectivity, fill_neighbours
from smartimage.morphology.skeletonize import getSkeleton, skeletonize_by_midpoint, thinning
from smartimage.morphology.uniform import remove_uniform_blocks

__all__ = [
    "detect_connectivity",
    "fill_neighbours",
    "getSkeleton",
    "remove_uniform_blocks",
    "skeletonize_by_midpoint",
    "thinning",
]
