"""Functions for processing planes."""

from __future__ import annotations

import logging
from pathlib import Path

from smartimage.filters import binarise, gaussian_kernel
from smartimage.io import get_out_path, load_plane, save_array
from smartimage.logs.logs import LOGGER_NAME
from smartimage.morphology.skeletonize import getSkeleton
from smartimage.plane import ImageU8
from smartimage.utils import skeleton_statistics

# pylint: disable=broad-except
# pylint: disable=too-many-arguments

LOGGER = logging.getLogger(LOGGER_NAME)


def run_preprocess(plane: ImageU8, filename: str, preprocess_config: dict, foreground: int = 255) -> None:
    """
    Prepare a plane for skeletonisation, optionally inverting, blurring and binarising it.

    Parameters
    ----------
    plane : ImageU8
        Plane to prepare, modified in place.
    filename : str
        Name of the file the plane was loaded from, used in log messages.
    preprocess_config : dict
        Dictionary of options for the preprocessing stage.
    foreground : int
        Value foreground pixels take after binarising.
    """
    if preprocess_config["invert"]:
        plane.invert()
        LOGGER.info(f"[{filename}] : Plane inverted.")
    if preprocess_config["gaussian_blur"]["run"]:
        sigma = preprocess_config["gaussian_blur"]["sigma"]
        size = preprocess_config["gaussian_blur"]["size"]
        plane.apply_convolution(gaussian_kernel(sigma=sigma, size=size))
        LOGGER.info(f"[{filename}] : Gaussian blur applied (sigma : {sigma}; size : {size}).")
    if preprocess_config["binarise"]["run"]:
        binarise(plane, threshold=preprocess_config["binarise"]["threshold"], foreground=foreground)
        LOGGER.info(f"[{filename}] : Binarised at threshold {preprocess_config['binarise']['threshold']}.")


def run_uniform_blocks(plane: ImageU8, filename: str, uniform_blocks_config: dict) -> None:
    """
    Remove the centres of uniform 3x3 blocks if enabled.

    Parameters
    ----------
    plane : ImageU8
        Plane to process, modified in place.
    filename : str
        Name of the file the plane was loaded from, used in log messages.
    uniform_blocks_config : dict
        Dictionary with keys 'run', 'front_pixel' and 'replaced_pixel'.
    """
    if uniform_blocks_config["run"]:
        plane.remove_uniform_blocks(
            front_pixel=uniform_blocks_config["front_pixel"], replaced_pixel=uniform_blocks_config["replaced_pixel"]
        )
        LOGGER.info(f"[{filename}] : Uniform blocks removed.")


def process_plane(
    img_path: Path,
    base_dir: str | Path,
    preprocess_config: dict,
    uniform_blocks_config: dict,
    skeletonize_config: dict,
    output_dir: str | Path = "output",
) -> tuple[Path, dict]:
    """
    Process a single plane, preprocessing, cleaning and skeletonising it.

    A failure at any stage is logged and the remaining stages are skipped, the returned statistics record which stage
    was reached.

    Parameters
    ----------
    img_path : Path
        Path to a '.npy' array holding the plane.
    base_dir : str | Path
        Directory that was searched for files, the output directory mirrors the structure beneath it.
    preprocess_config : dict
        Dictionary of configuration options for the preprocessing stage.
    uniform_blocks_config : dict
        Dictionary of configuration options for the uniform block removal stage.
    skeletonize_config : dict
        Dictionary of configuration options for the skeletonising stage.
    output_dir : str | Path
        Directory to save output to, it will be created if it does not exist.

    Returns
    -------
    tuple[Path, dict]
        The path processed and a dictionary of statistics about the plane.
    """
    img_path = Path(img_path)
    filename = img_path.stem
    foreground = skeletonize_config["foreground"]
    stats = {"image": filename, "basename": str(img_path.parent), "method": skeletonize_config["method"]}
    try:
        plane = load_plane(img_path)
        stats.update({"width": plane.width, "height": plane.height})
        run_preprocess(plane, filename, preprocess_config, foreground=foreground)
        run_uniform_blocks(plane, filename, uniform_blocks_config)
        stats["foreground_before"] = int((plane.image == foreground).sum())
    except Exception as e:
        LOGGER.error(f"[{filename}] : An error occurred while preparing the plane.", exc_info=e)
        stats["status"] = "failed"
        return img_path, stats

    if skeletonize_config["run"]:
        try:
            getSkeleton(plane, method=skeletonize_config["method"], foreground=foreground).get_skeleton()
            LOGGER.info(f"[{filename}] : Skeletonised using '{skeletonize_config['method']}'.")
        except Exception as e:
            LOGGER.error(f"[{filename}] : An error occurred during skeletonising.", exc_info=e)
            stats["status"] = "failed"
            return img_path, stats

    out_path = get_out_path(image_path=img_path, base_dir=Path(base_dir), output_dir=Path(output_dir))
    out_path.mkdir(parents=True, exist_ok=True)
    save_array(plane.image, outpath=out_path, filename=filename, array_type="skeleton")
    stats.update(skeleton_statistics(plane.image, foreground=foreground))
    stats["status"] = "processed"
    return img_path, stats
