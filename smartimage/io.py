"""Functions for reading and writing data."""

import logging
from datetime import datetime
from pathlib import Path

import numpy as np
import numpy.typing as npt
from ruamel.yaml import YAML, YAMLError

from smartimage import CONFIG_DOCUMENTATION_REFERENCE, __version__
from smartimage.logs.logs import LOGGER_NAME
from smartimage.plane import ImageU8

LOGGER = logging.getLogger(LOGGER_NAME)


def read_yaml(filename: str | Path) -> dict:
    """
    Read a YAML file.

    Parameters
    ----------
    filename : Union[str, Path]
        YAML file to read.

    Returns
    -------
    Dict
        Dictionary of the file.
    """
    with Path(filename).open(encoding="utf-8") as f:
        try:
            yaml_file = YAML(typ="safe")
            return yaml_file.load(f)
        except YAMLError as exception:
            LOGGER.error(exception)
            return {}


def get_date_time() -> str:
    """
    Get a date and time for adding to generated files or logging.

    Returns
    -------
    str
        A string of the current date and time, formatted appropriately.
    """
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def write_yaml(
    config: dict,
    output_dir: str | Path,
    config_file: str = "config.yaml",
    header_message: str = None,
) -> None:
    """
    Write a configuration (stored as a dictionary) to a YAML file.

    Parameters
    ----------
    config : dict
        Configuration dictionary.
    output_dir : Union[str, Path]
        Path to save the dictionary to as a YAML file (it will be called 'config.yaml').
    config_file : str
        Filename to write to.
    header_message : str
        String to write to the header message of the YAML file.
    """
    output_config = Path(output_dir) / config_file
    # Revert PosixPath items to string
    config = path_to_str(config)

    if header_message:
        header = f"# {header_message} : {get_date_time()}\n" + CONFIG_DOCUMENTATION_REFERENCE
    else:
        header = f"# Configuration from smartimage run completed : {get_date_time()}\n" + CONFIG_DOCUMENTATION_REFERENCE
    header += f"# smartimage version: {__version__}\n"

    output_config.write_text(header, encoding="utf-8")

    yaml = YAML(typ="safe")
    with output_config.open("a", encoding="utf-8") as f:
        try:
            yaml.dump(config, f)
        except YAMLError as exception:
            LOGGER.error(exception)


def save_array(array: npt.NDArray, outpath: Path, filename: str, array_type: str) -> Path:
    """
    Save a Numpy array to disk.

    Parameters
    ----------
    array : npt.NDArray
        Numpy array to be saved.
    outpath : Path
        Location array should be saved.
    filename : str
        Filename of the current image from which the array is derived.
    array_type : str
        Short string describing the array type e.g. skeleton. Ideally should not have periods or spaces in (use
        underscores '_' instead).

    Returns
    -------
    Path
        Path the array was saved to.
    """
    outfile = Path(outpath) / f"{filename}_{array_type}.npy"
    np.save(outfile, array)
    LOGGER.info(f"[{filename}] Numpy array saved to : {outfile}")
    return outfile


def load_array(array_path: str | Path) -> npt.NDArray:
    """
    Load a Numpy array from file.

    Should have been saved using save_array() or numpy.save().

    Parameters
    ----------
    array_path : Union[str, Path]
        Path to the Numpy array on disk.

    Returns
    -------
    npt.NDArray
        Returns the loaded Numpy array.
    """
    return np.load(Path(array_path))


def load_plane(array_path: str | Path) -> ImageU8:
    """
    Load a plane from a Numpy array on disk.

    Two dimensional arrays are loaded as they are, RGB and RGBA arrays are converted to grayscale.

    Parameters
    ----------
    array_path : str | Path
        Path to the Numpy array on disk.

    Returns
    -------
    ImageU8
        The loaded plane.
    """
    array = load_array(array_path)
    if array.ndim == 3:
        LOGGER.debug(f"[{Path(array_path).stem}] Converting array of shape {array.shape} to grayscale.")
        return ImageU8.from_rgb(array)
    return ImageU8.from_array(array)


def path_to_str(config: dict) -> dict:
    """
    Recursively traverse a dictionary and convert any Path() objects to strings for writing to YAML.

    Parameters
    ----------
    config : dict
        Dictionary to be converted.

    Returns
    -------
    Dict:
        The same dictionary with any Path() objects converted to string.
    """
    for key, value in config.items():
        if isinstance(value, dict):
            path_to_str(value)
        elif isinstance(value, Path):
            config[key] = str(value)

    return config


def get_out_path(image_path: Path = None, base_dir: Path = None, output_dir: Path = None) -> Path:
    """
    Add the image path relative to the base directory to the output directory.

    Parameters
    ----------
    image_path : Path
        The path of the current image.
    base_dir : Path
        Directory to recursively search for files.
    output_dir : Path
        The output directory specified in the configuration file.

    Returns
    -------
    Path
        The output path that mirrors the input path structure.
    """
    # If image_path is relative and doesn't include base_dir then a ValueError is raised, in which
    # case we just want to append the image_path to the output_dir
    try:
        return output_dir / image_path.relative_to(base_dir).parent
    except ValueError:
        return output_dir / image_path.parent
    # AttributeError is raised if image_path is a string (since it isn't a Path() object)
    except AttributeError:
        LOGGER.error("A string form of a Path has been passed to 'get_out_path()' for image_path")
        raise


def find_files(base_dir: str | Path = None, file_ext: str = ".npy") -> list:
    """
    Recursively scan the specified directory for arrays with the given file extension.

    Parameters
    ----------
    base_dir : Union[str, Path]
        Directory to recursively search for files, if not specified the current directory is scanned.
    file_ext : str
        File extension to search for.

    Returns
    -------
    List
        List of files found with the extension in the given directory.
    """
    base_dir = Path("./") if base_dir is None else Path(base_dir)
    return sorted(base_dir.glob("**/*" + file_ext))
