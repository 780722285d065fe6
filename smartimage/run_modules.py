"""
Run smartimage modules.

This provides entry points for running smartimage as a command line programme. Each function within this module is a
wrapper which runs functions from the ''processing'' module in parallel.
"""

import argparse
import logging
import sys
from functools import partial
from multiprocessing import Pool
from pprint import pformat

import pandas as pd
from tqdm import tqdm

from smartimage import __version__
from smartimage.config import reconcile_config_args
from smartimage.io import find_files, write_yaml
from smartimage.logs.logs import LOGGER_NAME
from smartimage.processing import process_plane
from smartimage.validation import DEFAULT_CONFIG_SCHEMA, validate_config

# We already setup the logger in __init__.py and it is idempotent so calling it here returns the same object as from
# __init__.py
LOGGER = logging.getLogger(LOGGER_NAME)


def _set_logging(log_level: str | None) -> None:
    """
    Set the logging level.

    Parameters
    ----------
    log_level : str
        String for the desired log-level.
    """
    if log_level == "warning":
        LOGGER.setLevel("WARNING")
    elif log_level == "error":
        LOGGER.setLevel("ERROR")
    elif log_level == "debug":
        LOGGER.setLevel("DEBUG")
    else:
        LOGGER.setLevel("INFO")


def _log_setup(config: dict, args: argparse.Namespace | None, img_files: list) -> None:
    """
    Log the current configuration.

    Parameters
    ----------
    config : dict
        Dictionary of configuration options.
    args : argparse.Namespace | None
        Arguments function was invoked with.
    img_files : list
        List of files that have been found.
    """
    LOGGER.info(f"Configuration file loaded from      : {getattr(args, 'config_file', None)}")
    LOGGER.info(f"Scanning for planes in              : {config['base_dir']}")
    LOGGER.info(f"Output directory                    : {str(config['output_dir'])}")
    LOGGER.info(f"Looking for planes with extension   : {config['file_ext']}")
    LOGGER.info(f"Planes with extension {config['file_ext']} in {config['base_dir']} : {len(img_files)}")
    if len(img_files) == 0:
        LOGGER.error(f"No planes with extension {config['file_ext']} in {config['base_dir']}")
        LOGGER.error("Please check your configuration and directories.")
        sys.exit()
    LOGGER.info(f"Skeletonising method                : {config['skeletonize']['method']}")
    LOGGER.debug(f"Configuration after update         : \n{pformat(config, indent=4)}")  # noqa: T203


def _parse_configuration(args: argparse.Namespace | None = None) -> tuple[dict, list]:
    """
    Load configurations and validate them.

    Parameters
    ----------
    args : argparse.Namespace | None
        Arguments.

    Returns
    -------
    tuple[dict, list]
        Returns the dictionary of configuration options and a list of files found on the input path.
    """
    config = reconcile_config_args(args=args)
    validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")
    _set_logging(config["log_level"])
    config["output_dir"].mkdir(parents=True, exist_ok=True)
    img_files = find_files(config["base_dir"], file_ext=config["file_ext"])
    _log_setup(config, args, img_files)
    return config, img_files


def process(args: argparse.Namespace | None = None) -> None:
    """
    Find and process all files.

    Parameters
    ----------
    args : argparse.Namespace | None
        Arguments.
    """
    config, img_files = _parse_configuration(args)
    processing_function = partial(
        process_plane,
        base_dir=config["base_dir"],
        preprocess_config=config["preprocess"],
        uniform_blocks_config=config["uniform_blocks"],
        skeletonize_config=config["skeletonize"],
        output_dir=config["output_dir"],
    )

    results = {}
    with Pool(processes=config["cores"]) as pool:
        with tqdm(
            total=len(img_files),
            desc=f"Processing planes from {config['base_dir']}, results are under {config['output_dir']}",
        ) as pbar:
            for img, stats in pool.imap_unordered(processing_function, img_files):
                results[str(img)] = stats
                pbar.update()
                LOGGER.info(f"[{img.name}] Processing completed.")

    results_df = pd.DataFrame.from_records([results[key] for key in sorted(results)])
    results_df.to_csv(config["output_dir"] / "skeleton_statistics.csv", index=False)
    LOGGER.info(f"Saving skeleton statistics to : {config['output_dir']}/skeleton_statistics.csv")

    write_yaml(config, output_dir=config["output_dir"])
    images_processed = int((results_df["status"] == "processed").sum())
    LOGGER.info(
        f"\n\n~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~ COMPLETE ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~\n\n"
        f"  smartimage Version          : {__version__}\n"
        f"  Base Directory              : {config['base_dir']}\n"
        f"  File Extension              : {config['file_ext']}\n"
        f"  Files Found                 : {len(img_files)}\n"
        f"  Successfully Processed      : {images_processed} ({(images_processed * 100) / len(img_files)}%)\n"
        f"  Statistics                  : {str(config['output_dir'])}/skeleton_statistics.csv\n"
        f"  Configuration               : {config['output_dir']}/config.yaml\n\n"
        f"~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~\n"
    )
