"""
Entry point for all smartimage programs.

Parses command-line arguments and passes input on to the relevant functions / modules.
"""

import argparse as arg
import sys
from pathlib import Path

from smartimage import __version__, log_smartimage_version, run_modules
from smartimage.config import write_config_with_comments
from smartimage.morphology.skeletonize import SKELETONIZE_METHODS


def create_parser() -> arg.ArgumentParser:
    """
    Create a parser for reading options.

    Creates a parser, with multiple sub-parsers for reading options to run 'smartimage'.

    Returns
    -------
    arg.ArgumentParser
        Argument parser.
    """
    parser = arg.ArgumentParser(
        description="Skeletonise single channel 8-bit planes. Add the name of the program you wish to run."
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"Installed version of smartimage: {__version__}",
        help="Report the current version of smartimage that is installed",
    )
    parser.add_argument(
        "-c",
        "--config-file",
        dest="config_file",
        type=Path,
        required=False,
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "-b",
        "--base-dir",
        dest="base_dir",
        type=Path,
        required=False,
        help="Base directory to scan for planes.",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        type=Path,
        required=False,
        help="Output directory to write results to.",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        dest="log_level",
        type=str,
        required=False,
        help="Logging level to use, default is 'info' for verbose output use 'debug'.",
    )
    parser.add_argument(
        "-j",
        "--cores",
        dest="cores",
        type=int,
        required=False,
        help="Number of CPU cores to use when processing.",
    )
    parser.add_argument(
        "-f",
        "--file-ext",
        dest="file_ext",
        type=str,
        required=False,
        help="File extension to scan for.",
    )

    subparsers = parser.add_subparsers(title="program", description="Available programs, listed below:", dest="module")

    process_parser = subparsers.add_parser(
        "process",
        description="Process planes. Additional arguments over-ride defaults or those in the configuration file.",
        help="Process planes. Additional arguments over-ride defaults or those in the configuration file.",
    )
    process_parser.add_argument(
        "--preprocess-invert",
        dest="preprocess_invert",
        action=arg.BooleanOptionalAction,
        default=None,
        help="Invert planes before processing.",
    )
    process_parser.add_argument(
        "--preprocess-gaussian-blur-run",
        dest="preprocess_gaussian_blur_run",
        action=arg.BooleanOptionalAction,
        default=None,
        help="Whether to blur planes before binarising.",
    )
    process_parser.add_argument(
        "--preprocess-gaussian-blur-sigma",
        dest="preprocess_gaussian_blur_sigma",
        type=float,
        required=False,
        help="Standard deviation of the Gaussian blur in pixels.",
    )
    process_parser.add_argument(
        "--preprocess-gaussian-blur-size",
        dest="preprocess_gaussian_blur_size",
        type=int,
        required=False,
        help="Width of the square Gaussian kernel in pixels.",
    )
    process_parser.add_argument(
        "--preprocess-binarise-run",
        dest="preprocess_binarise_run",
        action=arg.BooleanOptionalAction,
        default=None,
        help="Whether to binarise planes before skeletonising.",
    )
    process_parser.add_argument(
        "--preprocess-binarise-threshold",
        dest="preprocess_binarise_threshold",
        type=int,
        required=False,
        help="Pixels greater than or equal to the threshold become foreground.",
    )
    process_parser.add_argument(
        "--uniform-blocks-run",
        dest="uniform_blocks_run",
        action=arg.BooleanOptionalAction,
        default=None,
        help="Whether to rewrite the centres of uniform 3x3 blocks.",
    )
    process_parser.add_argument(
        "--uniform-blocks-front-pixel",
        dest="uniform_blocks_front_pixel",
        type=int,
        required=False,
        help="Value a 3x3 block must consist of.",
    )
    process_parser.add_argument(
        "--uniform-blocks-replaced-pixel",
        dest="uniform_blocks_replaced_pixel",
        type=int,
        required=False,
        help="Value written to the centre of uniform blocks.",
    )
    process_parser.add_argument(
        "--skeletonize-method",
        dest="skeletonize_method",
        type=str,
        choices=SKELETONIZE_METHODS,
        required=False,
        help=f"Method for skeletonising, options are {', '.join(SKELETONIZE_METHODS)}.",
    )
    process_parser.add_argument(
        "--skeletonize-foreground",
        dest="skeletonize_foreground",
        type=int,
        required=False,
        help="Value of foreground pixels.",
    )
    process_parser.set_defaults(func=run_modules.process)

    create_config_parser = subparsers.add_parser(
        "create-config",
        description="Create a configuration file using the defaults.",
        help="Create a configuration file using the defaults.",
    )
    create_config_parser.add_argument(
        "-f",
        "--filename",
        dest="filename",
        type=Path,
        required=False,
        help="Name of YAML file to save configuration to (default 'config.yaml').",
    )
    create_config_parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        type=Path,
        required=False,
        default="./",
        help="Path to where the YAML file should be saved (default './' the current directory).",
    )
    create_config_parser.set_defaults(func=write_config_with_comments)

    return parser


def entry_point(manually_provided_args=None, testing=False) -> None:
    """
    Entry point for all smartimage programs.

    Main entry point for running 'smartimage' which allows the different programs ('process', 'create-config') to be
    run.

    Parameters
    ----------
    manually_provided_args : None
        Manually provided arguments.
    testing : bool
        Whether testing is being carried out.

    Returns
    -------
    None
        Does not return anything.
    """
    log_smartimage_version()

    parser = create_parser()
    args = parser.parse_args() if manually_provided_args is None else parser.parse_args(manually_provided_args)

    # No program specified, print help and exit
    if not args.module:
        parser.print_help()
        sys.exit()

    if testing:
        return args

    args.func(args)

    return None
