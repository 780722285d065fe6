"""Validation of configuration."""

import logging
import os
from pathlib import Path

from schema import And, Or, Schema, SchemaError

from smartimage.logs.logs import LOGGER_NAME
from smartimage.morphology.skeletonize import SKELETONIZE_METHODS

LOGGER = logging.getLogger(LOGGER_NAME)

# pylint: disable=line-too-long


def validate_config(config: dict, schema: Schema, config_type: str) -> None:
    """
    Validate configuration.

    Parameters
    ----------
    config : dict
        Config dictionary imported by read_yaml() and updated with command line arguments.
    schema : Schema
        A schema against which the configuration is to be compared.
    config_type : str
        Description of of configuration being validated.
    """
    try:
        schema.validate(config)
        LOGGER.info(f"The {config_type} is valid.")
    except SchemaError as schema_error:
        raise SchemaError(
            f"There is an error in your {config_type} configuration. "
            "Please refer to the first error message above for details"
        ) from schema_error


def _byte(name: str) -> And:
    return And(int, lambda n: 0 <= n <= 255, error=f"Invalid value in config for '{name}', valid values are 0-255.")


DEFAULT_CONFIG_SCHEMA = Schema(
    {
        "base_dir": Path,
        "output_dir": Path,
        "log_level": Or(
            "debug",
            "info",
            "warning",
            "error",
            error="Invalid value in config for 'log_level', valid values are 'info' (default), 'debug', 'error' or 'warning",
        ),
        "cores": lambda n: 1 <= n <= os.cpu_count(),
        "file_ext": Or(
            ".npy",
            error="Invalid value in config for 'file_ext', valid values are '.npy'.",
        ),
        "preprocess": {
            "invert": Or(
                True,
                False,
                error="Invalid value in config for 'preprocess.invert', valid values are 'True' or 'False'",
            ),
            "gaussian_blur": {
                "run": Or(
                    True,
                    False,
                    error="Invalid value in config for 'preprocess.gaussian_blur.run', valid values are 'True' or 'False'",
                ),
                "sigma": And(
                    Or(int, float),
                    lambda n: n > 0,
                    error="Invalid value in config for 'preprocess.gaussian_blur.sigma', should be a positive number.",
                ),
                "size": And(
                    int,
                    lambda n: n >= 1,
                    error="Invalid value in config for 'preprocess.gaussian_blur.size', should be an integer >= 1.",
                ),
            },
            "binarise": {
                "run": Or(
                    True,
                    False,
                    error="Invalid value in config for 'preprocess.binarise.run', valid values are 'True' or 'False'",
                ),
                "threshold": _byte("preprocess.binarise.threshold"),
            },
        },
        "uniform_blocks": {
            "run": Or(
                True,
                False,
                error="Invalid value in config for 'uniform_blocks.run', valid values are 'True' or 'False'",
            ),
            "front_pixel": _byte("uniform_blocks.front_pixel"),
            "replaced_pixel": _byte("uniform_blocks.replaced_pixel"),
        },
        "skeletonize": {
            "run": Or(
                True,
                False,
                error="Invalid value in config for 'skeletonize.run', valid values are 'True' or 'False'",
            ),
            "method": Or(
                *SKELETONIZE_METHODS,
                error=f"Invalid value in config for 'skeletonize.method', valid values are {SKELETONIZE_METHODS}",
            ),
            "foreground": _byte("skeletonize.foreground"),
        },
    }
)
