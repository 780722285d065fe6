"""Functions and tools for working with configuration files."""

import logging
from argparse import Namespace
from collections.abc import MutableMapping
from datetime import datetime
from pathlib import Path
from pkgutil import get_data
from typing import TypeVar

import yaml

from smartimage import CONFIG_DOCUMENTATION_REFERENCE
from smartimage.io import read_yaml
from smartimage.logs.logs import LOGGER_NAME
from smartimage.utils import convert_path

MutableMappingType = TypeVar("MutableMappingType", bound="MutableMapping")

LOGGER = logging.getLogger(LOGGER_NAME)


def load_default_config() -> dict:
    """
    Load the default configuration shipped with the package.

    Returns
    -------
    dict
        The default configuration dictionary.
    """
    return yaml.full_load(get_data(package="smartimage", resource="default_config.yaml"))


def reconcile_config_args(args: Namespace | None) -> dict:
    """
    Reconcile command line arguments with the default configuration.

    Command line arguments take precedence over the default configuration. If a partial configuration file is specified
    (with '-c' or '--config-file') the defaults are over-ridden by these values (internally the configuration
    dictionary is updated with these values). Any other command line arguments take precedence over both the default
    and those supplied in a configuration file (again the dictionary is updated).

    The final configuration should be validated before processing begins.

    Parameters
    ----------
    args : Namespace | None
        Command line arguments passed into smartimage.

    Returns
    -------
    dict
        The configuration dictionary.
    """
    default_config = load_default_config()
    if args is not None and getattr(args, "config_file", None) is not None:
        config = read_yaml(str(args.config_file)) or {}
        # Make sure to prioritise the loaded config, so it overrides the default
        config = merge_mappings(map1=default_config, map2=config)
    else:
        config = default_config

    # Override the config with command line arguments passed in, eg --output-dir ./output/
    if args is not None:
        config = update_config(config, args)
    config["base_dir"] = convert_path(config["base_dir"])
    config["output_dir"] = convert_path(config["output_dir"])
    return config


def merge_mappings(map1: MutableMappingType, map2: MutableMappingType) -> MutableMappingType:
    """
    Merge two mappings (dictionaries), with priority given to the second mapping.

    Note: Using a Mapping should make this robust to any mapping type, not just dictionaries. MutableMapping was needed
    as Mapping is not a mutable type, and this function needs to be able to change the dictionaries.

    Parameters
    ----------
    map1 : MutableMapping
        First mapping to merge, with secondary priority.
    map2 : MutableMapping
        Second mapping to merge, with primary priority.

    Returns
    -------
    dict
        Merged dictionary.
    """
    for key, value in map2.items():
        # If the value is another mapping, then recurse
        if isinstance(value, MutableMapping):
            map1[key] = merge_mappings(map1.get(key, {}), value)
        else:
            map1[key] = value
    return map1


def update_config(config: dict, args: dict | Namespace) -> dict:
    """
    Update the configuration with any arguments.

    Arguments matching a top level key replace its value. Arguments for nested options are named by joining the keys
    with underscores, e.g. ``skeletonize_method`` updates ``config["skeletonize"]["method"]``. Arguments that are
    ``None`` are ignored.

    Parameters
    ----------
    config : dict
        Dictionary of configuration (typically read from YAML file specified with '-c/--config <filename>').
    args : dict | Namespace
        Command line arguments.

    Returns
    -------
    dict
        Dictionary updated with command arguments.
    """
    args = vars(args) if isinstance(args, Namespace) else args

    for arg_key, arg_value in args.items():
        if isinstance(arg_value, dict):
            update_config(config, arg_value)
        elif arg_value is None:
            continue
        elif arg_key in config and not isinstance(config[arg_key], dict):
            original_value = config[arg_key]
            config[arg_key] = arg_value
            LOGGER.debug(f"Updated config config[{arg_key}] : {original_value} > {arg_value} ")
        else:
            for section, options in config.items():
                if isinstance(options, dict) and arg_key.startswith(f"{section}_"):
                    update_config(options, {arg_key.removeprefix(f"{section}_"): arg_value})
    if "base_dir" in config:
        config["base_dir"] = convert_path(config["base_dir"])
    if "output_dir" in config:
        config["output_dir"] = convert_path(config["output_dir"])
    return config


def write_config_with_comments(args: Namespace = None) -> None:
    """
    Write a sample configuration with in-line comments.

    This function is not designed to be used interactively but can be, just call it with a Namespace holding
    'output_dir' and 'filename' and it will write the default configuration.

    Parameters
    ----------
    args : Namespace
        A Namespace object parsed from argparse with values for 'output_dir' and 'filename'.
    """
    output_dir = Path("./") if getattr(args, "output_dir", None) is None else Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    filename = getattr(args, "filename", None)
    filename = "config.yaml" if filename is None else str(filename)
    try:
        config = get_data(package="smartimage", resource="default_config.yaml")
    except FileNotFoundError as exc:
        raise FileNotFoundError("There is no configuration for smartimage called 'default_config.yaml'") from exc

    config_path = output_dir / filename if filename.endswith((".yaml", ".yml")) else output_dir / f"{filename}.yaml"

    with config_path.open("w", encoding="utf-8") as f:
        f.write(f"# Config file generated {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"{CONFIG_DOCUMENTATION_REFERENCE}")
        f.write(config.decode("utf-8"))

    LOGGER.info(f"A sample configuration has been written to : {str(config_path)}")
