"""Test the config module function(s)."""

import argparse
import logging
from pathlib import Path

import pytest

from smartimage.config import (
    load_default_config,
    merge_mappings,
    reconcile_config_args,
    update_config,
    write_config_with_comments,
)
from smartimage.io import read_yaml
from smartimage.logs.logs import LOGGER_NAME
from smartimage.validation import DEFAULT_CONFIG_SCHEMA, validate_config


def test_load_default_config() -> None:
    """Test the default configuration has every section."""
    config = load_default_config()
    assert set(config.keys()) == {
        "base_dir",
        "output_dir",
        "log_level",
        "cores",
        "file_ext",
        "preprocess",
        "uniform_blocks",
        "skeletonize",
    }
    assert config["skeletonize"]["method"] == "hilditch"


def test_reconcile_config_args_no_config() -> None:
    """Test the handling of config file function with no config."""
    args = argparse.Namespace(config_file=None, module="process")
    config = reconcile_config_args(args=args)

    assert config["base_dir"] == Path.cwd()
    assert isinstance(config["output_dir"], Path)
    validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")


def test_reconcile_config_args_none() -> None:
    """Test the default configuration is returned when there are no arguments."""
    config = reconcile_config_args(args=None)
    validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")


def test_reconcile_config_args_no_config_with_overrides() -> None:
    """Test the handle config file function with no config and overrides."""
    args = argparse.Namespace(
        config_file=None,
        output_dir="./dummy_output_dir",
        skeletonize_method="midpoint",
        preprocess_gaussian_blur_sigma=2.5,
        uniform_blocks_run=True,
        module="process",
    )
    config = reconcile_config_args(args=args)

    assert config["output_dir"] == Path("./dummy_output_dir")
    assert config["skeletonize"]["method"] == "midpoint"
    assert config["preprocess"]["gaussian_blur"]["sigma"] == 2.5
    assert config["uniform_blocks"]["run"] is True
    validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")


def test_reconcile_config_args_partial_config(tmp_path: Path) -> None:
    """Test the reconcile_config_args function with a partial config and overrides."""
    config_file = tmp_path / "partial.yaml"
    config_file.write_text(
        "log_level: debug\nskeletonize:\n  method: zhang\npreprocess:\n  binarise:\n    threshold: 64\n",
        encoding="utf-8",
    )
    args = argparse.Namespace(config_file=config_file, output_dir="./dummy_output_dir", skeletonize_method="lee")
    config = reconcile_config_args(args=args)

    # Check that the partial config has overridden the default config
    assert config["log_level"] == "debug"
    assert config["preprocess"]["binarise"]["threshold"] == 64
    # Check values not in the partial config retain their defaults
    assert config["preprocess"]["binarise"]["run"] is True
    assert config["skeletonize"]["foreground"] == 255
    # Check that the overrides take precedence over the partial config
    assert config["skeletonize"]["method"] == "lee"
    assert config["output_dir"] == Path("./dummy_output_dir")
    validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")


def test_reconcile_config_args_empty_config(tmp_path: Path) -> None:
    """Test an empty configuration file leaves the defaults in place."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("", encoding="utf-8")
    config = reconcile_config_args(args=argparse.Namespace(config_file=config_file))
    validate_config(config, schema=DEFAULT_CONFIG_SCHEMA, config_type="YAML configuration file")


@pytest.mark.parametrize(
    ("dict1", "dict2", "expected_merged_dict"),
    [
        pytest.param(
            {"a": 1, "b": 2},
            {"c": 3, "d": 4},
            {"a": 1, "b": 2, "c": 3, "d": 4},
            id="two dicts, no common keys",
        ),
        pytest.param(
            {"a": 1, "b": 2},
            {"b": 3, "c": 4},
            {"a": 1, "b": 3, "c": 4},
            id="two dicts, one common key, testing priority of second dict",
        ),
        pytest.param(
            {"a": {"aa": 1, "ab": 2}, "b": 2},
            {"a": {"ab": 3, "ac": 4}, "c": 4},
            {"a": {"aa": 1, "ab": 3, "ac": 4}, "b": 2, "c": 4},
            id="nested dicts, one common key in nested dict, testing priority of second dict",
        ),
    ],
)
def test_merge_mappings(dict1: dict, dict2: dict, expected_merged_dict: dict) -> None:
    """Test merging of mappings."""
    merged_dict = merge_mappings(dict1, dict2)
    assert merged_dict == expected_merged_dict


def test_update_config(caplog) -> None:
    """Test updating configuration."""
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    sample_config = {"a": 1, "b": 2, "c": "something", "base_dir": "here", "output_dir": "there"}
    new_values = {"c": "something new"}
    updated_config = update_config(sample_config, new_values)

    assert isinstance(updated_config, dict)
    assert "Updated config config[c] : something > something new" in caplog.text
    assert updated_config["c"] == "something new"
    assert updated_config["base_dir"] == Path("here")


@pytest.mark.parametrize(
    ("args", "section", "key", "expected"),
    [
        pytest.param({"skeletonize_method": "thin"}, "skeletonize", "method", "thin", id="nested option"),
        pytest.param({"uniform_blocks_front_pixel": 0}, "uniform_blocks", "front_pixel", 0, id="underscored section"),
        pytest.param({"preprocess_invert": True}, "preprocess", "invert", True, id="preprocess option"),
        pytest.param({"skeletonize_method": None}, "skeletonize", "method", "hilditch", id="None is ignored"),
    ],
)
def test_update_config_nested(args: dict, section: str, key: str, expected) -> None:
    """Test nested options are addressed by joining the keys with underscores."""
    config = update_config(load_default_config(), args)
    assert config[section][key] == expected


def test_update_config_doubly_nested() -> None:
    """Test options nested two levels deep are updated."""
    config = update_config(
        load_default_config(), {"preprocess_gaussian_blur_run": True, "preprocess_binarise_run": False}
    )
    assert config["preprocess"]["gaussian_blur"]["run"] is True
    assert config["preprocess"]["binarise"]["run"] is False
    assert config["preprocess"]["gaussian_blur"]["sigma"] == 1.4


@pytest.mark.parametrize(
    ("filename", "expected_file"),
    [
        pytest.param(None, "config.yaml", id="default filename"),
        pytest.param("my_config.yaml", "my_config.yaml", id="yaml suffix"),
        pytest.param("my_config", "my_config.yaml", id="no suffix"),
    ],
)
def test_write_config_with_comments(tmp_path: Path, filename: str, expected_file: str) -> None:
    """Test writing of config file with comments."""
    args = argparse.Namespace(filename=filename, output_dir=tmp_path)
    write_config_with_comments(args)

    config_path = tmp_path / expected_file
    assert config_path.exists()
    written = config_path.read_text(encoding="utf-8")
    assert written.startswith("# Config file generated")
    assert "# Options : hilditch, midpoint, zhang, lee, medial_axis, thin" in written
    assert read_yaml(config_path) == read_yaml(Path(__file__).parent.parent / "smartimage" / "default_config.yaml")
