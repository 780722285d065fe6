"""Test end-to-end running of smartimage."""

import argparse
import logging
from pathlib import Path

import pandas as pd
import pytest

from smartimage.entry_point import entry_point
from smartimage.io import read_yaml
from smartimage.logs.logs import LOGGER_NAME
from smartimage.run_modules import _parse_configuration, _set_logging


@pytest.mark.parametrize(
    ("log_level", "effective_level"),
    [
        pytest.param("debug", 10, id="log level debug"),
        pytest.param("info", 20, id="log level info"),
        pytest.param("warning", 30, id="log level warning"),
        pytest.param("error", 40, id="log level error"),
    ],
)
def test_set_logging(log_level: str, effective_level: int) -> None:
    """Test setting log-level."""
    LOGGER = logging.getLogger(LOGGER_NAME)
    _set_logging(log_level)
    assert LOGGER.getEffectiveLevel() == effective_level
    _set_logging("info")


@pytest.mark.parametrize("option", [("-h"), ("--help")])
def test_process_help(capsys, option) -> None:
    """Test the -h/--help flag to process."""
    try:
        entry_point(manually_provided_args=["process", option])
    except SystemExit:
        pass
    assert "Process planes." in capsys.readouterr().out


def test_parse_configuration(npy_dir: Path, tmp_path: Path) -> None:
    """Test the configuration is reconciled and files are found."""
    args = argparse.Namespace(config_file=None, base_dir=npy_dir, output_dir=tmp_path / "output")
    config, img_files = _parse_configuration(args)
    assert config["base_dir"] == npy_dir
    assert (tmp_path / "output").is_dir()
    assert len(img_files) == 2


def test_parse_configuration_no_files(tmp_path: Path, caplog) -> None:
    """Test the program exits when there are no files to process."""
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    (tmp_path / "empty").mkdir()
    args = argparse.Namespace(config_file=None, base_dir=tmp_path / "empty", output_dir=tmp_path / "output")
    with pytest.raises(SystemExit):
        _parse_configuration(args)
    assert "No planes with extension .npy" in caplog.text


def test_process(npy_dir: Path, tmp_path: Path, caplog) -> None:
    """Test processing a directory of planes from the command line."""
    caplog.set_level(logging.INFO)
    output_dir = tmp_path / "output"
    entry_point(
        manually_provided_args=[
            "--base-dir",
            f"{npy_dir}",
            "--output-dir",
            f"{output_dir}",
            "process",
            "--skeletonize-method",
            "midpoint",
        ]
    )
    assert "Looking for planes with extension   : .npy" in caplog.text
    assert "[bar.npy] Processing completed." in caplog.text
    assert "[bar_copy.npy] Processing completed." in caplog.text
    assert "~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~ COMPLETE ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~" in caplog.text
    assert "Successfully Processed      : 2 (100.0%)" in caplog.text

    assert (output_dir / "bar_skeleton.npy").is_file()
    assert (output_dir / "nested" / "bar_copy_skeleton.npy").is_file()

    statistics = pd.read_csv(output_dir / "skeleton_statistics.csv")
    assert list(statistics["image"]) == ["bar", "bar_copy"]
    assert set(statistics["status"]) == {"processed"}
    assert set(statistics["method"]) == {"midpoint"}
    assert list(statistics["foreground_before"]) == [48, 48]

    config = read_yaml(output_dir / "config.yaml")
    assert config["skeletonize"]["method"] == "midpoint"
    assert config["base_dir"] == str(npy_dir)


def test_process_debug(npy_dir: Path, tmp_path: Path, caplog) -> None:
    """Test processing with debugging and check DEBUG messages are logged."""
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        entry_point(
            manually_provided_args=[
                "-l",
                "debug",
                "--base-dir",
                f"{npy_dir}",
                "--output-dir",
                f"{tmp_path / 'output'}",
                "process",
            ]
        )
        assert "Configuration after update         :" in caplog.text
        assert "~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~ COMPLETE ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~" in caplog.text
    _set_logging("info")
