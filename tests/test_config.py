"""
Tests for configuration loading and logger setup.
"""

import argparse
import logging
import os

import pytest

from mtxread.utils.config import (
    DEFAULTS,
    build_options,
    load_yaml_into_namespace,
    parse_arguments,
)
from mtxread.utils.logger import setup_logger


class TestConfig:
    def test_default_config_path(self):
        args = parse_arguments([])
        assert os.path.basename(args.config) == "config.yaml"
        assert os.path.exists(args.config)
        assert args.cli_files == []

    def test_default_config_loads(self):
        args = load_yaml_into_namespace(parse_arguments([]).config, parse_arguments([]))
        assert build_options(args) == {"scalar": float, "ndim": 2, "strict": False}
        assert args.banner == "auto"

    def test_yaml_overrides_defaults(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("scalar: int32\nndim: 3\nfiles: [a.mtx]\n")
        args = load_yaml_into_namespace(str(config), parse_arguments(["--config", str(config)]))
        assert args.ndim == 3
        assert args.files == ["a.mtx"]
        assert args.log_level == DEFAULTS["log_level"]

    def test_cli_files_override(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("files: [a.mtx]\n")
        args = parse_arguments(["--config", str(config), "b.mtx", "c.mtx"])
        args = load_yaml_into_namespace(str(config), args)
        assert args.files == ["b.mtx", "c.mtx"]

    def test_empty_yaml(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("")
        args = load_yaml_into_namespace(str(config), argparse.Namespace())
        assert args.scalar == "float"

    def test_yaml_must_be_mapping(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_yaml_into_namespace(str(config), argparse.Namespace())

    @pytest.mark.parametrize(
        "override",
        [{"banner": "maybe"}, {"ndim": 0}, {"scalar": "complex"}, {"files": "a.mtx"}],
    )
    def test_invalid_options(self, override):
        args = argparse.Namespace(**{**DEFAULTS, **override})
        with pytest.raises(ValueError):
            build_options(args)


class TestLogger:
    def test_file_and_console_handlers(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logger("mtxread.test.file", str(log_file), level="warning")
        try:
            assert len(logger.handlers) == 2
            console = next(h for h in logger.handlers if not isinstance(h, logging.FileHandler))
            assert console.level == logging.WARNING
            logger.debug("written to file only")
            for handler in logger.handlers:
                handler.flush()
            assert "written to file only" in log_file.read_text()
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_no_duplicate_handlers(self):
        logger = setup_logger("mtxread.test.dup")
        try:
            setup_logger("mtxread.test.dup")
            assert len(logger.handlers) == 1
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            setup_logger("mtxread.test.level", level="loud")
