"""Tests for logging configuration."""

import json
import logging
import sys

import pytest
from loguru import logger

from recordstore.runtime.config.config_data import ConfigData
from recordstore.runtime.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_json_file_sink(tmp_path):
    log_file = tmp_path / "logs" / "recordstore.log"
    config = ConfigData()
    config.logging.file = str(log_file)
    config.logging.format = "json"

    configure_logging(config)
    logger.info("stored {}", "Dune")
    logger.complete()
    logger.remove()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert any(record["record"]["message"] == "stored Dune" for record in records)


def test_standard_logging_is_intercepted(tmp_path):
    log_file = tmp_path / "std.log"
    config = ConfigData()
    config.logging.file = str(log_file)

    configure_logging(config)
    logging.getLogger("some.library").warning("from the standard library")
    logger.complete()
    logger.remove()

    assert "from the standard library" in log_file.read_text()


def test_sqlalchemy_quiet_without_echo():
    configure_logging(ConfigData())

    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
