"""Test logging in config.py."""

import logging

import pytest
import pytest_mock

from guardpy.core import config


def test_get_logger(caplog: pytest.LogCaptureFixture) -> None:
    """Test the guardpy logger with level set to default 20 (info)."""
    if logging.getLogger("guardpy").handlers:
        logging.getLogger("guardpy").handlers.clear()
    logger = config.get_logger()

    logger.debug("Debug message here.")
    logger.info("Info message here.")
    logger.warning("Warning message here.")

    assert logger.getEffectiveLevel() == 20
    assert "Debug message here" not in caplog.text
    assert "Info message here." in caplog.text
    assert "Warning message here." in caplog.text


def test_get_logger_second_call() -> None:
    """Test get logger when a handler already exists."""
    logger = config.get_logger()
    second_logger = config.get_logger()

    assert len(logger.handlers) == len(second_logger.handlers) == 1
    assert logger.handlers[0] is second_logger.handlers[0]
    assert logger is second_logger


def test_get_version_not_installed(mocker: pytest_mock.MockerFixture) -> None:
    """Test the version fallback when the package metadata is missing."""
    mocker.patch.object(
        config.metadata,
        "version",
        side_effect=config.metadata.PackageNotFoundError("guardpy"),
    )

    assert config.get_version() == "Version unknown"
