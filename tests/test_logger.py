"""Tests for the loguru sink setup."""

import pytest

from omnibox import logger as omnibox_logger


@pytest.fixture
def restore_sinks(monkeypatch):
    original = omnibox_logger._log_file_path
    monkeypatch.setattr(omnibox_logger, "_log_file_path", None)
    yield
    omnibox_logger.setup_logger(log_file=original)


def test_bound_name_is_written_to_file(tmp_path, restore_sinks):
    log_file = tmp_path / "omnibox-test.log"
    omnibox_logger.setup_logger(log_file=str(log_file), log_level="DEBUG")

    omnibox_logger.get_logger("providers.search").debug("fetched 3 suggestion(s)")

    content = log_file.read_text(encoding="utf-8")
    assert "providers.search:" in content
    assert "fetched 3 suggestion(s)" in content


def test_log_file_from_environment_is_remembered(tmp_path, monkeypatch, restore_sinks):
    log_file = tmp_path / "from-env.log"
    monkeypatch.setenv("OMNIBOX_LOG_FILE", str(log_file))

    omnibox_logger.setup_logger()
    omnibox_logger.setup_logger(log_level="WARNING")
    omnibox_logger.get_logger().warning("still here")

    assert "omnibox:" in log_file.read_text(encoding="utf-8")
