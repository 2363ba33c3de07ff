import logging
from unittest import mock

import pytest
from pythonjsonlogger.json import JsonFormatter

from dockerbuild.clis.utils import BaseParams, executor_context
from dockerbuild.configuration import WorkspaceConfig
from dockerbuild.loggers import (
    LOGGING_ENV_VAR,
    LOGGING_FMT_ENV_VAR,
    initialize_global_loggers,
    logger,
    resolve_level,
    set_log_level,
)


@pytest.fixture(autouse=True)
def restore_logger(monkeypatch):
    monkeypatch.delenv(LOGGING_ENV_VAR, raising=False)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


def test_resolve_level():
    assert resolve_level() == logging.INFO
    assert resolve_level(1) == logging.DEBUG
    assert resolve_level(3, configured=logging.ERROR) == logging.DEBUG
    assert resolve_level(0, configured=logging.WARNING) == logging.WARNING


def test_resolve_level_from_env(monkeypatch):
    monkeypatch.setenv(LOGGING_ENV_VAR, "40")
    assert resolve_level() == logging.ERROR


def test_set_log_level():
    set_log_level(configured=logging.WARNING)
    assert logger.level == logging.WARNING
    set_log_level(2)
    assert logger.level == logging.DEBUG


def test_workspace_level_applied_without_verbosity(tmp_path):
    workspace = WorkspaceConfig(root=str(tmp_path), log_level=logging.ERROR)
    executor_context(BaseParams(verbose=0), workspace, None)
    assert logger.level == logging.ERROR

    executor_context(BaseParams(verbose=1), workspace, None)
    assert logger.level == logging.DEBUG


def test_logger_does_not_propagate():
    assert logger.name == "dockerbuild"
    assert not logger.propagate


@mock.patch("dockerbuild.loggers.is_rich_logging_enabled", return_value=False)
def test_json_format(_, monkeypatch):
    monkeypatch.setenv(LOGGING_FMT_ENV_VAR, "json")
    initialize_global_loggers()
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)


@mock.patch("dockerbuild.loggers.is_rich_logging_enabled", return_value=False)
def test_plain_format(_, monkeypatch):
    monkeypatch.delenv(LOGGING_FMT_ENV_VAR, raising=False)
    initialize_global_loggers()
    assert not isinstance(logger.handlers[0].formatter, JsonFormatter)
    assert logger.handlers[0].formatter._fmt == "[%(name)s] %(levelname)s %(message)s"
