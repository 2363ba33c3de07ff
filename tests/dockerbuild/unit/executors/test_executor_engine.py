from unittest.mock import MagicMock

import pytest

from dockerbuild.exceptions.user import DockerBuildAssertion
from dockerbuild.executors import (
    AnalyzeExecutor,
    BuildExecutor,
    ExecutionResult,
    ExecutorContext,
    ExecutorEngine,
)
from dockerbuild.executors.base import Executor


def test_default_executors_registered():
    assert isinstance(ExecutorEngine.get("build"), BuildExecutor)
    assert isinstance(ExecutorEngine.get("analyze"), AnalyzeExecutor)


def test_unknown_executor():
    with pytest.raises(DockerBuildAssertion, match="Executor push is not registered."):
        ExecutorEngine.get("push")


def test_register_and_execute(monkeypatch):
    monkeypatch.setattr(ExecutorEngine, "_REGISTRY", dict(ExecutorEngine._REGISTRY))

    class PushExecutor(Executor):
        name = "push"
        execute = MagicMock(return_value=ExecutionResult.succeeded())

    ExecutorEngine.register(PushExecutor.name, PushExecutor())
    context = ExecutorContext(project=None, root=".")
    assert ExecutorEngine.execute("push", "spec", context).success
    PushExecutor.execute.assert_called_once_with("spec", context)
