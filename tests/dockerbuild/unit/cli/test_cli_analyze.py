from unittest import mock

import pytest
from click.testing import CliRunner

from dockerbuild.clis.main import main
from dockerbuild.configuration.file import WORKSPACE_CONFIG_ENV_VAR
from dockerbuild.executors import AnalyzeSpec, ExecutionResult

WORKSPACE_YAML = """
settings:
  build:
    ci: true
projects:
  web:
    root: apps/web
    analyze:
      image: web:latest
      lowest_efficiency_ratio: 0.9
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv(WORKSPACE_CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("DOCKERBUILD_BUILD_CI", raising=False)
    monkeypatch.chdir(tmp_path)


@mock.patch("dockerbuild.clis.analyze.ExecutorEngine")
def test_analyze_image(mock_engine):
    mock_engine.execute.return_value = ExecutionResult.succeeded()
    args = ["analyze", "--image", "web:latest", "--ci", "--highest-user-wasted-bytes", "2048"]
    result = CliRunner().invoke(main, args, catch_exceptions=False)
    assert result.exit_code == 0
    name, spec, context = mock_engine.execute.call_args.args
    assert name == "analyze"
    assert spec == AnalyzeSpec(image="web:latest", ci=True, highest_user_wasted_bytes=2048)
    assert context.project is None


@mock.patch("dockerbuild.clis.analyze.ExecutorEngine")
def test_analyze_workspace_defaults(mock_engine, tmp_path):
    (tmp_path / "dockerbuild.yaml").write_text(WORKSPACE_YAML)
    mock_engine.execute.return_value = ExecutionResult.succeeded()
    result = CliRunner().invoke(main, ["analyze", "web", "--source", "podman"], catch_exceptions=False)
    assert result.exit_code == 0
    spec = mock_engine.execute.call_args.args[1]
    assert spec == AnalyzeSpec(image="web:latest", source="podman", ci=True, lowest_efficiency_ratio=0.9)


@mock.patch("dockerbuild.clis.analyze.ExecutorEngine")
def test_analyze_no_ci_flag_wins(mock_engine, tmp_path):
    (tmp_path / "dockerbuild.yaml").write_text(WORKSPACE_YAML)
    mock_engine.execute.return_value = ExecutionResult.succeeded()
    CliRunner().invoke(main, ["analyze", "web", "--no-ci"], catch_exceptions=False)
    assert not mock_engine.execute.call_args.args[1].ci


@mock.patch("dockerbuild.clis.analyze.ExecutorEngine")
def test_analyze_without_image(mock_engine):
    result = CliRunner().invoke(main, ["analyze"])
    assert result.exit_code == 2
    mock_engine.execute.assert_not_called()


@mock.patch("dockerbuild.executors.invoker.run")
@mock.patch("dockerbuild.executors.analyze.check_engine", return_value=True)
def test_analyze_threshold_without_ci(mock_check, mock_run):
    result = CliRunner().invoke(main, ["analyze", "-i", "web:latest", "--lowest-efficiency-ratio", "0.5"])
    assert result.exit_code == 1
    mock_run.assert_not_called()
