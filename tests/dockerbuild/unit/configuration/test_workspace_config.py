import pytest

from dockerbuild.configuration import WorkspaceConfig
from dockerbuild.configuration.file import WORKSPACE_CONFIG_ENV_VAR
from dockerbuild.exceptions.user import DockerBuildConfigException
from dockerbuild.executors import AnalyzeSpec, BuildSpec, ProjectDescriptor

WORKSPACE_YAML = """
projects:
  web:
    root: apps/web
    build:
      tags: [web:latest]
      build_args: [VERSION=1]
      metadata_file: dist/web/metadata.json
  web-analyze:
    root: apps/web
    analyze:
      image: web:latest
      lowest_efficiency_ratio: 0.9
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(WORKSPACE_CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("DOCKERBUILD_BUILD_CI", raising=False)
    monkeypatch.delenv("DOCKERBUILD_LOGGING_LEVEL", raising=False)


def _write(tmp_path, content):
    p = tmp_path / "dockerbuild.yaml"
    p.write_text(content)
    return p


def test_auto_loads_projects(tmp_path):
    workspace = WorkspaceConfig.auto(str(_write(tmp_path, WORKSPACE_YAML)))
    assert workspace.root == str(tmp_path)
    assert not workspace.ci
    assert workspace.log_level is None
    assert workspace.project("web") == ProjectDescriptor(name="web", root="apps/web")
    assert workspace.build_spec("web") == BuildSpec(
        tags=("web:latest",), build_args=("VERSION=1",), metadata_file="dist/web/metadata.json"
    )
    assert workspace.analyze_spec("web-analyze") == AnalyzeSpec(image="web:latest", lowest_efficiency_ratio=0.9)


def test_auto_without_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    workspace = WorkspaceConfig.auto()
    assert workspace.root == str(tmp_path)
    assert workspace.projects == {}


def test_unknown_project(tmp_path):
    workspace = WorkspaceConfig.auto(str(_write(tmp_path, WORKSPACE_YAML)))
    assert workspace.project("api") is None
    assert workspace.project(None) is None
    assert workspace.build_spec("api") == BuildSpec()
    assert workspace.analyze_spec("web") is None


def test_ci_setting_applies_to_specs(tmp_path):
    workspace = WorkspaceConfig.auto(str(_write(tmp_path, "settings:\n  build:\n    ci: true\n" + WORKSPACE_YAML)))
    assert workspace.ci
    assert workspace.build_spec("web").ci
    assert workspace.build_spec(None).ci
    assert workspace.analyze_spec("web-analyze").ci


def test_ci_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DOCKERBUILD_BUILD_CI", "true")
    assert WorkspaceConfig.auto(str(_write(tmp_path, WORKSPACE_YAML))).ci


def test_log_level_setting(tmp_path):
    workspace = WorkspaceConfig.auto(str(_write(tmp_path, "settings:\n  logging:\n    level: 30\n")))
    assert workspace.log_level == 30


@pytest.mark.parametrize(
    "content,message",
    [
        ("projects: [web]\n", "'projects' must be a mapping"),
        ("projects:\n  web: apps/web\n", "Project 'web' must be a mapping"),
        ("projects:\n  web:\n    build: {}\n", "Project 'web'"),
        ("projects:\n  web:\n    root: apps/web\n    build:\n      tag: [web]\n", "Project 'web'"),
        ("projects:\n  web:\n    root: apps/web\n    build:\n      tags: web:latest\n", "tags must be a list of"),
        ("projects:\n  web:\n    root: apps/web\n    build:\n      build_args: {A: 1}\n", "build_args must be a list"),
    ],
)
def test_invalid_projects(tmp_path, content, message):
    with pytest.raises(DockerBuildConfigException, match=message):
        WorkspaceConfig.auto(str(_write(tmp_path, content)))
