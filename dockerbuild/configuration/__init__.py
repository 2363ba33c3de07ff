"""
Workspace configuration.

A workspace is described by a ``dockerbuild.yaml`` file. The directory holding it is the workspace root, which is
where docker is invoked. Every project declares its root relative to the workspace root together with the default
options of its executors.

.. code-block:: yaml

    settings:
      build:
        ci: false
    projects:
      web:
        root: apps/web
        build:
          tags: [web:latest]
          build_args: [VERSION=1]
      web-analyze:
        root: apps/web
        analyze:
          image: web:latest

Settings are read from the environment first (``DOCKERBUILD_<SECTION>_<OPTION>``), then from the file.
"""

from __future__ import annotations

import dataclasses
import os
import typing
from dataclasses import dataclass, field

from mashumaro.exceptions import ExtraKeysError, InvalidFieldValue, MissingField

from dockerbuild.configuration import internal as _internal
from dockerbuild.configuration.file import ConfigEntry, ConfigFile, get_config_file
from dockerbuild.configuration.project import ProjectConfig
from dockerbuild.exceptions.user import DockerBuildConfigException, DockerBuildValidationException
from dockerbuild.executors import AnalyzeSpec, BuildSpec, ProjectDescriptor
from dockerbuild.loggers import logger


def _load_projects(config_file: ConfigFile) -> typing.Dict[str, ProjectConfig]:
    raw_projects = config_file.raw.get("projects") or {}
    if not isinstance(raw_projects, dict):
        raise DockerBuildConfigException(config_file.location, "'projects' must be a mapping of name to project.")

    projects = {}
    for name, raw in raw_projects.items():
        if not isinstance(raw, dict):
            raise DockerBuildConfigException(config_file.location, f"Project '{name}' must be a mapping.")
        try:
            projects[str(name)] = ProjectConfig.from_dict(raw)
        except (ExtraKeysError, InvalidFieldValue, MissingField, DockerBuildValidationException) as e:
            raise DockerBuildConfigException(config_file.location, f"Project '{name}': {_root_cause(e)}") from e
    return projects


def _root_cause(e: Exception) -> Exception:
    # mashumaro may wrap errors of nested specs into InvalidFieldValue
    cause = e
    while cause is not None and not isinstance(cause, DockerBuildValidationException):
        cause = cause.__cause__ or cause.__context__
    return cause or e


@dataclass(frozen=True)
class WorkspaceConfig(object):
    """
    Args:
        root: workspace root, docker runs in this directory.
        projects: declared projects by name.
        ci: run executors in CI mode by default.
        log_level: level of the dockerbuild logger, None keeps the level chosen on the command line.
    """

    root: str
    projects: typing.Dict[str, ProjectConfig] = field(default_factory=dict)
    ci: bool = False
    log_level: typing.Optional[int] = None

    @classmethod
    def auto(cls, config_file: typing.Union[str, os.PathLike, ConfigFile, None] = None) -> WorkspaceConfig:
        """
        Loads the workspace from ``config_file``, or from the first of ``$DOCKERBUILD_WORKSPACE_CONFIG`` and
        ``./dockerbuild.yaml`` that is set. Without any file the current directory is an empty workspace.
        """
        config_file = get_config_file(config_file)
        if config_file is None:
            logger.debug("No workspace config found, using the current directory as workspace root")
            return WorkspaceConfig(
                root=os.getcwd(),
                ci=_internal.Build.CI.read(),
                log_level=_internal.Logging.LEVEL.read(),
            )

        return WorkspaceConfig(
            root=str(config_file.root),
            projects=_load_projects(config_file),
            ci=_internal.Build.CI.read(config_file),
            log_level=_internal.Logging.LEVEL.read(config_file),
        )

    def project(self, name: typing.Optional[str]) -> typing.Optional[ProjectDescriptor]:
        """Resolves ``name`` to a project descriptor, None when the workspace does not declare it."""
        if not name:
            return None
        project = self.projects.get(name)
        if project is None:
            logger.debug(f"Project {name} is not declared in the workspace")
            return None
        return ProjectDescriptor(name=name, root=project.root)

    def build_spec(self, name: typing.Optional[str]) -> BuildSpec:
        project = self.projects.get(name) if name else None
        spec = project.build if project is not None else BuildSpec()
        if self.ci and not spec.ci:
            spec = spec.with_overrides(ci=True)
        return spec

    def analyze_spec(self, name: typing.Optional[str]) -> typing.Optional[AnalyzeSpec]:
        project = self.projects.get(name) if name else None
        if project is None or project.analyze is None:
            return None
        if self.ci and not project.analyze.ci:
            return dataclasses.replace(project.analyze, ci=True)
        return project.analyze


__all__ = [
    "ConfigEntry",
    "ConfigFile",
    "ProjectConfig",
    "WorkspaceConfig",
    "get_config_file",
]
