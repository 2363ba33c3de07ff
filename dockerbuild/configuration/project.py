from dataclasses import dataclass, field
from typing import Optional

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig

from dockerbuild.executors import AnalyzeSpec, BuildSpec


@dataclass(frozen=True)
class ProjectConfig(DataClassDictMixin):
    """A project entry of the workspace file."""

    root: str
    build: BuildSpec = field(default_factory=BuildSpec)
    analyze: Optional[AnalyzeSpec] = None

    class Config(BaseConfig):
        forbid_extra_keys = True
