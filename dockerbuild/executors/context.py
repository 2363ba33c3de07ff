import os
import typing
from dataclasses import dataclass

from dockerbuild.executors.build_spec import DEFAULT_CONTEXT, DEFAULT_DOCKERFILE_NAME


@dataclass(frozen=True)
class ResolvedPaths:
    dockerfile: str
    context: str


def resolve_paths(
    file: typing.Optional[str], context: typing.Optional[str], project_root: str
) -> ResolvedPaths:
    """
    Fills in the default Dockerfile and context locations. Nothing is checked against the filesystem here.
    """
    dockerfile = file or os.path.join(project_root, DEFAULT_DOCKERFILE_NAME)
    return ResolvedPaths(dockerfile=dockerfile, context=context or DEFAULT_CONTEXT)
