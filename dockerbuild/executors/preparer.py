import os
import typing

from dockerbuild.exceptions.system import DockerBuildPreparationException
from dockerbuild.executors.build_spec import BuildSpec


def prepare(spec: BuildSpec, root: typing.Optional[str] = None):
    """
    Creates the parent directory of ``spec.metadata_file`` when it is missing. The backend fails with an unhelpful
    error when it cannot write the metadata file, so a failure here is raised rather than ignored.

    :param root: directory relative metadata paths are resolved against
    """
    if not spec.metadata_file:
        return

    metadata_file = spec.metadata_file
    if root:
        metadata_file = os.path.join(root, metadata_file)

    parent = os.path.dirname(metadata_file)
    if not parent or os.path.isdir(parent):
        return

    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise DockerBuildPreparationException(parent) from e
