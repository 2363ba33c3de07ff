"""
Turns a BuildSpec into the argument list of a ``docker build`` / ``docker buildx build`` call.

Every option is mapped by its own function below and ``_OPTION_FLAGS`` fixes the order in which they are composed,
so the same spec always produces the same command line.
"""

import typing
from typing import List, Optional, Sequence

from dockerbuild.exceptions.user import DockerBuildAssertion
from dockerbuild.executors.build_spec import Backend, BackendCapability, BuildSpec, CommandPlan

_JOIN_SEPARATOR = ","


def _joined(flag: str, values: Sequence[str]) -> List[str]:
    if not values:
        return []
    return [f"{flag}={_JOIN_SEPARATOR.join(values)}"]


def _repeated(flag: str, values: Sequence[str]) -> List[str]:
    args = []
    for value in values:
        args.extend([flag, value])
    return args


def _scalar(flag: str, value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [flag, value]


def output_flags(spec: BuildSpec) -> List[str]:
    return _joined("--output", spec.outputs)


def cache_from_flags(spec: BuildSpec) -> List[str]:
    if not spec.ci:
        return []
    return _joined("--cache-from", spec.cache_from)


def cache_to_flags(spec: BuildSpec) -> List[str]:
    if not spec.ci:
        return []
    return _joined("--cache-to", spec.cache_to)


def platform_flags(spec: BuildSpec) -> List[str]:
    if not spec.ci:
        return []
    return _joined("--platform", spec.platforms)


def metadata_file_flags(spec: BuildSpec) -> List[str]:
    return _scalar("--metadata-file", spec.metadata_file)


def build_arg_flags(spec: BuildSpec) -> List[str]:
    return _repeated("--build-arg", spec.build_args)


def add_host_flags(spec: BuildSpec) -> List[str]:
    return _repeated("--add-host", spec.add_host)


def allow_flags(spec: BuildSpec) -> List[str]:
    return _repeated("--allow", spec.allow)


def annotation_flags(spec: BuildSpec) -> List[str]:
    return _repeated("--annotation", spec.annotation)


def attest_flags(spec: BuildSpec) -> List[str]:
    return _repeated("--attest", spec.attest)


def shm_size_flags(spec: BuildSpec) -> List[str]:
    return _scalar("--shm-size", spec.shm_size)


def ulimit_flags(spec: BuildSpec) -> List[str]:
    return _scalar("--ulimit", spec.ulimit)


def tag_flags(spec: BuildSpec) -> List[str]:
    return _repeated("-t", spec.tags)


def target_flags(spec: BuildSpec) -> List[str]:
    return _scalar("--target", spec.target)


_OPTION_FLAGS: typing.Tuple[typing.Callable[[BuildSpec], List[str]], ...] = (
    output_flags,
    cache_from_flags,
    cache_to_flags,
    platform_flags,
    metadata_file_flags,
    build_arg_flags,
    add_host_flags,
    allow_flags,
    annotation_flags,
    attest_flags,
    shm_size_flags,
    ulimit_flags,
    tag_flags,
    target_flags,
)


def synthesize(spec: BuildSpec, capability: BackendCapability) -> CommandPlan:
    """
    Builds the command plan for ``spec``. ``spec.file`` and ``spec.context`` must already be resolved.

    The backend falls back to the legacy builder when buildx is missing. This is reported through
    ``CommandPlan.degraded`` and never fails the synthesis.
    """
    if not spec.file or not spec.context:
        raise DockerBuildAssertion("Dockerfile and context must be resolved before synthesizing the build command")

    backend = Backend.select(capability)
    executable, *prefix_args = backend.prefix

    args = list(prefix_args)
    for option_flags in _OPTION_FLAGS:
        args.extend(option_flags(spec))
    args.extend(["-f", spec.file, spec.context])

    return CommandPlan(executable=executable, args=tuple(args), backend=backend)
