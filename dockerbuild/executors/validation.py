import os
import typing
from dataclasses import dataclass

from dockerbuild.executors.base import FailureKind, ProjectDescriptor
from dockerbuild.executors.build_spec import BackendCapability, BuildSpec
from dockerbuild.executors.context import ResolvedPaths

ENGINE_UNAVAILABLE_REASON = "Docker is not installed or docker daemon is not running"
NO_PROJECT_REASON = "No project name provided"


@dataclass(frozen=True)
class ValidationOutcome:
    proceed: bool
    reason: typing.Optional[str] = None
    failure: typing.Optional[FailureKind] = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(proceed=True)

    @classmethod
    def fail(cls, reason: str, failure: FailureKind = FailureKind.VALIDATION) -> "ValidationOutcome":
        return cls(proceed=False, reason=reason, failure=failure)


def _exists(path: str, root: typing.Optional[str]) -> bool:
    if root:
        path = os.path.join(root, path)
    return os.path.exists(path)


def ci_only_violations(spec: BuildSpec) -> typing.Tuple[str, ...]:
    """CI-only options that are set although the spec is not in CI mode."""
    if spec.ci:
        return ()
    return spec.ci_only_options_set()


def validate(
    spec: BuildSpec,
    capability: BackendCapability,
    project: typing.Optional[ProjectDescriptor],
    paths: typing.Optional[ResolvedPaths],
    root: typing.Optional[str] = None,
) -> ValidationOutcome:
    """
    Checks the preconditions of a build. The first failing check wins and later checks are not run.
    ``paths`` may only be None when ``project`` is None, since the default Dockerfile lives in the project root.
    Relative paths are checked against ``root`` when given, which is where the build process runs.
    """
    if not capability.engine_available:
        return ValidationOutcome.fail(ENGINE_UNAVAILABLE_REASON, FailureKind.ENVIRONMENT)

    if project is None or paths is None:
        return ValidationOutcome.fail(NO_PROJECT_REASON)

    if not _exists(paths.dockerfile, root):
        return ValidationOutcome.fail(f"Dockerfile not found at {paths.dockerfile}")

    if not _exists(paths.context, root):
        return ValidationOutcome.fail(f"Context path not found at {paths.context}")

    violations = ci_only_violations(spec)
    if violations:
        return ValidationOutcome.fail(f"{', '.join(violations)} not supported in non-CI mode")

    return ValidationOutcome.ok()
