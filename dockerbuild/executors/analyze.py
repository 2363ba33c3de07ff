"""
Image analysis with `dive <https://github.com/wagoodman/dive>`__, run in a container against the local docker daemon.
"""

from dataclasses import dataclass
from typing import List, Optional

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig

from dockerbuild.executors.base import ExecutionResult, Executor, ExecutorContext, FailureKind
from dockerbuild.executors.build_spec import CommandPlan
from dockerbuild.executors.invoker import invoke
from dockerbuild.executors.probe import check_engine
from dockerbuild.executors.validation import ENGINE_UNAVAILABLE_REASON
from dockerbuild.loggers import logger

DIVE_IMAGE = "wagoodman/dive"
DOCKER_SOCKET = "/var/run/docker.sock"

# Threshold options in the order they are checked and emitted, with the dive flag each maps to. A zero threshold
# counts as unset.
_CI_THRESHOLDS = (
    ("highest_user_wasted_bytes", "--highestUserWastedBytes"),
    ("highest_user_wasted_ratio", "--highestUserWastedPercent"),
    ("lowest_efficiency_ratio", "--lowestEfficiency"),
)


@dataclass(frozen=True)
class AnalyzeSpec(DataClassDictMixin):
    """
    Args:
        image: image to analyze.
        source: container engine dive reads the image from.
        ci: run dive non-interactively and evaluate the thresholds below.
        highest_user_wasted_bytes: fail when more bytes than this are wasted. CI only.
        highest_user_wasted_ratio: fail when the wasted ratio is higher than this. CI only.
        lowest_efficiency_ratio: fail when the efficiency is lower than this. CI only.
        ignore_error: ignore image parsing errors.
        docker_socket: docker daemon socket on the host, mounted into the dive container.
    """

    image: str
    source: str = "docker"
    ci: bool = False
    highest_user_wasted_bytes: Optional[int] = None
    highest_user_wasted_ratio: Optional[float] = None
    lowest_efficiency_ratio: Optional[float] = None
    ignore_error: bool = False
    docker_socket: str = DOCKER_SOCKET

    class Config(BaseConfig):
        forbid_extra_keys = True


def non_ci_violation(spec: AnalyzeSpec) -> Optional[str]:
    """First threshold option set outside CI mode, if any."""
    if spec.ci:
        return None
    for name, _ in _CI_THRESHOLDS:
        if getattr(spec, name):
            return name
    return None


def synthesize_analyze(spec: AnalyzeSpec) -> CommandPlan:
    dive_args: List[str] = []
    if spec.ci:
        dive_args.append("--ci")
        for name, flag in _CI_THRESHOLDS:
            value = getattr(spec, name)
            if value:
                dive_args.append(f"{flag}={value}")
    if spec.ignore_error:
        dive_args.append("--ignore-errors")
    dive_args.append(f"--source={spec.source}")

    run_args = ["run", "--rm"] if spec.ci else ["run", "-ti", "--rm"]
    args = [*run_args, "-v", f"{spec.docker_socket}:{DOCKER_SOCKET}", DIVE_IMAGE, spec.image, *dive_args]
    return CommandPlan(executable="docker", args=tuple(args))


class AnalyzeExecutor(Executor):
    """Checks an image for wasted space with dive."""

    name = "analyze"

    def execute(self, spec: AnalyzeSpec, context: ExecutorContext) -> ExecutionResult:
        if not check_engine(context.verbose):
            logger.error(ENGINE_UNAVAILABLE_REASON)
            return ExecutionResult.failed(FailureKind.ENVIRONMENT, ENGINE_UNAVAILABLE_REASON)

        violation = non_ci_violation(spec)
        if violation:
            reason = f"{violation} is not supported in non-CI mode"
            logger.error(reason)
            return ExecutionResult.failed(FailureKind.VALIDATION, reason)

        plan = synthesize_analyze(spec)
        return invoke(
            plan,
            cwd=context.root,
            verbose=context.verbose,
            env=context.env,
            failure_message="Failed to analyze Docker image",
        )
