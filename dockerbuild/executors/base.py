import enum
import typing
from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from dockerbuild.exceptions.user import DockerBuildAssertion


class FailureKind(enum.Enum):
    """
    Why a run failed. ``ENVIRONMENT`` and ``VALIDATION`` mean no work was attempted, ``PREPARATION`` and
    ``EXECUTION`` mean work was attempted and failed.
    """

    ENVIRONMENT = "environment"
    VALIDATION = "validation"
    PREPARATION = "preparation"
    EXECUTION = "execution"


@dataclass(frozen=True)
class ExecutionResult:
    success: bool
    failure: Optional[FailureKind] = None
    reason: Optional[str] = None

    @classmethod
    def succeeded(cls) -> "ExecutionResult":
        return cls(success=True)

    @classmethod
    def failed(cls, failure: FailureKind, reason: str) -> "ExecutionResult":
        return cls(success=False, failure=failure, reason=reason)


@dataclass(frozen=True)
class ProjectDescriptor:
    name: str
    root: str


@dataclass(frozen=True)
class ExecutorContext:
    """
    Everything an executor needs from its host.

    Args:
        project: the project being built, None if no project could be resolved.
        root: workspace root. Spawned processes run in this directory.
        verbose: surface the output of environment probes.
        env: environment for spawned processes. None inherits the current environment.
    """

    project: Optional[ProjectDescriptor]
    root: str
    verbose: bool = False
    env: Optional[Mapping[str, str]] = None


class Executor:
    name: typing.ClassVar[str]

    @abstractmethod
    def execute(self, spec: typing.Any, context: ExecutorContext) -> ExecutionResult:
        """
        Run the executor.

        Args:
            spec: the executor's options.
            context: the host context.

        Returns:
            ExecutionResult, never raises for environment, validation, preparation or execution failures.
        """
        raise NotImplementedError("This method is not implemented in the base class.")


class ExecutorEngine:
    """
    ExecutorEngine contains the executors the CLI can dispatch to.
    """

    _REGISTRY: Dict[str, Executor] = {}

    @classmethod
    def register(cls, name: str, executor: Executor):
        cls._REGISTRY[name] = executor

    @classmethod
    def get(cls, name: str) -> Executor:
        if name not in cls._REGISTRY:
            raise DockerBuildAssertion(f"Executor {name} is not registered.")
        return cls._REGISTRY[name]

    @classmethod
    def execute(cls, name: str, spec: typing.Any, context: ExecutorContext) -> ExecutionResult:
        return cls.get(name).execute(spec, context)
