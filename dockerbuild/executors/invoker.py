import subprocess
import typing
from subprocess import run

from dockerbuild.executors.base import ExecutionResult, FailureKind
from dockerbuild.executors.build_spec import CommandPlan
from dockerbuild.loggers import logger


def invoke(
    plan: CommandPlan,
    cwd: str,
    verbose: bool = False,
    env: typing.Optional[typing.Mapping[str, str]] = None,
    failure_message: str = "Failed to build Docker image",
) -> ExecutionResult:
    """
    Runs ``plan`` to completion in ``cwd``. The process always inherits the standard streams so its own output is
    visible, ``verbose`` only adds debug logging.

    :param env: environment of the process, None inherits the current environment
    :param failure_message: logged together with the error when the process fails
    """
    logger.info(f"{plan}")
    if verbose:
        logger.debug(f"Working directory: {cwd}")
    try:
        run(plan.command, cwd=cwd, env=dict(env) if env is not None else None, check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.critical(failure_message, exc_info=e)
        return ExecutionResult.failed(FailureKind.EXECUTION, f"{failure_message}: {e}")
    return ExecutionResult.succeeded()
