import subprocess
import typing
from subprocess import run

from dockerbuild.executors.build_spec import BackendCapability
from dockerbuild.loggers import logger

ENGINE_CHECK_COMMAND = ["docker", "info"]
BUILDX_CHECK_COMMAND = ["docker", "buildx", "version"]


def _check(command: typing.List[str], verbose: bool) -> bool:
    stream = None if verbose else subprocess.DEVNULL
    try:
        run(command, stdout=stream, stderr=stream, check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug(f"Probe {' '.join(command)} failed: {e}")
        return False
    return True


def check_engine(verbose: bool = False) -> bool:
    """Whether docker is installed and the daemon answers."""
    return _check(ENGINE_CHECK_COMMAND, verbose)


def check_buildx(verbose: bool = False) -> bool:
    """Whether the buildx plugin is installed."""
    return _check(BUILDX_CHECK_COMMAND, verbose)


def probe(verbose: bool = False) -> BackendCapability:
    """
    Detects the available builder backends. Each call runs the checks again, availability may change between runs.
    buildx is only checked when the engine is reachable.

    :param verbose: show the output of the checks instead of discarding it
    """
    if not check_engine(verbose):
        return BackendCapability(engine_available=False, extended_backend_available=False)
    return BackendCapability(engine_available=True, extended_backend_available=check_buildx(verbose))
