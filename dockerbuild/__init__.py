"""
dockerbuild builds the docker images of the projects in a workspace.

The build is a fixed pipeline: probe the docker engine and buildx, validate the inputs, synthesize the command line,
prepare output directories and run docker. Each stage can stop the pipeline, the outcome is always an
:py:class:`ExecutionResult`.

.. code-block:: python

    from dockerbuild import BuildSpec, ExecutorContext, ExecutorEngine, ProjectDescriptor

    result = ExecutorEngine.execute(
        "build",
        BuildSpec(tags=("web:latest",)),
        ExecutorContext(project=ProjectDescriptor(name="web", root="apps/web"), root="."),
    )
"""

__version__ = "0.0.0+develop"

from dockerbuild.executors import (
    AnalyzeExecutor,
    AnalyzeSpec,
    Backend,
    BackendCapability,
    BuildExecutor,
    BuildSpec,
    CommandPlan,
    ExecutionResult,
    ExecutorContext,
    ExecutorEngine,
    FailureKind,
    ProjectDescriptor,
)
from dockerbuild.loggers import logger
