from dockerbuild.exceptions.system import DockerBuildPreparationException
from dockerbuild.executors.base import ExecutionResult, Executor, ExecutorContext, FailureKind
from dockerbuild.executors.build_spec import BuildSpec
from dockerbuild.executors.context import resolve_paths
from dockerbuild.executors.invoker import invoke
from dockerbuild.executors.preparer import prepare
from dockerbuild.executors.probe import probe
from dockerbuild.executors.synthesizer import synthesize
from dockerbuild.executors.validation import validate
from dockerbuild.loggers import logger

BUILDX_FALLBACK_WARNING = (
    "Buildx is not installed falling back to docker build. "
    "Docker buildx is not installed so performance may be degraded"
)


class BuildExecutor(Executor):
    """Builds an image with docker buildx, or the legacy builder when buildx is missing."""

    name = "build"

    def execute(self, spec: BuildSpec, context: ExecutorContext) -> ExecutionResult:
        capability = probe(context.verbose)

        paths = None
        if context.project is not None:
            paths = resolve_paths(spec.file, spec.context, context.project.root)

        outcome = validate(spec, capability, context.project, paths, root=context.root)
        if not outcome.proceed:
            logger.error(outcome.reason)
            return ExecutionResult.failed(outcome.failure, outcome.reason)

        resolved = spec.with_overrides(file=paths.dockerfile, context=paths.context)
        plan = synthesize(resolved, capability)
        if plan.degraded:
            logger.warning(BUILDX_FALLBACK_WARNING)

        try:
            prepare(resolved, root=context.root)
        except DockerBuildPreparationException as e:
            logger.critical("Failed to create metadata file", exc_info=e)
            return ExecutionResult.failed(FailureKind.PREPARATION, str(e))

        return invoke(plan, cwd=context.root, verbose=context.verbose, env=context.env)
