"""
Executors turn a declarative spec into a docker invocation: ``build`` builds an image and ``analyze`` inspects one.
"""

from .analyze import AnalyzeExecutor, AnalyzeSpec
from .base import ExecutionResult, ExecutorContext, ExecutorEngine, FailureKind, ProjectDescriptor
from .build import BuildExecutor
from .build_spec import Backend, BackendCapability, BuildSpec, CommandPlan

ExecutorEngine.register(BuildExecutor.name, BuildExecutor())
ExecutorEngine.register(AnalyzeExecutor.name, AnalyzeExecutor())
