import dataclasses
import typing
from dataclasses import dataclass, fields

import rich_click as click

from dockerbuild.clis.utils import executor_context, make_click_option_field
from dockerbuild.configuration import WorkspaceConfig
from dockerbuild.executors import AnalyzeExecutor, AnalyzeSpec, ExecutorEngine


@dataclass
class AnalyzeParams:
    image: typing.Optional[str] = make_click_option_field(
        click.Option(
            param_decls=["-i", "--image"],
            required=False,
            type=str,
            default=None,
            help="Image to analyze. Required when the project has no analyze section in the workspace config.",
        )
    )
    source: typing.Optional[str] = make_click_option_field(
        click.Option(
            param_decls=["--source"],
            required=False,
            type=click.Choice(["docker", "podman", "docker-archive"]),
            default=None,
            help="Where dive reads the image from. Defaults to docker.",
        )
    )
    ci: typing.Optional[bool] = make_click_option_field(
        click.Option(
            param_decls=["--ci/--no-ci"],
            required=False,
            default=None,
            help="Run dive non-interactively and enforce the thresholds.",
        )
    )
    highest_user_wasted_bytes: typing.Optional[int] = make_click_option_field(
        click.Option(
            param_decls=["--highest-user-wasted-bytes"],
            required=False,
            type=int,
            default=None,
            help="Highest allowable bytes wasted. Only allowed with --ci.",
        )
    )
    highest_user_wasted_ratio: typing.Optional[float] = make_click_option_field(
        click.Option(
            param_decls=["--highest-user-wasted-ratio"],
            required=False,
            type=float,
            default=None,
            help="Highest allowable ratio of bytes wasted, between 0 and 1. Only allowed with --ci.",
        )
    )
    lowest_efficiency_ratio: typing.Optional[float] = make_click_option_field(
        click.Option(
            param_decls=["--lowest-efficiency-ratio"],
            required=False,
            type=float,
            default=None,
            help="Lowest allowable image efficiency, between 0 and 1. Only allowed with --ci.",
        )
    )
    ignore_error: typing.Optional[bool] = make_click_option_field(
        click.Option(
            param_decls=["--ignore-error/--no-ignore-error"],
            required=False,
            default=None,
            help="Ignore image parsing errors.",
        )
    )
    project_root: typing.Optional[str] = make_click_option_field(
        click.Option(
            param_decls=["--project-root"],
            required=False,
            type=str,
            default=None,
            help="Root of the project, relative to the workspace root.",
        )
    )

    @classmethod
    def from_dict(cls, d: typing.Dict[str, typing.Any]) -> "AnalyzeParams":
        return cls(**d)

    @classmethod
    def options(cls) -> typing.List[click.Option]:
        return [f.metadata["click.option"] for f in fields(cls) if f.metadata]

    def to_spec(self, defaults: typing.Optional[AnalyzeSpec]) -> AnalyzeSpec:
        spec_fields = {f.name for f in fields(AnalyzeSpec)}
        overrides = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name in spec_fields and getattr(self, f.name) is not None
        }
        if defaults is not None:
            return dataclasses.replace(defaults, **overrides)
        if self.image is None:
            raise click.UsageError("No image to analyze, pass --image or add an analyze section to the project")
        return AnalyzeSpec(**overrides)


@click.pass_context
def _analyze(ctx: click.Context, project: typing.Optional[str], **kwargs):
    params = AnalyzeParams.from_dict(kwargs)
    workspace = WorkspaceConfig.auto(ctx.obj.workspace)
    spec = params.to_spec(workspace.analyze_spec(project))
    if spec.ci is False and workspace.ci and params.ci is None:
        spec = dataclasses.replace(spec, ci=True)

    result = ExecutorEngine.execute(
        AnalyzeExecutor.name, spec, executor_context(ctx.obj, workspace, project, params.project_root)
    )
    if not result.success:
        ctx.exit(1)


_analyze_help = """
Analyze the layers of an image with dive. In CI mode dive runs non-interactively and fails when one of the
thresholds is exceeded.
"""

analyze = click.Command(
    name="analyze",
    params=[click.Argument(["project"], required=False), *AnalyzeParams.options()],
    callback=_analyze,
    help=_analyze_help,
)
