import typing
from dataclasses import dataclass, fields

import rich_click as click

from dockerbuild.clis.utils import executor_context, make_click_option_field
from dockerbuild.configuration import WorkspaceConfig
from dockerbuild.executors import BuildExecutor, BuildSpec, ExecutorEngine


def _multiple(*param_decls: str, help: str) -> click.Option:
    return click.Option(param_decls=list(param_decls), required=False, multiple=True, default=(), help=help)


def _single(*param_decls: str, help: str) -> click.Option:
    return click.Option(param_decls=list(param_decls), required=False, type=str, default=None, help=help)


@dataclass
class BuildParams:
    """
    Command line options of ``dockerbuild build``. Every option that is passed replaces the value from the workspace
    config, the others keep it.
    """

    file: typing.Optional[str] = make_click_option_field(
        _single("-f", "--file", help="Path to the Dockerfile. Defaults to <project root>/Dockerfile.")
    )
    context: typing.Optional[str] = make_click_option_field(
        _single("--context", help="Build context directory, relative to the workspace root. Defaults to '.'.")
    )
    tags: typing.Tuple[str, ...] = make_click_option_field(_multiple("-t", "--tag", "tags", help="Image tag."))
    build_args: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--build-arg", "build_args", help="Build argument as KEY=VALUE.")
    )
    outputs: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("-o", "--output", "outputs", help="Output destination (format: type=local,dest=path).")
    )
    cache_from: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--cache-from", "cache_from", help="External cache source. Only allowed with --ci.")
    )
    cache_to: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--cache-to", "cache_to", help="Cache export destination. Only allowed with --ci.")
    )
    platforms: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--platform", "platforms", help="Target platform, for example linux/amd64. Only allowed with --ci.")
    )
    metadata_file: typing.Optional[str] = make_click_option_field(
        _single("--metadata-file", help="Write the build result metadata to this file.")
    )
    target: typing.Optional[str] = make_click_option_field(_single("--target", help="Build stage to build."))
    add_host: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--add-host", "add_host", help="Custom host-to-IP mapping (format: host:ip).")
    )
    allow: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--allow", help="Extra privileged entitlement, for example network.host.")
    )
    annotation: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--annotation", help="Annotation to add to the image.")
    )
    attest: typing.Tuple[str, ...] = make_click_option_field(
        _multiple("--attest", help="Attestation parameters (format: type=sbom,generator=image).")
    )
    shm_size: typing.Optional[str] = make_click_option_field(_single("--shm-size", help="Size of /dev/shm."))
    ulimit: typing.Optional[str] = make_click_option_field(_single("--ulimit", help="Ulimit options."))
    ci: typing.Optional[bool] = make_click_option_field(
        click.Option(
            param_decls=["--ci/--no-ci"],
            required=False,
            default=None,
            help="Run in CI mode. Defaults to $DOCKERBUILD_BUILD_CI or settings.build.ci of the workspace.",
        )
    )
    project_root: typing.Optional[str] = make_click_option_field(
        _single(
            "--project-root",
            help="Root of the project, relative to the workspace root. Required when the project is not declared "
            "in the workspace config.",
        )
    )

    @classmethod
    def from_dict(cls, d: typing.Dict[str, typing.Any]) -> "BuildParams":
        return cls(**d)

    @classmethod
    def options(cls) -> typing.List[click.Option]:
        return [f.metadata["click.option"] for f in fields(cls) if f.metadata]

    def spec_overrides(self) -> typing.Dict[str, typing.Any]:
        spec_fields = {f.name for f in fields(BuildSpec)}
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in spec_fields}


@click.pass_context
def _build(ctx: click.Context, project: typing.Optional[str], **kwargs):
    params = BuildParams.from_dict(kwargs)
    workspace = WorkspaceConfig.auto(ctx.obj.workspace)
    spec = workspace.build_spec(project).with_overrides(**params.spec_overrides())

    result = ExecutorEngine.execute(
        BuildExecutor.name, spec, executor_context(ctx.obj, workspace, project, params.project_root)
    )
    if not result.success:
        ctx.exit(1)


_build_help = """
Build the docker image of PROJECT with docker buildx, or with the legacy builder when buildx is not installed.
Defaults come from the project's `build` section of the workspace config.
"""

build = click.Command(
    name="build",
    params=[click.Argument(["project"], required=False), *BuildParams.options()],
    callback=_build,
    help=_build_help,
)
