import types
import typing
from dataclasses import Field, dataclass, field, fields
from types import MappingProxyType

import rich_click as click
from click.exceptions import Exit
from rich.console import Console
from rich.traceback import Traceback

from dockerbuild.configuration import WorkspaceConfig
from dockerbuild.exceptions.base import DockerBuildException
from dockerbuild.executors import ExecutorContext, ProjectDescriptor
from dockerbuild.loggers import set_log_level


def make_click_option_field(o: click.Option) -> Field:
    if o.multiple:
        o.help = click.style("Multiple values allowed. ", bold=True) + f"{o.help}"
        return field(default_factory=lambda: o.default, metadata={"click.option": o})
    return field(default=o.default, metadata={"click.option": o})


def get_option_from_metadata(metadata: MappingProxyType) -> click.Option:
    return metadata["click.option"]


@dataclass
class BaseParams:
    """
    Options of the dockerbuild command group, available to every subcommand as ``ctx.obj``.
    """

    workspace: typing.Optional[str] = make_click_option_field(
        click.Option(
            param_decls=["-w", "--workspace"],
            required=False,
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Path to the workspace config file. Defaults to $DOCKERBUILD_WORKSPACE_CONFIG or ./dockerbuild.yaml",
        )
    )
    verbose: int = make_click_option_field(
        click.Option(
            param_decls=["-v", "--verbose"],
            required=False,
            count=True,
            default=0,
            help="Show the output of the docker checks and debug logs. Repeat for more verbose tracebacks.",
        )
    )

    @classmethod
    def from_dict(cls, d: typing.Dict[str, typing.Any]) -> "BaseParams":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in names})

    @classmethod
    def options(cls) -> typing.List[click.Option]:
        return [get_option_from_metadata(f.metadata) for f in fields(cls) if f.metadata]


def remove_unwanted_traceback_frames(
    tb: types.TracebackType, unwanted_module_names: typing.List[str]
) -> types.TracebackType:
    """
    Custom function to remove certain frames from the traceback.
    """
    frames = []
    while tb is not None:
        frame = tb.tb_frame
        frame_info = (frame.f_code.co_filename, frame.f_code.co_name, frame.f_lineno)
        if not any(module_name in frame_info[0] for module_name in unwanted_module_names):
            frames.append((frame, tb.tb_lasti, tb.tb_lineno))
        tb = tb.tb_next

    # Recreate the traceback without unwanted frames
    tb_next = None
    for frame, tb_lasti, tb_lineno in reversed(frames):
        tb_next = types.TracebackType(tb_next, frame, tb_lasti, tb_lineno)

    return tb_next


def pretty_print_traceback(e: Exception, verbosity: int = 0):
    """
    Print an error. Verbosity 0 prints the message only, 1 hides the frames of the CLI machinery, 2 or higher prints
    the full traceback.
    """
    console = Console(stderr=True)
    unwanted_module_names = ["importlib", "click", "rich_click"]

    if verbosity == 0:
        console.print(f"[red]{type(e).__name__}[/red]: {e}", highlight=False)
    elif verbosity == 1:
        click.secho(
            f"Frames from the following modules were removed from the traceback: {unwanted_module_names}."
            f" For more verbose output, use the flags -vv or -vvv.",
            fg="yellow",
            err=True,
        )
        new_tb = remove_unwanted_traceback_frames(e.__traceback__, unwanted_module_names)
        console.print(Traceback.from_exception(type(e), e, new_tb))
    else:
        console.print(Traceback.from_exception(type(e), e, e.__traceback__))


def pretty_print_exception(e: Exception, verbosity: int = 0):
    """
    This method will print the exception in a nice way. Click exceptions are raised again so that click reports them.
    """
    if isinstance(e, (Exit, click.ClickException)):
        raise e

    if isinstance(e, DockerBuildException) and verbosity == 0:
        click.secho(str(e), fg="red", err=True)
        return

    pretty_print_traceback(e, verbosity)


class ErrorHandlingCommand(click.RichGroup):
    """
    Helper class that wraps the invoke method of a click command to catch exceptions and print them in a nice way.
    """

    def invoke(self, ctx: click.Context) -> typing.Any:
        verbosity = ctx.params.get("verbose", 0)
        set_log_level(verbosity)
        try:
            return super().invoke(ctx)
        except (Exit, click.ClickException):
            raise
        except Exception as e:
            pretty_print_exception(e, verbosity)
            ctx.exit(1)


def executor_context(
    params: BaseParams,
    workspace: WorkspaceConfig,
    project: typing.Optional[str],
    project_root: typing.Optional[str] = None,
) -> ExecutorContext:
    """
    Builds the context executors run in. ``project_root`` declares a project that is missing from the workspace.
    """
    set_log_level(params.verbose, workspace.log_level)

    if project and project_root:
        descriptor = ProjectDescriptor(name=project, root=project_root)
    else:
        descriptor = workspace.project(project)
    return ExecutorContext(project=descriptor, root=workspace.root, verbose=params.verbose > 0)
