import rich_click as click

from dockerbuild.clis.analyze import analyze
from dockerbuild.clis.build import build
from dockerbuild.clis.utils import BaseParams, ErrorHandlingCommand
from dockerbuild.loggers import logger


class BaseCommand(ErrorHandlingCommand):
    """
    The base dockerbuild command group that nests all the other commands.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, params=BaseParams.options(), **kwargs)

    def invoke(self, ctx: click.Context):
        ctx.obj = BaseParams.from_dict(ctx.params)
        return super().invoke(ctx)


def main_cb(*args, **kwargs):
    pass


main = BaseCommand(
    "dockerbuild",
    callback=main_cb,
    help="Build and analyze docker images of the projects in a workspace.",
)


def register_subcommand(cmd: click.Command, override_existing: bool = False):
    """
    Registers a subcommand with the dockerbuild group. Executors added by other packages can expose their own
    command this way.
    """
    if main.get_command(None, cmd.name) is not None and not override_existing:
        raise ValueError(f"Command {cmd.name} already registered. Skipping")
    logger.debug(f"Registering command {cmd.name}")
    main.add_command(cmd)


def unregister_subcommand(name: str):
    if main.get_command(None, name) is None:
        return
    logger.debug(f"Unregistering command {name}")
    main.commands.pop(name)


register_subcommand(build)
register_subcommand(analyze)

if __name__ == "__main__":
    main()
