import pytest
import rich_click as click
from click.testing import CliRunner

from dockerbuild.clis.main import main, register_subcommand, unregister_subcommand


def test_main_help():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "build" in result.output
    assert "analyze" in result.output


def test_register_subcommand():
    cmd = click.Command(name="push", callback=lambda: None)
    try:
        register_subcommand(cmd)
        assert main.get_command(None, "push") is cmd
        with pytest.raises(ValueError):
            register_subcommand(cmd)
    finally:
        unregister_subcommand("push")
    assert main.get_command(None, "push") is None


def test_workspace_must_exist(tmp_path):
    result = CliRunner().invoke(main, ["-w", str(tmp_path / "missing.yaml"), "build", "web"])
    assert result.exit_code == 2
