# src/podboot/main_cli.py
import json
import os
from importlib.metadata import PackageNotFoundError, version

import typer

from podboot.awscli import aws_cli_version
from podboot.config import ProvisionConfig
from podboot.errors import ProvisionError
from podboot.handoff import Handoff, perform
from podboot.packages import dpkg_status, have_apt, missing_tools
from podboot.provisioner import Provisioner
from podboot.shell import CommandRunner
from podboot.utils import error

app = typer.Typer(help="podboot: provision a pod at boot and hand off to its start script.")


def _pkg_version() -> str:
    try:
        return version("podboot")
    except PackageNotFoundError:
        return "0.0.0+local"


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    version_: bool = typer.Option(
        False, "--version", "-V", is_eager=True, help="Show version and exit."
    ),
):
    if version_:
        typer.echo(_pkg_version())
        raise typer.Exit()

    # If no subcommand is provided and no version flag, show help
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("run")
def cmd_run(
    handoff: bool = typer.Option(
        True,
        "--handoff/--no-handoff",
        help="Exec the start script (or park) after syncing. --no-handoff prints the outcome and exits.",
    ),
    show_report: bool = typer.Option(False, "--report", help="Print a JSON run report."),
):
    """Install tools, configure AWS, sync the framework and start it."""
    runner = CommandRunner()
    try:
        config = ProvisionConfig.from_env(os.environ)
        provisioner = Provisioner(config, runner)
        outcome = provisioner.run()
        if show_report:
            typer.echo(json.dumps(provisioner.report.to_dict(), indent=2))
        if not handoff:
            if isinstance(outcome, Handoff):
                typer.echo(f"[ok] would exec: {' '.join(outcome.argv)}")
            else:
                typer.echo(f"[ok] would park: {outcome.missing} not found")
            raise typer.Exit()
        perform(outcome, runner.env)
    except ProvisionError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


@app.command("check")
def cmd_check():
    """Report what a run would find, without changing anything."""
    runner = CommandRunner()
    defaults = ProvisionConfig(access_key_id="", secret_access_key="")
    npm_status = dpkg_status(runner, "npm")
    status = {
        "apt": have_apt(runner),
        "missing_tools": missing_tools(runner, (*defaults.base_tools, "node", "npm", "aws")),
        "aws_cli": aws_cli_version(runner),
        "distro_npm": npm_status,
        "credentials": all(os.environ.get(k) for k in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY")),
        "start_script": str(defaults.start_script_path),
        "start_script_present": defaults.start_script_path.is_file(),
    }
    typer.echo(json.dumps(status, indent=2))


def main() -> None:
    app()
