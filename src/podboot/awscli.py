"""
Cloud CLI ensurer: AWS CLI v2 from the official installer archive.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from podboot.context import ProvisionContext, StepStatus
from podboot.errors import ProvisionError, SoftFailure
from podboot.shell import CommandRunner
from podboot.utils import section


def aws_cli_version(runner: CommandRunner) -> str | None:
    """Return the ``aws --version`` banner, or None when the CLI is absent or broken."""
    if not runner.have("aws"):
        return None
    result = runner.run(["aws", "--version"], capture=True, check=False)
    if not result.ok:
        return None
    return result.output.strip()


def has_required_cli(runner: CommandRunner, major: int) -> bool:
    version = aws_cli_version(runner)
    return version is not None and f"aws-cli/{major}." in version


def install_aws_cli(ctx: ProvisionContext) -> None:
    """Download, unpack and run the installer in update mode inside a scratch directory."""
    runner = ctx.runner
    with tempfile.TemporaryDirectory(prefix="awscli-") as scratch:
        workdir = Path(scratch)
        archive = workdir / "awscliv2.zip"
        runner.run(["curl", "-fsSL", ctx.config.aws_cli_url, "-o", str(archive)])
        runner.run(["unzip", "-o", str(archive)], cwd=workdir, quiet=True)
        # --update tolerates an existing installation at the default location
        result = runner.run(
            ["./aws/install", "--update"], sudo=True, cwd=workdir, quiet=True, check=False
        )
        if not result.ok:
            ctx.report.tolerate(
                SoftFailure.CLI_INSTALLER_FAILED,
                f"aws/install --update exited with {result.returncode}",
            )


def ensure_aws_cli(ctx: ProvisionContext) -> StepStatus:
    """
    Install or upgrade the AWS CLI unless the pinned major version is already present.

    Raises:
        ProvisionError: If ``aws`` is not on PATH after installing
    """
    major = ctx.config.aws_cli_major
    if has_required_cli(ctx.runner, major):
        section(f"AWS CLI v{major} already installed: {aws_cli_version(ctx.runner)}")
        return StepStatus.SKIPPED

    section(f"Installing/updating AWS CLI v{major}")
    install_aws_cli(ctx)
    if not ctx.runner.have("aws"):
        raise ProvisionError(f"AWS CLI v{major} not available")
    return StepStatus.DONE
