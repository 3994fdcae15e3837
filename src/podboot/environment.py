"""
Step 1: timezone and non-interactive package installs.
"""

from __future__ import annotations

from podboot.context import ProvisionContext, StepStatus
from podboot.errors import ProvisionError
from podboot.utils import info


def timezone_line(timezone: str) -> str:
    return f'export TZ="{timezone}"'


def setup_environment(ctx: ProvisionContext) -> StepStatus:
    """
    Disable interactive prompts for child processes and persist the timezone for login shells.

    The TZ export is appended to the bashrc only once, so repeated boots leave
    the file unchanged.
    """
    ctx.runner.env["DEBIAN_FRONTEND"] = "noninteractive"

    bashrc = ctx.config.bashrc_path
    line = timezone_line(ctx.config.timezone)
    try:
        existing = bashrc.read_text(encoding="utf-8") if bashrc.exists() else ""
    except OSError as exc:
        raise ProvisionError(f"Could not read {bashrc}: {exc}") from exc
    if line in existing.splitlines():
        return StepStatus.SKIPPED

    try:
        bashrc.parent.mkdir(parents=True, exist_ok=True)
        with bashrc.open("a", encoding="utf-8") as fh:
            if existing and not existing.endswith("\n"):
                fh.write("\n")
            fh.write(line + "\n")
    except OSError as exc:
        raise ProvisionError(f"Could not write timezone to {bashrc}: {exc}") from exc
    info(f"Timezone {ctx.config.timezone} written to {bashrc}")
    return StepStatus.DONE
