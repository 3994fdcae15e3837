"""
Runtime ensurer: Node.js and npm from NodeSource, replacing the distro npm package.
"""

from __future__ import annotations

from podboot.context import ProvisionContext, StepStatus
from podboot.errors import ProvisionError
from podboot.packages import apt_safe_install, ensure_pkg_removed, have_apt, is_installed
from podboot.utils import error, section, warn

CONFLICTING_PACKAGE = "npm"


def _version(ctx: ProvisionContext, binary: str) -> str:
    result = ctx.runner.run([binary, "-v"], capture=True, check=False)
    return result.stdout.strip() or "unknown"


def add_nodesource_repository(ctx: ProvisionContext) -> None:
    """Fetch the NodeSource setup script and run it as root with the caller's environment."""
    runner = ctx.runner
    script = runner.run(
        ["curl", "-fsSL", ctx.config.nodesource_setup_url], capture=True
    ).stdout
    runner.run(["bash", "-"], sudo=True, preserve_env=True, input=script)


def ensure_node_runtime(ctx: ProvisionContext) -> StepStatus:
    """
    Make ``node`` and ``npm`` available.

    Raises:
        ProvisionError: If npm is still missing after installation
    """
    runner = ctx.runner
    major = ctx.config.node_major

    if runner.have("node") and runner.have("npm"):
        section(
            f"Node/npm already present: node {_version(ctx, 'node')}, npm {_version(ctx, 'npm')}"
        )
        if have_apt(runner) and is_installed(runner, CONFLICTING_PACKAGE):
            warn("Distro 'npm' package found, removing it to avoid conflicts.")
            ensure_pkg_removed(ctx, CONFLICTING_PACKAGE)
            return StepStatus.DONE
        return StepStatus.SKIPPED

    section(f"Installing Node.js {major} (including npm) via NodeSource")
    ensure_pkg_removed(ctx, CONFLICTING_PACKAGE)
    if have_apt(runner):
        add_nodesource_repository(ctx)
        apt_safe_install(ctx, ["nodejs"])
    else:
        error("No apt available, Node.js installation is not automated.")

    if not runner.have("npm"):
        raise ProvisionError("npm not found after NodeSource installation.")
    return StepStatus.DONE
