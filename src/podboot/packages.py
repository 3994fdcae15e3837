"""
Package ensurer: install missing OS packages through apt, tolerating broken states.
"""

from __future__ import annotations

from collections.abc import Iterable

from podboot.context import ProvisionContext, StepStatus
from podboot.errors import CommandError, SoftFailure
from podboot.shell import CommandRunner
from podboot.utils import section, warn


def have_apt(runner: CommandRunner) -> bool:
    return runner.have("apt")


def missing_tools(runner: CommandRunner, tools: Iterable[str]) -> list[str]:
    """Command names from ``tools`` that are not on PATH, in the given order."""
    return [tool for tool in tools if not runner.have(tool)]


def dpkg_status(runner: CommandRunner, package: str) -> str | None:
    """
    Return the two-letter ``dpkg -l`` status of ``package`` (e.g. ``ii``, ``rc``).

    Architecture qualifiers (``npm:amd64``) are ignored. Returns None when dpkg
    is unavailable or does not list the package.
    """
    if not runner.have("dpkg"):
        return None
    result = runner.run(["dpkg", "-l"], capture=True, check=False)
    for line in result.stdout.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        if parts[1].split(":", 1)[0] == package:
            return parts[0]
    return None


def is_listed(runner: CommandRunner, package: str) -> bool:
    return dpkg_status(runner, package) is not None


def is_installed(runner: CommandRunner, package: str) -> bool:
    return dpkg_status(runner, package) == "ii"


def apt_safe_install(ctx: ProvisionContext, packages: list[str]) -> bool:
    """
    Install ``packages`` with one repair-and-retry cycle.

    A missing apt is tolerated, since the image may provide the tools some
    other way. A failed install triggers ``apt --fix-broken install`` and a
    single retry; the retry failing is fatal.

    Returns:
        False if apt is missing and nothing was installed

    Raises:
        CommandError: If ``apt update`` or the retried install fails
    """
    runner = ctx.runner
    if not have_apt(runner):
        ctx.report.tolerate(
            SoftFailure.NO_PACKAGE_MANAGER,
            f"apt not found, skipping package installation: {' '.join(packages)}",
        )
        return False

    ctx.report.install_requests.append(list(packages))
    runner.run(["apt", "update", "-y"], sudo=True)
    try:
        runner.run(["apt", "install", "-y", *packages], sudo=True)
    except CommandError:
        warn("apt install reported conflicts, attempting repair")
        repair = runner.run(["apt", "-y", "--fix-broken", "install"], sudo=True, check=False)
        if not repair.ok:
            ctx.report.tolerate(
                SoftFailure.FIX_BROKEN_FAILED,
                f"apt --fix-broken install exited with {repair.returncode}",
            )
        runner.run(["apt", "install", "-y", *packages], sudo=True)
    return True


def ensure_pkg_removed(ctx: ProvisionContext, package: str) -> bool:
    """
    Purge ``package`` if dpkg knows about it. Every removal command is best-effort.

    Returns:
        True if a removal was attempted
    """
    runner = ctx.runner
    if not have_apt(runner) or not is_listed(runner, package):
        return False

    steps = (
        (["apt", "purge", "-y", package], SoftFailure.PACKAGE_REMOVAL_FAILED),
        (["apt", "-y", "--fix-broken", "install"], SoftFailure.FIX_BROKEN_FAILED),
        (["apt", "autoremove", "-y"], SoftFailure.AUTOREMOVE_FAILED),
    )
    for argv, failure in steps:
        result = runner.run(argv, sudo=True, check=False)
        if not result.ok:
            ctx.report.tolerate(failure, f"{' '.join(argv)} exited with {result.returncode}")
    ctx.report.removed.append(package)
    return True


def ensure_base_tools(ctx: ProvisionContext) -> StepStatus:
    """Install whichever base tools are missing, plus the fixed prerequisites."""
    config = ctx.config
    section(
        f"System tools ({', '.join((*config.base_tools, *config.base_prerequisites))})"
        " - installing only if needed"
    )
    needed = [*missing_tools(ctx.runner, config.base_tools), *config.base_prerequisites]
    if needed and apt_safe_install(ctx, needed):
        return StepStatus.DONE
    return StepStatus.SKIPPED
