"""
Error types shared by the provisioning steps.
"""

from __future__ import annotations

from enum import Enum


class ProvisionError(RuntimeError):
    """A fatal condition: the whole run stops and the process exits non-zero."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(ProvisionError):
    pass


class CommandError(ProvisionError):
    """An external command exited non-zero where success was required."""

    def __init__(self, argv: list[str], returncode: int, stderr: str = "") -> None:
        message = f"{' '.join(argv)} failed with exit code {returncode}"
        if stderr.strip():
            message += f"\nstderr:\n{stderr.rstrip()}"
        super().__init__(message)
        self.argv = argv
        self.returncode = returncode


class SoftFailure(str, Enum):
    """Failures that are logged and tolerated instead of aborting the run."""

    NO_PACKAGE_MANAGER = "no-package-manager"
    FIX_BROKEN_FAILED = "fix-broken-failed"
    PACKAGE_REMOVAL_FAILED = "package-removal-failed"
    AUTOREMOVE_FAILED = "autoremove-failed"
    CLI_INSTALLER_FAILED = "cli-installer-failed"
    OWNERSHIP_FIX_FAILED = "ownership-fix-failed"
