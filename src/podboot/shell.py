"""
Thin wrapper around subprocess for the package manager, installers and the AWS CLI.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from podboot.errors import CommandError


@dataclass(slots=True)
class CommandResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """stdout and stderr combined (``aws --version`` writes to either)."""
        return self.stdout + self.stderr


class CommandRunner:
    """
    Runs external commands with an explicit child environment.

    Commands that need root are prefixed with ``sudo`` when it is available;
    inside most containers we already run as root and it is not installed.
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        sudo: str | None | bool = True,
    ) -> None:
        self.env = dict(os.environ if env is None else env)
        if sudo is True:
            self.sudo = self.which("sudo")
        elif sudo is False:
            self.sudo = None
        else:
            self.sudo = sudo

    def which(self, name: str) -> str | None:
        return shutil.which(name, path=self.env.get("PATH"))

    def have(self, name: str) -> bool:
        return self.which(name) is not None

    def run(
        self,
        argv: Sequence[str],
        *,
        sudo: bool = False,
        preserve_env: bool = False,
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
        input: str | None = None,
        capture: bool = False,
        quiet: bool = False,
        check: bool = True,
    ) -> CommandResult:
        """
        Run a command to completion. There is no timeout.

        Args:
            argv: Command and arguments
            sudo: Prefix with sudo (when available)
            preserve_env: Pass ``-E`` to sudo
            env: Extra variables layered over the runner environment for this call only
            cwd: Working directory
            input: Text written to the child's stdin
            capture: Capture stdout/stderr into the result
            quiet: Discard stdout/stderr (ignored when capturing)
            check: Raise CommandError on a non-zero exit

        Returns:
            CommandResult with the exit code and any captured output
        """
        full = list(argv)
        if sudo and self.sudo:
            full = [self.sudo, *(["-E"] if preserve_env else []), *full]

        child_env = {**self.env, **(env or {})}
        if capture:
            stream = subprocess.PIPE
        elif quiet:
            stream = subprocess.DEVNULL
        else:
            stream = None

        try:
            proc = subprocess.run(  # noqa: S603
                full,
                env=child_env,
                cwd=str(cwd) if cwd else None,
                input=input,
                stdout=stream,
                stderr=stream,
                text=True,
            )
        except FileNotFoundError:
            # Same convention as the shell: not found is 127, not executable is 126
            result = CommandResult(returncode=127, stderr=f"{full[0]}: command not found")
        except OSError as exc:
            result = CommandResult(returncode=126, stderr=f"{full[0]}: {exc.strerror or exc}")
        else:
            result = CommandResult(
                returncode=proc.returncode,
                stdout=proc.stdout or "",
                stderr=proc.stderr or "",
            )

        if check and not result.ok:
            raise CommandError(full, result.returncode, result.stderr)
        return result
