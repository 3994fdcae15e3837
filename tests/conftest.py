"""
Shared fixtures: a scripted command runner and a config rooted in tmp_path.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from podboot.config import ProvisionConfig
from podboot.context import ProvisionContext
from podboot.errors import CommandError
from podboot.shell import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """
    Records commands instead of running them.

    ``available`` is the set of command names ``which`` resolves. ``on`` registers
    a canned result for commands starting with a prefix; ``times`` limits how
    often a rule applies and ``effect`` runs when it matches (e.g. to make a
    binary appear after an install).
    """

    def __init__(self, available=()):
        super().__init__(env={"PATH": "/usr/bin"}, sudo=False)
        self.available = set(available)
        self.calls: list[tuple[list[str], dict]] = []
        self._rules: list[dict] = []

    def which(self, name):
        return f"/usr/bin/{name}" if name in self.available else None

    def on(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        times: int | None = None,
        effect: Callable[[list[str], dict], None] | None = None,
    ) -> FakeRunner:
        self._rules.append(
            {
                "prefix": list(prefix),
                "result": CommandResult(returncode, stdout, stderr),
                "times": times,
                "effect": effect,
            }
        )
        return self

    def run(self, argv, *, check=True, **kwargs):
        argv = list(argv)
        self.calls.append((argv, kwargs))
        result = CommandResult(0)
        for rule in self._rules:
            if argv[: len(rule["prefix"])] != rule["prefix"]:
                continue
            if rule["times"] is not None:
                if rule["times"] == 0:
                    continue
                rule["times"] -= 1
            if rule["effect"]:
                rule["effect"](argv, kwargs)
            result = rule["result"]
            break
        if check and not result.ok:
            raise CommandError(argv, result.returncode, result.stderr)
        return result

    @property
    def commands(self) -> list[list[str]]:
        return [argv for argv, _ in self.calls]

    def called(self, *prefix: str) -> list[tuple[list[str], dict]]:
        return [(argv, kw) for argv, kw in self.calls if argv[: len(prefix)] == list(prefix)]


DPKG_HEADER = """\
Desired=Unknown/Install/Remove/Purge/Hold
| Status=Not/Inst/Conf-files/Unpacked/halF-conf/Half-inst/trig-aWait/Trig-pend
|/ Err?=(none)/Reinst-required (Status,Err: uppercase=bad)
||/ Name           Version      Architecture Description
+++-==============-============-============-==================================
"""


def dpkg_listing(*rows: tuple[str, str]) -> str:
    """Build ``dpkg -l`` output from (status, name) pairs."""
    lines = [f"{status}  {name:<14} 1.0.0        amd64        test package" for status, name in rows]
    return DPKG_HEADER + "\n".join(lines) + "\n"


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def config(tmp_path):
    return ProvisionConfig(
        access_key_id="AKIDEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG",
        target_dir=tmp_path / "framework" / "gen",
        bashrc_path=tmp_path / ".bashrc",
        uid=1000,
        gid=1000,
    )


@pytest.fixture
def ctx(config, runner):
    return ProvisionContext(config=config, runner=runner)
