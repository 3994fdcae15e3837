"""
State shared by the provisioning steps during one run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from podboot.config import ProvisionConfig
from podboot.errors import SoftFailure
from podboot.shell import CommandRunner
from podboot.utils import warn


class Step(str, Enum):
    ENV_SETUP = "env-setup"
    PKG_ENSURE = "pkg-ensure"
    RUNTIME_ENSURE = "runtime-ensure"
    CLI_ENSURE = "cli-ensure"
    CRED_CONFIGURE = "cred-configure"
    CRED_VERIFY = "cred-verify"
    SYNC = "sync"


class StepStatus(str, Enum):
    DONE = "done"
    SKIPPED = "skipped"


@dataclass
class ProvisionReport:
    """What a run changed and which failures it tolerated."""

    steps: dict[Step, StepStatus] = field(default_factory=dict)
    soft_failures: list[tuple[SoftFailure, str]] = field(default_factory=list)
    install_requests: list[list[str]] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    settings_written: list[str] = field(default_factory=list)

    def tolerate(self, failure: SoftFailure, detail: str) -> None:
        warn(detail)
        self.soft_failures.append((failure, detail))

    def tolerated(self) -> list[SoftFailure]:
        return [failure for failure, _ in self.soft_failures]

    def to_dict(self) -> dict:
        return {
            "steps": {step.value: status.value for step, status in self.steps.items()},
            "soft_failures": [
                {"kind": failure.value, "detail": detail} for failure, detail in self.soft_failures
            ],
            "install_requests": self.install_requests,
            "removed": self.removed,
            "settings_written": self.settings_written,
        }


@dataclass
class ProvisionContext:
    config: ProvisionConfig
    runner: CommandRunner
    report: ProvisionReport = field(default_factory=ProvisionReport)
