"""
The boot sequence: environment, packages, Node.js, AWS CLI, credentials, sync.
"""

from __future__ import annotations

from collections.abc import Callable

from podboot.awscli import ensure_aws_cli
from podboot.config import ProvisionConfig
from podboot.context import ProvisionContext, ProvisionReport, Step, StepStatus
from podboot.credentials import configure_credentials, verify_credentials
from podboot.environment import setup_environment
from podboot.handoff import Outcome, resolve_handoff
from podboot.packages import ensure_base_tools
from podboot.runtime import ensure_node_runtime
from podboot.shell import CommandRunner
from podboot.sync import sync_objects
from podboot.utils import section

STEPS: tuple[tuple[Step, Callable[[ProvisionContext], StepStatus]], ...] = (
    (Step.ENV_SETUP, setup_environment),
    (Step.PKG_ENSURE, ensure_base_tools),
    (Step.RUNTIME_ENSURE, ensure_node_runtime),
    (Step.CLI_ENSURE, ensure_aws_cli),
    (Step.CRED_CONFIGURE, configure_credentials),
    (Step.CRED_VERIFY, verify_credentials),
    (Step.SYNC, sync_objects),
)


class Provisioner:
    """
    Runs every step once, strictly in order.

    A step either completes, reports that nothing was needed, or raises
    ProvisionError; the first error ends the run. ``run`` stops short of the
    handoff and returns it so the caller decides whether to exec.
    """

    def __init__(self, config: ProvisionConfig, runner: CommandRunner | None = None) -> None:
        self.ctx = ProvisionContext(config=config, runner=runner or CommandRunner())

    @property
    def report(self) -> ProvisionReport:
        return self.ctx.report

    def run(self) -> Outcome:
        for step, func in STEPS:
            self.report.steps[step] = func(self.ctx)
        section(f"Download complete. Framework start script: {self.ctx.config.start_script_path}")
        return resolve_handoff(self.ctx.config)
