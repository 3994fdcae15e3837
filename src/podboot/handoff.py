"""
Handoff to the downloaded start script, or park the process when there is none.

``resolve_handoff`` only decides; ``perform`` acts. Tests inspect the outcome
without replacing the test process.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from podboot.config import ProvisionConfig
from podboot.errors import ProvisionError
from podboot.utils import section, warn


@dataclass(frozen=True)
class Handoff:
    script: Path

    @property
    def argv(self) -> list[str]:
        return ["bash", str(self.script)]


@dataclass(frozen=True)
class Parked:
    missing: Path


Outcome = Handoff | Parked


def resolve_handoff(config: ProvisionConfig) -> Outcome:
    script = config.start_script_path
    if script.is_file():
        return Handoff(script=script)
    return Parked(missing=script)


def _wait_forever() -> None:
    threading.Event().wait()


def perform(
    outcome: Outcome,
    env: Mapping[str, str],
    *,
    execvpe: Callable[..., object] = os.execvpe,
    wait: Callable[[], object] = _wait_forever,
) -> None:
    """
    Replace this process with the start script, or block forever.

    Nothing runs after a successful exec. Parking is a terminal state that
    keeps the container's main process alive for manual inspection.

    Raises:
        ProvisionError: If the exec itself fails (exit code 126)
    """
    if isinstance(outcome, Handoff):
        section(f"Starting {outcome.script}...")
        try:
            execvpe(outcome.argv[0], outcome.argv, dict(env))
        except OSError as exc:
            raise ProvisionError(f"Could not exec {outcome.script}: {exc}", exit_code=126) from exc
        return

    warn(f"Start script ({outcome.missing}) not found. Keeping the container alive.")
    wait()
