"""
Object sync: mirror the S3 source prefix into the local target directory.
"""

from __future__ import annotations

from pathlib import Path

from podboot.context import ProvisionContext, StepStatus
from podboot.errors import ProvisionError, SoftFailure
from podboot.utils import section


def ensure_dir_owned(ctx: ProvisionContext, path: Path) -> None:
    """Create ``path`` (as root if needed) and hand it to the invoking user."""
    runner = ctx.runner
    runner.run(["mkdir", "-p", str(path)], sudo=True)
    owner = f"{ctx.config.uid}:{ctx.config.gid}"
    result = runner.run(["chown", "-R", owner, str(path)], sudo=True, check=False)
    if not result.ok:
        ctx.report.tolerate(
            SoftFailure.OWNERSHIP_FIX_FAILED,
            f"chown -R {owner} {path} exited with {result.returncode}",
        )


def sync_objects(ctx: ProvisionContext) -> StepStatus:
    """
    Copy new and changed objects from the source prefix into the target directory.

    Local files that no longer exist remotely are kept. Credentials are passed
    to this call directly so it does not depend on the config store.

    Raises:
        ProvisionError: If the sync exits non-zero
    """
    config = ctx.config
    section(f"Syncing {config.s3_source} -> {config.target_dir}")
    ensure_dir_owned(ctx, config.target_dir)

    result = ctx.runner.run(
        ["aws", "s3", "sync", config.s3_source, str(config.target_dir), "--only-show-errors"],
        env=config.credential_env(),
        check=False,
    )
    if not result.ok:
        raise ProvisionError(
            f"S3 sync from {config.s3_source} failed with exit code {result.returncode}"
        )
    return StepStatus.DONE
