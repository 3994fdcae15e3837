"""
Credential configuration and verification through the AWS CLI config store.
"""

from __future__ import annotations

from podboot.context import ProvisionContext, StepStatus
from podboot.errors import ProvisionError
from podboot.utils import section


def credential_settings(ctx: ProvisionContext) -> list[tuple[str, str]]:
    """The four settings written to the default profile, in write order."""
    config = ctx.config
    return [
        ("aws_access_key_id", config.access_key_id),
        ("aws_secret_access_key", config.secret_access_key.get_secret_value()),
        ("default.region", config.region),
        ("default.output", config.output_format),
    ]


def configure_credentials(ctx: ProvisionContext) -> StepStatus:
    """Overwrite the default profile with the credentials from the environment."""
    section("Writing AWS configuration (default profile) from environment variables")
    for key, value in credential_settings(ctx):
        # The value stays out of the error message
        result = ctx.runner.run(["aws", "configure", "set", key, value], check=False)
        if not result.ok:
            raise ProvisionError(
                f"aws configure set {key} failed with exit code {result.returncode}"
            )
        ctx.report.settings_written.append(key)
    return StepStatus.DONE


def verify_credentials(ctx: ProvisionContext) -> StepStatus:
    """
    Check the configured credentials with ``aws sts get-caller-identity``.

    Raises:
        ProvisionError: On any failure (network, malformed or expired keys)
    """
    section("Testing AWS auth (STS call)")
    result = ctx.runner.run(["aws", "sts", "get-caller-identity"], quiet=True, check=False)
    if not result.ok:
        raise ProvisionError("AWS auth failed (STS). Check the pod's AWS secrets.")
    return StepStatus.DONE
