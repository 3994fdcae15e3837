"""
Provisioning configuration.

All inputs are read once from an explicit environment mapping so the steps never
consult ``os.environ`` on their own. Everything that is not a credential is a
fixed default of this pod image.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr

from podboot.errors import ConfigError

DEFAULT_REGION = "eu-central-1"
DEFAULT_OUTPUT = "json"


class ProvisionConfig(BaseModel):
    access_key_id: str
    secret_access_key: SecretStr
    region: str = DEFAULT_REGION
    output_format: str = DEFAULT_OUTPUT

    s3_source: str = "s3://vh-core/GenV03/"
    target_dir: Path = Path("/root/framework/gen")
    start_script: str = "start.sh"

    timezone: str = "Europe/Berlin"
    bashrc_path: Path = Field(default_factory=lambda: Path.home() / ".bashrc")

    base_tools: tuple[str, ...] = ("curl", "unzip", "tmux")
    base_prerequisites: tuple[str, ...] = ("ca-certificates", "gnupg")

    node_major: int = 20
    aws_cli_major: int = 2
    aws_cli_url: str = "https://awscli.amazonaws.com/awscli-exe-linux-x86_64.zip"

    uid: int = Field(default_factory=os.getuid)
    gid: int = Field(default_factory=os.getgid)

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides) -> ProvisionConfig:
        """
        Build the configuration from ``AWS_*`` environment variables.

        Args:
            environ: Environment mapping to read (normally ``os.environ``)
            **overrides: Field values that replace the built-in defaults

        Raises:
            ConfigError: If the access key id or secret access key is unset or empty
        """
        missing = [
            name
            for name in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY")
            if not environ.get(name)
        ]
        if missing:
            raise ConfigError(
                f"Missing required environment variable(s): {', '.join(missing)}. "
                "Configure them as pod secrets."
            )
        return cls(
            access_key_id=environ["AWS_ACCESS_KEY_ID"],
            secret_access_key=SecretStr(environ["AWS_SECRET_ACCESS_KEY"]),
            region=environ.get("AWS_DEFAULT_REGION") or DEFAULT_REGION,
            **overrides,
        )

    @property
    def start_script_path(self) -> Path:
        return self.target_dir / self.start_script

    @property
    def nodesource_setup_url(self) -> str:
        return f"https://deb.nodesource.com/setup_{self.node_major}.x"

    def credential_env(self) -> dict[str, str]:
        """Credentials as transient environment overrides for a single AWS CLI call."""
        return {
            "AWS_ACCESS_KEY_ID": self.access_key_id,
            "AWS_SECRET_ACCESS_KEY": self.secret_access_key.get_secret_value(),
            "AWS_DEFAULT_REGION": self.region,
        }
