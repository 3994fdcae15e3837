"""
Tests for the config module.
"""

from pathlib import Path

import pytest

from podboot.config import ProvisionConfig
from podboot.errors import ConfigError

ENV = {"AWS_ACCESS_KEY_ID": "AKIDEXAMPLE", "AWS_SECRET_ACCESS_KEY": "topsecret"}


def test_from_env_defaults_region_and_output():
    config = ProvisionConfig.from_env(ENV)
    assert config.region == "eu-central-1"
    assert config.output_format == "json"
    assert config.s3_source == "s3://vh-core/GenV03/"
    assert config.start_script_path == Path("/root/framework/gen/start.sh")


def test_from_env_empty_region_uses_default():
    config = ProvisionConfig.from_env({**ENV, "AWS_DEFAULT_REGION": ""})
    assert config.region == "eu-central-1"


def test_from_env_reads_region():
    config = ProvisionConfig.from_env({**ENV, "AWS_DEFAULT_REGION": "us-west-2"})
    assert config.region == "us-west-2"


@pytest.mark.parametrize("missing", ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"])
def test_from_env_requires_credentials(missing):
    env = {k: v for k, v in ENV.items() if k != missing}
    with pytest.raises(ConfigError, match=missing):
        ProvisionConfig.from_env(env)


def test_from_env_overrides(tmp_path):
    config = ProvisionConfig.from_env(ENV, target_dir=tmp_path)
    assert config.start_script_path == tmp_path / "start.sh"


def test_secret_is_hidden_in_repr():
    config = ProvisionConfig.from_env(ENV)
    assert "topsecret" not in repr(config)
    assert config.credential_env() == {
        "AWS_ACCESS_KEY_ID": "AKIDEXAMPLE",
        "AWS_SECRET_ACCESS_KEY": "topsecret",
        "AWS_DEFAULT_REGION": "eu-central-1",
    }


def test_nodesource_url_follows_major():
    config = ProvisionConfig.from_env(ENV, node_major=22)
    assert config.nodesource_setup_url == "https://deb.nodesource.com/setup_22.x"
