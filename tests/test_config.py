import pytest

from cloudlet_bootstrap.config import DEFAULTS, load_settings
from cloudlet_bootstrap.errors import ConfigError


def test_defaults():
    s = load_settings({})

    assert s.raw == DEFAULTS
    assert s.flag_enabled("SetupPuppet")
    assert s.flag_enabled("UpdatePackages")
    assert s.puppet_bootstrap_repo == "https://raw.githubusercontent.com/hashicorp/puppet-bootstrap/master"


def test_environment_overrides_yaml_overrides_defaults(tmp_path):
    cfg = tmp_path / "cloudlet.yaml"
    cfg.write_text("PayloadDir: /srv/payload\nUpdatePackages: false\nLogDir: /tmp/yaml-logs\nUnrelated: 1\n")

    s = load_settings({"LogDir": "/tmp/env-logs", "HOME": "/root"}, config_path=str(cfg))

    assert s.payload_dir == "/srv/payload"
    assert s.log_dir == "/tmp/env-logs"
    assert not s.flag_enabled("UpdatePackages")
    assert "Unrelated" not in s.raw
    assert "HOME" not in s.raw


def test_repo_trailing_slash_is_stripped():
    s = load_settings({"PuppetBootstrapRepo": "http://mirror.local/bootstrap/"})

    assert s.puppet_bootstrap_repo == "http://mirror.local/bootstrap"


def test_yaml_must_be_mapping(tmp_path):
    cfg = tmp_path / "cloudlet.yaml"
    cfg.write_text("- a\n- b\n")

    with pytest.raises(ConfigError):
        load_settings({}, config_path=str(cfg))


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings({}, config_path=str(tmp_path / "nope.yaml"))


def test_prefixed_yaml_keys_are_kept_as_facts(tmp_path):
    cfg = tmp_path / "cloudlet.yaml"
    cfg.write_text("FACTER_role: web\nFACTER_replicas: 3\nLogDir: /tmp/logs\nOther: x\n")

    s = load_settings({}, config_path=str(cfg))

    assert s.facts == {"FACTER_role": "web", "FACTER_replicas": "3"}
    assert "FACTER_role" not in s.raw
    assert s.log_dir == "/tmp/logs"
