from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError
from .facts import FACT_PREFIX

DISABLED = "False"

DEFAULTS: Dict[str, str] = {
    "PayloadDir": "/opt/cloudlet/payload",
    "LogDir": "/var/log/cloudlet",
    "SetupPuppet": "True",
    "UpdatePackages": "True",
    "PuppetBootstrapRepo": "https://raw.githubusercontent.com/hashicorp/puppet-bootstrap/master",
}


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, str] = field(default_factory=lambda: dict(DEFAULTS))
    # Prefixed keys from the YAML file; passed through to the facts file.
    facts: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str:
        return self.raw.get(name, DEFAULTS.get(name, ""))

    def flag_enabled(self, name: str) -> bool:
        """A flag is on unless it is set to exactly the disabling literal."""
        return self.get(name) != DISABLED

    @property
    def payload_dir(self) -> str:
        return self.get("PayloadDir")

    @property
    def log_dir(self) -> str:
        return self.get("LogDir")

    @property
    def puppet_bootstrap_repo(self) -> str:
        return self.get("PuppetBootstrapRepo").rstrip("/")


def _load_yaml_file(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("config file must be YAML")

    import yaml

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")
    return raw


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
) -> Settings:
    """Build Settings from defaults, an optional YAML file, then the environment."""

    env = os.environ if environ is None else environ
    raw = dict(DEFAULTS)
    facts: Dict[str, str] = {}

    if config_path:
        for key, value in _load_yaml_file(config_path).items():
            key = str(key)
            # YAML turns False into a bool; keep the literal the flags compare against.
            if key in DEFAULTS:
                raw[key] = str(value)
            elif key.startswith(FACT_PREFIX):
                facts[key] = str(value)

    for key in DEFAULTS:
        if key in env:
            raw[key] = env[key]

    return Settings(raw=raw, facts=facts)
