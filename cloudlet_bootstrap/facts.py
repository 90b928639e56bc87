from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

FACT_PREFIX = "FACTER_"
DEFAULT_FACTS_PATH = "/etc/facter/facts.d/cloudlet.yaml"


def collect_facts(
    environ: Optional[Mapping[str, str]] = None,
    prefix: str = FACT_PREFIX,
    *,
    base: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Return every variable whose name starts with prefix, names and values verbatim.

    base holds prefixed values from the config file; the environment wins on
    a name clash.
    """

    env = os.environ if environ is None else environ
    facts = {k: str(v) for k, v in (base or {}).items() if k.startswith(prefix)}
    facts.update((k, str(v)) for k, v in env.items() if k.startswith(prefix))
    return facts


def render_facts(facts: Mapping[str, str]) -> str:
    return yaml.safe_dump(dict(facts), default_flow_style=False, sort_keys=True)


def write_facts(path: str, facts: Mapping[str, str], *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would write %d facts to %s", len(facts), str(p))
        return

    p.parent.mkdir(parents=True, exist_ok=True)

    # Write next to the target and rename so Facter never reads a partial file.
    fd, tmp = tempfile.mkstemp(dir=str(p.parent), prefix=f".{p.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(render_facts(facts))
        os.chmod(tmp, 0o644)
        os.replace(tmp, p)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise

    logger.info("Wrote %d facts to %s", len(facts), str(p))


def refresh_facts(
    path: str = DEFAULT_FACTS_PATH,
    environ: Optional[Mapping[str, str]] = None,
    *,
    base: Optional[Mapping[str, str]] = None,
    dry_run: bool = False,
) -> Dict[str, str]:
    facts = collect_facts(environ, base=base)
    write_facts(path, facts, dry_run=dry_run)
    return facts
