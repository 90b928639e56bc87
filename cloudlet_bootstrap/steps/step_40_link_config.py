from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Tuple

from ..config import Settings
from ..osdetect import OSIdentifier
from ..pipeline import StepContext, dispatch

logger = logging.getLogger(__name__)


PUPPET_CONF_DIRS = {
    OSIdentifier.AMAZON: "/etc/puppet",
    OSIdentifier.RHEL5: "/etc/puppet",
    OSIdentifier.RHEL6: "/etc/puppet",
    OSIdentifier.DEBIAN: "/etc/puppet",
    OSIdentifier.UBUNTU: "/etc/puppet",
}

PUPPET_ITEMS = ["hiera.yaml", "manifests", "modules"]

FACTS_DIR = "/etc/facter/facts.d"


def _link(src: Path, dst: Path, *, dry_run: bool) -> bool:
    """Point dst at src. Returns False when dst already was that link."""

    if dst.is_symlink():
        if Path(dst.readlink()) == src:
            return False
        if not dry_run:
            dst.unlink()
    elif dst.exists():
        raise RuntimeError(f"Refusing to replace non-symlink {dst}")

    if dry_run:
        logger.info("Would link %s -> %s", str(dst), str(src))
        return True
    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.symlink_to(src)
    return True


class LinkConfigStep:
    step_id = "40_link_config"

    def __init__(self, target_root: str = "/") -> None:
        self.target_root = target_root

    def enabled(self, settings: Settings) -> bool:
        return True

    def _target(self, abs_path: str) -> Path:
        return Path(self.target_root) / abs_path.lstrip("/")

    def links(self, ctx: StepContext) -> List[Tuple[Path, Path]]:
        puppet_dir = dispatch(PUPPET_CONF_DIRS, ctx, self.step_id)
        # Links are resolved from their own directory, so the source must be absolute.
        payload = Path(os.path.abspath(ctx.settings.payload_dir))

        pairs = [(payload / "puppet" / item, self._target(f"{puppet_dir}/{item}")) for item in PUPPET_ITEMS]
        pairs.append((payload / "facter", self._target(f"{FACTS_DIR}/payload")))
        return pairs

    def run(self, ctx: StepContext) -> None:
        for src, dst in self.links(ctx):
            if not src.exists():
                logger.info("Payload has no %s; not linking %s", str(src), str(dst))
                continue
            if _link(src, dst, dry_run=ctx.dry_run):
                logger.info("Linked %s -> %s", str(dst), str(src))
