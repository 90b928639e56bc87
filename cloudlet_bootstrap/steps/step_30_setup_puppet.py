from __future__ import annotations

import logging

from ..config import Settings
from ..lib.command import pipe_to_shell
from ..osdetect import OSIdentifier
from ..pipeline import StepContext, dispatch

logger = logging.getLogger(__name__)


# Script names inside the puppet-bootstrap repository.
BOOTSTRAP_SCRIPTS = {
    OSIdentifier.AMAZON: "centos_6_x.sh",
    OSIdentifier.RHEL5: "centos_5_x.sh",
    OSIdentifier.RHEL6: "centos_6_x.sh",
    OSIdentifier.DEBIAN: "debian.sh",
    OSIdentifier.UBUNTU: "ubuntu.sh",
}

FETCH_RETRIES = 3


def bootstrap_url(repo: str, script: str) -> str:
    return f"{repo.rstrip('/')}/{script}"


class SetupPuppetStep:
    step_id = "30_setup_puppet"

    def enabled(self, settings: Settings) -> bool:
        return settings.flag_enabled("SetupPuppet")

    def run(self, ctx: StepContext) -> None:
        script = dispatch(BOOTSTRAP_SCRIPTS, ctx, self.step_id)
        url = bootstrap_url(ctx.settings.puppet_bootstrap_repo, script)

        pipe_to_shell(
            ["curl", "-fsSL", "--retry", str(FETCH_RETRIES), url],
            dry_run=ctx.dry_run,
        )
        logger.info("Puppet agent bootstrapped from %s", url)
