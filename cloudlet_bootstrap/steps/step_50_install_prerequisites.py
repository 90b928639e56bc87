from __future__ import annotations

import logging

from ..config import Settings
from ..lib.pkg import apt_install, yum_install
from ..osdetect import OSIdentifier
from ..pipeline import StepContext, dispatch

logger = logging.getLogger(__name__)

PREREQUISITE_PACKAGES = ["git", "curl", "unzip"]

INSTALLERS = {
    OSIdentifier.AMAZON: yum_install,
    OSIdentifier.RHEL5: yum_install,
    OSIdentifier.RHEL6: yum_install,
    OSIdentifier.DEBIAN: apt_install,
    OSIdentifier.UBUNTU: apt_install,
}


class InstallPrerequisitesStep:
    step_id = "50_install_prerequisites"

    def enabled(self, settings: Settings) -> bool:
        return True

    def run(self, ctx: StepContext) -> None:
        install = dispatch(INSTALLERS, ctx, self.step_id)
        install(PREREQUISITE_PACKAGES, dry_run=ctx.dry_run)
        logger.info("Prerequisites installed: %s", ", ".join(PREREQUISITE_PACKAGES))
