from __future__ import annotations

import logging

from ..config import Settings
from ..lib.pkg import apt_update, apt_upgrade, yum_update
from ..osdetect import OSIdentifier
from ..pipeline import StepContext, dispatch

logger = logging.getLogger(__name__)


def _update_yum(*, dry_run: bool) -> None:
    yum_update(dry_run=dry_run)


def _update_apt(*, dry_run: bool) -> None:
    apt_update(dry_run=dry_run)
    apt_upgrade(dry_run=dry_run)


UPDATERS = {
    OSIdentifier.AMAZON: _update_yum,
    OSIdentifier.RHEL5: _update_yum,
    OSIdentifier.RHEL6: _update_yum,
    OSIdentifier.DEBIAN: _update_apt,
    OSIdentifier.UBUNTU: _update_apt,
}


class UpdatePackagesStep:
    step_id = "20_update_packages"

    def enabled(self, settings: Settings) -> bool:
        return settings.flag_enabled("UpdatePackages")

    def run(self, ctx: StepContext) -> None:
        update = dispatch(UPDATERS, ctx, self.step_id)
        update(dry_run=ctx.dry_run)
        logger.info("System packages updated (%s)", ctx.os_id.value)
