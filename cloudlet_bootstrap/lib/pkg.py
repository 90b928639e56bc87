from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def yum_update(*, dry_run: bool = False) -> None:
    logger.info("Updating system packages with yum")
    run_cmd(["yum", "-y", "update"], dry_run=dry_run)


def yum_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    logger.info("Installing with yum: %s", " ".join(packages))
    run_cmd(["yum", "-y", "install", *packages], dry_run=dry_run)


def apt_update(*, dry_run: bool = False) -> None:
    logger.info("Refreshing apt package lists")
    run_cmd(["apt-get", "update"], env=APT_ENV, dry_run=dry_run)


def apt_upgrade(*, dry_run: bool = False) -> None:
    logger.info("Upgrading system packages with apt-get")
    run_cmd(["apt-get", "-y", "upgrade"], env=APT_ENV, dry_run=dry_run)


def apt_install(
    packages: Sequence[str],
    *,
    with_recommends: bool = False,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    logger.info("Installing with apt-get: %s", " ".join(packages))
    argv = [
        "apt-get",
        "install",
        "-y",
    ]
    if not with_recommends:
        argv.append("--no-install-recommends")
    run_cmd([*argv, *packages], env=APT_ENV, dry_run=dry_run)
