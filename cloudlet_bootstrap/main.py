from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Mapping, Optional

from .config import Settings, load_settings
from .errors import BootstrapError, StepFailure
from .facts import DEFAULT_FACTS_PATH, refresh_facts
from .logging_utils import configure_logging, message
from .osdetect import detect_os, require_supported_os
from .pipeline import StepContext, run_pipeline
from .run_marker import DEFAULT_MARKER_PATH, has_run_before, mark_run, read_marker
from .steps import (
    InstallPrerequisitesStep,
    LinkConfigStep,
    SetupPuppetStep,
    UpdatePackagesStep,
)

logger = logging.getLogger(__name__)


def build_steps(*, target_root: str = "/"):
    return [
        UpdatePackagesStep(),
        SetupPuppetStep(),
        LinkConfigStep(target_root=target_root),
        InstallPrerequisitesStep(),
    ]


def provision(
    settings: Settings,
    *,
    marker_path: str = DEFAULT_MARKER_PATH,
    os_root: str = "/",
    dry_run: bool = False,
) -> bool:
    """Run the one-time provisioning sequence. Returns False if it failed."""

    try:
        if has_run_before(marker_path):
            message("fail", f"Provisioning already run at {read_marker(marker_path)}; only refreshing facts")
            return True
    except OSError as e:
        message("fail", f"Cannot read run marker {marker_path}: {e}")
        return False

    try:
        os_id = require_supported_os(detect_os(root=os_root))
        message("info", f"Detected OS: {os_id.value}")

        ctx = StepContext(os_id=os_id, settings=settings, dry_run=dry_run)
        result = run_pipeline(steps=build_steps(target_root=os_root), ctx=ctx)
        logger.info("Ran steps: %s; skipped: %s", result.ran_steps, result.skipped_steps)
    except StepFailure:
        # Already reported by run_pipeline.
        return False
    except BootstrapError as e:
        message("fail", str(e))
        return False
    except OSError as e:
        message("fail", f"Provisioning failed: {e}")
        return False

    if not dry_run:
        try:
            mark_run(marker_path)
        except OSError as e:
            message("fail", f"Recording run marker {marker_path} failed: {e}")
            return False
    return True


def run(
    *,
    settings: Settings,
    marker_path: str = DEFAULT_MARKER_PATH,
    facts_path: str = DEFAULT_FACTS_PATH,
    environ: Optional[Mapping[str, str]] = None,
    os_root: str = "/",
    dry_run: bool = False,
    console: bool = True,
) -> int:
    """Provision (first run only), then always refresh facts. Returns the exit status."""

    configure_logging(settings.log_dir, console=console)

    ok = False
    try:
        ok = provision(settings, marker_path=marker_path, os_root=os_root, dry_run=dry_run)
    finally:
        try:
            facts = refresh_facts(facts_path, environ, base=settings.facts, dry_run=dry_run)
            message("info", f"Facts refreshed ({len(facts)} keys) in {facts_path}")
        except OSError as e:
            message("fail", f"Writing facts to {facts_path} failed: {e}")
            ok = False

    return 0 if ok else 1


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="cloudlet-bootstrap")
    p.add_argument("--config", default=None, help="Optional YAML file with option defaults")
    p.add_argument("--marker", default=DEFAULT_MARKER_PATH, help="Path of the run-once marker")
    p.add_argument("--facts", default=DEFAULT_FACTS_PATH, help="Path of the external facts file")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--quiet", action="store_true", help="Do not echo messages to the terminal")

    args = p.parse_args(argv)

    try:
        settings = load_settings(os.environ, config_path=args.config)
        return run(
            settings=settings,
            marker_path=args.marker,
            facts_path=args.facts,
            dry_run=bool(args.dry_run),
            console=not args.quiet,
        )
    except BootstrapError as e:
        # LogSetupFailure and ConfigError land here before any log handler exists.
        print(f"cloudlet-bootstrap: {e}", file=sys.stderr)
        return 1
