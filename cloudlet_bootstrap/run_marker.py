from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MARKER_PATH = "/var/lib/cloudlet-bootstrap/provisioned"


def has_run_before(path: str = DEFAULT_MARKER_PATH) -> bool:
    return Path(path).exists()


def read_marker(path: str = DEFAULT_MARKER_PATH) -> Optional[str]:
    """Return the timestamp recorded by mark_run(), or None if there is no marker."""

    p = Path(path)
    if not p.exists():
        return None
    return p.read_text(encoding="utf-8", errors="replace").strip() or None


def mark_run(path: str = DEFAULT_MARKER_PATH, *, now: Optional[datetime] = None) -> str:
    """Write the current UTC time to the marker. Never overwrites an existing marker."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    stamp = (now or datetime.now(timezone.utc)).isoformat()
    # "x" mode: the marker is write-once.
    with p.open("x", encoding="utf-8") as f:
        f.write(stamp + "\n")

    logger.info("Marked provisioning complete at %s (%s)", stamp, path)
    return stamp
