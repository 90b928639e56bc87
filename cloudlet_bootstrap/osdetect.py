from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Optional

from .errors import UnsupportedOS
from .lib.command import run_cmd

logger = logging.getLogger(__name__)


class OSIdentifier(enum.Enum):
    AMAZON = "amazon"
    RHEL5 = "rhel5"
    RHEL6 = "rhel6"
    DEBIAN = "debian"
    UBUNTU = "ubuntu"
    UNSUPPORTED = "unsupported"


SUPPORTED = frozenset(o for o in OSIdentifier if o is not OSIdentifier.UNSUPPORTED)

DEBIAN_MARKER = "etc/debian_version"
REDHAT_MARKER = "etc/redhat-release"
SYSTEM_RELEASE_MARKER = "etc/system-release"

_LSB_DISTRIBUTORS = {
    "ubuntu": OSIdentifier.UBUNTU,
    "debian": OSIdentifier.DEBIAN,
}

_REDHAT_RELEASES = [
    ("release 5", OSIdentifier.RHEL5),
    ("release 6", OSIdentifier.RHEL6),
]


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="ignore").strip()
    except OSError:
        return None


def _lsb_distributor() -> Optional[str]:
    r = run_cmd(["lsb_release", "-si"], check=False)
    if not r.ok:
        return None
    return r.stdout.strip() or None


def _detect_debian_family() -> OSIdentifier:
    distributor = _lsb_distributor()
    os_id = _LSB_DISTRIBUTORS.get((distributor or "").lower())
    if os_id is None:
        # debian_version is present but the distribution can't be named: fail closed.
        logger.info("Debian-family marker found but lsb_release reported %r", distributor)
        return OSIdentifier.UNSUPPORTED
    return os_id


def detect_os(*, root: str = "/") -> OSIdentifier:
    """Identify the running distribution from its release marker files.

    Markers are checked in a fixed order (Debian family, Red Hat family, the
    generic system-release file) and the first match wins. Returns
    OSIdentifier.UNSUPPORTED when nothing matches.
    """

    base = Path(root)

    if (base / DEBIAN_MARKER).exists():
        return _detect_debian_family()

    redhat = _read_text(base / REDHAT_MARKER)
    if redhat is not None:
        for needle, os_id in _REDHAT_RELEASES:
            if needle in redhat:
                return os_id

    system_release = _read_text(base / SYSTEM_RELEASE_MARKER)
    if system_release is not None and "Amazon Linux" in system_release:
        return OSIdentifier.AMAZON

    return OSIdentifier.UNSUPPORTED


def require_supported_os(os_id: OSIdentifier) -> OSIdentifier:
    if os_id not in SUPPORTED:
        raise UnsupportedOS(os_id)
    return os_id
