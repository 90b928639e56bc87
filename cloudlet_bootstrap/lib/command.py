from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run an external program and report its exit status.

    - Always logs the command line.
    - dry_run logs but does not execute (returns a successful empty result).
    - check=True raises CommandError on a nonzero exit status.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError as e:
        # Missing executable: report it the same way as a failed command.
        if check:
            raise CommandError(argv_list, 127, str(e)) from e
        return CmdResult(argv=argv_list, returncode=127, stdout="", stderr=str(e))

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode, p.stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


def pipe_to_shell(
    fetch_argv: Sequence[str],
    *,
    shell: str = "sh",
    dry_run: bool = False,
) -> CmdResult:
    """Equivalent of ``fetch | sh``: run fetch_argv, then feed its stdout to shell."""

    fetched = run_cmd(fetch_argv, dry_run=dry_run)
    return run_cmd([shell], input_text=fetched.stdout, dry_run=dry_run)
