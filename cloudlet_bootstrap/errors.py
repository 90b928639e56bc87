from __future__ import annotations

from typing import Optional, Sequence


class BootstrapError(RuntimeError):
    """Base class for every error that ends a bootstrap run."""


class UnsupportedOS(BootstrapError):
    def __init__(self, os_id: object, step_id: Optional[str] = None) -> None:
        self.os_id = os_id
        self.step_id = step_id
        label = getattr(os_id, "value", os_id)
        if step_id:
            msg = f"Unsupported OS {label!s} for step {step_id}"
        else:
            msg = f"Unsupported OS: {label!s}"
        super().__init__(msg)


class StepFailure(BootstrapError):
    def __init__(self, step_id: str, reason: str) -> None:
        self.step_id = step_id
        super().__init__(f"Step {step_id} failed: {reason}")


class LogSetupFailure(BootstrapError):
    pass


class ConfigError(BootstrapError):
    pass


class CommandError(BootstrapError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}\n{stderr}".rstrip())
