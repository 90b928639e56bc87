import pytest

from cloudlet_bootstrap.config import load_settings
from cloudlet_bootstrap.lib.command import CmdResult
from cloudlet_bootstrap.logging_utils import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every writable path into tmp_path."""
    return load_settings(
        {
            "PayloadDir": str(tmp_path / "payload"),
            "LogDir": str(tmp_path / "log"),
        }
    )


@pytest.fixture
def ok_result():
    def _make(argv=(), stdout=""):
        return CmdResult(argv=list(argv), returncode=0, stdout=stdout, stderr="")

    return _make
