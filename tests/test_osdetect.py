import pytest

from cloudlet_bootstrap.errors import UnsupportedOS
from cloudlet_bootstrap.lib.command import CmdResult
from cloudlet_bootstrap.osdetect import OSIdentifier, detect_os, require_supported_os


def _write(root, rel, text=""):
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text)


@pytest.fixture
def lsb(mocker):
    def _set(stdout, returncode=0):
        return mocker.patch(
            "cloudlet_bootstrap.osdetect.run_cmd",
            return_value=CmdResult(argv=["lsb_release", "-si"], returncode=returncode, stdout=stdout, stderr=""),
        )

    return _set


@pytest.mark.parametrize(
    "distributor, expected",
    [
        ("Ubuntu\n", OSIdentifier.UBUNTU),
        ("Debian\n", OSIdentifier.DEBIAN),
    ],
)
def test_debian_family(tmp_path, lsb, distributor, expected):
    _write(tmp_path, "etc/debian_version", "7.8")
    mock = lsb(distributor)

    assert detect_os(root=str(tmp_path)) is expected
    mock.assert_called_once_with(["lsb_release", "-si"], check=False)


def test_debian_marker_with_unknown_distributor_fails_closed(tmp_path, lsb):
    _write(tmp_path, "etc/debian_version", "jessie/sid")
    lsb("LinuxMint\n")

    assert detect_os(root=str(tmp_path)) is OSIdentifier.UNSUPPORTED


def test_debian_marker_with_failing_lsb_release(tmp_path, lsb):
    _write(tmp_path, "etc/debian_version", "7.8")
    lsb("", returncode=127)

    assert detect_os(root=str(tmp_path)) is OSIdentifier.UNSUPPORTED


@pytest.mark.parametrize(
    "release, expected",
    [
        ("CentOS release 5.11 (Final)", OSIdentifier.RHEL5),
        ("Red Hat Enterprise Linux Server release 6.5 (Santiago)", OSIdentifier.RHEL6),
    ],
)
def test_redhat_family(tmp_path, lsb, release, expected):
    _write(tmp_path, "etc/redhat-release", release)
    mock = lsb("")

    assert detect_os(root=str(tmp_path)) is expected
    mock.assert_not_called()


def test_amazon_from_system_release(tmp_path):
    _write(tmp_path, "etc/system-release", "Amazon Linux AMI release 2015.03")

    assert detect_os(root=str(tmp_path)) is OSIdentifier.AMAZON


def test_unknown_redhat_release_falls_through_to_system_release(tmp_path):
    _write(tmp_path, "etc/redhat-release", "CentOS Linux release 7.1.1503 (Core)")
    _write(tmp_path, "etc/system-release", "CentOS Linux release 7.1.1503 (Core)")

    assert detect_os(root=str(tmp_path)) is OSIdentifier.UNSUPPORTED


def test_no_markers(tmp_path):
    assert detect_os(root=str(tmp_path)) is OSIdentifier.UNSUPPORTED


def test_require_supported_os():
    assert require_supported_os(OSIdentifier.RHEL6) is OSIdentifier.RHEL6
    with pytest.raises(UnsupportedOS, match="unsupported"):
        require_supported_os(OSIdentifier.UNSUPPORTED)
