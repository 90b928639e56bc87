from datetime import datetime, timezone

import pytest

from cloudlet_bootstrap.run_marker import has_run_before, mark_run, read_marker


def test_marker_lifecycle(tmp_path):
    marker = str(tmp_path / "state" / "provisioned")

    assert not has_run_before(marker)
    assert read_marker(marker) is None

    stamp = mark_run(marker, now=datetime(2015, 6, 1, 12, 0, tzinfo=timezone.utc))

    assert has_run_before(marker)
    assert stamp == "2015-06-01T12:00:00+00:00"
    assert read_marker(marker) == stamp


def test_marker_is_write_once(tmp_path):
    marker = str(tmp_path / "provisioned")
    first = mark_run(marker)

    with pytest.raises(FileExistsError):
        mark_run(marker)

    assert read_marker(marker) == first


def test_read_marker_tolerates_undecodable_bytes(tmp_path):
    marker = tmp_path / "provisioned"
    marker.write_bytes(b"\xff\xfe garbage")

    assert has_run_before(str(marker))
    assert read_marker(str(marker)).endswith("garbage")
