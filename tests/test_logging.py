from __future__ import annotations

import os

from infrastructure.logging import find_latest_log_file


def test_latest_log_is_most_recently_modified(tmp_path):
    older = tmp_path / "gallery_20260101.log"
    newer = tmp_path / "gallery_20260102.log"
    other = tmp_path / "unrelated.log"
    for i, path in enumerate((older, newer, other)):
        path.write_text("x", encoding="utf-8")
        os.utime(path, (1_000 + i, 1_000 + i))

    assert find_latest_log_file(tmp_path) == newer


def test_no_logs(tmp_path):
    assert find_latest_log_file(tmp_path / "absent") is None
    assert find_latest_log_file(tmp_path) is None
