from __future__ import annotations

import logging

from blockfall.visualization.storage import BEST_SCORE_KEY, BestScoreStore


def test_missing_file_reads_as_zero(tmp_path):
    assert BestScoreStore(tmp_path / "best.json").get() == 0


def test_round_trip(tmp_path):
    store = BestScoreStore(tmp_path / "nested" / "best.json")
    assert store.set(1500)
    assert store.get() == 1500
    assert BEST_SCORE_KEY in store.path.read_text(encoding="utf-8")


def test_corrupt_file_is_logged_not_raised(tmp_path, caplog):
    path = tmp_path / "best.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert BestScoreStore(path).get() == 0
    assert "Could not read best score" in caplog.text


def test_failed_write_returns_false(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = BestScoreStore(blocker / "best.json")
    with caplog.at_level(logging.WARNING):
        assert store.set(10) is False
    assert "Could not save best score" in caplog.text
