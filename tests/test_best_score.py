"""Tests for best-score persistence."""

import json

import pytest

from flappy.storage.best_score import BestScoreStore


def test_missing_file_reads_as_zero(tmp_path):
    assert BestScoreStore(tmp_path / "best.json").load() == 0


def test_save_then_load(tmp_path):
    store = BestScoreStore(tmp_path / "best.json")
    assert store.save(12)
    assert store.load() == 12
    assert json.loads((tmp_path / "best.json").read_text()) == {"best_score": 12}


def test_save_creates_parent_directories(tmp_path):
    store = BestScoreStore(tmp_path / "nested" / "dir" / "best.json")
    assert store.save(4)
    assert store.load() == 4


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "",
        "[1, 2, 3]",
        '{"best_score": "lots"}',
        '{"best_score": -3}',
        '{"best_score": true}',
        '{"best_score": 2.5}',
        '{"other": 5}',
    ],
)
def test_corrupt_record_reads_as_zero(tmp_path, content):
    path = tmp_path / "best.json"
    path.write_text(content)
    assert BestScoreStore(path).load() == 0


def test_failed_save_is_reported_not_raised(tmp_path):
    # a directory where the file should be
    path = tmp_path / "best.json"
    path.mkdir()
    store = BestScoreStore(path)

    assert store.save(9) is False
    assert store.load() == 0
