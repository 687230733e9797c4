import json
import logging

from tetris_scores import SCORE_KEY, HighScoreStore


def test_memory_store():
    s = HighScoreStore(None)
    assert s.load() == 0
    assert s.submit(10)
    assert not s.submit(10)
    assert not s.submit(3)
    assert s.value == 10


def test_persists_only_better_scores(tmp_path):
    path = tmp_path / "nested" / "highscore.json"
    s = HighScoreStore(str(path))
    assert s.load() == 0
    assert s.submit(1500)
    assert json.loads(path.read_text()) == {SCORE_KEY: 1500}
    s.submit(200)
    assert HighScoreStore(str(path)).load() == 1500


def test_corrupt_file_reads_as_zero(tmp_path, caplog):
    path = tmp_path / "highscore.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="tetris_scores"):
        assert HighScoreStore(str(path)).load() == 0
    assert "could not read high score" in caplog.text
