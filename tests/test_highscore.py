#
# High score persistence tests.

import os

import pytest

from terminal_racer.persistence.highscore import load_high_score, save_high_score


def test_missing_file_reads_as_zero(tmp_path):
    assert load_high_score(str(tmp_path / "nope.txt")) == 0


@pytest.mark.parametrize("content", ["", "abc", "12x", "\n"])
def test_unparseable_file_reads_as_zero(tmp_path, content):
    path = tmp_path / "highscore.txt"
    path.write_text(content)
    assert load_high_score(str(path)) == 0


def test_stored_score_is_read(tmp_path):
    path = tmp_path / "highscore.txt"
    path.write_text("340\n")
    assert load_high_score(str(path)) == 340


def test_better_score_is_written(tmp_path):
    path = tmp_path / "highscore.txt"
    path.write_text("100")
    assert save_high_score(str(path), 150, 100)
    assert path.read_text() == "150"
    assert load_high_score(str(path)) == 150


def test_worse_or_equal_score_leaves_file_alone(tmp_path):
    path = tmp_path / "highscore.txt"
    path.write_text("100")
    assert not save_high_score(str(path), 50, 100)
    assert not save_high_score(str(path), 100, 100)
    assert path.read_text() == "100"


def test_first_score_creates_directories(tmp_path):
    path = tmp_path / "scores" / "racer" / "highscore.txt"
    assert save_high_score(str(path), 30, 0)
    assert path.read_text() == "30"


def test_unwritable_location_is_not_fatal(tmp_path):
    # A directory where the file should be
    target = tmp_path / "highscore.txt"
    os.makedirs(target)
    assert not save_high_score(str(target), 500, 0)
