"""Tests for score tables and rankings."""
import numpy as np
import pytest

from rikiki.game import Player
from rikiki.standings import final_totals, format_table, ranking, running_totals, score_table

SCORES = [[2, 3, 4, 5], [2, -5, 4, -3]]
PLAYERS = ["Alice", "Bob", "Charlie", "Diana"]


def test_score_table_shape():
    table = score_table(SCORES)
    assert table.shape == (2, 4)
    assert table.dtype == np.int64


def test_score_table_empty_history():
    assert score_table([], num_players=3).shape == (0, 3)
    assert final_totals([], num_players=3) == [0, 0, 0]


def test_score_table_wrong_width():
    with pytest.raises(ValueError):
        score_table(SCORES, num_players=3)


def test_running_and_final_totals():
    assert running_totals(SCORES).tolist() == [[2, 3, 4, 5], [4, -2, 8, 2]]
    assert final_totals(SCORES) == [4, -2, 8, 2]


def test_ranking_order_and_ties():
    ranked = ranking(PLAYERS, SCORES)
    assert [(p.name, t) for p, t in ranked] == [("Charlie", 8), ("Alice", 4), ("Diana", 2), ("Bob", -2)]

    tied = ranking(["A", "B", "C"], [[2, -1, 2]])
    assert [p for p, _ in tied] == [Player("A"), Player("C"), Player("B")]


def test_format_table():
    text = format_table(PLAYERS, SCORES)
    lines = text.splitlines()
    assert len(lines) == 4
    assert "Charlie" in lines[0]
    assert lines[-1].startswith("total")
    assert lines[-1].split()[1:] == ["4", "-2", "8", "2"]


def test_score_table_ragged_rows():
    with pytest.raises(ValueError, match="same number of scores"):
        score_table([[1, 2], [3]])
