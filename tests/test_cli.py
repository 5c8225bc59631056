"""CLI-level smoke tests."""
import json
import logging
from pathlib import Path

import pytest

from rikiki.cli import ScriptError, main, play_script


@pytest.fixture(autouse=True)
def _detach_cli_handlers():
    yield
    logger = logging.getLogger("rikiki")
    for handler in list(logger.handlers):
        if getattr(handler, "_rikiki_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_cli_schedule(capsys):
    main(["schedule", "--players", "4"])
    out = capsys.readouterr().out.splitlines()
    assert out[0].split() == ["round", "dealer", "cards"]
    rows = [line.split() for line in out[1:]]
    assert len(rows) == 20
    assert rows[0] == ["1", "0", "10"]
    assert rows[10] == ["11", "2", "1"]
    assert rows[-1] == ["20", "3", "10"]


def test_cli_schedule_rejects_bad_count(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["schedule", "--players", "0"])
    assert exc.value.code == 2


def test_cli_demo(capsys):
    main(["demo"])
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Scores: [[2, 3, 4, 5]]",
        "Scores: [[2, 3, 4, 5], [2, -5, 4, -3]]",
    ]


def test_cli_replay(tmp_path: Path, capsys):
    script = tmp_path / "game.json"
    script.write_text(
        json.dumps(
            {
                "players": ["Alice", "Bob", "Charlie", "Diana"],
                "rounds": [
                    {"bets": [0, 1, 2, 3], "points": [0, 1, 2, 3]},
                    {"bets": [0, 0, 2, 0], "points": [0, 5, 2, 3]},
                ],
            }
        ),
        encoding="utf-8",
    )
    main(["replay", str(script)])
    out = capsys.readouterr().out
    assert "1. Charlie 8" in out
    assert "4. Bob -2" in out


def test_cli_replay_enforce_points_total_fails(tmp_path: Path, capsys):
    script = tmp_path / "game.json"
    script.write_text(
        json.dumps({"players": ["A", "B"], "rounds": [{"bets": [1, 1], "points": [1, 1]}]}),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as exc:
        main(["replay", "--enforce-points-total", str(script)])
    assert exc.value.code == 2
    assert "replay failed" in capsys.readouterr().err


def test_cli_replay_missing_file(tmp_path: Path):
    with pytest.raises(SystemExit) as exc:
        main(["replay", str(tmp_path / "nope.json")])
    assert exc.value.code == 2


def test_play_script_missing_bets():
    with pytest.raises(ScriptError):
        play_script(["A", "B"], [{"bets": [1], "points": [1, 0]}])


def test_play_script_past_end():
    rounds = [{"bets": [1, 1], "points": [1, 0]}] * 3
    with pytest.raises(ScriptError):
        play_script([f"P{i}" for i in range(52)], [{"bets": [0] * 52, "points": [0] * 52}] * 3)
    game = play_script(["A", "B"], rounds)
    assert len(game.get_scores()) == 3


@pytest.mark.parametrize(
    "rounds",
    [
        [{"bets": ["x", 0], "points": [0, 0]}],
        [{"bets": [None, 0], "points": [0, 0]}],
        [{"bets": [1.7, 0], "points": [0, 0]}],
        [{"bets": [True, 0], "points": [0, 0]}],
        [{"bets": [0, 0], "points": "00"}],
        [[0, 1]],
    ],
)
def test_cli_replay_rejects_bad_values(tmp_path: Path, capsys, rounds):
    script = tmp_path / "game.json"
    script.write_text(json.dumps({"players": ["A", "B"], "rounds": rounds}), encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["replay", str(script)])
    assert exc.value.code == 2
    assert "replay failed" in capsys.readouterr().err


@pytest.mark.parametrize("players, rounds", [("AB", []), (["A", 1], []), (["A", "B"], {"bets": [0, 0]})])
def test_play_script_rejects_bad_shapes(players, rounds):
    with pytest.raises(ScriptError):
        play_script(players, rounds)
