import argparse
import json

import pytest

from clubpairing.cli import create_parser, main, parse_result, resolve_player
from clubpairing.models.enums import AgeGroup, GameResult
from clubpairing.storage import load_club


@pytest.fixture
def state(tmp_path):
    return tmp_path / "club.json"


def _run(state, *argv):
    return main(["--state", str(state), *argv])


def test_full_round_from_the_command_line(state, tmp_path, capsys):
    assert _run(state, "add", "Alice", "--age", "u11", "--active") == 0
    assert _run(state, "add", "Bob", "Smith", "--age", "U11", "--active") == 0
    assert _run(state, "start", "u11") == 0
    out = capsys.readouterr().out
    assert "U11 - Round 1" in out
    assert "1 game(s) pending" in out

    assert _run(state, "next", "u11") == 1
    assert "pending" in capsys.readouterr().out

    assert _run(state, "result", "u11", "1", "1-0") == 0
    out = capsys.readouterr().out
    assert "Alice: 1200 -> 1216 (+16)" in out
    assert "Bob Smith: 1200 -> 1184 (-16)" in out
    assert "Round complete" in out

    assert _run(state, "standings", "u11") == 0
    out = capsys.readouterr().out
    assert out.index("Alice") < out.index("Bob Smith")
    assert "1216" in out

    csv_path = tmp_path / "out.csv"
    assert _run(state, "export", "u11", "--output", str(csv_path)) == 0
    assert csv_path.read_text(encoding="utf-8").splitlines()[1] == "Alice,1,1216"

    assert _run(state, "next", "u11") == 0
    club = load_club(state)
    assert club.tournament(AgeGroup.U11).round_number == 2


def test_repeated_result_is_reported_not_failed(state, capsys):
    _run(state, "add", "A", "--age", "u9", "--active")
    _run(state, "add", "B", "--age", "u9", "--active")
    _run(state, "start", "u9")
    _run(state, "result", "u9", "1", "0.5-0.5")
    capsys.readouterr()

    assert _run(state, "result", "u9", "1", "0-1") == 0
    assert "already decided" in capsys.readouterr().out


def test_toggle_and_remove_by_row_number(state, capsys):
    _run(state, "add", "Cara", "--age", "u13")
    assert not load_club(state).registry.players()[0].is_active

    assert _run(state, "toggle", "1") == 0
    assert "Cara is now active" in capsys.readouterr().out
    assert load_club(state).registry.players()[0].is_active

    assert _run(state, "remove", "Cara") == 0
    assert len(load_club(state).registry) == 0
    assert _run(state, "remove", "Cara") == 1


def test_add_with_birthday(state):
    assert _run(state, "add", "Dot", "--dob", "2020-03-14") == 0
    player = load_club(state).registry.players()[0]
    assert player.date_of_birth.isoformat() == "2020-03-14"


def test_rejections_exit_non_zero(state, capsys):
    assert _run(state, "start", "u11") == 1
    assert "Need at least 2" in capsys.readouterr().out
    assert _run(state, "result", "u11", "1", "1-0") == 1
    assert _run(state, "add", "   ", "--age", "u11") == 1
    assert _run(state, "clear") == 1


def test_clear_needs_confirmation(state):
    _run(state, "add", "Eli", "--age", "u9")
    assert _run(state, "clear", "--yes") == 0
    assert len(load_club(state).registry) == 0


def test_k_factor_is_saved(state):
    assert _run(state, "--k-factor", "20") == 0
    data = json.loads(state.read_text(encoding="utf-8"))
    assert data["config"]["k_factor"] == 20


def test_bad_arguments_exit_with_usage_error(state):
    with pytest.raises(SystemExit) as excinfo:
        _run(state, "start", "u21")
    assert excinfo.value.code == 2
    with pytest.raises(SystemExit):
        _run(state, "result", "u11", "1", "2-0")


def test_parse_result_tokens():
    assert parse_result("1-0") is GameResult.WHITE_WIN
    assert parse_result("1/2-1/2") is GameResult.DRAW
    assert parse_result("0-1") is GameResult.BLACK_WIN
    with pytest.raises(argparse.ArgumentTypeError):
        parse_result("win")


def test_resolve_player(club):
    a = club.add_player("Ann", age_group=AgeGroup.U9).value
    b = club.add_player("Ann", age_group=AgeGroup.U9).value
    c = club.add_player("Cy", age_group=AgeGroup.U9).value

    assert resolve_player(club, "2") is b
    assert resolve_player(club, a.id) is a
    assert resolve_player(club, "Cy") is c
    assert resolve_player(club, "Ann") is None
    assert resolve_player(club, "9") is None


def test_parser_lists_every_command():
    parser = create_parser()
    args = parser.parse_args(["pairings", "u13"])
    assert args.division is AgeGroup.U13
    assert args.mutates is False
