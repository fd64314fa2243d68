import copy
import random
import threading

import pytest

from clubpairing.controllers import Club
from clubpairing.exceptions import InvalidResultException
from clubpairing.models.club_config import ClubConfig
from clubpairing.models.enums import AgeGroup, ErrorKind, GameResult

from conftest import add_active, counting_ids

U11 = AgeGroup.U11


def _decide_all(club, division, result=GameResult.WHITE_WIN):
    current = club.tournament(division).current_round
    for board, pairing in enumerate(current.pairings):
        if not pairing.is_decided:
            assert club.submit_result(division, board, result)


def test_two_player_example(club):
    a = add_active(club, "A")
    b = add_active(club, "B")

    started = club.start_tournament(U11)
    assert started
    tournament = started.value
    assert tournament.round_number == 1
    board = tournament.current_round.pairings[0]
    assert (board.white, board.black) == (a.id, b.id)

    assert club.submit_result(U11, 0, GameResult.WHITE_WIN)
    assert tournament.entry(a.id).points == 1.0
    assert tournament.entry(b.id).points == 0.0
    assert (a.rating, b.rating) == (1216, 1184)
    assert tournament.entry(a.id).opponents == [b.id]
    assert tournament.entry(b.id).opponents == [a.id]

    advanced = club.advance_round(U11)
    assert advanced
    assert tournament.round_number == 2
    board = advanced.value.pairings[0]
    assert {board.white, board.black} == {a.id, b.id}
    assert tournament.entry(a.id).opponents == [b.id]


def test_three_players_bye_and_rotation(club):
    players = [add_active(club, name) for name in "ABC"]
    assert club.start_tournament(U11)
    tournament = club.tournament(U11)

    first = tournament.current_round
    assert len(first.pairings) == 2
    bye = first.pairings[-1]
    assert bye.is_bye and bye.is_decided
    bye_entry = tournament.entry(bye.white)
    assert bye_entry.points == 1.0
    assert club.registry.get(bye.white).rating == 1200
    assert not club.is_round_complete(U11)

    for _ in range(3):
        _decide_all(club, U11)
        assert club.advance_round(U11)

    assert tournament.round_number == 4
    assert len(tournament.rounds) == 4
    for round_data in tournament.rounds:
        assert sum(1 for p in round_data.pairings if p.is_bye) == 1
        ids = [pid for p in round_data.pairings for pid in p.player_ids]
        assert sorted(ids) == sorted(p.id for p in players)


def test_bye_never_changes_rating(club):
    for name in "ABCDE":
        add_active(club, name, rating=1300)
    assert club.start_tournament(U11)
    bye_id = club.tournament(U11).current_round.bye_player_id

    _decide_all(club, U11, GameResult.DRAW)

    assert club.registry.get(bye_id).rating == 1300
    assert club.tournament(U11).entry(bye_id).opponents == []


def test_start_needs_two_eligible_players(club):
    add_active(club, "Solo")
    club.add_player("Benched", age_group=U11)

    result = club.start_tournament(U11)

    assert not result
    assert result.error is ErrorKind.INSUFFICIENT_PLAYERS
    assert club.tournament(U11) is None


def test_start_only_snapshots_the_division(club):
    add_active(club, "A")
    add_active(club, "B")
    add_active(club, "Other", division=AgeGroup.U9)

    tournament = club.start_tournament(U11).value

    assert len(tournament.roster) == 2
    assert club.tournament(AgeGroup.U9) is None


def test_advance_rejected_until_round_complete(club):
    for name in "ABCD":
        add_active(club, name)
    club.start_tournament(U11)
    tournament = club.tournament(U11)

    assert tournament.pending_boards() == 2
    assert club.submit_result(U11, 0, GameResult.DRAW)
    assert tournament.pending_boards() == 1
    before = copy.deepcopy(tournament.to_dict())
    rejected = club.advance_round(U11)

    assert not rejected
    assert rejected.error is ErrorKind.ROUND_INCOMPLETE
    assert "1 game(s) pending" in rejected.message
    assert tournament.to_dict() == before

    assert club.submit_result(U11, 1, GameResult.BLACK_WIN)
    assert club.is_round_complete(U11)
    assert club.advance_round(U11)
    assert tournament.round_number == 2


def test_resubmission_is_an_idempotent_no_op(club):
    a = add_active(club, "A")
    b = add_active(club, "B")
    club.start_tournament(U11)
    club.submit_result(U11, 0, GameResult.WHITE_WIN)
    once = club.to_dict()

    again = club.submit_result(U11, 0, GameResult.BLACK_WIN)

    assert again
    assert again.error is ErrorKind.ALREADY_DECIDED
    assert club.to_dict() == once
    assert (a.rating, b.rating) == (1216, 1184)


def test_bye_board_counts_as_decided(club):
    for name in "ABC":
        add_active(club, name)
    club.start_tournament(U11)

    result = club.submit_result(U11, 1, GameResult.BLACK_WIN)

    assert result.error is ErrorKind.ALREADY_DECIDED
    bye_id = club.tournament(U11).current_round.bye_player_id
    assert club.tournament(U11).entry(bye_id).points == 1.0


@pytest.mark.parametrize("board, round_index", [(5, None), (-1, None), (0, 1), (0, -1)])
def test_invalid_board_reference(club, board, round_index):
    add_active(club, "A")
    add_active(club, "B")
    club.start_tournament(U11)
    before = club.to_dict()

    result = club.submit_result(U11, board, GameResult.DRAW, round_index=round_index)

    assert not result
    assert result.error is ErrorKind.INVALID_BOARD
    assert club.to_dict() == before


def test_results_only_for_current_round(club):
    add_active(club, "A")
    add_active(club, "B")
    club.start_tournament(U11)
    assert club.submit_result(U11, 0, GameResult.DRAW, round_index=0)
    club.advance_round(U11)

    stale = club.submit_result(U11, 0, GameResult.DRAW, round_index=0)
    assert stale.error is ErrorKind.INVALID_BOARD
    assert club.submit_result(U11, 0, GameResult.DRAW, round_index=1)


def test_numeric_scores_accepted_and_bad_ones_raise(club):
    add_active(club, "A")
    add_active(club, "B")
    club.start_tournament(U11)

    with pytest.raises(InvalidResultException):
        club.submit_result(U11, 0, 0.3)
    assert not club.tournament(U11).current_round.pairings[0].is_decided

    assert club.submit_result(U11, 0, 0.5)
    assert club.tournament(U11).current_round.pairings[0].result is GameResult.DRAW


def test_commands_without_tournament(club):
    for result in (
        club.submit_result(U11, 0, GameResult.DRAW),
        club.advance_round(U11),
        club.archive(U11),
        club.get_standings(U11),
        club.current_round(U11),
    ):
        assert not result
        assert result.error is ErrorKind.NO_ACTIVE_TOURNAMENT
    assert not club.is_round_complete(U11)


def test_archive_closes_the_division(club):
    add_active(club, "A")
    add_active(club, "B")
    club.start_tournament(U11)

    archived = club.archive(U11)

    assert archived
    assert club.tournament(U11) is None
    assert club.archive_records == [archived.value]
    assert club.submit_result(U11, 0, GameResult.DRAW).error is ErrorKind.NO_ACTIVE_TOURNAMENT


def test_restart_archives_previous_tournament(club):
    add_active(club, "A")
    add_active(club, "B")
    first = club.start_tournament(U11).value
    second = club.start_tournament(U11).value

    assert club.tournament(U11) is second
    assert club.archive_records == [first]
    assert all(entry.points == 0 for entry in second.roster)


def test_remove_player_in_use(club):
    a = add_active(club, "A")
    add_active(club, "B")
    spare = club.add_player("Spare", age_group=U11).value
    club.start_tournament(U11)

    in_use = club.remove_player(a.id)
    assert in_use.error is ErrorKind.PLAYER_IN_USE
    assert a.id in club.registry

    assert club.remove_player(spare.id)
    assert club.remove_player(spare.id).error is ErrorKind.PLAYER_NOT_FOUND

    club.archive(U11)
    assert club.remove_player(a.id)


def test_invalid_player_data_is_a_rejection(club):
    result = club.add_player("", age_group=U11)
    assert not result
    assert result.error is ErrorKind.INVALID_PLAYER_DATA


def test_clear_all(club):
    add_active(club, "A")
    add_active(club, "B")
    club.start_tournament(U11)

    assert club.clear_all()
    assert len(club.registry) == 0
    assert all(t is None for t in club.tournaments.values())
    assert club.archive_records == []


def test_config_changes_rules():
    club = Club(config=ClubConfig(k_factor=20, min_players=4), id_source=counting_ids())
    a = add_active(club, "A")
    b = add_active(club, "B")
    assert club.start_tournament(U11).error is ErrorKind.INSUFFICIENT_PLAYERS
    add_active(club, "C")
    add_active(club, "D")
    assert club.start_tournament(U11)

    club.submit_result(U11, 0, GameResult.WHITE_WIN)
    assert (a.rating, b.rating) == (1210, 1190)


@pytest.mark.parametrize("seed", range(10))
def test_random_events_keep_invariants(seed):
    rng = random.Random(seed)
    club = Club(id_source=counting_ids())
    size = rng.randint(2, 9)
    for i in range(size):
        add_active(club, f"P{i}", rating=rng.randint(800, 1600))
    club.start_tournament(U11)
    tournament = club.tournament(U11)

    for _ in range(rng.randint(1, 6)):
        current = tournament.current_round
        boards = list(range(len(current.pairings)))
        rng.shuffle(boards)
        for board in boards:
            club.submit_result(U11, board, rng.choice(list(GameResult)))
        assert club.is_round_complete(U11)
        assert club.advance_round(U11)

    total_games = sum(
        1 for r in tournament.rounds[:-1] for p in r.pairings if not p.is_bye
    )
    total_byes = sum(1 for r in tournament.rounds for p in r.pairings if p.is_bye)
    total_points = sum(entry.points for entry in tournament.roster)
    assert total_points == total_games + total_byes
    for entry in tournament.roster:
        assert len(entry.opponents) == len(set(entry.opponents))
        assert entry.player_id not in entry.opponents
    for round_data in tournament.rounds:
        for pairing in round_data.pairings:
            assert pairing.white != pairing.black


def test_commands_serialize_across_threads(club):
    for i in range(8):
        add_active(club, f"P{i}")
    club.start_tournament(U11)

    def submit(board):
        for _ in range(5):
            club.submit_result(U11, board, GameResult.WHITE_WIN)

    threads = [threading.Thread(target=submit, args=(b,)) for b in range(4) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    tournament = club.tournament(U11)
    assert club.is_round_complete(U11)
    assert sum(entry.points for entry in tournament.roster) == 4.0
    assert sorted(p.rating for p in club.registry) == [1184] * 4 + [1216] * 4


def test_accepted_result_reports_rating_changes(club):
    a = add_active(club, "A")
    b = add_active(club, "B")
    club.start_tournament(U11)

    recorded = club.submit_result(U11, 0, GameResult.WHITE_WIN).value

    assert recorded.pairing is club.tournament(U11).current_round.pairings[0]
    assert recorded.rating_changes == {a.id: (1200, 1216), b.id: (1200, 1184)}
    again = club.submit_result(U11, 0, GameResult.WHITE_WIN).value
    assert again.already_decided
    assert again.rating_changes == {}


def test_bye_is_always_worth_one_point():
    config = ClubConfig.from_dict({"bye_score": 0.5, "k_factor": 32})
    assert "bye_score" not in config.to_dict()
    club = Club(config=config, id_source=counting_ids())
    for name in "ABC":
        add_active(club, name)
    club.start_tournament(U11)

    bye = club.tournament(U11).current_round.pairings[-1]
    assert bye.result_display == "Bye (1.0)"
    assert club.tournament(U11).entry(bye.white).points == 1.0
