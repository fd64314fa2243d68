from clubpairing.models.enums import AgeGroup, ErrorKind, GameResult
from clubpairing.utils.export import format_points, standings_csv, standings_filename

from conftest import add_active

U9 = AgeGroup.U9


def test_standings_rank_points_then_rating(club):
    low = add_active(club, "Low", U9, rating=1000)
    high = add_active(club, "High", U9, rating=1400)
    mid = add_active(club, "Mid", U9, rating=1200)
    club.start_tournament(U9)

    # the bye point is credited as soon as round 1 is paired
    assert club.tournament(U9).current_round.bye_player_id == low.id
    before = club.get_standings(U9).value
    assert [row.name for row in before] == ["Low", "High", "Mid"]
    assert [row.rank for row in before] == [1, 2, 3]

    club.submit_result(U9, 0, GameResult.BLACK_WIN)

    rows = club.get_standings(U9).value
    assert [row.player_id for row in rows] == [mid.id, low.id, high.id]
    assert [row.points for row in rows] == [1.0, 1.0, 0.0]
    assert rows[0].age_group is U9
    assert rows[0].rating == mid.rating


def test_standings_are_read_only(club):
    add_active(club, "A", U9)
    add_active(club, "B", U9)
    club.start_tournament(U9)
    before = club.to_dict()

    club.get_standings(U9)
    club.export_standings_csv(U9)

    assert club.to_dict() == before


def test_csv_export(club):
    add_active(club, "Ann, Jr", U9)
    add_active(club, "Bea", U9)
    club.start_tournament(U9)
    club.submit_result(U9, 0, GameResult.DRAW)

    csv_text = club.export_standings_csv(U9).value

    assert csv_text.splitlines() == [
        "Name,Points,Rating",
        '"Ann, Jr",0.5,1200',
        "Bea,0.5,1200",
    ]


def test_export_needs_a_tournament(club):
    assert club.export_standings_csv(U9).error is ErrorKind.NO_ACTIVE_TOURNAMENT


def test_export_helpers():
    assert standings_filename(AgeGroup.U13) == "u13_standings.csv"
    assert format_points(1.0) == "1"
    assert format_points(2.5) == "2.5"
    assert standings_csv([]) == "Name,Points,Rating\n"
