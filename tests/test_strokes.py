import random

import pytest

from handicap.strokes import (
    AllocationFormat,
    PlayerHandicap,
    allocate_strokes,
    allocations_for_session,
    distribute_strokes,
    filter_strokes_for_selection,
    match_stroke_allocation,
    resolve_handicap_value,
    strokes_received,
    team_match_stroke_allocation,
)
from models import (
    Course,
    CourseHoleDifficulty,
    GameSession,
    Hole,
    HoleSelection,
    SessionParticipant,
)

# Stroke index per hole 1-18
HCPS = [7, 15, 1, 11, 3, 17, 9, 13, 5, 8, 16, 2, 12, 4, 18, 10, 14, 6]


@pytest.fixture
def difficulty():
    course = Course(holes=[Hole(number=i + 1, par=4, hcp=h) for i, h in enumerate(HCPS)])
    return CourseHoleDifficulty.from_course(course)


def _hardest(count):
    ranked = sorted(range(1, 19), key=lambda n: (HCPS[n - 1], n))
    return ranked[:count]


# ================================================================
# distribute_strokes
# ================================================================

def test_distribute_goes_to_hardest_holes(difficulty):
    by_hole = distribute_strokes(4, difficulty)
    assert sorted(h for h, n in by_hole.items() if n) == sorted(_hardest(4))
    assert set(by_hole) == set(range(1, 19))


def test_distribute_zero_and_negative(difficulty):
    assert set(distribute_strokes(0, difficulty).values()) == {0}
    assert set(distribute_strokes(-3, difficulty).values()) == {0}


def test_distribute_eighteen_is_one_everywhere(difficulty):
    assert set(distribute_strokes(18, difficulty).values()) == {1}


def test_distribute_past_thirty_six(difficulty):
    by_hole = distribute_strokes(40, difficulty)
    assert sum(by_hole.values()) == 40
    assert {by_hole[h] for h in _hardest(4)} == {3}
    assert min(by_hole.values()) == 2


# ================================================================
# allocate_strokes
# ================================================================

def test_strokes_sum_to_received(difficulty):
    rng = random.Random(2024)
    for _ in range(200):
        size = rng.randint(2, 8)
        players = [
            PlayerHandicap(player_id=f"p{i}", handicap_value=rng.randint(0, 54))
            for i in range(size)
        ]
        allocations = allocate_strokes(players, difficulty)
        baseline = min(p.handicap_value for p in players)

        for player, a in zip(players, allocations):
            s = int(player.handicap_value - baseline)
            assert a.strokes_received == s
            assert sum(a.strokes_by_hole.values()) == s
            ones = sum(1 for n in a.strokes_by_hole.values() if n == 1)
            twos = sum(1 for n in a.strokes_by_hole.values() if n == 2)
            if s <= 36:
                assert ones + 2 * twos == s
                assert twos == max(0, s - 18)
                assert sum(1 for n in a.strokes_by_hole.values() if n >= 1) == min(s, 18)


def test_baseline_player_gets_nothing(difficulty):
    players = [
        PlayerHandicap(player_id="low", handicap_value=5),
        PlayerHandicap(player_id="mid", handicap_value=12),
        PlayerHandicap(player_id="low2", handicap_value=5),
    ]
    low, mid, low2 = allocate_strokes(players, difficulty)

    assert low.strokes_received == 0 and low2.strokes_received == 0
    assert low.single_stroke_holes == [] and low.double_stroke_holes == []
    assert mid.strokes_received == 7
    assert mid.single_stroke_holes == sorted(_hardest(7))


def test_more_strokes_than_holes(difficulty):
    low, high = allocate_strokes([
        PlayerHandicap(player_id="a", handicap_value=5),
        PlayerHandicap(player_id="b", handicap_value=28),
    ], difficulty)

    assert high.strokes_received == 23
    assert high.gets_stroke_on_all_holes
    assert high.single_stroke_holes == []
    assert high.double_stroke_holes == sorted(_hardest(5))
    assert all(n >= 1 for n in high.strokes_by_hole.values())


def test_exactly_eighteen_is_not_all_holes_flag(difficulty):
    _, high = allocate_strokes([
        PlayerHandicap(player_id="a", handicap_value=0),
        PlayerHandicap(player_id="b", handicap_value=18),
    ], difficulty)
    assert not high.gets_stroke_on_all_holes
    assert high.single_stroke_holes == list(range(1, 19))


def test_views_account_for_every_stroke_past_thirty_six(difficulty):
    _, high = allocate_strokes([
        PlayerHandicap(player_id="a", handicap_value=-10),
        PlayerHandicap(player_id="b", handicap_value=30),
    ], difficulty)

    assert high.strokes_received == 40
    assert high.triple_stroke_holes == sorted(_hardest(4))
    layered = 18 + len(high.double_stroke_holes) + len(high.triple_stroke_holes)
    assert layered == 40
    assert sum(high.strokes_per_hole) == 40
    assert high.model_dump()["triple_stroke_holes"] == sorted(_hardest(4))


def test_half_stroke_rounds_up(difficulty):
    _, b = allocate_strokes([
        PlayerHandicap(player_id="a", handicap_value=10.0),
        PlayerHandicap(player_id="b", handicap_value=10.5),
    ], difficulty)
    assert b.strokes_received == 1
    assert strokes_received(12.4, 10.0) == 2
    assert strokes_received(12.6, 10.1) == 3


def test_fallback_difficulty_by_hole_number():
    diff = CourseHoleDifficulty.from_course(Course(holes=[]))
    _, b = allocate_strokes([
        PlayerHandicap(player_id="a", handicap_value=0),
        PlayerHandicap(player_id="b", handicap_value=3),
    ], diff)
    assert b.single_stroke_holes == [1, 2, 3]
    assert diff.is_estimated


def test_modified_format_uses_full_handicap(difficulty):
    a, b = allocate_strokes([
        PlayerHandicap(player_id="a", handicap_value=4),
        PlayerHandicap(player_id="b", handicap_value=-2),
    ], difficulty, AllocationFormat.MODIFIED)
    assert a.strokes_received == 4
    assert b.strokes_received == 0


def test_allocate_empty_group(difficulty):
    assert allocate_strokes([], difficulty) == []


# ================================================================
# Matches
# ================================================================

def test_match_allocation(difficulty):
    m = match_stroke_allocation(8, 14, difficulty)
    assert m.receiving_side == "B"
    assert m.stroke_difference == 6
    assert sum(m.strokes_by_hole.values()) == 6

    even = match_stroke_allocation(9, 9, difficulty)
    assert even.receiving_side == "none"
    assert even.stroke_difference == 0


def test_team_match_allocation(difficulty):
    m = team_match_stroke_allocation([10, 12], [5, 6], difficulty)
    assert m.receiving_side == "A"
    assert m.stroke_difference == 11


def test_filter_strokes_for_front_nine(difficulty):
    by_hole = distribute_strokes(18, difficulty)
    front = filter_strokes_for_selection(by_hole, HoleSelection.FRONT_9)
    assert sorted(front) == list(range(1, 10))
    assert filter_strokes_for_selection(by_hole, HoleSelection.FULL) == by_hole


# ================================================================
# Sessions
# ================================================================

def test_resolve_handicap_value_order():
    assert resolve_handicap_value(SessionParticipant(player_id="p", name="A", handicap_index=9.1, course_handicap=11)) == 11
    assert resolve_handicap_value(SessionParticipant(player_id="p", name="A", handicap_index=9.1)) == 9.1
    assert resolve_handicap_value(SessionParticipant(player_id="p", name="A")) == 0.0


def test_allocations_for_session_warns_on_estimated(caplog):
    session = GameSession(player_details=[
        SessionParticipant(player_id="p1", name="A", course_handicap=2),
        SessionParticipant(player_id="p2", name="B", course_handicap=5),
    ])
    with caplog.at_level("WARNING", logger="handicap.strokes"):
        allocations = allocations_for_session(session)

    assert [a.strokes_received for a in allocations] == [0, 3]
    assert allocations[1].single_stroke_holes == [1, 2, 3]
    assert "using hole number" in caplog.text


def test_allocations_follow_handicap_edits(difficulty):
    p1 = SessionParticipant(player_id="p1", name="A", course_handicap=2)
    p2 = SessionParticipant(player_id="p2", name="B", course_handicap=5)
    session = GameSession(player_details=[p1, p2])

    assert allocations_for_session(session, difficulty=difficulty)[1].strokes_received == 3
    session.player_details[1].update_field("course_handicap", 9)
    assert allocations_for_session(session, difficulty=difficulty)[1].strokes_received == 7
