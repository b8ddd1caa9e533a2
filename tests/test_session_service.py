import pytest
from unittest.mock import AsyncMock, MagicMock

from games.formats import GameFormatError
from handicap.strokes import AllocationFormat
from models import (
    BetSettings,
    BetUnit,
    Course,
    GameMode,
    GameSession,
    GameType,
    Hole,
    HoleSelection,
    NassauAmounts,
    PayoutMode,
    ScannedHoleValue,
    ScannedPlayerRow,
    ScanResult,
    SessionParticipant,
    TeeSet,
)
from services.session_service import (
    apply_scan,
    create_session,
    persist_aliases,
    reassign_participant,
    reconcile_scan,
    scan_scorecard,
    update_participant_handicap,
    update_participant_tee,
)
from matching.reconciliation import AliasCandidate


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def course():
    hcps = [7, 15, 1, 11, 3, 17, 9, 13, 5, 8, 16, 2, 12, 4, 18, 10, 14, 6]
    return Course(
        id="c1",
        name="Pebble Creek",
        rating=72.0,
        slope=113,
        holes=[Hole(number=i + 1, par=4, hcp=h) for i, h in enumerate(hcps)],
        tee_sets=[TeeSet(name="Blue", gender="M", rating=74.0, slope=135)],
    )


@pytest.fixture
def session(course):
    return GameSession(
        id="s1",
        course=course,
        player_details=[
            SessionParticipant(player_id="p1", name="Michael", course_handicap=4),
            SessionParticipant(player_id="p2", name="Sarah", aliases=["Sal"], course_handicap=10),
        ],
    )


def _scan(*names):
    return ScanResult(
        course_name="Pebble Creek",
        players=[
            ScannedPlayerRow(name=n, scores=[ScannedHoleValue(hole=1, score=4 + i)])
            for i, n in enumerate(names)
        ],
    )


# ================================================================
# Scan reconciliation
# ================================================================

def test_reconcile_scan_includes_strokes(session):
    outcome = reconcile_scan(session, _scan("Sal", "Miguel"))

    assert outcome.reconciliation.assignment_map() == {0: 1, 1: 0}
    assert [a.strokes_received for a in outcome.allocations] == [0, 6]
    assert not outcome.hole_difficulty_estimated
    assert outcome.session_id == "s1"


def test_reconcile_scan_flags_estimated_difficulty(session):
    session.course = Course(name="Unknown")
    outcome = reconcile_scan(session, _scan("Michael", "Sarah"))
    assert outcome.hole_difficulty_estimated
    assert outcome.estimated_holes == list(range(1, 19))


@pytest.mark.asyncio
async def test_apply_scan_saves_new_aliases(session):
    writer = AsyncMock()
    writer.add_alias.return_value = True

    outcome = await apply_scan(session, _scan("Miguel", "Sarah"), writer)

    writer.add_alias.assert_awaited_once_with("p1", "Miguel")
    assert [(c.player_id, c.alias) for c in outcome.aliases_saved] == [("p1", "Miguel")]


@pytest.mark.asyncio
async def test_apply_scan_survives_alias_failure(session, caplog):
    writer = AsyncMock()
    writer.add_alias.side_effect = RuntimeError("db down")

    with caplog.at_level("WARNING", logger="services.session_service"):
        outcome = await apply_scan(session, _scan("Miguel", "Sarah"), writer)

    assert outcome.reconciliation.assignment_map() == {0: 0, 1: 1}
    assert outcome.aliases_saved == []
    assert "Could not save alias" in caplog.text


@pytest.mark.asyncio
async def test_persist_aliases_continues_after_failure():
    writer = AsyncMock()
    writer.add_alias.side_effect = [RuntimeError("boom"), False, True]
    candidates = [
        AliasCandidate(player_id="p1", alias="A"),
        AliasCandidate(player_id="p2", alias="B"),
        AliasCandidate(player_id="p3", alias="C"),
    ]

    saved = await persist_aliases(writer, candidates)

    assert writer.add_alias.await_count == 3
    assert saved == [candidates[2]]


@pytest.mark.asyncio
async def test_scan_scorecard_reads_image_then_reconciles(session):
    scanner = MagicMock()
    scanner.scan.return_value = _scan("Michael", "Sal")
    writer = AsyncMock()

    outcome = await scan_scorecard(session, "card.jpg", scanner, writer)

    scanner.scan.assert_called_once_with("card.jpg")
    assert outcome.reconciliation.assignment_map() == {0: 0, 1: 1}
    writer.add_alias.assert_not_awaited()


def test_reassign_participant_cycles_without_target(session):
    scan = _scan("Michael", "Sarah")
    current = reconcile_scan(session, scan).reconciliation

    cycled = reassign_participant(session, scan, current, 0)
    assert cycled.assignment_map() == {0: 1, 1: 0}

    targeted = reassign_participant(session, scan, cycled, 0, 0)
    assert targeted.assignment_map() == {0: 0, 1: 1}


# ================================================================
# Edits before play
# ================================================================

def test_handicap_edit_out_of_range_keeps_value(session):
    p = session.player_details[0]
    assert update_participant_handicap(p, "handicap_index", 60) is not None
    assert p.handicap_index is None
    assert update_participant_handicap(p, "course_handicap", 7) is None
    assert p.course_handicap == 7
    assert update_participant_handicap(p, "name", 7) is not None


def test_tee_change_recomputes_course_handicap(course):
    p = SessionParticipant(player_id="p1", name="A", handicap_index=12.0)
    assert update_participant_tee(p, course, HoleSelection.FULL, "Blue", "M") is None
    assert p.tee_name == "Blue"
    assert p.course_handicap == 16


# ================================================================
# Session creation
# ================================================================

def test_create_session_fills_course_handicaps(course):
    participants = [
        SessionParticipant(player_id="p1", name="A", handicap_index=12.0, tee_name="Blue", tee_gender="M"),
        SessionParticipant(player_id="p2", name="B", handicap_index=5.0),
    ]
    setup = create_session(course, participants, GameType.MATCH_PLAY)

    assert setup.session.game_mode == GameMode.HEAD_TO_HEAD
    assert [p.course_handicap for p in setup.session.player_details] == [16, 5]
    assert participants[0].course_handicap is None
    assert [a.strokes_received for a in setup.allocations] == [11, 0]
    assert [s.side_id for s in setup.session.sides] == ["side-a", "side-b"]


def test_create_session_blocks_five_player_nassau(course):
    participants = [SessionParticipant(player_id=f"p{i}", name=f"P{i}") for i in range(5)]
    with pytest.raises(GameFormatError, match="Requires 2 or 4 players"):
        create_session(course, participants, GameType.NASSAU)


def test_create_session_normalizes_bet_settings(course):
    participants = [SessionParticipant(player_id=f"p{i}", name=f"P{i}", handicap_index=10.0) for i in range(3)]
    settings = BetSettings(
        enabled=True,
        bet_per_unit_cents=500,
        bet_unit=BetUnit.HOLE,
        carryover=True,
        nassau_amounts=NassauAmounts(front_cents=100, back_cents=100, overall_cents=200),
    )

    setup = create_session(
        course, participants, GameType.STROKE_PLAY,
        bet_settings=settings, payout_mode=PayoutMode.WAR,
        allocation_format=AllocationFormat.MODIFIED,
    )

    bets = setup.session.bet_settings
    assert bets.bet_unit == BetUnit.WINNER
    assert bets.carryover is None
    assert bets.nassau_amounts is None
    assert setup.session.payout_mode == PayoutMode.POT
    assert all(a.strokes_received == 10 for a in setup.allocations)


def test_create_session_needs_course():
    participants = [SessionParticipant(player_id=f"p{i}", name=f"P{i}") for i in range(2)]
    with pytest.raises(GameFormatError, match="course"):
        create_session(None, participants, GameType.STROKE_PLAY)
