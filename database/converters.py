"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the normalized DB schema
and the nested Pydantic models.
"""

import json
from typing import List, Optional

from models import (
    BetSettings,
    Course,
    GameSession,
    Hole,
    Player,
    SessionParticipant,
    Side,
    TeeSet,
)


def _float(value) -> Optional[float]:
    """NUMERIC columns arrive as Decimal."""
    return float(value) if value is not None else None


def _json(value):
    """JSONB columns arrive as str unless a codec is registered on the pool."""
    if value is None or isinstance(value, (dict, list)):
        return value
    return json.loads(value)


# ================================================================
# Row -> Model (reads)
# ================================================================

def player_from_row(row) -> Player:
    """players.players row -> Player model."""
    return Player(
        id=str(row["id"]),
        name=row["name"],
        aliases=list(row["aliases"] or []),
        handicap_index=_float(row["handicap_index"]),
        is_self=bool(row["is_self"]),
    )


def hole_from_row(row) -> Hole:
    """courses.holes row -> Hole model."""
    return Hole(
        number=row["hole_number"],
        par=row["par"],
        hcp=row["hcp"],
        yardage=row["yardage"],
    )


def tee_set_from_row(row) -> TeeSet:
    return TeeSet(
        name=row["name"],
        gender=row["gender"],
        rating=_float(row["rating"]),
        slope=_float(row["slope"]),
        front_rating=_float(row["front_rating"]),
        front_slope=_float(row["front_slope"]),
        back_rating=_float(row["back_rating"]),
        back_slope=_float(row["back_slope"]),
    )


def course_from_rows(course_row, hole_rows: list, tee_rows: list) -> Course:
    """Assemble a Course from courses.courses + holes + tee_sets rows."""
    holes = sorted((hole_from_row(r) for r in hole_rows), key=lambda h: h.number)
    return Course(
        id=str(course_row["id"]),
        name=course_row["name"],
        location=course_row["location"],
        rating=_float(course_row["rating"]),
        slope=_float(course_row["slope"]),
        holes=holes,
        tee_sets=[tee_set_from_row(r) for r in tee_rows],
    )


def participant_from_row(row) -> SessionParticipant:
    """games.session_participants joined with players.players -> SessionParticipant."""
    return SessionParticipant(
        player_id=str(row["player_id"]),
        name=row["name"],
        aliases=list(row["aliases"] or []),
        handicap_index=_float(row["handicap_index"]),
        course_handicap=_float(row["course_handicap"]),
        tee_name=row["tee_name"],
        tee_gender=row["tee_gender"],
    )


def session_from_rows(
    session_row, participant_rows: List, course: Optional[Course]
) -> GameSession:
    """Assemble a GameSession. Participants keep their stored position order."""
    participants = [
        participant_from_row(r)
        for r in sorted(participant_rows, key=lambda r: r["position"])
    ]
    bet_settings = _json(session_row["bet_settings"])
    sides = _json(session_row["sides"]) or []
    return GameSession(
        id=str(session_row["id"]),
        course=course,
        hole_selection=session_row["hole_selection"],
        game_type=session_row["game_type"],
        game_mode=session_row["game_mode"],
        payout_mode=session_row["payout_mode"],
        player_details=participants,
        sides=[Side(**s) for s in sides],
        bet_settings=BetSettings(**bet_settings) if bet_settings else None,
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def merge_alias(player: Player, alias: str) -> Optional[List[str]]:
    """New alias list with `alias` appended, or None if it is already known."""
    cleaned = alias.strip()
    if not cleaned or player.has_name(cleaned):
        return None
    return [*player.aliases, cleaned]


def session_to_row(session: GameSession) -> dict:
    return {
        "course_id": session.course.id if session.course else None,
        "hole_selection": session.hole_selection.value,
        "game_type": session.game_type.value,
        "game_mode": session.game_mode.value,
        "payout_mode": session.payout_mode.value,
        "bet_settings": session.bet_settings.model_dump(mode="json") if session.bet_settings else None,
        "sides": [s.model_dump(mode="json") for s in session.sides],
    }


def participant_to_row(p: SessionParticipant, position: int) -> tuple:
    return (
        p.player_id, position, p.handicap_index, p.course_handicap,
        p.tee_name, p.tee_gender,
    )
