"""Game session endpoints: setup, scan reconciliation and manual correction."""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_db
from api.schemas import CreateSessionRequest, ReassignRequest
from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError, IntegrityError
from handicap.strokes import AllocationFormat, allocations_for_session
from matching.reconciliation import ReconciliationResult
from models import GameSession, ScanResult, StrokeAllocation
from services.session_service import (
    ScanReconciliation,
    SessionSetup,
    apply_scan,
    create_session,
    reassign_participant,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load_session(db: DatabaseManager, session_id: str) -> GameSession:
    session = await db.sessions.get_session(session_id)
    if not session:
        raise HTTPException(404, "Session not found")
    return session


@router.post("", response_model=SessionSetup)
async def create(
    req: CreateSessionRequest,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
    db: DatabaseManager = Depends(get_db),
):
    """Validate the format for the group and store the session.

    An unplayable format is rejected with 422 before anything is written.
    """
    setup = create_session(
        req.course,
        req.participants,
        req.game_type,
        game_mode=req.game_mode,
        hole_selection=req.hole_selection,
        payout_mode=req.payout_mode,
        bet_settings=req.bet_settings,
        sides=req.sides,
        allocation_format=allocation_format,
    )
    try:
        stored = await db.sessions.create_session(setup.session, str(req.owner_id))
    except (DuplicateError, IntegrityError) as e:
        raise HTTPException(409, str(e))
    return setup.model_copy(update={"session": stored})


@router.get("/{session_id}", response_model=GameSession)
async def get_session(session_id: UUID, db: DatabaseManager = Depends(get_db)):
    return await _load_session(db, str(session_id))


@router.get("/{session_id}/strokes", response_model=List[StrokeAllocation])
async def get_strokes(
    session_id: UUID,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
    db: DatabaseManager = Depends(get_db),
):
    """Strokes for every participant, recomputed from the stored handicaps."""
    session = await _load_session(db, str(session_id))
    return allocations_for_session(session, allocation_format)


@router.post("/{session_id}/scan", response_model=ScanReconciliation)
async def reconcile_session_scan(
    session_id: UUID,
    scan: ScanResult,
    allocation_format: AllocationFormat = AllocationFormat.USGA,
    db: DatabaseManager = Depends(get_db),
):
    """Match an extracted scorecard to the session's players.

    New name variants are saved as aliases when possible; a failed write
    does not fail the request.
    """
    session = await _load_session(db, str(session_id))
    try:
        return await apply_scan(session, scan, db.players, allocation_format)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Scan reconciliation failed for session %s", session_id)
        raise HTTPException(500, f"Reconciliation failed: {type(e).__name__}: {str(e) or repr(e)}")


@router.post("/{session_id}/reassign", response_model=ReconciliationResult)
async def reassign(
    session_id: UUID,
    req: ReassignRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Move one participant to another scanned row, swapping with its holder."""
    session = await _load_session(db, str(session_id))
    if req.participant_index >= len(session.player_details):
        raise HTTPException(422, f"Participant {req.participant_index} is not in this session")
    if req.target_position is not None and req.target_position >= len(req.scan.players):
        raise HTTPException(422, f"Scanned row {req.target_position} does not exist")
    try:
        return reassign_participant(
            session, req.scan, req.current, req.participant_index, req.target_position
        )
    except ValueError as e:
        # current was built from a different scan
        raise HTTPException(422, str(e))
