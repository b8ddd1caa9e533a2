"""Player endpoints: reads, alias writes and handicap edits."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_db
from api.schemas import AddAliasRequest, HandicapEditRequest
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from models import Player

router = APIRouter()


@router.get("/owner/{owner_id}", response_model=List[Player])
async def list_players(owner_id: UUID, db: DatabaseManager = Depends(get_db)):
    return await db.players.list_players(str(owner_id))


@router.get("/{player_id}", response_model=Player)
async def get_player(player_id: UUID, db: DatabaseManager = Depends(get_db)):
    player = await db.players.get_player(str(player_id))
    if not player:
        raise HTTPException(404, "Player not found")
    return player


@router.post("/{player_id}/aliases")
async def add_alias(player_id: UUID, req: AddAliasRequest, db: DatabaseManager = Depends(get_db)):
    """Remember a name variant. Known names are accepted without a write."""
    try:
        added = await db.players.add_alias(str(player_id), req.alias)
    except NotFoundError:
        raise HTTPException(404, "Player not found")
    return {"added": added}


@router.put("/{player_id}/handicap", response_model=Player)
async def update_handicap(
    player_id: UUID, req: HandicapEditRequest, db: DatabaseManager = Depends(get_db)
):
    """Edit a handicap index. Out-of-range values are rejected and nothing is written."""
    player = await db.players.get_player(str(player_id))
    if not player:
        raise HTTPException(404, "Player not found")
    error = player.update_field("handicap_index", req.handicap_index)
    if error:
        raise HTTPException(422, error)
    try:
        await db.players.update_handicap(str(player_id), player.handicap_index)
    except NotFoundError:
        raise HTTPException(404, "Player not found")
    return player
