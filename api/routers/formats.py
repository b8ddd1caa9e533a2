"""Game format and bet unit endpoints (gate session creation)."""

from fastapi import APIRouter, Query

from api.schemas import AvailableModesResponse, NormalizeBetRequest, NormalizeBetResponse
from games.formats import (
    PAIRED_PLAYER_COUNT_MESSAGE,
    available_game_modes,
    normalize_bet_unit,
)
from models import GameType

router = APIRouter()


@router.get("/{game_type}/modes", response_model=AvailableModesResponse)
async def get_available_modes(game_type: GameType, player_count: int = Query(..., ge=0)):
    """Legal game modes for a game type and group size."""
    modes = available_game_modes(game_type, player_count)
    return AvailableModesResponse(
        game_type=game_type,
        player_count=player_count,
        modes=modes,
        requires_choice=len(modes) > 1,
        message=None if modes else PAIRED_PLAYER_COUNT_MESSAGE,
    )


@router.post("/bet-unit", response_model=NormalizeBetResponse)
async def normalize_bet(req: NormalizeBetRequest):
    """Replace a bet unit that does not fit the game type with its default."""
    unit, payout = normalize_bet_unit(req.game_type, req.bet_unit, req.payout_mode)
    return NormalizeBetResponse(bet_unit=unit, payout_mode=payout)
