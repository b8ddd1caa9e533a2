"""Which competitive formats and bet units a game type allows for a group.

Matrix:
- Stroke Play / Skins: always individual only
- Match Play / Nassau:
  - 2 players: head_to_head only
  - 3 players: individual only
  - 4 players: teams or individual (caller asks the user)
  - anything else: nothing, session creation is blocked
"""

from typing import Dict, List, Optional, Sequence, Tuple

from models import BetUnit, FormatSelection, GameMode, GameType, PayoutMode, Side

MIN_PLAYERS = 2
PAIRED_PLAYER_COUNT_MESSAGE = "Requires 2 or 4 players"

ALLOWED_BET_UNITS: Dict[GameType, Tuple[BetUnit, ...]] = {
    GameType.MATCH_PLAY: (BetUnit.MATCH, BetUnit.HOLE),
    GameType.STROKE_PLAY: (BetUnit.WINNER, BetUnit.STROKE_MARGIN),
    GameType.SKINS: (BetUnit.SKIN,),
    GameType.NASSAU: (),  # paid per segment (front / back / overall)
}

DEFAULT_BET_UNIT: Dict[GameType, Optional[BetUnit]] = {
    GameType.MATCH_PLAY: BetUnit.MATCH,
    GameType.STROKE_PLAY: BetUnit.WINNER,
    GameType.SKINS: BetUnit.SKIN,
    GameType.NASSAU: None,
}


class GameFormatError(ValueError):
    """The chosen game cannot be set up for this group. Message is shown to the user."""


def available_game_modes(game_type: GameType, player_count: int) -> List[GameMode]:
    """Legal modes in display order. Empty means the combination is not playable."""
    game_type = GameType(game_type)
    if game_type in (GameType.STROKE_PLAY, GameType.SKINS):
        return [GameMode.INDIVIDUAL]

    if player_count == 2:
        return [GameMode.HEAD_TO_HEAD]
    if player_count == 3:
        return [GameMode.INDIVIDUAL]
    if player_count == 4:
        return [GameMode.TEAMS, GameMode.INDIVIDUAL]
    return []


def requires_mode_choice(game_type: GameType, player_count: int) -> bool:
    """True when the user has to pick between several legal modes."""
    return len(available_game_modes(game_type, player_count)) > 1


def resolve_game_mode(
    game_type: GameType, player_count: int, current: Optional[GameMode] = None
) -> Optional[GameMode]:
    """Keep the current mode if it is still legal, otherwise fall back to the first legal one."""
    modes = available_game_modes(game_type, player_count)
    if not modes:
        return None
    if len(modes) == 1:
        return modes[0]
    if current is not None and GameMode(current) in modes:
        return GameMode(current)
    return modes[0]


def validate_game_setup(
    game_type: GameType, player_count: int, game_mode: Optional[GameMode] = None
) -> GameMode:
    """Return the mode to create the session with, or raise GameFormatError."""
    if player_count < MIN_PLAYERS:
        raise GameFormatError(f"Add at least {MIN_PLAYERS} players to start a game")

    modes = available_game_modes(game_type, player_count)
    if not modes:
        raise GameFormatError(PAIRED_PLAYER_COUNT_MESSAGE)

    if game_mode is None:
        return resolve_game_mode(game_type, player_count)
    game_mode = GameMode(game_mode)
    if game_mode not in modes:
        allowed = ", ".join(m.value for m in modes)
        raise GameFormatError(
            f"{game_mode.value} is not available for {GameType(game_type).value} "
            f"with {player_count} players (choose {allowed})"
        )
    return game_mode


def normalize_bet_unit(
    game_type: GameType,
    bet_unit: Optional[BetUnit],
    payout_mode: PayoutMode = PayoutMode.WAR,
) -> Tuple[Optional[BetUnit], PayoutMode]:
    """Replace a bet unit that does not belong to the game type with its default.

    Stroke play also ties the payout to the unit: winner-takes-all pays from a
    pot, stroke margin is settled player to player.
    """
    game_type = GameType(game_type)
    allowed = ALLOWED_BET_UNITS[game_type]
    unit = BetUnit(bet_unit) if bet_unit is not None else None
    if unit not in allowed:
        unit = DEFAULT_BET_UNIT[game_type]

    if game_type == GameType.STROKE_PLAY:
        payout_mode = PayoutMode.POT if unit == BetUnit.WINNER else PayoutMode.WAR
    return unit, PayoutMode(payout_mode)


def default_sides(game_mode: GameMode, player_ids: Sequence[str]) -> List[Side]:
    """Initial side assignment in selection order; the user can rearrange it before play."""
    game_mode = GameMode(game_mode)
    ids = list(player_ids)
    if game_mode == GameMode.HEAD_TO_HEAD and len(ids) >= 2:
        return [
            Side(side_id="side-a", player_ids=[ids[0]]),
            Side(side_id="side-b", player_ids=[ids[1]]),
        ]
    if game_mode == GameMode.TEAMS and len(ids) >= 4:
        return [
            Side(side_id="side-a", player_ids=ids[0:2]),
            Side(side_id="side-b", player_ids=ids[2:4]),
        ]
    return [Side(side_id=pid, player_ids=[pid]) for pid in ids]


def validate_sides(game_mode: GameMode, sides: Sequence[Side], player_ids: Sequence[str]) -> None:
    """Sides must cover every player exactly once and have the right shape for the mode."""
    seen: List[str] = [pid for side in sides for pid in side.player_ids]
    if sorted(seen) != sorted(player_ids):
        raise GameFormatError("Every player must be on exactly one side")

    game_mode = GameMode(game_mode)
    if game_mode == GameMode.HEAD_TO_HEAD:
        if len(sides) != 2 or any(len(s.player_ids) != 1 for s in sides):
            raise GameFormatError("Head-to-head needs two sides of one player")
    elif game_mode == GameMode.TEAMS:
        if len(sides) != 2 or any(len(s.player_ids) != 2 for s in sides):
            raise GameFormatError("Teams needs two sides of two players")
    elif any(len(s.player_ids) != 1 for s in sides):
        raise GameFormatError("Individual play has one player per side")


def select_format(
    game_type: GameType,
    player_ids: Sequence[str],
    *,
    game_mode: Optional[GameMode] = None,
    bet_unit: Optional[BetUnit] = None,
    payout_mode: PayoutMode = PayoutMode.WAR,
    sides: Optional[Sequence[Side]] = None,
) -> FormatSelection:
    """Validate a setup and produce what settlement consumes."""
    mode = validate_game_setup(game_type, len(player_ids), game_mode)
    unit, payout = normalize_bet_unit(game_type, bet_unit, payout_mode)
    if sides:
        validate_sides(mode, sides, player_ids)
        side_assignments = list(sides)
    else:
        side_assignments = default_sides(mode, player_ids)
    return FormatSelection(
        game_mode=mode,
        bet_unit=unit,
        payout_mode=payout,
        side_assignments=side_assignments,
    )
