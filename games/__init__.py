from .formats import (
    ALLOWED_BET_UNITS,
    DEFAULT_BET_UNIT,
    GameFormatError,
    available_game_modes,
    default_sides,
    normalize_bet_unit,
    requires_mode_choice,
    resolve_game_mode,
    select_format,
    validate_game_setup,
    validate_sides,
)

__all__ = [
    "ALLOWED_BET_UNITS",
    "DEFAULT_BET_UNIT",
    "GameFormatError",
    "available_game_modes",
    "default_sides",
    "normalize_bet_unit",
    "requires_mode_choice",
    "resolve_game_mode",
    "select_format",
    "validate_game_setup",
    "validate_sides",
]
