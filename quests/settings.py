from __future__ import annotations

import os
from dataclasses import dataclass


MIN_PLAYERS = 2
MAX_PLAYERS = 8

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class GameSettings:
    num_players: int = 4
    shields_to_win: int = 7
    hand_size: int = 12
    # For reproducible shuffles; None seeds from the OS.
    seed: int | None = None
    max_build_attempts: int = 3
    allow_negative_shields: bool = False
    max_turns: int | None = None
    strict_assets: bool = False
    log_level: str = "WARNING"


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from e


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got '{raw}'")


def validate_settings(settings: GameSettings) -> None:
    if not MIN_PLAYERS <= settings.num_players <= MAX_PLAYERS:
        raise ValueError(f"num_players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")
    if settings.shields_to_win < 1:
        raise ValueError("shields_to_win must be >= 1")
    if settings.hand_size < 0:
        raise ValueError("hand_size must be >= 0")
    if settings.max_build_attempts < 1:
        raise ValueError("max_build_attempts must be >= 1")
    if settings.max_turns is not None and settings.max_turns < 1:
        raise ValueError("max_turns must be >= 1")


def settings_from_env() -> GameSettings:
    """Build settings from QUESTS_* environment variables, falling back to the defaults."""

    defaults = GameSettings()
    settings = GameSettings(
        num_players=_env_int("QUESTS_NUM_PLAYERS", defaults.num_players),  # type: ignore[arg-type]
        shields_to_win=_env_int("QUESTS_SHIELDS_TO_WIN", defaults.shields_to_win),  # type: ignore[arg-type]
        hand_size=_env_int("QUESTS_HAND_SIZE", defaults.hand_size),  # type: ignore[arg-type]
        seed=_env_int("QUESTS_SEED", None),
        max_build_attempts=_env_int("QUESTS_MAX_BUILD_ATTEMPTS", defaults.max_build_attempts),  # type: ignore[arg-type]
        allow_negative_shields=_env_bool("QUESTS_ALLOW_NEGATIVE_SHIELDS", defaults.allow_negative_shields),
        max_turns=_env_int("QUESTS_MAX_TURNS", None),
        strict_assets=_env_bool("QUESTS_STRICT_ASSETS", defaults.strict_assets),
        log_level=os.environ.get("QUESTS_LOG_LEVEL", defaults.log_level).strip().upper() or defaults.log_level,
    )
    validate_settings(settings)
    return settings
