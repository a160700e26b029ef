from __future__ import annotations

from collections.abc import Iterable

from quests.core.attack import Attack
from quests.core.stage import Stage
from quests.models import Player


def format_hand(player: Player) -> str:
    """Numbered hand listing; the numbers are the valid card choices."""

    lines: list[str] = [f"{player.label} - {player.shields} shield(s), {len(player.hand)} card(s):"]
    if not player.hand:
        lines.append("  (empty hand)")
    for idx, card in enumerate(player.hand, start=1):
        lines.append(f"  {idx:>2}. {card}")
    return "\n".join(lines)


def format_stage(stage: Stage) -> str:
    cards = ", ".join(str(c) for c in stage.cards) or "(no cards)"
    status = "ready" if stage.is_valid() else "needs a foe"
    return f"Stage [{status}] value {stage.value}: {cards}"


def format_attack(attack: Attack) -> str:
    weapons = ", ".join(str(w) for w in attack.weapons) or "(no weapons)"
    return f"Attack value {attack.value}: {weapons}"


def format_scoreboard(players: Iterable[Player]) -> str:
    ordered = sorted(players, key=lambda p: p.seat)
    return "\n".join(f"- {p.label}: {p.shields} shield(s)" for p in ordered)
