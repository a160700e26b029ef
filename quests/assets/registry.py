from __future__ import annotations

import csv
import random
import re
from dataclasses import dataclass
from pathlib import Path

from quests.core.deck import Deck
from quests.models import EventActionCard, EventEffect, FoeCard, QuestCard, WeaponCard, WeaponType


ADVENTURE_HEADER = ["name", "kind", "weapon_type", "value", "count"]
EVENT_HEADER = ["name", "kind", "stages", "effect", "count"]


def _norm_key(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip().casefold()


def _slug_id(s: str) -> str:
    s = s.strip().casefold()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    return s.strip("-")


class AssetLoadError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class CardDefinition:
    """One line of a deck list: a card face and how many copies the deck holds."""

    name: str
    kind: str
    count: int
    value: int = 0
    weapon_type: WeaponType | None = None
    stages: int = 0
    effect: EventEffect | None = None

    def make_card(self, card_id: str) -> WeaponCard | FoeCard | QuestCard | EventActionCard:
        if self.kind == "weapon":
            if self.weapon_type is None:
                raise AssetLoadError(f"Weapon card {self.name} has no weapon type")
            return WeaponCard(card_id=card_id, name=self.name, weapon_type=self.weapon_type, value=self.value)
        if self.kind == "foe":
            return FoeCard(card_id=card_id, name=self.name, value=self.value)
        if self.kind == "quest":
            return QuestCard(card_id=card_id, name=self.name, stages=self.stages)
        if self.kind == "event":
            if self.effect is None:
                raise AssetLoadError(f"Event card {self.name} has no effect")
            return EventActionCard(card_id=card_id, name=self.name, effect=self.effect)
        raise AssetLoadError(f"Unknown card kind: {self.kind}")


@dataclass(frozen=True, slots=True)
class CardCatalog:
    """Deck list for one deck.

    Lookups by name are forgiving (case + whitespace). Instantiating the catalog
    gives every physical copy its own card id.
    """

    definitions: tuple[CardDefinition, ...]
    _key_to_definition: dict[str, CardDefinition]

    @staticmethod
    def from_rows(rows: list[CardDefinition]) -> "CardCatalog":
        key_to_definition: dict[str, CardDefinition] = {}
        for d in rows:
            key = _norm_key(d.name)
            if key in key_to_definition:
                raise AssetLoadError(f"Duplicate card name: {d.name}")
            key_to_definition[key] = d
        return CardCatalog(definitions=tuple(rows), _key_to_definition=key_to_definition)

    def get(self, name: str) -> CardDefinition | None:
        return self._key_to_definition.get(_norm_key(name))

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and self.get(item) is not None

    @property
    def total_cards(self) -> int:
        return sum(d.count for d in self.definitions)

    def instantiate(self) -> list[WeaponCard | FoeCard | QuestCard | EventActionCard]:
        cards: list[WeaponCard | FoeCard | QuestCard | EventActionCard] = []
        for d in self.definitions:
            slug = _slug_id(d.name)
            cards.extend(d.make_card(f"{slug}-{n}") for n in range(1, d.count + 1))
        return cards


@dataclass(frozen=True, slots=True)
class GameAssets:
    adventure_cards: CardCatalog
    event_cards: CardCatalog

    def build_adventure_deck(self, *, rng: random.Random | None = None) -> Deck[WeaponCard | FoeCard]:
        return Deck(self.adventure_cards.instantiate(), rng=rng)  # type: ignore[arg-type]

    def build_event_deck(self, *, rng: random.Random | None = None) -> Deck[QuestCard | EventActionCard]:
        return Deck(self.event_cards.instantiate(), rng=rng)  # type: ignore[arg-type]


def _read_csv_rows(path: Path) -> list[list[str]]:
    try:
        with path.open(encoding="utf-8-sig", newline="") as f:
            rows = [[c.strip() for c in row] for row in csv.reader(f)]
    except FileNotFoundError as e:
        raise AssetLoadError(f"Asset file not found: {path}") from e

    return [row for row in rows if any(row)]


def _int_cell(value: str, *, path: Path, column: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise AssetLoadError(f"Bad {column} '{value}' in {path}") from e


def _check_header(rows: list[list[str]], expected: list[str], path: Path) -> None:
    if not rows:
        raise AssetLoadError(f"Empty card CSV: {path}")
    header = [c.casefold() for c in rows[0]]
    if header[: len(expected)] != expected:
        raise AssetLoadError(f"Unexpected header in {path}: {rows[0]}")


def load_adventure_csv(path: Path) -> CardCatalog:
    rows = _read_csv_rows(path)
    _check_header(rows, ADVENTURE_HEADER, path)

    out: list[CardDefinition] = []
    for row in rows[1:]:
        if len(row) < len(ADVENTURE_HEADER):
            continue
        name, kind, weapon_type, value, count = (c.strip() for c in row[:5])
        if not name:
            continue
        kind = kind.casefold()
        if kind == "weapon":
            try:
                wtype = WeaponType(_slug_id(weapon_type).replace("-", "_"))
            except ValueError as e:
                raise AssetLoadError(f"Unknown weapon type '{weapon_type}' in {path}") from e
        elif kind == "foe":
            wtype = None
        else:
            raise AssetLoadError(f"Adventure cards must be weapon or foe, got '{kind}' in {path}")
        out.append(
            CardDefinition(
                name=name,
                kind=kind,
                weapon_type=wtype,
                value=_int_cell(value, path=path, column="value"),
                count=_int_cell(count, path=path, column="count"),
            )
        )

    return CardCatalog.from_rows(out)


def load_event_csv(path: Path) -> CardCatalog:
    rows = _read_csv_rows(path)
    _check_header(rows, EVENT_HEADER, path)

    out: list[CardDefinition] = []
    for row in rows[1:]:
        if len(row) < len(EVENT_HEADER):
            continue
        name, kind, stages, effect, count = (c.strip() for c in row[:5])
        if not name:
            continue
        kind = kind.casefold()
        if kind == "quest":
            out.append(
                CardDefinition(
                    name=name,
                    kind=kind,
                    stages=_int_cell(stages, path=path, column="stages"),
                    count=_int_cell(count, path=path, column="count"),
                )
            )
        elif kind == "event":
            try:
                eff = EventEffect(_slug_id(effect).replace("-", "_"))
            except ValueError as e:
                raise AssetLoadError(f"Unknown event effect '{effect}' in {path}") from e
            out.append(
                CardDefinition(name=name, kind=kind, effect=eff, count=_int_cell(count, path=path, column="count"))
            )
        else:
            raise AssetLoadError(f"Event deck cards must be quest or event, got '{kind}' in {path}")

    return CardCatalog.from_rows(out)


def _fallback_game_assets() -> GameAssets:
    """The standard deck lists, used when the CSV files are missing."""

    def weapon(name: str, wtype: WeaponType, value: int, count: int) -> CardDefinition:
        return CardDefinition(name=name, kind="weapon", weapon_type=wtype, value=value, count=count)

    def foe(name: str, value: int, count: int) -> CardDefinition:
        return CardDefinition(name=name, kind="foe", value=value, count=count)

    def quest(name: str, stages: int, count: int = 1) -> CardDefinition:
        return CardDefinition(name=name, kind="quest", stages=stages, count=count)

    def event(name: str, effect: EventEffect, count: int = 1) -> CardDefinition:
        return CardDefinition(name=name, kind="event", effect=effect, count=count)

    adventure_rows = [
        weapon("Excalibur", WeaponType.excalibur, 30, 2),
        weapon("Lance", WeaponType.lance, 20, 6),
        weapon("Battle-ax", WeaponType.battle_axe, 15, 8),
        weapon("Sword", WeaponType.sword, 10, 16),
        weapon("Horse", WeaponType.horse, 10, 11),
        weapon("Dagger", WeaponType.dagger, 5, 6),
        foe("Dragon", 50, 1),
        foe("Giant", 40, 2),
        foe("Mordred", 30, 4),
        foe("Green Knight", 25, 2),
        foe("Black Knight", 25, 3),
        foe("Evil Knight", 20, 6),
        foe("Saxon Knight", 15, 8),
        foe("Robber Knight", 15, 7),
        foe("Saxons", 10, 5),
        foe("Boar", 5, 4),
        foe("Thieves", 5, 8),
    ]

    event_rows = [
        quest("Search for the Holy Grail", 5),
        quest("Test of the Green Knight", 4),
        quest("Search for the Questing Beast", 4),
        quest("Defend the Queen's Honor", 4),
        quest("Rescue the Fair Maiden", 3),
        quest("Journey through the Enchanted Forest", 3),
        quest("Vanquish King Arthur's Enemies", 3, 2),
        quest("Slay the Dragon", 3),
        quest("Boar Hunt", 2, 2),
        quest("Repel the Saxon Raiders", 2, 2),
        event("Plague", EventEffect.plague),
        event("Queen's Favor", EventEffect.queens_favor, 2),
        event("Prosperity Throughout the Realm", EventEffect.prosperity),
    ]

    return GameAssets(
        adventure_cards=CardCatalog.from_rows(adventure_rows),
        event_cards=CardCatalog.from_rows(event_rows),
    )


def load_game_assets(*, root: Path, strict: bool = False) -> GameAssets:
    assets_dir = root / "assets"

    # Fall back to the standard deck lists when files are missing, unless strict.
    try:
        return GameAssets(
            adventure_cards=load_adventure_csv(assets_dir / "adventure_cards.csv"),
            event_cards=load_event_csv(assets_dir / "event_cards.csv"),
        )
    except AssetLoadError:
        if strict:
            raise
        return _fallback_game_assets()
