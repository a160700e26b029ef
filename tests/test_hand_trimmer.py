from __future__ import annotations

from typing import TYPE_CHECKING

from quests.hand import HandTrimmer
from quests.models import MAX_HAND_SIZE

if TYPE_CHECKING:
    from conftest import CardFactory, GameFactory, ViewFactory


def test_trims_hand_down_to_exactly_twelve(cards: CardFactory, make_game: GameFactory, make_view: ViewFactory) -> None:
    game = make_game(num_players=2)
    player = game.players[0]
    player.hand.extend(cards.weapon(5) for _ in range(15))
    expected_discards = player.hand[:3]

    view = make_view(choices={"p1": [1, 1, 1]})
    discarded = HandTrimmer(game=game, view=view).trim(player)

    assert len(player.hand) == MAX_HAND_SIZE
    assert discarded == expected_discards
    assert all(card not in player.hand for card in discarded)
    assert game.adventure_deck.discard_size == 3
    assert view.messages[0] == "Player 1, you must discard 3 card(s)."


def test_discarded_cards_land_in_adventure_discard_pile(
    cards: CardFactory,
    make_game: GameFactory,
    make_view: ViewFactory,
) -> None:
    game = make_game(num_players=2)
    player = game.players[0]
    player.hand.extend(cards.foe(5) for _ in range(13))
    last = player.hand[-1]

    view = make_view(choices={"p1": [last]})
    HandTrimmer(game=game, view=view).trim(player)

    # The draw pile is empty, so the next draw recycles the discard pile.
    assert game.adventure_deck.draw_card() == last


def test_skip_and_out_of_range_choices_are_reprompted(
    cards: CardFactory,
    make_game: GameFactory,
    make_view: ViewFactory,
) -> None:
    game = make_game(num_players=2)
    player = game.players[0]
    player.hand.extend(cards.weapon(5) for _ in range(13))

    view = make_view(choices={"p1": [0, 99, 13]})
    HandTrimmer(game=game, view=view).trim(player)

    assert view.errors == [
        "You must choose a card to discard",
        "Invalid card selection: choose a card between 1 and 13",
    ]
    assert len(player.hand) == 12


def test_hand_within_limit_is_left_alone(cards: CardFactory, make_game: GameFactory, make_view: ViewFactory) -> None:
    game = make_game(num_players=2)
    player = game.players[0]
    player.hand.extend(cards.weapon(5) for _ in range(12))

    view = make_view()
    assert HandTrimmer(game=game, view=view).trim(player) == []
    assert view.messages == []
    assert len(player.hand) == 12


def test_custom_hand_limit(cards: CardFactory, make_game: GameFactory, make_view: ViewFactory) -> None:
    game = make_game(num_players=2)
    player = game.players[0]
    player.hand.extend(cards.weapon(5) for _ in range(4))

    view = make_view(choices={"p1": [1, 1]})
    HandTrimmer(game=game, view=view, max_hand_size=2).trim(player)

    assert len(player.hand) == 2
