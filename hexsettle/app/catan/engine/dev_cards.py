"""Development card deck, purchase, and effects."""

from __future__ import annotations

import random
import uuid

from ..errors import NotFoundViolation, StateViolation
from ..models.actions import DevCardOptions
from ..models.game_state import GamePhase, GameState
from ..models.player import (
    DEV_CARD_COUNTS,
    DEV_CARD_COST,
    DevCardType,
    DevelopmentCard,
    Player,
)
from .rules import get_player, log_action, update_largest_army

FREE_ROADS_PER_CARD = 2


def build_deck(rng: random.Random) -> list[DevCardType]:
    """Return the full 25-card deck shuffled with *rng*."""
    deck = [card for card, count in DEV_CARD_COUNTS.items() for _ in range(count)]
    rng.shuffle(deck)
    return deck


def buy_card(state: GameState, player_id: str) -> DevelopmentCard:
    """Pay for and draw the top card.  The caller has checked affordability."""
    if not state.dev_card_deck:
        raise StateViolation('The development card deck is empty.')
    player = get_player(state, player_id)
    player.resources = player.resources.subtract(DEV_CARD_COST)
    card = DevelopmentCard(
        card_id=str(uuid.uuid4()), card_type=state.dev_card_deck.pop()
    )
    player.development_cards.append(card)
    if card.card_type == DevCardType.VICTORY_POINT:
        player.victory_points += 1
    log_action(state, f'{player.name} bought a development card.')
    return card


def play_card(
    state: GameState, player_id: str, card_id: str, options: DevCardOptions
) -> None:
    """Play an owned card bought before this turn and apply its effect."""
    player = get_player(state, player_id)
    card = player.find_card(card_id)
    if card is None:
        raise NotFoundViolation(f'You do not own card {card_id!r}.')
    if card.was_played:
        raise StateViolation('That card has already been played.')
    if card.is_new:
        raise StateViolation('A card cannot be played on the turn it was bought.')

    if card.card_type == DevCardType.KNIGHT:
        _play_knight(state, player)
    elif card.card_type == DevCardType.YEAR_OF_PLENTY:
        _play_year_of_plenty(state, player, options)
    elif card.card_type == DevCardType.ROAD_BUILDING:
        _play_road_building(state, player)
    elif card.card_type == DevCardType.MONOPOLY:
        _play_monopoly(state, player, options)
    else:
        raise StateViolation('Victory point cards are never played.')
    card.was_played = True


def _play_knight(state: GameState, player: Player) -> None:
    player.knights_played += 1
    state.phase = GamePhase.MOVING_ROBBER
    log_action(state, f'{player.name} played a Knight.')
    update_largest_army(state, player)


def _play_year_of_plenty(
    state: GameState, player: Player, options: DevCardOptions
) -> None:
    if options.resource1 is None or options.resource2 is None:
        raise StateViolation('Year of Plenty needs two resources.')
    gained: dict[str, int] = {}
    for resource in (options.resource1, options.resource2):
        gained[resource.value] = gained.get(resource.value, 0) + 1
    player.resources = player.resources.add(gained)
    log_action(
        state,
        f'{player.name} played Year of Plenty for '
        f'{options.resource1.value} and {options.resource2.value}.',
    )


def _play_road_building(state: GameState, player: Player) -> None:
    state.phase = GamePhase.ROAD_BUILDING_DEV
    state.roads_to_build = FREE_ROADS_PER_CARD
    # Free roads may hang off earlier paid roads, so those stop being undoable.
    state.builds_this_turn.clear()
    log_action(state, f'{player.name} played Road Building.')


def _play_monopoly(state: GameState, player: Player, options: DevCardOptions) -> None:
    if options.resource is None:
        raise StateViolation('Monopoly needs a resource.')
    resource = options.resource
    taken = 0
    for other in state.players:
        if other.player_id == player.player_id:
            continue
        amount = other.resources.get(resource)
        if amount:
            other.resources = other.resources.with_resource(resource, 0)
            taken += amount
    player.resources = player.resources.add({resource.value: taken})
    log_action(
        state, f'{player.name} played Monopoly and took {taken} {resource.value}.'
    )
