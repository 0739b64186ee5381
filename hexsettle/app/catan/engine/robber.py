"""Robber movement and resource theft."""

from __future__ import annotations

import random

from ..errors import NotFoundViolation, PlacementViolation, StateViolation
from ..models.game_state import GamePhase, GameState
from ..models.structures import is_building
from . import topology
from .rules import get_player, log_action


def find_victims(state: GameState, hex_id: str, mover_id: str) -> list[str]:
    """Return the opponents with a building on *hex_id*, in turn order."""
    tile = state.find_hex(hex_id)
    if tile is None:
        return []
    owners = {
        s.player_id
        for s in state.structures
        if is_building(s)
        and s.player_id != mover_id
        and topology.vertex_touches_hex(s.location, tile.coord)
    }
    return [pid for pid in state.turn_order if pid in owners]


def move_robber(
    state: GameState, player_id: str, hex_id: str, rng: random.Random
) -> None:
    """Place the robber on *hex_id* and resolve who can be robbed.

    With no victims play resumes; a single victim is robbed immediately;
    otherwise the phase becomes STEALING and the mover must choose.
    """
    tile = state.find_hex(hex_id)
    if tile is None:
        raise NotFoundViolation(f'Hex {hex_id!r} is not on the board.')
    if hex_id == state.robber_hex_id:
        raise PlacementViolation('The robber must move to a different hex.')

    mover = get_player(state, player_id)
    state.robber_hex_id = hex_id
    log_action(state, f'{mover.name} moved the robber to {tile.terrain.value}.')

    victims = find_victims(state, hex_id, player_id)
    if not victims:
        state.phase = GamePhase.PLAYING
    elif len(victims) == 1:
        _take_random_resource(state, player_id, victims[0], rng)
        state.phase = GamePhase.PLAYING
    else:
        state.robber_steal_options = victims
        state.phase = GamePhase.STEALING


def steal(
    state: GameState, player_id: str, target_player_id: str, rng: random.Random
) -> None:
    """Rob the chosen victim while the phase is STEALING."""
    if target_player_id not in state.robber_steal_options:
        raise StateViolation('You cannot steal from that player.')
    _take_random_resource(state, player_id, target_player_id, rng)
    state.robber_steal_options = []
    state.phase = GamePhase.PLAYING


def _take_random_resource(
    state: GameState, thief_id: str, victim_id: str, rng: random.Random
) -> None:
    thief = get_player(state, thief_id)
    victim = get_player(state, victim_id)
    pool = victim.resources.units()
    if not pool:
        log_action(state, f'{thief.name} robbed {victim.name}, who had nothing.')
        return
    stolen = rng.choice(pool)
    victim.resources = victim.resources.subtract({stolen.value: 1})
    thief.resources = thief.resources.add({stolen.value: 1})
    log_action(state, f'{thief.name} stole a resource from {victim.name}.')
