"""Resource production after a dice roll."""

from __future__ import annotations

import logging

from ..models.game_state import GameState
from ..models.structures import City, is_building
from . import topology
from .rules import log_action, player_name

logger = logging.getLogger(__name__)


def distribute_resources(state: GameState, roll: int) -> dict[str, dict[str, int]]:
    """Grant every building on a producing hex its owner's share of *roll*.

    A hex produces when its token equals *roll* and the robber is not on it;
    each adjacent settlement yields one unit and each city two.  Returns the
    grants as ``{player_id: {resource: amount}}``.
    """
    grants: dict[str, dict[str, int]] = {}
    producing = [
        tile
        for tile in state.hexes
        if tile.number_token == roll
        and tile.resource is not None
        and tile.hex_id != state.robber_hex_id
    ]
    for tile in producing:
        for structure in state.structures:
            if not is_building(structure):
                continue
            if not topology.vertex_touches_hex(structure.location, tile.coord):
                continue
            owner = state.find_player(structure.player_id)
            if owner is None:
                # Buildings of a player who left stay put but stop producing.
                continue
            amount = 2 if isinstance(structure, City) else 1
            owner.resources = owner.resources.add({tile.resource.value: amount})
            share = grants.setdefault(owner.player_id, {})
            share[tile.resource.value] = share.get(tile.resource.value, 0) + amount

    for player_id, share in grants.items():
        gained = ', '.join(f'{n} {kind}' for kind, n in share.items())
        log_action(state, f'{player_name(state, player_id)} received {gained}.')
    logger.debug('[%s] Roll %d produced %s', state.session_id, roll, grants)
    return grants
