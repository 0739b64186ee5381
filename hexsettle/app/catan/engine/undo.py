"""Single-level undo of the current turn's paid builds."""

from __future__ import annotations

from ..errors import StateViolation
from ..models.game_state import GameState
from ..models.player import CITY_COST, ROAD_COST, SETTLEMENT_COST
from ..models.structures import City, Settlement, downgrade_to_settlement
from .longest_road import update_longest_road
from .rules import get_player, log_action, transfer_bonus


def undo_last_build(state: GameState, player_id: str) -> None:
    """Reverse the most recent paid build of this turn and refund its cost.

    Allowed once per turn.  Undoing a road restores the Longest Road holder
    recorded when the road was built, then re-applies the Longest Road rule
    to the player's remaining network.
    """
    if state.has_undone:
        raise StateViolation('You have already undone a build this turn.')
    if not state.builds_this_turn:
        raise StateViolation('There is nothing to undo.')

    player = get_player(state, player_id)
    record = state.builds_this_turn.pop()
    structure = state.find_structure(record.structure_id)
    if structure is None:
        raise StateViolation('The last build is no longer on the board.')

    if isinstance(structure, City):
        state.replace_structure(downgrade_to_settlement(structure))
        player.resources = player.resources.add(CITY_COST)
        player.victory_points -= 1
        label = 'city'
    elif isinstance(structure, Settlement):
        state.remove_structure(structure.structure_id)
        player.resources = player.resources.add(SETTLEMENT_COST)
        player.victory_points -= 1
        label = 'settlement'
    else:
        state.remove_structure(structure.structure_id)
        player.resources = player.resources.add(ROAD_COST)
        restored = record.longest_road_player_id
        if restored is not None and state.find_player(restored) is None:
            restored = None
        transfer_bonus(state, state.longest_road_player_id, restored)
        state.longest_road_player_id = restored
        update_longest_road(state, player_id)
        label = 'road'

    state.has_undone = True
    log_action(state, f'{player.name} undid their last {label}.')
