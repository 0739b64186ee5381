"""Session lifecycle and turn-order advancement.

Handles session creation, seating, starting, leaving, the two snake-order
setup rounds, and handing the turn to the next player.  Every function
mutates the given state in place and raises a violation before touching it
when the request is not allowed.
"""

from __future__ import annotations

import random

import common.settings

from ..board_generator import generate_board
from ..errors import PhaseViolation, StateViolation, TurnViolation
from ..models.board import TerrainType
from ..models.game_state import (
    GamePhase,
    GameState,
    SessionStatus,
    SetupStep,
)
from ..models.player import Player, Resources
from . import dev_cards
from .rules import get_player, log_action, player_name

# Player colours assigned in join order, reusing freed colours first.
_PLAYER_COLORS: list[str] = ['red', 'blue', 'green', 'orange']

# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def create_initial_game_state(session_id: str, rng: random.Random) -> GameState:
    """Create and return an empty session waiting for players.

    The board and the shuffled development deck are fixed here, once per
    session; the robber starts on the desert.
    """
    hexes = generate_board(rng)
    desert = next(h for h in hexes if h.terrain == TerrainType.DESERT)
    return GameState(
        session_id=session_id,
        hexes=hexes,
        dev_card_deck=dev_cards.build_deck(rng),
        robber_hex_id=desert.hex_id,
    )


def add_player(state: GameState, player_id: str, name: str) -> Player:
    """Seat a new player while the session is still waiting."""
    if state.status != SessionStatus.WAITING:
        raise PhaseViolation('Game has already started.')
    if state.find_player(player_id) is not None:
        raise StateViolation(f'Player {player_id!r} has already joined.')
    if len(state.players) >= common.settings.MAX_PLAYERS:
        raise StateViolation(
            f'Session is full (max {common.settings.MAX_PLAYERS} players).'
        )

    used = {p.color for p in state.players}
    color = next((c for c in _PLAYER_COLORS if c not in used), 'white')
    player = Player(
        player_id=player_id,
        name=name,
        color=color,
        resources=Resources.of_each(common.settings.STARTING_RESOURCES),
    )
    state.players.append(player)
    log_action(state, f'{name} joined the game.')
    return player


def start_game(state: GameState, player_id: str) -> None:
    """Start setup round 1.  Only the first joiner may start, with ≥2 players."""
    if state.status != SessionStatus.WAITING:
        raise PhaseViolation('Game has already started.')
    get_player(state, player_id)
    if state.players[0].player_id != player_id:
        raise TurnViolation('Only the host can start the game.')
    if len(state.players) < common.settings.MIN_PLAYERS:
        raise StateViolation(
            f'At least {common.settings.MIN_PLAYERS} players are required to start.'
        )

    state.status = SessionStatus.PLAYING
    state.phase = GamePhase.SETUP_ROUND_1
    state.setup_step = SetupStep.BUILDING_SETTLEMENT
    state.turn_order = [p.player_id for p in state.players]
    state.current_player_id = state.turn_order[0]
    log_action(state, f'Game started. {player_name(state, player_id)} places first.')


def remove_player(state: GameState, player_id: str) -> None:
    """Remove a player from the session.

    Their structures stay on the board.  If it was their turn, the turn
    passes on as if they had finished it.
    """
    leaver = get_player(state, player_id)
    was_current = state.status == SessionStatus.PLAYING and (
        state.current_player_id == player_id
    )
    index = state.turn_order.index(player_id) if player_id in state.turn_order else -1
    if was_current and not state.in_setup and len(state.turn_order) > 1:
        _start_turn(state, _next_in_order(state, player_id))

    state.players.remove(leaver)
    if index >= 0:
        state.turn_order.pop(index)
    if was_current and state.in_setup and state.turn_order:
        _pass_setup_seat(state, index)
    if state.active_trade is not None and player_id in (
        state.active_trade.proposer_id,
        state.active_trade.target_player_id,
    ):
        state.active_trade = None
    if player_id in state.robber_steal_options:
        state.robber_steal_options.remove(player_id)
        if state.phase == GamePhase.STEALING and not state.robber_steal_options:
            state.phase = GamePhase.PLAYING
    if state.largest_army_player_id == player_id:
        state.largest_army_player_id = None
    if state.longest_road_player_id == player_id:
        state.longest_road_player_id = None
    log_action(state, f'{leaver.name} left the game.')


# ---------------------------------------------------------------------------
# Turn order
# ---------------------------------------------------------------------------


def advance_setup(state: GameState) -> None:
    """Advance the snake draft after a setup road: 1..N, then N..1, then play."""
    order = state.turn_order
    index = order.index(state.current_player_id) if state.current_player_id else 0

    if state.phase == GamePhase.SETUP_ROUND_1:
        if index < len(order) - 1:
            state.current_player_id = order[index + 1]
        else:
            # Last player places again to open round 2.
            state.phase = GamePhase.SETUP_ROUND_2
        state.setup_step = SetupStep.BUILDING_SETTLEMENT
    elif state.phase == GamePhase.SETUP_ROUND_2:
        if index > 0:
            state.current_player_id = order[index - 1]
            state.setup_step = SetupStep.BUILDING_SETTLEMENT
        else:
            state.phase = GamePhase.PLAYING
            state.setup_step = None
            _start_turn(state, order[0])
            log_action(state, 'Setup complete. The game begins.')


def _pass_setup_seat(state: GameState, vacated_index: int) -> None:
    """Hand the setup placement on after the placing player has left.

    *vacated_index* is the leaver's former position in ``turn_order``, which
    has already been shortened.
    """
    order = state.turn_order
    if state.phase == GamePhase.SETUP_ROUND_1:
        if vacated_index < len(order):
            state.current_player_id = order[vacated_index]
        else:
            state.phase = GamePhase.SETUP_ROUND_2
            state.current_player_id = order[-1]
        state.setup_step = SetupStep.BUILDING_SETTLEMENT
    elif vacated_index > 0:
        state.current_player_id = order[vacated_index - 1]
        state.setup_step = SetupStep.BUILDING_SETTLEMENT
    else:
        state.phase = GamePhase.PLAYING
        state.setup_step = None
        _start_turn(state, order[0])


def end_turn(state: GameState, player_id: str) -> None:
    """Finish the current player's turn and hand it to the next player."""
    player = get_player(state, player_id)
    for card in player.development_cards:
        card.is_new = False
    if state.phase == GamePhase.ROAD_BUILDING_DEV and state.roads_to_build:
        log_action(
            state, f'{player.name} forfeited {state.roads_to_build} free road(s).'
        )

    next_player_id = _next_in_order(state, player_id)
    _start_turn(state, next_player_id)
    next_name = player_name(state, next_player_id)
    log_action(state, f"Turn ended. It is now {next_name}'s turn.")


def _next_in_order(state: GameState, player_id: str) -> str:
    order = state.turn_order
    return order[(order.index(player_id) + 1) % len(order)]


def _start_turn(state: GameState, player_id: str) -> None:
    """Reset all per-turn fields for *player_id*'s new main-phase turn."""
    state.current_player_id = player_id
    state.phase = GamePhase.PLAYING
    state.dice_roll = None
    state.builds_this_turn = []
    state.has_undone = False
    state.roads_to_build = 0
    state.robber_steal_options = []
