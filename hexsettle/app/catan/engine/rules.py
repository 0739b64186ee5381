"""Shared rule helpers: player look-up, the action log, and bonus bookkeeping.

Victory points are kept on each player as a running total and shifted as
structures, cards, and bonuses change hands.  :func:`calculate_victory_points`
recomputes the same total from the board; the processor compares the two
after every command.
"""

from __future__ import annotations

import datetime

import common.settings

from ..errors import NotFoundViolation
from ..models.game_state import GameState, SessionStatus
from ..models.player import Player
from ..models.structures import City, Settlement

# Bonus awarded to the Largest Army and Longest Road holders.
BONUS_POINTS = 2
LARGEST_ARMY_MIN_KNIGHTS = 3
LONGEST_ROAD_MIN_LENGTH = 5

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def log_action(state: GameState, message: str) -> None:
    """Append a timestamped entry to the session's bounded action log."""
    stamp = datetime.datetime.now(datetime.UTC).strftime('%H:%M:%S')
    state.logs.append(f'[{stamp}] {message}')
    overflow = len(state.logs) - common.settings.ACTION_LOG_LIMIT
    if overflow > 0:
        del state.logs[:overflow]


def get_player(state: GameState, player_id: str) -> Player:
    """Return the seated player with *player_id* or raise NotFoundViolation."""
    player = state.find_player(player_id)
    if player is None:
        raise NotFoundViolation(f'Player {player_id!r} is not in this session.')
    return player


def player_name(state: GameState, player_id: str | None) -> str:
    """Return a display name for log messages."""
    player = state.find_player(player_id) if player_id else None
    return player.name if player else str(player_id)


# ---------------------------------------------------------------------------
# Victory points
# ---------------------------------------------------------------------------


def calculate_victory_points(state: GameState, player: Player) -> int:
    """Return *player*'s victory points recomputed from the board.

    VP breakdown:
      - settlements: 1 VP each
      - cities: 2 VP each
      - victory-point cards in hand: 1 VP each
      - largest army: 2 VP bonus
      - longest road: 2 VP bonus
    """
    vp = 0
    for structure in state.structures:
        if structure.player_id != player.player_id:
            continue
        if isinstance(structure, Settlement):
            vp += 1
        elif isinstance(structure, City):
            vp += 2
    vp += player.held_victory_point_cards()
    if state.largest_army_player_id == player.player_id:
        vp += BONUS_POINTS
    if state.longest_road_player_id == player.player_id:
        vp += BONUS_POINTS
    return vp


def transfer_bonus(
    state: GameState, previous_id: str | None, new_id: str | None
) -> None:
    """Move a 2-VP bonus from *previous_id* to *new_id* (either may be None)."""
    if previous_id == new_id:
        return
    if previous_id is not None:
        previous = state.find_player(previous_id)
        if previous is not None:
            previous.victory_points -= BONUS_POINTS
    if new_id is not None:
        get_player(state, new_id).victory_points += BONUS_POINTS


def update_largest_army(state: GameState, player: Player) -> None:
    """Award Largest Army to *player* if they now strictly lead with ≥3 knights."""
    if player.knights_played < LARGEST_ARMY_MIN_KNIGHTS:
        return
    holder_id = state.largest_army_player_id
    if holder_id == player.player_id:
        return
    holder = state.find_player(holder_id) if holder_id else None
    if holder is not None and player.knights_played <= holder.knights_played:
        return

    transfer_bonus(state, holder_id, player.player_id)
    state.largest_army_player_id = player.player_id
    log_action(state, f'{player.name} now holds the Largest Army.')


def check_victory_condition(state: GameState) -> str | None:
    """Return the id of the first player in turn order at the threshold, else None."""
    for player_id in state.turn_order:
        player = state.find_player(player_id)
        if (
            player is not None
            and player.victory_points >= common.settings.VICTORY_POINTS_TO_WIN
        ):
            return player_id
    return None


def declare_winner(state: GameState, winner_id: str) -> None:
    state.status = SessionStatus.FINISHED
    state.winner_id = winner_id
    log_action(state, f'{player_name(state, winner_id)} wins the game!')
