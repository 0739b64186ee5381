"""Session action processor.

Applies a single command to a GameState and returns the result.  The given
state is never modified: the command runs against a deep copy, and the copy
is returned only if every check passed.
"""

from __future__ import annotations

import logging
import random
import uuid

from ..errors import (
    GameViolation,
    PhaseViolation,
    ResourceViolation,
    StateViolation,
    TurnViolation,
)
from ..models import actions
from ..models.game_state import (
    BuildRecord,
    GamePhase,
    GameState,
    SessionStatus,
    SetupStep,
)
from ..models.player import CITY_COST, DEV_CARD_COST, ROAD_COST, SETTLEMENT_COST
from ..models.structures import Road, Settlement, upgrade_to_city
from . import (
    dev_cards,
    longest_road,
    placement,
    production,
    robber,
    rules,
    trade,
    turn_manager,
    undo,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def apply_action(
    state: GameState, action: actions.Action, rng: random.Random
) -> actions.ActionResult:
    """Apply *action* to *state* and return an :class:`ActionResult`.

    The original state is never modified; a deep copy is made first.  On a
    rule violation an :class:`ActionResult` with ``success=False`` and the
    violation's kind is returned.
    """
    state = state.model_copy(deep=True)

    try:
        _dispatch(state, action, rng)
    except GameViolation as exc:
        logger.debug(
            '[%s] Rejected %s from %s: %s',
            state.session_id,
            action.action_type,
            action.player_id,
            exc,
        )
        return actions.ActionResult(
            success=False, error_kind=exc.kind, error_message=str(exc)
        )

    _check_victory_points(state)

    # Check for a winner after every successful command.
    if state.status == SessionStatus.PLAYING:
        winner = rules.check_victory_condition(state)
        if winner is not None:
            rules.declare_winner(state, winner)
            logger.info('[%s] %s won the game', state.session_id, winner)

    return actions.ActionResult(success=True, updated_state=state)


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------


def _check_victory_points(state: GameState) -> None:
    """Log any player whose running VP total disagrees with the board."""
    for player in state.players:
        expected = rules.calculate_victory_points(state, player)
        if player.victory_points != expected:
            logger.warning(
                '[%s] %s has %d VP but the board gives %d',
                state.session_id,
                player.player_id,
                player.victory_points,
                expected,
            )


def _require_active(state: GameState, player_id: str) -> None:
    if state.status == SessionStatus.WAITING:
        raise PhaseViolation('Game has not started yet.')
    if state.status == SessionStatus.FINISHED:
        raise PhaseViolation('Game is over.')
    rules.get_player(state, player_id)


def _require_turn(state: GameState, player_id: str) -> None:
    if state.current_player_id != player_id:
        raise TurnViolation('It is not your turn.')


def _require_phase(state: GameState, *phases: GamePhase) -> None:
    if state.phase not in phases:
        raise PhaseViolation(f'Not allowed during the {state.phase.value} phase.')


def _require_funds(state: GameState, player_id: str, cost: dict[str, int]) -> None:
    player = rules.get_player(state, player_id)
    if not player.resources.can_afford(cost):
        needed = ', '.join(f'{n} {kind}' for kind, n in cost.items())
        raise ResourceViolation(f'Not enough resources ({needed}).')


# ---------------------------------------------------------------------------
# Internal dispatch
# ---------------------------------------------------------------------------


def _dispatch(state: GameState, action: actions.Action, rng: random.Random) -> None:
    """Mutate *state* in place according to *action* type."""
    if isinstance(action, actions.JoinSession):
        turn_manager.add_player(state, action.player_id, action.player_name)
        return
    if isinstance(action, actions.StartSession):
        turn_manager.start_game(state, action.player_id)
        return
    if isinstance(action, actions.LeaveSession):
        turn_manager.remove_player(state, action.player_id)
        return

    _require_active(state, action.player_id)
    if isinstance(action, actions.AcceptTrade):
        trade.accept_trade(state, action.player_id)
        return
    if isinstance(action, actions.RejectTrade):
        trade.reject_trade(state, action.player_id)
        return

    # Everything else belongs to the player whose turn it is.
    _require_turn(state, action.player_id)
    if isinstance(action, actions.RollDice):
        _apply_roll_dice(state, action, rng)
    elif isinstance(action, actions.BuildSettlement):
        _apply_build_settlement(state, action)
    elif isinstance(action, actions.BuildCity):
        _apply_build_city(state, action)
    elif isinstance(action, actions.BuildRoad):
        _apply_build_road(state, action)
    elif isinstance(action, actions.MoveRobber):
        _require_phase(state, GamePhase.MOVING_ROBBER)
        robber.move_robber(state, action.player_id, action.hex_id, rng)
    elif isinstance(action, actions.StealResource):
        _require_phase(state, GamePhase.STEALING)
        robber.steal(state, action.player_id, action.target_player_id, rng)
    elif isinstance(action, actions.ProposeTrade):
        _require_phase(state, GamePhase.PLAYING)
        trade.propose_trade(
            state,
            action.player_id,
            action.target_player_id,
            action.offer,
            action.request,
        )
    elif isinstance(action, actions.BuyDevelopmentCard):
        _require_phase(state, GamePhase.PLAYING)
        _require_funds(state, action.player_id, DEV_CARD_COST)
        dev_cards.buy_card(state, action.player_id)
    elif isinstance(action, actions.PlayDevelopmentCard):
        _require_phase(state, GamePhase.PLAYING)
        dev_cards.play_card(state, action.player_id, action.card_id, action.options)
    elif isinstance(action, actions.UndoLastBuild):
        _require_phase(state, GamePhase.PLAYING)
        undo.undo_last_build(state, action.player_id)
    elif isinstance(action, actions.EndTurn):
        _require_phase(state, GamePhase.PLAYING, GamePhase.ROAD_BUILDING_DEV)
        turn_manager.end_turn(state, action.player_id)
    else:
        raise StateViolation(f'Unsupported action {action.action_type!r}.')


# ---------------------------------------------------------------------------
# Action handlers
# ---------------------------------------------------------------------------


def _apply_roll_dice(
    state: GameState, action: actions.RollDice, rng: random.Random
) -> None:
    _require_phase(state, GamePhase.PLAYING)
    if state.dice_roll is not None:
        raise StateViolation('You have already rolled this turn.')

    roll = rng.randint(1, 6) + rng.randint(1, 6)
    state.dice_roll = roll
    name = rules.player_name(state, action.player_id)
    if roll == 7:
        state.phase = GamePhase.MOVING_ROBBER
        rules.log_action(state, f'{name} rolled a 7! Robber activated.')
    else:
        rules.log_action(state, f'{name} rolled a {roll}.')
        production.distribute_resources(state, roll)


def _add_structure(state: GameState, structure: Settlement | Road) -> None:
    state.structures.append(structure)
    rules.get_player(state, structure.player_id).structure_ids.append(
        structure.structure_id
    )


def _apply_build_settlement(
    state: GameState, action: actions.BuildSettlement
) -> None:
    setup = state.in_setup
    if setup:
        if state.setup_step != SetupStep.BUILDING_SETTLEMENT:
            raise PhaseViolation('Place your setup road first.')
    else:
        _require_phase(state, GamePhase.PLAYING)

    placement.validate_settlement(
        state, action.player_id, action.location, setup=setup
    )
    if not setup:
        _require_funds(state, action.player_id, SETTLEMENT_COST)

    player = rules.get_player(state, action.player_id)
    settlement = Settlement(
        structure_id=str(uuid.uuid4()),
        player_id=action.player_id,
        location=action.location,
    )
    _add_structure(state, settlement)
    player.victory_points += 1
    if setup:
        state.setup_step = SetupStep.BUILDING_ROAD
    else:
        player.resources = player.resources.subtract(SETTLEMENT_COST)
        state.builds_this_turn.append(
            BuildRecord(
                structure_id=settlement.structure_id,
                longest_road_player_id=state.longest_road_player_id,
            )
        )
    rules.log_action(state, f'{player.name} built a Settlement.')


def _apply_build_city(state: GameState, action: actions.BuildCity) -> None:
    if state.in_setup:
        raise PhaseViolation('Cities cannot be built during setup.')
    _require_phase(state, GamePhase.PLAYING)

    settlement = placement.validate_city(state, action.player_id, action.location)
    _require_funds(state, action.player_id, CITY_COST)

    player = rules.get_player(state, action.player_id)
    state.replace_structure(upgrade_to_city(settlement))
    player.resources = player.resources.subtract(CITY_COST)
    player.victory_points += 1
    state.builds_this_turn.append(
        BuildRecord(
            structure_id=settlement.structure_id,
            longest_road_player_id=state.longest_road_player_id,
        )
    )
    rules.log_action(state, f'{player.name} upgraded a Settlement to a City!')


def _apply_build_road(state: GameState, action: actions.BuildRoad) -> None:
    setup = state.in_setup
    free = state.phase == GamePhase.ROAD_BUILDING_DEV
    if setup:
        if state.setup_step != SetupStep.BUILDING_ROAD:
            raise PhaseViolation('Place your setup settlement first.')
        placement.validate_setup_road(state, action.player_id, action.location)
    else:
        _require_phase(state, GamePhase.PLAYING, GamePhase.ROAD_BUILDING_DEV)
        placement.validate_connected_road(state, action.player_id, action.location)
        if not free:
            _require_funds(state, action.player_id, ROAD_COST)

    player = rules.get_player(state, action.player_id)
    holder_before = state.longest_road_player_id
    road = Road(
        structure_id=str(uuid.uuid4()),
        player_id=action.player_id,
        location=action.location,
    )
    _add_structure(state, road)
    rules.log_action(state, f'{player.name} built a Road.')
    longest_road.update_longest_road(state, action.player_id)

    if setup:
        turn_manager.advance_setup(state)
    elif free:
        # Decremented only once the road has passed validation.
        state.roads_to_build -= 1
        if state.roads_to_build <= 0:
            state.roads_to_build = 0
            state.phase = GamePhase.PLAYING
            rules.log_action(state, f'{player.name} finished placing free roads.')
    else:
        player.resources = player.resources.subtract(ROAD_COST)
        state.builds_this_turn.append(
            BuildRecord(
                structure_id=road.structure_id,
                longest_road_player_id=holder_before,
            )
        )
