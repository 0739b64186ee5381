"""Player-to-player trade negotiation.

At most one offer is active per session.  The proposer must hold the offered
resources when proposing; both sides are checked again when the target
accepts, and nothing changes hands unless both checks pass.
"""

from __future__ import annotations

import uuid

from ..errors import ResourceViolation, StateViolation, TurnViolation
from ..models.board import ResourceType
from ..models.game_state import GameState, TradeOffer
from .rules import get_player, log_action


def _as_counts(bundle: dict[ResourceType, int]) -> dict[str, int]:
    """Drop zero entries and key the bundle by resource name."""
    return {ResourceType(kind).value: n for kind, n in bundle.items() if n > 0}


def propose_trade(
    state: GameState,
    player_id: str,
    target_player_id: str,
    offer: dict[ResourceType, int],
    request: dict[ResourceType, int],
) -> TradeOffer:
    """Open a trade offer from the current player to *target_player_id*."""
    if state.active_trade is not None:
        raise StateViolation('A trade is already active.')
    proposer = get_player(state, player_id)
    if target_player_id == player_id:
        raise StateViolation('You cannot trade with yourself.')
    target = get_player(state, target_player_id)

    give = _as_counts(offer)
    want = _as_counts(request)
    if not give and not want:
        raise StateViolation('A trade must offer or request something.')
    if not proposer.resources.can_afford(give):
        raise ResourceViolation('You do not have the resources you are offering.')

    state.active_trade = TradeOffer(
        trade_id=str(uuid.uuid4()),
        proposer_id=player_id,
        target_player_id=target_player_id,
        offer=give,
        request=want,
    )
    log_action(state, f'{proposer.name} proposed a trade to {target.name}.')
    return state.active_trade


def _require_trade(state: GameState) -> TradeOffer:
    if state.active_trade is None:
        raise StateViolation('There is no active trade.')
    return state.active_trade


def accept_trade(state: GameState, player_id: str) -> None:
    """Swap both bundles and close the offer.  Only the target may accept."""
    trade = _require_trade(state)
    if trade.target_player_id != player_id:
        raise TurnViolation('Only the player the trade was offered to can accept it.')
    proposer = get_player(state, trade.proposer_id)
    acceptor = get_player(state, player_id)
    if not proposer.resources.can_afford(trade.offer):
        raise ResourceViolation(f'{proposer.name} no longer has the offered resources.')
    if not acceptor.resources.can_afford(trade.request):
        raise ResourceViolation('You do not have the requested resources.')

    proposer.resources = proposer.resources.subtract(trade.offer).add(trade.request)
    acceptor.resources = acceptor.resources.subtract(trade.request).add(trade.offer)
    state.active_trade = None
    log_action(state, f'{acceptor.name} accepted the trade from {proposer.name}.')


def reject_trade(state: GameState, player_id: str) -> None:
    """Close the offer: a rejection by the target or a cancellation by the proposer."""
    trade = _require_trade(state)
    if player_id == trade.target_player_id:
        verb = 'rejected'
    elif player_id == trade.proposer_id:
        verb = 'cancelled'
    else:
        raise TurnViolation('Only the proposer or the target can close this trade.')
    state.active_trade = None
    log_action(state, f'{get_player(state, player_id).name} {verb} the trade.')
