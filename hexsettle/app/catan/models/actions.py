"""Pydantic schemas for every command a player can submit to a session.

Each action subclass carries the data needed to apply that command to a
GameState.  The ActionResult carries the outcome back to the caller.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal

import pydantic

from ..errors import ViolationKind
from .board import Location, ResourceType
from .game_state import GameState

# Maps resource kind → non-negative quantity.
ResourceBundle = dict[ResourceType, pydantic.NonNegativeInt]


class ActionType(enum.StrEnum):
    """Discriminator values for every command type."""

    JOIN_SESSION = 'join_session'
    START_SESSION = 'start_session'
    LEAVE_SESSION = 'leave_session'
    ROLL_DICE = 'roll_dice'
    BUILD_SETTLEMENT = 'build_settlement'
    BUILD_CITY = 'build_city'
    BUILD_ROAD = 'build_road'
    MOVE_ROBBER = 'move_robber'
    STEAL_RESOURCE = 'steal_resource'
    PROPOSE_TRADE = 'propose_trade'
    ACCEPT_TRADE = 'accept_trade'
    REJECT_TRADE = 'reject_trade'
    BUY_DEVELOPMENT_CARD = 'buy_development_card'
    PLAY_DEVELOPMENT_CARD = 'play_development_card'
    UNDO_LAST_BUILD = 'undo_last_build'
    END_TURN = 'end_turn'


class BaseAction(pydantic.BaseModel):
    """Base for all commands. Every command identifies its acting player."""

    player_id: str


class JoinSession(BaseAction):
    """Take a seat in a session that is still waiting for players."""

    action_type: Literal[ActionType.JOIN_SESSION] = ActionType.JOIN_SESSION
    player_name: str


class StartSession(BaseAction):
    """Start the game (host only, at least two players)."""

    action_type: Literal[ActionType.START_SESSION] = ActionType.START_SESSION


class LeaveSession(BaseAction):
    """Give up a seat."""

    action_type: Literal[ActionType.LEAVE_SESSION] = ActionType.LEAVE_SESSION


class RollDice(BaseAction):
    """Roll the two dice for this turn."""

    action_type: Literal[ActionType.ROLL_DICE] = ActionType.ROLL_DICE


class BuildSettlement(BaseAction):
    """Place a settlement on a vertex."""

    action_type: Literal[ActionType.BUILD_SETTLEMENT] = ActionType.BUILD_SETTLEMENT
    location: Location


class BuildCity(BaseAction):
    """Upgrade an existing own settlement to a city."""

    action_type: Literal[ActionType.BUILD_CITY] = ActionType.BUILD_CITY
    location: Location


class BuildRoad(BaseAction):
    """Place a road on an edge."""

    action_type: Literal[ActionType.BUILD_ROAD] = ActionType.BUILD_ROAD
    location: Location


class MoveRobber(BaseAction):
    """Move the robber to a new hex (after rolling 7 or playing a Knight)."""

    action_type: Literal[ActionType.MOVE_ROBBER] = ActionType.MOVE_ROBBER
    hex_id: str


class StealResource(BaseAction):
    """Steal one random resource from one of the offered victims."""

    action_type: Literal[ActionType.STEAL_RESOURCE] = ActionType.STEAL_RESOURCE
    target_player_id: str


class ProposeTrade(BaseAction):
    """Offer a resource swap to one other player."""

    action_type: Literal[ActionType.PROPOSE_TRADE] = ActionType.PROPOSE_TRADE
    target_player_id: str
    offer: ResourceBundle
    request: ResourceBundle


class AcceptTrade(BaseAction):
    """Accept the active trade offer (target only)."""

    action_type: Literal[ActionType.ACCEPT_TRADE] = ActionType.ACCEPT_TRADE


class RejectTrade(BaseAction):
    """Reject (target) or cancel (proposer) the active trade offer."""

    action_type: Literal[ActionType.REJECT_TRADE] = ActionType.REJECT_TRADE


class BuyDevelopmentCard(BaseAction):
    """Purchase the top card of the development deck."""

    action_type: Literal[ActionType.BUY_DEVELOPMENT_CARD] = (
        ActionType.BUY_DEVELOPMENT_CARD
    )


class DevCardOptions(pydantic.BaseModel):
    """Choices that accompany some development cards."""

    # Year of Plenty: the two resources to take (may be the same kind).
    resource1: ResourceType | None = None
    resource2: ResourceType | None = None
    # Monopoly: the resource to collect from every opponent.
    resource: ResourceType | None = None


class PlayDevelopmentCard(BaseAction):
    """Play an owned development card."""

    action_type: Literal[ActionType.PLAY_DEVELOPMENT_CARD] = (
        ActionType.PLAY_DEVELOPMENT_CARD
    )
    card_id: str
    options: DevCardOptions = pydantic.Field(default_factory=DevCardOptions)


class UndoLastBuild(BaseAction):
    """Reverse the most recent paid build of this turn."""

    action_type: Literal[ActionType.UNDO_LAST_BUILD] = ActionType.UNDO_LAST_BUILD


class EndTurn(BaseAction):
    """End the current player's turn and advance to the next player."""

    action_type: Literal[ActionType.END_TURN] = ActionType.END_TURN


# Discriminated union of all action types for deserialization.
Action = Annotated[
    JoinSession
    | StartSession
    | LeaveSession
    | RollDice
    | BuildSettlement
    | BuildCity
    | BuildRoad
    | MoveRobber
    | StealResource
    | ProposeTrade
    | AcceptTrade
    | RejectTrade
    | BuyDevelopmentCard
    | PlayDevelopmentCard
    | UndoLastBuild
    | EndTurn,
    pydantic.Field(discriminator='action_type'),
]


class ActionResult(pydantic.BaseModel):
    """Result returned after attempting to apply an action."""

    success: bool
    error_kind: ViolationKind | None = None
    error_message: str | None = None
    # Updated session state after the action (None on failure).
    updated_state: GameState | None = None
