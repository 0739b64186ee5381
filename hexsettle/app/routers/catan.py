"""HTTP routes for hexsettle sessions.

Registers:

* ``POST /sessions``                          create a session
* ``GET  /sessions/{session_id}``             full state snapshot
* ``GET  /sessions/{session_id}/board``       hexes and structures only
* ``POST /sessions/{session_id}/join|start|leave``
* ``POST /sessions/{session_id}/roll``
* ``POST /sessions/{session_id}/settlements|cities|roads``
* ``POST /sessions/{session_id}/robber|steal``
* ``POST /sessions/{session_id}/trades`` and ``/trades/accept|reject``
* ``POST /sessions/{session_id}/dev-cards`` and ``/dev-cards/{card_id}/play``
* ``POST /sessions/{session_id}/undo|end-turn``

The acting player is identified by the ``X-Player-Id`` header.  Each command
is answered with the updated state, or with an HTTP error whose status code
reflects the kind of rule that was broken.
"""

from __future__ import annotations

import typing

import fastapi
import pydantic

from ..catan.errors import ViolationKind
from ..catan.models import actions, serializers
from ..catan.models.board import Location, ResourceType
from ..catan.server.game_service import GameService

router = fastapi.APIRouter(prefix='/sessions')

game_service = GameService()

_STATUS_BY_KIND: dict[ViolationKind, int] = {
    ViolationKind.NOT_FOUND: 404,
    ViolationKind.TURN: 403,
    ViolationKind.PHASE: 409,
    ViolationKind.STATE: 409,
    ViolationKind.PLACEMENT: 422,
    ViolationKind.RESOURCE: 422,
    ViolationKind.INTERNAL: 500,
}

PlayerId = typing.Annotated[str, fastapi.Header(alias='X-Player-Id')]


# Dependencies
def get_game_service() -> GameService:
    """Return the process-wide game service."""
    return game_service


Service = typing.Annotated[GameService, fastapi.Depends(get_game_service)]


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class JoinRequest(pydantic.BaseModel):
    name: str = pydantic.Field(min_length=1, max_length=32)


class RobberRequest(pydantic.BaseModel):
    hex_id: str


class StealRequest(pydantic.BaseModel):
    target_player_id: str


class TradeRequest(pydantic.BaseModel):
    target_player_id: str
    offer: dict[ResourceType, pydantic.NonNegativeInt] = pydantic.Field(
        default_factory=dict
    )
    request: dict[ResourceType, pydantic.NonNegativeInt] = pydantic.Field(
        default_factory=dict
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _respond(result: actions.ActionResult) -> dict[str, typing.Any]:
    """Return the updated state, or raise the HTTP error matching the violation."""
    if not result.success or result.updated_state is None:
        kind = result.error_kind or ViolationKind.INTERNAL
        raise fastapi.HTTPException(
            status_code=_STATUS_BY_KIND[kind],
            detail={'kind': kind.value, 'message': result.error_message},
        )
    return serializers.serialize_model(result.updated_state)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@router.post('', status_code=201)
def create_session(service: Service) -> dict[str, typing.Any]:
    """Create an empty session and return its initial state."""
    return serializers.serialize_model(service.create_session())


@router.get('/{session_id}')
def get_session(session_id: str, service: Service) -> dict[str, typing.Any]:
    """Return the full state of a session."""
    state = service.get_session(session_id)
    if state is None:
        raise fastapi.HTTPException(
            status_code=404, detail=f'Session {session_id!r} not found'
        )
    return serializers.serialize_model(state)


@router.get('/{session_id}/board')
def get_board(session_id: str, service: Service) -> dict[str, typing.Any]:
    """Return the ordered hexes and structures of a session."""
    state = service.get_session(session_id)
    if state is None:
        raise fastapi.HTTPException(
            status_code=404, detail=f'Session {session_id!r} not found'
        )
    return serializers.board_snapshot(state)


@router.post('/{session_id}/join')
def join_session(
    session_id: str, body: JoinRequest, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.join_session(session_id, player_id, body.name))


@router.post('/{session_id}/start')
def start_session(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.start_session(session_id, player_id))


@router.post('/{session_id}/leave')
def leave_session(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.leave_session(session_id, player_id))


# ---------------------------------------------------------------------------
# Turn commands
# ---------------------------------------------------------------------------


@router.post('/{session_id}/roll')
def roll_dice(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.roll_dice(session_id, player_id))


@router.post('/{session_id}/settlements')
def build_settlement(
    session_id: str, location: Location, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.build_settlement(session_id, player_id, location))


@router.post('/{session_id}/cities')
def build_city(
    session_id: str, location: Location, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.build_city(session_id, player_id, location))


@router.post('/{session_id}/roads')
def build_road(
    session_id: str, location: Location, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.build_road(session_id, player_id, location))


@router.post('/{session_id}/robber')
def move_robber(
    session_id: str, body: RobberRequest, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.move_robber(session_id, player_id, body.hex_id))


@router.post('/{session_id}/steal')
def steal_resource(
    session_id: str, body: StealRequest, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(
        service.steal_resource(session_id, player_id, body.target_player_id)
    )


@router.post('/{session_id}/trades')
def propose_trade(
    session_id: str, body: TradeRequest, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(
        service.propose_trade(
            session_id, player_id, body.target_player_id, body.offer, body.request
        )
    )


@router.post('/{session_id}/trades/accept')
def accept_trade(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.accept_trade(session_id, player_id))


@router.post('/{session_id}/trades/reject')
def reject_trade(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.reject_trade(session_id, player_id))


@router.post('/{session_id}/dev-cards')
def buy_development_card(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.buy_development_card(session_id, player_id))


@router.post('/{session_id}/dev-cards/{card_id}/play')
def play_development_card(
    session_id: str,
    card_id: str,
    player_id: PlayerId,
    service: Service,
    options: actions.DevCardOptions | None = None,
) -> dict[str, typing.Any]:
    return _respond(
        service.play_development_card(session_id, player_id, card_id, options)
    )


@router.post('/{session_id}/undo')
def undo_last_build(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.undo_last_build(session_id, player_id))


@router.post('/{session_id}/end-turn')
def end_turn(
    session_id: str, player_id: PlayerId, service: Service
) -> dict[str, typing.Any]:
    return _respond(service.end_turn(session_id, player_id))
