"""Command surface for hexsettle sessions.

:class:`GameService` is the one entry point external collaborators (the HTTP
router, a realtime transport) call.  Each command looks its session up in the
injected :class:`~.session_store.SessionStore`, runs the processor under the
session's lock, and swaps the new state in only on success.
"""

from __future__ import annotations

import collections.abc
import logging
import random
import typing

import pydantic

from ..engine import processor
from ..errors import ViolationKind
from ..models import actions
from ..models.board import Location, ResourceType
from ..models.game_state import GameState
from .session_store import SessionStore

logger = logging.getLogger(__name__)


def _failure(kind: ViolationKind, message: str) -> actions.ActionResult:
    return actions.ActionResult(success=False, error_kind=kind, error_message=message)


def _not_found(session_id: str) -> actions.ActionResult:
    return _failure(ViolationKind.NOT_FOUND, f'Session {session_id!r} not found.')


class GameService:
    """Validates and applies player commands against stored sessions."""

    def __init__(
        self,
        store: SessionStore | None = None,
        rng_factory: collections.abc.Callable[[], random.Random] = random.Random,
    ) -> None:
        self.store = store if store is not None else SessionStore()
        self._rng_factory = rng_factory

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def create_session(self) -> GameState:
        """Create an empty session and return its initial snapshot."""
        room = self.store.create(self._rng_factory())
        logger.info('[%s] Session created', room.session_id)
        return room.snapshot()

    def get_session(self, session_id: str) -> GameState | None:
        """Return a snapshot of *session_id*, or ``None`` if it does not exist."""
        room = self.store.get(session_id)
        return room.snapshot() if room is not None else None

    def join_session(
        self, session_id: str, player_id: str, name: str
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.JoinSession(player_id=player_id, player_name=name),
        )

    def start_session(self, session_id: str, player_id: str) -> actions.ActionResult:
        return self._submit(
            session_id, lambda: actions.StartSession(player_id=player_id)
        )

    def leave_session(self, session_id: str, player_id: str) -> actions.ActionResult:
        """Remove *player_id*; the session is dropped when its last player leaves."""

        def _drop_if_empty(state: GameState) -> None:
            if not state.players:
                self.store.remove(session_id)
                logger.info('[%s] Last player left; session removed', session_id)

        return self._submit(
            session_id,
            lambda: actions.LeaveSession(player_id=player_id),
            on_success=_drop_if_empty,
        )

    # ------------------------------------------------------------------
    # Turn commands
    # ------------------------------------------------------------------

    def roll_dice(self, session_id: str, player_id: str) -> actions.ActionResult:
        return self._submit(session_id, lambda: actions.RollDice(player_id=player_id))

    def build_settlement(
        self, session_id: str, player_id: str, location: Location | dict[str, int]
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.BuildSettlement(player_id=player_id, location=location),
        )

    def build_city(
        self, session_id: str, player_id: str, location: Location | dict[str, int]
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.BuildCity(player_id=player_id, location=location),
        )

    def build_road(
        self, session_id: str, player_id: str, location: Location | dict[str, int]
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.BuildRoad(player_id=player_id, location=location),
        )

    def move_robber(
        self, session_id: str, player_id: str, hex_id: str
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.MoveRobber(player_id=player_id, hex_id=hex_id),
        )

    def steal_resource(
        self, session_id: str, player_id: str, target_player_id: str
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.StealResource(
                player_id=player_id, target_player_id=target_player_id
            ),
        )

    def propose_trade(
        self,
        session_id: str,
        player_id: str,
        target_player_id: str,
        offer: collections.abc.Mapping[str, int],
        request: collections.abc.Mapping[str, int],
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.ProposeTrade(
                player_id=player_id,
                target_player_id=target_player_id,
                offer=dict(offer),
                request=dict(request),
            ),
        )

    def accept_trade(self, session_id: str, player_id: str) -> actions.ActionResult:
        return self._submit(
            session_id, lambda: actions.AcceptTrade(player_id=player_id)
        )

    def reject_trade(self, session_id: str, player_id: str) -> actions.ActionResult:
        return self._submit(
            session_id, lambda: actions.RejectTrade(player_id=player_id)
        )

    def buy_development_card(
        self, session_id: str, player_id: str
    ) -> actions.ActionResult:
        return self._submit(
            session_id, lambda: actions.BuyDevelopmentCard(player_id=player_id)
        )

    def play_development_card(
        self,
        session_id: str,
        player_id: str,
        card_id: str,
        options: actions.DevCardOptions | dict[str, ResourceType | str] | None = None,
    ) -> actions.ActionResult:
        return self._submit(
            session_id,
            lambda: actions.PlayDevelopmentCard(
                player_id=player_id,
                card_id=card_id,
                options=options or actions.DevCardOptions(),
            ),
        )

    def undo_last_build(self, session_id: str, player_id: str) -> actions.ActionResult:
        return self._submit(
            session_id, lambda: actions.UndoLastBuild(player_id=player_id)
        )

    def end_turn(self, session_id: str, player_id: str) -> actions.ActionResult:
        return self._submit(session_id, lambda: actions.EndTurn(player_id=player_id))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _submit(
        self,
        session_id: str,
        build_action: collections.abc.Callable[[], typing.Any],
        on_success: collections.abc.Callable[[GameState], None] | None = None,
    ) -> actions.ActionResult:
        """Build the command, apply it under the session lock, and store the result.

        *on_success* runs with the new state while the lock is still held.
        """
        room = self.store.get(session_id)
        if room is None:
            return _not_found(session_id)

        try:
            action = build_action()
        except pydantic.ValidationError as exc:
            logger.warning('[%s] Malformed command: %s', session_id, exc)
            return _failure(ViolationKind.STATE, f'Malformed command: {exc}')

        with room.lock:
            # The session may have been dropped while we waited for the lock.
            if self.store.get(session_id) is not room:
                return _not_found(session_id)
            try:
                result = processor.apply_action(room.state, action, room.rng)
            except Exception:
                logger.exception(
                    '[%s] Unexpected error applying %s', session_id, action.action_type
                )
                return _failure(
                    ViolationKind.INTERNAL, 'An internal error occurred.'
                )
            if not result.success or result.updated_state is None:
                logger.warning(
                    '[%s] Player %r action %s failed: %s',
                    session_id,
                    action.player_id,
                    action.action_type,
                    result.error_message,
                )
                return result
            room.state = result.updated_state
            if on_success is not None:
                on_success(room.state)
            snapshot = room.state.model_copy(deep=True)

        logger.info(
            '[%s] Player %r applied %s',
            session_id,
            action.player_id,
            action.action_type,
        )
        return actions.ActionResult(success=True, updated_state=snapshot)
