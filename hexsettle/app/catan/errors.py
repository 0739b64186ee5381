"""Rule violations raised by the engine.

Every violation is raised before any state is touched; the processor turns
it into a failed :class:`~.models.actions.ActionResult` for the acting player
only.
"""

from __future__ import annotations

import enum


class ViolationKind(enum.StrEnum):
    """Category of a failed command, carried back to the caller."""

    TURN = 'turn'  # wrong actor / not host
    PHASE = 'phase'  # wrong phase or sub-phase
    PLACEMENT = 'placement'  # occupancy, distance, connectivity
    RESOURCE = 'resource'  # insufficient funds
    STATE = 'state'  # no active trade, empty deck, card unusable, ...
    NOT_FOUND = 'not_found'  # session, player, hex, or card missing
    INTERNAL = 'internal'  # unexpected fault; the session is left untouched


class GameViolation(ValueError):
    """Base class for every rule violation."""

    kind: ViolationKind = ViolationKind.STATE


class TurnViolation(GameViolation):
    kind = ViolationKind.TURN


class PhaseViolation(GameViolation):
    kind = ViolationKind.PHASE


class PlacementViolation(GameViolation):
    kind = ViolationKind.PLACEMENT


class ResourceViolation(GameViolation):
    kind = ViolationKind.RESOURCE


class StateViolation(GameViolation):
    kind = ViolationKind.STATE


class NotFoundViolation(GameViolation):
    kind = ViolationKind.NOT_FOUND
