"""Game session state model.

Captures the complete mutable state of a session, from the waiting lobby
through setup and the main loop: players, board, structures, the current
turn, the robber, trade negotiation, and bonus-award tracking.
"""

from __future__ import annotations

import enum

import pydantic

from .board import HexTile
from .player import DevCardType, Player
from .structures import City, Road, Settlement, Structure


class SessionStatus(enum.StrEnum):
    """Lifecycle status of a session."""

    WAITING = 'waiting'  # accepting players
    PLAYING = 'playing'  # setup or main loop in progress
    FINISHED = 'finished'  # a player reached the victory threshold


class GamePhase(enum.StrEnum):
    """Phases of a session once it has started."""

    # Initial placement: settlement/road pairs placed in turn order.
    SETUP_ROUND_1 = 'setup_round_1'
    # Initial placement: settlement/road pairs placed in reverse turn order.
    SETUP_ROUND_2 = 'setup_round_2'
    # Main game: dice rolls, building, trading, playing cards.
    PLAYING = 'playing'
    # After rolling 7 or playing a Knight.
    MOVING_ROBBER = 'moving_robber'
    # Robber placed next to two or more opponents; waiting for a victim choice.
    STEALING = 'stealing'
    # Road Building card played; free roads are being placed.
    ROAD_BUILDING_DEV = 'road_building_dev'


SETUP_PHASES = (GamePhase.SETUP_ROUND_1, GamePhase.SETUP_ROUND_2)


class SetupStep(enum.StrEnum):
    """What the current player must place next during setup."""

    BUILDING_SETTLEMENT = 'building_settlement'
    BUILDING_ROAD = 'building_road'


class TradeOffer(pydantic.BaseModel):
    """An in-flight player-to-player trade offer."""

    trade_id: str
    proposer_id: str
    target_player_id: str
    # Maps resource name → quantity the proposer gives.
    offer: dict[str, int]
    # Maps resource name → quantity the proposer wants in return.
    request: dict[str, int]


class BuildRecord(pydantic.BaseModel):
    """One paid build made this turn, kept so it can be undone."""

    structure_id: str
    # Longest Road holder before this build, restored if a road is undone.
    longest_road_player_id: str | None = None


class GameState(pydantic.BaseModel):
    """Complete snapshot of a session at any point in time."""

    session_id: str
    status: SessionStatus = SessionStatus.WAITING
    players: list[Player] = pydantic.Field(default_factory=list)
    hexes: list[HexTile] = pydantic.Field(default_factory=list)
    structures: list[Structure] = pydantic.Field(default_factory=list)
    turn_order: list[str] = pydantic.Field(default_factory=list)
    current_player_id: str | None = None
    phase: GamePhase = GamePhase.SETUP_ROUND_1
    setup_step: SetupStep | None = None
    dice_roll: int | None = None  # None until rolled this turn
    logs: list[str] = pydantic.Field(default_factory=list)
    # Remaining development cards; the top of the deck is the last element.
    dev_card_deck: list[DevCardType] = pydantic.Field(default_factory=list)
    active_trade: TradeOffer | None = None
    robber_hex_id: str | None = None
    # Victims to choose from while phase == STEALING.
    robber_steal_options: list[str] = pydantic.Field(default_factory=list)
    largest_army_player_id: str | None = None
    longest_road_player_id: str | None = None
    builds_this_turn: list[BuildRecord] = pydantic.Field(default_factory=list)
    has_undone: bool = False
    # Free roads left from a Road Building card (ROAD_BUILDING_DEV only).
    roads_to_build: int = 0
    winner_id: str | None = None

    # ------------------------------------------------------------------
    # Look-ups
    # ------------------------------------------------------------------

    def find_player(self, player_id: str) -> Player | None:
        """Return the seated player with *player_id*, or ``None``."""
        return next((p for p in self.players if p.player_id == player_id), None)

    def find_hex(self, hex_id: str) -> HexTile | None:
        """Return the hex with *hex_id*, or ``None``."""
        return next((h for h in self.hexes if h.hex_id == hex_id), None)

    def find_structure(self, structure_id: str) -> Settlement | City | Road | None:
        """Return the structure with *structure_id*, or ``None``."""
        return next(
            (s for s in self.structures if s.structure_id == structure_id), None
        )

    def replace_structure(self, structure: Settlement | City | Road) -> None:
        """Swap in a new variant for the structure with the same id."""
        for i, existing in enumerate(self.structures):
            if existing.structure_id == structure.structure_id:
                self.structures[i] = structure
                return
        raise KeyError(structure.structure_id)

    def remove_structure(self, structure_id: str) -> None:
        """Remove a structure from the board and from its owner's list."""
        structure = self.find_structure(structure_id)
        if structure is None:
            raise KeyError(structure_id)
        self.structures.remove(structure)
        owner = self.find_player(structure.player_id)
        if owner is not None and structure_id in owner.structure_ids:
            owner.structure_ids.remove(structure_id)

    @property
    def in_setup(self) -> bool:
        """True during either setup round."""
        return self.phase in SETUP_PHASES
