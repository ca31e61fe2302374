"""Dataclasses describing the map, the turn history and the game aggregate.

Map-level objects (provinces, coasts, routes, countries and player
configurations) are loaded once and never mutated.  Turn-level objects are
produced by the external adjudicator and appended to ``GameData.history``;
only the newest turn has its order map mutated by player submissions.

Validation of incoming documents lives in :mod:`dipgame.schemas`; within the
domain layer we only interact with these types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import Phase, Season, UnitType, WinState

if TYPE_CHECKING:
    from .orders import Move, Order


# --- Map graph ------------------------------------------------------------------


@dataclass(slots=True)
class Coast:
    """Landing point of a province used by fleets."""

    id: str
    x: float
    y: float
    fleet_start: bool = False


@dataclass(slots=True)
class Province:
    """Named region of the map.

    Coordinates are fractions of the map image in ``[0, 1]``.  A province
    without coasts has a single implicit landing point identified by ``""``.
    """

    id: str
    name: str
    x: float
    y: float
    supply_center: bool = False
    water: bool = False
    coasts: list[Coast] = field(default_factory=list)
    unit: UnitType | None = None


@dataclass(slots=True)
class Route:
    """Undirected edge between two ``(province, coast)`` endpoints."""

    p0: str
    c0: str
    p1: str
    c1: str
    water: bool = False


@dataclass(slots=True)
class MapCountry:
    """Country defined by the map."""

    id: str
    name: str
    color: str
    supply_centers: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PlayerConfiguration:
    """Country grouping rule for one seated-player count."""

    eliminate: list[str] = field(default_factory=list)
    combine: list[list[str]] = field(default_factory=list)
    neutral_units: bool = False


@dataclass(slots=True)
class MapInfo:
    """Static map definition plus lookup indices built on construction."""

    name: str
    provinces: list[Province]
    routes: list[Route]
    countries: list[MapCountry]
    player_configurations: dict[int, PlayerConfiguration] = field(default_factory=dict)
    date: int = 1901
    image: str = ""
    victory: int = 0
    province_index: dict[str, Province] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )
    route_index: dict[str, list[Route]] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        self.province_index = {province.id: province for province in self.provinces}
        for route in self.routes:
            self.route_index.setdefault(route.p0, []).append(route)
            if route.p1 != route.p0:
                self.route_index.setdefault(route.p1, []).append(route)


# --- Turn state -------------------------------------------------------------------


@dataclass(slots=True)
class Unit:
    """Army or fleet standing in a province."""

    province: str
    type: UnitType
    coast: str = ""


@dataclass(slots=True)
class Nation:
    """Per-turn state of one country."""

    id: str
    supply_centers: list[str] = field(default_factory=list)
    units: list[Unit] = field(default_factory=list)
    neutral: bool = False
    builds: int | None = None


@dataclass(slots=True)
class Dislodgement:
    """Retreat obligation of a unit forced out of its province."""

    unit: Unit
    nation: str
    attacker: str


@dataclass(slots=True)
class TurnState:
    """Snapshot of one turn."""

    date: int
    season: Season
    phase: Phase
    nations: dict[str, Nation] = field(default_factory=dict)
    orders: dict[str, dict[str, Order]] = field(default_factory=dict)
    retreats: dict[str, Dislodgement] | None = None
    adjustments: dict[str, list[Order]] | None = None


@dataclass(slots=True)
class OrderCache:
    """Per-province memo of generated orders, valid for a single turn."""

    turn: int = -1
    orders: dict[str, list[Order]] = field(default_factory=dict)
    moves: dict[str, list[Move]] = field(default_factory=dict)

    def clear(self, turn: int = -1) -> None:
        self.turn = turn
        self.orders.clear()
        self.moves.clear()


@dataclass(slots=True)
class GameData:
    """Root aggregate for a single game."""

    id: int
    name: str
    map: str
    map_info: MapInfo
    history: list[TurnState]
    players: dict[str, str] = field(default_factory=dict)
    users: list[str] = field(default_factory=list)
    won: WinState = WinState.PLAYING
    winner: str = ""
    order_cache: OrderCache = field(default_factory=OrderCache, repr=False, compare=False)

    @property
    def state(self) -> TurnState:
        """The current (latest) turn."""

        return self.history[-1]

    @property
    def turn_index(self) -> int:
        return len(self.history) - 1
