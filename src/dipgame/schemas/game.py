"""Schema of a game snapshot document.

Orders inside a snapshot are wire records; they are rebuilt with
:func:`dipgame.domain.orders.import_order` while the document is validated,
so a single malformed record rejects the whole snapshot.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer, model_validator

from dipgame.domain import board
from dipgame.domain import models as dm
from dipgame.domain.enums import Phase, Season, UnitType, WinState
from dipgame.domain.orders import Order, import_order

from .base import Document


def _coerce_order(value: Any) -> Order:
    if isinstance(value, Order):
        return value
    if isinstance(value, Mapping):
        return import_order(value)
    raise ValueError(f"expected an order record, got {type(value).__name__}")


def _dump_order(order: Order) -> dict[str, object]:
    return order.to_record()


OrderField = Annotated[Any, BeforeValidator(_coerce_order), PlainSerializer(_dump_order)]


class UnitRecord(Document):
    province: str = Field(..., min_length=1)
    coast: str = ""
    type: UnitType


class NationRecord(Document):
    supply_centers: list[str] = Field(default_factory=list)
    units: list[UnitRecord] = Field(default_factory=list)
    neutral: bool = False
    builds: int | None = Field(None, description="Units owed (positive) or to remove (negative)")


class DislodgementRecord(Document):
    unit: UnitRecord
    nation: str
    attacker: str = Field(..., description="Province the dislodging attack came from")


class TurnRecord(Document):
    date: int
    season: Season
    phase: Phase
    nations: dict[str, NationRecord] = Field(default_factory=dict)
    orders: dict[str, dict[str, OrderField]] = Field(default_factory=dict)
    retreats: dict[str, DislodgementRecord] | None = None
    adjustments: dict[str, list[OrderField]] | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> TurnRecord:
        occupied: set[str] = set()
        for nation_id, nation in self.nations.items():
            for unit in nation.units:
                if unit.province in occupied:
                    raise ValueError(
                        f"province {unit.province!r} holds more than one unit (nation {nation_id!r})"
                    )
                occupied.add(unit.province)

        for nation_id, selected in self.orders.items():
            for province, order in selected.items():
                if order.province != province:
                    raise ValueError(
                        f"order {order.id!r} of {nation_id!r} is filed under {province!r}"
                    )
        return self


class GameDocument(Document):
    """A game and its complete turn history."""

    id: int
    name: str
    map: str = Field(..., description="Map identifier, a path relative to the maps directory")
    won: WinState = WinState.PLAYING
    winner: str = ""
    players: dict[str, str] = Field(default_factory=dict, description="Country id to username")
    users: list[str] = Field(default_factory=list)
    history: list[TurnRecord] = Field(..., min_length=1)

    def to_domain(self, map_info: dm.MapInfo) -> dm.GameData:
        """Build the game aggregate, checking every unit stands on the map."""

        history = [_turn_to_domain(turn, map_info) for turn in self.history]
        return dm.GameData(
            id=self.id,
            name=self.name,
            map=self.map,
            map_info=map_info,
            history=history,
            players=dict(self.players),
            users=list(self.users),
            won=self.won,
            winner=self.winner,
        )

    @classmethod
    def from_domain(cls, game: dm.GameData) -> GameDocument:
        return cls(
            id=game.id,
            name=game.name,
            map=game.map,
            won=game.won,
            winner=game.winner,
            players=dict(game.players),
            users=list(game.users),
            history=[_turn_from_domain(turn) for turn in game.history],
        )


def _unit_to_domain(record: UnitRecord, map_info: dm.MapInfo) -> dm.Unit:
    board.get_province(map_info, record.province)
    if record.coast:
        board.get_coast(map_info, record.province, record.coast)
    return dm.Unit(province=record.province, type=record.type, coast=record.coast)


def _turn_to_domain(turn: TurnRecord, map_info: dm.MapInfo) -> dm.TurnState:
    nations = {
        nation_id: dm.Nation(
            id=nation_id,
            supply_centers=list(nation.supply_centers),
            units=[_unit_to_domain(unit, map_info) for unit in nation.units],
            neutral=nation.neutral,
            builds=nation.builds,
        )
        for nation_id, nation in turn.nations.items()
    }
    retreats = None
    if turn.retreats is not None:
        retreats = {
            province: dm.Dislodgement(
                unit=_unit_to_domain(record.unit, map_info),
                nation=record.nation,
                attacker=record.attacker,
            )
            for province, record in turn.retreats.items()
        }
    adjustments = None
    if turn.adjustments is not None:
        adjustments = {nation_id: list(orders) for nation_id, orders in turn.adjustments.items()}
    return dm.TurnState(
        date=turn.date,
        season=turn.season,
        phase=turn.phase,
        nations=nations,
        orders={nation_id: dict(selected) for nation_id, selected in turn.orders.items()},
        retreats=retreats,
        adjustments=adjustments,
    )


def _unit_record(unit: dm.Unit) -> UnitRecord:
    return UnitRecord(province=unit.province, coast=unit.coast, type=unit.type)


def _turn_from_domain(turn: dm.TurnState) -> TurnRecord:
    retreats = None
    if turn.retreats is not None:
        retreats = {
            province: DislodgementRecord(
                unit=_unit_record(dislodgement.unit),
                nation=dislodgement.nation,
                attacker=dislodgement.attacker,
            )
            for province, dislodgement in turn.retreats.items()
        }
    return TurnRecord(
        date=turn.date,
        season=turn.season,
        phase=turn.phase,
        nations={
            nation_id: NationRecord(
                supply_centers=list(nation.supply_centers),
                units=[_unit_record(unit) for unit in nation.units],
                neutral=nation.neutral,
                builds=nation.builds,
            )
            for nation_id, nation in turn.nations.items()
        },
        orders={nation_id: dict(selected) for nation_id, selected in turn.orders.items()},
        retreats=retreats,
        adjustments=(
            None
            if turn.adjustments is None
            else {nation_id: list(orders) for nation_id, orders in turn.adjustments.items()}
        ),
    )
