"""Read-only queries over a game aggregate and its current turn."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from dipgame.config import get_settings

from . import board
from .models import GameData, MapCountry, Nation, Unit
from .orders import Order


def get_unit(game: GameData, province: str) -> Unit | None:
    """Return the unit standing in ``province`` or ``None``."""

    for nation in game.state.nations.values():
        for unit in nation.units:
            if unit.province == province:
                return unit
    return None


def iter_units(game: GameData):
    """Yield ``(nation_id, unit)`` for every unit on the board."""

    for nation_id, nation in game.state.nations.items():
        for unit in nation.units:
            yield nation_id, unit


def get_unit_owner_id(game: GameData, province: str) -> str | None:
    for nation_id, unit in iter_units(game):
        if unit.province == province:
            return nation_id
    return None


def get_country(game: GameData, country_id: str) -> MapCountry | None:
    for country in game.map_info.countries:
        if country.id == country_id:
            return country
    return None


def get_unit_owner(game: GameData, province: str) -> MapCountry | None:
    """Map country owning the unit at ``province``."""

    owner_id = get_unit_owner_id(game, province)
    return None if owner_id is None else get_country(game, owner_id)


def get_unit_owner_player(game: GameData, province: str) -> str | None:
    """Username controlling the unit at ``province``."""

    owner_id = get_unit_owner_id(game, province)
    return None if owner_id is None else game.players.get(owner_id)


def get_unit_coords(game: GameData, unit: Unit) -> tuple[float, float]:
    return board.get_coords(game.map_info, unit.province, unit.coast)


def supply_center_owner(game: GameData, province: str) -> Nation | None:
    for nation in game.state.nations.values():
        if province in nation.supply_centers:
            return nation
    return None


def is_order_selected(game: GameData, order: Order) -> bool:
    """Whether any nation currently has ``order`` selected (compared by id)."""

    for selected in game.state.orders.values():
        for candidate in selected.values():
            if candidate.id == order.id:
                return True
    return False


def get_submitted_orders(game: GameData, username: str) -> list[Order]:
    """Every order selected by nations the user controls."""

    submitted: list[Order] = []
    for nation_id, selected in game.state.orders.items():
        if game.players.get(nation_id) == username:
            submitted.extend(selected.values())
    return submitted


def get_submitted_order_for_unit(game: GameData, province: str) -> Order | None:
    for selected in game.state.orders.values():
        order = selected.get(province)
        if order is not None:
            return order
    return None


def asset_path(
    game: GameData, relpath: str, *, maps_dir: str | Path | None = None
) -> PurePosixPath:
    """Path of a map asset relative to the directory of the game's map file.

    ``maps_dir`` defaults to the configured maps directory, so
    ``classic/classic.dipmap`` with ``relpath="map.svg"`` resolves to
    ``maps/classic/map.svg`` out of the box.
    """

    if maps_dir is None:
        maps_dir = get_settings().maps_dir
    return PurePosixPath(Path(maps_dir).as_posix()) / PurePosixPath(game.map).parent / relpath
