"""Enumeration of every topologically legal order for a unit.

The generator answers "what may this unit do this turn" without judging
whether the order would succeed.  Results are memoized per acting province in
``GameData.order_cache``; the cache is stamped with the turn index it was
built for and is discarded as soon as the history grows.

Support orders need to know which *other* units can reach a province.  That
question is answered from :func:`movement_orders`, which only contains
direct and convoyed moves and never consults supports, so building one
unit's order list never re-enters the generator for the same unit.
"""

from __future__ import annotations

import logging

from . import board
from .enums import UnitType
from .game import get_country, get_unit, iter_units
from .models import Dislodgement, GameData, OrderCache, Unit
from .orders import Build, Convoy, Disband, Hold, Move, Order, Pass, Retreat, SupportHold, SupportMove

logger = logging.getLogger(__name__)


def order_cache(game: GameData) -> OrderCache:
    """Return the game's cache, resetting it when it belongs to an older turn."""

    cache = game.order_cache
    if cache.turn != game.turn_index:
        if cache.orders or cache.moves:
            logger.debug(
                "discarding order cache of turn %s for turn %s", cache.turn, game.turn_index
            )
        cache.clear(game.turn_index)
    return cache


def invalidate_cache(game: GameData) -> None:
    game.order_cache.clear()


def _fleet_at(game: GameData, province: str) -> bool:
    unit = get_unit(game, province)
    return unit is not None and unit.type == UnitType.FLEET


def convoy_pathfind(game: GameData, start: str, visited: set[str] | None = None) -> list[str]:
    """Land provinces reachable from ``start`` through fleet-occupied water.

    From a land start only water neighbours are explored; from a water start
    its land neighbours are recorded directly.  The occupant of a water start
    is not checked.  ``visited`` is updated in place and nothing already in it
    is returned, which also guarantees termination on cyclic seas.
    """

    if visited is None:
        visited = set()
    map_info = game.map_info
    start_province = board.get_province(map_info, start)
    visited.add(start)

    reachable: list[str] = []
    for neighbor_id in board.adjacencies_ignore_coasts(map_info, start):
        if neighbor_id in visited:
            continue
        neighbor = board.get_province(map_info, neighbor_id)
        if not (neighbor.water or start_province.water):
            continue
        if not neighbor.water:
            reachable.append(neighbor_id)
            visited.add(neighbor_id)
        elif _fleet_at(game, neighbor_id):
            reachable.extend(convoy_pathfind(game, neighbor_id, visited))
    return reachable


def fleets_required(game: GameData, start: str, end: str) -> list[str]:
    """Water provinces of the first fleet chain found linking ``start`` to ``end``.

    The search is depth-first in route order, so the chain is neither
    guaranteed shortest nor unique.  An empty list means no chain exists.
    """

    map_info = game.map_info
    chain: list[str] = []
    visited = {start}

    def step(current: str) -> bool:
        current_water = board.get_province(map_info, current).water
        for neighbor_id in board.adjacencies_ignore_coasts(map_info, current):
            if neighbor_id == end and current_water:
                return True
            if neighbor_id in visited:
                continue
            if board.get_province(map_info, neighbor_id).water and _fleet_at(game, neighbor_id):
                visited.add(neighbor_id)
                chain.append(neighbor_id)
                if step(neighbor_id):
                    return True
                chain.pop()
        return False

    return chain if step(start) else []


def movement_orders(game: GameData, unit: Unit) -> list[Move]:
    """Direct and convoyed moves available to ``unit``."""

    cache = order_cache(game)
    cached = cache.moves.get(unit.province)
    if cached is not None:
        return cached

    moves = [
        Move(unit.province, place.province, place.coast)
        for place in board.unit_adjacencies(game.map_info, unit)
    ]
    if unit.type == UnitType.ARMY:
        for dest in convoy_pathfind(game, unit.province):
            convoyed = bool(fleets_required(game, unit.province, dest))
            moves.append(Move(unit.province, dest, is_convoy=convoyed))
    cache.moves[unit.province] = moves
    return moves


def units_movable_to(
    game: GameData, province: str, exclude: str = "", convoy_ignore: str = ""
) -> list[Unit]:
    """Units other than those at ``province``/``exclude`` able to move into ``province``.

    Convoyed moves only count when the convoy still reaches ``province`` with
    ``convoy_ignore`` removed from the water chain.
    """

    movers: list[Unit] = []
    for _, unit in iter_units(game):
        if unit.province == province or unit.province == exclude:
            continue
        for move in movement_orders(game, unit):
            if move.dest != province:
                continue
            if (
                move.is_convoy
                and convoy_ignore
                and province not in convoy_pathfind(game, unit.province, {convoy_ignore})
            ):
                continue
            movers.append(unit)
            break
    return movers


def valid_orders(game: GameData, unit: Unit) -> list[Order]:
    """Every legal order for ``unit`` in the order-writing phase, sorted by text."""

    cache = order_cache(game)
    cached = cache.orders.get(unit.province)
    if cached is not None:
        return cached

    map_info = game.map_info
    offered: dict[str, Order] = {}

    def offer(order: Order) -> None:
        offered.setdefault(order.id, order)

    offer(Hold(unit.province))
    for move in movement_orders(game, unit):
        offer(move)

    province = board.get_province(map_info, unit.province)
    if unit.type == UnitType.FLEET and not unit.coast and province.water:
        reachable = convoy_pathfind(game, unit.province)
        for start in reachable:
            army = get_unit(game, start)
            if army is None or army.type != UnitType.ARMY:
                continue
            for end in reachable:
                if end != start:
                    offer(Convoy(unit.province, start, end))

    for place in board.unit_adjacencies(map_info, unit):
        if get_unit(game, place.province) is not None:
            offer(SupportHold(unit.province, place.province))
        for mover in units_movable_to(
            game, place.province, exclude=unit.province, convoy_ignore=unit.province
        ):
            offer(SupportMove(unit.province, place.province, mover.province))

    orders = sorted(offered.values(), key=lambda order: (order.text, order.id))
    cache.orders[unit.province] = orders
    logger.debug("generated %d orders for unit at %s", len(orders), unit.province)
    return orders


def valid_retreats(game: GameData, dislodgement: Dislodgement) -> list[Order]:
    """Retreat destinations of a dislodged unit, followed by disbanding it."""

    unit = dislodgement.unit
    retreats: dict[str, Order] = {}
    for place in board.unit_adjacencies(game.map_info, unit):
        if place.province == dislodgement.attacker:
            continue
        if get_unit(game, place.province) is not None:
            continue
        retreat = Retreat(unit.province, place.province, place.coast)
        retreats.setdefault(retreat.id, retreat)

    orders = sorted(retreats.values(), key=lambda order: (order.text, order.id))
    orders.append(Disband(dislodgement.nation, unit.province))
    return orders


def valid_build_orders(game: GameData, country: str, *, skip_occupied: bool = True) -> list[Order]:
    """Build options on the country's owned home supply centres, then Pass."""

    orders: list[Order] = []
    nation = game.state.nations.get(country)
    map_country = get_country(game, country)
    if nation is not None and map_country is not None:
        for province_id in map_country.supply_centers:
            if province_id not in nation.supply_centers:
                continue
            if skip_occupied and get_unit(game, province_id) is not None:
                continue
            province = board.get_province(game.map_info, province_id)
            if province.coasts:
                orders.extend(
                    Build(country, province_id, UnitType.FLEET, coast.id)
                    for coast in province.coasts
                )
                orders.append(Build(country, province_id, UnitType.ARMY))
            elif province.water:
                orders.append(Build(country, province_id, UnitType.FLEET))
            else:
                orders.append(Build(country, province_id, UnitType.ARMY))
    orders.append(Pass(country))
    return orders


def valid_disband_orders(game: GameData, country: str) -> list[Order]:
    nation = game.state.nations.get(country)
    if nation is None:
        return []
    return [Disband(country, unit.province) for unit in nation.units]


def valid_adjustment_orders(game: GameData, country: str) -> list[Order]:
    """Builds when the nation is owed units, disbands when it must shed them."""

    nation = game.state.nations.get(country)
    delta = nation.builds if nation is not None else None
    if delta is not None and delta > 0:
        return valid_build_orders(game, country)
    if delta is not None and delta < 0:
        return valid_disband_orders(game, country)
    return [Pass(country)]
