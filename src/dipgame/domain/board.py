"""Adjacency and lookup queries over the static map graph."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import UnitType
from .models import Coast, MapInfo, Province, Route, Unit


class UnknownProvinceError(LookupError):
    """Raised when a province id is not part of the map."""


class UnknownCoastError(LookupError):
    """Raised when a coast id is not part of its province."""


@dataclass(frozen=True, slots=True)
class Place:
    """A ``(province, coast)`` endpoint; ``coast`` is empty when not applicable."""

    province: str
    coast: str = ""


def find_province(map_info: MapInfo, province_id: str) -> Province | None:
    """Return the province or ``None`` when the id is unknown."""

    return map_info.province_index.get(province_id)


def get_province(map_info: MapInfo, province_id: str) -> Province:
    """Return the province or raise :class:`UnknownProvinceError`."""

    province = map_info.province_index.get(province_id)
    if province is None:
        raise UnknownProvinceError(f"unknown province: {province_id}")
    return province


def get_coast(map_info: MapInfo, province_id: str, coast_id: str) -> Coast:
    province = get_province(map_info, province_id)
    for coast in province.coasts:
        if coast.id == coast_id:
            return coast
    raise UnknownCoastError(f"unknown coast {coast_id!r} of province {province_id}")


def get_coords(map_info: MapInfo, province_id: str, coast_id: str = "") -> tuple[float, float]:
    """Normalized map coordinates of a province, or of one of its coasts."""

    if coast_id:
        coast = get_coast(map_info, province_id, coast_id)
        return coast.x, coast.y
    province = get_province(map_info, province_id)
    return province.x, province.y


def route_other_end(route: Route, province: str, coast: str = "") -> Place | None:
    """Opposite endpoint of ``route`` when it starts at ``(province, coast)``."""

    if route.p0 == province and route.c0 == coast:
        return Place(route.p1, route.c1)
    if route.p1 == province and route.c1 == coast:
        return Place(route.p0, route.c0)
    return None


def route_other_end_ignore_coasts(route: Route, province: str) -> Place | None:
    if route.p0 == province:
        return Place(route.p1, route.c1)
    if route.p1 == province:
        return Place(route.p0, route.c0)
    return None


def adjacent_routes(map_info: MapInfo, province: str, coast: str = "") -> list[tuple[Route, Place]]:
    """Routes leaving ``(province, coast)`` paired with their far endpoint."""

    found: list[tuple[Route, Place]] = []
    for route in map_info.route_index.get(province, ()):
        other = route_other_end(route, province, coast)
        if other is not None:
            found.append((route, other))
    return found


def adjacencies(map_info: MapInfo, province: str, coast: str = "") -> list[Place]:
    """Every endpoint reachable in one step from ``(province, coast)``."""

    return [other for _, other in adjacent_routes(map_info, province, coast)]


def adjacencies_ignore_coasts(map_info: MapInfo, province: str) -> list[str]:
    """Provinces reachable in one step from any landing point of ``province``."""

    found: list[str] = []
    for route in map_info.route_index.get(province, ()):
        other = route_other_end_ignore_coasts(route, province)
        if other is not None:
            found.append(other.province)
    return found


def is_adjacent(map_info: MapInfo, p0: Place, p1: Place) -> bool:
    return any(other == p1 for other in adjacencies(map_info, p0.province, p0.coast))


def is_adjacent_ignore_coasts(map_info: MapInfo, p0: str, p1: str) -> bool:
    return p1 in adjacencies_ignore_coasts(map_info, p0)


def can_traverse(map_info: MapInfo, route: Route, dest: Place, unit_type: UnitType) -> bool:
    """Whether a unit of ``unit_type`` may use ``route`` to reach ``dest``.

    Fleets sail water routes only; armies march land routes into land
    provinces only.
    """

    if unit_type == UnitType.FLEET:
        return route.water
    return not route.water and not get_province(map_info, dest.province).water


def unit_adjacencies(map_info: MapInfo, unit: Unit) -> list[Place]:
    """Endpoints ``unit`` can reach with a direct move, in route order."""

    return [
        other
        for route, other in adjacent_routes(map_info, unit.province, unit.coast)
        if can_traverse(map_info, route, other, unit.type)
    ]
