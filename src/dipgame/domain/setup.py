"""Construction of the opening turn from a map definition."""

from __future__ import annotations

from .enums import Phase, Season, UnitType
from .models import MapInfo, Nation, Province, TurnState, Unit
from .players import player_configuration


def _starting_unit(province: Province) -> Unit | None:
    if province.unit is None:
        return None
    coast = ""
    if province.unit == UnitType.FLEET:
        coast = next((coast.id for coast in province.coasts if coast.fleet_start), "")
    return Unit(province=province.id, type=province.unit, coast=coast)


def starting_state(map_info: MapInfo, seated: int) -> TurnState:
    """First turn for ``seated`` players, waiting for countries to be claimed.

    Eliminated countries keep their centres and units as neutral nations when
    the configuration asks for neutral units and are left off the board
    otherwise.
    """

    config = player_configuration(map_info, seated)
    nations: dict[str, Nation] = {}
    for country in map_info.countries:
        eliminated = country.id in config.eliminate
        if eliminated and not config.neutral_units:
            continue
        units = []
        for province_id in country.supply_centers:
            province = map_info.province_index.get(province_id)
            unit = _starting_unit(province) if province is not None else None
            if unit is not None:
                units.append(unit)
        nations[country.id] = Nation(
            id=country.id,
            supply_centers=list(country.supply_centers),
            units=units,
            neutral=eliminated,
        )

    return TurnState(
        date=map_info.date,
        season=Season.SPRING,
        phase=Phase.COUNTRY_CLAIMING,
        nations=nations,
        orders={country_id: {} for country_id in nations},
    )
