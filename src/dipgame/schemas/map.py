"""Schema of a map definition document."""

from __future__ import annotations

from pydantic import Field, model_validator

from dipgame.domain import models as dm
from dipgame.domain.enums import UnitType

from .base import Document


class CoastRecord(Document):
    id: str = Field(..., min_length=1, description="Coast id, unique within its province")
    x: float = Field(..., ge=0.0, le=1.0, description="Horizontal position as a fraction of the image")
    y: float = Field(..., ge=0.0, le=1.0, description="Vertical position as a fraction of the image")
    fleet_start: bool = Field(default=False, description="Starting fleets occupy this coast")


class ProvinceRecord(Document):
    id: str = Field(..., min_length=1, description="Province id used by routes and orders")
    name: str = Field(..., description="Display name")
    x: float = Field(..., ge=0.0, le=1.0)
    y: float = Field(..., ge=0.0, le=1.0)
    supply_center: bool = Field(default=False, description="Whether the province holds a supply center")
    water: bool = Field(default=False, description="Open water, only fleets may enter")
    coasts: list[CoastRecord] = Field(default_factory=list)
    unit: UnitType | None = Field(None, description="Unit placed here at game start")


class RouteRecord(Document):
    p0: str
    c0: str = ""
    p1: str
    c1: str = ""
    water: bool = Field(default=False, description="Navigable by fleets only")


class CountryRecord(Document):
    id: str = Field(..., min_length=1, description="Stable short country code")
    name: str
    color: str
    supply_centers: list[str] = Field(default_factory=list, description="Home supply centers")


class PlayerConfigurationRecord(Document):
    eliminate: list[str] = Field(default_factory=list, description="Countries removed from play")
    combine: list[list[str]] = Field(
        default_factory=list, description="Country sets controlled by a single player"
    )
    neutral_units: bool = Field(
        default=False, description="Eliminated countries still place neutral units"
    )


class MapDocument(Document):
    """Complete map definition as shipped alongside the map image."""

    name: str
    image: str = ""
    date: int = Field(default=1901, description="Starting year")
    victory: int = Field(default=0, ge=0, description="Supply centers needed to win")
    provinces: list[ProvinceRecord]
    routes: list[RouteRecord]
    countries: list[CountryRecord]
    player_configurations: dict[int, PlayerConfigurationRecord] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_references(self) -> MapDocument:
        coasts: dict[str, set[str]] = {}
        for province in self.provinces:
            if province.id in coasts:
                raise ValueError(f"duplicate province id {province.id!r}")
            coasts[province.id] = {""} | {coast.id for coast in province.coasts}

        for route in self.routes:
            for province_id, coast_id in ((route.p0, route.c0), (route.p1, route.c1)):
                if province_id not in coasts:
                    raise ValueError(f"route references unknown province {province_id!r}")
                if coast_id not in coasts[province_id]:
                    raise ValueError(
                        f"route references unknown coast {coast_id!r} of {province_id!r}"
                    )

        country_ids = {country.id for country in self.countries}
        for country in self.countries:
            for province_id in country.supply_centers:
                if province_id not in coasts:
                    raise ValueError(
                        f"country {country.id!r} lists unknown supply center {province_id!r}"
                    )

        for seated, config in self.player_configurations.items():
            named = set(config.eliminate)
            for rule in config.combine:
                named.update(rule)
            unknown = named - country_ids
            if unknown:
                raise ValueError(
                    f"configuration for {seated} players names unknown countries {sorted(unknown)}"
                )
        return self

    def to_domain(self) -> dm.MapInfo:
        return dm.MapInfo(
            name=self.name,
            image=self.image,
            date=self.date,
            victory=self.victory,
            provinces=[
                dm.Province(
                    id=province.id,
                    name=province.name,
                    x=province.x,
                    y=province.y,
                    supply_center=province.supply_center,
                    water=province.water,
                    coasts=[
                        dm.Coast(id=coast.id, x=coast.x, y=coast.y, fleet_start=coast.fleet_start)
                        for coast in province.coasts
                    ],
                    unit=province.unit,
                )
                for province in self.provinces
            ],
            routes=[
                dm.Route(p0=route.p0, c0=route.c0, p1=route.p1, c1=route.c1, water=route.water)
                for route in self.routes
            ],
            countries=[
                dm.MapCountry(
                    id=country.id,
                    name=country.name,
                    color=country.color,
                    supply_centers=list(country.supply_centers),
                )
                for country in self.countries
            ],
            player_configurations={
                seated: dm.PlayerConfiguration(
                    eliminate=list(config.eliminate),
                    combine=[list(rule) for rule in config.combine],
                    neutral_units=config.neutral_units,
                )
                for seated, config in self.player_configurations.items()
            },
        )
