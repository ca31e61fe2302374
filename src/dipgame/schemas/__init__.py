from .game import DislodgementRecord, GameDocument, NationRecord, TurnRecord, UnitRecord
from .map import (
    CoastRecord,
    CountryRecord,
    MapDocument,
    PlayerConfigurationRecord,
    ProvinceRecord,
    RouteRecord,
)

__all__ = [
    "CoastRecord",
    "CountryRecord",
    "DislodgementRecord",
    "GameDocument",
    "MapDocument",
    "NationRecord",
    "PlayerConfigurationRecord",
    "ProvinceRecord",
    "RouteRecord",
    "TurnRecord",
    "UnitRecord",
]
