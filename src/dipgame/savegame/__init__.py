"""Read map definitions and game snapshots from JSON documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dipgame.domain import models as dm
from dipgame.schemas import GameDocument, MapDocument

logger = logging.getLogger(__name__)


def parse_map(payload: dict[str, Any] | str | bytes) -> dm.MapInfo:
    """Validate a map document and return the domain map."""

    if isinstance(payload, (str, bytes)):
        document = MapDocument.model_validate_json(payload)
    else:
        document = MapDocument.model_validate(payload)
    return document.to_domain()


def parse_game(payload: dict[str, Any] | str | bytes, map_info: dm.MapInfo) -> dm.GameData:
    """Validate a game snapshot against ``map_info`` and return the aggregate."""

    if isinstance(payload, (str, bytes)):
        document = GameDocument.model_validate_json(payload)
    else:
        document = GameDocument.model_validate(payload)
    return document.to_domain(map_info)


def load_map(path: Path | str) -> dm.MapInfo:
    map_path = Path(path)
    map_info = parse_map(map_path.read_bytes())
    logger.info(
        "loaded map %r from %s (%d provinces, %d routes)",
        map_info.name,
        map_path,
        len(map_info.provinces),
        len(map_info.routes),
    )
    return map_info


def load_game(path: Path | str, map_info: dm.MapInfo) -> dm.GameData:
    game_path = Path(path)
    game = parse_game(game_path.read_bytes(), map_info)
    logger.info("loaded game %s from %s at turn %d", game.id, game_path, game.turn_index)
    return game


def dump_game(game: dm.GameData) -> dict[str, Any]:
    """Snapshot document of ``game`` with camelCase keys and order records."""

    return GameDocument.from_domain(game).model_dump(mode="json", by_alias=True)


def dumps_game(game: dm.GameData) -> str:
    return json.dumps(dump_game(game), indent=2, sort_keys=True)
