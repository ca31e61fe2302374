"""Command line helpers for inspecting maps and game snapshots."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from dipgame.config import get_settings
from dipgame.domain import game as game_queries
from dipgame.domain import turns
from dipgame.domain.players import PlayerConfigurationError, playable_country_groups
from dipgame.savegame import load_game, load_map


def _resolve(path: str, root: Path) -> Path:
    """Relative command line paths are taken from the configured directory."""

    candidate = Path(path)
    return candidate if candidate.is_absolute() else root / candidate


def _orders(args: argparse.Namespace) -> int:
    settings = get_settings()
    map_info = load_map(_resolve(args.map, settings.maps_dir))
    game = load_game(_resolve(args.game, settings.data_dir), map_info)
    owner = game_queries.get_unit_owner_id(game, args.province)
    if owner is None:
        print(f"no unit at {args.province}", file=sys.stderr)
        return 1
    for order in turns.legal_orders(game, owner, args.province):
        print(f"{order.id}\t{order.text}")
    return 0


def _groups(args: argparse.Namespace) -> int:
    map_info = load_map(_resolve(args.map, get_settings().maps_dir))
    try:
        groups = playable_country_groups(map_info, args.players)
    except PlayerConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    for group in groups:
        print(" ".join(group))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dipgame", description="Inspect dipgame maps and games")
    sub = parser.add_subparsers(dest="command", required=True)

    orders = sub.add_parser("orders", help="List the legal orders of a unit")
    orders.add_argument("map", help="Map definition JSON file, relative to MAPS_DIR")
    orders.add_argument("game", help="Game snapshot JSON file, relative to DATA_DIR")
    orders.add_argument("province", help="Province of the unit")
    orders.set_defaults(handler=_orders)

    groups = sub.add_parser("groups", help="List playable country groups")
    groups.add_argument("map", help="Map definition JSON file, relative to MAPS_DIR")
    groups.add_argument("players", type=int, help="Number of seated players")
    groups.set_defaults(handler=_groups)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper())
    return args.handler(args)
