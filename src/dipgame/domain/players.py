"""Resolution of seated players into playable country groups.

The map defines, per seated-player count, which countries are eliminated and
which are merged under a single player.  Every remaining country ends up in
exactly one group; the first country of a group owns it and lends it its
colour.
"""

from __future__ import annotations

from .game import get_country
from .models import GameData, MapInfo, PlayerConfiguration


class PlayerConfigurationError(LookupError):
    """Raised when the map has no configuration for a seated-player count."""


def player_configuration(map_info: MapInfo, seated: int) -> PlayerConfiguration:
    try:
        return map_info.player_configurations[seated]
    except KeyError as exc:
        raise PlayerConfigurationError(
            f"map {map_info.name!r} has no configuration for {seated} players"
        ) from exc


def playable_country_groups(map_info: MapInfo, seated: int) -> list[list[str]]:
    """Combine-rule groups first, then one singleton per ungrouped country."""

    config = player_configuration(map_info, seated)
    ungrouped = [
        country.id for country in map_info.countries if country.id not in config.eliminate
    ]
    groups: list[list[str]] = []
    for rule in config.combine:
        ungrouped = [country_id for country_id in ungrouped if country_id not in rule]
        groups.append(list(rule))
    return groups + [[country_id] for country_id in ungrouped]


def game_country_groups(game: GameData) -> list[list[str]]:
    """Playable groups for the game's current number of users."""

    return playable_country_groups(game.map_info, len(game.users))


def country_group(game: GameData, country_id: str) -> list[str] | None:
    for group in game_country_groups(game):
        if country_id in group:
            return group
    return None


def country_owner(game: GameData, country_id: str) -> str | None:
    return game.players.get(country_id)


def country_group_owner(game: GameData, group: list[str]) -> str:
    """Username owning ``group``; empty when nobody has claimed it."""

    return game.players.get(group[0], "")


def country_group_unclaimed(game: GameData, group: list[str]) -> bool:
    return country_group_owner(game, group) == ""


def unclaimed_country_groups(game: GameData) -> list[list[str]]:
    return [group for group in game_country_groups(game) if country_group_unclaimed(game, group)]


def unclaimed_users(game: GameData) -> list[str]:
    claimed = set(game.players.values())
    return [user for user in game.users if user not in claimed]


def country_group_color(game: GameData, group: list[str]) -> str | None:
    country = get_country(game, group[0])
    return None if country is None else country.color


def country_color(game: GameData, country_id: str) -> str | None:
    group = country_group(game, country_id)
    return None if group is None else country_group_color(game, group)


def country_names(game: GameData, group: list[str]) -> list[str]:
    names: list[str] = []
    for country_id in group:
        country = get_country(game, country_id)
        names.append(country.name if country is not None else country_id)
    return names


def claim_country_group(game: GameData, username: str, group: list[str]) -> None:
    """Assign every country of an unclaimed playable group to ``username``."""

    if username not in game.users:
        raise PlayerConfigurationError(f"user {username!r} is not seated in this game")
    if group not in game_country_groups(game):
        raise PlayerConfigurationError(f"{group!r} is not a playable country group")
    if not country_group_unclaimed(game, group):
        raise PlayerConfigurationError(f"{group!r} is already claimed")
    for country_id in group:
        game.players[country_id] = username
