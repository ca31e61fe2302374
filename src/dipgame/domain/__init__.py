"""Domain model and rules for dipgame.

This package hosts everything needed to answer rules questions about a game
purely in memory:

* Dataclasses describing the map, turns and the game aggregate (see :mod:`models`).
* Closed enumerations carrying the wire codes (see :mod:`enums`).
* Order variants and their record codec (see :mod:`orders`).
* Adjacency queries (:mod:`board`) and order generation (:mod:`generation`).
* Player grouping (:mod:`players`), opening setup (:mod:`setup`) and order
  selection on the current turn (:mod:`turns`).
"""

from . import board, enums, game, generation, models, orders, players, setup, turns

__all__ = [
    "board",
    "enums",
    "game",
    "generation",
    "models",
    "orders",
    "players",
    "setup",
    "turns",
]
