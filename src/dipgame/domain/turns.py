"""Mutation of the current turn: order selection and history growth.

Only the newest :class:`TurnState` is ever mutated.  Callers hosting several
requests against one game must serialize access around these functions and
around order generation, since both share ``GameData.order_cache``.
"""

from __future__ import annotations

import logging

from .enums import Phase
from .generation import invalidate_cache, valid_adjustment_orders, valid_orders, valid_retreats
from .models import GameData, TurnState
from .orders import Cancel, Order

logger = logging.getLogger(__name__)


class IllegalOrderError(ValueError):
    """Raised when a submitted order is not legal for the current turn."""


def _owned_unit(game: GameData, nation: str, province: str):
    units = game.state.nations[nation].units if nation in game.state.nations else []
    for unit in units:
        if unit.province == province:
            return unit
    return None


def legal_orders(game: GameData, nation: str, province: str = "") -> list[Order]:
    """Orders ``nation`` may currently select for the unit at ``province``.

    During adjustments the whole nation is addressed and ``province`` is
    ignored.
    """

    state = game.state
    if state.phase == Phase.ORDER_WRITING:
        unit = _owned_unit(game, nation, province)
        return valid_orders(game, unit) if unit is not None else []
    if state.phase == Phase.RETREATING:
        dislodgement = (state.retreats or {}).get(province)
        if dislodgement is None or dislodgement.nation != nation:
            return []
        return valid_retreats(game, dislodgement)
    if state.phase == Phase.CREATING_DISBANDING:
        return valid_adjustment_orders(game, nation)
    return []


def select_order(game: GameData, nation: str, order: Order) -> None:
    """Record ``order`` as the nation's choice, or withdraw one with Cancel."""

    state = game.state
    if nation not in state.nations:
        raise IllegalOrderError(f"unknown nation: {nation}")

    if state.phase == Phase.CREATING_DISBANDING:
        _select_adjustment(game, nation, order)
        return

    selected = state.orders.setdefault(nation, {})
    if isinstance(order, Cancel):
        if selected.pop(order.province, None) is None:
            raise IllegalOrderError(f"no order selected for {order.province}")
        logger.debug("%s withdrew the order for %s", nation, order.province)
        return

    if order not in legal_orders(game, nation, order.province):
        raise IllegalOrderError(f"{order.id} is not a legal order for {nation}")
    selected[order.province] = order
    logger.debug("%s selected %s", nation, order.id)


def _select_adjustment(game: GameData, nation: str, order: Order) -> None:
    state = game.state
    if state.adjustments is None:
        state.adjustments = {}
    chosen = state.adjustments.setdefault(nation, [])
    if isinstance(order, Cancel):
        remaining = [existing for existing in chosen if existing.province != order.province]
        if len(remaining) == len(chosen):
            raise IllegalOrderError(f"no adjustment selected for {order.province}")
        chosen[:] = remaining
        return

    if order not in valid_adjustment_orders(game, nation):
        raise IllegalOrderError(f"{order.id} is not a legal adjustment for {nation}")
    if order in chosen:
        raise IllegalOrderError(f"{order.id} already selected")
    if order.province and any(existing.province == order.province for existing in chosen):
        raise IllegalOrderError(f"an adjustment is already selected for {order.province}")
    limit = abs(state.nations[nation].builds or 0)
    if order.province and len([existing for existing in chosen if existing.province]) >= limit:
        raise IllegalOrderError(f"{nation} may select at most {limit} adjustment(s)")
    chosen.append(order)


def advance_turn(game: GameData, state: TurnState) -> TurnState:
    """Append an adjudicated turn to the history and make it current."""

    game.history.append(state)
    invalidate_cache(game)
    logger.info("game %s advanced to turn %d", game.id, game.turn_index)
    return state

