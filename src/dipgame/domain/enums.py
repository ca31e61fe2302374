"""Closed tag sets shared by the map, turn and order layers.

Every enumeration is an ``IntEnum`` because the wire format carries the
integer codes directly.
"""

from __future__ import annotations

from enum import IntEnum


class OrderKind(IntEnum):
    """Order variants and their wire codes."""

    CANCEL = -1
    HOLD = 0
    MOVE = 1
    SUPPORT_HOLD = 2
    SUPPORT_MOVE = 3
    CONVOY = 4
    RETREAT = 5
    DISBAND = 6
    BUILD = 7
    PASS = 8


class OrderResult(IntEnum):
    """Adjudication outcome recorded on an order."""

    UNPROCESSED = 0
    FAIL = 1
    SUCCESS = 2
    DISLODGED = 3


class WinState(IntEnum):
    """Overall game status."""

    PLAYING = 0
    DRAW = 1
    WON = 2


class UnitType(IntEnum):
    """Kinds of unit that can occupy a province."""

    ARMY = 0
    FLEET = 1


class Phase(IntEnum):
    """Phase of a turn."""

    COUNTRY_CLAIMING = -1
    ORDER_WRITING = 0
    RETREATING = 1
    CREATING_DISBANDING = 2
    FINISHED = 3


class Season(IntEnum):
    """Season of the in-game calendar."""

    SPRING = 0
    FALL = 1
