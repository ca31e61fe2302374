"""Order variants, their identities and the wire record codec.

Every order is a small dataclass tagged with an :class:`OrderKind`.  Its
``id`` is a pure function of the kind and parameters, so two orders compare
equal (and hash equal) exactly when their ids match; the adjudication
``result`` never participates in identity.

Wire records are flat dictionaries::

    {"kind": 1, "unit": "bur", "result": 0, "dest": "par", "coast": "", "isConvoy": false}

``import_order`` validates a record against the fields required by its kind
and raises :class:`OrderImportError` naming the first missing field.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import ClassVar

from .enums import OrderKind, OrderResult, UnitType


class OrderImportError(ValueError):
    """Raised when a wire record cannot be turned into an order."""


@dataclass(slots=True, eq=False)
class Order:
    """Base class for every order variant."""

    kind: ClassVar[OrderKind]
    label: ClassVar[str]
    # (attribute, wire key) pairs exported next to kind/result
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (("province", "unit"),)
    required: ClassVar[tuple[str, ...]] = ("unit",)

    result: OrderResult = field(default=OrderResult.UNPROCESSED, kw_only=True)

    @property
    def id(self) -> str:
        raise NotImplementedError

    @property
    def text(self) -> str:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_record(self) -> dict[str, object]:
        """Export the order as a flat wire record."""

        record: dict[str, object] = {"kind": int(self.kind), "result": int(self.result)}
        for attr, key in self.wire_fields:
            value = getattr(self, attr)
            record[key] = int(value) if isinstance(value, IntEnum) else value
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> Order:
        for key in cls.required:
            if record.get(key) is None:
                raise OrderImportError(
                    f"order record of kind '{cls.label}' is missing field '{key}'"
                )
        settable = {f.name for f in fields(cls) if f.init}
        kwargs = {
            attr: record[key]
            for attr, key in cls.wire_fields
            if key in record and attr in settable
        }
        try:
            kwargs["result"] = OrderResult(record.get("result", OrderResult.UNPROCESSED))
            return cls(**kwargs)
        except (TypeError, ValueError) as exc:
            raise OrderImportError(f"invalid order record of kind '{cls.label}': {exc}") from exc


@dataclass(slots=True, eq=False)
class Cancel(Order):
    """Withdraw a previously selected order."""

    kind: ClassVar[OrderKind] = OrderKind.CANCEL
    label: ClassVar[str] = "cancel"

    province: str

    @property
    def id(self) -> str:
        return f"cancel-{self.province}"

    @property
    def text(self) -> str:
        return f"{self.province} cancel"


@dataclass(slots=True, eq=False)
class Hold(Order):
    kind: ClassVar[OrderKind] = OrderKind.HOLD
    label: ClassVar[str] = "hold"

    province: str

    @property
    def id(self) -> str:
        return f"hold-{self.province}"

    @property
    def text(self) -> str:
        return f"{self.province} hold"


@dataclass(slots=True, eq=False)
class Move(Order):
    """Move to an adjacent province, or across water when ``is_convoy``."""

    kind: ClassVar[OrderKind] = OrderKind.MOVE
    label: ClassVar[str] = "move"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("dest", "dest"),
        ("coast", "coast"),
        ("is_convoy", "isConvoy"),
    )
    required: ClassVar[tuple[str, ...]] = ("unit", "dest")

    province: str
    dest: str
    coast: str = ""
    is_convoy: bool = False

    @property
    def id(self) -> str:
        suffix = "-convoy" if self.is_convoy else ""
        return f"move-{self.province}-{self.dest}-{self.coast}{suffix}"

    @property
    def text(self) -> str:
        target = f"{self.dest} ({self.coast})" if self.coast else self.dest
        suffix = " via convoy" if self.is_convoy else ""
        return f"{self.province} -> {target}{suffix}"


@dataclass(slots=True, eq=False)
class Convoy(Order):
    """A fleet's offer to carry the army at ``start`` to ``end``."""

    kind: ClassVar[OrderKind] = OrderKind.CONVOY
    label: ClassVar[str] = "convoy"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("start", "start"),
        ("end", "end"),
    )
    required: ClassVar[tuple[str, ...]] = ("unit", "start", "end")

    province: str
    start: str
    end: str

    @property
    def id(self) -> str:
        return f"convoy-{self.province}-{self.start}-{self.end}"

    @property
    def text(self) -> str:
        return f"{self.province} convoy {self.start} -> {self.end}"


@dataclass(slots=True, eq=False)
class SupportHold(Order):
    kind: ClassVar[OrderKind] = OrderKind.SUPPORT_HOLD
    label: ClassVar[str] = "supportHold"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("supporting", "supporting"),
    )
    required: ClassVar[tuple[str, ...]] = ("unit", "supporting")

    province: str
    supporting: str

    @property
    def id(self) -> str:
        return f"support-{self.province}-{self.supporting}"

    @property
    def text(self) -> str:
        return f"{self.province} support {self.supporting}"


@dataclass(slots=True, eq=False)
class SupportMove(Order):
    """Support the unit at ``origin`` moving into ``supporting``."""

    kind: ClassVar[OrderKind] = OrderKind.SUPPORT_MOVE
    label: ClassVar[str] = "supportMove"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("supporting", "supporting"),
        ("origin", "from"),
    )
    required: ClassVar[tuple[str, ...]] = ("unit", "supporting", "from")

    province: str
    supporting: str
    origin: str

    @property
    def id(self) -> str:
        return f"support-{self.province}-{self.origin}-{self.supporting}"

    @property
    def text(self) -> str:
        return f"{self.province} support {self.origin} -> {self.supporting}"


@dataclass(slots=True, eq=False)
class Retreat(Order):
    """Move a dislodged unit out of its province."""

    kind: ClassVar[OrderKind] = OrderKind.RETREAT
    label: ClassVar[str] = "retreat"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("dest", "dest"),
        ("coast", "coast"),
    )
    required: ClassVar[tuple[str, ...]] = ("unit", "dest")

    province: str
    dest: str
    coast: str = ""

    @property
    def id(self) -> str:
        return f"retreat-{self.province}-{self.dest}-{self.coast}"

    @property
    def text(self) -> str:
        target = f"{self.dest} ({self.coast})" if self.coast else self.dest
        return f"{self.province} retreat -> {target}"


@dataclass(slots=True, eq=False)
class Build(Order):
    kind: ClassVar[OrderKind] = OrderKind.BUILD
    label: ClassVar[str] = "build"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("country", "country"),
        ("unit_type", "unitType"),
        ("coast", "coast"),
    )
    required: ClassVar[tuple[str, ...]] = ("unit", "country", "unitType")

    country: str
    province: str
    unit_type: UnitType
    coast: str = ""

    def __post_init__(self) -> None:
        self.unit_type = UnitType(self.unit_type)

    @property
    def id(self) -> str:
        return f"build-{self.country}-{self.province}-{self.unit_type.name.lower()}-{self.coast}"

    @property
    def text(self) -> str:
        target = f"{self.province} ({self.coast})" if self.coast else self.province
        return f"build {self.unit_type.name.lower()} {target}"


@dataclass(slots=True, eq=False)
class Disband(Order):
    kind: ClassVar[OrderKind] = OrderKind.DISBAND
    label: ClassVar[str] = "disband"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("country", "country"),
    )
    required: ClassVar[tuple[str, ...]] = ("unit", "country")

    country: str
    province: str

    @property
    def id(self) -> str:
        return f"disband-{self.country}-{self.province}"

    @property
    def text(self) -> str:
        return f"disband {self.province}"


@dataclass(slots=True, eq=False)
class Pass(Order):
    """Explicitly decline to build during an adjustment phase."""

    kind: ClassVar[OrderKind] = OrderKind.PASS
    label: ClassVar[str] = "pass"
    wire_fields: ClassVar[tuple[tuple[str, str], ...]] = (
        ("province", "unit"),
        ("country", "country"),
    )
    required: ClassVar[tuple[str, ...]] = ("country",)

    country: str
    province: str = field(default="", init=False)

    @property
    def id(self) -> str:
        return "pass"

    @property
    def text(self) -> str:
        return "pass"


ORDER_TYPES: dict[OrderKind, type[Order]] = {
    order_type.kind: order_type
    for order_type in (
        Cancel,
        Hold,
        Move,
        SupportHold,
        SupportMove,
        Convoy,
        Retreat,
        Disband,
        Build,
        Pass,
    )
}


def import_order(record: Mapping[str, object]) -> Order:
    """Rebuild an order from its wire record."""

    if "kind" not in record:
        raise OrderImportError("order record is missing field 'kind'")
    raw_kind = record["kind"]
    try:
        kind = OrderKind(raw_kind)
    except (TypeError, ValueError) as exc:
        raise OrderImportError(f"unknown order kind {raw_kind!r}") from exc
    return ORDER_TYPES[kind].from_record(record)


def export_order(order: Order) -> dict[str, object]:
    return order.to_record()
