"""Unit tests for convoy pathfinding and legal order generation."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from dipgame.domain import generation
from dipgame.domain import models as dm
from dipgame.domain.enums import Phase, Season, UnitType
from dipgame.domain.orders import (
    Convoy,
    Hold,
    Move,
    SupportHold,
    SupportMove,
)


def _province(province_id: str, *, water: bool = False) -> dm.Province:
    return dm.Province(id=province_id, name=province_id.upper(), x=0.5, y=0.5, water=water)


def _route(p0: str, p1: str, *, water: bool = False) -> dm.Route:
    return dm.Route(p0=p0, c0="", p1=p1, c1="", water=water)


def _game(map_info: dm.MapInfo, units: dict[str, list[dm.Unit]]) -> dm.GameData:
    state = dm.TurnState(
        date=1901,
        season=Season.SPRING,
        phase=Phase.ORDER_WRITING,
        nations={nation_id: dm.Nation(id=nation_id, units=list(owned)) for nation_id, owned in units.items()},
        orders={nation_id: {} for nation_id in units},
    )
    return dm.GameData(id=1, name="Test", map="test/test.dipmap", map_info=map_info, history=[state])


def _army(province: str) -> dm.Unit:
    return dm.Unit(province=province, type=UnitType.ARMY)


def _fleet(province: str, coast: str = "") -> dm.Unit:
    return dm.Unit(province=province, type=UnitType.FLEET, coast=coast)


def _crossing(*, direct: bool = False) -> dm.MapInfo:
    """A (land) - W (water) - B (land), optionally with a land route A-B."""

    routes = [_route("a", "w", water=True), _route("w", "b", water=True)]
    if direct:
        routes.append(_route("a", "b"))
    return dm.MapInfo(
        name="Crossing",
        provinces=[_province("a"), _province("w", water=True), _province("b")],
        routes=routes,
        countries=[],
    )


def _remove_unit(game: dm.GameData, province: str) -> None:
    for nation in game.state.nations.values():
        nation.units = [unit for unit in nation.units if unit.province != province]
    generation.invalidate_cache(game)


class TestConvoyPathfind:
    def test_three_node_chain(self):
        game = _game(_crossing(), {"eng": [_army("a")], "fra": [_fleet("w")]})
        assert generation.convoy_pathfind(game, "a") == ["b"]

    def test_chain_without_fleet(self):
        game = _game(_crossing(), {"eng": [_army("a")]})
        assert generation.convoy_pathfind(game, "a") == []

    def test_land_start_ignores_land_neighbours(self):
        game = _game(_crossing(direct=True), {"eng": [_army("a")]})
        assert generation.convoy_pathfind(game, "a") == []

    def test_water_start_does_not_need_its_own_fleet(self):
        game = _game(_crossing(), {})
        assert set(generation.convoy_pathfind(game, "w")) == {"a", "b"}

    def test_visited_provinces_are_skipped(self):
        game = _game(_crossing(), {"fra": [_fleet("w")]})
        visited = {"b"}
        assert generation.convoy_pathfind(game, "a", visited) == []
        assert {"a", "w", "b"} <= visited

    def test_cyclic_sea_terminates(self):
        map_info = dm.MapInfo(
            name="Ring",
            provinces=[
                _province("l1"),
                _province("l2"),
                _province("s1", water=True),
                _province("s2", water=True),
                _province("s3", water=True),
            ],
            routes=[
                _route("l1", "s1", water=True),
                _route("s1", "s2", water=True),
                _route("s2", "s3", water=True),
                _route("s3", "s1", water=True),
                _route("s3", "l2", water=True),
            ],
            countries=[],
        )
        game = _game(map_info, {"eng": [_fleet("s1"), _fleet("s2"), _fleet("s3"), _army("l1")]})
        assert generation.convoy_pathfind(game, "l1") == ["l2"]

    def test_water_neighbour_holding_an_army_marker_is_not_entered(self):
        game = _game(_crossing(), {"eng": [_army("w")]})
        assert generation.convoy_pathfind(game, "a") == []


@st.composite
def _random_boards(draw):
    size = draw(st.integers(min_value=2, max_value=8))
    water = draw(st.lists(st.booleans(), min_size=size, max_size=size))
    fleets = draw(st.lists(st.booleans(), min_size=size, max_size=size))
    edges = draw(
        st.lists(
            st.tuples(st.integers(0, size - 1), st.integers(0, size - 1)),
            max_size=24,
        )
    )
    ignore = draw(st.sets(st.integers(0, size - 1), max_size=3))
    provinces = [_province(f"p{index}", water=water[index]) for index in range(size)]
    routes = [_route(f"p{left}", f"p{right}", water=True) for left, right in edges]
    units = [_fleet(f"p{index}") for index in range(size) if water[index] and fleets[index]]
    map_info = dm.MapInfo(name="Random", provinces=provinces, routes=routes, countries=[])
    return _game(map_info, {"neu": units}), {f"p{index}" for index in ignore}


@settings(max_examples=150)
@given(_random_boards())
def test_convoy_pathfind_never_revisits(board_and_ignore):
    game, ignore = board_and_ignore
    reachable = generation.convoy_pathfind(game, "p0", set(ignore))

    assert len(reachable) == len(set(reachable))
    assert "p0" not in reachable
    assert not set(reachable) & ignore
    for province_id in reachable:
        assert not game.map_info.province_index[province_id].water


class TestFleetsRequired:
    def _map(self) -> dm.MapInfo:
        return dm.MapInfo(
            name="Strait",
            provinces=[
                _province("a"),
                _province("c"),
                _province("w0", water=True),
                _province("w1", water=True),
                _province("w2", water=True),
            ],
            routes=[
                _route("a", "w0", water=True),
                _route("a", "w1", water=True),
                _route("w1", "w2", water=True),
                _route("w2", "c", water=True),
            ],
            countries=[],
        )

    def test_finds_chain_after_dead_end(self):
        game = _game(self._map(), {"eng": [_army("a"), _fleet("w0"), _fleet("w1"), _fleet("w2")]})
        assert generation.fleets_required(game, "a", "c") == ["w1", "w2"]

    def test_broken_chain(self):
        game = _game(self._map(), {"eng": [_army("a"), _fleet("w1")]})
        assert generation.fleets_required(game, "a", "c") == []


class TestValidOrders:
    def test_army_gets_convoyed_move(self):
        game = _game(_crossing(), {"eng": [_army("a")], "fra": [_fleet("w")]})
        orders = generation.valid_orders(game, _army("a"))
        assert Move("a", "b", is_convoy=True) in orders
        assert Hold("a") in orders
        assert Move("a", "w") not in orders

    def test_removing_fleet_removes_convoy_but_keeps_direct_move(self):
        game = _game(_crossing(direct=True), {"eng": [_army("a")], "fra": [_fleet("w")]})
        before = generation.valid_orders(game, _army("a"))
        assert Move("a", "b", is_convoy=True) in before
        assert Move("a", "b") in before

        _remove_unit(game, "w")
        after = generation.valid_orders(game, _army("a"))
        assert Move("a", "b", is_convoy=True) not in after
        assert Move("a", "b") in after

    def test_fleet_offers_convoy_for_reachable_army(self):
        game = _game(_crossing(), {"eng": [_army("a")], "fra": [_fleet("w")]})
        orders = generation.valid_orders(game, _fleet("w"))
        assert Convoy("w", "a", "b") in orders
        assert Convoy("w", "b", "a") not in orders
        assert Move("w", "a") in orders
        assert Move("w", "b") in orders
        assert SupportHold("w", "a") in orders

    def test_fleet_cannot_support_move_it_would_convoy(self):
        game = _game(_crossing(), {"eng": [_army("a")], "fra": [_fleet("w")]})
        orders = generation.valid_orders(game, _fleet("w"))
        assert SupportMove("w", "b", "a") not in orders

    def test_fleet_supports_direct_move(self):
        game = _game(_crossing(direct=True), {"eng": [_army("a")], "fra": [_fleet("w")]})
        orders = generation.valid_orders(game, _fleet("w"))
        assert SupportMove("w", "b", "a") in orders

    def test_coastal_fleet_offers_no_convoys(self):
        map_info = _crossing()
        map_info.provinces[0].coasts.append(dm.Coast(id="sc", x=0.5, y=0.5))
        game = _game(map_info, {"eng": [_army("b"), _fleet("a", "sc")], "fra": [_fleet("w")]})
        orders = generation.valid_orders(game, _fleet("a", "sc"))
        assert not [order for order in orders if isinstance(order, Convoy)]

    def test_support_orders_from_other_units(self):
        map_info = dm.MapInfo(
            name="Line",
            provinces=[_province("x"), _province("y"), _province("z")],
            routes=[_route("x", "y"), _route("y", "z"), _route("x", "z")],
            countries=[],
        )
        game = _game(map_info, {"eng": [_army("x"), _army("y")], "fra": [_army("z")]})
        orders = generation.valid_orders(game, _army("x"))
        assert SupportHold("x", "y") in orders
        assert SupportHold("x", "z") in orders
        assert SupportMove("x", "z", "y") in orders
        assert SupportMove("x", "y", "z") in orders
        assert not [
            order for order in orders if isinstance(order, SupportMove) and order.origin == "x"
        ]

    def test_orders_are_sorted_and_unique(self):
        game = _game(_crossing(direct=True), {"eng": [_army("a")], "fra": [_fleet("w")]})
        orders = generation.valid_orders(game, _fleet("w"))
        texts = [order.text for order in orders]
        assert texts == sorted(texts)
        assert len({order.id for order in orders}) == len(orders)

    def test_results_are_memoized_per_turn(self):
        game = _game(_crossing(), {"eng": [_army("a")], "fra": [_fleet("w")]})
        first = generation.valid_orders(game, _army("a"))
        assert generation.valid_orders(game, _army("a")) is first
        assert game.order_cache.turn == 0

    def test_cache_reset_when_history_grows(self):
        game = _game(_crossing(), {"eng": [_army("a")], "fra": [_fleet("w")]})
        generation.valid_orders(game, _army("a"))
        next_turn = dm.TurnState(
            date=1901,
            season=Season.FALL,
            phase=Phase.ORDER_WRITING,
            nations={"eng": dm.Nation(id="eng", units=[_army("a")])},
        )
        game.history.append(next_turn)
        orders = generation.valid_orders(game, _army("a"))
        assert Move("a", "b", is_convoy=True) not in orders
        assert game.order_cache.turn == 1


class TestUnitsMovableTo:
    def test_excludes_units_at_target_and_excluded(self):
        map_info = dm.MapInfo(
            name="Line",
            provinces=[_province("x"), _province("y"), _province("z")],
            routes=[_route("x", "y"), _route("y", "z"), _route("x", "z")],
            countries=[],
        )
        game = _game(map_info, {"eng": [_army("x"), _army("y"), _army("z")]})
        movers = generation.units_movable_to(game, "z", exclude="x")
        assert [unit.province for unit in movers] == ["y"]

    def test_convoy_ignore_blocks_chain_through_province(self):
        game = _game(_crossing(), {"eng": [_army("a")], "fra": [_fleet("w")]})
        movers = generation.units_movable_to(game, "b")
        assert [unit.province for unit in movers] == ["a", "w"]
        assert [
            unit.province for unit in generation.units_movable_to(game, "b", exclude="w")
        ] == ["a"]
        assert generation.units_movable_to(game, "b", exclude="w", convoy_ignore="w") == []
