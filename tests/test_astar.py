import pytest

from terrain_pathfinder.astar_core import (
    AStarPlanner,
    manhattan,
    plan_path_to_target,
    reconstruct,
    route_cost,
)
from terrain_pathfinder.models import PlanStatus, SearchNode


def _assert_valid_route(grid, route, start, goal):
    assert route[0] == start
    assert route[-1] == goal
    assert len(set(route)) == len(route)
    for cell in route:
        assert grid.is_traversable(cell)
    for a, b in zip(route, route[1:]):
        assert manhattan(a, b) == 1


def test_three_by_three_level1(make_grid):
    grid = make_grid("""
        111
        111
        111
    """)
    route, status = plan_path_to_target((0, 0), (2, 2), grid)
    assert status is PlanStatus.SUCCESS
    assert len(route) == 5
    assert route_cost(grid, route) == 4
    _assert_valid_route(grid, route, (0, 0), (2, 2))


def test_trivial_route(make_grid):
    grid = make_grid("""
        12
        34
    """)
    result = AStarPlanner(grid).plan((1, 1), (1, 1))
    assert result.status is PlanStatus.SUCCESS
    assert result.route == [(1, 1)]
    assert result.cost == 0


def test_unreachable_destination_enclosed_by_water(make_grid):
    grid = make_grid("""
        11111
        11~11
        1~1~1
        11~11
    """)
    result = AStarPlanner(grid).plan((0, 0), (2, 2))
    assert result.status is PlanStatus.UNREACHABLE
    assert result.route == []
    assert result.cost is None
    assert result.expansions > 0


@pytest.mark.parametrize("start,goal", [
    ((-1, 0), (0, 0)),
    ((0, 0), (3, 0)),
    ((0, 0), (0, 7)),
    ((1, 1), (0, 0)),   # water start
    ((0, 0), (1, 2)),   # unknown destination
])
def test_invalid_endpoint_runs_no_search(make_grid, start, goal):
    grid = make_grid("""
        111
        1~?
        111
    """)
    result = AStarPlanner(grid).plan(start, goal)
    assert result.status is PlanStatus.INVALID_ENDPOINT
    assert result.route == []
    assert result.expansions == 0
    assert result.expanded_order == []


def test_prefers_cheaper_detour(make_grid):
    grid = make_grid("""
        141
        111
    """)
    result = AStarPlanner(grid).plan((0, 0), (0, 2))
    assert result.route == [(0, 0), (1, 0), (1, 1), (1, 2), (0, 2)]
    assert result.cost == 4


def test_goes_around_water(make_grid):
    grid = make_grid("""
        1~1
        1~1
        111
    """)
    result = AStarPlanner(grid).plan((0, 0), (0, 2))
    assert result.ok
    assert result.cost == 6
    _assert_valid_route(grid, result.route, (0, 0), (0, 2))


def test_ties_broken_deterministically(make_grid):
    grid = make_grid("""
        1111
        1111
        1111
        1111
    """)
    planner = AStarPlanner(grid)
    first = planner.plan((0, 0), (3, 3))
    for _ in range(5):
        again = planner.plan((0, 0), (3, 3))
        assert again.route == first.route
        assert again.expanded_order == first.expanded_order
    assert AStarPlanner(grid).plan((0, 0), (3, 3)).route == first.route


def test_route_cost_matches_reported_cost(make_grid):
    grid = make_grid("""
        1234
        2341
        3412
    """)
    result = AStarPlanner(grid).plan((0, 0), (2, 3))
    assert result.cost == route_cost(grid, result.route)


def test_optimal_against_dijkstra(make_random_grid, baseline_cost, rng):
    for _ in range(60):
        h, w = rng.randint(1, 9), rng.randint(1, 9)
        grid = make_random_grid(rng, h, w)
        start = (rng.randrange(h), rng.randrange(w))
        goal = (rng.randrange(h), rng.randrange(w))
        result = AStarPlanner(grid).plan(start, goal)

        if not (grid.is_traversable(start) and grid.is_traversable(goal)):
            assert result.status is PlanStatus.INVALID_ENDPOINT
            continue

        expected = baseline_cost(grid.cost_array(), start, goal)
        if expected is None:
            assert result.status is PlanStatus.UNREACHABLE
            assert result.route == []
        else:
            assert result.status is PlanStatus.SUCCESS
            assert route_cost(grid, result.route) == expected
            _assert_valid_route(grid, result.route, start, goal)


def test_frontier_order_f_then_h_then_coordinate():
    a = SearchNode.at((2, 0), g=3, h=2)
    b = SearchNode.at((0, 1), g=4, h=1)
    c = SearchNode.at((0, 0), g=4, h=1)
    assert a.f == b.f == c.f == 5
    assert sorted([a, b, c]) == [c, b, a]


def test_reconstruct_returns_start_first():
    parent = {(0, 0): None, (0, 1): (0, 0), (1, 1): (0, 1)}
    assert reconstruct(parent, (1, 1)) == [(0, 0), (0, 1), (1, 1)]


def test_planner_does_not_modify_terrain(make_grid):
    grid = make_grid("""
        111
        111
    """)
    before = grid.class_array().copy()
    AStarPlanner(grid).plan((0, 0), (1, 2))
    assert (grid.class_array() == before).all()
