import heapq
import random

import pytest

from terrain_pathfinder.models import TerrainClass
from terrain_pathfinder.terrain import TerrainGrid

T = TerrainClass
LEGEND = {
    "1": T.LEVEL_1,
    "2": T.LEVEL_2,
    "3": T.LEVEL_3,
    "4": T.LEVEL_4,
    "~": T.WATER,
    "?": T.UNKNOWN,
    "*": T.ROBOT_PATH,
}


def grid_from_text(text):
    rows = [line.strip() for line in text.strip().splitlines()]
    return TerrainGrid.from_classes([[LEGEND[ch] for ch in row] for row in rows])


def random_grid(rng, height, width, water=0.25):
    rows = []
    for _ in range(height):
        row = []
        for _ in range(width):
            if rng.random() < water:
                row.append(T.WATER)
            else:
                row.append(rng.choice([T.LEVEL_1, T.LEVEL_2, T.LEVEL_3, T.LEVEL_4]))
        rows.append(row)
    return TerrainGrid.from_classes(rows)


def dijkstra_cost(costs, start, goal):
    """Plain Dijkstra on an (H, W) cost array, 0 = blocked. Independent of the planner."""
    H, W = costs.shape
    dist = {start: 0}
    heap = [(0, start)]
    done = set()
    while heap:
        d, (r, c) = heapq.heappop(heap)
        if (r, c) in done:
            continue
        done.add((r, c))
        if (r, c) == goal:
            return d
        for rr, cc in ((r + 1, c), (r - 1, c), (r, c + 1), (r, c - 1)):
            if 0 <= rr < H and 0 <= cc < W and costs[rr, cc] > 0:
                nd = d + int(costs[rr, cc])
                if nd < dist.get((rr, cc), float("inf")):
                    dist[(rr, cc)] = nd
                    heapq.heappush(heap, (nd, (rr, cc)))
    return None


@pytest.fixture
def make_grid():
    return grid_from_text


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_random_grid():
    return random_grid


@pytest.fixture
def baseline_cost():
    return dijkstra_cost
