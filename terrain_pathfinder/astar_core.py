# region Imports and Typing
from typing import Dict, List, Optional, Set, Tuple
import heapq
import logging

from terrain_pathfinder.models import Coordinate, PlanResult, PlanStatus, SearchNode
from terrain_pathfinder.terrain import TerrainGrid
# endregion

log = logging.getLogger(__name__)


# region Heuristic
def manhattan(a, b) -> int:
    # admissible: every step costs at least 1
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
# endregion


# region Path Reconstruction
def reconstruct(parent: Dict[Coordinate, Coordinate], goal: Coordinate) -> List[Coordinate]:
    path = []
    v = goal
    while v is not None:
        path.append(v)
        v = parent.get(v)
    path.reverse()
    return path
# endregion


def route_cost(terrain: TerrainGrid, route) -> Optional[int]:
    """Sum of step costs over every cell after the first; None for an empty route."""
    if not route:
        return None
    total = 0
    for coord in route[1:]:
        c = terrain.cost(coord)
        if c is None:
            return None
        total += c
    return total


# region A* Planner
class AStarPlanner:
    """
    A* over a TerrainGrid with 4-neighbour moves.

    The planner only borrows the terrain and never writes to it. Each plan()
    call owns its own frontier and bookkeeping, nothing carries over between calls.
    """

    def __init__(self, terrain: TerrainGrid):
        self.terrain = terrain
        log.debug("A* planner initialized on %d x %d terrain", terrain.width, terrain.height)

    def plan(self, start, destination) -> PlanResult:
        """
        Returns a PlanResult whose route runs start -> destination inclusive.
        Failures come back as an empty route with INVALID_ENDPOINT or UNREACHABLE.
        """
        terrain = self.terrain
        start = Coordinate(*start)
        destination = Coordinate(*destination)

        if not (terrain.is_traversable(start) and terrain.is_traversable(destination)):
            log.info("Invalid start %s or destination %s", tuple(start), tuple(destination))
            return PlanResult([], PlanStatus.INVALID_ENDPOINT)

        if start == destination:
            return PlanResult([start], PlanStatus.SUCCESS, cost=0)

        frontier: List[SearchNode] = []
        heapq.heappush(frontier, SearchNode.at(start, 0, manhattan(start, destination)))
        best_g: Dict[Coordinate, int] = {start: 0}
        parent: Dict[Coordinate, Optional[Coordinate]] = {start: None}
        settled: Set[Coordinate] = set()
        expanded_order: List[Coordinate] = []

        while frontier:
            current = heapq.heappop(frontier)
            u = current.coordinate

            # stale duplicate, a cheaper entry already settled u
            if u in settled:
                continue
            settled.add(u)
            expanded_order.append(u)

            if u == destination:
                return PlanResult(
                    reconstruct(parent, u),
                    PlanStatus.SUCCESS,
                    cost=best_g[u],
                    expansions=len(expanded_order),
                    expanded_order=expanded_order,
                )

            gu = best_g[u]
            # region Neighbor Loop
            for v in terrain.neighbors(u):
                if v in settled:
                    continue
                alt = gu + terrain.cost(v)
                old = best_g.get(v)
                if old is None or alt < old:
                    best_g[v] = alt
                    parent[v] = u
                    heapq.heappush(frontier, SearchNode.at(v, alt, manhattan(v, destination)))
            # endregion

        log.info("No route from %s to %s after %d expansions",
                 tuple(start), tuple(destination), len(expanded_order))
        return PlanResult(
            [],
            PlanStatus.UNREACHABLE,
            expansions=len(expanded_order),
            expanded_order=expanded_order,
        )
# endregion


# region Entry Point
def plan_path_to_target(start, destination, terrain: TerrainGrid) -> Tuple[List[Coordinate], PlanStatus]:
    result = AStarPlanner(terrain).plan(start, destination)
    return result.route, result.status
# endregion
