"""
Plan a robot route across a terrain map and write the map with the route drawn.

Usage:
    terrain-pathfinder <terrain_in> <terrain_out> [--start ROW COL] [--destination ROW COL]
"""

# region Imports
import argparse
import logging
import sys
import time

from terrain_pathfinder.astar_core import AStarPlanner
from terrain_pathfinder.codec import TerrainLoadError, load_terrain, save_terrain
from terrain_pathfinder.config import DEFAULT_DESTINATION, DEFAULT_START
from terrain_pathfinder.terrain import MalformedTerrainInput
# endregion

log = logging.getLogger("terrain_pathfinder")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class _Parser(argparse.ArgumentParser):
    # usage errors share the load-failure exit status
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser():
    p = _Parser(prog="terrain-pathfinder", description=__doc__.strip().splitlines()[0])
    p.add_argument("terrain_in", help="input terrain raster (PPM)")
    p.add_argument("terrain_out", help="output raster with the route drawn")
    p.add_argument("--start", nargs=2, type=int, metavar=("ROW", "COL"),
                   default=list(DEFAULT_START))
    p.add_argument("--destination", nargs=2, type=int, metavar=("ROW", "COL"),
                   default=list(DEFAULT_DESTINATION))
    p.add_argument("--show", action="store_true", help="show the A* expansion heat map")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        terrain = load_terrain(args.terrain_in)
    except (TerrainLoadError, MalformedTerrainInput) as e:
        log.error("%s", e)
        return EXIT_FAILURE
    log.info("Loaded terrain with size: %d x %d", terrain.width, terrain.height)

    start, destination = tuple(args.start), tuple(args.destination)
    planner = AStarPlanner(terrain)
    t0 = time.perf_counter()
    result = planner.plan(start, destination)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    log.info("Planning finished in %.0f ms (%d expansions)", elapsed_ms, result.expansions)

    if result.ok:
        log.info("Route with %d cells, total cost %d", len(result.route), result.cost)
    else:
        log.warning("No route from %s to %s: %s", start, destination, result.status.value)

    try:
        save_terrain(args.terrain_out, terrain.overlay(result.route))
    except (OSError, ValueError) as e:
        log.error("Could not write %s: %s", args.terrain_out, e)
        return EXIT_FAILURE
    log.info("Wrote %s", args.terrain_out)

    if args.show:
        from terrain_pathfinder.viz import show_search_heatmap  # matplotlib only when asked
        show_search_heatmap(terrain, result, start, destination)

    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
