# terrain.py
# ----------------
# Terrain classification and cost model for robot route planning.
#
# Exposes:
#   - MalformedTerrainInput   (raised when raw data does not match the size)
#   - classify(width, height, triplets) -> TerrainGrid
#   - TerrainGrid             (cost / traversability / neighbor queries, overlay)
#
# Cells are addressed as Coordinate(row, col): row is bounded by height,
# col by width, flat index = row * width + col (row-major, like the raster).

# region Imports
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Union
import numpy as np

from terrain_pathfinder.config import (
    WATER_RGB,
    LEVEL_1_RGB,
    LEVEL_2_RGB,
    LEVEL_3_RGB,
    LEVEL_4_RGB,
    ROBOT_PATH_RGB,
    UNKNOWN_RGB,
)
from terrain_pathfinder.models import Coordinate, TerrainClass
# endregion

# region Palette and Cost Tables
PALETTE = {
    TerrainClass.WATER: WATER_RGB,
    TerrainClass.LEVEL_1: LEVEL_1_RGB,
    TerrainClass.LEVEL_2: LEVEL_2_RGB,
    TerrainClass.LEVEL_3: LEVEL_3_RGB,
    TerrainClass.LEVEL_4: LEVEL_4_RGB,
    TerrainClass.ROBOT_PATH: ROBOT_PATH_RGB,
}

# 0 = not traversable
TERRAIN_COST = {
    TerrainClass.WATER: 0,
    TerrainClass.LEVEL_1: 1,
    TerrainClass.LEVEL_2: 2,
    TerrainClass.LEVEL_3: 3,
    TerrainClass.LEVEL_4: 4,
    TerrainClass.ROBOT_PATH: 0,
    TerrainClass.UNKNOWN: 0,
}

_COST_LUT = np.array([TERRAIN_COST[t] for t in TerrainClass], dtype=np.int64)
_RGB_LUT = np.array(
    [PALETTE.get(t, UNKNOWN_RGB) for t in TerrainClass], dtype=np.uint8
)

# north, south, west, east
STEPS_4 = ((-1, 0), (1, 0), (0, -1), (0, 1))
# endregion


class MalformedTerrainInput(ValueError):
    """Raw pixel data does not describe a width x height RGB grid."""


# region Classification
def _as_triplets(triplets, width: int, height: int) -> np.ndarray:
    if isinstance(triplets, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(triplets, dtype=np.uint8)
    else:
        arr = np.asarray(triplets, dtype=np.uint8)
        if arr.ndim == 3 and arr.shape != (height, width, 3):
            raise MalformedTerrainInput(
                f"image array of shape {arr.shape} does not match {width} x {height}"
            )
        flat = arr.reshape(-1)
    if flat.size % 3 != 0:
        raise MalformedTerrainInput(
            f"pixel data length {flat.size} is not a multiple of 3"
        )
    return flat.reshape(-1, 3)


def classify(
    width: int,
    height: int,
    triplets: Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]],
) -> "TerrainGrid":
    """
    Match every RGB triplet against the fixed palette.
    Colors outside the palette classify as UNKNOWN (antialiasing, annotations).
    """
    if width < 0 or height < 0:
        raise MalformedTerrainInput(f"invalid terrain size {width} x {height}")
    rgb = _as_triplets(triplets, width, height)
    if rgb.shape[0] != width * height:
        raise MalformedTerrainInput(
            f"expected {width * height} pixels for {width} x {height}, "
            f"got {rgb.shape[0]}"
        )

    cells = np.full(rgb.shape[0], TerrainClass.UNKNOWN, dtype=np.uint8)
    for terrain_class, color in PALETTE.items():
        match = np.all(rgb == np.asarray(color, dtype=np.uint8), axis=1)
        cells[match] = terrain_class
    return TerrainGrid(width, height, cells)
# endregion


# region Terrain Grid
class TerrainGrid:
    """Immutable classified grid. Use overlay() to get a copy with a route drawn."""

    def __init__(self, width: int, height: int, cells: np.ndarray):
        cells = np.array(cells, dtype=np.uint8).reshape(-1)
        if cells.size != width * height:
            raise MalformedTerrainInput(
                f"expected {width * height} cells, got {cells.size}"
            )
        cells.flags.writeable = False
        self.width = int(width)
        self.height = int(height)
        self._cells = cells
        # plain list: per-cell lookups in the search loop are much faster than numpy scalars
        self._costs: List[int] = _COST_LUT[cells].tolist()

    @classmethod
    def from_classes(cls, rows: Sequence[Sequence[TerrainClass]]) -> "TerrainGrid":
        """Build from a row-major 2-D layout of TerrainClass values."""
        arr = np.asarray(rows, dtype=np.uint8)
        if arr.ndim != 2:
            raise MalformedTerrainInput("class layout must be two-dimensional")
        height, width = arr.shape
        return cls(width, height, arr)

    def __repr__(self) -> str:
        return f"TerrainGrid(width={self.width}, height={self.height})"

    # region Geometry
    @property
    def shape(self):
        return (self.height, self.width)

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    def in_bounds(self, coord) -> bool:
        r, c = coord
        return 0 <= r < self.height and 0 <= c < self.width

    def index(self, coord) -> int:
        r, c = coord
        return r * self.width + c
    # endregion

    # region Cost Queries
    def class_at(self, coord) -> TerrainClass:
        if not self.in_bounds(coord):
            return TerrainClass.UNKNOWN
        return TerrainClass(int(self._cells[self.index(coord)]))

    def cost(self, coord) -> Optional[int]:
        """Step cost into coord, or None if it cannot be entered."""
        if not self.in_bounds(coord):
            return None
        c = self._costs[self.index(coord)]
        return c if c > 0 else None

    def is_traversable(self, coord) -> bool:
        return self.cost(coord) is not None

    def neighbors(self, coord) -> List[Coordinate]:
        r, c = coord
        out = []
        for dr, dc in STEPS_4:
            nb = Coordinate(r + dr, c + dc)
            if self.is_traversable(nb):
                out.append(nb)
        return out
    # endregion

    # region Rendering
    def overlay(self, route: Iterable) -> "TerrainGrid":
        """New grid with every route cell marked ROBOT_PATH; self is left untouched."""
        cells = self._cells.copy()
        for coord in route:
            if not self.in_bounds(coord):
                raise IndexError(f"route cell {tuple(coord)} outside {self.width} x {self.height}")
            cells[self.index(coord)] = TerrainClass.ROBOT_PATH
        return TerrainGrid(self.width, self.height, cells)

    def class_array(self) -> np.ndarray:
        return self._cells.reshape(self.height, self.width)

    def cost_array(self) -> np.ndarray:
        """(H, W) int array of step costs, 0 where not traversable."""
        return _COST_LUT[self._cells].reshape(self.height, self.width)

    def to_rgb(self) -> np.ndarray:
        """(H, W, 3) uint8 array ready for the raster sink."""
        return _RGB_LUT[self._cells].reshape(self.height, self.width, 3)
    # endregion
# endregion
