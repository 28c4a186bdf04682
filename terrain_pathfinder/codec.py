# region Imports
from __future__ import annotations
import io
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image

from terrain_pathfinder.terrain import TerrainGrid, classify
# endregion

PathLike = Union[str, Path]


class TerrainLoadError(OSError):
    """Terrain raster could not be opened or decoded."""


# region Source
def _grid_from_image(img: Image.Image) -> TerrainGrid:
    rgb = img.convert("RGB")
    width, height = rgb.size
    return classify(width, height, rgb.tobytes())


def load_terrain(path: PathLike) -> TerrainGrid:
    """Load a terrain raster (binary PPM or anything Pillow reads) and classify it."""
    try:
        with Image.open(path) as img:
            img.load()
            return _grid_from_image(img)
    except (OSError, Image.DecompressionBombError) as e:
        raise TerrainLoadError(f"Could not load terrain file {path}: {e}") from e


def decode_terrain(data: bytes) -> TerrainGrid:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return _grid_from_image(img)
    except (OSError, Image.DecompressionBombError) as e:
        raise TerrainLoadError(f"Could not decode terrain image: {e}") from e
# endregion


# region Sink
def save_terrain(path: PathLike, grid: TerrainGrid) -> None:
    """Write the grid colors. Known suffixes pick the format, anything else is binary P6 PPM."""
    fmt = Image.registered_extensions().get(Path(path).suffix.lower(), "PPM")
    Image.fromarray(np.ascontiguousarray(grid.to_rgb())).save(path, fmt)


def encode_terrain(grid: TerrainGrid, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(grid.to_rgb())).save(buf, fmt)
    return buf.getvalue()
# endregion
