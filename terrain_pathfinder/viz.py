# region Imports
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from matplotlib.lines import Line2D

from terrain_pathfinder.models import PlanResult
from terrain_pathfinder.terrain import TerrainGrid
# endregion

# region Visualization Function
def show_search_heatmap(
    grid: TerrainGrid,
    result: PlanResult,
    start,
    goal,
    title="A* exploration",
    show=True,
):
    """
    Render terrain colors with the A* expansion order and the route on top.
    Returns the matplotlib figure; pass show=False to skip the blocking window.
    """
    H, W = grid.shape

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(grid.to_rgb(), origin="upper", interpolation="nearest")

    # region Expansion Heat Overlay
    if result.expanded_order:
        order_map = np.full((H, W), np.nan, dtype=np.float32)
        for i, (r, c) in enumerate(result.expanded_order):
            order_map[r, c] = i + 1
        order_map /= max(1.0, float(np.nanmax(order_map)))
        heat = ax.imshow(order_map, origin="upper", cmap="viridis", alpha=0.5,
                         interpolation="nearest")
        cbar = fig.colorbar(heat, ax=ax, fraction=0.046, pad=0.04)
        cbar.set_label("A* expansion (early → late)")
    # endregion

    # region Path Overlay
    if result.route:
        ys, xs = zip(*result.route)
        ax.plot(xs, ys, color="red", linewidth=2.0, label="A* path")
    ax.scatter(start[1], start[0], s=100, edgecolors="black", facecolors="white", zorder=3)
    ax.scatter(goal[1], goal[0], s=100, edgecolors="black", facecolors="yellow", zorder=3)
    # endregion

    # region Legend / Layout
    legend_elements = [
        Line2D([0], [0], color="red", lw=2, label="A* path"),
        Line2D([0], [0], marker="o", color="w", label="Start",
               markerfacecolor="white", markeredgecolor="black", markersize=9),
        Line2D([0], [0], marker="o", color="w", label="Goal",
               markerfacecolor="yellow", markeredgecolor="black", markersize=9),
        Patch(facecolor="black", label="Unknown / Impassable"),
        Patch(facecolor="purple", label="Early expansion (A*)"),
        Patch(facecolor="yellow", label="Late expansion (A*)"),
    ]
    ax.legend(handles=legend_elements, loc="lower right", fontsize=8, framealpha=0.85)
    status = result.status.value.replace("_", " ")
    ax.set_title(f"{title} ({status}, {result.expansions} expansions)")
    ax.set_axis_off()
    plt.tight_layout()
    if show:
        plt.show()
    return fig
    # endregion
# endregion
