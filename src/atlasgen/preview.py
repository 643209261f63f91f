from __future__ import annotations

import logging
from typing import Sequence

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle as RectPatch

from atlas_core.metrics import occupancy
from atlas_core.models import Rectangle, Surface

logger = logging.getLogger(__name__)


def _label(rect_id) -> str:
    if isinstance(rect_id, int) and 32 < rect_id < 127:
        return chr(rect_id)
    return str(rect_id)


def draw_layout(
    rectangles: Sequence[Rectangle], surface: Surface, show_labels: bool = True
) -> Figure:
    """Draw the packed rectangles inside the surface outline."""
    fig = Figure(figsize=(8, 8 * surface.height / surface.width))
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(111)
    ax.add_patch(
        RectPatch(
            (0, 0),
            surface.width,
            surface.height,
            fill=False,
            edgecolor="black",
            linewidth=2,
        )
    )
    for rect in rectangles:
        if not rect.placed:
            continue
        ax.add_patch(
            RectPatch(
                (rect.x, rect.y),
                rect.width,
                rect.height,
                fill=True,
                facecolor="blue",
                alpha=0.5,
                edgecolor="black",
            )
        )
        if show_labels:
            ax.text(
                rect.x + rect.width / 2,
                rect.y + rect.height / 2,
                _label(rect.id),
                ha="center",
                va="center",
                fontsize=6,
                color="black",
                zorder=10,
            )
    ax.set_title(
        f"{len(rectangles)} glyphs, occupancy {occupancy(rectangles, surface):.1%}"
    )
    ax.set_xlim(0, surface.width)
    ax.set_ylim(0, surface.height)
    ax.set_aspect("equal")
    return fig


def save_preview(rectangles: Sequence[Rectangle], surface: Surface, path: str) -> str:
    fig = draw_layout(rectangles, surface)
    fig.savefig(path, dpi=100)
    logger.info("wrote layout preview %s", path)
    return path
