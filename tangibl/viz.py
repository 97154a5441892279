"""Debug plot of a marker batch and the slots the engine will search.

Requires ``matplotlib`` (install with ``tangibl[viz]``).
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .config import ReconstructionOptions, get_reconstruction_options
from .geometry import Pose, Slot, predict
from .markers import Marker, MarkerKind

_SLOT_COLORS = {
    Slot.SUCCESSOR: "#1f77b4",
    Slot.BODY: "#2ca02c",
    Slot.PARAMETER: "#9467bd",
    Slot.TRUE_BRANCH: "#ff7f0e",
    Slot.FALSE_BRANCH: "#d62728",
}


def _load_matplotlib(out: Optional[Union[str, Path]]):
    import matplotlib

    if out is not None:
        matplotlib.use("Agg")

    import matplotlib.pyplot as plt

    return plt


def slot_targets(marker: Marker) -> List[Tuple[Slot, Pose]]:
    """Poses the engine queries from ``marker``, keyed by the slot they fill."""

    kind = marker.kind
    if kind is MarkerKind.START or kind.is_command:
        return [(Slot.SUCCESSOR, predict(marker, Slot.SUCCESSOR))]
    if kind is MarkerKind.BLOCKED:
        targets = []
        for slot in (Slot.TRUE_BRANCH, Slot.FALSE_BRANCH):
            pose = predict(marker, slot)
            branch_point = Marker.placeholder(pose.x, pose.y, pose.orientation, marker.diameter)
            targets.append((slot, predict(branch_point, Slot.SUCCESSOR)))
        return targets
    if kind in (MarkerKind.REPEAT, MarkerKind.WHILE):
        return [(slot, predict(marker, slot)) for slot in (Slot.SUCCESSOR, Slot.BODY, Slot.PARAMETER)]
    return []


def _bounds(points: Sequence[Tuple[float, float]]) -> Tuple[float, float, float, float]:
    xs = [point[0] for point in points]
    ys = [point[1] for point in points]
    min_x, max_x = min(xs, default=0.0), max(xs, default=1.0)
    min_y, max_y = min(ys, default=0.0), max(ys, default=1.0)
    span = max(max_x - min_x, max_y - min_y, 1.0)
    return min_x - 0.1 * span, max_x + 0.1 * span, min_y - 0.1 * span, max_y + 0.1 * span


def plot_markers(
    markers: Iterable[Marker],
    *,
    out: Optional[Union[str, Path]] = None,
    show_slots: bool = True,
    options: Optional[ReconstructionOptions] = None,
    title: Optional[str] = None,
) -> None:
    """Render markers with their headings and, optionally, their slot targets.

    Parameters
    ----------
    markers:
        Calibrated markers, in the mathematical frame.
    out:
        Optional output file path. If omitted, opens an interactive window.
    show_slots:
        Draw each queried slot target with its distance tolerance.
    options:
        Tolerances used for the slot circles.
    """

    plt = _load_matplotlib(out)
    options = options or get_reconstruction_options()
    markers = list(markers)

    fig, ax = plt.subplots(figsize=(6, 6))
    points: List[Tuple[float, float]] = []

    for marker in markers:
        radius = marker.diameter / 2.0
        ax.add_patch(plt.Circle((marker.x, marker.y), radius, fill=False, color="black", linewidth=1.0))
        ax.annotate(
            "",
            xy=(
                marker.x + radius * math.cos(marker.orientation),
                marker.y + radius * math.sin(marker.orientation),
            ),
            xytext=(marker.x, marker.y),
            arrowprops={"arrowstyle": "->", "color": "black"},
        )
        ax.text(marker.x, marker.y - radius, marker.kind.name, fontsize=7, ha="center", va="top")
        points.append((marker.x, marker.y))

        if not show_slots:
            continue
        for slot, pose in slot_targets(marker):
            color = _SLOT_COLORS[slot]
            ax.plot([pose.x], [pose.y], "x", color=color)
            ax.add_patch(
                plt.Circle(
                    (pose.x, pose.y),
                    options.distance_tolerance,
                    fill=False,
                    color=color,
                    linestyle="--",
                    linewidth=0.8,
                )
            )
            points.append((pose.x, pose.y))

    min_x, max_x, min_y, max_y = _bounds(points)
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlim(min_x, max_x)
    ax.set_ylim(min_y, max_y)
    if title:
        ax.set_title(title)
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.5)
    fig.tight_layout()

    if out is not None:
        fig.savefig(str(out))
        plt.close(fig)
    else:
        plt.show()


__all__ = ["plot_markers", "slot_targets"]
