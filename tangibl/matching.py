from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .config import MatchStrategy, ReconstructionOptions, get_reconstruction_options
from .geometry import Pose
from .markers import TWO_PI, Marker

logger = logging.getLogger(__name__)


def angle_delta(a: float, b: float) -> float:
    """Unsigned angular difference of ``a`` and ``b`` in ``[0, pi]``."""

    delta = abs(a - b) % TWO_PI
    return min(delta, TWO_PI - delta)


def displacement_sq(target: Pose, candidate: Marker) -> float:
    return (candidate.x - target.x) ** 2 + (candidate.y - target.y) ** 2


def accepts(target: Pose, candidate: Marker, options: ReconstructionOptions) -> bool:
    if displacement_sq(target, candidate) > options.distance_tolerance ** 2:
        return False
    return angle_delta(candidate.orientation, target.orientation) <= options.angle_tolerance


def find_match(
    target: Pose,
    candidates: Sequence[Marker],
    *,
    source: Marker,
    parent: Optional[Marker] = None,
    options: Optional[ReconstructionOptions] = None,
) -> Optional[Marker]:
    """Return the candidate sitting at ``target``, or ``None``.

    ``source`` is the marker the query was made from and ``parent`` the marker
    its chain hangs off; neither can be matched. Candidates are compared by
    identity so equal-valued duplicates in a batch stay distinct.
    """

    options = options or get_reconstruction_options()
    accepted = [
        candidate
        for candidate in candidates
        if candidate is not source
        and candidate is not parent
        and accepts(target, candidate, options)
    ]
    if not accepted:
        return None

    if options.strategy is MatchStrategy.NEAREST and len(accepted) > 1:
        xy = np.array([(candidate.x, candidate.y) for candidate in accepted], dtype=float)
        distances = np.hypot(xy[:, 0] - target.x, xy[:, 1] - target.y)
        # argmin keeps the earliest candidate on ties
        match = accepted[int(np.argmin(distances))]
    else:
        match = accepted[0]

    if len(accepted) > 1:
        logger.debug(
            "%d candidates within tolerance of (%.1f, %.1f); picked %s by %s",
            len(accepted),
            target.x,
            target.y,
            match.kind.name,
            options.strategy.value,
        )
    return match


__all__ = ["accepts", "angle_delta", "displacement_sq", "find_match"]
