"""Where related tokens are expected to sit relative to a marker.

All measurements come from the printed token artwork, drawn on a square of
``TOKEN_SIZE`` units with the flow running left to right. The TopCode sits at
``(TOPCODE_CENTER_X, TOPCODE_CENTER_Y)`` measured from the bottom-left corner.
Offsets are expressed in a local frame centred on the TopCode with +x along
the marker orientation and +y to its left, then scaled by the measured
diameter so prediction does not depend on the camera distance.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Dict, NamedTuple

from .markers import TWO_PI, Marker

# An arbitrarily chosen value such that all the following values are in ratio.
# The original tokens were designed in pixels with these measurements.
TOKEN_SIZE = 100.0
TOPCODE_RADIUS = 24.0
TOPCODE_DIAMETER = TOPCODE_RADIUS * 2.0
TOPCODE_CENTER_X = 50.0
# Actually at 62 from the top; counted from the bottom edge.
TOPCODE_CENTER_Y = 38.0
# Distance along the flow axis where the 'true' and 'false' paths of a
# conditional are closest while keeping the same angle.
CONDITIONAL_INTERSECTION = 65.0
BRANCH_ANGLE = math.pi / 4.0


class Slot(Enum):
    SUCCESSOR = "successor"
    BODY = "body"
    PARAMETER = "parameter"
    TRUE_BRANCH = "true_branch"
    FALSE_BRANCH = "false_branch"


class Pose(NamedTuple):
    x: float
    y: float
    orientation: float


class Template(NamedTuple):
    """Polar offset in the local frame of a marker of calibration size."""

    distance: float
    bearing: float
    turn: float

    @classmethod
    def from_offset(cls, dx: float, dy: float, turn: float = 0.0) -> "Template":
        return cls(math.hypot(dx, dy), math.atan2(dy, dx), turn)


def normalize_angle(angle: float) -> float:
    return angle % TWO_PI


def _branch_template(edge_offset: float, turn: float) -> Template:
    # The branch leaves the intersection at 45 degrees, so it has run as far
    # as it has risen when it crosses the token edge.
    exit_x = CONDITIONAL_INTERSECTION + abs(edge_offset) - TOPCODE_CENTER_X
    exit_y = edge_offset
    # Seat a virtual token on the branch with its trailing edge on the exit.
    lead = TOKEN_SIZE - TOPCODE_CENTER_X
    dx = exit_x - lead * math.cos(turn)
    dy = exit_y - lead * math.sin(turn)
    return Template.from_offset(dx, dy, turn)


_BODY_INDENT = TOKEN_SIZE - TOPCODE_CENTER_X

TEMPLATES: Dict[Slot, Template] = {
    Slot.SUCCESSOR: Template.from_offset(TOKEN_SIZE, 0.0),
    Slot.BODY: Template.from_offset(_BODY_INDENT, -TOKEN_SIZE),
    Slot.PARAMETER: Template.from_offset(-_BODY_INDENT, TOKEN_SIZE),
    Slot.TRUE_BRANCH: _branch_template(TOKEN_SIZE - TOPCODE_CENTER_Y, BRANCH_ANGLE),
    Slot.FALSE_BRANCH: _branch_template(-TOPCODE_CENTER_Y, -BRANCH_ANGLE),
}


def scale_ratio(marker: Marker) -> float:
    return marker.diameter / TOPCODE_DIAMETER


def predict(marker: Marker, slot: Slot) -> Pose:
    """Return the expected pose of the marker occupying ``slot`` of ``marker``."""

    template = TEMPLATES[slot]
    distance = scale_ratio(marker) * template.distance
    heading = marker.orientation + template.bearing
    return Pose(
        x=marker.x + distance * math.cos(heading),
        y=marker.y + distance * math.sin(heading),
        orientation=normalize_angle(marker.orientation + template.turn),
    )


__all__ = [
    "BRANCH_ANGLE",
    "CONDITIONAL_INTERSECTION",
    "Pose",
    "Slot",
    "TEMPLATES",
    "TOKEN_SIZE",
    "TOPCODE_CENTER_X",
    "TOPCODE_CENTER_Y",
    "TOPCODE_DIAMETER",
    "TOPCODE_RADIUS",
    "Template",
    "normalize_angle",
    "predict",
    "scale_ratio",
]
