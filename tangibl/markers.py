"""Decoded marker records and batch calibration."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional

import numpy as np

from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


class MarkerKind(IntEnum):
    """Registry of the TopCode identities printed on the tokens."""

    START = 61

    # Conditional
    BLOCKED = 31
    # Commands
    MOVE_BACKWARDS = 47
    MOVE_FORWARDS = 55
    SHOOT = 59
    TURN_LEFT = 79
    TURN_RIGHT = 87
    # Counted loops
    REPEAT = 91
    # Boolean loops
    WHILE = 155

    # Integer values
    VALUE_1 = 93
    VALUE_2 = 103
    VALUE_3 = 107
    VALUE_4 = 109
    VALUE_5 = 115
    VALUE_6 = 117
    VALUE_7 = 121
    VALUE_8 = 143
    VALUE_INFINITE = 151

    # Conditions
    IS_BLOCKED = 157
    IS_PATH_CLEAR = 167

    # Geometry queries only, never decoded from an image.
    UNDEFINED = -1

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional["MarkerKind"]:
        if code is None:
            return None
        try:
            kind = cls(code)
        except ValueError:
            return None
        if kind is cls.UNDEFINED:
            return None
        return kind

    @property
    def is_command(self) -> bool:
        return self in _COMMAND_KINDS

    @property
    def is_flow(self) -> bool:
        """Part of the regular flow of a program, i.e. has a previous and next token."""

        return self in _FLOW_KINDS

    @property
    def is_value(self) -> bool:
        """Represents a positive integer value."""

        return self in _VALUE_KINDS

    @property
    def is_condition(self) -> bool:
        return self in _CONDITION_KINDS


_COMMAND_KINDS = frozenset(
    {
        MarkerKind.MOVE_BACKWARDS,
        MarkerKind.MOVE_FORWARDS,
        MarkerKind.SHOOT,
        MarkerKind.TURN_LEFT,
        MarkerKind.TURN_RIGHT,
    }
)

_FLOW_KINDS = _COMMAND_KINDS | {MarkerKind.BLOCKED, MarkerKind.REPEAT, MarkerKind.WHILE}

_VALUE_KINDS = frozenset(
    {
        MarkerKind.VALUE_1,
        MarkerKind.VALUE_2,
        MarkerKind.VALUE_3,
        MarkerKind.VALUE_4,
        MarkerKind.VALUE_5,
        MarkerKind.VALUE_6,
        MarkerKind.VALUE_7,
        MarkerKind.VALUE_8,
        MarkerKind.VALUE_INFINITE,
    }
)

_CONDITION_KINDS = frozenset({MarkerKind.IS_BLOCKED, MarkerKind.IS_PATH_CLEAR})


@dataclass(frozen=True)
class Detection:
    """Raw record handed over by the TopCode decoder.

    ``code`` is ``None`` when the decoder found a ring it could not read.
    Coordinates follow whatever convention the decoder uses; see
    :func:`calibrate`.
    """

    code: Optional[int]
    diameter: float
    orientation: float
    x: float
    y: float


@dataclass(frozen=True)
class Marker:
    """A decoded token in the mathematical frame (CCW radians, y-up)."""

    kind: MarkerKind
    diameter: float
    orientation: float
    x: float
    y: float

    @classmethod
    def placeholder(cls, x: float, y: float, orientation: float, diameter: float) -> "Marker":
        return cls(MarkerKind.UNDEFINED, diameter, orientation, x, y)

    @property
    def is_flow(self) -> bool:
        return self.kind.is_flow

    @property
    def is_value(self) -> bool:
        return self.kind.is_value

    @property
    def is_condition(self) -> bool:
        return self.kind.is_condition


@debug_log_call(logger, name="calibrate")
def calibrate(detections: Iterable[Detection], *, image_coordinates: bool = True) -> List[Marker]:
    """Return a new, calibrated marker batch in input order.

    Undecodable and unregistered entries are dropped. With
    ``image_coordinates`` the orientation and y axis are flipped into the
    mathematical frame. Every marker receives the mean diameter of the batch,
    which evens out per-token measuring noise; outliers are not rejected.
    """

    decoded = []
    for detection in detections:
        kind = MarkerKind.from_code(detection.code)
        if kind is None:
            logger.debug("Dropping unrecognised detection code %r", detection.code)
            continue
        decoded.append((kind, detection))

    if not decoded:
        return []

    mean_diameter = float(np.mean([float(detection.diameter) for _, detection in decoded]))

    markers: List[Marker] = []
    for kind, detection in decoded:
        orientation = float(detection.orientation)
        y = float(detection.y)
        if image_coordinates:
            orientation = -orientation
            y = -y
        markers.append(
            Marker(
                kind=kind,
                diameter=mean_diameter,
                orientation=orientation % TWO_PI,
                x=float(detection.x),
                y=y,
            )
        )

    logger.debug("Calibrated %d marker(s), mean diameter %.3f", len(markers), mean_diameter)
    return markers


__all__ = [
    "Detection",
    "Marker",
    "MarkerKind",
    "TWO_PI",
    "calibrate",
]
