"""Configuration for the reconstruction engine."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from enum import Enum

from .geometry import TOPCODE_RADIUS


class MatchStrategy(Enum):
    # Documented contract: the first candidate in batch order within tolerance.
    FIRST = "first"
    # Alternative mode: the closest candidate within tolerance.
    NEAREST = "nearest"


@dataclass
class ReconstructionOptions:
    """Tolerances and input conventions used while matching markers."""

    distance_tolerance: float = TOPCODE_RADIUS
    angle_tolerance: float = math.pi / 5.0
    strategy: MatchStrategy = MatchStrategy.FIRST
    image_coordinates: bool = True


_RECONSTRUCTION_OPTIONS = ReconstructionOptions()


def get_reconstruction_options() -> ReconstructionOptions:
    return copy.deepcopy(_RECONSTRUCTION_OPTIONS)


def set_reconstruction_options(options: ReconstructionOptions) -> None:
    global _RECONSTRUCTION_OPTIONS
    _RECONSTRUCTION_OPTIONS = copy.deepcopy(options)
