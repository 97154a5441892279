import math

from tangibl.config import (
    MatchStrategy,
    ReconstructionOptions,
    get_reconstruction_options,
    set_reconstruction_options,
)
from tangibl.geometry import TOPCODE_RADIUS
from tangibl.markers import Marker, MarkerKind
from tangibl.reconstruct import parse_markers


def test_defaults():
    options = ReconstructionOptions()

    assert options.distance_tolerance == TOPCODE_RADIUS
    assert options.angle_tolerance == math.pi / 5
    assert options.strategy is MatchStrategy.FIRST
    assert options.image_coordinates is True


def test_get_returns_a_copy():
    options = get_reconstruction_options()
    options.distance_tolerance = 1.0

    assert get_reconstruction_options().distance_tolerance == TOPCODE_RADIUS


def test_set_changes_process_defaults():
    original = get_reconstruction_options()
    markers = [
        Marker(MarkerKind.START, 48.0, 0.0, 0.0, 0.0),
        Marker(MarkerKind.SHOOT, 48.0, 0.0, 110.0, 0.0),
    ]
    try:
        set_reconstruction_options(ReconstructionOptions(distance_tolerance=5.0))
        assert parse_markers(markers).next is None
    finally:
        set_reconstruction_options(original)

    assert parse_markers(markers).next is not None
