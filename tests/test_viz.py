import pytest

from tangibl.geometry import Slot
from tangibl.markers import Marker, MarkerKind
from tangibl.viz import plot_markers, slot_targets


def place(kind, x=0.0, y=0.0):
    return Marker(kind, 48.0, 0.0, x, y)


@pytest.mark.parametrize(
    'kind, slots',
    [
        (MarkerKind.START, [Slot.SUCCESSOR]),
        (MarkerKind.SHOOT, [Slot.SUCCESSOR]),
        (MarkerKind.BLOCKED, [Slot.TRUE_BRANCH, Slot.FALSE_BRANCH]),
        (MarkerKind.REPEAT, [Slot.SUCCESSOR, Slot.BODY, Slot.PARAMETER]),
        (MarkerKind.WHILE, [Slot.SUCCESSOR, Slot.BODY, Slot.PARAMETER]),
        (MarkerKind.VALUE_1, []),
        (MarkerKind.IS_BLOCKED, []),
    ],
)
def test_slot_targets_follow_marker_kind(kind, slots):
    assert [slot for slot, _ in slot_targets(place(kind))] == slots


def test_branch_targets_are_past_the_branch_point():
    targets = dict(slot_targets(place(MarkerKind.BLOCKED)))

    assert targets[Slot.TRUE_BRANCH].x == pytest.approx(112.35533906)
    assert targets[Slot.TRUE_BRANCH].y == pytest.approx(97.35533906)
    assert targets[Slot.FALSE_BRANCH].y == pytest.approx(-73.35533906)


def test_plot_markers_writes_image(tmp_path):
    pytest.importorskip('matplotlib')
    out = tmp_path / 'markers.png'
    markers = [place(MarkerKind.START), place(MarkerKind.REPEAT, 100.0), place(MarkerKind.VALUE_2, 50.0, 100.0)]

    plot_markers(markers, out=out, title='batch')

    assert out.exists()
    assert out.stat().st_size > 0
