"""Recursive-descent reconstruction of a program from a marker batch.

Starting from the start token, every flow marker asks the predictor where
its related tokens should be and the matcher which marker actually sits
there. Loops and conditionals recurse into independent sub-chains; each
sub-chain remembers the marker it hangs off so it can never select it again.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .ast import (
    BooleanLoop,
    BooleanLoopKind,
    Command,
    CommandKind,
    Condition,
    Conditional,
    ConditionalKind,
    CountedLoop,
    CountedLoopKind,
    Flow,
    Start,
    Value,
)
from .config import ReconstructionOptions, get_reconstruction_options
from .geometry import Slot, predict
from .logging_utils import debug_log_call
from .markers import Detection, Marker, MarkerKind, calibrate
from .matching import find_match

logger = logging.getLogger(__name__)


class MalformedModelError(RuntimeError):
    """A flow marker has no parser; the registry and the engine disagree."""

    def __init__(self, marker: Marker, message: str):
        super().__init__(message)
        self.marker = marker


_COMMANDS: Dict[MarkerKind, CommandKind] = {
    MarkerKind.MOVE_BACKWARDS: CommandKind.MOVE_BACKWARDS,
    MarkerKind.MOVE_FORWARDS: CommandKind.MOVE_FORWARDS,
    MarkerKind.SHOOT: CommandKind.SHOOT,
    MarkerKind.TURN_LEFT: CommandKind.TURN_LEFT,
    MarkerKind.TURN_RIGHT: CommandKind.TURN_RIGHT,
}

_CONDITIONALS: Dict[MarkerKind, ConditionalKind] = {
    MarkerKind.BLOCKED: ConditionalKind.BLOCKED,
}

_BOOLEAN_LOOPS: Dict[MarkerKind, BooleanLoopKind] = {
    MarkerKind.WHILE: BooleanLoopKind.WHILE,
}

_COUNTED_LOOPS: Dict[MarkerKind, CountedLoopKind] = {
    MarkerKind.REPEAT: CountedLoopKind.REPEAT,
}

_VALUES: Dict[MarkerKind, Value] = {
    MarkerKind.VALUE_1: Value.ONE,
    MarkerKind.VALUE_2: Value.TWO,
    MarkerKind.VALUE_3: Value.THREE,
    MarkerKind.VALUE_4: Value.FOUR,
    MarkerKind.VALUE_5: Value.FIVE,
    MarkerKind.VALUE_6: Value.SIX,
    MarkerKind.VALUE_7: Value.SEVEN,
    MarkerKind.VALUE_8: Value.EIGHT,
    MarkerKind.VALUE_INFINITE: Value.INFINITY,
}

_CONDITIONS: Dict[MarkerKind, Condition] = {
    MarkerKind.IS_BLOCKED: Condition.IS_BLOCKED,
    MarkerKind.IS_PATH_CLEAR: Condition.IS_PATH_CLEAR,
}

# Every flow kind must appear here.
FLOW_PARSERS: Dict[MarkerKind, str] = {
    **{kind: "_parse_command" for kind in _COMMANDS},
    **{kind: "_parse_conditional" for kind in _CONDITIONALS},
    **{kind: "_parse_boolean_loop" for kind in _BOOLEAN_LOOPS},
    **{kind: "_parse_counted_loop" for kind in _COUNTED_LOOPS},
}


# (marker id, parent id) pairs on the current recursion path
VisitPath = FrozenSet[Tuple[int, Optional[int]]]


def _visit(marker: Marker, parent: Optional[Marker]) -> Tuple[int, Optional[int]]:
    return id(marker), (id(parent) if parent is not None else None)


def decode_value(marker: Optional[Marker]) -> Optional[Value]:
    if marker is None:
        return None
    return _VALUES.get(marker.kind)


def decode_condition(marker: Optional[Marker]) -> Optional[Condition]:
    if marker is None:
        return None
    return _CONDITIONS.get(marker.kind)


class Reconstructor:
    """Reconstructs the program encoded by one calibrated marker batch.

    Batch order matters: the start token is the first one found and each
    slot is filled by the first marker within tolerance (unless
    ``options.strategy`` asks for the nearest one).
    """

    def __init__(self, markers: Iterable[Marker], options: Optional[ReconstructionOptions] = None):
        self.markers: List[Marker] = list(markers)
        self.options = options or get_reconstruction_options()
        self._flow = [marker for marker in self.markers if marker.is_flow]
        self._values = [marker for marker in self.markers if marker.is_value]
        self._conditions = [marker for marker in self.markers if marker.is_condition]

    def parse(self) -> Optional[Start]:
        start = next((marker for marker in self.markers if marker.kind is MarkerKind.START), None)
        if start is None:
            logger.info("No start marker among %d marker(s)", len(self.markers))
            return None

        first = self._find_flow(start, Slot.SUCCESSOR, None, frozenset())
        program = Start(next=self._parse_flow(first, None, frozenset()))
        logger.info("Reconstructed program from %d marker(s)", len(self.markers))
        return program

    def _parse_flow(
        self, marker: Optional[Marker], parent: Optional[Marker], path: VisitPath
    ) -> Optional[Flow]:
        if marker is None:
            return None
        handler = FLOW_PARSERS.get(marker.kind)
        if handler is None:
            raise MalformedModelError(
                marker,
                f"no parser for flow marker {marker.kind.name} "
                f"at ({marker.x:.1f}, {marker.y:.1f})",
            )
        return getattr(self, handler)(marker, parent, path | {_visit(marker, parent)})

    def _parse_command(self, marker: Marker, parent: Optional[Marker], path: VisitPath) -> Flow:
        following = self._find_flow(marker, Slot.SUCCESSOR, parent, path)
        return Command(_COMMANDS[marker.kind], next=self._parse_flow(following, parent, path))

    def _parse_conditional(self, marker: Marker, parent: Optional[Marker], path: VisitPath) -> Flow:
        paths = []
        for slot in (Slot.TRUE_BRANCH, Slot.FALSE_BRANCH):
            pose = predict(marker, slot)
            branch_point = Marker.placeholder(pose.x, pose.y, pose.orientation, marker.diameter)
            first = self._find_flow(branch_point, Slot.SUCCESSOR, marker, path)
            paths.append(self._parse_flow(first, marker, path))
        true_path, false_path = paths
        return Conditional(_CONDITIONALS[marker.kind], next=true_path, alternate=false_path)

    def _parse_boolean_loop(self, marker: Marker, parent: Optional[Marker], path: VisitPath) -> Flow:
        body = self._parse_flow(self._find_flow(marker, Slot.BODY, marker, path), marker, path)
        condition = decode_condition(self._find_parameter(marker, self._conditions))
        following = self._find_flow(marker, Slot.SUCCESSOR, parent, path)
        return BooleanLoop(
            _BOOLEAN_LOOPS[marker.kind],
            condition=condition,
            body=body,
            next=self._parse_flow(following, parent, path),
        )

    def _parse_counted_loop(self, marker: Marker, parent: Optional[Marker], path: VisitPath) -> Flow:
        body = self._parse_flow(self._find_flow(marker, Slot.BODY, marker, path), marker, path)
        value = decode_value(self._find_parameter(marker, self._values))
        following = self._find_flow(marker, Slot.SUCCESSOR, parent, path)
        return CountedLoop(
            _COUNTED_LOOPS[marker.kind],
            value=value,
            body=body,
            next=self._parse_flow(following, parent, path),
        )

    def _find_flow(
        self, source: Marker, slot: Slot, parent: Optional[Marker], path: VisitPath
    ) -> Optional[Marker]:
        target = predict(source, slot)
        # a marker already being parsed under the same parent would recurse forever
        candidates = [marker for marker in self._flow if _visit(marker, parent) not in path]
        match = find_match(target, candidates, source=source, parent=parent, options=self.options)
        logger.debug(
            "%s slot of %s at (%.1f, %.1f): %s",
            slot.value,
            source.kind.name,
            target.x,
            target.y,
            match.kind.name if match is not None else "nothing",
        )
        return match

    def _find_parameter(self, source: Marker, candidates: Sequence[Marker]) -> Optional[Marker]:
        target = predict(source, Slot.PARAMETER)
        match = find_match(target, candidates, source=source, options=self.options)
        logger.debug(
            "parameter slot of %s at (%.1f, %.1f): %s",
            source.kind.name,
            target.x,
            target.y,
            match.kind.name if match is not None else "nothing",
        )
        return match


def parse_markers(
    markers: Iterable[Marker], options: Optional[ReconstructionOptions] = None
) -> Optional[Start]:
    """Reconstruct the program encoded by an already calibrated batch."""

    return Reconstructor(markers, options).parse()


@debug_log_call(logger, name="reconstruct")
def reconstruct(
    detections: Iterable[Detection], options: Optional[ReconstructionOptions] = None
) -> Optional[Start]:
    """Calibrate raw decoder records and reconstruct their program.

    Returns ``None`` when the batch holds no start token.
    """

    options = options or get_reconstruction_options()
    markers = calibrate(detections, image_coordinates=options.image_coordinates)
    return parse_markers(markers, options)


__all__ = [
    "FLOW_PARSERS",
    "MalformedModelError",
    "Reconstructor",
    "decode_condition",
    "decode_value",
    "parse_markers",
    "reconstruct",
]
