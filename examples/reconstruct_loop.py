"""Example pipeline: decoder records -> calibrated markers -> program JSON.

The batch below is what a camera ~2x closer than the calibration distance
would report for: start, repeat 4 [move forwards, turn left], shoot.
Coordinates are in image convention (y down, clockwise angles).
"""

import logging

from tangibl import Detection, MarkerKind, print_program, reconstruct

DETECTIONS = [
    Detection(MarkerKind.START.value, 95.0, 0.0, 100.0, 400.0),
    Detection(MarkerKind.REPEAT.value, 97.0, 0.0, 300.0, 400.0),
    Detection(MarkerKind.VALUE_4.value, 96.0, 0.0, 200.0, 200.0),
    Detection(MarkerKind.MOVE_FORWARDS.value, 94.0, 0.0, 400.0, 600.0),
    Detection(MarkerKind.TURN_LEFT.value, 98.0, 0.0, 600.0, 600.0),
    Detection(MarkerKind.SHOOT.value, 96.0, 0.0, 500.0, 400.0),
    # a ring the decoder could not read
    Detection(None, 40.0, 1.2, 900.0, 50.0),
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    program = reconstruct(DETECTIONS)
    if program is None:
        print("No start token found")
        return
    print(print_program(program, indent=2))


if __name__ == "__main__":
    main()
