import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from tangibl import (
    Detection,
    MatchStrategy,
    calibrate,
    get_reconstruction_options,
    parse_markers,
    print_program,
)
from tangibl.viz import plot_markers

logger = logging.getLogger(__name__)

_DETECTION_FIELDS = ("diameter", "orientation", "x", "y")


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _load_detections(path: Path) -> List[Detection]:
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must hold a JSON list of detections")

    detections = []
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"detection {idx} must be a JSON object")
        missing = [key for key in _DETECTION_FIELDS if key not in entry]
        if missing:
            raise ValueError(f"detection {idx} is missing {', '.join(missing)}")
        code = entry.get("code")
        detections.append(
            Detection(
                code=int(code) if code is not None else None,
                diameter=float(entry["diameter"]),
                orientation=float(entry["orientation"]),
                x=float(entry["x"]),
                y=float(entry["y"]),
            )
        )
    return detections


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Reconstruct a program from decoded token markers")
    parser.add_argument("path", help="Path to a JSON list of detections (code, diameter, orientation, x, y)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--math-coordinates",
        action="store_true",
        help="Detections are already y-up with counter-clockwise angles",
    )
    parser.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in MatchStrategy],
        default=MatchStrategy.FIRST.value,
        help="How to choose between several markers within tolerance (default: first)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        help="Indent the printed JSON",
    )
    parser.add_argument(
        "--plot-output-path",
        help="Write a plot of the markers and their slot targets to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    options = get_reconstruction_options()
    options.image_coordinates = not args.math_coordinates
    options.strategy = MatchStrategy(args.strategy)

    logger.info("Loading detections from %s", args.path)
    detections = _load_detections(Path(args.path))
    markers = calibrate(detections, image_coordinates=options.image_coordinates)
    logger.info("Kept %d of %d detection(s)", len(markers), len(detections))

    if args.plot_output_path:
        output_path = Path(args.plot_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing marker plot to %s", output_path)
        plot_markers(markers, out=output_path, options=options, title=Path(args.path).name)

    program = parse_markers(markers, options)
    if program is None:
        logger.error("No start token found")
        raise SystemExit(1)

    print(print_program(program, indent=args.indent))


if __name__ == "__main__":
    main(sys.argv[1:])
