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
from .builder import flow, start
from .config import (
    MatchStrategy,
    ReconstructionOptions,
    get_reconstruction_options,
    set_reconstruction_options,
)
from .geometry import Pose, Slot, predict
from .markers import Detection, Marker, MarkerKind, calibrate
from .matching import find_match
from .printer import print_program, program_to_dict
from .reconstruct import MalformedModelError, Reconstructor, parse_markers, reconstruct

__all__ = [
    'BooleanLoop',
    'BooleanLoopKind',
    'Command',
    'CommandKind',
    'Condition',
    'Conditional',
    'ConditionalKind',
    'CountedLoop',
    'CountedLoopKind',
    'Flow',
    'Start',
    'Value',
    'flow',
    'start',
    'MatchStrategy',
    'ReconstructionOptions',
    'get_reconstruction_options',
    'set_reconstruction_options',
    'Pose',
    'Slot',
    'predict',
    'Detection',
    'Marker',
    'MarkerKind',
    'calibrate',
    'find_match',
    'print_program',
    'program_to_dict',
    'MalformedModelError',
    'Reconstructor',
    'parse_markers',
    'reconstruct',
]
