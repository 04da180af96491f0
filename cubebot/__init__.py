from .log import LOGGER
from .errors import CubeError, IntegrityError, UnsolvableScrambleError, SolverError, LocatorError, StageIterationError, TraceCapacityError
from .moves import Group, Move, TURNS, compose, parse_moves, format_moves
from .state import Color, Face, CubeState, COLORS, UP_COLOR, DOWN_COLOR, SIDE_COLORS
from .locators import Edge, Corner, locate_edge, locate_corner
from .compactor import compact, compact_in_place
from .solver import Solver, SolveOutcome, SolveResult, Evaluation, STAGES, solve, evaluate
