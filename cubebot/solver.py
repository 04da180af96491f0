import typing, enum, logging, dataclasses, random
from . import log
from .errors import IntegrityError, UnsolvableScrambleError, SolverError, StageIterationError
from .moves import Move, parse_moves
from .state import CubeState, Color, Face
from .locators import Piece, locate_edge, locate_corner
from .compactor import compact_in_place

MAX_STAGE_ITERATIONS = 64

#Precedence of faces when naming a slot (UF, DFL, ...)
SLOT_NAME_ORDER = [Face.U, Face.D, Face.F, Face.B, Face.L, Face.R]

def _iterations(stage: str, limit: int) -> typing.Iterator[int]:
    yield from range(limit)
    raise StageIterationError(f"Stage '{stage}' did not finish within {limit} iterations")

def _apply(state: CubeState, case: enum.Enum, table: typing.Mapping[enum.Enum, typing.Sequence[Move]]):
    log.LOGGER.log(logging.DEBUG, f"{type(case).__name__}.{case.name} -> {' '.join(str(m) for m in table[case])}")
    state.apply_moves(table[case])

def piece_case_name(piece: Piece, color: Color) -> str:
    """Names the slot a piece is in, followed by the face showing the given color (e.g. 'DFL_L')"""
    slot = "".join(f.name for f in SLOT_NAME_ORDER if piece.on_face(f))
    return f"{slot}_{next(f for f in piece.faces if piece.color_on(f) == color).name}"

#Stage 1: first layer edges
class EdgeCase(enum.Enum):
    UF_U = enum.auto()
    UF_F = enum.auto()
    FL_L = enum.auto()
    FL_F = enum.auto()
    FR_R = enum.auto()
    FR_F = enum.auto()
    DF_D = enum.auto()
    DF_F = enum.auto()
    DL_D = enum.auto()
    DL_L = enum.auto()
    DR_D = enum.auto()
    DR_R = enum.auto()
    DB_D = enum.auto()
    DB_B = enum.auto()
    BL_B = enum.auto()
    BL_L = enum.auto()
    BR_B = enum.auto()
    BR_R = enum.auto()
    UB_U = enum.auto()
    UB_B = enum.auto()
    UL_L = enum.auto()
    UL_U = enum.auto()
    UR_R = enum.auto()
    UR_U = enum.auto()

#Each algorithm moves the edge into the up-front slot, with the up color on the up face
EDGE_ALGORITHMS: typing.Dict[EdgeCase, typing.List[Move]] = {
    EdgeCase.UF_U: [],
    EdgeCase.UF_F: parse_moves("F RI FI DI F R SF"),
    EdgeCase.FL_L: parse_moves("F"),
    EdgeCase.FL_F: parse_moves("R F D FI RI SF"),
    EdgeCase.FR_R: parse_moves("FI"),
    EdgeCase.FR_F: parse_moves("RI FI DI F R SF"),
    EdgeCase.DF_D: parse_moves("SF"),
    EdgeCase.DF_F: parse_moves("FI RI FI DI F R SF"),
    EdgeCase.DL_D: parse_moves("D SF"),
    EdgeCase.DL_L: parse_moves("R FI RI F R F RI"),
    EdgeCase.DR_D: parse_moves("DI SF"),
    EdgeCase.DR_R: parse_moves("RI F R FI RI FI R"),
    EdgeCase.DB_D: parse_moves("SD SF"),
    EdgeCase.DB_B: parse_moves("DI RI F R FI RI FI R"),
    EdgeCase.BL_B: parse_moves("R FI D F RI SF"),
    EdgeCase.BL_L: parse_moves("R SF RI F R SF RI"),
    EdgeCase.BR_B: parse_moves("RI F DI FI R SF"),
    EdgeCase.BR_R: parse_moves("RI SF R FI RI SF R"),
    EdgeCase.UB_U: parse_moves("SR SF SR SD SF"),
    EdgeCase.UB_B: parse_moves("SR FI R F DI FI R SF"),
    EdgeCase.UL_L: parse_moves("R F RI F"),
    EdgeCase.UL_U: parse_moves("R SF D RI SF"),
    EdgeCase.UR_R: parse_moves("RI FI R FI"),
    EdgeCase.UR_U: parse_moves("RI SF DI R SF")
}

def classify_top_edge(state: CubeState) -> EdgeCase:
    edge = locate_edge(state, state.up_color, state.front_color)
    return EdgeCase[piece_case_name(edge, state.up_color)]

def first_layer_edges(state: CubeState, max_iterations: int = MAX_STAGE_ITERATIONS):
    #One edge per side, the cube is rotated on to the next side after each one
    for side in _iterations("first layer edges", max_iterations):
        _apply(state, classify_top_edge(state), EDGE_ALGORITHMS)
        if not state.top_edge_oriented: raise SolverError(f"Up-front edge not in place after first layer edge algorithm: {state}")
        state.apply_move(Move.R)
        if side == 3: break

#Stage 2: first layer corners
class CornerCase(enum.Enum):
    UFR_U = enum.auto()
    UFR_R = enum.auto()
    UFR_F = enum.auto()
    UFL_U = enum.auto()
    UFL_F = enum.auto()
    UFL_L = enum.auto()
    DFL_F = enum.auto()
    DFL_L = enum.auto()
    DFL_D = enum.auto()
    DFR_F = enum.auto()
    DFR_R = enum.auto()
    DFR_D = enum.auto()
    UBL_U = enum.auto()
    UBL_L = enum.auto()
    UBL_B = enum.auto()
    UBR_U = enum.auto()
    UBR_R = enum.auto()
    UBR_B = enum.auto()
    DBL_L = enum.auto()
    DBL_B = enum.auto()
    DBL_D = enum.auto()
    DBR_B = enum.auto()
    DBR_R = enum.auto()
    DBR_D = enum.auto()

#Each algorithm moves the corner into the up-front-right slot, with the up color on the up face
CORNER_ALGORITHMS: typing.Dict[CornerCase, typing.List[Move]] = {
    CornerCase.UFR_U: [],
    CornerCase.UFR_R: parse_moves("RI FI SD F R F SD FI"),
    CornerCase.UFR_F: parse_moves("F SD FI RI FI SD F R"),
    CornerCase.UFL_U: parse_moves("R F DI FI SR FI D F R"),
    CornerCase.UFL_F: parse_moves("FI DI F SD RI FI DI F R"),
    CornerCase.UFL_L: parse_moves("R F SR FI D F SR FI RI"),
    CornerCase.DFL_F: parse_moves("D RI FI DI F R"),
    CornerCase.DFL_L: parse_moves("RI FI D F R"),
    CornerCase.DFL_D: parse_moves("D F DI FI RI FI SD F R"),
    CornerCase.DFR_F: parse_moves("RI DI FI D F R"),
    CornerCase.DFR_R: parse_moves("D F DI FI"),
    CornerCase.DFR_D: parse_moves("F DI FI RI FI SD F R"),
    CornerCase.UBL_U: parse_moves("R FI SR FI SD F SR F RI"),
    CornerCase.UBL_L: parse_moves("R FI SD F SR FI DI F R"),
    CornerCase.UBL_B: parse_moves("SR F D FI R FI D F R"),
    CornerCase.UBR_U: parse_moves("SR FI SD F R FI D F R"),
    CornerCase.UBR_R: parse_moves("RI F SD SF D F R"),
    CornerCase.UBR_B: parse_moves("F SR FI DI F SR FI"),
    CornerCase.DBL_L: parse_moves("SD RI FI DI F R"),
    CornerCase.DBL_B: parse_moves("RI FI SD F R"),
    CornerCase.DBL_D: parse_moves("SD F DI FI RI FI SD F R"),
    CornerCase.DBR_B: parse_moves("RI DI FI DI F R"),
    CornerCase.DBR_R: parse_moves("RI D FI SD F R"),
    CornerCase.DBR_D: parse_moves("DI F DI FI RI FI SD F R")
}

def classify_top_corner(state: CubeState) -> CornerCase:
    corner = locate_corner(state, state.up_color, state.front_color, state.right_color)
    return CornerCase[piece_case_name(corner, state.up_color)]

def first_layer_corners(state: CubeState, max_iterations: int = MAX_STAGE_ITERATIONS):
    for side in _iterations("first layer corners", max_iterations):
        _apply(state, classify_top_corner(state), CORNER_ALGORITHMS)
        if not state.top_corner_oriented: raise SolverError(f"Up-front-right corner not in place after first layer corner algorithm: {state}")
        state.apply_move(Move.R)
        if side == 3: break

#Stage 3: second layer edges
INSERT_LEFT = parse_moves("D R F DI FI RI DI FI D F")
INSERT_RIGHT = parse_moves("DI RI FI D F R D F DI FI")

#Side facelet and down facelet of the four bottom layer edges
DOWN_EDGES = [((Face.L, 5), (Face.D, 7)), ((Face.F, 5), (Face.D, 1)), ((Face.R, 5), (Face.D, 3)), ((Face.B, 5), (Face.D, 5))]

def down_edge_insertable(state: CubeState, color: Color) -> bool:
    """Checks if the bottom layer holds the edge with the front color on its side and the given color on the down face"""
    return any(state[side] == state.front_color and state[down] == color for side, down in DOWN_EDGES)

def edges_in_down_layer(state: CubeState) -> bool:
    """Checks if there still is a second layer edge (one without the down color) in the bottom layer"""
    return any(state[side] != state.down_color and state[down] != state.down_color for side, down in DOWN_EDGES)

def _insert_from_down_layer(state: CubeState, side_color: Color, algorithm: typing.List[Move]):
    edge = locate_edge(state, state.front_color, side_color)
    if not (edge.on_face(Face.D) and down_edge_insertable(state, side_color)): return

    #Turn the bottom layer until the edge sits below the front face
    for _ in _iterations("second layer edges (alignment)", 4):
        if state[Face.F, 5] == state.front_color and state[Face.D, 1] == side_color: break
        state.apply_move(Move.D)
    state.apply_moves(algorithm)

def second_layer_edges(state: CubeState, max_iterations: int = MAX_STAGE_ITERATIONS):
    for _ in _iterations("second layer edges", max_iterations):
        if state.middle_edges_placed: break

        for _ in _iterations("second layer edges (bottom layer)", max_iterations):
            if not edges_in_down_layer(state): break
            if not state.left_edge_oriented: _insert_from_down_layer(state, state.left_color, INSERT_LEFT)
            if not state.right_edge_oriented: _insert_from_down_layer(state, state.right_color, INSERT_RIGHT)
            state.apply_move(Move.R)

        #Every remaining edge is stuck in a wrong second layer slot, kick one of them out into the bottom layer
        for _ in _iterations("second layer edges (extraction)", max_iterations):
            if state.middle_edges_placed: break
            if not state.left_edge_oriented:
                state.apply_moves(INSERT_LEFT)
                break
            elif not state.right_edge_oriented:
                state.apply_moves(INSERT_RIGHT)
                break
            state.apply_move(Move.R)

#Stage 4: last layer edge orientation
class EdgeOrientationCase(enum.Enum):
    ORIENTED = enum.auto()
    NONE = enum.auto()
    RIGHT_BACK = enum.auto()
    RIGHT_LEFT = enum.auto()
    MISALIGNED = enum.auto()

EDGE_ORIENTATION_ALGORITHMS: typing.Dict[EdgeOrientationCase, typing.List[Move]] = {
    EdgeOrientationCase.ORIENTED: [],
    EdgeOrientationCase.NONE: parse_moves("F D R F DI FI RI FI"),
    EdgeOrientationCase.RIGHT_BACK: parse_moves("F D R F DI FI RI FI"),
    EdgeOrientationCase.RIGHT_LEFT: parse_moves("F R F D FI RI DI FI"),
    EdgeOrientationCase.MISALIGNED: [Move.R]
}

def classify_edge_orientation(state: CubeState) -> EdgeOrientationCase:
    down = { i: state[Face.D, i] == state.down_color for i in (1, 3, 5, 7) }
    count = sum(down.values())
    if count == 4: return EdgeOrientationCase.ORIENTED
    if count == 0: return EdgeOrientationCase.NONE
    if down[3] and down[5]: return EdgeOrientationCase.RIGHT_BACK
    if down[3] and down[7]: return EdgeOrientationCase.RIGHT_LEFT
    return EdgeOrientationCase.MISALIGNED

def orient_last_layer_edges(state: CubeState, max_iterations: int = MAX_STAGE_ITERATIONS):
    for _ in _iterations("last layer edge orientation", max_iterations):
        case = classify_edge_orientation(state)
        if case == EdgeOrientationCase.ORIENTED: break
        _apply(state, case, EDGE_ORIENTATION_ALGORITHMS)

#Stage 5: last layer corner permutation
CORNER_SWAP = parse_moves("R F DI SR FI D SR FI DI SR F R SD")

class CornerPlacementCase(enum.Enum):
    PLACED = enum.auto()
    FRONT_LEFT = enum.auto()
    BACK_RIGHT = enum.auto()
    BACK_LEFT = enum.auto()
    OTHER = enum.auto()

#Every algorithm ends with a whole cube rotation, so the next pass looks at a different front face
CORNER_PLACEMENT_ALGORITHMS: typing.Dict[CornerPlacementCase, typing.List[Move]] = {
    CornerPlacementCase.PLACED: [],
    CornerPlacementCase.FRONT_LEFT: [Move.R] + CORNER_SWAP + [Move.RI, Move.RI],
    CornerPlacementCase.BACK_RIGHT: CORNER_SWAP + [Move.RI],
    CornerPlacementCase.BACK_LEFT: [Move.RI] + CORNER_SWAP + [Move.R] + CORNER_SWAP + [Move.RI],
    CornerPlacementCase.OTHER: [Move.RI]
}

def last_layer_corners_placed(state: CubeState) -> bool:
    return all(
        locate_corner(state, state.face_color(a), state.face_color(b), state.down_color).on_faces(a, b)
        for a, b in [(Face.F, Face.L), (Face.F, Face.R), (Face.B, Face.L), (Face.B, Face.R)]
    )

def classify_corner_placement(state: CubeState) -> CornerPlacementCase:
    if last_layer_corners_placed(state): return CornerPlacementCase.PLACED

    corner = locate_corner(state, state.front_color, state.right_color, state.down_color)
    corner_left = locate_corner(state, state.front_color, state.left_color, state.down_color)
    if corner.on_faces(Face.F, Face.L): return CornerPlacementCase.FRONT_LEFT
    if corner.on_faces(Face.B, Face.R): return CornerPlacementCase.BACK_RIGHT
    if corner.on_faces(Face.B, Face.L) and not corner_left.on_faces(Face.F, Face.R): return CornerPlacementCase.BACK_LEFT
    return CornerPlacementCase.OTHER

def permute_last_layer_corners(state: CubeState, max_iterations: int = MAX_STAGE_ITERATIONS):
    for _ in _iterations("last layer corner permutation", max_iterations):
        case = classify_corner_placement(state)
        if case == CornerPlacementCase.PLACED: break
        _apply(state, case, CORNER_PLACEMENT_ALGORITHMS)

#Stage 6: last layer corner orientation
CORNER_TWIST = parse_moves("RI FI DI F DI FI SD F SD R")
CORNER_TWIST_INVERTED = parse_moves("RI F D FI D F SD FI SD R")

class CornerOrientationCase(enum.Enum):
    ORIENTED = enum.auto()
    FOUR_LEFT_RIGHT = enum.auto()
    FOUR_LEFT_FRONT_BACK = enum.auto()
    TWO_FRONT_RIGHT = enum.auto()
    TWO_FRONT_BACK = enum.auto()
    TWO_BACK = enum.auto()
    THREE_CLOCKWISE = enum.auto()
    THREE_COUNTERCLOCKWISE = enum.auto()
    MISALIGNED = enum.auto()

CORNER_ORIENTATION_ALGORITHMS: typing.Dict[CornerOrientationCase, typing.List[Move]] = {
    CornerOrientationCase.ORIENTED: [],
    CornerOrientationCase.FOUR_LEFT_RIGHT: CORNER_TWIST,
    CornerOrientationCase.FOUR_LEFT_FRONT_BACK: CORNER_TWIST,
    CornerOrientationCase.TWO_FRONT_RIGHT: CORNER_TWIST,
    CornerOrientationCase.TWO_FRONT_BACK: CORNER_TWIST,
    CornerOrientationCase.TWO_BACK: CORNER_TWIST_INVERTED,
    CornerOrientationCase.THREE_CLOCKWISE: CORNER_TWIST,
    CornerOrientationCase.THREE_COUNTERCLOCKWISE: CORNER_TWIST_INVERTED,
    CornerOrientationCase.MISALIGNED: [Move.R]
}

def classify_corner_orientation(state: CubeState) -> CornerOrientationCase:
    def lit(*facelets: typing.Tuple[Face, int]) -> bool: return all(state[fl] == state.down_color for fl in facelets)

    count = sum(1 for i in (0, 2, 4, 6) if state[Face.D, i] != state.down_color)
    if count == 0: return CornerOrientationCase.ORIENTED
    if count == 4:
        if lit((Face.L, 4), (Face.L, 6), (Face.R, 4), (Face.R, 6)): return CornerOrientationCase.FOUR_LEFT_RIGHT
        if lit((Face.L, 4), (Face.L, 6), (Face.F, 4), (Face.B, 6)): return CornerOrientationCase.FOUR_LEFT_FRONT_BACK
    elif count == 2:
        if lit((Face.F, 6), (Face.R, 4)): return CornerOrientationCase.TWO_FRONT_RIGHT
        if lit((Face.F, 6), (Face.B, 4)): return CornerOrientationCase.TWO_FRONT_BACK
        if lit((Face.B, 4), (Face.B, 6)): return CornerOrientationCase.TWO_BACK
    elif count == 3:
        if lit((Face.F, 4), (Face.R, 4), (Face.B, 4)): return CornerOrientationCase.THREE_CLOCKWISE
        if lit((Face.F, 6), (Face.R, 6), (Face.B, 6)): return CornerOrientationCase.THREE_COUNTERCLOCKWISE
    return CornerOrientationCase.MISALIGNED

def orient_last_layer_corners(state: CubeState, max_iterations: int = MAX_STAGE_ITERATIONS):
    for _ in _iterations("last layer corner orientation", max_iterations):
        case = classify_corner_orientation(state)
        if case == CornerOrientationCase.ORIENTED: break
        _apply(state, case, CORNER_ORIENTATION_ALGORITHMS)

#Stage 7: last layer edge permutation
EDGE_CYCLE = parse_moves("RI SF RI D F SR FI RI SF RI FI SR F D RI SF R")
EDGE_CYCLE_INVERTED = parse_moves("RI SF RI DI F SR FI RI SF RI FI SR F DI RI SF R")

class EdgePlacementCase(enum.Enum):
    PLACED = enum.auto()
    SWAPPED_PAIR = enum.auto()
    CYCLE = enum.auto()
    CYCLE_INVERTED = enum.auto()
    MISALIGNED = enum.auto()

EDGE_PLACEMENT_ALGORITHMS: typing.Dict[EdgePlacementCase, typing.List[Move]] = {
    EdgePlacementCase.PLACED: [],
    EdgePlacementCase.CYCLE: EDGE_CYCLE,
    EdgePlacementCase.CYCLE_INVERTED: EDGE_CYCLE_INVERTED,
    EdgePlacementCase.MISALIGNED: [Move.R]
}

def classify_edge_placement(state: CubeState) -> EdgePlacementCase:
    side = { f: state[f, 5] for f in (Face.L, Face.F, Face.R, Face.B) }
    count = sum(1 for f, c in side.items() if c == state.face_color(f))

    if count == 4: return EdgePlacementCase.PLACED
    if count == 2: return EdgePlacementCase.SWAPPED_PAIR
    if count == 0:
        if side[Face.F] == state.right_color or side[Face.R] == state.back_color or side[Face.B] == state.front_color: return EdgePlacementCase.CYCLE
        if side[Face.B] == state.right_color or side[Face.F] == state.back_color or side[Face.R] == state.front_color: return EdgePlacementCase.CYCLE_INVERTED
        return EdgePlacementCase.MISALIGNED

    #A single placed edge has to be on the left face before cycling the other three
    if side[Face.L] != state.left_color: return EdgePlacementCase.MISALIGNED
    return EdgePlacementCase.CYCLE if side[Face.B] == state.front_color else EdgePlacementCase.CYCLE_INVERTED

def permute_last_layer_edges(state: CubeState, max_iterations: int = MAX_STAGE_ITERATIONS):
    for _ in _iterations("last layer edge permutation", max_iterations):
        case = classify_edge_placement(state)
        if case == EdgePlacementCase.PLACED: break
        if case == EdgePlacementCase.SWAPPED_PAIR:
            raise UnsolvableScrambleError(f"Two last layer edges are swapped, the cube can't be solved: {state}")
        _apply(state, case, EDGE_PLACEMENT_ALGORITHMS)

StageFnc = typing.Callable[[CubeState, int], None]

STAGES: typing.List[typing.Tuple[str, StageFnc]] = [
    ("first layer edges", first_layer_edges),
    ("first layer corners", first_layer_corners),
    ("second layer edges", second_layer_edges),
    ("last layer edge orientation", orient_last_layer_edges),
    ("last layer corner permutation", permute_last_layer_corners),
    ("last layer corner orientation", orient_last_layer_corners),
    ("last layer edge permutation", permute_last_layer_edges)
]

class SolveOutcome(enum.Enum):
    SOLVED = enum.auto()
    UNSOLVABLE_SCRAMBLE = enum.auto()

@dataclasses.dataclass
class SolveResult:
    moves: typing.List[Move]
    outcome: SolveOutcome
    stage_lengths: typing.Dict[str, int] = dataclasses.field(default_factory=dict)

    @property
    def is_solved(self) -> bool: return self.outcome == SolveOutcome.SOLVED

    def __len__(self): return len(self.moves)

class Solver:
    MAX_STAGE_ITERATIONS = MAX_STAGE_ITERATIONS

    max_iterations: int
    max_trace_length: typing.Optional[int]

    def __init__(self, max_iterations: typing.Optional[int] = None, max_trace_length: typing.Optional[int] = None):
        self.max_iterations = Solver.MAX_STAGE_ITERATIONS if max_iterations is None else max_iterations
        self.max_trace_length = max_trace_length

    def run(self, state: CubeState) -> SolveResult:
        if not state.has_integrity:
            raise IntegrityError(f"Refusing to solve a cube with invalid colors: {state}")

        result = SolveResult([], SolveOutcome.SOLVED)
        with state.recording(self.max_trace_length) as trace:
            try:
                for name, stage in STAGES:
                    stage(state, self.max_iterations)
                    removed = compact_in_place(trace)
                    result.stage_lengths[name] = len(trace)
                    log.LOGGER.log(logging.DEBUG, f"Stage '{name}' done: {len(trace)} moves ({removed} removed by compaction)")
            except UnsolvableScrambleError as e:
                log.LOGGER.log(logging.WARNING, str(e))
                compact_in_place(trace)
                result.outcome = SolveOutcome.UNSOLVABLE_SCRAMBLE

        result.moves = list(trace)
        if result.is_solved:
            if not state.is_solved: raise SolverError(f"All stages finished, but the cube isn't solved: {state}")
            log.LOGGER.log(logging.INFO, f"Solved cube in {len(result.moves)} moves")
        return result

def solve(state: CubeState) -> typing.Tuple[typing.List[Move], SolveOutcome]:
    result = Solver().run(state)
    return result.moves, result.outcome

@dataclasses.dataclass
class Evaluation:
    runs: int
    total_length: int = 0
    max_length: int = 0
    stage_totals: typing.Dict[str, int] = dataclasses.field(default_factory=lambda: { n: 0 for n, _ in STAGES })

    @property
    def average_length(self) -> float: return self.total_length / self.runs if self.runs else 0.0

    @property
    def average_stage_lengths(self) -> typing.Dict[str, float]:
        return { n: t / self.runs if self.runs else 0.0 for n, t in self.stage_totals.items() }

def evaluate(runs: int, scramble_length: int = 5000, rng: typing.Optional[random.Random] = None, solver: typing.Optional[Solver] = None) -> Evaluation:
    """
    Solves `runs` randomly scrambled cubes and collects the solution lengths, in total and per stage
    (the number of moves each stage adds to the compacted solution).
    """
    rng = rng or random.Random()
    solver = solver or Solver()

    ev = Evaluation(runs)
    for i in range(runs):
        result = solver.run(CubeState.scrambled(scramble_length, rng))
        ev.total_length += len(result)
        ev.max_length = max(ev.max_length, len(result))

        prev = 0
        for name, length in result.stage_lengths.items():
            ev.stage_totals[name] += length - prev
            prev = length
        log.LOGGER.log(logging.DEBUG, f"Evaluation run {i+1}/{runs}: {len(result)} moves")
    return ev
