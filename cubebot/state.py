import typing, enum, logging, random, contextlib
from . import log
from .errors import TraceCapacityError
from .moves import Move, Group, TURNS

class Color(enum.Enum):
    YELLOW = 'Y'
    WHITE = 'W'
    GREEN = 'G'
    ORANGE = 'O'
    BLUE = 'B'
    RED = 'R'
    UNKNOWN = 'N'

#The six real colors, in the order they are counted / printed
COLORS: typing.List[Color] = [c for c in Color if c != Color.UNKNOWN]

class Face(enum.Enum):
    U = enum.auto()
    D = enum.auto()
    L = enum.auto()
    F = enum.auto()
    R = enum.auto()
    B = enum.auto()

    @property
    def direction(self) -> typing.Tuple[int, int, int]: return {
        Face.L: (-1,  0,  0),
        Face.R: (+1,  0,  0),
        Face.U: ( 0, +1,  0),
        Face.D: ( 0, -1,  0),
        Face.F: ( 0,  0, +1),
        Face.B: ( 0,  0, -1)
    }[self]

    @property
    def side_offset(self) -> typing.Optional[int]: return {
        Face.L: 0, Face.F: 1, Face.R: 2, Face.B: 3
    }.get(self)

    def sticker_coords(self, pos: typing.Optional[int]) -> typing.Tuple[int, int, int]:
        """
        Returns the grid coordinates (x: left->right, y: down->up, z: back->front) of the cubelet carrying facelet
        `pos` of this face, or of the face's center if `pos` is None. Facelets are numbered clockwise starting with
        the upper left one, as seen when looking at the face (up and down faces are seen with the front face at the bottom
        and top respectively).
        """
        row, col = (1, 1) if pos is None else FACELET_GRID[pos]
        return {
            Face.U: (col, 2, row),
            Face.D: (col, 0, 2-row),
            Face.L: (0, 2-row, col),
            Face.R: (2, 2-row, 2-col),
            Face.F: (col, 2-row, 2),
            Face.B: (2-col, 2-row, 0)
        }[self]

#(row, column) of each facelet position on its face
FACELET_GRID = [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0), (1, 0)]

UP_COLOR = Color.YELLOW
DOWN_COLOR = Color.WHITE
SIDE_COLORS = (Color.GREEN, Color.ORANGE, Color.BLUE, Color.RED)

Facelet = typing.Tuple[Face, int]
Cycle = typing.Tuple[Facelet, ...]

def _face_cycles(face: Face) -> typing.List[Cycle]:
    #Clockwise turn of a face's own facelets: every facelet moves two slots ahead
    return [tuple((face, i + 2*k) for k in range(4)) for i in range(2)]

#Facelet cycles of the clockwise elementary moves. The content of each facelet moves on to the next one in its cycle.
CYCLES: typing.Dict[Group, typing.List[Cycle]] = {
    Group.FRONT: [((Face.L, 2+i), (Face.U, 4+i), (Face.R, (6+i) % 8), (Face.D, i)) for i in range(3)] + _face_cycles(Face.F),
    Group.DOWN: [((Face.L, i), (Face.F, i), (Face.R, i), (Face.B, i)) for i in range(4, 7)] + _face_cycles(Face.D),
    Group.CUBE: [((Face.L, i), (Face.F, i), (Face.R, i), (Face.B, i)) for i in range(8)] +
        [tuple(reversed(c)) for c in _face_cycles(Face.U)] + _face_cycles(Face.D)
}

class CubeState:
    MAX_TRACE_LENGTH = 1000

    faces: typing.Dict[Face, typing.List[Color]]
    orientation: int

    is_recording: bool
    trace: typing.List[Move]
    max_trace_length: int

    def __init__(self, max_trace_length: typing.Optional[int] = None):
        self.max_trace_length = CubeState.MAX_TRACE_LENGTH if max_trace_length is None else max_trace_length
        self.reset_unknown()

    @staticmethod
    def solved(**kwargs) -> "CubeState":
        state = CubeState(**kwargs)
        state.reset_solved()
        return state

    @staticmethod
    def scrambled(length: int, rng: typing.Optional[random.Random] = None, **kwargs) -> "CubeState":
        state = CubeState(**kwargs)
        state.reset_scrambled(length, rng)
        return state

    @staticmethod
    def from_moves(moves: typing.Iterable[Move], **kwargs) -> "CubeState":
        state = CubeState.solved(**kwargs)
        state.apply_moves(moves)
        return state

    @staticmethod
    def from_string(s: str, **kwargs) -> "CubeState":
        groups = s.split()
        if len(groups) != len(Face) or any(len(g) != 8 for g in groups):
            raise ValueError(f"Expected {len(Face)} groups of 8 facelet colors, got '{s}'")

        state = CubeState(**kwargs)
        for f, g in zip(Face, groups):
            state.set_face(f, [Color(c) for c in g.upper()])
        return state

    def _reset(self, color_fnc: typing.Callable[[Face], Color]):
        self.faces = { f: [color_fnc(f)] * 8 for f in Face }
        self.orientation = 0
        self.is_recording = False
        self.trace = []

    def reset_unknown(self): self._reset(lambda f: Color.UNKNOWN)
    def reset_solved(self): self._reset(lambda f: UP_COLOR if f == Face.U else DOWN_COLOR if f == Face.D else SIDE_COLORS[f.side_offset])

    def reset_scrambled(self, length: int, rng: typing.Optional[random.Random] = None):
        rng = rng or random.Random()
        self.reset_solved()
        self.apply_moves(rng.choice(TURNS) for _ in range(length))

    def set_face(self, face: Face, colors: typing.Sequence[Color]):
        if len(colors) != 8: raise ValueError(f"A face has 8 facelets, got {len(colors)} colors")
        self.faces[face] = list(colors)

    def copy(self) -> "CubeState":
        state = CubeState(self.max_trace_length)
        state.faces = { f: list(c) for f, c in self.faces.items() }
        state.orientation = self.orientation
        return state

    def facelets(self) -> typing.Tuple[Color, ...]: return tuple(c for f in Face for c in self.faces[f])

    def face_color(self, face: Face) -> Color:
        if face == Face.U: return UP_COLOR
        if face == Face.D: return DOWN_COLOR
        return SIDE_COLORS[(self.orientation + face.side_offset) % 4]

    @property
    def up_color(self) -> Color: return UP_COLOR
    @property
    def down_color(self) -> Color: return DOWN_COLOR
    @property
    def left_color(self) -> Color: return self.face_color(Face.L)
    @property
    def front_color(self) -> Color: return self.face_color(Face.F)
    @property
    def right_color(self) -> Color: return self.face_color(Face.R)
    @property
    def back_color(self) -> Color: return self.face_color(Face.B)

    def apply_move(self, move: Move):
        if move == Move.N:
            log.LOGGER.log(logging.WARNING, "Ignoring null move")
            return

        if self.is_recording:
            if len(self.trace) >= self.max_trace_length:
                raise TraceCapacityError(f"Move trace exceeded its capacity of {self.max_trace_length} moves")
            self.trace.append(move)

        #Half turns are two clockwise quarter turns, inverse quarter turns run the cycles backwards
        cycles = CYCLES[move.group]
        for _ in range(abs(move.quantum)):
            for c in cycles: self._cycle(c if move.quantum > 0 else c[::-1])

        if move.group == Group.CUBE: self.orientation = (self.orientation - move.quantum) % 4

    def apply_moves(self, moves: typing.Iterable[Move]):
        for m in moves: self.apply_move(m)

    def _cycle(self, cycle: Cycle):
        colors = [self[fl] for fl in cycle]
        for i, fl in enumerate(cycle):
            self[cycle[(i+1) % len(cycle)]] = colors[i]

    @contextlib.contextmanager
    def recording(self, max_length: typing.Optional[int] = None) -> typing.Iterator[typing.List[Move]]:
        #A capacity given here only holds for this recording window
        prev_max_length = self.max_trace_length
        if max_length is not None: self.max_trace_length = max_length

        self.trace = []
        self.is_recording = True
        try: yield self.trace
        finally:
            self.is_recording = False
            self.max_trace_length = prev_max_length

    def color_counts(self) -> typing.Dict[Color, int]:
        counts = { c: 0 for c in Color }
        for c in self.facelets(): counts[c] += 1
        return counts

    @property
    def has_integrity(self) -> bool:
        counts = self.color_counts()
        return counts[Color.UNKNOWN] == 0 and all(counts[c] == 8 for c in COLORS)

    @property
    def is_solved(self) -> bool:
        return all(c == self.face_color(f) for f in Face for c in self.faces[f])

    #Orientation checks of single pieces, relative to the current front face
    @property
    def top_edge_oriented(self) -> bool:
        return self[Face.F, 1] == self.front_color and self[Face.U, 5] == self.up_color

    @property
    def top_corner_oriented(self) -> bool:
        return self[Face.F, 2] == self.front_color and self[Face.U, 4] == self.up_color and self[Face.R, 0] == self.right_color

    @property
    def left_edge_oriented(self) -> bool:
        return self[Face.F, 7] == self.front_color and self[Face.L, 3] == self.left_color

    @property
    def right_edge_oriented(self) -> bool:
        return self[Face.F, 3] == self.front_color and self[Face.R, 7] == self.right_color

    @property
    def middle_edges_placed(self) -> bool:
        return (
            self.left_edge_oriented and self.right_edge_oriented and
            self[Face.L, 7] == self.left_color and self[Face.B, 3] == self.back_color and
            self[Face.R, 3] == self.right_color and self[Face.B, 7] == self.back_color
        )

    def __getitem__(self, idx: Facelet) -> Color: return self.faces[idx[0]][idx[1]]
    def __setitem__(self, idx: Facelet, val: Color): self.faces[idx[0]][idx[1]] = val

    def __eq__(self, other):
        if not isinstance(other, CubeState): return NotImplemented
        return self.faces == other.faces and self.orientation == other.orientation

    __hash__ = None

    def __str__(self):
        return " ".join("".join(c.value for c in self.faces[f]) for f in Face)
