import typing, dataclasses
from .errors import LocatorError
from .state import CubeState, Color, Face, Facelet

#Facelets of the 12 edge and 8 corner slots
EDGE_SLOTS: typing.List[typing.Tuple[Facelet, Facelet]] = [
    ((Face.U, 5), (Face.F, 1)),
    ((Face.U, 7), (Face.L, 1)),
    ((Face.U, 1), (Face.B, 1)),
    ((Face.U, 3), (Face.R, 1)),
    ((Face.F, 7), (Face.L, 3)),
    ((Face.F, 3), (Face.R, 7)),
    ((Face.L, 7), (Face.B, 3)),
    ((Face.R, 3), (Face.B, 7)),
    ((Face.F, 5), (Face.D, 1)),
    ((Face.L, 5), (Face.D, 7)),
    ((Face.R, 5), (Face.D, 3)),
    ((Face.B, 5), (Face.D, 5))
]

CORNER_SLOTS: typing.List[typing.Tuple[Facelet, Facelet, Facelet]] = [
    ((Face.U, 6), (Face.L, 2), (Face.F, 0)),
    ((Face.U, 4), (Face.R, 0), (Face.F, 2)),
    ((Face.F, 6), (Face.L, 4), (Face.D, 0)),
    ((Face.F, 4), (Face.R, 6), (Face.D, 2)),
    ((Face.U, 0), (Face.L, 0), (Face.B, 2)),
    ((Face.U, 2), (Face.R, 2), (Face.B, 0)),
    ((Face.L, 6), (Face.B, 4), (Face.D, 6)),
    ((Face.R, 4), (Face.B, 6), (Face.D, 4))
]

@dataclasses.dataclass(frozen=True)
class Piece:
    """Snapshot of the (face, color) pairs of one edge or corner slot, taken when the piece was located."""
    stickers: typing.Tuple[typing.Tuple[Face, Color], ...]

    def has_color(self, color: Color) -> bool: return any(c == color for _, c in self.stickers)
    def on_face(self, face: Face) -> bool: return any(f == face for f, _ in self.stickers)

    def on_faces(self, *faces: Face) -> bool: return all(self.on_face(f) for f in faces)

    def color_on(self, face: Face) -> Color:
        return next(c for f, c in self.stickers if f == face)

    @property
    def faces(self) -> typing.FrozenSet[Face]: return frozenset(f for f, _ in self.stickers)

class Edge(Piece): pass
class Corner(Piece): pass

def _piece(state: CubeState, slot: typing.Sequence[Facelet]) -> typing.Tuple[typing.Tuple[Face, Color], ...]:
    return tuple((f, state[f, i]) for f, i in slot)

def edge_at(state: CubeState, slot: int) -> Edge: return Edge(_piece(state, EDGE_SLOTS[slot]))
def corner_at(state: CubeState, slot: int) -> Corner: return Corner(_piece(state, CORNER_SLOTS[slot]))

def locate_edge(state: CubeState, color_a: Color, color_b: Color) -> Edge:
    for i in range(len(EDGE_SLOTS)):
        edge = edge_at(state, i)
        if edge.has_color(color_a) and edge.has_color(color_b): return edge
    raise LocatorError(f"No edge with colors {color_a.name}/{color_b.name} in state {state}")

def locate_corner(state: CubeState, color_a: Color, color_b: Color, color_c: Color) -> Corner:
    for i in range(len(CORNER_SLOTS)):
        corner = corner_at(state, i)
        if corner.has_color(color_a) and corner.has_color(color_b) and corner.has_color(color_c): return corner
    raise LocatorError(f"No corner with colors {color_a.name}/{color_b.name}/{color_c.name} in state {state}")
