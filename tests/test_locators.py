import pytest
from cubebot import CubeState, Color, Face, Move, Edge, Corner, LocatorError, locate_edge, locate_corner
from cubebot.locators import EDGE_SLOTS, CORNER_SLOTS, edge_at, corner_at

def test_slots_cover_every_facelet_once():
    facelets = [fl for slot in EDGE_SLOTS + CORNER_SLOTS for fl in slot]
    assert len(facelets) == len(set(facelets)) == 48

@pytest.mark.parametrize("slot", EDGE_SLOTS + CORNER_SLOTS)
def test_slot_facelets_belong_to_one_cubelet(slot):
    coords = { f.sticker_coords(i) for f, i in slot }
    assert len(coords) == 1
    assert len({ f for f, _ in slot }) == len(slot)

def test_locate_on_solved_cube(solved):
    edge = locate_edge(solved, Color.YELLOW, Color.ORANGE)
    assert isinstance(edge, Edge)
    assert edge.on_faces(Face.U, Face.F)
    assert edge.color_on(Face.U) == Color.YELLOW
    assert edge.faces == frozenset({ Face.U, Face.F })

    corner = locate_corner(solved, Color.ORANGE, Color.GREEN, Color.WHITE)
    assert isinstance(corner, Corner)
    assert corner.on_faces(Face.F, Face.L, Face.D)
    assert corner.color_on(Face.D) == Color.WHITE

def test_color_order_does_not_matter(rng):
    state = CubeState.scrambled(40, rng)
    assert locate_edge(state, Color.RED, Color.WHITE) == locate_edge(state, Color.WHITE, Color.RED)
    assert locate_corner(state, Color.YELLOW, Color.BLUE, Color.RED) == locate_corner(state, Color.RED, Color.YELLOW, Color.BLUE)

def test_locate_after_moves(solved):
    solved.apply_move(Move.F)
    edge = locate_edge(solved, Color.YELLOW, Color.ORANGE)
    assert edge.on_faces(Face.F, Face.R)
    assert edge.color_on(Face.R) == Color.YELLOW
    assert edge.color_on(Face.F) == Color.ORANGE

    corner = locate_corner(solved, Color.WHITE, Color.ORANGE, Color.GREEN)
    assert corner.on_faces(Face.U, Face.F, Face.L)
    assert corner.color_on(Face.L) == Color.WHITE

def test_pieces_are_snapshots(solved):
    edge = edge_at(solved, 0)
    solved.apply_move(Move.F)
    assert edge.color_on(Face.U) == Color.YELLOW
    assert edge_at(solved, 0) != edge

def test_every_piece_is_found(rng):
    state = CubeState.scrambled(100, rng)
    for i in range(len(EDGE_SLOTS)):
        a, b = [c for _, c in edge_at(state, i).stickers]
        assert locate_edge(state, a, b) == edge_at(state, i)
    for i in range(len(CORNER_SLOTS)):
        a, b, c = [c for _, c in corner_at(state, i).stickers]
        assert locate_corner(state, a, b, c) == corner_at(state, i)

def test_missing_piece():
    with pytest.raises(LocatorError):
        locate_edge(CubeState(), Color.YELLOW, Color.ORANGE)
    with pytest.raises(LocatorError):
        locate_corner(CubeState.solved(), Color.YELLOW, Color.WHITE, Color.GREEN)
