import pytest, random
from cubebot import CubeState, Color, Face, Move, Group, TURNS, COLORS, TraceCapacityError, parse_moves
from cubebot.state import CYCLES

def _rotate(coords, group):
    #Quarter turn of centered grid coordinates, clockwise as seen from the front / from below
    x, y, z = coords
    if group == Group.FRONT: return (y, -x, z)
    return (z, y, -x)

def _centered(c): return tuple(v - 1 for v in c)

def test_new_state_is_unknown():
    state = CubeState()
    assert all(c == Color.UNKNOWN for c in state.facelets())
    assert not state.has_integrity
    assert not state.is_solved

def test_solved_state(solved):
    assert solved.is_solved and solved.has_integrity
    assert solved.faces[Face.U] == [Color.YELLOW] * 8
    assert solved.faces[Face.D] == [Color.WHITE] * 8
    assert [solved.face_color(f) for f in (Face.L, Face.F, Face.R, Face.B)] == [Color.GREEN, Color.ORANGE, Color.BLUE, Color.RED]

def test_front_turn(solved):
    solved.apply_move(Move.F)
    assert solved.faces[Face.U][4:7] == [Color.GREEN] * 3
    assert [solved[Face.R, i] for i in (6, 7, 0)] == [Color.YELLOW] * 3
    assert solved.faces[Face.D][0:3] == [Color.BLUE] * 3
    assert solved.faces[Face.L][2:5] == [Color.WHITE] * 3
    assert solved.faces[Face.F] == [Color.ORANGE] * 8
    assert solved.orientation == 0

def test_down_turn(solved):
    solved.apply_move(Move.D)
    assert solved.faces[Face.F][4:7] == [Color.GREEN] * 3
    assert solved.faces[Face.R][4:7] == [Color.ORANGE] * 3
    assert solved.faces[Face.B][4:7] == [Color.BLUE] * 3
    assert solved.faces[Face.L][4:7] == [Color.RED] * 3
    assert solved.orientation == 0

def test_cube_rotation_keeps_cube_solved(solved):
    solved.apply_move(Move.R)
    assert solved.orientation == 3
    assert solved.faces[Face.F] == [Color.GREEN] * 8
    assert solved.front_color == Color.GREEN
    assert solved.is_solved

    solved.apply_moves([Move.RI, Move.RI])
    assert solved.orientation == 1
    assert solved.is_solved

@pytest.mark.parametrize("group", list(Group))
def test_cycles_follow_cube_geometry(group):
    for cycle in CYCLES[group]:
        for (fa, pa), (fb, pb) in zip(cycle, cycle[1:] + cycle[:1]):
            assert _rotate(_centered(fa.sticker_coords(pa)), group) == _centered(fb.sticker_coords(pb))
            assert _rotate(fa.direction, group) == fb.direction

@pytest.mark.parametrize("move", TURNS)
def test_move_then_inverse_restores_state(move, rng):
    state = CubeState.scrambled(30, rng)
    before = state.copy()
    state.apply_move(move)
    assert state != before
    state.apply_move(move.inverse)
    assert state == before

@pytest.mark.parametrize("quarter,half", [(Move.F, Move.SF), (Move.D, Move.SD), (Move.R, Move.SR)])
def test_half_turn_is_two_quarter_turns(quarter, half, rng):
    state = CubeState.scrambled(30, rng)
    other = state.copy()
    state.apply_move(half)
    other.apply_moves([quarter, quarter])
    assert state == other

    other.apply_moves([quarter, quarter])
    state.apply_move(half)
    assert state == other

def test_color_counts_stay_valid(rng):
    state = CubeState.scrambled(200, rng)
    assert state.has_integrity
    assert all(state.color_counts()[c] == 8 for c in COLORS)

def test_integrity_detects_wrong_counts(solved):
    solved[Face.U, 0] = Color.WHITE
    assert solved.color_counts()[Color.WHITE] == 9
    assert solved.color_counts()[Color.YELLOW] == 7
    assert not solved.has_integrity

def test_integrity_detects_unknown_facelets(solved):
    solved[Face.B, 3] = Color.UNKNOWN
    assert not solved.has_integrity

def test_recording_keeps_move_symbols(solved):
    solved.apply_move(Move.F)
    assert solved.trace == []

    with solved.recording() as trace:
        solved.apply_moves([Move.SF, Move.DI, Move.N, Move.SR])
    solved.apply_move(Move.D)

    assert trace == [Move.SF, Move.DI, Move.SR]
    assert solved.trace is trace
    assert not solved.is_recording

def test_recording_capacity():
    state = CubeState.solved(max_trace_length=3)
    with pytest.raises(TraceCapacityError):
        with state.recording():
            state.apply_moves([Move.F, Move.D, Move.R, Move.F])
    assert len(state.trace) == 3

def test_scramble_is_reproducible():
    a = CubeState.scrambled(25, random.Random(7))
    b = CubeState.scrambled(25, random.Random(7))
    assert a == b

def test_string_round_trip(rng):
    state = CubeState.scrambled(20, rng)
    state.orientation = 0
    parsed = CubeState.from_string(str(state))
    assert parsed == state
    assert str(CubeState.solved()) == "YYYYYYYY WWWWWWWW GGGGGGGG OOOOOOOO BBBBBBBB RRRRRRRR"

def test_from_string_rejects_bad_input():
    with pytest.raises(ValueError):
        CubeState.from_string("YYYYYYYY WWWWWWWW")
    with pytest.raises(ValueError):
        CubeState.from_string("YYYYYYYY WWWWWWWW GGGGGGGG OOOOOOOO BBBBBBBB RRRRRRRX")

def test_set_face():
    state = CubeState()
    state.set_face(Face.U, [Color.YELLOW] * 8)
    assert state.faces[Face.U] == [Color.YELLOW] * 8
    with pytest.raises(ValueError):
        state.set_face(Face.D, [Color.WHITE] * 9)

def test_from_moves_matches_applying_moves():
    moves = parse_moves("F D R SF DI")
    state = CubeState.solved()
    state.apply_moves(moves)
    assert CubeState.from_moves(moves) == state

def test_copy_is_independent(solved):
    other = solved.copy()
    other.apply_move(Move.F)
    assert solved.is_solved
    assert not other.is_solved

def test_piece_orientation_checks(solved):
    assert solved.top_edge_oriented and solved.top_corner_oriented
    assert solved.left_edge_oriented and solved.right_edge_oriented and solved.middle_edges_placed

    solved.apply_move(Move.F)
    assert not solved.top_edge_oriented
    assert not solved.left_edge_oriented

def test_recording_capacity_is_restored(solved):
    with pytest.raises(TraceCapacityError):
        with solved.recording(max_length=1):
            solved.apply_moves([Move.F, Move.D])
    assert solved.max_trace_length == CubeState.MAX_TRACE_LENGTH
    assert solved.trace == [Move.F]
