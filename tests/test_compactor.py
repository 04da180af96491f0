import pytest, random
from cubebot import CubeState, Move, TURNS, compact, compact_in_place, parse_moves

@pytest.mark.parametrize("moves,expected", [
    ("F FI", ""),
    ("F F", "SF"),
    ("F F F F", ""),
    ("SR R", "RI"),
    ("D R D", "R SD"),
    ("R D R", "D SR"),
    ("R D R D", "SR SD"),
    ("F D F", "F D F"),
    ("F R FI", "F R FI"),
    ("D F FI DI", ""),
    ("", "")
])
def test_compact(moves, expected):
    assert compact(parse_moves(moves)) == parse_moves(expected)

def test_compact_in_place_returns_removed_count():
    moves = parse_moves("F FI D N R")
    assert compact_in_place(moves) == 3
    assert moves == [Move.D, Move.R]

def test_compact_does_not_modify_input():
    moves = parse_moves("F F")
    assert compact(moves) == [Move.SF]
    assert moves == [Move.F, Move.F]

@pytest.mark.parametrize("seed", range(10))
def test_compact_keeps_effect(seed):
    rng = random.Random(seed)
    moves = [rng.choice(TURNS) for _ in range(200)]
    compacted = compact(moves)

    assert len(compacted) <= len(moves)
    assert CubeState.from_moves(compacted) == CubeState.from_moves(moves)
    assert compact(compacted) == compacted

    #No two neighbours of the same group remain
    assert all(a.group != b.group for a, b in zip(compacted, compacted[1:]))
