import itertools, math, pytest
from cubebot import Move, Group, TURNS, compose, parse_moves, format_moves

def test_groups_and_quanta():
    assert [(m.group, m.quantum) for m in (Move.F, Move.FI, Move.SF)] == [(Group.FRONT, 1), (Group.FRONT, -1), (Group.FRONT, 2)]
    assert [(m.group, m.quantum) for m in (Move.D, Move.DI, Move.SD)] == [(Group.DOWN, 1), (Group.DOWN, -1), (Group.DOWN, 2)]
    assert [(m.group, m.quantum) for m in (Move.R, Move.RI, Move.SR)] == [(Group.CUBE, 1), (Group.CUBE, -1), (Group.CUBE, 2)]
    assert Move.N.group is None and Move.N.quantum == 0
    assert len(TURNS) == 9 and Move.N not in TURNS

def test_compose_sums_quanta():
    assert compose(Move.F, Move.F) == Move.SF
    assert compose(Move.SF, Move.F) == Move.FI
    assert compose(Move.FI, Move.FI) == Move.SF
    assert compose(Move.SD, Move.SD) == Move.N
    assert compose(Move.RI, Move.SR) == Move.R
    assert compose(Move.SR, Move.SR) == Move.N

def test_compose_with_inverse_is_null():
    for m in TURNS:
        assert compose(m, m.inverse) == Move.N
        assert m.inverse.group == m.group

def test_compose_is_associative_and_commutative():
    for g in Group:
        for a, b, c in itertools.product(g.moves, repeat=3):
            ab = compose(a, b)
            bc = compose(b, c)
            left = c if ab == Move.N else compose(ab, c)
            right = a if bc == Move.N else compose(a, bc)
            assert left == right
            assert compose(a, b) == compose(b, a)

def test_compose_rejects_different_groups():
    with pytest.raises(ValueError):
        compose(Move.F, Move.D)
    with pytest.raises(ValueError):
        compose(Move.N, Move.N)

def test_angle_follows_quantum():
    assert Move.F.angle == pytest.approx(math.pi / 2)
    assert Move.DI.angle == pytest.approx(-math.pi / 2)
    assert Move.SR.angle == pytest.approx(math.pi)
    assert Move.D.axis == Move.R.axis

def test_parse_and_format():
    moves = parse_moves("F di, SR  N")
    assert moves == [Move.F, Move.DI, Move.SR, Move.N]
    assert format_moves(moves) == "F DI SR N"
    assert parse_moves("") == []

def test_parse_rejects_unknown_symbols():
    with pytest.raises(ValueError, match="Unknown move 'U'"):
        parse_moves("F U")
