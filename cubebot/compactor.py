import typing, logging
from . import log
from .moves import Move, Group, compose

def _is_sandwiched(moves: typing.List[Move], i: int) -> bool:
    #Bottom layer turns and whole cube rotations share their axis, so a single one of them may be moved past the other
    g, prev_g, next_g = moves[i].group, moves[i-1].group, moves[i+1].group
    return prev_g == next_g and {g, prev_g} == {Group.DOWN, Group.CUBE}

def compact_in_place(moves: typing.List[Move]) -> int:
    """
    Shortens a move sequence without changing its effect on the cube, by merging neighbouring moves of the same group.
    A bottom layer turn between two whole cube rotations (or the other way around) is first swapped with its left
    neighbour, so that the two moves of the same group become neighbours. Repeats until nothing changes anymore.
    Returns the number of removed moves.
    """
    orig_len = len(moves)
    moves[:] = [m for m in moves if m != Move.N]

    shortened = True
    while shortened:
        shortened = False

        i = 1
        while i < len(moves):
            if i < len(moves)-1 and _is_sandwiched(moves, i):
                moves[i-1], moves[i] = moves[i], moves[i-1]

            if moves[i].group == moves[i-1].group:
                res = compose(moves[i], moves[i-1])
                del moves[i]
                if res == Move.N: del moves[i-1]
                else: moves[i-1] = res
                shortened = True
            i += 1

    log.LOGGER.log(logging.DEBUG, f"Compacted {orig_len} moves to {len(moves)}")
    return orig_len - len(moves)

def compact(moves: typing.Iterable[Move]) -> typing.List[Move]:
    moves = list(moves)
    compact_in_place(moves)
    return moves
