import typing, enum, math

class Group(enum.Enum):
    FRONT = enum.auto()
    DOWN = enum.auto()
    CUBE = enum.auto()

    @property
    def axis(self) -> typing.Tuple[int, int, int]: return {
        Group.FRONT: ( 0,  0, -1),
        Group.DOWN:  ( 0, +1,  0),
        Group.CUBE:  ( 0, +1,  0)
    }[self]

    @property
    def moves(self) -> typing.Tuple["Move", "Move", "Move"]:
        #Quarter, half and inverse quarter turn, indexed by quantum mod 4 - 1
        return {
            Group.FRONT: (Move.F, Move.SF, Move.FI),
            Group.DOWN:  (Move.D, Move.SD, Move.DI),
            Group.CUBE:  (Move.R, Move.SR, Move.RI)
        }[self]

class Move(enum.Enum):
    F = "F"
    FI = "FI"
    SF = "SF"
    D = "D"
    DI = "DI"
    SD = "SD"
    R = "R"
    RI = "RI"
    SR = "SR"
    N = "N"

    @property
    def group(self) -> typing.Optional[Group]: return {
        Move.F: Group.FRONT, Move.FI: Group.FRONT, Move.SF: Group.FRONT,
        Move.D: Group.DOWN, Move.DI: Group.DOWN, Move.SD: Group.DOWN,
        Move.R: Group.CUBE, Move.RI: Group.CUBE, Move.SR: Group.CUBE,
        Move.N: None
    }[self]

    @property
    def quantum(self) -> int:
        if self == Move.N: return 0
        if self.value.endswith('I'): return -1
        if self.value.startswith('S'): return +2
        return +1

    @property
    def inverse(self) -> "Move":
        if self.group is None: return self
        return self.group.moves[(-self.quantum) % 4 - 1]

    @property
    def angle(self) -> float: return self.quantum * math.pi / 2

    @property
    def axis(self) -> typing.Tuple[int, int, int]: return self.group.axis if self.group else (0, 0, 0)

    def __str__(self): return self.value

#All moves which actually change the cube
TURNS: typing.List[Move] = [m for m in Move if m != Move.N]

def compose(move1: Move, move2: Move) -> Move:
    if move1.group != move2.group or move1.group is None:
        raise ValueError(f"Can't compose moves {move1} and {move2} of different groups")

    q = (move1.quantum + move2.quantum) % 4
    if q == 0: return Move.N
    return move1.group.moves[q - 1]

def parse_moves(text: str) -> typing.List[Move]:
    moves = []
    for sym in text.replace(",", " ").split():
        try: moves.append(Move(sym.upper()))
        except ValueError: raise ValueError(f"Unknown move '{sym}'") from None
    return moves

def format_moves(moves: typing.Iterable[Move]) -> str: return " ".join(str(m) for m in moves)
