import random, pytest
from cubebot import CubeState, Color, Face

@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)

@pytest.fixture
def solved() -> CubeState:
    return CubeState.solved()

@pytest.fixture
def parity_state() -> CubeState:
    #Solved cube with the left and right last layer edges swapped
    state = CubeState.solved()
    state[Face.L, 5], state[Face.R, 5] = state[Face.R, 5], state[Face.L, 5]
    return state

@pytest.fixture
def twisted_corner_state() -> CubeState:
    #Solved cube with the down-front-left corner twisted in place
    state = CubeState.solved()
    state[Face.F, 6], state[Face.L, 4], state[Face.D, 0] = Color.WHITE, Color.ORANGE, Color.GREEN
    return state
