import asyncio, aioconsole, logging, cubebot, argparse, random, time
from view import CubeView

logging.basicConfig(level=logging.INFO)

parser = argparse.ArgumentParser()
parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
parser.add_argument("-n", "--scramble-length", type=int, default=40, help="Number of random moves used to scramble the cube")
parser.add_argument("--seed", type=int, default=None, help="Seed for the scramble generator")
args = parser.parse_args()

if args.debug: cubebot.LOGGER.setLevel(logging.DEBUG)

rng = random.Random(args.seed)

def print_state(state: cubebot.CubeState):
    for f in cubebot.Face:
        print(f"    {f.name}: {' '.join(c.value for c in state.faces[f])}   (expected {state.face_color(f).value})")
    print(f"    integrity: {state.has_integrity}, solved: {state.is_solved}")

async def solve_cube(state: cubebot.CubeState, view: CubeView):
    if not state.has_integrity:
        print("The cube's colors are invalid (scan failure), load or scramble a new cube")
        return

    start = state.copy()
    solver = cubebot.Solver()

    #Search the solution
    t = time.time()
    try: result = solver.run(state)
    except cubebot.SolverError as e:
        state.faces, state.orientation = start.faces, start.orientation
        print(f"Solver failed: {e}")
        print("The cube has valid colors, but no legal move sequence leads to this state (flipped edge or twisted corner?)")
        return
    t = time.time() - t

    if result.outcome == cubebot.SolveOutcome.UNSOLVABLE_SCRAMBLE:
        print(f"Unsolvable scramble! The cube must have been reassembled incorrectly ({len(result)} moves before detection)")
        return

    print(f"Solution ({len(result)} moves, found in {t*1000:.1f}ms):")
    print(f"    {cubebot.format_moves(result.moves)}")
    for name, length in result.stage_lengths.items(): print(f"    {name + ':':32s} {length:4d}")

    if view and not view.has_exit: view.cube.play_moves(start, result.moves)

async def evaluate(runs: int):
    print(f"Solving {runs} random cubes...")
    ev = await asyncio.get_event_loop().run_in_executor(None, lambda: cubebot.evaluate(runs, 5000, rng))
    print(f"Average solution length: {ev.average_length:.1f} moves (max {ev.max_length})")
    for name, avg in ev.average_stage_lengths.items(): print(f"    {name + ':':32s} {avg:6.1f}")

async def command_loop(state: cubebot.CubeState):
    #Main command loop
    view : CubeView = None
    try:
        while True:
            cmd, *cmd_args = (await aioconsole.ainput("> ")).strip().split(maxsplit=1) or [""]
            cmd = cmd.lower()
            if cmd == "h" or cmd == "help":
                print("(h)elp:        Shows this help text")
                print("(q)uit:        Exits the demo")
                print("(r)andom [n]:  Scrambles the cube with n random moves")
                print("(l)oad <cube>: Loads facelet colors (6 groups of 8 color letters, faces U D L F R B)")
                print("(m)oves <seq>: Applies a move sequence (e.g. 'F DI SR') to the cube")
                print("(p)rint:       Prints the cube's facelets")
                print("(s)olve:       Solves the cube and prints the solution")
                print("(v)iew:        Opens a 3D view of the cube which shows the solution being applied")
                print("(e)val [n]:    Solves n random cubes and prints solution length statistics")
                print("(d)ebug:       Toggles debug logging")
            elif cmd == "q" or cmd == "quit":
                print("Exiting...")
                break
            elif cmd == "r" or cmd == "random":
                state.reset_scrambled(int(cmd_args[0]) if cmd_args else args.scramble_length, rng)
                if view and not view.has_exit: view.cube.show_state(state)
                print(f"Scrambled cube: {state}")
            elif cmd == "l" or cmd == "load":
                try: state = cubebot.CubeState.from_string(cmd_args[0] if cmd_args else "")
                except ValueError as e:
                    print(f"Invalid cube: {e}")
                    continue
                if view and not view.has_exit: view.cube.show_state(state)
                if not state.has_integrity: print(f"Warning: color counts are invalid: {state.color_counts()}")
            elif cmd == "m" or cmd == "moves":
                try: moves = cubebot.parse_moves(cmd_args[0] if cmd_args else "")
                except ValueError as e:
                    print(e)
                    continue
                if view and not view.has_exit: view.cube.play_moves(state, moves)
                state.apply_moves(moves)
            elif cmd == "p" or cmd == "print":
                print_state(state)
            elif cmd == "s" or cmd == "solve":
                await solve_cube(state, view)
            elif cmd == "v" or cmd == "view":
                if not view or view.has_exit:
                    view, _ = await CubeView.run_thread()
                    view.cube.show_state(state)
            elif cmd == "e" or cmd == "eval":
                await evaluate(int(cmd_args[0]) if cmd_args else 100)
            elif cmd == "d" or cmd == "debug":
                if cubebot.LOGGER.level != logging.DEBUG:
                    cubebot.LOGGER.setLevel(logging.DEBUG)
                    print("Enabled debug logging")
                else:
                    cubebot.LOGGER.setLevel(logging.INFO)
                    print("Disabled debug logging")
            elif cmd: print("Unknown command")
    finally:
        if view: view.close_threadsafe()

async def main():
    state = cubebot.CubeState.scrambled(args.scramble_length, rng)
    print(f"Scrambled cube: {state}")
    print("Type 'h' for help")
    await command_loop(state)

asyncio.run(main())
