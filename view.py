import asyncio, threading, collections, pyglet, math, typing, cubebot
from pyglet.math import Vec2, Vec3, Mat4

STICKER_INSET = 0.06

VERT_SHADER_SRC = """
#version 150 core

in vec3 pos;
in vec4 color;
out vec4 vertCol;

uniform WindowBlock {
    mat4 projection;
    mat4 view;
} window;

uniform mat4 cubeMat;

void main() {
    gl_Position = window.projection * window.view * cubeMat * vec4(pos, 1.0);
    vertCol = color;
}
""".strip()

FRAG_SHADER_SRC = """
#version 150 core

in vec4 vertCol;
out vec4 outCol;

void main() {
    outCol = vertCol;
}
""".strip()

_shader: pyglet.graphics.shader.ShaderProgram = None

def sticker_shader() -> pyglet.graphics.shader.ShaderProgram:
    #Needs a GL context, so it can only be created once a window exists
    global _shader
    if _shader is None:
        _shader = pyglet.graphics.shader.ShaderProgram(
            pyglet.graphics.shader.Shader(VERT_SHADER_SRC, "vertex"),
            pyglet.graphics.shader.Shader(FRAG_SHADER_SRC, "fragment")
        )
    return _shader

COLOR_RGBS = {
    cubebot.Color.WHITE: (255, 255, 255),
    cubebot.Color.YELLOW: (255, 213, 0),
    cubebot.Color.RED: (185, 0, 0),
    cubebot.Color.GREEN: (0, 155, 72),
    cubebot.Color.BLUE: (0, 69, 173),
    cubebot.Color.ORANGE: (255, 89, 0),
    cubebot.Color.UNKNOWN: (90, 90, 90)
}

def sticker_verts(face: cubebot.Face, pos: typing.Optional[int]) -> typing.List[float]:
    x, y, z = face.sticker_coords(pos)
    n = face.direction

    #Sticker corners in the face plane, slightly in front of the cubelet
    axis = next(i for i in range(3) if n[i] != 0)
    plane = (3.001 if n[axis] > 0 else -0.001)
    lo, hi = STICKER_INSET, 1 - STICKER_INSET
    u, v = [i for i in range(3) if i != axis]

    corners = []
    for du, dv in [(lo, lo), (hi, lo), (hi, hi), (lo, lo), (hi, hi), (lo, hi)]:
        p = [x, y, z]
        p[axis] = plane
        p[u] += du
        p[v] += dv
        corners += p
    return corners

class Sticker:
    face: cubebot.Face
    pos: typing.Optional[int]
    coords: typing.Tuple[int, int, int]
    verts: pyglet.graphics.vertexdomain.VertexList

    def __init__(self, face: cubebot.Face, pos: typing.Optional[int]):
        self.face, self.pos = face, pos
        self.coords = face.sticker_coords(pos)

        verts = sticker_verts(face, pos)
        self.verts = sticker_shader().vertex_list(len(verts) // 3, pyglet.gl.GL_TRIANGLES, pos=('f', verts), color=('f', [0] * (len(verts) // 3 * 4)))

    def moves_with(self, move: cubebot.Move) -> bool:
        x, y, z = self.coords
        if move.group == cubebot.Group.FRONT: return z == 2
        if move.group == cubebot.Group.DOWN: return y == 0
        return move.group == cubebot.Group.CUBE

    def set_color(self, color: cubebot.Color):
        r, g, b = COLOR_RGBS[color]
        self.verts.color[:] = [r / 255, g / 255, b / 255, 1] * 6

    def draw(self): self.verts.draw(pyglet.gl.GL_TRIANGLES)

class Cube:
    TURN_SPEED = 4*math.pi

    cube_mat: Mat4
    stickers: typing.List[Sticker]

    _lock: threading.Lock
    _queue: typing.Deque[typing.Tuple[cubebot.Move, cubebot.CubeState]]

    _cur_move: cubebot.Move
    _cur_move_angle: float
    _cur_move_end_state: cubebot.CubeState

    def __init__(self, mat):
        self.cube_mat = mat

        self._lock = threading.Lock()
        self._queue = collections.deque()

        self._cur_move = self._cur_move_angle = self._cur_move_end_state = None

        #Create stickers, including the (static) centers
        self.stickers = [Sticker(f, p) for f in cubebot.Face for p in [None, *range(8)]]
        self._set_state(cubebot.CubeState.solved())

        pyglet.clock.schedule(self.update)

    def update(self, dt):
        #Check if there's a move waiting to be shown
        with self._lock:
            if not self._cur_move and self._queue:
                self._cur_move, self._cur_move_end_state = self._queue.popleft()
                self._cur_move_angle = 0

        #Animate the current move, half turns take twice as long as quarter turns
        if not self._cur_move: return
        self._cur_move_angle += Cube.TURN_SPEED * dt

        if self._cur_move_angle >= abs(self._cur_move.angle):
            self._set_state(self._cur_move_end_state)
            self._cur_move = self._cur_move_angle = self._cur_move_end_state = None

    def draw(self):
        shader = sticker_shader()
        with shader:
            shader["cubeMat"] = self.cube_mat

            #Draw stickers
            for s in self.stickers:
                if self._cur_move and s.moves_with(self._cur_move): continue
                s.draw()

            #Draw moving stickers
            if self._cur_move:
                sign = +1 if self._cur_move.quantum > 0 else -1
                shader["cubeMat"] = self.cube_mat @ Mat4.from_rotation(sign * self._cur_move_angle, Vec3(*self._cur_move.axis))

                for s in self.stickers:
                    if s.moves_with(self._cur_move): s.draw()

    def show_state(self, state: cubebot.CubeState):
        with self._lock:
            self._queue.clear()
            self._cur_move = self._cur_move_angle = self._cur_move_end_state = None
            self._set_state(state.copy())

    def play_moves(self, state: cubebot.CubeState, moves: typing.Iterable[cubebot.Move]):
        #Queue a snapshot of the cube after each move
        state = state.copy()
        with self._lock:
            for m in moves:
                if m == cubebot.Move.N: continue
                state.apply_move(m)
                self._queue.append((m, state.copy()))

    def _set_state(self, state: cubebot.CubeState):
        for s in self.stickers:
            s.set_color(state.face_color(s.face) if s.pos is None else state[s.face, s.pos])

class CubeView(pyglet.window.Window):
    cam_angles: Vec2
    cube: Cube

    _lock: threading.Lock
    _should_close: bool

    def __init__(self):
        super().__init__(1024, 1024, caption="Cube Solver View")
        self.set_vsync(True)

        self._lock = threading.Lock()
        self._should_close = False

        #Set up rendering
        pyglet.gl.glClearColor(0.1, 0.1, 0.1, 1)
        pyglet.gl.glEnable(pyglet.gl.GL_DEPTH_TEST)
        self.cam_angles = Vec2(math.pi/6, math.pi/4)

        #Create the cube
        self.cube = Cube(Mat4.from_translation(-Vec3(3,3,3) / 2))

    def on_resize(self, width, height):
        super().on_resize(width, height)
        self.projection = Mat4.perspective_projection(self.aspect_ratio, 0.1, 1000)

    def on_draw(self, dt):
        self.clear()

        #Update view matrix
        sx, cx = math.sin(self.cam_angles.x), math.cos(self.cam_angles.x)
        sy, cy = math.sin(self.cam_angles.y), math.cos(self.cam_angles.y)
        cam_pos = Vec3(sy * cx, sx, cy * cx) * 10
        self.view = Mat4.look_at(cam_pos, Vec3(), -cam_pos.cross(Vec3(0, 1, 0)).cross(-cam_pos).normalize())

        #Draw the cube
        self.cube.draw()

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        if (buttons & pyglet.window.mouse.LEFT) == 0: return
        self.cam_angles.x -= dy / 512
        self.cam_angles.y -= dx / 512
        self.cam_angles.x = pyglet.math.clamp(self.cam_angles.x, -math.pi/2 * 0.9, +math.pi/2 * 0.9)
        self.cam_angles.y = self.cam_angles.y % (2*math.pi)

    def run(self):
        while not self.has_exit:
            with self._lock:
                if self._should_close: break

            dt = pyglet.clock.tick()
            self.dispatch_events()
            self.dispatch_event('on_draw', dt)
            self.flip()

        self.close()

    @staticmethod
    def run_thread(exit_cb: typing.Union[None, typing.Callable] = None) -> asyncio.Future[typing.Tuple["CubeView", threading.Thread]]:
        fut = asyncio.Future()

        def thread_fnc(loop: asyncio.BaseEventLoop):
            view = CubeView()
            loop.call_soon_threadsafe(lambda: fut.set_result((view, threading.current_thread())))
            view.run()
            if exit_cb and loop.is_running(): loop.call_soon_threadsafe(exit_cb)

        threading.Thread(target=thread_fnc, args=(asyncio.get_event_loop(),)).start()

        return fut

    def close_threadsafe(self):
        with self._lock: self._should_close = True

if __name__ == '__main__':
    view = CubeView()
    view.cube.show_state(cubebot.CubeState.scrambled(20))
    view.run()
