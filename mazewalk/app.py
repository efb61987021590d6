"""The maze-walking application: window, input, scene and frame loop."""

from __future__ import annotations

import math
import os
import sys
import time
from typing import Any, Sequence

import numpy as np

from . import logger
from .camera import Camera, MoveKey
from .collision import Collision
from .config import Config, load_config
from .gldebug import message_callback
from .grid import CELL_END, CELL_START, CELL_WALL, Grid
from .maze import MazeGenerator
from .model import Model
from .shader import ShaderProgram
from .transforms import normalize, perspective, scale, translate
from .world import (
    Action,
    GameState,
    build_layout,
    sky_brightness,
    sort_back_to_front,
    sun_intensity,
    sun_position,
    teapot_light,
)

__all__ = ["App", "main"]

MAZE_WIDTH = 32
MAZE_DEPTH = 32
MAX_TEAPOTS = 2
WALL_HEIGHT = 2.0
WALK_SPEED = 5.0
NEAR_PLANE = 0.1
FAR_PLANE = 100.0

_HUD_X = 10
_HUD_Y = 10
_HUD_WIDTH = 350
_HUD_HEIGHT = 150
_ON_OFF = {True: "ON", False: "OFF"}


def _render_map(grid: Grid) -> str:
    symbols = {CELL_WALL: "█", CELL_START: "X", CELL_END: "X"}
    rows = (
        "".join(symbols.get(grid[x, y], "·") for x in range(grid.width))
        for y in range(grid.height)
    )
    return "\n".join(rows)


def _gl_string(pointer: Any) -> str:
    """Read a NUL-terminated GL string from the pointer GL returned."""
    if not pointer:
        return ""
    raw = bytearray()
    index = 0
    while pointer[index]:
        raw.append(pointer[index])
        index += 1
    return raw.decode("utf-8", errors="replace")


class App:
    """Owns the window, the scene of models and the per-frame game logic.

    Construction reads the settings file but touches no window or GL state;
    :meth:`init` opens the window and loads assets, :meth:`run` runs the loop.
    """

    def __init__(self, config_path: str | os.PathLike = "config.json") -> None:
        self.config_path = config_path
        self.config: Config = load_config(config_path)
        self.state = GameState(self.config)

        self.camera = Camera((0.0, 0.0, 2.0))
        self.grid = Grid(MAZE_WIDTH + 1, MAZE_DEPTH + 1)
        self.collision = Collision(self.grid, 0.25)
        self.scene: dict[str, Model] = {}
        self.shader = ShaderProgram()

        self.window: Any = None
        self.win_width = self.config.window_width
        self.win_height = self.config.window_height
        self._windowed_pos = (100, 100)
        self._windowed_size = (self.win_width, self.win_height)

        self.width = 0
        self.height = 0
        self.projection = np.identity(4)

        self._keys: Any = None
        self._move_keys: dict[int, MoveKey] = {}
        self._actions: dict[int, Action] = {}
        self._cursor_captured = False
        self._quit = False
        self._start_time = time.perf_counter()
        self._debug_proc: Any = None
        self._hud_batch: Any = None
        self._hud_label: Any = None
        self._hud_panel: Any = None

    # ------------------------------------------------------------------ setup

    def init(self) -> bool:
        """Open the window, set up GL state, build the maze and load assets.

        Returns False when no suitable window can be created.
        """
        try:
            import pyglet
            from pyglet import gl
            from pyglet.gl import gl_info

            samples = 4 if self.state.antialiasing else 0
            gl_config = gl.Config(
                major_version=4,
                minor_version=6,
                forward_compatible=True,
                double_buffer=True,
                depth_size=24,
                sample_buffers=1 if samples else 0,
                samples=samples,
            )
            try:
                self.window = pyglet.window.Window(
                    width=self.win_width,
                    height=self.win_height,
                    caption="OpenGL context",
                    fullscreen=self.state.fullscreen,
                    vsync=self.state.vsync,
                    resizable=True,
                    config=gl_config,
                )
            except pyglet.window.NoSuchConfigException as exc:
                logger.error(f"Cannot create window: {exc}")
                return False
            self._start_time = time.perf_counter()

            self._set_cursor_captured(True)
            self._print_gl_info()
            self.window.set_vsync(self.state.vsync)

            if self.state.antialiasing:
                gl.glEnable(gl.GL_MULTISAMPLE)
            gl.glEnable(gl.GL_DEPTH_TEST)
            gl.glDepthFunc(gl.GL_LESS)

            debug_proc_type = getattr(gl, "GLDEBUGPROC", None)
            if debug_proc_type is not None:
                self._debug_proc = debug_proc_type(message_callback)
                gl.glDebugMessageCallback(self._debug_proc, None)
                gl.glEnable(gl.GL_DEBUG_OUTPUT)
            gl.glEnable(gl.GL_CULL_FACE)

            if not (
                gl_info.have_extension("GL_ARB_direct_state_access")
                or gl_info.have_version(4, 5)
            ):
                raise RuntimeError("No DSA :-(")

            self._install_handlers()

            generator = MazeGenerator(MAZE_DEPTH, MAZE_WIDTH)
            generator.generate(self.grid)
            self.camera.position = np.array([-10.0, 1.0, -10.0])

            self._init_assets()

            gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
            gl.glDepthFunc(gl.GL_LEQUAL)

            self._init_hud()
        except Exception as exc:
            logger.error(f"Init failed : {exc}")
            raise
        print("Initialized...")
        return True

    def _install_handlers(self) -> None:
        from pyglet.window import key

        self._keys = key.KeyStateHandler()
        self._move_keys = {
            key.W: MoveKey.FORWARD,
            key.S: MoveKey.BACKWARD,
            key.A: MoveKey.LEFT,
            key.D: MoveKey.RIGHT,
            key.SPACE: MoveKey.UP,
            key.LCTRL: MoveKey.DOWN,
            key.LSHIFT: MoveKey.SPRINT,
        }
        self._actions = {
            key.ESCAPE: Action.QUIT,
            key.SPACE: Action.JUMP,
            key.F: Action.TOGGLE_FLASHLIGHT,
            key.F1: Action.TOGGLE_HUD,
            key.F2: Action.TOGGLE_FREE_CAM,
            key.F3: Action.TOGGLE_VSYNC,
            key.F12: Action.TOGGLE_FULLSCREEN,
        }
        self.window.push_handlers(self._keys)
        self.window.push_handlers(
            on_key_press=self._on_key_press,
            on_mouse_scroll=self._on_mouse_scroll,
            on_mouse_motion=self._on_mouse_motion,
            on_mouse_drag=self._on_mouse_drag,
            on_mouse_press=self._on_mouse_press,
            on_resize=self._on_resize,
        )

    def _init_assets(self) -> None:
        self.shader = ShaderProgram("shaders/basic.vert", "shaders/better.frag")
        cube = "assets/objects/cube_triangles_vnt.obj"

        floor = Model(cube, self.shader, "assets/textures/ground.png")
        floor.transparent = False
        floor.origin = np.array([0.0, 0.0, 0.0])
        floor.scale = np.array([64.0, 0.1, 64.0])
        self.add_to_scene("floor", floor)

        teapot = Model("assets/objects/teapot.obj", self.shader, "assets/textures/teapot.png")
        for name, origin in (("tp1", (30.0, 1.0, 30.0)), ("tp2", (2.0, 1.0, 2.0))):
            copy = teapot.copy()
            copy.origin = np.array(origin)
            copy.scale = np.full(3, 0.15)
            self.add_to_scene(name, copy)

        sun = Model(cube, self.shader, "assets/textures/yellow.jpg")
        sun.transparent = False
        sun.origin = np.array([-4.0, 6.0, -4.0])
        sun.scale = np.full(3, 2.0)
        self.add_to_scene("sun", sun)

        wall_template = Model(cube, self.shader, "assets/textures/wall.png")
        box_template = Model(cube, self.shader, "assets/textures/red.jpg")
        box_template.transparent = True

        for placement in build_layout(self.grid, WALL_HEIGHT):
            template = wall_template if placement.kind == "wall" else box_template
            block = template.copy()
            block.origin = np.array(placement.origin)
            block.scale = np.array(placement.scale)
            self.add_to_scene(placement.name, block)

        print(_render_map(self.grid))

    def _init_hud(self) -> None:
        import pyglet

        self._hud_batch = pyglet.graphics.Batch()
        self._hud_panel = pyglet.shapes.Rectangle(
            _HUD_X, 0, _HUD_WIDTH, _HUD_HEIGHT, color=(0, 0, 0), batch=self._hud_batch
        )
        self._hud_panel.opacity = 102
        self._hud_label = pyglet.text.Label(
            "",
            x=_HUD_X + 4,
            y=0,
            width=_HUD_WIDTH - 8,
            multiline=True,
            anchor_y="top",
            font_size=10,
            batch=self._hud_batch,
        )

    def _print_gl_info(self) -> None:
        from pyglet import gl

        def text(name: int) -> str:
            return _gl_string(gl.glGetString(name))

        logger.info("\n============= :: GL Info :: =============\n")
        logger.info(f"GL Vendor:\t{text(gl.GL_VENDOR)}")
        logger.info(f"GL Renderer:\t{text(gl.GL_RENDERER)}")
        logger.info(f"GL Version:\t{text(gl.GL_VERSION)}")
        logger.info(f"GL Shading ver:\t{text(gl.GL_SHADING_LANGUAGE_VERSION)}\n")

        profile = gl.GLint(0)
        gl.glGetIntegerv(gl.GL_CONTEXT_PROFILE_MASK, profile)
        error_code = gl.glGetError()
        if error_code:
            logger.info(f"[!] Pending GL error while obtaining profile: {error_code}")
        if profile.value & gl.GL_CONTEXT_CORE_PROFILE_BIT:
            logger.info("Core profile")
        else:
            logger.info("Compatibility profile")
        logger.info("=========================================\n\n")

    # ----------------------------------------------------------------- events

    def _on_key_press(self, symbol: int, modifiers: int) -> bool | None:
        import pyglet

        action = self._actions.get(symbol)
        if action is None:
            return None
        result = self.state.press_key(action)
        if result is Action.QUIT:
            self._quit = True
        elif result is Action.TOGGLE_VSYNC:
            self._apply_vsync()
        elif result is Action.TOGGLE_FULLSCREEN:
            self.toggle_fullscreen()
        return pyglet.event.EVENT_HANDLED

    def _on_mouse_scroll(self, x: int, y: int, scroll_x: float, scroll_y: float) -> None:
        self.state.apply_scroll(float(scroll_y))
        self.update_projection()

    def _on_mouse_motion(self, x: int, y: int, dx: float, dy: float) -> None:
        self.camera.handle_mouse(float(dx), float(dy))

    def _on_mouse_drag(
        self, x: int, y: int, dx: float, dy: float, buttons: int, modifiers: int
    ) -> None:
        self.camera.handle_mouse(float(dx), float(dy))

    def _on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> None:
        from pyglet.window import mouse

        if button == mouse.LEFT:
            if not self._cursor_captured:
                self._set_cursor_captured(True)
            else:
                print("Bang!")
        elif button == mouse.RIGHT:
            self._set_cursor_captured(False)

    def _on_resize(self, width: int, height: int) -> None:
        from pyglet import gl

        fb_width, fb_height = self.window.get_framebuffer_size()
        self.width, self.height = fb_width, fb_height
        gl.glViewport(0, 0, fb_width, fb_height)
        self.update_projection()

    def _set_cursor_captured(self, captured: bool) -> None:
        self._cursor_captured = captured
        if self.window is not None:
            self.window.set_exclusive_mouse(captured)

    # ---------------------------------------------------------------- actions

    def add_to_scene(self, name: str, model: Model | None) -> None:
        """Store a copy of ``model`` under ``name``, replacing any earlier one."""
        if model is None:
            logger.error("Attempting to add a null model to the scene.")
            return
        self.scene[name] = model.copy()

    def find_in_scene(self, name: str) -> Model | None:
        """Return the model called ``name``, or None (reported) if absent."""
        model = self.scene.get(name)
        if model is None:
            logger.error(f"Model not found: {name}")
        return model

    def toggle_vsync(self) -> None:
        """Switch vertical sync on or off."""
        self.state.vsync = not self.state.vsync
        self._apply_vsync()

    def _apply_vsync(self) -> None:
        if self.window is not None:
            self.window.set_vsync(self.state.vsync)
        logger.info(f"VSync: {_ON_OFF[bool(self.state.vsync)]}")

    def toggle_fullscreen(self) -> None:
        """Switch between fullscreen and the last windowed size and position."""
        if self.window is None:
            raise RuntimeError("no window to switch to fullscreen")
        from pyglet import gl

        if not self.state.fullscreen:
            self._windowed_pos = self.window.get_location()
            self._windowed_size = self.window.get_size()

        self.state.fullscreen = not self.state.fullscreen

        if self.state.fullscreen:
            self.window.set_fullscreen(True)
            new_width, new_height = self.window.get_size()
        else:
            new_width, new_height = self._windowed_size
            self.window.set_fullscreen(False, width=new_width, height=new_height)
            self.window.set_location(*self._windowed_pos)

        self.win_width, self.win_height = new_width, new_height
        gl.glViewport(0, 0, self.win_width, self.win_height)
        self.update_projection()
        logger.error(f"WINDOW: {'FULLSCREEN' if self.state.fullscreen else 'WINDOWED'}")

    def update_projection(self) -> np.ndarray:
        """Recompute the perspective projection from the size and field of view."""
        if self.height < 1:
            self.height = 1
        if self.width < 1:
            self.width = 1
        ratio = self.width / self.height
        self.projection = perspective(
            math.radians(self.state.fov), ratio, NEAR_PLANE, FAR_PLANE
        )
        return self.projection

    # ------------------------------------------------------------------- loop

    def run(self) -> int:
        """Run the frame loop until the window closes; return an exit status."""
        try:
            if self.window is None:
                raise RuntimeError("the application has not been initialised")
            self.shader.activate()
            self.width, self.height = self.window.get_framebuffer_size()
            self.update_projection()
            self.shader.set_uniform("uP_m", self.projection)

            fps_timer = 0.0
            fps_frames = 0
            fps_display = 0
            last_time = self._now()

            while not (self._quit or self.window.has_exit):
                now = self._now()
                delta = now - last_time
                last_time = now

                fps_timer += delta
                fps_frames += 1
                if fps_timer >= 1.0:
                    fps_display = fps_frames
                    fps_frames = 0
                    fps_timer = 0.0

                self._frame(now, delta, fps_display)
                self.window.flip()
                self.window.dispatch_events()
        except Exception as exc:
            logger.error(f"App failed : {exc}")
            return 1
        print("Finished OK...")
        return 0

    def _now(self) -> float:
        return time.perf_counter() - self._start_time

    def _pressed_keys(self) -> set[MoveKey]:
        return {move for symbol, move in self._move_keys.items() if self._keys[symbol]}

    def _move_camera(self, delta: float) -> None:
        movement = self.camera.handle_input(self._pressed_keys(), delta * WALK_SPEED)
        if self.state.free_cam:
            self.camera.position = self.camera.position + movement
            return
        position = self.collision.movement(
            self.camera.position, (movement[0], 0.0, movement[2])
        )
        position[1] = self.state.step_vertical(position[1], movement[1], delta)
        self.camera.position = position

    def _set_teapot_lights(self, now: float) -> None:
        count = 0
        for i in range(1, MAX_TEAPOTS + 1):
            name = f"tp{i}"
            if name not in self.scene or count >= MAX_TEAPOTS:
                continue
            teapot = self.scene[name]
            light = teapot_light(i, now, teapot.origin)
            teapot.local_model_matrix = scale(
                translate(np.identity(4), light.position), teapot.scale
            )
            position = teapot.local_model_matrix[:3, 3].copy()

            light_name = f"teapotLight[{count}]"
            self.shader.set_uniform(f"{light_name}.position", position)
            self.shader.set_uniform(f"{light_name}.diffuse", light.color)
            self.shader.set_uniform(f"{light_name}.specular", light.specular)
            self.shader.set_uniform(f"{light_name}.constant", light.constant)
            self.shader.set_uniform(f"{light_name}.linear", light.linear)
            self.shader.set_uniform(f"{light_name}.exponent", light.exponent)

            emissive = f"teapotEmissive[{count}]"
            self.shader.set_uniform(f"{emissive}.color", light.color)
            self.shader.set_uniform(f"{emissive}.position", position)
            self.shader.set_uniform(f"{emissive}.radius", light.emissive_radius)
            count += 1

        self.shader.set_uniform("teapotCount", count)
        self.shader.set_uniform("pointLightOn", 1)

    def _set_spotlight(self) -> None:
        shader = self.shader
        shader.set_uniform("uV_m", self.camera.view_matrix())
        shader.set_uniform("viewPos", self.camera.position)
        shader.set_uniform("spotLight.diffuse", (0.8, 0.8, 0.8))
        shader.set_uniform("spotLight.specular", (1.0, 1.0, 1.0))
        shader.set_uniform("spotLight.position", self.camera.position)
        shader.set_uniform("spotLight.direction", self.camera.front)
        shader.set_uniform("spotLight.cosInnerCone", math.cos(math.radians(15.0)))
        shader.set_uniform("spotLight.cosOuterCone", math.cos(math.radians(20.0)))
        shader.set_uniform("spotLight.constant", 1.0)
        shader.set_uniform("spotLight.linear", 0.07)
        shader.set_uniform("spotLight.exponent", 0.0017)
        shader.set_uniform("SpotlightLightOn", 1 if self.state.flashlight_on else 0)

    def _set_sunlight(self, sun_pos: Sequence[float]) -> None:
        shader = self.shader
        shader.set_uniform("directionalLightOn", 1)
        shader.set_uniform("directionLight.direction", normalize(-np.asarray(sun_pos)))
        intensity = sun_intensity(float(sun_pos[1]))
        if intensity > 0.0:
            shader.set_uniform("directionLight.diffuse", np.array([0.8, 0.8, 0.6]) * intensity)
            shader.set_uniform("directionLight.specular", np.full(3, 0.5) * intensity)
            shader.set_uniform("directionalLightOn", 1)
        else:
            shader.set_uniform("directionalLightOn", 0)
        shader.set_uniform("sunEmissive.position", sun_pos)
        shader.set_uniform("sunEmissive.color", (1.0, 1.0, 0.5))
        shader.set_uniform("sunEmissive.radius", 10.0)

    def _frame(self, now: float, delta: float, fps: int) -> None:
        from pyglet import gl

        self.shader.activate()
        self.shader.set_uniform("uP_m", self.projection)

        self._move_camera(delta)
        self._set_teapot_lights(now)

        sun_pos = sun_position(now)
        sun = self.find_in_scene("sun")
        if sun is not None:
            sun.origin = sun_pos
        brightness = sky_brightness(float(sun_pos[1]))
        gl.glClearColor(0.85 * brightness, 0.9 * brightness, 1.0 * brightness, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

        self.shader.set_uniform("ambient", (0.03, 0.03, 0.03))
        self._set_spotlight()
        self._set_sunlight(sun.origin if sun is not None else sun_pos)

        transparent = []
        for name, model in self.scene.items():
            if model.transparent:
                transparent.append(model)
                continue
            self.shader.set_uniform("tex_scale", 20.0 if name == "world_floor" else 1.0)
            model.draw()

        ordered = sort_back_to_front(
            transparent, self.camera.position, lambda m: m.local_model_matrix[:3, 3]
        )
        gl.glEnable(gl.GL_BLEND)
        gl.glDepthMask(gl.GL_FALSE)
        gl.glDisable(gl.GL_CULL_FACE)
        for model in ordered:
            model.draw()
        gl.glDisable(gl.GL_BLEND)
        gl.glDepthMask(gl.GL_TRUE)

        if self.state.show_hud:
            self._draw_hud(fps)

    def _draw_hud(self, fps: int) -> None:
        from pyglet import gl

        if self._hud_batch is None:
            return
        position = self.camera.position
        multisample = bool(gl.glIsEnabled(gl.GL_MULTISAMPLE))
        self._hud_label.text = "\n".join(
            [
                f"FPS:              {fps}",
                f"VSync:            {_ON_OFF[bool(self.state.vsync)]}",
                "Camera Position: (X:{:.2f}, Y:{:.2f}, Z:{:.2f})".format(*position),
                f"FreeCam:          {_ON_OFF[bool(self.state.free_cam)]}",
                f"Flashlight:       {_ON_OFF[bool(self.state.flashlight_on)]}",
                f"Antialiasing:     {_ON_OFF[bool(self.state.antialiasing)]}",
                f"Multisample:      {'YES' if multisample else 'NO'}",
                f"FOV:              {self.state.fov:.1f}",
            ]
        )
        top = self.window.height - _HUD_Y
        self._hud_label.y = top - 4
        self._hud_panel.y = top - _HUD_HEIGHT

        gl.glDisable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_BLEND)
        self._hud_batch.draw()
        gl.glDisable(gl.GL_BLEND)
        gl.glEnable(gl.GL_DEPTH_TEST)

    # --------------------------------------------------------------- shutdown

    def close(self) -> None:
        """Release GL resources and close the window."""
        if self.window is None:
            return
        self.shader.clear()
        self._hud_label = None
        self._hud_panel = None
        self._hud_batch = None
        self.window.close()
        self.window = None


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game; return the process exit status."""
    app = App()
    try:
        if app.init():
            return app.run()
    except Exception as exc:
        logger.error(f"App failed : {exc}")
        return 1
    finally:
        app.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())