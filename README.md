# mazewalk

A small first-person 3D game. At start-up a 33 x 33 maze is generated by
recursive division; walls block you, you can jump, a sun circles the sky and
lights the maze by day, two bobbing teapots carry pulsing green point lights,
and a flashlight follows your view. Start and end cells are marked by
translucent red blocks.

## Installing

```
pip install .
```

The window asks for an OpenGL 4.6 context with direct state access, so a
graphics driver supporting OpenGL 4.5 or later is required.

## Running

```
mazewalk
```

The command runs `mazewalk.app.main`, which builds an `App`, calls
`App.init()` and then `App.run()`, and exits with status 0 on success and 1
on failure. The maze is printed to the console as it is built (`█` wall,
`X` start or end, `·` open).

## Controls

| Key / input        | Action                                           |
|--------------------|--------------------------------------------------|
| W A S D            | move                                             |
| Left Shift         | sprint (double speed)                            |
| Space              | jump; rise while in free camera                  |
| Left Ctrl          | descend (free camera)                            |
| Mouse              | look around                                      |
| Mouse wheel        | change field of view, kept within 30°–90°        |
| Left mouse button  | capture the cursor (prints `Bang!` if captured)  |
| Right mouse button | release the cursor                               |
| F                  | toggle flashlight                                |
| F1                 | toggle the HUD                                   |
| F2                 | toggle free camera (no collisions, no gravity)   |
| F3                 | toggle vertical sync                             |
| F12                | toggle fullscreen                                |
| Esc                | quit                                             |

## Configuration

`config.json` in the working directory is read by
`mazewalk.config.load_config`:

```json
{
  "antialiasing": false,
  "vsync": false,
  "fullscreen": false,
  "free_cam": false,
  "flashlight": false,
  "window_width": 800,
  "window_height": 600
}
```

- With no file, the `Config` defaults apply: everything off except vsync,
  and an 800 x 600 window.
- With a file, any key it leaves out is taken as off (booleans), 800 (width)
  or 600 (height) — so vsync is off unless the file turns it on.
- A file that is not valid JSON, or holds a value of the wrong kind, is
  reported; settings read before the fault are kept.

## What the package does not include

The game loads its shaders and models from the working directory and none of
them ship with the package. `App.init()` needs:

- `shaders/basic.vert` and `shaders/better.frag`
- `assets/objects/cube_triangles_vnt.obj` and `assets/objects/teapot.obj`
- `assets/textures/ground.png`, `teapot.png`, `yellow.jpg`, `wall.png` and
  `red.jpg`

Without them start-up fails with an error.

## Using the pieces

The maze, movement and scene logic work without a window:

```python
from mazewalk.grid import Grid
from mazewalk.maze import MazeGenerator
from mazewalk.collision import Collision
from mazewalk.world import build_layout

grid = Grid(33, 33, ord("."))
start, end = MazeGenerator(32, 32, 2, seed=7).generate(grid)

collision = Collision(grid, 0.25)
new_pos = collision.movement((1.5, 1.0, 1.5), (0.2, 0.0, 0.0))

blocks = build_layout(grid, 2.0)   # Placement(name, kind, origin, scale)
```

- `mazewalk.grid.Grid` — byte-valued cells addressed as `grid[x, y]`
  (raises `IndexError` outside), with tolerant `get` and `set`.
- `mazewalk.maze.MazeGenerator` — rounds rows and columns up to odd numbers
  and returns the `(start, end)` cells it marked.
- `mazewalk.collision.Collision` — slides a square footprint along walls,
  X axis first, then Z.
- `mazewalk.objloader.load_obj` — reads `v`, `vt`, `vn` and triangular
  `f a/b/c` records into an `ObjMesh`, merging repeated corners; other face
  forms raise `ObjFormatError`.
- `mazewalk.transforms` — `translate`, `scale`, `rotate`, `perspective`,
  `look_at` and `normalize` on 4 x 4 numpy matrices.
- `mazewalk.camera.Camera` — yaw/pitch camera fed with a set of `MoveKey`
  values and mouse offsets.
- `mazewalk.world` — `GameState` (toggles, field of view, jumping),
  `CursorTracker`, `sun_position`, `sky_brightness`, `sun_intensity`,
  `teapot_light` and `sort_back_to_front`.
- `mazewalk.gldebug` — names and one-line formatting for GL debug messages.