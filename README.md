# raycub

A small first-person raycasting engine. It reads a `.cub` scene file that
names four wall textures, gives floor and ceiling colours and draws a grid
map, then opens a window in which you walk through the maze.

## Installation

```
pip install .
```

## Running

```
raycub path/to/scene.cub
```

Exactly one argument is expected and the file name has to end in `.cub`.
With the wrong number of arguments the command prints a message and exits
with status 1; a scene or texture that cannot be read or is invalid is
reported as `Error: ...` and the command exits without opening a window.

The window is 2000×1000 pixels and is redrawn at most 30 times a second.

### Controls

| Key / input             | Action                            |
|-------------------------|-----------------------------------|
| `W` / `S`               | walk forward / backward           |
| `A` / `D`               | strafe left / right               |
| `←` / `→`               | turn left / right                 |
| mouse in the outer third | turn towards that side; the middle third stops turning |
| `Esc` or closing the window | quit                          |

Walls block movement. A circular minimap in the top-left corner turns with
the player and shows floor in white and everything else in black.

## Scene file format

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0

        1111111111111
        1000000000001
111111111011000001110000000001
1000000000110000011100000000001
1111111111111111111111111111111
```

* `NO`, `SO`, `WE`, `EA` give the image files (anything Pillow can open,
  such as PNG) for walls facing each direction. All four are required.
* `F` and `C` are the floor and ceiling colours: three comma-separated
  integers from 0 to 255.
* Blank lines are ignored. The map is the block of lines at the end of the
  file made only of `0` (floor), `1` (wall) and spaces, plus exactly one of
  `N`, `S`, `E`, `W` marking the player's start cell and facing direction.
* No floor cell may reach a space or the edge of the map: the map must be
  closed by walls.

## Using it as a library

```python
from raycub.scene import load_scene
from raycub.player import Player
from raycub.raycast import cast_all_rays

scene = load_scene("maps/simple.cub")
player = Player(x=scene.player_x, y=scene.player_y, direction=scene.player_dir)
rays = cast_all_rays(scene.game_map, player, num_rays=320)
nearest = min(ray.distance for ray in rays)
```

* `raycub.scene` — `parse_scene(text)` and `load_scene(path)` return a
  frozen `Scene` (texture paths, packed `0xRRGGBBAA` floor and ceiling
  colours, a `GameMap` and the player's start). Invalid input raises
  `SceneError`, a `ValueError`. Helpers such as `parse_rgb`, `extract_map`,
  `is_closed` and `find_player` are available on their own. `GameMap` answers
  `has_wall_at`, `blocks_player` and `is_floor_cell`.
* `raycub.player` — `Player` holds position, heading and the walk, strafe
  and turn flags; `Player.move(game_map)` turns and moves it with collision.
* `raycub.raycast` — `cast_ray` casts one ray against a `GameMap`;
  `cast_all_rays` spreads rays across the player's field of view. A ray that
  hits nothing has distance `FLOAT_MAX`.
* `raycub.textures` — `load_texture` and `load_wall_textures` decode images
  into `Texture` objects of packed colours.
* `raycub.render` — `render_3d`, `render_minimap` and `draw_rectangle` draw
  into a numpy frame of shape `(height, width)` holding packed colours;
  `project_wall`, `wall_texture_column` and `build_strip` are the steps of
  one wall column.
* `raycub.app` — `Game` ties these together: `handle_key(key, pressed)` takes
  key names such as `"w"` or `"left"`, `handle_mouse(x)` takes the cursor's
  x position, and `update(now_ms)` moves, casts and redraws `Game.frame`
  when a frame interval has passed, returning whether it did.
* `raycub.mathutil` — the engine's constants, `normalize_angle` and
  `distance_between_points`.

## Running the tests

```
pip install ".[test]"
pytest
```