"""Reading and validating ``.cub`` scene descriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from .mathutil import TILE_SIZE

MAP_CHARS = "01 NSWE"
WALKABLE_CHARS = "0NSWE"
PLAYER_CHARS = "NSWE"

_COLOR_NAMES = {"F": "floor", "C": "ceiling"}


class SceneError(ValueError):
    """Raised when a scene file cannot be read or is not valid."""


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, for a positive divisor."""
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


@dataclass(frozen=True)
class GameMap:
    """The tile grid of a scene, with collision queries in world units."""

    rows: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))

    @property
    def width(self) -> int:
        """Width of the widest row, in world units."""
        return max((len(row) for row in self.rows), default=0) * TILE_SIZE

    @property
    def height(self) -> int:
        """Number of rows, in world units."""
        return len(self.rows) * TILE_SIZE

    def _tile(self, col: int, row: int) -> str | None:
        if row < 0 or row >= len(self.rows):
            return None
        line = self.rows[row]
        if col < 0 or col >= len(line):
            return None
        return line[col]

    def has_wall_at(self, x: float, y: float) -> bool:
        """True if the tile under world point (x, y) is not floor.

        Points outside the grid are not walls.
        """
        col = _trunc_div(int(x), TILE_SIZE)
        row = _trunc_div(int(y), TILE_SIZE)
        tile = self._tile(col, row)
        return tile is not None and tile != "0"

    def blocks_player(self, x: float, y: float) -> bool:
        """True if any tile touched by a tiny box around (x, y) is not floor."""
        for offset_y in (-1, 0, 1):
            for offset_x in (-1, 0, 1):
                col = _trunc_div(int(x + offset_x * 0.1), TILE_SIZE)
                row = _trunc_div(int(y + offset_y * 0.1), TILE_SIZE)
                tile = self._tile(col, row)
                if tile is not None and tile != "0":
                    return True
        return False

    def is_floor_cell(self, col: int, row: int) -> bool:
        """True if the grid cell exists and is floor."""
        return self._tile(col, row) == "0"


@dataclass(frozen=True)
class Scene:
    """Everything a scene file describes."""

    north: str
    south: str
    west: str
    east: str
    floor: int
    ceiling: int
    game_map: GameMap
    player_col: int
    player_row: int
    player_dir: str

    @property
    def player_x(self) -> float:
        """Spawn x in world units: the centre of the player's tile."""
        return float(self.player_col * TILE_SIZE + TILE_SIZE // 2)

    @property
    def player_y(self) -> float:
        """Spawn y in world units: the centre of the player's tile."""
        return float(self.player_row * TILE_SIZE + TILE_SIZE // 2)


def _rgb_parts(text: str) -> list[str] | None:
    parts = [part.strip(" ") for part in text.split(",") if part]
    if len(parts) != 3:
        return None
    return parts


def _valid_component(part: str) -> bool:
    if not all("0" <= ch <= "9" for ch in part):
        return False
    return int(part or "0") <= 255


def _valid_rgb(text: str) -> bool:
    parts = _rgb_parts(text)
    return parts is not None and all(_valid_component(part) for part in parts)


def parse_rgb(text: str) -> int:
    """Parse ``"R,G,B"`` into a packed 0xRRGGBBAA colour with full alpha."""
    parts = _rgb_parts(text)
    if parts is None:
        raise SceneError("RGB needs exactly three components")
    for part in parts:
        if not all("0" <= ch <= "9" for ch in part):
            raise SceneError("only numbers in the RGB")
        if int(part or "0") > 255:
            raise SceneError("only numbers betwen 0 and 255 in the RGB")
    red, green, blue = (int(part or "0") for part in parts)
    return red << 24 | green << 16 | blue << 8 | 255


def find_texture_path(lines: Iterable[str], ident: str) -> str | None:
    """Return the path given on the first line starting with ``ident``."""
    for line in lines:
        trimmed = line.strip(" ")
        if trimmed.startswith(ident):
            return trimmed[3:].strip(" ")
    return None


def find_color(lines: Iterable[str], ident: str) -> int:
    """Return the colour of the first well-formed line starting with ``ident``."""
    for line in lines:
        trimmed = line.strip(" ")
        if trimmed.startswith(ident):
            value = trimmed[len(ident):]
            if _valid_rgb(value):
                return parse_rgb(value)
    name = _COLOR_NAMES.get(ident.strip(), ident.strip())
    raise SceneError(f"{name} RGB not found")


def extract_map(lines: Sequence[str]) -> list[str]:
    """Return the trailing lines made only of map characters."""
    start = 0
    for index in range(len(lines) - 1, -1, -1):
        if any(ch not in MAP_CHARS for ch in lines[index]):
            start = index + 1
            break
    return list(lines[start:])


def check_map_characters(grid: Iterable[str]) -> None:
    """Raise SceneError if the grid holds a character that is not allowed."""
    for row in grid:
        if any(ch not in MAP_CHARS for ch in row):
            raise SceneError("map with non-valid characters")


def _flood_leaks(cells: list[list[str]], col: int, row: int) -> bool:
    leak = False
    stack = [(col, row)]
    while stack:
        x, y = stack.pop()
        if y < 0 or x < 0 or y >= len(cells) or x >= len(cells[y]) or cells[y][x] == " ":
            leak = True
            continue
        if cells[y][x] == "1":
            continue
        cells[y][x] = "1"
        stack.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    return leak


def is_closed(grid: Sequence[str]) -> bool:
    """True if no walkable cell can reach a space or the edge of the grid."""
    cells = [list(row) for row in grid]
    for row_index, row in enumerate(grid):
        for col_index, ch in enumerate(row):
            if ch in WALKABLE_CHARS and _flood_leaks(cells, col_index, row_index):
                return False
    return True


def find_player(grid: Sequence[str]) -> tuple[int, int, str]:
    """Return (column, row, direction) of the single player start."""
    found: tuple[int, int, str] | None = None
    for row_index, row in enumerate(grid):
        for col_index, ch in enumerate(row):
            if ch in PLAYER_CHARS:
                if found is not None:
                    raise SceneError("non-valid player quantity")
                found = (col_index, row_index, ch)
    if found is None:
        raise SceneError("non-valid player quantity")
    return found


def parse_scene(text: str) -> Scene:
    """Parse the text of a scene file into a validated Scene."""
    lines = [line for line in text.split("\n") if line]
    paths = [find_texture_path(lines, ident) for ident in ("NO ", "SO ", "WE ", "EA ")]
    if any(path is None for path in paths):
        raise SceneError("texture name")
    north, south, west, east = paths
    floor = find_color(lines, "F ")
    ceiling = find_color(lines, "C ")
    grid = extract_map(lines)
    check_map_characters(grid)
    if not is_closed(grid):
        raise SceneError("map not closed")
    col, row, direction = find_player(grid)
    grid[row] = grid[row][:col] + "0" + grid[row][col + 1:]
    return Scene(
        north=north,
        south=south,
        west=west,
        east=east,
        floor=floor,
        ceiling=ceiling,
        game_map=GameMap(tuple(grid)),
        player_col=col,
        player_row=row,
        player_dir=direction,
    )


def load_scene(path: str | Path) -> Scene:
    """Read and parse a ``.cub`` file."""
    name = str(path)
    if len(name) < 4 or not name.endswith(".cub"):
        raise SceneError("filename")
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise SceneError("Reading file") from exc
    return parse_scene(text)