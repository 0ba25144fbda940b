import pytest

from raycub.mathutil import TILE_SIZE
from raycub.scene import (
    GameMap,
    SceneError,
    check_map_characters,
    extract_map,
    find_color,
    find_player,
    find_texture_path,
    is_closed,
    load_scene,
    parse_rgb,
    parse_scene,
)

HEADER = [
    "NO ./textures/north.png",
    "SO ./textures/south.png",
    "WE ./textures/west.png",
    "EA ./textures/east.png",
    "",
    "F 255,255,255",
    "C 0,0,0",
    "",
]

MAP = [
    "111111",
    "100001",
    "10N001",
    "111111",
]


def scene_text(header=HEADER, grid=MAP):
    return "\n".join(list(header) + list(grid)) + "\n"


def test_parse_scene_textures_and_colors():
    scene = parse_scene(scene_text())
    assert scene.north == "./textures/north.png"
    assert scene.south == "./textures/south.png"
    assert scene.west == "./textures/west.png"
    assert scene.east == "./textures/east.png"
    assert scene.floor == 0xFFFFFFFF
    assert scene.ceiling == 0x000000FF


def test_parse_scene_player_and_map():
    scene = parse_scene(scene_text())
    assert (scene.player_col, scene.player_row, scene.player_dir) == (2, 2, "N")
    assert scene.game_map.rows[2] == "100001"
    assert scene.player_x == TILE_SIZE * 2 + TILE_SIZE // 2
    assert scene.player_y == TILE_SIZE * 2 + TILE_SIZE // 2
    assert scene.game_map.width == len(MAP[0]) * TILE_SIZE
    assert scene.game_map.height == len(MAP) * TILE_SIZE


def test_missing_texture_is_error():
    header = [line for line in HEADER if not line.startswith("WE")]
    with pytest.raises(SceneError, match="texture"):
        parse_scene(scene_text(header=header))


def test_missing_floor_is_error():
    header = [line for line in HEADER if not line.startswith("F")]
    with pytest.raises(SceneError, match="floor"):
        parse_scene(scene_text(header=header))


def test_missing_ceiling_is_error():
    header = [line for line in HEADER if not line.startswith("C")]
    with pytest.raises(SceneError, match="ceiling"):
        parse_scene(scene_text(header=header))


def test_open_map_is_error():
    grid = ["1111", "1N01", "11"]
    with pytest.raises(SceneError, match="not closed"):
        parse_scene(scene_text(grid=grid))


def test_two_players_is_error():
    grid = ["11111", "1NS01", "11111"]
    with pytest.raises(SceneError, match="player"):
        parse_scene(scene_text(grid=grid))


def test_no_player_is_error():
    grid = ["1111", "1001", "1111"]
    with pytest.raises(SceneError, match="player"):
        parse_scene(scene_text(grid=grid))


def test_parse_rgb_extremes():
    assert parse_rgb("255,255,255") == 0xFFFFFFFF
    assert parse_rgb(" 0 , 0 , 0 ") == 0x000000FF


def test_parse_rgb_channels_are_ordered():
    red = parse_rgb("1,0,0")
    green = parse_rgb("0,1,0")
    blue = parse_rgb("0,0,1")
    assert red > green > blue > parse_rgb("0,0,0")


@pytest.mark.parametrize("text", ["256,0,0", "1,2", "1,2,3,4", "a,b,c", "-1,0,0", "+1,0,0"])
def test_parse_rgb_rejects(text):
    with pytest.raises(SceneError):
        parse_rgb(text)


def test_find_color_skips_malformed_line():
    lines = ["F 300,0,0", "F 255,255,255"]
    assert find_color(lines, "F ") == parse_rgb("255,255,255")


def test_find_color_not_found():
    with pytest.raises(SceneError, match="ceiling"):
        find_color(["F 1,2,3"], "C ")


def test_find_texture_path_trims():
    lines = ["   NO    ./a.png   ", "SO ./b.png"]
    assert find_texture_path(lines, "NO ") == "./a.png"
    assert find_texture_path(lines, "EA ") is None


def test_extract_map_takes_trailing_lines():
    lines = ["NO ./a.png", "C 1,2,3", "111", "1N1", "111"]
    assert extract_map(lines) == ["111", "1N1", "111"]


def test_extract_map_all_map_lines():
    lines = ["111", "101"]
    assert extract_map(lines) == lines


def test_check_map_characters_rejects():
    with pytest.raises(SceneError, match="non-valid"):
        check_map_characters(["111", "1X1"])


def test_is_closed():
    assert is_closed(["111", "101", "111"]) is True
    assert is_closed(["111", "10 1", "1111"]) is False
    assert is_closed(["1111", "1001", "11"]) is False


def test_is_closed_does_not_modify_input():
    grid = ["111", "101", "111"]
    is_closed(grid)
    assert grid == ["111", "101", "111"]


def test_find_player():
    assert find_player(["111", "1W1", "111"]) == (1, 1, "W")


def test_has_wall_at():
    game_map = GameMap(("111", "101", "111"))
    assert game_map.has_wall_at(TILE_SIZE * 1.5, TILE_SIZE * 1.5) is False
    assert game_map.has_wall_at(TILE_SIZE * 0.5, TILE_SIZE * 1.5) is True
    assert game_map.has_wall_at(TILE_SIZE * 10, TILE_SIZE * 1.5) is False
    # truncation toward zero: a point just left of the grid falls in column 0
    assert game_map.has_wall_at(-5.0, TILE_SIZE * 0.5) is True


def test_blocks_player():
    game_map = GameMap(("111", "101", "111"))
    assert game_map.blocks_player(TILE_SIZE * 1.5, TILE_SIZE * 1.5) is False
    assert game_map.blocks_player(TILE_SIZE + 0.05, TILE_SIZE * 1.5) is True


def test_is_floor_cell():
    game_map = GameMap(["111", "101", "111"])
    assert game_map.is_floor_cell(1, 1) is True
    assert game_map.is_floor_cell(0, 1) is False
    assert game_map.is_floor_cell(5, 5) is False


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(scene_text())
    scene = load_scene(path)
    assert scene.player_dir == "N"
    assert scene.game_map.rows == tuple(row.replace("N", "0") for row in MAP)


def test_load_scene_bad_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(scene_text())
    with pytest.raises(SceneError, match="filename"):
        load_scene(path)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError, match="Reading"):
        load_scene(tmp_path / "absent.cub")