import math

import pytest

from raycub.mathutil import FLOAT_MAX, PI, TILE_SIZE, distance_between_points, normalize_angle
from raycub.player import Player
from raycub.raycast import cast_all_rays, cast_ray
from raycub.scene import GameMap

BOX = GameMap(("11111", "10001", "10001", "10001", "11111"))
CENTRE = 2 * TILE_SIZE + TILE_SIZE // 2


def test_east_ray_hits_vertical_wall():
    ray = cast_ray(BOX, CENTRE, CENTRE, 0.0)
    assert ray.hit_vertical is True
    assert ray.wall_hit_x == pytest.approx(4 * TILE_SIZE)
    assert ray.wall_hit_y == pytest.approx(CENTRE)
    assert ray.distance == pytest.approx(4 * TILE_SIZE - CENTRE)
    assert ray.facing_right and not ray.facing_left


def test_south_ray_hits_horizontal_wall():
    ray = cast_ray(BOX, CENTRE, CENTRE, PI / 2)
    assert ray.hit_vertical is False
    assert ray.wall_hit_y == pytest.approx(4 * TILE_SIZE)
    assert ray.wall_hit_x == pytest.approx(CENTRE, abs=1e-2)
    assert ray.facing_down and not ray.facing_up


def test_west_ray_stops_at_inner_face():
    ray = cast_ray(BOX, CENTRE, CENTRE, PI)
    assert ray.hit_vertical is True
    assert ray.wall_hit_x == pytest.approx(TILE_SIZE)
    assert ray.facing_left


def test_angle_is_normalized():
    ray = cast_ray(BOX, CENTRE, CENTRE, -PI / 4)
    assert ray.angle == pytest.approx(normalize_angle(-PI / 4))
    assert ray.facing_up and ray.facing_right


@pytest.mark.parametrize("angle", [0.3, 1.1, 2.0, 2.9, 3.7, 4.4, 5.1, 6.0])
def test_distance_matches_hit_point(angle):
    ray = cast_ray(BOX, CENTRE + 123, CENTRE - 321, angle)
    assert ray.distance == pytest.approx(
        distance_between_points(CENTRE + 123, CENTRE - 321, ray.wall_hit_x, ray.wall_hit_y)
    )
    assert TILE_SIZE - 1 <= ray.wall_hit_x <= 4 * TILE_SIZE + 1
    assert TILE_SIZE - 1 <= ray.wall_hit_y <= 4 * TILE_SIZE + 1
    assert ray.facing_up != ray.facing_down
    assert ray.facing_left != ray.facing_right


def test_ray_in_empty_map_hits_nothing():
    ray = cast_ray(GameMap(()), 10.0, 10.0, 0.7)
    assert ray.distance == FLOAT_MAX
    assert (ray.wall_hit_x, ray.wall_hit_y) == (0.0, 0.0)
    assert ray.hit_vertical is False


def test_cast_all_rays_spans_fov():
    player = Player(x=CENTRE, y=CENTRE, direction="N")
    rays = cast_all_rays(BOX, player, 16)
    assert len(rays) == 16
    assert rays[0].angle == pytest.approx(normalize_angle(player.rotation_angle - player.fov / 2))
    step = player.fov / 16
    for before, after in zip(rays, rays[1:]):
        assert normalize_angle(after.angle - before.angle) == pytest.approx(step)
    assert all(math.isfinite(ray.distance) and ray.distance < FLOAT_MAX for ray in rays)


def test_cast_all_rays_centre_ray_points_ahead():
    player = Player(x=CENTRE, y=CENTRE, direction="E")
    rays = cast_all_rays(BOX, player, 2)
    assert rays[1].angle == pytest.approx(0.0, abs=1e-6)
    assert rays[1].wall_hit_x == pytest.approx(4 * TILE_SIZE)