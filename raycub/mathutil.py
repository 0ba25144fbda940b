"""Engine constants and small geometry helpers."""

from __future__ import annotations

import math

FRAMES = 30
SPEED = 15
TURN_SPEED = 4
TILE_SIZE = 2000
WINDOW_WIDTH = 2000
WINDOW_HEIGHT = 1000
NUM_RAYS = WINDOW_WIDTH
PLAYER_SIZE = 10

MINI_R = 150
MINI_T = 15

FLOAT_MAX = 3.402823466e38
PI = 3.14159265

__all__ = [
    "FRAMES",
    "SPEED",
    "TURN_SPEED",
    "TILE_SIZE",
    "WINDOW_WIDTH",
    "WINDOW_HEIGHT",
    "NUM_RAYS",
    "PLAYER_SIZE",
    "MINI_R",
    "MINI_T",
    "FLOAT_MAX",
    "PI",
    "normalize_angle",
    "distance_between_points",
]


def normalize_angle(angle: float) -> float:
    """Bring an angle in radians into the range [0, 2*PI)."""
    angle = math.remainder(angle, 2 * PI)
    if angle < 0:
        angle = 2 * PI + angle
    return angle


def distance_between_points(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((x2 - x1) * (x2 - x1) + (y2 - y1) * (y2 - y1))