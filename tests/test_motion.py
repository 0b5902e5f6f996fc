import math

import numpy as np
import pytest

from motion import (
    Motion, MotionKind, StraightMotion, ZigzagMotion, CircularMotion, MOTION_CLASSES,
    create_motion, motion_names, normalize_speed, resolve_motion_kind
)

WIDTH, HEIGHT = 200, 100


def _outside(motion):
    return motion.x < 0 or motion.x > WIDTH, motion.y < 0 or motion.y > HEIGHT


def test_motion_base_cannot_be_instantiated(rng):
    with pytest.raises(TypeError):
        Motion(0, 0, 1, rng)


def test_normalize_speed_accepts_both_forms():
    assert normalize_speed(3) == (0.0, 3.0)
    assert normalize_speed(np.float64(2.5)) == (0.0, 2.5)
    assert normalize_speed((1, 4)) == (1.0, 4.0)
    assert normalize_speed([0, 1]) == (0.0, 1.0)


@pytest.mark.parametrize("speed", [-1, (3, 1), (-1, 2)])
def test_normalize_speed_rejects_bad_bounds(speed):
    with pytest.raises(ValueError):
        normalize_speed(speed)


def test_speed_is_drawn_from_range(rng):
    for _ in range(50):
        motion = StraightMotion(10, 10, (1, 3), rng)
        assert 1 <= motion.speed < 3
        assert math.hypot(motion.velocity_x, motion.velocity_y) == pytest.approx(motion.speed)


def test_straight_reflects_after_crossing_the_edge(rng):
    motion = StraightMotion(99, 50, 0, rng)
    motion.velocity_x, motion.velocity_y = 2.0, 0.0

    motion.update(100, 100)
    assert motion.x == 101
    assert motion.velocity_x == -2.0

    motion.update(100, 100)
    assert motion.x == 99
    assert motion.velocity_x == -2.0


def test_straight_flips_exactly_on_exit(rng):
    motion = StraightMotion(WIDTH / 2, HEIGHT / 2, (2, 3), rng)
    speed = motion.speed
    for _ in range(500):
        vx, vy = motion.velocity_x, motion.velocity_y
        motion.update(WIDTH, HEIGHT)
        out_x, out_y = _outside(motion)
        assert (motion.velocity_x == -vx) == out_x
        assert (motion.velocity_y == -vy) == out_y
        assert math.isfinite(motion.x) and math.isfinite(motion.y)
    assert math.hypot(motion.velocity_x, motion.velocity_y) == pytest.approx(speed)


def test_zigzag_reflects_offset_not_drift(rng):
    motion = ZigzagMotion(WIDTH / 2, HEIGHT / 2, (2, 3), rng)
    vx, vy = motion.velocity_x, motion.velocity_y
    assert motion.amplitude == pytest.approx(motion.speed ** 2)
    assert 0 <= motion.frequency < 1 / 3

    for step in range(1, 300):
        sign_x, sign_y = motion.offset_sign_x, motion.offset_sign_y
        motion.update(WIDTH, HEIGHT)
        out_x, out_y = _outside(motion)
        assert (motion.offset_sign_x == -sign_x) == out_x
        assert (motion.offset_sign_y == -sign_y) == out_y
        assert math.isfinite(motion.x) and math.isfinite(motion.y)
        # Drift is never reflected.
        assert motion.velocity_x == vx and motion.velocity_y == vy
        assert motion.center_x == pytest.approx(WIDTH / 2 + vx * step)


def test_circular_stays_on_its_orbit(rng):
    motion = CircularMotion(100, 50, (1, 2), rng)
    assert 5 <= motion.radius < 10
    for _ in range(200):
        motion.update(WIDTH, HEIGHT)
        distance = math.hypot(motion.x - 100, motion.y - 50)
        assert distance == pytest.approx(motion.radius)


def test_circular_advances_by_speed_over_divisor(rng):
    motion = CircularMotion(100, 50, (3, 3), rng)
    angle = motion.angle
    motion.update(WIDTH, HEIGHT)
    assert motion.angle == pytest.approx(angle + 3 / 30)


def test_circular_reverses_when_leaving_bounds(rng):
    motion = CircularMotion(2, 50, (3, 3), rng)
    for _ in range(200):
        direction = motion.direction
        motion.update(WIDTH, HEIGHT)
        out_x, out_y = _outside(motion)
        assert (motion.direction == -direction) == (out_x or out_y)


def test_registry_covers_every_kind():
    assert set(MOTION_CLASSES) == set(MotionKind)
    assert motion_names() == ["Straight", "Zigzag", "Circular"]


def test_create_motion_by_name(rng):
    assert isinstance(create_motion("zigzag", 0, 0, 1, rng), ZigzagMotion)
    assert isinstance(create_motion(MotionKind.CIRCULAR, 0, 0, 1, rng), CircularMotion)


def test_unknown_motion_is_rejected():
    with pytest.raises(ValueError, match="Unknown motion"):
        resolve_motion_kind("Spiral")
