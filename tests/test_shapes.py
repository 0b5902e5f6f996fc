import math

import pytest

from shapes import (
    Shape, ShapeKind, Circle, Star, SHAPE_CLASSES, create_shape, resolve_shape_kind,
    shape_names, regular_polygon_points, star_points, cubic_bezier_points, heart_points
)


def test_shape_base_cannot_be_instantiated(rng):
    with pytest.raises(TypeError):
        Shape(1, 2, 0.1, rng)


def test_size_is_drawn_from_range(rng):
    for _ in range(50):
        shape = Circle(5, 10, 0.05, rng)
        assert 5 <= shape.size < 10
        assert 0 <= shape.hue < 360


def test_equal_size_bounds_give_exact_size(rng):
    assert Circle(5, 5, 1, rng).size == 5


def test_update_subtracts_decay_and_floors_at_zero(rng):
    shape = Circle(2.5, 2.5, 1, rng)
    sizes = []
    for _ in range(5):
        previous = shape.size
        shape.update()
        assert shape.size == max(0.0, previous - 1)
        sizes.append(shape.size)
    assert sizes == [1.5, 0.5, 0.0, 0.0, 0.0]
    assert shape.is_depleted


def test_zero_decay_keeps_size(rng):
    shape = Star(3, 8, 0, rng)
    size = shape.size
    for _ in range(1000):
        shape.update()
    assert shape.size == size
    assert not shape.is_depleted


def test_update_leaves_colour_alone(rng):
    shape = Circle(3, 8, 0.5, rng)
    hue, color = shape.hue, tuple(shape.color)
    shape.update()
    assert shape.hue == hue
    assert tuple(shape.color) == color


@pytest.mark.parametrize("size_min, size_max, decay", [
    (10, 5, 0.1),
    (-1, 5, 0.1),
    (1, 5, -0.1),
])
def test_degenerate_parameters_are_rejected(rng, size_min, size_max, decay):
    with pytest.raises(ValueError):
        Circle(size_min, size_max, decay, rng)


def test_registry_covers_every_kind():
    assert set(SHAPE_CLASSES) == set(ShapeKind)
    assert shape_names() == [
        "Circle", "Triangle", "Square", "Star", "Pentagon",
        "Pentagram", "Heart", "MagicCircle", "Custom",
    ]


def test_resolve_is_case_insensitive():
    assert resolve_shape_kind("magiccircle") is ShapeKind.MAGIC_CIRCLE
    assert resolve_shape_kind(ShapeKind.HEART) is ShapeKind.HEART


def test_unknown_shape_is_rejected():
    with pytest.raises(ValueError, match="Unknown shape"):
        resolve_shape_kind("Hexagon")


@pytest.mark.parametrize("name", shape_names())
def test_every_shape_draws(rng, surface, name):
    shape = create_shape(name, 10, 10, 0.1, rng)
    assert isinstance(shape, SHAPE_CLASSES[resolve_shape_kind(name)])
    shape.draw(surface, 100, 50)
    painted = [
        (x, y) for x in range(80, 121) for y in range(30, 71)
        if tuple(surface.get_at((x, y)))[:3] != (0, 0, 0)
    ]
    assert painted


@pytest.mark.parametrize("name", ["Circle", "Triangle", "Square", "Star", "Pentagon", "Heart"])
def test_filled_shapes_cover_their_center(rng, surface, name):
    shape = create_shape(name, 10, 10, 0.1, rng)
    shape.draw(surface, 100, 50)
    assert tuple(surface.get_at((100, 50)))[:3] == tuple(shape.color)[:3]


def test_star_points_alternate_radii_from_the_top():
    points = star_points(0, 0, 10, 5)
    assert len(points) == 10
    assert points[0] == pytest.approx((0, -10))
    radii = [math.hypot(x, y) for x, y in points]
    assert radii == pytest.approx([10, 5] * 5)
    # 36 degree steps
    assert math.atan2(points[1][1], points[1][0]) == pytest.approx(-math.pi / 2 + math.pi / 5)


def test_triangle_vertices_match_circumradius():
    top, right, left = regular_polygon_points(0, 0, 10, 3)
    assert top == pytest.approx((0, -10))
    assert right == pytest.approx((10 * math.sqrt(3) / 2, 5))
    assert left == pytest.approx((-10 * math.sqrt(3) / 2, 5))


def test_pentagram_visits_every_other_vertex():
    pentagon = regular_polygon_points(0, 0, 10, 5)
    pentagram = regular_polygon_points(0, 0, 10, 5, step=4 * math.pi / 5)
    expected = [pentagon[(2 * i) % 5] for i in range(5)]
    for got, want in zip(pentagram, expected):
        assert got == pytest.approx(want)


def test_bezier_hits_its_end_points():
    curve = cubic_bezier_points((0, 0), (1, 2), (3, 2), (4, 0), segments=8)
    assert len(curve) == 9
    assert curve[0] == pytest.approx((0, 0))
    assert curve[-1] == pytest.approx((4, 0))


def test_heart_is_closed_and_symmetric():
    points = heart_points(50, 50, 10)
    assert points[0] == pytest.approx((50, 60))
    assert points[-1] == pytest.approx((50, 60))
    xs = [x for x, _ in points]
    assert min(xs) == pytest.approx(40)
    assert max(xs) == pytest.approx(60)
