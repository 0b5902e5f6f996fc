# shapes.py
"""
Defines the visual footprint of a particle.

Each shape variant owns the size, decay and colour state of one particle
and knows how to draw itself centered on a point of a pygame Surface.
Variants are selected by name through the ShapeKind registry.
"""
import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pygame

from constants import (
    SIZE_FLOOR, SHAPE_START_ANGLE, STAR_SPIKES, STAR_INNER_RATIO,
    PENTAGRAM_LINE_WIDTH, MAGIC_CIRCLE_INNER_RING_RATIO, MAGIC_CIRCLE_SPIKES,
    MAGIC_CIRCLE_OUTER_SATELLITE_RATIO, MAGIC_CIRCLE_INNER_SATELLITE_RATIO,
    BEZIER_SEGMENTS, ARC_SEGMENTS, CUSTOM_OUTLINE_COLOR
)
from utils import hsl_color

Point = Tuple[float, float]

# --- Data Contracts ---
#
# class Shape (abstract):
#   - __init__(self, size_min: float, size_max: float, decay_rate: float,
#              rng: np.random.Generator):
#     - Inputs: 0 <= size_min <= size_max, decay_rate >= 0.
#     - Side Effects: Draws size from [size_min, size_max) and hue from
#       [0, 360) using rng.
#     - Raises: ValueError on degenerate input.
#
#   - update(self) -> None:
#     - Side Effects: size = max(SIZE_FLOOR, size - decay_rate). Hue and
#       colour are left untouched.
#     - Invariants: size never increases and never drops below SIZE_FLOOR.
#
#   - draw(self, surface: pygame.Surface, x: float, y: float) -> None:
#     - Abstract. Renders the variant centered at (x, y) using size as the
#       characteristic radius / half-extent.

# --- Geometry Helpers ---

def regular_polygon_points(
    x: float, y: float, radius: float, vertices: int,
    start_angle: float = SHAPE_START_ANGLE, step: Optional[float] = None
) -> List[Point]:
    """
    Returns `vertices` points on a circle of `radius` around (x, y).

    The default step spaces the points evenly; a larger step (e.g. 4*pi/5
    for five vertices) walks the circle several times and yields star
    polygons such as the pentagram.
    """
    if step is None:
        step = 2 * math.pi / vertices
    return [
        (x + math.cos(start_angle + i * step) * radius,
         y + math.sin(start_angle + i * step) * radius)
        for i in range(vertices)
    ]

def star_points(
    x: float, y: float, outer_radius: float, inner_radius: float,
    spikes: int = STAR_SPIKES, start_angle: float = SHAPE_START_ANGLE
) -> List[Point]:
    """Alternates outer and inner vertices every pi/spikes radians."""
    step = math.pi / spikes
    points = []
    for i in range(spikes * 2):
        radius = outer_radius if i % 2 == 0 else inner_radius
        angle = start_angle + i * step
        points.append((x + math.cos(angle) * radius, y + math.sin(angle) * radius))
    return points

def cubic_bezier_points(
    p0: Point, p1: Point, p2: Point, p3: Point, segments: int = BEZIER_SEGMENTS
) -> List[Point]:
    """Flattens one cubic Bezier curve into segments + 1 points."""
    t = np.linspace(0.0, 1.0, segments + 1)[:, np.newaxis]
    control = np.array([p0, p1, p2, p3], dtype=np.float64)
    curve = (
        (1 - t) ** 3 * control[0]
        + 3 * (1 - t) ** 2 * t * control[1]
        + 3 * (1 - t) * t ** 2 * control[2]
        + t ** 3 * control[3]
    )
    return [(float(px), float(py)) for px, py in curve]

def heart_points(x: float, y: float, size: float) -> List[Point]:
    """Outline of a heart built from four cubic Bezier segments, tip at the bottom."""
    s = size
    segments = [
        ((x, y + s), (x, y + s / 2), (x - s, y + s / 4), (x - s, y - s / 2)),
        ((x - s, y - s / 2), (x - s, y - s * 1.2), (x, y - s), (x, y - s / 2)),
        ((x, y - s / 2), (x, y - s), (x + s, y - s * 1.2), (x + s, y - s / 2)),
        ((x + s, y - s / 2), (x + s, y + s / 4), (x, y + s / 2), (x, y + s)),
    ]
    points = []
    for curve in segments:
        flattened = cubic_bezier_points(*curve)
        # Each segment starts where the previous one ended.
        points.extend(flattened if not points else flattened[1:])
    return points

def arc_points(
    x: float, y: float, radius: float, start_angle: float, end_angle: float,
    segments: int = ARC_SEGMENTS
) -> List[Point]:
    """Samples an arc from start_angle to end_angle (either direction)."""
    angles = np.linspace(start_angle, end_angle, segments + 1)
    return [(x + math.cos(a) * radius, y + math.sin(a) * radius) for a in angles]


class Shape(ABC):
    """
    Base for all shape variants. Holds size, decay and colour state.
    """
    def __init__(self, size_min: float, size_max: float, decay_rate: float,
                 rng: np.random.Generator):
        if size_min < 0 or size_max < 0:
            raise ValueError(f"Shape sizes must be non-negative, got [{size_min}, {size_max}).")
        if size_min > size_max:
            raise ValueError(f"size_min ({size_min}) must not exceed size_max ({size_max}).")
        if decay_rate < 0:
            raise ValueError(f"decay_rate must be non-negative, got {decay_rate}.")

        self.size = size_min + rng.random() * (size_max - size_min)
        self.hue = rng.random() * 360
        self.color = hsl_color(self.hue)
        self.decay_rate = decay_rate

    def update(self) -> None:
        """Shrinks the shape by one decay step, floored at SIZE_FLOOR."""
        self.size = max(SIZE_FLOOR, self.size - self.decay_rate)

    @property
    def is_depleted(self) -> bool:
        return self.size <= SIZE_FLOOR

    @abstractmethod
    def draw(self, surface: pygame.Surface, x: float, y: float) -> None:
        """Renders the shape centered at (x, y)."""


class Circle(Shape):
    def draw(self, surface, x, y):
        pygame.draw.circle(surface, self.color, (x, y), self.size)


class Triangle(Shape):
    """Equilateral triangle, apex up, with circumradius equal to size."""
    def draw(self, surface, x, y):
        pygame.draw.polygon(surface, self.color, regular_polygon_points(x, y, self.size, 3))


class Square(Shape):
    def draw(self, surface, x, y):
        rect = pygame.Rect(
            round(x - self.size), round(y - self.size),
            round(self.size * 2), round(self.size * 2)
        )
        pygame.draw.rect(surface, self.color, rect)


class Star(Shape):
    def draw(self, surface, x, y):
        points = star_points(x, y, self.size, self.size * STAR_INNER_RATIO)
        pygame.draw.polygon(surface, self.color, points)


class Pentagon(Shape):
    def draw(self, surface, x, y):
        pygame.draw.polygon(surface, self.color, regular_polygon_points(x, y, self.size, 5))


class Pentagram(Shape):
    """A stroked {5/2} star inside its circumscribed circle."""
    def draw(self, surface, x, y):
        points = regular_polygon_points(x, y, self.size, 5, step=4 * math.pi / 5)
        pygame.draw.polygon(surface, self.color, points, PENTAGRAM_LINE_WIDTH)
        pygame.draw.circle(surface, self.color, (x, y), self.size, PENTAGRAM_LINE_WIDTH)


class Heart(Shape):
    def draw(self, surface, x, y):
        pygame.draw.polygon(surface, self.color, heart_points(x, y, self.size))


class MagicCircle(Shape):
    """
    A stroked composite: two concentric rings, a pair of opposed triangles
    at the outer and inner radius, satellite circles on every triangle
    vertex and chords joining opposite vertices.
    """
    def draw(self, surface, x, y):
        size = self.size
        color = self.color

        for radius in (size, size * MAGIC_CIRCLE_INNER_RING_RATIO):
            pygame.draw.circle(surface, color, (x, y), radius, 1)

        # Three vertices visited with a 240 degree step trace a triangle.
        step = 4 * math.pi / MAGIC_CIRCLE_SPIKES
        for radius in (size, size / 2):
            for start in (SHAPE_START_ANGLE, -SHAPE_START_ANGLE):
                points = regular_polygon_points(x, y, radius, MAGIC_CIRCLE_SPIKES, start, step)
                pygame.draw.polygon(surface, color, points, 1)

        rotation = SHAPE_START_ANGLE
        for _ in range(MAGIC_CIRCLE_SPIKES):
            angle = rotation + step
            for a in (angle, angle + math.pi):
                outer = (x + math.cos(a) * size, y + math.sin(a) * size)
                inner = (x + math.cos(a) * size / 2, y + math.sin(a) * size / 2)
                pygame.draw.circle(surface, color, outer, size * MAGIC_CIRCLE_OUTER_SATELLITE_RATIO, 1)
                pygame.draw.circle(surface, color, inner, size * MAGIC_CIRCLE_INNER_SATELLITE_RATIO, 1)

            chord_start = (x + math.cos(angle) * size, y + math.sin(angle) * size)
            chord_end = (x - math.cos(angle) * size, y - math.sin(angle) * size)
            pygame.draw.line(surface, color, chord_start, chord_end, 1)
            rotation += step * 2


class Custom(Shape):
    """
    Free-form shape: a three-quarter disc with the lower-right quadrant cut
    away, filled in the particle colour and outlined in white.
    """
    def draw(self, surface, x, y):
        points = [(x, y)] + arc_points(x, y, self.size, 0.0, -1.5 * math.pi)
        pygame.draw.polygon(surface, self.color, points)
        pygame.draw.polygon(surface, CUSTOM_OUTLINE_COLOR, points, 1)


class ShapeKind(Enum):
    CIRCLE = "Circle"
    TRIANGLE = "Triangle"
    SQUARE = "Square"
    STAR = "Star"
    PENTAGON = "Pentagon"
    PENTAGRAM = "Pentagram"
    HEART = "Heart"
    MAGIC_CIRCLE = "MagicCircle"
    CUSTOM = "Custom"


SHAPE_CLASSES = {
    ShapeKind.CIRCLE: Circle,
    ShapeKind.TRIANGLE: Triangle,
    ShapeKind.SQUARE: Square,
    ShapeKind.STAR: Star,
    ShapeKind.PENTAGON: Pentagon,
    ShapeKind.PENTAGRAM: Pentagram,
    ShapeKind.HEART: Heart,
    ShapeKind.MAGIC_CIRCLE: MagicCircle,
    ShapeKind.CUSTOM: Custom,
}


def shape_names() -> Sequence[str]:
    """The selectable shape names, in display order."""
    return [kind.value for kind in ShapeKind]

def resolve_shape_kind(name: Union[str, ShapeKind]) -> ShapeKind:
    """
    Looks up a shape kind by name (case-insensitive).

    Raises:
        ValueError: If the name is not a registered shape.
    """
    if isinstance(name, ShapeKind):
        return name
    for kind in ShapeKind:
        if kind.value.lower() == str(name).lower():
            return kind
    msg = f"Unknown shape '{name}'. Available shapes: {', '.join(shape_names())}."
    logging.error(msg)
    raise ValueError(msg)

def create_shape(kind: Union[str, ShapeKind], size_min: float, size_max: float,
                 decay_rate: float, rng: np.random.Generator) -> Shape:
    """Instantiates the shape variant registered under `kind`."""
    return SHAPE_CLASSES[resolve_shape_kind(kind)](size_min, size_max, decay_rate, rng)
