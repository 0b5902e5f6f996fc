# motion.py
"""
Defines how a particle moves.

Each motion variant owns the position and velocity state of one particle
and advances it by one step per frame, reflecting off the viewport edges.
Variants are selected by name through the MotionKind registry.
"""
import logging
import math
import numbers
from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np

from constants import (
    ZIGZAG_MAX_FREQUENCY, CIRCULAR_RADIUS_MIN, CIRCULAR_RADIUS_MAX,
    CIRCULAR_ANGLE_DIVISOR
)

SpeedParams = Union[float, Sequence[float]]

# --- Data Contracts ---
#
# class Motion (abstract):
#   - __init__(self, x: float, y: float, speed: SpeedParams,
#              rng: np.random.Generator):
#     - Inputs:
#       - x, y: Spawn position.
#       - speed: Either a single maximum magnitude (min is 0) or a
#         (min, max) pair. Both forms are accepted.
#     - Side Effects: Draws a heading from [0, 2*pi) and a speed from
#       [min, max) using rng.
#     - Raises: ValueError on negative or inverted speed bounds.
#
#   - update(self, width: float, height: float) -> None:
#     - Abstract. Advances the position by one step. Whenever the new
#       position lies outside [0, width] x [0, height] the responsible
#       component is reversed for the following steps (no clamping, so a
#       particle may overshoot the edge for one frame).
#     - Invariants: Speed never changes after construction. Position stays
#       finite.

def normalize_speed(speed: SpeedParams) -> Tuple[float, float]:
    """Converts either speed form into a validated (min, max) pair."""
    if isinstance(speed, numbers.Real):
        speed_min, speed_max = 0.0, float(speed)
    else:
        speed_min, speed_max = (float(s) for s in speed)

    if speed_min < 0 or speed_max < 0:
        raise ValueError(f"Speeds must be non-negative, got ({speed_min}, {speed_max}).")
    if speed_min > speed_max:
        raise ValueError(f"speed_min ({speed_min}) must not exceed speed_max ({speed_max}).")
    return speed_min, speed_max


class Motion(ABC):
    """
    Base for all motion variants. Holds position, heading and speed.
    """
    def __init__(self, x: float, y: float, speed: SpeedParams, rng: np.random.Generator):
        speed_min, speed_max = normalize_speed(speed)
        self.x = float(x)
        self.y = float(y)
        self.angle = rng.random() * math.pi * 2
        self.speed = speed_min + rng.random() * (speed_max - speed_min)
        self.velocity_x = math.cos(self.angle) * self.speed
        self.velocity_y = math.sin(self.angle) * self.speed

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @abstractmethod
    def update(self, width: float, height: float) -> None:
        """Advances the position by one step within the given bounds."""


class StraightMotion(Motion):
    """Moves along a fixed heading and bounces off the viewport edges."""
    def update(self, width, height):
        self.x += self.velocity_x
        self.y += self.velocity_y

        if self.x < 0 or self.x > width:
            self.velocity_x *= -1
        if self.y < 0 or self.y > height:
            self.velocity_y *= -1


class ZigzagMotion(Motion):
    """
    Drifts like StraightMotion while oscillating sinusoidally across its
    heading.

    Only the oscillation reflects at the edges; the drift center keeps going
    and may leave the viewport.
    """
    def __init__(self, x, y, speed, rng):
        super().__init__(x, y, speed, rng)
        self.center_x = self.x
        self.center_y = self.y
        self.amplitude = self.speed ** 2
        self.frequency = rng.random() * ZIGZAG_MAX_FREQUENCY
        self.phase = 0.0
        self.offset_sign_x = 1.0
        self.offset_sign_y = 1.0

    def update(self, width, height):
        self.center_x += self.velocity_x
        self.center_y += self.velocity_y

        # Offset is perpendicular to the drift heading.
        displacement = math.cos(self.phase) * self.amplitude
        offset_x = -math.sin(self.angle) * displacement * self.offset_sign_x
        offset_y = math.cos(self.angle) * displacement * self.offset_sign_y

        self.x = self.center_x + offset_x
        self.y = self.center_y + offset_y
        self.phase += self.frequency

        if self.x < 0 or self.x > width:
            self.offset_sign_x *= -1
        if self.y < 0 or self.y > height:
            self.offset_sign_y *= -1


class CircularMotion(Motion):
    """
    Orbits the spawn point on a small circle. Leaving the viewport reverses
    the direction of the orbit.
    """
    def __init__(self, x, y, speed, rng):
        super().__init__(x, y, speed, rng)
        self.center_x = self.x
        self.center_y = self.y
        self.radius = CIRCULAR_RADIUS_MIN + rng.random() * (CIRCULAR_RADIUS_MAX - CIRCULAR_RADIUS_MIN)
        self.direction = 1.0

    def update(self, width, height):
        self.angle += self.direction * self.speed / CIRCULAR_ANGLE_DIVISOR
        self.x = self.center_x + math.cos(self.angle) * self.radius
        self.y = self.center_y + math.sin(self.angle) * self.radius

        if self.x < 0 or self.x > width or self.y < 0 or self.y > height:
            self.direction *= -1


class MotionKind(Enum):
    STRAIGHT = "Straight"
    ZIGZAG = "Zigzag"
    CIRCULAR = "Circular"


MOTION_CLASSES = {
    MotionKind.STRAIGHT: StraightMotion,
    MotionKind.ZIGZAG: ZigzagMotion,
    MotionKind.CIRCULAR: CircularMotion,
}


def motion_names() -> Sequence[str]:
    """The selectable motion names, in display order."""
    return [kind.value for kind in MotionKind]

def resolve_motion_kind(name: Union[str, MotionKind]) -> MotionKind:
    """
    Looks up a motion kind by name (case-insensitive).

    Raises:
        ValueError: If the name is not a registered motion.
    """
    if isinstance(name, MotionKind):
        return name
    for kind in MotionKind:
        if kind.value.lower() == str(name).lower():
            return kind
    msg = f"Unknown motion '{name}'. Available motions: {', '.join(motion_names())}."
    logging.error(msg)
    raise ValueError(msg)

def create_motion(kind: Union[str, MotionKind], x: float, y: float,
                  speed: SpeedParams, rng: np.random.Generator) -> Motion:
    """Instantiates the motion variant registered under `kind`."""
    return MOTION_CLASSES[resolve_motion_kind(kind)](x, y, speed, rng)
