# simulation.py
"""
Drives the playground one frame at a time.

This module defines the SimulationLoop class, which owns the particle
field, the drawing surface and the current strategy selection. Each call
to step() clears the surface, advances the field, draws the particles and
the optional proximity lines, and publishes the live particle count.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

import pygame

from constants import BACKGROUND_COLOR, DEFAULT_NEIGHBOR_COUNT
from motion import MotionKind, SpeedParams, normalize_speed, resolve_motion_kind
from particle import Particle, ParticleField, connection_style
from shapes import ShapeKind, resolve_shape_kind

# --- Data Contracts ---
#
# class SpawnPreset:
#   - Fields: count (int >= 0), size_min <= size_max (>= 0), speed (single
#     max or [min, max]), decay_rate (>= 0).
#   - Raises: ValueError on any degenerate value, at construction.
#
# class SimulationLoop:
#   - __init__(self, field: ParticleField, surface: pygame.Surface, ...):
#     - Starts in LoopState.IDLE.
#
#   - step(self) -> int:
#     - Side Effects: Clears the surface, steps the field with the current
#       viewport bounds, draws every remaining particle, draws proximity
#       lines when enabled. Moves the loop to LoopState.RUNNING.
#     - Outputs: The live particle count after the frame.
#
#   - run(self, frames: Iterable, max_frames: Optional[int]) -> int:
#     - Inputs: Any iterable; one step() per item. The host window passes
#       a generator paced by the display clock, tests pass range(n).
#     - Outputs: Total frames stepped so far.


class LoopState(Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class SpawnPreset:
    """Burst parameters for one kind of pointer input."""
    count: int
    size_min: float
    size_max: float
    speed: SpeedParams
    decay_rate: float

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Preset count must be non-negative, got {self.count}.")
        if self.size_min < 0 or self.size_min > self.size_max:
            raise ValueError(
                f"Preset sizes must satisfy 0 <= size_min <= size_max, "
                f"got [{self.size_min}, {self.size_max})."
            )
        if self.decay_rate < 0:
            raise ValueError(f"Preset decay_rate must be non-negative, got {self.decay_rate}.")
        normalize_speed(self.speed)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "SpawnPreset":
        speed = params['speed']
        if isinstance(speed, list):
            speed = tuple(speed)
        return cls(
            count=int(params['count']),
            size_min=float(params['size_min']),
            size_max=float(params['size_max']),
            speed=speed,
            decay_rate=float(params['decay_rate']),
        )


# A larger burst on a discrete click and a trickle while the pointer moves.
DEFAULT_SPAWN_PRESETS = {
    "click": SpawnPreset(count=30, size_min=5, size_max=10, speed=(0, 3), decay_rate=0.05),
    "move": SpawnPreset(count=10, size_min=1, size_max=3, speed=(0, 1), decay_rate=0.01),
}


def load_spawn_presets(config: Dict[str, Any]) -> Dict[str, SpawnPreset]:
    """Builds presets from the "spawn_presets" config section over the defaults."""
    presets = dict(DEFAULT_SPAWN_PRESETS)
    for name, params in config.get('spawn_presets', {}).items():
        try:
            presets[name] = SpawnPreset.from_dict(params)
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Configuration error: invalid spawn preset '{name}': {e}"
            logging.critical(msg)
            raise ValueError(msg) from e
    logging.debug(f"Spawn presets: {presets}")
    return presets


class SimulationLoop:
    """
    Owns one playground session: field, surface, selection and frame cycle.
    """
    def __init__(self, field: ParticleField, surface: pygame.Surface,
                 shape: Union[str, ShapeKind] = ShapeKind.CIRCLE,
                 motion: Union[str, MotionKind] = MotionKind.STRAIGHT,
                 draw_lines: bool = True,
                 neighbor_count: int = DEFAULT_NEIGHBOR_COUNT,
                 background_color=BACKGROUND_COLOR):
        """
        Initializes the loop in the idle state.

        Args:
            field (ParticleField): The particles to simulate.
            surface (pygame.Surface): Drawing target; its size is the viewport.
            shape: Initially selected shape name.
            motion: Initially selected motion name.
            draw_lines (bool): Whether proximity lines are drawn.
            neighbor_count (int): Lines drawn per particle.
            background_color: Fill colour used to clear each frame.
        """
        self.field = field
        self.shape_kind = resolve_shape_kind(shape)
        self.motion_kind = resolve_motion_kind(motion)
        self.draw_lines = draw_lines
        self.neighbor_count = neighbor_count
        self.background_color = background_color

        self.state = LoopState.IDLE
        self.frame_count = 0
        self.particle_count = len(field)

        self.resize(*surface.get_size(), surface=surface)

        logging.info(
            f"SimulationLoop initialized: shape={self.shape_kind.value}, "
            f"motion={self.motion_kind.value}, lines={'on' if draw_lines else 'off'}."
        )

    # --- External inputs ---

    def select_shape(self, name: Union[str, ShapeKind]) -> ShapeKind:
        """Selects the shape for future spawns. Unknown names raise ValueError."""
        self.shape_kind = resolve_shape_kind(name)
        logging.info(f"Shape selected: {self.shape_kind.value}")
        return self.shape_kind

    def select_motion(self, name: Union[str, MotionKind]) -> MotionKind:
        """Selects the motion for future spawns. Unknown names raise ValueError."""
        self.motion_kind = resolve_motion_kind(name)
        logging.info(f"Motion selected: {self.motion_kind.value}")
        return self.motion_kind

    def toggle_lines(self) -> bool:
        self.draw_lines = not self.draw_lines
        logging.info(f"Proximity lines {'enabled' if self.draw_lines else 'disabled'}.")
        return self.draw_lines

    def resize(self, width: int, height: int, surface: Optional[pygame.Surface] = None) -> None:
        """
        Updates the viewport bounds, optionally swapping in a new surface.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport bounds must be positive, got {width}x{height}.")
        if surface is not None:
            self.surface = surface
        self.width = width
        self.height = height
        # Lines are drawn on their own layer so each can carry its own alpha.
        self._line_layer = pygame.Surface((width, height), pygame.SRCALPHA)
        logging.debug(f"Viewport set to {width}x{height}.")

    def spawn(self, x: float, y: float, preset: SpawnPreset) -> List[Particle]:
        """Spawns a burst at (x, y) using the current shape and motion."""
        spawned = self.field.spawn(
            x, y, preset.count, preset.size_min, preset.size_max,
            preset.speed, preset.decay_rate, self.shape_kind, self.motion_kind
        )
        self.particle_count = len(self.field)
        return spawned

    # --- Frame cycle ---

    def step(self) -> int:
        """
        Executes one frame: clear, advance, draw, connect, publish.

        Returns:
            int: The live particle count.
        """
        self.state = LoopState.RUNNING
        self.surface.fill(self.background_color)

        self.field.step(self.width, self.height)

        # Iterate a snapshot so a failed particle can be dropped mid-pass.
        for particle in list(self.field):
            self._draw_particle(particle)

        if self.draw_lines:
            self._draw_connections()

        self.frame_count += 1
        self.particle_count = len(self.field)
        return self.particle_count

    def run(self, frames: Iterable, max_frames: Optional[int] = None,
            log_throttle: int = 100) -> int:
        """
        Steps once per item of `frames` until it is exhausted or
        `max_frames` is reached.

        Returns:
            int: Total frames stepped.
        """
        for _ in frames:
            self.step()

            # Rule 2.4: Hot loops must throttle logs
            if self.frame_count % log_throttle == 0:
                logging.info(f"Frame {self.frame_count} | Particles: {self.particle_count}")

            if max_frames is not None and self.frame_count >= max_frames:
                logging.info(f"Reached max_steps ({max_frames}). Stopping simulation.")
                break
        return self.frame_count

    def _draw_particle(self, particle: Particle) -> None:
        try:
            particle.draw(self.surface)
        except (pygame.error, ValueError, TypeError) as e:
            logging.warning(f"Dropping {particle!r}: draw failed ({e}).")
            self.field.remove(particle)

    def _draw_connections(self) -> None:
        """Draws a line from every particle to each of its nearest neighbours."""
        layer = self._line_layer
        layer.fill((0, 0, 0, 0))

        for source, neighbor, distance in self.field.connections(self.neighbor_count):
            style = connection_style(distance)
            line_width = round(style.line_width)
            if line_width < 1 or style.opacity <= 0:
                continue
            color = pygame.Color(source.color)
            color.a = round(255 * style.opacity)
            pygame.draw.line(layer, color, source.position, neighbor.position, line_width)

        self.surface.blit(layer, (0, 0))
