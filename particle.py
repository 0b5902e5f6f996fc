# particle.py
"""
Manages the particles of the playground.

This module defines the Particle class, which composes one shape variant
and one motion variant, and the ParticleField class, which owns the
capacity-bounded, spawn-ordered collection of particles and answers
nearest-neighbour queries for the proximity lines.
"""
import logging
from typing import List, NamedTuple, Optional, Tuple, Union

import numpy as np
from numba import jit

from constants import (
    DEFAULT_MAX_PARTICLES, DEFAULT_NEIGHBOR_COUNT, CONNECTION_FADE_DISTANCE,
    CONNECTION_WIDTH_SCALE
)
from motion import Motion, MotionKind, SpeedParams, create_motion, resolve_motion_kind
from shapes import Shape, ShapeKind, create_shape, resolve_shape_kind

# --- Data Contracts ---
#
# class Particle:
#   - __init__(self, x, y, size_min, size_max, speed, decay_rate,
#              shape_kind, motion_kind, rng):
#     - Inputs: Spawn origin, shape parameters, speed parameters (single
#       max or (min, max) pair), decay per step, registered kind names.
#     - Raises: ValueError on unknown kinds or degenerate parameters.
#
#   - update(self, width: float, height: float) -> None:
#     - Side Effects: Decays the shape, then advances the motion.
#
#   - is_expired(self) -> bool:
#     - Outputs: True once the shape size has reached SIZE_FLOOR.
#
# class ParticleField:
#   - __init__(self, capacity: int, rng: np.random.Generator):
#     - Invariants: len(field) <= capacity at all times. Iteration order is
#       spawn order.
#
#   - spawn(...) -> List[Particle]:
#     - Side Effects: Appends `count` particles, then evicts from the front
#       (oldest first) until len(field) == capacity.
#
#   - step(self, width: float, height: float) -> int:
#     - Side Effects: Updates every particle once, then removes all expired
#       particles. Returns the number removed.
#
#   - nearest_neighbors(self, particle, k) -> List[Tuple[Particle, float]]:
#     - Outputs: Up to k other particles in non-decreasing Euclidean
#       distance, ties broken by spawn order. Never includes `particle`.


class ConnectionStyle(NamedTuple):
    line_width: float
    opacity: float


def connection_style(distance: float) -> ConnectionStyle:
    """
    Styles a proximity line by the distance it spans.

    Width shrinks linearly from 6 at distance 0 and is clamped at 0;
    opacity fades from 1 to 0 over CONNECTION_FADE_DISTANCE.
    """
    line_width = 1 + (CONNECTION_FADE_DISTANCE - distance) / CONNECTION_WIDTH_SCALE
    opacity = 1 - distance / CONNECTION_FADE_DISTANCE
    return ConnectionStyle(max(0.0, line_width), min(1.0, max(0.0, opacity)))


@jit(nopython=True)
def _k_nearest_numba(positions, index, k):
    """
    Numba-jitted scan for the k particles closest to positions[index].

    Keeps a small buffer sorted by distance and inserts with a strict
    comparison, so on equal distances the earlier particle stays ahead.
    """
    particle_count = positions.shape[0]
    best_idx = np.empty(k, dtype=np.int64)
    best_dist = np.empty(k, dtype=np.float64)
    count = 0
    px = positions[index, 0]
    py = positions[index, 1]

    for j in range(particle_count):
        if j == index:
            continue
        dx = positions[j, 0] - px
        dy = positions[j, 1] - py
        distance = np.sqrt(dx * dx + dy * dy)

        if count < k:
            slot = count
            count += 1
        elif distance < best_dist[k - 1]:
            slot = k - 1
        else:
            continue

        # Shift farther entries right to open the insertion slot
        while slot > 0 and best_dist[slot - 1] > distance:
            best_dist[slot] = best_dist[slot - 1]
            best_idx[slot] = best_idx[slot - 1]
            slot -= 1
        best_dist[slot] = distance
        best_idx[slot] = j

    return best_idx[:count], best_dist[:count]

@jit(nopython=True)
def _all_k_nearest_numba(positions, k):
    """
    Numba-jitted full connection pass: k nearest neighbours of every particle.

    This is O(n^2) and the dominant per-frame cost, which bounds the
    useful particle capacity.
    """
    particle_count = positions.shape[0]
    neighbor_idx = np.empty((particle_count, k), dtype=np.int64)
    neighbor_dist = np.empty((particle_count, k), dtype=np.float64)
    counts = np.zeros(particle_count, dtype=np.int64)

    for i in range(particle_count):
        idx, dist = _k_nearest_numba(positions, i, k)
        c = idx.shape[0]
        counts[i] = c
        neighbor_idx[i, :c] = idx
        neighbor_dist[i, :c] = dist
    return neighbor_idx, neighbor_dist, counts


class Particle:
    """
    One spawned entity: a shape for its looks and decay, a motion for its
    position.
    """
    def __init__(self, x: float, y: float, size_min: float, size_max: float,
                 speed: SpeedParams, decay_rate: float,
                 shape_kind: Union[str, ShapeKind], motion_kind: Union[str, MotionKind],
                 rng: np.random.Generator):
        self.shape: Shape = create_shape(shape_kind, size_min, size_max, decay_rate, rng)
        self.motion: Motion = create_motion(motion_kind, x, y, speed, rng)

    def update(self, width: float, height: float) -> None:
        self.shape.update()
        self.motion.update(width, height)

    def is_expired(self) -> bool:
        return self.shape.is_depleted

    def draw(self, surface) -> None:
        self.shape.draw(surface, self.motion.x, self.motion.y)

    @property
    def position(self) -> Tuple[float, float]:
        return self.motion.position

    @property
    def size(self) -> float:
        return self.shape.size

    @property
    def color(self):
        return self.shape.color

    def __repr__(self):
        return (
            f"Particle({type(self.shape).__name__}/{type(self.motion).__name__} "
            f"at ({self.motion.x:.1f}, {self.motion.y:.1f}), size={self.shape.size:.2f})"
        )


class ParticleField:
    """
    A capacity-bounded container of particles in spawn order.
    """
    def __init__(self, capacity: int = DEFAULT_MAX_PARTICLES,
                 rng: Optional[np.random.Generator] = None):
        """
        Initializes an empty field.

        Args:
            capacity (int): Maximum number of live particles.
            rng (np.random.Generator): Source of all particle randomness.
                A fresh unseeded generator is used when omitted.
        """
        if capacity <= 0:
            msg = f"Configuration error: particle capacity must be positive, got {capacity}."
            logging.critical(msg)
            raise ValueError(msg)

        self.capacity = capacity
        # Rule 12: All randomness is controlled by a single generator,
        # normally created from the configured master seed.
        self.rng = rng if rng is not None else np.random.default_rng()
        self.particles: List[Particle] = []

        logging.info(f"ParticleField initialized with capacity {self.capacity}.")

    def __len__(self):
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def spawn(self, x: float, y: float, count: int, size_min: float, size_max: float,
              speed: SpeedParams, decay_rate: float,
              shape_kind: Union[str, ShapeKind], motion_kind: Union[str, MotionKind]
              ) -> List[Particle]:
        """
        Appends `count` new particles at (x, y) and evicts the oldest on overflow.

        Returns:
            List[Particle]: The newly spawned particles that survived eviction.
        """
        if count < 0:
            raise ValueError(f"Spawn count must be non-negative, got {count}.")
        # Fail fast on bad names before creating anything.
        shape_kind = resolve_shape_kind(shape_kind)
        motion_kind = resolve_motion_kind(motion_kind)

        new_particles = [
            Particle(x, y, size_min, size_max, speed, decay_rate, shape_kind, motion_kind, self.rng)
            for _ in range(count)
        ]
        self.particles.extend(new_particles)

        overflow = len(self.particles) - self.capacity
        if overflow > 0:
            del self.particles[:overflow]
            logging.debug(f"Capacity {self.capacity} exceeded; evicted {overflow} oldest particles.")

        return new_particles[max(0, len(new_particles) - self.capacity):]

    def step(self, width: float, height: float) -> int:
        """
        Advances every particle by one step and drops the expired ones.

        Returns:
            int: The number of particles removed.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport bounds must be positive, got {width}x{height}.")

        for particle in self.particles:
            particle.update(width, height)

        # Rebuild rather than delete in place so no particle is skipped.
        before = len(self.particles)
        self.particles = [p for p in self.particles if not p.is_expired()]
        return before - len(self.particles)

    def remove(self, particle: Particle) -> None:
        self.particles = [p for p in self.particles if p is not particle]

    def clear(self) -> None:
        self.particles.clear()

    def positions(self) -> np.ndarray:
        """Current positions as an (N, 2) float64 array, in spawn order."""
        if not self.particles:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([p.position for p in self.particles], dtype=np.float64)

    def _index_of(self, particle: Particle) -> int:
        for i, p in enumerate(self.particles):
            if p is particle:
                return i
        raise ValueError(f"{particle!r} is not in this field.")

    def nearest_neighbors(self, particle: Particle, k: int = DEFAULT_NEIGHBOR_COUNT
                          ) -> List[Tuple[Particle, float]]:
        """
        Finds the k particles closest to `particle`.

        Returns:
            List[Tuple[Particle, float]]: (neighbour, distance) pairs in
            non-decreasing distance order, at most min(k, len(field) - 1).
        """
        index = self._index_of(particle)
        if k <= 0:
            return []
        idx, dist = _k_nearest_numba(self.positions(), index, int(k))
        return [(self.particles[j], float(d)) for j, d in zip(idx, dist)]

    def connections(self, k: int = DEFAULT_NEIGHBOR_COUNT
                    ) -> List[Tuple[Particle, Particle, float]]:
        """
        Runs the nearest-neighbour query for every particle at once.

        Returns:
            List[Tuple[Particle, Particle, float]]: (source, neighbour,
            distance) triples, grouped by source in spawn order.
        """
        if k <= 0 or len(self.particles) < 2:
            return []
        neighbor_idx, neighbor_dist, counts = _all_k_nearest_numba(self.positions(), int(k))

        result = []
        for i, source in enumerate(self.particles):
            for slot in range(counts[i]):
                result.append((source, self.particles[neighbor_idx[i, slot]], float(neighbor_dist[i, slot])))
        return result

    connection_style = staticmethod(connection_style)
