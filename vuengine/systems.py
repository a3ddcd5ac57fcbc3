"""Simple per-frame systems that act on game objects."""

from __future__ import annotations

import itertools
import random
from collections.abc import Sequence

import numpy as np

from vuengine.gameobject import GameObject

PALETTE = (
    (0.8, 0.1, 0.1),
    (0.1, 0.8, 0.1),
    (0.1, 0.1, 0.8),
    (0.8, 0.8, 0.1),
    (0.8, 0.1, 0.8),
    (0.1, 0.8, 0.8),
)


class ColorSystem:
    """Gives every object a random palette colour every ``flicker_rate`` seconds."""

    def __init__(self, flicker_rate: float, rng: random.Random | None = None) -> None:
        self.flicker_rate = flicker_rate
        self.colors = [np.array(c) for c in PALETTE]
        self._rng = rng if rng is not None else random.Random()
        self._elapsed = flicker_rate

    def update(self, dt: float, game_objects: Sequence[GameObject]) -> None:
        self._elapsed -= dt
        if self._elapsed < 0.0:
            self._elapsed += self.flicker_rate
            for obj in game_objects:
                obj.color = self.colors[self._rng.randrange(len(self.colors))].copy()


class GravityPhysicsSystem:
    """Mutual gravitational attraction between objects in the XY plane."""

    def __init__(self, strength: float) -> None:
        self.strength = strength

    def update(
        self, objects: Sequence[GameObject], dt: float, substeps: int = 1
    ) -> None:
        """Advance the simulation by ``dt`` split into ``substeps`` steps."""
        if substeps < 1:
            raise ValueError("substeps must be at least 1")
        step = dt / substeps
        for _ in range(substeps):
            self._step(objects, step)

    def compute_force(self, from_obj: GameObject, to_obj: GameObject) -> np.ndarray:
        """Force along ``from_obj - to_obj``; zero when the objects coincide."""
        offset = from_obj.transform.translation[:2] - to_obj.transform.translation[:2]
        distance_squared = float(np.dot(offset, offset))
        if abs(distance_squared) < 1e-10:
            return np.zeros(2)
        force = (
            self.strength * to_obj.rigid_body.mass * from_obj.rigid_body.mass
            / distance_squared
        )
        return force * offset / np.sqrt(distance_squared)

    def _step(self, objects: Sequence[GameObject], dt: float) -> None:
        for a, b in itertools.combinations(objects, 2):
            force = self.compute_force(a, b)
            a.rigid_body.velocity += dt * -force / a.rigid_body.mass
            b.rigid_body.velocity += dt * force / b.rigid_body.mass
        for obj in objects:
            obj.transform.translation[:2] += dt * obj.rigid_body.velocity