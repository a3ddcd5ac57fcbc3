"""Game objects, their components and per-frame uniform data."""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

MAX_LIGHTS = 10

_uid_counter = itertools.count()


def _vector(values: Sequence[float] | np.ndarray, length: int) -> np.ndarray:
    array = np.array(values, dtype=np.float64)
    if array.shape != (length,):
        raise ValueError(f"expected a {length}-component vector, got shape {array.shape}")
    return array


def _rotation_terms(rotation: np.ndarray) -> tuple[float, ...]:
    rx, ry, rz = rotation
    return (
        np.cos(rz), np.sin(rz),
        np.cos(rx), np.sin(rx),
        np.cos(ry), np.sin(ry),
    )


@dataclass
class TransformComponent:
    """Translation, scale and Tait-Bryan rotation (radians, Y then X then Z)."""

    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.translation = _vector(self.translation, 3)
        self.scale = _vector(self.scale, 3)
        self.rotation = _vector(self.rotation, 3)

    def _basis(self, column_scale: np.ndarray) -> np.ndarray:
        c3, s3, c2, s2, c1, s1 = _rotation_terms(self.rotation)
        columns = np.array(
            [
                [c1 * c3 + s1 * s2 * s3, c2 * s3, c1 * s2 * s3 - c3 * s1],
                [c3 * s1 * s2 - c1 * s3, c2 * c3, c1 * c3 * s2 + s1 * s3],
                [c2 * s1, -s2, c1 * c2],
            ]
        )
        return (columns * column_scale[:, np.newaxis]).T

    def to_mat4(self) -> np.ndarray:
        """Model matrix equal to Translate * Ry * Rx * Rz * Scale."""
        matrix = np.identity(4)
        matrix[:3, :3] = self._basis(self.scale)
        matrix[:3, 3] = self.translation
        return matrix

    def normal_matrix(self) -> np.ndarray:
        """Inverse transpose of the model matrix's upper 3x3 part."""
        if np.any(self.scale == 0.0):
            raise ValueError("normal matrix is undefined for a zero scale component")
        return self._basis(1.0 / self.scale)


@dataclass
class PointLightComponent:
    color: np.ndarray = field(default_factory=lambda: np.ones(3))
    intensity: float = 1.0

    def __post_init__(self) -> None:
        self.color = _vector(self.color, 3)


@dataclass
class RigidBody2dComponent:
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    mass: float = 1.0

    def __post_init__(self) -> None:
        self.velocity = _vector(self.velocity, 2)


@dataclass(eq=False)
class GameObject:
    """An entity with a unique id, a transform and optional components."""

    uid: int
    color: np.ndarray = field(default_factory=lambda: np.zeros(3))
    transform: TransformComponent = field(default_factory=TransformComponent)
    model: Any = None
    diffuse_map: Any = None
    point_light: PointLightComponent | None = None
    rigid_body: RigidBody2dComponent = field(default_factory=RigidBody2dComponent)

    def __post_init__(self) -> None:
        self.color = _vector(self.color, 3)

    @classmethod
    def create(cls) -> GameObject:
        """Create an object with the next free id."""
        return cls(uid=next(_uid_counter))

    @classmethod
    def create_as_point_light(
        cls,
        intensity: float = 10.0,
        radius: float = 0.1,
        color: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> GameObject:
        """Create a point light; its radius is kept in the transform's x scale."""
        obj = cls.create()
        obj.point_light = PointLightComponent(intensity=intensity)
        obj.transform.scale[0] = radius
        obj.color = _vector(color, 3)
        return obj


@dataclass
class PointLight:
    position: np.ndarray = field(default_factory=lambda: np.zeros(4))
    color: np.ndarray = field(default_factory=lambda: np.zeros(4))

    def __post_init__(self) -> None:
        self.position = _vector(self.position, 4)
        self.color = _vector(self.color, 4)


@dataclass
class GlobalUbo:
    """Data shared by all objects in a frame: camera matrices and lights."""

    projection: np.ndarray = field(default_factory=lambda: np.identity(4))
    view: np.ndarray = field(default_factory=lambda: np.identity(4))
    inverse_view: np.ndarray = field(default_factory=lambda: np.identity(4))
    ambient_light_color: np.ndarray = field(
        default_factory=lambda: np.array([1.0, 1.0, 1.0, 0.02])
    )
    point_lights: list[PointLight] = field(default_factory=list)

    @property
    def point_light_count(self) -> int:
        return len(self.point_lights)

    def add_point_light(
        self, position: Sequence[float], color: Sequence[float]
    ) -> PointLight:
        """Append a light; ``position`` w is ignored, ``color`` w is intensity."""
        if len(self.point_lights) >= MAX_LIGHTS:
            raise ValueError(f"at most {MAX_LIGHTS} point lights are supported")
        light = PointLight(position=position, color=color)
        self.point_lights.append(light)
        return light