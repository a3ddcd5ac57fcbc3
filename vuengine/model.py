"""Mesh vertices, index deduplication and Wavefront OBJ loading."""

from __future__ import annotations

import os
import struct
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

_HASH_MASK = (1 << 64) - 1
_GOLDEN = 0x9E3779B9
_FLOAT_SIZE = 4

VERTEX_STRIDE = 11 * _FLOAT_SIZE


def hash_combine(seed: int, *args: object) -> int:
    """Mix the hashes of ``args`` into ``seed`` and return the new 64-bit seed."""
    for value in args:
        seed &= _HASH_MASK
        mixed = (hash(value) + _GOLDEN + (seed << 6) + (seed >> 2)) & _HASH_MASK
        seed ^= mixed
    return seed & _HASH_MASK


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", float(value)))[0]


def _components(values: Sequence[float], length: int, name: str) -> tuple[float, ...]:
    result = tuple(_f32(v) for v in values)
    if len(result) != length:
        raise ValueError(f"{name} needs {length} components, got {len(result)}")
    return result


class _Attribute(NamedTuple):
    location: int
    binding: int
    format: str
    offset: int


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex; components are stored at 32-bit float precision."""

    position: tuple[float, ...] = field(default=(0.0, 0.0, 0.0))
    color: tuple[float, ...] = field(default=(0.0, 0.0, 0.0))
    normal: tuple[float, ...] = field(default=(0.0, 0.0, 0.0))
    tex_coord: tuple[float, ...] = field(default=(0.0, 0.0))

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _components(self.position, 3, "position"))
        object.__setattr__(self, "color", _components(self.color, 3, "color"))
        object.__setattr__(self, "normal", _components(self.normal, 3, "normal"))
        object.__setattr__(
            self, "tex_coord", _components(self.tex_coord, 2, "tex_coord")
        )

    def __hash__(self) -> int:
        return hash_combine(0, self.position, self.color, self.normal, self.tex_coord)

    @classmethod
    def attribute_layout(cls) -> tuple[_Attribute, ...]:
        """Shader input attributes: location, binding, format and byte offset."""
        vec3 = "R32G32B32_SFLOAT"
        vec2 = "R32G32_SFLOAT"
        return (
            _Attribute(0, 0, vec3, 0),
            _Attribute(1, 0, vec3, 3 * _FLOAT_SIZE),
            _Attribute(2, 0, vec3, 6 * _FLOAT_SIZE),
            _Attribute(3, 0, vec2, 9 * _FLOAT_SIZE),
        )


def build_indexed_mesh(vertices: Iterable[Vertex]) -> tuple[list[Vertex], list[int]]:
    """Collapse equal vertices; return unique vertices and an index per input vertex."""
    unique: list[Vertex] = []
    positions: dict[Vertex, int] = {}
    indices: list[int] = []
    for vertex in vertices:
        index = positions.get(vertex)
        if index is None:
            index = len(unique)
            positions[vertex] = index
            unique.append(vertex)
        indices.append(index)
    return unique, indices


def _floats(parts: Sequence[str], line_number: int) -> list[float]:
    try:
        return [float(p) for p in parts]
    except ValueError:
        raise ValueError(f"line {line_number}: invalid number in {' '.join(parts)!r}") from None


def _resolve(token: str, count: int, line_number: int) -> int:
    """Turn a 1-based or negative OBJ index into a 0-based one; -1 when absent."""
    if not token:
        return -1
    try:
        raw = int(token)
    except ValueError:
        raise ValueError(f"line {line_number}: invalid index {token!r}") from None
    index = raw - 1 if raw > 0 else count + raw
    if raw == 0 or not 0 <= index < count:
        raise ValueError(f"line {line_number}: index {raw} out of range")
    return index


def load_obj(path: str | os.PathLike[str]) -> tuple[list[Vertex], list[int]]:
    """Read a Wavefront OBJ file into unique vertices and triangle indices.

    Polygons are triangulated as fans. Texture ``v`` coordinates are flipped
    to ``1 - v``. Vertices without an explicit colour get white.
    """
    positions: list[list[float]] = []
    colors: list[list[float]] = []
    normals: list[list[float]] = []
    tex_coords: list[list[float]] = []
    corners: list[Vertex] = []

    with open(path, encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            parts = line.split("#", 1)[0].split()
            if not parts:
                continue
            keyword, args = parts[0], parts[1:]
            if keyword == "v":
                values = _floats(args, line_number)
                if len(values) < 3:
                    raise ValueError(f"line {line_number}: vertex needs 3 coordinates")
                positions.append(values[:3])
                colors.append(values[3:6] if len(values) >= 6 else [1.0, 1.0, 1.0])
            elif keyword == "vn":
                values = _floats(args, line_number)
                if len(values) < 3:
                    raise ValueError(f"line {line_number}: normal needs 3 components")
                normals.append(values[:3])
            elif keyword == "vt":
                values = _floats(args, line_number)
                if len(values) < 2:
                    raise ValueError(f"line {line_number}: texcoord needs 2 components")
                tex_coords.append(values[:2])
            elif keyword == "f":
                if len(args) < 3:
                    raise ValueError(f"line {line_number}: face needs at least 3 corners")
                face = [
                    _face_vertex(token, positions, colors, normals, tex_coords, line_number)
                    for token in args
                ]
                for second, third in zip(face[1:], face[2:]):
                    corners.extend((face[0], second, third))

    return build_indexed_mesh(corners)


def _face_vertex(
    token: str,
    positions: list[list[float]],
    colors: list[list[float]],
    normals: list[list[float]],
    tex_coords: list[list[float]],
    line_number: int,
) -> Vertex:
    fields = token.split("/")
    if len(fields) > 3 or not fields[0]:
        raise ValueError(f"line {line_number}: invalid face corner {token!r}")
    fields += [""] * (3 - len(fields))
    vertex_index = _resolve(fields[0], len(positions), line_number)
    tex_index = _resolve(fields[1], len(tex_coords), line_number)
    normal_index = _resolve(fields[2], len(normals), line_number)

    normal = normals[normal_index] if normal_index >= 0 else (0.0, 0.0, 0.0)
    if tex_index >= 0:
        u, v = tex_coords[tex_index]
        tex_coord: Sequence[float] = (u, 1.0 - v)
    else:
        tex_coord = (0.0, 0.0)
    return Vertex(
        position=positions[vertex_index],
        color=colors[vertex_index],
        normal=normal,
        tex_coord=tex_coord,
    )