"""Indexed triangle meshes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, List, Sequence, Tuple, TypeVar

import numpy as np

from enginekit.transforms import transform_point

Vec3 = Tuple[float, float, float]


@dataclass
class SimpleVertex:
    """A vertex with a position and a normal."""

    pos: Vec3 = (0.0, 0.0, 0.0)
    n: Vec3 = (0.0, 0.0, 0.0)


V = TypeVar("V")


def _as_vec3(values: Iterable[float]) -> Vec3:
    x, y, z = (float(c) for c in values)
    return (x, y, z)


class IndexedTriangleList(Generic[V]):
    """Vertices with a ``pos`` attribute and triangle indices into them."""

    def __init__(self, vertices: Sequence[V], indices: Sequence[int]) -> None:
        vertices = list(vertices)
        indices = [int(i) for i in indices]
        if len(vertices) <= 2:
            raise ValueError("a triangle list needs at least three vertices")
        if len(indices) % 3 != 0:
            raise ValueError("index count must be a multiple of three")
        self.vertices: List[V] = vertices
        self.indices: List[int] = indices

    def transform(self, matrix: np.ndarray) -> None:
        """Transform every vertex position by ``matrix``."""
        for vertex in self.vertices:
            vertex.pos = _as_vec3(transform_point(vertex.pos, matrix))

    def set_normals_independent_flat(self) -> None:
        """Give each triangle's vertices the triangle's face normal."""
        if not self.indices or len(self.indices) % 3 != 0:
            raise ValueError("need a non-empty list of whole triangles")
        corners = iter(self.indices)
        for i0, i1, i2 in zip(corners, corners, corners):
            v0, v1, v2 = self.vertices[i0], self.vertices[i1], self.vertices[i2]
            p0 = np.asarray(v0.pos, dtype=float)
            cross = np.cross(np.asarray(v1.pos) - p0, np.asarray(v2.pos) - p0)
            length = float(np.linalg.norm(cross))
            normal = _as_vec3(cross / length if length > 0.0 else cross)
            v0.n = normal
            v1.n = normal
            v2.n = normal