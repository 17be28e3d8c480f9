"""Tessellated unit spheres."""

from __future__ import annotations

from typing import List

from enginekit.mathutil import PI
from enginekit.transforms import rotation_x, rotation_z, transform_point
from enginekit.trianglelist import IndexedTriangleList, SimpleVertex

_MAX_VERTICES = 1 << 16


def _vec3(values) -> tuple:
    return tuple(float(c) for c in values)


def make_tesselated(lat_div: int, long_div: int) -> IndexedTriangleList[SimpleVertex]:
    """Build a unit sphere with ``lat_div`` latitude and ``long_div`` longitude divisions.

    The two pole vertices come last, north before south.
    """
    if lat_div < 3 or long_div < 3:
        raise ValueError("both divisions must be at least 3")
    if (lat_div - 1) * long_div + 2 > _MAX_VERTICES:
        raise ValueError("too many vertices for 16-bit indices")

    base = (0.0, 0.0, 1.0)
    lattitude_angle = PI / lat_div
    longitude_angle = 2.0 * PI / long_div

    vertices: List[SimpleVertex] = []
    for i_lat in range(1, lat_div):
        lat_base = transform_point(base, rotation_x(lattitude_angle * i_lat))
        for i_long in range(long_div):
            point = transform_point(lat_base, rotation_z(longitude_angle * i_long))
            vertices.append(SimpleVertex(_vec3(point)))

    north = len(vertices)
    vertices.append(SimpleVertex(base))
    south = len(vertices)
    vertices.append(SimpleVertex((0.0, 0.0, -1.0)))

    def idx(i_lat: int, i_long: int) -> int:
        return i_lat * long_div + i_long

    last_row = lat_div - 2
    last_col = long_div - 1
    indices: List[int] = []
    for i_lat in range(lat_div - 2):
        for i_long in range(long_div - 1):
            indices += [
                idx(i_lat, i_long), idx(i_lat + 1, i_long), idx(i_lat, i_long + 1),
                idx(i_lat, i_long + 1), idx(i_lat + 1, i_long), idx(i_lat + 1, i_long + 1),
            ]
        indices += [
            idx(i_lat, last_col), idx(i_lat + 1, last_col), idx(i_lat, 0),
            idx(i_lat, 0), idx(i_lat + 1, last_col), idx(i_lat + 1, 0),
        ]

    for i_long in range(long_div - 1):
        indices += [north, idx(0, i_long), idx(0, i_long + 1)]
        indices += [idx(last_row, i_long + 1), idx(last_row, i_long), south]
    indices += [north, idx(0, last_col), idx(0, 0)]
    indices += [idx(last_row, 0), idx(last_row, last_col), south]

    return IndexedTriangleList(vertices, indices)


def make() -> IndexedTriangleList[SimpleVertex]:
    """Build the default sphere: 12 latitude and 24 longitude divisions."""
    return make_tesselated(12, 24)