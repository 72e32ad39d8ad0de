"""
Quad mesh construction for cubesphere generation.

This module contains the quad based intermediate mesh: building the base cube,
recursive midpoint subdivision, radial projection onto the unit sphere and
triangulation along the shorter quad diagonal.
"""

import logging
import numpy as np
from typing import List, Tuple, Iterable

from .Vertex import Vertex
from .mesh import Mesh
from .utils import CUBE_FACE_COLORS, get_cube_face_geometry, to_sphere, index_capacity

logger = logging.getLogger(__name__)

Quad = Tuple[int, int, int, int]


class VertexPool:
    """Append-only vertex storage handing out stable indices."""

    def __init__(self, vertices: Iterable[Vertex] = ()):
        self.vertices: List[Vertex] = list(vertices)

    def push(self, vertex: Vertex) -> int:
        index = len(self.vertices)
        self.vertices.append(vertex)
        return index

    def __len__(self) -> int:
        return len(self.vertices)


class QuadMesh:
    """Vertex pool plus counter-clockwise wound quads indexing into it."""

    def __init__(self, vertex_data: List[Vertex], index_data: List[Quad]):
        self.vertex_data = vertex_data
        self.index_data = index_data

    @classmethod
    def new_cube(cls) -> 'QuadMesh':
        """
        Build a cube out of six independent quads.

        A single proto face on the ``z = 1`` plane is rotated onto every cube face,
        so each face owns its four corners. Face ``i`` gets texture layer ``i``, its
        own flat color and texture positions spanning ``[0, 1] x [0, 1]``.

        Returns:
            QuadMesh: Mesh with 24 vertices and 6 quads.
        """
        proto, rotations = get_cube_face_geometry()
        pool = VertexPool()
        index_data = []

        for layer, matrix in enumerate(rotations):
            color = CUBE_FACE_COLORS[layer]
            corners = proto @ matrix.T
            quad = []
            for corner, proto_corner in zip(corners, proto):
                tex_pos = (proto_corner[0] * 0.5 + 0.5, proto_corner[1] * 0.5 + 0.5)
                quad.append(pool.push(Vertex(corner, color, tex_pos, layer)))
            index_data.append(tuple(quad))

        return cls(pool.vertices, index_data)

    def subdivide(self) -> 'QuadMesh':
        """
        Split every quad into four, doubling the edge resolution.

        Edge midpoints and the face centroid are appended per quad, so neighbouring
        quads never share the vertices on their common edge. Use
        ``mesh_operations.weld_vertices`` on the triangulated result to merge them.
        """
        v = self.vertex_data
        pool = VertexPool(v)
        index_data = []

        for a, b, c, d in self.index_data:
            ab = Vertex.lerp(v[a], v[b], 0.5)
            bc = Vertex.lerp(v[b], v[c], 0.5)
            cd = Vertex.lerp(v[c], v[d], 0.5)
            da = Vertex.lerp(v[d], v[a], 0.5)
            mid = Vertex.lerp(ab, cd, 0.5)

            ab = pool.push(ab)
            bc = pool.push(bc)
            cd = pool.push(cd)
            da = pool.push(da)
            mid = pool.push(mid)

            index_data.append((a, ab, mid, da))
            index_data.append((ab, b, bc, mid))
            index_data.append((mid, bc, c, cd))
            index_data.append((da, mid, cd, d))

        return QuadMesh(pool.vertices, index_data)

    def to_sphere(self) -> 'QuadMesh':
        """Normalize every vertex position to unit length, keeping the topology."""
        positions = to_sphere(self.positions())
        vertex_data = [vertex.with_pos(pos) for vertex, pos in zip(self.vertex_data, positions)]
        return QuadMesh(vertex_data, list(self.index_data))

    def triangulate(self, index_dtype=np.uint16) -> Mesh:
        """
        Cut every quad into two triangles along its shorter diagonal.

        For a quad ``(a, b, c, d)`` the ``b-d`` cut emits ``(a, b, d)`` and
        ``(d, b, c)``; the ``a-c`` cut, also taken on exact ties, emits
        ``(a, b, c)`` and ``(c, d, a)``.

        Args:
            index_dtype: Unsigned integer dtype of the renderer index buffer.

        Returns:
            Mesh: Triangle mesh sharing this mesh's vertex indices.

        Raises:
            OverflowError: If the vertex pool is larger than ``index_dtype`` can address.
        """
        capacity = index_capacity(index_dtype)
        if len(self.vertex_data) > capacity:
            raise OverflowError(
                f"{len(self.vertex_data)} vertices cannot be addressed by "
                f"{np.dtype(index_dtype).name} indices (limit {capacity})"
            )

        index_data = []
        if self.index_data:
            positions = self.positions()
            quads = np.asarray(self.index_data, dtype=np.int64)
            a_c_distance = np.linalg.norm(positions[quads[:, 0]] - positions[quads[:, 2]], axis=1)
            b_d_distance = np.linalg.norm(positions[quads[:, 1]] - positions[quads[:, 3]], axis=1)

            for (a, b, c, d), cut_b_d in zip(self.index_data, a_c_distance > b_d_distance):
                if cut_b_d:
                    index_data.extend((a, b, d, d, b, c))
                else:
                    index_data.extend((a, b, c, c, d, a))

        logger.debug("Triangulated %d quads into %d triangles", len(self.index_data), len(index_data) // 3)
        return Mesh(list(self.vertex_data), index_data, index_dtype=index_dtype)

    def positions(self) -> np.ndarray:
        return np.array([vertex.pos for vertex in self.vertex_data], dtype=float).reshape((-1, 3))

    def __str__(self) -> str:
        return f"QuadMesh(vertices={len(self.vertex_data)}, quads={len(self.index_data)})"
