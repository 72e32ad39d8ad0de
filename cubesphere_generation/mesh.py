"""
Triangle meshes handed to the rendering layer.

A ``Mesh`` is a flat vertex list plus a flat index list with three indices per
triangle. ``vertex_buffer`` and ``index_buffer`` export them in the array of
structs layout expected by the shader attributes.
"""

import colorsys
import logging
import numpy as np
import trimesh
from typing import List, Sequence

from .Vertex import Vertex

logger = logging.getLogger(__name__)

DEFAULT_SUBDIVISIONS = 4

VERTEX_DTYPE = np.dtype([
    ("a_Pos", np.float32, (3,)),
    ("a_Color", np.float32, (3,)),
    ("a_TexPos", np.float32, (2,)),
    ("a_TexLayer", np.uint16),
])


class Mesh:
    """Renderable triangle geometry."""

    def __init__(self, vertex_data: List[Vertex], index_data: Sequence[int], index_dtype=np.uint16):
        self.vertex_data = vertex_data
        self.index_data = [int(i) for i in index_data]
        self.index_dtype = np.dtype(index_dtype)

    @classmethod
    def new_cubesphere(cls, subdivisions: int = DEFAULT_SUBDIVISIONS, index_dtype=np.uint16) -> 'Mesh':
        """Cube, subdivided ``subdivisions`` times, projected to the unit sphere and triangulated."""
        from .quad_mesh import QuadMesh

        if subdivisions < 0:
            raise ValueError(f"subdivisions must be non-negative, got {subdivisions}")

        mesh = QuadMesh.new_cube()
        for _ in range(subdivisions):
            mesh = mesh.subdivide()
        logger.info("Generated cube with %d subdivisions: %s", subdivisions, mesh)

        return mesh.to_sphere().triangulate(index_dtype=index_dtype)

    @classmethod
    def new_icosphere(cls, subdivisions: int = DEFAULT_SUBDIVISIONS, index_dtype=np.uint16) -> 'Mesh':
        """Unit icosphere from trimesh, white and untextured."""
        if subdivisions < 0:
            raise ValueError(f"subdivisions must be non-negative, got {subdivisions}")

        sphere = trimesh.creation.icosphere(subdivisions=subdivisions, radius=1.0)
        logger.info("Generated icosphere with %d vertices and %d faces",
                    len(sphere.vertices), len(sphere.faces))

        color = (1.0, 1.0, 1.0)
        vertex_data = [Vertex(pos, color, (0.5, 0.5), 0) for pos in sphere.vertices]

        mesh = cls(vertex_data, np.asarray(sphere.faces).flatten(), index_dtype=index_dtype)
        mesh.check_index_range()
        return mesh

    @classmethod
    def new_plane(cls, index_dtype=np.uint16) -> 'Mesh':
        """Two triangle square in the ``z = 0`` plane with a rainbow color per corner."""
        color_count = 4
        colors = [colorsys.hsv_to_rgb(i / color_count, 1.0, 1.0) for i in range(color_count)]

        corners = [(1, -1), (1, 1), (-1, 1), (-1, -1)]
        vertex_data = [
            Vertex((x, y, 0.0), color, (x * 0.5 + 0.5, y * 0.5 + 0.5), 0)
            for (x, y), color in zip(corners, colors)
        ]

        index_data = [
            0, 1, 3,
            1, 3, 2,
        ]

        return cls(vertex_data, index_data, index_dtype=index_dtype)

    def check_index_range(self):
        """
        Raise if an index points outside the vertex list or the vertex list is
        larger than the index dtype can address.
        """
        capacity = int(np.iinfo(self.index_dtype).max) + 1
        if len(self.vertex_data) > capacity:
            raise OverflowError(
                f"{len(self.vertex_data)} vertices cannot be addressed by "
                f"{self.index_dtype.name} indices (limit {capacity})"
            )
        if len(self.index_data) % 3 != 0:
            raise ValueError(f"Index count {len(self.index_data)} is not a multiple of 3")
        if self.index_data and (min(self.index_data) < 0 or max(self.index_data) >= len(self.vertex_data)):
            raise ValueError("Face indices exceed vertex count")

    @property
    def triangle_count(self) -> int:
        return len(self.index_data) // 3

    @property
    def vertex_count(self) -> int:
        return len(self.vertex_data)

    def positions(self) -> np.ndarray:
        return np.array([v.pos for v in self.vertex_data], dtype=float).reshape((-1, 3))

    def colors(self) -> np.ndarray:
        return np.array([v.color for v in self.vertex_data], dtype=float).reshape((-1, 3))

    def tex_positions(self) -> np.ndarray:
        return np.array([v.tex_pos for v in self.vertex_data], dtype=float).reshape((-1, 2))

    def tex_layers(self) -> np.ndarray:
        return np.array([v.tex_layer for v in self.vertex_data], dtype=np.uint16)

    def faces(self) -> np.ndarray:
        """Triangles as an ``(M, 3)`` array of vertex indices."""
        return np.array(self.index_data, dtype=np.int64).reshape((-1, 3))

    def vertex_buffer(self) -> np.ndarray:
        buffer = np.zeros(len(self.vertex_data), dtype=VERTEX_DTYPE)
        if len(buffer):
            buffer["a_Pos"] = self.positions()
            buffer["a_Color"] = self.colors()
            buffer["a_TexPos"] = self.tex_positions()
            buffer["a_TexLayer"] = self.tex_layers()
        return buffer

    def index_buffer(self) -> np.ndarray:
        self.check_index_range()
        return np.array(self.index_data, dtype=self.index_dtype)

    def __str__(self) -> str:
        return (f"Mesh(vertices={self.vertex_count}, triangles={self.triangle_count}, "
                f"index_dtype={self.index_dtype.name})")
