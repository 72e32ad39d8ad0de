"""
Mesh operations for cubesphere generation.

This module contains the operations that sit next to the quad pipeline: the
optional vertex welding pass and depth bounds for a given index width.
"""

import logging
import numpy as np
from scipy.spatial import cKDTree

from .mesh import Mesh
from .utils import index_capacity

logger = logging.getLogger(__name__)

CUBE_QUADS = 6
CUBE_VERTICES = 24


def icosphere_vertex_count(subdivisions: int) -> int:
    """Vertex count of an icosphere after ``subdivisions`` steps with shared midpoints."""
    return 10 * 4 ** subdivisions + 2


def cube_vertex_count(subdivisions: int) -> int:
    """Vertex pool size of the cube after ``subdivisions`` steps without welding."""
    vertices, quads = CUBE_VERTICES, CUBE_QUADS
    for _ in range(subdivisions):
        vertices += 5 * quads
        quads *= 4
    return vertices


def max_subdivisions(index_dtype=np.uint16, vertex_count=cube_vertex_count) -> int:
    """Deepest subdivision whose vertex count ``index_dtype`` can still address.

    ``vertex_count`` maps a depth to the generator's vertex count, the unwelded
    cube by default.
    """
    capacity = index_capacity(index_dtype)
    depth = 0
    while vertex_count(depth + 1) <= capacity:
        depth += 1
    return depth


def weld_vertices(mesh: Mesh, tolerance: float = 1e-6) -> Mesh:
    """
    Merge coincident vertices that share a texture layer.

    Vertices closer than ``tolerance`` collapse onto the lowest index among them,
    indices are remapped and the vertex list is compacted. Vertices on different
    texture layers are never merged, so cube face seams stay split.

    Args:
        mesh (Mesh): Triangle mesh, typically a cubesphere.
        tolerance (float): Maximum distance between merged vertices.

    Returns:
        Mesh: New mesh with the same triangles over a smaller vertex list.
    """
    if len(mesh.vertex_data) == 0:
        return Mesh([], [], index_dtype=mesh.index_dtype)

    positions = mesh.positions()
    layers = mesh.tex_layers()
    tree = cKDTree(positions)
    neighbours = tree.query_ball_point(positions, r=tolerance)

    representative = np.arange(len(positions))
    for i, close in enumerate(neighbours):
        if representative[i] != i:
            continue
        for j in close:
            if j > i and representative[j] == j and layers[j] == layers[i]:
                representative[j] = i

    keep = np.flatnonzero(representative == np.arange(len(positions)))
    new_index = np.full(len(positions), -1, dtype=np.int64)
    new_index[keep] = np.arange(len(keep))
    remap = new_index[representative]

    vertex_data = [mesh.vertex_data[i] for i in keep]
    index_data = remap[np.asarray(mesh.index_data, dtype=np.int64)].tolist()

    logger.info("Welded %d vertices into %d", len(positions), len(keep))
    return Mesh(vertex_data, index_data, index_dtype=mesh.index_dtype)
