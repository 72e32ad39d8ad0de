"""
Cubesphere generation module containing the procedural sphere mesh pipeline.

This module contains the following components:
- Vertex: Point sample of the surface with color and texture addressing, supports interpolation
- quad_mesh: Quad mesh construction, subdivision, spherical projection and triangulation
- mesh: Triangle meshes and the cubesphere, icosphere and plane generators
- mesh_operations: Optional vertex welding and depth bounds per index width
- validate_mesh: Functions for validating and debugging generated meshes
- utils: Utility functions for geometry, configuration files and serialization
- process: Functions for configuration processing and generation orchestration
"""

from .Vertex import Vertex
from .mesh import Mesh, VERTEX_DTYPE
from .quad_mesh import QuadMesh, VertexPool
from .utils import (
    load_yaml, generate_mesh_file_code, gzip_file, mesh_to_dict,
    to_sphere, get_cube_face_geometry
)
from .mesh_operations import (
    weld_vertices, cube_vertex_count, icosphere_vertex_count, max_subdivisions
)
from .validate_mesh import validate_mesh, mesh_debug_summary, save_mesh_debug
from .process import initialize_config, generate_mesh, execute_mesh_generation

__all__ = [
    'Vertex', 'Mesh', 'VERTEX_DTYPE', 'QuadMesh', 'VertexPool',
    'load_yaml', 'generate_mesh_file_code', 'gzip_file', 'mesh_to_dict',
    'to_sphere', 'get_cube_face_geometry',
    'weld_vertices', 'cube_vertex_count', 'icosphere_vertex_count', 'max_subdivisions',
    'validate_mesh', 'mesh_debug_summary', 'save_mesh_debug',
    'initialize_config', 'generate_mesh', 'execute_mesh_generation'
]
