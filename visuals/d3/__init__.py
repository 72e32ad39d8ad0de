"""
3D visualization module for generated meshes.

Functions
---------
visualize_mesh_3d
    Visualize a single triangle mesh in 3D space using its vertex colors
"""

from .visualize_mesh_3d import visualize_mesh_3d

__all__ = [
    'visualize_mesh_3d',
]
