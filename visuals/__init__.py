"""
Visualization package for generated meshes.

This package provides the application shell around the mesh pipeline: static
3D previews, the camera transform handed to the shader, keyboard controls for
the shader parameters and an interactive viewer.

Submodules
----------
d3 : module
    3D preview of a triangle mesh
camera : module
    View, projection and rotation matrices
controls : module
    Shader parameters, key bindings and viewer run state
viewer : module
    Interactive keyboard driven viewer
utils : module
    Plotting helpers shared by the submodules

Examples
--------
>>> from visuals.d3 import visualize_mesh_3d
>>> from visuals.viewer import MeshViewer
"""

from . import utils, camera, controls, d3

__all__ = [
    'utils',
    'camera',
    'controls',
    'd3',
]
