import math
import logging
import numpy as np
from numpy.linalg import norm
from typing import Dict, Any, List, Tuple

logger = logging.getLogger(__name__)

# One flat color per cube face, indexed by texture layer
CUBE_FACE_COLORS = [
    (1.0, 0.3, 0.3),
    (0.3, 1.0, 0.3),
    (0.3, 0.3, 1.0),
    (1.0, 1.0, 0.3),
    (1.0, 0.3, 1.0),
    (0.3, 1.0, 1.0),
]

# GENERAL UTILS
def load_yaml(filename: str):
    import yaml
    # Load the config from the specified path
    with open(filename, "r") as f:
        config = yaml.safe_load(f)
    return config

def generate_mesh_file_code(config: Dict[str, Any]) -> str:
    structure_code = f"{config['generator']}"
    if config["generator"] != "plane":
        structure_code += f"_s{config['subdivisions']}"
    if config.get("weld", False):
        structure_code += "_welded"
    return structure_code

def gzip_file(filename: str) -> str:
    """ Compress a file using gzip and return the compressed file name.

    Args:
        filename (str): The name of the file to compress.

    Returns:
        str: The name of the compressed file.
    """
    import gzip
    import shutil

    compressed_filename = filename + '.gz'
    with open(filename, 'rb') as f_in:
        with gzip.open(compressed_filename, 'wb') as f_out:
            shutil.copyfileobj(f_in, f_out)
    return compressed_filename

def mesh_to_dict(mesh) -> dict:
    """
    Convert a triangulated mesh to a JSON serializable dictionary.

    Args:
        mesh (Mesh): Mesh with vertex and index data.

    Returns:
        dict: Dictionary containing vertex attributes, triangle faces and face centroids.
    """
    vertices = mesh.positions()
    faces = mesh.faces()
    mesh_dict = {
        "vertices": vertices,
        "colors": mesh.colors(),
        "tex_pos": mesh.tex_positions(),
        "tex_layer": mesh.tex_layers(),
        "faces": faces,
        "face_centroid": vertices[faces].mean(axis=1) if len(faces) else np.empty((0, 3)),
    }

    # Convert numpy arrays to lists for JSON serialization
    return {
        key: (value.tolist() if isinstance(value, np.ndarray) else value)
        for key, value in mesh_dict.items()
    }

# GEOMETRY UTILS
def to_sphere(vertices, radius=1, center=(0, 0, 0)) -> np.ndarray:
    """Project vertices radially onto a sphere.

    Raises:
        ValueError: If a vertex sits at the origin, where the direction is undefined.
    """
    vertices = np.asarray(vertices, dtype=float)
    length = norm(vertices, axis=1).reshape((-1, 1))
    degenerate = np.flatnonzero(length[:, 0] == 0.0)
    if len(degenerate) > 0:
        raise ValueError(
            f"Cannot project {len(degenerate)} zero-length vertices onto the sphere "
            f"(indices {degenerate[:10].tolist()})"
        )
    return vertices / length * radius + np.asarray(center, dtype=float)

def rotation_x(degrees: float) -> np.ndarray:
    """Right-handed 3x3 rotation about the x axis."""
    r = math.radians(degrees)
    c, s = math.cos(r), math.sin(r)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0,   c,  -s],
        [0.0,   s,   c],
    ])

def rotation_y(degrees: float) -> np.ndarray:
    """Right-handed 3x3 rotation about the y axis."""
    r = math.radians(degrees)
    c, s = math.cos(r), math.sin(r)
    return np.array([
        [  c, 0.0,   s],
        [0.0, 1.0, 0.0],
        [ -s, 0.0,   c],
    ])

def get_cube_face_geometry() -> Tuple[np.ndarray, List[np.ndarray]]:
    """Get the proto face of the cube and the rotations placing it on all six faces."""
    # Counter-clockwise seen from +z
    proto = np.array([
        [ 1.0,  1.0, 1.0],
        [-1.0,  1.0, 1.0],
        [-1.0, -1.0, 1.0],
        [ 1.0, -1.0, 1.0],
    ])
    rotations = [
        rotation_y(0.0), rotation_y(90.0), rotation_y(180.0), rotation_y(270.0),
        rotation_x(90.0), rotation_x(270.0),
    ]
    return proto, rotations

def index_capacity(index_dtype) -> int:
    """Number of distinct vertices addressable by an unsigned index dtype."""
    return int(np.iinfo(np.dtype(index_dtype)).max) + 1
