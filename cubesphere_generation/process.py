"""
Configuration handling and mesh generation orchestration.

This module contains functions for validating generation configs, filling in
defaults and executing the complete mesh generation pipeline.
"""

import copy
import logging
import numpy as np
from typing import Tuple, Dict, Any

from .mesh import Mesh, DEFAULT_SUBDIVISIONS
from .mesh_operations import weld_vertices, max_subdivisions, cube_vertex_count, icosphere_vertex_count
from .utils import generate_mesh_file_code, mesh_to_dict

logger = logging.getLogger(__name__)

GENERATORS = ("cubesphere", "icosphere", "plane")
INDEX_DTYPES = {"uint16": np.uint16, "uint32": np.uint32}

DEFAULT_CONFIG = {
    "generator": "cubesphere",
    "subdivisions": DEFAULT_SUBDIVISIONS,
    "index_dtype": "uint16",
    "weld": False,
    "weld_tolerance": 1e-6,
    "gzip": False,
    "output": {"directory": "./cubespheres/", "filename": None},
}


def initialize_config(config: dict) -> Dict[str, Any]:
    """
    Fill in defaults and validate a generation config.

    Args:
        config (dict): Configuration dictionary, usually loaded from YAML

    Returns:
        Dict[str, Any]: A new dictionary with every key of ``DEFAULT_CONFIG`` present

    Raises:
        ValueError: If the generator, index type or subdivision depth is invalid
    """
    config = config or {}
    result = copy.deepcopy(DEFAULT_CONFIG)
    result.update({k: v for k, v in config.items() if k != "output"})
    result["output"].update(config.get("output") or {})

    if result["generator"] not in GENERATORS:
        raise ValueError(f"Unknown generator '{result['generator']}', expected one of {GENERATORS}")
    if result["index_dtype"] not in INDEX_DTYPES:
        raise ValueError(f"Unknown index_dtype '{result['index_dtype']}', expected one of {tuple(INDEX_DTYPES)}")

    subdivisions = result["subdivisions"]
    if not isinstance(subdivisions, int) or isinstance(subdivisions, bool) or subdivisions < 0:
        raise ValueError(f"subdivisions must be a non-negative integer, got {subdivisions!r}")

    vertex_counts = {"cubesphere": cube_vertex_count, "icosphere": icosphere_vertex_count}
    if result["generator"] in vertex_counts:
        limit = max_subdivisions(INDEX_DTYPES[result["index_dtype"]], vertex_counts[result["generator"]])
        if subdivisions > limit:
            raise ValueError(
                f"{subdivisions} subdivisions overflow {result['index_dtype']} indices, "
                f"use at most {limit} or a wider index_dtype"
            )

    return result


def generate_mesh(config: dict) -> Mesh:
    """Build the mesh described by an initialized config."""
    index_dtype = INDEX_DTYPES[config["index_dtype"]]
    generator = config["generator"]

    if generator == "cubesphere":
        mesh = Mesh.new_cubesphere(config["subdivisions"], index_dtype=index_dtype)
    elif generator == "icosphere":
        mesh = Mesh.new_icosphere(config["subdivisions"], index_dtype=index_dtype)
    else:
        mesh = Mesh.new_plane(index_dtype=index_dtype)

    if config.get("weld", False):
        mesh = weld_vertices(mesh, tolerance=config["weld_tolerance"])

    logger.info("Generated %s: %s", generator, mesh)
    return mesh


def execute_mesh_generation(config: dict) -> Tuple[Mesh, Dict[str, Any], str]:
    """
    Execute the complete mesh generation pipeline.

    Args:
        config (dict): Config already passed through ``initialize_config``

    Returns:
        Tuple[Mesh, Dict[str, Any], str]: Tuple containing:
            - mesh: The generated mesh
            - mesh_dict: JSON serializable mesh data
            - file_code: Generated file code for naming
    """
    file_code = generate_mesh_file_code(config)

    mesh = generate_mesh(config)
    mesh_dict = mesh_to_dict(mesh)

    return mesh, mesh_dict, file_code
