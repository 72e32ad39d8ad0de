import json
import logging
import numpy as np
from scipy.spatial import KDTree

logger = logging.getLogger(__name__)


def mesh_debug_summary(mesh_name, mesh_dict):
    """Collect coordinate ranges, spacing and connectivity statistics of a mesh."""
    faces = np.array(mesh_dict.get("faces", []), dtype=np.int64).reshape((-1, 3))
    vertices = np.array(mesh_dict.get("vertices", []), dtype=float).reshape((-1, 3))

    if len(vertices) == 0:
        return {
            "mesh_name": mesh_name,
            "mesh_overview": {
                "total_vertices": 0,
                "total_faces": len(faces),
                "vertices_used_in_faces": 0,
                "coincident_vertices": 0,
            },
            "vertex_analysis": None,
        }

    # Calculate vertex distances
    tree = KDTree(vertices)
    distances, _ = tree.query(vertices, k=min(2, len(vertices)))
    distances = np.asarray(distances).reshape((len(vertices), -1))
    nearest = distances[:, 1] if distances.shape[1] > 1 else None

    face_vertex_indices = np.unique(faces)
    vertex_face_count = np.bincount(faces.flatten(), minlength=len(vertices))
    radii = np.linalg.norm(vertices, axis=1)

    return {
        "mesh_name": mesh_name,
        "mesh_overview": {
            "total_vertices": len(vertices),
            "total_faces": len(faces),
            "vertices_used_in_faces": len(face_vertex_indices),
            "coincident_vertices": int(np.sum(nearest == 0.0)) if nearest is not None else 0,
        },
        "vertex_analysis": {
            "coordinate_ranges": {
                "x": [float(np.min(vertices[:, 0])), float(np.max(vertices[:, 0]))],
                "y": [float(np.min(vertices[:, 1])), float(np.max(vertices[:, 1]))],
                "z": [float(np.min(vertices[:, 2])), float(np.max(vertices[:, 2]))],
                "radius": [float(np.min(radii)), float(np.max(radii))],
            },
            "distance_statistics": {
                "min_distance": float(np.min(nearest)) if nearest is not None else None,
                "max_distance": float(np.max(nearest)) if nearest is not None else None,
                "mean_distance": float(np.mean(nearest)) if nearest is not None else None,
            },
            "face_connectivity": {
                "vertices_with_no_faces": int(np.sum(vertex_face_count == 0)),
                "max_faces_per_vertex": int(np.max(vertex_face_count)),
            },
        },
    }


def save_mesh_debug(mesh_name, mesh_dict, path="mesh_debug.json"):
    """Write ``mesh_debug_summary`` to a json file."""
    with open(path, "w") as f:
        json.dump(mesh_debug_summary(mesh_name, mesh_dict), f, indent=2)
    logger.info("Mesh debug info saved to %s", path)
    return path


def validate_mesh(mesh_name, mesh_dict, radius=1.0, radius_tolerance=1e-5, check_radius=True):
    """
    Validate the structure of a serialized triangle mesh.

    Args:
        mesh_name: Name used in log messages
        mesh_dict: Dictionary produced by ``mesh_to_dict``
        radius: Expected distance of every vertex from the origin
        radius_tolerance: Allowed deviation from ``radius``
        check_radius: Whether to check the vertices lie on the sphere

    Returns:
        bool: True if mesh is valid

    Raises:
        ValueError: If mesh doesn't meet validation requirements
    """
    faces = np.array(mesh_dict.get("faces", []))
    vertices = np.array(mesh_dict.get("vertices", []))
    centroids = np.array(mesh_dict.get("face_centroid", []))

    logger.debug("Mesh %s stats - Centroids: %s, Vertices: %s, Faces: %s",
                 mesh_name, centroids.shape, vertices.shape, faces.shape)

    _validate_mesh_structure(faces, vertices, centroids)
    _validate_face_integrity(faces, vertices)
    _validate_vertex_usage(vertices, faces)
    if check_radius:
        _validate_sphere_radius(vertices, radius, radius_tolerance)

    logger.info("All mesh validations passed for %s.", mesh_name)
    return True


def _validate_mesh_structure(faces, vertices, centroids):
    """Validate basic mesh structure requirements."""
    total_vertices, total_faces, total_centroids = len(vertices), len(faces), len(centroids)

    if total_vertices == 0 or total_faces == 0:
        raise ValueError("Mesh data is empty or missing")

    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise ValueError("Vertices must be 3D points")

    if faces.ndim != 2 or faces.shape[1] != 3:
        raise ValueError("Faces must be triangles (3 vertices per face)")

    if total_centroids and total_faces != total_centroids:
        raise ValueError("Number of faces must match number of face centroids")


def _validate_face_integrity(faces, vertices):
    """Validate face indices and detect duplicate vertices within faces."""
    if np.min(faces) < 0 or np.max(faces) >= len(vertices):
        raise ValueError("Face indices exceed vertex count")

    sorted_faces = np.sort(faces, axis=1)
    duplicate_mask = np.any(sorted_faces[:, :-1] == sorted_faces[:, 1:], axis=1)

    if np.any(duplicate_mask):
        raise ValueError(f"Found {int(np.sum(duplicate_mask))} faces with duplicate vertices")


def _validate_vertex_usage(vertices, faces):
    """Validate face coverage; coincident vertices are only reported."""
    total_vertices = len(vertices)
    unique_vertices = np.unique(vertices, axis=0)

    # Expected for unwelded cubespheres, subdivision does not share edge midpoints
    if total_vertices != len(unique_vertices):
        logger.warning("Found %d coincident vertices", total_vertices - len(unique_vertices))

    unused_vertices = np.setdiff1d(np.arange(total_vertices), np.unique(faces))
    if len(unused_vertices) > 0:
        raise ValueError(f"Found {len(unused_vertices)} unused vertices in mesh")


def _validate_sphere_radius(vertices, radius, tolerance):
    radii = np.linalg.norm(vertices, axis=1)
    deviation = np.max(np.abs(radii - radius))
    if deviation > tolerance:
        raise ValueError(f"Vertices deviate from radius {radius} by up to {deviation:.3e}")
