import json
import logging

import numpy as np
import pytest

from cubesphere_generation import Mesh, mesh_to_dict, validate_mesh, weld_vertices
from cubesphere_generation.validate_mesh import mesh_debug_summary, save_mesh_debug


@pytest.fixture
def sphere_dict():
    return mesh_to_dict(Mesh.new_cubesphere(2))


class TestValidateMesh:
    def test_cubesphere_passes(self, sphere_dict):
        assert validate_mesh("cubesphere", sphere_dict)

    def test_coincident_vertices_only_warn(self, sphere_dict, caplog):
        with caplog.at_level(logging.WARNING):
            validate_mesh("cubesphere", sphere_dict)
        assert "coincident" in caplog.text

    def test_welded_cubesphere_passes(self):
        validate_mesh("welded", mesh_to_dict(weld_vertices(Mesh.new_cubesphere(2))))

    def test_plane_needs_radius_check_disabled(self):
        plane = mesh_to_dict(Mesh.new_plane())
        with pytest.raises(ValueError, match="radius"):
            validate_mesh("plane", plane)
        assert validate_mesh("plane", plane, check_radius=False)

    def test_out_of_range_index(self, sphere_dict):
        sphere_dict["faces"][0][0] = len(sphere_dict["vertices"])
        with pytest.raises(ValueError, match="exceed"):
            validate_mesh("broken", sphere_dict)

    def test_repeated_index_in_face(self, sphere_dict):
        sphere_dict["faces"][0][1] = sphere_dict["faces"][0][0]
        with pytest.raises(ValueError, match="duplicate"):
            validate_mesh("broken", sphere_dict)

    def test_unused_vertex(self, sphere_dict):
        sphere_dict["vertices"].append([0.0, 0.0, 1.0])
        with pytest.raises(ValueError, match="unused"):
            validate_mesh("broken", sphere_dict)

    def test_empty_mesh(self):
        with pytest.raises(ValueError, match="empty"):
            validate_mesh("empty", {"vertices": [], "faces": []})

    def test_centroid_count_mismatch(self, sphere_dict):
        sphere_dict["face_centroid"] = sphere_dict["face_centroid"][:-1]
        with pytest.raises(ValueError, match="centroids"):
            validate_mesh("broken", sphere_dict)


class TestDebugSummary:
    def test_summary(self, sphere_dict):
        summary = mesh_debug_summary("cubesphere", sphere_dict)
        overview = summary["mesh_overview"]
        assert overview["total_vertices"] == 174
        assert overview["total_faces"] == 192
        assert overview["coincident_vertices"] > 0
        radius = summary["vertex_analysis"]["coordinate_ranges"]["radius"]
        assert radius == pytest.approx([1.0, 1.0])

    def test_welded_keeps_seam_vertices(self):
        summary = mesh_debug_summary("welded", mesh_to_dict(weld_vertices(Mesh.new_cubesphere(2))))
        # Face seams are still split across texture layers
        assert summary["vertex_analysis"]["distance_statistics"]["min_distance"] == pytest.approx(0.0)

    def test_save(self, sphere_dict, tmp_path):
        path = save_mesh_debug("cubesphere", sphere_dict, str(tmp_path / "debug.json"))
        with open(path) as f:
            data = json.load(f)
        assert data["mesh_name"] == "cubesphere"
        assert np.isfinite(data["vertex_analysis"]["distance_statistics"]["mean_distance"])

    def test_empty_mesh(self):
        summary = mesh_debug_summary("empty", {"vertices": [], "faces": []})
        assert summary["mesh_overview"]["total_vertices"] == 0
        assert summary["vertex_analysis"] is None
