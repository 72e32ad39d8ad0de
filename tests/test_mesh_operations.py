import numpy as np
import pytest

from cubesphere_generation import (
    Mesh, Vertex, cube_vertex_count, icosphere_vertex_count, max_subdivisions, weld_vertices,
)


class TestDepthBounds:
    @pytest.mark.parametrize("depth,expected", [(0, 24), (1, 54), (2, 174), (4, 2574)])
    def test_cube_vertex_count(self, depth, expected):
        assert cube_vertex_count(depth) == expected

    @pytest.mark.parametrize("depth", [0, 1, 3])
    def test_icosphere_vertex_count_matches_generated_mesh(self, depth):
        assert Mesh.new_icosphere(depth).vertex_count == icosphere_vertex_count(depth)

    def test_max_subdivisions_uint16(self):
        assert max_subdivisions(np.uint16) == 6
        assert cube_vertex_count(6) <= 65536 < cube_vertex_count(7)

    def test_max_subdivisions_uint8(self):
        assert max_subdivisions(np.uint8) == 2

    def test_max_icosphere_subdivisions(self):
        assert max_subdivisions(np.uint16, icosphere_vertex_count) == 6
        assert max_subdivisions(np.uint8, icosphere_vertex_count) == 2
        assert icosphere_vertex_count(6) <= 65536 < icosphere_vertex_count(7)

    def test_max_subdivisions_matches_generated_mesh(self):
        depth = max_subdivisions(np.uint8)
        mesh = Mesh.new_cubesphere(depth, index_dtype=np.uint8)
        assert mesh.vertex_count == cube_vertex_count(depth)


class TestWeldVertices:
    def test_depth_one_has_nothing_to_weld(self):
        mesh = Mesh.new_cubesphere(1)
        assert weld_vertices(mesh).vertex_count == mesh.vertex_count

    def test_depth_two_welds_face_grids(self):
        mesh = Mesh.new_cubesphere(2)
        welded = weld_vertices(mesh)

        # 5x5 grid per face, seams between faces stay split
        assert welded.vertex_count == 6 * 25
        assert welded.triangle_count == mesh.triangle_count
        assert max(welded.index_data) < welded.vertex_count

    def test_triangles_keep_their_positions(self):
        mesh = Mesh.new_cubesphere(2)
        welded = weld_vertices(mesh)
        before = mesh.positions()[mesh.faces()]
        after = welded.positions()[welded.faces()]
        assert np.allclose(before, after)

    def test_layers_never_merge(self):
        vertices = [Vertex((1.0, 0.0, 0.0), tex_layer=0), Vertex((1.0, 0.0, 0.0), tex_layer=1),
                    Vertex((0.0, 1.0, 0.0), tex_layer=0)]
        mesh = Mesh(vertices, [0, 1, 2])
        assert weld_vertices(mesh).vertex_count == 3

    def test_input_not_mutated(self):
        mesh = Mesh.new_cubesphere(2)
        count = mesh.vertex_count
        weld_vertices(mesh)
        assert mesh.vertex_count == count

    def test_empty_mesh(self):
        assert weld_vertices(Mesh([], [])).vertex_count == 0
