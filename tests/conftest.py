import matplotlib

matplotlib.use("Agg")

import pytest

from cubesphere_generation import QuadMesh, Vertex


@pytest.fixture
def cube():
    return QuadMesh.new_cube()


@pytest.fixture
def make_quad():
    """Single quad mesh from four positions, all on texture layer 0."""
    def _make(*positions):
        vertices = [Vertex(p, (1.0, 1.0, 1.0), (0.0, 0.0), 0) for p in positions]
        return QuadMesh(vertices, [(0, 1, 2, 3)])
    return _make


