"""
Pytest tests for mesh-to-mesh interpolation.

Tests verify:
1. Identity when source and destination meshes coincide
2. Exact endpoint values of the two-point interpolation
3. Linear fields reproduced between source centers
4. Flat extrapolation outside the source centers
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from heatstore.src import Mesh1D, interpolate_field, interpolate_linear


@pytest.fixture
def coarse_mesh():
    return Mesh1D.uniform(0.0, 1.0, 10)


@pytest.fixture
def fine_mesh():
    return Mesh1D.uniform(0.0, 1.0, 40)


class TestInterpolateLinear:

    def test_endpoints_exact(self):
        assert interpolate_linear(0.1, 0.1, 0.3, 0.7, -2.3) == 0.7
        assert interpolate_linear(0.3, 0.1, 0.3, 0.7, -2.3) == -2.3

    def test_midpoint(self):
        assert interpolate_linear(0.5, 0.0, 1.0, 1.0, 3.0) == pytest.approx(2.0)

    def test_degenerate_bracket(self):
        assert interpolate_linear(0.2, 0.5, 0.5, 4.0, 9.0) == 4.0


class TestInterpolateField:

    def test_identity_on_same_mesh(self, coarse_mesh):
        rng = np.random.default_rng(7)
        field = rng.normal(size=coarse_mesh.n_cells)
        result = interpolate_field(field, coarse_mesh, Mesh1D.uniform(0.0, 1.0, 10))
        np.testing.assert_array_equal(result, field)

    def test_linear_field_reproduced(self, coarse_mesh, fine_mesh):
        field = 2.0 + 3.0 * coarse_mesh.x_cells
        result = interpolate_field(field, coarse_mesh, fine_mesh)

        inside = ((fine_mesh.x_cells >= coarse_mesh.x_cells[0])
                  & (fine_mesh.x_cells <= coarse_mesh.x_cells[-1]))
        np.testing.assert_allclose(result[inside], 2.0 + 3.0 * fine_mesh.x_cells[inside])

    def test_flat_extrapolation(self, coarse_mesh, fine_mesh):
        field = coarse_mesh.x_cells ** 2
        result = interpolate_field(field, coarse_mesh, fine_mesh)

        before = fine_mesh.x_cells < coarse_mesh.x_cells[0]
        after = fine_mesh.x_cells > coarse_mesh.x_cells[-1]
        assert before.any() and after.any()
        np.testing.assert_array_equal(result[before], field[0])
        np.testing.assert_array_equal(result[after], field[-1])

    def test_fine_to_coarse(self, coarse_mesh, fine_mesh):
        field = np.sin(fine_mesh.x_cells)
        result = interpolate_field(field, fine_mesh, coarse_mesh)
        assert result.shape == (coarse_mesh.n_cells,)
        np.testing.assert_allclose(result, np.sin(coarse_mesh.x_cells), atol=1e-3)

    def test_single_cell_source(self, fine_mesh):
        source = Mesh1D.uniform(0.0, 1.0, 1)
        result = interpolate_field(np.array([3.5]), source, fine_mesh)
        np.testing.assert_array_equal(result, 3.5)
