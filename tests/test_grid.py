"""Tests for toroidal addressing and cell storage."""

import numpy as np
import pytest

from fluidsim.grid import Cell, Grid, neighbour_sum, wrap


class TestWrap:
    @pytest.mark.parametrize("n", [1, 3, 4, 7])
    @pytest.mark.parametrize("i", [-9, -1, 0, 1, 5, 13])
    def test_lands_in_range(self, n, i):
        assert 0 <= wrap(i, n) < n

    def test_negative_indices_count_back_from_the_end(self):
        assert wrap(-1, 4) == 3
        assert wrap(-4, 4) == 0
        assert wrap(-5, 4) == 3

    def test_numpy_integers_are_accepted(self):
        assert wrap(np.int64(-1), 4) == 3


class TestGridAccess:
    @pytest.fixture
    def grid(self):
        g = Grid(5)
        rng = np.random.default_rng(3)
        g.density[...] = rng.random((5, 5))
        g.velocity[...] = rng.standard_normal((5, 5, 2))
        return g

    def test_starts_zeroed(self):
        g = Grid(3)
        assert all(cell == Cell() for _, cell in g)

    @pytest.mark.parametrize("k", [-3, -1, 1, 2])
    def test_neighbor_wraps_by_multiples_of_n(self, grid, k):
        """neighbor(i + kN, j) == neighbor(i, j) and the same along j."""
        n = grid.size
        for i in range(n):
            for j in range(n):
                assert grid.neighbor(i + k * n, j) == grid.neighbor(i, j)
                assert grid.neighbor(i, j + k * n) == grid.neighbor(i, j)

    def test_setitem_wraps(self, grid):
        grid[-1, 6] = Cell(2.5, (1.0, -1.0))
        assert grid.density[4, 1] == 2.5
        assert tuple(grid.velocity[4, 1]) == (1.0, -1.0)
        assert grid[4, 1] == Cell(2.5, (1.0, -1.0))

    def test_add_accumulates(self):
        g = Grid(4)
        g.add(1, 1, 0.25, (1.0, 0.0))
        g.add(5, -3, 0.25, (0.0, 2.0))
        assert g[1, 1] == Cell(0.5, (1.0, 2.0))

    def test_iteration_is_row_major(self):
        g = Grid(3)
        keys = [key for key, _ in g]
        assert keys == [(x, y) for x in range(3) for y in range(3)]
        assert len(g) == 9

    def test_clear(self, grid):
        grid.clear()
        assert not grid.density.any()
        assert not grid.velocity.any()


class TestNeighbourSum:
    def test_matches_explicit_wrapped_stencil(self):
        rng = np.random.default_rng(0)
        field = rng.random((4, 4))
        total = neighbour_sum(field)
        for i in range(4):
            for j in range(4):
                expected = (field[(i - 1) % 4, j] + field[(i + 1) % 4, j] +
                            field[i, (j - 1) % 4] + field[i, (j + 1) % 4])
                assert total[i, j] == pytest.approx(expected)

    def test_vector_fields_sum_per_component(self):
        field = np.zeros((3, 3, 2))
        field[1, 1] = (1.0, 2.0)
        total = neighbour_sum(field)
        assert tuple(total[0, 1]) == (1.0, 2.0)
        assert tuple(total[1, 1]) == (0.0, 0.0)
