from dataclasses import dataclass

import numpy as np


# ---------------------------
# Toroidal addressing
# ---------------------------

def wrap(i, n):
    """Map any signed index into [0, n). Edges connect to the opposite edge."""
    # Python's % already takes the sign of the divisor
    return int(i) % n


def neighbour_sum(field):
    """Sum of the four axis neighbours of every cell, wrapping at the edges.

    Works for scalar fields (N, N) and vector fields (N, N, 2) alike.
    """
    return (
        np.roll(field, 1, axis=0) + np.roll(field, -1, axis=0) +
        np.roll(field, 1, axis=1) + np.roll(field, -1, axis=1)
    )


# ---------------------------
# Cells
# ---------------------------

@dataclass(frozen=True)
class Cell:
    density: float = 0.0
    velocity: tuple = (0.0, 0.0)


class Grid:
    """
    N x N toroidal grid of cells stored as two numpy arrays:
    `density` with shape (N, N) and `velocity` with shape (N, N, 2).
    Indexing is [x, y]; any signed coordinate is wrapped before lookup.
    """
    def __init__(self, size, dtype=np.float32):
        self.size = size
        self.density = np.zeros((size, size), dtype=dtype)
        self.velocity = np.zeros((size, size, 2), dtype=dtype)

    def _wrap(self, i, j):
        return wrap(i, self.size), wrap(j, self.size)

    def neighbor(self, i, j):
        x, y = self._wrap(i, j)
        vx, vy = self.velocity[x, y]
        return Cell(float(self.density[x, y]), (float(vx), float(vy)))

    def __getitem__(self, key):
        return self.neighbor(*key)

    def __setitem__(self, key, cell):
        x, y = self._wrap(*key)
        self.density[x, y] = cell.density
        self.velocity[x, y] = cell.velocity

    def add(self, i, j, density=0.0, velocity=(0.0, 0.0)):
        x, y = self._wrap(i, j)
        self.density[x, y] += density
        self.velocity[x, y] += velocity

    def __iter__(self):
        # Fixed (row, column) order
        for x in range(self.size):
            for y in range(self.size):
                yield (x, y), self.neighbor(x, y)

    def __len__(self):
        return self.size * self.size

    def clear(self):
        self.density.fill(0.0)
        self.velocity.fill(0.0)
