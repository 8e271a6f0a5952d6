import logging
import time
from datetime import timedelta

import numpy as np

from .grid import Grid, neighbour_sum
from .params import Params
from .render import density_to_pixels


logger = logging.getLogger(__name__)


# ---------------------------
# Linear solvers
# ---------------------------

def lin_solve_gauss_seidel(x, x0, a, c, iters=20):
    """
    Relax x[i, j] = (x0[i, j] + a * sum_of_4_neighbours(x)) / c in place.

    Cells are visited x-major then y, both increasing, and every write is seen
    by the cells visited after it in the same sweep. The result depends on
    that order.
    """
    N = x.shape[0]
    for _ in range(iters):
        for i in range(N):
            im, ip = (i - 1) % N, (i + 1) % N
            for j in range(N):
                jm, jp = (j - 1) % N, (j + 1) % N
                x[i, j] = (x0[i, j] + a * (x[im, j] + x[ip, j] + x[i, jm] + x[i, jp])) / c


def lin_solve_jacobi(x, x0, a, c, iters=20):
    """Same update as lin_solve_gauss_seidel, but every sweep reads the previous one."""
    for _ in range(iters):
        x[...] = (x0 + a * neighbour_sum(x)) / c


LINEAR_SOLVERS = {
    "gauss-seidel": lin_solve_gauss_seidel,
    "jacobi": lin_solve_jacobi,
}


def compute_divergence(velocity):
    """Central-difference divergence scaled by -0.5 * h, h = 1 / N."""
    N = velocity.shape[0]
    h = 1.0 / N
    vx = velocity[..., 0]
    vy = velocity[..., 1]
    return -0.5 * h * (
        np.roll(vx, -1, axis=0) - np.roll(vx, 1, axis=0) +
        np.roll(vy, -1, axis=1) - np.roll(vy, 1, axis=1)
    )


# ---------------------------
# Stable Fluids Core
# ---------------------------

class Fluid:
    """
    Stable Fluids solver on an N x N torus. Density and velocity share the
    cell centres; every stencil wraps at the edges, so there are no ghost
    cells and no boundary pass.

    Two equally-sized grids are kept: `cells` is the live field and
    `prev_cells` holds the field a stage started from. Diffusion and
    advection begin by swapping the two references.

    The default "gauss-seidel" relaxation visits cells one at a time in
    Python: roughly N * N * iterations * 3 scalar updates per step, which is
    seconds per tick at N = 200. Use relaxation="jacobi" for interactive
    grid sizes.
    """
    def __init__(self, diffusion=0.0, viscosity=0.0, size=64, iterations=20,
                 relaxation="gauss-seidel"):
        self.params = Params(
            diffusion=diffusion,
            viscosity=viscosity,
            size=size,
            iterations=iterations,
            relaxation=relaxation,
        ).validate()
        size = self.params.size
        iterations = self.params.iterations

        self.cells = Grid(size)
        self.prev_cells = Grid(size)

        # scratch for projection
        self.divergence = np.zeros((size, size), dtype=np.float32)
        self.potential = np.zeros((size, size), dtype=np.float32)

        # Cell-centre coordinates for the backtrace
        I, J = np.meshgrid(np.arange(size), np.arange(size), indexing="ij")
        self.I = I.astype(np.float32)
        self.J = J.astype(np.float32)

        logger.info(
            "fluid %dx%d diffusion=%g viscosity=%g iterations=%d relaxation=%s",
            size, size, diffusion, viscosity, iterations, relaxation,
        )

    @classmethod
    def from_params(cls, params):
        return cls(
            diffusion=params.diffusion,
            viscosity=params.viscosity,
            size=params.size,
            iterations=params.iterations,
            relaxation=params.relaxation,
        )

    # ---- Configuration ----
    @property
    def size(self):
        return self.params.size

    @property
    def diffusion(self):
        return self.params.diffusion

    @diffusion.setter
    def diffusion(self, value):
        self.params.diffusion = value

    @property
    def viscosity(self):
        return self.params.viscosity

    @viscosity.setter
    def viscosity(self, value):
        self.params.viscosity = value

    @property
    def iterations(self):
        return self.params.iterations

    def _lin_solve(self, x, x0, a, c):
        LINEAR_SOLVERS[self.params.relaxation](x, x0, a, c, self.params.iterations)

    def swap(self):
        self.cells, self.prev_cells = self.prev_cells, self.cells

    # ---- Implicit diffusion ----
    def diffuse(self, dt):
        # With no sweeps there is nothing to solve; keep the field as is.
        if self.iterations == 0:
            return
        self.swap()

        N = self.size
        a_density = dt * self.diffusion * N * N
        a_velocity = dt * self.viscosity * N * N

        self._lin_solve(self.cells.density, self.prev_cells.density,
                        a_density, 1.0 + 4.0 * a_density)
        self._lin_solve(self.cells.velocity, self.prev_cells.velocity,
                        a_velocity, 1.0 + 4.0 * a_velocity)

    # ---- Projection to make velocity (nearly) divergence-free ----
    def project(self):
        N = self.size
        h = 1.0 / N
        velocity = self.cells.velocity
        div = self.divergence
        p = self.potential

        div[...] = compute_divergence(velocity)
        p.fill(0.0)

        # Poisson solve for the potential: p = 0.25 * (div + neighbours)
        self._lin_solve(p, div, 1.0, 4.0)

        # Subtract potential gradient
        velocity[..., 0] -= 0.5 * (np.roll(p, -1, axis=0) - np.roll(p, 1, axis=0)) / h
        velocity[..., 1] -= 0.5 * (np.roll(p, -1, axis=1) - np.roll(p, 1, axis=1)) / h

    # ---- Semi-Lagrangian advection ----
    def advect(self, dt):
        self.swap()

        N = self.size
        src = self.prev_cells
        dst = self.cells
        dt0 = dt * N

        # Backtrace
        x = self.I - dt0 * src.velocity[..., 0]
        y = self.J - dt0 * src.velocity[..., 1]

        left = np.floor(x)
        top = np.floor(y)

        s1 = x - left
        s0 = 1.0 - s1
        t1 = y - top
        t0 = 1.0 - t1

        i0 = left.astype(np.intp)
        j0 = top.astype(np.intp)
        i1 = (i0 + 1) % N
        j1 = (j0 + 1) % N
        i0 %= N
        j0 %= N

        # Bilinear sample from the previous buffer
        d0 = src.density
        dst.density[...] = (
            s0 * (t0 * d0[i0, j0] + t1 * d0[i0, j1]) +
            s1 * (t0 * d0[i1, j0] + t1 * d0[i1, j1])
        )

        v0 = src.velocity
        s0, s1, t0, t1 = (w[..., np.newaxis] for w in (s0, s1, t0, t1))
        dst.velocity[...] = (
            s0 * (t0 * v0[i0, j0] + t1 * v0[i0, j1]) +
            s1 * (t0 * v0[i1, j0] + t1 * v0[i1, j1])
        )

    # ---- Steps ----
    def step(self, elapsed):
        """Advance by `elapsed` seconds (float or timedelta). Not clamped."""
        if isinstance(elapsed, timedelta):
            elapsed = elapsed.total_seconds()
        start = time.perf_counter()

        self.diffuse(elapsed)
        self.project()
        self.advect(elapsed)
        self.project()

        logger.debug("step dt=%.4fs took %.2fms", elapsed, (time.perf_counter() - start) * 1e3)

    # ---- Interaction helpers ----
    def __getitem__(self, key):
        return self.cells[key]

    def __setitem__(self, key, cell):
        self.cells[key] = cell

    def perturb(self, i, j, density=0.0, velocity=(0.0, 0.0)):
        self.cells.add(i, j, density, velocity)

    def __iter__(self):
        return iter(self.cells)

    @property
    def density(self):
        view = self.cells.density.view()
        view.flags.writeable = False
        return view

    @property
    def velocity(self):
        view = self.cells.velocity.view()
        view.flags.writeable = False
        return view

    def density_image(self):
        return density_to_pixels(self.cells.density)

    def total_density(self):
        return float(self.cells.density.sum(dtype=np.float64))

    def clear(self):
        for grid in (self.cells, self.prev_cells):
            grid.clear()
        for arr in (self.divergence, self.potential):
            arr.fill(0.0)
