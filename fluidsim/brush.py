import math
from dataclasses import dataclass


# ---------------------------
# Coordinate mapping
# ---------------------------
# Normalized space is [-1, 1] on both axes with y pointing up.

def window_to_normalized(px, py, width, height):
    return px / width * 2.0 - 1.0, -py / height * 2.0 + 1.0


def cell_to_normalized(i, j, N):
    return i / N * 2.0 - 1.0, j / N * 2.0 - 1.0


def normalized_to_cell(x, y, N):
    # int() truncates toward zero
    return int((x / 2.0 + 0.5) * N), int((y / 2.0 + 0.5) * N)


# ---------------------------
# Brush
# ---------------------------

@dataclass
class Brush:
    radius: float = 0.1   # normalized units
    density: float = 1.0  # added per second

    def cell_radius(self, N):
        return math.ceil(self.radius * N / 2.0)

    def apply(self, fluid, cursor, velocity, dt):
        """
        Add density * dt and `velocity` to every cell whose centre lies
        strictly inside the brush circle around `cursor` (normalized
        coordinates). Cells past the grid edge wrap. Returns the number of
        cells touched.
        """
        N = fluid.size
        r = self.cell_radius(N)
        cx, cy = normalized_to_cell(cursor[0], cursor[1], N)
        r2 = self.radius * self.radius

        touched = 0
        for i in range(cx - r, cx + r + 1):
            for j in range(cy - r, cy + r + 1):
                nx, ny = cell_to_normalized(i, j, N)
                if (nx - cursor[0]) ** 2 + (ny - cursor[1]) ** 2 < r2:
                    fluid.perturb(i, j, self.density * dt, velocity)
                    touched += 1
        return touched
