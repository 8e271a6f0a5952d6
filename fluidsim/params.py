import numbers
from dataclasses import dataclass

from .errors import InvalidConfiguration


RELAXATION_MODES = ("gauss-seidel", "jacobi")


def _is_integer(value):
    # numpy integers count; bools do not
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class Params:
    diffusion: float = 0.0              # diffusion coefficient for density
    viscosity: float = 0.0              # kinematic viscosity for velocity
    size: int = 64                      # grid is size x size, toroidal
    iterations: int = 20                # relaxation sweeps per linear solve
    relaxation: str = "gauss-seidel"    # or "jacobi" (vectorised, different fixed point)

    def validate(self):
        if not _is_integer(self.size):
            raise InvalidConfiguration(f"grid size must be an integer, got {self.size!r}")
        self.size = int(self.size)
        if self.size <= 0:
            raise InvalidConfiguration(f"grid size must be positive, got {self.size}")
        if not _is_integer(self.iterations) or self.iterations < 0:
            raise InvalidConfiguration(f"iterations must be an integer >= 0, got {self.iterations!r}")
        self.iterations = int(self.iterations)
        if self.relaxation not in RELAXATION_MODES:
            raise InvalidConfiguration(
                f"unknown relaxation {self.relaxation!r} (expected one of {', '.join(RELAXATION_MODES)})"
            )
        return self


@dataclass
class AppParams:
    window: int = 800           # window is window x window pixels
    brush_radius: float = 0.1   # in normalized [-1, 1] units
    brush_density: float = 1.0  # density added per second under the brush
    max_dt: float = 1/30        # elapsed time is clamped to this before stepping
    fps: int = 120              # frame cap

    def validate(self):
        if self.window <= 0:
            raise InvalidConfiguration(f"window size must be positive, got {self.window}")
        if self.brush_radius <= 0.0:
            raise InvalidConfiguration(f"brush radius must be positive, got {self.brush_radius}")
        if self.max_dt <= 0.0:
            raise InvalidConfiguration(f"max_dt must be positive, got {self.max_dt}")
        return self
