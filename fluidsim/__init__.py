"""Semi-Lagrangian "stable fluids" solver on a periodic 2D grid."""
from .brush import Brush, cell_to_normalized, normalized_to_cell, window_to_normalized
from .errors import InvalidConfiguration
from .fluid import Fluid, compute_divergence
from .grid import Cell, Grid, wrap
from .params import AppParams, Params
from .render import density_to_pixels
from .timer import FpsCounter, Timer

__version__ = "0.1.0"

__all__ = [
    "AppParams",
    "Brush",
    "Cell",
    "Fluid",
    "FpsCounter",
    "Grid",
    "InvalidConfiguration",
    "Params",
    "Timer",
    "cell_to_normalized",
    "compute_divergence",
    "density_to_pixels",
    "normalized_to_cell",
    "window_to_normalized",
    "wrap",
]
