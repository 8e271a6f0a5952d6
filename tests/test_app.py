"""Command-line parsing for the demo; never opens a window."""

import pytest

pytest.importorskip("pygame")

from fluidsim.app import build_parser, params_from_args  # noqa: E402
from fluidsim.errors import InvalidConfiguration  # noqa: E402


def test_defaults():
    params, app_params = params_from_args(build_parser().parse_args([]))
    assert params.size == 128
    assert params.iterations == 20
    assert params.relaxation == "jacobi"
    assert params.diffusion == 0.0
    assert app_params.window == 800


def test_options_map_onto_params():
    args = build_parser().parse_args([
        "--size", "64", "--diffusion", "1e-4", "--viscosity", "2e-4",
        "--iterations", "10", "--relaxation", "gauss-seidel", "--window", "512",
    ])
    params, app_params = params_from_args(args)
    assert params.size == 64
    assert params.diffusion == 1e-4
    assert params.viscosity == 2e-4
    assert params.iterations == 10
    assert params.relaxation == "gauss-seidel"
    assert app_params.window == 512


def test_unknown_relaxation_is_rejected_by_the_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--relaxation", "sor"])


def test_zero_size_is_invalid():
    with pytest.raises(InvalidConfiguration):
        params_from_args(build_parser().parse_args(["--size", "0"]))
