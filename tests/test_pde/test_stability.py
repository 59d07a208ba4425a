from __future__ import annotations

import numpy as np
import pytest

from cflode.pde.utils import cfl_step_bound, compute_cfl, linspace_grid


def test_compute_cfl_and_step_bound_agree() -> None:
    cfl = compute_cfl(dx=0.1, dt=0.02, wave_speed=2.0)
    assert cfl == pytest.approx(0.4)
    bound = cfl_step_bound(dx=0.1, wave_speed=-2.0)
    assert bound == pytest.approx(0.05)
    assert compute_cfl(dx=0.1, dt=bound, wave_speed=2.0) == pytest.approx(1.0)


def test_utils_validation_helpers() -> None:
    with pytest.raises(ValueError):
        compute_cfl(dx=0.0, dt=0.1, wave_speed=1.0)
    with pytest.raises(ValueError):
        cfl_step_bound(dx=0.1, wave_speed=0.0)
    with pytest.raises(ValueError):
        cfl_step_bound(dx=-0.1, wave_speed=1.0)
    with pytest.raises(ValueError):
        linspace_grid(0.0, 1.0, 1)


def test_linspace_grid_is_uniform() -> None:
    grid = linspace_grid(0.0, 2.0, 5)
    np.testing.assert_allclose(np.diff(grid), 0.5)
