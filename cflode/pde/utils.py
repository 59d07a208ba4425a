"""
Utility helpers for method-of-lines discretizations: CFL numbers and grids.
"""

from __future__ import annotations

import numpy as np


def compute_cfl(dx: float, dt: float, wave_speed: float) -> float:
    """Return the Courant–Friedrichs–Lewy number |c| dt / dx."""
    if dx <= 0.0 or dt <= 0.0:
        raise ValueError("dx and dt must be positive.")
    return abs(wave_speed) * dt / dx


def cfl_step_bound(dx: float, wave_speed: float) -> float:
    """Return the largest dt with a CFL number of one, dx / |c|."""
    if dx <= 0.0:
        raise ValueError("dx must be positive.")
    if wave_speed == 0.0:
        raise ValueError("wave_speed must be non-zero to bound the timestep.")
    return dx / abs(wave_speed)


def linspace_grid(x0: float, x1: float, nx: int) -> np.ndarray:
    """Create a uniform grid with `nx` points between `x0` and `x1`."""
    if nx < 2:
        raise ValueError("nx must be at least 2 to form a grid.")
    return np.linspace(float(x0), float(x1), int(nx))
