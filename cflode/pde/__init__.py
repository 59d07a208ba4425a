"""
Small method-of-lines helpers to pair with `cflode.integrators`.

* CFL utilities: `compute_cfl`, `cfl_step_bound`.
* Grids: `linspace_grid`.
* Reference scheme functions: `upwind_advection` (periodic first-order
  upwind) and `linear_decay`.

Limitations: grids are uniform and 1D, and the schemes are first order in
space. They exist to exercise the integrators, not to replace a spatial
discretization library.
"""

from .schemes import linear_decay, upwind_advection
from .utils import cfl_step_bound, compute_cfl, linspace_grid

__all__ = [
    "compute_cfl",
    "cfl_step_bound",
    "linspace_grid",
    "upwind_advection",
    "linear_decay",
]
