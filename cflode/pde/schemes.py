"""
Reference scheme functions for the CFL integrators.

A scheme function has the signature ``(t, y, context) -> (ydot, step_bound,
context)``. The ones here are deliberately simple and are used by the
examples, tests and benchmarks; real applications supply their own spatial
discretizations.

On a coupled state the integrator passes the whole subsystem list, rotated
so that the subsystem being evaluated comes first. These schemes act on that
first entry only, so each subsystem evolves independently.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Tuple

import numpy as np
import torch

from .utils import cfl_step_bound

SchemeFn = Callable[[float, Any, Any], Tuple[Any, float, Any]]


def _own(y: Any) -> Any:
    return y[0] if isinstance(y, Sequence) else y


def _roll(y: Any, shift: int) -> Any:
    if isinstance(y, torch.Tensor):
        return torch.roll(y, shifts=shift, dims=-1)
    return np.roll(y, shift, axis=-1)


def upwind_advection(velocity: float, dx: float) -> SchemeFn:
    """
    First-order upwind scheme for ``u_t + c u_x = 0`` on a periodic grid.

    Parameters
    ----------
    velocity:
        Constant transport speed ``c`` (non-zero).
    dx:
        Uniform grid spacing. The last axis of the state is the grid.

    Returns
    -------
    callable
        Scheme function with step bound ``dx / |c|``. The context is
        passed through unchanged.
    """
    c = float(velocity)
    bound = cfl_step_bound(dx, c)

    def scheme(t: float, y: Any, context: Any) -> Tuple[Any, float, Any]:
        u = _own(y)
        if c > 0.0:
            ydot = -c * (u - _roll(u, 1)) / dx
        else:
            ydot = -c * (_roll(u, -1) - u) / dx
        return ydot, bound, context

    return scheme


def linear_decay(rate: float) -> SchemeFn:
    """Scheme for ``y' = -rate * y`` with step bound ``1 / rate``."""
    rate = float(rate)
    if rate <= 0.0:
        raise ValueError("rate must be positive.")
    bound = 1.0 / rate

    def scheme(t: float, y: Any, context: Any) -> Tuple[Any, float, Any]:
        return -rate * _own(y), bound, context

    return scheme
