"""
Total variation diminishing Runge-Kutta integrators with CFL-chosen steps.

All three schemes choose the timestep once per step, from the scheme
function's bound at the start of the step:

    delta_t = min(factor_cfl * step_bound, t_final - t, max_step)

and keep it fixed for every substep. Later substeps re-evaluate the bound
only to report violations beyond ``options.safety_factor_cfl``; the step is
never redone with a smaller ``delta_t``.

References
----------
Shu, C.-W. & Osher, S. (1988). Efficient implementation of essentially
non-oscillatory shock-capturing schemes. J. Comput. Phys. 77(2), 439-471.

Osher, S. & Fedkiw, R. (2003). Level Set Methods and Dynamic Implicit
Surfaces, chapter 3.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from .base import CFLIntegrator, SchemeArg, axpy, blend
from .core import (
    Array,
    CFLViolation,
    Context,
    IntegrationResult,
    SchemeFunction,
    State,
    TrajectoryResult,
)
from .options import Options


class ForwardEuler(CFLIntegrator):
    """First-order forward Euler with a CFL-chosen step."""

    name = "euler"
    order = 1

    def _advance(
        self,
        funcs: List[SchemeFunction],
        t: float,
        entries: List[Array],
        context: Context,
        t_final: float,
        coupled: bool,
        violations: List[CFLViolation],
    ) -> Tuple[float, List[Array], Context, float]:
        ydot, bound, context = self._evaluate(funcs, t, entries, context, coupled)
        delta_t = self._choose_delta_t(bound, t, t_final)
        return t + delta_t, axpy(entries, delta_t, ydot), context, delta_t


class TVDRK2(CFLIntegrator):
    """Second-order TVD Runge-Kutta (Heun's method)."""

    name = "tvdrk2"
    order = 2

    def _advance(
        self,
        funcs: List[SchemeFunction],
        t: float,
        entries: List[Array],
        context: Context,
        t_final: float,
        coupled: bool,
        violations: List[CFLViolation],
    ) -> Tuple[float, List[Array], Context, float]:
        ydot, bound, context = self._evaluate(funcs, t, entries, context, coupled)
        delta_t = self._choose_delta_t(bound, t, t_final)

        t1 = t + delta_t
        y1 = axpy(entries, delta_t, ydot)

        ydot, bound, context = self._evaluate(funcs, t1, y1, context, coupled)
        self._check_cfl("second", t1, delta_t, bound, violations)

        t2 = t1 + delta_t
        y2 = axpy(y1, delta_t, ydot)

        # Average t_n and t_{n+2}.
        t_new = 0.5 * (t + t2)
        return t_new, blend(0.5, entries, 0.5, y2), context, delta_t


class TVDRK3(CFLIntegrator):
    """
    Third-order TVD Runge-Kutta of Shu and Osher.

    One step is three forward Euler substeps combined convexly::

        y1     = y + dt * f(t, y)
        y2     = y1 + dt * f(t + dt, y1)
        y_half = (3 y + y2) / 4                  # second order at t + dt/2
        y_3/2  = y_half + dt * f(t + dt/2, y_half)
        y'     = (y + 2 y_3/2) / 3               # third order at t + dt

    The times are combined with the same weights as the states.
    """

    name = "tvdrk3"
    order = 3

    def _advance(
        self,
        funcs: List[SchemeFunction],
        t: float,
        entries: List[Array],
        context: Context,
        t_final: float,
        coupled: bool,
        violations: List[CFLViolation],
    ) -> Tuple[float, List[Array], Context, float]:
        ydot, bound, context = self._evaluate(funcs, t, entries, context, coupled)
        delta_t = self._choose_delta_t(bound, t, t_final)

        t1 = t + delta_t
        y1 = axpy(entries, delta_t, ydot)

        ydot, bound, context = self._evaluate(funcs, t1, y1, context, coupled)
        self._check_cfl("second", t1, delta_t, bound, violations)

        t2 = t1 + delta_t
        y2 = axpy(y1, delta_t, ydot)

        t_half = 0.25 * (3.0 * t + t2)
        y_half = blend(0.75, entries, 0.25, y2)

        ydot, bound, context = self._evaluate(funcs, t_half, y_half, context, coupled)
        self._check_cfl("third", t_half, delta_t, bound, violations)

        t_three_half = t_half + delta_t
        y_three_half = axpy(y_half, delta_t, ydot)

        t_new = (1.0 / 3.0) * (t + 2.0 * t_three_half)
        y_new = blend(1.0 / 3.0, entries, 2.0 / 3.0, y_three_half)
        return t_new, y_new, context, delta_t


def _run(
    integrator_cls: type,
    scheme_func: SchemeArg,
    tspan: Sequence[float],
    y0: State,
    options: Optional[Options],
    context: Context,
) -> Union[IntegrationResult, TrajectoryResult]:
    return integrator_cls(options).integrate(scheme_func, tspan, y0, context)


def ode_cfl1(
    scheme_func: SchemeArg,
    tspan: Sequence[float],
    y0: State,
    options: Optional[Options] = None,
    context: Context = None,
) -> Union[IntegrationResult, TrajectoryResult]:
    """Integrate with first-order forward Euler. See :func:`ode_cfl3`."""
    return _run(ForwardEuler, scheme_func, tspan, y0, options, context)


def ode_cfl2(
    scheme_func: SchemeArg,
    tspan: Sequence[float],
    y0: State,
    options: Optional[Options] = None,
    context: Context = None,
) -> Union[IntegrationResult, TrajectoryResult]:
    """Integrate with second-order TVD Runge-Kutta. See :func:`ode_cfl3`."""
    return _run(TVDRK2, scheme_func, tspan, y0, options, context)


def ode_cfl3(
    scheme_func: SchemeArg,
    tspan: Sequence[float],
    y0: State,
    options: Optional[Options] = None,
    context: Context = None,
) -> Union[IntegrationResult, TrajectoryResult]:
    """
    Integrate a CFL-constrained ODE with third-order TVD Runge-Kutta.

    Parameters
    ----------
    scheme_func:
        ``scheme_func(t, y, context) -> (ydot, step_bound, context)``, or a
        sequence with one such function per subsystem of a coupled state.
        ``step_bound`` is the largest stable step at ``(t, y)`` and must be
        strictly positive and finite.
    tspan:
        ``[t0, t_final]``, or three or more strictly increasing output times.
    y0:
        Initial state: an array (NumPy or torch) or a list of arrays for a
        coupled state.
    options:
        :class:`Options`; ``None`` uses the defaults.
    context:
        Data threaded through every scheme function, hook and event call.
        On a coupled state a ``list`` context holds one entry per subsystem
        and is rotated together with the state.

    Returns
    -------
    IntegrationResult or TrajectoryResult
        Unpacks as ``t, y, context`` for a two-point span, or
        ``times, states, context`` otherwise.

    Raises
    ------
    ValueError
        If ``tspan`` has fewer than two entries or is not increasing, if a
        step bound is not positive and finite, or if the context list does
        not match the state list.

    Example
    -------
    >>> import numpy as np
    >>> from cflode.integrators import ode_cfl3
    >>> from cflode.pde import linear_decay
    >>> t, y, _ = ode_cfl3(linear_decay(1.0), [0.0, 1.0], np.ones(4))
    >>> bool(np.allclose(y, np.exp(-1.0), atol=1e-2))
    True
    """
    return _run(TVDRK3, scheme_func, tspan, y0, options, context)


__all__ = [
    "ForwardEuler",
    "TVDRK2",
    "TVDRK3",
    "ode_cfl1",
    "ode_cfl2",
    "ode_cfl3",
]
