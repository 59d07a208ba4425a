"""
Multiple-output-time driver.

Produces the solution at every requested time by integrating each
consecutive pair of times as an independent two-point problem, threading
state and context from one interval to the next. Step-size information is not
carried across intervals, and every snapshot is kept in memory, so this is
meant for a modest number of output times.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from cflode.logging import get_logger

from .core import CFLViolation, Context, State, TrajectoryResult, as_time_span

logger = get_logger(__name__)


def integrate_multiple(
    integrator: Any,
    scheme_func: Any,
    tspan: Sequence[float],
    y0: State,
    context: Context = None,
) -> TrajectoryResult:
    """
    Integrate through every time in ``tspan`` and collect snapshots.

    Parameters
    ----------
    integrator:
        Object with an ``integrate_interval(scheme_func, t0, t1, y, context)``
        method, normally a :class:`~cflode.integrators.base.CFLIntegrator`.
    scheme_func:
        Scheme function, or one per subsystem.
    tspan:
        Strictly increasing output times; the first is the start time.
    y0:
        Initial state.
    context:
        Initial context.

    Returns
    -------
    TrajectoryResult
        ``states[i]`` is the solution at ``times[i]``. If an interval stops
        early (terminal event or single-step mode) the snapshot at its
        actual end time is the last one returned.
    """
    times = as_time_span(tspan)

    out_times: List[float] = [times[0]]
    states: List[State] = [y0]
    violations: List[CFLViolation] = []
    steps = 0
    status = "reached_target"

    y = y0
    for t_start, t_end in zip(times[:-1], times[1:]):
        result = integrator.integrate_interval(scheme_func, t_start, t_end, y, context)
        y, context = result.y, result.context
        steps += result.steps
        violations.extend(result.violations)
        out_times.append(result.t)
        states.append(y)

        if result.status != "reached_target":
            status = result.status
            logger.info(
                "Stopped at t=%g before output time %g (%s).", result.t, t_end, status
            )
            break

    return TrajectoryResult(
        times=out_times,
        states=states,
        context=context,
        status=status,
        steps=steps,
        violations=violations,
    )


__all__ = ["integrate_multiple"]
