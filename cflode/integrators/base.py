"""
Step loop shared by the CFL-constrained explicit integrators.

A concrete integrator only implements :meth:`CFLIntegrator._advance`, which
takes one step from ``t`` towards ``t_final``. This module owns everything
around it: time-span handling, the coupled-state packing, post-timestep hooks,
terminal events, single-step mode, statistics and CFL-violation reporting.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from cflode.diagnostics import assert_finite_state, is_debug_enabled
from cflode.logging import get_logger

from .core import (
    SMALL,
    Array,
    CFLViolation,
    Context,
    IntegrationResult,
    SchemeFunction,
    State,
    Status,
    StepResult,
    TrajectoryResult,
    as_time_span,
)
from .coupled import (
    evaluate_pass,
    has_subsystem_context,
    pack_state,
    resolve_scheme_functions,
    unpack_state,
)
from .driver import integrate_multiple
from .hooks import StepStatistics, TerminalEventMonitor, call_post_timestep
from .options import Options

logger = get_logger(__name__)

SchemeArg = Union[SchemeFunction, Sequence[SchemeFunction]]


def axpy(entries: List[Array], delta_t: float, derivatives: List[Array]) -> List[Array]:
    """Forward Euler update ``y + delta_t * ydot`` for every subsystem."""
    return [y + delta_t * ydot for y, ydot in zip(entries, derivatives)]


def blend(
    a: float,
    first: List[Array],
    b: float,
    second: List[Array],
) -> List[Array]:
    """Convex combination ``a * first + b * second`` for every subsystem."""
    return [a * y + b * z for y, z in zip(first, second)]


def _check_target(t: float, t_final: float) -> Tuple[float, float]:
    t, t_final = float(t), float(t_final)
    if not t_final > t:
        raise ValueError(f"t_final must be greater than t; got t={t}, t_final={t_final}.")
    return t, t_final


class CFLIntegrator:
    """
    Base class for explicit integrators whose timestep is set by a CFL bound.

    Parameters
    ----------
    options:
        Integrator options; ``None`` means ``Options()``.
    """

    name = "cfl"
    order = 0

    def __init__(self, options: Optional[Options] = None) -> None:
        self.options = options if options is not None else Options()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(options={self.options!r})"

    # ------------------------------------------------------------------
    def integrate(
        self,
        scheme_func: SchemeArg,
        tspan: Sequence[float],
        y0: State,
        context: Context = None,
    ) -> Union[IntegrationResult, TrajectoryResult]:
        """
        Integrate ``y0`` over ``tspan``.

        A two-entry ``tspan`` returns an :class:`IntegrationResult` at the
        final time. Three or more entries return a :class:`TrajectoryResult`
        with one snapshot per requested time.
        """
        times = as_time_span(tspan)
        if len(times) == 2:
            return self.integrate_interval(scheme_func, times[0], times[1], y0, context)
        return integrate_multiple(self, scheme_func, times, y0, context)

    def integrate_interval(
        self,
        scheme_func: SchemeArg,
        t0: float,
        t_final: float,
        y0: State,
        context: Context = None,
    ) -> IntegrationResult:
        """Step from ``t0`` until ``t_final``, a terminal event, or one step in single-step mode."""
        options = self.options
        t, t_final = _check_target(t0, t_final)
        entries, coupled = pack_state(y0)
        funcs = resolve_scheme_functions(scheme_func, len(entries))
        has_subsystem_context(context, coupled, len(entries))

        monitor = None
        if options.terminal_event is not None:
            monitor = TerminalEventMonitor(options.terminal_event)

        # Relative to the span as well as t_final so the end test stays positive at t_final == 0.
        tolerance = SMALL * max(abs(t_final), t_final - t)
        steps = 0
        status: Status = "reached_target"
        violations: List[CFLViolation] = []

        with StepStatistics(options.stats, t, logger) as stats:
            while t_final - t >= tolerance:
                t_prev, y_prev = t, unpack_state(entries, coupled)

                t, entries, context, delta_t = self._advance(
                    funcs, t, entries, context, t_final, coupled, violations
                )
                steps += 1
                logger.debug("%s step %d: t=%g delta_t=%g", self.name, steps, t, delta_t)

                if options.post_timestep_hooks:
                    y, context = call_post_timestep(
                        t, unpack_state(entries, coupled), context, options
                    )
                    entries, coupled = pack_state(y)
                    has_subsystem_context(context, coupled, len(entries))

                if is_debug_enabled():
                    assert_finite_state(unpack_state(entries, coupled))

                if options.single_step:
                    status = "single_step"
                    break

                if monitor is not None:
                    fired, context = monitor.update(
                        t, unpack_state(entries, coupled), t_prev, y_prev, context
                    )
                    if fired:
                        status = "terminal_event"
                        break

            stats.record(steps, t)

        return IntegrationResult(
            t=t,
            y=unpack_state(entries, coupled),
            context=context,
            steps=steps,
            status=status,
            violations=violations,
            elapsed=stats.elapsed,
        )

    def step(
        self,
        scheme_func: SchemeArg,
        t: float,
        y: State,
        t_final: float,
        context: Context = None,
    ) -> StepResult:
        """
        Take exactly one step from ``t`` without passing ``t_final``.

        Hooks and terminal events are not run; this is the raw scheme.
        """
        t, t_final = _check_target(t, t_final)
        entries, coupled = pack_state(y)
        funcs = resolve_scheme_functions(scheme_func, len(entries))
        has_subsystem_context(context, coupled, len(entries))
        violations: List[CFLViolation] = []
        t_new, entries, context, delta_t = self._advance(
            funcs, t, entries, context, t_final, coupled, violations
        )
        return StepResult(
            t=t_new,
            y=unpack_state(entries, coupled),
            context=context,
            delta_t=delta_t,
            violations=violations,
        )

    # ------------------------------------------------------------------
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
        """Return ``(t_new, entries_new, context, delta_t)`` for one step."""
        raise NotImplementedError

    def _choose_delta_t(self, step_bound: float, t: float, t_final: float) -> float:
        return min(
            self.options.factor_cfl * step_bound,
            t_final - t,
            self.options.max_step,
        )

    def _check_cfl(
        self,
        stage: str,
        t: float,
        delta_t: float,
        step_bound: float,
        violations: List[CFLViolation],
    ) -> None:
        # The step is kept as computed; later substeps are only monitored.
        if delta_t > self.options.safety_factor_cfl * step_bound:
            ratio = delta_t / step_bound
            violations.append(
                CFLViolation(
                    stage=stage,
                    t=t,
                    delta_t=delta_t,
                    step_bound=step_bound,
                    ratio=ratio,
                )
            )
            logger.warning(
                "%s substep violated CFL; effective number %f", stage.capitalize(), ratio
            )

    @staticmethod
    def _evaluate(
        funcs: List[SchemeFunction],
        t: float,
        entries: List[Array],
        context: Context,
        coupled: bool,
    ) -> Tuple[List[Array], float, Context]:
        return evaluate_pass(funcs, t, entries, context, coupled)


__all__ = ["CFLIntegrator", "axpy", "blend"]
