"""Tests for time spans and the multiple-output-time driver."""

import numpy as np
import pytest

from cflode.integrators import (
    Options,
    TrajectoryResult,
    TVDRK3,
    integrate_multiple,
    ode_cfl3,
)
from cflode.pde import linear_decay


def _counting_decay(t, y, context):
    return -y, 0.3, context + 1


def test_three_point_span_matches_sequential_calls() -> None:
    y0 = np.linspace(1.0, 2.0, 4)

    trajectory = ode_cfl3(_counting_decay, [0.0, 1.0, 2.0], y0, None, 0)
    first = ode_cfl3(_counting_decay, [0.0, 1.0], y0, None, 0)
    second = ode_cfl3(_counting_decay, [1.0, 2.0], first.y, None, first.context)

    assert isinstance(trajectory, TrajectoryResult)
    times, states, context = trajectory
    assert times == pytest.approx([0.0, 1.0, 2.0])
    assert states[0] is y0
    np.testing.assert_array_equal(states[1], first.y)
    np.testing.assert_array_equal(states[2], second.y)
    assert context == second.context
    assert trajectory.steps == first.steps + second.steps
    assert trajectory.status == "reached_target"


def test_each_interval_restarts_step_selection() -> None:
    """Output times are hit exactly even when they fall between natural steps."""
    hits = []

    def record(t, y, context, options):
        hits.append(t)
        return y, context

    options = Options(post_timestep=record)
    times, states, _ = ode_cfl3(linear_decay(1.0), [0.0, 0.3, 1.1, 1.2], np.ones(2), options)

    assert len(states) == 4
    for target in (0.3, 1.1, 1.2):
        assert min(abs(h - target) for h in hits) < 1e-12


def test_driver_stops_on_terminal_event() -> None:
    def event(t, y, t_prev, y_prev, context):
        return t - 1.4, context

    options = Options(max_step=0.25, terminal_event=event)
    result = ode_cfl3(linear_decay(1.0), [0.0, 1.0, 2.0, 3.0], np.ones(1), options)

    assert result.status == "terminal_event"
    assert len(result.times) == 3
    assert result.times[-1] == pytest.approx(1.5)


def test_driver_accepts_any_integrator_object() -> None:
    class Recorder:
        def __init__(self):
            self.calls = []

        def integrate_interval(self, scheme_func, t0, t1, y, context):
            self.calls.append((t0, t1))
            return TVDRK3().integrate_interval(scheme_func, t0, t1, y, context)

    recorder = Recorder()
    integrate_multiple(recorder, linear_decay(1.0), [0.0, 0.5, 1.5], np.ones(1))
    assert recorder.calls == [(0.0, 0.5), (0.5, 1.5)]


@pytest.mark.parametrize("tspan", [[], [0.0], np.array([1.0])])
def test_short_time_span_is_fatal(tspan) -> None:
    with pytest.raises(ValueError, match="at least two entries"):
        ode_cfl3(linear_decay(1.0), tspan, np.ones(1))


@pytest.mark.parametrize("tspan", [[1.0, 0.0], [0.0, 0.0], [0.0, 2.0, 1.0]])
def test_non_increasing_time_span_is_fatal(tspan) -> None:
    with pytest.raises(ValueError, match="strictly increasing"):
        ode_cfl3(linear_decay(1.0), tspan, np.ones(1))


def test_invalid_step_bound_is_fatal() -> None:
    def unbounded(t, y, context):
        return np.zeros_like(y), np.inf, context

    def negative(t, y, context):
        return np.zeros_like(y), -1.0, context

    with pytest.raises(ValueError, match="step bound"):
        ode_cfl3(unbounded, [0.0, 1.0], np.ones(1))
    with pytest.raises(ValueError, match="step bound"):
        ode_cfl3(negative, [0.0, 1.0], np.ones(1))


def test_mismatched_context_list_is_fatal() -> None:
    with pytest.raises(ValueError, match="Context list"):
        ode_cfl3(linear_decay(1.0), [0.0, 1.0], [np.ones(1), np.ones(1)], None, [1, 2, 3])


@pytest.mark.parametrize("tspan", [[-1.0, 0.0], [-2.0, -1.0, 0.0]])
def test_span_ending_at_zero_terminates(tspan) -> None:
    result = ode_cfl3(linear_decay(1.0), tspan, np.ones(1), Options(max_step=0.25))

    assert result.steps == 4 * (len(tspan) - 1)
    final_t = result.t if len(tspan) == 2 else result.times[-1]
    assert abs(final_t) < 1e-12


def test_integrate_interval_requires_increasing_times() -> None:
    integrator = TVDRK3()
    with pytest.raises(ValueError, match="t_final must be greater than t"):
        integrator.integrate_interval(linear_decay(1.0), 1.0, 1.0, np.ones(1))
    with pytest.raises(ValueError, match="t_final must be greater than t"):
        integrator.integrate_interval(linear_decay(1.0), 1.0, 0.5, np.ones(1))
