"""Tests for the first- and second-order members of the integrator family."""

import numpy as np
import pytest

from cflode.integrators import (
    ForwardEuler,
    Options,
    TVDRK2,
    TVDRK3,
    ode_cfl1,
    ode_cfl2,
)
from cflode.pde import linear_decay


@pytest.mark.parametrize(
    "solver, min_rate",
    [(ode_cfl1, 0.9), (ode_cfl2, 1.8)],
)
def test_convergence_order(solver, min_rate) -> None:
    errors = []
    for h in (0.1, 0.05, 0.025):
        result = solver(linear_decay(1.0), [0.0, 1.0], np.ones(1), Options(factor_cfl=1.0, max_step=h))
        errors.append(abs(result.y[0] - np.exp(-1.0)))

    rates = [np.log2(errors[i] / errors[i + 1]) for i in range(2)]
    assert all(rate > min_rate for rate in rates)


def test_forward_euler_single_step() -> None:
    result = ForwardEuler(Options(factor_cfl=0.5)).step(linear_decay(2.0), 0.0, np.ones(2), 1.0)
    assert result.delta_t == pytest.approx(0.25)
    np.testing.assert_allclose(result.y, 0.5)
    assert result.violations == []


def test_tvdrk2_reports_second_stage_violation() -> None:
    def scheme(t, y, context):
        return np.zeros_like(y), 1.0 if t == 0.0 else 0.2, context

    result = TVDRK2(Options(factor_cfl=0.5)).step(scheme, 0.0, np.ones(1), 10.0)

    assert [v.stage for v in result.violations] == ["second"]
    assert result.violations[0].ratio == pytest.approx(2.5)
    assert result.t == pytest.approx(0.5)


@pytest.mark.parametrize("cls, order", [(ForwardEuler, 1), (TVDRK2, 2), (TVDRK3, 3)])
def test_integrators_share_loop_and_metadata(cls, order) -> None:
    integrator = cls(Options(max_step=0.1))
    assert integrator.order == order
    assert cls.__name__ in repr(integrator)

    result = integrator.integrate(linear_decay(1.0), [0.0, 1.0], [np.ones(1), np.ones(2)])
    assert result.steps == 10
    assert isinstance(result.y, list)
    np.testing.assert_allclose(result.y[1], np.exp(-1.0), atol=0.03)
