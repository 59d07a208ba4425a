"""
CFL-constrained explicit time integrators for method-of-lines PDEs.

The module currently provides:

* `ode_cfl1`, `ode_cfl2`, `ode_cfl3` – forward Euler, second- and
  third-order TVD Runge–Kutta, each choosing its timestep from the bound
  reported by the scheme function.
* `ForwardEuler`, `TVDRK2`, `TVDRK3` – the same schemes as classes, with a
  `step` method for callers that drive time stepping themselves.
* Coupled ("vector level set") states: a list of K arrays, one scheme
  function per subsystem, optional per-subsystem context list.
* Post-timestep hooks, terminal events, single-step mode and run statistics,
  configured through `Options`.

Example
-------
>>> import numpy as np
>>> from cflode.integrators import Options, ode_cfl3
>>> from cflode.pde import linspace_grid, upwind_advection
>>>
>>> x = linspace_grid(0.0, 1.0, 101)[:-1]
>>> dx = x[1] - x[0]
>>> y0 = np.exp(-200.0 * (x - 0.3) ** 2)
>>> t, y, _ = ode_cfl3(upwind_advection(1.0, dx), [0.0, 0.2], y0, Options(factor_cfl=0.9))
>>> round(t, 12)
0.2
"""

from .base import CFLIntegrator
from .core import (
    CFLViolation,
    IntegrationResult,
    PostStepHook,
    SchemeFunction,
    StepResult,
    TerminalEventFn,
    TrajectoryResult,
)
from .coupled import RingView, SubsystemRing, evaluate_pass
from .driver import integrate_multiple
from .hooks import StepStatistics, TerminalEventMonitor, call_post_timestep
from .options import Options
from .tvdrk import TVDRK2, TVDRK3, ForwardEuler, ode_cfl1, ode_cfl2, ode_cfl3

__all__ = [
    "Options",
    "SchemeFunction",
    "PostStepHook",
    "TerminalEventFn",
    "CFLViolation",
    "StepResult",
    "IntegrationResult",
    "TrajectoryResult",
    "CFLIntegrator",
    "ForwardEuler",
    "TVDRK2",
    "TVDRK3",
    "ode_cfl1",
    "ode_cfl2",
    "ode_cfl3",
    "integrate_multiple",
    "SubsystemRing",
    "RingView",
    "evaluate_pass",
    "call_post_timestep",
    "TerminalEventMonitor",
    "StepStatistics",
]
