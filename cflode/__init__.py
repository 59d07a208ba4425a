"""cflode - CFL-constrained TVD Runge-Kutta time stepping for method-of-lines PDEs."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_finite_state,
    check_step_bound,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)

# Integrators
from .integrators import (
    CFLIntegrator,
    CFLViolation,
    ForwardEuler,
    IntegrationResult,
    Options,
    StepResult,
    TrajectoryResult,
    TVDRK2,
    TVDRK3,
    integrate_multiple,
    ode_cfl1,
    ode_cfl2,
    ode_cfl3,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    # Integrators
    "Options",
    "CFLIntegrator",
    "ForwardEuler",
    "TVDRK2",
    "TVDRK3",
    "ode_cfl1",
    "ode_cfl2",
    "ode_cfl3",
    "integrate_multiple",
    "CFLViolation",
    "StepResult",
    "IntegrationResult",
    "TrajectoryResult",
    # Diagnostics
    "state_norm",
    "assert_finite_state",
    "check_step_bound",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
