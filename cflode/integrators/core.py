"""Core interfaces shared by the CFL-constrained integrators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Literal, Sequence, Tuple, Union

import numpy as np
import torch

Array = Union[np.ndarray, torch.Tensor]
State = Union[Array, List[Array]]
Context = Any

# (t, y, context) -> (ydot, step_bound, context)
SchemeFunction = Callable[[float, Any, Context], Tuple[Any, float, Context]]
# (t, y, context, options) -> (y, context)
PostStepHook = Callable[[float, State, Context, Any], Tuple[State, Context]]
# (t, y, t_prev, y_prev, context) -> (event_value, context)
TerminalEventFn = Callable[[float, State, float, State, Context], Tuple[Any, Context]]

Status = Literal["reached_target", "terminal_event", "single_step"]

# Relative distance to the final time below which integration stops.
SMALL = 100.0 * np.finfo(float).eps


@dataclass(frozen=True)
class CFLViolation:
    """A substep whose fixed timestep exceeded the safety-scaled CFL bound."""

    stage: str
    t: float
    delta_t: float
    step_bound: float
    ratio: float


@dataclass
class StepResult:
    """Outcome of a single accepted timestep."""

    t: float
    y: State
    context: Context
    delta_t: float
    violations: List[CFLViolation] = field(default_factory=list)


@dataclass
class IntegrationResult:
    """
    Result of integrating over a two-point time span.

    Unpacks as ``t, y, context`` so callers can write
    ``t, y, data = ode_cfl3(...)``.
    """

    t: float
    y: State
    context: Context
    steps: int
    status: Status
    violations: List[CFLViolation] = field(default_factory=list)
    elapsed: float = 0.0

    def __iter__(self) -> Iterator[Any]:
        return iter((self.t, self.y, self.context))


@dataclass
class TrajectoryResult:
    """
    Snapshots at each requested output time.

    ``times[0]`` and ``states[0]`` are the initial time and state. If an
    interval ends early (terminal event or single-step mode) the lists stop
    at that point and ``status`` says why. Unpacks as
    ``times, states, context``.
    """

    times: List[float]
    states: List[State]
    context: Context
    status: Status
    steps: int
    violations: List[CFLViolation] = field(default_factory=list)

    def __iter__(self) -> Iterator[Any]:
        return iter((self.times, self.states, self.context))


def as_time_span(tspan: Union[Sequence[float], Array]) -> List[float]:
    """Return ``tspan`` as a list of floats, validating its shape and order."""
    if isinstance(tspan, torch.Tensor):
        tspan = tspan.detach().cpu().numpy()
    times = [float(t) for t in np.asarray(tspan, dtype=float).reshape(-1)]
    if len(times) < 2:
        raise ValueError("tspan must contain at least two entries.")
    for earlier, later in zip(times[:-1], times[1:]):
        if not later > earlier:
            raise ValueError(f"tspan must be strictly increasing; got {times}.")
    return times


__all__ = [
    "Array",
    "State",
    "Context",
    "SchemeFunction",
    "PostStepHook",
    "TerminalEventFn",
    "Status",
    "SMALL",
    "CFLViolation",
    "StepResult",
    "IntegrationResult",
    "TrajectoryResult",
    "as_time_span",
]
