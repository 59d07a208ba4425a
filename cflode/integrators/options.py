"""Integrator options."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from .core import PostStepHook, TerminalEventFn


@dataclass(frozen=True)
class Options:
    """
    Configuration shared by the CFL-constrained integrators.

    Build one value up front and pass it to every call; the integrators never
    modify it. ``Options()`` gives the defaults.

    Attributes
    ----------
    factor_cfl:
        Fraction of the scheme's step bound actually taken, in (0, 1].
    max_step:
        Upper limit on any timestep.
    single_step:
        Return after one accepted step regardless of the remaining time.
    stats:
        Log the step count and wall-clock time of each call at INFO level.
    post_timestep:
        A hook, or a sequence of hooks run in order, called after every step
        as ``hook(t, y, context, options) -> (y, context)``.
    terminal_event:
        ``fn(t, y, t_prev, y_prev, context) -> (value, context)``;
        integration stops when the sign of any component of ``value``
        changes between consecutive steps.
    """

    factor_cfl: float = 0.5
    max_step: float = math.inf
    single_step: bool = False
    stats: bool = False
    post_timestep: Optional[Union[PostStepHook, Sequence[PostStepHook]]] = None
    terminal_event: Optional[TerminalEventFn] = None

    def __post_init__(self) -> None:
        factor = float(self.factor_cfl)
        if not (0.0 < factor <= 1.0):
            raise ValueError(f"factor_cfl must be in (0, 1], got {self.factor_cfl}.")
        max_step = float(self.max_step)
        if math.isnan(max_step) or max_step <= 0.0:
            raise ValueError(f"max_step must be positive, got {self.max_step}.")
        object.__setattr__(self, "factor_cfl", factor)
        object.__setattr__(self, "max_step", max_step)

        for hook in self.post_timestep_hooks:
            if not callable(hook):
                raise ValueError(f"post_timestep entries must be callable, got {hook!r}.")
        if self.terminal_event is not None and not callable(self.terminal_event):
            raise ValueError("terminal_event must be callable.")

    @property
    def safety_factor_cfl(self) -> float:
        """CFL factor tolerated on the later substeps before a violation is reported.

        Allows 20% more than ``factor_cfl``, capped at a CFL number of one.
        """
        return min(1.0, 1.2 * self.factor_cfl)

    @property
    def post_timestep_hooks(self) -> Tuple[PostStepHook, ...]:
        if self.post_timestep is None:
            return ()
        if callable(self.post_timestep):
            return (self.post_timestep,)
        return tuple(self.post_timestep)

    def replace(self, **changes: Any) -> "Options":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


__all__ = ["Options"]
