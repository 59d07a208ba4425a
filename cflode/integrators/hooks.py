"""Post-timestep hooks, terminal events and run statistics."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Tuple

import numpy as np
import torch

from .core import Context, State, TerminalEventFn
from .options import Options


def call_post_timestep(
    t: float,
    y: State,
    context: Context,
    options: Options,
) -> Tuple[State, Context]:
    """
    Run every configured post-timestep hook in order.

    Each hook receives the state and context returned by the previous one.
    The final pair replaces the integrator's state and context.
    """
    for hook in options.post_timestep_hooks:
        y, context = hook(t, y, context, options)
    return y, context


def _event_sign(value: Any) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        value = value.detach().cpu().numpy()
    return np.sign(np.asarray(value, dtype=float)).reshape(-1)


class TerminalEventMonitor:
    """
    Track the sign of a terminal-event function between steps.

    The first evaluation only records a baseline. Every later evaluation
    fires if the sign of any component differs from the one recorded after
    the previous step.
    """

    def __init__(self, event_fn: TerminalEventFn) -> None:
        self.event_fn = event_fn
        self._previous_sign: Optional[np.ndarray] = None

    @property
    def has_baseline(self) -> bool:
        return self._previous_sign is not None

    def update(
        self,
        t: float,
        y: State,
        t_prev: float,
        y_prev: State,
        context: Context,
    ) -> Tuple[bool, Context]:
        """Evaluate the event after a step; return ``(fired, context)``."""
        value, context = self.event_fn(t, y, t_prev, y_prev, context)
        sign = _event_sign(value)

        if self._previous_sign is not None:
            if sign.shape != self._previous_sign.shape:
                raise ValueError(
                    "Terminal event changed size between steps: "
                    f"{self._previous_sign.size} -> {sign.size}."
                )
            if np.any(sign != self._previous_sign):
                return True, context

        self._previous_sign = sign
        return False, context


class StepStatistics:
    """
    Wall-clock timing around a step loop.

    Use as a context manager; call :meth:`record` with the step count and end
    time before leaving the block. When enabled, the summary is logged at
    INFO level on exit.
    """

    def __init__(self, enabled: bool, t_start: float, logger: logging.Logger) -> None:
        self.enabled = enabled
        self.t_start = t_start
        self.t_end = t_start
        self.steps = 0
        self.elapsed = 0.0
        self._logger = logger
        self._clock_start = 0.0

    def __enter__(self) -> "StepStatistics":
        self._clock_start = time.perf_counter()
        return self

    def record(self, steps: int, t_end: float) -> None:
        self.steps = steps
        self.t_end = t_end

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self._clock_start
        if self.enabled and exc_type is None:
            self._logger.info(
                "%d steps in %g seconds from %g to %g",
                self.steps,
                self.elapsed,
                self.t_start,
                self.t_end,
            )


__all__ = ["call_post_timestep", "TerminalEventMonitor", "StepStatistics"]
