"""Diagnostics and debugging utilities for cflode."""

from .core import (
    assert_finite_state,
    check_step_bound,
    state_norm,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "state_norm",
    "assert_finite_state",
    "check_step_bound",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
