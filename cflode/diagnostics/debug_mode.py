"""Debug mode switch for the integrators.

While debug mode is on, every state accepted by an integrator (after the
post-timestep hooks have run) is checked with
:func:`cflode.diagnostics.assert_finite_state`, so a blow-up is reported at
the step that produced it instead of at the end of the run.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "CFLODE_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(_DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    """Return True if per-step state validation is active."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable debug mode.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode. Overrides the CFLODE_DEBUG
        environment variable read at import time.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable debug mode.

    Example
    -------
    >>> from cflode.integrators import ode_cfl3
    >>> with debug_context(True):
    ...     result = ode_cfl3(scheme, [0.0, 1.0], y0)  # doctest: +SKIP
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous
