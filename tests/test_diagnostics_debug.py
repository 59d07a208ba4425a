"""Tests for debug mode functionality."""

import numpy as np
import pytest

from cflode.diagnostics import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from cflode.integrators import ode_cfl3


def _blow_up(t, y, context):
    return np.full_like(y, np.inf), 1.0, context


def test_debug_mode_toggle_and_context() -> None:
    set_debug_enabled(False)
    assert not is_debug_enabled()

    with debug_context(True):
        assert is_debug_enabled()
    assert not is_debug_enabled()

    set_debug_enabled(True)
    with debug_context(False):
        assert not is_debug_enabled()
    assert is_debug_enabled()


def test_debug_mode_catches_non_finite_state() -> None:
    with debug_context(True):
        with pytest.raises(ValueError, match="non-finite"):
            ode_cfl3(_blow_up, [0.0, 1.0], np.ones(3))


def test_non_finite_state_passes_without_debug_mode() -> None:
    with debug_context(False):
        t, y, _ = ode_cfl3(_blow_up, [0.0, 1.0], np.ones(3))
    assert np.all(np.isinf(y))
