"""Core diagnostic functions for integrator states and step bounds."""

from __future__ import annotations

import math
from typing import Any, Sequence, Union

import numpy as np
import torch

ArrayLike = Union[np.ndarray, torch.Tensor]


def _is_state_list(state: Any) -> bool:
    return isinstance(state, (list, tuple))


def _entry_norm(entry: ArrayLike) -> float:
    if isinstance(entry, torch.Tensor):
        if entry.numel() == 0:
            return 0.0
        return float(entry.detach().abs().max().cpu())
    arr = np.asarray(entry)
    if arr.size == 0:
        return 0.0
    return float(np.max(np.abs(arr)))


def _entry_is_finite(entry: ArrayLike) -> bool:
    if isinstance(entry, torch.Tensor):
        return bool(torch.isfinite(entry).all())
    return bool(np.all(np.isfinite(np.asarray(entry))))


def state_norm(state: Union[ArrayLike, Sequence[ArrayLike]]) -> Union[float, list[float]]:
    """
    Compute the max-norm of an integrator state.

    Parameters
    ----------
    state:
        A single NumPy array or torch tensor, or a list of them for a
        coupled (vector level set) state.

    Returns
    -------
    float or list of float
        ``max |y|`` for a single state, or one value per entry of a
        coupled state. Empty arrays have norm 0.
    """
    if _is_state_list(state):
        return [_entry_norm(entry) for entry in state]
    return _entry_norm(state)


def assert_finite_state(state: Union[ArrayLike, Sequence[ArrayLike]]) -> None:
    """
    Assert that every entry of a state is finite.

    Parameters
    ----------
    state:
        A single array/tensor or a list of them.

    Raises
    ------
    ValueError
        If any entry contains NaN or infinite values.
    """
    entries = state if _is_state_list(state) else [state]
    for index, entry in enumerate(entries):
        if not _entry_is_finite(entry):
            where = f" (subsystem {index})" if _is_state_list(state) else ""
            raise ValueError(f"State contains non-finite values{where}.")


def check_step_bound(bound: Any) -> float:
    """
    Validate a step bound returned by a scheme function.

    Parameters
    ----------
    bound:
        Python scalar, NumPy scalar, or single-element tensor.

    Returns
    -------
    float
        The bound as a Python float.

    Raises
    ------
    ValueError
        If the bound is not strictly positive and finite.
    """
    if isinstance(bound, torch.Tensor):
        bound = bound.detach().cpu().item()
    value = float(bound)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(
            f"Scheme function returned step bound {value!r}; "
            "step bounds must be strictly positive and finite."
        )
    return value
