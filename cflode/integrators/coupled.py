"""
Coupled-subsystem bookkeeping for vector level sets.

A coupled state is a list of K arrays advanced in lockstep. Each subsystem
has its own scheme function, and every scheme function is written as if its
own subsystem were entry 0 of the state (and of the context, when the context
is a per-subsystem list). One derivative pass therefore calls the K scheme
functions in turn and rotates both lists left by one after each call, so
after K calls the lists are back in their original order.

The rotation is an offset into a fixed ring; nothing is copied per call.
Scheme functions see the rotated order through :class:`RingView`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterator, List, Optional, Tuple, Union

from cflode.diagnostics import check_step_bound

from .core import Array, Context, SchemeFunction


class SubsystemRing:
    """Fixed-size ring of K entries with an O(1) left rotation."""

    __slots__ = ("_items", "_offset")

    def __init__(self, items: Sequence[Any]) -> None:
        self._items = list(items)
        if not self._items:
            raise ValueError("A subsystem ring needs at least one entry.")
        self._offset = 0

    def __len__(self) -> int:
        return len(self._items)

    @property
    def offset(self) -> int:
        return self._offset

    def rotate(self, steps: int = 1) -> None:
        """Rotate left: the entry at position ``steps`` becomes position 0."""
        self._offset = (self._offset + steps) % len(self._items)

    def get(self, position: int) -> Any:
        return self._items[(self._offset + position) % len(self._items)]

    def set(self, position: int, value: Any) -> None:
        self._items[(self._offset + position) % len(self._items)] = value

    def view(self, writable: bool = False) -> "RingView":
        return RingView(self, writable=writable)

    def replace(self, rotated: Sequence[Any]) -> None:
        """Store ``rotated``, given in the current rotated order."""
        if len(rotated) != len(self._items):
            raise ValueError(
                f"Expected {len(self._items)} per-subsystem entries, got {len(rotated)}."
            )
        for position, value in enumerate(list(rotated)):
            self.set(position, value)

    def canonical(self) -> List[Any]:
        """Entries in their original order, independent of the rotation."""
        return list(self._items)


class RingView(Sequence):
    """
    Live view of a :class:`SubsystemRing` in its current rotated order.

    Supports ``len``, iteration, integer and slice indexing. Writable views
    also accept ``view[i] = value``; that is how a scheme function updates
    its own context entry in place.
    """

    __slots__ = ("_ring", "_writable")

    def __init__(self, ring: SubsystemRing, writable: bool = False) -> None:
        self._ring = ring
        self._writable = writable

    def __len__(self) -> int:
        return len(self._ring)

    def __getitem__(self, index: Union[int, slice]) -> Any:
        n = len(self._ring)
        if isinstance(index, slice):
            return [self._ring.get(i) for i in range(*index.indices(n))]
        if index < -n or index >= n:
            raise IndexError("ring index out of range")
        return self._ring.get(index % n)

    def __setitem__(self, index: int, value: Any) -> None:
        if not self._writable:
            raise TypeError("This view of the coupled state is read-only.")
        n = len(self._ring)
        if index < -n or index >= n:
            raise IndexError("ring index out of range")
        self._ring.set(index % n, value)

    def __iter__(self) -> Iterator[Any]:
        for position in range(len(self._ring)):
            yield self._ring.get(position)

    def __repr__(self) -> str:
        return f"RingView({list(self)!r})"


def is_coupled(state: Any) -> bool:
    """Return True if ``state`` is a list of subsystem arrays."""
    return isinstance(state, (list, tuple))


def pack_state(y: Any) -> Tuple[List[Array], bool]:
    """Return ``(entries, coupled)`` with ``entries`` always a list."""
    if is_coupled(y):
        entries = list(y)
        if not entries:
            raise ValueError("A coupled state must contain at least one subsystem.")
        return entries, True
    return [y], False


def unpack_state(entries: List[Array], coupled: bool) -> Any:
    return list(entries) if coupled else entries[0]


def has_subsystem_context(context: Context, coupled: bool, num_subsystems: int) -> bool:
    """
    Decide whether ``context`` is a per-subsystem list.

    Only a ``list`` context on a coupled state is treated as per-subsystem; it
    must then have one entry per subsystem. Anything else is a single opaque
    value shared by all scheme functions.
    """
    if not (coupled and isinstance(context, list)):
        return False
    if len(context) != num_subsystems:
        raise ValueError(
            f"Context list has {len(context)} entries but the state has "
            f"{num_subsystems} subsystems."
        )
    return True


def resolve_scheme_functions(
    scheme_func: Union[SchemeFunction, Sequence[SchemeFunction]],
    num_subsystems: int,
) -> List[SchemeFunction]:
    """Return one scheme function per subsystem."""
    if callable(scheme_func):
        return [scheme_func] * num_subsystems
    funcs = list(scheme_func)
    if len(funcs) != num_subsystems:
        raise ValueError(
            f"Got {len(funcs)} scheme functions for {num_subsystems} subsystems."
        )
    for func in funcs:
        if not callable(func):
            raise ValueError(f"Scheme function {func!r} is not callable.")
    return funcs


def evaluate_pass(
    scheme_funcs: List[SchemeFunction],
    t: float,
    entries: List[Array],
    context: Context,
    coupled: bool,
) -> Tuple[List[Array], float, Context]:
    """
    Evaluate every subsystem's derivative at ``(t, entries)``.

    Returns
    -------
    tuple
        ``(derivatives, step_bound, context)`` where ``derivatives[i]``
        belongs to subsystem ``i`` and ``step_bound`` is the most restrictive
        bound over all subsystems.
    """
    if not coupled:
        ydot, bound, context = scheme_funcs[0](t, entries[0], context)
        return [ydot], check_step_bound(bound), context

    state_ring = SubsystemRing(entries)
    context_ring: Optional[SubsystemRing] = None
    if has_subsystem_context(context, coupled, len(entries)):
        context_ring = SubsystemRing(context)

    derivatives: List[Array] = []
    bounds: List[float] = []
    for func in scheme_funcs:
        if context_ring is None:
            ydot, bound, context = func(t, state_ring.view(), context)
        else:
            context_view = context_ring.view(writable=True)
            ydot, bound, returned = func(t, state_ring.view(), context_view)
            if returned is not context_view:
                if not isinstance(returned, Sequence):
                    raise ValueError(
                        "A scheme function given a per-subsystem context list "
                        "must return the whole list."
                    )
                context_ring.replace(returned)
            context_ring.rotate()
        derivatives.append(ydot)
        bounds.append(check_step_bound(bound))
        state_ring.rotate()

    if context_ring is not None:
        context = context_ring.canonical()
    return derivatives, min(bounds), context


__all__ = [
    "SubsystemRing",
    "RingView",
    "is_coupled",
    "pack_state",
    "unpack_state",
    "has_subsystem_context",
    "resolve_scheme_functions",
    "evaluate_pass",
]
