"""Resolution of two clauses on a variable, as used by variable elimination.

Literals are integers: ``2 * var`` is the positive literal of ``var`` and
``2 * var + 1`` its negation. Both clauses given to :func:`merge` and
:func:`merge_size` are expected to contain the pivot variable, once in each
polarity.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = ["merge", "merge_size", "elimination_cost"]


def _var(literal: int) -> int:
    return literal >> 1


def _order(ps: Sequence[int], qs: Sequence[int]) -> tuple[Sequence[int], Sequence[int]]:
    """Return ``(larger, smaller)``; the first clause wins a tie."""
    return (qs, ps) if len(ps) < len(qs) else (ps, qs)


def _shared(larger: Sequence[int], literal: int) -> int | None:
    """The literal of ``larger`` on the same variable as ``literal``, if any."""
    var = _var(literal)
    return next((other for other in larger if _var(other) == var), None)


def merge(ps: Sequence[int], qs: Sequence[int], var: int) -> list[int] | None:
    """Resolve ``ps`` and ``qs`` on ``var``.

    Return the resolvent, or None when it is a tautology. The literals of the
    shorter clause that the longer one lacks come first, then those of the
    longer clause; the pivot variable is left out.
    """
    larger, smaller = _order(ps, qs)
    resolvent: list[int] = []
    for literal in smaller:
        if _var(literal) == var:
            continue
        other = _shared(larger, literal)
        if other is None:
            resolvent.append(literal)
        elif other == literal ^ 1:
            return None
    resolvent.extend(literal for literal in larger if _var(literal) != var)
    return resolvent


def merge_size(ps: Sequence[int], qs: Sequence[int], var: int) -> int | None:
    """Return the length of the resolvent of ``ps`` and ``qs`` on ``var``.

    Return None when the resolvent is a tautology. The clause itself is not
    built.
    """
    larger, smaller = _order(ps, qs)
    size = len(larger) - 1
    for literal in smaller:
        if _var(literal) == var:
            continue
        other = _shared(larger, literal)
        if other is None:
            size += 1
        elif other == literal ^ 1:
            return None
    return size


def elimination_cost(n_pos: int, n_neg: int) -> int:
    """Cost of eliminating a variable with the given occurrence counts.

    Variables with the lowest cost are tried first.
    """
    if n_pos < 0 or n_neg < 0:
        raise ValueError("occurrence counts must not be negative")
    return n_pos * n_neg