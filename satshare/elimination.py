"""Record of the clauses removed by variable elimination.

Eliminating a variable removes every clause it occurs in. Enough of those
clauses is kept here to give the variable a value once the rest of the
formula has a model. Each entry is stored with the literal of the eliminated
variable first.

Literals are integers: ``2 * var`` is the positive literal of ``var`` and
``2 * var + 1`` its negation. A model is a sequence indexed by variable that
holds True, False or None for an unassigned variable.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

__all__ = ["EliminationStack"]


def _var(literal: int) -> int:
    return literal >> 1


def _sign(literal: int) -> bool:
    return bool(literal & 1)


def _is_false(model: Sequence[bool | None], literal: int) -> bool:
    value = model[_var(literal)]
    return value is not None and value == _sign(literal)


class EliminationStack:
    """Clauses kept to extend a model over eliminated variables."""

    def __init__(self) -> None:
        self._entries: list[tuple[int, ...]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        return iter(self._entries)

    def push_unit(self, literal: int) -> None:
        """Record a default value for the variable of ``literal``."""
        if literal < 0:
            raise ValueError(f"invalid literal {literal}")
        self._entries.append((literal,))

    def push_clause(self, var: int, clause: Sequence[int]) -> None:
        """Record a clause of ``var``, moving its literal on ``var`` to the front."""
        literals = list(clause)
        positions = [i for i, literal in enumerate(literals) if _var(literal) == var]
        if not positions:
            raise ValueError(f"variable {var} does not occur in clause {literals}")
        pivot = positions[-1]
        literals[0], literals[pivot] = literals[pivot], literals[0]
        self._entries.append(tuple(literals))

    def extend_model(self, model: Sequence[bool | None]) -> list[bool | None]:
        """Return ``model`` with values given to the eliminated variables.

        Entries are replayed newest first. An entry assigns its first literal
        true when every other literal is false in the model built so far.
        """
        result = list(model)
        highest = max(
            (_var(literal) for entry in self._entries for literal in entry),
            default=-1,
        )
        if highest >= len(result):
            result.extend([None] * (highest + 1 - len(result)))
        for first, *rest in reversed(self._entries):
            if all(_is_false(result, literal) for literal in rest):
                result[_var(first)] = not _sign(first)
        return result