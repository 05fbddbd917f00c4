"""Companions that sit next to the solvers of a portfolio.

A :class:`SolverCompanion` keeps track of the solvers it accompanies.
A :class:`SharedCompanion` also lets every solver send clauses to the others
and read theirs. It shares unit literals, shares longer learnt clauses through
a :class:`~satshare.clauses_buffer.ClausesBuffer`, and records which solver
finished the job first. Each piece of shared state has its own lock, so
solvers running in different threads may call it at the same time.

Literals are integers: ``2 * var`` is the positive literal of ``var`` and
``2 * var + 1`` its negation.
"""

from __future__ import annotations

import threading
from typing import Protocol

from satshare.clauses_buffer import DEFAULT_FIFO_SIZE_BY_CORE, ClausesBuffer

__all__ = ["SharedSolver", "SolverCompanion", "SharedCompanion"]


class SharedSolver(Protocol):
    """What a companion needs to know about a solver."""

    thread_number: int


def _var(literal: int) -> int:
    return literal >> 1


def _sign(literal: int) -> bool:
    return bool(literal & 1)


class SolverCompanion:
    """Keeps track of the solvers it accompanies."""

    def __init__(self) -> None:
        self._watched: list[SharedSolver] = []

    @property
    def watched_solvers(self) -> tuple[SharedSolver, ...]:
        """The solvers attached to this companion, in order."""
        return tuple(self._watched)

    def add_solver(self, solver: SharedSolver) -> bool:
        """Attach a solver to this companion."""
        self._watched.append(solver)
        return True

    def run_once(self) -> int:
        """Run once on every watched solver; stop at the first negative code."""
        code = 0
        for solver in self._watched:
            code = self.run_once_on(solver)
            if code < 0:
                return code
        return code

    def run_once_on(self, solver: SharedSolver) -> int:
        """Run once on one watched solver and return its status code."""
        return 0


class SharedCompanion(SolverCompanion):
    """Blackboard through which the solvers of a portfolio exchange clauses."""

    def __init__(
        self,
        nb_threads: int = 0,
        remove_older: bool = False,
        fifo_size_by_core: int = DEFAULT_FIFO_SIZE_BY_CORE,
    ) -> None:
        super().__init__()
        self._clauses = ClausesBuffer(
            remove_older=remove_older, fifo_size_by_core=fifo_size_by_core
        )
        self._nb_threads = 0
        self._clause_lock = threading.Lock()
        self._unit_lock = threading.Lock()
        self._job_lock = threading.Lock()
        self._job_finished = False
        self._finished_by: SharedSolver | None = None
        self._next_unit: list[int] = []
        self._unit_literals: list[int] = []
        self._is_unary: list[bool | None] = []
        self.panic_mode = False
        self.job_status: bool | None = None
        if nb_threads > 0:
            self.set_nb_threads(nb_threads)

    @property
    def nb_threads(self) -> int:
        return self._nb_threads

    @property
    def clauses_buffer(self) -> ClausesBuffer:
        """The buffer holding the shared clauses."""
        return self._clauses

    @property
    def unit_literals(self) -> tuple[int, ...]:
        """Every unit literal shared so far, in the order it arrived."""
        with self._unit_lock:
            return tuple(self._unit_literals)

    def unary_value(self, var: int) -> bool | None:
        """The value a shared unit gives ``var``, or None if none was shared."""
        with self._unit_lock:
            return self._is_unary[var]

    def set_nb_threads(self, nb_threads: int) -> None:
        """Set the number of threads; not to be changed once solving started."""
        self._nb_threads = nb_threads
        self._clauses.set_nb_threads(nb_threads)

    def new_var(self) -> None:
        """Register one more variable."""
        with self._unit_lock:
            self._is_unary.append(None)

    def add_solver(self, solver: SharedSolver) -> bool:
        """Attach a solver; solvers must be added in thread-number order."""
        expected = len(self._watched)
        if solver.thread_number != expected:
            raise ValueError(
                f"solver of thread {solver.thread_number} added where thread "
                f"{expected} was expected"
            )
        super().add_solver(solver)
        with self._unit_lock:
            self._next_unit.append(0)
        return True

    def add_unary(self, solver: SharedSolver, literal: int) -> None:
        """Share a unit literal, unless its variable already has one."""
        var = _var(literal)
        with self._unit_lock:
            if self._is_unary[var] is None:
                self._unit_literals.append(literal)
                self._is_unary[var] = not _sign(literal)

    def get_unary(self, solver: SharedSolver) -> int | None:
        """Return the next unit literal not yet read by ``solver``, or None."""
        index = solver.thread_number
        with self._unit_lock:
            position = self._next_unit[index]
            if position >= len(self._unit_literals):
                return None
            self._next_unit[index] = position + 1
            return self._unit_literals[position]

    def add_learnt(self, solver: SharedSolver, clause: list[int]) -> bool:
        """Share a learnt clause; return False if the buffer refused it."""
        index = solver.thread_number
        if not 0 <= index < len(self._watched):
            raise IndexError(f"solver of thread {index} is not attached")
        with self._clause_lock:
            return self._clauses.push_clause(index, clause)

    def get_new_clause(self, solver: SharedSolver) -> tuple[int, list[int]] | None:
        """Return ``(origin thread, literals)`` of the next clause for ``solver``."""
        with self._clause_lock:
            return self._clauses.get_clause(solver.thread_number)

    def job_finished(self) -> bool:
        """True once some solver has finished the job."""
        with self._job_lock:
            return self._job_finished

    def i_finished(self, solver: SharedSolver) -> bool:
        """Record that ``solver`` finished; True only for the first one."""
        with self._job_lock:
            if self._job_finished:
                return False
            self._job_finished = True
            self._finished_by = solver
            return True

    def winner(self) -> SharedSolver | None:
        """The first solver that finished, or None."""
        with self._job_lock:
            return self._finished_by