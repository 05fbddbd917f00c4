import threading
from dataclasses import dataclass

import pytest

from satshare.companion import SharedCompanion, SolverCompanion


@dataclass(eq=False)
class FakeSolver:
    thread_number: int


class FailingCompanion(SolverCompanion):
    """Companion whose run on thread 1 reports an error."""

    def __init__(self):
        super().__init__()
        self.seen = []

    def run_once_on(self, solver):
        self.seen.append(solver.thread_number)
        return -1 if solver.thread_number == 1 else 0


def make_shared(nb_threads=2, **kwargs):
    companion = SharedCompanion(nb_threads, **kwargs)
    solvers = [FakeSolver(i) for i in range(nb_threads)]
    for solver in solvers:
        assert companion.add_solver(solver) is True
    return companion, solvers


def test_solver_companion_tracks_solvers_and_runs():
    companion = SolverCompanion()
    a, b = FakeSolver(0), FakeSolver(1)
    assert companion.add_solver(a) is True
    companion.add_solver(b)
    assert companion.watched_solvers == (a, b)
    assert companion.run_once() == 0


def test_base_run_once_on_returns_zero():
    companion = SolverCompanion()
    assert SolverCompanion.run_once_on(companion, FakeSolver(0)) == 0


def test_run_once_stops_at_negative_code():
    companion = FailingCompanion()
    for i in range(3):
        assert SolverCompanion.add_solver(companion, FakeSolver(i)) is True
    assert SolverCompanion.run_once(companion) == -1
    assert companion.seen == [0, 1]


def test_clause_goes_to_other_thread_only():
    companion, (s0, s1) = make_shared()
    assert companion.add_learnt(s0, [2, 4, 6]) is True
    assert companion.get_new_clause(s0) is None
    assert companion.get_new_clause(s1) == (0, [2, 4, 6])
    assert companion.get_new_clause(s1) is None
    assert len(companion.clauses_buffer) == 0


def test_clauses_read_in_order():
    companion, (s0, s1, s2) = make_shared(3)
    companion.add_learnt(s0, [2, 5])
    companion.add_learnt(s1, [7, 8, 10])
    assert companion.get_new_clause(s2) == (0, [2, 5])
    assert companion.get_new_clause(s2) == (1, [7, 8, 10])
    assert companion.get_new_clause(s2) is None
    assert companion.get_new_clause(s0) == (1, [7, 8, 10])


def test_full_buffer_refuses_clause():
    companion, (s0, _s1) = make_shared(2, fifo_size_by_core=5)
    assert companion.clauses_buffer.max_size == 10
    assert companion.add_learnt(s0, [2, 4, 6, 8, 10, 12, 14]) is False
    assert len(companion.clauses_buffer) == 0


def test_add_learnt_from_unattached_solver():
    companion, _ = make_shared()
    with pytest.raises(IndexError):
        companion.add_learnt(FakeSolver(5), [2, 4])


def test_solvers_must_be_added_in_order():
    companion = SharedCompanion(2)
    with pytest.raises(ValueError):
        companion.add_solver(FakeSolver(1))


def test_unary_sharing():
    companion, (s0, s1) = make_shared()
    for _ in range(3):
        companion.new_var()
    companion.add_unary(s0, 3)
    companion.add_unary(s1, 2)  # same variable, ignored
    companion.add_unary(s1, 4)
    assert companion.unit_literals == (3, 4)
    assert companion.unary_value(1) is False
    assert companion.unary_value(2) is True
    assert companion.unary_value(0) is None
    assert companion.get_unary(s1) == 3
    assert companion.get_unary(s1) == 4
    assert companion.get_unary(s1) is None
    assert companion.get_unary(s0) == 3


def test_first_finisher_wins():
    companion, (s0, s1) = make_shared()
    assert companion.job_finished() is False
    assert companion.winner() is None
    assert companion.i_finished(s1) is True
    assert companion.i_finished(s0) is False
    assert companion.job_finished() is True
    assert companion.winner() is s1


def test_only_one_thread_finishes_first():
    nb = 8
    companion, solvers = make_shared(nb)
    results = []
    lock = threading.Lock()

    def run(solver):
        won = companion.i_finished(solver)
        with lock:
            results.append(won)

    threads = [threading.Thread(target=run, args=(s,)) for s in solvers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count(True) == 1
    assert len(results) == nb
    assert companion.winner() in solvers


def test_defaults():
    companion = SharedCompanion()
    assert companion.nb_threads == 0
    assert companion.panic_mode is False
    assert companion.job_status is None
    companion.set_nb_threads(3)
    assert companion.nb_threads == 3
    assert companion.clauses_buffer.max_size == 300000