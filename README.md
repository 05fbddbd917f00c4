# satshare

Building blocks for a portfolio of parallel CDCL SAT solvers.

- **`satshare.clauses_buffer.ClausesBuffer`** is a fixed-size circular FIFO. Worker
  threads exchange learnt clauses through it. A thread never gets back its own clauses.
  A clause is dropped once every other thread has read it and it is the oldest entry.
  When the buffer is full, `remove_older` decides what happens. With `False` the push is
  refused and `push_clause` returns `False`. With `True` the oldest clauses are dropped to
  make room. `get_clause(thread_id)` returns `(origin, literals)` or `None`.
- **`satshare.companion.SharedCompanion`** is a blackboard built on the buffer. It is
  guarded by locks and shares two kinds of data among registered solvers: unit literals
  (`add_unary` / `get_unary`) and learnt clauses (`add_learnt` / `get_new_clause`). It
  also records which solver finished first (`i_finished`, `job_finished`, `winner`).
  Solvers can be any object with a `thread_number` attribute. They must be added in
  thread-number order. `SolverCompanion` is the base class and keeps track of the
  watched solvers.
- **`satshare.configuration`** holds the `SearchParameters` dataclass and
  `configure(solvers)`. `configure` changes, in place, the decay and
  clause-database-reduction settings of every solver except the first. Solvers from the
  tenth on get the settings of an earlier solver with a small added offset.
- **`satshare.resolution`** provides the resolution primitives of bounded variable
  elimination. `merge` builds the resolvent. `merge_size` gives only its length.
  `elimination_cost` is the product of the two occurrence counts.
- **`satshare.elimination.EliminationStack`** records the clauses removed by variable
  elimination. `extend_model` gives the eliminated variables values in a model of the
  simplified formula.

Literals are integers: variable `v` gives the literals `2*v` (positive) and `2*v + 1`
(negative). A model is a sequence indexed by variable holding `True`, `False` or `None`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from dataclasses import dataclass

from satshare.companion import SharedCompanion
from satshare.configuration import SearchParameters, configure
from satshare.elimination import EliminationStack
from satshare.resolution import merge, merge_size


@dataclass
class Worker:
    thread_number: int


shared = SharedCompanion(nb_threads=2, remove_older=False, fifo_size_by_core=1000)
a, b = Worker(0), Worker(1)
shared.add_solver(a)
shared.add_solver(b)
shared.new_var()
shared.new_var()

shared.add_learnt(a, [0, 3])
assert shared.get_new_clause(b) == (0, [0, 3])
assert shared.get_new_clause(a) is None        # a never gets its own clause

shared.add_unary(a, 2)
assert shared.get_unary(b) == 2
assert shared.get_unary(b) is None

assert shared.i_finished(b) is True
assert shared.i_finished(a) is False
assert shared.winner() is b

params = [SearchParameters() for _ in range(4)]
configure(params)
assert params[1].var_decay == 0.94

assert merge([0, 2], [1, 4], 0) == [4, 2]
assert merge_size([0, 2], [1, 4], 0) == 2

stack = EliminationStack()
stack.push_clause(0, [0, 2])
stack.push_unit(1)
assert stack.extend_model([None, False]) == [True, False]
```

## What the package does not do

This package contains no SAT solver. It has no search, propagation or conflict analysis,
no subsumption, and no driver that runs variable elimination over a formula. It does not
read or write DIMACS files, does not start worker threads, and installs no command-line
program. It provides the shared pieces such a solver would use.

The package has no dependencies outside the standard library.