"""Fixed-size circular queue used to exchange learnt clauses between threads.

A clause ``l1 l2 l3`` pushed by thread ``t`` is stored as six integers::

    3  nseen  t  l1  l2  l3

``nseen`` is the number of threads that still have to import the clause. It
starts at ``nb_threads - 1``, or 1 for a single thread. A clause whose counter
has reached zero is dropped once it is the oldest entry of the queue. When the
queue is full, either the push is refused or the oldest clauses are dropped,
even if some threads have not read them yet.

The buffer itself is not thread-safe; callers must serialise access.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = ["ClausesBuffer", "HEADER_SIZE", "DEFAULT_FIFO_SIZE_BY_CORE"]

HEADER_SIZE = 3
DEFAULT_FIFO_SIZE_BY_CORE = 100000

_SIZE = 1
_SEEN = 2
_ORIGIN = 3


class ClausesBuffer:
    """Circular FIFO of clauses shared between a fixed number of threads."""

    def __init__(
        self,
        nb_threads: int = 0,
        max_size: int = 0,
        remove_older: bool = False,
        fifo_size_by_core: int = DEFAULT_FIFO_SIZE_BY_CORE,
    ) -> None:
        self._remove_older = remove_older
        self._fifo_size_by_core = fifo_size_by_core
        self._nb_threads = nb_threads
        self._max_size = max_size
        self._elems: list[int] = [0] * max_size
        self._first = 0
        self._last = max(max_size - 1, 0)
        self._queue_size = 0
        self._removed_clauses = 0
        self._forced_removed_clauses = 0
        self._last_of_thread: list[int] = [self._last] * nb_threads

    # ------------------------------------------------------------------
    # Read-only state

    @property
    def max_size(self) -> int:
        """Number of integer slots in the queue."""
        return self._max_size

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated."""
        return len(self._elems)

    @property
    def nb_threads(self) -> int:
        return self._nb_threads

    @property
    def remove_older(self) -> bool:
        return self._remove_older

    @property
    def removed_clauses(self) -> int:
        """Total number of clauses dropped from the queue."""
        return self._removed_clauses

    @property
    def forced_removed_clauses(self) -> int:
        """Number of times room had to be made for a new clause."""
        return self._forced_removed_clauses

    def __len__(self) -> int:
        return self._queue_size

    # ------------------------------------------------------------------
    # Index arithmetic

    def _next(self, i: int) -> int:
        i += 1
        return 0 if i == self._max_size else i

    def _add(self, i: int, a: int) -> int:
        i += a
        return i - self._max_size if i >= self._max_size else i

    # ------------------------------------------------------------------

    def set_nb_threads(self, nb_threads: int) -> None:
        """Size the queue at ``fifo_size_by_core`` slots per thread."""
        max_size = self._fifo_size_by_core * nb_threads
        self._max_size = max_size
        self._last = max(max_size - 1, 0)
        self._nb_threads = nb_threads
        if len(self._last_of_thread) < nb_threads:
            self._last_of_thread.extend([0] * (nb_threads - len(self._last_of_thread)))
        for t in range(nb_threads):
            self._last_of_thread[t] = self._last
        if len(self._elems) < max_size:
            self._elems.extend([0] * (max_size - len(self._elems)))

    def remove_last_clause(self) -> None:
        """Drop the oldest clause, then any following clauses already read by all."""
        if self._queue_size == 0:
            raise IndexError("remove from an empty clause buffer")
        while True:
            size = self._elems[self._next(self._last)]
            next_last = self._add(self._last, size + HEADER_SIZE)
            self._last_of_thread = [
                next_last if pos == self._last else pos for pos in self._last_of_thread
            ]
            self._last = next_last
            self._queue_size -= size + HEADER_SIZE
            self._removed_clauses += 1
            if not (self._queue_size > 0 and self._elems[self._add(self._last, 2)] == 0):
                break

    def _put(self, value: int) -> None:
        self._elems[self._first] = value
        self._first = self._next(self._first)

    def push_clause(self, thread_id: int, clause: Sequence[int]) -> bool:
        """Append a clause sent by ``thread_id``; return False if it was refused."""
        needed = len(clause) + HEADER_SIZE
        if not self._remove_older and self._queue_size + needed >= self._max_size:
            return False
        if needed >= self._max_size:
            raise ValueError(
                f"clause of {len(clause)} literals cannot fit in a buffer of {self._max_size}"
            )
        while self._queue_size + needed >= self._max_size:
            self._forced_removed_clauses += 1
            self.remove_last_clause()
        self._put(len(clause))
        self._put(self._nb_threads - 1 if self._nb_threads > 1 else 1)
        self._put(thread_id)
        for literal in clause:
            self._put(int(literal))
        self._queue_size += needed
        return True

    def get_clause(self, thread_id: int) -> tuple[int, list[int]] | None:
        """Return ``(origin, literals)`` of the next clause for ``thread_id``, or None."""
        if not 0 <= thread_id < self._nb_threads:
            raise IndexError(f"thread id {thread_id} out of range")
        elems = self._elems
        first, last = self._first, self._last
        this_last = self._last_of_thread[thread_id]

        if self._next(this_last) == first:
            return None

        if (
            (this_last < last < first)
            or (first < this_last < last)
            or (last < first < this_last)
        ):
            # The oldest clauses moved past this reader's position.
            this_last = last

        while (
            self._next(this_last) != first
            and elems[self._add(this_last, _ORIGIN)] == thread_id
        ):
            this_last = self._add(this_last, elems[self._next(this_last)] + HEADER_SIZE)

        if self._next(this_last) == first:
            self._last_of_thread[thread_id] = this_last
            return None

        previous_last = this_last
        this_last = self._next(this_last)
        size = elems[this_last]
        this_last = self._next(this_last)
        elems[this_last] -= 1
        remove_after = elems[this_last] == 0
        this_last = self._next(this_last)
        origin = elems[this_last]
        literals = []
        for _ in range(size):
            this_last = self._next(this_last)
            literals.append(elems[this_last])

        if self._last == previous_last and remove_after:
            self.remove_last_clause()
            this_last = self._last
        self._last_of_thread[thread_id] = this_last
        return origin, literals

    def fast_clear(self) -> None:
        """Empty the queue without releasing its storage."""
        self._first = 0
        self._last = max(self._max_size - 1, 0)
        self._queue_size = 0
        self._last_of_thread = [self._last] * len(self._last_of_thread)

    def clear(self) -> None:
        """Empty the queue and release its storage."""
        self._elems = []
        self._first = 0
        self._max_size = 0
        self._queue_size = 0