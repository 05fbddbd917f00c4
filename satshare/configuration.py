"""Diversified search parameters for a portfolio of parallel solvers.

Every solver in a portfolio starts from the same formula. Giving each one
different decay and clause-database settings makes them explore the search
space differently. The first solver always keeps its own settings.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = ["SearchParameters", "configure"]

# Settings of the solvers 1 to 7: (var_decay, max_var_decay, first_reduce_db).
_DECAY_PROFILES: tuple[tuple[float, float, int], ...] = (
    (0.94, 0.96, 600),
    (0.90, 0.97, 500),
    (0.85, 0.93, 400),
    (0.95, 0.95, 4000),
    (0.93, 0.96, 100),
    (0.75, 0.94, 2000),
    (0.94, 0.96, 800),
)

_FIRST_NOISY_SOLVER = 10
_PROFILE_PERIOD = 8
_INITIAL_DECAY_NOISE = 0.005
_INITIAL_REDUCE_DB_NOISE = 50
_DECAY_NOISE_STEP = 0.006
_REDUCE_DB_NOISE_STEP = 25


@dataclass
class SearchParameters:
    """The tunable search settings of one solver of the portfolio."""

    var_decay: float = 0.8
    max_var_decay: float = 0.95
    first_reduce_db: int = 2000
    inc_reduce_db: int = 300
    lbd_queue_size: int = 50
    k: float = 0.8
    reduce_on_size: bool = False
    reduce_on_size_size: int = 12


def _apply_profiles(solvers: Sequence[SearchParameters]) -> None:
    count = len(solvers)
    for params, (var_decay, max_var_decay, first_reduce_db) in zip(
        solvers[1:], _DECAY_PROFILES
    ):
        params.var_decay = var_decay
        params.max_var_decay = max_var_decay
        params.first_reduce_db = first_reduce_db

    if count > 4:
        # Settings close to the earlier glucose releases, with blocked restarts.
        glucose = solvers[4]
        glucose.lbd_queue_size = 100
        glucose.k = 0.7
        glucose.inc_reduce_db = 500
    if count > 5:
        solvers[5].inc_reduce_db = 500
    if count > 8:
        solvers[8].reduce_on_size = True
    if count > 9:
        solvers[9].reduce_on_size = True
        solvers[9].reduce_on_size_size = 14


def _apply_noise(solvers: Sequence[SearchParameters]) -> None:
    decay_noise = _INITIAL_DECAY_NOISE
    reduce_db_noise = _INITIAL_REDUCE_DB_NOISE
    for index in range(_FIRST_NOISY_SOLVER, len(solvers)):
        model = solvers[index % _PROFILE_PERIOD]
        params = solvers[index]
        params.var_decay = model.var_decay + decay_noise
        params.max_var_decay = model.max_var_decay
        params.first_reduce_db = model.first_reduce_db + reduce_db_noise
        if (index + 1) % _PROFILE_PERIOD == 0:
            decay_noise += _DECAY_NOISE_STEP
            reduce_db_noise += _REDUCE_DB_NOISE_STEP


def configure(solvers: Sequence[SearchParameters]) -> None:
    """Diversify, in place, the parameters of every solver but the first."""
    if len(solvers) < 2:
        return
    _apply_profiles(solvers)
    _apply_noise(solvers)