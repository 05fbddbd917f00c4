"""Clause sharing, portfolio configuration and variable-elimination helpers for SAT solvers."""

__version__ = "0.1.0"
__all__ = ["clauses_buffer", "companion", "configuration", "elimination", "resolution"]