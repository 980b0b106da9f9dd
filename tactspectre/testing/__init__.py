"""Test support: an in-memory solver backend and Hypothesis strategies.

The fuzzing strategies need the optional `hypothesis` dependency and are
imported from `tactspectre.testing.fuzzing` directly.
"""

from tactspectre.testing.bounded_solver import BoundedSolverContext, smt_div, smt_mod

__all__ = ["BoundedSolverContext", "smt_div", "smt_mod"]
