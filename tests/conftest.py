from __future__ import annotations

import io
from pathlib import Path

import pytest

from tactspectre.core.solver import Z3Context
from tactspectre.execution.executor import ExecutionConfig, SymbolicExecutor
from tactspectre.frontend.parser import parse_tact
from tactspectre.logging import LogLevel, configure_logging
from tactspectre.testing.bounded_solver import BoundedSolverContext

ABS_SOURCE = """
fun abs(x: Int): Int {
    if (x >= 0) {
        return x;
    } else {
        return -x;
    }
}
"""

COLLATZ_SOURCE = """
fun collatzStep(x: Int): Int {
    if ((x % 2 == 0)) {
        return x / 2;
    } else {
        return x * 3 + 1;
    }
}
"""

DEAD_BRANCH_SOURCE = """
fun dead(x: Int): Int {
    if (false) {
        return 1;
    }
}
"""


@pytest.fixture(scope="session")
def repo_root() -> Path:
    # tests/ -> repo root
    return Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def examples_dir(repo_root: Path) -> Path:
    return repo_root / "examples"


@pytest.fixture(autouse=True)
def log_stream() -> io.StringIO:
    """Route the global logger into a buffer for every test."""
    stream = io.StringIO()
    configure_logging(level=LogLevel.TRACE, color=False, stream=stream)
    return stream


@pytest.fixture
def z3_ctx() -> Z3Context:
    return Z3Context(timeout_ms=5000)


@pytest.fixture
def bounded_ctx() -> BoundedSolverContext:
    return BoundedSolverContext(bound=4)


def first_function(source: str):
    return parse_tact(source).functions[0]


def explore_source(source: str, solver, **config_kwargs):
    """Parse `source` and explore its first function with unbound parameters."""
    executor = SymbolicExecutor(ExecutionConfig(**config_kwargs), solver)
    return executor.execute_function(first_function(source))
