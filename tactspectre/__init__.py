"""TactSpectre: a symbolic execution engine for Tact functions.
TactSpectre explores every feasible control-flow path of a function body
using the Z3 theorem prover. For each path it reports the path condition,
concrete inputs that drive execution down it, and the value returned.
Example:
    >>> from tactspectre import run_symbolic_execution
    >>> outcomes = run_symbolic_execution('''
    ... fun step(x: Int): Int {
    ...     if (x % 2 == 0) { return x / 2; } else { return x * 3 + 1; }
    ... }''')
    >>> for outcome in outcomes:
    ...     print(outcome.path_conditions, outcome.inputs, outcome.return_value)
"""

__version__ = "0.1.0"

from tactspectre.api import (
    analyze_file,
    analyze_source,
    bind_parameters,
    explore_function,
    run_symbolic_execution,
)
from tactspectre.config import TactSpectreConfig, load_config
from tactspectre.core.exceptions import (
    FailureKind,
    ParseError,
    PathError,
    TactSpectreError,
)
from tactspectre.core.solver import SolverContext, Z3Context, create_solver
from tactspectre.core.state import PathCondition, SymbolicState
from tactspectre.execution.executor import (
    ExecutionConfig,
    ExecutionResult,
    ExplorationResult,
    PathFailure,
    SymbolicExecutor,
)
from tactspectre.execution.extraction import (
    FunctionAnalysis,
    SymbolicExecutionFailure,
    SymbolicExecutionSuccess,
)
from tactspectre.frontend.parser import parse_tact, parse_tact_file
from tactspectre.logging import LogLevel, configure_logging, get_logger
from tactspectre.reporting.formatters import format_outcomes, format_report

__all__ = [
    "__version__",
    "analyze_file",
    "analyze_source",
    "bind_parameters",
    "explore_function",
    "run_symbolic_execution",
    "TactSpectreConfig",
    "load_config",
    "FailureKind",
    "ParseError",
    "PathError",
    "TactSpectreError",
    "SolverContext",
    "Z3Context",
    "create_solver",
    "PathCondition",
    "SymbolicState",
    "ExecutionConfig",
    "ExecutionResult",
    "ExplorationResult",
    "PathFailure",
    "SymbolicExecutor",
    "FunctionAnalysis",
    "SymbolicExecutionFailure",
    "SymbolicExecutionSuccess",
    "parse_tact",
    "parse_tact_file",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "format_outcomes",
    "format_report",
]
