"""Public API for TactSpectre."""
from __future__ import annotations
from pathlib import Path
from tactspectre.core.expressions import BoolVar, SymExpr, Var
from tactspectre.core.solver import SolverContext, create_solver
from tactspectre.core.state import PathCondition, SymbolicState, create_initial_state
from tactspectre.execution.executor import ExecutionConfig, SymbolicExecutor
from tactspectre.execution.extraction import FunctionAnalysis, PathOutcome, extract_outcomes
from tactspectre.frontend.ast import FunctionDef, SourceFile
from tactspectre.frontend.parser import parse_tact
BOOL_TYPES = ("Bool", "Bool?")
def bind_parameters(func: FunctionDef) -> tuple[SymbolicState, PathCondition]:
    """Bind every parameter of `func` to a fresh symbolic variable.
    `Bool` parameters become boolean variables; every other parameter,
    typed or not, becomes an integer variable named after it.
    """
    variables: dict[str, SymExpr] = {}
    for param in func.params:
        variables[param.name] = BoolVar(param.name) if param.type_name in BOOL_TYPES else Var(param.name)
    return create_initial_state(variables)
def explore_function(
    func_def: FunctionDef,
    config: ExecutionConfig | None = None,
    solver: SolverContext | None = None,
) -> FunctionAnalysis:
    """
    Explore one function and extract a concrete outcome for every path.
    Args:
        func_def: Parsed function definition
        config: Execution configuration (defaults apply when omitted)
        solver: Solver context shared by exploration and extraction
    Returns:
        FunctionAnalysis with outcomes in discovery order
    """
    config = config or ExecutionConfig()
    solver = solver or _make_solver(config)
    executor = SymbolicExecutor(config, solver)
    state, path_condition = bind_parameters(func_def)
    exploration = executor.execute_function(func_def, state, path_condition)
    return FunctionAnalysis(func_def.name, extract_outcomes(exploration, solver), exploration)
def analyze_source(
    code: str,
    function_name: str | None = None,
    config: ExecutionConfig | None = None,
    solver: SolverContext | None = None,
) -> list[FunctionAnalysis]:
    """
    Parse Tact source and explore its functions.
    Args:
        code: Tact source text
        function_name: Only explore this function (default: all, in order)
        config: Execution configuration
        solver: Solver context; one z3 context is shared by all functions
    Returns:
        One FunctionAnalysis per explored function
    Raises:
        ParseError: If the source does not parse
        ValueError: If `function_name` is not defined in the source
    """
    return _analyze(parse_tact(code), function_name, config, solver, "source")
def run_symbolic_execution(
    code: str,
    function_name: str | None = None,
    config: ExecutionConfig | None = None,
    solver: SolverContext | None = None,
) -> list[PathOutcome]:
    """
    Run symbolic execution over Tact source and return every path outcome.
    This is the main entry point for TactSpectre. Each function is explored
    with its parameters bound to symbolic inputs, and every terminal path
    yields either a success (path conditions, concrete inputs, return value)
    or a failure (path conditions, reason).
    Example:
        >>> outcomes = run_symbolic_execution('''
        ... fun abs(x: Int): Int {
        ...     if (x >= 0) { return x; } else { return -x; }
        ... }''')
        >>> [o.path_conditions for o in outcomes]
        [['(>= x 0)'], ['(not (>= x 0))']]
    """
    outcomes: list[PathOutcome] = []
    for analysis in analyze_source(code, function_name, config, solver):
        outcomes.extend(analysis.outcomes)
    return outcomes
def analyze_file(
    filepath: str | Path,
    function_name: str | None = None,
    config: ExecutionConfig | None = None,
    solver: SolverContext | None = None,
) -> list[FunctionAnalysis]:
    """
    Explore the functions of a Tact file.
    Example:
        >>> analyses = analyze_file("contracts/math.tact", "abs")
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    source = parse_tact(filepath.read_text(encoding="utf-8"))
    return _analyze(source, function_name, config, solver, str(filepath))
def _analyze(
    source: SourceFile,
    function_name: str | None,
    config: ExecutionConfig | None,
    solver: SolverContext | None,
    origin: str,
) -> list[FunctionAnalysis]:
    config = config or ExecutionConfig()
    solver = solver or _make_solver(config)
    if function_name is not None:
        func = source.get_function(function_name)
        if func is None:
            raise ValueError(f"Function '{function_name}' not found in {origin}")
        functions = [func]
    else:
        functions = list(source.functions)
    return [explore_function(func, config, solver) for func in functions]
def _make_solver(config: ExecutionConfig) -> SolverContext:
    return create_solver(
        config.solver_backend,
        timeout_ms=config.solver_timeout_ms,
        enable_caching=config.enable_caching,
    )
__all__ = [
    "bind_parameters",
    "explore_function",
    "analyze_source",
    "run_symbolic_execution",
    "analyze_file",
]
