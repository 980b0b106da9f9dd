"""Main symbolic executor for TactSpectre."""
from __future__ import annotations
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Union
from tactspectre.core.exceptions import (
    FailureKind,
    PathError,
    ResourceLimitError,
    TypeMismatchError,
    UnsupportedConstructError,
)
from tactspectre.core.expressions import Not, Sort, SymExpr
from tactspectre.core.solver import SolverContext, create_solver
from tactspectre.core.state import PathCondition, SymbolicState, create_initial_state
from tactspectre.execution.evaluator import evaluate, make_binary
from tactspectre.frontend.ast import (
    Assign,
    AugmentedAssign,
    Condition,
    Expression,
    ExpressionStatement,
    FunctionDef,
    Identifier,
    Let,
    Loop,
    Return,
    Statement,
    node_name,
)
from tactspectre.logging import get_logger
from tactspectre.resources import LimitExceeded, ResourceLimits, ResourceTracker
@dataclass
class ExecutionConfig:
    """Configuration for symbolic execution."""
    max_paths: int | None = None
    max_depth: int | None = None
    timeout_seconds: float | None = None
    report_fall_through: bool = False
    fail_fast: bool = False
    solver_backend: str = "z3"
    solver_timeout_ms: int = 10000
    enable_caching: bool = True
@dataclass(frozen=True)
class ExecutionResult:
    """A terminal path: its final state, path condition and return value.
    `return_value` is None for a bare `return;` and for reported
    fall-through paths (`fell_through` is then True).
    """
    state: SymbolicState
    path_condition: PathCondition
    return_value: SymExpr | None
    fell_through: bool = False
    depth: int = 0
@dataclass(frozen=True)
class PathFailure:
    """A path aborted by a PathError."""
    kind: FailureKind
    message: str
    path_condition: PathCondition
    construct: str | None = None
    depth: int = 0
PathRecord = Union[ExecutionResult, PathFailure]
@dataclass
class ExplorationResult:
    """Every recorded path of one function, in discovery order."""
    function_name: str = ""
    paths: list[PathRecord] = field(default_factory=list)
    forks: int = 0
    paths_pruned: int = 0
    paths_fell_through: int = 0
    solver_queries: int = 0
    max_depth_reached: int = 0
    truncated: bool = False
    truncation_reason: str | None = None
    total_time_seconds: float = 0.0
    @property
    def results(self) -> list[ExecutionResult]:
        return [p for p in self.paths if isinstance(p, ExecutionResult)]
    @property
    def failures(self) -> list[PathFailure]:
        return [p for p in self.paths if isinstance(p, PathFailure)]
    def has_failures(self) -> bool:
        """Check if any path was aborted."""
        return any(isinstance(p, PathFailure) for p in self.paths)
    def format_summary(self) -> str:
        """Format a summary of the exploration."""
        lines = [
            "=== TactSpectre Exploration ===",
            f"Function: {self.function_name}",
            f"Results: {len(self.results)}",
            f"Failures: {len(self.failures)}",
            f"Forks: {self.forks}",
            f"Paths pruned: {self.paths_pruned}",
            f"Paths fell through: {self.paths_fell_through}",
            f"Solver queries: {self.solver_queries}",
            f"Total time: {self.total_time_seconds:.2f}s",
        ]
        if self.truncated:
            lines.append(f"Truncated: {self.truncation_reason}")
        return "\n".join(lines)
    def to_dict(self) -> dict[str, Any]:
        """Convert statistics to a dictionary for serialization."""
        return {
            "function_name": self.function_name,
            "results": len(self.results),
            "failures": len(self.failures),
            "forks": self.forks,
            "paths_pruned": self.paths_pruned,
            "paths_fell_through": self.paths_fell_through,
            "solver_queries": self.solver_queries,
            "max_depth_reached": self.max_depth_reached,
            "truncated": self.truncated,
            "truncation_reason": self.truncation_reason,
            "total_time_seconds": self.total_time_seconds,
        }
class SymbolicExecutor:
    """Depth-first symbolic execution engine over Tact function bodies.
    Each conditional forks the current path into a "then" and an "else"
    side, each with its own copy of the state and path condition. A side
    is explored only if its path condition is satisfiable. Statements that
    follow a conditional run as the continuation of every side that does
    not return.
    """
    def __init__(
        self,
        config: ExecutionConfig | None = None,
        solver: SolverContext | None = None,
    ):
        self.config = config or ExecutionConfig()
        self.solver = solver or create_solver(
            self.config.solver_backend,
            timeout_ms=self.config.solver_timeout_ms,
            enable_caching=self.config.enable_caching,
        )
        self._tracker = ResourceTracker(
            ResourceLimits(
                max_paths=self.config.max_paths,
                max_depth=self.config.max_depth,
                timeout_seconds=self.config.timeout_seconds,
            )
        )
        self._result = ExplorationResult()
    def execute_function(
        self,
        func: FunctionDef,
        state: SymbolicState | None = None,
        path_condition: PathCondition | None = None,
    ) -> ExplorationResult:
        """Symbolically execute a function body.
        Args:
            func: Function definition to explore.
            state: Entry state; unbound parameters become fresh integer
                variables on first use when omitted.
            path_condition: Entry path condition (preconditions).
        Returns:
            ExplorationResult with every recorded path and statistics.
        Raises:
            PathError: Only when `fail_fast` is set.
        """
        logger = get_logger()
        start_time = time.perf_counter()
        self._result = ExplorationResult(function_name=func.name)
        initial_state, initial_pc = create_initial_state()
        # exploration mutates the entry state along the first path
        state = state.clone() if state is not None else initial_state
        path_condition = path_condition.clone() if path_condition is not None else initial_pc
        self._tracker.start()
        logger.verbose(f"Exploring '{func.name}'", category="executor")
        try:
            self._run(
                func.statements, state, path_condition, 0,
                check_feasible=len(path_condition) > 0,
            )
        except LimitExceeded as e:
            self._result.truncated = True
            self._result.truncation_reason = str(e)
            logger.warning(f"Exploration of '{func.name}' stopped early: {e}", category="executor")
            usage = ", ".join(f"{k} {v:.0f}%" for k, v in self._tracker.get_progress().items())
            logger.debug(f"budget used: {usage}", category="executor")
        self._result.solver_queries = self._tracker.solver_calls
        self._result.max_depth_reached = self._tracker.snapshot().max_depth_reached
        self._result.total_time_seconds = time.perf_counter() - start_time
        logger.verbose(
            f"'{func.name}': {len(self._result.results)} result(s), "
            f"{len(self._result.failures)} failure(s), {self._result.paths_pruned} pruned",
            category="executor",
        )
        return self._result
    def _run(
        self,
        statements: Sequence[Statement],
        state: SymbolicState,
        path_condition: PathCondition,
        depth: int,
        check_feasible: bool = True,
    ) -> None:
        """Explore one path; PathErrors abort this path only."""
        try:
            if check_feasible and not self._is_feasible(path_condition):
                self._result.paths_pruned += 1
                get_logger().trace(f"pruned infeasible path {path_condition!r}", category="executor")
                return
            self._walk(statements, state, path_condition, depth)
        except PathError as e:
            if self.config.fail_fast:
                raise
            self._record_failure(e, path_condition, depth)
    def _walk(
        self,
        statements: Sequence[Statement],
        state: SymbolicState,
        path_condition: PathCondition,
        depth: int,
    ) -> None:
        for index, stmt in enumerate(statements):
            self._tracker.check_time_limit()
            if isinstance(stmt, Let):
                state.set_var(stmt.name, evaluate(stmt.expression, state))
            elif isinstance(stmt, Assign):
                name = self._target_name(stmt.path)
                state.set_var(name, evaluate(stmt.expression, state))
            elif isinstance(stmt, AugmentedAssign):
                name = self._target_name(stmt.path)
                current = evaluate(stmt.path, state)
                operand = evaluate(stmt.expression, state)
                state.set_var(name, make_binary(stmt.op, current, operand, where=stmt.loc))
            elif isinstance(stmt, Return):
                value = evaluate(stmt.expression, state) if stmt.expression is not None else None
                self._record(ExecutionResult(state, path_condition, value, depth=depth))
                return
            elif isinstance(stmt, Condition):
                self._fork(stmt, tuple(statements[index + 1 :]), state, path_condition, depth)
                return
            elif isinstance(stmt, (Loop, ExpressionStatement)):
                raise UnsupportedConstructError(node_name(stmt), _location(stmt))
            else:
                raise UnsupportedConstructError(node_name(stmt), "unknown statement kind")
        self._fall_through(state, path_condition, depth)
    def _fork(
        self,
        stmt: Condition,
        continuation: tuple[Statement, ...],
        state: SymbolicState,
        path_condition: PathCondition,
        depth: int,
    ) -> None:
        """Fork at a conditional; both sides are explored before returning."""
        guard = evaluate(stmt.condition, state)
        if not guard.is_bool:
            raise TypeMismatchError(
                f"Condition must be {Sort.BOOL.value}, got {guard.sort.value} ({guard})"
            )
        try:
            self._tracker.check_depth_limit(depth + 1)
        except LimitExceeded as e:
            raise ResourceLimitError("depth", e.current, e.limit) from e
        self._result.forks += 1
        get_logger().debug(f"fork on {guard} at depth {depth + 1}", category="executor")
        then_state = state.clone()
        then_pc = path_condition.clone()
        then_pc.add_constraint(guard)
        self._run(stmt.true_statements + continuation, then_state, then_pc, depth + 1)
        has_else_side = (
            stmt.false_statements is not None
            or len(continuation) > 0
            or self.config.report_fall_through
        )
        if not has_else_side:
            return
        else_state = state.clone()
        else_pc = path_condition.clone()
        else_pc.add_constraint(Not(guard))
        self._run((stmt.false_statements or ()) + continuation, else_state, else_pc, depth + 1)
    def _fall_through(self, state: SymbolicState, path_condition: PathCondition, depth: int) -> None:
        self._result.paths_fell_through += 1
        if self.config.report_fall_through:
            self._record(ExecutionResult(state, path_condition, None, fell_through=True, depth=depth))
        else:
            get_logger().debug(
                f"path fell through without return {path_condition!r}", category="executor"
            )
    def _is_feasible(self, path_condition: PathCondition) -> bool:
        self._tracker.record_solver_call()
        return path_condition.is_satisfiable(self.solver)
    def _record(self, path: PathRecord) -> None:
        self._tracker.check_path_limit()
        self._tracker.record_path()
        self._tracker.record_depth(path.depth)
        self._result.paths.append(path)
    def _record_failure(self, error: PathError, path_condition: PathCondition, depth: int) -> None:
        construct = getattr(error, "construct", None)
        get_logger().warning(
            f"Path failed in '{self._result.function_name}': {error.message}",
            category="executor",
        )
        self._record(PathFailure(error.kind, error.message, path_condition, construct, depth))
    def _target_name(self, path: Expression) -> str:
        if isinstance(path, Identifier):
            return path.name
        raise UnsupportedConstructError(f"assignment to {node_name(path)}", _location(path))
def _location(node: Any) -> str:
    loc = getattr(node, "loc", None)
    return f"at {loc}" if loc is not None else ""
def explore(
    func: FunctionDef,
    solver: SolverContext | None = None,
    **config_kwargs: Any,
) -> ExplorationResult:
    """
    Explore a parsed function with a one-off executor.
    Args:
        func: Function definition to explore
        solver: Solver context; a z3 context is created when omitted
        **config_kwargs: ExecutionConfig options
    Returns:
        ExplorationResult with every recorded path
    """
    config = ExecutionConfig(**config_kwargs)
    return SymbolicExecutor(config, solver).execute_function(func)
__all__ = [
    "ExecutionConfig",
    "ExecutionResult",
    "PathFailure",
    "PathRecord",
    "ExplorationResult",
    "SymbolicExecutor",
    "explore",
]
