"""Output formatters for TactSpectre results."""
from __future__ import annotations
import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any
from tactspectre.execution.extraction import (
    FunctionAnalysis,
    SymbolicExecutionSuccess,
)
from tactspectre.logging import Colors
if TYPE_CHECKING:
    from tactspectre.execution.extraction import PathOutcome
WIDTH = 58
class Formatter(ABC):
    """Base class for output formatters."""
    name: str = "base"
    extension: str = ".txt"
    @abstractmethod
    def format(self, analyses: Sequence[FunctionAnalysis], source_file: str | None = None) -> str:
        """Format the analyses of one source file."""
    def save(
        self,
        analyses: Sequence[FunctionAnalysis],
        filepath: str,
        source_file: str | None = None,
    ) -> None:
        """Save formatted result to file."""
        content = self.format(analyses, source_file)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "(none)"
    return str(value)
class TextFormatter(Formatter):
    """Plain text formatter with box-drawn sections."""
    name = "text"
    extension = ".txt"
    def __init__(self, color: bool = True, verbose: bool = False, show_expressions: bool = True):
        self.color = color
        self.verbose = verbose
        self.show_expressions = show_expressions
    def format(self, analyses: Sequence[FunctionAnalysis], source_file: str | None = None) -> str:
        lines = []
        lines.append("")
        lines.append("╔" + "═" * WIDTH + "╗")
        lines.append("║" + "TactSpectre - Symbolic Execution Report".center(WIDTH) + "║")
        lines.append("╚" + "═" * WIDTH + "╝")
        lines.append("")
        if source_file:
            lines.append(f"  File:      {source_file}")
        lines.append(f"  Time:      {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("")
        for analysis in analyses:
            lines.extend(self._format_function(analysis))
        total = sum(len(a.outcomes) for a in analyses)
        failed = sum(len(a.failures) for a in analyses)
        lines.append("─" * (WIDTH + 2))
        lines.append(f"  {len(analyses)} function(s), {total} path(s), {failed} failure(s)")
        lines.append("")
        return "\n".join(lines)
    def _format_function(self, analysis: FunctionAnalysis) -> list[str]:
        title = f"┌─ {analysis.function_name}() "
        lines = [title + "─" * max(0, WIDTH + 1 - len(title)) + "┐"]
        exploration = analysis.exploration
        if exploration is not None:
            lines.append(
                f"│  Paths: {len(analysis.outcomes):<6} Forks: {exploration.forks:<6}"
                f" Pruned: {exploration.paths_pruned:<6}"
            )
            if self.verbose:
                lines.append(
                    f"│  Fell through: {exploration.paths_fell_through:<6}"
                    f" Solver queries: {exploration.solver_queries:<6}"
                    f" Time: {exploration.total_time_seconds:.3f}s"
                )
            if exploration.truncated:
                lines.append(f"│  Truncated: {exploration.truncation_reason}")
        lines.append("└" + "─" * WIDTH + "┘")
        lines.append("")
        if not analysis.outcomes:
            lines.append("  No terminal paths.")
            lines.append("")
        for i, outcome in enumerate(analysis.outcomes, 1):
            lines.extend(self._format_outcome(i, outcome))
        return lines
    def _format_outcome(self, index: int, outcome: PathOutcome) -> list[str]:
        lines = []
        if isinstance(outcome, SymbolicExecutionSuccess):
            label = "fell through" if outcome.fell_through else "returns"
            mark = self._paint("✓", Colors.GREEN)
            lines.append(f"  [{index}] {mark} {label} {_format_value(outcome.return_value)}")
        else:
            mark = self._paint("✗", Colors.RED)
            lines.append(f"  [{index}] {mark} {outcome.kind.name}")
            lines.append(f"      {outcome.message}")
        conditions = " ∧ ".join(outcome.path_conditions) or "true"
        lines.append(f"      Path: {conditions}")
        if isinstance(outcome, SymbolicExecutionSuccess):
            if outcome.inputs:
                lines.append("      ↳ Inputs:")
                for name, value in outcome.inputs.items():
                    lines.append(f"          {name} = {_format_value(value)}")
            if self.show_expressions and outcome.return_expression is not None:
                lines.append(f"      Return expression: {outcome.return_expression}")
        lines.append("")
        return lines
    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.color else text
class JSONFormatter(Formatter):
    """JSON formatter for machine-readable output."""
    name = "json"
    extension = ".json"
    def __init__(self, indent: int = 2, include_statistics: bool = True):
        self.indent = indent
        self.include_statistics = include_statistics
    def format(self, analyses: Sequence[FunctionAnalysis], source_file: str | None = None) -> str:
        from tactspectre import __version__
        functions = []
        for analysis in analyses:
            data = analysis.to_dict()
            if not self.include_statistics:
                data.pop("statistics", None)
            functions.append(data)
        data = {
            "meta": {
                "tool": "TactSpectre",
                "version": __version__,
                "timestamp": datetime.now().isoformat(),
            },
            "source_file": source_file,
            "functions": functions,
            "summary": {
                "functions": len(analyses),
                "paths": sum(len(a.outcomes) for a in analyses),
                "failures": sum(len(a.failures) for a in analyses),
            },
        }
        return json.dumps(data, indent=self.indent, default=str)
class MarkdownFormatter(Formatter):
    """Markdown formatter."""
    name = "markdown"
    extension = ".md"
    def format(self, analyses: Sequence[FunctionAnalysis], source_file: str | None = None) -> str:
        lines = [
            "# TactSpectre - Symbolic Execution Report",
            "",
        ]
        if source_file:
            lines.append(f"**Source:** `{source_file}`  ")
        lines.append(f"**Generated:** {datetime.now().isoformat()}")
        lines.append("")
        for analysis in analyses:
            lines.append(f"## `{analysis.function_name}`")
            lines.append("")
            if analysis.exploration is not None:
                stats = analysis.exploration
                lines.extend(
                    [
                        "| Metric | Value |",
                        "|--------|-------|",
                        f"| Paths | {len(analysis.outcomes)} |",
                        f"| Forks | {stats.forks} |",
                        f"| Paths Pruned | {stats.paths_pruned} |",
                        f"| Fell Through | {stats.paths_fell_through} |",
                        f"| Solver Queries | {stats.solver_queries} |",
                        f"| Execution Time | {stats.total_time_seconds:.3f}s |",
                        "",
                    ]
                )
            if not analysis.outcomes:
                lines.append("No terminal paths.")
                lines.append("")
                continue
            lines.append("| # | Path condition | Inputs | Result |")
            lines.append("|---|----------------|--------|--------|")
            for i, outcome in enumerate(analysis.outcomes, 1):
                conditions = " ∧ ".join(f"`{c}`" for c in outcome.path_conditions) or "`true`"
                if isinstance(outcome, SymbolicExecutionSuccess):
                    inputs = ", ".join(
                        f"{name} = {_format_value(value)}" for name, value in outcome.inputs.items()
                    )
                    result = f"returns `{_format_value(outcome.return_value)}`"
                else:
                    inputs = ""
                    result = f"**{outcome.kind.name}**: {outcome.message}"
                lines.append(f"| {i} | {conditions} | {inputs} | {result} |")
            lines.append("")
        return "\n".join(lines)
def format_report(
    analyses: Sequence[FunctionAnalysis],
    format_type: str = "text",
    source_file: str | None = None,
    **kwargs,
) -> str:
    """
    Format the analyses of a source file.
    Args:
        analyses: Per-function analyses to format
        format_type: One of "text", "json", "markdown"
        source_file: Path shown in the report header
        **kwargs: Additional formatter options
    Returns:
        Formatted string
    """
    formatters = {
        "text": TextFormatter,
        "json": JSONFormatter,
        "markdown": MarkdownFormatter,
        "md": MarkdownFormatter,
    }
    formatter_class = formatters.get(format_type.lower(), TextFormatter)
    formatter = formatter_class(**kwargs)
    return formatter.format(analyses, source_file)
def format_outcomes(
    outcomes: Sequence[PathOutcome],
    format_type: str = "text",
    function_name: str | None = None,
    **kwargs,
) -> str:
    """Format a bare outcome list as a single-function report."""
    if function_name is None:
        function_name = outcomes[0].function_name if outcomes else ""
    analysis = FunctionAnalysis(function_name, list(outcomes))
    return format_report([analysis], format_type, **kwargs)
__all__ = [
    "Formatter",
    "TextFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "format_report",
    "format_outcomes",
]
