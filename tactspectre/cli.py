"""Command-line interface for TactSpectre.
Provides two commands:
1. Path exploration: tactspectre run file.tact [-f function_name]
2. Configuration scaffolding: tactspectre init [directory]
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from tactspectre import __version__
from tactspectre.api import analyze_file
from tactspectre.config import OUTPUT_FORMATS, init_config, load_config
from tactspectre.core.exceptions import ParseError, PathError
from tactspectre.logging import LogLevel, configure_logging
from tactspectre.reporting.formatters import format_report
EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_ERROR = 2
def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="tactspectre",
        description="TactSpectre - Symbolic Execution Engine for Tact functions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Explore every function in a file
  tactspectre run contract.tact
  # Explore one function, JSON report
  tactspectre run contract.tact -f abs --format json
  # Bound the exploration
  tactspectre run contract.tact --max-depth 8 --max-paths 64
  # Write a default tactspectre.toml
  tactspectre init
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"TactSpectre {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    run_parser = subparsers.add_parser(
        "run",
        help="Symbolically execute the functions of a Tact file",
        description="Explore every feasible path and report concrete inputs per path",
    )
    run_parser.add_argument(
        "file",
        type=str,
        help="Tact source file",
    )
    run_parser.add_argument(
        "-f",
        "--function",
        type=str,
        help="Function to explore (default: all)",
    )
    run_parser.add_argument(
        "--format",
        type=str,
        choices=list(OUTPUT_FORMATS),
        default=None,
        help="Output format (default: text, or the config file's)",
    )
    run_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Write the report to this file",
    )
    run_parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum nesting of branch forks per path",
    )
    run_parser.add_argument(
        "--max-paths",
        type=int,
        help="Maximum number of recorded paths",
    )
    run_parser.add_argument(
        "--timeout",
        type=float,
        help="Exploration time budget in seconds",
    )
    run_parser.add_argument(
        "--solver-timeout-ms",
        type=int,
        help="Per-query solver timeout in milliseconds",
    )
    run_parser.add_argument(
        "--report-fall-through",
        action="store_true",
        default=None,
        help="Report paths that end without return",
    )
    run_parser.add_argument(
        "--config",
        type=str,
        help="Configuration file (default: search from the current directory)",
    )
    run_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    init_parser = subparsers.add_parser(
        "init",
        help="Create a default tactspectre.toml",
    )
    init_parser.add_argument(
        "directory",
        type=str,
        nargs="?",
        default=None,
        help="Directory to create the file in (default: current)",
    )
    return parser
def cmd_run(args) -> int:
    """Execute run command."""
    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.exists():
        configure_logging(color=True).error(f"Config file not found: {config_path}", category="cli")
        return EXIT_ERROR
    config = load_config(config_path)
    verbose = args.verbose or config.output.verbose
    logger = configure_logging(
        level=LogLevel.VERBOSE if verbose else LogLevel.NORMAL,
        color=config.output.color,
    )
    if args.max_depth is not None:
        config.limits.max_depth = args.max_depth
    if args.max_paths is not None:
        config.limits.max_paths = args.max_paths
    if args.timeout is not None:
        config.limits.timeout_seconds = args.timeout
    if args.solver_timeout_ms is not None:
        config.solver.timeout_ms = args.solver_timeout_ms
    if args.report_fall_through:
        config.execution.report_fall_through = True
    output_format = args.format or config.output.format
    filepath = Path(args.file)
    logger.verbose(f"Analyzing {filepath}", category="cli")
    try:
        analyses = analyze_file(filepath, args.function, config.to_execution_config())
    except FileNotFoundError as e:
        logger.error(str(e), category="cli")
        return EXIT_ERROR
    except ParseError as e:
        logger.error(f"Parse error in {filepath}: {e}", category="cli")
        return EXIT_ERROR
    except ValueError as e:
        logger.error(str(e), category="cli")
        return EXIT_ERROR
    except PathError as e:
        logger.error(f"Exploration aborted: {e}", category="cli")
        return EXIT_FAILURES
    kwargs = {}
    if output_format == "text":
        kwargs = {
            "color": config.output.color and args.output is None and sys.stdout.isatty(),
            "verbose": verbose,
            "show_expressions": config.output.show_expressions,
        }
    output = format_report(analyses, output_format, source_file=str(filepath), **kwargs)
    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.success(f"Report saved to: {args.output}")
    else:
        print(output)
    for analysis in analyses:
        if analysis.truncated:
            logger.warning(f"Exploration of '{analysis.function_name}' was truncated", category="cli")
    return EXIT_FAILURES if any(a.has_failures() for a in analyses) else EXIT_OK
def cmd_init(args) -> int:
    """Execute init command."""
    logger = configure_logging()
    directory = Path(args.directory) if args.directory else None
    try:
        path = init_config(directory)
    except (FileExistsError, FileNotFoundError) as e:
        logger.error(str(e), category="cli")
        return EXIT_ERROR
    logger.success(f"Created {path}")
    return EXIT_OK
def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.command == "run":
        return cmd_run(args)
    elif args.command == "init":
        return cmd_init(args)
    parser.print_help()
    return EXIT_OK
if __name__ == "__main__":
    sys.exit(main())
