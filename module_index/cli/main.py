"""Command-line interface for module-index.

This module provides a CLI for analyzing module files and building an
executable index without writing code.

Commands:
    analyze: List the executables one module file puts on PATH
    index: Map executables to the modules that provide them

Example:
    $ module-index analyze /opt/modules/gcc/9.2.0.lua --dialect lua
    $ module-index index --roots /opt/modules --json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from module_index.config import load_policy
from module_index.discovery.index import ModuleIndexer
from module_index.discovery.modules import ModuleFileScanner, roots_from_modulepath
from module_index.exceptions import ModuleIndexError
from module_index.models import ModuleDialect
from module_index.observability.audit import AuditSink, JSONLAuditSink
from module_index.observability.log import configure_logging
from module_index.runtime.analyzer import ModuleAnalyzer


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="module-index",
        description="Find the executables environment modules put on PATH",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        help="YAML file with analysis policy settings (default: $MODULE_INDEX_CONFIG)",
    )
    common.add_argument(
        "--audit-log",
        type=Path,
        help="Append audit events to this JSONL file",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        parents=[common],
        help="List executables provided by a module file",
        description="Analyze one module file and list the executables it puts on PATH",
    )
    analyze_parser.add_argument(
        "module_file",
        type=Path,
        help="Path to the module file",
    )
    analyze_parser.add_argument(
        "--dialect",
        choices=[d.value for d in ModuleDialect],
        help="Module file dialect (default: detected from the file)",
    )

    # Index command
    index_parser = subparsers.add_parser(
        "index",
        parents=[common],
        help="Map executables to modules",
        description="Scan module roots and map each executable to the modules providing it",
    )
    index_parser.add_argument(
        "--roots",
        type=Path,
        action="append",
        help="Module root directory (can be specified multiple times, default: $MODULEPATH)",
    )
    index_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the index as JSON",
    )

    return parser


def _log_level(verbose: int) -> str:
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return "WARNING"


def _build_analyzer(args: argparse.Namespace) -> ModuleAnalyzer:
    policy = load_policy(args.config)
    audit_sink: AuditSink | None = JSONLAuditSink(args.audit_log) if args.audit_log else None
    return ModuleAnalyzer(policy=policy, audit_sink=audit_sink)


def cmd_analyze(args: argparse.Namespace) -> int:
    """Execute the analyze command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        dialect = args.dialect
        if dialect is None:
            detected = ModuleFileScanner().detect_dialect(args.module_file)
            if detected is None:
                print(
                    f"Error: cannot detect dialect of {args.module_file}, use --dialect",
                    file=sys.stderr,
                )
                return 1
            dialect = detected.value

        with _build_analyzer(args) as analyzer:
            result = analyzer.analyze(args.module_file, dialect)

        for name in result.executables:
            print(name)
        logger.info(f"{result.module.name}: {result.count} executable(s)")

        return 0

    except ModuleIndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_index(args: argparse.Namespace) -> int:
    """Execute the index command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        roots = args.roots or roots_from_modulepath()
        if not roots:
            print("Error: no module roots given and $MODULEPATH is empty", file=sys.stderr)
            return 1

        module_files = ModuleFileScanner().scan(roots)
        logger.info(f"Found {len(module_files)} module file(s)")

        with _build_analyzer(args) as analyzer:
            indexer = ModuleIndexer(analyzer)
            index = indexer.build(module_files)

        if args.json:
            print(json.dumps(index, indent=2, sort_keys=True))
        elif not index:
            print("No executables found.")
        else:
            for name in sorted(index):
                print(f"{name}: {' '.join(index[name])}")

        if indexer.failures:
            logger.warning(f"{len(indexer.failures)} module file(s) could not be analyzed")

        return 0

    except ModuleIndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the module-index command is executed.
    It parses command-line arguments and dispatches to the appropriate
    command handler.
    """
    parser = create_parser()
    args = parser.parse_args()

    if args.command is not None:
        configure_logging(_log_level(args.verbose))

    if args.command == "analyze":
        exit_code = cmd_analyze(args)
    elif args.command == "index":
        exit_code = cmd_index(args)
    else:
        parser.print_help()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
