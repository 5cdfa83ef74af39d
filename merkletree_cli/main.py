"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkletree_cli root VALUE... [--file PATH] [--json]
    python -m merkletree_cli prove TARGET VALUE... [--file PATH] [--out PATH]
    python -m merkletree_cli verify PROOF_JSON [--root HEX] [--json]
    python -m merkletree_cli graph VALUE... [--file PATH]
    python -m merkletree_cli config [--show | --init]

Environment Variables:
    MERKLETREE_HASH_ALGORITHM   hashlib algorithm name (default: sha256)
    MERKLETREE_POOL_SIZE        Idle hashers kept per tree (default: 4)
    MERKLETREE_CAPACITY_HINT    Expected leaf count for new trees
    MERKLETREE_LOG_LEVEL        Log level (default: INFO)
    MERKLETREE_LOG_FILE         Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

import yaml

from merkletree.config import RuntimeConfig
from merkletree.schemas import MerkleException
from merkletree_cli import __version__
from merkletree_cli.commands import prove, tree, verify
from merkletree_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_value_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "values",
        nargs="*",
        help="Values to insert, in order",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="File with one value per line (appended after positional values)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkletree",
        description="Build Merkle trees, produce inclusion proofs and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        default=None,
        help="Hash algorithm (overrides config, default: sha256)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the root hash of a set of values",
    )
    _add_value_arguments(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    root_parser.set_defaults(func=tree.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce an inclusion proof for one value",
        description="Build the tree and write a JSON proof document for TARGET.",
    )
    prove_parser.add_argument(
        "target",
        type=str,
        help="Value to prove (must be one of the values)",
    )
    _add_value_arguments(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document here instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof document",
        description="Recompute the root from a proof document and compare it.",
    )
    verify_parser.add_argument(
        "proof",
        type=str,
        help="Path to proof document ('-' for stdin)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root as 0x-prefixed hex (default: the document's root)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- graph command ---
    graph_parser = subparsers.add_parser(
        "graph",
        help="Print the tree as a Graphviz digraph",
    )
    _add_value_arguments(graph_parser)
    graph_parser.set_defaults(func=tree.graph_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show effective configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkletree.yaml",
        help="Path for config file (default: merkletree.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(yaml.safe_dump(RuntimeConfig().to_dict(), sort_keys=False))
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLETREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merkletree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show effective configuration")
    return EXIT_SUCCESS


def load_runtime_config(args: argparse.Namespace) -> RuntimeConfig:
    """
    Resolve configuration: YAML file (if given) overlaid by environment
    variables, then by command-line flags.
    """
    if args.config:
        config = RuntimeConfig.from_yaml(args.config).with_env_overrides()
    else:
        config = RuntimeConfig.from_env()

    if args.algorithm:
        config.hashing.algorithm = args.algorithm
    if args.log_level:
        config.logging.level = args.log_level

    # Fail early on an unknown algorithm
    config.hash_factory()
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_runtime_config(args)
    except (OSError, ValueError, TypeError, yaml.YAMLError, MerkleException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=config.logging.level, log_file=config.logging.file)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (MerkleException, OSError, ValueError) as e:
        if config.logging.level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
