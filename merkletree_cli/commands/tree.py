"""
CLI Tree Commands

Build a tree from values and print its root or its Graphviz rendering.

Usage:
    merkletree root a b c [--json]
    merkletree root --file values.txt
    merkletree graph a b c > tree.dot
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from merkletree.crypto import to_hex
from merkletree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_tree,
    read_values,
)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.runtime_config
    values = read_values(args)
    tree = build_tree(config, values)

    root = tree.root_hash
    if root is None:
        print("Error: no values given, an empty tree has no root", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "algorithm": config.hashing.algorithm,
            "leaf_count": tree.leaf_count,
            "node_count": tree.node_count,
            "height": tree.height,
            "root": to_hex(root),
        }, indent=2))
    else:
        print(to_hex(root))

    return EXIT_SUCCESS


def graph_cmd(args: Namespace) -> int:
    """Execute the graph command."""
    values = read_values(args)
    tree = build_tree(args.runtime_config, values)

    if not tree.frozen:
        print("Error: no values given", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(tree.to_graphviz())
    return EXIT_SUCCESS
