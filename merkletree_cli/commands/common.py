"""
Helpers shared by the CLI commands.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from merkletree.config import RuntimeConfig
from merkletree.merkle import MerkleTree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def read_values(args: Namespace) -> list[bytes]:
    """
    Collect the input values for a command.

    Positional values come first, then one value per line from --file.
    Values are UTF-8 encoded.
    """
    values = [v.encode("utf-8") for v in (args.values or [])]

    if getattr(args, "file", None):
        path = Path(args.file)
        if not path.exists():
            raise FileNotFoundError(f"Values file not found: {path}")
        lines = path.read_text(encoding="utf-8").splitlines()
        logger.debug(f"Read {len(lines)} values from {path}")
        values.extend(line.encode("utf-8") for line in lines)

    return values


def build_tree(config: RuntimeConfig, values: list[bytes]) -> MerkleTree:
    """Insert values into a new tree and freeze it."""
    tree = config.new_tree()
    for value in values:
        tree.insert(value)
    tree.root()
    return tree
