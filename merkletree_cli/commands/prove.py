"""
CLI Prove Command

Build a tree from values and emit the inclusion proof for one of them as a
JSON proof document.

Usage:
    merkletree prove TARGET VALUE... [--out proof.json]
    merkletree prove TARGET --file values.txt
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from merkletree.merkle import ProofDocument
from merkletree.schemas import LeafNotFoundException
from merkletree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_tree,
    read_values,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.runtime_config
    values = read_values(args)
    tree = build_tree(config, values)

    if not tree.frozen:
        print("Error: no values given", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    target = args.target.encode("utf-8")
    try:
        steps = tree.proof_for_value(target)
    except LeafNotFoundException as e:
        print(f"Error: {args.target!r} is not one of the values ({e.code})", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    doc = ProofDocument.from_proof(
        leaf=tree.leaves()[values.index(target)],
        root=tree.root_hash,
        steps=steps,
        algorithm=config.hashing.algorithm,
    )

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(doc.to_json() + "\n", encoding="utf-8")
        logger.info(f"Proof written to {out_path}")
    else:
        print(doc.to_json())

    return EXIT_SUCCESS
