"""
CLI Verify Command

Verify a proof document offline. Only the document (and optionally a
trusted root) is needed; no values or tree are involved.

Usage:
    merkletree verify proof.json [--root 0x...] [--json]
    cat proof.json | merkletree verify -
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from merkletree.crypto import from_hex
from merkletree.merkle import ProofDocument
from merkletree.schemas import ProofMismatchException
from merkletree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    ok: bool
    algorithm: str
    leaf: str
    root: str
    proof_length: int
    trusted_root: bool
    error: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.error is None:
            del d["error"]
        return d


def read_document(source: str) -> ProofDocument:
    """Load a proof document from a path, or from stdin when source is '-'."""
    if source == "-":
        return ProofDocument.from_json(sys.stdin.read())

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Proof document not found: {path}")
    return ProofDocument.from_json(path.read_text(encoding="utf-8"))


def print_summary_human(summary: VerifySummary) -> None:
    print(f"ok: {str(summary.ok).lower()}")
    print(f"algorithm: {summary.algorithm}")
    print(f"leaf: {summary.leaf}")
    print(f"root: {summary.root}")
    print(f"proof_length: {summary.proof_length}")
    if not summary.trusted_root:
        print("warning: no --root given, checked against the document's own root")
    if summary.error:
        print(f"error: {summary.error['code']}: {summary.error['message']}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        doc = read_document(args.proof)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    trusted_root = from_hex(args.root) if args.root else None

    summary = VerifySummary(
        ok=True,
        algorithm=doc.algorithm,
        leaf=doc.leaf,
        root=args.root.lower() if args.root else doc.root,
        proof_length=len(doc.steps),
        trusted_root=trusted_root is not None,
    )

    try:
        doc.verify(trusted_root)
    except ProofMismatchException as e:
        summary.ok = False
        summary.error = e.to_error_model().model_dump()

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
