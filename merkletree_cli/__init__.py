"""
merkletree CLI

Command-line interface for building trees, producing proofs and
verifying them.

Usage:
    python -m merkletree_cli root a b c
    python -m merkletree_cli prove b a b c --out proof.json
    python -m merkletree_cli verify proof.json --root 0x...
    python -m merkletree_cli graph --file values.txt
"""

__version__ = "0.1.0"
