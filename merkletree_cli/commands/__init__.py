"""
CLI command modules.
"""

from merkletree_cli.commands import tree, prove, verify

__all__ = ["tree", "prove", "verify"]
