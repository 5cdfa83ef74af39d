"""
Merkle Tree Unit Tests
Tests for merkletree/merkle/tree.py

Covers:
1. Root determinism - same values -> same root across runs
2. Padding correctness - dangling nodes are self-combined, never cloned
3. Freeze behavior - inserts rejected and root cached once frozen
4. Arena layout - node counts, parent/child indices, single rooted graph
5. Empty and single-leaf trees
"""
import hashlib
import threading

import pytest

from fixtures import (
    combine,
    expected_node_count,
    leaf_hash,
    make_tree,
)
from merkletree.crypto import hash_factory
from merkletree.merkle import MerkleTree, new


class TestInsert:
    """Tests for leaf insertion."""

    def test_insert_returns_leaf_hash(self):
        tree = MerkleTree()

        assert tree.insert(b"1") == leaf_hash("1")

    def test_insert_increments_leaf_count(self):
        tree = MerkleTree()
        for i in range(5):
            tree.insert(str(i).encode())

        assert tree.leaf_count == 5
        assert len(tree) == 5
        assert tree.node_count == 5

    def test_unfrozen_arena_holds_only_leaves(self):
        tree = make_tree(["a", "b", "c"], freeze=False)

        assert all(node.is_leaf for node in tree.nodes)
        assert [node.index for node in tree.nodes] == [0, 1, 2]
        assert all(node.parent is None for node in tree.nodes)

    def test_insert_accepts_bytearray_and_memoryview(self):
        tree = MerkleTree()

        assert tree.insert(bytearray(b"x")) == leaf_hash("x")
        assert tree.insert(memoryview(b"y")) == leaf_hash("y")

    def test_insert_rejects_str(self):
        tree = MerkleTree()

        with pytest.raises(TypeError, match="bytes-like"):
            tree.insert("not bytes")
        assert tree.leaf_count == 0

    def test_leaves_in_insertion_order(self):
        tree = make_tree(["c", "a", "b"], freeze=False)

        assert tree.leaves() == [leaf_hash("c"), leaf_hash("a"), leaf_hash("b")]

    def test_new_creates_empty_tree(self):
        tree = new(16, hashlib.sha256)

        assert tree.leaf_count == 0
        assert tree.leaf_capacity_hint == 16
        assert not tree.frozen

    def test_negative_capacity_hint_rejected(self):
        with pytest.raises(ValueError):
            MerkleTree(-1)


class TestFreeze:
    """Tests for root computation freezing the tree."""

    def test_insert_after_root_rejected(self):
        tree = make_tree(["1", "2"])

        assert tree.insert(b"3") is None
        assert tree.leaf_count == 2

    def test_root_is_cached(self):
        tree = make_tree(["1", "2", "3"])
        first = tree.root()
        node_count = tree.node_count

        assert tree.root() == first
        assert tree.root() is first
        assert tree.node_count == node_count

    def test_rejected_insert_does_not_change_root(self):
        tree = make_tree(["1", "2", "3"])
        root = tree.root()

        tree.insert(b"4")

        assert tree.root() == root

    def test_frozen_flag(self):
        tree = make_tree(["1"], freeze=False)
        assert not tree.frozen
        assert tree.root_hash is None

        tree.root()

        assert tree.frozen
        assert tree.root_hash == tree.root()


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_empty_root_is_none(self):
        assert MerkleTree().root() is None

    def test_empty_root_does_not_freeze(self):
        tree = MerkleTree()
        tree.root()

        assert not tree.frozen
        assert tree.insert(b"late") == leaf_hash("late")
        assert tree.root() == combine(leaf_hash("late"), leaf_hash("late"))


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_is_self_paired_once(self):
        tree = make_tree(["1"])
        h1 = leaf_hash("1")

        assert tree.root() == combine(h1, h1)
        assert tree.node_count == 2
        assert tree.height == 1

    def test_single_leaf_node_flags(self):
        tree = make_tree(["1"])
        leaf, root = tree.nodes

        assert leaf.is_self_paired
        assert leaf.parent == 1
        assert root.left == 0 and root.right == 0
        assert root.parent is None


class TestBalancedTree:
    """Eight leaves, no padding at any level."""

    def test_levels(self, balanced_tree):
        h = [leaf_hash(str(i)) for i in range(1, 9)]
        nodes = balanced_tree.nodes

        assert nodes[8].hash == combine(h[0], h[1])
        assert nodes[9].hash == combine(h[2], h[3])
        assert nodes[10].hash == combine(h[4], h[5])
        assert nodes[11].hash == combine(h[6], h[7])
        assert nodes[12].hash == combine(nodes[8].hash, nodes[9].hash)
        assert nodes[13].hash == combine(nodes[10].hash, nodes[11].hash)
        assert balanced_tree.root() == combine(nodes[12].hash, nodes[13].hash)

    def test_node_count_is_2n_minus_1(self, balanced_tree):
        assert balanced_tree.node_count == 2 * 8 - 1

    def test_no_self_paired_nodes(self, balanced_tree):
        assert not any(node.is_self_paired for node in balanced_tree.nodes)

    def test_height(self, balanced_tree):
        assert balanced_tree.height == 3


class TestPaddingCorrectness:
    """Tests for odd-count self-combination."""

    def test_padding_rule_three_leaves(self):
        a, b, c = leaf_hash("a"), leaf_hash("b"), leaf_hash("c")

        tree = make_tree(["a", "b", "c"])

        assert tree.root() == combine(combine(a, b), combine(c, c))
        assert tree.node_count == 6

    def test_padding_rule_five_leaves(self, unbalanced_tree):
        h = [leaf_hash(str(i)) for i in range(1, 6)]
        nodes = unbalanced_tree.nodes

        assert nodes[5].hash == combine(h[0], h[1])
        assert nodes[6].hash == combine(h[2], h[3])
        assert nodes[7].hash == combine(h[4], h[4])
        assert nodes[8].hash == combine(nodes[5].hash, nodes[6].hash)
        assert nodes[9].hash == combine(nodes[7].hash, nodes[7].hash)
        assert unbalanced_tree.root() == combine(nodes[8].hash, nodes[9].hash)

    def test_self_paired_flags_five_leaves(self, unbalanced_tree):
        flagged = [n.index for n in unbalanced_tree.nodes if n.is_self_paired]

        assert flagged == [4, 7]

    def test_self_paired_parent_points_at_same_child(self, unbalanced_tree):
        nodes = unbalanced_tree.nodes

        assert nodes[7].left == nodes[7].right == 4
        assert nodes[9].left == nodes[9].right == 7

    def test_no_padding_nodes_materialized(self, unbalanced_tree):
        assert unbalanced_tree.node_count == expected_node_count(5) == 11
        assert sum(1 for n in unbalanced_tree.nodes if n.is_leaf) == 5


class TestArenaInvariants:
    """Structural invariants of a frozen arena."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7, 8, 9, 16, 17, 33, 100])
    def test_node_count(self, n):
        tree = make_tree([str(i) for i in range(n)])

        assert tree.node_count == expected_node_count(n)

    @pytest.mark.parametrize("n", [2, 4, 8, 16, 64])
    def test_node_count_power_of_two(self, n):
        tree = make_tree([str(i) for i in range(n)])

        assert tree.node_count == 2 * n - 1

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 7, 12, 31])
    def test_single_rooted_tree(self, n):
        tree = make_tree([str(i) for i in range(n)])
        nodes = tree.nodes

        roots = [node for node in nodes if node.parent is None]
        assert roots == [nodes[-1]]
        assert nodes[-1].hash == tree.root()

        for node in nodes[:-1]:
            parent = nodes[node.parent]
            assert node.index in (parent.left, parent.right)
            assert parent.index > node.index

    @pytest.mark.parametrize("n", [2, 3, 5, 7, 12, 31])
    def test_internal_node_hashes(self, n):
        tree = make_tree([str(i) for i in range(n)])

        for node in tree.nodes:
            if node.is_leaf:
                assert node.left is None and node.right is None
                continue
            left = tree.nodes[node.left]
            right = tree.nodes[node.right]
            assert node.hash == combine(left.hash, right.hash)

    def test_leaves_occupy_first_positions(self, unbalanced_tree):
        nodes = unbalanced_tree.nodes

        assert all(n.is_leaf for n in nodes[:5])
        assert not any(n.is_leaf for n in nodes[5:])


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_values_same_root(self):
        values = [f"leaf{i}" for i in range(7)]

        roots = {make_tree(values).root() for _ in range(10)}

        assert len(roots) == 1

    def test_leaf_order_matters(self):
        assert make_tree(["a", "b", "c"]).root() != make_tree(["c", "b", "a"]).root()

    def test_different_values_different_roots(self):
        assert make_tree(["a", "b"]).root() != make_tree(["x", "y"]).root()

    def test_pooling_does_not_change_root(self):
        values = [str(i) for i in range(13)]

        assert make_tree(values, pool_size=0).root() == make_tree(values, pool_size=8).root()

    def test_hash_algorithm_is_configurable(self):
        tree = MerkleTree(hash_factory=hash_factory("blake2b"))
        tree.insert(b"a")
        tree.insert(b"b")

        a = hashlib.blake2b(b"a").digest()
        b = hashlib.blake2b(b"b").digest()
        assert tree.root() == hashlib.blake2b(a + b).digest()
        assert len(tree.root()) == 64

    def test_from_values(self):
        tree = MerkleTree.from_values([b"1", b"2", b"3"])

        assert tree.frozen
        assert tree.root() == make_tree(["1", "2", "3"]).root()


class TestConcurrentInsert:
    """insert() is serialized by the tree lock."""

    def test_parallel_inserts_all_admitted(self):
        tree = MerkleTree()

        def worker(offset):
            for i in range(200):
                tree.insert(f"{offset}-{i}".encode())

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert tree.leaf_count == 800
        assert [n.index for n in tree.nodes] == list(range(800))
        tree.root()
        assert tree.node_count == expected_node_count(800)


class TestGraphviz:
    """Tests for DOT rendering."""

    def test_frozen_tree_edges(self):
        tree = make_tree(["1", "2"])
        dot = tree.to_graphviz()
        h1, h2 = leaf_hash("1").hex(), leaf_hash("2").hex()
        root = tree.root().hex()

        assert dot.startswith("digraph G {")
        assert dot.endswith("}")
        assert f'"0:{h1}" -> "2:{root}"' in dot
        assert f'"1:{h2}" -> "2:{root}"' in dot
        assert f'    "2:{root}"' in dot.splitlines()

    def test_unfrozen_tree_lists_leaves(self):
        tree = make_tree(["1", "2"], freeze=False)

        lines = tree.to_graphviz().splitlines()

        assert len(lines) == 4
        assert "->" not in "".join(lines)
