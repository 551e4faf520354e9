import random

import pytest

from tree import Tree


def _height(tree, node):
    if node is None:
        return 0
    return 1 + max(_height(tree, tree.left(node)), _height(tree, tree.right(node)))


def _inorder_values(tree, node):
    if node is None:
        return []
    return _inorder_values(tree, tree.left(node)) + [tree.value(node)] + _inorder_values(tree, tree.right(node))


@pytest.mark.parametrize("n", [1, 2, 7, 15, 31])
def test_bst_is_balanced_and_ordered(n):
    values = random.Random(n).sample(range(1, 100), n)
    tree = Tree.generate_bst(values)

    assert len(tree) == n
    assert tree.root_id == 0
    assert _inorder_values(tree, tree.root_id) == sorted(values)
    assert _height(tree, tree.root_id) == n.bit_length()


def test_bst_ids_are_preorder():
    tree = Tree.generate_bst([1, 2, 3])
    root = tree.get(tree.root_id)
    assert (root.id, root.value) == (0, 2)
    assert (root.left, root.right) == (1, 2)


def test_random_tree_uses_every_value_once():
    values = [8, 3, 5, 1, 9, 7]
    tree = Tree.generate_random(values, rng=random.Random(1))

    assert sorted(tree.value(i) for i in tree.nodes) == sorted(values)
    children = [c for node in tree.nodes.values() for c in node.children()]
    assert len(children) == len(values) - 1
    assert len(set(children)) == len(children)
    assert tree.root_id not in children


def test_empty_tree():
    tree = Tree.generate_random([])
    assert tree.is_empty()
    assert tree.get(None) is None
    assert len(Tree.generate_bst([])) == 0


def test_dict_round_trip():
    tree = Tree.generate_random([4, 2, 6, 1], rng=random.Random(3))
    clone = Tree.from_dict(tree.to_dict())
    assert clone.root_id == tree.root_id
    assert clone.nodes == tree.nodes
