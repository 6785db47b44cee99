import gc

import pytest

from cannontree.btree import BTree
from cannontree.node import BNode, Entry
from tests.util import leaf, keys_of

test_tree = BTree(3)

"""
Most of the insert/remove/grow behaviour of BNode shows through the ops in
BTree, the cases here pin down the local node primitives.
"""


def test_entry_order_by_key():
    assert Entry(1, 'z') < Entry(2, 'a')
    assert Entry(1, 'a') == Entry(1, 'b')
    assert Entry(3) > 2 and Entry(3) == 3
    assert str(Entry('k', 'v')) == '<k:v>'


def test_index_of_first_match():
    node = leaf(test_tree, 1, 4, 5, 9)
    assert node.index_of(0) == 0
    assert node.index_of(4) == 1
    assert node.index_of(6) == 3
    assert node.index_of(10) == 4
    assert node.holds(1, 4) and not node.holds(3, 6) and not node.holds(4, 10)


def test_children_link_back():
    left, right = leaf(test_tree, 1), leaf(test_tree, 3)
    parent = BNode(test_tree, contents=[Entry(2, 2)], children=[left, right])
    assert left.parent is parent and right.parent is parent
    assert parent.parent is None
    assert parent.child_index(right) == 1
    with pytest.raises(ValueError):
        parent.child_index(leaf(test_tree, 7))


def test_parent_is_weak():
    child = leaf(test_tree, 1)
    BNode(test_tree, children=[child])
    gc.collect()
    assert child.parent is None


def test_split_leaf():
    child = leaf(test_tree, 1, 2, 3)
    parent = BNode(test_tree, children=[child])
    sibling = parent.split_child(0)
    assert keys_of(parent) == [2]
    assert keys_of(child) == [1] and keys_of(sibling) == [3]
    assert parent.children == [child, sibling]
    assert child.parent is parent and sibling.parent is parent


def test_split_branch_moves_grandchildren():
    grandchildren = [leaf(test_tree, k) for k in (0, 2, 4, 6)]
    child = BNode(test_tree, contents=[Entry(k, k) for k in (1, 3, 5)], children=list(grandchildren))
    parent = BNode(test_tree, children=[child])
    sibling = parent.split_child(0)
    assert keys_of(parent) == [3]
    assert keys_of(child) == [1] and child.children == grandchildren[:2]
    assert keys_of(sibling) == [5] and sibling.children == grandchildren[2:]
    assert all(g.parent is child for g in grandchildren[:2])
    assert all(g.parent is sibling for g in grandchildren[2:])


def test_split_even_count():
    tree = BTree(4)
    child = leaf(tree, 1, 2, 3, 4)
    parent = BNode(tree, children=[child])
    sibling = parent.split_child(0)
    assert keys_of(parent) == [2]
    assert keys_of(child) == [1] and keys_of(sibling) == [3, 4]


def test_lateral_from_left():
    left, right = leaf(test_tree, 5, 7), leaf(test_tree, 12)
    parent = BNode(test_tree, contents=[Entry(10, 10)], children=[left, right])
    left.lateral(parent, 0, right, 1)
    assert keys_of(left) == [5] and keys_of(parent) == [7] and keys_of(right) == [10, 12]


def test_lateral_from_right():
    left, right = leaf(test_tree, 5), leaf(test_tree, 12, 14)
    parent = BNode(test_tree, contents=[Entry(10, 10)], children=[left, right])
    right.lateral(parent, 1, left, 0)
    assert keys_of(left) == [5, 10] and keys_of(parent) == [12] and keys_of(right) == [14]


def test_lateral_moves_child():
    donor_children = [leaf(test_tree, k) for k in (1, 3, 5)]
    donor = BNode(test_tree, contents=[Entry(2, 2), Entry(4, 4)], children=list(donor_children))
    target_children = [leaf(test_tree, k) for k in (7, 9)]
    target = BNode(test_tree, contents=[Entry(8, 8)], children=list(target_children))
    parent = BNode(test_tree, contents=[Entry(6, 6)], children=[donor, target])
    donor.lateral(parent, 0, target, 1)
    assert keys_of(parent) == [4]
    assert keys_of(target) == [6, 8]
    assert target.children[0] is donor_children[2]
    assert donor_children[2].parent is target
    assert donor.children == donor_children[:2]


def test_consolidate():
    grandchildren = [leaf(test_tree, k) for k in (1, 3, 5, 7)]
    left = BNode(test_tree, contents=[Entry(2, 2)], children=grandchildren[:2])
    right = BNode(test_tree, contents=[Entry(6, 6)], children=grandchildren[2:])
    parent = BNode(test_tree, contents=[Entry(4, 4)], children=[left, right])
    merged = parent.consolidate(0)
    assert merged is left
    assert keys_of(parent) == [] and parent.children == [left]
    assert keys_of(left) == [2, 4, 6]
    assert left.children == grandchildren
    assert all(g.parent is left for g in grandchildren)
    assert right.parent is None


def test_keeps_caller_lists():
    contents, children = [], []
    node = BNode(test_tree, contents=contents, children=children)
    node.contents.append(Entry(1, 1))
    assert contents == [Entry(1, 1)]
    assert node.children is children
