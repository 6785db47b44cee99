import collections
import logging
import math
from typing import Iterable

from cannontree.constants import TreeConf, DEFAULT_ORDER, MIN_ORDER, DEFAULT_LOGGER_NAME
from cannontree.node import BNode, Entry

logger = logging.getLogger(DEFAULT_LOGGER_NAME)


class ConfigurationError(ValueError):
    """Raise when a tree is built with an unusable order"""
    pass


class InvariantViolation(AssertionError):
    """Raise by validation when the node graph breaks a B-tree invariant"""
    pass


class LevelOrder(object):
    """
    Restartable breadth-first view of a tree, yields (node, depth) pairs.
    Every iteration starts again from the current root.
    """
    __slots__ = ('_tree',)

    def __init__(self, tree):
        self._tree = tree

    def __iter__(self):
        root = self._tree.root
        if root is None:
            return
        queue = collections.deque([(root, 0)])
        while queue:
            node, depth = queue.popleft()
            yield node, depth
            queue.extend((child, depth + 1) for child in node.children)


class BTree(object):
    """
    In-memory B tree used as an ordered dictionary. A node holds at most
    `order - 1` entries and `order` children, every node but the root keeps at
    least `ceil(order / 2) - 1` entries. Google it for more details about B-Tree.
    """
    __slots__ = ('_tree_conf', '_root', '_size')
    BRANCH = LEAF = BNode

    def __init__(self, order: int = DEFAULT_ORDER):
        if isinstance(order, bool) or not isinstance(order, int) or order < MIN_ORDER:
            raise ConfigurationError('order of b-tree must be an integer >= {min}, got {order!r}'.format(
                min=MIN_ORDER, order=order))
        self._tree_conf = TreeConf(order=order, min_elements=math.ceil(order / 2) - 1, max_elements=order - 1)
        self._root = None
        self._size = 0

    def _locate(self, key):
        """
        Walk down from the root.
        :return: (node, index) where the key lives, or (None, None) if absent.
        """
        current = self._root
        while current is not None:
            index = current.index_of(key)
            if current.holds(index, key):
                return current, index
            current = current.children[index] if current.children else None
        return None, None

    def _replace_root(self, node):
        self._root = node
        if node is None:
            logger.debug('Last entry removed, tree is empty.')
        else:
            node.parent = None
            logger.debug('Root collapsed, tree height shrank to {height}.'.format(height=self.height))

    def find(self, key, default=None):
        """
        :param key: key expected to be searched in the tree.
        :param default: if key doesn't exist, return default.
        :return: value corresponding to the key if key exists.
        """
        node, index = self._locate(key)
        if node is None:
            return default
        return node.contents[index].value

    get = find

    def _insert(self, node, key, value, override) -> bool:
        index = node.index_of(key)
        if node.holds(index, key):
            if override:
                node.contents[index].value = value
            return False
        if not node.children:
            node.contents.insert(index, Entry(key, value))
            return True
        child = node.children[index]
        inserted = self._insert(child, key, value, override)
        if len(child.contents) >= self.order:
            node.split_child(index)
        return inserted

    def insert(self, key, value, override=False) -> bool:
        """
        :param key: key to be inserted
        :param value: value to be set corresponding to the key
        :param override: if override is true and key has existed, the new
                         value will override the old one, otherwise the
                         existing entry is left untouched.
        :return: True if a new entry was added.
        """
        if self._root is None:
            self._root = self.LEAF(self)
        inserted = self._insert(self._root, key, value, override)
        if len(self._root.contents) >= self.order:
            self._root = self.BRANCH(self, children=[self._root])
            self._root.split_child(0)
            logger.debug('Root split, tree height grew to {height}.'.format(height=self.height))
        if inserted:
            self._size += 1
        return inserted

    def multi_insert(self, pairs: Iterable, override=False) -> int:
        """
        Insert a batch of key-value pairs at one time.
        :return: number of new entries.
        """
        if not isinstance(pairs, Iterable):
            raise TypeError('pairs should be a iterable object')
        if isinstance(pairs, dict):
            pairs = pairs.items()
        return sum(1 for key, value in pairs if self.insert(key, value, override))

    def multi_read(self, keys: Iterable) -> dict:
        """
        :param keys: keys need to read from the tree.
        :return: dictionary map from keys to values.
        """
        return {key: self.find(key) for key in keys}

    def remove(self, key) -> bool:
        """
        Remove target key from the tree, do nothing if it's absent.
        :return: True if an entry was removed.
        """
        node, index = self._locate(key)
        if node is None:
            return False
        node.remove(index)
        self._size -= 1
        return True

    def clear(self):
        """Drop every node, the tree becomes empty."""
        self._root = None
        self._size = 0
        logger.debug('Tree cleared.')

    def traverse(self) -> LevelOrder:
        """Level-order (node, depth) pairs for printing, starting from the root."""
        return LevelOrder(self)

    def validate(self, order: int = None):
        """
        Check every structural invariant of the tree against `order`.
        :raise InvariantViolation: on the first broken invariant.
        """
        order = order or self.order
        minimum = math.ceil(order / 2) - 1
        if self._root is None:
            return
        if self._root.parent is not None:
            raise InvariantViolation('root {root!r} has a parent'.format(root=self._root))
        leaf_depths = set()

        def _check(node, depth, low, high):
            contents = node.contents
            if len(contents) > order - 1:
                raise InvariantViolation('{node!r} holds {n} entries, more than {max}'.format(
                    node=node, n=len(contents), max=order - 1))
            if node is not self._root and len(contents) < minimum:
                raise InvariantViolation('{node!r} holds {n} entries, less than {min}'.format(
                    node=node, n=len(contents), min=minimum))
            for prev, cur in zip(contents, contents[1:]):
                if not prev.key < cur.key:
                    raise InvariantViolation('{node!r} is not strictly sorted'.format(node=node))
            if contents and low is not None and not low < contents[0].key:
                raise InvariantViolation('{node!r} has a key not greater than {low!r}'.format(node=node, low=low))
            if contents and high is not None and not contents[-1].key < high:
                raise InvariantViolation('{node!r} has a key not less than {high!r}'.format(node=node, high=high))

            if not node.children:
                leaf_depths.add(depth)
                if len(leaf_depths) > 1:
                    raise InvariantViolation('leaves found at depths {depths}'.format(depths=sorted(leaf_depths)))
                return
            if len(node.children) != len(contents) + 1 or not contents:
                raise InvariantViolation('{node!r} has {n} children for {m} entries'.format(
                    node=node, n=len(node.children), m=len(contents)))
            bounds = [low] + [it.key for it in contents] + [high]
            for i, child in enumerate(node.children):
                if child.parent is not node:
                    raise InvariantViolation('{child!r} does not link back to {node!r}'.format(
                        child=child, node=node))
                _check(child, depth + 1, bounds[i], bounds[i + 1])

        _check(self._root, 0, None, None)

    def is_valid(self, order: int = None) -> bool:
        """
        :param order: order to check occupancy against, the tree's own by default.
        :return: False if any invariant is broken.
        """
        try:
            self.validate(order)
        except InvariantViolation as error:
            logger.warning('Invalid B-tree: {error}'.format(error=error))
            return False
        return True

    def __contains__(self, key):
        """Support for keyword 'in' operator."""
        return self._locate(key)[0] is not None

    def __getitem__(self, key):
        node, index = self._locate(key)
        if node is None:
            raise KeyError(key)
        return node.contents[index].value

    def __setitem__(self, key, value):
        self.insert(key, value, override=True)

    def __delitem__(self, key):
        if not self.remove(key):
            raise KeyError('{key} not in {self}'.format(key=key, self=self.__class__.__name__))

    def __len__(self):
        """Support for len() built-in function."""
        return self._size

    def __repr__(self):
        if self._root is None:
            return '<{name} order={order} empty>'.format(name=self.__class__.__name__, order=self.order)
        return '\n'.join(('  ' * depth) + repr(node) for node, depth in self._walk_depth_first())

    def _walk_depth_first(self):
        def recurse(node, depth):
            yield node, depth
            for child in node.children:
                yield from recurse(child, depth + 1)

        return recurse(self._root, 0)

    @property
    def root(self):
        return self._root

    @property
    def tree_conf(self) -> TreeConf:
        return self._tree_conf

    @property
    def order(self):
        return self._tree_conf.order

    @order.setter
    def order(self, value):
        raise RuntimeError('order of b-tree is read only')

    @property
    def min_elements(self):
        """Minimum number of elements in each non-root node."""
        return self._tree_conf.min_elements

    @property
    def height(self):
        """Number of levels, 0 for an empty tree."""
        height, node = 0, self._root
        while node is not None:
            height += 1
            node = node.children[0] if node.children else None
        return height
