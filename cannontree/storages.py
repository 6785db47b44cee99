"""
- LocalStorage: the bare tree, for single-threaded callers.
- SharedStorage: the same tree guarded by a reader-writer lock. Every mutation holds
  the writer side for its whole duration, since rebalancing may touch any ancestor.
"""
from typing import Iterable

import rwlock

from cannontree.btree import BTree
from cannontree.constants import DEFAULT_ORDER

LocalStorage = BTree


class SharedStorage(object):
    """
    Thread-safe handle over a BTree.
    """
    __slots__ = ('_tree', '_lock')

    def __init__(self, order: int = DEFAULT_ORDER):
        self._tree = BTree(order)
        self._lock = rwlock.RWLock()

    @property
    def write_transaction(self):
        class WriteTransaction:
            def __enter__(_self):
                self._lock.writer_lock.acquire()

            def __exit__(_self, exc_type, exc_val, exc_tb):
                self._lock.writer_lock.release()

        return WriteTransaction()

    @property
    def read_transaction(self):
        class ReadTransaction:
            def __enter__(_self):
                self._lock.reader_lock.acquire()

            def __exit__(_self, exc_type, exc_val, exc_tb):
                self._lock.reader_lock.release()

        return ReadTransaction()

    def insert(self, key, value, override=False) -> bool:
        with self.write_transaction:
            return self._tree.insert(key, value, override)

    def multi_insert(self, pairs: Iterable, override=False) -> int:
        # one writer section for the whole batch
        with self.write_transaction:
            return self._tree.multi_insert(pairs, override)

    def remove(self, key) -> bool:
        with self.write_transaction:
            return self._tree.remove(key)

    def clear(self):
        with self.write_transaction:
            self._tree.clear()

    def find(self, key, default=None):
        with self.read_transaction:
            return self._tree.find(key, default)

    get = find

    def multi_read(self, keys: Iterable) -> dict:
        with self.read_transaction:
            return self._tree.multi_read(keys)

    def is_valid(self, order: int = None) -> bool:
        with self.read_transaction:
            return self._tree.is_valid(order)

    def traverse(self) -> list:
        """Snapshot of the level-order walk as (items, depth) pairs."""
        with self.read_transaction:
            return [(node.items(), depth) for node, depth in self._tree.traverse()]

    def __contains__(self, key):
        with self.read_transaction:
            return key in self._tree

    def __getitem__(self, key):
        with self.read_transaction:
            return self._tree[key]

    def __setitem__(self, key, value):
        with self.write_transaction:
            self._tree[key] = value

    def __delitem__(self, key):
        with self.write_transaction:
            del self._tree[key]

    def __len__(self):
        with self.read_transaction:
            return len(self._tree)

    def __repr__(self):
        with self.read_transaction:
            return repr(self._tree)

    @property
    def order(self):
        return self._tree.order
