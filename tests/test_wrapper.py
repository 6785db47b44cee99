import io
import logging

import pytest

import cannontree
from cannontree.btree import BTree
from cannontree.wrapper import log_wrapper, close_log


@pytest.fixture
def logged_tree():
    tree = log_wrapper(BTree(3), ('insert', 'find', '__delitem__'), log_mode='stream')
    yield tree
    close_log(tree)


def test_calls_are_logged(logged_tree, caplog):
    with caplog.at_level(logging.DEBUG, logger='BTree'):
        logged_tree.insert(1, 2)
        assert logged_tree.find(1) == 2
    assert 'Called: insert(1,2)' in caplog.text
    assert 'Called: find(1)' in caplog.text


def test_exception_is_logged_and_raised(logged_tree, caplog):
    with caplog.at_level(logging.DEBUG, logger='BTree'):
        with pytest.raises(KeyError):
            del logged_tree[42]
    assert 'KeyError' in caplog.text


def test_original_class_untouched(logged_tree):
    assert isinstance(logged_tree, BTree)
    assert type(logged_tree) is not BTree
    assert hasattr(type(logged_tree).insert, '__wrapped__')
    assert not hasattr(BTree.insert, '__wrapped__')
    assert BTree(3).insert(1, 1)


def test_wrapped_tree_keeps_working(logged_tree):
    for key in range(50):
        logged_tree.insert(key, key)
    for key in range(0, 50, 2):
        logged_tree.remove(key)
    assert logged_tree.is_valid(3)
    assert len(logged_tree) == 25


def test_open_tree_with_log():
    tree = cannontree.open_tree(3, thread_safe=True, log='stream')
    try:
        assert tree.insert('k', 'v')
        assert tree.find('k') == 'v'
        assert isinstance(tree, cannontree.SharedStorage)
    finally:
        tree.close_log()


def test_unknown_log_mode():
    with pytest.raises(ValueError):
        log_wrapper(BTree(3), ('insert',), log_mode='carrier-pigeon')


def test_two_wrapped_trees_log_once_each():
    first = log_wrapper(BTree(3), ('insert',), log_mode='stream')
    second = log_wrapper(BTree(3), ('insert',), log_mode='stream')
    try:
        assert first._logger is not second._logger
        assert len(first._logger.handlers) == 1 and len(second._logger.handlers) == 1
        streams = [io.StringIO(), io.StringIO()]
        first._logger.handlers[0].setStream(streams[0])
        second._logger.handlers[0].setStream(streams[1])
        first.insert(1, 1)
        assert streams[0].getvalue().count('Called: insert(1,1)') == 1
        assert streams[1].getvalue() == ''
    finally:
        close_log(first)
        close_log(second)


def test_close_log_releases_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    tree = cannontree.open_tree(3, log='local')
    handler = tree._logger.handlers[0]
    tree.insert(5, 'five')
    tree.close_log()
    assert tree._logger.handlers == []
    assert handler.stream is None
    assert 'Called: insert(5,' in (tmp_path / 'log.log').read_text()
    # the tree itself keeps working without a handler
    assert tree.find(5) == 'five'
