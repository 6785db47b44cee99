"""
Manual test driver: bulk inserts, removes and finds against a tree, printing the
outcome of each scenario.

    python -m cannontree             run every built-in scenario
    python -m cannontree ORDER N     N inserts and N finds on a tree of order ORDER
"""
import argparse
import sys

from cannontree.btree import BTree
from cannontree.constants import DEFAULT_ORDER
from cannontree.utils import format_tree, make_int_data

USAGE = ('USAGE: cannontree-test ORDER N\n'
         'Tests N inserts and N finds on a BTree of order ORDER.\n')


def do_inserts(data, tree):
    for key, value in data:
        tree.insert(key, value)


def do_removes(keys, tree):
    for key in keys:
        tree.remove(key)


def verify_finds(data, tree, out=None) -> list:
    """
    :return: keys whose stored value differs from the expected one.
    """
    wrong = []
    for key, value in data:
        found = tree.find(key)
        if found != value:
            wrong.append(key)
            if out is not None:
                print(found, file=out)
                print('ERROR: Value incorrect for key: {key}'.format(key=key), file=out)
    return wrong


def _stream(out):
    # resolved per call so that a redirected sys.stdout is honoured
    return sys.stdout if out is None else out


def _report_valid(tree, order, out):
    print('BTree is valid? {valid}'.format(valid=tree.is_valid(order)), file=out)


def small_btree_small_order(out=None):
    out = _stream(out)
    print('small_btree_small_order', file=out)
    data = [(1, 5), (4, 7), (5, 43), (-43, 3), (99, 2), (23, 7)]
    tree = BTree(3)
    print('Testing sequential data...', file=out)
    do_inserts(data, tree)
    verify_finds(data, tree, out)
    _report_valid(tree, 3, out)
    print('Proper value for key not in BTree? {absent}\n'.format(absent=tree.find(-1) is None), file=out)
    return tree


def generic_test(order, n, out=None, seed=None):
    out = _stream(out)
    tree = BTree(order)
    print('Testing sequential data...', file=out)
    data = make_int_data(n, random=False)
    do_inserts(data, tree)
    verify_finds(data, tree, out)
    _report_valid(tree, order, out)
    tree.clear()

    print('Testing random data...', file=out)
    data = make_int_data(n, random=True, seed=seed)
    do_inserts(data, tree)
    verify_finds(data, tree, out)
    _report_valid(tree, order, out)
    print(file=out)
    return tree


def large_btree_small_order(out=None, seed=None):
    out = _stream(out)
    print('large_btree_small_order', file=out)
    return generic_test(3, 2000, out, seed)


def huge_btree_large_order(out=None, seed=None):
    out = _stream(out)
    print('huge_btree_large_order', file=out)
    return generic_test(DEFAULT_ORDER, 200000, out, seed)


def sequential_remove_test(out=None):
    out = _stream(out)
    print('sequential_remove_test', file=out)
    data = [(39, 5), (4, 7), (5, 43), (52, 3), (99, 2), (23, 7), (16, 2),
            (9, 4), (55, 1), (85, 3), (100, 3), (44, 14), (33, 4), (101, 54)]
    tree = BTree(3)
    do_inserts(data, tree)
    print(format_tree(tree), file=out)
    for key in (23, 16, 100, 99, 101):
        tree.remove(key)
        print('\n_________________after remove({key})_________________'.format(key=key), file=out)
        print(format_tree(tree), file=out)
        _report_valid(tree, 3, out)
    tree.clear()
    return tree


def _parser():
    parser = argparse.ArgumentParser(prog='cannontree-test', usage=USAGE, add_help=False)
    parser.add_argument('params', nargs='*')
    return parser


def main(argv=None, out=None) -> int:
    out = _stream(out)
    args, unknown = _parser().parse_known_args(argv)
    if unknown:
        print(USAGE, file=out)
        return -1
    if not args.params:
        small_btree_small_order(out)
        large_btree_small_order(out)
        huge_btree_large_order(out)
        sequential_remove_test(out)
        return 0
    if len(args.params) != 2:
        print(USAGE, file=out)
        return -1
    try:
        order, n = int(args.params[0]), int(args.params[1])
        generic_test(order, n, out)
    except ValueError:  # not a number, or an order below the minimum
        print(USAGE, file=out)
        return -1
    return 0
