"""
  This include some helper-functions for printing trees and generating test data.
"""
import random as _random


def format_entries(items) -> str:
    return ''.join('[{key}|{val}]'.format(key=key, val=val) for key, val in items)


def format_node(node) -> str:
    """
    Entries of a non-root node, each tagged with the first key of its parent.
    """
    parent = node.parent
    tag = '({key})'.format(key=parent.contents[0].key) if parent is not None and parent.contents else '()'
    return ''.join(tag + format_entries([item]) for item in node.items())


def format_tree(tree) -> str:
    """
    Render a tree level by level, one line per depth:
        (root)[2|2]
        (2)[1|1] (2)[3|3](2)[4|4]
    """
    lines = []
    for node, depth in tree.traverse():
        if depth == 0:
            lines.append('(root)' + format_entries(node.items()))
            continue
        if depth == len(lines):
            lines.append([])
        lines[depth].append(format_node(node))
    return '\n'.join(line if isinstance(line, str) else ' '.join(line) for line in lines)


def make_int_data(n: int, random: bool = False, seed=None) -> list:
    """
    :param n: number of pairs.
    :param random: False: pairs (i, i) for i in [0, n); True: pairs (r, r) for random r.
    :param seed: seed of the random generator, for repeatable data.
    """
    if not random:
        return [(i, i) for i in range(n)]
    rand = _random.Random(seed)
    data = []
    for _ in range(n):
        rand_val = rand.randrange(0, 0x7FFFFFFF)
        data.append((rand_val, rand_val))
    return data
