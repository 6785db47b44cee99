import random

from cannontree.node import BNode, Entry


def leaf(tree, *keys):
    return BNode(tree, contents=[Entry(k, k) for k in keys])


def keys_of(node):
    return [it.key for it in node.contents]


def shuffled(keys, seed):
    keys = list(keys)
    random.Random(seed).shuffle(keys)
    return keys
