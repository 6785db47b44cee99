from collections import namedtuple

__all__ = ['DEFAULT_ORDER', 'MIN_ORDER', 'DEFAULT_LOGGER_NAME', 'METHODS_TO_LOG', 'TreeConf']

# default branching factor, wide enough to keep a node inside a few cache lines
DEFAULT_ORDER = 64

# smallest order where splitting and merging make sense (min occupancy = 1)
MIN_ORDER = 3

DEFAULT_LOGGER_NAME = 'cannontree'

METHODS_TO_LOG = (
    'insert',
    'remove',
    'find',
    'clear',
    'is_valid'
)

TreeConf = namedtuple('TreeConf', [
    'order',  # order of B tree, maximum number of children
    'min_elements',  # minimum entries of every non-root node
    'max_elements',  # maximum entries of every node
])
