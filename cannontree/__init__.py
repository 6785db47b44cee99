from cannontree.btree import BTree, ConfigurationError, InvariantViolation
from cannontree.constants import DEFAULT_ORDER, METHODS_TO_LOG
from cannontree.storages import LocalStorage, SharedStorage
from cannontree.wrapper import log_wrapper, close_log

__version__ = '1.0.0'

__all__ = ('BTree', 'ConfigurationError', 'InvariantViolation', 'LocalStorage', 'SharedStorage', 'open_tree',
           'close_log')


def open_tree(order: int = DEFAULT_ORDER, **kwargs):
    """
    :param order: order of the underlying B tree.
    :param kwargs: 'thread_safe'=True: guard every call with a reader-writer lock
                   log mode: 'log'='local' (log in local file (log.log))
                             'log'='stream' (log to stderr)
                             'log'='tcp' or 'udp': log to concrete host & port
    """
    if kwargs.pop('thread_safe', False):
        tree = SharedStorage(order)
    else:
        tree = LocalStorage(order)
    log_mode = kwargs.pop('log', None)

    if log_mode == 'tcp' or log_mode == 'udp':
        host, port = kwargs.pop('host', None), kwargs.pop('port', None)
        if host is None or port is None:
            raise ValueError('Host and port of Log Socket should be specified')
        tree = log_wrapper(tree, METHODS_TO_LOG, log_mode=log_mode, host=host, port=port)
    elif log_mode is not None:
        tree = log_wrapper(tree, METHODS_TO_LOG, log_mode=log_mode)

    return tree
