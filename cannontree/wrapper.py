"""
Log wrapper records calls of selected tree operations along with their arguments and
time into a log handler. It's used like a function-wrapper on a live instance.
"""
import datetime
import functools
import logging
from logging import handlers as log_handlers

_log_file_name = 'log.log'

# if in debug mode
if __debug__:

    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.DEBUG)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called: ' + func.__name__ + '('
            # !r means call __repr__ only / !s means call __str__ only
            log += ','.join(['{0!r}'.format(a) for a in args[1:]] + ['{0!s}={1!r}'.format(k, v) for k, v in
                                                                     kwargs.items()])
            exception = None
            try:
                return func(*args, **kwargs)
            except Exception as error:
                exception = error
                raise
            finally:
                log += ')' if exception is None else ') {0}: {1}'.format(type(exception), exception)
                log += ' at {time}'.format(time=datetime.datetime.now().isoformat())
                logger.debug(log)

        return wrapper

else:
    def _log_wrapper(func, logger: logging.Logger):
        logger.setLevel(logging.INFO)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = 'Called: ' + func.__name__ + '('
            log += ','.join(['{0}'.format(a) for a in args[1:]] + ['{0}={1}'.format(k, v) for k, v in
                                                                   kwargs.items()])
            log += ') at {time}'.format(time=datetime.datetime.now().isoformat())
            logger.info(log)
            return func(*args, **kwargs)

        return wrapper


def _make_handler(log_mode, host, port) -> logging.Handler:
    if log_mode == 'tcp':
        return log_handlers.SocketHandler(host=host, port=port)
    elif log_mode == 'udp':
        return log_handlers.DatagramHandler(host=host, port=port)
    elif log_mode == 'stream':
        return logging.StreamHandler()
    elif log_mode == 'local':
        return logging.FileHandler(_log_file_name, mode='a')
    raise ValueError('Unknown log mode {mode!r}'.format(mode=log_mode))


def close_log(instance):
    """
    Detach and close the handlers bound to a wrapped instance, its calls are no longer logged.
    """
    logger = getattr(instance, '_logger', None)
    if logger is None:
        return
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def log_wrapper(instance, methods_to_log: tuple, log_mode='local', host=None, port=None):
    """
    :param instance: instance to be logged
    :param methods_to_log: methods of instance to be logged (both method name, parameters, time
                           of invoking will be logged)
    :param log_mode: 'local': log in local file (log.log)
                     'stream': log to stderr
                     'tcp' or 'udp': log to concrete host & port
    :param host: target host if log mode is 'tcp' or 'udp'
    :param port: port of target host if log mode is 'tcp' or 'udp'
    :return: wrapped instance, release its handler with close_log()
    """
    orig_cls = instance.__class__
    # one child logger per instance, so two wrapped trees never share handlers
    logger = logging.getLogger('{name}.{id:x}'.format(name=orig_cls.__name__, id=id(instance)))
    handler = _make_handler(log_mode, host, port)
    # an id may be reused by a new instance, drop what a collected one left behind
    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()
    logger.addHandler(handler)

    logged_methods = {method: _log_wrapper(getattr(orig_cls, method), logger)
                      for method in methods_to_log if hasattr(orig_cls, method)}

    # a slot-compatible subclass per instance, the original class stays untouched.
    # bind logger with the subclass, so as to close log-handler later.
    namespace = dict(logged_methods, __slots__=(), _logger=logger, close_log=close_log)
    instance.__class__ = type(orig_cls.__name__, (orig_cls,), namespace)
    return instance
