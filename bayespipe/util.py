"""Assorted utilties.
"""

from contextlib import contextmanager
from functools import wraps
import logging
from importlib import import_module
from inspect import signature
from inspect import getcallargs
import sys
from time import time

from docopt import docopt

from . import __version__
from .config import get_config
from .config import initialize_config
from .config import BAYESPIPE_CONFIG_ERROR

logger = logging.getLogger('bayespipe')


def resolve_dotted_name(dotted_name):
    if ':' in dotted_name:
        module, name = dotted_name.split(':')
    else:
        module, name = dotted_name.rsplit('.', 1)

    attr = import_module(module)
    for name in name.split('.'):
        attr = getattr(attr, name)

    return attr


def args_from_config(func):
    """Decorator that injects parameters from the configuration.
    """
    func_args = signature(func).parameters

    @wraps(func)
    def wrapper(*args, **kwargs):
        config = get_config()
        for i, argname in enumerate(func_args):
            if len(args) > i or argname in kwargs:
                continue
            elif argname in config:
                kwargs[argname] = config[argname]
        try:
            getcallargs(func, *args, **kwargs)
        except TypeError as exc:
            msg = "{}\n{}".format(exc.args[0], BAYESPIPE_CONFIG_ERROR)
            exc.args = (msg,)
            raise exc
        return func(*args, **kwargs)

    wrapper.__wrapped__ = func
    return wrapper


@contextmanager
def timer(log=None, message=None):
    if log is not None:
        log("{}...".format(message))

    info = {}
    t0 = time()
    yield info

    info['elapsed'] = time() - t0
    if log is not None:
        log("{} done in {:.3f} sec.".format(message, info['elapsed']))


def version_cmd(argv=sys.argv[1:]):  # pragma: no cover
    """\
Print the version number of bayespipe.

Usage:
  bayespipe-version [options]

Options:
  -h --help                Show this screen.
"""
    docopt(version_cmd.__doc__, argv=argv)
    print(__version__)
