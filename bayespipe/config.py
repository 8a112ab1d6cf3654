from copy import deepcopy
import logging
from logging.config import dictConfig
import os
import sys
import threading


BAYESPIPE_CONFIG_ERROR = """
  Maybe you forgot to set the environment variable BAYESPIPE_CONFIG
  to point to your configuration file, or to pass the dataset and
  model paths on the command line?
"""


class Config(dict):
    """A dictionary that represents the pipeline's configuration.

    Tries to send a more user friendly message in case of KeyError.
    """
    initialized = False

    def __getitem__(self, name):
        try:
            return super(Config, self).__getitem__(name)
        except KeyError:
            raise KeyError(
                "The required key '{}' was not found in your "
                "configuration. {}".format(name, BAYESPIPE_CONFIG_ERROR))


_config = Config()


class ComponentHandler:
    key = '__factory__'

    def __init__(self, config):
        self.config = config
        self.components = []

    def __call__(self, name, props):
        from .util import resolve_dotted_name
        specification = props.copy()
        factory_dotted_name = specification.pop(self.key)
        factory = resolve_dotted_name(factory_dotted_name)
        component = factory(**specification)
        self.components.append(component)
        return component

    def finish(self):
        for component in self.components:
            if hasattr(component, 'initialize_component'):
                component.initialize_component(self.config)


class CopyHandler:
    key = '__copy__'

    def __init__(self, configs):
        self.configs = configs

    @staticmethod
    def _resolve(configs, dotted_path):
        for config in configs[::-1]:
            value = config
            for part in dotted_path.split('.'):
                try:
                    value = value[part]
                except KeyError:
                    break
            else:
                return value
        else:
            raise KeyError(dotted_path)

    def __call__(self, name, props):
        value = deepcopy(self._resolve(self.configs, props[self.key]))
        if len(props) > 1:
            value.update(props)
            del value[self.key]
        return value


def _run_config_handlers_recursive(props, handlers):
    if isinstance(props, dict):
        items = tuple(props.items())
    elif isinstance(props, (list, tuple)):
        items = tuple(enumerate(props))
    else:
        return

    for key, value in items:
        if isinstance(value, (list, tuple)):
            _run_config_handlers_recursive(value, handlers)
        elif isinstance(value, dict):
            _run_config_handlers_recursive(value, handlers)
            for name, handler in handlers.items():
                if name in value:
                    value = props[key] = handler(str(key), value)


def _run_config_handlers(config, handlers):
    wrapped_config = {'root': config}
    _run_config_handlers_recursive(wrapped_config, handlers)
    for handler in handlers.values():
        if hasattr(handler, 'finish'):
            handler.finish()
    return wrapped_config['root']


def _initialize_logging(config):
    if 'logging' in config:
        dictConfig(config['logging'])
    else:
        logging.basicConfig(level=logging.DEBUG)


def process_config(*configs):
    """Merge *configs* left to right, resolve their ``__copy__``
    entries, then instantiate their ``__factory__`` components.
    """
    config_final = {}

    for config in configs:
        config_final.update(config)
        _run_config_handlers(
            config_final, {CopyHandler.key: CopyHandler([config_final])})

    _run_config_handlers(
        config_final, {ComponentHandler.key: ComponentHandler(config_final)})
    _initialize_logging(config_final)
    return config_final


def _read_config_file(fname):
    with open(fname) as f:
        return eval(f.read(), {
            'environ': os.environ,
            'here': os.path.abspath(os.path.dirname(fname)),
            })


_get_config_lock = threading.RLock()


def get_config(**extra):
    with _get_config_lock:
        config = _get_config(**extra)
    return config


def _get_config(**extra):
    if not _config.initialized:
        _config.update(extra)
        _config.initialized = True
        configs = []
        fnames = os.environ.get('BAYESPIPE_CONFIG')
        if fnames is not None:
            for fname in (fname.strip() for fname in fnames.split(',')):
                sys.path.insert(0, os.path.dirname(fname))
                configs.append(_read_config_file(fname))
        _config.update(process_config(_config, *configs))
    return _config


def initialize_config(**extra):
    if _config.initialized:
        raise RuntimeError("Configuration was already initialized")
    return get_config(**extra)
