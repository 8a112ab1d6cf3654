from contextlib import contextmanager
import os
from unittest.mock import MagicMock
from unittest.mock import patch


@contextmanager
def change_cwd(path):
    cwd = os.getcwd()
    if path:
        os.chdir(path)
    try:
        yield
    finally:
        os.chdir(cwd)


def run_smoke_tests_with_config(config_fname, run=None, raise_errors=True,
                                func_kwargs=None, cwd=True):
    from bayespipe.util import logger  # don't break coverage
    from bayespipe.util import timer

    if func_kwargs is None:
        func_kwargs = {}

    print("Running functional tests for {}".format(config_fname))

    with patch.dict('os.environ', {'BAYESPIPE_CONFIG': config_fname}):
        from bayespipe.fit import fit
        from bayespipe.eval import test
        from bayespipe.predict import classify
        from bayespipe.pipeline import run as run_pipeline
        from bayespipe.util import initialize_config

        failed = []

        if cwd:
            cwd = change_cwd(os.path.dirname(config_fname))
        else:
            cwd = MagicMock()

        with cwd:
            initialize_config(__mode__='fit')
            for name, func in (('fit', fit), ('test', test),
                               ('classify', classify),
                               ('run', run_pipeline)):
                if run and name not in run:
                    continue
                try:
                    this_kwargs = func_kwargs.get(name, {})
                    with timer(logger.info, "Running {}".format(name)):
                        func(**this_kwargs)
                except Exception as e:
                    if raise_errors:
                        raise
                    failed.append((name, e))

    return failed
