"""Utilities for testing the performance of a trained model.
"""

import sys

from docopt import docopt
from sklearn.metrics import get_scorer

from .util import args_from_config
from .util import initialize_config
from .util import logger
from .util import timer


@args_from_config
def test(dataset_loader_test, model_persister, scoring=None):

    with timer(logger.info, "Loading data"):
        dataset = dataset_loader_test().labeled()

    with timer(logger.info, "Reading model"):
        model = model_persister.read()

    if not (hasattr(model, 'score') or scoring is not None):
        raise ValueError(
            "Your model doesn't seem to implement a 'score' method.  You may "
            "want to define a 'scoring' option in the configuration."
            )

    X, y = dataset.X, dataset.y
    with timer(logger.info, "Applying model"):
        scores = []
        if scoring is not None:
            if not isinstance(scoring, dict):
                scoring = {'score': scoring}
            for key, scorer in scoring.items():
                scorer = get_scorer(scorer)
                scores.append("{}: {}".format(key, scorer(model, X, y)))
        else:
            scores.append("score: {}".format(model.score(X, y)))

    logger.info("Score: {}.".format('\n       '.join(scores)))
    return scores


def test_cmd(argv=sys.argv[1:]):  # pragma: no cover
    """\
Test a model.

Uses 'dataset_loader_test' and 'model_persister' from the
configuration to load a labeled test dataset to test the accuracy of
the persisted model with.

Usage:
  bayespipe-test [options]

Options:
  -h --help                  Show this screen.
"""
    docopt(test_cmd.__doc__, argv=argv)
    initialize_config(__mode__='fit')
    test()
