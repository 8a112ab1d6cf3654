"""Utilities for fitting models.
"""

import sys

from datetime import datetime
from docopt import docopt
from sklearn.metrics import get_scorer

from .interfaces import annotate
from .interfaces import TrainingError
from .model import NaiveBayes
from .util import args_from_config
from .util import initialize_config
from .util import logger
from .util import timer


def train(dataset, model=None):
    """Fit *model* to the rows of *dataset* that have a class value.

    If *model* is ``None``, a :class:`~bayespipe.model.NaiveBayes`
    with supervised discretization of numeric attributes is used.

    :raises:
      :class:`~bayespipe.interfaces.TrainingError` if the dataset is
      empty, has no nominal class attribute, or the model rejects it.
    """
    if model is None:
        model = NaiveBayes(use_supervised_discretization=True)

    if dataset.num_instances == 0:
        raise TrainingError(
            "Cannot train on '{}': dataset is empty".format(dataset.relation))
    class_attribute = dataset.class_attribute
    if class_attribute is None:
        raise TrainingError(
            "Cannot train on '{}': class attribute is undefined".format(
                dataset.relation))
    if not class_attribute.is_nominal:
        raise TrainingError(
            "Cannot handle {} class attribute '{}'".format(
                class_attribute.type, class_attribute.name))

    labeled = dataset.labeled()
    if labeled.num_instances == 0:
        raise TrainingError(
            "Cannot train on '{}': no instance has a class value".format(
                dataset.relation))
    if labeled.num_instances < dataset.num_instances:
        logger.info("Ignoring {} instances without class value.".format(
            dataset.num_instances - labeled.num_instances))

    with timer(logger.info, "Fitting model"):
        try:
            model.fit(labeled.X, labeled.y)
        except ValueError as exc:
            raise TrainingError(
                "Cannot train on '{}': {}".format(dataset.relation, exc)
                ) from exc

    annotate(model, {
        'train_timestamp': datetime.now().isoformat(),
        'relation': dataset.relation,
        'num_instances': labeled.num_instances,
        })
    return model


def _scorer(model, scoring):
    if scoring is not None:
        return get_scorer(scoring)
    if not hasattr(model, 'score'):
        raise ValueError(
            "Your model doesn't seem to implement a 'score' method.  You may "
            "want to define a 'scoring' option in the configuration."
            )

    def scorer(model, X, y):
        return model.score(X, y)
    return scorer


@args_from_config
def fit(dataset_loader_train, model, model_persister, persist=True,
        dataset_loader_test=None, evaluate=False, scoring=None):

    if evaluate:
        scorer = _scorer(model, scoring)

    with timer(logger.info, "Loading data"):
        dataset = dataset_loader_train()

    model = train(dataset, model)

    if evaluate:
        labeled = dataset.labeled()
        with timer(logger.debug, "Evaluating model on train set"):
            score_train = scorer(model, labeled.X, labeled.y)
            annotate(model, {'score_train': score_train})
            logger.info("Train score: {}".format(score_train))

        if dataset_loader_test is not None:
            labeled_test = dataset_loader_test().labeled()
            with timer(logger.debug, "Evaluating model on test set"):
                score_test = scorer(model, labeled_test.X, labeled_test.y)
                annotate(model, {'score_test': score_test})
                logger.info("Test score:  {}".format(score_test))

    if persist:
        with timer(logger.info, "Writing model"):
            model_persister.write(model)

    return model


def fit_cmd(argv=sys.argv[1:]):  # pragma: no cover
    """\
Fit a model and save it to disk.

Will use 'dataset_loader_train', 'model', and 'model_persister' from
the configuration file, to load a dataset to train a model with, and
persist it.

Usage:
  bayespipe-fit [options]

Options:
  -n --no-save              Don't persist the fitted model to disk.

  -e --evaluate             Evaluate fitted model on train and test set and
                            print out results.

  -h --help                 Show this screen.
"""
    arguments = docopt(fit_cmd.__doc__, argv=argv)
    initialize_config(__mode__='fit')
    fit(
        persist=not arguments['--no-save'],
        evaluate=arguments['--evaluate'],
        )
