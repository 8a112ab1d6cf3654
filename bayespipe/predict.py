"""Utilities for labeling new data with a trained model.
"""

import sys

from docopt import docopt

from .interfaces import PredictError
from .util import args_from_config
from .util import initialize_config
from .util import logger
from .util import timer


def classify_all(model, dataset):
    """Return a copy of *dataset* whose class values are the
    predictions of *model*.  *dataset* itself is left untouched.

    The classes a fitted model knows (its ``classes_``) are added to
    the declared values of the class attribute, so that data read
    from tables that don't list every class can still be labeled.

    :raises:
      :class:`~bayespipe.interfaces.PredictError` if *dataset* has no
      class attribute or a prediction isn't one of its declared
      values.
    """
    if dataset.class_attribute is None:
        raise PredictError(
            "Cannot label '{}': class attribute is undefined".format(
                dataset.relation))

    with timer(logger.info, "Applying model"):
        predictions = model.predict(dataset.X)

    classes = getattr(model, 'classes_', None)
    if classes is not None:
        dataset = dataset.with_class_declared(classes)

    try:
        return dataset.with_class_values(predictions)
    except ValueError as exc:
        raise PredictError(str(exc)) from exc


@args_from_config
def classify(dataset_loader_unknown, model_persister):
    with timer(logger.info, "Loading data"):
        dataset = dataset_loader_unknown()

    with timer(logger.info, "Reading model"):
        model = model_persister.read()

    labeled = classify_all(model, dataset)
    print("\n New, labeled = \n{}".format(labeled))
    return labeled


def classify_cmd(argv=sys.argv[1:]):  # pragma: no cover
    """\
Label a dataset with the persisted model.

Uses 'dataset_loader_unknown' and 'model_persister' from the
configuration to load unlabeled data and the model to classify it
with, then prints the labeled data.

Usage:
  bayespipe-classify [options]

Options:
  -h --help                  Show this screen.
"""
    docopt(classify_cmd.__doc__, argv=argv)
    initialize_config(__mode__='classify')
    classify()
