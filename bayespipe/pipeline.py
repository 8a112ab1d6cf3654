"""The load, train, persist, reload and classify workflow in one pass.
"""

import sys

from docopt import docopt

from .dataset import describe
from .dataset import loader_for_path
from .fit import train
from .persistence import File
from .predict import classify_all
from .util import args_from_config
from .util import initialize_config
from .util import logger
from .util import timer

UNKNOWN_FILE = 'testdata/unknown_data_teds.arff'
MODEL_FILE = 'testdata/naiveBayes.model'

IDLE = 'idle'
LOADED = 'loaded'
TRAINED = 'trained'
PERSISTED = 'persisted'
RELOADED = 'reloaded'
CLASSIFIED = 'classified'


class ClassifierPipeline:
    """Trains a classifier, stores it, reads it back and labels unseen
    data with the copy that was read back.

    The steps must run in the order :meth:`load`, :meth:`train`,
    :meth:`persist`, :meth:`reload`, :meth:`classify`.  :meth:`run`
    does all of them and returns to the idle state.
    """

    def __init__(self, dataset_loader_train, dataset_loader_unknown,
                 model_persister, model=None, file=None):
        """
        :param bayespipe.interfaces.DatasetLoader dataset_loader_train:
          Loads the labeled data to train with.

        :param bayespipe.interfaces.DatasetLoader dataset_loader_unknown:
          Loads the data to label.

        :param bayespipe.interfaces.ModelPersister model_persister:
          Stores and reads back the trained model.

        :param model:
          The estimator to train.  See :func:`bayespipe.fit.train` for
          the default.

        :param file:
          Where the summaries are printed to.  Defaults to
          ``sys.stdout``.
        """
        self.dataset_loader_train = dataset_loader_train
        self.dataset_loader_unknown = dataset_loader_unknown
        self.model_persister = model_persister
        self.model = model
        self.file = file
        self.state = IDLE
        self.dataset = None
        self.reloaded = None

    def _check(self, expected, new):
        if self.state != expected:
            raise RuntimeError(
                "Cannot go from state '{}' to '{}'".format(self.state, new))

    def load(self):
        self._check(IDLE, LOADED)
        with timer(logger.info, "Loading data"):
            self.dataset = self.dataset_loader_train()
        self.state = LOADED
        describe(self.dataset, file=self.file)
        return self.dataset

    def train(self):
        self._check(LOADED, TRAINED)
        self.model = train(self.dataset, self.model)
        self.state = TRAINED
        return self.model

    def persist(self):
        self._check(TRAINED, PERSISTED)
        with timer(logger.info, "Writing model"):
            self.model_persister.write(self.model)
        self.state = PERSISTED

    def reload(self):
        self._check(PERSISTED, RELOADED)
        with timer(logger.info, "Reading model"):
            self.reloaded = self.model_persister.read()
        self.state = RELOADED
        return self.reloaded

    def classify(self):
        self._check(RELOADED, CLASSIFIED)
        with timer(logger.info, "Loading unknown data"):
            unknown = self.dataset_loader_unknown()
        print("\n unclassified unknownInstances = \n{}".format(unknown),
              file=self.file)
        labeled = classify_all(self.reloaded, unknown)
        print("\n New, labeled = \n{}".format(labeled), file=self.file)
        self.state = CLASSIFIED
        return labeled

    def run(self):
        self.load()
        self.train()
        self.persist()
        self.reload()
        labeled = self.classify()
        self.state = IDLE
        return labeled


@args_from_config
def run(dataset_loader_train, dataset_loader_unknown, model_persister,
        model=None):
    pipeline = ClassifierPipeline(
        dataset_loader_train=dataset_loader_train,
        dataset_loader_unknown=dataset_loader_unknown,
        model_persister=model_persister,
        model=model,
        )
    return pipeline.run()


def run_cmd(argv=sys.argv[1:]):  # pragma: no cover
    """\
Train a Naive Bayes classifier, save it, load it back, and use it to
label unseen data.

The training data is read from <datafile>.  Without <datafile>, the
'dataset_loader_train' from the configuration is used.  The same goes
for --unknown and 'dataset_loader_unknown', and for --model and
'model_persister'; if neither is given, the unlabeled data is read
from testdata/unknown_data_teds.arff and the model is saved to
testdata/naiveBayes.model.

Usage:
  bayespipe-run [<datafile>] [options]

Options:
  --unknown=<path>          Dataset with the records to label.

  --model=<path>            File to save the trained model to.

  -h --help                 Show this screen.
"""
    arguments = docopt(run_cmd.__doc__, argv=argv)
    config = initialize_config(__mode__='run')
    if arguments['<datafile>'] is not None:
        config['dataset_loader_train'] = loader_for_path(
            arguments['<datafile>'])
    if (arguments['--unknown'] is not None or
            'dataset_loader_unknown' not in config):
        config['dataset_loader_unknown'] = loader_for_path(
            arguments['--unknown'] or UNKNOWN_FILE)
    if arguments['--model'] is not None or 'model_persister' not in config:
        config['model_persister'] = File(arguments['--model'] or MODEL_FILE)
    run()
