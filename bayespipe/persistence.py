""":class:`~bayespipe.interfaces.ModelPersister` implementations.
"""

import gzip
import os
import pickle
import tempfile

from .interfaces import annotate
from .interfaces import ModelPersister
from .interfaces import StorageError
from .util import logger


class File(ModelPersister):
    """A :class:`~bayespipe.interfaces.ModelPersister` that pickles a
    model into a single gzip-compressed file on the file system.

    Every :meth:`write` replaces the file's previous content.
    """

    def __init__(self, path):
        """
        :param str path:
          The *path* of the file that I will store the model in,
          e.g. ``/path/to/naiveBayes.model``.
        """
        self.path = path

    def read(self):
        if not os.path.exists(self.path):
            raise StorageError("No model file at {}".format(self.path))

        try:
            with gzip.open(self.path, 'rb') as f:
                model = pickle.load(f)
        except (OSError, EOFError, pickle.UnpicklingError,
                AttributeError, ImportError, ValueError) as exc:
            raise StorageError(
                "Could not read model from {}: {}".format(self.path, exc)
                ) from exc

        if not callable(getattr(model, 'predict', None)):
            raise StorageError(
                "{} does not contain a classifier but a {}".format(
                    self.path, type(model).__name__))
        logger.info("Read model from {}.".format(self.path))
        return model

    def write(self, model):
        path = os.path.abspath(self.path)
        annotate(model, {'path': path})
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                    dir=os.path.dirname(path),
                    prefix='.{}.'.format(os.path.basename(path)),
                    delete=False) as tmp:
                tmp_path = tmp.name
                with gzip.open(tmp, 'wb') as f:
                    pickle.dump(model, f)
            os.replace(tmp_path, path)
        except (OSError, AttributeError, TypeError,
                pickle.PicklingError) as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(
                "Could not write model to {}: {}".format(self.path, exc)
                ) from exc
        logger.info("Wrote model to {}.".format(self.path))


def persist(model, path):
    """Serialize *model* to *path*, overwriting an existing file.
    """
    File(path).write(model)


def reload(path):
    """Deserialize the model stored at *path*.
    """
    return File(path).read()
