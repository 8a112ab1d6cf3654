"""Interfaces and exceptions shared by bayespipe's components.
"""

from abc import abstractmethod
from abc import ABCMeta

from sklearn.base import BaseEstimator


def annotate(obj, metadata=None):
    base_metadata = getattr(obj, '__metadata__', {})
    if metadata is not None:
        base_metadata.update(metadata)
        obj.__metadata__ = base_metadata
    return base_metadata


class BayespipeError(Exception):
    """Base class of all errors raised by the pipeline's steps.
    """


class FileReadError(BayespipeError, IOError):
    """Raised when a dataset file is missing, malformed or unreadable.
    """


class TrainingError(BayespipeError, ValueError):
    """Raised when a classifier cannot be built from a dataset.
    """


class StorageError(BayespipeError, IOError):
    """Raised when a model file cannot be written or read back.
    """


class PredictError(BayespipeError):
    """Raised to indicate that some condition made it impossible to
    deliver a prediction.
    """
    def __init__(self, error_message, error_code=-1):
        super().__init__(error_message, error_code)
        self.error_message = error_message
        self.error_code = error_code

    def __str__(self):
        return "{} ({})".format(self.error_message, self.error_code)


class DatasetLoader(metaclass=ABCMeta):
    """A :class:`~bayespipe.interfaces.DatasetLoader` is responsible for
    loading datasets for use in training, classification and
    evaluation.
    """

    @abstractmethod
    def __call__(self):
        """Loads the data and returns it.

        :return:
          A :class:`~bayespipe.dataset.Dataset`.  Its class index is
          set to the last attribute unless the loader was told
          otherwise.

        :raises:
          :class:`FileReadError` if the source is missing or can't be
          parsed.
        """


class Model(BaseEstimator, metaclass=ABCMeta):
    """A :class:`Model` can be :meth:`~Model.fit` to data and can be
    used to :meth:`~Model.predict` data.

    :class:`Model` corresponds to the *estimators* interface of
    scikit-learn.
    """

    @abstractmethod
    def fit(self, X, y):
        """Fit to a data frame *X* and a target array *y*.

        :return: self
        """

    @abstractmethod
    def predict(self, X):
        """Predict classes for a data frame *X* with n rows.

        :return:
          A numpy array of length n with the predicted class labels.
        """

    def predict_proba(self, X):
        """Predict probabilities for a data frame *X* with n rows.

        :return:
          A numpy array of shape n x c with class probabilities per
          row.

        :raises:
          :class:`NotImplementedError` if not applicable.
        """
        raise NotImplementedError()  # pragma: no cover


class ModelPersister(metaclass=ABCMeta):
    @abstractmethod
    def read(self):
        """Returns the persisted :class:`Model` instance.

        :raises:
          :class:`StorageError` if no usable model is available.
        """

    @abstractmethod
    def write(self, model):
        """Persists a :class:`Model`, replacing whatever was persisted
        before.

        :raises:
          :class:`StorageError` if the model can't be written.
        """
