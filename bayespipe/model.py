"""Naive Bayes classification of tables that mix nominal and numeric
attributes.
"""

import numpy as np
import pandas
from pandas.api.types import is_bool_dtype
from pandas.api.types import is_numeric_dtype
from sklearn.base import BaseEstimator
from sklearn.base import ClassifierMixin
from sklearn.base import TransformerMixin
from sklearn.naive_bayes import CategoricalNB
from sklearn.preprocessing import KBinsDiscretizer
from sklearn.preprocessing import LabelEncoder
from sklearn.tree import DecisionTreeClassifier
from sklearn.utils.validation import check_is_fitted

from .interfaces import Model


class Discretizer(BaseEstimator, TransformerMixin):
    """Bins numeric columns into ordinal bin numbers.

    In *supervised* mode, the bin edges of a column are the split
    thresholds of an entropy-based
    :class:`~sklearn.tree.DecisionTreeClassifier` fit on that column
    alone, so that bins follow class boundaries.  Otherwise the range
    of the column is cut into *max_bins* bins of equal width by
    :class:`~sklearn.preprocessing.KBinsDiscretizer`.

    Missing values (NaN) are ignored while fitting and stay NaN when
    transformed.
    """

    def __init__(self, supervised=True, max_bins=10, min_samples_leaf=2):
        """
        :param bool supervised:
          Use the class values passed to :meth:`fit` to place the bin
          edges.

        :param int max_bins:
          Upper limit for the number of bins per column.

        :param int min_samples_leaf:
          Minimum number of training values per bin in supervised
          mode.
        """
        self.supervised = supervised
        self.max_bins = max_bins
        self.min_samples_leaf = min_samples_leaf

    def fit(self, X, y=None):
        X = np.asarray(X, dtype=float)
        if self.supervised and y is None:
            raise ValueError("Supervised discretization needs class values.")
        self.bin_edges_ = [
            self._fit_column(X[:, j], y) for j in range(X.shape[1])]
        self.n_bins_ = np.array(
            [len(edges) + 1 for edges in self.bin_edges_], dtype=int)
        return self

    def _fit_column(self, column, y):
        present = ~np.isnan(column)
        if not present.any():
            return np.array([])
        values = column[present]

        if not self.supervised:
            low, high = values.min(), values.max()
            if low == high:
                return np.array([])
            binner = KBinsDiscretizer(
                n_bins=self.max_bins, encode='ordinal', strategy='uniform')
            binner.fit(values.reshape(-1, 1))
            return binner.bin_edges_[0][1:-1]

        tree = DecisionTreeClassifier(
            criterion='entropy',
            max_leaf_nodes=self.max_bins,
            min_samples_leaf=self.min_samples_leaf,
            random_state=0,
            )
        tree.fit(values.reshape(-1, 1), np.asarray(y)[present])
        internal = tree.tree_.children_left != tree.tree_.children_right
        return np.unique(tree.tree_.threshold[internal])

    def transform(self, X):
        check_is_fitted(self, 'bin_edges_')
        X = np.asarray(X, dtype=float)
        if X.shape[1] != len(self.bin_edges_):
            raise ValueError(
                "Expected {} columns, got {}.".format(
                    len(self.bin_edges_), X.shape[1]))

        binned = np.full(X.shape, np.nan)
        for j, edges in enumerate(self.bin_edges_):
            column = X[:, j]
            present = ~np.isnan(column)
            # Tree splits send values equal to the threshold left.
            binned[present, j] = np.searchsorted(
                edges, column[present], side='left')
        return binned


def _is_numeric(column):
    return is_numeric_dtype(column) and not is_bool_dtype(column)


def _as_strings(column):
    return [None if pandas.isna(value) else str(value) for value in column]


class NaiveBayes(ClassifierMixin, Model):
    """A Naive Bayes classifier for :class:`pandas.DataFrame` input
    with nominal and numeric columns.

    Nominal columns are encoded by their categories.  Numeric columns
    are binned by a :class:`Discretizer` first.  Every attribute gets
    one extra category that collects missing values and values not
    seen during training.  The encoded table is then fit by
    :class:`sklearn.naive_bayes.CategoricalNB`.
    """

    def __init__(self, use_supervised_discretization=True, alpha=1.0,
                 max_bins=10):
        """
        :param bool use_supervised_discretization:
          Bin numeric attributes along class boundaries.  If *False*,
          numeric attributes are cut into *max_bins* bins of equal
          width.

        :param float alpha:
          Additive (Laplace) smoothing parameter.

        :param int max_bins:
          Upper limit for the number of bins per numeric attribute.
        """
        self.use_supervised_discretization = use_supervised_discretization
        self.alpha = alpha
        self.max_bins = max_bins

    def fit(self, X, y):
        X = pandas.DataFrame(X)
        self.enc_ = LabelEncoder()
        y = self.enc_.fit_transform(_as_strings(y))
        self.classes_ = self.enc_.classes_

        self.feature_names_ = list(X.columns)
        self.numeric_features_ = [
            name for name in X.columns if _is_numeric(X[name])]
        self.categories_ = {}
        for name in X.columns:
            if name in self.numeric_features_:
                continue
            column = X[name]
            if isinstance(column.dtype, pandas.CategoricalDtype):
                categories = _as_strings(column.cat.categories)
            else:
                categories = sorted(set(_as_strings(column.dropna())))
            self.categories_[name] = categories

        self.discretizer_ = Discretizer(
            supervised=self.use_supervised_discretization,
            max_bins=self.max_bins,
            )
        if self.numeric_features_:
            self.discretizer_.fit(
                X[self.numeric_features_].to_numpy(dtype=float), y)

        n_categories = []
        for name in self.feature_names_:
            if name in self.categories_:
                n_categories.append(len(self.categories_[name]) + 1)
            else:
                index = self.numeric_features_.index(name)
                n_categories.append(self.discretizer_.n_bins_[index] + 1)
        self.n_categories_ = np.array(n_categories, dtype=int)

        self.nb_ = CategoricalNB(
            alpha=self.alpha, min_categories=self.n_categories_)
        self.nb_.fit(self._encode(X), y)
        return self

    def _encode(self, X):
        X = pandas.DataFrame(X)
        absent = [name for name in self.feature_names_
                  if name not in X.columns]
        if absent:
            raise ValueError("Missing columns: {}".format(absent))

        if self.numeric_features_:
            binned = self.discretizer_.transform(
                X[self.numeric_features_].to_numpy(dtype=float))

        encoded = np.empty((len(X), len(self.feature_names_)), dtype=int)
        for j, name in enumerate(self.feature_names_):
            other = self.n_categories_[j] - 1
            if name in self.categories_:
                codes = pandas.Categorical(
                    _as_strings(X[name]),
                    categories=self.categories_[name],
                    ).codes.astype(int)
                codes[codes < 0] = other
            else:
                column = binned[:, self.numeric_features_.index(name)]
                codes = np.where(np.isnan(column), other, column).astype(int)
            encoded[:, j] = codes
        return encoded

    def predict(self, X):
        check_is_fitted(self, 'nb_')
        return self.enc_.inverse_transform(self.nb_.predict(self._encode(X)))

    def predict_proba(self, X):
        check_is_fitted(self, 'nb_')
        return self.nb_.predict_proba(self._encode(X))
