""":class:`~bayespipe.interfaces.DatasetLoader` implementations and the
in-memory :class:`Dataset` they produce.
"""

from collections import namedtuple
import os
import re

import numpy as np
import pandas
import pandas.io.parsers
from scipy.io import arff

from .interfaces import DatasetLoader
from .interfaces import FileReadError
from .util import logger

NUMERIC = 'numeric'
NOMINAL = 'nominal'
MISSING = '?'

_NEEDS_QUOTES = re.compile(r"[\s,{}'\"%?]")


def _quote(value):
    if value == '' or _NEEDS_QUOTES.search(value):
        return "'{}'".format(value.replace("'", "\\'"))
    return value


class Attribute(namedtuple('Attribute', ['name', 'type', 'values'])):
    """Name and type of one column of a :class:`Dataset`.  Nominal
    attributes also carry the tuple of their declared *values*.
    """
    __slots__ = ()

    def __new__(cls, name, type=NUMERIC, values=None):
        if values is not None:
            values = tuple(values)
        return super().__new__(cls, name, type, values)

    @property
    def is_nominal(self):
        return self.type == NOMINAL

    def format_value(self, value):
        if pandas.isna(value):
            return MISSING
        if self.is_nominal:
            return _quote(str(value))
        return '{:g}'.format(value)

    def __str__(self):
        if self.is_nominal:
            declaration = '{{{}}}'.format(
                ','.join(_quote(value) for value in self.values))
        else:
            declaration = self.type
        return '@attribute {} {}'.format(_quote(self.name), declaration)


class Dataset:
    """A table of instances that share one list of :class:`Attribute`
    definitions, one of which may be marked as the class attribute.

    Rows live in :attr:`data`, a :class:`pandas.DataFrame` whose
    columns are the attribute names in order.  Nominal columns are
    :class:`pandas.Categorical` with the declared values as categories,
    numeric columns are floats.  Missing values are NaN.
    """

    def __init__(self, data, attributes, class_index=None,
                 relation='dataset'):
        attributes = list(attributes)
        names = [attribute.name for attribute in attributes]
        if list(data.columns) != names:
            raise ValueError(
                "Columns {} don't match attributes {}".format(
                    list(data.columns), names))
        self.data = data
        self.attributes = attributes
        self.relation = relation
        self.class_index = None
        if class_index is not None:
            self.set_class_index(class_index)

    def set_class_index(self, class_index):
        """Mark the attribute at position *class_index* as the class
        attribute.  Negative positions count from the end, and an
        attribute name is accepted as well.
        """
        names = [attribute.name for attribute in self.attributes]
        if isinstance(class_index, str):
            if class_index not in names:
                raise ValueError(
                    "No such attribute: '{}'".format(class_index))
            class_index = names.index(class_index)
        if not -len(names) <= class_index < len(names):
            raise ValueError(
                "Class index {} out of range for {} attributes".format(
                    class_index, len(names)))
        self.class_index = class_index % len(names)

    @property
    def num_attributes(self):
        return len(self.attributes)

    @property
    def num_instances(self):
        return len(self.data)

    def __len__(self):
        return self.num_instances

    @property
    def class_attribute(self):
        if self.class_index is None:
            return None
        return self.attributes[self.class_index]

    def _require_class(self):
        if self.class_attribute is None:
            raise ValueError("Class index of '{}' is undefined".format(
                self.relation))
        return self.class_attribute

    @property
    def X(self):
        """All columns but the class column."""
        return self.data.drop(columns=[self._require_class().name])

    @property
    def y(self):
        return self.data[self._require_class().name]

    def instance(self, i):
        return ','.join(
            attribute.format_value(self.data.iat[i, j])
            for j, attribute in enumerate(self.attributes)
            )

    def copy(self):
        return Dataset(
            self.data.copy(deep=True),
            self.attributes,
            class_index=self.class_index,
            relation=self.relation,
            )

    def labeled(self):
        """Return a copy without the rows whose class value is
        missing.
        """
        mask = self.y.notna()
        return Dataset(
            self.data[mask].reset_index(drop=True),
            self.attributes,
            class_index=self.class_index,
            relation=self.relation,
            )

    def with_class_values(self, values):
        """Return a copy where the class column holds *values*.
        """
        attribute = self._require_class()
        values = list(values)
        if len(values) != self.num_instances:
            raise ValueError(
                "Got {} class values for {} instances".format(
                    len(values), self.num_instances))

        if attribute.is_nominal:
            undeclared = sorted(
                {str(value) for value in values if not pandas.isna(value)} -
                set(attribute.values))
            if undeclared:
                raise ValueError(
                    "Values {} are not declared for attribute '{}'".format(
                        undeclared, attribute.name))
            column = pandas.Categorical(
                [None if pandas.isna(value) else str(value)
                 for value in values],
                categories=attribute.values,
                )
        else:
            column = np.asarray(values, dtype=float)

        result = self.copy()
        result.data[attribute.name] = column
        return result

    def with_class_declared(self, values):
        """Return a copy whose class attribute is nominal and declares
        *values* in addition to the values it already declares.

        A numeric class attribute, as a :class:`Table` produces for a
        class column that is all ``?``, is turned into a nominal one.
        """
        attribute = self._require_class()
        to_str = str if attribute.is_nominal else '{:g}'.format
        column = [None if pandas.isna(value) else to_str(value)
                  for value in self.data[attribute.name]]
        if attribute.is_nominal:
            declared = list(attribute.values)
        else:
            declared = sorted({value for value in column if value is not None})
        added = [value for value in (str(value) for value in values)
                 if value not in declared]
        if attribute.is_nominal and not added:
            return self.copy()

        declared.extend(added)
        result = self.copy()
        result.data[attribute.name] = pandas.Categorical(
            column, categories=declared)
        result.attributes[self.class_index] = Attribute(
            attribute.name, NOMINAL, declared)
        return result

    def __str__(self):
        lines = ['@relation {}'.format(_quote(self.relation)), '']
        lines.extend(str(attribute) for attribute in self.attributes)
        lines.extend(['', '@data'])
        lines.extend(self.instance(i) for i in range(self.num_instances))
        return '\n'.join(lines)

    def __repr__(self):
        return '<Dataset {!r}: {} instances, {} attributes>'.format(
            self.relation, self.num_instances, self.num_attributes)


def _set_default_class_index(dataset, class_index):
    if class_index is not None:
        dataset.set_class_index(class_index)
    elif dataset.num_attributes:
        dataset.set_class_index(dataset.num_attributes - 1)
    return dataset


def _decode(value):
    if isinstance(value, bytes):
        value = value.decode('utf-8')
    return None if value == MISSING else value


class Arff(DatasetLoader):
    """A :class:`~bayespipe.interfaces.DatasetLoader` that uses
    :func:`scipy.io.arff.loadarff` to load data from an ARFF file.
    """

    def __init__(self, path, class_index=None):
        """
        :param str path:
          The filesystem *path* of the ARFF file.

        :param class_index:
          Position or name of the class attribute.  ARFF files don't
          declare one, so the last attribute is used if this is
          ``None``.
        """
        self.path = path
        self.class_index = class_index

    def __call__(self):
        """See :meth:`bayespipe.interfaces.DatasetLoader.__call__`.
        """
        try:
            records, meta = arff.loadarff(self.path)
        except Exception as exc:
            raise FileReadError(
                "Could not read from file {}: {}".format(self.path, exc)
                ) from exc

        data = pandas.DataFrame(records, columns=meta.names())
        attributes = []
        for name in meta.names():
            type_, values = meta[name]
            if type_ == NOMINAL:
                data[name] = pandas.Categorical(
                    data[name].map(_decode), categories=values)
                attributes.append(Attribute(name, NOMINAL, values))
            elif type_ == NUMERIC:
                data[name] = data[name].astype(float)
                attributes.append(Attribute(name, NUMERIC))
            else:
                raise FileReadError(
                    "Attribute '{}' in {} has unsupported type '{}'".format(
                        name, self.path, type_))

        dataset = Dataset(data, attributes, relation=meta.name)
        logger.debug("Read {} instances with {} attributes from {}".format(
            dataset.num_instances, dataset.num_attributes, self.path))
        return _set_default_class_index(dataset, self.class_index)


class Table(DatasetLoader):
    """A :class:`~bayespipe.interfaces.DatasetLoader` that uses
    :func:`pandas.io.parsers.read_table` to load data from a file or
    URL.

    Columns whose values all parse as numbers become numeric
    attributes.  All other columns become nominal attributes with
    their distinct values, sorted, as declared values.
    """
    pandas_read = staticmethod(pandas.io.parsers.read_table)

    def __init__(self, path, class_index=None, nominal=None, **kwargs):
        """
        :param str path:
          The *path* represents a filesystem path or URL that's passed
          on as the *filepath_or_buffer* argument to the pandas reader.

        :param class_index:
          Position or name of the class attribute.  Defaults to the
          last column.

        :param dict nominal:
          Maps column names to the values to declare for them.  Use
          this for columns that should be nominal but whose values in
          this file don't tell, e.g. a class column that is all ``?``.

        :param kwargs:
          All other keyword parameters are passed on to the pandas
          reader.
        """
        self.path = path
        self.class_index = class_index
        self.nominal = nominal or {}
        self.kwargs = kwargs

    def __call__(self):
        """See :meth:`bayespipe.interfaces.DatasetLoader.__call__`.
        """
        kwargs = dict(self.kwargs)
        kwargs.setdefault('dtype', str)
        kwargs.setdefault('na_values', [MISSING])
        kwargs.setdefault('keep_default_na', False)
        try:
            data = self.pandas_read(self.path, **kwargs)
        except Exception as exc:
            raise FileReadError(
                "Could not read from file {}: {}".format(self.path, exc)
                ) from exc

        attributes = []
        for name in data.columns:
            column = data[name]
            if name not in self.nominal:
                try:
                    data[name] = pandas.to_numeric(column).astype(float)
                except (TypeError, ValueError):
                    pass
                else:
                    attributes.append(Attribute(name, NUMERIC))
                    continue
                values = sorted(column.dropna().astype(str).unique())
            else:
                values = [str(value) for value in self.nominal[name]]
            data[name] = pandas.Categorical(
                column.where(column.isna(), column.astype(str)),
                categories=values,
                )
            attributes.append(Attribute(name, NOMINAL, values))

        relation = os.path.splitext(os.path.basename(str(self.path)))[0]
        dataset = Dataset(data, attributes, relation=relation)
        logger.debug("Read {} instances with {} attributes from {}".format(
            dataset.num_instances, dataset.num_attributes, self.path))
        return _set_default_class_index(dataset, self.class_index)


class CSV(Table):
    """A :class:`Table` that uses :func:`pandas.io.parsers.read_csv`.
    """
    pandas_read = staticmethod(pandas.io.parsers.read_csv)


LOADERS = {
    '.arff': Arff,
    '.csv': CSV,
    }


def loader_for_path(path, **kwargs):
    """Return a :class:`~bayespipe.interfaces.DatasetLoader` for the
    file at *path*, chosen by its extension.
    """
    extension = os.path.splitext(str(path))[1].lower()
    return LOADERS.get(extension, Table)(path, **kwargs)


def load_dataset(path, class_index=None):
    """Load the dataset at *path*.  The class index defaults to the
    last attribute.

    :raises:
      :class:`~bayespipe.interfaces.FileReadError` if the file is
      missing, malformed or unreadable.
    """
    return loader_for_path(path, class_index=class_index)()


def describe(dataset, max_instances=5, file=None):
    """Print the attributes, the class index and the first
    *max_instances* rows of *dataset*.
    """
    for i, attribute in enumerate(dataset.attributes):
        print("attribute {} = {}".format(i, attribute), file=file)
    class_index = dataset.class_index
    print("class index = {}".format(
        -1 if class_index is None else class_index), file=file)
    for i in range(min(max_instances, dataset.num_instances)):
        print("instance = {}".format(dataset.instance(i)), file=file)
