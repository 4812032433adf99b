# Copyright 2024 TerraPower, LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Turn the inputs a table accepts into one canonical ``(header, rows)`` pair.

Two input shapes are understood:

1. An explicit :py:class:`Input`, with a (possibly empty) header and a matrix of values. Every row
   must have the same number of columns; that is checked by the layout builder.
2. A sequence of records, or a single record. The header is made of the field names of the first
   record, in declaration order, skipping names that start with an underscore.

A record is anything a :py:class:`RecordAdapter` can be built for. Out of the box these are
dataclass instances, namedtuples, mappings with string keys, and plain objects with instance
attributes. Other record types can take part by subclassing :py:class:`RecordAdapter` and passing
the adapters themselves as the records.
"""
import dataclasses
import enum
from collections.abc import Mapping

import numpy as np

from asciitab import runLog
from asciitab.utils.customExceptions import (
    InvalidFieldReferenceError,
    NoColumnsError,
    UnsupportedInputShapeError,
)

_SCALARS = (str, bytes, bytearray, memoryview, int, float, complex, np.generic)


@dataclasses.dataclass
class Input:
    """An explicit header and a matrix of values with any types."""

    header: list = dataclasses.field(default_factory=list)
    data: list = dataclasses.field(default_factory=list)


class RecordAdapter:
    """
    Exposes the field names and values of one record.

    Subclasses implement :py:meth:`fieldNames` and :py:meth:`fieldValue`. A field whose name is not
    in :py:meth:`fieldNames` must raise ``KeyError`` from :py:meth:`fieldValue`.
    """

    def __init__(self, record):
        self.record = record

    def fieldNames(self):
        """Ordered, externally visible field names."""
        raise NotImplementedError

    def fieldValue(self, name):
        raise NotImplementedError

    def hasField(self, name):
        return name in self.fieldNames()

    @staticmethod
    def matches(record):
        """Whether this adapter class understands ``record``."""
        return False


def _isVisible(name):
    return isinstance(name, str) and bool(name) and not name.startswith("_")


class DataclassAdapter(RecordAdapter):
    @staticmethod
    def matches(record):
        return dataclasses.is_dataclass(record) and not isinstance(record, type)

    def fieldNames(self):
        return [f.name for f in dataclasses.fields(self.record) if _isVisible(f.name)]

    def fieldValue(self, name):
        if not self.hasField(name):
            raise KeyError(name)
        return getattr(self.record, name)


class NamedTupleAdapter(RecordAdapter):
    @staticmethod
    def matches(record):
        return isinstance(record, tuple) and hasattr(record, "_fields")

    def fieldNames(self):
        return [name for name in self.record._fields if _isVisible(name)]

    def fieldValue(self, name):
        if not self.hasField(name):
            raise KeyError(name)
        return getattr(self.record, name)


class MappingAdapter(RecordAdapter):
    @staticmethod
    def matches(record):
        return isinstance(record, Mapping)

    def fieldNames(self):
        return [k for k in self.record.keys() if _isVisible(k)]

    def fieldValue(self, name):
        if not _isVisible(name):
            raise KeyError(name)
        return self.record[name]


class ObjectAdapter(RecordAdapter):
    """Plain class instances; fields are the instance attributes in assignment order."""

    @staticmethod
    def matches(record):
        return (
            not isinstance(record, _SCALARS)
            and not isinstance(record, enum.Enum)
            and not isinstance(record, type)
            and not callable(record)
            and hasattr(record, "__dict__")
        )

    def fieldNames(self):
        return [k for k in vars(self.record) if _isVisible(k)]

    def fieldValue(self, name):
        if not _isVisible(name):
            raise KeyError(name)
        try:
            return vars(self.record)[name]
        except KeyError:
            raise KeyError(name)


# walked in order; namedtuples must be tried before anything tuple-like
ADAPTERS = [DataclassAdapter, NamedTupleAdapter, MappingAdapter, ObjectAdapter]


def isRecord(value):
    """Whether ``value`` is a record rather than a scalar or a flat collection."""
    return isinstance(value, RecordAdapter) or any(a.matches(value) for a in ADAPTERS)


def adapt(record):
    """Return a RecordAdapter for ``record``, or None if it is not a record."""
    if isinstance(record, RecordAdapter):
        return record
    for adapterClass in ADAPTERS:
        if adapterClass.matches(record):
            return adapterClass(record)
    return None


def _isExplicitMapping(data):
    return isinstance(data, Mapping) and set(data.keys()) == {"header", "data"}


def normalizeInput(data):
    """
    Convert any supported input into ``(header, rows, fromRecords)``.

    Parameters
    ----------
    data : Input, mapping, record, or sequence of records
        The tabular data to load. None loads an empty table.

    Returns
    -------
    header : list of str
        Column labels; may be empty for an explicit Input without a header.
    rows : list of list
        One list of raw field values per row.
    fromRecords : bool
        True when the rows were read from records, in which case every row has exactly as many
        values as the header.
    """
    if data is None:
        return [], [], False

    if isinstance(data, Input):
        return _fromInput(data.header, data.data)
    if _isExplicitMapping(data):
        return _fromInput(data["header"], data["data"])

    if isRecord(data):
        records = [data]
    elif isinstance(data, _SCALARS) or isinstance(data, (set, frozenset)):
        raise UnsupportedInputShapeError(data)
    else:
        try:
            records = list(data)
        except TypeError:
            raise UnsupportedInputShapeError(data)

    if not records:
        return [], [], True

    return _fromRecords(records)


def _fromInput(header, matrix):
    header = [str(h) for h in (header if header is not None else [])]
    rows = []
    for row in matrix if matrix is not None else []:
        if isinstance(row, (str, bytes)) or isRecord(row):
            raise UnsupportedInputShapeError(
                row, "Each row of an explicit Input must be a sequence of values."
            )
        try:
            rows.append(list(row))
        except TypeError:
            raise UnsupportedInputShapeError(
                row, "Each row of an explicit Input must be a sequence of values."
            )
    return header, rows, False


def _fromRecords(records):
    first = adapt(records[0])
    if first is None:
        raise UnsupportedInputShapeError(
            records[0],
            "Elements of the sequence must be records (dataclasses, namedtuples, mappings or "
            "objects), not bare values.",
        )

    header = list(first.fieldNames())
    if not header:
        raise NoColumnsError(
            "Records of type {} expose no public fields.".format(
                type(records[0]).__name__
            )
        )

    rows = []
    for i, record in enumerate(records):
        adapter = first if i == 0 else adapt(record)
        if adapter is None:
            raise UnsupportedInputShapeError(
                record, "Element {} of the sequence is not a record.".format(i)
            )
        row = []
        for name in header:
            try:
                row.append(adapter.fieldValue(name))
            except (KeyError, AttributeError):
                raise InvalidFieldReferenceError(name, i)
        rows.append(row)

    runLog.debug(
        "Read {} records of type {} with fields {}".format(
            len(rows), type(records[0]).__name__, header
        )
    )
    return header, rows, True
