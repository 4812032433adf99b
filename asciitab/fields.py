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

r"""
Convert single field values into the display strings that fill table cells.

Values are formatted according to their type:

- ``None`` and empty strings become the placeholder.
- Integers print in decimal; floats print in the shortest positional form that round-trips, so
  ``1.0`` prints as ``1`` and ``1e-07`` as ``0.0000001``.
- Bytes are decoded as UTF-8 text.
- Lists, tuples, sets and 1-D arrays are multi-valued: each element is formatted on its own and the
  results are joined with the delimiter. Nesting is not supported.
- Records are not supported inside a field, unless they define their own ``__str__``.
- Anything else (dates, decimals, enums, addresses, ...) prints with ``str()``.

Text then goes through a dialect-specific sanitizing step::

    >>> formatField("a\nb", Dialect.MARKDOWN, "\\-", "<br>", False)
    'a<br>b'
    >>> formatField(["x", "", None], Dialect.PLAIN, "-", ",", False)
    'x,-,-'
"""
import numbers

import numpy as np

from asciitab import records
from asciitab.dialects import Dialect
from asciitab.utils.customExceptions import UnsupportedShapeError

# characters with a meaning in HTML or markdown, replaced when escaping is enabled
_ESCAPES = str.maketrans(
    {
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&lsquo;",
        "&": "&amp;",
        " ": "&nbsp;",
        "*": "&#42;",
        "\\": "&#92;",
        "_": "&#95;",
        "|": "&#124;",
    }
)

_BYTES = (bytes, bytearray, memoryview)
_COLLECTIONS = (list, tuple, set, frozenset)


def _hasCustomStr(value):
    return type(value).__str__ is not object.__str__


def _isCollection(value):
    if isinstance(value, np.ndarray):
        return value.ndim > 0
    return isinstance(value, _COLLECTIONS) and not records.isRecord(value)


def _decode(value):
    return bytes(value).decode("utf-8", errors="replace")


def formatFloat(value):
    """Shortest positional decimal that reads back as the same float, without trailing zeros."""
    return np.format_float_positional(value, trim="-")


class FieldFormatter:
    """
    Formats field values for one dialect and one set of table options.

    Parameters
    ----------
    dialect : Dialect
        The output dialect, which decides how newlines are written.
    placeholder : str
        Substituted for empty and missing values.
    delimiter : str
        Joins the elements of multi-valued fields.
    escape : bool
        Whether to replace HTML/markdown-sensitive characters with entities.
    """

    def __init__(self, dialect, placeholder, delimiter, escape=False):
        self.dialect = dialect
        self.placeholder = placeholder
        self.escape = escape
        self.newLine = dialect.defaults.newLine
        if dialect is Dialect.PLAIN:
            self.delimiter = delimiter
        else:
            self.delimiter = delimiter.replace("\n", self.newLine)

    def format(self, value):
        """Return the display string of a single field value."""
        if value is None:
            return self.placeholder
        if isinstance(value, str):
            return self.sanitize(value)
        if isinstance(value, _BYTES):
            return self.sanitize(_decode(value))
        if isinstance(value, np.ndarray):
            if value.ndim == 0:
                return self.format(value.item())
            if value.ndim > 1:
                raise UnsupportedShapeError(
                    value, "({}-dimensional array)".format(value.ndim)
                )
            return self._formatCollection(value)
        if _isCollection(value):
            return self._formatCollection(value)
        if records.isRecord(value):
            if _hasCustomStr(value):
                return self.sanitize(str(value))
            raise UnsupportedShapeError(value, "(a record cannot be a field value)")
        return self._formatScalar(value)

    def _formatScalar(self, value):
        if isinstance(value, (bool, np.bool_)):
            return self.sanitize(str(bool(value)))
        if isinstance(value, numbers.Integral):
            return str(int(value))
        if isinstance(value, (float, np.floating)):
            return formatFloat(value)
        return self.sanitize(str(value))

    def _formatCollection(self, values):
        if len(values) == 0:
            return self.placeholder

        if isinstance(values, (set, frozenset)):
            values = sorted(values, key=str)

        parts = []
        for value in values:
            if value is None:
                parts.append(self.placeholder)
            elif isinstance(value, str):
                parts.append(self.sanitize(value))
            elif isinstance(value, _BYTES):
                parts.append(self.sanitize(_decode(value)))
            elif _isCollection(value):
                raise UnsupportedShapeError(value, "(collections cannot be nested)")
            elif records.isRecord(value) and not _hasCustomStr(value):
                raise UnsupportedShapeError(value, "(collections cannot hold records)")
            else:
                parts.append(self._formatScalar(value))
        return self.delimiter.join(parts)

    def sanitize(self, s):
        """
        Make a non-empty string safe for the dialect.

        Escapes entities if enabled, protects a leading ``*`` in markdown, and, for every dialect but
        text, writes embedded newlines as the dialect's newline token and trims the result.
        """
        if s == "":
            return self.placeholder
        if self.escape:
            s = s.translate(_ESCAPES)
        if self.dialect is Dialect.MARKDOWN and s.startswith("*"):
            s = "\\" + s
        if self.dialect is Dialect.PLAIN:
            return s

        s = s.replace("\n", self.newLine).strip()
        return s or self.placeholder


def formatField(value, dialect, placeholder, delimiter, escape=False):
    """Format one value; a one-shot wrapper around :py:class:`FieldFormatter`."""
    return FieldFormatter(dialect, placeholder, delimiter, escape).format(value)
