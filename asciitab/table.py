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
The Table object: configured once, loaded with data, then rendered any number of times.

Examples
--------
>>> from asciitab import Input, Table
>>> table = Table(dialect="markdown")
>>> table.load(Input(header=["ID", "Port"], data=[["i-1", 22], ["i-2", 443]]))
>>> print(table.out(), end="")
| ID  | Port |
|-----|------|
| i-1 |   22 |
| i-2 |  443 |
"""
import io
import sys

from asciitab import runLog
from asciitab.borders import computeBorder
from asciitab.layout import EMPTY_LAYOUT, buildLayout
from asciitab.records import normalizeInput
from asciitab.renderer import renderTable
from asciitab.settings import TableConfig


class Table:
    """
    A table of rows and columns that renders as text, markdown or backlog markup.

    Parameters
    ----------
    config : TableConfig, optional
        Options of the table. Keyword options are applied on top of it.
    **options
        Any :py:class:`~asciitab.settings.TableConfig` option, e.g. ``dialect="markdown"``.
    """

    def __init__(self, config=None, **options):
        if config is None:
            config = TableConfig(**options)
        elif options:
            config = config.replace(**options)
        self.config = config
        self._reset()

    def __repr__(self):
        return "<{} {}x{} {}>".format(
            self.__class__.__name__, self.numRows, self.numColumns, self.dialect
        )

    def _reset(self):
        self._layout = EMPTY_LAYOUT
        self._border = ""
        self._loaded = False

    @property
    def dialect(self):
        return self.config.dialect

    @property
    def header(self):
        """Header labels of the kept columns."""
        return list(self._layout.header)

    @property
    def colWidths(self):
        """Display width of every kept column, margins excluded."""
        return list(self._layout.colWidths)

    @property
    def numRows(self):
        return len(self._layout.rows)

    @property
    def numColumns(self):
        return len(self._layout.colWidths)

    @property
    def border(self):
        """The full border line, newline included; empty until rows are loaded."""
        return self._border

    @property
    def loaded(self):
        """Whether the last call to :py:meth:`load` succeeded."""
        return self._loaded

    def load(self, data):
        """
        Replace the contents of the table with ``data``.

        Parameters
        ----------
        data : Input, mapping, record, or sequence of records
            See :py:func:`asciitab.records.normalizeInput`. None loads an empty table.

        Raises
        ------
        TableError
            If the data cannot be tabulated. The table is left empty.
        """
        self._reset()
        header, rows, fromRecords = normalizeInput(data)
        layout = buildLayout(header, rows, self.config)
        if layout.rows:
            border = computeBorder(layout.colWidths, self.config.marginWidth, self.dialect)
        else:
            border = ""

        self._layout = layout
        self._border = border
        self._loaded = True
        runLog.debug(
            "Loaded {} rows and {} columns from {}".format(
                self.numRows, self.numColumns, "records" if fromRecords else "an Input"
            )
        )

    def render(self, stream=None):
        """Write the table to ``stream``, or to standard output."""
        stream = sys.stdout if stream is None else stream
        renderTable(self._layout, self.config, self.dialect, self._border, stream)

    def out(self):
        """Return the rendered table as a string."""
        buf = io.StringIO()
        self.render(buf)
        return buf.getvalue()


def tabulate(data, **options):
    """
    Format ``data`` as a table in one call.

    >>> print(tabulate([{"name": "web", "port": 80}], dialect="compressed"), end="")
    +------+------+
    | name | port |
    +------+------+
    | web  |   80 |
    +------+------+
    """
    table = Table(**options)
    table.load(data)
    return table.out()
