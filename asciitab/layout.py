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
Build the immutable layout of a table: the kept header labels, the width of every column, and the
display lines of every cell.

Column ordinals, both for ignored and for merged columns, always refer to positions in the input,
before any column is dropped.

Merging is hierarchical. Within one row the merge columns are visited left to right while the row
is still "merging"; an unchanged value is blanked, and the first changed value stops the merging
for the rest of the row. So with ``mergeColumns=[0, 1]``::

    region     zone            region     zone
    us-east    a               us-east    a
    us-east    a       -->                (blank)
    us-east    b                          b
    us-west    b               us-west    b
"""
from collections import namedtuple

from asciitab import runLog
from asciitab.fields import FieldFormatter
from asciitab.utils.customExceptions import ColumnCountMismatchError, NoColumnsError
from asciitab.utils.textWidth import displayWidth

Layout = namedtuple("Layout", ["header", "colWidths", "rows"])
Layout.__doc__ = """Kept header labels, column widths and rows of a loaded table."""

LayoutRow = namedtuple("LayoutRow", ["cells", "lineHeight"])
LayoutRow.__doc__ = """Display lines of every kept cell of one row, and the row's line height."""

EMPTY_LAYOUT = Layout((), (), ())


def _warnOutOfRange(option, ordinals, numColumns):
    for ordinal in ordinals:
        if ordinal >= numColumns:
            runLog.warning(
                "{} refers to column {}, but the input only has {} columns; it is "
                "skipped.".format(option, ordinal, numColumns),
                single=True,
                label="{} ordinal out of range".format(option),
            )


class _Merger:
    """Blanks repeated values of the merge columns, tracking the previous kept value of each."""

    def __init__(self, mergeColumns):
        self.mergeColumns = frozenset(mergeColumns)
        self.prevValues = {}
        self.merging = True

    def startRow(self):
        self.merging = True

    def merge(self, ordinal, value):
        if ordinal not in self.mergeColumns:
            return value
        if self.prevValues.get(ordinal) != value:
            self.merging = False
            self.prevValues[ordinal] = value
        return "" if self.merging else value


def buildLayout(header, rows, config, dialect=None):
    """
    Format every cell and measure the resulting table.

    Parameters
    ----------
    header : list of str
        Column labels, or an empty list when the table has no header.
    rows : list of list
        Raw field values, one list per row.
    config : TableConfig
        Options of the table.
    dialect : Dialect, optional
        Overrides ``config.dialect``.

    Returns
    -------
    Layout

    Raises
    ------
    ColumnCountMismatchError
        If the header and the rows, or two rows, disagree on the number of columns.
    NoColumnsError
        If every column is ignored.
    UnsupportedShapeError
        If a field value cannot be formatted.
    """
    if not rows:
        return EMPTY_LAYOUT

    dialect = dialect or config.dialect
    numColumns = len(rows[0])
    if header and len(header) != numColumns:
        raise ColumnCountMismatchError(len(header), numColumns, "the first row")

    _warnOutOfRange("ignoreColumns", config.ignoreColumns, numColumns)
    _warnOutOfRange("mergeColumns", config.mergeColumns, numColumns)

    ignored = frozenset(config.ignoreColumns)
    kept = [i for i in range(numColumns) if i not in ignored]
    if not kept:
        raise NoColumnsError(
            "All {} columns are listed in ignoreColumns.".format(numColumns)
        )

    keptHeader = tuple(str(header[i]) for i in kept) if header else ()
    colWidths = [displayWidth(label) for label in keptHeader] or [0] * len(kept)

    formatter = FieldFormatter(
        dialect, config.placeholder, config.delimiter, config.escapeEnabled
    )
    merger = _Merger(config.mergeColumns)
    stacksLines = dialect.defaults.stacksLines

    layoutRows = []
    for rowIndex, row in enumerate(rows):
        if len(row) != numColumns:
            raise ColumnCountMismatchError(
                numColumns, len(row), "row {}".format(rowIndex)
            )

        merger.startRow()
        cells = []
        lineHeight = 1
        for col, ordinal in enumerate(kept):
            text = merger.merge(ordinal, formatter.format(row[ordinal]))
            lines = tuple(text.split("\n"))
            for line in lines:
                colWidths[col] = max(colWidths[col], displayWidth(line))
            if stacksLines:
                lineHeight = max(lineHeight, len(lines))
            cells.append(lines)
        layoutRows.append(LayoutRow(tuple(cells), lineHeight))

    runLog.debug(
        "Laid out {} rows in {} columns ({} ignored) as {}".format(
            len(layoutRows), len(kept), numColumns - len(kept), dialect
        )
    )
    return Layout(keptHeader, tuple(colWidths), tuple(layoutRows))
