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
Write a laid-out table to a stream.

A table is written in a fixed order: the header (with a border above it in the text dialects), a
border below the header, the data rows with dialect-specific separators between them, and a
closing border. Nothing at all is written for a table without rows.

The whole table is assembled in a private buffer and written to the stream in one call, so the
same layout can be rendered concurrently.
"""
import io

from asciitab.borders import computeRowTransition
from asciitab.dialects import Dialect
from asciitab.utils.textWidth import displayWidth, isNumeric

COLUMN_SEP = "|"


def writeField(buf, text, width, margin):
    """Write one cell line padded to ``width``; numbers flush right, everything else left."""
    padding = " " * max(0, width - displayWidth(text))
    buf.write(margin)
    if isNumeric(text):
        buf.write(padding)
        buf.write(text)
    else:
        buf.write(text)
        buf.write(padding)
    buf.write(margin)


def _writeHeader(buf, layout, config, dialect, border):
    if dialect.defaults.bordered:
        buf.write(border)
    buf.write(COLUMN_SEP)
    for label, width in zip(layout.header, layout.colWidths):
        writeField(buf, label, width, config.margin)
        buf.write(COLUMN_SEP)
    buf.write(dialect.defaults.headerMarker)
    buf.write("\n")


def _writeRow(buf, row, colWidths, margin):
    for lineIndex in range(row.lineHeight):
        buf.write(COLUMN_SEP)
        for lines, width in zip(row.cells, colWidths):
            text = lines[lineIndex] if lineIndex < len(lines) else ""
            writeField(buf, text, width, margin)
            buf.write(COLUMN_SEP)
        buf.write("\n")


def _writeSeparator(buf, row, layout, config, dialect, border):
    """Whatever goes between two data rows; ``row`` is the lower one."""
    if dialect is Dialect.PLAIN:
        buf.write(computeRowTransition(layout.colWidths, config.marginWidth, row))
    elif dialect is Dialect.COMPRESSED:
        if config.mergeColumns and row.cells[0][0] != "":
            buf.write(border)


def renderTable(layout, config, dialect, border, stream):
    """
    Render ``layout`` to ``stream``.

    Parameters
    ----------
    layout : Layout
        Output of :py:func:`~asciitab.layout.buildLayout`.
    config : TableConfig
        Options of the table; supplies the margin, header visibility and merge columns.
    dialect : Dialect
        The dialect the layout was built for.
    border : str
        Pre-computed border line, see :py:func:`~asciitab.borders.computeBorder`.
    stream : file-like
        Receives the rendered text.
    """
    if not layout.rows:
        return

    buf = io.StringIO()
    if config.headerVisible and layout.header:
        _writeHeader(buf, layout, config, dialect, border)

    if dialect.defaults.bordered:
        buf.write(border)
    elif dialect is Dialect.MARKDOWN and (config.headerVisible or layout.colWidths):
        buf.write(border)

    for i, row in enumerate(layout.rows):
        if i > 0:
            _writeSeparator(buf, row, layout, config, dialect, border)
        _writeRow(buf, row, layout.colWidths, config.margin)

    if dialect.defaults.bordered:
        buf.write(border)

    stream.write(buf.getvalue())
