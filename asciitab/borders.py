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

"""Horizontal border lines drawn around and between table rows."""
from collections import namedtuple

from asciitab.dialects import Dialect

Line = namedtuple("Line", ["begin", "hline", "sep", "end"])

TRANSITION_BOUNDARY = "+"


def _drawLine(runs, line):
    return line.begin + line.sep.join(runs) + line.end + "\n"


def computeBorder(colWidths, marginWidth, dialect=Dialect.PLAIN):
    """
    Full-width border for a dialect, terminated by a newline.

    >>> computeBorder([3, 1], 1, Dialect.MARKDOWN)
    '|-----|---|\\n'
    """
    boundary = dialect.defaults.boundary
    line = Line(boundary, "-", boundary, boundary)
    runs = [line.hline * (w + 2 * marginWidth) for w in colWidths]
    return _drawLine(runs, line)


def computeRowTransition(colWidths, marginWidth, upcomingRow):
    """
    Separator drawn above ``upcomingRow`` in the text dialect.

    Columns whose upcoming cell is blank, because it was merged into the cell above, are left open
    with spaces so that the merged cells read as one.
    """
    line = Line(TRANSITION_BOUNDARY, "-", TRANSITION_BOUNDARY, TRANSITION_BOUNDARY)
    runs = []
    for width, lines in zip(colWidths, upcomingRow.cells):
        fill = line.hline if lines[0] != "" else " "
        runs.append(fill * (width + 2 * marginWidth))
    return _drawLine(runs, line)
