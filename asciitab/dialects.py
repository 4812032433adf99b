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

r"""Output dialects and the defaults each of them implies.

A dialect decides the characters drawn at column boundaries, whether borders surround the data,
the token that stands in for an embedded newline, and the default placeholder and multi-value
delimiter. Four dialects are available:

``text``
    Fully bordered, every data row separated by a border, multi-line cells stacked::

        +-----+----------+
        | ID  | Name     |
        +-----+----------+
        | i-1 | server-1 |
        +-----+----------+

``compressed``
    Like ``text``, but rows are only separated where a merged group ends.

``markdown``
    A GitHub-flavored markdown table; newlines become ``<br>``::

        | ID  | Name     |
        |-----|----------|
        | i-1 | server-1 |

``backlog``
    The Backlog wiki table syntax: no border lines, header marked with a trailing ``h`` and
    newlines written as ``&br;``.
"""
import enum
from collections import namedtuple

from asciitab.utils.customExceptions import UnsupportedDialectError

TEXT_NEW_LINE = "\n"
MARKDOWN_NEW_LINE = "<br>"
BACKLOG_NEW_LINE = "&br;"

TEXT_PLACEHOLDER = "-"
MARKDOWN_PLACEHOLDER = "\\" + TEXT_PLACEHOLDER

# The defaults a dialect implies, looked up once and never mutated:
#
#   placeholder  -- stands in for empty and missing values
#   delimiter    -- joins the elements of a multi-valued field
#   newLine      -- replaces embedded newlines (the text dialect keeps them and stacks lines)
#   boundary     -- character drawn at every column boundary of a border line
#   bordered     -- whether border lines surround the header and the data
#   headerMarker -- appended after the last separator of the header row
#   stacksLines  -- whether multi-line cells are rendered as stacked physical lines
DialectDefaults = namedtuple(
    "DialectDefaults",
    [
        "placeholder",
        "delimiter",
        "newLine",
        "boundary",
        "bordered",
        "headerMarker",
        "stacksLines",
    ],
)


class Dialect(enum.Enum):
    """The named output styles a table can be rendered in."""

    PLAIN = "text"
    COMPRESSED = "compressed"
    MARKDOWN = "markdown"
    BACKLOG = "backlog"

    def __str__(self):
        return self.value

    @property
    def defaults(self):
        """The :py:class:`DialectDefaults` of this dialect."""
        return _DIALECT_DEFAULTS[self]

    @classmethod
    def parse(cls, name):
        """Turn a dialect name (``"text"``, ``"markdown"``, ...) into a Dialect.

        Dialect instances are passed through unchanged. Names are matched case-insensitively.
        """
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            key = name.strip().lower()
            for dialect in cls:
                if dialect.value == key:
                    return dialect
        raise UnsupportedDialectError(name)


_DIALECT_DEFAULTS = {
    Dialect.PLAIN: DialectDefaults(
        placeholder=TEXT_PLACEHOLDER,
        delimiter=TEXT_NEW_LINE,
        newLine=TEXT_NEW_LINE,
        boundary="+",
        bordered=True,
        headerMarker="",
        stacksLines=True,
    ),
    Dialect.COMPRESSED: DialectDefaults(
        placeholder=TEXT_PLACEHOLDER,
        delimiter=TEXT_NEW_LINE,
        newLine=TEXT_NEW_LINE,
        boundary="+",
        bordered=True,
        headerMarker="",
        stacksLines=True,
    ),
    Dialect.MARKDOWN: DialectDefaults(
        placeholder=MARKDOWN_PLACEHOLDER,
        delimiter=MARKDOWN_NEW_LINE,
        newLine=MARKDOWN_NEW_LINE,
        boundary="|",
        bordered=False,
        headerMarker="",
        stacksLines=False,
    ),
    Dialect.BACKLOG: DialectDefaults(
        placeholder=TEXT_PLACEHOLDER,
        delimiter=BACKLOG_NEW_LINE,
        newLine=BACKLOG_NEW_LINE,
        boundary="|",
        bordered=False,
        headerMarker="h",
        stacksLines=False,
    ),
}

DIALECT_NAMES = [d.value for d in Dialect]
