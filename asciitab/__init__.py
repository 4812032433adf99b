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
asciitab renders rows of data as text, markdown or backlog tables.

Load either an explicit :py:class:`Input` (a header and a matrix of values) or a sequence of
records (dataclasses, namedtuples, mappings or plain objects) into a :py:class:`Table`, then render
it::

    >>> import asciitab
    >>> print(asciitab.tabulate([{"id": "i-1", "port": 22}]), end="")
    +-----+------+
    | id  | port |
    +-----+------+
    | i-1 |   22 |
    +-----+------+
"""
from asciitab import runLog
from asciitab.dialects import DIALECT_NAMES, Dialect
from asciitab.meta import __version__
from asciitab.records import Input, RecordAdapter
from asciitab.settings import TableConfig, loadConfig, loadConfigFile
from asciitab.table import Table, tabulate
from asciitab.utils.customExceptions import (
    ColumnCountMismatchError,
    InvalidFieldReferenceError,
    InvalidSettingError,
    NoColumnsError,
    SettingException,
    TableError,
    UnsupportedDialectError,
    UnsupportedInputShapeError,
    UnsupportedShapeError,
)
