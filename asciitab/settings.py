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
Configuration of a table: which dialect to render, which columns to merge or drop, and how empty
and multi-valued fields are spelled.

Notes
-----
Options are plain keyword arguments, validated on the way in against a ``voluptuous`` schema. The
schema both checks and normalizes: dialect names become :py:class:`~asciitab.dialects.Dialect`
members, a negative margin is clamped to zero, an empty placeholder becomes a single space, and
column ordinals are stored as sorted tuples.

A configuration can also be read from, and written to, a YAML file with a ``table:`` header::

    table:
      dialect: markdown
      mergeColumns: [0, 1]
      escapeEnabled: true
"""
import voluptuous as vol
from ruamel.yaml import YAML

from asciitab import runLog
from asciitab.dialects import Dialect
from asciitab.utils.customExceptions import (
    InvalidSettingError,
    InvalidSettingsFileError,
)

ROOT_KEY = "table"

CONF_DIALECT = "dialect"
CONF_HEADER_VISIBLE = "headerVisible"
CONF_MARGIN_WIDTH = "marginWidth"
CONF_EMPTY_PLACEHOLDER = "emptyPlaceholder"
CONF_MULTI_VALUE_DELIMITER = "multiValueDelimiter"
CONF_MERGE_COLUMNS = "mergeColumns"
CONF_IGNORE_COLUMNS = "ignoreColumns"
CONF_ESCAPE_ENABLED = "escapeEnabled"

OPTION_NAMES = [
    CONF_DIALECT,
    CONF_HEADER_VISIBLE,
    CONF_MARGIN_WIDTH,
    CONF_EMPTY_PLACEHOLDER,
    CONF_MULTI_VALUE_DELIMITER,
    CONF_MERGE_COLUMNS,
    CONF_IGNORE_COLUMNS,
    CONF_ESCAPE_ENABLED,
]


def _clampMargin(width):
    return max(0, width)


def _normalizePlaceholder(placeholder):
    # an empty cell would collapse, so a blank placeholder is at least one space wide
    if placeholder == "":
        return " "
    return placeholder


def _asList(ordinals):
    if isinstance(ordinals, (str, bytes)):
        raise vol.Invalid("expected a collection of column ordinals")
    try:
        return list(ordinals)
    except TypeError:
        raise vol.Invalid("expected a collection of column ordinals")


def _sortedTuple(ordinals):
    return tuple(sorted(set(ordinals)))


_ORDINALS = vol.All(
    _asList,
    [vol.All(vol.Coerce(int), vol.Range(min=0))],
    _sortedTuple,
)

SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_DIALECT, default=Dialect.PLAIN): Dialect.parse,
        vol.Optional(CONF_HEADER_VISIBLE, default=True): vol.Boolean(),
        vol.Optional(CONF_MARGIN_WIDTH, default=1): vol.All(
            vol.Coerce(int), _clampMargin
        ),
        vol.Optional(CONF_EMPTY_PLACEHOLDER, default=None): vol.Any(
            None, vol.All(str, _normalizePlaceholder)
        ),
        vol.Optional(CONF_MULTI_VALUE_DELIMITER, default=None): vol.Any(None, str),
        vol.Optional(CONF_MERGE_COLUMNS, default=()): _ORDINALS,
        vol.Optional(CONF_IGNORE_COLUMNS, default=()): _ORDINALS,
        vol.Optional(CONF_ESCAPE_ENABLED, default=False): vol.Boolean(),
    }
)


class TableConfig:
    """
    The validated, immutable options of a table.

    Parameters
    ----------
    dialect : Dialect or str, optional
        Output dialect, or its name: "text", "compressed", "markdown", "backlog". Default "text".
    headerVisible : bool, optional
        Whether the header row is printed. Default True.
    marginWidth : int, optional
        Spaces on each side of a cell value. Negative values are clamped to 0. Default 1.
    emptyPlaceholder : str, optional
        Printed for empty and missing values. None selects the dialect default, "" becomes " ".
    multiValueDelimiter : str, optional
        Joins the elements of a multi-valued field. None selects the dialect's newline token.
    mergeColumns : iterable of int, optional
        Column ordinals whose repeated values are blanked to visually merge rows.
    ignoreColumns : iterable of int, optional
        Column ordinals left out of the output entirely.
    escapeEnabled : bool, optional
        Replace HTML/markdown-sensitive characters with entities. Default False.
    """

    def __init__(self, **options):
        try:
            values = SCHEMA(options)
        except vol.MultipleInvalid as ee:
            first = ee.errors[0]
            name = first.path[0] if first.path else "<options>"
            value = options.get(name) if isinstance(name, str) else None
            runLog.error(f"Error in table setting {name}, val: {value!r}.")
            raise InvalidSettingError(name, value, first.msg) from ee

        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(
            "TableConfig is immutable; use replace({}=...) instead".format(name)
        )

    def __eq__(self, other):
        if not isinstance(other, TableConfig):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self):
        return hash(tuple(sorted(self._values().items(), key=lambda kv: kv[0])))

    def __repr__(self):
        body = ", ".join("{}={!r}".format(k, v) for k, v in self._values().items())
        return "<{} {}>".format(self.__class__.__name__, body)

    def _values(self):
        return {name: getattr(self, name) for name in OPTION_NAMES}

    @property
    def dialectDefaults(self):
        return self.dialect.defaults

    @property
    def placeholder(self):
        """The effective placeholder for empty fields."""
        if self.emptyPlaceholder is None:
            return self.dialect.defaults.placeholder
        return self.emptyPlaceholder

    @property
    def delimiter(self):
        """The effective delimiter between the values of a multi-valued field."""
        if self.multiValueDelimiter is None:
            return self.dialect.defaults.delimiter
        return self.multiValueDelimiter

    @property
    def margin(self):
        return " " * self.marginWidth

    def replace(self, **changes):
        """Return a new configuration with some options changed."""
        values = self._values()
        values.update(changes)
        return TableConfig(**values)

    def dump(self):
        """Return a serializable (YAML/JSON friendly) version of these options."""
        data = self._values()
        data[CONF_DIALECT] = str(self.dialect)
        data[CONF_MERGE_COLUMNS] = list(self.mergeColumns)
        data[CONF_IGNORE_COLUMNS] = list(self.ignoreColumns)
        return data


def loadConfig(stream, path="<stream>"):
    """Read a TableConfig from a YAML stream with a ``table:`` header."""
    yaml = YAML(typ="rt")
    yaml.allow_duplicate_keys = False
    try:
        tree = yaml.load(stream)
    except Exception as ee:
        raise InvalidSettingsFileError(path, str(ee)) from ee

    if not isinstance(tree, dict) or ROOT_KEY not in tree:
        raise InvalidSettingsFileError(
            path, f"Missing the `{ROOT_KEY}:` header required in YAML settings"
        )

    options = tree[ROOT_KEY] or {}
    if not isinstance(options, dict):
        raise InvalidSettingsFileError(
            path, f"The `{ROOT_KEY}:` section must be a mapping of options"
        )

    runLog.debug(f"Read {len(options)} table settings from {path}")
    return TableConfig(**{str(k): v for k, v in options.items()})


def loadConfigFile(path):
    """Read a TableConfig from a YAML file on disk."""
    with open(path, "r") as stream:
        return loadConfig(stream, path=path)


def dumpConfig(config, stream):
    """Write a TableConfig to a YAML stream."""
    yaml = YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.dump({ROOT_KEY: config.dump()}, stream)
