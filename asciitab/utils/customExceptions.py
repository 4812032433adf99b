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
Globally accessible exception definitions for better granularity on exception behavior and exception handling behavior
"""


class TableError(Exception):
    """Standardize behavior of every error raised while loading a table."""

    def __init__(self, msg):
        Exception.__init__(self, msg)
        self.msg = msg


# ---------------------------------------------------


class UnsupportedInputShapeError(TableError):
    """The top-level input is neither an explicit Input nor a sequence of records."""

    def __init__(self, data, customMsgEnd=""):
        msg = "Cannot load input of type {}. ".format(type(data).__name__)
        msg += customMsgEnd or (
            "Expected an Input, a record, or a sequence of records."
        )
        TableError.__init__(self, msg)


class ColumnCountMismatchError(TableError):
    """The header and the data, or two data rows, disagree on the number of columns."""

    def __init__(self, expected, actual, where):
        TableError.__init__(
            self,
            "Cannot load input: {} has {} columns, expected {}.".format(
                where, actual, expected
            ),
        )
        self.expected = expected
        self.actual = actual


class UnsupportedShapeError(TableError):
    """A field value is nested, or is a record where a scalar was expected."""

    def __init__(self, value, customMsgEnd=""):
        msg = "Cannot format field value of type {}: nested fields are not supported".format(
            type(value).__name__
        )
        if customMsgEnd:
            msg += " " + customMsgEnd
        TableError.__init__(self, msg)


class NoColumnsError(TableError):
    """Nothing is left to display once ignored and hidden fields are removed."""

    def __init__(self, customMsgEnd=""):
        msg = "Cannot load input: at least one displayable column is required."
        if customMsgEnd:
            msg += " " + customMsgEnd
        TableError.__init__(self, msg)


class InvalidFieldReferenceError(TableError):
    """A record lacks a field that the first record of the sequence defines."""

    def __init__(self, fieldName, rowIndex):
        TableError.__init__(
            self,
            "Cannot load input: invalid field detected: {} (row {})".format(
                fieldName, rowIndex
            ),
        )
        self.fieldName = fieldName
        self.rowIndex = rowIndex


# ---------------------------------------------------


class SettingException(TableError):
    """Standardize behavior of setting-family errors"""


class InvalidSettingError(SettingException):
    """Exception raised when a table option is unknown or has an invalid value"""

    def __init__(self, name, value, reason=""):
        msg = "Invalid table setting {}={!r}".format(name, value)
        if reason:
            msg += ": {}".format(reason)
        SettingException.__init__(self, msg)
        self.name = name
        self.value = value


class UnsupportedDialectError(SettingException, ValueError):
    """Exception raised when a dialect name cannot be parsed"""

    def __init__(self, name):
        SettingException.__init__(self, "Unsupported dialect: {!r}".format(name))
        self.name = name


class InvalidSettingsFileError(SettingException):
    """Not a valid table settings file"""

    def __init__(self, path, customMsgEnd=""):
        msg = "Attempted to load an invalid table settings file from: {}. ".format(path)
        msg += customMsgEnd
        SettingException.__init__(self, msg)
