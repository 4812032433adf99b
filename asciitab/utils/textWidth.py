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

"""Measuring and classifying the strings that end up in table cells."""
import wcwidth


def displayWidth(s):
    r"""Number of terminal columns a single-line string occupies.

    East Asian wide characters and most emoji count as two columns, combining marks as zero.
    Non-printable characters, for which ``wcwidth`` returns -1, count as zero.

    >>> displayWidth("abc"), displayWidth("日本")
    (3, 4)
    """
    width = wcwidth.wcswidth(s)
    if width >= 0:
        return width

    width = 0
    for char in s:
        charWidth = wcwidth.wcwidth(char)
        if charWidth > 0:
            width += charWidth
    return width


def isNumeric(s):
    """Whether a cell reads as a number and should be flushed right.

    This is a deliberately small heuristic rather than a numeric grammar: an optional leading minus
    sign, then ASCII digits with at most one decimal point, and at least one digit. Version strings
    and IP addresses such as ``0.0.1`` stay left-aligned.

    >>> isNumeric("-12.5"), isNumeric("0.0.1"), isNumeric("-"), isNumeric("1e5")
    (True, False, False, False)
    """
    if not s:
        return False

    start = 1 if s[0] == "-" else 0
    numPoints = 0
    hasDigit = False
    for char in s[start:]:
        if char == ".":
            numPoints += 1
            if numPoints > 1:
                return False
        elif "0" <= char <= "9":
            hasDigit = True
        else:
            return False

    return hasDigit
