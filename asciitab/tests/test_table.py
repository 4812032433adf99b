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

"""End-to-end tests of loading and rendering tables."""
import io
import sys
import unittest
from collections import namedtuple
from dataclasses import dataclass, field

import asciitab
from asciitab import Input, Table, TableConfig, tabulate
from asciitab.tests import mockRunLogs
from asciitab.utils.customExceptions import (
    ColumnCountMismatchError,
    NoColumnsError,
    TableError,
    UnsupportedInputShapeError,
    UnsupportedShapeError,
)

JSON_SAMPLE = """{
  "key": [
    "value1",
    "value2",
    "value3",
  ]
}"""

BASIC_HEADER = ["InstanceID", "InstanceName", "AttachedLB", "AttachedTG"]
BASIC_DATA = [
    ["i-1", "server-1", ["lb-1"], ["tg-1"]],
    ["i-2", "server-2", ["lb-2", "lb-3"], ["tg-2"]],
    ["i-3", "server-3", ["lb-4"], ["tg-3", "tg-4"]],
    ["i-4", "server-4", [], []],
    ["i-5", "server-5", ["lb-5"], []],
    ["i-6", "server-6", [], ["tg-5", "tg-6", "tg-7", "tg-8"]],
]

MERGED_HEADER = [
    "InstanceID",
    "InstanceName",
    "VPCID",
    "SecurityGroupID",
    "FlowDirection",
    "IPProtocol",
    "FromPort",
    "ToPort",
    "AddressType",
    "CidrBlock",
]
MERGED_DATA = [
    ["i-1", "server-1", "vpc-1", "sg-1", "Ingress", "tcp", 22, 22, "SecurityGroup", "sg-10"],
    ["i-1", "server-1", "vpc-1", "sg-1", "Egress", "-1", 0, 0, "Ipv4", "0.0.0.0/0"],
    ["i-1", "server-1", "vpc-1", "sg-2", "Ingress", "tcp", 443, 443, "Ipv4", "0.0.0.0/0"],
    ["i-1", "server-1", "vpc-1", "sg-2", "Egress", "-1", 0, 0, "Ipv4", "0.0.0.0/0"],
    ["i-2", "server-2", "vpc-1", "sg-3", "Ingress", "icmp", -1, -1, "SecurityGroup", "sg-11"],
    ["i-2", "server-2", "vpc-1", "sg-3", "Ingress", "tcp", 3389, 3389, "Ipv4", "10.1.0.0/16"],
    ["i-2", "server-2", "vpc-1", "sg-3", "Ingress", "tcp", 0, 65535, "PrefixList", "pl-id/pl-name"],
    ["i-2", "server-2", "vpc-1", "sg-3", "Egress", "-1", 0, 0, "Ipv4", "0.0.0.0/0"],
]

ESCAPED_HEADER = ["Name", "Value"]
ESCAPED_DATA = [
    ["wildcard domain", "*.example.com"],
    ["empty field placeholder", ""],
    ["html tag", '<span style="color:#d70910;">red</span>'],
    ["JSON", JSON_SAMPLE],
]


@dataclass
class Instance:
    InstanceID: str
    InstanceName: str
    AttachedLB: list = field(default_factory=list)
    AttachedTG: list = field(default_factory=list)


SecurityRule = namedtuple("SecurityRule", MERGED_HEADER)


@dataclass
class Escaped:
    Name: str
    Value: str


BASIC_RECORDS = [Instance(*row) for row in BASIC_DATA]
MERGED_RECORDS = [SecurityRule(*row) for row in MERGED_DATA]
ESCAPED_RECORDS = [Escaped(*row) for row in ESCAPED_DATA]

BASIC_TEXT = """\
+------------+--------------+------------+------------+
| InstanceID | InstanceName | AttachedLB | AttachedTG |
+------------+--------------+------------+------------+
| i-1        | server-1     | lb-1       | tg-1       |
+------------+--------------+------------+------------+
| i-2        | server-2     | lb-2       | tg-2       |
|            |              | lb-3       |            |
+------------+--------------+------------+------------+
| i-3        | server-3     | lb-4       | tg-3       |
|            |              |            | tg-4       |
+------------+--------------+------------+------------+
| i-4        | server-4     | -          | -          |
+------------+--------------+------------+------------+
| i-5        | server-5     | lb-5       | -          |
+------------+--------------+------------+------------+
| i-6        | server-6     | -          | tg-5       |
|            |              |            | tg-6       |
|            |              |            | tg-7       |
|            |              |            | tg-8       |
+------------+--------------+------------+------------+
"""

BASIC_COMPRESSED = """\
+------------+--------------+------------+------------+
| InstanceID | InstanceName | AttachedLB | AttachedTG |
+------------+--------------+------------+------------+
| i-1        | server-1     | lb-1       | tg-1       |
| i-2        | server-2     | lb-2       | tg-2       |
|            |              | lb-3       |            |
| i-3        | server-3     | lb-4       | tg-3       |
|            |              |            | tg-4       |
| i-4        | server-4     | -          | -          |
| i-5        | server-5     | lb-5       | -          |
| i-6        | server-6     | -          | tg-5       |
|            |              |            | tg-6       |
|            |              |            | tg-7       |
|            |              |            | tg-8       |
+------------+--------------+------------+------------+
"""

BASIC_MARKDOWN = """\
| InstanceID | InstanceName | AttachedLB   | AttachedTG                   |
|------------|--------------|--------------|------------------------------|
| i-1        | server-1     | lb-1         | tg-1                         |
| i-2        | server-2     | lb-2<br>lb-3 | tg-2                         |
| i-3        | server-3     | lb-4         | tg-3<br>tg-4                 |
| i-4        | server-4     | \\-           | \\-                           |
| i-5        | server-5     | lb-5         | \\-                           |
| i-6        | server-6     | \\-           | tg-5<br>tg-6<br>tg-7<br>tg-8 |
"""

BASIC_BACKLOG = """\
| InstanceID | InstanceName | AttachedLB   | AttachedTG                   |h
| i-1        | server-1     | lb-1         | tg-1                         |
| i-2        | server-2     | lb-2&br;lb-3 | tg-2                         |
| i-3        | server-3     | lb-4         | tg-3&br;tg-4                 |
| i-4        | server-4     | -            | -                            |
| i-5        | server-5     | lb-5         | -                            |
| i-6        | server-6     | -            | tg-5&br;tg-6&br;tg-7&br;tg-8 |
"""

BASIC_NO_HEADER = """\
+-----+----------+------+------+
| i-1 | server-1 | lb-1 | tg-1 |
+-----+----------+------+------+
| i-2 | server-2 | lb-2 | tg-2 |
|     |          | lb-3 |      |
+-----+----------+------+------+
| i-3 | server-3 | lb-4 | tg-3 |
|     |          |      | tg-4 |
+-----+----------+------+------+
| i-4 | server-4 | -    | -    |
+-----+----------+------+------+
| i-5 | server-5 | lb-5 | -    |
+-----+----------+------+------+
| i-6 | server-6 | -    | tg-5 |
|     |          |      | tg-6 |
|     |          |      | tg-7 |
|     |          |      | tg-8 |
+-----+----------+------+------+
"""

BASIC_DELIMITED = """\
+------------+--------------+------------+---------------------+
| InstanceID | InstanceName | AttachedLB | AttachedTG          |
+------------+--------------+------------+---------------------+
| i-1        | server-1     | lb-1       | tg-1                |
+------------+--------------+------------+---------------------+
| i-2        | server-2     | lb-2,lb-3  | tg-2                |
+------------+--------------+------------+---------------------+
| i-3        | server-3     | lb-4       | tg-3,tg-4           |
+------------+--------------+------------+---------------------+
| i-4        | server-4     | -          | -                   |
+------------+--------------+------------+---------------------+
| i-5        | server-5     | lb-5       | -                   |
+------------+--------------+------------+---------------------+
| i-6        | server-6     | -          | tg-5,tg-6,tg-7,tg-8 |
+------------+--------------+------------+---------------------+
"""

BASIC_IGNORED = """\
+------------+
| InstanceID |
+------------+
| i-1        |
+------------+
| i-2        |
+------------+
| i-3        |
+------------+
| i-4        |
+------------+
| i-5        |
+------------+
| i-6        |
+------------+
"""

MERGED_ON = """\
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
| InstanceID | InstanceName | VPCID | SecurityGroupID | FlowDirection | IPProtocol | FromPort | ToPort | AddressType   | CidrBlock     |
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
| i-1        | server-1     | vpc-1 | sg-1            | Ingress       | tcp        |       22 |     22 | SecurityGroup | sg-10         |
+            +              +       +                 +---------------+------------+----------+--------+---------------+---------------+
|            |              |       |                 | Egress        |         -1 |        0 |      0 | Ipv4          | 0.0.0.0/0     |
+            +              +       +-----------------+---------------+------------+----------+--------+---------------+---------------+
|            |              |       | sg-2            | Ingress       | tcp        |      443 |    443 | Ipv4          | 0.0.0.0/0     |
+            +              +       +                 +---------------+------------+----------+--------+---------------+---------------+
|            |              |       |                 | Egress        |         -1 |        0 |      0 | Ipv4          | 0.0.0.0/0     |
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
| i-2        | server-2     | vpc-1 | sg-3            | Ingress       | icmp       |       -1 |     -1 | SecurityGroup | sg-11         |
+            +              +       +                 +---------------+------------+----------+--------+---------------+---------------+
|            |              |       |                 | Ingress       | tcp        |     3389 |   3389 | Ipv4          | 10.1.0.0/16   |
+            +              +       +                 +---------------+------------+----------+--------+---------------+---------------+
|            |              |       |                 | Ingress       | tcp        |        0 |  65535 | PrefixList    | pl-id/pl-name |
+            +              +       +                 +---------------+------------+----------+--------+---------------+---------------+
|            |              |       |                 | Egress        |         -1 |        0 |      0 | Ipv4          | 0.0.0.0/0     |
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
"""

MERGED_COMPRESSED = """\
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
| InstanceID | InstanceName | VPCID | SecurityGroupID | FlowDirection | IPProtocol | FromPort | ToPort | AddressType   | CidrBlock     |
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
| i-1        | server-1     | vpc-1 | sg-1            | Ingress       | tcp        |       22 |     22 | SecurityGroup | sg-10         |
|            |              |       |                 | Egress        |         -1 |        0 |      0 | Ipv4          | 0.0.0.0/0     |
|            |              |       | sg-2            | Ingress       | tcp        |      443 |    443 | Ipv4          | 0.0.0.0/0     |
|            |              |       |                 | Egress        |         -1 |        0 |      0 | Ipv4          | 0.0.0.0/0     |
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
| i-2        | server-2     | vpc-1 | sg-3            | Ingress       | icmp       |       -1 |     -1 | SecurityGroup | sg-11         |
|            |              |       |                 | Ingress       | tcp        |     3389 |   3389 | Ipv4          | 10.1.0.0/16   |
|            |              |       |                 | Ingress       | tcp        |        0 |  65535 | PrefixList    | pl-id/pl-name |
|            |              |       |                 | Egress        |         -1 |        0 |      0 | Ipv4          | 0.0.0.0/0     |
+------------+--------------+-------+-----------------+---------------+------------+----------+--------+---------------+---------------+
"""

ESCAPED_MULTILINE = """\
+-------------------------+-----------------------------------------+
| Name                    | Value                                   |
+-------------------------+-----------------------------------------+
| wildcard domain         | *.example.com                           |
+-------------------------+-----------------------------------------+
| empty field placeholder | -                                       |
+-------------------------+-----------------------------------------+
| html tag                | <span style="color:#d70910;">red</span> |
+-------------------------+-----------------------------------------+
| JSON                    | {                                       |
|                         |   "key": [                              |
|                         |     "value1",                           |
|                         |     "value2",                           |
|                         |     "value3",                           |
|                         |   ]                                     |
|                         | }                                       |
+-------------------------+-----------------------------------------+
"""

ESCAPED_MARKDOWN = """\
| Name                              | Value                                                                                                                                                                                                       |
|-----------------------------------|-------------------------------------------------------------------------------------------------------------------------------------------------------------------------------------------------------------|
| wildcard&nbsp;domain              | &#42;.example.com                                                                                                                                                                                           |
| empty&nbsp;field&nbsp;placeholder | \\-                                                                                                                                                                                                          |
| html&nbsp;tag                     | &lt;span&nbsp;style=&quot;color:#d70910;&quot;&gt;red&lt;/span&gt;                                                                                                                                          |
| JSON                              | {<br>&nbsp;&nbsp;&quot;key&quot;:&nbsp;[<br>&nbsp;&nbsp;&nbsp;&nbsp;&quot;value1&quot;,<br>&nbsp;&nbsp;&nbsp;&nbsp;&quot;value2&quot;,<br>&nbsp;&nbsp;&nbsp;&nbsp;&quot;value3&quot;,<br>&nbsp;&nbsp;]<br>} |
"""


def _out(data, **options):
    table = Table(**options)
    table.load(data)
    return table.out()


class TestExplicitInput(unittest.TestCase):
    def _basic(self, **options):
        return _out(Input(header=BASIC_HEADER, data=BASIC_DATA), **options)

    def test_text(self):
        self.assertEqual(self._basic(), BASIC_TEXT)

    def test_compressed(self):
        self.assertEqual(self._basic(dialect="compressed"), BASIC_COMPRESSED)

    def test_markdown(self):
        self.assertEqual(self._basic(dialect="markdown"), BASIC_MARKDOWN)

    def test_backlog(self):
        self.assertEqual(self._basic(dialect="backlog"), BASIC_BACKLOG)

    def test_hiddenHeader(self):
        expected = "".join(BASIC_TEXT.splitlines(True)[2:])
        self.assertEqual(self._basic(headerVisible=False), expected)

    def test_blankPlaceholder(self):
        expected = BASIC_TEXT.replace("| -          |", "|            |").replace(
            "| -          |", "|            |"
        )
        self.assertEqual(self._basic(emptyPlaceholder=""), expected)

    def test_delimiter(self):
        self.assertEqual(self._basic(multiValueDelimiter=","), BASIC_DELIMITED)

    def test_ignoreColumns(self):
        self.assertEqual(self._basic(ignoreColumns=[1, 2, 3]), BASIC_IGNORED)

    def test_noHeader(self):
        self.assertEqual(_out(Input(header=[], data=BASIC_DATA)), BASIC_NO_HEADER)

    def test_explicitMapping(self):
        self.assertEqual(_out({"header": BASIC_HEADER, "data": BASIC_DATA}), BASIC_TEXT)

    def test_mergeOff(self):
        out = _out(Input(header=MERGED_HEADER, data=MERGED_DATA))
        self.assertEqual(out.count("| i-1        |"), 4)

    def test_mergeOn(self):
        out = _out(Input(header=MERGED_HEADER, data=MERGED_DATA), mergeColumns=[0, 1, 2, 3])
        self.assertEqual(out, MERGED_ON)

    def test_mergeCompressed(self):
        out = _out(
            Input(header=MERGED_HEADER, data=MERGED_DATA),
            dialect="compressed",
            mergeColumns=[0, 1, 2, 3],
        )
        self.assertEqual(out, MERGED_COMPRESSED)

    def test_multiline(self):
        out = _out(Input(header=ESCAPED_HEADER, data=ESCAPED_DATA))
        self.assertEqual(out, ESCAPED_MULTILINE)

    def test_escaped(self):
        out = _out(
            Input(header=ESCAPED_HEADER, data=ESCAPED_DATA),
            dialect="markdown",
            escapeEnabled=True,
        )
        self.assertEqual(out, ESCAPED_MARKDOWN)


class TestRecordInput(unittest.TestCase):
    def test_dataclasses(self):
        self.assertEqual(_out(BASIC_RECORDS), BASIC_TEXT)
        self.assertEqual(_out(BASIC_RECORDS, dialect="markdown"), BASIC_MARKDOWN)
        self.assertEqual(_out(BASIC_RECORDS, dialect="backlog"), BASIC_BACKLOG)
        self.assertEqual(_out(BASIC_RECORDS, ignoreColumns=[1, 2, 3]), BASIC_IGNORED)

    def test_tupleOfRecords(self):
        self.assertEqual(_out(tuple(BASIC_RECORDS), dialect="compressed"), BASIC_COMPRESSED)

    def test_mappings(self):
        rows = [dict(zip(BASIC_HEADER, row)) for row in BASIC_DATA]
        self.assertEqual(_out(rows), BASIC_TEXT)

    def test_namedtuples(self):
        self.assertEqual(_out(MERGED_RECORDS, mergeColumns=[0, 1, 2, 3]), MERGED_ON)
        self.assertEqual(
            _out(MERGED_RECORDS, dialect="compressed", mergeColumns=[0, 1, 2, 3]),
            MERGED_COMPRESSED,
        )

    def test_escaped(self):
        self.assertEqual(_out(ESCAPED_RECORDS), ESCAPED_MULTILINE)
        self.assertEqual(
            _out(ESCAPED_RECORDS, dialect="markdown", escapeEnabled=True), ESCAPED_MARKDOWN
        )

    def test_singleRecord(self):
        expected = "".join(BASIC_TEXT.splitlines(True)[:5])
        self.assertEqual(_out(BASIC_RECORDS[0]), expected)

    def test_nestedRecords(self):
        @dataclass
        class Child:
            ObjectID: int
            ObjectName: str

        @dataclass
        class Bucket:
            BucketName: str
            Objects: list

        buckets = [Bucket("bucket1", [Child(11, "bucket1-obj1"), Child(12, "bucket1-obj2")])]
        table = Table()
        with self.assertRaises(UnsupportedShapeError):
            table.load(buckets)


class TestTable(unittest.TestCase):
    def test_properties(self):
        table = Table(dialect="markdown")
        self.assertFalse(table.loaded)
        self.assertEqual(table.numRows, 0)
        self.assertEqual(table.border, "")

        table.load(Input(header=BASIC_HEADER, data=BASIC_DATA))
        self.assertTrue(table.loaded)
        self.assertEqual(table.header, BASIC_HEADER)
        self.assertEqual(table.colWidths, [10, 12, 12, 28])
        self.assertEqual(table.numRows, 6)
        self.assertEqual(table.numColumns, 4)
        self.assertEqual(table.border, BASIC_MARKDOWN.splitlines(True)[1])
        self.assertIn("6x4", repr(table))

    def test_configAndOptions(self):
        config = TableConfig(dialect="backlog")
        table = Table(config, headerVisible=False)
        self.assertIs(table.dialect, asciitab.Dialect.BACKLOG)
        self.assertFalse(table.config.headerVisible)
        self.assertTrue(config.headerVisible)

    def test_renderToStream(self):
        table = Table()
        table.load(BASIC_RECORDS)
        stream = io.StringIO()
        table.render(stream)
        self.assertEqual(stream.getvalue(), BASIC_TEXT)

    def test_renderDefaultsToStdout(self):
        table = Table()
        table.load(BASIC_RECORDS)
        stdout, sys.stdout = sys.stdout, io.StringIO()
        try:
            table.render()
            out = sys.stdout.getvalue()
        finally:
            sys.stdout = stdout
        self.assertEqual(out, BASIC_TEXT)

    def test_renderIsIdempotent(self):
        table = Table(mergeColumns=[0, 1])
        table.load(MERGED_RECORDS)
        self.assertEqual(table.out(), table.out())

    def test_emptyInputs(self):
        for data in [None, [], Input(), Input(header=["a"], data=[])]:
            table = Table()
            table.load(data)
            self.assertTrue(table.loaded)
            self.assertEqual(table.out(), "")

    def test_reloadReplaces(self):
        table = Table()
        table.load(BASIC_RECORDS)
        table.load(Input(header=["k"], data=[["v"]]))
        self.assertEqual(table.out(), "+---+\n| k |\n+---+\n| v |\n+---+\n")

    def test_failedLoadLeavesTableEmpty(self):
        table = Table()
        table.load(BASIC_RECORDS)
        bad = Input(header=BASIC_HEADER, data=BASIC_DATA[:4] + [["i-5", "server-5", ["lb-5"]]])
        with self.assertRaises(ColumnCountMismatchError):
            table.load(bad)
        self.assertFalse(table.loaded)
        self.assertEqual(table.numRows, 0)
        self.assertEqual(table.out(), "")

    def test_loadErrors(self):
        cases = [
            (Input(header=BASIC_HEADER[:3], data=BASIC_DATA), ColumnCountMismatchError),
            ([BASIC_RECORDS[0], 1, "string", 2.5], UnsupportedInputShapeError),
            ("abc", UnsupportedInputShapeError),
            (Input(header=["a"], data=[["x"]]), None),
        ]
        for data, error in cases:
            table = Table()
            if error is None:
                table.load(data)
                continue
            with self.assertRaises(error):
                table.load(data)
            self.assertTrue(issubclass(error, TableError))

    def test_allIgnored(self):
        with self.assertRaises(NoColumnsError):
            Table(ignoreColumns=[0, 1, 2, 3]).load(BASIC_RECORDS)

    def test_loadLogsSummary(self):
        with mockRunLogs.BufferLog() as mock:
            Table().load(BASIC_RECORDS)
            self.assertIn("Loaded 6 rows and 4 columns from records", mock.getStdout())

    def test_ignoreOutOfRange(self):
        with mockRunLogs.BufferLog() as mock:
            out = _out(BASIC_RECORDS, ignoreColumns=[1, 2, 3, 10])
            self.assertIn("ignoreColumns refers to column 10", mock.getStdout())
        self.assertEqual(out, BASIC_IGNORED)


class TestTabulate(unittest.TestCase):
    def test_tabulate(self):
        self.assertEqual(tabulate(BASIC_RECORDS, dialect="markdown"), BASIC_MARKDOWN)

    def test_wideCharacters(self):
        out = tabulate([{"name": "日本", "n": 1}, {"name": "abc", "n": 22}])
        self.assertEqual(
            out,
            "+------+----+\n"
            "| name | n  |\n"
            "+------+----+\n"
            "| 日本 |  1 |\n"
            "+------+----+\n"
            "| abc  | 22 |\n"
            "+------+----+\n",
        )

    def test_floats(self):
        out = tabulate(Input(header=["x"], data=[[1.0], [0.25], [1e-7]]), dialect="backlog")
        self.assertEqual(out, "| x         |h\n|         1 |\n|      0.25 |\n| 0.0000001 |\n")
