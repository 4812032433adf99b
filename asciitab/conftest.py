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
Per-directory pytest plugin configuration used only during development/testing.

Tests must be invoked via pytest for this to have any affect, for example::

    $ pytest --cov=asciitab asciitab
"""
from asciitab import runLog


def pytest_sessionstart(session):
    bootstrapTestEnv()


def bootstrapTestEnv():
    """Start every test session from a quiet log with no remembered single-print warnings."""
    runLog.LOG = runLog.logFactory()
    runLog.setVerbosity(runLog.DEFAULT_VERBOSITY)
