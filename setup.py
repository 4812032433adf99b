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

"""Setup.py script for asciitab, the text/markdown/backlog table renderer."""
from setuptools import setup, find_packages
import os
import pathlib

# grab __version__ from meta.py, without calling __init__.py
this_file = pathlib.Path(__file__).parent.absolute()
exec(open(os.path.join(this_file, "asciitab", "meta.py"), "r").read())

with open(os.path.join(this_file, "README.rst")) as f:
    README = f.read()


setup(
    name="asciitab",
    version=__version__,  # noqa: undefined-name
    description="Render rows of records as text, markdown or backlog tables",
    author="TerraPower, LLC",
    license="Apache 2.0",
    long_description=README,
    python_requires=">=3.7",
    packages=find_packages(),
    install_requires=[
        "numpy",
        "ruamel.yaml",
        "voluptuous",
        "wcwidth",
    ],
    extras_require={
        "dev": [
            "black",
            "pytest",
            "pytest-cov",
            "ruff",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Markup",
        "License :: OSI Approved :: Apache Software License",
    ],
)
