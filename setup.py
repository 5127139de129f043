#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib
import re

HERE = pathlib.Path(__file__).parent.absolute()

JPATCH_PATH = HERE / "jpatch"


def get_version(path):
    "Read __version__ from a file without importing the package."
    with open(path, encoding="utf8") as f:
        match = re.search(r'^__version__ = [\'"]([^\'"]*)[\'"]', f.read(), re.M)
    return match.group(1)


VERSION = get_version(JPATCH_PATH / '_version.py')

with open(HERE / 'README.md', encoding="utf8") as f:
    LONG_DESCRIPTION = f.read()


if __name__ == '__main__':
    setup(
      name="jpatch",
      version=VERSION,
      description="Apply, revert and diff JSON patches",
      long_description=LONG_DESCRIPTION,
      long_description_content_type="text/markdown",
      license="BSD",
      python_requires=">=3.6",
      packages=find_packages(),
      package_data={
          "jpatch": [
              "*.schema.json",
              "templates/*",
              "tests/files/*",
          ],
      },
      install_requires=[
          "colorama",
          "jinja2>=2.9",
          "jupyter_core",
          "traitlets>=5",
      ],
      extras_require={
          "test": [
              "jsonschema",
              "pytest>=6.0",
          ],
      },
      entry_points={
          "console_scripts": [
              "jpatch = jpatch.__main__:main_dispatch",
              "jpatch-apply = jpatch.patchapp:main",
              "jpatch-revert = jpatch.revertapp:main",
              "jpatch-diff = jpatch.diffapp:main",
              "jpatch-export = jpatch.exportapp:main",
              "jpatch-prettify = jpatch.prettifyapp:main",
          ],
      },
      classifiers=[
          "License :: OSI Approved :: BSD License",
          "Programming Language :: Python :: 3",
      ],
    )
