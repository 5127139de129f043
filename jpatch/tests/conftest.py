# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json
import os
import shutil
from collections.abc import Sequence

from jsonschema import Draft4Validator as Validator
from jsonschema.validators import extend
from pytest import fixture, skip


pjoin = os.path.join

schema_dir = os.path.abspath(pjoin(os.path.dirname(__file__), ".."))


def testspath():
    return os.path.abspath(os.path.dirname(__file__))


@fixture
def slow(request):
    if request.config.getoption('--quick', default=False):
        skip('skipping slow test')


@fixture(scope='session')
def filespath():
    return os.path.join(testspath(), "files")


@fixture
def tempfiles(tmpdir, filespath):
    """Fixture for copying test files into a temporary directory"""
    dest = tmpdir.join('testfiles')
    shutil.copytree(filespath, str(dest))
    return str(dest)


def _load_schema(name):
    schema_path = os.path.join(schema_dir, name)
    with io.open(schema_path, encoding="utf8") as f:
        return json.load(f)


@fixture
def json_schema_patch(request):
    return _load_schema('patch_format.schema.json')


@fixture
def json_schema_diff(request):
    return _load_schema('diff_format.schema.json')


def is_sequence(checker, instance):
    return isinstance(instance, Sequence) and not isinstance(instance, str)

type_checker = Validator.TYPE_CHECKER.redefine("array", is_sequence)

CustomValidator = extend(Validator, type_checker=type_checker)


@fixture
def patch_validator(request, json_schema_patch):
    return CustomValidator(json_schema_patch)


@fixture
def diff_validator(request, json_schema_diff):
    return CustomValidator(json_schema_diff)


# Documents and patches covering every operation on objects and arrays,
# each pair applies successfully
_patch_cases = [
    ({"a": 1}, [{"op": "add", "path": "/b", "value": 2}]),
    ({"a": [1, 2, 3]}, [{"op": "remove", "path": "/a/1"}]),
    ({"a": 1, "b": 2}, [{"op": "move", "from": "/a", "path": "/c"}]),
    ({"a": 1, "b": 2}, [{"op": "move", "from": "/a", "path": "/b"}]),
    ({"a": {"b": 1}}, [{"op": "move", "from": "/a/b", "path": "/a"}]),
    ({"x": [[1, 2]]}, [{"op": "move", "from": "/x/0/0", "path": "/x/0"}]),
    ([1, 2, 3], [{"op": "move", "from": "/0", "path": "/-"}]),
    ([1, 2, 3], [{"op": "move", "from": "/2", "path": "/0"}]),
    ([1, 2, 3], [{"op": "move", "from": "/2", "path": "/-"}]),
    ([1], [{"op": "move", "from": "/0", "path": "/-"}]),
    ({"a": [1, 2, 3]}, [{"op": "move", "from": "/a/2", "path": "/a/-"}]),
    ({"a": {"b": 1}}, [{"op": "move", "from": "/a", "path": ""}]),
    ({"a": 1}, [{"op": "copy", "from": "/a", "path": "/b"}]),
    ({"a": [1], "b": 2}, [{"op": "copy", "from": "/b", "path": "/a/0"}]),
    ({"a": 1, "b": 2}, [{"op": "copy", "from": "/a", "path": "/b"}]),
    ({"a": 1}, [{"op": "replace", "path": "", "value": [1, 2]}]),
    ({"a": 1}, [{"op": "add", "path": "", "value": None}]),
    ({"a": 1}, [{"op": "add", "path": "/a", "value": {"x": []}}]),
    ([], [{"op": "add", "path": "/-", "value": 1},
          {"op": "add", "path": "/0", "value": 0},
          {"op": "add", "path": "/2", "value": 2}]),
    ({"a/b": {"m~n": 1}}, [{"op": "replace", "path": "/a~1b/m~0n", "value": 2},
                           {"op": "test", "path": "/a~1b", "value": {"m~n": 2}}]),
    ({"a": [{"b": 1}, {"c": 2}]}, [
        {"op": "remove", "path": "/a/0/b"},
        {"op": "move", "from": "/a/1", "path": "/a/0/moved"},
        {"op": "copy", "from": "/a/0", "path": "/copy"},
        {"op": "replace", "path": "/a/0/moved/c", "value": True},
        {"op": "test", "path": "/copy/moved/c", "value": 2},
    ]),
]


@fixture(params=_patch_cases, ids=lambda c: json.dumps(c[1])[:60])
def patch_case(request):
    return request.param
