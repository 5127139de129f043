# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
import random

from jpatch import apply, revert
from jpatch.utils import json_equal


def check_apply_and_revert(document, patch):
    "Check that the inverse patch restores document and that nothing is mutated."
    before = copy.deepcopy(document)
    patch_before = copy.deepcopy(patch)
    after = apply(document, patch)
    inverse = revert(document, patch)
    assert json_equal(apply(after, inverse), document)
    assert document == before
    assert patch == patch_before
    return after, inverse


def random_value(rng, depth=0):
    "Generate a random json value of limited depth."
    kinds = ["int", "str", "bool", "null"]
    if depth < 3:
        kinds += ["list", "dict"] * 2
    kind = rng.choice(kinds)
    if kind == "int":
        return rng.randint(-5, 5)
    elif kind == "str":
        return rng.choice(["a", "b", "x/y", "m~n", ""])
    elif kind == "bool":
        return rng.choice([True, False])
    elif kind == "null":
        return None
    elif kind == "list":
        return [random_value(rng, depth + 1) for _ in range(rng.randint(0, 4))]
    else:
        return {rng.choice("abcde"): random_value(rng, depth + 1)
                for _ in range(rng.randint(0, 4))}


def _locations(value, tokens=()):
    "Yield the token paths of all values in value, including the root."
    yield list(tokens)
    if isinstance(value, dict):
        for k, v in value.items():
            yield from _locations(v, tokens + (k,))
    elif isinstance(value, list):
        for i, v in enumerate(value):
            yield from _locations(v, tokens + (str(i),))


def _containers(value, tokens=()):
    "Yield (tokens, container) for all containers in value."
    if isinstance(value, (dict, list)):
        yield list(tokens), value
    if isinstance(value, dict):
        for k, v in value.items():
            yield from _containers(v, tokens + (k,))
    elif isinstance(value, list):
        for i, v in enumerate(value):
            yield from _containers(v, tokens + (str(i),))


def random_operation(rng, document):
    """Generate a random operation that is likely, though not certain,
    to apply to document.
    """
    from jpatch.utils import join_pointer
    from jpatch.patching import resolve

    locations = list(_locations(document))
    containers = list(_containers(document))
    op = rng.choice(["add", "remove", "replace", "move", "copy", "test"])

    def insert_location():
        if not containers:
            return ""
        tokens, container = rng.choice(containers)
        if isinstance(container, list):
            key = rng.choice([str(rng.randint(0, len(container))), "-"])
        else:
            key = rng.choice("abcdef")
        return join_pointer(tokens + [key])

    if op == "add":
        return {"op": op, "path": insert_location(), "value": random_value(rng, 2)}
    location = rng.choice(locations)
    pointer = join_pointer(location)
    if op == "remove":
        return {"op": op, "path": pointer}
    elif op == "replace":
        return {"op": op, "path": pointer, "value": random_value(rng, 2)}
    elif op == "test":
        return {"op": op, "path": pointer, "value": resolve(document, location)}
    else:
        return {"op": op, "from": pointer, "path": insert_location()}


def random_patch_cases(seed, count):
    "Generate (document, patch) pairs where the patch applies to the document."
    from jpatch import PatchError
    rng = random.Random(seed)
    cases = []
    while len(cases) < count:
        document = random_value(rng)
        patch = []
        current = document
        for _ in range(rng.randint(1, 6)):
            e = random_operation(rng, current)
            try:
                current = apply(current, [e])
            except PatchError:
                continue
            patch.append(e)
        if patch:
            cases.append((document, patch))
    return cases
