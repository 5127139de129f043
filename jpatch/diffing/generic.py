# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import difflib
from itertools import groupby

from ..diff_format import (
    SequenceDiffBuilder, MappingDiffBuilder, validate_diff, op_replace, ROOT_KEY)
from ..utils import canonical_json, json_equal, escape_token

from .config import DiffConfig

__all__ = ["diff"]


def compare_values_approximate(x, y, threshold=0.5, maxlen=None):
    "Compare two json values with approximate heuristics."
    x = canonical_json(x)
    y = canonical_json(y)

    # Cutoff on equality: Python has fast hash functions for strings
    if len(x) == len(y) and x == y:
        return True

    s = difflib.SequenceMatcher(None, x, y, autojunk=False)

    # Use only the fast ratio approximations first
    if s.real_quick_ratio() < threshold:
        return False
    if s.quick_ratio() < threshold:
        return False

    if maxlen is not None and len(x) > maxlen and len(y) > maxlen:
        # We know from above that there is not an exact similarity
        return False

    return s.ratio() > threshold


def diff(a, b, path="", config=None):
    """Compute the delta between two json values.

    Returns None when the values are equal. Otherwise returns a list
    of delta entries: a nested delta when both values are objects or
    both are arrays, or a single replace entry with key None
    replacing the value as a whole.
    """
    if config is None:
        config = DiffConfig()

    if json_equal(a, b):
        return None

    d = diff_values(a, b, path=path, config=config)

    # We can turn this off for performance after the library has been well tested:
    validate_diff(d)

    return d or None


def _container_pair(a, b):
    return ((isinstance(a, dict) and isinstance(b, dict)) or
            (isinstance(a, list) and isinstance(b, list)))


def diff_values(a, b, path="", config=None):
    "Compute the delta of two json values of any type, empty when equal."
    if config is None:
        config = DiffConfig()

    if _container_pair(a, b) and not config.is_atomic(a, path):
        if isinstance(a, dict):
            return diff_dicts(a, b, path=path, config=config)
        return diff_lists(a, b, path=path, config=config)
    if json_equal(a, b):
        return []
    return [op_replace(ROOT_KEY, b)]


def _find_moves(akeys, bkeys, removed, inserted):
    """Pair removed items with inserted items of equal value.

    Returns the moves as (base index, new index) pairs together with
    the remaining removals and insertions.
    """
    available = {}
    for pos, (_, j) in enumerate(inserted):
        available.setdefault(bkeys[j], []).append(pos)

    moves = []
    remaining = []
    taken = set()
    for i in removed:
        candidates = available.get(akeys[i])
        if candidates:
            pos = candidates.pop(0)
            taken.add(pos)
            moves.append((i, inserted[pos][1]))
        else:
            remaining.append(i)

    inserted = [x for pos, x in enumerate(inserted) if pos not in taken]
    return moves, remaining, inserted


def _ranges(indices):
    "Group sorted indices into (start, length) runs of consecutive values."
    for _, run in groupby(enumerate(sorted(indices)), lambda x: x[1] - x[0]):
        run = [i for _, i in run]
        yield run[0], len(run)


def diff_lists(a, b, path="", config=None):
    """Compute delta of two lists with configurable behaviour.

    A shallow diff is computed with difflib on the canonical json of
    the items. Items in replaced stretches are paired up and diffed
    recursively when similar, equal removed and inserted items are
    reported as moves.
    """
    if config is None:
        config = DiffConfig()

    subpath = "/".join((path, "*"))
    akeys = [canonical_json(x) for x in a]
    bkeys = [canonical_json(x) for x in b]
    s = difflib.SequenceMatcher(None, akeys, bkeys, autojunk=False)

    removed = []    # indices into a
    inserted = []   # (index into a to insert before, index into b)
    patched = []    # (index into a, delta)
    for action, abegin, aend, bbegin, bend in s.get_opcodes():
        if action == "equal":
            continue
        n = min(aend - abegin, bend - bbegin) if action == "replace" else 0
        for k in range(n):
            i, j = abegin + k, bbegin + k
            if json_equal(a[i], b[j]):
                continue
            if config.is_similar(a[i], b[j], subpath):
                patched.append((i, diff_values(a[i], b[j], path=subpath, config=config)))
            else:
                removed.append(i)
                inserted.append((i, j))
        removed.extend(range(abegin + n, aend))
        inserted.extend((aend, j) for j in range(bbegin + n, bend))

    moves = []
    if config.detect_moves:
        moves, removed, inserted = _find_moves(akeys, bkeys, removed, inserted)

    di = SequenceDiffBuilder()
    for i, d in patched:
        di.patch(i, d)
    for i, j in moves:
        di.move(i, j)
    for start, length in _ranges(removed):
        di.removerange(start, length)
    for key, group in groupby(inserted, lambda x: x[0]):
        di.addrange(key, [b[j] for _, j in group])

    return di.validated()


def diff_dicts(a, b, path="", config=None):
    """Compute delta of two dicts with configurable behaviour.

    Make a one-level diff of dicts a and b, recursing into values
    that are containers of the same type on both sides. Other values
    that differ are replaced.
    """
    if config is None:
        config = DiffConfig()

    if not isinstance(a, dict) or not isinstance(b, dict):
        raise TypeError('Arguments to diff_dicts need to be dicts, got %r and %r' % (a, b))
    akeys = set(a.keys())
    bkeys = set(b.keys())

    di = MappingDiffBuilder()

    # Sorting keys in loops to get a deterministic diff result
    for key in sorted(akeys - bkeys):
        di.remove(key)

    # Handle values for keys in both a and b
    for key in sorted(akeys & bkeys):
        avalue = a[key]
        bvalue = b[key]
        subpath = "/".join((path, escape_token(key)))
        if _container_pair(avalue, bvalue) and not config.is_atomic(avalue, path=subpath):
            di.patch(key, diff_values(avalue, bvalue, path=subpath, config=config))
        elif not json_equal(avalue, bvalue):
            di.replace(key, bvalue)

    for key in sorted(bkeys - akeys):
        di.add(key, b[key])

    return di.validated()
