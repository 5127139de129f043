# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
import re

from .patch_format import (
    PatchOp, PatchError, PathNotFoundError, InvalidPathError,
    InvalidOperationError, TestFailedError,
    op_add, op_remove, op_replace, op_move, op_test,
    validate_patch, to_patch_entries,
)
from .utils import (
    split_pointer, join_pointer, json_equal, is_strict_prefix_array,
    canonical_json,
)
from .log import debug


__all__ = ["apply", "revert"]


_array_index_pattern = re.compile(r"^(0|[1-9][0-9]*)$")


def _array_index(token, array, pointer, insert=False):
    """Translate a reference token to an index into array.

    With insert=True the index may point one past the last element,
    and the token '-' refers to that position.
    """
    if token == "-":
        if insert:
            return len(array)
        raise PathNotFoundError(
            "Path {!r} refers to the nonexistent element past the end of an array.".format(pointer))
    if not _array_index_pattern.match(token):
        raise InvalidPathError(
            "Invalid array index {!r} in path {!r}.".format(token, pointer))
    index = int(token)
    size = len(array) + 1 if insert else len(array)
    if index >= size:
        raise PathNotFoundError(
            "Array index {} out of range in path {!r}.".format(index, pointer))
    return index


def _child(node, token, pointer):
    if isinstance(node, dict):
        if token not in node:
            raise PathNotFoundError("Path {!r} does not exist.".format(pointer))
        return token
    elif isinstance(node, list):
        return _array_index(token, node, pointer)
    else:
        raise PathNotFoundError(
            "Path {!r} does not exist, cannot index into a {}.".format(
                pointer, type(node).__name__))


def resolve(obj, tokens, pointer=None):
    "Return the value in obj addressed by the list of reference tokens."
    if pointer is None:
        pointer = join_pointer(tokens)
    for token in tokens:
        obj = obj[_child(obj, token, pointer)]
    return obj


def _update_at(node, tokens, pointer, update):
    """Return a copy of node where the value addressed by tokens is replaced
    with update(value).

    Only the containers along the path are copied, all other
    values are shared with node.
    """
    if not tokens:
        return update(node)
    key = _child(node, tokens[0], pointer)
    newnode = dict(node) if isinstance(node, dict) else list(node)
    newnode[key] = _update_at(node[key], tokens[1:], pointer, update)
    return newnode


def _add(obj, tokens, pointer, value):
    if not tokens:
        return value

    key = tokens[-1]

    def update(parent):
        if isinstance(parent, dict):
            newparent = dict(parent)
            newparent[key] = value
        elif isinstance(parent, list):
            index = _array_index(key, parent, pointer, insert=True)
            newparent = parent[:index] + [value] + parent[index:]
        else:
            raise PathNotFoundError(
                "Cannot add at path {!r}, parent is a {}.".format(
                    pointer, type(parent).__name__))
        return newparent

    return _update_at(obj, tokens[:-1], pointer, update)


def _remove(obj, tokens, pointer):
    "Remove the value at tokens, returns the new document and the removed value."
    if not tokens:
        raise InvalidOperationError("Cannot remove the document root.")

    key = tokens[-1]
    removed = []

    def update(parent):
        k = _child(parent, key, pointer)
        removed.append(parent[k])
        if isinstance(parent, dict):
            newparent = dict(parent)
            del newparent[k]
        else:
            newparent = parent[:k] + parent[k+1:]
        return newparent

    newobj = _update_at(obj, tokens[:-1], pointer, update)
    return newobj, removed[0]


def _replace(obj, tokens, pointer, value):
    if not tokens:
        return value

    key = tokens[-1]

    def update(parent):
        k = _child(parent, key, pointer)
        newparent = dict(parent) if isinstance(parent, dict) else list(parent)
        newparent[k] = value
        return newparent

    return _update_at(obj, tokens[:-1], pointer, update)


def _check_move(from_tokens, tokens, e):
    if from_tokens == tokens:
        raise InvalidOperationError(
            "Cannot move {!r} onto itself.".format(e["from"]))
    if is_strict_prefix_array(from_tokens, tokens):
        raise InvalidOperationError(
            "Cannot move {!r} into its own child {!r}.".format(e["from"], e.path))


def apply_operation(obj, e):
    "Apply a single validated operation to obj, returning the new document."
    op = e.op
    pointer = e.path
    tokens = split_pointer(pointer)

    if op == PatchOp.ADD:
        return _add(obj, tokens, pointer, e.value)

    elif op == PatchOp.REMOVE:
        newobj, _ = _remove(obj, tokens, pointer)
        return newobj

    elif op == PatchOp.REPLACE:
        return _replace(obj, tokens, pointer, e.value)

    elif op == PatchOp.MOVE:
        from_tokens = split_pointer(e["from"])
        resolve(obj, from_tokens, e["from"])
        _check_move(from_tokens, tokens, e)
        newobj, value = _remove(obj, from_tokens, e["from"])
        return _add(newobj, tokens, pointer, value)

    elif op == PatchOp.COPY:
        value = resolve(obj, split_pointer(e["from"]), e["from"])
        return _add(obj, tokens, pointer, copy.deepcopy(value))

    elif op == PatchOp.TEST:
        value = resolve(obj, tokens, pointer)
        if not json_equal(value, e.value):
            raise TestFailedError(
                "Test failed at path {!r}: expected {}, found {}.".format(
                    pointer, canonical_json(e.value), canonical_json(value)))
        return obj

    else:
        raise InvalidOperationError("Invalid op {}.".format(op))


def apply(obj, patch):
    """Produce a patched version of obj with the given JSON patch.

    The operations are applied in order. Each operation produces a new
    document sharing all unmodified values with its input, so obj itself
    is never modified. If any operation fails, a PatchError identifying
    the operation by index is raised and no result is produced.
    """
    validate_patch(patch)
    patch = to_patch_entries(patch)
    debug("Applying patch with %d operations", len(patch))
    for i, e in enumerate(patch):
        try:
            obj = apply_operation(obj, e)
        except PatchError as err:
            err.index = i
            err.op = e.op
            raise
    return obj


def _insert_inverse(obj, tokens, pointer):
    """Operations undoing an insertion at tokens into obj.

    obj is the document as it is before the insertion.
    """
    if not tokens:
        return [op_replace("", obj)]
    parent = resolve(obj, tokens[:-1], pointer)
    key = tokens[-1]
    if isinstance(parent, list):
        index = _array_index(key, parent, pointer, insert=True)
        return [op_remove(join_pointer(tokens[:-1] + [str(index)]))]
    if key in parent:
        return [op_replace(pointer, parent[key])]
    return [op_remove(pointer)]


def _move_inverse(obj, e):
    from_pointer = e["from"]
    from_tokens = split_pointer(from_pointer)
    tokens = split_pointer(e.path)
    moved = resolve(obj, from_tokens, from_pointer)
    obj, _ = _remove(obj, from_tokens, from_pointer)

    # The target path is resolved against the document after removal
    if not tokens:
        return [op_replace("", obj), op_add(from_pointer, moved)]
    parent = resolve(obj, tokens[:-1], e.path)
    key = tokens[-1]
    if isinstance(parent, list):
        index = _array_index(key, parent, e.path, insert=True)
        target_tokens = tokens[:-1] + [str(index)]
        target = join_pointer(target_tokens)
        if target_tokens == from_tokens:
            # Moved onto its own position, nothing to undo
            return [op_test(target, moved)]
        if is_strict_prefix_array(target_tokens, from_tokens):
            return [op_remove(target), op_add(from_pointer, moved)]
        return [op_move(target, from_pointer)]
    if key in parent:
        if is_strict_prefix_array(tokens, from_tokens):
            return [op_replace(e.path, parent[key]), op_add(from_pointer, moved)]
        return [op_move(e.path, from_pointer), op_add(e.path, parent[key])]
    return [op_move(e.path, from_pointer)]


def invert_operation(obj, e):
    """Operations undoing e, given the document obj as it was before e.

    The returned operations are in the order they must be applied.
    """
    op = e.op
    pointer = e.path
    tokens = split_pointer(pointer)

    if op in (PatchOp.ADD, PatchOp.COPY):
        return _insert_inverse(obj, tokens, pointer)
    elif op == PatchOp.REMOVE:
        return [op_add(pointer, resolve(obj, tokens, pointer))]
    elif op == PatchOp.REPLACE:
        return [op_replace(pointer, resolve(obj, tokens, pointer))]
    elif op == PatchOp.MOVE:
        return _move_inverse(obj, e)
    elif op == PatchOp.TEST:
        return [op_test(pointer, e.value)]
    else:
        raise InvalidOperationError("Invalid op {}.".format(op))


def revert(obj, patch):
    """Compute the patch that undoes applying patch to obj.

    The patch is replayed on obj, recording for each operation the
    values it overwrites or removes. Applying the result to
    apply(obj, patch) reproduces obj.

    Raises the same errors as apply if the patch does not apply to obj.
    """
    validate_patch(patch)
    patch = to_patch_entries(patch)
    debug("Computing inverse of patch with %d operations", len(patch))
    undo = []
    for i, e in enumerate(patch):
        try:
            # Apply first so failures are reported as apply would report them
            newobj = apply_operation(obj, e)
            undo.append(invert_operation(obj, e))
        except PatchError as err:
            err.index = i
            err.op = e.op
            raise
        obj = newobj

    inverse = []
    for ops in reversed(undo):
        inverse.extend(ops)
    return inverse
