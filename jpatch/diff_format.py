# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .log import DeltaFormatError


class DiffEntry(dict):
    """For internal usage in jpatch library.

    Minimal class providing attribute access to delta entry keys.
    """
    def __getattr__(self, name):
        if name.startswith("__") and name.endswith("__"):
            return self.__getattribute__(name)
        return self[name]

    def __setattr__(self, name, value):
        self[name] = value


class DiffOp:
    "Collection of valid values for the action field in delta entries."
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    ADDRANGE = "addrange"
    REMOVERANGE = "removerange"
    MOVE = "move"
    PATCH = "patch"


# Key of an entry replacing the diffed value as a whole
ROOT_KEY = None


def op_add(key, value):
    "Create a delta entry to add value at key."
    return DiffEntry(op=DiffOp.ADD, key=key, value=value)

def op_remove(key):
    "Create a delta entry to remove value at key."
    return DiffEntry(op=DiffOp.REMOVE, key=key)

def op_replace(key, value):
    "Create a delta entry to replace value at key with given value."
    return DiffEntry(op=DiffOp.REPLACE, key=key, value=value)

def op_addrange(key, valuelist):
    "Create a delta entry to add given list of values before key."
    return DiffEntry(op=DiffOp.ADDRANGE, key=key, valuelist=valuelist)

def op_removerange(key, length):
    "Create a delta entry to remove values in range key:key+length."
    return DiffEntry(op=DiffOp.REMOVERANGE, key=key, length=length)

def op_move(key, to):
    "Create a delta entry moving the item at key to index to of the new sequence."
    return DiffEntry(op=DiffOp.MOVE, key=key, to=to)

def op_patch(key, diff):
    "Create a delta entry to patch value at key with diff."
    assert diff is not None, "Patch op needs a diff sequence"
    return DiffEntry(op=DiffOp.PATCH, key=key, diff=diff)


class SequenceDiffBuilder(object):

    # Valid values for the action field in sequence delta entries
    OPS = (
        DiffOp.ADDRANGE,
        DiffOp.REMOVERANGE,
        DiffOp.MOVE,
        DiffOp.PATCH,
        )

    def __init__(self):
        self._diff = []

    def validated(self):
        return self._diff

    def append(self, entry):
        # Simplifies some algorithms
        if entry is None:
            return

        # Typechecking (just for internal consistency checking)
        assert isinstance(entry, DiffEntry)
        assert "op" in entry
        assert entry.op in SequenceDiffBuilder.OPS
        assert "key" in entry

        # Insert new entry at sorted position
        n = len(self._diff)
        pos = n
        if entry.op == DiffOp.ADDRANGE:
            # Insert addrange before removerange, move or patch
            while pos > 0 and self._diff[pos-1].key >= entry.key:
                pos -= 1
        else:
            while pos > 0 and self._diff[pos-1].key > entry.key:
                pos -= 1
        self._diff.insert(pos, entry)

    def patch(self, key, diff):
        if diff:
            self.append(op_patch(key, diff))

    def addrange(self, key, valuelist):
        if valuelist:
            self.append(op_addrange(key, valuelist))

    def removerange(self, key, length):
        if length:
            self.append(op_removerange(key, length))

    def move(self, key, to):
        self.append(op_move(key, to))


class MappingDiffBuilder(object):

    # Valid values for the action field in mapping delta entries
    OPS = (
        DiffOp.ADD,
        DiffOp.REMOVE,
        DiffOp.REPLACE,
        DiffOp.PATCH,
        )

    def __init__(self):
        self._diff = {}

    def validated(self):
        return sorted(self._diff.values(), key=lambda x: x.key)

    def append(self, entry):
        # Simplifies some algorithms
        if entry is None:
            return

        # Typechecking (just for internal consistency checking)
        assert isinstance(entry, DiffEntry)
        assert "op" in entry
        assert entry.op in MappingDiffBuilder.OPS
        assert "key" in entry
        assert entry.key not in self._diff

        # Add entry!
        self._diff[entry.key] = entry

    def add(self, key, value):
        self.append(op_add(key, value))

    def remove(self, key):
        self.append(op_remove(key))

    def replace(self, key, value):
        self.append(op_replace(key, value))

    def patch(self, key, diff):
        if diff:
            self.append(op_patch(key, diff))


def is_valid_diff(diff, deep=False):
    """Checks wheter a delta (list of delta entries) is well formed.

    Returns a boolean indicating the well-formedness of the delta.
    """
    try:
        validate_diff(diff, deep=deep)
    except DeltaFormatError:
        return False
    return True


def validate_diff(diff, deep=False):
    """Check wheter a delta (list of delta entries) is well formed.

    Raises a DeltaFormatError if not well formed.
    """
    if not isinstance(diff, list):
        raise DeltaFormatError("Delta must be a list.")
    if any(isinstance(e, DiffEntry) and e.get("key", 0) is ROOT_KEY for e in diff):
        if len(diff) != 1 or diff[0].get("op") != DiffOp.REPLACE:
            raise DeltaFormatError(
                "A whole value delta must consist of a single replace entry.")
        return
    for e in diff:
        validate_diff_entry(e, deep=deep)


def validate_diff_entry(e, deep=False):
    """Check that e is a well formed delta entry.

    Raises a DeltaFormatError if not well formed.
    """
    if not isinstance(e, DiffEntry):
        raise DeltaFormatError("Delta entry '{}' is not a diff type.".format(e))

    # Check key (list uses int key, dict uses str key)
    op = e.op
    key = e.key
    if isinstance(key, int) and op in SequenceDiffBuilder.OPS:
        if op == DiffOp.ADDRANGE:
            if not isinstance(e.valuelist, list):
                raise DeltaFormatError(
                    "addrange expects a list of values to insert, not '{}'.".format(
                        e.valuelist))
        elif op == DiffOp.REMOVERANGE:
            if not isinstance(e.length, int):
                raise DeltaFormatError(
                    "removerange expects a number of values to delete, not '{}'.".format(
                        e.length))
        elif op == DiffOp.MOVE:
            if not isinstance(e.to, int):
                raise DeltaFormatError(
                    "move expects a destination index, not '{}'.".format(e.to))
        elif op == DiffOp.PATCH:
            # e.diff is itself a delta, check it recursively if the "deep" argument is true
            if deep:
                validate_diff(e.diff, deep=deep)
    elif isinstance(key, str) and op in MappingDiffBuilder.OPS:
        if op == DiffOp.PATCH and deep:
            validate_diff(e.diff, deep=deep)
    else:
        msg = ("Invalid delta entry key '{}' of type '{}'. "
               "Expecting int for sequences or str for mappings.")
        raise DeltaFormatError(msg.format(key, type(key)))
