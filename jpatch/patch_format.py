# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.


class PatchError(ValueError):
    """Base class of all errors raised while applying or inverting a patch.

    When the error is caused by a specific operation of a patch, `index`
    and `op` identify that operation, otherwise they are None.
    """
    def __init__(self, message, index=None, op=None):
        super(PatchError, self).__init__(message)
        self.message = message
        self.index = index
        self.op = op

    def __str__(self):
        if self.index is None:
            return self.message
        return "operation {} ({}): {}".format(self.index, self.op, self.message)


class PathNotFoundError(PatchError):
    "An operation references a location that does not exist."


class InvalidPathError(PatchError):
    "A pointer is malformed or a token cannot address its target."


class InvalidOperationError(PatchError):
    "An operation is malformed or semantically contradictory."


class TestFailedError(PatchError):
    "The assertion of a test operation did not hold."
    __test__ = False


class JSONSyntaxError(PatchError):
    "Input text is not valid JSON."


class PatchEntry(dict):
    """A single JSON patch operation.

    Minimal class providing attribute access to the op, path and value
    members. The source pointer of move and copy is a python keyword
    and is only available as entry["from"].
    """
    def __getattr__(self, name):
        if name.startswith("__") and name.endswith("__"):
            return self.__getattribute__(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value


class PatchOp:
    "Collection of valid values for the op member of patch operations."
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


OPS = (
    PatchOp.ADD,
    PatchOp.REMOVE,
    PatchOp.REPLACE,
    PatchOp.MOVE,
    PatchOp.COPY,
    PatchOp.TEST,
    )

# Operations carrying a value member
VALUE_OPS = (PatchOp.ADD, PatchOp.REPLACE, PatchOp.TEST)

# Operations carrying a from member
FROM_OPS = (PatchOp.MOVE, PatchOp.COPY)


def op_add(path, value):
    "Create an operation adding value at path."
    return PatchEntry(op=PatchOp.ADD, path=path, value=value)

def op_remove(path):
    "Create an operation removing the value at path."
    return PatchEntry(op=PatchOp.REMOVE, path=path)

def op_replace(path, value):
    "Create an operation replacing the value at path."
    return PatchEntry(op=PatchOp.REPLACE, path=path, value=value)

def op_move(from_path, path):
    "Create an operation moving the value at from_path to path."
    return PatchEntry([("op", PatchOp.MOVE), ("from", from_path), ("path", path)])

def op_copy(from_path, path):
    "Create an operation copying the value at from_path to path."
    return PatchEntry([("op", PatchOp.COPY), ("from", from_path), ("path", path)])

def op_test(path, value):
    "Create an operation asserting that the value at path equals value."
    return PatchEntry(op=PatchOp.TEST, path=path, value=value)


def to_patch_entries(patch):
    "Convert a list of operation dicts to PatchEntry objects with attribute access."
    return [e if isinstance(e, PatchEntry) else PatchEntry(e) for e in patch]


def is_valid_patch(patch):
    """Checks whether a patch (list of operations) is well formed.

    Returns a boolean indicating the well-formedness of the patch.
    """
    try:
        validate_patch(patch)
    except PatchError:
        return False
    return True


def validate_patch(patch):
    """Check whether a patch (list of operations) is well formed.

    Raises an InvalidOperationError or InvalidPathError if not well formed,
    with the index of the offending operation.
    """
    if not isinstance(patch, list):
        raise InvalidOperationError(
            "A patch must be a list of operations, not {}.".format(type(patch).__name__))
    for i, e in enumerate(patch):
        try:
            validate_patch_entry(e)
        except PatchError as err:
            err.index = i
            err.op = e.get("op") if isinstance(e, dict) else None
            raise


def validate_patch_entry(e):
    """Check that e is a well formed RFC 6902 operation.

    Only the structure is checked, values can be arbitrary json.
    """
    from .utils import split_pointer

    if not isinstance(e, dict):
        raise InvalidOperationError("Patch operation '{}' is not an object.".format(e))

    op = e.get("op")
    if op not in OPS:
        raise InvalidOperationError("Unknown patch op '{}'.".format(op))

    if "path" not in e:
        raise InvalidOperationError("Patch op '{}' is missing a path.".format(op))
    split_pointer(e["path"])

    if op in VALUE_OPS and "value" not in e:
        raise InvalidOperationError("Patch op '{}' is missing a value.".format(op))

    if op in FROM_OPS:
        if "from" not in e:
            raise InvalidOperationError("Patch op '{}' is missing a from pointer.".format(op))
        split_pointer(e["from"])
