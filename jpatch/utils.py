# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import codecs
import io
import json
import locale
import os
import re
import sys

from .patch_format import InvalidPathError, JSONSyntaxError


INVALID_JSON_MESSAGE = "Invalid JSON format"

# Indentation used for all JSON text produced by jpatch
JSON_INDENT = 2


def _reject_constant(name):
    raise ValueError("%s is not valid JSON" % name)


def load_json_text(text):
    """Parse JSON text strictly.

    NaN and Infinity literals are rejected. Any failure is raised
    as a JSONSyntaxError with a generic message.
    """
    if not isinstance(text, str):
        raise JSONSyntaxError(INVALID_JSON_MESSAGE)
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise JSONSyntaxError(INVALID_JSON_MESSAGE) from e


def read_json(f):
    """Read and return json from filename or file-like object."""
    if isinstance(f, str):
        with io.open(f, encoding="utf8") as fo:
            return load_json_text(fo.read())
    return load_json_text(f.read())


def dump_json(value):
    "Format value as JSON text with a stable 2-space indentation."
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)


def canonical_json(value):
    "Compact JSON text with sorted keys, usable as a hashable identity of value."
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def json_equal(a, b):
    """Compare two json values for equality.

    Booleans never equal numbers, integers and floats compare
    numerically, object key order is irrelevant and array order
    is significant.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, dict):
        if not isinstance(b, dict) or len(a) != len(b):
            return False
        return all(k in b and json_equal(v, b[k]) for k, v in a.items())
    if isinstance(a, list):
        if not isinstance(b, list) or len(a) != len(b):
            return False
        return all(json_equal(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


def escape_token(token):
    "Escape a reference token for use in a JSON pointer."
    return str(token).replace("~", "~0").replace("/", "~1")


_bad_escape = re.compile(r"~(?![01])")


def unescape_token(token):
    "Unescape a JSON pointer reference token."
    if _bad_escape.search(token):
        raise InvalidPathError("Invalid escape sequence in pointer token %r" % token)
    return token.replace("~1", "/").replace("~0", "~")


def split_pointer(pointer):
    "Split a pointer on the form '/foo/bar' into ['foo','bar']."
    if not isinstance(pointer, str):
        raise InvalidPathError("JSON pointer must be a string, not %r" % (pointer,))
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise InvalidPathError("JSON pointer must start with '/': %r" % pointer)
    return [unescape_token(t) for t in pointer[1:].split("/")]


def join_pointer(*args):
    "Join tokens on the form ['foo','bar'] into the pointer '/foo/bar'."
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        args = args[0]
    return "".join("/" + escape_token(a) for a in args)


def is_prefix_array(parent, child):
    if parent == child:
        return True
    if not parent:
        return True
    if child is None or len(parent) > len(child):
        return False
    for i in range(len(parent)):
        if parent[i] != child[i]:
            return False
    return True


def is_strict_prefix_array(parent, child):
    "True if the token list parent addresses a proper ancestor of child."
    return len(parent) < len(child) and is_prefix_array(parent, child)


def _setup_std_stream_encoding():
    """Setup encoding on stdout/err

    Ensures sys.stdout/err have error-escaping encoders,
    rather than raising errors.
    """
    if os.getenv('PYTHONIOENCODING'):
        # setting PYTHONIOENCODING overrides anything we would do here
        return
    _default_encoding = locale.getpreferredencoding() or 'UTF-8'
    for name in ('stdout', 'stderr'):
        stream = getattr(sys, name)
        raw_stream = getattr(sys, '__%s__' % name)
        if stream is not raw_stream:
            # don't wrap captured or redirected output
            continue
        enc = getattr(stream, 'encoding', None) or _default_encoding
        errors = getattr(stream, 'errors', None) or 'strict'
        # if error-handler is strict, switch to replace
        if errors == 'strict' or errors.startswith('surrogate'):
            bin_stream = stream.buffer
            new_stream = codecs.getwriter(enc)(bin_stream, errors='backslashreplace')
            setattr(sys, name, new_stream)


def setup_std_streams():
    """Setup sys.stdout/err

    - Ensures sys.stdout/err have error-escaping encoders,
      rather than raising errors.
    - enables colorama for ANSI escapes on Windows
    """

    _setup_std_stream_encoding()
    # must enable colorama after setting up encoding,
    # or encoding will undo colorama setup
    if sys.platform.startswith('win'):
        import colorama
        colorama.init()
