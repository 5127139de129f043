# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .patch_format import (
    PatchError, PathNotFoundError, InvalidPathError, InvalidOperationError,
    TestFailedError, JSONSyntaxError,
)
from .patching import apply, revert
from .diffing import diff
from .rendering import render
from .form import PatchForm


__all__ = [
    "__version__",
    "apply", "revert",
    "diff", "render",
    "PatchForm",
    "PatchError", "PathNotFoundError", "InvalidPathError",
    "InvalidOperationError", "TestFailedError", "JSONSyntaxError",
    ]
