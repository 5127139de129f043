# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import sys

import jpatch.log
from .args import (
    ConfigBackedParser, add_generic_args, add_filename_args, add_output_arg,
)
from .patch_format import PatchError
from .patching import apply, revert
from .utils import read_json, dump_json, setup_std_streams


_description = "Apply a JSON patch to a JSON document."


def read_inputs(document_filename, patch_filename):
    """Read the document and patch files.

    Returns None after reporting the problem if either file is
    missing or does not contain valid json.
    """
    for fn in (document_filename, patch_filename):
        if not os.path.exists(fn):
            print("Missing file {}".format(fn))
            return None
    values = []
    for fn in (document_filename, patch_filename):
        try:
            values.append(read_json(fn))
        except PatchError as e:
            jpatch.log.error("%s: %s", fn, e)
            return None
    return tuple(values)


def write_output(text, output_filename):
    "Write text to output_filename, or print it if no filename is given."
    if output_filename:
        with io.open(output_filename, "w", encoding="utf8") as f:
            f.write(text + "\n")
    else:
        print(text)


def main_apply(args):
    inputs = read_inputs(args.document, args.patch)
    if inputs is None:
        return 1
    document, patch = inputs

    try:
        after = apply(document, patch)
        inverse = revert(document, patch) if args.inverse else None
    except PatchError as e:
        jpatch.log.error("Patch failed: %s", e)
        return 1

    write_output(dump_json(after), args.output)
    if inverse is not None:
        write_output(dump_json(inverse), args.inverse)
    return 0


def _build_arg_parser(prog='jpatch-apply'):
    """Creates an argument parser for the jpatch apply command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    add_filename_args(parser, ["document", "patch"])
    add_output_arg(parser, "patched document")
    parser.add_argument(
        '--inverse',
        default=None,
        help="if supplied, the patch undoing this patch "
             "is written to this file.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_apply(arguments)


if __name__ == "__main__":
    sys.exit(main())
