# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import sys

import jpatch.log
from .args import (
    ConfigBackedParser, add_generic_args, add_filename_args, add_output_arg,
)
from .patch_format import PatchError
from .patching import revert
from .patchapp import read_inputs, write_output
from .utils import dump_json, setup_std_streams


_description = "Compute the JSON patch undoing a JSON patch applied to a document."


def main_revert(args):
    inputs = read_inputs(args.document, args.patch)
    if inputs is None:
        return 1
    document, patch = inputs

    try:
        inverse = revert(document, patch)
    except PatchError as e:
        jpatch.log.error("Patch failed: %s", e)
        return 1

    jpatch.log.debug("Inverse patch has %d operations", len(inverse))
    write_output(dump_json(inverse), args.output)
    return 0


def _build_arg_parser(prog='jpatch-revert'):
    """Creates an argument parser for the jpatch revert command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    add_filename_args(parser, ["document", "patch"])
    add_output_arg(parser, "inverse patch")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_revert(arguments)


if __name__ == "__main__":
    sys.exit(main())
