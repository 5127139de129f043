# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import sys

import jpatch.log
from .args import ConfigBackedParser, add_generic_args
from .patch_format import PatchError
from .utils import read_json, dump_json, setup_std_streams


_description = "Reformat JSON files with 2-space indentation."


def main_prettify(args):
    status = 0
    for fn in args.files:
        if not os.path.exists(fn):
            print("Missing file {}".format(fn))
            status = 1
            continue
        try:
            value = read_json(fn)
        except PatchError as e:
            jpatch.log.error("%s: %s", fn, e)
            status = 1
            continue

        text = dump_json(value)
        if args.in_place:
            with io.open(fn, "w", encoding="utf8") as f:
                f.write(text + "\n")
            jpatch.log.info("Reformatted %s", fn)
        else:
            if len(args.files) > 1:
                print("%s:" % fn)
            print(text)
    return status


def _build_arg_parser(prog='jpatch-prettify'):
    """Creates an argument parser for the jpatch prettify command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    parser.add_argument(
        "files", nargs="+",
        help="The JSON filenames.")
    parser.add_argument(
        '--in-place',
        action="store_true",
        default=False,
        help="rewrite the files instead of printing them.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_prettify(arguments)


if __name__ == "__main__":
    sys.exit(main())
