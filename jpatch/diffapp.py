# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import sys

import jpatch.log
from .args import (
    ConfigBackedParser, add_generic_args, add_diff_args, add_filename_args,
    add_prettyprint_args, prettyprint_config_from_args, diff_config_from_args,
)
from .diffing import diff
from .patch_format import PatchError
from .prettyprint import pretty_print_json_diff
from .rendering import render, render_page
from .utils import read_json, setup_std_streams


_description = "Compute the difference between two JSON documents."


def _build_diff(base, remote, config=None):
    """Read base and remote and compute the delta between them.

    Raises ValueError if a file is missing or does not contain
    valid json.
    """
    for fn in (base, remote):
        if not os.path.exists(fn):
            raise ValueError("Missing file {}".format(fn))
    values = []
    for fn in (base, remote):
        try:
            values.append(read_json(fn))
        except PatchError as e:
            raise ValueError("{}: {}".format(fn, e))
    a, b = values
    return a, b, diff(a, b, config=config)


def main_diff(args):
    """Main handler of diff CLI"""
    try:
        a, b, d = _build_diff(args.base, args.remote, diff_config_from_args(args))
    except ValueError as e:
        jpatch.log.error("%s", e)
        return 1

    if d is None:
        jpatch.log.info("Documents are equal")

    if args.html:
        rendered = render_page(
            title="jpatch diff {} {}".format(args.base, args.remote),
            diff_markup=render(d, a, args.show_unchanged),
        )
        with io.open(args.html, "w", encoding="utf8") as f:
            f.write(rendered)
        jpatch.log.info("Wrote diff to %s", args.html)
    elif d:
        # capsys in tests does not pick up sys.stdout.write
        class Printer:
            def write(self, text):
                print(text, end="")
        config = prettyprint_config_from_args(args, out=Printer())
        pretty_print_json_diff(args.base, args.remote, a, d, config)

    return 0


def _build_arg_parser(prog='jpatch-diff'):
    """Creates an argument parser for the jpatch diff command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    add_diff_args(parser)
    add_prettyprint_args(parser)
    add_filename_args(parser, ["base", "remote"])
    parser.add_argument(
        '--html',
        default=None,
        help="if supplied, the diff is written to this file as an HTML page. "
             "Otherwise it is printed to the terminal.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_diff(arguments)


if __name__ == "__main__":
    sys.exit(main())
