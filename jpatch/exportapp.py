# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import os
import sys

import jpatch.log
from .args import (
    ConfigBackedParser, add_generic_args, add_rendering_args, add_filename_args,
)
from .form import PatchForm
from .rendering import render_page
from .utils import setup_std_streams


_description = "Export the result of applying a JSON patch as an HTML report."


def main_export(args):
    for fn in (args.document, args.patch):
        if not os.path.exists(fn):
            print("Missing file {}".format(fn))
            return 1
    with io.open(args.document, encoding="utf8") as f:
        document_text = f.read()
    with io.open(args.patch, encoding="utf8") as f:
        patch_text = f.read()

    form = PatchForm(document_text, patch_text, show_unchanged=args.show_unchanged)
    ok = form.apply()
    if form.error:
        jpatch.log.error("%s", form.error)
    elif not ok:
        jpatch.log.error("%s", form.result_text)

    rendered = render_page(
        title="jpatch {} {}".format(args.document, args.patch),
        diff_markup=form.render_diff() if ok else None,
        document_text=document_text,
        patch_text=patch_text,
        result_text=form.result_text,
        inverse_text=form.inverse_text,
        error=form.error,
    )
    with io.open(args.output, "w", encoding="utf8") as f:
        f.write(rendered)
    print('Wrote report to %s' % args.output)
    return 0 if ok else 1


def _build_arg_parser(prog='jpatch-export'):
    """Creates an argument parser for the jpatch export command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    add_rendering_args(parser)
    add_filename_args(parser, ["document", "patch"])
    parser.add_argument(
        '-o', '--output',
        default="jpatch-report.html",
        help="path of the HTML report to write.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_export(arguments)


if __name__ == "__main__":
    sys.exit(main())
