# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import datetime
import json
import os
import sys

import colorama

from .diff_format import DiffOp, ROOT_KEY
from .log import DeltaFormatError
from .utils import dump_json, escape_token


# Indentation offset in pretty-print
IND = "  "

# Max line width used some placed in pretty-print
MAXWIDTH = 78


DIFF_ENTRY_END = '\n'

ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = '{color}   '.format(color=''),
        REMOVE = '{color}-  '.format(color=colorama.Fore.RED),
        ADD    = '{color}+  '.format(color=colorama.Fore.GREEN),
        INFO   = '{color}## '.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = '   ',
        REMOVE = '-  ',
        ADD    = '+  ',
        INFO   = '## ',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(
            self,
            out=sys.stdout,
            use_color=True,
            show_unchanged=False,
            ):
        self.out = out
        self.use_color = use_color
        self.show_unchanged = show_unchanged

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET

DefaultConfig = PrettyPrintConfig()


def file_timestamp(filename):
    "Return modification time for filename as a string."
    if os.path.exists(filename):
        t = os.path.getmtime(filename)
        dt = datetime.datetime.fromtimestamp(t)
        return dt.isoformat(str(" "))
    else:
        return "(no timestamp)"


def format_value(v):
    "Format simple value for printing as json text."
    return json.dumps(v, ensure_ascii=False)


def pretty_print_value(value, prefix="", config=DefaultConfig):
    """Print a possibly complex value with all lines prefixed.

    Containers are printed as indented json, one line per item.
    """
    if isinstance(value, (dict, list)) and value:
        pretty_print_multiline(dump_json(value), prefix, config)
    else:
        pretty_print_multiline(format_value(value), prefix, config)


def pretty_print_key(k, prefix, config):
    config.out.write("%s%s:\n" % (prefix, k))


def pretty_print_key_value(k, v, prefix, config):
    config.out.write("%s%s: %s\n" % (prefix, k, v))


def pretty_print_diff_action(msg, path, config):
    config.out.write("%s%s %s:%s\n" % (config.INFO, msg, path or "/", config.RESET))


def pretty_print_item(k, v, prefix="", config=DefaultConfig):
    if isinstance(v, dict):
        pretty_print_key(k, prefix, config)
        pretty_print_dict(v, (), prefix+IND, config)
    elif isinstance(v, list):
        pretty_print_key(k, prefix, config)
        pretty_print_list(v, prefix+IND, config)
    else:
        vstr = v if isinstance(v, str) else format_value(v)
        if "\n" in vstr:
            # Multiline strings
            pretty_print_key(k, prefix, config)
            for line in vstr.splitlines(False):
                config.out.write("%s%s\n" % (prefix+IND, line))
        else:
            # Singleline strings
            pretty_print_key_value(k, vstr, prefix, config)


def pretty_print_multiline(text, prefix="", config=DefaultConfig):
    assert isinstance(text, str), 'expected string argument'

    # Preprend prefix to lines, letting lines keep their own newlines
    lines = text.splitlines(True)
    for line in lines:
        config.out.write(prefix + line)

    # If the final line doesn't have a newline,
    # make sure we still start a new line
    if not text.endswith("\n"):
        config.out.write("\n")


def pretty_print_list(li, prefix="", config=DefaultConfig):
    listr = format_value(li)
    if len(listr) < MAXWIDTH - len(prefix):
        config.out.write("%s%s\n" % (prefix, listr))
    else:
        for k, v in enumerate(li):
            pretty_print_item("item[%d]" % k, v, prefix, config)


def pretty_print_dict(d, exclude_keys=(), prefix="", config=DefaultConfig):
    """Pretty-print a dict without wrapper keys

    Instead of {'key': 'value'}, do

        key: value
        key:
          long
          value

    """
    for k in sorted(set(d) - set(exclude_keys)):
        v = d[k]
        pretty_print_item(k, v, prefix, config)


def pretty_print_unchanged(value, path, config=DefaultConfig):
    if config.show_unchanged:
        pretty_print_diff_action("unchanged", path, config)
        pretty_print_value(value, config.KEEP, config)


def pretty_print_diff_entry(a, e, path, config=DefaultConfig):
    key = e.key
    nextpath = "/".join((path, escape_token(key)))
    op = e.op

    # Recurse to handle patch ops
    if op == DiffOp.PATCH:
        pretty_print_diff(a[key], e.diff, nextpath, config)
        return

    if op == DiffOp.ADDRANGE:
        pretty_print_diff_action("inserted before", nextpath, config)
        for value in e.valuelist:
            pretty_print_value(value, config.ADD, config)

    elif op == DiffOp.REMOVERANGE:
        if e.length > 1:
            keyrange = "{}-{}".format(nextpath, key + e.length - 1)
        else:
            keyrange = nextpath
        pretty_print_diff_action("deleted", keyrange, config)
        for value in a[key: key + e.length]:
            pretty_print_value(value, config.REMOVE, config)

    elif op == DiffOp.MOVE:
        pretty_print_diff_action("moved to index %d from" % e.to, nextpath, config)
        pretty_print_value(a[key], config.KEEP, config)

    elif op == DiffOp.REMOVE:
        pretty_print_diff_action("deleted", nextpath, config)
        pretty_print_value(a[key], config.REMOVE, config)

    elif op == DiffOp.ADD:
        pretty_print_diff_action("added", nextpath, config)
        pretty_print_value(e.value, config.ADD, config)

    elif op == DiffOp.REPLACE:
        aval = a if key is ROOT_KEY else a[key]
        if key is ROOT_KEY:
            nextpath = path
        bval = e.value
        if type(aval) is not type(bval):
            typechange = " (type changed from %s to %s)" % (
                aval.__class__.__name__, bval.__class__.__name__)
        else:
            typechange = ""
        pretty_print_diff_action("replaced" + typechange, nextpath, config)
        pretty_print_value(aval, config.REMOVE, config)
        pretty_print_value(bval, config.ADD, config)

    else:
        raise DeltaFormatError("Unknown delta op {}".format(op))

    config.out.write(DIFF_ENTRY_END + config.RESET)


def pretty_print_dict_diff(a, di, path, config=DefaultConfig):
    "Pretty-print a delta of a dict, ordered by key."
    entries = {e.key: e for e in di}
    for key in sorted(set(a) | set(entries)):
        if key in entries:
            pretty_print_diff_entry(a, entries[key], path, config)
        else:
            pretty_print_unchanged(a[key], "/".join((path, escape_token(key))), config)


def pretty_print_list_diff(a, di, path, config=DefaultConfig):
    "Pretty-print a delta of a list."
    touched = set()
    for e in di:
        if e.op == DiffOp.REMOVERANGE:
            touched.update(range(e.key, e.key + e.length))
        elif e.op != DiffOp.ADDRANGE:
            touched.add(e.key)
    entries = iter(di)
    e = next(entries, None)
    for i in range(len(a) + 1):
        while e is not None and e.key == i:
            pretty_print_diff_entry(a, e, path, config)
            e = next(entries, None)
        if i < len(a) and i not in touched:
            pretty_print_unchanged(a[i], "/".join((path, str(i))), config)


def pretty_print_diff(a, di, path, config=DefaultConfig):
    "Pretty-print a jpatch delta."
    if len(di) == 1 and di[0].key is ROOT_KEY:
        pretty_print_diff_entry(a, di[0], path, config)
    elif isinstance(a, dict):
        pretty_print_dict_diff(a, di, path, config)
    elif isinstance(a, list):
        pretty_print_list_diff(a, di, path, config)
    else:
        raise DeltaFormatError(
            "Invalid type {} for diff presentation.".format(type(a))
        )


json_diff_header = """\
jpatch diff {afn} {bfn}
--- {afn}{atime}
+++ {bfn}{btime}
"""

def pretty_print_json_diff(afn, bfn, a, di, config=DefaultConfig):
    """Pretty-print a diff of two json documents

    Parameters
    ----------

    afn: str
        Filename of a, the base document
    bfn: str
        Filename of b, the updated document
    a: json value
        The base document
    di: delta
        The delta describing the transformation from a to b
    config: PrettyPrintConfig
        Config object determining what gets printed and where
    """
    if di:
        path = ""
        atime = "  " + file_timestamp(afn)
        btime = "  " + file_timestamp(bfn)
        config.out.write(json_diff_header.format(
            afn=afn, bfn=bfn, atime=atime, btime=btime))
        pretty_print_diff(a, di, path, config)
