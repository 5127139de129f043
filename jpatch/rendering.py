# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import os

from jinja2 import FileSystemLoader, Environment

from .diff_format import DiffOp, ROOT_KEY, validate_diff
from .log import DeltaFormatError
from .utils import dump_json


__all__ = ["render", "render_page", "build_nodes"]


here = os.path.abspath(os.path.dirname(__file__))
template_path = os.path.join(here, 'templates')

env = Environment(
    loader=FileSystemLoader([template_path]),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _node(key, status, **kwargs):
    node = dict(
        key=key, status=status, kind=None, children=None,
        value=None, left=None, right=None, destination=None)
    node.update(kwargs)
    return node


def _leaf(key, status, value):
    return _node(key, status, value=dump_json(value))


def _container(key, value, delta):
    if isinstance(value, dict):
        return _node(key, "node", kind="object", children=_dict_children(value, delta))
    elif isinstance(value, list):
        return _node(key, "node", kind="array", children=_list_children(value, delta))
    raise DeltaFormatError(
        "Cannot apply nested delta to a {}.".format(type(value).__name__))


def _dict_children(base, delta):
    entries = {e.key: e for e in delta}
    nodes = []
    for key, value in base.items():
        e = entries.get(key)
        if e is None:
            nodes.append(_leaf(key, "unchanged", value))
        elif e.op == DiffOp.REMOVE:
            nodes.append(_leaf(key, "deleted", value))
        elif e.op == DiffOp.REPLACE:
            nodes.append(_node(key, "modified",
                               left=dump_json(value), right=dump_json(e.value)))
        elif e.op == DiffOp.PATCH:
            nodes.append(_container(key, value, e.diff))
        else:
            raise DeltaFormatError("Invalid op {} for existing key {!r}.".format(e.op, key))
    for e in delta:
        if e.op == DiffOp.ADD:
            nodes.append(_leaf(e.key, "added", e.value))
    return nodes


def _list_children(base, delta):
    removed = set()
    moves = {}
    patches = {}
    additions = {}
    for e in delta:
        if e.op == DiffOp.REMOVERANGE:
            removed.update(range(e.key, e.key + e.length))
        elif e.op == DiffOp.MOVE:
            moves[e.key] = e.to
        elif e.op == DiffOp.PATCH:
            patches[e.key] = e.diff
        elif e.op == DiffOp.ADDRANGE:
            additions.setdefault(e.key, []).extend(e.valuelist)
        else:
            raise DeltaFormatError("Invalid op {} for a sequence.".format(e.op))

    nodes = []
    # Nodes in the order they appear in the new sequence
    slots = []
    for i in range(len(base) + 1):
        for value in additions.get(i, ()):
            node = _leaf(None, "added", value)
            nodes.append(node)
            slots.append(node)
        if i == len(base):
            break
        value = base[i]
        if i in removed:
            nodes.append(_leaf(str(i), "deleted", value))
        elif i in moves:
            nodes.append(_node(str(i), "moved", value=dump_json(value),
                               destination=moves[i]))
        elif i in patches:
            node = _container(None, value, patches[i])
            nodes.append(node)
            slots.append(node)
        else:
            node = _leaf(None, "unchanged", value)
            nodes.append(node)
            slots.append(node)

    # Moved items take their destination index in the new sequence
    for destination in sorted(moves.values()):
        slots.insert(destination, None)
    for index, node in enumerate(slots):
        if node is not None:
            node["key"] = str(index)
    return nodes


def build_nodes(base, delta):
    """Walk base and delta together into a tree of display nodes.

    Each node is a dict with a key (object key or array index, None at
    the root), a status (added, deleted, modified, moved, node or
    unchanged) and, depending on the status, the formatted values or
    the child nodes.
    """
    if len(delta) == 1 and delta[0].key is ROOT_KEY:
        return [_node(None, "modified",
                      left=dump_json(base), right=dump_json(delta[0].value))]
    return [_container(None, base, delta)]


def render(delta, base, show_unchanged=False):
    """Render a delta against its base value as nested HTML markup.

    Unchanged values are always part of the markup. When show_unchanged
    is false the container is marked so the stylesheet hides them.
    Returns an empty string for an absent delta.
    """
    if delta is None:
        return ""
    validate_diff(delta)
    template = env.get_template("delta.html")
    return template.render(
        nodes=build_nodes(base, delta),
        show_unchanged=show_unchanged,
    )


def render_page(title, diff_markup=None, **sections):
    """Render a standalone HTML page around rendered delta markup.

    The sections document_text, patch_text, result_text, inverse_text
    and error are shown when given. Without diff_markup the page has
    no differences section, an empty string shows "No changes".
    """
    for name in ("document_text", "patch_text", "result_text",
                 "inverse_text", "error"):
        sections.setdefault(name, None)
    template = env.get_template("page.html")
    return template.render(
        title=title,
        has_diff=diff_markup is not None,
        diff_markup=diff_markup,
        **sections
    )
