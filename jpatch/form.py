# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple

from .diffing import diff
from .patch_format import PatchError
from .patching import apply, revert
from .rendering import render
from .utils import load_json_text, dump_json, INVALID_JSON_MESSAGE
from .log import debug


ValidationResult = namedtuple('ValidationResult', ['is_valid', 'error_message'])


def validate_json(text):
    """Check that text is well formed json.

    The error message is generic, details of the parse failure
    are not reported.
    """
    try:
        load_json_text(text)
    except PatchError:
        return ValidationResult(False, INVALID_JSON_MESSAGE)
    return ValidationResult(True, None)


class PatchForm(object):
    """State of a document/patch form.

    Holds the document and patch text as entered, and the result of
    the last apply action. Editing the document discards the result.
    """

    def __init__(self, document_text="", patch_text="", show_unchanged=False):
        self.document_text = document_text
        self.patch_text = patch_text
        self.show_unchanged = show_unchanged
        self.result_text = ""
        self.inverse_text = ""
        self.patched = None
        self.error = None

    @property
    def has_result(self):
        return self.patched is not None and bool(self.result_text)

    def set_document(self, text):
        self.result_text = ""
        self.inverse_text = ""
        self.patched = None
        self.document_text = text

    def set_patch(self, text):
        self.patch_text = text

    def _clear_result(self, error):
        self.error = error
        self.result_text = ""
        self.inverse_text = ""
        self.patched = None

    def apply(self):
        """Apply the patch text to the document text.

        Returns True if a patched document was produced.
        """
        for text in (self.document_text, self.patch_text):
            validation = validate_json(text)
            if not validation.is_valid:
                self._clear_result(validation.error_message)
                return False

        self.error = None
        document = load_json_text(self.document_text)
        patch = load_json_text(self.patch_text)
        try:
            patched = apply(document, patch)
            inverse = revert(document, patch)
        except PatchError as e:
            debug("Patch failed: %s", e)
            self.result_text = "Error: %s" % e
            self.inverse_text = ""
            self.patched = None
            return False

        self.patched = patched
        self.result_text = dump_json(patched)
        self.inverse_text = dump_json(inverse)
        return True

    def prettify(self):
        """Reformat document and patch text with 2-space indentation."""
        try:
            document_text = dump_json(load_json_text(self.document_text))
            patch_text = dump_json(load_json_text(self.patch_text))
        except PatchError as e:
            self.result_text = "Error: %s" % e
            return False
        self.document_text = document_text
        self.patch_text = patch_text
        return True

    def reset(self):
        self.document_text = ""
        self.patch_text = ""
        self._clear_result(None)

    def delta(self):
        "Delta between the document and the patched result, None without a result."
        if not self.has_result:
            return None
        return diff(load_json_text(self.document_text), self.patched)

    def render_diff(self):
        "Render the delta of the last result as HTML markup."
        if not self.has_result:
            return ""
        document = load_json_text(self.document_text)
        return render(diff(document, self.patched), document, self.show_unchanged)
