# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json
import logging
import os

import pytest

import jpatch
from jpatch.__main__ import main_dispatch
from jpatch import (
    patchapp,
    revertapp,
    diffapp,
    exportapp,
    prettifyapp,
)
from jpatch.utils import read_json, dump_json


def _read(fn):
    with io.open(fn, encoding="utf8") as f:
        return f.read()


def test_apply_app(filespath, tmpdir):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "patch.json")
    ofn = str(tmpdir.join("out.json"))
    ifn = str(tmpdir.join("inverse.json"))

    assert 0 == patchapp.main([dfn, pfn, '-o', ofn, '--inverse', ifn])
    assert read_json(ofn) == read_json(os.path.join(filespath, "patched.json"))
    assert _read(ofn) == dump_json(read_json(ofn)) + "\n"
    inverse = read_json(ifn)
    assert jpatch.apply(read_json(ofn), inverse) == read_json(dfn)


def test_apply_app_prints(filespath, capsys):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "patch.json")
    assert 0 == patchapp.main([dfn, pfn])
    out, err = capsys.readouterr()
    assert json.loads(out) == read_json(os.path.join(filespath, "patched.json"))


def test_apply_app_log_level(filespath):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "patch.json")
    args = patchapp._build_arg_parser().parse_args([dfn, pfn, '--log-level=CRITICAL'])
    assert 0 == patchapp.main_apply(args)
    assert args.log_level == 'CRITICAL'
    assert jpatch.log.logger.level == logging.CRITICAL


def test_apply_app_failing_patch(filespath, tmpdir, caplog):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "failing-patch.json")
    ofn = str(tmpdir.join("out.json"))
    assert 1 == patchapp.main([dfn, pfn, '-o', ofn])
    assert not os.path.exists(ofn)
    assert "operation 1 (test)" in caplog.text


def test_apply_app_invalid_json(filespath, caplog):
    dfn = os.path.join(filespath, "invalid.json")
    pfn = os.path.join(filespath, "patch.json")
    assert 1 == patchapp.main([dfn, pfn])
    assert "Invalid JSON format" in caplog.text


def test_apply_app_missing_file(filespath, capsys):
    pfn = os.path.join(filespath, "patch.json")
    assert 1 == patchapp.main(["no-such-file.json", pfn])
    out, err = capsys.readouterr()
    assert "Missing file no-such-file.json" in out


def test_revert_app(filespath, tmpdir):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "patch.json")
    ofn = str(tmpdir.join("inverse.json"))
    assert 0 == revertapp.main([dfn, pfn, '-o', ofn])
    assert read_json(ofn) == jpatch.revert(read_json(dfn), read_json(pfn))

    pfn = os.path.join(filespath, "failing-patch.json")
    assert 1 == revertapp.main([dfn, pfn])


def test_diff_app(filespath, capsys):
    afn = os.path.join(filespath, "document.json")
    bfn = os.path.join(filespath, "patched.json")
    assert 0 == diffapp.main([afn, bfn, '--no-color'])
    out, err = capsys.readouterr()
    assert out.startswith("jpatch diff %s %s\n" % (afn, bfn))
    assert "## replaced /version:\n-  1\n+  2\n" in out
    assert "## added /maintainer:\n" in out
    assert "## deleted /owner/email:\n" in out


def test_diff_app_equal_documents(filespath, capsys):
    afn = os.path.join(filespath, "document.json")
    assert 0 == diffapp.main([afn, afn, '--no-color'])
    out, err = capsys.readouterr()
    assert out == ""


def test_diff_app_html(filespath, tmpdir):
    afn = os.path.join(filespath, "document.json")
    bfn = os.path.join(filespath, "patched.json")
    hfn = str(tmpdir.join("diff.html"))
    assert 0 == diffapp.main([afn, bfn, '--html', hfn, '--show-unchanged'])
    html = _read(hfn)
    assert html.startswith("<!DOCTYPE html>")
    assert 'class="jpatch-delta"' in html
    assert 'class="jpatch-modified"' in html


def test_diff_app_errors(filespath):
    afn = os.path.join(filespath, "document.json")
    assert 1 == diffapp.main([afn, "no-such-file.json"])
    assert 1 == diffapp.main([afn, os.path.join(filespath, "invalid.json")])


def test_export_app(filespath, tmpdir):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "patch.json")
    ofn = str(tmpdir.join("report.html"))
    assert 0 == exportapp.main([dfn, pfn, '-o', ofn])
    html = _read(ofn)
    assert "JSON Document" in html
    assert "Inverse Patch" in html
    assert "Differences" in html
    assert "jpatch-unchanged-hidden" in html


def test_export_app_failing_patch(filespath, tmpdir):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "failing-patch.json")
    ofn = str(tmpdir.join("report.html"))
    assert 1 == exportapp.main([dfn, pfn, '-o', ofn])
    html = _read(ofn)
    assert "Error: operation 1 (test)" in html
    assert "Differences" not in html


def test_export_app_invalid_json(filespath, tmpdir):
    dfn = os.path.join(filespath, "invalid.json")
    pfn = os.path.join(filespath, "patch.json")
    ofn = str(tmpdir.join("report.html"))
    assert 1 == exportapp.main([dfn, pfn, '-o', ofn])
    assert "Invalid JSON format" in _read(ofn)


def test_prettify_app(tempfiles, capsys):
    fn = os.path.join(tempfiles, "compact.json")
    before = _read(fn)
    assert 0 == prettifyapp.main([fn])
    out, err = capsys.readouterr()
    assert out == dump_json({"b": [1, 2], "a": {"x": None}}) + "\n"
    assert _read(fn) == before

    assert 0 == prettifyapp.main([fn, '--in-place'])
    assert _read(fn) == dump_json({"b": [1, 2], "a": {"x": None}}) + "\n"


def test_prettify_app_invalid(tempfiles):
    fn = os.path.join(tempfiles, "invalid.json")
    before = _read(fn)
    assert 1 == prettifyapp.main([fn, '--in-place'])
    assert _read(fn) == before


def test_dispatch(filespath, capsys):
    dfn = os.path.join(filespath, "document.json")
    pfn = os.path.join(filespath, "patch.json")
    assert 0 == main_dispatch(["apply", dfn, pfn])
    assert 0 == main_dispatch(["revert", dfn, pfn])
    assert 0 == main_dispatch(["diff", dfn, dfn])
    assert 0 == main_dispatch(["prettify", dfn])


def test_dispatch_version_and_help():
    with pytest.raises(SystemExit) as excinfo:
        main_dispatch(["--version"])
    assert excinfo.value.code == jpatch.__version__
    with pytest.raises(SystemExit) as excinfo:
        main_dispatch(["-h"])
    assert "Usage: jpatch" in excinfo.value.code
    with pytest.raises(SystemExit) as excinfo:
        main_dispatch(["bogus"])
    assert "Unrecognized command 'bogus'" in excinfo.value.code
    with pytest.raises(SystemExit):
        main_dispatch([])


def test_dispatch_config(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main_dispatch(["--config"])
    assert excinfo.value.code == 1
    out, err = capsys.readouterr()
    assert "Diff:" in err
    assert "use_color: true" in err


def test_app_config_option(capsys):
    with pytest.raises(SystemExit):
        diffapp.main(["--config"])
    out, err = capsys.readouterr()
    assert "Diff:" in err
    assert "detect_moves: true" in err


def test_app_version(capsys):
    with pytest.raises(SystemExit):
        patchapp.main(["--version"])
    out, err = capsys.readouterr()
    assert jpatch.__version__ in out


def test_export_app_show_unchanged_matches_diff_app():
    def option(parser):
        return [a for a in parser._actions if '--show-unchanged' in a.option_strings][0]

    export_option = option(exportapp._build_arg_parser())
    diff_option = option(diffapp._build_arg_parser())
    assert export_option.help == diff_option.help
    arguments = exportapp._build_arg_parser().parse_args(['a.json', 'b.json', '--show-unchanged'])
    assert arguments.show_unchanged is True
