import json

import pytest

from traitlets import Enum

from jpatch.args import (
    ConfigBackedParser, LogLevelAction, modify_config_for_print,
    prettyprint_config_from_args, diff_config_from_args,
)
from jpatch.config import (
    entrypoint_configurables, build_config, recursive_update, Global,
)
from jpatch import diffapp, exportapp


class FixtureConfig(Global):
    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'WARN',
    ).tag(config=True)

@pytest.fixture
def entrypoint_config():
    entrypoint_configurables['test-prog'] = FixtureConfig
    yield
    del entrypoint_configurables['test-prog']


def test_config_parser(entrypoint_config):
    parser = ConfigBackedParser('test-prog')
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="Set the log level by name.",
        action=LogLevelAction,
    )

    # Check that log level default is taken from FixtureConfig
    arguments = parser.parse_args([])
    assert arguments.log_level == 'WARN'

    arguments = parser.parse_args(['--log-level', 'ERROR'])
    assert arguments.log_level == 'ERROR'


def test_build_config_defaults():
    config = build_config('jpatch-diff')
    assert config == {
        'log_level': 'INFO',
        'show_unchanged': False,
        'detect_moves': True,
        'use_color': True,
    }
    assert build_config('jpatch-apply') == {'log_level': 'INFO'}
    assert build_config('jpatch-export') == {'log_level': 'INFO', 'show_unchanged': False}


def test_build_config_unknown_entrypoint():
    with pytest.raises(ValueError):
        build_config('not-an-entrypoint')


def test_config_file(tmpdir):
    tmpdir.join('jpatch_config.json').write_text(
        json.dumps({
            'Global': {
                'log_level': 'ERROR',
            },
            'Diff': {
                'use_color': False,
                'detect_moves': False,
            },
            'Export': {
                'show_unchanged': True,
            },
        }),
        encoding='utf-8'
    )
    with tmpdir.as_cwd():
        diff_config = build_config('jpatch-diff')
        arguments = diffapp._build_arg_parser().parse_args(['a.json', 'b.json'])
        export_arguments = exportapp._build_arg_parser().parse_args(['a.json', 'b.json'])
    assert diff_config['log_level'] == 'ERROR'
    assert diff_config['use_color'] is False
    assert arguments.use_color is False
    assert arguments.detect_moves is False
    assert arguments.show_unchanged is False
    assert arguments.log_level == 'ERROR'
    assert export_arguments.show_unchanged is True

    # Options override config
    with tmpdir.as_cwd():
        arguments = diffapp._build_arg_parser().parse_args(
            ['a.json', 'b.json', '--show-unchanged', '--log-level', 'DEBUG'])
    assert arguments.show_unchanged is True
    assert arguments.log_level == 'DEBUG'


def test_config_from_args():
    arguments = diffapp._build_arg_parser().parse_args(
        ['a.json', 'b.json', '--no-color', '--no-moves', '--show-unchanged'])
    config = prettyprint_config_from_args(arguments)
    assert config.use_color is False
    assert config.show_unchanged is True
    assert config.REMOVE == '-  '
    assert diff_config_from_args(arguments).detect_moves is False


def test_recursive_update():
    target = {'a': {'b': 1, 'c': 2}, 'd': 3}
    recursive_update(target, {'a': {'b': None, 'e': 4}, 'd': None}, False)
    assert target == {'a': {'c': 2, 'e': 4}}
    recursive_update(target, {'a': {'c': None}}, True)
    assert target == {'a': {'c': None, 'e': 4}}


def test_modify_config_for_print():
    assert modify_config_for_print({'a': True, 'b': {}, 'c': {'d': 'x'}}) == {
        'a': 'true', 'b': '{}', 'c': {'d': '"x"'}}
