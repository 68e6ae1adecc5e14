"""
Test Configuration
==================
"""

from pathlib import Path

import pytest

from unitgraph.config.validator import (
    ConfigurationError,
    load_config,
    require_key,
    validate_command,
)


@pytest.fixture
def table_path(tmp_path):
    path = tmp_path / 'table.txt'
    path.write_text("12 inches(in) = 1 foot(ft)\n", encoding='utf-8')
    return path


def test_load_config_resolves_table_path(tmp_path, table_path):
    """A relative table path is relative to the config file."""
    config_path = tmp_path / 'config.yaml'
    config_path.write_text("table: table.txt\nmax_distance: 1\n", encoding='utf-8')

    config = load_config(config_path)

    assert Path(config['table']) == table_path
    assert config['max_distance'] == 1


def test_load_config_missing_file(tmp_path):
    """A missing config file is a configuration error."""
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / 'nope.yaml')


def test_load_config_not_a_mapping(tmp_path):
    """Top-level YAML must be a mapping."""
    config_path = tmp_path / 'config.yaml'
    config_path.write_text("- a\n- b\n", encoding='utf-8')

    with pytest.raises(ConfigurationError):
        load_config(config_path)


def test_missing_required_fields(table_path):
    """Every missing key is named in the error."""
    with pytest.raises(ConfigurationError) as exc:
        validate_command({'table': str(table_path)}, 'convert')

    assert 'max_distance' in str(exc.value)
    assert 'on_malformed_line' in str(exc.value)


def test_list_needs_no_distance(table_path):
    """The list command does not require max_distance."""
    validate_command({'table': str(table_path), 'on_malformed_line': 'skip'}, 'list')


@pytest.mark.parametrize('key, value', [
    ('max_distance', -1),
    ('max_distance', 'two'),
    ('max_distance', True),
    ('on_malformed_line', 'ignore'),
])
def test_invalid_values(table_path, key, value):
    """Wrong types or out-of-range values are rejected."""
    config = {'table': str(table_path), 'max_distance': 2, 'on_malformed_line': 'skip'}
    config[key] = value

    with pytest.raises(ConfigurationError):
        validate_command(config, 'convert')


def test_serve_port_range(table_path):
    """Ports must be valid TCP ports."""
    config = {
        'table': str(table_path), 'max_distance': 2, 'on_malformed_line': 'skip',
        'host': '127.0.0.1', 'port': 70000,
    }

    with pytest.raises(ConfigurationError):
        validate_command(config, 'serve')


def test_missing_table_file(tmp_path):
    """The table file must exist."""
    config = {'table': str(tmp_path / 'missing.txt'), 'max_distance': 2, 'on_malformed_line': 'skip'}

    with pytest.raises(ConfigurationError):
        validate_command(config, 'convert')


def test_unknown_command():
    """Only known commands validate."""
    with pytest.raises(ConfigurationError):
        validate_command({}, 'explode')


def test_require_key():
    """require_key never falls back to a default."""
    assert require_key({'max_distance': 0}, 'max_distance') == 0

    with pytest.raises(ConfigurationError):
        require_key({'max_distance': None}, 'max_distance')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
