"""
UnitGraph Configuration Validator

ZERO DEFAULTS POLICY: every parameter a command uses must be explicitly set.

Usage:
    from unitgraph.config.validator import load_config, validate_or_die

    config = load_config("config.yaml")
    validate_or_die(config, 'convert', "config.yaml")
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml


class ConfigurationError(Exception):
    """
    Raised when required configuration is missing or invalid.

    The message names exactly which keys to set and where.
    """
    pass


# Required fields per command
REQUIRED_FIELDS = {
    'convert': [
        'table',
        'max_distance',
        'on_malformed_line',
    ],
    'list': [
        'table',
        'on_malformed_line',
    ],
    'serve': [
        'table',
        'max_distance',
        'on_malformed_line',
        'host',
        'port',
    ],
}

MALFORMED_LINE_POLICIES = ('skip', 'abort')


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML config file.

    A relative `table` path is resolved against the config file's directory.

    Raises:
        ConfigurationError: If the file is missing or not a YAML mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Config must be a mapping, got {type(config).__name__}: {config_path}")

    table = config.get('table')
    if isinstance(table, str) and not Path(table).is_absolute():
        config['table'] = str(config_path.parent / table)

    return config


def validate_required(
    config: Dict[str, Any],
    required_keys: List[str],
    command: str,
    config_path: Optional[Path] = None,
) -> None:
    """
    Validate that all required configuration keys are present.

    Args:
        config: Configuration dictionary
        required_keys: List of keys that must be present and not None
        command: Command name (for error message)
        config_path: Path to config file (for error message)

    Raises:
        ConfigurationError: If any required key is missing or None
    """
    missing = [key for key in required_keys if key not in config or config[key] is None]

    if missing:
        location = f"File: {config_path}\n" if config_path else ""
        raise ConfigurationError(
            f"\n{'='*60}\n"
            f"CONFIGURATION ERROR: Missing required parameters\n"
            f"{'='*60}\n"
            f"{location}"
            f"Command: {command}\n\n"
            f"Missing fields:\n"
            f"{''.join(f'  - {k}' + chr(10) for k in missing)}\n"
            f"All parameters must be explicitly set.\n\n"
            f"Add to your config.yaml:\n"
            f"{''.join(f'  {k}: <value>' + chr(10) for k in missing)}"
            f"{'='*60}"
        )


def validate_values(config: Dict[str, Any]) -> None:
    """
    Check types and ranges of whichever known keys are set.

    Raises:
        ConfigurationError: On the first invalid value
    """
    if config.get('max_distance') is not None:
        value = config['max_distance']
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(f"max_distance must be an integer >= 0, got {value!r}")

    if config.get('on_malformed_line') is not None:
        value = config['on_malformed_line']
        if value not in MALFORMED_LINE_POLICIES:
            raise ConfigurationError(
                f"on_malformed_line must be one of {MALFORMED_LINE_POLICIES}, got {value!r}"
            )

    if config.get('port') is not None:
        value = config['port']
        if isinstance(value, bool) or not isinstance(value, int) or not 0 < value < 65536:
            raise ConfigurationError(f"port must be an integer in 1..65535, got {value!r}")

    if config.get('table') is not None and not Path(config['table']).is_file():
        raise ConfigurationError(f"table file not found: {config['table']}")


def validate_command(config: Dict[str, Any], command: str, config_path: Optional[Path] = None) -> None:
    """
    Validate configuration for a specific command.

    Args:
        config: Configuration dictionary
        command: One of 'convert', 'list', 'serve'
        config_path: Path to config file (for error message)

    Raises:
        ConfigurationError: If command unknown, fields missing or invalid
    """
    if command not in REQUIRED_FIELDS:
        raise ConfigurationError(f"Unknown command: {command}")

    validate_required(config, REQUIRED_FIELDS[command], command, config_path)
    validate_values(config)


def validate_or_die(config: Dict[str, Any], command: str, config_path: Optional[Path] = None) -> None:
    """
    Validate configuration. Exit with error code 1 if invalid.

    Use this at entry points for clear error messages and clean exit.
    """
    try:
        validate_command(config, command, config_path)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def require_key(config: Dict[str, Any], key: str, command: str = "") -> Any:
    """
    Get a required configuration value.

    Unlike dict.get(), this NEVER returns a default value.

    Raises:
        ConfigurationError: If key is missing or None
    """
    if key not in config or config[key] is None:
        raise ConfigurationError(
            f"\n{'='*60}\n"
            f"CONFIGURATION ERROR: {key} not set\n"
            f"{'='*60}\n"
            f"Command: {command}\n\n"
            f"{key} is REQUIRED.\n"
            f"Set it in your config.yaml:\n\n"
            f"  {key}: <value>\n"
            f"{'='*60}"
        )

    return config[key]
