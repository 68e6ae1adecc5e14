from .validator import (
    ConfigurationError,
    load_config,
    require_key,
    validate_command,
    validate_or_die,
)

__all__ = [
    'ConfigurationError',
    'load_config',
    'require_key',
    'validate_command',
    'validate_or_die',
]
