"""Validate commit messages against well-known project conventions."""

__version__ = "0.1.0"

from .commit_message import (  # noqa: E402
    PRESETS,
    CommitMessageValidator,
    ConfigurationError,
    available_presets,
    resolve,
    validate_message,
    validate_message_from_buffer,
    validate_message_from_file,
)

__all__ = [
    '__version__',
    'PRESETS',
    'CommitMessageValidator',
    'ConfigurationError',
    'available_presets',
    'resolve',
    'validate_message',
    'validate_message_from_buffer',
    'validate_message_from_file',
]
