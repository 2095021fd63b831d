"""Commit message validation package."""

from .presets import (
    PRESETS,
    ConfigurationError,
    Preset,
    available_presets,
    resolve,
)
from .validator import (
    CommitMessageValidator,
    validate_message,
    validate_message_from_buffer,
    validate_message_from_file,
)

__all__ = [
    'PRESETS',
    'ConfigurationError',
    'Preset',
    'available_presets',
    'resolve',
    'CommitMessageValidator',
    'validate_message',
    'validate_message_from_buffer',
    'validate_message_from_file',
]
