"""Commit message validation against a named preset."""
import locale
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..config import silence_requested
from ..models import Severity, ValidationOptions
from ..observers import ConsoleDiagnosticObserver, DiagnosticObserver
from .presets import resolve

IGNORED_NOTICE = "Commit message validation ignored."

OptionsLike = Union[ValidationOptions, Mapping[str, Any], None]


def _merge_options(options: OptionsLike) -> ValidationOptions:
    if options is None:
        return ValidationOptions()
    if isinstance(options, ValidationOptions):
        return options
    return ValidationOptions(**{k: v for k, v in options.items() if v is not None})


def validate_message(
    message: Optional[str],
    options: OptionsLike = None,
    observer: Optional[DiagnosticObserver] = None,
) -> bool:
    """Validate a commit message according to a preset.

    Args:
        message: The commit message
        options: Preset name and quiet flag; the preset defaults to angular
        observer: Receives diagnostics; defaults to the console

    Returns:
        bool: Whether or not the message was valid

    Raises:
        ConfigurationError: If the preset does not exist
    """
    if not message:
        return False

    observer = observer or ConsoleDiagnosticObserver()
    message = message.strip()

    opts = _merge_options(options)
    preset = resolve(opts.preset)

    if not message:
        observer.emit("Empty commit message", Severity.ERROR)
        return False

    if preset.is_ignored(message):
        quiet = silence_requested() if opts.quiet is None else opts.quiet
        if not quiet:
            observer.emit(IGNORED_NOTICE, Severity.INFO)
        return True

    is_valid, diagnostics = preset.check(message)
    for diagnostic in diagnostics:
        observer.on_diagnostic(diagnostic)
    return is_valid


def get_message_from_buffer(buffer: bytes) -> str:
    """Decode a raw commit message buffer using the platform default encoding.

    Undecodable bytes become U+FFFD rather than raising.
    """
    return buffer.decode(locale.getpreferredencoding(False), errors="replace")


def validate_message_from_buffer(
    buffer: bytes,
    options: OptionsLike = None,
    observer: Optional[DiagnosticObserver] = None,
) -> bool:
    """Validate a commit message held in a byte buffer."""
    return validate_message(get_message_from_buffer(buffer), options, observer)


def validate_message_from_file(
    path: Union[str, Path],
    options: OptionsLike = None,
    observer: Optional[DiagnosticObserver] = None,
) -> bool:
    """Validate a commit message from a file, e.g. for a commit-msg hook.

    Raises:
        OSError: If the file cannot be read
    """
    buffer = Path(path).read_bytes()
    return validate_message_from_buffer(buffer, options, observer)


class CommitMessageValidator:
    """Validates commit messages against one preset."""

    def __init__(
        self,
        preset: str = "angular",
        quiet: Optional[bool] = None,
        observer: Optional[DiagnosticObserver] = None,
    ):
        # Fail at construction rather than on first use
        resolve(preset)
        self.options = ValidationOptions(preset=preset, quiet=quiet)
        self.observer = observer

    def validate(self, message: Optional[str]) -> bool:
        return validate_message(message, self.options, self.observer)

    def validate_file(self, path: Union[str, Path]) -> bool:
        return validate_message_from_file(path, self.options, self.observer)
