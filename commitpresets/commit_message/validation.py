"""Commit message validation using Chain of Responsibility pattern."""
from abc import ABC, abstractmethod
from re import Pattern
from typing import List, Mapping, Optional, Sequence, Tuple

from ..models import DiagnosticMessage, Severity


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(
        self,
        next_handler: Optional['ValidationHandler'] = None,
        subject_only: bool = False,
    ):
        self.next_handler = next_handler
        self.subject_only = subject_only

    def handle(self, message: str) -> Tuple[bool, List[DiagnosticMessage]]:
        """Run this check and pass to the next handler if valid.

        The first failing handler ends the chain; its error and any hint
        lines are the only diagnostics produced.
        """
        is_valid, error = self.validate(message)
        if not is_valid:
            diagnostics = [DiagnosticMessage(text=error, severity=Severity.ERROR)]
            diagnostics.extend(
                DiagnosticMessage(text=hint, severity=Severity.INFO)
                for hint in self.hints(message)
            )
            return False, diagnostics
        if not self.next_handler:
            return True, []
        return self.next_handler.handle(message)

    def target(self, message: str) -> str:
        """Return the part of the message this handler inspects."""
        if not self.subject_only:
            return message
        lines = message.splitlines()
        return lines[0] if lines else ""

    def hints(self, message: str) -> Sequence[str]:
        """Extra informational lines emitted after a failure."""
        return ()

    @abstractmethod
    def validate(self, message: str) -> Tuple[bool, str]:
        """Validate the commit message."""
        pass


class MaxLengthHandler(ValidationHandler):
    """Validates the message (or subject) length.

    With ``inclusive=True`` a text of exactly ``max_length`` characters
    passes; otherwise ``max_length`` itself is already too long.
    """

    def __init__(
        self,
        max_length: int,
        inclusive: bool = True,
        subject_only: bool = False,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(next_handler, subject_only)
        self.max_length = max_length
        self.inclusive = inclusive

    def validate(self, message: str) -> Tuple[bool, str]:
        length = len(self.target(message))
        too_long = length > self.max_length if self.inclusive else length >= self.max_length
        if too_long:
            return False, f"Message is longer than {self.max_length} characters!"
        return True, ""


class PatternHandler(ValidationHandler):
    """Validates that the text matches the preset's structural pattern."""

    def __init__(
        self,
        pattern: Pattern[str],
        format_hint: str,
        subject_only: bool = False,
        extra_hints: Sequence[str] = (),
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(next_handler, subject_only)
        self.pattern = pattern
        self.format_hint = format_hint
        self.extra_hints = tuple(extra_hints)

    def validate(self, message: str) -> Tuple[bool, str]:
        text = self.target(message)
        if not self.pattern.match(text):
            return False, f'Message does not match "{self.format_hint}"! was: {text}'
        return True, ""

    def hints(self, message: str) -> Sequence[str]:
        return self.extra_hints


class _GroupHandler(ValidationHandler):
    """Base for checks that inspect one captured group of a pattern."""

    def __init__(
        self,
        pattern: Pattern[str],
        group: str,
        subject_only: bool = False,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(next_handler, subject_only)
        self.pattern = pattern
        self.group = group

    def captured(self, message: str) -> Optional[str]:
        match = self.pattern.match(self.target(message))
        if not match:
            return None
        return match.group(self.group)


class VocabularyHandler(_GroupHandler):
    """Validates that a captured token belongs to a closed vocabulary."""

    def __init__(
        self,
        pattern: Pattern[str],
        group: str,
        allowed: Sequence[str],
        label: str,
        subject_only: bool = False,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(pattern, group, subject_only, next_handler)
        self.allowed = tuple(allowed)
        self.label = label

    def validate(self, message: str) -> Tuple[bool, str]:
        value = self.captured(message)
        if value not in self.allowed:
            return False, f"'{value or ''}' is not an allowed {self.label}!"
        return True, ""

    def hints(self, message: str) -> Sequence[str]:
        return (f"Valid {self.label}s are: {', '.join(self.allowed)}",)


class QualifierHandler(_GroupHandler):
    """Validates a qualifier whose grammar depends on a preceding token.

    ``qualifiers`` maps each token to a ``(pattern, description)`` pair;
    the qualifier must fully match the pattern registered for its token.
    """

    def __init__(
        self,
        pattern: Pattern[str],
        key_group: str,
        group: str,
        qualifiers: Mapping[str, Tuple[Pattern[str], str]],
        subject_only: bool = False,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(pattern, group, subject_only, next_handler)
        self.key_group = key_group
        self.qualifiers = qualifiers

    def _parts(self, message: str) -> Tuple[Optional[str], Optional[str]]:
        match = self.pattern.match(self.target(message))
        if not match:
            return None, None
        return match.group(self.key_group), match.group(self.group)

    def validate(self, message: str) -> Tuple[bool, str]:
        key, value = self._parts(message)
        rule = self.qualifiers.get(key or "")
        if rule is None or value is None or not rule[0].fullmatch(value):
            return False, f"'{value or ''}' is not an allowed qualifier for {key}!"
        return True, ""

    def hints(self, message: str) -> Sequence[str]:
        key, _ = self._parts(message)
        rule = self.qualifiers.get(key or "")
        if rule is None:
            return ()
        return (f"{key} expects {rule[1]}",)


class ForbiddenPatternHandler(_GroupHandler):
    """Validates that a captured group does not contain a forbidden pattern."""

    def __init__(
        self,
        pattern: Pattern[str],
        group: str,
        forbidden: Pattern[str],
        error: str,
        subject_only: bool = False,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(pattern, group, subject_only, next_handler)
        self.forbidden = forbidden
        self.error = error

    def validate(self, message: str) -> Tuple[bool, str]:
        value = self.captured(message) or ""
        if self.forbidden.search(value):
            return False, self.error
        return True, ""


class SubjectPeriodHandler(ValidationHandler):
    """Validates that the subject line doesn't end with a period."""

    def __init__(self, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler, subject_only=True)

    def validate(self, message: str) -> Tuple[bool, str]:
        if self.target(message).endswith('.'):
            return False, "Subject line should not end with a period"
        return True, ""


def create_validation_chain(*handlers: ValidationHandler) -> ValidationHandler:
    """Link handlers in the order given and return the head of the chain."""
    if not handlers:
        raise ValueError("A validation chain needs at least one handler")
    for handler, successor in zip(handlers, handlers[1:]):
        handler.next_handler = successor
    return handlers[0]
