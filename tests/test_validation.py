"""Tests for the validation handlers."""
import re

import pytest

from commitpresets.commit_message.validation import (
    ForbiddenPatternHandler,
    MaxLengthHandler,
    PatternHandler,
    QualifierHandler,
    SubjectPeriodHandler,
    VocabularyHandler,
    create_validation_chain,
)
from commitpresets.models import Severity

SIMPLE_PATTERN = re.compile(r"^(?P<type>\w+): (?P<subject>.*)$")


def test_max_length_handler_inclusive():
    handler = MaxLengthHandler(max_length=10)

    is_valid, msg = handler.validate("1234567890")
    assert is_valid

    is_valid, msg = handler.validate("12345678901")
    assert not is_valid
    assert "longer than 10 characters" in msg


def test_max_length_handler_exclusive():
    handler = MaxLengthHandler(max_length=10, inclusive=False)

    is_valid, _ = handler.validate("123456789")
    assert is_valid

    is_valid, msg = handler.validate("1234567890")
    assert not is_valid
    assert msg == "Message is longer than 10 characters!"


def test_max_length_handler_counts_code_points():
    handler = MaxLengthHandler(max_length=10)

    # Each emoji counts as one character
    assert handler.validate("\U0001F3A8" * 10)[0]
    assert not handler.validate("\U0001F3A8" * 11)[0]


def test_max_length_handler_subject_only():
    handler = MaxLengthHandler(max_length=10, subject_only=True)

    # Body lines do not count against the subject limit
    is_valid, _ = handler.validate("short\n\n" + "x" * 80)
    assert is_valid

    is_valid, _ = handler.validate("x" * 11 + "\n\nbody")
    assert not is_valid


def test_pattern_handler():
    handler = PatternHandler(SIMPLE_PATTERN, "<type>: <subject>")

    is_valid, msg = handler.validate("bad format")
    assert not is_valid
    assert msg == 'Message does not match "<type>: <subject>"! was: bad format'

    is_valid, _ = handler.validate("feat: good format")
    assert is_valid


def test_pattern_handler_reports_subject_only():
    handler = PatternHandler(SIMPLE_PATTERN, "<type>: <subject>", subject_only=True)

    is_valid, _ = handler.validate("feat: subject\n\nany body at all")
    assert is_valid

    is_valid, msg = handler.validate("no colon here\n\nfeat: body")
    assert not is_valid
    assert msg.endswith("was: no colon here")


def test_vocabulary_handler():
    handler = VocabularyHandler(SIMPLE_PATTERN, "type", ("feat", "fix"), "type")

    is_valid, msg = handler.validate("docs: something")
    assert not is_valid
    assert msg == "'docs' is not an allowed type!"
    assert handler.hints("docs: something") == ("Valid types are: feat, fix",)

    is_valid, _ = handler.validate("fix: something")
    assert is_valid


def test_vocabulary_handler_is_case_sensitive():
    handler = VocabularyHandler(SIMPLE_PATTERN, "type", ("feat",), "type")

    is_valid, _ = handler.validate("Feat: something")
    assert not is_valid


def test_qualifier_handler():
    pattern = re.compile(r"^\[(?P<tag>[A-Z]+) (?P<qualifier>\S+)\] (?P<subject>.*)$")
    handler = QualifierHandler(
        pattern,
        "tag",
        "qualifier",
        {"DOC": (re.compile("beta|release"), "a channel")},
    )

    assert handler.validate("[DOC beta] Update docs")[0]

    is_valid, msg = handler.validate("[DOC nightly] Update docs")
    assert not is_valid
    assert msg == "'nightly' is not an allowed qualifier for DOC!"
    assert handler.hints("[DOC nightly] Update docs") == ("DOC expects a channel",)

    # Partial matches are not enough
    assert not handler.validate("[DOC betamax] Update docs")[0]


def test_forbidden_pattern_handler():
    handler = ForbiddenPatternHandler(
        SIMPLE_PATTERN, "subject", re.compile(r"#\d+"), "No issue numbers"
    )

    assert handler.validate("fix: plain subject")[0]
    assert handler.validate("fix: closes #12") == (False, "No issue numbers")


def test_subject_period_handler():
    handler = SubjectPeriodHandler()

    is_valid, msg = handler.validate("Core: add feature.")
    assert not is_valid
    assert "should not end with a period" in msg

    is_valid, _ = handler.validate("Core: add feature\n\nBody ends with a period.")
    assert is_valid


def test_handle_emits_error_then_hints():
    handler = create_validation_chain(
        PatternHandler(SIMPLE_PATTERN, "<type>: <subject>"),
        VocabularyHandler(SIMPLE_PATTERN, "type", ("feat", "fix"), "type"),
    )

    is_valid, diagnostics = handler.handle("chore: tidy up")
    assert not is_valid
    assert [d.severity for d in diagnostics] == [Severity.ERROR, Severity.INFO]
    assert diagnostics[0].text == "'chore' is not an allowed type!"
    assert diagnostics[1].text == "Valid types are: feat, fix"

    assert handler.handle("feat: tidy up") == (True, [])


def test_chain_order():
    """Only the first failing check produces a diagnostic."""
    chain = create_validation_chain(
        MaxLengthHandler(20),
        PatternHandler(SIMPLE_PATTERN, "<type>: <subject>"),
        VocabularyHandler(SIMPLE_PATTERN, "type", ("feat",), "type"),
    )

    # Too long and badly formatted: length wins
    is_valid, diagnostics = chain.handle("this is not formatted at all")
    assert not is_valid
    assert len(diagnostics) == 1
    assert "longer than 20" in diagnostics[0].text

    # Badly formatted: pattern wins over vocabulary
    is_valid, diagnostics = chain.handle("not formatted")
    assert not is_valid
    assert "does not match" in diagnostics[0].text


def test_create_validation_chain_requires_handlers():
    with pytest.raises(ValueError):
        create_validation_chain()
