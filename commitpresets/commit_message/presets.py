"""Preset table: one validation chain per supported commit convention."""
import re
from dataclasses import dataclass
from re import Pattern
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from ..models import DiagnosticMessage, PresetName
from .validation import (
    ForbiddenPatternHandler,
    MaxLengthHandler,
    PatternHandler,
    QualifierHandler,
    SubjectPeriodHandler,
    ValidationHandler,
    VocabularyHandler,
    create_validation_chain,
)


class ConfigurationError(ValueError):
    """Raised when a preset name has no registered preset."""


@dataclass(frozen=True)
class Preset:
    """A named commit convention.

    ``rule`` is the head of the preset's check chain. When ``ignore_pattern``
    matches, the message is accepted without running the rule.
    """

    name: str
    rule: ValidationHandler
    ignore_pattern: Optional[Pattern[str]] = None
    description: str = ""

    def check(self, message: str) -> Tuple[bool, List[DiagnosticMessage]]:
        return self.rule.handle(message)

    def is_ignored(self, message: str) -> bool:
        return bool(self.ignore_pattern and self.ignore_pattern.match(message))


# Angular: https://github.com/angular/angular.js/blob/master/DEVELOPERS.md#commits
ANGULAR_MAX_LENGTH = 100
ANGULAR_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "chore",
    "revert",
)
ANGULAR_PATTERN = re.compile(
    r"^(?:fixup!\s*)?(?P<type>\w*)(?:\((?P<scope>[\w$.*/-]*)\))?: (?P<subject>.*)$",
    re.ASCII,
)

# Atom: https://github.com/atom/atom/blob/master/CONTRIBUTING.md#git-commit-messages
ATOM_MAX_LENGTH = 72
ATOM_EMOJIS = (
    ":art:",
    ":racehorse:",
    ":non-potable_water:",
    ":memo:",
    ":penguin:",
    ":apple:",
    ":checkered_flag:",
    ":bug:",
    ":fire:",
    ":green_heart:",
    ":white_check_mark:",
    ":lock:",
    ":arrow_up:",
    ":arrow_down:",
    ":shirt:",
)
ATOM_PATTERN = re.compile(
    r"^(?P<emoji>%s) (?P<subject>.*)$" % "|".join(re.escape(emoji) for emoji in ATOM_EMOJIS)
)

# ESLint: https://eslint.org/docs/developer-guide/contributing/pull-requests#step-2-make-your-changes
ESLINT_MAX_LENGTH = 72
ESLINT_TAGS = (
    "Fix",
    "Update",
    "New",
    "Breaking",
    "Docs",
    "Build",
    "Upgrade",
    "Chore",
)
_ESLINT_REF = r"(?:[\w.-]+/[\w.-]+#\d+|#\d+|(?:gh|GH)-\d+)"
_ESLINT_REFS = r"(?:fixes|refs) {ref}(?:, (?:fixes|refs) {ref})*".format(ref=_ESLINT_REF)
ESLINT_PATTERN = re.compile(
    r"^(?:fixup!\s*)?(?P<tag>\w+): (?P<summary>[^a-z\s].*?)"
    r"(?: \((?P<refs>%s)\))?$" % _ESLINT_REFS,
    re.ASCII,
)
ESLINT_ISSUE_REFERENCE = re.compile(r"#\d+|\bgh-\d+", re.IGNORECASE)

# Ember: https://github.com/emberjs/ember.js/blob/master/CONTRIBUTING.md#commit-tagging
EMBER_MAX_LENGTH = 72
_EMBER_CHANNELS = ("canary", "beta", "release", "lts")
_EMBER_CHANNEL = (
    re.compile("|".join(_EMBER_CHANNELS)),
    "a release channel: %s" % ", ".join(_EMBER_CHANNELS),
)
EMBER_QUALIFIERS: Mapping[str, Tuple[Pattern[str], str]] = MappingProxyType({
    "BUGFIX": _EMBER_CHANNEL,
    "CLEANUP": _EMBER_CHANNEL,
    "DOC": _EMBER_CHANNEL,
    "FEATURE": (re.compile(r"[a-z0-9][\w.-]*"), "a feature flag name, e.g. query-params-new"),
    "PERF": _EMBER_CHANNEL,
    "SECURITY": (re.compile(r"CVE-\d+-\d+"), "a CVE identifier, e.g. CVE-2014-0013"),
})
EMBER_TAGS = tuple(EMBER_QUALIFIERS)
EMBER_PATTERN = re.compile(
    r"^\[(?P<tag>[A-Z]+) (?P<qualifier>[^\]\s]+)\] (?P<subject>\S.*)$"
)

# jQuery: https://contribute.jquery.org/commits-and-pull-requests/#commit-guidelines
JQUERY_MAX_LENGTH = 72
JQUERY_PATTERN = re.compile(
    r"^(?P<component>[A-Z][\w.-]*(?:, ?[A-Z][\w.-]*)*): (?P<summary>\S.*)$",
    re.ASCII,
)

WIP_PATTERN = re.compile(r"^WIP:")


def _angular_rule() -> ValidationHandler:
    return create_validation_chain(
        MaxLengthHandler(ANGULAR_MAX_LENGTH, inclusive=False),
        PatternHandler(ANGULAR_PATTERN, "<type>(<scope>): <subject>"),
        VocabularyHandler(ANGULAR_PATTERN, "type", ANGULAR_TYPES, "type"),
    )


def _atom_rule() -> ValidationHandler:
    return create_validation_chain(
        MaxLengthHandler(ATOM_MAX_LENGTH),
        PatternHandler(
            ATOM_PATTERN,
            "<emoji> <subject>",
            extra_hints=("Valid emojis are: %s" % ", ".join(ATOM_EMOJIS),),
        ),
    )


def _eslint_rule() -> ValidationHandler:
    return create_validation_chain(
        MaxLengthHandler(ESLINT_MAX_LENGTH, subject_only=True),
        PatternHandler(
            ESLINT_PATTERN,
            "<Tag>: <Summary> (fixes #1234)",
            subject_only=True,
        ),
        ForbiddenPatternHandler(
            ESLINT_PATTERN,
            "summary",
            ESLINT_ISSUE_REFERENCE,
            'Issue references belong at the end of the summary, e.g. "(fixes #1234)"',
            subject_only=True,
        ),
        VocabularyHandler(ESLINT_PATTERN, "tag", ESLINT_TAGS, "tag", subject_only=True),
    )


def _ember_rule() -> ValidationHandler:
    return create_validation_chain(
        MaxLengthHandler(EMBER_MAX_LENGTH, subject_only=True),
        PatternHandler(EMBER_PATTERN, "[<TAG> <qualifier>] <subject>", subject_only=True),
        VocabularyHandler(EMBER_PATTERN, "tag", EMBER_TAGS, "tag", subject_only=True),
        QualifierHandler(
            EMBER_PATTERN, "tag", "qualifier", EMBER_QUALIFIERS, subject_only=True
        ),
    )


def _jquery_rule() -> ValidationHandler:
    return create_validation_chain(
        MaxLengthHandler(JQUERY_MAX_LENGTH, subject_only=True),
        PatternHandler(JQUERY_PATTERN, "<Component>: <Short Description>", subject_only=True),
        SubjectPeriodHandler(),
    )


PRESETS: Mapping[str, Preset] = MappingProxyType({
    preset.name: preset
    for preset in (
        Preset(
            name=PresetName.ANGULAR.value,
            rule=_angular_rule(),
            ignore_pattern=WIP_PATTERN,
            description="<type>(<scope>): <subject>",
        ),
        Preset(
            name=PresetName.ATOM.value,
            rule=_atom_rule(),
            description="<emoji> <subject>",
        ),
        Preset(
            name=PresetName.ESLINT.value,
            rule=_eslint_rule(),
            ignore_pattern=re.compile(r"^(?:WIP:|fixup!)"),
            description="<Tag>: <Summary> (fixes #1234)",
        ),
        Preset(
            name=PresetName.EMBER.value,
            rule=_ember_rule(),
            description="[<TAG> <qualifier>] <subject>",
        ),
        Preset(
            name=PresetName.JQUERY.value,
            rule=_jquery_rule(),
            description="<Component>: <Short Description>",
        ),
    )
})


def available_presets() -> List[str]:
    """Return the registered preset names in definition order."""
    return list(PRESETS)


def resolve(name: str) -> Preset:
    """Look up a preset by its exact, case-sensitive name."""
    if isinstance(name, PresetName):
        name = name.value
    preset = PRESETS.get(name)
    if preset is None:
        raise ConfigurationError(f"Preset '{name}' does not exist. A preset must be provided")
    return preset
