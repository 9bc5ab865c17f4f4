from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_SUGGESTION = "suggestion"

SEVERITIES = (SEVERITY_ERROR, SEVERITY_WARNING, SEVERITY_SUGGESTION)
SEVERITY_RANK = {SEVERITY_ERROR: 3, SEVERITY_WARNING: 2, SEVERITY_SUGGESTION: 1}

KIND_FLAG = "flag"
KIND_SUGGEST = "suggest"


def severity_rank(severity: str) -> int:
    return SEVERITY_RANK.get(severity.lower(), 0)


@dataclass(frozen=True)
class Rule:
    name: str
    description: str
    pattern: str
    severity: str = SEVERITY_WARNING
    kind: str = KIND_FLAG
    replacement: str | None = None
    category: str | None = None
    message: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class FormatSettings:
    extensions: tuple[str, ...]
    parser: str


@dataclass(frozen=True)
class RuleSet:
    rules: tuple[Rule, ...]
    styles_path: str = ""
    min_word_count: int = 0
    formats: tuple[tuple[str, FormatSettings], ...] = ()

    def get(self, name: str) -> Rule | None:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def format_settings(self, name: str) -> FormatSettings | None:
        for format_name, settings in self.formats:
            if format_name == name:
                return settings
        return None

    def extensions(self) -> set[str]:
        return {ext.lower() for _, fmt in self.formats for ext in fmt.extensions}


@dataclass(frozen=True)
class Document:
    path: str
    text: str


@dataclass(frozen=True)
class Match:
    rule: str
    line: int
    column: int
    text: str
    message: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class Issue:
    file: str
    line: int
    column: int
    rule: str
    severity: str
    message: str
    suggestion: str
    original_text: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
