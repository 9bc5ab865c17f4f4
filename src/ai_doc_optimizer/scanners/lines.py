from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ai_doc_optimizer.models import Match, Rule, RuleSet

logger = logging.getLogger(__name__)


class RulePatternError(ValueError):
    def __init__(self, rule: Rule, cause: re.error):
        super().__init__(f"Rule '{rule.name}' has an invalid pattern: {cause}")
        self.rule = rule
        self.cause = cause


@dataclass(frozen=True)
class CompiledRule:
    rule: Rule
    regex: re.Pattern[str]


def compile_rule(rule: Rule) -> CompiledRule:
    try:
        return CompiledRule(rule=rule, regex=re.compile(rule.pattern))
    except re.error as exc:
        raise RulePatternError(rule, exc) from exc


def compile_rules(ruleset: RuleSet) -> list[CompiledRule]:
    compiled: list[CompiledRule] = []
    for rule in ruleset.rules:
        if not rule.pattern:
            logger.warning("Skipping rule '%s': empty pattern", rule.name)
            continue
        try:
            compiled.append(compile_rule(rule))
        except RulePatternError as exc:
            logger.warning("Skipping rule: %s", exc)
    return compiled


def byte_column(line: str, offset: int) -> int:
    return len(line[:offset].encode("utf-8", errors="surrogateescape")) + 1


def scan_line(line: str, line_number: int, compiled: list[CompiledRule]) -> list[Match]:
    matches: list[Match] = []
    for item in compiled:
        for found in item.regex.finditer(line):
            if found.start() == found.end():
                continue
            matches.append(
                Match(
                    rule=item.rule.name,
                    line=line_number,
                    column=byte_column(line, found.start()),
                    text=found.group(0),
                )
            )
    return matches


class LineScanner:
    def __init__(self, ruleset: RuleSet):
        self.ruleset = ruleset
        self.compiled = compile_rules(ruleset)

    @property
    def active_rules(self) -> list[str]:
        return [item.rule.name for item in self.compiled]

    def scan_line(self, line: str, line_number: int) -> list[Match]:
        return scan_line(line, line_number, self.compiled)

    def scan_text(self, text: str) -> list[Match]:
        matches: list[Match] = []
        for index, line in enumerate(text.split("\n")):
            matches.extend(self.scan_line(line, index))
        return matches
