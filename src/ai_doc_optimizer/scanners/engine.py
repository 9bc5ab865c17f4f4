from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from ai_doc_optimizer.issues import build_issue
from ai_doc_optimizer.models import Document, Issue, RuleSet
from ai_doc_optimizer.scanners.lines import LineScanner
from ai_doc_optimizer.scanners.structure import STRUCTURAL_RULES, scan_document


class Analyzer:
    """Applies one RuleSet to documents; patterns are compiled once."""

    def __init__(self, ruleset: RuleSet):
        self.ruleset = ruleset
        self.scanner = LineScanner(ruleset)
        self._rules = {rule.name: rule for rule in ruleset.rules}

    def analyze(self, document: Document) -> list[Issue]:
        lines = document.text.split("\n")
        issues: list[Issue] = []

        for index, line in enumerate(lines):
            for match in self.scanner.scan_line(line, index):
                issues.append(build_issue(match, self._rules[match.rule], document.path, line))

        for match in scan_document(document.text):
            context = lines[match.line] if match.line < len(lines) else ""
            issues.append(build_issue(match, STRUCTURAL_RULES[match.rule], document.path, context))

        return issues

    def analyze_many(self, documents: Iterable[Document], jobs: int = 1) -> list[Issue]:
        docs = list(documents)
        if jobs <= 1 or len(docs) <= 1:
            results = [self.analyze(doc) for doc in docs]
        else:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                results = list(executor.map(self.analyze, docs))

        issues: list[Issue] = []
        for item in results:
            issues.extend(item)
        return issues


def analyze_document(document: Document, ruleset: RuleSet) -> list[Issue]:
    return Analyzer(ruleset).analyze(document)


def analyze_documents(documents: Iterable[Document], ruleset: RuleSet, jobs: int = 1) -> list[Issue]:
    return Analyzer(ruleset).analyze_many(documents, jobs=jobs)
