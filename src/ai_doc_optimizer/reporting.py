from __future__ import annotations

import json
from collections import Counter
from typing import Any

from ai_doc_optimizer import __version__
from ai_doc_optimizer.defaults import structural_rules
from ai_doc_optimizer.models import SEVERITIES, Issue, RuleSet, severity_rank

OUTPUT_FORMATS = ("standard", "json", "sarif")

REPORT_VERSION = "1.0"
SARIF_VERSION = "2.1.0"
SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
SARIF_LEVELS = {"error": "error", "warning": "warning", "suggestion": "note"}

TOOL_NAME = "ai-doc-optimizer"


def filter_issues(issues: list[Issue], min_severity: str | None) -> list[Issue]:
    if not min_severity:
        return list(issues)
    threshold = severity_rank(min_severity)
    return [issue for issue in issues if severity_rank(issue.severity) >= threshold]


def build_summary(issues: list[Issue]) -> dict[str, Any]:
    by_severity = {severity: 0 for severity in SEVERITIES}
    for issue in issues:
        by_severity[issue.severity] = by_severity.get(issue.severity, 0) + 1

    by_rule = Counter(issue.rule for issue in issues)
    return {
        "total": len(issues),
        "by_severity": by_severity,
        "by_rule": dict(by_rule),
    }


def render_standard(issues: list[Issue]) -> str:
    chunks: list[str] = []
    for issue in issues:
        chunks.append(
            f"{issue.file}:{issue.line}:{issue.column}: "
            f"{issue.severity.upper()} [{issue.rule}] {issue.message}\n"
        )
        if issue.suggestion:
            chunks.append(f"    Suggestion: {issue.suggestion}\n")
        chunks.append("\n")
    return "".join(chunks)


def build_json_report(issues: list[Issue]) -> dict[str, Any]:
    return {
        "version": REPORT_VERSION,
        "issues": [issue.to_dict() for issue in issues],
        "summary": build_summary(issues),
    }


def build_sarif_report(issues: list[Issue], ruleset: RuleSet | None = None) -> dict[str, Any]:
    descriptions = {name: rule.description for name, rule in structural_rules().items()}
    if ruleset is not None:
        descriptions.update({rule.name: rule.description for rule in ruleset.rules})

    rule_ids: list[str] = []
    for issue in issues:
        if issue.rule not in rule_ids:
            rule_ids.append(issue.rule)
    rule_index = {rule_id: index for index, rule_id in enumerate(rule_ids)}

    results = []
    for issue in issues:
        region: dict[str, Any] = {"startLine": max(issue.line, 1)}
        if issue.column > 0:
            region["startColumn"] = issue.column
        if issue.original_text:
            region["snippet"] = {"text": issue.original_text}

        result: dict[str, Any] = {
            "ruleId": issue.rule,
            "ruleIndex": rule_index[issue.rule],
            "level": SARIF_LEVELS.get(issue.severity, "warning"),
            "message": {"text": issue.message},
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": issue.file.replace("\\", "/")},
                        "region": region,
                    }
                }
            ],
        }
        if issue.suggestion:
            result["properties"] = {"suggestion": issue.suggestion}
        results.append(result)

    return {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "version": __version__,
                        "rules": [
                            {
                                "id": rule_id,
                                "shortDescription": {"text": descriptions.get(rule_id) or rule_id},
                            }
                            for rule_id in rule_ids
                        ],
                    }
                },
                "results": results,
            }
        ],
    }


def render_issues(issues: list[Issue], output_format: str = "standard", ruleset: RuleSet | None = None) -> str:
    fmt = output_format.strip().lower()
    if fmt == "json":
        return json.dumps(build_json_report(issues), indent=2, ensure_ascii=True) + "\n"
    if fmt == "sarif":
        return json.dumps(build_sarif_report(issues, ruleset), indent=2, ensure_ascii=True) + "\n"
    if fmt == "standard":
        return render_standard(issues)
    raise ValueError(f"Unsupported output format: {output_format}")
