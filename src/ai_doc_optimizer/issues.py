from __future__ import annotations

import re

from ai_doc_optimizer.defaults import GENERIC_SUGGESTION, builtin_templates
from ai_doc_optimizer.models import Issue, Match, Rule

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

BUILTIN_TEMPLATES = builtin_templates()


def render_template(template: str, **values: object) -> str:
    # Unknown placeholders are left as written.
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in values:
            return str(values[key])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)


def resolve_templates(rule: Rule) -> tuple[str, str]:
    builtin_message, builtin_suggestion = BUILTIN_TEMPLATES.get(rule.name, (None, None))
    message = rule.message or builtin_message or rule.description
    suggestion = rule.suggestion or builtin_suggestion or GENERIC_SUGGESTION
    return message, suggestion


def build_issue(match: Match, rule: Rule, file_path: str, context_line: str = "") -> Issue:
    message_template, suggestion_template = resolve_templates(rule)
    values = {"match": match.text, "line": context_line.strip(), "rule": rule.name}

    message = match.message if match.message is not None else render_template(message_template, **values)
    suggestion = (
        match.suggestion if match.suggestion is not None else render_template(suggestion_template, **values)
    )

    return Issue(
        file=file_path,
        line=match.line + 1,
        column=match.column,
        rule=rule.name,
        severity=rule.severity,
        message=message,
        suggestion=suggestion,
        original_text=match.text,
    )
