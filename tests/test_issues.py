from ai_doc_optimizer.defaults import GENERIC_SUGGESTION, builtin_rules
from ai_doc_optimizer.issues import build_issue, render_template, resolve_templates
from ai_doc_optimizer.models import Match, Rule


def test_custom_rule_falls_back_to_description():
    rule = Rule(name="passive-voice", description="Passive construction", pattern="was \\w+ed", severity="suggestion")
    match = Match(rule="passive-voice", line=2, column=5, text="was configured")

    issue = build_issue(match, rule, "docs/a.md", "It was configured by ops.")

    assert issue.line == 3
    assert issue.column == 5
    assert issue.file == "docs/a.md"
    assert issue.severity == "suggestion"
    assert issue.message == "Passive construction"
    assert issue.suggestion == GENERIC_SUGGESTION
    assert issue.original_text == "was configured"


def test_rule_templates_render_placeholders():
    rule = Rule(
        name="click-here",
        description="unused",
        pattern="click here",
        message="Link text '{match}' is vague",
        suggestion="Rewrite '{line}' around the target ({rule})",
    )
    match = Match(rule="click-here", line=0, column=1, text="click here")

    issue = build_issue(match, rule, "a.md", "  click here to start  ")

    assert issue.message == "Link text 'click here' is vague"
    assert issue.suggestion == "Rewrite 'click here to start' around the target (click-here)"


def test_redeclared_builtin_rule_keeps_builtin_wording():
    rule = Rule(name="implicit-knowledge", description="my own words", pattern=r"\bjust\b")

    message, suggestion = resolve_templates(rule)

    assert message == "Avoid assuming user knowledge. Provide explicit context."
    assert suggestion == "Replace assumption words with explicit explanations"


def test_every_builtin_rule_carries_templates():
    for rule in builtin_rules():
        assert rule.message
        assert rule.suggestion


def test_match_text_overrides_templates():
    rule = Rule(name="x", description="d", pattern="", message="from rule")
    match = Match(rule="x", line=0, column=0, text="t", message="from match", suggestion="")

    issue = build_issue(match, rule, "a.md")

    assert issue.message == "from match"
    assert issue.suggestion == ""


def test_render_template_keeps_unknown_placeholders():
    assert render_template("{match} in {where} {", match="word") == "word in {where} {"
