import logging

from ai_doc_optimizer.defaults import default_ruleset
from ai_doc_optimizer.models import Document, Rule, RuleSet
from ai_doc_optimizer.scanners import (
    Analyzer,
    LineScanner,
    analyze_document,
    analyze_documents,
    compile_rules,
    scan_line,
)


def _ruleset(*rules: Rule) -> RuleSet:
    return RuleSet(rules=tuple(rules))


def test_line_without_matches_yields_nothing():
    compiled = compile_rules(default_ruleset())

    assert scan_line("Plain text here.", 0, compiled) == []


def test_repeated_match_on_one_line_yields_distinct_columns():
    compiled = compile_rules(default_ruleset())

    matches = scan_line("Just do it, just works", 4, compiled)

    assert [(m.rule, m.column, m.text, m.line) for m in matches] == [
        ("implicit-knowledge", 1, "Just", 4),
        ("implicit-knowledge", 13, "just", 4),
    ]


def test_column_is_one_plus_byte_offset():
    compiled = compile_rules(default_ruleset())
    line = "Déjà vu: simply put."

    matches = scan_line(line, 0, compiled)

    assert len(matches) == 1
    assert matches[0].text == "simply"
    assert matches[0].column == len("Déjà vu: ".encode("utf-8")) + 1
    assert matches[0].column == 12


def test_matches_follow_rule_order_then_position():
    ruleset = _ruleset(
        Rule(name="second-word", description="", pattern=r"\bbeta\b"),
        Rule(name="first-word", description="", pattern=r"\balpha\b"),
    )

    matches = LineScanner(ruleset).scan_line("alpha beta alpha", 0)

    assert [(m.rule, m.column) for m in matches] == [
        ("second-word", 7),
        ("first-word", 1),
        ("first-word", 12),
    ]


def test_invalid_pattern_is_skipped_for_the_run(caplog):
    ruleset = _ruleset(
        Rule(name="broken", description="", pattern="(unclosed"),
        Rule(name="foo", description="foo word", pattern=r"\bfoo\b"),
    )

    with caplog.at_level(logging.WARNING):
        scanner = LineScanner(ruleset)

    assert scanner.active_rules == ["foo"]
    assert "broken" in caplog.text
    assert [m.rule for m in scanner.scan_text("foo bar\n(unclosed foo")] == ["foo", "foo"]


def test_empty_matches_are_ignored():
    scanner = LineScanner(_ruleset(Rule(name="stars", description="", pattern="x*")))

    assert scanner.scan_line("abc", 0) == []
    assert [m.text for m in scanner.scan_line("axxb", 0)] == ["xx"]


def test_simply_configure_line_reports_two_warnings():
    issues = analyze_document(Document("guide.md", "Simply configure the endpoint."), default_ruleset())

    by_rule = {issue.rule: issue for issue in issues}
    assert "implicit-knowledge" in by_rule
    assert "incomplete-context" in by_rule
    assert by_rule["implicit-knowledge"].original_text == "Simply"
    assert by_rule["implicit-knowledge"].column == 1
    assert by_rule["incomplete-context"].original_text == "Simply configure the endpoint."
    for issue in issues:
        assert issue.line == 1
        assert issue.severity == "warning"
        assert issue.file == "guide.md"


def test_visual_reference_line_reports_one_error():
    issues = analyze_document(Document("guide.md", "See the diagram above for details."), default_ruleset())

    assert len(issues) == 1
    issue = issues[0]
    assert issue.rule == "visual-dependency"
    assert issue.severity == "error"
    assert issue.original_text == "See the diagram above"
    assert issue.message == "Visual reference detected. Provide text alternative."
    assert issue.suggestion == "Add text description alongside visual reference"


def test_contextual_dependency_and_numbered_step():
    text = (
        "# Deploy Acme\n"
        "\n"
        "These settings will apply to every node.\n"
        "1. Enable caching\n"
    )
    issues = analyze_document(Document("deploy.md", text), default_ruleset())

    located = [(issue.rule, issue.line, issue.column) for issue in issues]
    assert ("contextual-dependency", 3, 1) in located
    assert ("incomplete-context", 4, 1) in located


def test_line_issues_come_before_structural_issues():
    text = "## Overview\nJust read this.\n"
    issues = analyze_document(Document("a.md", text), default_ruleset())

    assert [issue.rule for issue in issues] == [
        "generic-headings",
        "implicit-knowledge",
        "missing-product-context",
    ]
    assert issues[-1].column == 0
    assert issues[-1].line == 1


def test_analysis_is_deterministic():
    text = (
        "## Setup\n"
        "Obviously, see the screenshot below. This step should be quick.\n"
        "Clearly Widget runs fast. Widget and Gadget and Gadget.\n"
        "Widget Gadget\n"
        "#### Deep Dive\n"
    )
    document = Document("docs/setup.md", text)
    analyzer = Analyzer(default_ruleset())

    first = analyzer.analyze(document)
    second = analyzer.analyze(document)

    assert first == second
    assert first == analyze_document(document, default_ruleset())


def test_parallel_analysis_keeps_input_order():
    documents = [
        Document(f"doc-{index}.md", f"Line {index}: simply works.\nSee the figure below.\n")
        for index in range(12)
    ]

    serial = analyze_documents(documents, default_ruleset(), jobs=1)
    parallel = analyze_documents(documents, default_ruleset(), jobs=4)

    assert parallel == serial
    assert [issue.file for issue in serial][:2] == ["doc-0.md", "doc-0.md"]
    assert serial[-1].file == "doc-11.md"


def test_task_heading_without_product_suggests_generic_rewrite():
    issues = analyze_document(Document("guide.md", "## Configure caching\n"), default_ruleset())

    assert [(issue.rule, issue.line, issue.column) for issue in issues] == [("semantic-discoverability", 1, 1)]
    issue = issues[0]
    assert issue.severity == "suggestion"
    assert issue.original_text == "## Configure caching"
    assert issue.message == "Consider including product name for better AI discoverability."
    assert issue.suggestion == "Consider rewriting for AI clarity"
