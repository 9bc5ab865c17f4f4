from __future__ import annotations

from ai_doc_optimizer.models import (
    KIND_FLAG,
    KIND_SUGGEST,
    SEVERITY_ERROR,
    SEVERITY_SUGGESTION,
    SEVERITY_WARNING,
    FormatSettings,
    Rule,
    RuleSet,
)

DEFAULT_STYLES_PATH = "./styles"
DEFAULT_MIN_WORD_COUNT = 10

GENERIC_SUGGESTION = "Consider rewriting for AI clarity"
PRODUCT_PLACEHOLDER = "[PRODUCT_NAME]"

MISSING_PRODUCT_CONTEXT = "missing-product-context"
HEADING_LEVEL_SKIP = "heading-level-skip"

# (name, category, description, pattern, severity, kind, message, suggestion)
_BUILTIN_RULES = (
    (
        "contextual-dependency",
        "contextual-dependency",
        "Detect sections that depend on previous context",
        r"(?i)\b(this|that|these|those|above|below|previously|earlier)\b(?:\s+\w+){0,3}\s+(?:will|should|must|can|may)",
        SEVERITY_WARNING,
        KIND_SUGGEST,
        "This text may depend on previous context. Consider making it self-contained.",
        "Replace contextual references with specific details",
    ),
    (
        "semantic-discoverability",
        "missing-semantic-context",
        "Ensure product names are included in relevant sections",
        r"^##+\s+(?:Configure|Setup|Install|Enable)\s+\w+(?:\s+\w+)*$",
        SEVERITY_SUGGESTION,
        KIND_SUGGEST,
        "Consider including product name for better AI discoverability.",
        GENERIC_SUGGESTION,
    ),
    (
        "implicit-knowledge",
        "implicit-knowledge",
        "Detect assumed knowledge without explanation",
        r"(?i)\b(?:simply|just|obviously|clearly|of course|naturally)\b",
        SEVERITY_WARNING,
        KIND_SUGGEST,
        "Avoid assuming user knowledge. Provide explicit context.",
        "Replace assumption words with explicit explanations",
    ),
    (
        "visual-dependency",
        "visual-dependency",
        "Detect references to visual elements without text alternatives",
        r"(?i)(?:see\s+(?:the\s+)?(?:diagram|image|figure|chart|screenshot)(?:\s+(?:above|below))?"
        r"|(?:above|below)\s+(?:image|diagram|figure))",
        SEVERITY_ERROR,
        KIND_FLAG,
        "Visual reference detected. Provide text alternative.",
        "Add text description alongside visual reference",
    ),
    (
        "generic-headings",
        "generic-headings",
        "Detect generic headings that lack context",
        r"^##+\s+(?:Overview|Introduction|Getting Started|Configuration|Setup|Installation)$",
        SEVERITY_SUGGESTION,
        KIND_SUGGEST,
        "Generic heading detected. Add specific context.",
        "Add product/feature name to heading",
    ),
    (
        "incomplete-context",
        "incomplete-procedure",
        "Detect incomplete procedural instructions",
        r"(?i)^(?:\d+\.\s*|[-*]\s*)?(?:(?:simply|just)\s+)?(?:configure|set up|enable|disable|update|modify)\s+\w+(?:\s+\w+)*\.?\s*$",
        SEVERITY_WARNING,
        KIND_SUGGEST,
        "Instruction may lack sufficient context. Include prerequisites and specific steps.",
        "Include prerequisite steps and specific system/location details",
    ),
)

# Document-level checks; never compiled by the line scanner.
_STRUCTURAL_RULES = (
    (
        MISSING_PRODUCT_CONTEXT,
        "missing-semantic-context",
        "Generic heading without a product name that the document uses",
        SEVERITY_SUGGESTION,
        "Heading lacks product-specific context",
        "Consider adding product name: '{product} {match}'",
    ),
    (
        HEADING_LEVEL_SKIP,
        "document-structure",
        "Heading level jumps by more than one",
        SEVERITY_SUGGESTION,
        "Heading level skips from h{previous} to h{level}",
        "Use an h{expected} heading so chunkers keep the section hierarchy",
    ),
)


def builtin_rules() -> tuple[Rule, ...]:
    return tuple(
        Rule(
            name=name,
            category=category,
            description=description,
            pattern=pattern,
            severity=severity,
            kind=kind,
            message=message,
            suggestion=suggestion,
        )
        for name, category, description, pattern, severity, kind, message, suggestion in _BUILTIN_RULES
    )


def structural_rules() -> dict[str, Rule]:
    return {
        name: Rule(
            name=name,
            category=category,
            description=description,
            pattern="",
            severity=severity,
            kind=KIND_SUGGEST,
            message=message,
            suggestion=suggestion,
        )
        for name, category, description, severity, message, suggestion in _STRUCTURAL_RULES
    }


def builtin_templates() -> dict[str, tuple[str, str]]:
    templates = {rule.name: (rule.message or "", rule.suggestion or "") for rule in builtin_rules()}
    for name, rule in structural_rules().items():
        templates[name] = (rule.message or "", rule.suggestion or "")
    return templates


def default_formats() -> tuple[tuple[str, FormatSettings], ...]:
    return (
        ("markdown", FormatSettings(extensions=(".md", ".markdown"), parser="markdown")),
        ("html", FormatSettings(extensions=(".html", ".htm"), parser="html")),
    )


def default_ruleset() -> RuleSet:
    return RuleSet(
        rules=builtin_rules(),
        styles_path=DEFAULT_STYLES_PATH,
        min_word_count=DEFAULT_MIN_WORD_COUNT,
        formats=default_formats(),
    )
