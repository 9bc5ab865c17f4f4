from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass

from ai_doc_optimizer.defaults import (
    HEADING_LEVEL_SKIP,
    MISSING_PRODUCT_CONTEXT,
    PRODUCT_PLACEHOLDER,
    structural_rules,
)
from ai_doc_optimizer.issues import render_template
from ai_doc_optimizer.models import Match

HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+)$", re.MULTILINE)
CAPITALIZED_WORD_RE = re.compile(r"\b[A-Z][a-zA-Z]+\b")

COMMON_WORDS = frozenset({"The", "This", "That", "With", "From", "Your", "When", "Where", "What", "How"})
GENERIC_TERMS = ("overview", "introduction", "getting started", "configuration", "setup", "installation")

MIN_PRODUCT_LENGTH = 4
MIN_PRODUCT_OCCURRENCES = 3

STRUCTURAL_RULES = structural_rules()


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    line: int


def extract_headings(text: str) -> list[Heading]:
    headings: list[Heading] = []
    for found in HEADING_RE.finditer(text):
        headings.append(
            Heading(
                level=len(found.group(1)),
                text=found.group(2).strip(),
                line=text.count("\n", 0, found.start()),
            )
        )
    return headings


def extract_product_names(text: str) -> list[str]:
    """Capitalized words that recur often enough to look like product names.

    Ordered by frequency, most frequent first; equal counts keep the order in
    which the words first appeared.
    """
    frequency: Counter[str] = Counter()
    for word in CAPITALIZED_WORD_RE.findall(text):
        if len(word) >= MIN_PRODUCT_LENGTH and word not in COMMON_WORDS:
            frequency[word] += 1
    return [word for word, count in frequency.most_common() if count >= MIN_PRODUCT_OCCURRENCES]


def is_generic_heading(heading: str) -> bool:
    lower = heading.lower()
    return any(term in lower for term in GENERIC_TERMS)


def contains_product_context(heading: str, products: list[str]) -> bool:
    lower = heading.lower()
    return any(product.lower() in lower for product in products)


def infer_product_name(products: list[str]) -> str:
    if products:
        return products[0]
    return PRODUCT_PLACEHOLDER


def check_product_context(headings: list[Heading], products: list[str]) -> list[Match]:
    rule = STRUCTURAL_RULES[MISSING_PRODUCT_CONTEXT]
    product = infer_product_name(products)
    matches: list[Match] = []
    for heading in headings:
        if not is_generic_heading(heading.text) or contains_product_context(heading.text, products):
            continue
        matches.append(
            Match(
                rule=rule.name,
                line=heading.line,
                column=0,
                text=heading.text,
                message=render_template(rule.message or "", match=heading.text),
                suggestion=render_template(rule.suggestion or "", match=heading.text, product=product),
            )
        )
    return matches


def check_heading_levels(headings: list[Heading]) -> list[Match]:
    rule = STRUCTURAL_RULES[HEADING_LEVEL_SKIP]
    matches: list[Match] = []
    previous: Heading | None = None
    for heading in headings:
        if previous is not None and heading.level > previous.level + 1:
            values = {
                "match": heading.text,
                "previous": previous.level,
                "level": heading.level,
                "expected": previous.level + 1,
            }
            matches.append(
                Match(
                    rule=rule.name,
                    line=heading.line,
                    column=0,
                    text=heading.text,
                    message=render_template(rule.message or "", **values),
                    suggestion=render_template(rule.suggestion or "", **values),
                )
            )
        previous = heading
    return matches


def scan_document(text: str) -> list[Match]:
    headings = extract_headings(text)
    if not headings:
        return []
    products = extract_product_names(text)
    return check_product_context(headings, products) + check_heading_levels(headings)
