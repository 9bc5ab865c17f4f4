from __future__ import annotations

from ai_doc_optimizer.scanners.engine import Analyzer, analyze_document, analyze_documents
from ai_doc_optimizer.scanners.lines import LineScanner, RulePatternError, compile_rules, scan_line
from ai_doc_optimizer.scanners.structure import extract_headings, extract_product_names, scan_document

__all__ = [
    "Analyzer",
    "LineScanner",
    "RulePatternError",
    "analyze_document",
    "analyze_documents",
    "compile_rules",
    "extract_headings",
    "extract_product_names",
    "scan_document",
    "scan_line",
]
