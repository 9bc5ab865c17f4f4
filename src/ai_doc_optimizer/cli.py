from __future__ import annotations

import argparse
import logging
import sys

from ai_doc_optimizer.config import ConfigError, load_ruleset
from ai_doc_optimizer.models import SEVERITIES
from ai_doc_optimizer.pipeline import run_analysis
from ai_doc_optimizer.reporting import OUTPUT_FORMATS, filter_issues, render_issues

logger = logging.getLogger("ai_doc_optimizer")

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-doc-optimizer",
        description="Flag documentation passages that confuse RAG and other AI consumers",
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Files or directories to analyze")
    parser.add_argument("--config", default=None, help="Path to configuration file (YAML or JSON)")
    parser.add_argument("--output", choices=OUTPUT_FORMATS, default="standard", help="Output format")
    parser.add_argument("--fix", action="store_true", help="Attempt to automatically fix issues")
    parser.add_argument("--recursive", action="store_true", help="Process directories recursively")
    parser.add_argument("--jobs", type=int, default=1, help="Documents analyzed in parallel")
    parser.add_argument(
        "--min-severity",
        choices=SEVERITIES,
        default=None,
        help="Only report issues at or above this severity",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr")
    return parser


def configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.paths:
        parser.print_usage(sys.stderr)
        logger.error("no input paths supplied")
        return EXIT_FAILURE

    try:
        ruleset = load_ruleset(args.config)
    except ConfigError as exc:
        logger.error("Error creating analyzer: %s", exc)
        return EXIT_FAILURE

    result = run_analysis(args.paths, ruleset, recursive=args.recursive, jobs=max(1, args.jobs))
    issues = filter_issues(result.issues, args.min_severity)
    logger.debug("Analyzed %d files, %d issues", result.files_analyzed, len(issues))

    if args.fix:
        logger.warning("Auto-fix functionality is not implemented; reporting issues only")

    sys.stdout.write(render_issues(issues, args.output, ruleset))

    if issues:
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
