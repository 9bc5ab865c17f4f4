from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from ai_doc_optimizer.models import Document, Issue, RuleSet
from ai_doc_optimizer.scanners import Analyzer

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE_EXTS = {
    ".md",
    ".markdown",
    ".html",
    ".htm",
    ".txt",
    ".rst",
}


class PathError(OSError):
    pass


class DocumentReadError(OSError):
    pass


@dataclass
class AnalysisResult:
    issues: list[Issue] = field(default_factory=list)
    files_analyzed: int = 0
    read_errors: int = 0
    path_errors: int = 0


def supported_extensions(ruleset: RuleSet | None = None) -> set[str]:
    extensions = set(DEFAULT_INCLUDE_EXTS)
    if ruleset is not None:
        extensions |= ruleset.extensions()
    return extensions


def is_supported_file(path: str | Path, extensions: set[str] | None = None) -> bool:
    include = extensions or DEFAULT_INCLUDE_EXTS
    return Path(path).suffix.lower() in include


def resolve_files(path: str | Path, *, recursive: bool, extensions: set[str]) -> list[Path]:
    root = Path(path)
    if not root.exists():
        raise PathError(f"Path does not exist: {root}")

    if not root.is_dir():
        return [root] if is_supported_file(root, extensions) else []

    try:
        if recursive:
            candidates = _walk(root)
        else:
            candidates = sorted(entry for entry in root.iterdir() if entry.is_file())
    except OSError as exc:
        raise PathError(f"Cannot list directory {root}: {exc}") from exc

    return [item for item in candidates if is_supported_file(item, extensions)]


def _walk(root: Path) -> list[Path]:
    def _raise(exc: OSError) -> None:
        raise exc

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            files.append(Path(dirpath) / name)
    return files


def read_document(path: str | Path) -> Document:
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise DocumentReadError(f"failed to read {file_path}: {exc}") from exc
    return Document(path=str(file_path), text=text)


def iter_documents(
    paths: list[str],
    *,
    recursive: bool,
    extensions: set[str],
    result: AnalysisResult | None = None,
) -> Iterator[Document]:
    for path in paths:
        try:
            files = resolve_files(path, recursive=recursive, extensions=extensions)
        except PathError as exc:
            logger.error("Error processing %s: %s", path, exc)
            if result is not None:
                result.path_errors += 1
            continue

        for file_path in files:
            try:
                yield read_document(file_path)
            except DocumentReadError as exc:
                logger.warning("Warning: %s", exc)
                if result is not None:
                    result.read_errors += 1


def run_analysis(
    paths: list[str],
    ruleset: RuleSet,
    *,
    recursive: bool = False,
    jobs: int = 1,
) -> AnalysisResult:
    result = AnalysisResult()
    documents = list(
        iter_documents(
            paths,
            recursive=recursive,
            extensions=supported_extensions(ruleset),
            result=result,
        )
    )
    logger.debug("Analyzing %d documents with %d rules", len(documents), len(ruleset.rules))

    analyzer = Analyzer(ruleset)
    result.issues = analyzer.analyze_many(documents, jobs=jobs)
    result.files_analyzed = len(documents)
    return result
