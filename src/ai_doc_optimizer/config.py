from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ai_doc_optimizer.defaults import default_ruleset
from ai_doc_optimizer.models import KIND_FLAG, KIND_SUGGEST, FormatSettings, Rule, RuleSet

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


def load_ruleset(path: str | Path | None = None) -> RuleSet:
    """Resolve the RuleSet for a run.

    Without a path the built-in defaults are returned. With a path the file is
    parsed as YAML (JSON is accepted too) and any structural problem raises
    ConfigError. Rule patterns are not compiled here; a broken pattern only
    disables that rule once scanning starts.
    """
    if path is None or str(path) == "":
        return default_ruleset()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"Config file could not be read: {config_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file is not valid UTF-8: {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {config_path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")

    ruleset = parse_ruleset(raw)
    logger.debug("Loaded %d rules from %s", len(ruleset.rules), config_path)
    return ruleset


def parse_ruleset(raw: dict[str, Any]) -> RuleSet:
    rules_raw = raw.get("Rules", [])
    if rules_raw is None:
        rules_raw = []
    if not isinstance(rules_raw, list):
        raise ConfigError("'Rules' must be a list")

    rules: list[Rule] = []
    seen: set[str] = set()
    for item in rules_raw:
        if not isinstance(item, dict):
            raise ConfigError("Each rule entry must be a mapping")
        name = str(item.get("Name") or "").strip()
        if not name:
            raise ConfigError("Rule entry is missing 'Name'")
        if name in seen:
            raise ConfigError(f"Duplicate rule name: {name}")
        seen.add(name)

        rules.append(
            Rule(
                name=name,
                description=str(item.get("Description") or ""),
                pattern=str(item.get("Pattern") or ""),
                severity=str(item.get("Severity") or "warning").strip().lower(),
                kind=_parse_kind(item.get("Type")),
                replacement=_optional_str(item.get("Replacement")),
                category=_optional_str(item.get("Category")),
                message=_optional_str(item.get("Message")),
                suggestion=_optional_str(item.get("Suggestion")),
            )
        )

    return RuleSet(
        rules=tuple(rules),
        styles_path=str(raw.get("StylesPath") or ""),
        min_word_count=_parse_int(raw.get("MinWordCount", 0), "MinWordCount"),
        formats=_parse_formats(raw.get("Formats")),
    )


def _parse_formats(value: object) -> tuple[tuple[str, FormatSettings], ...]:
    if value is None:
        return ()
    if not isinstance(value, dict):
        raise ConfigError("'Formats' must be a mapping")

    formats: dict[str, FormatSettings] = {}
    for name, item in value.items():
        if not isinstance(item, dict):
            raise ConfigError(f"Format '{name}' must be a mapping")
        extensions = item.get("Extensions") or []
        if not isinstance(extensions, list):
            raise ConfigError(f"Format '{name}' Extensions must be a list")
        formats[str(name)] = FormatSettings(
            extensions=tuple(_normalize_extension(ext) for ext in extensions),
            parser=str(item.get("Parser") or name),
        )
    return tuple(formats.items())


def _parse_kind(value: object) -> str:
    if str(value or "").strip().lower() == KIND_SUGGEST:
        return KIND_SUGGEST
    return KIND_FLAG


def _parse_int(value: object, key: str) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'{key}' must be an integer") from exc


def _normalize_extension(value: object) -> str:
    ext = str(value).strip().lower()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return ext


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
