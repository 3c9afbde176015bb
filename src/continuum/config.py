"""Continuum configuration loader.

Priority (high → low):
  1. CLI flags           (applied by the caller, not here)
  2. Environment variables  (CONTINUUM_DB, CONTINUUM_INSIGHT_LATENCY)
  3. Per-project continuum.yaml  (working directory)
  4. Global ~/.continuum/config.yaml
  5. Hardcoded defaults

The heuristic rule tables (tag keywords, sentiment lexicons, sunk-cost
phrases) are plain data and can be replaced or extended here. Insight
thresholds and confidence values are fixed and cannot be configured.
All YAML reads use yaml.safe_load(), never yaml.load().
"""

from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from continuum.engine.insights import SUNK_COST_PHRASES
from continuum.engine.sentiment import NEGATIVE_WORDS, POSITIVE_WORDS
from continuum.engine.tagging import DEFAULT_TAG_RULES, TagRule

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_DIR: Path = Path.home() / ".continuum"
_GLOBAL_CONFIG_PATH: Path = _GLOBAL_CONFIG_DIR / "config.yaml"
_PROJECT_CONFIG_NAME: str = "continuum.yaml"

# Known top-level sections; unknown keys produce a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(
    ["storage", "insights", "timeline", "tagging", "sentiment", "biases"]
)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class StorageCfg:
    """Where the decision collection lives (continuum.yaml: storage:).

    Attributes:
        path: SQLite database file holding the key-value table.
        key: Logical key under which the serialized collection is stored.
    """

    path: str = ".continuum.db"
    key: str = "continuumDecisions"


@dataclass
class InsightsCfg:
    """Insight generation settings (continuum.yaml: insights:)."""

    latency_seconds: float = 1.0
    recent_window: int = 5


@dataclass
class TimelineCfg:
    """Timeline listing settings (continuum.yaml: timeline:)."""

    items_per_page: int = 5


@dataclass
class TaggingCfg:
    """Auto-tagging keyword families (continuum.yaml: tagging:)."""

    rules: list[TagRule] = field(default_factory=lambda: list(DEFAULT_TAG_RULES))


@dataclass
class SentimentCfg:
    """Sentiment lexicons (continuum.yaml: sentiment:)."""

    positive: list[str] = field(default_factory=lambda: list(POSITIVE_WORDS))
    negative: list[str] = field(default_factory=lambda: list(NEGATIVE_WORDS))


@dataclass
class BiasesCfg:
    """Bias detection phrase lists (continuum.yaml: biases:)."""

    sunk_cost_phrases: list[str] = field(default_factory=lambda: list(SUNK_COST_PHRASES))


@dataclass
class ContinuumConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    storage: StorageCfg = field(default_factory=StorageCfg)
    insights: InsightsCfg = field(default_factory=InsightsCfg)
    timeline: TimelineCfg = field(default_factory=TimelineCfg)
    tagging: TaggingCfg = field(default_factory=TaggingCfg)
    sentiment: SentimentCfg = field(default_factory=SentimentCfg)
    biases: BiasesCfg = field(default_factory=BiasesCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}'; ignored.",
                UserWarning,
                stacklevel=4,
            )


def _as_float(value: Any, name: str) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if result < 0:
        raise ConfigError(f"{name} must be >= 0, got {result}")
    return result


def _as_positive_int(value: Any, name: str) -> int:
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if result < 1:
        raise ConfigError(f"{name} must be >= 1, got {result}")
    return result


def _as_word_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(w, str) for w in value):
        raise ConfigError(f"{name} must be a list of strings")
    return [w.lower() for w in value if w.strip()]


def _parse_tag_rules(raw: Any) -> list[TagRule]:
    if not isinstance(raw, list):
        raise ConfigError("tagging.rules must be a list of {tag, keywords} entries")
    rules: list[TagRule] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"tagging.rules[{i}] must be a mapping")
        tag = str(entry.get("tag", "")).strip()
        keywords = entry.get("keywords") or []
        if not tag:
            raise ConfigError(f"tagging.rules[{i}] is missing 'tag'")
        if not keywords:
            raise ConfigError(f"tagging.rules[{i}] ('{tag}') has no keywords")
        rules.append(TagRule(tag=tag, keywords=tuple(_as_word_list(keywords, f"tagging.rules[{i}].keywords"))))
    return rules


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _cfg_from_dict(data: dict[str, Any]) -> ContinuumConfig:
    """Build a *ContinuumConfig* from a merged raw YAML dict."""
    cfg = ContinuumConfig()

    if "storage" in data:
        s = data["storage"] or {}
        cfg.storage = StorageCfg(
            path=str(s.get("path", cfg.storage.path)),
            key=str(s.get("key", cfg.storage.key)),
        )

    if "insights" in data:
        i = data["insights"] or {}
        cfg.insights = InsightsCfg(
            latency_seconds=_as_float(
                i.get("latency_seconds", cfg.insights.latency_seconds),
                "insights.latency_seconds",
            ),
            recent_window=_as_positive_int(
                i.get("recent_window", cfg.insights.recent_window),
                "insights.recent_window",
            ),
        )

    if "timeline" in data:
        t = data["timeline"] or {}
        cfg.timeline = TimelineCfg(
            items_per_page=_as_positive_int(
                t.get("items_per_page", cfg.timeline.items_per_page),
                "timeline.items_per_page",
            ),
        )

    if "tagging" in data:
        tg = data["tagging"] or {}
        if "rules" in tg:
            rules = _parse_tag_rules(tg["rules"])
            if tg.get("extend", False):
                rules = list(DEFAULT_TAG_RULES) + rules
            cfg.tagging = TaggingCfg(rules=rules)

    if "sentiment" in data:
        se = data["sentiment"] or {}
        cfg.sentiment = SentimentCfg(
            positive=_as_word_list(se.get("positive", cfg.sentiment.positive), "sentiment.positive"),
            negative=_as_word_list(se.get("negative", cfg.sentiment.negative), "sentiment.negative"),
        )

    if "biases" in data:
        b = data["biases"] or {}
        cfg.biases = BiasesCfg(
            sunk_cost_phrases=_as_word_list(
                b.get("sunk_cost_phrases", cfg.biases.sunk_cost_phrases),
                "biases.sunk_cost_phrases",
            ),
        )

    return cfg


def _apply_env_overrides(cfg: ContinuumConfig) -> ContinuumConfig:
    """Apply CONTINUUM_* environment variable overrides (layer 2)."""
    if db_path := os.environ.get("CONTINUUM_DB"):
        cfg.storage.path = db_path
    if latency := os.environ.get("CONTINUUM_INSIGHT_LATENCY"):
        cfg.insights.latency_seconds = _as_float(latency, "CONTINUUM_INSIGHT_LATENCY")
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> ContinuumConfig:
    """Load and return a merged *ContinuumConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *continuum.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Returns:
        Fully merged *ContinuumConfig* with env var overrides applied.

    Raises:
        ConfigError: If any layer contains an invalid value.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    # Layer 1: global config
    if global_path.exists():
        raw_global = yaml.safe_load(global_path.read_text(encoding="utf-8")) or {}
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)
        logger.debug("Loaded global config %s", global_path)

    # Layer 2: per-project config
    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = yaml.safe_load(project_cfg_path.read_text(encoding="utf-8")) or {}
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)
        logger.debug("Loaded project config %s", project_cfg_path)

    cfg = _cfg_from_dict(merged)

    # Layer 3: env var overrides
    cfg = _apply_env_overrides(cfg)

    return cfg


def ensure_global_config(
    global_config_path: Path | None = None,
) -> Path:
    """Create ``~/.continuum/config.yaml`` with defaults if it does not exist.

    Creates parent directory with mode 0o700 and the config file with
    mode 0o600 (owner-readable only).

    Args:
        global_config_path: Override path (for testing).

    Returns:
        Path to the global config file.
    """
    target = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    if not target.exists():
        content = (
            "# Continuum global configuration.\n"
            "# Per-project settings go in continuum.yaml next to your journal.\n"
            "\n"
            "insights:\n"
            "  latency_seconds: 1.0\n"
            "\n"
            "timeline:\n"
            "  items_per_page: 5\n"
        )
        target.write_text(content, encoding="utf-8")
        target.chmod(0o600)

    return target
