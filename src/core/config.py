from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "INFO"
    app_log_max_mb: int = 50
    app_log_backup_count: int = 10


@dataclass(slots=True)
class XryConfig:
    """XRY report parsing configuration from config.yml."""

    default_encoding: str = "utf-8"  # Used when a report has no BOM
    report_extensions: List[str] = field(default_factory=lambda: [".txt"])
    write_summary: bool = True
    max_logged_info: int = 50  # Per-report cap on INFO diagnostics written to the log


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration resolved from disk."""

    logs_dir: Path
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    xry: XryConfig = field(default_factory=XryConfig)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle) or {}
        if not isinstance(content, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        return content


def _normalize_extensions(values: Any) -> List[str]:
    if isinstance(values, str):
        values = [values]
    extensions = []
    for value in values or []:
        ext = str(value).strip().lower()
        if not ext:
            continue
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return extensions or [".txt"]


def load_app_config(base_dir: Path) -> AppConfig:
    """Load application configuration from disk, providing sensible defaults."""

    config_dir = base_dir / "config"
    config_yaml = config_dir / "config.yml"
    config_overrides = _load_yaml(config_yaml)

    # Logs must go to a persistent, writable location when frozen.
    if getattr(sys, 'frozen', False):
        logs_dir = Path.home() / ".config" / "xrysifter" / "logs"
    else:
        logs_dir = base_dir / "logs"

    logging_cfg = config_overrides.get("logging", {}) or {}
    logging_config = LoggingConfig(
        level=str(logging_cfg.get("level", "INFO")).upper(),
        app_log_max_mb=logging_cfg.get("app_log_max_mb", 50),
        app_log_backup_count=logging_cfg.get("app_log_backup_count", 10),
    )

    xry_cfg = config_overrides.get("xry", {}) or {}
    xry_config = XryConfig(
        default_encoding=xry_cfg.get("default_encoding", "utf-8"),
        report_extensions=_normalize_extensions(xry_cfg.get("report_extensions", [".txt"])),
        write_summary=xry_cfg.get("write_summary", True),
        max_logged_info=xry_cfg.get("max_logged_info", 50),
    )

    return AppConfig(
        logs_dir=logs_dir,
        logging=logging_config,
        xry=xry_config,
    )
