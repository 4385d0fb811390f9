"""
meetsense/config.py
JSON config with defaults. Persists to meetsense_config.json.
Holds the API bind address, CORS origins, the reference UTC offset used to
resolve relative due dates, and talk-balance thresholds.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "meetsense_config.json"

DEFAULT_CONFIG = {
    "host": "127.0.0.1",
    "port": 8787,
    "allowed_origins": ["*"],
    "reference_utc_offset_hours": 8,
    "quiet_share_percent": 5.0,
    "dominant_share_percent": 50.0,
    "words_per_minute": 150,
}


def _config_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path.cwd()
    return root / CONFIG_FILENAME


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load config from meetsense_config.json. Returns defaults if missing."""
    path = _config_path(project_root)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return {**DEFAULT_CONFIG, **data}
            logger.warning(f"Config at {path} is not a JSON object — using defaults")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Config load failed: {e}")
    return dict(DEFAULT_CONFIG)


def save_config(config: Dict[str, Any], project_root: Optional[Path] = None) -> Path:
    """Persist config to meetsense_config.json."""
    path = _config_path(project_root)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path


def reference_timezone(config: Optional[Dict[str, Any]] = None) -> timezone:
    """Fixed-offset timezone used as the reference clock for due dates."""
    config = config or DEFAULT_CONFIG
    hours = float(config.get("reference_utc_offset_hours", 0) or 0)
    return timezone(timedelta(hours=hours))


def reference_now(config: Optional[Dict[str, Any]] = None) -> datetime:
    """Current wall-clock time at the configured reference offset."""
    return datetime.now(reference_timezone(config))
