"""Persisted string options (``options.json``).

Keeps the option values that survive a restart (currently the format
templates) in a small versioned JSON document.

Design principles:
- Pure logic, no UI imports, so it can be unit-tested headless.
- Explicit version field; an incompatible or corrupt file loads as empty and
  every option falls back to its compiled-in default.
- Atomic writes (temp file + replace) so a crash never leaves half a file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import CONFIG_DIR

__all__ = ["OptionConfig", "load_config", "save_config", "CONFIG_VERSION"]

_log = logging.getLogger(__name__)

CONFIG_VERSION = 1

DEFAULT_FILENAME = "options.json"


@dataclass
class OptionConfig:
    """Serializable option values.

    Attributes
    ----------
    version: Schema version for migration handling.
    options: Option name -> stored textual value.
    """

    version: int = CONFIG_VERSION
    options: Dict[str, str] = field(default_factory=dict)

    def get_str_option(self, name: str) -> Optional[str]:
        return self.options.get(name)

    def set_str_option(self, name: str, value: str) -> None:
        self.options[name] = value

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionConfig":
        raw = data.get("options") or {}
        if not isinstance(raw, dict):
            raise ValueError("'options' must be an object")
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            options={str(k): str(v) for k, v in raw.items()},
        )


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path(CONFIG_DIR)
    return base / DEFAULT_FILENAME


def load_config(base_dir: str | Path | None = None) -> OptionConfig:
    """Load stored options from ``base_dir`` (defaults to ``CONFIG_DIR``)."""
    path = _resolve_path(base_dir)
    if not path.exists():
        return OptionConfig()
    try:
        cfg = OptionConfig.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        _log.warning("ignoring unreadable option file %s: %s", path, exc)
        return OptionConfig()
    if cfg.version != CONFIG_VERSION:
        _log.warning("ignoring option file %s with version %s", path, cfg.version)
        return OptionConfig()
    return cfg


def save_config(cfg: OptionConfig, base_dir: str | Path | None = None) -> Path:
    """Persist ``cfg``; returns the path written."""
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
