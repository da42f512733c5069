"""Configuration loading and typed settings for the CLI and study UI."""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from flashdeck.repository import CardRepository
from flashdeck.storage import DEFAULT_SLOT_KEY, JsonFileStore

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FLASHDECK_CONFIG"
CONFIG_FILENAME = "flashdeck_config.json"
DEFAULT_STORE_PATH = Path("~/.flashdeck/store.json")
DEFAULT_ADVANCE_DELAY = 0.3


def load_config() -> Tuple[Dict[str, Any], Optional[Path]]:
    """
    Load optional configuration for default paths and settings.

    Search order:
    1. Path from FLASHDECK_CONFIG (if set)
    2. ./flashdeck_config.json in current working directory
    3. ~/.flashdeck_config.json in the user home directory

    An unparsable file stops the search and falls back to defaults.
    """
    candidates: List[Path] = []
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / CONFIG_FILENAME)
    candidates.append(Path.home() / f".{CONFIG_FILENAME}")

    for path in candidates:
        if not path.is_file():
            continue
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring invalid config file %s: %s", path, e)
            break
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a JSON object", path)
            break
        return data, path

    return {}, None


def _resolve_path(value: Any, config_root: Optional[Path], default: Path) -> Path:
    """Resolve a path relative to the config file's directory."""
    if not value:
        return default.expanduser()
    if not isinstance(value, str):
        logger.warning("Ignoring config value store_path=%r: expected a path string", value)
        return default.expanduser()
    path = Path(value).expanduser()
    if not path.is_absolute() and config_root is not None:
        path = config_root / path
    return path


def _coerce(data: Dict[str, Any], key: str, convert: Callable[[Any], Any], default: Any) -> Any:
    """Convert a config value, falling back to the default when it is unusable."""
    value = data.get(key)
    if value is None:
        if key in data:
            logger.warning("Ignoring config value %s=null; using %r", key, default)
        return default
    try:
        return convert(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring config value %s=%r; using %r", key, value, default)
        return default


@dataclass
class AppConfig:
    """Settings shared by the CLI and the study UI."""

    store_path: Path
    slot_key: str = DEFAULT_SLOT_KEY
    seed_sample_deck: bool = True
    advance_delay: float = DEFAULT_ADVANCE_DELAY
    shuffle_seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_path: Optional[Path] = None) -> "AppConfig":
        config_root = config_path.parent if config_path else None
        return cls(
            store_path=_resolve_path(data.get("store_path"), config_root, DEFAULT_STORE_PATH),
            slot_key=str(data.get("slot_key") or DEFAULT_SLOT_KEY),
            seed_sample_deck=bool(data.get("seed_sample_deck", True)),
            advance_delay=_coerce(data, "advance_delay", float, DEFAULT_ADVANCE_DELAY),
            shuffle_seed=_coerce(data, "shuffle_seed", int, None),
        )

    @classmethod
    def load(cls) -> "AppConfig":
        data, path = load_config()
        return cls.from_dict(data, path)

    def with_overrides(self, args: argparse.Namespace) -> "AppConfig":
        """Apply CLI flags on top of file settings (CLI wins)."""
        store = getattr(args, "store", None)
        slot = getattr(args, "slot", None)
        return AppConfig(
            store_path=Path(store).expanduser() if store else self.store_path,
            slot_key=slot or self.slot_key,
            seed_sample_deck=self.seed_sample_deck and not getattr(args, "no_seed", False),
            advance_delay=self.advance_delay,
            shuffle_seed=self.shuffle_seed,
        )

    def open_repository(self) -> CardRepository:
        """Open the deck, seeding the sample cards on first launch if enabled."""
        repository = CardRepository(JsonFileStore(self.store_path), key=self.slot_key)
        if self.seed_sample_deck:
            repository.seed_if_missing()
        return repository


__all__ = ["AppConfig", "load_config", "CONFIG_ENV_VAR", "CONFIG_FILENAME"]
