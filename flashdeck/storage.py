"""
Durable key-value slot holding the serialized deck.

A slot is a single named entry whose value is a JSON array of
``{"id", "question", "answer"}`` objects. Reading a missing or unparsable
value yields an empty deck; writing replaces the value wholesale.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from flashdeck.cards import Card

logger = logging.getLogger(__name__)

DEFAULT_SLOT_KEY = "flashcards"


class KeyValueStore(Protocol):
    """Minimal string-to-string store the deck is persisted into."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Store backed by one JSON object file mapping keys to string values.

    A missing or unreadable file behaves as an empty store. Writes go to a
    temporary sibling file that then replaces the original.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        # Hand-edited files may hold the array itself rather than its encoding.
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)


def slot_exists(store: KeyValueStore, key: str = DEFAULT_SLOT_KEY) -> bool:
    """Return True if the slot has ever been written."""
    return store.get(key) is not None


def decode_deck(raw: Optional[str]) -> List[Card]:
    """Decode a slot value into cards.

    Any malformed entry marks the whole value as corrupt and yields an empty
    deck. Repeated ids keep their first occurrence.
    """
    if raw is None:
        return []
    try:
        entries = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Stored deck is not valid JSON; starting empty: %s", e)
        return []
    if not isinstance(entries, list):
        logger.warning("Stored deck is not a JSON array; starting empty")
        return []

    cards: List[Card] = []
    seen_ids = set()
    for position, entry in enumerate(entries):
        card = Card.from_dict(entry)
        if card is None:
            logger.warning("Stored deck entry %d is malformed; starting empty", position)
            return []
        if card.id in seen_ids:
            logger.warning("Dropping stored card with repeated id %s", card.id)
            continue
        seen_ids.add(card.id)
        cards.append(card)
    return cards


def encode_deck(cards: List[Card]) -> str:
    return json.dumps([card.to_dict() for card in cards], ensure_ascii=False)


def load_deck(store: KeyValueStore, key: str = DEFAULT_SLOT_KEY) -> List[Card]:
    """Read the deck from its slot; never raises on bad data."""
    return decode_deck(store.get(key))


def save_deck(store: KeyValueStore, cards: List[Card], key: str = DEFAULT_SLOT_KEY) -> None:
    """Replace the slot value with the full deck."""
    store.set(key, encode_deck(cards))
    logger.debug("Persisted %d card(s) to slot %r", len(cards), key)


__all__ = [
    "DEFAULT_SLOT_KEY",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "slot_exists",
    "decode_deck",
    "encode_deck",
    "load_deck",
    "save_deck",
]
