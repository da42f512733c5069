"""
Card structures for flashdeck.

This module owns:
- `Card` dataclass
- `new_card_id` identifier factory
- `SAMPLE_CARDS`, the deck shipped for a first launch
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple


def new_card_id() -> str:
    """Return a fresh identifier, unique for the lifetime of a card."""
    return str(uuid.uuid4())


@dataclass
class Card:
    question: str
    answer: str
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            self.id = new_card_id()

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Card"]:
        """Build a Card from a stored entry, or None if the entry is malformed."""
        if not isinstance(data, dict):
            return None
        card_id = data.get("id")
        question = data.get("question")
        answer = data.get("answer")
        if not all(isinstance(v, str) for v in (card_id, question, answer)):
            return None
        if not card_id or not question.strip() or not answer.strip():
            return None
        return cls(question=question, answer=answer, id=card_id)


SAMPLE_CARDS: List[Tuple[str, str]] = [
    ("What is the capital of France?", "Paris"),
    ("What year did the Moon landing happen?", "1969"),
    ("What is the powerhouse of the cell?", "Mitochondria"),
    ("Who painted the Mona Lisa?", "Leonardo da Vinci"),
    ("What is the chemical symbol for gold?", "Au"),
    ("How many planets are in the solar system?", "8"),
    ("What language is primarily used for iOS development?", "Swift"),
    ("What is the largest ocean on Earth?", "Pacific Ocean"),
]


def sample_deck() -> List[Card]:
    """Fresh Card objects for the sample deck (new ids on every call)."""
    return [Card(question=q, answer=a) for q, a in SAMPLE_CARDS]


__all__ = ["Card", "new_card_id", "SAMPLE_CARDS", "sample_deck"]
