"""
Card repository: the ordered deck plus write-through persistence.

Every mutating call persists the full deck synchronously through
`flashdeck.storage.save_deck` before returning.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from flashdeck.cards import Card, sample_deck
from flashdeck.storage import DEFAULT_SLOT_KEY, KeyValueStore, load_deck, save_deck, slot_exists

logger = logging.getLogger(__name__)


class CardRepository:
    """Owns the deck and keeps the durable slot in step with it."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_SLOT_KEY):
        self.store = store
        self.key = key
        self.cards: List[Card] = []
        self.load()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def get(self, index: int) -> Optional[Card]:
        """Get card at index."""
        if 0 <= index < len(self.cards):
            return self.cards[index]
        return None

    def index_of(self, card_id: str) -> Optional[int]:
        for idx, card in enumerate(self.cards):
            if card.id == card_id:
                return idx
        return None

    def load(self) -> List[Card]:
        """Re-read the deck from the durable slot (empty on missing/corrupt data)."""
        self.cards = load_deck(self.store, self.key)
        return self.cards

    def persist(self) -> None:
        save_deck(self.store, self.cards, self.key)

    def seed_if_missing(self) -> bool:
        """Populate the sample deck on first launch.

        Only a slot that was never written counts as a first launch; a slot
        holding corrupt data stays empty.
        """
        if slot_exists(self.store, self.key):
            return False
        self.cards = sample_deck()
        self.persist()
        logger.info("Seeded %d sample card(s)", len(self.cards))
        return True

    def add(self, question: str, answer: str) -> Card:
        card = Card(question=question, answer=answer)
        self.cards.append(card)
        self.persist()
        return card

    def update(self, card_id: str, question: str, answer: str) -> Optional[Card]:
        """Replace a card's text in place; returns None if the id is unknown."""
        idx = self.index_of(card_id)
        if idx is None:
            logger.debug("Ignoring update for unknown card id %s", card_id)
            return None
        card = self.cards[idx]
        card.question = question
        card.answer = answer
        self.persist()
        return card

    def delete_at(self, index: int) -> Optional[Card]:
        """Remove the card at index; returns None if index is out of bounds."""
        if not 0 <= index < len(self.cards):
            logger.debug("Ignoring delete at out-of-range index %d", index)
            return None
        removed = self.cards.pop(index)
        self.persist()
        return removed


__all__ = ["CardRepository"]
