"""
Form intake for adding and editing cards.

A form is submittable only when both the question and the answer are
non-empty after trimming. Rejection is not an error: `submit` simply
returns a result with `accepted=False` so the caller keeps its submit
action disabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from flashdeck.cards import Card
from flashdeck.repository import CardRepository


def clean_card_text(question: str, answer: str) -> Optional[Tuple[str, str]]:
    """Return the trimmed pair, or None if either side is blank."""
    question = (question or "").strip()
    answer = (answer or "").strip()
    if not question or not answer:
        return None
    return question, answer


@dataclass
class CardForm:
    question: str = ""
    answer: str = ""
    # Set when editing an existing card; None means the form adds a card.
    card_id: Optional[str] = None

    @classmethod
    def for_card(cls, card: Card) -> "CardForm":
        return cls(question=card.question, answer=card.answer, card_id=card.id)

    @property
    def mode(self) -> str:
        return "add" if self.card_id is None else "edit"

    @property
    def can_submit(self) -> bool:
        return clean_card_text(self.question, self.answer) is not None


@dataclass
class FormResult:
    accepted: bool
    card: Optional[Card] = None

    @property
    def dismiss(self) -> bool:
        """True when the form should close."""
        return self.accepted


def submit(form: CardForm, repository: CardRepository) -> FormResult:
    """Forward a valid form to the repository.

    Editing a card that no longer exists is accepted (the form closes) but
    changes nothing, matching the repository's silent update.
    """
    cleaned = clean_card_text(form.question, form.answer)
    if cleaned is None:
        return FormResult(accepted=False)
    question, answer = cleaned
    if form.card_id is None:
        return FormResult(accepted=True, card=repository.add(question, answer))
    return FormResult(accepted=True, card=repository.update(form.card_id, question, answer))


__all__ = ["CardForm", "FormResult", "clean_card_text", "submit"]
