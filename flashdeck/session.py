"""
Review session state machine.

The state is a plain immutable record (`ReviewState`); every event is a
function taking the current state and the deck size and returning the next
state. `ReviewSession` binds a state to a `CardRepository` for callers that
prefer methods over threading state by hand.

Swipe-mode advancement is a two-step transition: `classify` records the
outcome and marks the advance as pending, and `complete_transition` applies
it once the presentation layer has finished animating. Any other event
settles a pending transition before it acts, so transitions never
interleave.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from flashdeck.cards import Card
from flashdeck.repository import CardRepository

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    KNOWN = "known"
    LEARNING = "learning"


class ReviewStatus(str, Enum):
    EMPTY = "empty"
    BROWSING = "browsing"
    FINISHED = "finished"


@dataclass(frozen=True)
class ReviewState:
    position: int = 0
    flipped: bool = False
    known: int = 0
    learning: int = 0
    finished: bool = False
    pending_advance: bool = False
    # Traversal order as deck indices; empty means storage order.
    order: Tuple[int, ...] = ()
    # Deck size when the state was last reconciled.
    deck_size: int = 0


def status(state: ReviewState, size: int) -> ReviewStatus:
    if size == 0:
        return ReviewStatus.EMPTY
    if state.finished:
        return ReviewStatus.FINISHED
    return ReviewStatus.BROWSING


def card_index(state: ReviewState, size: int) -> Optional[int]:
    """Deck index of the card at the current position, or None when empty."""
    if size == 0 or not 0 <= state.position < size:
        return None
    if len(state.order) == size:
        return state.order[state.position]
    return state.position


def complete_transition(state: ReviewState, size: int) -> ReviewState:
    """Apply a pending swipe advance; no-op when nothing is pending."""
    if not state.pending_advance:
        return state
    if state.position + 1 < size:
        return replace(state, position=state.position + 1, flipped=False, pending_advance=False)
    return replace(state, flipped=False, finished=True, pending_advance=False)


def next_card(state: ReviewState, size: int) -> ReviewState:
    state = complete_transition(state, size)
    if state.position < size - 1:
        return replace(state, position=state.position + 1, flipped=False)
    return state


def previous_card(state: ReviewState, size: int) -> ReviewState:
    state = complete_transition(state, size)
    if size > 0 and state.position > 0:
        return replace(state, position=state.position - 1, flipped=False)
    return state


def toggle_flip(state: ReviewState, size: int) -> ReviewState:
    state = complete_transition(state, size)
    if size == 0:
        return state
    return replace(state, flipped=not state.flipped)


def classify(state: ReviewState, size: int, outcome: Outcome) -> ReviewState:
    """Count the current card as known or still learning and queue the advance."""
    state = complete_transition(state, size)
    if status(state, size) is not ReviewStatus.BROWSING:
        return state
    if Outcome(outcome) is Outcome.KNOWN:
        state = replace(state, known=state.known + 1)
    else:
        state = replace(state, learning=state.learning + 1)
    return replace(state, pending_advance=True)


def reset(state: ReviewState, size: int, rng: Optional[random.Random] = None) -> ReviewState:
    """Start over: clear the tally, rewind, and shuffle the traversal order."""
    order = list(range(size))
    (rng or random).shuffle(order)
    return ReviewState(order=tuple(order), deck_size=size)


def reconcile(state: ReviewState, size: int, removed_index: Optional[int] = None) -> ReviewState:
    """Bring the state back in range after the deck changed size.

    `removed_index` is the deck index of a deleted card, used to keep a
    shuffled traversal order intact. Growth appends new cards to the end of
    the traversal order.
    """
    state = complete_transition(state, size)
    order = state.order
    if order and len(order) < size:
        return replace(state, order=order + tuple(range(len(order), size)), deck_size=size)

    shrunk = (
        removed_index is not None
        or size < state.deck_size
        or len(order) > size
        or state.position >= size
    )
    if not shrunk:
        if state.deck_size == size:
            return state
        return replace(state, deck_size=size)
    if len(order) > size:
        if removed_index is not None and len(order) == size + 1 and removed_index in order:
            order = tuple(i - 1 if i > removed_index else i for i in order if i != removed_index)
        else:
            order = ()
    position = max(min(state.position, size - 1), 0)
    return replace(state, position=position, flipped=False, order=order, deck_size=size)


def progress(state: ReviewState, size: int) -> float:
    if size == 0:
        return 1.0
    return min((state.known + state.learning) / size, 1.0)


def position_label(state: ReviewState, size: int) -> str:
    if size == 0:
        return "0/0"
    return f"{state.position + 1}/{size}"


class ReviewSession:
    """Manages the state of a study session over a repository's deck."""

    def __init__(
        self,
        repository: CardRepository,
        state: Optional[ReviewState] = None,
        rng: Optional[random.Random] = None,
    ):
        self.repository = repository
        self.state = replace(state or ReviewState(), deck_size=len(repository))
        self.rng = rng or random.Random()

    @property
    def size(self) -> int:
        return len(self.repository)

    @property
    def status(self) -> ReviewStatus:
        return status(self.state, self.size)

    @property
    def position(self) -> int:
        return self.state.position

    @property
    def flipped(self) -> bool:
        return self.state.flipped

    def current_card(self) -> Optional[Card]:
        if self.state.finished:
            return None
        idx = card_index(self.state, self.size)
        if idx is None:
            return None
        return self.repository.get(idx)

    def _apply(self, event: str, new_state: ReviewState) -> ReviewState:
        if new_state != self.state:
            logger.debug("%s: %s -> %s", event, self.state, new_state)
        self.state = new_state
        return new_state

    def next(self) -> ReviewState:
        return self._apply("next", next_card(self.state, self.size))

    def previous(self) -> ReviewState:
        return self._apply("previous", previous_card(self.state, self.size))

    def toggle_flip(self) -> ReviewState:
        return self._apply("toggle_flip", toggle_flip(self.state, self.size))

    def classify(self, outcome: Outcome) -> ReviewState:
        return self._apply("classify", classify(self.state, self.size, outcome))

    def complete_transition(self) -> ReviewState:
        return self._apply("complete_transition", complete_transition(self.state, self.size))

    def reset(self) -> ReviewState:
        return self._apply("reset", reset(self.state, self.size, self.rng))

    def sync(self, removed_index: Optional[int] = None) -> ReviewState:
        """Reconcile with the repository after cards were added or removed."""
        return self._apply("sync", reconcile(self.state, self.size, removed_index))

    def delete_at(self, index: int) -> Optional[Card]:
        removed = self.repository.delete_at(index)
        if removed is not None:
            self.sync(removed_index=index)
        return removed

    def delete_current(self) -> Optional[Card]:
        """Delete the card on display; no-op when empty or finished."""
        if self.status is not ReviewStatus.BROWSING:
            return None
        idx = card_index(self.state, self.size)
        if idx is None:
            return None
        return self.delete_at(idx)

    def progress(self) -> float:
        return progress(self.state, self.size)

    def position_label(self) -> str:
        return position_label(self.state, self.size)

    def summary(self) -> Dict[str, Any]:
        """Get session statistics."""
        size = self.size
        classified = self.state.known + self.state.learning
        return {
            "total": size,
            "position": self.state.position,
            "known": self.state.known,
            "learning": self.state.learning,
            "remaining": max(size - classified, 0),
            "finished": self.status is ReviewStatus.FINISHED,
        }


__all__ = [
    "Outcome",
    "ReviewStatus",
    "ReviewState",
    "ReviewSession",
    "status",
    "card_index",
    "complete_transition",
    "next_card",
    "previous_card",
    "toggle_flip",
    "classify",
    "reset",
    "reconcile",
    "progress",
    "position_label",
]
