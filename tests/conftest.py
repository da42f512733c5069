"""Shared pytest fixtures for flashdeck tests."""

import pytest

from flashdeck.repository import CardRepository
from flashdeck.session import ReviewSession
from flashdeck.storage import JsonFileStore, MemoryStore


@pytest.fixture
def memory_store():
    """An empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def file_store(tmp_path):
    """A JSON file store inside the test's temp directory."""
    return JsonFileStore(tmp_path / "store.json")


@pytest.fixture
def empty_repository(memory_store):
    return CardRepository(memory_store)


@pytest.fixture
def repository(memory_store):
    """A repository holding three cards, A, B and C, in that order."""
    repo = CardRepository(memory_store)
    repo.add("Question A", "Answer A")
    repo.add("Question B", "Answer B")
    repo.add("Question C", "Answer C")
    return repo


@pytest.fixture
def session(repository):
    """A browse session over the three-card repository."""
    return ReviewSession(repository)
