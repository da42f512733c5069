"""Tests for the durable slot in flashdeck/storage.py."""

import json
import logging

import pytest

from flashdeck.cards import Card
from flashdeck.storage import (
    DEFAULT_SLOT_KEY,
    JsonFileStore,
    MemoryStore,
    decode_deck,
    encode_deck,
    load_deck,
    save_deck,
    slot_exists,
)


class TestDecodeDeck:
    """Tests for decode_deck."""

    def test_missing_value(self):
        """A slot that was never written decodes to an empty deck."""
        assert decode_deck(None) == []

    def test_valid_array(self):
        """Well-formed entries come back as Cards in stored order."""
        raw = json.dumps([
            {"id": "a", "question": "Q1", "answer": "A1"},
            {"id": "b", "question": "Q2", "answer": "A2"},
        ])
        cards = decode_deck(raw)
        assert [c.id for c in cards] == ["a", "b"]
        assert cards[1].question == "Q2"
        assert cards[1].answer == "A2"

    @pytest.mark.parametrize("raw", ["not json", "{", "", '{"id": "a"}', "42", "null"])
    def test_corrupt_value(self, raw):
        """Unparsable or non-array values decode to an empty deck."""
        assert decode_deck(raw) == []

    def test_malformed_entry_discards_everything(self):
        """One bad entry makes the whole slot count as corrupt."""
        raw = json.dumps([
            {"id": "a", "question": "Q1", "answer": "A1"},
            {"id": "b", "question": 7, "answer": "A2"},
        ])
        assert decode_deck(raw) == []

    def test_missing_id_is_malformed(self):
        raw = json.dumps([{"question": "Q1", "answer": "A1"}])
        assert decode_deck(raw) == []

    def test_blank_text_is_malformed(self):
        raw = json.dumps([{"id": "x", "question": "   ", "answer": ""}])
        assert decode_deck(raw) == []

    def test_repeated_id_keeps_first(self):
        """Stored cards never share an identifier after loading."""
        raw = json.dumps([
            {"id": "a", "question": "first", "answer": "1"},
            {"id": "a", "question": "second", "answer": "2"},
        ])
        cards = decode_deck(raw)
        assert len(cards) == 1
        assert cards[0].question == "first"

    def test_corrupt_value_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flashdeck.storage"):
            decode_deck("[oops")
        assert "not valid JSON" in caplog.text


class TestEncodeDeck:
    """Tests for encode_deck."""

    def test_field_names(self):
        """Each card is an object with exactly id, question and answer."""
        raw = encode_deck([Card(question="2+2?", answer="4", id="x")])
        assert json.loads(raw) == [{"id": "x", "question": "2+2?", "answer": "4"}]

    def test_empty_deck(self):
        assert json.loads(encode_deck([])) == []

    def test_unicode_preserved(self):
        raw = encode_deck([Card(question="café?", answer="résumé", id="u")])
        assert "café" in raw


class TestMemoryStore:
    """Tests for the dict-backed store."""

    def test_missing_key(self):
        assert MemoryStore().get("nope") is None

    def test_set_replaces_value(self):
        store = MemoryStore()
        store.set("k", "one")
        store.set("k", "two")
        assert store.get("k") == "two"


class TestJsonFileStore:
    """Tests for the JSON file store."""

    def test_missing_file(self, file_store):
        assert file_store.get(DEFAULT_SLOT_KEY) is None

    def test_write_then_read(self, file_store):
        file_store.set("k", "v")
        assert file_store.get("k") == "v"
        assert JsonFileStore(file_store.path).get("k") == "v"

    def test_other_keys_preserved(self, file_store):
        """Writing one key leaves the rest of the file alone."""
        file_store.set("a", "1")
        file_store.set("b", "2")
        assert file_store.get("a") == "1"
        assert file_store.get("b") == "2"

    def test_creates_parent_directories(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "dir" / "store.json")
        store.set("k", "v")
        assert store.path.exists()

    def test_no_temp_file_left_behind(self, file_store):
        file_store.set("k", "v")
        leftovers = [p.name for p in file_store.path.parent.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_corrupt_file_reads_as_empty(self, file_store):
        file_store.path.write_text("{ this is not json")
        assert file_store.get("k") is None

    def test_corrupt_file_is_overwritten_on_write(self, file_store):
        file_store.path.write_text("garbage")
        file_store.set("k", "v")
        assert json.loads(file_store.path.read_text()) == {"k": "v"}

    def test_non_object_file_reads_as_empty(self, file_store):
        file_store.path.write_text("[1, 2, 3]")
        assert file_store.get("k") is None

    def test_raw_array_value_is_re_encoded(self, file_store):
        """A hand-edited file holding the array itself still loads."""
        file_store.path.write_text(json.dumps({
            DEFAULT_SLOT_KEY: [{"id": "a", "question": "Q", "answer": "A"}],
        }))
        cards = load_deck(file_store)
        assert [c.id for c in cards] == ["a"]


class TestLoadSaveDeck:
    """Tests for load_deck / save_deck over a store."""

    def test_round_trip_preserves_order_and_ids(self, memory_store):
        cards = [Card("Q1", "A1"), Card("Q2", "A2")]
        save_deck(memory_store, cards)
        loaded = load_deck(memory_store)
        assert [(c.id, c.question, c.answer) for c in loaded] == [
            (c.id, c.question, c.answer) for c in cards
        ]

    def test_custom_key(self, memory_store):
        save_deck(memory_store, [Card("Q", "A")], key="other")
        assert load_deck(memory_store) == []
        assert len(load_deck(memory_store, key="other")) == 1

    def test_slot_exists(self, memory_store):
        assert not slot_exists(memory_store)
        save_deck(memory_store, [])
        assert slot_exists(memory_store)
