"""Tests for the flashdeck command line in flashdeck/cli.py."""

import io
import json

import pytest
from rich.console import Console

from flashdeck.cli import main, mini_progress_bar, run_study
from flashdeck.config import CONFIG_ENV_VAR
from flashdeck.session import ReviewSession, ReviewStatus


@pytest.fixture
def store_path(tmp_path, monkeypatch):
    """Store file for CLI runs, with no stray config file in reach."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    return tmp_path / "store.json"


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def run(store_path, *argv):
    """Run the CLI and return (exit code, console text)."""
    console = make_console()
    code = main(["--store", str(store_path), *argv], console=console)
    return code, console.file.getvalue()


def scripted(*commands):
    """A read function answering prompts from a fixed script."""
    answers = iter(commands)
    return lambda label: next(answers, "q")


class TestCommands:
    """Tests for the non-interactive sub-commands."""

    def test_first_run_seeds_sample_deck(self, store_path):
        code, out = run(store_path, "list")
        assert code == 0
        assert "capital of France" in out

    def test_no_seed(self, store_path):
        code, out = run(store_path, "--no-seed", "list")
        assert code == 0
        assert "No cards yet" in out

    def test_add_then_list_json(self, store_path, capsys):
        assert run(store_path, "--no-seed", "add", "  2+2? ", "4")[0] == 0
        main(["--store", str(store_path), "list", "--json"], console=make_console())
        cards = json.loads(capsys.readouterr().out)
        assert [(c["question"], c["answer"]) for c in cards] == [("2+2?", "4")]

    def test_add_blank_rejected(self, store_path):
        code, out = run(store_path, "--no-seed", "add", "   ", "4")
        assert code == 1
        assert "non-empty" in out
        assert "No cards yet" in run(store_path, "--no-seed", "list")[1]

    def test_edit(self, store_path):
        run(store_path, "--no-seed", "add", "Q", "A")
        code, _ = run(store_path, "edit", "1", "New Q", "New A")
        assert code == 0
        assert "New Q" in run(store_path, "list")[1]

    def test_edit_missing_is_noop(self, store_path):
        code, out = run(store_path, "--no-seed", "edit", "5", "Q", "A")
        assert code == 0
        assert "nothing changed" in out

    def test_delete(self, store_path):
        run(store_path, "--no-seed", "add", "Keep", "A")
        run(store_path, "add", "Drop", "B")
        code, out = run(store_path, "delete", "2")
        assert code == 0
        assert "Drop" in out
        listing = run(store_path, "list")[1]
        assert "Keep" in listing
        assert "Drop" not in listing

    def test_delete_missing_is_noop(self, store_path):
        code, out = run(store_path, "--no-seed", "delete", "1")
        assert code == 0
        assert "nothing changed" in out

    def test_custom_slot(self, store_path):
        run(store_path, "--no-seed", "--slot", "spanish", "add", "hola", "hello")
        assert "hola" not in run(store_path, "--no-seed", "list")[1]
        assert "hola" in run(store_path, "--slot", "spanish", "list")[1]


class TestRunStudy:
    """Tests for the interactive study loop."""

    def test_browse_flip_and_move(self, session):
        run_study(session, make_console(), scripted("n", "f"))
        assert session.position == 1
        assert session.flipped is True

    def test_swipe_until_finished(self, session):
        console = make_console()
        run_study(session, console, scripted("k", "l", "k"), swipe=True)
        assert session.status is ReviewStatus.FINISHED
        assert (session.state.known, session.state.learning) == (2, 1)
        assert "All Done!" in console.file.getvalue()

    def test_swipe_start_over(self, session):
        run_study(session, make_console(), scripted("k", "k", "k", "r"), swipe=True)
        assert session.status is ReviewStatus.BROWSING
        assert session.state.known == 0

    def test_browse_keys_ignored_in_swipe_mode(self, session):
        console = make_console()
        run_study(session, console, scripted("n"), swipe=True)
        assert session.position == 0
        assert "Unknown command" in console.file.getvalue()

    def test_add_from_study(self, empty_repository):
        session = ReviewSession(empty_repository)
        run_study(session, make_console(), scripted("a", "2+2?", "4"))
        assert session.current_card().question == "2+2?"

    def test_add_blank_from_study(self, empty_repository):
        console = make_console()
        session = ReviewSession(empty_repository)
        run_study(session, console, scripted("a", " ", "4"))
        assert len(empty_repository) == 0
        assert "required" in console.file.getvalue()

    def test_delete_from_study(self, session):
        run_study(session, make_console(), scripted("n", "n", "d"))
        assert session.size == 2
        assert session.position == 1


def test_mini_progress_bar():
    assert mini_progress_bar(0.0, width=4) == "░░░░"
    assert mini_progress_bar(0.5, width=4) == "██░░"
    assert mini_progress_bar(1.0, width=4) == "████"
