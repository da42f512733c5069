"""
Command-line interface for flashdeck.

Usage:
    flashdeck list                      # Show every card
    flashdeck add "2+2?" "4"            # Add a card
    flashdeck edit 3 "Question" "Answer"
    flashdeck delete 3
    flashdeck study                     # Browse: next/previous/flip
    flashdeck study --swipe             # Known / still learning tally
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
import time
from typing import Callable, List, Optional

from rich import box
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from flashdeck.config import AppConfig
from flashdeck.forms import CardForm, submit
from flashdeck.repository import CardRepository
from flashdeck.session import Outcome, ReviewSession, ReviewStatus

logger = logging.getLogger(__name__)

STUDY_KEYS = {
    "n": "next",
    "p": "previous",
    "f": "flip",
    "a": "add",
    "d": "delete",
    "q": "quit",
}
SWIPE_KEYS = {
    "k": "got it",
    "l": "still learning",
    "f": "flip",
    "r": "start over",
    "q": "quit",
}


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def mini_progress_bar(fraction: float, width: int = 20) -> str:
    filled = int(round(fraction * width))
    return "█" * filled + "░" * (width - filled)


def render_deck_table(repository: CardRepository) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="cyan", width=4)
    table.add_column("Question")
    table.add_column("Answer", style="green")
    for idx, card in enumerate(repository, start=1):
        table.add_row(str(idx), Text(card.question), Text(card.answer))
    return table


def render_session(session: ReviewSession, swipe: bool) -> Panel:
    """Render the current card, position and (swipe mode) tally."""
    if session.status is ReviewStatus.EMPTY:
        hint = "Add cards with [bold]flashdeck add[/bold]." if swipe else "Press [bold]a[/bold] to add one."
        return Panel(
            f"[yellow]No cards yet.[/yellow]\n\n{hint}",
            title="Flashcards",
            border_style="yellow",
        )

    if session.status is ReviewStatus.FINISHED:
        return Panel(
            Text.assemble(
                ("All Done!\n\n", "bold"),
                (f"Known: {session.state.known}\n", "green"),
                (f"Still Learning: {session.state.learning}\n\n", "yellow"),
                ("Press r to start over.", "dim"),
            ),
            title="Flashcards",
            border_style="green",
        )

    card = session.current_card()
    if session.flipped:
        face = Text.assemble(("ANSWER\n", "dim"), (card.answer, "bold green"))
    else:
        face = Text.assemble(("QUESTION\n", "dim"), (card.question, "bold"))

    lines = [face, Text()]
    if swipe:
        lines.append(Text.assemble(
            ("Progress: ", "bold"),
            (mini_progress_bar(session.progress()), "cyan"),
            ("  |  ", "dim"),
            (f"✓ {session.state.known}", "green"),
            ("  ", ""),
            (f"↺ {session.state.learning}", "yellow"),
        ))
    keys = SWIPE_KEYS if swipe else STUDY_KEYS
    lines.append(Text("  ".join(f"[{k}] {label}" for k, label in keys.items()), style="dim"))

    return Panel(
        Group(*lines),
        title=f"Flashcards {session.position_label()}",
        border_style="blue",
    )


# ---------------------------------------------------------------------------
# Interactive study loop
# ---------------------------------------------------------------------------


def _prompt_new_card(session: ReviewSession, console: Console, read: Callable[[str], str]) -> None:
    form = CardForm(question=read("Question"), answer=read("Answer"))
    result = submit(form, session.repository)
    if not result.accepted:
        console.print("[red]Both question and answer are required.[/red]")
        return
    session.sync()
    console.print(f"[green]Added:[/green] {escape(result.card.question)}")


def run_study(
    session: ReviewSession,
    console: Console,
    read: Callable[[str], str],
    swipe: bool = False,
    advance_delay: float = 0.0,
) -> None:
    """Drive a session from single-letter commands until the user quits."""
    while True:
        console.print(render_session(session, swipe))
        command = read(">").strip().lower()[:1]

        if command == "q" or command == "":
            return
        if command == "f":
            session.toggle_flip()
        elif swipe and command in ("k", "l"):
            before = session.state
            session.classify(Outcome.KNOWN if command == "k" else Outcome.LEARNING)
            if session.state is not before and advance_delay > 0:
                time.sleep(advance_delay)
            session.complete_transition()
        elif swipe and command == "r":
            session.reset()
        elif not swipe and command == "n":
            session.next()
        elif not swipe and command == "p":
            session.previous()
        elif not swipe and command == "a":
            _prompt_new_card(session, console, read)
        elif not swipe and command == "d":
            removed = session.delete_current()
            if removed is not None:
                console.print(f"[red]Deleted:[/red] {escape(removed.question)}")
        else:
            console.print(f"[dim]Unknown command: {command}[/dim]")


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------


def _parse_index(value: str) -> int:
    """Convert a 1-based CLI index into a deck index."""
    try:
        return int(value) - 1
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a card number: {value!r}")


def cmd_list(args: argparse.Namespace, repository: CardRepository, console: Console) -> int:
    if args.json:
        print(json.dumps([card.to_dict() for card in repository], indent=2, ensure_ascii=False))
        return 0
    if len(repository) == 0:
        console.print("[yellow]No cards yet.[/yellow] Add one with [bold]flashdeck add[/bold].")
        return 0
    console.print(render_deck_table(repository))
    return 0


def cmd_add(args: argparse.Namespace, repository: CardRepository, console: Console) -> int:
    result = submit(CardForm(question=args.question, answer=args.answer), repository)
    if not result.accepted:
        console.print("[red]Error:[/red] question and answer must both be non-empty.")
        return 1
    console.print(f"[green]✓ Added card {len(repository)}[/green]")
    return 0


def cmd_edit(args: argparse.Namespace, repository: CardRepository, console: Console) -> int:
    card = repository.get(args.index)
    if card is None:
        console.print(f"[yellow]No card #{args.index + 1}; nothing changed.[/yellow]")
        return 0
    form = CardForm(question=args.question, answer=args.answer, card_id=card.id)
    result = submit(form, repository)
    if not result.accepted:
        console.print("[red]Error:[/red] question and answer must both be non-empty.")
        return 1
    console.print(f"[green]✓ Updated card {args.index + 1}[/green]")
    return 0


def cmd_delete(args: argparse.Namespace, repository: CardRepository, console: Console) -> int:
    removed = repository.delete_at(args.index)
    if removed is None:
        console.print(f"[yellow]No card #{args.index + 1}; nothing changed.[/yellow]")
        return 0
    console.print(f"[red]Deleted:[/red] {escape(removed.question)}")
    return 0


def cmd_study(
    args: argparse.Namespace,
    repository: CardRepository,
    console: Console,
    config: AppConfig,
) -> int:
    session = ReviewSession(repository, rng=random.Random(config.shuffle_seed))
    run_study(
        session,
        console,
        read=lambda label: Prompt.ask(label, console=console, default="q" if label == ">" else ""),
        swipe=args.swipe,
        advance_delay=config.advance_delay,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashdeck",
        description="Study question/answer flashcards in the terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  flashdeck list
  flashdeck add "What is the capital of France?" "Paris"
  flashdeck study --swipe
""",
    )
    parser.add_argument("--store", help="Path to the store file (overrides config).")
    parser.add_argument("--slot", help="Key of the deck slot inside the store (overrides config).")
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not create the sample deck on first launch.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Show every card in the deck.")
    p_list.add_argument("--json", action="store_true", help="Output as JSON.")

    p_add = sub.add_parser("add", help="Add a card.")
    p_add.add_argument("question")
    p_add.add_argument("answer")

    p_edit = sub.add_parser("edit", help="Replace a card's question and answer.")
    p_edit.add_argument("index", type=_parse_index, help="Card number (1-based).")
    p_edit.add_argument("question")
    p_edit.add_argument("answer")

    p_delete = sub.add_parser("delete", help="Delete a card.")
    p_delete.add_argument("index", type=_parse_index, help="Card number (1-based).")

    p_study = sub.add_parser("study", help="Study the deck interactively.")
    p_study.add_argument(
        "--swipe",
        action="store_true",
        help="Classify each card as known or still learning instead of browsing.",
    )

    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Entry point for the flashdeck command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = AppConfig.load().with_overrides(args)
    repository = config.open_repository()
    logger.debug("Opened deck with %d card(s) from %s", len(repository), config.store_path)
    console = console or Console()

    if args.command == "list":
        return cmd_list(args, repository, console)
    if args.command == "add":
        return cmd_add(args, repository, console)
    if args.command == "edit":
        return cmd_edit(args, repository, console)
    if args.command == "delete":
        return cmd_delete(args, repository, console)
    return cmd_study(args, repository, console, config)


if __name__ == "__main__":
    sys.exit(main())
