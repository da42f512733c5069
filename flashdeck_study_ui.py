#!/usr/bin/env python3
"""
Interactive Shiny UI for studying a flashdeck deck.

- Card-by-card study with flip, previous and next
- Swipe mode: "Got It!" / "Still Learning" tally with a finished screen
- Add, edit and delete cards (saved to the store on every change)

Usage:
    shiny run flashdeck_study_ui.py [--port 8000]

Or with uv:
    uv run --with shiny --with rich shiny run flashdeck_study_ui.py
"""

import random
import time

from shiny import App, Inputs, Outputs, Session, reactive, render, ui

from flashdeck.config import AppConfig
from flashdeck.forms import CardForm, clean_card_text, submit
from flashdeck.session import Outcome, ReviewSession, ReviewState, ReviewStatus


# ============================================================================
# Shiny UI Definition
# ============================================================================

app_ui = ui.page_fluid(
    ui.tags.head(
        ui.tags.style("""
            .card-face {
                background-color: #ffffff;
                border-radius: 20px;
                box-shadow: 0 5px 10px rgba(0, 0, 0, 0.1);
                min-height: 300px;
                display: flex;
                flex-direction: column;
                align-items: center;
                justify-content: center;
                text-align: center;
                padding: 24px;
                margin: 20px 0;
                cursor: pointer;
            }
            .card-label {
                font-size: 0.8em;
                font-weight: bold;
                color: #6c757d;
                margin-bottom: 12px;
            }
            .card-text {
                font-size: 1.6em;
                font-weight: bold;
            }
            .tally-known { color: #28a745; font-weight: bold; margin-right: 24px; }
            .tally-learning { color: #fd7e14; font-weight: bold; }
            .stats-card {
                background-color: #ffffff;
                border: 1px solid #dee2e6;
                border-radius: 5px;
                padding: 15px;
                margin: 10px 0;
            }
            .keyboard-hint {
                font-size: 0.85em;
                color: #6c757d;
                margin-left: 5px;
            }
        """),
        ui.tags.script("""
            // Keyboard shortcuts for studying
            $(document).on('keydown', function(e) {
                // Don't trigger if user is typing in an input field
                if ($(e.target).is('input, textarea')) {
                    return;
                }

                if ([' ', 'k', 'l', 'ArrowLeft', 'ArrowRight'].includes(e.key)) {
                    e.preventDefault();
                }

                switch(e.key) {
                    case ' ':
                        $('#btn_flip').click();
                        break;
                    case 'k':
                        $('#btn_known').click();
                        break;
                    case 'l':
                        $('#btn_learning').click();
                        break;
                    case 'ArrowLeft':
                        $('#btn_prev').click();
                        break;
                    case 'ArrowRight':
                        $('#btn_next').click();
                        break;
                }
            });
        """)
    ),

    ui.h1("Flashcards"),
    ui.hr(),

    ui.row(
        ui.column(8,
            ui.div(
                {"style": "display: flex; justify-content: space-between; align-items: center;"},
                ui.input_switch("swipe_mode", "Swipe mode (known / still learning)", value=True),
                ui.h4(ui.output_text("position_label")),
            ),
            ui.output_ui("progress_bar"),
            ui.output_ui("tally"),
            ui.output_ui("study_view"),
        ),
        ui.column(4,
            ui.div(
                {"class": "stats-card"},
                ui.h4("Deck"),
                ui.output_ui("deck_summary"),
                ui.input_action_button("btn_add", "+ Add Card", class_="btn-primary", width="100%"),
                ui.input_action_button(
                    "btn_edit", "✎ Edit Current", class_="btn-outline-secondary",
                    width="100%", style="margin-top: 10px;",
                ),
                ui.input_action_button(
                    "btn_delete", "✗ Delete Current", class_="btn-outline-danger",
                    width="100%", style="margin-top: 10px;",
                ),
                ui.output_text("deck_message", inline=True),
            ),
            ui.output_ui("card_form"),
        ),
    ),
)


# ============================================================================
# Helpers
# ============================================================================

def deck_stats_rows(stats: dict, swipe: bool) -> list:
    """Label/value rows for the deck panel. "Remaining" is shown in swipe mode only."""
    rows = [("Total Cards", stats["total"])]
    if swipe:
        rows.append(("Remaining", stats["remaining"]))
    return rows


# ============================================================================
# Shiny Server Logic
# ============================================================================

def server(input: Inputs, output: Outputs, session: Session):
    config = AppConfig.load()
    repository = config.open_repository()
    study = ReviewSession(repository, rng=random.Random(config.shuffle_seed))

    # Reactive values
    review_state = reactive.Value(study.state)
    deck_trigger = reactive.Value(0)  # Bumped after add/edit/delete
    form_open = reactive.Value(False)
    form_card_id = reactive.Value(None)  # None while adding, card id while editing
    deck_msg = reactive.Value("")
    swipe_started_at = [0.0]

    def publish():
        """Push the session state out to the reactive graph."""
        review_state.set(study.state)

    def deck_changed():
        deck_trigger.set(deck_trigger.get() + 1)
        publish()

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    @output
    @render.text
    def position_label():
        review_state.get()
        deck_trigger.get()
        return study.position_label()

    @output
    @render.ui
    def progress_bar():
        review_state.get()
        deck_trigger.get()
        if not input.swipe_mode():
            return ""
        pct = study.progress() * 100
        return ui.div(
            {"class": "progress", "style": "height: 12px;"},
            ui.tags.div(
                {"class": "progress-bar",
                 "role": "progressbar",
                 "style": f"width: {pct}%",
                 "aria-valuenow": str(pct),
                 "aria-valuemin": "0",
                 "aria-valuemax": "100"},
            ),
        )

    @output
    @render.ui
    def tally():
        state = review_state.get()
        if not input.swipe_mode():
            return ""
        return ui.div(
            {"style": "margin-top: 10px; text-align: center;"},
            ui.span({"class": "tally-known"}, f"✓ {state.known}"),
            ui.span({"class": "tally-learning"}, f"↺ {state.learning}"),
        )

    @output
    @render.ui
    def study_view():
        state = review_state.get()
        deck_trigger.get()
        status = study.status

        if status is ReviewStatus.EMPTY:
            return ui.div(
                {"class": "card-face"},
                ui.div({"class": "card-label"}, "NO CARDS"),
                ui.div("Add a card to start studying."),
            )

        if status is ReviewStatus.FINISHED:
            return ui.div(
                {"class": "stats-card", "style": "text-align: center;"},
                ui.h2("🎉 All Done!"),
                ui.p(f"✅ Known: {state.known}"),
                ui.p(f"🔄 Still Learning: {state.learning}"),
                ui.input_action_button("btn_reset", "↺ Start Over", class_="btn-primary"),
            )

        card = study.current_card()
        if state.flipped:
            face = ui.div(
                {"class": "card-face", "onclick": "$('#btn_flip').click()"},
                ui.div({"class": "card-label"}, "ANSWER"),
                ui.div({"class": "card-text"}, card.answer),
            )
        else:
            face = ui.div(
                {"class": "card-face", "onclick": "$('#btn_flip').click()"},
                ui.div({"class": "card-label"}, "QUESTION"),
                ui.div({"class": "card-text"}, card.question),
            )

        if input.swipe_mode():
            controls = ui.div(
                {"style": "display: flex; justify-content: space-between;"},
                ui.div(
                    ui.input_action_button("btn_learning", "← Still Learning", class_="btn-warning"),
                    ui.span(" [L]", class_="keyboard-hint"),
                ),
                ui.div(
                    ui.input_action_button("btn_flip", "Flip", class_="btn-secondary"),
                    ui.span(" [Space]", class_="keyboard-hint"),
                ),
                ui.div(
                    ui.input_action_button("btn_known", "Got It! →", class_="btn-success"),
                    ui.span(" [K]", class_="keyboard-hint"),
                ),
            )
        else:
            controls = ui.div(
                {"style": "display: flex; justify-content: space-between;"},
                ui.div(
                    ui.input_action_button("btn_prev", "← Previous", class_="btn-info"),
                    ui.span(" [←]", class_="keyboard-hint"),
                ),
                ui.div(
                    ui.input_action_button("btn_flip", "Flip", class_="btn-secondary"),
                    ui.span(" [Space]", class_="keyboard-hint"),
                ),
                ui.div(
                    ui.input_action_button("btn_next", "Next →", class_="btn-info"),
                    ui.span(" [→]", class_="keyboard-hint"),
                ),
            )

        return ui.div(face, controls)

    @output
    @render.ui
    def deck_summary():
        review_state.get()
        deck_trigger.get()
        rows = deck_stats_rows(study.summary(), swipe=input.swipe_mode())
        return ui.div(*[ui.div(ui.strong(f"{label}: "), value) for label, value in rows])

    @output
    @render.text
    def deck_message():
        return deck_msg.get()

    @output
    @render.ui
    def card_form():
        if not form_open.get():
            return ui.div()

        card_id = form_card_id.get()
        idx = repository.index_of(card_id) if card_id else None
        card = repository.get(idx) if idx is not None else None
        form = CardForm.for_card(card) if card else CardForm()

        return ui.div(
            {"class": "stats-card"},
            ui.h4("Edit Card" if form.mode == "edit" else "New Card"),
            ui.input_text_area("form_question", "Question:", value=form.question, rows=3, width="100%"),
            ui.input_text_area("form_answer", "Answer:", value=form.answer, rows=3, width="100%"),
            ui.input_action_button(
                "btn_save_card", "Save", class_="btn-primary", disabled=not form.can_submit,
            ),
            ui.input_action_button("btn_cancel_card", "Cancel", class_="btn-outline-secondary"),
        )

    # ------------------------------------------------------------------
    # Study actions
    # ------------------------------------------------------------------

    @reactive.Effect
    @reactive.event(input.btn_flip)
    def _():
        study.toggle_flip()
        publish()

    @reactive.Effect
    @reactive.event(input.btn_next)
    def _():
        study.next()
        publish()

    @reactive.Effect
    @reactive.event(input.btn_prev)
    def _():
        study.previous()
        publish()

    def classify(outcome: Outcome):
        study.classify(outcome)
        swipe_started_at[0] = time.monotonic()
        publish()

    @reactive.Effect
    @reactive.event(input.btn_known)
    def _():
        classify(Outcome.KNOWN)

    @reactive.Effect
    @reactive.event(input.btn_learning)
    def _():
        classify(Outcome.LEARNING)

    @reactive.Effect
    def _():
        """Finish a swipe advance once the delay has passed."""
        state = review_state.get()
        if not state.pending_advance:
            return
        remaining = config.advance_delay - (time.monotonic() - swipe_started_at[0])
        if remaining > 0:
            reactive.invalidate_later(remaining)
            return
        study.complete_transition()
        publish()

    @reactive.Effect
    @reactive.event(input.btn_reset)
    def _():
        study.reset()
        publish()

    @reactive.Effect
    @reactive.event(input.swipe_mode)
    def _():
        # Switching modes starts the tally over in storage order.
        study.state = ReviewState(deck_size=study.size)
        publish()

    # ------------------------------------------------------------------
    # Deck editing
    # ------------------------------------------------------------------

    @reactive.Effect
    @reactive.event(input.btn_add)
    def _():
        form_card_id.set(None)
        form_open.set(True)
        deck_msg.set("")

    @reactive.Effect
    @reactive.event(input.btn_edit)
    def _():
        card = study.current_card()
        if not card:
            deck_msg.set("⚠ No card to edit")
            return
        form_card_id.set(card.id)
        form_open.set(True)
        deck_msg.set("")

    @reactive.Effect
    @reactive.event(input.btn_delete)
    def _():
        removed = study.delete_current()
        if removed is None:
            deck_msg.set("⚠ No card to delete")
            return
        deck_msg.set(f"✓ Deleted: {removed.question[:40]}")
        deck_changed()

    @reactive.Effect
    def _():
        """Keep Save disabled until both fields have text."""
        if not form_open.get():
            return
        valid = clean_card_text(input.form_question() or "", input.form_answer() or "") is not None
        ui.update_action_button("btn_save_card", disabled=not valid)

    @reactive.Effect
    @reactive.event(input.btn_save_card)
    def _():
        form = CardForm(
            question=input.form_question() or "",
            answer=input.form_answer() or "",
            card_id=form_card_id.get(),
        )
        result = submit(form, repository)
        if not result.accepted:
            deck_msg.set("⚠ Question and answer are both required")
            return
        study.sync()
        form_open.set(False)
        deck_msg.set("✓ Card saved")
        deck_changed()

    @reactive.Effect
    @reactive.event(input.btn_cancel_card)
    def _():
        form_open.set(False)


# ============================================================================
# App Definition
# ============================================================================

app = App(app_ui, server)


if __name__ == "__main__":
    print("Flashcards Study UI")
    print("=" * 60)
    print("Run with: shiny run flashdeck_study_ui.py")
    print("=" * 60)
