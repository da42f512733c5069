"""Tests for the deck panel helpers in flashdeck_study_ui.py."""

from flashdeck_study_ui import deck_stats_rows


class TestDeckStatsRows:
    """Tests for the rows shown in the deck panel."""

    def test_browse_mode_shows_total_only(self, session):
        session.next()
        assert deck_stats_rows(session.summary(), swipe=False) == [("Total Cards", 3)]

    def test_swipe_mode_shows_remaining(self, session):
        session.classify("known")
        session.complete_transition()
        assert deck_stats_rows(session.summary(), swipe=True) == [
            ("Total Cards", 3),
            ("Remaining", 2),
        ]
