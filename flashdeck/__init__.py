"""
Core package for flashdeck.

This package holds the study core behind the `flashdeck` CLI and the
Shiny study UI: cards, the durable deck slot, the card repository, the
review session state machine, form intake, and configuration.
"""

__all__ = [
    "cards",
    "storage",
    "repository",
    "session",
    "forms",
    "config",
    "cli",
]
