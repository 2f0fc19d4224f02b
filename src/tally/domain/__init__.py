"""Domain layer for tally application."""
