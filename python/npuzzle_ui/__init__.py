"""Terminal and GUI frontends for the puzzle engine."""
