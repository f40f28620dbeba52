"""The House — AI decision engine for non-human players."""
