"""Top-level Partials commands."""
