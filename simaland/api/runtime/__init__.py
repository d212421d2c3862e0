"""Runtime: pagination engine and REST transport."""
