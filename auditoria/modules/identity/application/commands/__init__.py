"""Identity commands, grouped by area."""
