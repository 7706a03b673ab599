"""Identity queries, grouped by area."""
