"""Cross-cutting infrastructure: clock, sleeping, logging."""
