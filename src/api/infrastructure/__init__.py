"""Cross-cutting infrastructure: settings, database, logging and probes."""
