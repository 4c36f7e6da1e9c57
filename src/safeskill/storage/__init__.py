"""SQLite persistence for scan results."""
