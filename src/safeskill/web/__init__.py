"""Web API for scanning published packages."""
