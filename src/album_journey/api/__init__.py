"""HTTP API for Album Journey."""
