"""HTTP API for BookScribe."""
