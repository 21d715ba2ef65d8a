"""HTTP API for the Akorfa service."""
