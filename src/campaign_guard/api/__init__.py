"""HTTP API for Campaign Guard."""
