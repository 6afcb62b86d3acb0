"""Operational scripts for Campaign Guard."""
