"""Helpers shared across pipeline stages."""
