"""StyleAI - virtual try-on from photos or descriptions."""

__version__ = "1.0.0"
