"""Personal knowledge base with a field-aware search query engine."""

__version__ = "1.0.0"
