"""Task list service: JSON-file task store with a FastAPI front end."""

__version__ = "0.1.0"
