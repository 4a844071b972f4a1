"""A WSGI web framework with emoji statuses, emotional logging and vibey HTTP methods."""

__version__ = "0.1.0"