"""Timer event scheduling: query handling, client helpers and container types."""

__version__ = "0.1.0"