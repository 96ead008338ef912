"""Node Resource Interface data model, ownership tracking and socket utilities."""

__version__ = "0.1.0"