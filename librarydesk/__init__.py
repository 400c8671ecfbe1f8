"""A console lending desk for a small library, kept in CSV files."""

__version__ = "0.1.0"