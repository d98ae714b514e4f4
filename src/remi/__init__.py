"""remi: keyboard-friendly navigation across a collection of nooks."""

__version__ = "0.3.0"
