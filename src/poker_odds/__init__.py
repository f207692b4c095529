"""Real-time poker odds and decision support."""

__version__ = "0.1.0"
