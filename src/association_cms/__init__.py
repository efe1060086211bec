"""Content backend for an association website with locale-aware content delivery."""

__version__ = "0.1.0"
