"""Standalone command shell bootstrap."""

__version__ = "0.1.0"
