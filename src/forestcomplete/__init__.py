"""Forester completion and authoring helpers."""

__version__ = "0.1.0"
