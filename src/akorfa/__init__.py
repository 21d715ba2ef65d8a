# src/akorfa/__init__.py
"""Akorfa scoring engine and points economy service."""

__version__ = "0.1.0"
