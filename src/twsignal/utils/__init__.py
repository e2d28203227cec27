"""Utility helpers."""

from .config import initialize_application

__all__ = ["initialize_application"]
