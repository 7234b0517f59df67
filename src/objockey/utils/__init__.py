"""Utility functions for Objockey."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
