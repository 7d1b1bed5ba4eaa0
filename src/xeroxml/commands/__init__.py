"""Implementations of the ``xeroxml`` sub-commands."""

__all__ = ["report", "validate"]
