"""Exceptions raised by pi-stylish."""

from __future__ import annotations


class StylishError(Exception):
    """Base class for pi-stylish errors."""


class IndexShiftError(StylishError):
    """A style index key could not be moved by the requested shift."""

    def __init__(self, message: str, *, key: int | None = None, shift: object = None) -> None:
        super().__init__(message)
        self.key = key
        self.shift = shift
