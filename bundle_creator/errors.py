"""Exceptions raised by the bundle creator."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for scaffold run failures."""


class ScaffoldValidationError(ScaffoldError):
    """Raised when a request cannot be generated as given.

    Covers an existing bundle without the overwrite flag, vendor or
    repository names that do not yield a namespace segment, and names that
    leave a token marker or an empty segment in an output path.
    """
