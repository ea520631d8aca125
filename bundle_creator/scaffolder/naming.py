"""Name transformations used to derive identifiers from free-form input.

All functions are pure and never raise.  Callers are responsible for
validating the results (e.g. rejecting an empty namespace segment).
"""

from __future__ import annotations

import re


# A maximal run of non-uppercase characters at the start of the string, or a
# single uppercase character followed by a maximal run of non-uppercase
# characters.  Text between two matches (e.g. an acronym such as ``NASA``)
# is kept as its own piece.
_CASE_BOUNDARY = re.compile(r"(^[^A-Z]+|[A-Z][^A-Z]+)")


def ucfirst(value: str) -> str:
    """Uppercase the first character of *value*."""
    return value[:1].upper() + value[1:]


def lcfirst(value: str) -> str:
    """Lowercase the first character of *value*."""
    return value[:1].lower() + value[1:]


def split_case_boundaries(value: str) -> list[str]:
    """Split *value* on its case boundaries, dropping empty pieces.

    Examples::

        split_case_boundaries("superModule")   -> ["super", "Module"]
        split_case_boundaries("SuperNASAData") -> ["Super", "NASA", "Data"]
    """
    return [piece for piece in _CASE_BOUNDARY.split(value) if piece]


def to_namespace_segment(raw: str) -> str:
    """Convert *raw* to a PascalCase namespace segment.

    ``"my_custom name-space"`` becomes ``"MyCustomNameSpace"``.  A string made
    of separators only yields ``""``.
    """
    normalised = raw.replace("_", "-").replace(" ", "-")
    segments = [s for s in normalised.split("-") if s]
    return "".join(ucfirst(s.lower()) for s in segments)


def to_lower_camel_identifier(raw: str) -> str:
    """Convert *raw* to a lowerCamelCase identifier.

    ``"MyNew_super NASA Module"`` becomes ``"myNewSuperNasaModule"``.  Runs of
    uppercase letters are not preserved as acronyms.
    """
    words = raw.replace("_", " ").replace("-", " ").split(" ")
    joined = "".join(ucfirst(w) for w in words)
    pieces = split_case_boundaries(joined)
    return lcfirst("".join(ucfirst(p.lower()) for p in pieces))


def to_snake_file_name(identifier: str, prefix: str = "mod_", suffix: str = "") -> str:
    """Derive a snake_case file name from a camel or Pascal case identifier.

    ``to_snake_file_name("SuperModule")`` returns ``"mod_super_module"``.
    """
    pieces = [p.lower() for p in split_case_boundaries(identifier)]
    return prefix + "_".join(p for p in pieces if p) + suffix
