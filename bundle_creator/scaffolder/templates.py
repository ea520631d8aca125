"""Token substitution and block pruning for bundle templates.

Provides the TemplateRenderer class which turns the raw text of a sample
template into its final form.  Templates carry ``#token#`` placeholders and,
optionally, marker-delimited blocks that are kept or dropped depending on
whether an optional value was supplied.  The renderer does no I/O and knows
nothing about which values are optional; that policy belongs to the caller.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

TOKEN_MARKER = "#"
VERSION_TOKEN = "composerpackageversion"

_LINE_BREAKS = "\r\n"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders ``#token#`` templates against a token table.

    Substitution is a single pass over the text: replacement values are never
    scanned again, so a value that itself looks like a token stays literal.
    """

    def __init__(self, marker: str = TOKEN_MARKER) -> None:
        self.marker = marker

    def token(self, key: str) -> str:
        """Return *key* wrapped in the token markers (``vendorname`` -> ``#vendorname#``)."""
        return f"{self.marker}{key}{self.marker}"

    # -- Substitution ------------------------------------------------------

    def substitute(self, text: str, tokens: Mapping[str, str]) -> str:
        """Replace every known token in *text* with its value.

        Tokens that appear in the text but not in *tokens* are left verbatim.
        """
        if not tokens:
            return text
        pattern = re.compile(
            re.escape(self.marker)
            + "("
            + "|".join(re.escape(k) for k in tokens)
            + ")"
            + re.escape(self.marker)
        )
        return pattern.sub(lambda m: str(tokens[m.group(1)]), text)

    # -- Block pruning -----------------------------------------------------

    def prune_optional_block(
        self,
        text: str,
        block_start: str,
        block_end: str,
        keep: bool,
    ) -> str:
        """Keep or drop the first region delimited by *block_start*/*block_end*.

        With ``keep=False`` the region (markers included) is removed; when the
        region spans whole lines those lines go together with one line
        terminator.  With ``keep=True`` only the two markers are removed and a
        marker that sits alone on its line takes the line with it.

        Text without a complete region is returned unchanged.
        """
        start = text.find(block_start)
        if start == -1:
            return text
        end = text.find(block_end, start + len(block_start))
        if end == -1:
            return text

        if keep:
            # Cut the end marker first so the start offsets stay valid.
            text = _cut(text, end, end + len(block_end))
            return _cut(text, start, start + len(block_start))
        return _cut(text, start, end + len(block_end))

    def strip_version_line_if_absent(self, text: str) -> str:
        """Remove the manifest line declaring the version token.

        Only a line of the form ``"version": "#composerpackageversion#",``
        (trailing comma optional) is removed, together with its line
        terminator.  Every other line is left as it is.
        """
        pattern = re.compile(
            r'^[ \t]*"version"[ \t]*:[ \t]*"'
            + re.escape(self.token(VERSION_TOKEN))
            + r'"[ \t]*,?[ \t]*(?:\r\n|\n|\r)?',
            re.MULTILINE,
        )
        return pattern.sub("", text, count=1)

    # -- Convenience -------------------------------------------------------

    def render(
        self,
        text: str,
        tokens: Mapping[str, str],
        *,
        blocks: Iterable[tuple[str, str, bool]] | None = None,
    ) -> str:
        """Prune each ``(start, end, keep)`` block, then substitute *tokens*."""
        for block_start, block_end, keep in blocks or ():
            text = self.prune_optional_block(text, block_start, block_end, keep)
        return self.substitute(text, tokens)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _line_start(text: str, index: int) -> int:
    """Offset of the first character of the line containing *index*."""
    return max(text.rfind("\n", 0, index), text.rfind("\r", 0, index)) + 1


def _line_end(text: str, index: int) -> int:
    """Offset of the line terminator ending the line containing *index*."""
    for offset in range(index, len(text)):
        if text[offset] in _LINE_BREAKS:
            return offset
    return len(text)


def _terminator_length(text: str, index: int) -> int:
    if text.startswith("\r\n", index):
        return 2
    if index < len(text) and text[index] in _LINE_BREAKS:
        return 1
    return 0


def _cut(text: str, start: int, end: int) -> str:
    """Remove ``text[start:end]``, widening to whole lines when it fills them.

    The span counts as filling its lines when only blanks separate it from
    the surrounding line boundaries.  The trailing terminator goes with the
    lines; on the last line without one the preceding terminator is taken
    instead.
    """
    line_start = _line_start(text, start)
    line_end = _line_end(text, end)
    if text[line_start:start].strip(" \t") or text[end:line_end].strip(" \t"):
        return text[:start] + text[end:]

    trailing = _terminator_length(text, line_end)
    if trailing:
        return text[:line_start] + text[line_end + trailing:]
    if line_start == 0:
        return text[:line_start] + text[line_end:]
    leading = 2 if text[line_start - 2:line_start] == "\r\n" else 1
    return text[:line_start - leading] + text[line_end:]
