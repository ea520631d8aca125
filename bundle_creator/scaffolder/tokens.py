"""Per-run token table and template destination specs.

The token table is computed once from a ``ScaffoldRequest`` and shared by
every rendering pass of the run, so derived names (namespace segments,
module identifiers, template names) are never recomputed per file.
``TemplateSpec`` destinations use the same ``#token#`` markers as the file
contents, which keeps generated paths and generated code in agreement.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bundle_creator.errors import ScaffoldValidationError
from bundle_creator.models import ScaffoldRequest

from .naming import (
    to_lower_camel_identifier,
    to_namespace_segment,
    to_snake_file_name,
    ucfirst,
)
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# TokenTable
# ---------------------------------------------------------------------------


class TokenTable(Mapping[str, str]):
    """Read-only mapping of bare token keys to their resolved values."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TokenTable({dict(self._entries)!r})"

    def narrow(self, keys: Iterable[str]) -> TokenTable:
        """Return a table restricted to *keys*; unknown keys are skipped."""
        return TokenTable({k: self._entries[k] for k in keys if k in self._entries})


def build_token_table(
    request: ScaffoldRequest,
    phpdoc_template: str,
    year: int,
    renderer: TemplateRenderer | None = None,
) -> TokenTable:
    """Build the token table for one scaffold run.

    *phpdoc_template* is the raw file header partial; it is rendered with the
    author and package entries and stored under ``phpdoc``.
    """
    renderer = renderer or TemplateRenderer()

    entries: dict[str, str] = {
        "vendorname": request.vendor_name,
        "repositoryname": request.repository_name,
        "bundlename": request.bundle_name,
        "composerdescription": request.composer_description,
        "license": request.license,
        "authorname": request.author_name,
        "authoremail": request.author_email,
        "authorwebsite": request.author_website,
        "toplevelnamespace": to_namespace_segment(request.vendor_name),
        "sublevelnamespace": to_namespace_segment(request.repository_name),
        "year": str(year),
    }
    if request.composer_package_version:
        entries["composerpackageversion"] = request.composer_package_version

    entries["phpdoc"] = renderer.substitute(phpdoc_template, entries)

    # DCA table
    entries["dcatable"] = request.dca_table
    entries["bemodule"] = request.dca_table.replace("tl_", "")

    # Frontend module
    module_name = to_lower_camel_identifier(request.frontend_module_name)
    label, description = request.frontend_module_trans
    entries.update(
        {
            "frontendmodulename": module_name,
            "frontendmodulecategory": to_lower_camel_identifier(
                request.frontend_module_category
            ),
            "frontendmodulecategorytrans": request.frontend_module_category_trans,
            "frontendmoduletrans_0": label,
            "frontendmoduletrans_1": description,
            "frontendmoduleclassname": "Module" + ucfirst(module_name),
            "frontendmoduletemplate": to_snake_file_name(module_name, "mod_", ""),
        }
    )
    return TokenTable(entries)


# ---------------------------------------------------------------------------
# TemplateSpec
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateSpec:
    """A sample template, where it goes, and which tokens it may use.

    Attributes:
        source: Path of the template relative to the samples directory.
        destination: Output path pattern relative to the project directory.
            ``#token#`` markers are resolved from the run's token table.
        tokens: Token keys substituted into the template content.
    """

    source: str
    destination: str
    tokens: frozenset[str] = field(default_factory=frozenset)

    def resolve_destination(
        self, table: Mapping[str, str], renderer: TemplateRenderer | None = None
    ) -> str:
        """Resolve the destination pattern against *table*.

        Raises:
            ScaffoldValidationError: If a marker is left unresolved or a
                token resolves to an empty path segment.
        """
        renderer = renderer or TemplateRenderer()
        path = renderer.substitute(self.destination, table)
        if renderer.marker in path:
            raise ScaffoldValidationError(
                f"Unresolved token in destination {self.destination!r}: {path!r}"
            )
        if any(not part for part in path.split("/")):
            raise ScaffoldValidationError(
                f"Destination {self.destination!r} resolves to an empty path segment"
            )
        return path

    def render(
        self,
        text: str,
        table: TokenTable,
        renderer: TemplateRenderer | None = None,
    ) -> str:
        """Substitute this template's tokens into *text*."""
        renderer = renderer or TemplateRenderer()
        return renderer.substitute(text, table.narrow(self.tokens))
