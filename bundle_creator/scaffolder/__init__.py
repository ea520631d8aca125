"""Contao bundle scaffolder -- generates bundle skeletons from sample templates.

This package takes a ``ScaffoldRequest`` and renders the sample repository
shipped with the bundle creator into ``vendor/<vendor>/<repository>``,
substituting ``#token#`` placeholders and pruning optional blocks along the
way.

Quick usage::

    from bundle_creator.filesystem import LocalFileSystem
    from bundle_creator.models import ScaffoldRequest
    from bundle_creator.notifier import ConsoleNotifier
    from bundle_creator.scaffolder import BundleGenerator, ZipArchiver

    request = ScaffoldRequest(vendor_name="acme", repository_name="demo-bundle")
    generator = BundleGenerator(
        LocalFileSystem("/var/www/contao"),
        ConsoleNotifier(),
        ZipArchiver("/var/www/contao"),
    )
    result = generator.run(request)
"""

from bundle_creator.scaffolder.archive import Archiver, ZipArchiver
from bundle_creator.scaffolder.generator import BundleGenerator, ScaffoldResult
from bundle_creator.scaffolder.naming import (
    to_lower_camel_identifier,
    to_namespace_segment,
    to_snake_file_name,
)
from bundle_creator.scaffolder.templates import TemplateRenderer
from bundle_creator.scaffolder.tokens import TemplateSpec, TokenTable, build_token_table

__all__ = [
    "Archiver",
    "BundleGenerator",
    "ScaffoldResult",
    "TemplateRenderer",
    "TemplateSpec",
    "TokenTable",
    "ZipArchiver",
    "build_token_table",
    "to_lower_camel_identifier",
    "to_namespace_segment",
    "to_snake_file_name",
]
