"""Contao Bundle Creator.

Generates the skeleton of a Contao CMS bundle (composer manifest, bundle and
plugin classes, configuration, optional DCA table and frontend module) from a
handful of parameters, and packs the result into a ZIP archive.
"""

__version__ = "0.1.0"
