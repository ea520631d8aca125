"""Integration tests for a complete scaffold run on the real file system.

These tests wire the generator to ``LocalFileSystem`` and ``ZipArchiver``
inside a temporary Contao project and verify that the generated bundle is
well formed: valid JSON and YAML, consistent namespaces and an archive that
mirrors the bundle tree.
"""

from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest
import yaml

from bundle_creator.config import Config
from bundle_creator.filesystem import LocalFileSystem
from bundle_creator.models import ScaffoldRequest
from bundle_creator.notifier import ERROR, FlashBag
from bundle_creator.scaffolder import BundleGenerator, ZipArchiver
from bundle_creator.session import LAST_ARCHIVE_KEY, SessionStore


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _full_request(**overrides) -> ScaffoldRequest:
    data = {
        "vendor_name": "acme",
        "repository_name": "demo-bundle",
        "bundle_name": "Demo Bundle",
        "composer_description": "A demo bundle.",
        "author_name": "Jane Doe",
        "author_email": "jane@example.com",
        "author_website": "https://example.com",
        "composer_package_version": "0.1.0",
        "add_dca_table": True,
        "dca_table": "tl_demo",
        "add_frontend_module": True,
        "frontend_module_name": "news teaser",
        "frontend_module_category": "demo",
        "frontend_module_category_trans": "Demo modules",
        "frontend_module_trans": ["News teaser", "Shows the latest news."],
    }
    data.update(overrides)
    return ScaffoldRequest(**data)


def _run(project: Path, request: ScaffoldRequest) -> tuple:
    config = Config(project_dir=project)
    flash = FlashBag()
    generator = BundleGenerator(
        LocalFileSystem(project),
        flash,
        ZipArchiver(project),
        SessionStore(config.session_path),
        config=config,
    )
    return generator.run(request), flash, config


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestScaffoldOnDisk:
    """Generate a full bundle and inspect the result on disk."""

    def test_full_bundle(self, tmp_path: Path):
        result, flash, _ = _run(tmp_path, _full_request())

        assert result.success is True
        assert not flash.has(ERROR)

        bundle = tmp_path / "vendor" / "acme" / "demo-bundle"
        for rel in result.files:
            assert (tmp_path / rel).is_file(), rel

        manifest = json.loads((bundle / "composer.json").read_text(encoding="utf-8"))
        assert manifest["version"] == "0.1.0"

        assert (bundle / "src" / "EventListener" / "ContaoHooks").is_dir()
        assert (bundle / "src" / "Resources" / "contao" / "dca" / "tl_demo.php").is_file()
        assert (
            bundle / "src" / "Controller" / "FrontendModule" / "ModuleNewsTeaser.php"
        ).is_file()
        assert (
            bundle / "src" / "Resources" / "contao" / "templates" / "mod_news_teaser.html5"
        ).is_file()

    def test_services_yaml_is_valid(self, tmp_path: Path):
        _run(tmp_path, _full_request())
        services_file = (
            tmp_path / "vendor" / "acme" / "demo-bundle" / "src" / "Resources"
            / "config" / "services.yml"
        )
        services = yaml.safe_load(services_file.read_text(encoding="utf-8"))["services"]
        key = "Acme\\DemoBundle\\Controller\\FrontendModule\\ModuleNewsTeaser"
        tag = services[key]["tags"][0]
        assert tag["name"] == "contao.frontend_module"
        assert tag["category"] == "demo"
        assert tag["template"] == "mod_news_teaser"
        assert tag["type"] == "newsTeaser"
        assert services["_defaults"]["autowire"] is True

    def test_archive_mirrors_bundle(self, tmp_path: Path):
        result, _, config = _run(tmp_path, _full_request())

        archive = tmp_path / result.archive_path
        bundle = tmp_path / result.bundle_dir
        on_disk = {
            p.relative_to(bundle).as_posix() for p in bundle.rglob("*") if p.is_file()
        }
        with zipfile.ZipFile(archive) as zf:
            in_zip = {n for n in zf.namelist() if not n.endswith("/")}
            assert "src/EventListener/ContaoHooks/" in zf.namelist()
        assert in_zip == on_disk

        session = SessionStore(config.session_path)
        assert session.get(LAST_ARCHIVE_KEY) == "system/tmp/demo-bundle.zip"

    def test_second_run_requires_overwrite(self, tmp_path: Path):
        _run(tmp_path, _full_request())
        composer = tmp_path / "vendor" / "acme" / "demo-bundle" / "composer.json"
        before = composer.read_text(encoding="utf-8")

        result, flash, _ = _run(tmp_path, _full_request(composer_package_version=""))

        assert result.success is False
        assert len(flash.peek(ERROR)) == 1
        assert composer.read_text(encoding="utf-8") == before

    def test_overwrite_appends_partials_again(self, tmp_path: Path):
        _run(tmp_path, _full_request())
        result, _, _ = _run(tmp_path, _full_request(overwrite_existing=True))

        assert result.success is True
        config_php = (
            tmp_path / "vendor" / "acme" / "demo-bundle" / "src" / "Resources"
            / "contao" / "config" / "config.php"
        ).read_text(encoding="utf-8")
        # Base files are rewritten before partials are appended.
        assert config_php.count("$GLOBALS['BE_MOD']['content']['demo']") == 1
