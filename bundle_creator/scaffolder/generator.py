"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and generates a Contao bundle under
``vendor/<vendor>/<repository>`` of the project directory: folder skeleton,
``composer.json``, bundle and Contao Manager plugin classes, configuration
files and assets, an optional DCA table and an optional frontend module,
followed by a ZIP archive of the result.

All reads and writes go through the injected ``FileSystem``; progress is
reported to the injected ``Notifier``.  The run is linear: there are no
retries, and a failure part way through leaves the files written so far in
place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from bundle_creator.config import Config
from bundle_creator.errors import ScaffoldValidationError
from bundle_creator.filesystem import FileSystem
from bundle_creator.models import ScaffoldRequest
from bundle_creator.notifier import Notifier
from bundle_creator.session import LAST_ARCHIVE_KEY, SessionStore

from .archive import Archiver
from .naming import to_namespace_segment
from .templates import TemplateRenderer
from .tokens import TemplateSpec, TokenTable, build_token_table


# ---------------------------------------------------------------------------
# Template catalogue
# ---------------------------------------------------------------------------

# Destinations are relative to the vendor directory.
_BUNDLE = "#vendorname#/#repositoryname#"

PHPDOC_PARTIAL = "partials/phpdoc.txt"

FMD_CATEGORY_START = "#fmdcatstart#"
FMD_CATEGORY_END = "#fmdcatend#"

_NAMESPACE_TOKENS = frozenset({"phpdoc", "toplevelnamespace", "sublevelnamespace"})

BUNDLE_FOLDERS: tuple[str, ...] = (
    "src/ContaoManager",
    "src/Resources/config",
    "src/Resources/public",
    "src/Resources/contao/config",
    "src/Resources/contao/dca",
    "src/Resources/contao/languages/en",
    "src/Resources/contao/templates",
    "src/EventListener/ContaoHooks",
)

FRONTEND_MODULE_FOLDERS: tuple[str, ...] = (
    "src/Controller/FrontendModule",
    "src/Resources/contao/templates",
)

COMPOSER_JSON = TemplateSpec(
    "composer.json",
    f"{_BUNDLE}/composer.json",
    frozenset(
        {
            "vendorname",
            "repositoryname",
            "composerdescription",
            "composerpackageversion",
            "license",
            "authorname",
            "authoremail",
            "authorwebsite",
            "toplevelnamespace",
            "sublevelnamespace",
        }
    ),
)

BUNDLE_CLASS = TemplateSpec(
    "src/BundleFile.php",
    f"{_BUNDLE}/src/#toplevelnamespace##sublevelnamespace#.php",
    _NAMESPACE_TOKENS,
)

PLUGIN_CLASS = TemplateSpec(
    "src/ContaoManager/Plugin.php",
    f"{_BUNDLE}/src/ContaoManager/Plugin.php",
    _NAMESPACE_TOKENS,
)

CONFIG_FILES: tuple[TemplateSpec, ...] = tuple(
    TemplateSpec(f"src/Resources/config/{name}", f"{_BUNDLE}/src/Resources/config/{name}")
    for name in ("listener.yml", "parameters.yml", "services.yml")
)
SERVICES_YML = CONFIG_FILES[2]

CONTAO_CONFIG = TemplateSpec(
    "src/Resources/contao/config/config.php",
    f"{_BUNDLE}/src/Resources/contao/config/config.php",
    frozenset({"phpdoc"}),
)

MODULES_LANG = TemplateSpec(
    "src/Resources/contao/languages/en/modules.php",
    f"{_BUNDLE}/src/Resources/contao/languages/en/modules.php",
    frozenset({"phpdoc"}),
)

PUBLIC_ASSETS: tuple[TemplateSpec, ...] = (
    TemplateSpec("src/Resources/public/logo.png", f"{_BUNDLE}/src/Resources/public/logo.png"),
)

# Copied as is: the README keeps its placeholders.
README = TemplateSpec("README.md", f"{_BUNDLE}/README.md")

DCA_TABLE_FILES: tuple[TemplateSpec, ...] = (
    TemplateSpec(
        "src/Resources/contao/dca/tl_sample_table.php",
        f"{_BUNDLE}/src/Resources/contao/dca/#dcatable#.php",
        frozenset({"phpdoc", "dcatable"}),
    ),
    TemplateSpec(
        "src/Resources/contao/languages/en/tl_sample_table.php",
        f"{_BUNDLE}/src/Resources/contao/languages/en/#dcatable#.php",
        frozenset({"phpdoc", "dcatable"}),
    ),
)

_PARTIAL_TOKENS = frozenset(
    {
        "dcatable",
        "bemodule",
        "frontendmodulename",
        "frontendmodulecategory",
        "frontendmodulecategorytrans",
        "frontendmoduletrans_0",
        "frontendmoduletrans_1",
    }
)

BE_MODULE_CONFIG = TemplateSpec(
    "partials/contao_config_be_mod.txt", CONTAO_CONFIG.destination, _PARTIAL_TOKENS
)
BE_MODULE_LANG = TemplateSpec(
    "partials/contao_lang_en_be_modules.txt", MODULES_LANG.destination, _PARTIAL_TOKENS
)

FRONTEND_MODULE_CLASS = TemplateSpec(
    "src/Controller/FrontendModule/SampleModule.php",
    f"{_BUNDLE}/src/Controller/FrontendModule/#frontendmoduleclassname#.php",
    _NAMESPACE_TOKENS | {"frontendmoduleclassname"},
)

TL_MODULE = TemplateSpec(
    "src/Resources/contao/dca/tl_module.php",
    f"{_BUNDLE}/src/Resources/contao/dca/tl_module.php",
    frozenset({"phpdoc"}),
)
TL_MODULE_PALETTE = TemplateSpec(
    "partials/contao_tl_module.txt", TL_MODULE.destination, _PARTIAL_TOKENS
)

FRONTEND_MODULE_SERVICE = TemplateSpec(
    "partials/config_services_frontend_modules.txt",
    SERVICES_YML.destination,
    _PARTIAL_TOKENS
    | {
        "toplevelnamespace",
        "sublevelnamespace",
        "frontendmoduleclassname",
        "frontendmoduletemplate",
    },
)

FRONTEND_MODULE_TEMPLATE = TemplateSpec(
    "src/Resources/contao/templates/mod_sample.html5",
    f"{_BUNDLE}/src/Resources/contao/templates/#frontendmoduletemplate#.html5",
)

FRONTEND_MODULE_LANG = TemplateSpec(
    "partials/contao_lang_en_fe_modules.txt", MODULES_LANG.destination, _PARTIAL_TOKENS
)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class ScaffoldResult:
    """Outcome of one scaffold run.

    Attributes:
        bundle_dir: Bundle directory relative to the project root.
        success: ``False`` when the run was rejected before writing.
        files: Files written, copied or appended to, in order of first touch.
        archive_path: Archive location, or ``None`` when archiving was
            skipped or failed.
        error: Rejection message when ``success`` is ``False``.
    """

    bundle_dir: str
    success: bool = False
    files: list[str] = field(default_factory=list)
    archive_path: str | None = None
    error: str | None = None

    def touch(self, path: str) -> None:
        if path not in self.files:
            self.files.append(path)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class BundleGenerator:
    """Scaffolding orchestrator for Contao bundles.

    Given a ``ScaffoldRequest``, generates:
    - the bundle folder skeleton
    - ``composer.json`` (without a version field unless one was supplied)
    - the bundle class and the Contao Manager plugin class
    - configuration files, the logo and the README
    - optionally a DCA table with its language file and backend module
    - optionally a frontend module controller, palette, service tag,
      template and language entries
    - a ZIP archive of the bundle
    """

    def __init__(
        self,
        filesystem: FileSystem,
        notifier: Notifier,
        archiver: Archiver | None = None,
        session: SessionStore | None = None,
        *,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
        year: int | None = None,
    ) -> None:
        self.fs = filesystem
        self.notifier = notifier
        self.archiver = archiver
        self.session = session
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.year = year or datetime.now().year

    # -- Public API --------------------------------------------------------

    def run(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Generate the bundle described by *request*.

        Validation failures are reported to the notifier and returned as an
        unsuccessful result before anything is written.  ``OSError`` from the
        file system propagates and aborts the remaining steps.
        """
        bundle_dir = self.config.bundle_dir(request.vendor_name, request.repository_name)
        result = ScaffoldResult(bundle_dir=bundle_dir)

        try:
            self._check_request(request, bundle_dir)
            table = build_token_table(
                request,
                self.fs.read_text(self._sample(PHPDOC_PARTIAL)),
                self.year,
                self.renderer,
            )
            self._check_destinations(request, table)
        except ScaffoldValidationError as exc:
            result.error = str(exc)
            self.notifier.error(str(exc))
            return result

        self.notifier.info(
            f'Started generating "{request.vendor_name}/{request.repository_name}" bundle.'
        )

        # 1. Folder skeleton
        self._generate_folders(bundle_dir, BUNDLE_FOLDERS)
        self.notifier.info(f'Generating folder structure in "{bundle_dir}".')

        # 2. composer.json
        self._generate_composer_json(request, table, result)

        # 3. Bundle class and Contao Manager plugin
        self._write(BUNDLE_CLASS, table, result)
        self.notifier.info("Generating bundle class.")
        self._write(PLUGIN_CLASS, table, result)
        self.notifier.info("Generating Contao Manager Plugin class.")

        # 4. Config files, assets, README
        self._copy_files(table, result)

        # 5. Optional DCA table
        if request.wants_dca_table:
            self._generate_dca_table(request, table, result)

        # 6. Optional frontend module
        if request.add_frontend_module:
            self._generate_frontend_module(request, table, result)

        # 7. Archive
        self._archive(request, bundle_dir, result)

        result.success = True
        return result

    # -- Validation --------------------------------------------------------

    def _check_request(self, request: ScaffoldRequest, bundle_dir: str) -> None:
        """Reject requests that cannot be generated.

        Raises:
            ScaffoldValidationError: On an empty namespace segment or an
                existing bundle without the overwrite flag.
        """
        for label, value in (
            ("vendor name", request.vendor_name),
            ("repository name", request.repository_name),
        ):
            if not to_namespace_segment(value):
                raise ScaffoldValidationError(
                    f'The {label} "{value}" does not yield a valid namespace segment.'
                )

        if self.fs.exists(bundle_dir) and not request.overwrite_existing:
            raise ScaffoldValidationError(
                "An extension with the same name already exists. "
                'Please set the "override extension flag".'
            )

    def _check_destinations(self, request: ScaffoldRequest, table: TokenTable) -> None:
        """Resolve every destination this request will write to.

        Raises:
            ScaffoldValidationError: If a name leaves a token marker or an
                empty segment in one of the output paths.
        """
        specs: list[TemplateSpec] = [
            COMPOSER_JSON,
            BUNDLE_CLASS,
            PLUGIN_CLASS,
            *CONFIG_FILES,
            CONTAO_CONFIG,
            MODULES_LANG,
            *PUBLIC_ASSETS,
            README,
        ]
        if request.wants_dca_table:
            specs.extend(DCA_TABLE_FILES)
        if request.add_frontend_module:
            specs.extend((FRONTEND_MODULE_CLASS, TL_MODULE, FRONTEND_MODULE_TEMPLATE))

        for spec in specs:
            spec.resolve_destination(table, self.renderer)

    # -- Steps -------------------------------------------------------------

    def _generate_folders(self, bundle_dir: str, folders: tuple[str, ...]) -> None:
        for folder in folders:
            self.fs.ensure_directory(f"{bundle_dir}/{folder}")

    def _generate_composer_json(
        self, request: ScaffoldRequest, table: TokenTable, result: ScaffoldResult
    ) -> None:
        content = self.fs.read_text(self._sample(COMPOSER_JSON.source))
        if not request.composer_package_version:
            content = self.renderer.strip_version_line_if_absent(content)
        content = COMPOSER_JSON.render(content, table, self.renderer)
        self.fs.write_text(self._destination(COMPOSER_JSON, table, result), content)
        self.notifier.info("Generating composer.json file.")

    def _copy_files(self, table: TokenTable, result: ScaffoldResult) -> None:
        """Copy configuration files and assets into the bundle."""
        for spec in CONFIG_FILES:
            target = self._copy(spec, table, result)
            self.notifier.info(f'Created file "{target}".')

        for spec in (CONTAO_CONFIG, MODULES_LANG):
            target = self._write(spec, table, result)
            self.notifier.info(f'Created file "{target}".')

        for spec in (*PUBLIC_ASSETS, README):
            target = self._copy(spec, table, result)
            self.notifier.info(f'Created file "{target}".')

    def _generate_dca_table(
        self, request: ScaffoldRequest, table: TokenTable, result: ScaffoldResult
    ) -> None:
        """Generate the DCA table, its language file and the backend module."""
        for spec in DCA_TABLE_FILES:
            target = self._write(spec, table, result)
            self.notifier.info(f'Created file "{target}".')

        blocks = self._partial_blocks(request)
        self._append(BE_MODULE_CONFIG, table, result, blocks)
        self._append(BE_MODULE_LANG, table, result, blocks)
        self.notifier.info(f'Registered backend module "{table["bemodule"]}".')

    def _generate_frontend_module(
        self, request: ScaffoldRequest, table: TokenTable, result: ScaffoldResult
    ) -> None:
        """Generate the frontend module controller and its registrations."""
        bundle_dir = self.config.bundle_dir(request.vendor_name, request.repository_name)
        self._generate_folders(bundle_dir, FRONTEND_MODULE_FOLDERS)

        blocks = self._partial_blocks(request)

        self._write(FRONTEND_MODULE_CLASS, table, result)
        self._write(TL_MODULE, table, result)
        self._append(TL_MODULE_PALETTE, table, result, blocks)
        self._append(FRONTEND_MODULE_SERVICE, table, result, blocks)
        self._copy(FRONTEND_MODULE_TEMPLATE, table, result)
        self._append(FRONTEND_MODULE_LANG, table, result, blocks)

        self.notifier.info(
            f'Created frontend module "{table["frontendmoduleclassname"]}".'
        )

    def _archive(
        self, request: ScaffoldRequest, bundle_dir: str, result: ScaffoldResult
    ) -> None:
        if self.archiver is None or not self.config.create_archive:
            self.notifier.info("Archive creation is not available, skipped.")
            return

        target = self.config.archive_file(request.repository_name)
        if not self.archiver.create_archive(bundle_dir, target):
            self.notifier.info(f'Could not create archive "{target}".')
            return

        result.archive_path = target
        if self.session is not None:
            self.session.set(LAST_ARCHIVE_KEY, target)
        self.notifier.info(f'Created archive "{target}".')

    # -- File helpers ------------------------------------------------------

    def _sample(self, source: str) -> Path:
        return self.config.samples_dir / source

    def _destination(
        self, spec: TemplateSpec, table: TokenTable, result: ScaffoldResult
    ) -> str:
        target = f"{self.config.vendor_dir}/{spec.resolve_destination(table, self.renderer)}"
        result.touch(target)
        return target

    def _render(
        self,
        spec: TemplateSpec,
        table: TokenTable,
        blocks: list[tuple[str, str, bool]] | None = None,
    ) -> str:
        content = self.fs.read_text(self._sample(spec.source))
        return self.renderer.render(content, table.narrow(spec.tokens), blocks=blocks)

    def _write(self, spec: TemplateSpec, table: TokenTable, result: ScaffoldResult) -> str:
        content = self._render(spec, table)
        target = self._destination(spec, table, result)
        self.fs.write_text(target, content)
        return target

    def _append(
        self,
        spec: TemplateSpec,
        table: TokenTable,
        result: ScaffoldResult,
        blocks: list[tuple[str, str, bool]],
    ) -> str:
        content = self._render(spec, table, blocks)
        target = self._destination(spec, table, result)
        self.fs.append_text(target, content)
        return target

    def _copy(self, spec: TemplateSpec, table: TokenTable, result: ScaffoldResult) -> str:
        target = self._destination(spec, table, result)
        self.fs.copy(self._sample(spec.source), target)
        return target

    @staticmethod
    def _partial_blocks(request: ScaffoldRequest) -> list[tuple[str, str, bool]]:
        """Block rules for partials: the category label only when one was given."""
        return [
            (FMD_CATEGORY_START, FMD_CATEGORY_END, bool(request.frontend_module_category_trans))
        ]
