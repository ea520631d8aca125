"""Bundle creator configuration.

Centralised, typed configuration for the generator.  Settings use Pydantic
v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_SAMPLES_DIR = Path(__file__).parent / "samples" / "sample-repository"


class Config(BaseModel):
    """Global bundle creator configuration.

    Holds the project root the bundle is generated into and the paths
    derived from it.  Created once by the CLI (or the caller embedding the
    generator) and passed to ``BundleGenerator``.
    """

    project_dir: Path = Field(default=Path("."), description="Contao project root")
    samples_dir: Path = Field(
        default=DEFAULT_SAMPLES_DIR, description="Directory holding the sample repository"
    )
    vendor_dir: str = Field(default="vendor")
    archive_dir: str = Field(default="system/tmp")
    session_file: str = Field(default="var/bundle-creator/session.json")
    create_archive: bool = Field(default=True)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def vendor_path(self) -> Path:
        """Absolute-or-relative path of the ``vendor/`` directory."""
        return self.project_dir / self.vendor_dir

    @property
    def archive_path(self) -> Path:
        """Directory receiving the generated ZIP archives."""
        return self.project_dir / self.archive_dir

    @property
    def session_path(self) -> Path:
        """JSON file holding the operator session values."""
        return self.project_dir / self.session_file

    def bundle_dir(self, vendor_name: str, repository_name: str) -> str:
        """Bundle directory relative to the project root."""
        return f"{self.vendor_dir}/{vendor_name}/{repository_name}"

    def archive_file(self, repository_name: str) -> str:
        """Archive path relative to the project root."""
        return f"{self.archive_dir}/{repository_name}.zip"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            BUNDLE_CREATOR_PROJECT_DIR, BUNDLE_CREATOR_SAMPLES_DIR,
            BUNDLE_CREATOR_ARCHIVE_DIR, BUNDLE_CREATOR_SESSION_FILE,
            BUNDLE_CREATOR_NO_ARCHIVE.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("BUNDLE_CREATOR_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["BUNDLE_CREATOR_PROJECT_DIR"])
        if os.environ.get("BUNDLE_CREATOR_SAMPLES_DIR"):
            kwargs["samples_dir"] = Path(os.environ["BUNDLE_CREATOR_SAMPLES_DIR"])
        if os.environ.get("BUNDLE_CREATOR_ARCHIVE_DIR"):
            kwargs["archive_dir"] = os.environ["BUNDLE_CREATOR_ARCHIVE_DIR"]
        if os.environ.get("BUNDLE_CREATOR_SESSION_FILE"):
            kwargs["session_file"] = os.environ["BUNDLE_CREATOR_SESSION_FILE"]
        if os.environ.get("BUNDLE_CREATOR_NO_ARCHIVE", "").lower() in ("1", "true", "yes"):
            kwargs["create_archive"] = False
        return cls(**kwargs)
