"""Shared pytest fixtures for the bundle creator test suite.

Provides reusable fixtures for:
- An in-memory file system that reads sample templates from disk
- A recording archiver
- Sample scaffold requests (minimal, with DCA table, with frontend module)
- Generators wired to the fakes above
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from bundle_creator.config import DEFAULT_SAMPLES_DIR, Config
from bundle_creator.models import ScaffoldRequest
from bundle_creator.notifier import FlashBag
from bundle_creator.scaffolder.generator import BundleGenerator


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class MemoryFileSystem:
    """``FileSystem`` keeping every write in memory.

    Absolute paths that were never written are read from disk, so the real
    sample templates can be used without touching the project directory.
    """

    def __init__(self) -> None:
        self.files: dict[str, str | bytes] = {}
        self.dirs: set[str] = set()
        self.operations: list[tuple[str, str]] = []

    @staticmethod
    def _key(path: str | Path) -> str:
        return str(PurePosixPath(Path(path).as_posix()))

    def read_text(self, path: str | Path) -> str:
        key = self._key(path)
        if key in self.files:
            content = self.files[key]
            return content.decode("utf-8") if isinstance(content, bytes) else content
        if Path(path).is_absolute():
            return Path(path).read_text(encoding="utf-8")
        raise FileNotFoundError(key)

    def write_text(self, path: str | Path, content: str) -> None:
        key = self._key(path)
        self.operations.append(("write", key))
        self.files[key] = content

    def append_text(self, path: str | Path, content: str) -> None:
        key = self._key(path)
        self.operations.append(("append", key))
        existing = self.files.get(key, "")
        if isinstance(existing, bytes):
            existing = existing.decode("utf-8")
        self.files[key] = existing + content

    def copy(self, source: str | Path, destination: str | Path) -> None:
        key = self._key(destination)
        self.operations.append(("copy", key))
        src_key = self._key(source)
        if src_key in self.files:
            self.files[key] = self.files[src_key]
        else:
            self.files[key] = Path(source).read_bytes()

    def ensure_directory(self, path: str | Path) -> None:
        key = self._key(path)
        self.operations.append(("mkdir", key))
        self.dirs.add(key)

    def exists(self, path: str | Path) -> bool:
        key = self._key(path)
        if key in self.files or key in self.dirs:
            return True
        prefix = key + "/"
        return any(p.startswith(prefix) for p in (*self.files, *self.dirs))

    def text(self, path: str) -> str:
        """Return a written file as text (test helper)."""
        content = self.files[path]
        return content.decode("utf-8") if isinstance(content, bytes) else content


class RecordingArchiver:
    """``Archiver`` that records its calls and returns a fixed outcome."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.calls: list[tuple[str, str]] = []

    def create_archive(self, source_dir: str | Path, destination: str | Path) -> bool:
        self.calls.append((str(source_dir), str(destination)))
        return self.succeed


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_request() -> ScaffoldRequest:
    """Request without version, DCA table or frontend module."""
    return ScaffoldRequest(
        vendor_name="acme",
        repository_name="demo-bundle",
        bundle_name="Demo Bundle",
        composer_description="A demo bundle.",
        license="MIT",
        author_name="Jane Doe",
        author_email="jane@example.com",
        author_website="https://example.com",
    )


@pytest.fixture
def dca_request(minimal_request: ScaffoldRequest) -> ScaffoldRequest:
    """The minimal request plus the ``tl_demo`` table."""
    return minimal_request.model_copy(update={"add_dca_table": True, "dca_table": "tl_demo"})


@pytest.fixture
def module_request(minimal_request: ScaffoldRequest) -> ScaffoldRequest:
    """The minimal request plus a frontend module with a category label."""
    return minimal_request.model_copy(
        update={
            "add_frontend_module": True,
            "frontend_module_name": "MyNew_super NASA Module",
            "frontend_module_category": "demo category",
            "frontend_module_category_trans": "Demo modules",
            "frontend_module_trans": ("Super module", "Shows a greeting."),
        }
    )


# ---------------------------------------------------------------------------
# Generator wiring
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def flash_bag() -> FlashBag:
    return FlashBag()


@pytest.fixture
def archiver() -> RecordingArchiver:
    return RecordingArchiver()


@pytest.fixture
def generator(
    memory_fs: MemoryFileSystem, flash_bag: FlashBag, archiver: RecordingArchiver
) -> BundleGenerator:
    """Generator writing to memory, with a fixed year."""
    return BundleGenerator(
        memory_fs,
        flash_bag,
        archiver,
        config=Config(samples_dir=DEFAULT_SAMPLES_DIR),
        year=2024,
    )


@pytest.fixture
def samples_dir() -> Path:
    return DEFAULT_SAMPLES_DIR
