"""File-system collaborator used by the bundle generator.

The generator never touches the disk directly; it goes through an object
implementing the ``FileSystem`` protocol.  ``LocalFileSystem`` is the real
implementation, rooted at the Contao project directory.  Failures surface as
``OSError`` and are not retried.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Reads, writes and copies files for a scaffold run."""

    def read_text(self, path: str | Path) -> str: ...

    def write_text(self, path: str | Path, content: str) -> None: ...

    def append_text(self, path: str | Path, content: str) -> None: ...

    def copy(self, source: str | Path, destination: str | Path) -> None: ...

    def ensure_directory(self, path: str | Path) -> None: ...

    def exists(self, path: str | Path) -> bool: ...


class LocalFileSystem:
    """``FileSystem`` backed by the local disk.

    Relative paths are resolved against *root*; absolute paths (such as the
    sample templates shipped with the package) are used as given.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def resolve(self, path: str | Path) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    def read_text(self, path: str | Path) -> str:
        return self.resolve(path).read_text(encoding="utf-8")

    def write_text(self, path: str | Path, content: str) -> None:
        """Create or truncate *path*; parent directories are created."""
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def append_text(self, path: str | Path, content: str) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as fh:
            fh.write(content)

    def copy(self, source: str | Path, destination: str | Path) -> None:
        target = self.resolve(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.resolve(source), target)

    def ensure_directory(self, path: str | Path) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)

    def exists(self, path: str | Path) -> bool:
        return self.resolve(path).exists()
