"""ZIP archival of a generated bundle."""

from __future__ import annotations

import os
import zipfile
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Archiver(Protocol):
    """Packs a directory tree into a single archive file."""

    def create_archive(self, source_dir: str | Path, destination: str | Path) -> bool: ...


class ZipArchiver:
    """Write a directory tree into a ZIP file.

    Relative paths are resolved against *root*.  Every file is stored under
    its path relative to the source directory and every directory gets its
    own entry, so empty folders survive extraction.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def _resolve(self, path: str | Path) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    def create_archive(self, source_dir: str | Path, destination: str | Path) -> bool:
        """Archive *source_dir* into *destination*.

        Returns:
            ``True`` if the archive was written, ``False`` when the source
            does not exist.
        """
        source = self._resolve(source_dir)
        target = self._resolve(destination)
        if not source.exists():
            return False

        target.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            if source.is_file():
                zf.write(source, source.name)
                return True

            for dirpath, dirnames, filenames in os.walk(source):
                dirnames.sort()
                current = Path(dirpath)
                rel_dir = current.relative_to(source)
                if rel_dir != Path("."):
                    zf.writestr(rel_dir.as_posix() + "/", "")
                for filename in sorted(filenames):
                    file_path = current / filename
                    zf.write(file_path, (rel_dir / filename).as_posix())
        return True
