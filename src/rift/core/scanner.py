# src/rift/core/scanner.py
import os
from pathlib import Path
from typing import AbstractSet, Iterable, List, Optional, Set

import pathspec

from rift.config import BINARY_SNIFF_BYTES
from rift.core.ignore import is_path_ignored
from rift.errors import SourceReadError


def parse_extensions(raw: Optional[str]) -> Set[str]:
    """Parses 'txt, .md' into {'txt', 'md'}. An empty value means every file."""
    if not raw:
        return set()
    return {e.strip().lstrip(".") for e in raw.split(",") if e.strip().lstrip(".")}


def get_extension(path: Path) -> str:
    """Returns the last suffix of a path without its dot ('' if there is none)."""
    return path.suffix[1:]


class ProjectScanner:
    """Lists and reads the source files under an explicit root directory."""

    def __init__(self, root_dir: Path, ignore_spec: Optional[pathspec.PathSpec] = None):
        self.root_dir = Path(root_dir)
        self.ignore_spec = ignore_spec

    def _is_binary_file(self, path: Path) -> bool:
        """
        Reads the first bytes to check for null bytes.
        Returns True if likely binary, False if likely text.
        """
        with path.open("rb") as f:
            chunk = f.read(BINARY_SNIFF_BYTES)
            return b'\0' in chunk

    def is_eligible(self, path: Path, extensions: AbstractSet[str]) -> bool:
        if not path.is_file():
            return False
        if not extensions:
            return True
        return get_extension(path) in extensions

    def list_eligible_files(self, extensions: Iterable[str] = ()) -> List[str]:
        """
        Walks the directory tree, pruning ignored directories,
        and returns the sorted posix relative paths of eligible files.
        """
        extensions = frozenset(extensions)
        found: List[str] = []

        for root, dirs, files in os.walk(self.root_dir):
            root_path = Path(root)

            # Pruning happens in place so os.walk never descends into them
            for d in list(dirs):
                dir_rel_path = (root_path / d).relative_to(self.root_dir)
                if is_path_ignored(dir_rel_path, self.ignore_spec, is_directory=True):
                    dirs.remove(d)

            for f in files:
                file_abs_path = root_path / f
                rel_path = file_abs_path.relative_to(self.root_dir)

                if is_path_ignored(rel_path, self.ignore_spec):
                    continue
                if not self.is_eligible(file_abs_path, extensions):
                    continue
                found.append(rel_path.as_posix())

        return sorted(found)

    def read(self, rel_path: str) -> str:
        path = self.root_dir / rel_path
        try:
            if self._is_binary_file(path):
                raise SourceReadError(rel_path, "binary content")
            with path.open("r", encoding="utf-8", newline="") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise SourceReadError(rel_path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise SourceReadError(rel_path, e.strerror or str(e)) from e
