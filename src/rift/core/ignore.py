# src/rift/core/ignore.py
import logging
import re
from pathlib import Path, PurePath
from typing import List, Optional, Union

import pathspec

from rift.config import DEFAULT_IGNORE_PATTERNS

logger = logging.getLogger(__name__)


def load_ignore_spec(
    ignore_file: Optional[Path],
    extra_patterns: Optional[List[str]] = None,
    use_defaults: bool = True,
) -> pathspec.PathSpec:
    """
    Loads rules from .riftignore (if present) and creates a PathSpec object.
    Defaults and any extra patterns (like the output directory) are added on top.
    """
    lines: List[str] = list(DEFAULT_IGNORE_PATTERNS) if use_defaults else []

    if ignore_file is not None and ignore_file.is_file():
        try:
            lines.extend(ignore_file.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", ignore_file, e)

    if extra_patterns:
        lines.extend(extra_patterns)

    try:
        return pathspec.GitIgnoreSpec.from_lines(lines)
    except Exception as e:
        logger.error("Error parsing ignore rules: %s", e)
        return pathspec.GitIgnoreSpec.from_lines([])


def escape_pattern(rel_path: str) -> str:
    """Backslash-escapes characters gitignore would read as wildcards, comments or negation."""
    return re.sub(r"([\\\[\]*?!# ])", r"\\\1", rel_path)


def anchored_pattern(source_root: Path, path: Path, is_directory: bool = False) -> Optional[str]:
    """
    Returns a literal ignore pattern anchored at the source root for `path`,
    or None when `path` is outside the root or is the root itself.
    """
    try:
        rel = path.resolve().relative_to(source_root.resolve())
    except ValueError:
        return None
    if not rel.parts:
        return None
    pattern = "/" + escape_pattern(rel.as_posix())
    return pattern + "/" if is_directory else pattern


def output_ignore_pattern(source_root: Path, output_root: Path) -> Optional[str]:
    """
    Returns an anchored ignore pattern for the output root when it lives
    inside the source root, so earlier outputs are never read back as sources.
    """
    return anchored_pattern(source_root, output_root, is_directory=True)


def is_path_ignored(
    rel_path: Union[str, PurePath],
    spec: Optional[pathspec.PathSpec],
    is_directory: bool = False,
) -> bool:
    if spec is None:
        return False
    candidate = PurePath(rel_path).as_posix()
    if is_directory:
        candidate += "/"
    return spec.match_file(candidate)
