# src/rift/core/runner.py
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from rift.core.matcher import PatternLike, compile_pattern
from rift.core.resolver import resolve_file
from rift.core.sink import OutputSink
from rift.errors import SinkWriteError, SourceReadError
from rift.models import Resolution, RunReport

logger = logging.getLogger(__name__)


class SourceProvider(Protocol):
    def list_eligible_files(self, extensions: Iterable[str] = ()) -> List[str]:
        ...

    def read(self, rel_path: str) -> str:
        ...


class SinkProvider(Protocol):
    def ensure_parent_dirs(self, rel_path: str) -> Path:
        ...

    def write(self, rel_path: str, text: str) -> Path:
        ...


def build_index(
    source: SourceProvider,
    extensions: Iterable[str] = (),
) -> Tuple[Mapping[str, str], List[SourceReadError]]:
    """
    Reads every eligible file into a read-only index keyed by relative path.
    Files that fail to read are left out of the index and reported.
    """
    contents: Dict[str, str] = {}
    errors: List[SourceReadError] = []
    for rel_path in source.list_eligible_files(extensions):
        try:
            contents[rel_path] = source.read(rel_path)
        except SourceReadError as e:
            logger.warning("%s", e)
            errors.append(e)
    return MappingProxyType(contents), errors


def resolve_all(
    content_index: Mapping[str, str],
    pattern: PatternLike,
    max_depth: int,
    jobs: int = 1,
) -> Dict[str, Resolution]:
    compiled = compile_pattern(pattern)
    paths = sorted(content_index)

    if jobs > 1 and len(paths) > 1:
        # Safe without locks: the index is never written during resolution
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            results = pool.map(
                lambda p: resolve_file(p, content_index, compiled, max_depth), paths
            )
            return {r.path: r for r in results}

    return {p: resolve_file(p, content_index, compiled, max_depth) for p in paths}


def write_all(
    resolutions: Mapping[str, Resolution],
    sink: SinkProvider,
) -> Tuple[List[Path], List[SinkWriteError]]:
    written: List[Path] = []
    errors: List[SinkWriteError] = []
    for rel_path, resolution in resolutions.items():
        try:
            written.append(sink.write(rel_path, resolution.text))
        except SinkWriteError as e:
            logger.warning("%s", e)
            errors.append(e)
    return written, errors


def run(
    source: SourceProvider,
    output_root: Path,
    max_depth: int,
    pattern: PatternLike,
    extensions: Iterable[str] = (),
    *,
    sink: Optional[SinkProvider] = None,
    jobs: int = 1,
) -> RunReport:
    """
    Resolves the includes of every eligible source file and writes the results.

    The three phases never overlap: every source is loaded before any
    resolution starts, and nothing is written until all files are resolved.
    An invalid pattern raises PatternError before anything is read or written;
    every other problem is logged, recorded in the report and skipped.
    """
    compiled = compile_pattern(pattern)
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    if sink is None:
        sink = OutputSink(output_root)

    content_index, read_errors = build_index(source, extensions)
    logger.info("Loaded %d file(s)", len(content_index))

    resolutions = resolve_all(content_index, compiled, max_depth, jobs=jobs)
    written, write_errors = write_all(resolutions, sink)
    logger.info("Wrote %d file(s) to %s", len(written), output_root)

    return RunReport(
        resolutions=resolutions,
        written=written,
        read_errors=read_errors,
        write_errors=write_errors,
    )
