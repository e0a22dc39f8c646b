# src/rift/core/resolver.py
import logging
from typing import List, Mapping

from rift.core.includer import apply_once
from rift.core.matcher import PatternLike, compile_pattern
from rift.errors import DepthExhaustedWarning, NotFoundError
from rift.models import Resolution, ResolveState

logger = logging.getLogger(__name__)


def resolve_file(
    path: str,
    content_index: Mapping[str, str],
    pattern: PatternLike,
    max_depth: int,
) -> Resolution:
    """
    Repeatedly applies single include passes to one indexed file.

    Each pass re-scans the current, partially resolved body against the
    original index contents. Stops as soon as a pass substitutes nothing
    (STABLE), or after `max_depth` substituting passes (DEPTH_EXHAUSTED),
    in which case the last substituted body is returned and a warning is
    logged. A depth of 0 runs no pass and returns the original body.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    if path not in content_index:
        raise NotFoundError(path)

    compiled = compile_pattern(pattern)
    body = content_index[path]
    state = ResolveState.PENDING
    missing: List[str] = []
    passes = 0

    while passes < max_depth:
        result = apply_once(body, content_index, compiled, source=path)
        passes += 1
        for target in result.missing:
            if target not in missing:
                missing.append(target)

        if not result.did_substitute:
            state = ResolveState.STABLE
            break

        body = result.text
        state = ResolveState.SUBSTITUTED
        logger.debug("%s: pass %d substituted", path, passes)
    else:
        if state is ResolveState.SUBSTITUTED:
            state = ResolveState.DEPTH_EXHAUSTED
            logger.warning("%s", DepthExhaustedWarning(path, max_depth))

    return Resolution(
        path=path,
        text=body,
        state=state,
        passes=passes,
        missing=tuple(missing),
    )


def resolve(
    path: str,
    content_index: Mapping[str, str],
    pattern: PatternLike,
    max_depth: int,
) -> str:
    """Returns the text of `path` with its includes resolved up to `max_depth` passes."""
    return resolve_file(path, content_index, pattern, max_depth).text
