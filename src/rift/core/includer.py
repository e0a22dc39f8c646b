# src/rift/core/includer.py
import logging
from typing import List, Mapping, Optional

from rift.core.matcher import PatternLike, match_all
from rift.errors import MissingIncludeError
from rift.models import IncludeResult

logger = logging.getLogger(__name__)


def apply_once(
    text: str,
    content_index: Mapping[str, str],
    pattern: PatternLike,
    source: Optional[str] = None,
) -> IncludeResult:
    """
    Replaces every include directive in text with the indexed content it references.

    This is a single pass: substituted content is not scanned again here.
    Directives whose target is not in the index are kept verbatim and
    reported as MissingIncludeError warnings. `source` only labels those
    warnings.
    """
    matches = match_all(pattern, text)

    parts: List[str] = []
    missing: List[str] = []
    did_substitute = False
    cursor = 0
    for m in matches:
        parts.append(text[cursor:m.start])
        cursor = m.end
        if m.path is not None and m.path in content_index:
            parts.append(content_index[m.path])
            did_substitute = True
            continue

        logger.warning("%s", MissingIncludeError(m.path, source))
        missing.append(m.path if m.path is not None else m.text)
        parts.append(m.text)
    parts.append(text[cursor:])

    return IncludeResult(
        text="".join(parts),
        did_substitute=did_substitute,
        missing=tuple(missing),
    )
