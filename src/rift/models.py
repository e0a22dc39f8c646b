# src/rift/models.py
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from rift.errors import SinkWriteError, SourceReadError


@dataclass(frozen=True)
class Match:
    """One include directive found in a body of text."""
    path: Optional[str]
    start: int
    end: int
    text: str

    def prefix(self, body: str) -> str:
        return body[:self.start]

    def suffix(self, body: str) -> str:
        return body[self.end:]


@dataclass(frozen=True)
class IncludeResult:
    text: str
    did_substitute: bool = False
    missing: Tuple[str, ...] = ()

    def __iter__(self) -> Iterator[Union[str, bool]]:
        # Unpacks as (new_text, did_substitute)
        yield self.text
        yield self.did_substitute


class ResolveState(Enum):
    PENDING = "pending"
    SUBSTITUTED = "substituted"
    STABLE = "stable"
    DEPTH_EXHAUSTED = "depth_exhausted"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one file against the content index."""
    path: str
    text: str
    state: ResolveState
    passes: int = 0
    missing: Tuple[str, ...] = ()

    @property
    def depth_exhausted(self) -> bool:
        return self.state is ResolveState.DEPTH_EXHAUSTED


@dataclass
class RunReport:
    resolutions: Dict[str, Resolution] = field(default_factory=dict)
    written: List[Path] = field(default_factory=list)
    read_errors: List[SourceReadError] = field(default_factory=list)
    write_errors: List[SinkWriteError] = field(default_factory=list)

    @property
    def depth_exhausted(self) -> List[str]:
        return sorted(p for p, r in self.resolutions.items() if r.depth_exhausted)

    @property
    def missing_includes(self) -> Dict[str, Tuple[str, ...]]:
        return {p: r.missing for p, r in sorted(self.resolutions.items()) if r.missing}

    @property
    def ok(self) -> bool:
        return not (self.read_errors or self.write_errors
                    or self.depth_exhausted or self.missing_includes)
