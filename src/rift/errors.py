# src/rift/errors.py
from typing import Optional


class RiftError(Exception):
    """Base class for every error rift raises or reports."""


class PatternError(RiftError):
    """The inclusion pattern is invalid. Fatal for the whole run."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid include pattern {pattern!r}: {reason}")


class NotFoundError(RiftError, KeyError):
    """A path was requested that is not part of the content index."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(path)

    def __str__(self) -> str:
        return f"{self.path!r} is not in the content index"


class MissingIncludeError(RiftError):
    """An include directive references a path that is not in the index."""

    def __init__(self, target: Optional[str], path: Optional[str] = None):
        self.target = target
        self.path = path
        where = f" (in {path})" if path else ""
        super().__init__(f'included file "{target}" doesn\'t exist{where} -> ignoring')


class DepthExhaustedWarning(RiftError):
    """Resolution of a file was still substituting when the pass limit was hit."""

    def __init__(self, path: str, max_depth: int):
        self.path = path
        self.max_depth = max_depth
        super().__init__(f"max inclusion depth ({max_depth}) reached for {path}")


class SourceReadError(RiftError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"couldn't read {path}: {reason}")


class SinkWriteError(RiftError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"couldn't write {path}: {reason}")
