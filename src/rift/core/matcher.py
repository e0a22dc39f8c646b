# src/rift/core/matcher.py
import re
from typing import List, Union

from rift.errors import PatternError
from rift.models import Match

PatternLike = Union[str, "re.Pattern[str]"]


def compile_pattern(pattern: PatternLike) -> "re.Pattern[str]":
    """
    Compiles an inclusion pattern and checks it has a capture group.
    Group 1 is always taken as the referenced path; extra groups are ignored.
    """
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise PatternError(pattern, str(e)) from e

    if compiled.groups < 1:
        raise PatternError(compiled.pattern, "regex doesn't include capture group")
    return compiled


def match_all(pattern: PatternLike, text: str) -> List[Match]:
    """Returns the leftmost, non-overlapping include matches in text, in order."""
    compiled = compile_pattern(pattern)
    return [
        Match(path=m.group(1), start=m.start(), end=m.end(), text=m.group(0))
        for m in compiled.finditer(text)
    ]
