# tests/test_core.py
import logging

import pytest

from rift.config import DEFAULT_INCLUDE_REGEX
from rift.core.includer import apply_once
from rift.core.matcher import compile_pattern, match_all
from rift.core.resolver import resolve, resolve_file
from rift.errors import NotFoundError, PatternError
from rift.models import ResolveState


@pytest.fixture
def chain_index():
    """a -> b -> c, each include needing its own pass."""
    return {
        "a.txt": '#include "b.txt"',
        "b.txt": '#include "c.txt"',
        "c.txt": "Z",
    }


# --- Test 1: Pattern Matcher ---

def test_match_all_returns_matches_in_order():
    text = 'x #include "one.txt" y #include "dir/two.txt" z'
    matches = match_all(DEFAULT_INCLUDE_REGEX, text)

    assert [m.path for m in matches] == ["one.txt", "dir/two.txt"]
    first = matches[0]
    assert first.text == '#include "one.txt"'
    assert first.prefix(text) == "x "
    assert text[first.start:first.end] == first.text
    assert matches[1].suffix(text) == " z"


def test_match_all_default_pattern_charset():
    # Word chars, dots, slashes and percent signs are allowed; spaces are not
    matches = match_all(DEFAULT_INCLUDE_REGEX, '#include "a/b_%1.txt" #include "has space.txt"')
    assert [m.path for m in matches] == ["a/b_%1.txt"]


def test_match_all_no_matches():
    assert match_all(DEFAULT_INCLUDE_REGEX, "nothing to see") == []


def test_pattern_without_group_raises():
    with pytest.raises(PatternError):
        match_all(r'#include "[^"]*"', '#include "a.txt"')


def test_pattern_that_does_not_compile_raises():
    with pytest.raises(PatternError) as excinfo:
        compile_pattern(r"#include (")
    assert excinfo.value.pattern == r"#include ("


def test_extra_groups_use_group_one_as_path():
    pattern = r"@inc\((([\w.]+)?)\)"
    matches = match_all(pattern, "@inc(b.txt) @inc()")

    assert [m.path for m in matches] == ["b.txt", ""]
    result = apply_once("[@inc(b.txt)]", {"b.txt": "B"}, pattern)
    assert result.text == "[B]"


def test_compile_pattern_accepts_compiled():
    compiled = compile_pattern(DEFAULT_INCLUDE_REGEX)
    assert compile_pattern(compiled) is compiled


# --- Test 2: Single-Pass Includer ---

def test_apply_once_substitutes_known_paths():
    index = {"b.txt": "B"}
    result = apply_once('X #include "b.txt" Y', index, DEFAULT_INCLUDE_REGEX)

    text, did_substitute = result
    assert text == "X B Y"
    assert did_substitute is True
    assert result.missing == ()


def test_apply_once_missing_target_passthrough(caplog):
    index = {"b.txt": "B"}
    body = '#include "nope.txt" and #include "b.txt"'

    with caplog.at_level(logging.WARNING):
        result = apply_once(body, index, DEFAULT_INCLUDE_REGEX, source="a.txt")

    assert result.text == '#include "nope.txt" and B'
    assert result.did_substitute is True
    assert result.missing == ("nope.txt",)
    assert "nope.txt" in caplog.text
    assert "a.txt" in caplog.text


def test_apply_once_only_missing_reports_no_substitution():
    body = 'keep #include "nope.txt" as is\n'
    result = apply_once(body, {}, DEFAULT_INCLUDE_REGEX)

    assert result.text == body
    assert result.did_substitute is False


def test_apply_once_does_not_rescan_substituted_content():
    index = {"b.txt": '#include "c.txt"', "c.txt": "C"}
    result = apply_once('#include "b.txt"', index, DEFAULT_INCLUDE_REGEX)
    assert result.text == '#include "c.txt"'


def test_apply_once_pattern_error_propagates():
    with pytest.raises(PatternError):
        apply_once("text", {}, r"no groups")


def test_apply_once_preserves_surrounding_bytes():
    index = {"b.txt": "B\r\n"}
    body = '\ttab\r\n#include "b.txt"#include "b.txt"\r\nend'
    assert apply_once(body, index, DEFAULT_INCLUDE_REGEX).text == "\ttab\r\nB\r\nB\r\n\r\nend"


# --- Test 3: Recursive Resolver ---

def test_resolve_round_trip():
    index = {"a.txt": 'X #include "b.txt" Y', "b.txt": "B"}

    assert resolve("a.txt", index, DEFAULT_INCLUDE_REGEX, 5) == "X B Y"
    assert resolve("b.txt", index, DEFAULT_INCLUDE_REGEX, 5) == "B"


def test_resolve_chain_with_enough_depth(chain_index):
    assert resolve("a.txt", chain_index, DEFAULT_INCLUDE_REGEX, 2) == "Z"

    resolution = resolve_file("a.txt", chain_index, DEFAULT_INCLUDE_REGEX, 5)
    assert resolution.text == "Z"
    assert resolution.state is ResolveState.STABLE
    assert resolution.passes == 3


def test_resolve_chain_depth_one(chain_index, caplog):
    with caplog.at_level(logging.WARNING):
        resolution = resolve_file("a.txt", chain_index, DEFAULT_INCLUDE_REGEX, 1)

    assert resolution.text == '#include "c.txt"'
    assert resolution.state is ResolveState.DEPTH_EXHAUSTED
    assert resolution.depth_exhausted
    assert "max inclusion depth (1) reached for a.txt" in caplog.text


def test_resolve_depth_monotonicity(chain_index):
    results = [resolve("a.txt", chain_index, DEFAULT_INCLUDE_REGEX, d) for d in range(4)]
    assert results == ['#include "b.txt"', '#include "c.txt"', "Z", "Z"]


def test_resolve_depth_zero_returns_original(chain_index):
    resolution = resolve_file("a.txt", chain_index, DEFAULT_INCLUDE_REGEX, 0)

    assert resolution.text == '#include "b.txt"'
    assert resolution.state is ResolveState.PENDING
    assert resolution.passes == 0


def test_resolve_stable_is_fixed_point():
    index = {"a.txt": 'X #include "b.txt"', "b.txt": "plain"}
    once = resolve("a.txt", index, DEFAULT_INCLUDE_REGEX, 5)

    assert apply_once(once, index, DEFAULT_INCLUDE_REGEX).did_substitute is False
    assert resolve("a.txt", {**index, "a.txt": once}, DEFAULT_INCLUDE_REGEX, 5) == once


def test_resolve_cycle_is_bounded_by_depth():
    index = {"a.txt": 'a[#include "b.txt"]', "b.txt": 'b[#include "a.txt"]'}
    resolution = resolve_file("a.txt", index, DEFAULT_INCLUDE_REGEX, 3)

    assert resolution.state is ResolveState.DEPTH_EXHAUSTED
    assert resolution.passes == 3
    assert resolution.text == 'a[b[a[b[#include "a.txt"]]]]'


def test_resolve_collects_missing_once():
    index = {"a.txt": '#include "b.txt" #include "gone.txt"', "b.txt": '#include "gone.txt"'}
    resolution = resolve_file("a.txt", index, DEFAULT_INCLUDE_REGEX, 5)

    assert resolution.text == '#include "gone.txt" #include "gone.txt"'
    assert resolution.missing == ("gone.txt",)


def test_resolve_does_not_mutate_index(chain_index):
    before = dict(chain_index)
    resolve("a.txt", chain_index, DEFAULT_INCLUDE_REGEX, 5)
    assert chain_index == before


def test_resolve_unknown_path_raises():
    with pytest.raises(NotFoundError):
        resolve("missing.txt", {}, DEFAULT_INCLUDE_REGEX, 5)


def test_resolve_negative_depth_raises(chain_index):
    with pytest.raises(ValueError):
        resolve("a.txt", chain_index, DEFAULT_INCLUDE_REGEX, -1)
