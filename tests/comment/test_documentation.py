"""Tests for documentation queries and caching."""

from __future__ import annotations

from docsig.comment import Documentation, DocumentationCache, Option, Parameter, Returns
from tests._fixtures.definitions import method


def test_filter_preserves_source_order() -> None:
    documentation = Documentation.parse(
        [
            "@parameter first [String] First.",
            "@option :mode [Symbol] Mode.",
            "@returns [String]",
            "@parameter second [Integer] Second.",
        ]
    )

    assert [tag.name for tag in documentation.filter(Parameter)] == ["first", "mode", "second"]
    assert [tag.name for tag in documentation.filter(Option)] == ["mode"]
    assert documentation.first(Returns) is not None


def test_description_joins_text_lines() -> None:
    documentation = Documentation.parse(["First line", "@returns [String]", "Second line"])

    assert documentation.description == "First line\nSecond line"


def test_description_is_none_without_text() -> None:
    assert Documentation.parse([]).description is None
    assert Documentation.parse(["@returns [String]"]).description is None


def test_cache_parses_each_definition_once() -> None:
    cache = DocumentationCache()
    definition = method("run", ["Runs the task."])

    first = cache.get(definition)
    second = cache.get(definition)

    assert first is second
    assert len(cache) == 1


def test_cache_keys_by_identity() -> None:
    cache = DocumentationCache()

    cache.get(method("run", ["Runs the task."]))
    cache.get(method("run", ["Runs the task."]))

    assert len(cache) == 2
    cache.clear()
    assert len(cache) == 0
