"""Tests for the indentation-sensitive tag parser."""

from __future__ import annotations

import pytest

from docsig.comment import (
    DirectiveRegistry,
    Example,
    Parameter,
    Pragma,
    Returns,
    TagParser,
    Text,
    Yields,
    default_registry,
)


def test_example_with_title_strips_base_indentation(parser: TagParser) -> None:
    result = parser.parse(["@example Create a new thing", "  x = Thing.new", "  x.do_something"])

    assert len(result.tags) == 1
    example = result.tags[0]
    assert isinstance(example, Example)
    assert example.directive == "example"
    assert example.title == "Create a new thing"
    assert example.code == "x = Thing.new\nx.do_something"
    assert result.text == ()


def test_example_without_title_uses_tab_indentation(parser: TagParser) -> None:
    result = parser.parse(["@example", "\ty = Thing.new", "\ty.process"])

    example = result.tags[0]
    assert isinstance(example, Example)
    assert example.text is None
    assert example.title is None
    assert example.code == "y = Thing.new\ny.process"


def test_example_preserves_relative_indentation(parser: TagParser) -> None:
    result = parser.parse(["@example", "  if ready?", "    run", "  end"])

    assert result.tags[0].code == "if ready?\n  run\nend"


def test_example_body_is_not_parsed_for_directives(parser: TagParser) -> None:
    result = parser.parse(["@example", "  @name = 'thing'", "  @name.upcase"])

    example = result.tags[0]
    assert example.children == ()
    assert example.code == "@name = 'thing'\n@name.upcase"


def test_nested_parameters_belong_to_yields(parser: TagParser) -> None:
    result = parser.parse(
        [
            "@yields {|item, index| ...} Each item.",
            "  @parameter item [String] The item.",
            "  @parameter index [Integer] The position.",
            "@returns [Integer]",
        ]
    )

    yields, returns = result.tags
    assert isinstance(yields, Yields)
    assert [child.name for child in yields.filter(Parameter)] == ["item", "index"]
    assert isinstance(returns, Returns)
    assert returns.children == ()


def test_parsing_returns_to_caller_when_indentation_decreases(parser: TagParser) -> None:
    result = parser.parse(
        [
            "@parameter value [String] The value.",
            "  Continues the description.",
            "@returns [Integer] The length.",
        ]
    )

    parameter, returns = result.tags
    assert parameter.lines == ("  Continues the description.",)
    assert returns.type == "Integer"
    assert returns.details == "The length."


def test_description_lines_accumulate_in_order(parser: TagParser) -> None:
    result = parser.parse(["First line.", "@returns [String]", "Second line."])

    assert result.text == ("First line.", "Second line.")
    assert len(result.tags) == 1


def test_blank_line_ends_nested_block(parser: TagParser) -> None:
    result = parser.parse(["@example", "  first", "", "  second"])

    assert result.tags[0].code == "first"
    assert result.text == ("", "  second")


def test_unknown_directive_becomes_text_tag(parser: TagParser) -> None:
    result = parser.parse(["@note Be careful with this."])

    tag = result.tags[0]
    assert type(tag) is Text
    assert tag.directive == "note"
    assert tag.text == "Be careful with this."


def test_directive_without_text_has_none(parser: TagParser) -> None:
    result = parser.parse(["@deprecated", "@public   "])

    deprecated, public = result.tags
    assert deprecated.text is None
    assert isinstance(public, Pragma)
    assert public.text is None


def test_malformed_payload_degrades_to_text(parser: TagParser) -> None:
    result = parser.parse(["@parameter name without a type"])

    tag = result.tags[0]
    assert type(tag) is Text
    assert tag.directive == "parameter"
    assert tag.text == "name without a type"


def test_parse_at_explicit_level(parser: TagParser) -> None:
    nested = parser.parse(["  @parameter x [Integer] The x."], level=1)
    shallow = parser.parse(["@parameter x [Integer] The x."], level=1)

    assert [tag.name for tag in nested.tags] == ["x"]
    assert shallow.tags == ()
    assert shallow.text == ()


def test_registry_registers_custom_directive() -> None:
    registry = DirectiveRegistry()
    registry.register("yields?", Yields)

    result = TagParser(registry).parse(["@yields? {|item| ...} Each item."])

    tag = result.tags[0]
    assert isinstance(tag, Yields)
    assert tag.required is False


def test_registry_rejects_non_tag_classes() -> None:
    registry = DirectiveRegistry()

    with pytest.raises(TypeError):
        registry.register("broken", dict)  # type: ignore[arg-type]


def test_default_registry_adds_configured_directives() -> None:
    registry = default_registry(
        text_directives=["see"], pragma_directives=["internal"], load_plugins=False
    )

    assert "see" in registry
    assert registry.lookup("internal") is Pragma
    assert registry.lookup("parameter") is Parameter
    assert registry.lookup("anything-else") is Text
