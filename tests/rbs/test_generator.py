"""Tests for walking definition trees into declarations."""

from __future__ import annotations

from docsig.rbs import SignatureGenerator
from docsig.rbs.declarations import ClassSignature, ModuleSignature
from tests._fixtures.definitions import attribute, constant, klass, method, module


def _tree():  # type: ignore[no-untyped-def]
    test_class = klass(
        "TestClass",
        ["A test class demonstrating attribute type inference."],
        [
            method("initialize", ["Initialize a new test instance."]),
            attribute("name", ["The name of this instance.", "@attribute [String] The name identifier."]),
            constant("MAX_RETRIES", ["@constant [Integer] The maximum number of retries allowed."]),
        ],
        path=("TestModule",),
    )
    config_module = module(
        "ConfigModule",
        ["A test module with constants."],
        [constant("DEBUG_MODE", ["@constant [bool] Whether debug mode is enabled by default."])],
        path=("TestModule",),
    )
    return module("TestModule", children=[test_class, config_module])


def test_nested_declarations_are_qualified() -> None:
    declarations = SignatureGenerator().generate([_tree()])

    assert [str(declaration.name) for declaration in declarations] == [
        "TestModule",
        "TestModule::TestClass",
        "TestModule::ConfigModule",
    ]
    assert [type(declaration) for declaration in declarations] == [
        ModuleSignature,
        ClassSignature,
        ModuleSignature,
    ]


def test_members_belong_to_their_direct_container() -> None:
    root, test_class, config_module = SignatureGenerator().generate([_tree()])

    assert root.members == ()
    assert [member.name for member in test_class.members] == [
        "initialize",
        "MAX_RETRIES",
        "name",
        "@name",
    ]
    assert [member.name for member in config_module.members] == ["DEBUG_MODE"]


def test_top_level_members_are_skipped() -> None:
    declarations = SignatureGenerator().generate([method("helper"), klass("Widget")])

    assert [str(declaration.name) for declaration in declarations] == ["Widget"]
