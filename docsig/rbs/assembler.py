"""Assemble signature declarations from definitions and their documentation."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..comment import (
    Attribute,
    Constant,
    Documentation,
    DocumentationCache,
    Option,
    Parameter,
    Returns,
    Signature,
    Yields,
)
from ..logging import get_logger
from ..models import Definition, DefinitionKind
from .compiler import compile_type
from .declarations import (
    AttributeReader,
    Block,
    ClassSignature,
    ConstantSignature,
    InstanceVariable,
    Member,
    MethodSignature,
    ModuleSignature,
    Overload,
    Param,
    RawOverload,
)
from .inference import CONSTRUCTOR_NAME, infer_return_type
from .types import VOID, ClassReference, TypeExpression, TypeName, nullable, qualified_name, union

logger = get_logger("rbs.assembler")

_GENERIC_SUFFIX = re.compile(r"[\[(].*\Z")
_KEYWORD_NAME = re.compile(r"\A[a-z_]\w*\Z")


class SignatureAssembler:
    """Builds declarations for methods, classes, modules, constants and attributes."""

    def __init__(
        self,
        cache: DocumentationCache | None = None,
        *,
        constructor: str = CONSTRUCTOR_NAME,
        fluent_prefixes: Sequence[str] | None = None,
    ) -> None:
        self.cache = cache or DocumentationCache()
        self.constructor = constructor
        self.fluent_prefixes = fluent_prefixes

    def documentation(self, definition: Definition) -> Documentation:
        return self.cache.get(definition)

    def comment(self, definition: Definition) -> Optional[str]:
        """The definition's description text, or None when it has none."""
        return self.documentation(definition).description

    def assemble(self, definition: Definition):  # type: ignore[no-untyped-def]
        """Return the declaration for any definition kind, or None when it has nothing to declare."""
        if definition.kind is DefinitionKind.METHOD:
            return self.method(definition)
        if definition.kind is DefinitionKind.CLASS:
            return self.klass(definition)
        if definition.kind is DefinitionKind.MODULE:
            return self.module(definition)
        if definition.kind is DefinitionKind.CONSTANT:
            return self.constant(definition)
        return self.attribute(definition)

    # ------------------------------------------------------------------
    # Methods

    def method(self, definition: Definition) -> MethodSignature:
        overloads: List[Overload | RawOverload] = [
            RawOverload(signature=signature) for signature in self.signatures(definition)
        ]
        if not overloads:
            required, optional = self.keyword_arguments(definition)
            overloads.append(
                Overload(
                    return_type=self.return_type(definition),
                    positionals=self.parameters(definition),
                    required_keywords=tuple(required.items()),
                    optional_keywords=tuple(optional.items()),
                    block=self.block(definition),
                )
            )
        return MethodSignature(
            name=definition.name,
            kind="singleton" if definition.singleton else "instance",
            overloads=tuple(overloads),
            comment=self.comment(definition),
        )

    def signatures(self, definition: Definition) -> List[str]:
        """Literal method signatures from `@rbs` tags, in source order."""
        signatures = []
        for tag in self.documentation(definition).filter(Signature):
            if tag.method_signature is not None:
                signatures.append(tag.method_signature)
        return signatures

    def parameters(self, definition: Definition) -> Tuple[Param, ...]:
        tags = self.documentation(definition).filter(Parameter)
        return tuple(
            Param(name=tag.name, type=compile_type(tag.type))
            for tag in tags
            if not isinstance(tag, Option)
        )

    def keyword_arguments(
        self, definition: Definition
    ) -> Tuple[Dict[str, TypeExpression], Dict[str, TypeExpression]]:
        """Split `@option` tags into required and optional keywords by nullability.

        A keyword documented twice keeps the later tag's type and bucket. Names
        that are not valid keyword identifiers are dropped.
        """
        required: Dict[str, TypeExpression] = {}
        optional: Dict[str, TypeExpression] = {}
        for tag in self.documentation(definition).filter(Option):
            keyword = tag.keyword
            if not _KEYWORD_NAME.match(keyword):
                logger.debug(
                    "Skipping option %r on %s: not a keyword name", keyword, definition.qualified_name
                )
                continue
            type_ = compile_type(tag.type)
            bucket, other = (optional, required) if nullable(type_) else (required, optional)
            other.pop(keyword, None)
            bucket[keyword] = type_
        return required, optional

    def return_type(self, definition: Definition) -> TypeExpression:
        types = [compile_type(tag.type) for tag in self.documentation(definition).filter(Returns)]
        if types:
            return union(types)
        return infer_return_type(definition.name, self.constructor, self.fluent_prefixes)

    def block(self, definition: Definition) -> Optional[Block]:
        tag = self.documentation(definition).first(Yields)
        if tag is None:
            return None
        parameters = tuple(
            Param(name=child.name, type=compile_type(child.type))
            for child in tag.filter(Parameter)
            if not isinstance(child, Option)
        )
        return Block(parameters=parameters, return_type=VOID, required=tag.required)

    # ------------------------------------------------------------------
    # Constants and attributes

    def constant(self, definition: Definition) -> Optional[ConstantSignature]:
        tag = self.documentation(definition).first(Constant)
        if tag is None:
            logger.debug("Skipping constant %s without @constant tag", definition.qualified_name)
            return None
        return ConstantSignature(
            name=definition.name,
            type=compile_type(tag.type),
            comment=self.comment(definition),
        )

    def attribute(
        self, definition: Definition
    ) -> Optional[Tuple[AttributeReader, InstanceVariable]]:
        """An attribute reader and its backing instance variable, sharing one type."""
        tag = self._attribute_tag(definition)
        if tag is None:
            logger.debug("Skipping attribute %s without @attribute tag", definition.qualified_name)
            return None
        type_ = compile_type(tag.type)
        ivar_name = f"@{definition.name}"
        reader = AttributeReader(
            name=definition.name,
            ivar_name=ivar_name,
            type=type_,
            comment=self.comment(definition),
        )
        return reader, InstanceVariable(name=ivar_name, type=type_)

    def _attribute_tag(self, definition: Definition) -> Optional[Attribute]:
        # Constant, Returns and Raises share the Attribute grammar; only the exact kind counts.
        for tag in self.documentation(definition).filter(Attribute):
            if type(tag) is Attribute:
                return tag
        return None

    # ------------------------------------------------------------------
    # Classes and modules

    def generics(self, definition: Definition) -> Tuple[str, ...]:
        """Type parameter names from `@rbs generic T` tags, in source order."""
        return tuple(
            tag.generic
            for tag in self.documentation(definition).filter(Signature)
            if tag.generic is not None
        )

    def super_class(self, definition: Definition) -> Optional[ClassReference]:
        name = _GENERIC_SUFFIX.sub("", (definition.super_class or "").strip()).strip()
        if not name:
            return None
        return ClassReference(name=qualified_name(name))

    def members(
        self,
        methods: Sequence[Definition] = (),
        constants: Sequence[Definition] = (),
        attributes: Sequence[Definition] = (),
    ) -> Tuple[Member, ...]:
        members: List[Member] = [self.method(method) for method in methods]
        for definition in constants:
            constant = self.constant(definition)
            if constant is not None:
                members.append(constant)
        readers: List[Member] = []
        instance_variables: List[Member] = []
        for definition in attributes:
            pair = self.attribute(definition)
            if pair is not None:
                readers.append(pair[0])
                instance_variables.append(pair[1])
        return tuple(members + readers + instance_variables)

    def klass(
        self,
        definition: Definition,
        methods: Sequence[Definition] | None = None,
        constants: Sequence[Definition] | None = None,
        attributes: Sequence[Definition] | None = None,
        *,
        name: TypeName | None = None,
    ) -> ClassSignature:
        return ClassSignature(
            name=name or TypeName(name=definition.name),
            super_class=self.super_class(definition),
            type_params=self.generics(definition),
            members=self._members_of(definition, methods, constants, attributes),
            comment=self.comment(definition),
        )

    def module(
        self,
        definition: Definition,
        methods: Sequence[Definition] | None = None,
        constants: Sequence[Definition] | None = None,
        attributes: Sequence[Definition] | None = None,
        *,
        name: TypeName | None = None,
    ) -> ModuleSignature:
        return ModuleSignature(
            name=name or TypeName(name=definition.name),
            type_params=self.generics(definition),
            members=self._members_of(definition, methods, constants, attributes),
            comment=self.comment(definition),
        )

    def _members_of(
        self,
        definition: Definition,
        methods: Sequence[Definition] | None,
        constants: Sequence[Definition] | None,
        attributes: Sequence[Definition] | None,
    ) -> Tuple[Member, ...]:
        return self.members(
            definition.children_of(DefinitionKind.METHOD) if methods is None else methods,
            definition.children_of(DefinitionKind.CONSTANT) if constants is None else constants,
            definition.children_of(DefinitionKind.ATTRIBUTE) if attributes is None else attributes,
        )


__all__ = ["SignatureAssembler"]
