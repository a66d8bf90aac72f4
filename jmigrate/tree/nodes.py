# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lossless, type-attributed tree for the supported Java subset.

Pipeline placement:
  source text → lark parse tree → (builder) J tree → (attribution) typed J tree
  → rules/transforms → (printer) source text

Guiding rules:
- Nodes are frozen; rewrites build new nodes with `dataclasses.replace` and
  share every untouched subtree.
- Every node carries its leading whitespace in `prefix`, so printing the tree
  reproduces the input byte-for-byte.
- `type` fields are filled by attribution and stay `None` when unresolved.
- There are no parent pointers. Passes that need context carry it explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from jmigrate.tree.space import Container, LeftPadded, RightPadded, Space
from jmigrate.types import ClassType, JavaType, MethodType


# Base node kinds

class J:
	"""Base class for all tree nodes."""
	pass


class Expression(J):
	pass


class Statement(J):
	pass


class TypeTree(J):
	"""Anything that can appear where a type is expected."""
	pass


# Names and types

@dataclass(frozen=True)
class Identifier(Expression, TypeTree):
	prefix: Space
	simple_name: str
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class FieldAccess(Expression, TypeTree):
	"""
	`target.name`. Also used for qualified type names (`java.io.IOException`),
	in which case `type` is the class and the package segments stay untyped.
	"""
	prefix: Space
	target: Expression
	name: LeftPadded[Identifier]
	type: Optional[JavaType] = None

	@property
	def simple_name(self) -> str:
		return self.name.element.simple_name


@dataclass(frozen=True)
class ParameterizedType(TypeTree):
	prefix: Space
	clazz: TypeTree
	type_parameters: Container[TypeTree]
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class Primitive(TypeTree):
	prefix: Space
	keyword: str
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class ArrayType(TypeTree):
	"""`element_type[]`; `dimension.before` precedes `[`, `dimension.element` precedes `]`."""
	prefix: Space
	element_type: TypeTree
	dimension: LeftPadded[Space]
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class MultiCatch(TypeTree):
	"""
	`A | B | C` in a catch parameter.

	Each alternative's `after` is the space before the following `|`; the last
	alternative's `after` is normally empty.
	"""
	prefix: Space
	alternatives: Tuple[RightPadded[TypeTree], ...]
	type: Optional[JavaType] = None


NameTree = Union[Identifier, FieldAccess, ParameterizedType]


# Compilation unit structure

@dataclass(frozen=True)
class Package(J):
	prefix: Space
	name: Expression


@dataclass(frozen=True)
class Import(J):
	"""`import [static] a.b.C;`. `static` holds the space before the keyword."""
	prefix: Space
	qualid: FieldAccess
	static: Optional[Space] = None

	@property
	def type_name(self) -> str:
		return dotted_name(self.qualid)

	@property
	def package_name(self) -> str:
		return dotted_name(self.qualid.target)

	@property
	def class_name(self) -> str:
		return self.qualid.simple_name

	@property
	def is_wildcard(self) -> bool:
		return self.qualid.simple_name == "*"


@dataclass(frozen=True)
class Modifier(J):
	prefix: Space
	keyword: str


@dataclass(frozen=True)
class Annotation(J):
	prefix: Space
	annotation_type: TypeTree
	arguments: Optional[Container[Expression]] = None


@dataclass(frozen=True)
class Block(Statement):
	prefix: Space
	statements: Tuple[RightPadded[Statement], ...]
	end: Space = Space("")


@dataclass(frozen=True)
class ClassDeclaration(Statement):
	"""
	Class or interface. `extends` and `implements` are keyword-led lists;
	`before` of each container is the space in front of the keyword.
	"""
	prefix: Space
	modifiers: Tuple[J, ...]
	kind_prefix: Space
	kind: str
	name: Identifier
	extends: Optional[Container[TypeTree]]
	implements: Optional[Container[TypeTree]]
	body: Block
	type: Optional[ClassType] = None


@dataclass(frozen=True)
class MethodDeclaration(Statement):
	"""Method or constructor (`return_type is None`). `throws.before` precedes the keyword."""
	prefix: Space
	modifiers: Tuple[J, ...]
	return_type: Optional[TypeTree]
	name: Identifier
	parameters: Container["VariableDeclarations"]
	throws: Optional[Container[TypeTree]]
	body: Optional[Block]
	method_type: Optional[MethodType] = None

	@property
	def is_constructor(self) -> bool:
		return self.return_type is None


@dataclass(frozen=True)
class NamedVariable(J):
	prefix: Space
	name: Identifier
	initializer: Optional[LeftPadded[Expression]] = None
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class VariableDeclarations(Statement):
	"""Local, field or parameter declaration (`[mods] Type a [= x], b`)."""
	prefix: Space
	modifiers: Tuple[J, ...]
	type_expression: Optional[TypeTree]
	variables: Tuple[RightPadded[NamedVariable], ...]

	@property
	def type(self) -> Optional[JavaType]:
		te = self.type_expression
		return getattr(te, "type", None) if te is not None else None


@dataclass(frozen=True)
class CompilationUnit(J):
	prefix: Space
	package: Optional[RightPadded[Package]]
	imports: Tuple[RightPadded[Import], ...]
	classes: Tuple[ClassDeclaration, ...]
	eof: Space = Space("")
	source_path: Optional[str] = None

	@property
	def package_name(self) -> str:
		if self.package is None:
			return ""
		return dotted_name(self.package.element.name)


# Statements

@dataclass(frozen=True)
class ControlParentheses(J):
	prefix: Space
	tree: RightPadded[J]


@dataclass(frozen=True)
class Catch(J):
	prefix: Space
	parameter: ControlParentheses
	body: Block

	@property
	def parameter_declaration(self) -> VariableDeclarations:
		return self.parameter.tree.element  # type: ignore[return-value]


@dataclass(frozen=True)
class Try(Statement):
	prefix: Space
	body: Block
	catches: Tuple[Catch, ...]
	finally_: Optional[LeftPadded[Block]] = None


@dataclass(frozen=True)
class Throw(Statement):
	prefix: Space
	exception: Expression


@dataclass(frozen=True)
class Return(Statement):
	prefix: Space
	expression: Optional[Expression] = None


@dataclass(frozen=True)
class Else(J):
	prefix: Space
	body: RightPadded[Statement]


@dataclass(frozen=True)
class If(Statement):
	prefix: Space
	condition: ControlParentheses
	then_part: RightPadded[Statement]
	else_part: Optional[Else] = None


@dataclass(frozen=True)
class WhileLoop(Statement):
	prefix: Space
	condition: ControlParentheses
	body: RightPadded[Statement]


@dataclass(frozen=True)
class Empty(Statement, Expression):
	prefix: Space


# Expressions

@dataclass(frozen=True)
class MethodInvocation(Expression, Statement):
	prefix: Space
	select: Optional[RightPadded[Expression]]
	name: Identifier
	arguments: Container[Expression]
	method_type: Optional[MethodType] = None

	@property
	def type(self) -> Optional[JavaType]:
		return self.method_type.return_type if self.method_type is not None else None


@dataclass(frozen=True)
class NewClass(Expression, Statement):
	"""`new Clazz(args)`; `clazz.prefix` is the space after `new`."""
	prefix: Space
	clazz: TypeTree
	arguments: Container[Expression]
	constructor_type: Optional[MethodType] = None
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class Literal(Expression):
	prefix: Space
	value_source: str
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class Assignment(Expression, Statement):
	prefix: Space
	variable: Expression
	assignment: LeftPadded[Expression]
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class Binary(Expression):
	prefix: Space
	left: Expression
	operator: LeftPadded[str]
	right: Expression
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class Unary(Expression):
	prefix: Space
	operator: str
	expression: Expression
	type: Optional[JavaType] = None


@dataclass(frozen=True)
class Parentheses(Expression):
	prefix: Space
	tree: RightPadded[Expression]
	type: Optional[JavaType] = None


def dotted_name(node: J) -> str:
	"""Flatten an Identifier/FieldAccess chain (`a.b.C`) into text, ignoring spacing."""
	if isinstance(node, Identifier):
		return node.simple_name
	if isinstance(node, FieldAccess):
		return f"{dotted_name(node.target)}.{node.simple_name}"
	if isinstance(node, ParameterizedType):
		return dotted_name(node.clazz)
	raise TypeError(f"not a name: {type(node).__name__}")


def type_of(node: Optional[J]) -> Optional[JavaType]:
	"""Attributed type of any node (`None` if it has none)."""
	if node is None:
		return None
	return getattr(node, "type", None)


__all__ = [
	"J", "Expression", "Statement", "TypeTree", "NameTree",
	"Identifier", "FieldAccess", "ParameterizedType", "Primitive", "ArrayType", "MultiCatch",
	"Package", "Import", "Modifier", "Annotation", "Block", "ClassDeclaration",
	"MethodDeclaration", "NamedVariable", "VariableDeclarations", "CompilationUnit",
	"ControlParentheses", "Catch", "Try", "Throw", "Return", "Else", "If", "WhileLoop", "Empty",
	"MethodInvocation", "NewClass", "Literal", "Assignment", "Binary", "Unary", "Parentheses",
	"dotted_name", "type_of",
]
