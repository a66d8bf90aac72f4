# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source printer for the J tree.

The printer is the inverse of the builder: it emits each node's prefix and
then the node's own tokens. Delimiters and keywords live here; all spacing
comes from the tree. For any tree produced by the parser,
`print_tree(parse(src)) == src`.
"""

from __future__ import annotations

from typing import List, Optional

from jmigrate.tree import nodes as N
from jmigrate.tree.space import Container, RightPadded


def needs_semicolon(stmt: N.J) -> bool:
	"""True if `stmt`, used as a statement, is terminated by `;`."""
	if isinstance(stmt, N.MethodDeclaration):
		return stmt.body is None
	if isinstance(stmt, (N.Block, N.Try, N.If, N.WhileLoop, N.ClassDeclaration)):
		return False
	return True


class TreePrinter:
	"""Accumulates printed text; one instance per `print_tree` call."""

	def __init__(self) -> None:
		self._out: List[str] = []

	def text(self) -> str:
		return "".join(self._out)

	def _w(self, s: str) -> None:
		self._out.append(s)

	# Helpers -----------------------------------------------------------

	def _container(self, c: Container, open_: str, close: str, sep: str = ",") -> None:
		self._w(c.before.whitespace)
		self._w(open_)
		if not c.elements:
			self._w(c.end.whitespace)
		for i, rp in enumerate(c.elements):
			if i:
				self._w(sep)
			self.visit(rp.element)
			self._w(rp.after.whitespace)
		self._w(close)

	def _keyword_list(self, c: Container, keyword: str) -> None:
		self._w(c.before.whitespace)
		self._w(keyword)
		for i, rp in enumerate(c.elements):
			if i:
				self._w(",")
			self.visit(rp.element)
			self._w(rp.after.whitespace)

	def _modifiers(self, mods) -> None:
		for m in mods:
			self.visit(m)

	def _statement(self, rp: RightPadded) -> None:
		self.visit(rp.element)
		self._w(rp.after.whitespace)
		if needs_semicolon(rp.element):
			self._w(";")

	# Dispatch ----------------------------------------------------------

	def visit(self, node: Optional[N.J]) -> None:
		if node is None:
			return
		self._w(node.prefix.whitespace)  # type: ignore[attr-defined]
		if isinstance(node, N.CompilationUnit):
			if node.package is not None:
				self._statement(node.package)
			for rp in node.imports:
				self._statement(rp)
			for cls in node.classes:
				self.visit(cls)
			self._w(node.eof.whitespace)
		elif isinstance(node, N.Package):
			self._w("package")
			self.visit(node.name)
		elif isinstance(node, N.Import):
			self._w("import")
			if node.static is not None:
				self._w(node.static.whitespace)
				self._w("static")
			self.visit(node.qualid)
		elif isinstance(node, N.Identifier):
			self._w(node.simple_name)
		elif isinstance(node, N.FieldAccess):
			self.visit(node.target)
			self._w(node.name.before.whitespace)
			self._w(".")
			self.visit(node.name.element)
		elif isinstance(node, N.ParameterizedType):
			self.visit(node.clazz)
			self._container(node.type_parameters, "<", ">")
		elif isinstance(node, N.Primitive):
			self._w(node.keyword)
		elif isinstance(node, N.ArrayType):
			self.visit(node.element_type)
			self._w(node.dimension.before.whitespace)
			self._w("[")
			self._w(node.dimension.element.whitespace)
			self._w("]")
		elif isinstance(node, N.MultiCatch):
			for i, rp in enumerate(node.alternatives):
				if i:
					self._w("|")
				self.visit(rp.element)
				self._w(rp.after.whitespace)
		elif isinstance(node, N.Modifier):
			self._w(node.keyword)
		elif isinstance(node, N.Annotation):
			self._w("@")
			self.visit(node.annotation_type)
			if node.arguments is not None:
				self._container(node.arguments, "(", ")")
		elif isinstance(node, N.ClassDeclaration):
			self._modifiers(node.modifiers)
			self._w(node.kind_prefix.whitespace)
			self._w(node.kind)
			self.visit(node.name)
			if node.extends is not None:
				self._keyword_list(node.extends, "extends")
			if node.implements is not None:
				self._keyword_list(node.implements, "implements")
			self.visit(node.body)
		elif isinstance(node, N.Block):
			self._w("{")
			for rp in node.statements:
				self._statement(rp)
			self._w(node.end.whitespace)
			self._w("}")
		elif isinstance(node, N.MethodDeclaration):
			self._modifiers(node.modifiers)
			self.visit(node.return_type)
			self.visit(node.name)
			self._container(node.parameters, "(", ")")
			if node.throws is not None:
				self._keyword_list(node.throws, "throws")
			self.visit(node.body)
		elif isinstance(node, N.VariableDeclarations):
			self._modifiers(node.modifiers)
			self.visit(node.type_expression)
			for i, rp in enumerate(node.variables):
				if i:
					self._w(",")
				self.visit(rp.element)
				self._w(rp.after.whitespace)
		elif isinstance(node, N.NamedVariable):
			self.visit(node.name)
			if node.initializer is not None:
				self._w(node.initializer.before.whitespace)
				self._w("=")
				self.visit(node.initializer.element)
		elif isinstance(node, N.Try):
			self._w("try")
			self.visit(node.body)
			for c in node.catches:
				self.visit(c)
			if node.finally_ is not None:
				self._w(node.finally_.before.whitespace)
				self._w("finally")
				self.visit(node.finally_.element)
		elif isinstance(node, N.Catch):
			self._w("catch")
			self.visit(node.parameter)
			self.visit(node.body)
		elif isinstance(node, N.ControlParentheses):
			self._w("(")
			self.visit(node.tree.element)
			self._w(node.tree.after.whitespace)
			self._w(")")
		elif isinstance(node, N.Throw):
			self._w("throw")
			self.visit(node.exception)
		elif isinstance(node, N.Return):
			self._w("return")
			self.visit(node.expression)
		elif isinstance(node, N.If):
			self._w("if")
			self.visit(node.condition)
			self._statement(node.then_part)
			self.visit(node.else_part)
		elif isinstance(node, N.Else):
			self._w("else")
			self._statement(node.body)
		elif isinstance(node, N.WhileLoop):
			self._w("while")
			self.visit(node.condition)
			self._statement(node.body)
		elif isinstance(node, N.Empty):
			pass
		elif isinstance(node, N.MethodInvocation):
			if node.select is not None:
				self.visit(node.select.element)
				self._w(node.select.after.whitespace)
				self._w(".")
			self.visit(node.name)
			self._container(node.arguments, "(", ")")
		elif isinstance(node, N.NewClass):
			self._w("new")
			self.visit(node.clazz)
			self._container(node.arguments, "(", ")")
		elif isinstance(node, N.Literal):
			self._w(node.value_source)
		elif isinstance(node, N.Assignment):
			self.visit(node.variable)
			self._w(node.assignment.before.whitespace)
			self._w("=")
			self.visit(node.assignment.element)
		elif isinstance(node, N.Binary):
			self.visit(node.left)
			self._w(node.operator.before.whitespace)
			self._w(node.operator.element)
			self.visit(node.right)
		elif isinstance(node, N.Unary):
			self._w(node.operator)
			self.visit(node.expression)
		elif isinstance(node, N.Parentheses):
			self._w("(")
			self.visit(node.tree.element)
			self._w(node.tree.after.whitespace)
			self._w(")")
		else:
			raise NotImplementedError(f"TreePrinter does not handle {type(node).__name__}")


def print_tree(node: N.J) -> str:
	"""Render `node` (and its prefix) back to source text."""
	printer = TreePrinter()
	printer.visit(node)
	return printer.text()


__all__ = ["print_tree", "needs_semicolon", "TreePrinter"]
