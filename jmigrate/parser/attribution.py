# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type attribution for a freshly built CompilationUnit.

Pipeline placement:
  builder (untyped J tree) → attribution → rules / transforms

Resolution order for a simple type name:
  1. classes declared in this file (including nested ones)
  2. explicit single-type imports
  3. the file's own package
  4. `java.lang`
  5. wildcard imports (first match wins)

Anything that cannot be resolved keeps `type=None`; downstream predicates
treat that as "no match". Attribution never fails on unknown names.

Method lookup is by name and argument count only (no overload ranking). The
classes declared in the file are added to the classpath first, so calls to
local helpers carry their declared `throws` like any library call.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterator, List, Optional, Tuple

from jmigrate import types as T
from jmigrate.classpath import ClassInfo, Classpath, MethodInfo, OBJECT
from jmigrate.tree import nodes as N
from jmigrate.tree.space import Container, RightPadded

_STRING = "java.lang.String"
_COMPARISONS = frozenset({"==", "!=", "<", "<=", ">", ">=", "&&", "||"})


def _declared_classes(
	classes: Tuple[N.ClassDeclaration, ...], outer: str
) -> Iterator[Tuple[N.ClassDeclaration, str]]:
	for decl in classes:
		fqn = f"{outer}.{decl.name.simple_name}" if outer else decl.name.simple_name
		yield decl, fqn
		nested = tuple(rp.element for rp in decl.body.statements if isinstance(rp.element, N.ClassDeclaration))
		yield from _declared_classes(nested, fqn)


def _is_name_chain(node: N.J) -> bool:
	if isinstance(node, N.Identifier):
		return node.simple_name != "this"
	if isinstance(node, N.FieldAccess):
		return _is_name_chain(node.target)
	return False


def _literal_type(source: str) -> Optional[T.JavaType]:
	if source.startswith('"'):
		return None
	if source.startswith("'"):
		return T.PrimitiveType("char")
	if source in ("true", "false"):
		return T.PrimitiveType("boolean")
	if source == "null":
		return None
	suffix = source[-1]
	if suffix in "lL":
		return T.PrimitiveType("long")
	if suffix in "fF":
		return T.PrimitiveType("float")
	if suffix in "dD" or "." in source:
		return T.PrimitiveType("double")
	return T.PrimitiveType("int")


class Attributor:
	"""Rebuilds a CompilationUnit with types filled in. One instance per file."""

	def __init__(self, cu: N.CompilationUnit, classpath: Classpath) -> None:
		self._package = cu.package_name
		self._explicit: Dict[str, str] = {}
		self._wildcards: List[str] = []
		for rp in cu.imports:
			imp = rp.element
			if imp.static is not None:
				continue
			if imp.is_wildcard:
				self._wildcards.append(imp.package_name)
			else:
				self._explicit[imp.class_name] = imp.type_name
		declared = list(_declared_classes(cu.classes, self._package))
		self._local: Dict[str, str] = {}
		for decl, fqn in declared:
			self._local.setdefault(decl.name.simple_name, fqn)
		self._classpath = classpath
		self._classpath = classpath.extend([self._class_info(decl, fqn) for decl, fqn in declared])
		self._scopes: List[Dict[str, Optional[T.JavaType]]] = []
		self._enclosing: List[T.ClassType] = []

	@property
	def classpath(self) -> Classpath:
		return self._classpath

	# Name resolution --------------------------------------------------

	def resolve_name(self, name: str) -> Optional[str]:
		"""Fully-qualified name for a simple type name, or None."""
		if name in self._local:
			return self._local[name]
		if name in self._explicit:
			return self._explicit[name]
		if self._classpath.package_has(self._package, name):
			return f"{self._package}.{name}" if self._package else name
		if f"java.lang.{name}" in self._classpath:
			return f"java.lang.{name}"
		for pkg in self._wildcards:
			if f"{pkg}.{name}" in self._classpath:
				return f"{pkg}.{name}"
		return None

	def resolve_type_name(self, node: N.J) -> Optional[str]:
		if isinstance(node, N.Identifier):
			return self.resolve_name(node.simple_name)
		if isinstance(node, N.ParameterizedType):
			return self.resolve_type_name(node.clazz)
		if isinstance(node, N.FieldAccess):
			dotted = N.dotted_name(node)
			if dotted in self._classpath:
				return dotted
			head, _, rest = dotted.partition(".")
			outer = self.resolve_name(head)
			if outer is not None:
				return f"{outer}.{rest}"
			return dotted
		return None

	def _type_string(self, node: Optional[N.J]) -> str:
		if isinstance(node, N.Primitive):
			return node.keyword
		if isinstance(node, N.ArrayType):
			return self._type_string(node.element_type) + "[]"
		if node is None:
			return ""
		return self.resolve_type_name(node) or ""

	def _class_info(self, decl: N.ClassDeclaration, fqn: str) -> ClassInfo:
		extends = [self._type_string(rp.element) for rp in decl.extends.elements] if decl.extends else []
		implements = [self._type_string(rp.element) for rp in decl.implements.elements] if decl.implements else []
		if decl.kind == "interface":
			supertype = None
			interfaces = tuple(t for t in extends if t)
		else:
			supertype = extends[0] if extends and extends[0] else OBJECT
			interfaces = tuple(t for t in implements if t)
		methods: List[MethodInfo] = []
		constructors: List[MethodInfo] = []
		for rp in decl.body.statements:
			m = rp.element
			if not isinstance(m, N.MethodDeclaration):
				continue
			info = MethodInfo(
				name=T.CONSTRUCTOR_NAME if m.is_constructor else m.name.simple_name,
				params=tuple(self._type_string(p.type_expression) for p in m.parameters.items),
				returns=None if m.is_constructor else (self._type_string(m.return_type) or None),
				throws=tuple(t for t in (self._type_string(rp.element) for rp in m.throws.elements) if t)
				if m.throws is not None
				else (),
			)
			(constructors if m.is_constructor else methods).append(info)
		return ClassInfo(
			fqn=fqn,
			kind=decl.kind,
			supertype=supertype,
			interfaces=interfaces,
			methods=tuple(methods),
			constructors=tuple(constructors),
		)

	# Scopes -----------------------------------------------------------

	def _push(self, names: Optional[Dict[str, Optional[T.JavaType]]] = None) -> None:
		self._scopes.append(dict(names or {}))

	def _pop(self) -> None:
		self._scopes.pop()

	def _declare(self, name: str, ty: Optional[T.JavaType]) -> None:
		if self._scopes:
			self._scopes[-1][name] = ty

	def _lookup(self, name: str) -> Tuple[bool, Optional[T.JavaType]]:
		for scope in reversed(self._scopes):
			if name in scope:
				return True, scope[name]
		return False, None

	def _current_class(self) -> Optional[T.ClassType]:
		return self._enclosing[-1] if self._enclosing else None

	# Types ------------------------------------------------------------

	def type_tree(self, node: Optional[N.J]) -> Optional[N.J]:
		if node is None:
			return None
		if isinstance(node, N.Primitive):
			return replace(node, type=T.PrimitiveType(node.keyword))
		if isinstance(node, N.ArrayType):
			element = self.type_tree(node.element_type)
			return replace(node, element_type=element, type=T.ArrayType(N.type_of(element)))
		if isinstance(node, N.ParameterizedType):
			clazz = self.type_tree(node.clazz)
			params = self._container(node.type_parameters, self.type_tree)
			return replace(node, clazz=clazz, type_parameters=params, type=N.type_of(clazz))
		if isinstance(node, N.MultiCatch):
			alternatives = tuple(rp.with_element(self.type_tree(rp.element)) for rp in node.alternatives)
			return replace(node, alternatives=alternatives)
		if isinstance(node, (N.Identifier, N.FieldAccess)):
			fqn = self.resolve_type_name(node)
			return replace(node, type=self._classpath.type_of(fqn) if fqn else None)
		raise NotImplementedError(f"not a type tree: {type(node).__name__}")

	def _container(self, c: Optional[Container], fn) -> Optional[Container]:
		if c is None:
			return None
		elements = tuple(rp.with_element(fn(rp.element)) for rp in c.elements)
		return replace(c, elements=elements)

	def _modifiers(self, mods: Tuple[N.J, ...]) -> Tuple[N.J, ...]:
		out: List[N.J] = []
		for m in mods:
			if isinstance(m, N.Annotation):
				m = replace(
					m,
					annotation_type=self.type_tree(m.annotation_type),
					arguments=self._container(m.arguments, self.expr),
				)
			out.append(m)
		return tuple(out)

	# Declarations -----------------------------------------------------

	def compilation_unit(self, cu: N.CompilationUnit) -> N.CompilationUnit:
		classes = tuple(self._class(c, self._package) for c in cu.classes)
		return replace(cu, classes=classes)

	def _class(self, decl: N.ClassDeclaration, outer: str) -> N.ClassDeclaration:
		fqn = f"{outer}.{decl.name.simple_name}" if outer else decl.name.simple_name
		ty = self._classpath.type_of(fqn)
		fields: Dict[str, Optional[T.JavaType]] = {}
		for rp in decl.body.statements:
			if isinstance(rp.element, N.VariableDeclarations):
				field_type = N.type_of(self.type_tree(rp.element.type_expression))
				for var in rp.element.variables:
					fields[var.element.name.simple_name] = field_type
		self._enclosing.append(ty)
		self._push(fields)
		try:
			statements = []
			for rp in decl.body.statements:
				member = rp.element
				if isinstance(member, N.ClassDeclaration):
					statements.append(rp.with_element(self._class(member, fqn)))
				else:
					statements.append(rp.with_element(self.statement(member)))
		finally:
			self._pop()
			self._enclosing.pop()
		return replace(
			decl,
			modifiers=self._modifiers(decl.modifiers),
			name=replace(decl.name, type=ty),
			extends=self._container(decl.extends, self.type_tree),
			implements=self._container(decl.implements, self.type_tree),
			body=replace(decl.body, statements=tuple(statements)),
			type=ty,
		)

	def _method(self, m: N.MethodDeclaration) -> N.MethodDeclaration:
		owner = self._current_class()
		arity = len(m.parameters.elements)
		if m.is_constructor:
			method_type = self._classpath.find_constructor(owner, arity)
		else:
			method_type = self._classpath.find_method(owner, m.name.simple_name, arity)
		self._push()
		try:
			parameters = self._container(m.parameters, self._variables)
			body = self.statement(m.body) if m.body is not None else None
		finally:
			self._pop()
		return replace(
			m,
			modifiers=self._modifiers(m.modifiers),
			return_type=self.type_tree(m.return_type),
			parameters=parameters,
			throws=self._container(m.throws, self.type_tree),
			body=body,
			method_type=method_type,
		)

	def _variables(self, decl: N.VariableDeclarations) -> N.VariableDeclarations:
		type_expression = self.type_tree(decl.type_expression)
		ty = N.type_of(type_expression)
		variables: List[RightPadded[N.NamedVariable]] = []
		for rp in decl.variables:
			var = rp.element
			initializer = var.initializer
			if initializer is not None:
				initializer = initializer.with_element(self.expr(initializer.element))
			self._declare(var.name.simple_name, ty)
			var = replace(var, name=replace(var.name, type=ty), initializer=initializer, type=ty)
			variables.append(rp.with_element(var))
		return replace(
			decl,
			modifiers=self._modifiers(decl.modifiers),
			type_expression=type_expression,
			variables=tuple(variables),
		)

	# Statements -------------------------------------------------------

	def _padded_statement(self, rp: RightPadded) -> RightPadded:
		return rp.with_element(self.statement(rp.element))

	def _control(self, cp: N.ControlParentheses) -> N.ControlParentheses:
		return replace(cp, tree=cp.tree.with_element(self.expr(cp.tree.element)))

	def statement(self, node: N.J) -> N.J:
		if isinstance(node, N.Block):
			self._push()
			try:
				statements = tuple(self._padded_statement(rp) for rp in node.statements)
			finally:
				self._pop()
			return replace(node, statements=statements)
		if isinstance(node, N.VariableDeclarations):
			return self._variables(node)
		if isinstance(node, N.MethodDeclaration):
			return self._method(node)
		if isinstance(node, N.ClassDeclaration):
			outer = self._current_class()
			return self._class(node, outer.fqn if outer is not None else self._package)
		if isinstance(node, N.Try):
			body = self.statement(node.body)
			catches = tuple(self._catch(c) for c in node.catches)
			finally_ = node.finally_
			if finally_ is not None:
				finally_ = finally_.with_element(self.statement(finally_.element))
			return replace(node, body=body, catches=catches, finally_=finally_)
		if isinstance(node, N.Throw):
			return replace(node, exception=self.expr(node.exception))
		if isinstance(node, N.Return):
			return replace(node, expression=self.expr(node.expression))
		if isinstance(node, N.If):
			else_part = node.else_part
			condition = self._control(node.condition)
			then_part = self._padded_statement(node.then_part)
			if else_part is not None:
				else_part = replace(else_part, body=self._padded_statement(else_part.body))
			return replace(node, condition=condition, then_part=then_part, else_part=else_part)
		if isinstance(node, N.WhileLoop):
			condition = self._control(node.condition)
			return replace(node, condition=condition, body=self._padded_statement(node.body))
		if isinstance(node, N.Empty):
			return node
		if isinstance(node, N.Expression):
			return self.expr(node)
		raise NotImplementedError(f"attribution does not handle statement {type(node).__name__}")

	def _catch(self, c: N.Catch) -> N.Catch:
		self._push()
		try:
			decl = self._variables(c.parameter_declaration)
			body = self.statement(c.body)
		finally:
			self._pop()
		parameter = replace(c.parameter, tree=c.parameter.tree.with_element(decl))
		return replace(c, parameter=parameter, body=body)

	# Expressions ------------------------------------------------------

	def _class_named(self, fqn: Optional[str]) -> Optional[T.ClassType]:
		return self._classpath.type_of(fqn) if fqn else None

	def expr(self, node: Optional[N.J]) -> Optional[N.J]:
		if node is None:
			return None
		if isinstance(node, N.Literal):
			if node.value_source.startswith('"'):
				return replace(node, type=self._classpath.type_of(_STRING))
			return replace(node, type=_literal_type(node.value_source))
		if isinstance(node, N.Identifier):
			if node.simple_name == "this":
				return replace(node, type=self._current_class())
			found, ty = self._lookup(node.simple_name)
			if not found:
				ty = self._class_named(self.resolve_name(node.simple_name))
			return replace(node, type=ty)
		if isinstance(node, N.FieldAccess):
			if node.simple_name == "class":
				target = self.type_tree(node.target) if _is_name_chain(node.target) else self.expr(node.target)
				return replace(node, target=target, type=self._classpath.type_of("java.lang.Class"))
			if _is_name_chain(node.target):
				dotted = N.dotted_name(node)
				if dotted in self._classpath:
					return replace(node, type=self._classpath.type_of(dotted))
			target = self.expr(node.target)
			ty = None
			if isinstance(target, N.Identifier) and target.simple_name == "this":
				_, ty = self._lookup(node.simple_name)
			return replace(node, target=target, type=ty)
		if isinstance(node, N.MethodInvocation):
			return self._invocation(node)
		if isinstance(node, N.NewClass):
			clazz = self.type_tree(node.clazz)
			ty = N.type_of(clazz)
			arguments = self._container(node.arguments, self.expr)
			ctor = self._classpath.find_constructor(ty, len(arguments.elements))
			return replace(node, clazz=clazz, arguments=arguments, constructor_type=ctor, type=ty)
		if isinstance(node, N.Assignment):
			variable = self.expr(node.variable)
			assignment = node.assignment.with_element(self.expr(node.assignment.element))
			return replace(node, variable=variable, assignment=assignment, type=N.type_of(variable))
		if isinstance(node, N.Binary):
			left = self.expr(node.left)
			right = self.expr(node.right)
			op = node.operator.element
			if op in _COMPARISONS:
				ty: Optional[T.JavaType] = T.PrimitiveType("boolean")
			elif op == "+" and (T.is_of_class_type(N.type_of(left), _STRING) or T.is_of_class_type(N.type_of(right), _STRING)):
				ty = self._classpath.type_of(_STRING)
			else:
				ty = N.type_of(left)
			return replace(node, left=left, right=right, type=ty)
		if isinstance(node, N.Unary):
			operand = self.expr(node.expression)
			ty = T.PrimitiveType("boolean") if node.operator == "!" else N.type_of(operand)
			return replace(node, expression=operand, type=ty)
		if isinstance(node, N.Parentheses):
			inner = self.expr(node.tree.element)
			return replace(node, tree=node.tree.with_element(inner), type=N.type_of(inner))
		raise NotImplementedError(f"attribution does not handle expression {type(node).__name__}")

	def _invocation(self, node: N.MethodInvocation) -> N.MethodInvocation:
		select = node.select
		arguments = self._container(node.arguments, self.expr)
		arity = len(arguments.elements)
		name = node.name.simple_name
		method_type = None
		if select is not None:
			select = select.with_element(self.expr(select.element))
			method_type = self._classpath.find_method(N.type_of(select.element), name, arity)
		else:
			for owner in reversed(self._enclosing):
				method_type = self._classpath.find_method(owner, name, arity)
				if method_type is not None:
					break
		return replace(node, select=select, arguments=arguments, method_type=method_type)


def attribute(cu: N.CompilationUnit, classpath: Classpath) -> N.CompilationUnit:
	"""Return `cu` with types attributed against `classpath` plus the classes declared in `cu`."""
	return Attributor(cu, classpath).compilation_unit(cu)


__all__ = ["Attributor", "attribute"]
