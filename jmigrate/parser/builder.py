# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lark parse tree → J tree.

The grammar keeps every token (`keep_all_tokens=True`), so the builder can
walk the parse tree in source order and recover the text between tokens. A
single cursor moves forward through the source; each node or separator
claims the gap between the cursor and its first token as its prefix.

Rules of thumb used throughout:
- A node's `prefix` is claimed before any of its children are built, so the
  first child of a node always ends up with an empty prefix.
- Separators (`,` `|` `;` `)` `.`) are recorded on the padding wrapper of
  the element that precedes them (`RightPadded.after`) or follows them
  (`LeftPadded.before`).
- Nodes are built untyped; `jmigrate.parser.attribution` fills types in.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

from lark import Token, Tree

from jmigrate.tree import nodes as N
from jmigrate.tree.space import Container, LeftPadded, RightPadded, Space


def _name(tree: Tree) -> str:
	data = tree.data
	return data.value if isinstance(data, Token) else str(data)


def _first_token(node: Tree | Token) -> Optional[Token]:
	if isinstance(node, Token):
		return node
	for child in node.children:
		tok = _first_token(child)
		if tok is not None:
			return tok
	return None


def _trees(tree: Tree, kind: Optional[str] = None) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree) and (kind is None or _name(c) == kind)]


def _tokens(tree: Tree) -> List[Token]:
	return [c for c in tree.children if isinstance(c, Token)]


def _is_punct(child: object, text: str) -> bool:
	return isinstance(child, Token) and child.value == text


class TreeBuilder:
	"""One instance per source file; not reusable."""

	def __init__(self, source: str, path: Optional[str] = None) -> None:
		self._source = source
		self._path = path
		self._cursor = 0

	# Whitespace recovery ----------------------------------------------

	def _space_to(self, pos: int) -> Space:
		if pos <= self._cursor:
			return Space.EMPTY  # type: ignore[attr-defined]
		text = self._source[self._cursor:pos]
		self._cursor = pos
		return Space(text)

	def _tok(self, tok: Token) -> Space:
		"""Claim the space before `tok` and step over it."""
		space = self._space_to(tok.start_pos)
		self._cursor = tok.end_pos
		return space

	def _prefix(self, node: Tree | Token) -> Space:
		tok = _first_token(node)
		if tok is None:
			return Space.EMPTY  # type: ignore[attr-defined]
		return self._space_to(tok.start_pos)

	def _padded_list(self, children, build) -> Tuple[RightPadded, ...]:
		"""Elements separated by `,` tokens; each comma's leading space goes to the element before it."""
		out: List[RightPadded] = []
		for child in children:
			if _is_punct(child, ","):
				out[-1] = out[-1].with_after(self._tok(child))
			else:
				out.append(RightPadded(build(child)))
		return tuple(out)

	def _delimited(self, tree: Tree, build) -> Container:
		"""`(` a, b `)` or `<` a, b `>`: first and last children are the delimiters."""
		children = tree.children
		before = self._tok(children[0])
		elements = self._padded_list(children[1:-1], build)
		close = self._tok(children[-1])
		if elements:
			last = elements[-1]
			elements = elements[:-1] + (last.with_after(close),)
			return Container(before, elements)
		return Container(before, (), close)

	def _keyword_list(self, tree: Tree, build) -> Container:
		"""`extends A, B` / `throws X, Y`: keyword followed by a comma list."""
		before = self._tok(tree.children[0])
		return Container(before, self._padded_list(tree.children[1:], build))

	# Compilation unit -------------------------------------------------

	def build(self, tree: Tree) -> N.CompilationUnit:
		if _name(tree) == "start":
			tree = tree.children[0]
		prefix = self._prefix(tree)
		package: Optional[RightPadded[N.Package]] = None
		imports: List[RightPadded[N.Import]] = []
		classes: List[N.ClassDeclaration] = []
		for child in _trees(tree):
			kind = _name(child)
			if kind == "package_decl":
				package = self._package(child)
			elif kind == "import_decl":
				imports.append(self._import(child))
			elif kind == "type_decl":
				classes.append(self._type_decl(child))
			else:
				raise NotImplementedError(f"unexpected compilation unit member: {kind}")
		eof = self._space_to(len(self._source))
		return N.CompilationUnit(
			prefix=prefix,
			package=package,
			imports=tuple(imports),
			classes=tuple(classes),
			eof=eof,
			source_path=self._path,
		)

	def _package(self, tree: Tree) -> RightPadded[N.Package]:
		keyword, qn, semi = tree.children
		prefix = self._tok(keyword)
		pkg = N.Package(prefix=prefix, name=self._qualified_name(qn))
		return RightPadded(pkg, self._tok(semi))

	def _import(self, tree: Tree) -> RightPadded[N.Import]:
		children = list(tree.children)
		prefix = self._tok(children.pop(0))
		static: Optional[Space] = None
		if isinstance(children[0], Token) and children[0].value == "static":
			static = self._tok(children.pop(0))
		qualid = self._qualified_name(children.pop(0))
		if isinstance(children[0], Tree) and _name(children[0]) == "import_wildcard":
			dot, star = children.pop(0).children
			dot_space = self._tok(dot)
			qualid = N.FieldAccess(
				prefix=qualid.prefix,
				target=replace(qualid, prefix=Space.EMPTY),  # type: ignore[attr-defined]
				name=LeftPadded(dot_space, N.Identifier(self._tok(star), "*")),
			)
		semi = self._tok(children.pop(0))
		if not isinstance(qualid, N.FieldAccess):
			raise NotImplementedError("single-segment imports are not supported")
		return RightPadded(N.Import(prefix=prefix, qualid=qualid, static=static), semi)

	def _qualified_name(self, tree: Tree) -> N.Expression:
		"""`a.b.C` as a left-nested FieldAccess chain; the outermost node owns the prefix."""
		children = tree.children
		prefix = self._tok(children[0])
		node: N.Expression = N.Identifier(Space.EMPTY, children[0].value)  # type: ignore[attr-defined]
		i = 1
		while i < len(children):
			dot, name = children[i], children[i + 1]
			dot_space = self._tok(dot)
			ident = N.Identifier(self._tok(name), name.value)
			node = N.FieldAccess(prefix=Space.EMPTY, target=node, name=LeftPadded(dot_space, ident))  # type: ignore[attr-defined]
			i += 2
		return replace(node, prefix=prefix)

	# Declarations -----------------------------------------------------

	def _modifiers(self, children) -> Tuple[N.J, ...]:
		out: List[N.J] = []
		for child in children:
			inner = child.children[0]
			if isinstance(inner, Token):
				out.append(N.Modifier(self._tok(inner), inner.value))
			else:
				out.append(self._annotation(inner))
		return tuple(out)

	def _annotation(self, tree: Tree) -> N.Annotation:
		at = tree.children[0]
		prefix = self._tok(at)
		annotation_type = self._qualified_name(tree.children[1])
		arguments = None
		args = _trees(tree, "annotation_args")
		if args:
			arguments = self._delimited(args[0], self._expression)
		return N.Annotation(prefix=prefix, annotation_type=annotation_type, arguments=arguments)

	def _type_decl(self, tree: Tree) -> N.ClassDeclaration:
		prefix = self._prefix(tree)
		modifiers = self._modifiers(_trees(tree, "modifier"))
		kind_tok = _trees(tree, "class_kind")[0].children[0]
		kind_prefix = self._tok(kind_tok)
		name_tok = next(t for t in _tokens(tree) if t.type == "NAME")
		name = N.Identifier(self._tok(name_tok), name_tok.value)
		extends = None
		implements = None
		for clause in _trees(tree, "extends_clause"):
			extends = self._keyword_list(clause, self._class_type)
		for clause in _trees(tree, "implements_clause"):
			implements = self._keyword_list(clause, self._class_type)
		body = self._class_body(_trees(tree, "class_body")[0])
		return N.ClassDeclaration(
			prefix=prefix,
			modifiers=modifiers,
			kind_prefix=kind_prefix,
			kind=kind_tok.value,
			name=name,
			extends=extends,
			implements=implements,
			body=body,
		)

	def _class_body(self, tree: Tree) -> N.Block:
		children = tree.children
		open_ = self._tok(children[0])
		members = tuple(self._member(c) for c in children[1:-1])
		end = self._tok(children[-1])
		return N.Block(prefix=open_, statements=members, end=end)

	def _member(self, tree: Tree) -> RightPadded[N.Statement]:
		kind = _name(tree)
		if kind == "field_decl":
			return self._variable_statement(tree)
		if kind in ("method_decl", "constructor_decl"):
			return self._method(tree, constructor=kind == "constructor_decl")
		if kind == "type_decl":
			return RightPadded(self._type_decl(tree))
		raise NotImplementedError(f"unexpected class member: {kind}")

	def _method(self, tree: Tree, *, constructor: bool) -> RightPadded[N.Statement]:
		prefix = self._prefix(tree)
		modifiers = self._modifiers(_trees(tree, "modifier"))
		return_type: Optional[N.TypeTree] = None
		if not constructor:
			result = _trees(tree, "result_type")[0].children[0]
			if isinstance(result, Token):
				return_type = N.Primitive(self._tok(result), result.value)
			else:
				return_type = self._type_ref(result)
		name_tok = next(t for t in _tokens(tree) if t.type == "NAME")
		name = N.Identifier(self._tok(name_tok), name_tok.value)
		parameters = self._delimited(_trees(tree, "formal_params")[0], self._formal_param)
		throws = None
		for clause in _trees(tree, "throws_clause"):
			throws = self._keyword_list(clause, self._class_type)
		body: Optional[N.Block] = None
		after = Space.EMPTY  # type: ignore[attr-defined]
		if constructor:
			body = self._block(_trees(tree, "block")[0])
		else:
			inner = _trees(tree, "method_body")[0].children[0]
			if isinstance(inner, Token):
				after = self._tok(inner)
			else:
				body = self._block(inner)
		method = N.MethodDeclaration(
			prefix=prefix,
			modifiers=modifiers,
			return_type=return_type,
			name=name,
			parameters=parameters,
			throws=throws,
			body=body,
		)
		return RightPadded(method, after)

	def _formal_param(self, tree: Tree) -> N.VariableDeclarations:
		prefix = self._prefix(tree)
		modifiers = self._modifiers(_trees(tree, "modifier"))
		type_expression = self._type_ref(_trees(tree, "type_ref")[0])
		name_tok = tree.children[-1]
		var = N.NamedVariable(self._tok(name_tok), N.Identifier(Space.EMPTY, name_tok.value))  # type: ignore[attr-defined]
		return N.VariableDeclarations(
			prefix=prefix,
			modifiers=modifiers,
			type_expression=type_expression,
			variables=(RightPadded(var),),
		)

	def _variable_statement(self, tree: Tree) -> RightPadded[N.Statement]:
		"""Fields and locals: `[mods] Type a [= x], b;`."""
		prefix = self._prefix(tree)
		modifiers = self._modifiers(_trees(tree, "modifier"))
		type_expression = self._type_ref(_trees(tree, "type_ref")[0])
		declarators = [c for c in tree.children if _is_punct(c, ",") or (isinstance(c, Tree) and _name(c) == "var_declarator")]
		variables = self._padded_list(declarators, self._var_declarator)
		semi = self._tok(tree.children[-1])
		decl = N.VariableDeclarations(
			prefix=prefix,
			modifiers=modifiers,
			type_expression=type_expression,
			variables=variables,
		)
		return RightPadded(decl, semi)

	def _var_declarator(self, tree: Tree) -> N.NamedVariable:
		name_tok = tree.children[0]
		prefix = self._tok(name_tok)
		initializer = None
		if len(tree.children) > 1:
			eq = self._tok(tree.children[1])
			initializer = LeftPadded(eq, self._expression(tree.children[2]))
		return N.NamedVariable(
			prefix=prefix,
			name=N.Identifier(Space.EMPTY, name_tok.value),  # type: ignore[attr-defined]
			initializer=initializer,
		)

	# Types ------------------------------------------------------------

	def _type_ref(self, tree: Tree) -> N.TypeTree:
		prefix = self._prefix(tree)
		base = tree.children[0]
		if _name(base) == "primitive_type":
			tok = base.children[0]
			result: N.TypeTree = N.Primitive(self._tok(tok), tok.value)
		else:
			result = self._class_type(base)
		for dims in _trees(tree, "dims"):
			for dim in dims.children:
				open_, close = dim.children
				before = self._tok(open_)
				inner = self._tok(close)
				result = N.ArrayType(Space.EMPTY, result, LeftPadded(before, inner))  # type: ignore[attr-defined]
		return replace(result, prefix=prefix)

	def _class_type(self, tree: Tree) -> N.TypeTree:
		name = self._qualified_name(tree.children[0])
		args = _trees(tree, "type_args")
		if not args:
			return name  # type: ignore[return-value]
		type_parameters = self._delimited(args[0], self._type_ref)
		return N.ParameterizedType(
			prefix=name.prefix,  # type: ignore[attr-defined]
			clazz=replace(name, prefix=Space.EMPTY),  # type: ignore[attr-defined]
			type_parameters=type_parameters,
		)

	# Statements -------------------------------------------------------

	def _block(self, tree: Tree) -> N.Block:
		children = tree.children
		open_ = self._tok(children[0])
		statements = tuple(self._statement(c) for c in children[1:-1])
		end = self._tok(children[-1])
		return N.Block(prefix=open_, statements=statements, end=end)

	def _statement(self, tree: Tree) -> RightPadded[N.Statement]:
		kind = _name(tree)
		if kind == "block":
			return RightPadded(self._block(tree))
		if kind == "local_var_stmt":
			return self._variable_statement(tree)
		if kind == "expr_stmt":
			expr = self._expression(tree.children[0])
			return RightPadded(expr, self._tok(tree.children[1]))
		if kind == "empty_stmt":
			return RightPadded(N.Empty(self._tok(tree.children[0])))
		if kind == "try_stmt":
			return RightPadded(self._try(tree))
		if kind == "throw_stmt":
			keyword, expr, semi = tree.children
			prefix = self._tok(keyword)
			throw = N.Throw(prefix, self._expression(expr))
			return RightPadded(throw, self._tok(semi))
		if kind == "return_stmt":
			prefix = self._tok(tree.children[0])
			expression = None
			if len(tree.children) == 3:
				expression = self._expression(tree.children[1])
			return RightPadded(N.Return(prefix, expression), self._tok(tree.children[-1]))
		if kind == "if_stmt":
			return RightPadded(self._if(tree))
		if kind == "while_stmt":
			keyword, open_, cond, close, body = tree.children
			prefix = self._tok(keyword)
			condition = self._control_parens(open_, cond, close)
			return RightPadded(N.WhileLoop(prefix, condition, self._statement(body)))
		raise NotImplementedError(f"unexpected statement: {kind}")

	def _control_parens(self, open_: Token, inner: Tree, close: Token) -> N.ControlParentheses:
		prefix = self._tok(open_)
		expr = self._expression(inner)
		return N.ControlParentheses(prefix, RightPadded(expr, self._tok(close)))

	def _if(self, tree: Tree) -> N.If:
		keyword, open_, cond, close, then = tree.children[:5]
		prefix = self._tok(keyword)
		condition = self._control_parens(open_, cond, close)
		then_part = self._statement(then)
		else_part = None
		if len(tree.children) > 5:
			clause = tree.children[5]
			else_prefix = self._tok(clause.children[0])
			else_part = N.Else(else_prefix, self._statement(clause.children[1]))
		return N.If(prefix=prefix, condition=condition, then_part=then_part, else_part=else_part)

	def _try(self, tree: Tree) -> N.Try:
		prefix = self._tok(tree.children[0])
		body = self._block(tree.children[1])
		catches = tuple(self._catch(c) for c in _trees(tree, "catch_clause"))
		finally_ = None
		for clause in _trees(tree, "finally_clause"):
			before = self._tok(clause.children[0])
			finally_ = LeftPadded(before, self._block(clause.children[1]))
		return N.Try(prefix=prefix, body=body, catches=catches, finally_=finally_)

	def _catch(self, tree: Tree) -> N.Catch:
		children = tree.children
		prefix = self._tok(children[0])
		paren_prefix = self._tok(children[1])
		decl_prefix = self._prefix(children[2])
		modifiers = self._modifiers(_trees(tree, "modifier"))
		type_expression = self._catch_type(_trees(tree, "catch_type")[0])
		name_tok = children[-3]
		var = N.NamedVariable(self._tok(name_tok), N.Identifier(Space.EMPTY, name_tok.value))  # type: ignore[attr-defined]
		decl = N.VariableDeclarations(
			prefix=decl_prefix,
			modifiers=modifiers,
			type_expression=type_expression,
			variables=(RightPadded(var),),
		)
		close = self._tok(children[-2])
		parameter = N.ControlParentheses(paren_prefix, RightPadded(decl, close))
		return N.Catch(prefix=prefix, parameter=parameter, body=self._block(children[-1]))

	def _catch_type(self, tree: Tree) -> N.TypeTree:
		alternatives = [c for c in tree.children if isinstance(c, Tree)]
		if len(alternatives) == 1:
			return self._class_type(alternatives[0])
		prefix = self._prefix(tree)
		out: List[RightPadded[N.TypeTree]] = []
		for child in tree.children:
			if _is_punct(child, "|"):
				out[-1] = out[-1].with_after(self._tok(child))
			else:
				out.append(RightPadded(self._class_type(child)))
		return N.MultiCatch(prefix=prefix, alternatives=tuple(out))

	# Expressions ------------------------------------------------------

	def _arguments(self, tree: Tree) -> Container[N.Expression]:
		return self._delimited(tree, self._expression)

	def _expression(self, tree: Tree) -> N.Expression:
		kind = _name(tree)
		if kind == "literal":
			tok = tree.children[0]
			return N.Literal(self._tok(tok), tok.value)
		if kind == "name":
			tok = tree.children[0]
			return N.Identifier(self._tok(tok), tok.value)
		if kind == "this":
			return N.Identifier(self._tok(tree.children[0]), "this")
		if kind == "parens":
			open_, inner, close = tree.children
			prefix = self._tok(open_)
			expr = self._expression(inner)
			return N.Parentheses(prefix, RightPadded(expr, self._tok(close)))
		if kind == "new_class":
			keyword, clazz, args = tree.children
			prefix = self._tok(keyword)
			return N.NewClass(prefix=prefix, clazz=self._class_type(clazz), arguments=self._arguments(args))
		if kind == "bare_call":
			name_tok, args = tree.children
			prefix = self._tok(name_tok)
			return N.MethodInvocation(
				prefix=prefix,
				select=None,
				name=N.Identifier(Space.EMPTY, name_tok.value),  # type: ignore[attr-defined]
				arguments=self._arguments(args),
			)
		if kind == "method_call":
			target, dot, name_tok, args = tree.children
			prefix = self._prefix(tree)
			select = self._expression(target)
			dot_space = self._tok(dot)
			name = N.Identifier(self._tok(name_tok), name_tok.value)
			return N.MethodInvocation(
				prefix=prefix,
				select=RightPadded(select, dot_space),
				name=name,
				arguments=self._arguments(args),
			)
		if kind in ("field_access", "class_literal"):
			target, dot, name_tok = tree.children
			prefix = self._prefix(tree)
			expr = self._expression(target)
			dot_space = self._tok(dot)
			name = N.Identifier(self._tok(name_tok), name_tok.value)
			return N.FieldAccess(prefix=prefix, target=expr, name=LeftPadded(dot_space, name))
		if kind == "assign":
			variable, eq, value = tree.children
			prefix = self._prefix(tree)
			target = self._expression(variable)
			eq_space = self._tok(eq)
			return N.Assignment(prefix=prefix, variable=target, assignment=LeftPadded(eq_space, self._expression(value)))
		if kind == "binary":
			left, op, right = tree.children
			prefix = self._prefix(tree)
			lhs = self._expression(left)
			op_space = self._tok(op)
			return N.Binary(prefix=prefix, left=lhs, operator=LeftPadded(op_space, op.value), right=self._expression(right))
		if kind == "unary":
			op, operand = tree.children
			prefix = self._tok(op)
			return N.Unary(prefix=prefix, operator=op.value, expression=self._expression(operand))
		raise NotImplementedError(f"unexpected expression: {kind}")


def build_compilation_unit(tree: Tree, source: str, path: Optional[str] = None) -> N.CompilationUnit:
	"""Convert a lark parse tree of `source` into an (unattributed) CompilationUnit."""
	return TreeBuilder(source, path).build(tree)


__all__ = ["TreeBuilder", "build_compilation_unit"]
