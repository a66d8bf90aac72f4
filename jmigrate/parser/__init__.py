# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Java subset parser.

Pipeline placement:
  source text → (lark Earley) parse tree → (builder) CompilationUnit
  → (attribution) typed CompilationUnit

`parse_compilation_unit` is the only entry point callers need. Syntax errors
surface as `JMigrateError(reason_code="parse-error")` carrying the lark
location; nothing else about lark leaks out of this package.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import UnexpectedInput

from jmigrate.classpath import Classpath, builtin_classpath
from jmigrate.core.span import Span
from jmigrate.errors import JMigrateError
from jmigrate.tree.nodes import CompilationUnit

from .attribution import attribute
from .builder import build_compilation_unit

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="earley",
	lexer="basic",
	start="start",
	keep_all_tokens=True,
	propagate_positions=True,
	maybe_placeholders=False,
)

_DEFAULT_CLASSPATH: Optional[Classpath] = None


def default_classpath() -> Classpath:
	"""Built-in stubs, loaded once per process."""
	global _DEFAULT_CLASSPATH
	if _DEFAULT_CLASSPATH is None:
		_DEFAULT_CLASSPATH = builtin_classpath()
	return _DEFAULT_CLASSPATH


def parse_tree(source: str, path: Optional[str] = None) -> CompilationUnit:
	"""Parse without attribution (every `type` stays `None`)."""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as exc:
		raise JMigrateError(
			reason_code="parse-error",
			message=f"unsupported or invalid Java syntax: {_describe(exc)}",
			path=path,
			span=Span.from_loc(exc, file=path),
		) from exc
	return build_compilation_unit(tree, source, path)


def parse_compilation_unit(
	source: str,
	classpath: Optional[Classpath] = None,
	path: Optional[str] = None,
) -> CompilationUnit:
	"""Parse `source` and attribute types against `classpath` (built-in stubs by default)."""
	cu = parse_tree(source, path)
	return attribute(cu, classpath if classpath is not None else default_classpath())


def _describe(exc: UnexpectedInput) -> str:
	token = getattr(exc, "token", None)
	if token is not None:
		return f"unexpected {token.value!r}"
	char = getattr(exc, "char", None)
	if char is not None:
		return f"unexpected character {char!r}"
	return "unexpected end of input"


__all__ = ["parse_compilation_unit", "parse_tree", "default_classpath"]
