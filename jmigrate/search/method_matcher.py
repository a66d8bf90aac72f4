# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AspectJ-style method patterns.

A pattern has the shape `<declaring type> <method name>(<arguments>)`:

    com.fasterxml.jackson.databind.ObjectMapper *(..)
    java.nio.file.Files readString(java.nio.file.Path)
    java.io.FileInputStream <constructor>(java.lang.String)
    com.acme..* fetch*(.., int)

Type patterns use `*` for any run of characters inside one name segment and
`..` for any number of package segments. Argument lists are comma separated;
`..` matches any (possibly empty) run of arguments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence, Tuple, Union

from jmigrate import types as T
from jmigrate.tree import nodes as N

_PATTERN_RE = re.compile(r"^\s*(?P<type>[^\s(]+)\s+(?P<name>[^\s(]+)\s*\((?P<args>[^()]*)\)\s*$")
_ANY_ARGS = ".."


def _type_regex(text: str) -> Pattern[str]:
	out: List[str] = []
	i = 0
	while i < len(text):
		if text.startswith("..", i):
			out.append(r"\.(?:[^.]+\.)*")
			i += 2
		elif text[i] == "*":
			out.append(r"[^.]*")
			i += 1
		else:
			out.append(re.escape(text[i]))
			i += 1
	return re.compile("".join(out) + r"\Z")


def _name_regex(text: str) -> Pattern[str]:
	return re.compile("".join(".*" if ch == "*" else re.escape(ch) for ch in text) + r"\Z")


def type_signature(ty: Optional[T.JavaType]) -> str:
	"""Pattern-comparable text for a type (`java.lang.String`, `int`, `byte[]`)."""
	if isinstance(ty, T.ClassType):
		return ty.fqn
	if isinstance(ty, T.PrimitiveType):
		return ty.keyword
	if isinstance(ty, T.ArrayType):
		return type_signature(ty.element_type) + "[]"
	return ""


@dataclass(frozen=True)
class MethodMatcher:
	"""
	Compiled method pattern.

	With `match_overrides=True` the declaring-type part also accepts any
	subtype of a matching type, so calls through a subclass (or an override
	declared in one) still match.
	"""

	pattern: str
	match_overrides: bool = False
	_type: Pattern[str] = field(init=False, repr=False, compare=False)
	_name: Pattern[str] = field(init=False, repr=False, compare=False)
	_args: Tuple[Union[str, Pattern[str]], ...] = field(init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		m = _PATTERN_RE.match(self.pattern)
		if m is None:
			raise ValueError(f"invalid method pattern: {self.pattern!r}")
		args_text = m.group("args").strip()
		args: List[Union[str, Pattern[str]]] = []
		if args_text:
			for raw in args_text.split(","):
				arg = raw.strip()
				if not arg:
					raise ValueError(f"invalid method pattern (empty argument): {self.pattern!r}")
				args.append(_ANY_ARGS if arg == _ANY_ARGS else _type_regex(arg))
		object.__setattr__(self, "_type", _type_regex(m.group("type")))
		object.__setattr__(self, "_name", _name_regex(m.group("name")))
		object.__setattr__(self, "_args", tuple(args))

	def matches_type(self, ty: Optional[T.JavaType]) -> bool:
		if not isinstance(ty, T.ClassType):
			return False
		if not self.match_overrides:
			return self._type.match(ty.fqn) is not None
		return any(self._type.match(t.fqn) is not None for t in ty.ancestors())

	def _args_match(self, patterns: Sequence[Union[str, Pattern[str]]], params: Sequence[str]) -> bool:
		if not patterns:
			return not params
		head, rest = patterns[0], patterns[1:]
		if head == _ANY_ARGS:
			return any(self._args_match(rest, params[i:]) for i in range(len(params) + 1))
		if not params:
			return False
		return head.match(params[0]) is not None and self._args_match(rest, params[1:])  # type: ignore[union-attr]

	def matches(self, target: Union[T.MethodType, N.J, None]) -> bool:
		"""True if `target` (a MethodType, call or construction) matches this pattern."""
		method = method_type_of(target)
		if method is None:
			return False
		if self._name.match(method.name) is None:
			return False
		if not self.matches_type(method.declaring_type):
			return False
		return self._args_match(self._args, [type_signature(p) for p in method.parameter_types])


def method_type_of(target: Union[T.MethodType, N.J, None]) -> Optional[T.MethodType]:
	if isinstance(target, T.MethodType):
		return target
	if isinstance(target, N.MethodInvocation):
		return target.method_type
	if isinstance(target, N.NewClass):
		return target.constructor_type
	return None


__all__ = ["MethodMatcher", "method_type_of", "type_signature"]
