# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type attribution model for the Java subset.

Types are immutable values attached to tree nodes by the attributor
(`jmigrate.parser.attribution`). A node whose type could not be resolved
carries `None`; every predicate in this module treats `None` as "no match".

ClassType compares by fully-qualified name only. The supertype links are
carried along for assignability checks but do not take part in equality, so
a shallow ClassType built from an import and a full one built from the
classpath are the same type nominally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple


class JavaType:
	"""Base class for all attributed types."""
	pass


@dataclass(frozen=True)
class ClassType(JavaType):
	"""A class or interface, identified by its fully-qualified name."""

	fqn: str
	supertype: Optional["ClassType"] = field(default=None, compare=False, repr=False)
	interfaces: Tuple["ClassType", ...] = field(default=(), compare=False, repr=False)
	kind: str = field(default="class", compare=False, repr=False)

	@property
	def simple_name(self) -> str:
		return self.fqn.rsplit(".", 1)[-1]

	@property
	def package_name(self) -> str:
		return self.fqn.rsplit(".", 1)[0] if "." in self.fqn else ""

	def ancestors(self) -> Iterator["ClassType"]:
		"""Yield this type and every reachable supertype/interface (depth-first, no repeats)."""
		seen: set[str] = set()
		stack: list[ClassType] = [self]
		while stack:
			cur = stack.pop()
			if cur.fqn in seen:
				continue
			seen.add(cur.fqn)
			yield cur
			stack.extend(reversed(cur.interfaces))
			if cur.supertype is not None:
				stack.append(cur.supertype)


@dataclass(frozen=True)
class PrimitiveType(JavaType):
	"""Primitive keyword type (`int`, `boolean`, ...) including `void`."""

	keyword: str


@dataclass(frozen=True)
class ArrayType(JavaType):
	element_type: Optional[JavaType]


@dataclass(frozen=True)
class MethodType(JavaType):
	"""
	Resolved method or constructor signature.

	`thrown_exceptions` is the declared `throws` list. Constructors use the
	name `<constructor>` and return their declaring type.
	"""

	declaring_type: ClassType
	name: str
	return_type: Optional[JavaType]
	parameter_types: Tuple[Optional[JavaType], ...] = ()
	thrown_exceptions: Tuple[ClassType, ...] = ()

	@property
	def is_constructor(self) -> bool:
		return self.name == CONSTRUCTOR_NAME


CONSTRUCTOR_NAME = "<constructor>"


def fully_qualified_name(ty: Optional[JavaType]) -> Optional[str]:
	if isinstance(ty, ClassType):
		return ty.fqn
	return None


def is_of_class_type(ty: Optional[JavaType], fqn: str) -> bool:
	"""Nominal equality: `ty` is exactly the class named `fqn`."""
	return isinstance(ty, ClassType) and ty.fqn == fqn


def is_assignable_to(fqn: str, ty: Optional[JavaType]) -> bool:
	"""True if a value of type `ty` can be assigned to `fqn` (reflexive)."""
	if not isinstance(ty, ClassType):
		return False
	return any(t.fqn == fqn for t in ty.ancestors())


def is_assignable_type(sub: Optional[JavaType], sup: Optional[JavaType]) -> bool:
	"""Type-to-type variant of `is_assignable_to`."""
	if not isinstance(sup, ClassType):
		return False
	return is_assignable_to(sup.fqn, sub)


__all__ = [
	"JavaType",
	"ClassType",
	"PrimitiveType",
	"ArrayType",
	"MethodType",
	"CONSTRUCTOR_NAME",
	"fully_qualified_name",
	"is_of_class_type",
	"is_assignable_to",
	"is_assignable_type",
]
