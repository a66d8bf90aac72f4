# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Predicates over one catch clause's parameter type."""

from __future__ import annotations

from typing import Iterator, Optional

from jmigrate import types as T
from jmigrate.tree import nodes as N


def caught_types(clause: N.Catch) -> Iterator[Optional[T.JavaType]]:
	"""Types named by the clause parameter: one, or one per multi-catch alternative."""
	type_expression = clause.parameter_declaration.type_expression
	if isinstance(type_expression, N.MultiCatch):
		for rp in type_expression.alternatives:
			yield N.type_of(rp.element)
	else:
		yield N.type_of(type_expression)


def catches(clause: N.Catch, fqn: str) -> bool:
	"""Exact nominal match on the parameter type or any alternative."""
	return any(T.is_of_class_type(ty, fqn) for ty in caught_types(clause))


def catches_assignable(clause: N.Catch, target: T.ClassType) -> bool:
	"""
	True if some caught type already overlaps `target`: it is `target`, a
	supertype of it (`Exception` covers everything) or a subtype of it.
	Unresolved types never match.
	"""
	for ty in caught_types(clause):
		if not isinstance(ty, T.ClassType):
			continue
		if T.is_assignable_type(target, ty) or T.is_assignable_type(ty, target):
			return True
	return False


__all__ = ["caught_types", "catches", "catches_assignable"]
