# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Rename every reference to one class type.

`change_type(tree, old_fqn, new_type)` rewrites, anywhere under `tree`:
- type references written by simple name (`IOException`) to the new simple
  name;
- fully-qualified references (`java.io.IOException`) to the new
  fully-qualified name;
- the attributed `type` of any other node typed `old_fqn` (variables, the
  caught-exception identifier in a catch body, ...).

The leading whitespace of each rewritten reference is kept. Imports are not
touched here; callers pass the matching `ImportDelta` to
`jmigrate.transforms.imports.apply_import_delta`.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Union

from jmigrate import types as T
from jmigrate.tree import nodes as N
from jmigrate.tree.space import LeftPadded, Space
from jmigrate.tree.traversal import transform


def qualified_name_tree(fqn: str, prefix: Space = Space("")) -> N.Expression:
	"""Unspaced `a.b.C` name chain for `fqn`."""
	parts = fqn.split(".")
	node: N.Expression = N.Identifier(Space(""), parts[0])
	for part in parts[1:]:
		node = N.FieldAccess(Space(""), node, LeftPadded(Space(""), N.Identifier(Space(""), part)))
	return replace(node, prefix=prefix)


def _has_type_field(node: N.J) -> bool:
	return any(f.name == "type" for f in fields(node))  # type: ignore[arg-type]


def _is_qualified_reference(node: N.J, fqn: str) -> bool:
	if not isinstance(node, N.FieldAccess):
		return False
	try:
		return N.dotted_name(node) == fqn
	except TypeError:
		return False


def change_type(tree: N.J, old_fqn: str, new_type: Union[str, T.ClassType], qualify: bool = False) -> N.J:
	"""
	Return `tree` with `old_fqn` replaced by `new_type` (the same object if
	nothing referenced it). With `qualify`, simple-name references are written
	fully qualified too, for files where the new simple name means another class.
	"""
	target = T.ClassType(new_type) if isinstance(new_type, str) else new_type
	old_simple = old_fqn.rsplit(".", 1)[-1]

	def rewrite(node: N.J) -> N.J:
		if not _has_type_field(node) or not T.is_of_class_type(getattr(node, "type"), old_fqn):
			return node
		if isinstance(node, N.Identifier) and node.simple_name == old_simple:
			if qualify:
				return replace(qualified_name_tree(target.fqn, node.prefix), type=target)
			return N.Identifier(node.prefix, target.simple_name, target)
		if _is_qualified_reference(node, old_fqn):
			return replace(qualified_name_tree(target.fqn, node.prefix), type=target)
		return replace(node, type=target)

	return transform(tree, rewrite)


__all__ = ["change_type", "qualified_name_tree"]
