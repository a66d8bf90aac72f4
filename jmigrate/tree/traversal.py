# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generic traversal over the J tree.

Children are discovered from dataclass fields: any field holding a node, a
padding wrapper, a container or a tuple of those is descended into. That lets
passes stay small: they match only on the node kinds they care about and let
this module rebuild everything else.

Rewrites are copy-on-write. `map_children` returns the very same node object
when no child changed, so callers can use identity (`is`) to detect no-ops.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Callable, Iterator, TypeVar

from jmigrate.tree.nodes import J
from jmigrate.tree.space import Container, LeftPadded, RightPadded


N = TypeVar("N", bound=J)


def _child_values(value: Any) -> Iterator[J]:
	if isinstance(value, J):
		yield value
	elif isinstance(value, (RightPadded, LeftPadded)):
		yield from _child_values(value.element)
	elif isinstance(value, Container):
		for rp in value.elements:
			yield from _child_values(rp.element)
	elif isinstance(value, tuple):
		for item in value:
			yield from _child_values(item)


def iter_children(node: J) -> Iterator[J]:
	"""Yield the direct child nodes of `node` in source order."""
	for f in fields(node):  # type: ignore[arg-type]
		yield from _child_values(getattr(node, f.name))


def walk(node: J) -> Iterator[J]:
	"""Lazily yield `node` and all of its descendants, depth-first, pre-order."""
	yield node
	for child in iter_children(node):
		yield from walk(child)


def _map_value(value: Any, fn: Callable[[J], J]) -> Any:
	if isinstance(value, J):
		return fn(value)
	if isinstance(value, (RightPadded, LeftPadded)):
		return value.with_element(_map_value(value.element, fn))
	if isinstance(value, Container):
		elements = _map_value(value.elements, fn)
		if elements is value.elements:
			return value
		return replace(value, elements=elements)
	if isinstance(value, tuple):
		items = tuple(_map_value(item, fn) for item in value)
		if all(a is b for a, b in zip(items, value)):
			return value
		return items
	return value


def map_children(node: N, fn: Callable[[J], J]) -> N:
	"""Return `node` with `fn` applied to each direct child (same object if nothing changed)."""
	changes: dict[str, Any] = {}
	for f in fields(node):  # type: ignore[arg-type]
		old = getattr(node, f.name)
		new = _map_value(old, fn)
		if new is not old:
			changes[f.name] = new
	if not changes:
		return node
	return replace(node, **changes)


def transform(node: N, fn: Callable[[J], J]) -> N:
	"""
	Bottom-up rewrite: children first, then `fn` on the rebuilt parent.

	`fn` must return a node (return its argument to keep it).
	"""
	rebuilt = map_children(node, lambda child: transform(child, fn))
	return fn(rebuilt)  # type: ignore[return-value]


def find_all(node: J, kind: type) -> list:
	"""All descendants (including `node`) that are instances of `kind`, in pre-order."""
	return [n for n in walk(node) if isinstance(n, kind)]


__all__ = ["iter_children", "walk", "map_children", "transform", "find_all"]
