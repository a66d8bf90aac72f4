# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Searches over a J tree for calls matching a method pattern."""

from __future__ import annotations

from typing import Iterator, List, Union

from jmigrate.tree import nodes as N
from jmigrate.tree.traversal import walk

from .method_matcher import MethodMatcher

PatternLike = Union[str, MethodMatcher]


def _matcher(pattern: PatternLike, match_overrides: bool) -> MethodMatcher:
	if isinstance(pattern, MethodMatcher):
		return pattern
	return MethodMatcher(pattern, match_overrides=match_overrides)


def iter_methods(tree: N.J, pattern: PatternLike, match_overrides: bool = False) -> Iterator[N.J]:
	"""Lazily yield invocations and constructions under `tree` that match `pattern`, in source order."""
	matcher = _matcher(pattern, match_overrides)
	for node in walk(tree):
		if isinstance(node, (N.MethodInvocation, N.NewClass)) and matcher.matches(node):
			yield node


def find_methods(tree: N.J, pattern: PatternLike, match_overrides: bool = False) -> List[N.J]:
	return list(iter_methods(tree, pattern, match_overrides))


def uses_method(tree: N.J, pattern: PatternLike, match_overrides: bool = False) -> bool:
	"""True as soon as one matching call is found."""
	return any(True for _ in iter_methods(tree, pattern, match_overrides))


__all__ = ["find_methods", "iter_methods", "uses_method"]
