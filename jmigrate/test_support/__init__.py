# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for jmigrate tests.

Fixtures are inline Java sources; these helpers parse them against the
built-in stubs and run the Jackson recipe.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar

from jmigrate.classpath import Classpath
from jmigrate.config import RuleOptions
from jmigrate.parser import parse_compilation_unit
from jmigrate.recipe import RecipeResult, get_recipe
from jmigrate.rules.jackson import RECIPE_NAME
from jmigrate.tree.nodes import CompilationUnit, J
from jmigrate.tree.printer import print_tree
from jmigrate.tree.traversal import find_all

N = TypeVar("N", bound=J)


def parse(source: str, classpath: Optional[Classpath] = None) -> CompilationUnit:
	return parse_compilation_unit(source, classpath=classpath, path="Test.java")


def first(node: J, kind: Type[N]) -> N:
	"""First node of `kind` under `node` in pre-order (fails the test if there is none)."""
	found = find_all(node, kind)
	assert found, f"no {kind.__name__} in tree"
	return found[0]


def run_jackson(source: str, options: Optional[RuleOptions] = None) -> RecipeResult:
	return get_recipe(RECIPE_NAME, options).run(parse(source))


def rewrite(source: str, options: Optional[RuleOptions] = None) -> str:
	"""Source text after one run of the Jackson recipe."""
	return print_tree(run_jackson(source, options).after)


__all__ = ["parse", "first", "run_jackson", "rewrite"]
