# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Recipe framework.

A recipe is a named, configured rewrite of one CompilationUnit. Running it
yields a `RecipeResult`: the tree before and after, the import changes the
recipe asked for, and any notes it recorded about clauses it left alone.

Recipes register themselves by name with `@register_recipe`; the CLI looks
them up with `get_recipe`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from jmigrate.classpath import Classpath
from jmigrate.config import RuleOptions
from jmigrate.core.diagnostics import Diagnostic
from jmigrate.errors import JMigrateError
from jmigrate.transforms.imports import EMPTY_DELTA, ImportDelta
from jmigrate.tree.nodes import CompilationUnit
from jmigrate.tree.printer import print_tree


@dataclass(frozen=True)
class RecipeResult:
	before: CompilationUnit
	after: CompilationUnit
	delta: ImportDelta = EMPTY_DELTA
	diagnostics: Tuple[Diagnostic, ...] = ()

	@property
	def changed(self) -> bool:
		return self.after is not self.before

	def source(self) -> str:
		return print_tree(self.after)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"path": self.after.source_path,
			"changed": self.changed,
			"imports": self.delta.to_dict(),
			"diagnostics": [d.to_dict() for d in self.diagnostics],
		}


class Recipe:
	"""Base class; subclasses set the metadata attributes and implement `run`."""

	name: str = ""
	display_name: str = ""
	description: str = ""
	tags: Tuple[str, ...] = ()

	def run(self, cu: CompilationUnit) -> RecipeResult:
		raise NotImplementedError

	def describe(self) -> Dict[str, Any]:
		return {
			"name": self.name,
			"display_name": self.display_name,
			"description": self.description,
			"tags": list(self.tags),
		}


RecipeFactory = Callable[[RuleOptions, Optional[Classpath]], Recipe]

RECIPES: Dict[str, RecipeFactory] = {}


def register_recipe(name: str) -> Callable[[RecipeFactory], RecipeFactory]:
	def deco(factory: RecipeFactory) -> RecipeFactory:
		if name in RECIPES:
			raise ValueError(f"recipe already registered: {name}")
		RECIPES[name] = factory
		return factory

	return deco


def _load_builtin_recipes() -> None:
	import jmigrate.rules  # noqa: F401


def recipe_names() -> Tuple[str, ...]:
	_load_builtin_recipes()
	return tuple(sorted(RECIPES))


def get_recipe(
	name: str,
	options: Optional[RuleOptions] = None,
	classpath: Optional[Classpath] = None,
) -> Recipe:
	"""Instantiate the recipe registered as `name`; unknown names raise `JMigrateError(unknown-recipe)`."""
	_load_builtin_recipes()
	factory = RECIPES.get(name)
	if factory is None:
		known = ", ".join(sorted(RECIPES)) or "(none)"
		raise JMigrateError(reason_code="unknown-recipe", message=f"no recipe named {name!r} (known: {known})")
	return factory(options if options is not None else RuleOptions(), classpath)


__all__ = ["Recipe", "RecipeResult", "RECIPES", "register_recipe", "recipe_names", "get_recipe"]
