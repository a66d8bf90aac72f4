# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Replace `IOException` with `JacksonException` in catch clauses.

Jackson 3 moved `ObjectMapper`, `ObjectReader` and `ObjectWriter` off checked
exceptions: they throw the unchecked `tools.jackson.core.JacksonException`
instead of `java.io.IOException`. Catch clauses that only existed for the
Jackson calls are retargeted; catch clauses that still guard other I/O get
the new type added in front of the old one.

The legacy type, the replacement type and the API patterns all come from
`RuleOptions`, so the same driver serves other "checked → unchecked"
library migrations.
"""

from __future__ import annotations

from typing import List, Optional

from jmigrate.classpath import Classpath
from jmigrate.config import RuleOptions
from jmigrate.core.diagnostics import Diagnostic
from jmigrate.parser import default_classpath
from jmigrate.recipe import Recipe, RecipeResult, register_recipe
from jmigrate.search.find_methods import uses_method
from jmigrate.transforms.imports import EMPTY_DELTA, apply_import_delta, simple_name_taken
from jmigrate.tree import nodes as N
from jmigrate.tree.traversal import transform

from .call_classifier import CallClassifier
from .catch_rewriter import CatchRewriter

RECIPE_NAME = "jackson-io-exception-to-jackson-exception"


class IOExceptionToJacksonException(Recipe):
	name = RECIPE_NAME
	display_name = "Replace `IOException` with `JacksonException` in catch clauses"
	description = (
		"In Jackson 3, `ObjectMapper` and related classes no longer throw `IOException`. "
		"This recipe replaces `catch (IOException e)` with `catch (JacksonException e)` when the "
		"try block only contains Jackson calls, or adds `JacksonException` to a multi-catch when "
		"the try block also calls other methods that throw `IOException`."
	)
	tags = ("jackson-3",)

	def __init__(self, options: Optional[RuleOptions] = None, classpath: Optional[Classpath] = None) -> None:
		if classpath is None:
			classpath = default_classpath()
		self.classpath = classpath
		self.options = options if options is not None else RuleOptions()
		self.classifier = CallClassifier.from_options(self.options)
		self.rewriter = CatchRewriter(
			self.classifier,
			classpath.type_of(self.options.replacement_type),
			phase=self.name,
		)

	def applies_to(self, cu: N.CompilationUnit) -> bool:
		"""Whole-file gate: does anything in `cu` call the designated API?"""
		return any(uses_method(cu, matcher) for matcher in self.classifier.matchers)

	def run(self, cu: N.CompilationUnit) -> RecipeResult:
		if not self.applies_to(cu):
			return RecipeResult(before=cu, after=cu)
		delta = EMPTY_DELTA
		diagnostics: List[Diagnostic] = []
		qualify = simple_name_taken(cu, self.options.replacement_type, self.classpath)

		def visit(node: N.J) -> N.J:
			nonlocal delta
			if not isinstance(node, N.Try):
				return node
			rewrite = self.rewriter.rewrite_try(node, qualify)
			delta = delta.merge(rewrite.delta)
			diagnostics.extend(rewrite.diagnostics)
			return rewrite.node

		after = transform(cu, visit)
		if after is not cu:
			after = apply_import_delta(after, delta)
		return RecipeResult(before=cu, after=after, delta=delta, diagnostics=tuple(diagnostics))


@register_recipe(RECIPE_NAME)
def _factory(options: RuleOptions, classpath: Optional[Classpath]) -> Recipe:
	return IOExceptionToJacksonException(options, classpath)


__all__ = ["IOExceptionToJacksonException", "RECIPE_NAME"]
