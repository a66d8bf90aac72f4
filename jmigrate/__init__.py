# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
jmigrate: lossless source-to-source migrations for a Java subset.

Typical use:

	from jmigrate import parse_compilation_unit, get_recipe, print_tree

	cu = parse_compilation_unit(source)
	result = get_recipe("jackson-io-exception-to-jackson-exception").run(cu)
	print_tree(result.after)
"""

from jmigrate.errors import JMigrateError
from jmigrate.parser import parse_compilation_unit
from jmigrate.recipe import RecipeResult, get_recipe, recipe_names
from jmigrate.tree.printer import print_tree

__all__ = ["JMigrateError", "parse_compilation_unit", "RecipeResult", "get_recipe", "recipe_names", "print_tree"]
