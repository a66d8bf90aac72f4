# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Method-pattern matching and call search."""

from .method_matcher import MethodMatcher, method_type_of, type_signature
from .find_methods import find_methods, iter_methods, uses_method

__all__ = ["MethodMatcher", "method_type_of", "type_signature", "find_methods", "iter_methods", "uses_method"]
