# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Classify call, construction and throw sites against the legacy exception.

A site is one of:
  DESIGNATED_API  a call matching one of the configured API patterns
  THROWS_LEGACY   anything else that can raise the legacy exception type
  NEITHER         everything else, including sites with no resolved type

A designated-API call is never THROWS_LEGACY, whatever its declared
`throws` says: the migrated API no longer raises the legacy type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from jmigrate import types as T
from jmigrate.config import RuleOptions
from jmigrate.search.method_matcher import MethodMatcher, method_type_of
from jmigrate.tree import nodes as N


class CallKind(Enum):
	DESIGNATED_API = "designated-api"
	THROWS_LEGACY = "throws-legacy"
	NEITHER = "neither"


@dataclass(frozen=True)
class CallClassifier:
	legacy_type: str
	matchers: Tuple[MethodMatcher, ...]

	@classmethod
	def from_options(cls, options: RuleOptions) -> "CallClassifier":
		matchers = tuple(MethodMatcher(p, match_overrides=True) for p in options.api_patterns)
		return cls(legacy_type=options.legacy_type, matchers=matchers)

	def is_designated(self, node: N.J) -> bool:
		return any(m.matches(node) for m in self.matchers)

	def classify(self, node: N.J) -> CallKind:
		if isinstance(node, N.Throw):
			if T.is_assignable_to(self.legacy_type, N.type_of(node.exception)):
				return CallKind.THROWS_LEGACY
			return CallKind.NEITHER
		method = method_type_of(node)
		if method is None:
			return CallKind.NEITHER
		if self.is_designated(node):
			return CallKind.DESIGNATED_API
		if any(T.is_assignable_to(self.legacy_type, thrown) for thrown in method.thrown_exceptions):
			return CallKind.THROWS_LEGACY
		return CallKind.NEITHER


__all__ = ["CallKind", "CallClassifier"]
