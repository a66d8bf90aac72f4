# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-`try` rewrite of legacy-exception catch clauses.

Pipeline placement:
  driver (bottom-up over the CompilationUnit) → CatchRewriter.rewrite_try
  → driver splices the returned Try and merges the ImportDelta

Two mutually exclusive paths, chosen by whether the `try` body has a legacy
exception source other than the designated API:

- substitution (no other source): every `catch (Legacy e)` becomes
  `catch (Replacement e)`; in a multi-catch each legacy alternative is
  renamed, or dropped when the replacement is already listed. The delta adds
  the replacement import and offers the legacy import for removal.

- augmentation (another source exists): the legacy type must stay caught,
  so the replacement is added in front of it:
      catch (Legacy e)          → catch (Replacement | Legacy e)
      catch (Other | Legacy e)  → catch (Other | Replacement | Legacy e)
  The whole `try` is skipped when some clause already catches a type
  related to the replacement. The delta only adds the replacement import.

Nothing here raises. Every case it does not handle leaves the node as it is
and, where that hides something surprising, records a note Diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from jmigrate import types as T
from jmigrate.core.diagnostics import Diagnostic
from jmigrate.search.find_methods import uses_method
from jmigrate.transforms.change_type import change_type
from jmigrate.transforms.imports import EMPTY_DELTA, ImportDelta
from jmigrate.tree import nodes as N
from jmigrate.tree.space import RightPadded, Space

from .call_classifier import CallClassifier
from .catch_classifier import catches, catches_assignable
from .scanner import has_non_designated_legacy_source

EMPTY = Space("")
SINGLE_SPACE = Space(" ")


@dataclass(frozen=True)
class TryRewrite:
	node: N.Try
	delta: ImportDelta = EMPTY_DELTA
	diagnostics: Tuple[Diagnostic, ...] = ()


class CatchRewriter:
	def __init__(self, classifier: CallClassifier, replacement: T.ClassType, phase: str = "") -> None:
		self._classifier = classifier
		self._legacy = classifier.legacy_type
		self._replacement = replacement
		self._phase = phase or None

	def _note(self, code: str, message: str) -> Diagnostic:
		return Diagnostic(message=message, code=code, phase=self._phase, severity="note")

	def uses_designated_api(self, body: N.J) -> bool:
		return any(uses_method(body, matcher) for matcher in self._classifier.matchers)

	def rewrite_try(self, node: N.Try, qualify: bool = False) -> TryRewrite:
		"""`qualify` writes the replacement fully qualified (its simple name means another class in this file)."""
		if not node.catches or not self.uses_designated_api(node.body):
			return TryRewrite(node)
		if has_non_designated_legacy_source(node.body, self._classifier):
			return self._augment(node, qualify)
		return self._substitute(node, qualify)

	# Substitution -----------------------------------------------------

	def _substitute(self, node: N.Try, qualify: bool) -> TryRewrite:
		clauses: List[N.Catch] = []
		for clause in node.catches:
			if catches(clause, self._legacy):
				clause = self._substitute_clause(clause, qualify)
			clauses.append(clause)
		if all(a is b for a, b in zip(clauses, node.catches)):
			return TryRewrite(node)
		delta = ImportDelta.of(added=[self._replacement.fqn], removed=[self._legacy])
		return TryRewrite(replace(node, catches=tuple(clauses)), delta)

	def _substitute_clause(self, clause: N.Catch, qualify: bool) -> N.Catch:
		decl = clause.parameter_declaration
		type_expression = decl.type_expression
		if isinstance(type_expression, N.MultiCatch) and any(
			T.is_of_class_type(N.type_of(rp.element), self._replacement.fqn) for rp in type_expression.alternatives
		):
			new_decl = self._drop_legacy(decl, type_expression)
		else:
			new_decl = change_type(decl, self._legacy, self._replacement, qualify)
		return _with_declaration(clause, new_decl)

	def _drop_legacy(self, decl: N.VariableDeclarations, multi: N.MultiCatch) -> N.VariableDeclarations:
		alternatives = list(multi.alternatives)
		i = 0
		while i < len(alternatives):
			if not T.is_of_class_type(N.type_of(alternatives[i].element), self._legacy):
				i += 1
				continue
			removed = alternatives.pop(i)
			if i == 0 and alternatives:
				head = alternatives[0]
				alternatives[0] = head.with_element(replace(head.element, prefix=removed.element.prefix))
			elif i == len(alternatives) and alternatives:
				alternatives[-1] = alternatives[-1].with_after(removed.after)
		if len(alternatives) == 1:
			single = replace(alternatives[0].element, prefix=multi.prefix)
			variables = tuple(rp.with_element(replace(rp.element, type=N.type_of(single))) for rp in decl.variables)
			return replace(decl, type_expression=single, variables=variables)
		return replace(decl, type_expression=replace(multi, alternatives=tuple(alternatives)))

	# Augmentation -----------------------------------------------------

	def _augment(self, node: N.Try, qualify: bool) -> TryRewrite:
		if not any(catches(c, self._legacy) for c in node.catches):
			return TryRewrite(node)
		if any(catches_assignable(c, self._replacement) for c in node.catches):
			note = self._note(
				"already-catches-replacement",
				f"try already catches a type related to {self._replacement.fqn}; left unchanged",
			)
			return TryRewrite(node, diagnostics=(note,))
		clauses: List[N.Catch] = []
		notes: List[Diagnostic] = []
		for clause in node.catches:
			if catches(clause, self._legacy):
				augmented = self._augment_clause(clause, qualify)
				if augmented is None:
					notes.append(
						self._note(
							"replacement-not-found",
							f"could not build a {self._replacement.fqn} alternative for a {self._legacy} catch; left unchanged",
						)
					)
				else:
					clause = augmented
			clauses.append(clause)
		if all(a is b for a, b in zip(clauses, node.catches)):
			return TryRewrite(node, diagnostics=tuple(notes))
		delta = ImportDelta.of(added=[self._replacement.fqn])
		return TryRewrite(replace(node, catches=tuple(clauses)), delta, tuple(notes))

	def _replacement_tree(self, legacy_tree: N.J, qualify: bool) -> Optional[N.J]:
		substituted = change_type(legacy_tree, self._legacy, self._replacement, qualify)
		if not T.is_of_class_type(N.type_of(substituted), self._replacement.fqn):
			return None
		return substituted

	def _augment_clause(self, clause: N.Catch, qualify: bool) -> Optional[N.Catch]:
		decl = clause.parameter_declaration
		type_expression = decl.type_expression
		if isinstance(type_expression, N.MultiCatch):
			alternatives = type_expression.alternatives
			index = next(
				i for i, rp in enumerate(alternatives) if T.is_of_class_type(N.type_of(rp.element), self._legacy)
			)
			legacy = alternatives[index]
			substituted = self._replacement_tree(legacy.element, qualify)
			if substituted is None:
				return None
			if index == 0:
				inserted = RightPadded(replace(substituted, prefix=legacy.element.prefix), SINGLE_SPACE)
				legacy = legacy.with_element(replace(legacy.element, prefix=SINGLE_SPACE))
			else:
				inserted = RightPadded(replace(substituted, prefix=SINGLE_SPACE), SINGLE_SPACE)
			new_alternatives = alternatives[:index] + (inserted, legacy) + alternatives[index + 1:]
			new_type: N.TypeTree = replace(type_expression, alternatives=new_alternatives)
		else:
			substituted = self._replacement_tree(type_expression, qualify)
			if substituted is None:
				return None
			new_type = N.MultiCatch(
				prefix=type_expression.prefix,  # type: ignore[union-attr]
				alternatives=(
					RightPadded(replace(substituted, prefix=EMPTY), SINGLE_SPACE),
					RightPadded(replace(type_expression, prefix=SINGLE_SPACE)),
				),
			)
		return _with_declaration(clause, replace(decl, type_expression=new_type))


def _with_declaration(clause: N.Catch, decl: N.VariableDeclarations) -> N.Catch:
	if decl is clause.parameter_declaration:
		return clause
	parameter = clause.parameter
	return replace(clause, parameter=replace(parameter, tree=parameter.tree.with_element(decl)))


__all__ = ["TryRewrite", "CatchRewriter"]
