# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Find sites in a `try` body that can raise the legacy exception on their own."""

from __future__ import annotations

from typing import Iterator

from jmigrate.tree import nodes as N
from jmigrate.tree.traversal import walk

from .call_classifier import CallClassifier, CallKind

_SITE_KINDS = (N.MethodInvocation, N.NewClass, N.Throw)


def exception_sites(body: N.J) -> Iterator[N.J]:
	"""Calls, constructions and throws under `body`, depth-first, including nested arguments."""
	return (node for node in walk(body) if isinstance(node, _SITE_KINDS))


def has_non_designated_legacy_source(body: N.J, classifier: CallClassifier) -> bool:
	"""True at the first site classified THROWS_LEGACY; designated-API calls never count."""
	return any(classifier.classify(site) is CallKind.THROWS_LEGACY for site in exception_sites(body))


__all__ = ["exception_sites", "has_non_designated_legacy_source"]
