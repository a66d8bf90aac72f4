# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Jackson 2 → 3 migration rules."""

from .call_classifier import CallClassifier, CallKind
from .catch_classifier import catches, catches_assignable
from .catch_rewriter import CatchRewriter, TryRewrite
from .io_exception_to_jackson import RECIPE_NAME, IOExceptionToJacksonException
from .scanner import exception_sites, has_non_designated_legacy_source

__all__ = [
	"CallClassifier",
	"CallKind",
	"catches",
	"catches_assignable",
	"CatchRewriter",
	"TryRewrite",
	"IOExceptionToJacksonException",
	"RECIPE_NAME",
	"exception_sites",
	"has_non_designated_legacy_source",
]
