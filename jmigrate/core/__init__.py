# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared core types: source spans and diagnostics."""

from .span import Span
from .diagnostics import Diagnostic

__all__ = ["Span", "Diagnostic"]
