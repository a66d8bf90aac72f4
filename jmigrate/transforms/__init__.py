# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Reusable tree transforms: type renaming and import maintenance."""

from .change_type import change_type, qualified_name_tree
from .imports import EMPTY_DELTA, ImportDelta, add_import, apply_import_delta, remove_import, simple_name_taken

__all__ = [
	"change_type",
	"qualified_name_tree",
	"ImportDelta",
	"EMPTY_DELTA",
	"add_import",
	"remove_import",
	"apply_import_delta",
	"simple_name_taken",
]
