# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tree package: lossless J nodes, formatting carriers, traversal and printing.

Public API:
  - node classes (re-exported from `nodes`)
  - Space / RightPadded / LeftPadded / Container
  - walk / map_children / transform
  - print_tree
"""

from .space import Container, LeftPadded, RightPadded, Space
from .nodes import *  # noqa: F401,F403
from .nodes import __all__ as _node_names
from .traversal import find_all, iter_children, map_children, transform, walk
from .printer import print_tree

__all__ = [
	*_node_names,
	"Space",
	"RightPadded",
	"LeftPadded",
	"Container",
	"iter_children",
	"walk",
	"map_children",
	"transform",
	"find_all",
	"print_tree",
]
