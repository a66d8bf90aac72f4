# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Generic traversal and copy-on-write rewrites."""

from dataclasses import replace

from jmigrate.test_support import first, parse
from jmigrate.tree import nodes as N
from jmigrate.tree.printer import print_tree
from jmigrate.tree.traversal import find_all, iter_children, map_children, transform, walk

SOURCE = """\
class A {
	int n;

	void m(String s) {
		if (s.isEmpty()) {
			n = 1;
		} else {
			n = s.length();
		}
	}
}
"""


def test_walk_is_pre_order():
	cu = parse(SOURCE)
	names = [n.simple_name for n in walk(cu) if isinstance(n, N.Identifier)]
	assert names[:5] == ["A", "n", "m", "String", "s"]
	assert names.index("isEmpty") < names.index("length")
	assert next(walk(cu)) is cu


def test_iter_children_follows_padding_and_containers():
	cu = parse(SOURCE)
	method = first(cu, N.MethodDeclaration)
	kids = list(iter_children(method))
	assert any(isinstance(k, N.VariableDeclarations) for k in kids)
	assert any(isinstance(k, N.Block) for k in kids)


def test_map_children_keeps_identity_when_nothing_changes():
	cu = parse(SOURCE)
	assert map_children(cu, lambda child: child) is cu
	assert transform(cu, lambda node: node) is cu


def test_transform_rebuilds_only_the_changed_path():
	"""Untouched siblings are shared between the old and the new tree."""
	cu = parse(SOURCE)

	def bump(node: N.J) -> N.J:
		if isinstance(node, N.Literal) and node.value_source == "1":
			return replace(node, value_source="2")
		return node

	out = transform(cu, bump)
	assert out is not cu
	assert print_tree(out) == SOURCE.replace("n = 1;", "n = 2;")
	before_else = first(cu, N.Else)
	after_else = first(out, N.Else)
	assert after_else is before_else


def test_find_all_returns_matches_in_source_order():
	cu = parse(SOURCE)
	assigns = find_all(cu, N.Assignment)
	assert [print_tree(a).strip() for a in assigns] == ["n = 1", "n = s.length()"]
	assert find_all(cu, N.Try) == []
