# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Type renaming inside subtrees."""

from jmigrate import types as T
from jmigrate.classpath import builtin_classpath
from jmigrate.test_support import first, parse
from jmigrate.transforms import change_type, qualified_name_tree
from jmigrate.tree import nodes as N
from jmigrate.tree.printer import print_tree
from jmigrate.tree.space import Space

IO = "java.io.IOException"
JACKSON = builtin_classpath().type_of("tools.jackson.core.JacksonException")


def test_simple_name_reference_is_renamed():
	cu = parse(
		"""\
import java.io.IOException;

class A {
	void m() {
		try {
		} catch (IOException e) {
			e.printStackTrace();
		}
	}
}
"""
	)
	catch = first(cu, N.Catch)
	out = change_type(catch, IO, JACKSON)
	assert print_tree(out) == " catch (JacksonException e) {\n\t\t\te.printStackTrace();\n\t\t}"
	assert out.parameter_declaration.type is JACKSON
	select = first(out.body, N.MethodInvocation).select.element
	assert select.simple_name == "e"
	assert T.is_of_class_type(select.type, JACKSON.fqn)


def test_fully_qualified_reference_is_replaced():
	cu = parse("class A { void m() { try { } catch ( java.io.IOException e) { } } }")
	out = change_type(first(cu, N.Catch), IO, JACKSON)
	assert print_tree(out) == " catch ( tools.jackson.core.JacksonException e) { }"
	assert T.is_of_class_type(out.parameter_declaration.type_expression.type, JACKSON.fqn)


def test_unrelated_tree_is_returned_unchanged():
	cu = parse("class A { void m() { try { } catch (RuntimeException e) { } } }")
	assert change_type(cu, IO, JACKSON) is cu


def test_new_type_may_be_given_by_name():
	cu = parse("import java.io.IOException;\nclass A { void m() throws IOException { } }")
	out = change_type(first(cu, N.MethodDeclaration), IO, "com.acme.Oops")
	assert print_tree(out).endswith("throws Oops { }")


def test_qualified_name_tree():
	tree = qualified_name_tree("a.b.C", Space("  "))
	assert isinstance(tree, N.FieldAccess)
	assert N.dotted_name(tree) == "a.b.C"
	assert print_tree(tree) == "  a.b.C"
	assert print_tree(qualified_name_tree("C")) == "C"
