# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Parser round-trip and syntax error tests."""

import pytest

from jmigrate.errors import JMigrateError
from jmigrate.parser import parse_tree
from jmigrate.tree import nodes as N
from jmigrate.tree.printer import print_tree
from jmigrate.tree.traversal import find_all
from jmigrate.test_support import first


SAMPLES = [
	"",
	"\n\n",
	"class A {}\n",
	"package a.b;\n\nimport java.io.*;\nimport static java.util.Map.entry;\n\npublic final class A {}\n",
	"""\
// leading comment
package com.example;

import com.fasterxml.jackson.databind.ObjectMapper;
import java.io.IOException;

/* block
   comment */
public class Sample extends Base implements Runnable, AutoCloseable {
	private final ObjectMapper mapper = new ObjectMapper();
	private int count = 0, other;
	static String[] names;

	public Sample() throws IOException {
		this.count = -1;
	}

	@Override
	public String read(String json) {
		try {
			return mapper.readValue(json, String.class);
		} catch ( IOException   e ) {
			return null;
		} finally {
			count = count + 1;
		}
	}

	abstract void close() throws IOException, Exception;

	boolean check(final java.util.List<String> xs, int n) {
		if (xs.isEmpty() && !(n >= 2)) return false;
		else if (n == 3) { return true; }
		while (n > 0) n = n - 1;
		;
		return xs.size() != 0 || n * 2 / 3 % 4 < 1;
	}
}
""",
	"interface Api extends A, B {\n  void call() throws java.io.IOException;\n}\n",
	"""\
class M {
	void m() {
		try {
			a();
		} catch (java.io.FileNotFoundException | IllegalStateException  |  RuntimeException e) {
			throw new IllegalStateException("x", e);
		}
		java.util.Map<String, java.util.List<String>> m = new java.util.HashMap<>();
		char c = 'x';
		double d = 1.5;
		long l = 10L;
	}
}
""",
]


@pytest.mark.parametrize("src", SAMPLES)
def test_print_reproduces_source(src: str):
	"""Printing a freshly parsed tree gives back the input byte-for-byte."""
	assert print_tree(parse_tree(src)) == src


def test_catch_parameter_shapes():
	src = """\
class C {
	void m() {
		try { a(); } catch (IOException e) { }
		try { a(); } catch (A | B  |C e) { }
	}
}
"""
	cu = parse_tree(src)
	tries = find_all(cu, N.Try)
	single = tries[0].catches[0].parameter_declaration.type_expression
	assert isinstance(single, N.Identifier)
	assert single.simple_name == "IOException"

	multi = tries[1].catches[0].parameter_declaration.type_expression
	assert isinstance(multi, N.MultiCatch)
	assert [N.dotted_name(rp.element) for rp in multi.alternatives] == ["A", "B", "C"]
	assert [rp.after.whitespace for rp in multi.alternatives] == [" ", "  ", ""]
	assert [rp.element.prefix.whitespace for rp in multi.alternatives] == ["", " ", ""]


def test_imports_are_split_into_package_and_class():
	cu = parse_tree("import java.io.IOException;\nimport java.util.*;\nimport static a.B.c;\n")
	imports = [rp.element for rp in cu.imports]
	assert [i.type_name for i in imports] == ["java.io.IOException", "java.util.*", "a.B.c"]
	assert imports[0].package_name == "java.io"
	assert imports[0].class_name == "IOException"
	assert imports[1].is_wildcard
	assert imports[2].static is not None
	assert imports[1].prefix.whitespace == "\n"


def test_method_without_body_keeps_semicolon_spacing():
	src = "interface I { void f() ; }"
	cu = parse_tree(src)
	method = first(cu, N.MethodDeclaration)
	assert method.body is None
	assert print_tree(cu) == src


def test_unsupported_syntax_is_a_parse_error():
	with pytest.raises(JMigrateError) as info:
		parse_tree("class A { void f() { x -> y; } }", path="A.java")
	err = info.value
	assert err.reason_code == "parse-error"
	assert err.path == "A.java"
	assert err.span is not None and err.span.line == 1


def test_parse_error_reports_line_of_failure():
	with pytest.raises(JMigrateError) as info:
		parse_tree("class A {\n  int x = ;\n}\n")
	assert info.value.span.line == 2
	assert info.value.to_dict()["reason_code"] == "parse-error"
