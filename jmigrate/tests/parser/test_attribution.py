# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Type attribution against the built-in stubs and file-local classes."""

from jmigrate import types as T
from jmigrate.classpath import ClassInfo, MethodInfo, builtin_classpath
from jmigrate.test_support import first, parse
from jmigrate.tree import nodes as N
from jmigrate.tree.traversal import find_all


def _calls(cu: N.CompilationUnit) -> dict:
	return {m.name.simple_name: m for m in find_all(cu, N.MethodInvocation)}


def test_imported_type_and_field_drive_method_lookup():
	cu = parse(
		"""\
import com.fasterxml.jackson.databind.ObjectMapper;

class A {
	private final ObjectMapper mapper = new ObjectMapper();

	Object read(String json) throws Exception {
		return mapper.readValue(json, String.class);
	}
}
"""
	)
	call = _calls(cu)["readValue"]
	assert call.method_type is not None
	assert call.method_type.declaring_type.fqn == "com.fasterxml.jackson.databind.ObjectMapper"
	assert call.method_type.thrown_exceptions[0].fqn == "com.fasterxml.jackson.core.JsonProcessingException"
	new = first(cu, N.NewClass)
	assert T.is_of_class_type(new.type, "com.fasterxml.jackson.databind.ObjectMapper")
	assert new.constructor_type is not None and new.constructor_type.is_constructor


def test_static_call_through_imported_class():
	cu = parse(
		"""\
import java.nio.file.Files;
import java.nio.file.Path;

class A {
	String read(Path p) throws Exception {
		return Files.readString(p);
	}
}
"""
	)
	call = _calls(cu)["readString"]
	assert call.method_type.declaring_type.fqn == "java.nio.file.Files"
	assert T.is_assignable_to("java.io.IOException", call.method_type.thrown_exceptions[0])


def test_wildcard_import_and_java_lang_resolution():
	cu = parse(
		"""\
import java.io.*;

class A {
	void m() {
		try {
			new FileInputStream("x");
		} catch (IOException | RuntimeException e) {
		}
	}
}
"""
	)
	multi = first(cu, N.MultiCatch)
	fqns = [T.fully_qualified_name(N.type_of(rp.element)) for rp in multi.alternatives]
	assert fqns == ["java.io.IOException", "java.lang.RuntimeException"]
	ctor = first(cu, N.NewClass).constructor_type
	assert [t.fqn for t in ctor.thrown_exceptions] == ["java.io.FileNotFoundException"]


def test_fully_qualified_type_reference():
	cu = parse("class A { void m() { try { } catch (java.io.IOException e) { } } }")
	te = first(cu, N.Catch).parameter_declaration.type_expression
	assert isinstance(te, N.FieldAccess)
	assert T.is_of_class_type(te.type, "java.io.IOException")


def test_unknown_names_stay_unresolved():
	cu = parse("class A { void m() { Widget w = make(); w.spin(); } }")
	decl = first(cu, N.VariableDeclarations)
	assert decl.type is None
	assert all(call.method_type is None for call in find_all(cu, N.MethodInvocation))


def test_local_class_methods_carry_declared_throws():
	"""Methods declared in the file resolve like library methods, throws included."""
	cu = parse(
		"""\
package com.acme;

import java.io.IOException;

class Loader {
	String load() throws IOException { return null; }

	void run() {
		load();
		helper().load();
	}

	Loader helper() { return this; }
}
"""
	)
	calls = [c for c in find_all(cu, N.MethodInvocation) if c.name.simple_name == "load"]
	assert len(calls) == 2
	for call in calls:
		assert call.method_type is not None
		assert call.method_type.declaring_type.fqn == "com.acme.Loader"
		assert [t.fqn for t in call.method_type.thrown_exceptions] == ["java.io.IOException"]


def test_inherited_method_reports_declaring_supertype():
	cp = builtin_classpath().extend(
		[
			ClassInfo(fqn="com.acme.MyMapper", supertype="com.fasterxml.jackson.databind.ObjectMapper"),
			ClassInfo(
				fqn="com.acme.Client",
				methods=(MethodInfo(name="fetch", returns="java.lang.String", throws=("java.io.IOException",)),),
			),
		]
	)
	cu = parse(
		"""\
import com.acme.MyMapper;

class A {
	void m(MyMapper mapper) throws Exception {
		mapper.readTree("{}");
	}
}
""",
		classpath=cp,
	)
	call = _calls(cu)["readTree"]
	assert call.method_type.declaring_type.fqn == "com.fasterxml.jackson.databind.ObjectMapper"


def test_expression_types():
	cu = parse('class A { void m(int n) { String s = "a" + n; boolean b = n > 1; Object c = String.class; } }')
	inits = {
		rp.element.name.simple_name: rp.element.initializer.element
		for decl in find_all(cu, N.VariableDeclarations)
		for rp in decl.variables
		if rp.element.initializer is not None
	}
	assert T.is_of_class_type(inits["s"].type, "java.lang.String")
	assert inits["b"].type == T.PrimitiveType("boolean")
	assert T.is_of_class_type(inits["c"].type, "java.lang.Class")
