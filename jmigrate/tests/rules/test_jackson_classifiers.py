# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Call classification, exception-source scanning and catch predicates."""

from jmigrate.classpath import builtin_classpath
from jmigrate.config import RuleOptions
from jmigrate.rules.jackson import (
	CallClassifier,
	CallKind,
	catches,
	catches_assignable,
	exception_sites,
	has_non_designated_legacy_source,
)
from jmigrate.test_support import first, parse
from jmigrate.tree import nodes as N
from jmigrate.tree.traversal import find_all

CLASSIFIER = CallClassifier.from_options(RuleOptions())
JACKSON = builtin_classpath().type_of("tools.jackson.core.JacksonException")

SOURCE = """\
import com.fasterxml.jackson.databind.ObjectMapper;
import java.io.IOException;
import java.nio.file.Files;
import java.nio.file.Path;

class A {
	void m(ObjectMapper mapper, Path p, String s) throws Exception {
		mapper.readTree(Files.readString(p));
		s.trim();
		unknown(s);
		throw new IOException("x");
	}
}
"""


def _try_body(stmts: str, catch: str = "IOException e"):
	src = SOURCE.replace(
		"\t\tmapper.readTree(Files.readString(p));\n\t\ts.trim();\n\t\tunknown(s);\n\t\tthrow new IOException(\"x\");\n",
		f"\t\ttry {{\n{stmts}\n\t\t}} catch ({catch}) {{\n\t\t}}\n",
	)
	return first(parse(src), N.Try)


def test_sites_are_visited_depth_first_including_arguments():
	body = first(parse(SOURCE), N.MethodDeclaration).body
	sites = list(exception_sites(body))
	kinds = [type(s).__name__ for s in sites]
	assert kinds == ["MethodInvocation", "MethodInvocation", "MethodInvocation", "MethodInvocation", "Throw", "NewClass"]
	assert [s.name.simple_name for s in sites[:4]] == ["readTree", "readString", "trim", "unknown"]


def test_classify_each_site_kind():
	body = first(parse(SOURCE), N.MethodDeclaration).body
	by_kind = [CLASSIFIER.classify(s) for s in exception_sites(body)]
	assert by_kind == [
		CallKind.DESIGNATED_API,
		CallKind.THROWS_LEGACY,
		CallKind.NEITHER,
		CallKind.NEITHER,
		CallKind.THROWS_LEGACY,
		CallKind.NEITHER,
	]


def test_designation_wins_over_declared_throws():
	"""ObjectMapper.writeValue declares IOException but is still a designated call."""
	cu = parse(SOURCE.replace("mapper.readTree(Files.readString(p));", "mapper.writeValue(p.toFile(), s);"))
	call = next(c for c in find_all(cu, N.MethodInvocation) if c.name.simple_name == "writeValue")
	assert any(t.fqn == "java.io.IOException" for t in call.method_type.thrown_exceptions)
	assert CLASSIFIER.classify(call) is CallKind.DESIGNATED_API


def test_custom_patterns_change_designation():
	files_only = CallClassifier.from_options(RuleOptions(api_patterns=("java.nio.file.Files *(..)",)))
	cu = parse(SOURCE)
	readers = {c.name.simple_name: c for c in find_all(cu, N.MethodInvocation)}
	assert files_only.classify(readers["readString"]) is CallKind.DESIGNATED_API
	assert files_only.classify(readers["readTree"]) is CallKind.THROWS_LEGACY


def test_scanner_reports_non_designated_sources():
	only_api = _try_body('\t\t\tmapper.readTree("{}");')
	assert not has_non_designated_legacy_source(only_api.body, CLASSIFIER)
	nested = _try_body("\t\t\tmapper.readTree(Files.readString(p));")
	assert has_non_designated_legacy_source(nested.body, CLASSIFIER)
	unresolved = _try_body('\t\t\tmapper.readTree("{}");\n\t\t\tunknown(s);')
	assert not has_non_designated_legacy_source(unresolved.body, CLASSIFIER)


def test_catches_is_nominal():
	assert catches(_try_body("", "IOException e").catches[0], "java.io.IOException")
	assert catches(_try_body("", "RuntimeException | IOException e").catches[0], "java.io.IOException")
	assert not catches(_try_body("", "Exception e").catches[0], "java.io.IOException")
	assert not catches(_try_body("", "Mystery e").catches[0], "java.io.IOException")


def test_catches_assignable_looks_both_ways():
	"""A supertype of the replacement covers it, and so does one of its subtypes."""
	def clause(text: str) -> N.Catch:
		return _try_body("", text).catches[0]

	assert catches_assignable(clause("Exception e"), JACKSON)
	assert catches_assignable(clause("RuntimeException e"), JACKSON)
	assert catches_assignable(clause("IOException | tools.jackson.core.exc.StreamReadException e"), JACKSON)
	assert not catches_assignable(clause("IOException e"), JACKSON)
	assert not catches_assignable(clause("IllegalStateException | IOException e"), JACKSON)
	assert not catches_assignable(clause("Mystery e"), JACKSON)
