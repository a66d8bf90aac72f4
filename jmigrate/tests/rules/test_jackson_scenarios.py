# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
End-to-end runs of the IOException → JacksonException recipe.

Each fixture is a whole file; expectations are whole files too, so spacing,
comments and import layout are checked along with the catch clauses.
"""

from jmigrate.test_support import rewrite, run_jackson

HEADER = """\
import com.fasterxml.jackson.databind.ObjectMapper;
import java.io.IOException;
import java.nio.file.Files;
import java.nio.file.Path;
"""


def _file(body: str, header: str = HEADER) -> str:
	return (
		header
		+ """
class Service {
	private final ObjectMapper mapper = new ObjectMapper();

	Object load(String json, Path path) {
"""
		+ body
		+ """\
	}
}
"""
	)


def test_only_designated_calls_substitutes_the_catch_type():
	before = _file(
		"""\
		try {
			return mapper.readValue(json, Object.class);
		} catch (IOException e) {
			// report and give up
			throw new IllegalStateException(e);
		}
""",
		header="import com.fasterxml.jackson.databind.ObjectMapper;\nimport java.io.IOException;\n",
	)
	after = _file(
		"""\
		try {
			return mapper.readValue(json, Object.class);
		} catch (JacksonException e) {
			// report and give up
			throw new IllegalStateException(e);
		}
""",
		header="import com.fasterxml.jackson.databind.ObjectMapper;\nimport tools.jackson.core.JacksonException;\n",
	)
	result = run_jackson(before)
	assert result.changed
	assert result.source() == after
	assert result.delta.to_dict() == {
		"added": ["tools.jackson.core.JacksonException"],
		"removed": ["java.io.IOException"],
	}
	assert result.diagnostics == ()


def test_other_legacy_source_adds_the_replacement_in_front():
	before = _file(
		"""\
		try {
			String text = Files.readString(path);
			return mapper.readValue(text, Object.class);
		} catch (IOException e) {
			return null;
		}
"""
	)
	after = before.replace("catch (IOException e)", "catch (JacksonException | IOException e)").replace(
		"import java.nio.file.Path;\n", "import java.nio.file.Path;\nimport tools.jackson.core.JacksonException;\n"
	)
	result = run_jackson(before)
	assert result.source() == after
	assert result.delta.to_dict() == {"added": ["tools.jackson.core.JacksonException"], "removed": []}


def test_clause_already_listing_the_replacement_is_left_alone():
	before = _file(
		"""\
		try {
			mapper.readTree(Files.readString(path));
		} catch (JacksonException | IOException e) {
		}
		return null;
""",
		header=HEADER + "import tools.jackson.core.JacksonException;\n",
	)
	result = run_jackson(before)
	assert not result.changed
	assert result.source() == before
	assert [d.code for d in result.diagnostics] == ["already-catches-replacement"]
	assert all(d.severity == "note" for d in result.diagnostics)


def test_replacement_goes_directly_before_the_legacy_alternative():
	before = _file(
		"""\
		try {
			Files.delete(path);
			return mapper.readValue(json, Object.class);
		} catch (IllegalArgumentException | IOException e) {
			return null;
		}
"""
	)
	out = rewrite(before)
	assert "catch (IllegalArgumentException | JacksonException | IOException e)" in out


def test_try_without_designated_calls_is_untouched():
	before = _file(
		"""\
		try {
			return Files.readString(path);
		} catch (IOException e) {
			return null;
		}
"""
	)
	result = run_jackson(before)
	assert not result.changed
	assert result.source() == before


def test_file_without_designated_calls_short_circuits():
	source = """\
import java.io.IOException;
import java.nio.file.Files;
import java.nio.file.Path;

class Plain {
	String load(Path p) {
		try {
			return Files.readString(p);
		} catch (IOException e) {
			return null;
		}
	}
}
"""
	result = run_jackson(source)
	assert result.after is result.before
	assert result.delta.is_empty


def test_rewrites_are_idempotent():
	fixtures = [
		_file(
			"""\
		try {
			return mapper.readValue(json, Object.class);
		} catch (IOException e) {
			return null;
		}
"""
		),
		_file(
			"""\
		try {
			return mapper.readValue(Files.readString(path), Object.class);
		} catch (IOException e) {
			return null;
		}
"""
		),
	]
	for source in fixtures:
		once = rewrite(source)
		assert once != source
		assert rewrite(once) == once
