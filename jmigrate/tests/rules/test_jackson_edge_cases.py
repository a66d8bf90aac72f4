# vim: set noexpandtab: -*- indent-tabs-mode: t -*-

from jmigrate.test_support import rewrite, run_jackson
from jmigrate.tree.printer import print_tree

PREAMBLE = """\
import com.fasterxml.jackson.databind.ObjectMapper;
import com.fasterxml.jackson.databind.ObjectWriter;
import java.io.File;
import java.io.FileInputStream;
import java.io.IOException;

class Job {
	void run(ObjectMapper mapper, ObjectWriter writer, File out, boolean strict) {
"""
CLOSE = """\
	}
}
"""


def _job(body: str) -> str:
	return PREAMBLE + body + CLOSE


def test_designated_call_declaring_the_legacy_type_still_substitutes():
	out = rewrite(
		_job(
			"""\
		try {
			mapper.writeValue(out, "x");
		} catch (IOException e) {
		}
"""
		)
	)
	assert "catch (JacksonException e)" in out
	assert "import java.io.IOException;" not in out


def test_writer_calls_are_designated_too():
	out = rewrite(
		_job(
			"""\
		try {
			writer.withDefaultPrettyPrinter().writeValue(out, "x");
		} catch (IOException e) {
		}
"""
		)
	)
	assert "catch (JacksonException e)" in out


def test_throw_of_legacy_type_keeps_it_caught():
	out = rewrite(
		_job(
			"""\
		try {
			mapper.readTree("{}");
			if (strict)
				throw new IOException("strict");
		} catch (IOException e) {
		}
"""
		)
	)
	assert "catch (JacksonException | IOException e)" in out
	assert "import java.io.IOException;" in out


def test_constructor_declaring_a_subtype_counts_as_legacy_source():
	out = rewrite(
		_job(
			"""\
		try {
			mapper.readTree(new FileInputStream("in.json").toString());
		} catch (IOException e) {
		}
"""
		)
	)
	assert "catch (JacksonException | IOException e)" in out


def test_legacy_first_in_multi_catch_hands_over_its_position():
	"""The inserted alternative takes the legacy alternative's spacing; the rest keep theirs."""
	out = rewrite(
		_job(
			"""\
		try {
			mapper.readTree("{}");
			new FileInputStream("in.json");
		} catch (IOException  |  IllegalStateException e) {
		}
"""
		)
	)
	assert "catch (JacksonException | IOException  |  IllegalStateException e)" in out


def test_substitution_renames_legacy_alternative_in_multi_catch():
	out = rewrite(
		_job(
			"""\
		try {
			mapper.readTree("{}");
		} catch (IllegalStateException | IOException e) {
		}
"""
		)
	)
	assert "catch (IllegalStateException | JacksonException e)" in out


def test_substitution_drops_legacy_when_replacement_already_listed():
	"""No duplicate alternative; a two-way multi-catch collapses to a single type."""
	source = _job(
		"""\
		try {
			mapper.readTree("{}");
		} catch (JacksonException | IOException e) {
		}
		try {
			mapper.readTree("[]");
		} catch (IllegalStateException | JacksonException | IOException e) {
		}
"""
	).replace("import java.io.IOException;\n", "import java.io.IOException;\nimport tools.jackson.core.JacksonException;\n")
	out = rewrite(source)
	assert "catch (JacksonException e)" in out
	assert "catch (IllegalStateException | JacksonException e)" in out
	assert "import java.io.IOException;" not in out
	assert out.count("import tools.jackson.core.JacksonException;") == 1


def test_broad_catch_blocks_augmentation():
	source = _job(
		"""\
		try {
			mapper.readTree("{}");
			new FileInputStream("in.json");
		} catch (IOException e) {
		} catch (RuntimeException e) {
		}
"""
	)
	result = run_jackson(source)
	assert not result.changed
	assert [d.code for d in result.diagnostics] == ["already-catches-replacement"]


def test_broad_catch_does_not_block_substitution():
	out = rewrite(
		_job(
			"""\
		try {
			mapper.readTree("{}");
		} catch (IOException e) {
		} catch (Exception e) {
		}
"""
		)
	)
	assert "catch (JacksonException e) {\n\t\t} catch (Exception e)" in out


def test_only_catch_clauses_are_rewritten():
	source = _job(
		"""\
		try {
			mapper.readTree("{}");
		} catch (IOException e) {
			IOException copy = e;
		}
"""
	).replace("boolean strict) {", "boolean strict) throws IOException {")
	out = rewrite(source)
	assert "catch (JacksonException e)" in out
	assert "IOException copy = e;" in out
	assert "throws IOException {" in out
	assert "import java.io.IOException;" in out
	assert "import tools.jackson.core.JacksonException;" in out


def test_try_finally_without_catches_is_ignored():
	source = _job(
		"""\
		try {
			mapper.readTree("{}");
		} finally {
			out.exists();
		}
"""
	)
	assert rewrite(source) == source


def test_each_try_is_decided_on_its_own_body():
	out = rewrite(
		_job(
			"""\
		try {
			mapper.readTree("{}");
		} catch (IOException e) {
		}
		try {
			mapper.readTree("{}");
			new FileInputStream("in.json");
		} catch (IOException e) {
		}
"""
		)
	)
	assert out.count("catch (JacksonException e)") == 1
	assert out.count("catch (JacksonException | IOException e)") == 1
	assert "import java.io.IOException;" in out


def test_fully_qualified_catch_is_rewritten_fully_qualified():
	"""A fully-qualified reference needs no import."""
	out = rewrite(
		_job(
			"""\
		try {
			mapper.readTree("{}");
		} catch (java.io.IOException e) {
		}
"""
		).replace("import java.io.IOException;\n", "")
	)
	assert "catch (tools.jackson.core.JacksonException e)" in out
	assert "import tools.jackson.core.JacksonException;" not in out


TAKEN_NAME = """\
import com.fasterxml.jackson.core.JacksonException;
import com.fasterxml.jackson.databind.ObjectMapper;
import java.io.FileInputStream;
import java.io.IOException;

class Reader {
	Object read(ObjectMapper mapper, String json) {
		try {
			return mapper.readValue(json, Object.class);
		} catch (IOException e) {
			return null;
		}
	}
}
"""


def test_replacement_is_qualified_when_its_simple_name_is_imported_from_elsewhere():
	"""`JacksonException` already means the Jackson 2 class, so the new type is written in full."""
	out = rewrite(TAKEN_NAME)
	assert "catch (tools.jackson.core.JacksonException e)" in out
	assert "import com.fasterxml.jackson.core.JacksonException;" in out
	assert "import tools.jackson" not in out
	assert "import java.io.IOException;" not in out


def test_augmented_alternative_is_qualified_when_simple_name_is_taken():
	source = TAKEN_NAME.replace(
		"return mapper.readValue(json, Object.class);",
		"new FileInputStream(json);\n\t\t\treturn mapper.readValue(json, Object.class);",
	)
	out = rewrite(source)
	assert "catch (tools.jackson.core.JacksonException | IOException e)" in out
	assert "import tools.jackson" not in out
	assert "import java.io.IOException;" in out


def test_replacement_is_qualified_when_file_declares_a_class_of_that_name():
	source = TAKEN_NAME.replace("import com.fasterxml.jackson.core.JacksonException;\n", "").replace(
		"class Reader {", "class Reader {\n\tstatic class JacksonException extends RuntimeException {\n\t}\n"
	)
	out = rewrite(source)
	assert "catch (tools.jackson.core.JacksonException e)" in out
	assert "import tools.jackson" not in out


def test_unbuildable_alternative_is_noted_and_clause_kept(monkeypatch):
	monkeypatch.setattr("jmigrate.rules.jackson.catch_rewriter.change_type", lambda tree, *args, **kwargs: tree)
	source = _job(
		"""\
		try {
			mapper.readTree("{}");
			new FileInputStream("in.json");
		} catch (IOException e) {
		}
"""
	)
	result = run_jackson(source)
	assert not result.changed
	assert print_tree(result.after) == source
	assert [d.code for d in result.diagnostics] == ["replacement-not-found"]


def test_try_without_a_legacy_catch_gets_no_augmentation_note():
	source = _job(
		"""\
		try {
			mapper.readTree("{}");
			new FileInputStream("in.json");
		} catch (Exception e) {
		}
"""
	)
	result = run_jackson(source)
	assert not result.changed
	assert result.diagnostics == ()
